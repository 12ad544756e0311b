from django.urls import path
from .views import FreelancerWalletView, RequestWithdrawalView, WithdrawalHistoryView

urlpatterns = [
    path('freelancer/wallet', FreelancerWalletView.as_view(), name='freelancer_wallet'),
    path('freelancer/request-withdrawal', RequestWithdrawalView.as_view(), name='request_withdrawal'),
    path('freelancer/withdrawal-history', WithdrawalHistoryView.as_view(), name='withdrawal_history'),
]
