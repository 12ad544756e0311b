from django.urls import path
from . import views

urlpatterns = [
    path('freelancer-verifications', views.FreelancerVerificationListView.as_view(), name='admin_freelancer_verifications'),
    path('approve-freelancer/<int:id>', views.ApproveFreelancerView.as_view(), name='admin_approve_freelancer'),
    path('reject-freelancer/<int:id>', views.RejectFreelancerView.as_view(), name='admin_reject_freelancer'),
    path('withdrawal-requests', views.WithdrawalRequestListView.as_view(), name='admin_withdrawal_requests'),
    path('approve-withdrawal/<int:id>', views.ApproveWithdrawalView.as_view(), name='admin_approve_withdrawal'),
    path('reject-withdrawal/<int:id>', views.RejectWithdrawalView.as_view(), name='admin_reject_withdrawal'),
    path('search-users', views.SearchUsersView.as_view(), name='admin_search_users'),
    path('management-logs', views.ManagementLogListView.as_view(), name='admin_management_logs'),
]
