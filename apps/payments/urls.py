from django.urls import path
from .views import (
    ClientPayJobView, CreateUPIPaymentView, VerifyPaymentView, PaymentCallbackView,
    PaymentStatusView, CommissionLedgerView, PayCommissionView, CommissionStatusView,
)

urlpatterns = [
    path('client/pay/<int:job_id>', ClientPayJobView.as_view(), name='client_pay_job'),
    path('payment/upi/<int:job_id>', CreateUPIPaymentView.as_view(), name='create_upi_payment'),
    path('payment/verify', VerifyPaymentView.as_view(), name='verify_payment'),
    path('payment/callback', PaymentCallbackView.as_view(), name='payment_callback'),
    path('payment/status/<int:job_id>', PaymentStatusView.as_view(), name='payment_status'),
    path('commission/ledger', CommissionLedgerView.as_view(), name='commission_ledger'),
    path('commission/pay/<int:entry_id>', PayCommissionView.as_view(), name='pay_commission'),
    path('commission/status/<int:job_id>', CommissionStatusView.as_view(), name='commission_status'),
]
