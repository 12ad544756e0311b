from django.urls import path
from .views import SubmitVerificationView, VerificationStatusView

urlpatterns = [
    path('freelancer/submit-verification', SubmitVerificationView.as_view(), name='submit_verification'),
    path('freelancer/verification-status', VerificationStatusView.as_view(), name='verification_status'),
]
