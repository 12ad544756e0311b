from django.contrib.auth import get_user_model
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from apps.verifications import services as verification_services
from apps.verifications.serializers import FreelancerVerificationSerializer, ReviewReasonSerializer
from apps.wallets import services as wallet_services
from apps.wallets.serializers import WithdrawalRequestSerializer
from core.constants import REVIEW_STATUS_CHOICES
from core.exceptions import ValidationError
from core.utils import IsAdmin, success_response
from .models import ManagementLog
from .serializers import ManagementUserSerializer, ManagementLogSerializer

import logging

logger = logging.getLogger(__name__)
User = get_user_model()

REVIEW_STATUSES = [choice[0] for choice in REVIEW_STATUS_CHOICES]

status_param = openapi.Parameter(
    'status', openapi.IN_QUERY, type=openapi.TYPE_STRING, enum=REVIEW_STATUSES,
    description='Filter by review status'
)


def review_status_filter(request):
    value = request.query_params.get('status')
    if value and value not in REVIEW_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(REVIEW_STATUSES)}")
    return value


class FreelancerVerificationListView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Freelancer verification submissions, optionally filtered by status.",
        manual_parameters=[status_param],
        responses={200: FreelancerVerificationSerializer(many=True), 403: 'Forbidden'}
    )
    def get(self, request):
        verifications = verification_services.list_verifications(review_status_filter(request))
        return success_response({"verifications": FreelancerVerificationSerializer(verifications, many=True).data})


class ApproveFreelancerView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Approve a pending verification.",
        responses={200: FreelancerVerificationSerializer, 404: 'Not Found', 409: 'Not pending'}
    )
    def post(self, request, id):
        verification = verification_services.approve_verification(id, request.user)
        return success_response(
            {"verification": FreelancerVerificationSerializer(verification).data},
            message="Freelancer approved successfully"
        )


class RejectFreelancerView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Reject a pending verification. A reason is required.",
        request_body=ReviewReasonSerializer,
        responses={200: FreelancerVerificationSerializer, 400: 'Reason missing', 404: 'Not Found', 409: 'Not pending'}
    )
    def post(self, request, id):
        serializer = ReviewReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        verification = verification_services.reject_verification(id, request.user, serializer.validated_data['reason'])
        return success_response(
            {"verification": FreelancerVerificationSerializer(verification).data},
            message="Freelancer rejected successfully"
        )


class WithdrawalRequestListView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Withdrawal requests, optionally filtered by status.",
        manual_parameters=[status_param],
        responses={200: WithdrawalRequestSerializer(many=True), 403: 'Forbidden'}
    )
    def get(self, request):
        withdrawals = wallet_services.list_withdrawals(review_status_filter(request))
        return success_response({"withdrawals": WithdrawalRequestSerializer(withdrawals, many=True).data})


class ApproveWithdrawalView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Approve a pending withdrawal and debit the freelancer's wallet.",
        responses={200: WithdrawalRequestSerializer, 404: 'Not Found', 409: 'Not pending or insufficient balance'}
    )
    def post(self, request, id):
        withdrawal = wallet_services.approve_withdrawal(id, request.user)
        return success_response(
            {"withdrawal": WithdrawalRequestSerializer(withdrawal).data},
            message="Withdrawal approved successfully"
        )


class RejectWithdrawalView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Reject a pending withdrawal. A reason is required; the balance is untouched.",
        request_body=ReviewReasonSerializer,
        responses={200: WithdrawalRequestSerializer, 400: 'Reason missing', 404: 'Not Found', 409: 'Not pending'}
    )
    def post(self, request, id):
        serializer = ReviewReasonSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = wallet_services.reject_withdrawal(id, request.user, serializer.validated_data['reason'])
        return success_response(
            {"withdrawal": WithdrawalRequestSerializer(withdrawal).data},
            message="Withdrawal rejected successfully"
        )


class SearchUsersView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Find users whose phone number contains the given digits.",
        manual_parameters=[
            openapi.Parameter('phoneNumber', openapi.IN_QUERY, type=openapi.TYPE_STRING, required=True),
        ],
        responses={200: ManagementUserSerializer(many=True), 400: 'phoneNumber missing'}
    )
    def get(self, request):
        phone_number = (request.query_params.get('phoneNumber') or '').strip()
        if not phone_number:
            raise ValidationError("phoneNumber is required")
        users = User.objects.filter(phone_number__icontains=phone_number).order_by('id')
        ManagementLog.record(request.user, 'search_users', f"Searched users by phone number: {phone_number}")
        return success_response({"users": ManagementUserSerializer(users, many=True).data})


class ManagementLogListView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @swagger_auto_schema(
        operation_description="Audit trail of admin actions, newest first.",
        responses={200: ManagementLogSerializer(many=True)}
    )
    def get(self, request):
        logs = ManagementLog.objects.select_related('admin')[:200]
        return success_response({"logs": ManagementLogSerializer(logs, many=True).data})
