from rest_framework.views import APIView
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from core.utils import IsFreelancer, success_response
from . import services
from .serializers import WalletSerializer, WithdrawalRequestSerializer, WithdrawalInputSerializer


class FreelancerWalletView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Wallet balance, lifetime earnings and transactions of the freelancer.",
        responses={200: WalletSerializer, 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def get(self, request):
        wallet = services.get_wallet(request.user)
        return success_response({"wallet": WalletSerializer(wallet).data})


class RequestWithdrawalView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Request a payout to a UPI ID. Minimum amount is 100 and it cannot exceed "
                              "the balance not already held by pending requests.",
        request_body=WithdrawalInputSerializer,
        responses={
            201: WithdrawalRequestSerializer,
            400: openapi.Response(description='Below minimum, insufficient balance or invalid UPI ID'),
        }
    )
    def post(self, request):
        serializer = WithdrawalInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        withdrawal = services.request_withdrawal(
            request.user,
            serializer.validated_data['amount'],
            serializer.validated_data['upiId'],
        )
        return success_response(
            {"withdrawal": WithdrawalRequestSerializer(withdrawal).data},
            message="Withdrawal request submitted successfully",
            status_code=status.HTTP_201_CREATED
        )


class WithdrawalHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Withdrawal requests made by the freelancer, newest first.",
        responses={200: WithdrawalRequestSerializer(many=True)}
    )
    def get(self, request):
        withdrawals = services.withdrawal_history(request.user)
        return success_response({"withdrawals": WithdrawalRequestSerializer(withdrawals, many=True).data})
