from django.conf import settings
from rest_framework.views import APIView
from rest_framework import status
from rest_framework.permissions import IsAuthenticated, AllowAny
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from core.exceptions import ValidationError
from core.utils import IsClient, IsFreelancer, success_response
from . import services
from .serializers import (
    PaymentOrderSerializer, CommissionLedgerEntrySerializer, PayJobSerializer,
    VerifyPaymentSerializer, PayCommissionSerializer,
)

import logging

logger = logging.getLogger(__name__)

amounts_schema = openapi.Schema(
    type=openapi.TYPE_OBJECT,
    properties={
        'totalAmount': openapi.Schema(type=openapi.TYPE_NUMBER),
        'commission': openapi.Schema(type=openapi.TYPE_NUMBER),
        'freelancerAmount': openapi.Schema(type=openapi.TYPE_NUMBER),
    }
)

upi_payment_response = openapi.Response(
    description='UPI checkout created',
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
            'orderId': openapi.Schema(type=openapi.TYPE_STRING),
            'paymentUrl': openapi.Schema(type=openapi.TYPE_STRING),
            'amounts': amounts_schema,
            'pollIntervalMs': openapi.Schema(type=openapi.TYPE_INTEGER),
            'maxPollAttempts': openapi.Schema(type=openapi.TYPE_INTEGER),
        }
    )
)


def upi_payment_data(order):
    return {
        "orderId": order.order_id,
        "paymentUrl": order.payment_url,
        "amounts": {
            "totalAmount": order.total_amount,
            "commission": order.commission,
            "freelancerAmount": order.freelancer_amount,
        },
        "pollIntervalMs": settings.UPI_VERIFY_POLL_INTERVAL_SECONDS * 1000,
        "maxPollAttempts": settings.UPI_VERIFY_MAX_ATTEMPTS,
    }


def verification_data(result):
    return {
        "isSuccess": result.is_success,
        "state": result.state,
        "payment": PaymentOrderSerializer(result.order).data,
    }


class ClientPayJobView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Pay for a job whose work is done. Cash completes the job at once and records "
                              "the commission owed by the freelancer; UPI returns a checkout URL.",
        request_body=PayJobSerializer,
        responses={200: 'Cash payment recorded', 201: upi_payment_response, 409: 'Work not done yet', 502: 'Gateway error'}
    )
    def post(self, request, job_id):
        serializer = PayJobSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        method = serializer.validated_data['paymentMethod']
        order = services.pay_job(job_id, request.user, method, serializer.validated_data.get('totalAmount'))
        if method == 'upi':
            return success_response(upi_payment_data(order), status_code=status.HTTP_201_CREATED)
        return success_response({"payment": PaymentOrderSerializer(order).data}, message="Payment processed successfully")


class CreateUPIPaymentView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Create a UPI checkout for a job whose work is done. Poll /payment/verify afterwards.",
        responses={201: upi_payment_response, 404: 'Not Found', 409: 'Work not done yet', 502: 'Gateway error'}
    )
    def post(self, request, job_id):
        order = services.create_upi_payment(job_id, request.user)
        return success_response(upi_payment_data(order), status_code=status.HTTP_201_CREATED)


class VerifyPaymentView(APIView):
    permission_classes = [AllowAny]

    @swagger_auto_schema(
        operation_description="Check a UPI order with the gateway. Settles the job and credits the freelancer "
                              "once; repeated calls return the same result.",
        request_body=VerifyPaymentSerializer,
        responses={200: 'Verification result', 404: 'Not Found', 502: 'Gateway error'}
    )
    def post(self, request):
        serializer = VerifyPaymentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = services.verify_upi_payment(serializer.validated_data['orderId'])
        return success_response(verification_data(result))


class PaymentCallbackView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        operation_description="Gateway notification for an order. Runs the same verification as /payment/verify.",
        request_body=openapi.Schema(
            type=openapi.TYPE_OBJECT,
            properties={'orderId': openapi.Schema(type=openapi.TYPE_STRING)}
        ),
        responses={200: 'Verification result'}
    )
    def post(self, request):
        order_id = request.data.get('orderId')
        payload = request.data.get('payload')
        if not order_id and isinstance(payload, dict):
            order_id = payload.get('merchantOrderId')
        if not order_id:
            raise ValidationError("orderId is required")
        logger.info(f"Payment callback received for order {order_id}")
        result = services.verify_upi_payment(order_id)
        return success_response(verification_data(result))


class PaymentStatusView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Latest payment for a job, or status not_initiated.",
        responses={200: PaymentOrderSerializer, 404: 'Not Found'}
    )
    def get(self, request, job_id):
        order = services.get_payment_status(job_id, request.user)
        if order is None:
            return success_response({"status": "not_initiated", "payment": None})
        return success_response({"status": order.status, "payment": PaymentOrderSerializer(order).data})


class CommissionLedgerView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Commission owed by the freelancer for cash-paid jobs, with totals.",
        responses={200: CommissionLedgerEntrySerializer(many=True)}
    )
    def get(self, request):
        entries, summary = services.get_commission_ledger(request.user)
        return success_response({
            "entries": CommissionLedgerEntrySerializer(entries, many=True).data,
            "summary": summary,
        })


class PayCommissionView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Settle a pending commission entry. The amount must equal the commission due.",
        request_body=PayCommissionSerializer,
        responses={200: CommissionLedgerEntrySerializer, 400: 'Amount mismatch', 404: 'Not Found', 409: 'Already paid'}
    )
    def post(self, request, entry_id):
        serializer = PayCommissionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.pay_commission(entry_id, request.user, serializer.validated_data['amount'])
        return success_response(
            {"entry": CommissionLedgerEntrySerializer(entry).data},
            message="Commission paid successfully"
        )


class CommissionStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Whether a job carries a commission entry and whether it has been paid.",
        responses={200: 'Commission status', 403: 'Not a party to the job', 404: 'Not Found'}
    )
    def get(self, request, job_id):
        return success_response(services.check_commission_status(job_id, request.user))
