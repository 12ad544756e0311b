from rest_framework import serializers

from core.constants import PAYMENT_METHOD_CHOICES
from .models import PaymentOrder, CommissionLedgerEntry


class PaymentOrderSerializer(serializers.ModelSerializer):
    orderId = serializers.CharField(source='order_id', read_only=True)
    jobId = serializers.IntegerField(source='job_id', read_only=True)
    paymentMethod = serializers.CharField(source='payment_method', read_only=True)
    totalAmount = serializers.DecimalField(source='total_amount', max_digits=12, decimal_places=2, read_only=True)
    freelancerAmount = serializers.DecimalField(source='freelancer_amount', max_digits=12, decimal_places=2, read_only=True)
    paymentUrl = serializers.CharField(source='payment_url', read_only=True)
    transactionId = serializers.CharField(source='transaction_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    completedAt = serializers.DateTimeField(source='completed_at', read_only=True)

    class Meta:
        model = PaymentOrder
        fields = [
            'orderId', 'jobId', 'paymentMethod', 'totalAmount', 'commission', 'freelancerAmount',
            'currency', 'paymentUrl', 'transactionId', 'status', 'createdAt', 'completedAt',
        ]
        read_only_fields = fields


class CommissionLedgerEntrySerializer(serializers.ModelSerializer):
    freelancerId = serializers.IntegerField(source='freelancer_id', read_only=True)
    jobId = serializers.IntegerField(source='job_id', read_only=True)
    jobTitle = serializers.CharField(source='job_title', read_only=True)
    clientName = serializers.CharField(source='client_name', read_only=True)
    totalAmount = serializers.DecimalField(source='total_amount', max_digits=12, decimal_places=2, read_only=True)
    paidAmount = serializers.DecimalField(source='paid_amount', max_digits=12, decimal_places=2, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    paidAt = serializers.DateTimeField(source='paid_at', read_only=True)

    class Meta:
        model = CommissionLedgerEntry
        fields = [
            'id', 'freelancerId', 'jobId', 'jobTitle', 'clientName', 'amount', 'totalAmount',
            'status', 'paidAmount', 'createdAt', 'paidAt',
        ]
        read_only_fields = fields


class PayJobSerializer(serializers.Serializer):
    paymentMethod = serializers.ChoiceField(choices=PAYMENT_METHOD_CHOICES)
    totalAmount = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)


class VerifyPaymentSerializer(serializers.Serializer):
    orderId = serializers.CharField(max_length=100)


class PayCommissionSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
