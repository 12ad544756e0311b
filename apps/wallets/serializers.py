from django.conf import settings
from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import Wallet, WalletTransaction, WithdrawalRequest


class WalletTransactionSerializer(serializers.ModelSerializer):
    jobId = serializers.IntegerField(source='job_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = WalletTransaction
        fields = ['id', 'type', 'amount', 'description', 'jobId', 'status', 'createdAt']
        read_only_fields = fields


class WalletSerializer(serializers.ModelSerializer):
    totalEarnings = serializers.DecimalField(source='total_earnings', max_digits=12, decimal_places=2, read_only=True)
    availableBalance = serializers.SerializerMethodField()
    currency = serializers.SerializerMethodField()
    transactions = WalletTransactionSerializer(many=True, read_only=True)

    class Meta:
        model = Wallet
        fields = ['balance', 'totalEarnings', 'availableBalance', 'currency', 'transactions']
        read_only_fields = fields

    def get_availableBalance(self, obj):
        return obj.available_balance()

    def get_currency(self, obj):
        return settings.CURRENCY


class WithdrawalRequestSerializer(serializers.ModelSerializer):
    freelancer = UserSummarySerializer(read_only=True)
    upiId = serializers.CharField(source='upi_id', read_only=True)
    requestedAt = serializers.DateTimeField(source='requested_at', read_only=True)
    reviewedAt = serializers.DateTimeField(source='reviewed_at', read_only=True)
    reviewedBy = serializers.IntegerField(source='reviewed_by_id', read_only=True)
    rejectionReason = serializers.CharField(source='rejection_reason', read_only=True)

    class Meta:
        model = WithdrawalRequest
        fields = ['id', 'freelancer', 'amount', 'upiId', 'status', 'requestedAt', 'reviewedAt', 'reviewedBy', 'rejectionReason']
        read_only_fields = fields


class WithdrawalInputSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    upiId = serializers.CharField(max_length=100)
