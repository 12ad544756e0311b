from decimal import Decimal

from django.db import models
from django.conf import settings

from core.constants import (
    WALLET_TRANSACTION_TYPE_CHOICES, WALLET_TRANSACTION_STATUS_CHOICES, REVIEW_STATUS_CHOICES,
)


class Wallet(models.Model):
    freelancer = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wallet')
    balance = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    total_earnings = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal('0.00'))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Wallet of {self.freelancer.username}: {self.balance}"

    def pending_withdrawal_total(self):
        total = self.freelancer.withdrawal_requests.filter(status='pending').aggregate(
            total=models.Sum('amount')
        )['total']
        return total or Decimal('0.00')

    def available_balance(self):
        """Balance not already claimed by a pending withdrawal request."""
        return self.balance - self.pending_withdrawal_total()


class WalletTransaction(models.Model):
    wallet = models.ForeignKey(Wallet, on_delete=models.CASCADE, related_name='transactions')
    type = models.CharField(max_length=10, choices=WALLET_TRANSACTION_TYPE_CHOICES)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    description = models.CharField(max_length=255)
    job = models.ForeignKey('jobs.Job', on_delete=models.SET_NULL, null=True, blank=True, related_name='wallet_transactions')
    status = models.CharField(max_length=10, choices=WALLET_TRANSACTION_STATUS_CHOICES, default='completed')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.type} {self.amount} on {self.wallet}"


class WithdrawalRequest(models.Model):
    freelancer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='withdrawal_requests')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    upi_id = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=REVIEW_STATUS_CHOICES, default='pending')
    requested_at = models.DateTimeField(auto_now_add=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_withdrawals'
    )
    rejection_reason = models.TextField(blank=True, null=True)

    class Meta:
        ordering = ['-requested_at', '-id']

    def __str__(self):
        return f"Withdrawal of {self.amount} by {self.freelancer.username} ({self.status})"
