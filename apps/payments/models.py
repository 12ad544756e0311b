from django.db import models
from django.conf import settings

from core.constants import PAYMENT_METHOD_CHOICES, PAYMENT_ORDER_STATUS_CHOICES, COMMISSION_STATUS_CHOICES
from apps.jobs.models import Job


class PaymentOrder(models.Model):
    order_id = models.CharField(max_length=100, unique=True)
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='payment_orders')
    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='payment_orders')
    payment_method = models.CharField(max_length=10, choices=PAYMENT_METHOD_CHOICES)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    commission = models.DecimalField(max_digits=12, decimal_places=2)
    freelancer_amount = models.DecimalField(max_digits=12, decimal_places=2)
    currency = models.CharField(max_length=3, default='INR')
    payment_url = models.URLField(max_length=1000, null=True, blank=True)
    gateway_order_id = models.CharField(max_length=100, null=True, blank=True)
    transaction_id = models.CharField(max_length=100, null=True, blank=True)
    status = models.CharField(max_length=20, choices=PAYMENT_ORDER_STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Order {self.order_id} for Job {self.job.title}"


class CommissionLedgerEntry(models.Model):
    """Commission a freelancer owes the platform for a job the client paid in cash."""
    freelancer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='commission_entries')
    job = models.OneToOneField(Job, on_delete=models.CASCADE, related_name='commission_entry')
    job_title = models.CharField(max_length=200)
    client_name = models.CharField(max_length=150)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    status = models.CharField(max_length=20, choices=COMMISSION_STATUS_CHOICES, default='pending')
    paid_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    paid_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at', '-id']
        verbose_name_plural = 'commission ledger entries'

    def __str__(self):
        return f"Commission {self.amount} on {self.job_title} ({self.status})"
