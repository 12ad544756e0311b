import logging
import re
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from apps.jobs.services import to_amount
from apps.jobs.utils import send_notification
from apps.management.models import ManagementLog
from core.exceptions import ValidationError, NotFoundError, StateConflictError
from .models import Wallet, WalletTransaction, WithdrawalRequest

logger = logging.getLogger(__name__)

UPI_ID_PATTERN = re.compile(r'^[\w.\-]{2,256}@[a-zA-Z][a-zA-Z0-9]{1,63}$')


def get_wallet(freelancer, lock=False):
    queryset = Wallet.objects.select_for_update() if lock else Wallet.objects.all()
    wallet, created = queryset.get_or_create(freelancer=freelancer)
    if created:
        logger.info(f"Wallet created for freelancer {freelancer.id}")
    return wallet


def credit_wallet(freelancer, amount, description, job=None):
    """Add earnings to the freelancer's wallet under a lock on the wallet row."""
    amount = Decimal(amount)
    with transaction.atomic():
        wallet = get_wallet(freelancer, lock=True)
        wallet.balance += amount
        wallet.total_earnings += amount
        wallet.save(update_fields=['balance', 'total_earnings', 'updated_at'])
        entry = WalletTransaction.objects.create(
            wallet=wallet, type='credit', amount=amount, description=description, job=job, status='completed'
        )
    logger.info(f"Credited {amount} to wallet of freelancer {freelancer.id}")
    return entry


def request_withdrawal(freelancer, amount, upi_id):
    amount = to_amount(amount)
    if amount < settings.MIN_WITHDRAWAL_AMOUNT:
        raise ValidationError(f"Minimum withdrawal amount is ₹{settings.MIN_WITHDRAWAL_AMOUNT}")
    upi_id = (upi_id or '').strip()
    if not upi_id:
        raise ValidationError("UPI ID is required")
    if not UPI_ID_PATTERN.match(upi_id):
        raise ValidationError("Please enter a valid UPI ID (e.g. name@bank)")

    with transaction.atomic():
        wallet = get_wallet(freelancer, lock=True)
        if amount > wallet.available_balance():
            raise ValidationError("Insufficient balance")
        withdrawal = WithdrawalRequest.objects.create(freelancer=freelancer, amount=amount, upi_id=upi_id)

    logger.info(f"Withdrawal request {withdrawal.id} of {amount} by freelancer {freelancer.id}")
    return withdrawal


def _get_pending_withdrawal(withdrawal_id):
    try:
        withdrawal = WithdrawalRequest.objects.select_for_update().select_related('freelancer').get(pk=withdrawal_id)
    except WithdrawalRequest.DoesNotExist:
        raise NotFoundError("Withdrawal request not found")
    if withdrawal.status != 'pending':
        raise StateConflictError(f"Withdrawal request has already been {withdrawal.status}")
    return withdrawal


def approve_withdrawal(withdrawal_id, admin):
    with transaction.atomic():
        withdrawal = _get_pending_withdrawal(withdrawal_id)
        wallet = get_wallet(withdrawal.freelancer, lock=True)
        if wallet.balance < withdrawal.amount:
            raise StateConflictError("Insufficient wallet balance to approve this withdrawal")
        wallet.balance -= withdrawal.amount
        wallet.save(update_fields=['balance', 'updated_at'])
        WalletTransaction.objects.create(
            wallet=wallet,
            type='debit',
            amount=withdrawal.amount,
            description=f"Withdrawal to {withdrawal.upi_id}",
            status='completed'
        )
        withdrawal.status = 'approved'
        withdrawal.reviewed_at = timezone.now()
        withdrawal.reviewed_by = admin
        withdrawal.save()
        ManagementLog.record(
            admin, 'approve_withdrawal',
            f"Approved withdrawal {withdrawal.id} of {withdrawal.amount} for user {withdrawal.freelancer_id}"
        )

    logger.info(f"Withdrawal {withdrawal.id} approved by admin {admin.id}")
    send_notification(
        withdrawal.freelancer,
        "Withdrawal Approved",
        f"Your withdrawal of ₹{withdrawal.amount} to {withdrawal.upi_id} has been approved.",
    )
    return withdrawal


def reject_withdrawal(withdrawal_id, admin, reason):
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError("Rejection reason is required")
    with transaction.atomic():
        withdrawal = _get_pending_withdrawal(withdrawal_id)
        withdrawal.status = 'rejected'
        withdrawal.rejection_reason = reason
        withdrawal.reviewed_at = timezone.now()
        withdrawal.reviewed_by = admin
        withdrawal.save()
        ManagementLog.record(
            admin, 'reject_withdrawal',
            f"Rejected withdrawal {withdrawal.id} for user {withdrawal.freelancer_id}: {reason}"
        )

    logger.info(f"Withdrawal {withdrawal.id} rejected by admin {admin.id}")
    send_notification(
        withdrawal.freelancer,
        "Withdrawal Rejected",
        f"Your withdrawal of ₹{withdrawal.amount} was rejected. Reason: {reason}",
    )
    return withdrawal


def withdrawal_history(freelancer):
    return WithdrawalRequest.objects.filter(freelancer=freelancer)


def list_withdrawals(status=None):
    queryset = WithdrawalRequest.objects.select_related('freelancer', 'reviewed_by')
    if status:
        queryset = queryset.filter(status=status)
    return queryset
