import logging
from collections import namedtuple
from decimal import Decimal

from django.conf import settings
from django.db import transaction
from django.db.models import Sum
from django.utils import timezone

from apps.jobs.services import get_job, get_client_job, to_amount
from apps.jobs.utils import send_notification
from apps.wallets.services import credit_wallet
from core.exceptions import ValidationError, NotFoundError, PermissionDeniedError, StateConflictError
from .commission import calculate_payment_split
from .gateway import get_gateway
from .models import PaymentOrder, CommissionLedgerEntry

logger = logging.getLogger(__name__)

VerificationResult = namedtuple('VerificationResult', ['order', 'is_success', 'state'])


def build_order_id(job):
    return f"ORDER_{job.id}_{int(timezone.now().timestamp() * 1000)}"


def _require_payable(job):
    if job.status != 'work_done':
        raise StateConflictError("Payment can only be made once the work is marked as done")
    if job.assigned_freelancer_id is None:
        raise StateConflictError("Job has no assigned freelancer to pay")


def _cancel_pending_upi_orders(job, exclude=None):
    queryset = PaymentOrder.objects.filter(job=job, payment_method='upi', status='pending')
    if exclude is not None:
        queryset = queryset.exclude(pk=exclude.pk)
    cancelled = queryset.update(status='cancelled')
    if cancelled:
        logger.info(f"Cancelled {cancelled} pending UPI order(s) for job {job.id}")
    return cancelled


def pay_job(job_id, client, payment_method, total_amount=None):
    """Entry point for POST /client/pay: cash settles immediately, UPI starts a checkout."""
    if payment_method == 'cash':
        return record_cash_payment(job_id, client, total_amount)
    if payment_method == 'upi':
        return create_upi_payment(job_id, client)
    raise ValidationError("paymentMethod must be 'cash' or 'upi'")


def create_upi_payment(job_id, client):
    job = get_client_job(job_id, client)
    _require_payable(job)
    split = calculate_payment_split(job.agreed_amount, 'upi')
    order_id = build_order_id(job)

    # Any gateway failure raises here, before anything is written
    payment = get_gateway().create_payment(
        order_id, split.total_amount, f"{settings.FRONTEND_URL}/payment/success?orderId={order_id}"
    )

    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        _require_payable(job)
        _cancel_pending_upi_orders(job)
        order = PaymentOrder.objects.create(
            order_id=order_id,
            job=job,
            client=client,
            payment_method='upi',
            total_amount=split.total_amount,
            commission=split.commission,
            freelancer_amount=split.freelancer_amount,
            currency=settings.CURRENCY,
            payment_url=payment.payment_url,
            gateway_order_id=payment.gateway_order_id,
        )
    logger.info(f"UPI payment order {order.order_id} created for job {job.id}, amount {split.total_amount}")
    return order


def get_order(order_id):
    try:
        return PaymentOrder.objects.select_related('job').get(order_id=order_id)
    except PaymentOrder.DoesNotExist:
        raise NotFoundError("Payment order not found")


def _settled_result(order):
    if order.status == 'completed':
        return VerificationResult(order, True, 'COMPLETED')
    if order.status == 'needs_reconciliation':
        return VerificationResult(order, False, 'NEEDS_RECONCILIATION')
    return None


def verify_upi_payment(order_id):
    """
    Check the order with the gateway and settle it once.

    A completed order is returned as successful without asking the gateway
    again, so repeated verifications (client polling, gateway callback)
    credit the freelancer exactly once.

    A superseded (cancelled) checkout that the payer completed anyway still
    settles the job while it is awaiting payment. If the job was already
    settled by another payment, the order is flagged for reconciliation
    instead of crediting twice.
    """
    order = get_order(order_id)
    settled = _settled_result(order)
    if settled:
        return settled

    result = get_gateway().get_status(order.order_id)
    if not result.is_success:
        logger.info(f"Payment order {order.order_id} not completed yet, gateway state {result.state}")
        return VerificationResult(order, False, result.state)

    with transaction.atomic():
        job = get_job(order.job_id, lock=True)
        order = PaymentOrder.objects.select_for_update().get(pk=order.pk)
        settled = _settled_result(order)
        if settled:
            return settled
        order.transaction_id = result.transaction_id
        if job.status != 'work_done':
            order.status = 'needs_reconciliation'
            order.save()
        else:
            _require_payable(job)
            job.transition('completed')
            job.save()
            order.status = 'completed'
            order.completed_at = timezone.now()
            order.save()
            _cancel_pending_upi_orders(job, exclude=order)
            credit_wallet(job.assigned_freelancer, order.freelancer_amount, f"Payment for job: {job.title}", job)

    if order.status == 'needs_reconciliation':
        logger.error(
            f"Payment order {order.order_id} was paid at the gateway but job {job.id} is already "
            f"{job.status}; flagged for reconciliation"
        )
        return VerificationResult(order, False, 'NEEDS_RECONCILIATION')

    logger.info(f"Payment order {order.order_id} completed, job {job.id} credited {order.freelancer_amount}")
    send_notification(
        job.assigned_freelancer,
        "Payment Received",
        f"₹{order.freelancer_amount} for '{job.title}' has been added to your wallet.",
    )
    return VerificationResult(order, True, result.state)


def get_payment_status(job_id, client):
    job = get_client_job(job_id, client)
    return job.payment_orders.first()


def record_cash_payment(job_id, client, total_amount=None):
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        _require_payable(job)
        total = job.agreed_amount if total_amount is None else to_amount(total_amount, 'totalAmount')
        if total <= 0:
            raise ValidationError("totalAmount must be greater than 0")
        split = calculate_payment_split(total, 'cash')

        job.transition('completed')
        job.save()
        _cancel_pending_upi_orders(job)
        now = timezone.now()
        order = PaymentOrder.objects.create(
            order_id=build_order_id(job),
            job=job,
            client=client,
            payment_method='cash',
            total_amount=split.total_amount,
            commission=split.commission,
            freelancer_amount=split.freelancer_amount,
            currency=settings.CURRENCY,
            status='completed',
            completed_at=now,
        )
        entry = CommissionLedgerEntry.objects.create(
            freelancer=job.assigned_freelancer,
            job=job,
            job_title=job.title,
            client_name=client.display_name,
            amount=split.commission,
            total_amount=split.total_amount,
        )

    logger.info(f"Cash payment of {total} recorded for job {job.id}, commission entry {entry.id} of {entry.amount}")
    send_notification(
        job.assigned_freelancer,
        "Cash Payment Recorded",
        f"The client paid ₹{total} in cash for '{job.title}'. A commission of ₹{entry.amount} is due to the platform.",
    )
    return order


def pay_commission(entry_id, freelancer, amount_paid):
    amount_paid = to_amount(amount_paid)
    with transaction.atomic():
        try:
            entry = CommissionLedgerEntry.objects.select_for_update().get(pk=entry_id, freelancer=freelancer)
        except CommissionLedgerEntry.DoesNotExist:
            raise NotFoundError("Commission entry not found")
        if entry.status == 'paid':
            raise StateConflictError("Commission already paid")
        if amount_paid != entry.amount:
            raise ValidationError(f"Amount paid must equal the commission due (₹{entry.amount})")
        entry.status = 'paid'
        entry.paid_amount = amount_paid
        entry.paid_at = timezone.now()
        entry.save()
    logger.info(f"Commission entry {entry.id} of {entry.amount} paid by freelancer {freelancer.id}")
    return entry


def get_commission_ledger(freelancer):
    entries = CommissionLedgerEntry.objects.filter(freelancer=freelancer)
    totals = {
        row['status']: row['total']
        for row in entries.order_by().values('status').annotate(total=Sum('amount'))
    }
    summary = {
        'totalPending': totals.get('pending') or Decimal('0.00'),
        'totalPaid': totals.get('paid') or Decimal('0.00'),
        'totalEntries': entries.count(),
    }
    return entries, summary


def check_commission_status(job_id, user):
    """Commission state of a job, visible to its client, its assigned freelancer and admins."""
    job = get_job(job_id)
    if not user.is_admin and user.id not in (job.client_id, job.assigned_freelancer_id):
        raise PermissionDeniedError("Only the job's client or assigned freelancer can view its commission")
    entry = CommissionLedgerEntry.objects.filter(job=job).first()
    if entry is None:
        return {'hasCommission': False, 'status': None}
    return {'hasCommission': True, 'status': entry.status, 'entryId': entry.id, 'amount': entry.amount}
