"""
Job lifecycle and offer handling.

Every mutating call runs in a single transaction and locks the job row,
so two clients racing on the same job see a consistent status: the loser
gets a StateConflictError and nothing is written.
"""
import logging
import math
import re
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.db import transaction
from django.utils import timezone

from core.constants import ACTIVE_JOB_STATUSES, HISTORY_JOB_STATUSES
from core.exceptions import (
    ValidationError, NotFoundError, PermissionDeniedError, StateConflictError, CooldownError,
)
from .models import Job, Offer, OfferCooldown
from .utils import send_notification

logger = logging.getLogger(__name__)

PINCODE_PATTERN = re.compile(r'^\d{6}$')
REQUIRED_JOB_FIELDS = ('title', 'address', 'pincode', 'budget', 'category')
EDITABLE_JOB_FIELDS = ('title', 'description', 'category', 'address', 'pincode', 'budget', 'gender_preference')


def to_amount(value, field='amount'):
    """Parse a money value into a Decimal, raising ValidationError on junk."""
    if isinstance(value, float):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    return amount


def _clean_job_fields(data, partial=False):
    fields = {key: data[key] for key in EDITABLE_JOB_FIELDS if key in data}
    if not partial:
        missing = [key for key in REQUIRED_JOB_FIELDS if fields.get(key) in (None, '')]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    if 'budget' in fields:
        fields['budget'] = to_amount(fields['budget'], 'budget')
        if fields['budget'] < settings.MIN_JOB_BUDGET:
            raise ValidationError(f"Budget must be at least ₹{settings.MIN_JOB_BUDGET}")
    if 'pincode' in fields:
        fields['pincode'] = str(fields['pincode']).strip()
        if not PINCODE_PATTERN.match(fields['pincode']):
            raise ValidationError("Please enter a valid 6-digit pincode")
    return fields


def get_job(job_id, lock=False):
    queryset = Job.objects.select_for_update() if lock else Job.objects.all()
    try:
        return queryset.get(pk=job_id)
    except Job.DoesNotExist:
        raise NotFoundError("Job not found")


def get_client_job(job_id, client, lock=False):
    job = get_job(job_id, lock=lock)
    if job.client_id != client.id:
        raise NotFoundError("Job not found or not authorized")
    return job


def post_job(client, data):
    fields = _clean_job_fields(data)
    job = Job.objects.create(client=client, **fields)
    logger.info(f"Job {job.id} posted by client {client.id} with budget {job.budget}")
    return job


def update_job(job_id, client, data):
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        if not job.is_editable():
            raise StateConflictError("Job can only be edited while it is open and has no accepted offer")
        fields = _clean_job_fields(data, partial=True)
        for key, value in fields.items():
            setattr(job, key, value)
        job.save()
    logger.info(f"Job {job.id} updated by client {client.id}")
    return job


def delete_job(job_id, client):
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        if not job.is_editable():
            raise StateConflictError("Job can only be deleted while it is open and has no accepted offer")
        job.delete()
    logger.info(f"Job {job_id} deleted by client {client.id}")


def cancel_job(job_id, client):
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        if job.has_accepted_offer():
            raise StateConflictError("Cannot cancel a job with an accepted offer")
        job.transition('cancelled')
        job.save()
    logger.info(f"Job {job.id} cancelled by client {client.id}")
    return job


def accept_offer(job_id, freelancer_id, client):
    """
    Accept the freelancer's latest pending offer and assign the job to them.
    Other pending offers are left as they are; they can no longer be acted on
    because the job is not open anymore.
    """
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        if job.status != 'open':
            raise StateConflictError("Job is no longer open")
        offer = (
            job.offers.select_for_update()
            .filter(freelancer_id=freelancer_id, status='pending')
            .select_related('freelancer')
            .first()
        )
        if offer is None:
            raise NotFoundError("No pending offer from this freelancer")
        offer.respond('accepted')
        job.transition('assigned')
        job.assigned_freelancer = offer.freelancer
        job.pickup_method = 'direct'
        job.save()

    logger.info(f"Offer {offer.id} accepted on job {job.id}, assigned to freelancer {offer.freelancer_id}")
    send_notification(
        offer.freelancer,
        "Offer Accepted",
        f"Your offer of ₹{offer.amount} for '{job.title}' has been accepted.",
        f"Your offer for '{job.title}' was accepted."
    )
    return job, offer


def reject_offer(job_id, freelancer_id, client):
    with transaction.atomic():
        job = get_client_job(job_id, client, lock=True)
        if job.status != 'open':
            raise StateConflictError("Job is no longer open")
        offers = list(
            job.offers.select_for_update()
            .filter(freelancer_id=freelancer_id, status='pending')
            .select_related('freelancer')
        )
        if not offers:
            raise NotFoundError("No pending offer from this freelancer")
        for offer in offers:
            offer.respond('rejected')

    logger.info(f"Rejected {len(offers)} offer(s) from freelancer {freelancer_id} on job {job.id}")
    send_notification(
        offers[0].freelancer,
        "Offer Rejected",
        f"Your offer for '{job.title}' was not accepted.",
    )
    return job, offers


def pickup_job(job_id, freelancer):
    with transaction.atomic():
        job = get_job(job_id, lock=True)
        if job.status != 'open':
            raise StateConflictError("Job is no longer open")
        if job.has_accepted_offer():
            raise StateConflictError("Job already has an accepted offer")
        job.transition('assigned')
        job.assigned_freelancer = freelancer
        job.pickup_method = 'pickup'
        job.save()

    logger.info(f"Job {job.id} picked up by freelancer {freelancer.id}")
    send_notification(
        job.client,
        "Job Picked Up",
        f"{freelancer.display_name} has picked up your job '{job.title}'.",
    )
    return job


def mark_work_done(job_id, freelancer):
    with transaction.atomic():
        job = get_job(job_id, lock=True)
        if job.assigned_freelancer_id != freelancer.id:
            raise PermissionDeniedError("Only the assigned freelancer can mark this job as done")
        job.transition('work_done')
        job.save()

    logger.info(f"Job {job.id} marked as work done by freelancer {freelancer.id}")
    send_notification(
        job.client,
        "Work Completed",
        f"Work on '{job.title}' is done. Please proceed with the payment.",
    )
    return job


def confirm_full_completion(job_id, user):
    """Close a paid job. Either the assigned freelancer or the owning client may confirm."""
    with transaction.atomic():
        job = get_job(job_id, lock=True)
        if user.id not in (job.client_id, job.assigned_freelancer_id):
            raise PermissionDeniedError("Only the job's client or assigned freelancer can confirm completion")
        job.transition('fully_completed')
        job.save()
    logger.info(f"Job {job.id} fully completed, confirmed by user {user.id}")
    return job


def check_cooldown_status(job_id, freelancer):
    cooldown = OfferCooldown.objects.filter(job_id=job_id, freelancer=freelancer).first()
    remaining_ms = cooldown.remaining_ms() if cooldown else 0
    return {'canMakeOffer': remaining_ms == 0, 'remainingMs': remaining_ms}


def make_offer(job_id, freelancer, amount, message=''):
    amount = to_amount(amount)
    if amount <= 0:
        raise ValidationError("Offer amount must be greater than 0")

    with transaction.atomic():
        job = get_job(job_id, lock=True)
        if job.status != 'open':
            raise StateConflictError("Job is not accepting offers")

        now = timezone.now()
        cooldown = OfferCooldown.objects.select_for_update().filter(job=job, freelancer=freelancer).first()
        if cooldown is None:
            OfferCooldown.objects.create(job=job, freelancer=freelancer, last_offer_at=now)
        else:
            remaining_ms = cooldown.remaining_ms(now)
            if remaining_ms > 0:
                raise CooldownError(
                    remaining_ms,
                    f"Please wait {math.ceil(remaining_ms / 1000)} seconds before making another offer on this job"
                )
            cooldown.last_offer_at = now
            cooldown.save(update_fields=['last_offer_at'])

        offer = Offer.objects.create(job=job, freelancer=freelancer, amount=amount, message=message or '')

    logger.info(f"Offer {offer.id} of {amount} made on job {job.id} by freelancer {freelancer.id}")
    send_notification(
        job.client,
        "New Offer Received",
        f"{freelancer.display_name} offered ₹{amount} for your job '{job.title}'.",
    )
    return offer


def client_active_jobs(client):
    return (
        Job.objects.filter(client=client, status__in=ACTIVE_JOB_STATUSES)
        .select_related('assigned_freelancer')
        .prefetch_related('offers__freelancer')
    )


def client_job_history(client):
    return (
        Job.objects.filter(client=client, status__in=HISTORY_JOB_STATUSES)
        .select_related('assigned_freelancer')
        .prefetch_related('offers__freelancer')
    )


def available_jobs(category=None, pincode=None):
    queryset = Job.objects.filter(status='open').select_related('client')
    if category:
        queryset = queryset.filter(category__iexact=category)
    if pincode:
        queryset = queryset.filter(pincode=pincode)
    return queryset


def freelancer_assigned_jobs(freelancer):
    return Job.objects.filter(assigned_freelancer=freelancer).select_related('client')
