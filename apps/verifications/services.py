import logging

from django.db import transaction
from django.utils import timezone

from apps.jobs.utils import send_notification
from apps.management.models import ManagementLog
from core.exceptions import ValidationError, NotFoundError, PermissionDeniedError, StateConflictError
from .models import FreelancerVerification

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ('full_name', 'dob', 'gender', 'address')
SUBMITTED_FIELDS = REQUIRED_FIELDS + ('aadhaar_front', 'aadhaar_back', 'pan_card', 'profile_photo')


def submit_verification(user, data):
    """
    Store a freelancer's identity documents for review.

    A rejected submission is reopened in place with the new data; pending or
    approved submissions cannot be replaced.
    """
    if not user.is_freelancer:
        raise PermissionDeniedError("Only freelancers can submit verification documents")
    missing = [field for field in REQUIRED_FIELDS if not data.get(field)]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
    fields = {field: data.get(field) or None for field in SUBMITTED_FIELDS}

    with transaction.atomic():
        verification = FreelancerVerification.objects.select_for_update().filter(user=user).first()
        if verification is None:
            verification = FreelancerVerification.objects.create(user=user, **fields)
        elif verification.status == 'rejected':
            for key, value in fields.items():
                setattr(verification, key, value)
            verification.status = 'pending'
            verification.rejection_reason = None
            verification.reviewed_at = None
            verification.reviewed_by = None
            verification.save()
        else:
            raise StateConflictError(f"Verification is already {verification.status}")

    logger.info(f"Verification {verification.id} submitted by user {user.id}")
    return verification


def get_verification_status(user):
    return FreelancerVerification.objects.filter(user=user).first()


def _get_pending_verification(verification_id):
    try:
        verification = FreelancerVerification.objects.select_for_update().select_related('user').get(pk=verification_id)
    except FreelancerVerification.DoesNotExist:
        raise NotFoundError("Verification not found")
    if verification.status != 'pending':
        raise StateConflictError(f"Verification has already been {verification.status}")
    return verification


def approve_verification(verification_id, admin):
    with transaction.atomic():
        verification = _get_pending_verification(verification_id)
        verification.status = 'approved'
        verification.reviewed_at = timezone.now()
        verification.reviewed_by = admin
        verification.save()

        user = verification.user
        user.full_name = verification.full_name
        if verification.profile_photo:
            user.profile_photo = verification.profile_photo
        user.save(update_fields=['full_name', 'profile_photo'])

        ManagementLog.record(admin, 'approve_freelancer', f"Approved verification {verification.id} for user {user.id}")

    logger.info(f"Verification {verification.id} approved by admin {admin.id}")
    send_notification(
        verification.user,
        "Verification Approved",
        "Your identity verification has been approved. You can now work on FreelanceHub.",
    )
    return verification


def reject_verification(verification_id, admin, reason):
    reason = (reason or '').strip()
    if not reason:
        raise ValidationError("Rejection reason is required")
    with transaction.atomic():
        verification = _get_pending_verification(verification_id)
        verification.status = 'rejected'
        verification.rejection_reason = reason
        verification.reviewed_at = timezone.now()
        verification.reviewed_by = admin
        verification.save()
        ManagementLog.record(
            admin, 'reject_freelancer',
            f"Rejected verification {verification.id} for user {verification.user_id}: {reason}"
        )

    logger.info(f"Verification {verification.id} rejected by admin {admin.id}")
    send_notification(
        verification.user,
        "Verification Rejected",
        f"Your identity verification was rejected. Reason: {reason}. You can correct it and submit again.",
    )
    return verification


def list_verifications(status=None):
    queryset = FreelancerVerification.objects.select_related('user', 'reviewed_by')
    if status:
        queryset = queryset.filter(status=status)
    return queryset
