import logging

from django.db.models import Q

from apps.jobs.models import Job
from core.constants import ACTIVE_JOB_STATUSES
from core.exceptions import ValidationError, PermissionDeniedError, StateConflictError

logger = logging.getLogger(__name__)

SWITCHABLE_ROLES = ('client', 'freelancer')


def has_active_jobs(user):
    """True while the user owns, or is assigned to, a job that is not finished yet."""
    return Job.objects.filter(
        Q(client=user) | Q(assigned_freelancer=user),
        status__in=ACTIVE_JOB_STATUSES,
    ).exists()


def switch_role(user, new_role):
    if new_role not in SWITCHABLE_ROLES:
        raise ValidationError("Invalid role. Must be client or freelancer")
    if user.is_admin:
        raise PermissionDeniedError("Admins cannot switch role")
    if user.role == new_role:
        raise ValidationError("You are already in this role")
    if has_active_jobs(user):
        raise StateConflictError("You still have an active job. Complete it before switching role.")

    previous = user.role
    user.role = new_role
    user.save(update_fields=['role'])
    logger.info(f"User {user.id} switched role from {previous} to {new_role}")
    return user


def setup_profile(user, full_name, profile_photo=None):
    full_name = (full_name or '').strip()
    if not full_name:
        raise ValidationError("Full name is required")
    user.full_name = full_name
    if profile_photo:
        user.profile_photo = profile_photo
    user.profile_setup_completed = True
    user.save(update_fields=['full_name', 'profile_photo', 'profile_setup_completed'])
    logger.info(f"Profile setup completed for user {user.id}")
    return user


def update_profile(user, full_name=None, profile_photo=None):
    fields = []
    if full_name is not None:
        full_name = full_name.strip()
        if not full_name:
            raise ValidationError("Full name cannot be empty")
        user.full_name = full_name
        fields.append('full_name')
    if profile_photo is not None:
        user.profile_photo = profile_photo
        fields.append('profile_photo')
    if fields:
        user.save(update_fields=fields)
        logger.info(f"Profile of user {user.id} updated: {', '.join(fields)}")
    return user
