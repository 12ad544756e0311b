from datetime import timedelta

from django.db import models
from django.conf import settings
from django.utils import timezone

from core.constants import (
    JOB_STATUS_CHOICES, JOB_STATUS_TRANSITIONS, GENDER_PREFERENCE_CHOICES,
    PICKUP_METHOD_CHOICES, OFFER_STATUS_CHOICES,
)
from core.exceptions import StateConflictError

# Timestamp field stamped when a job enters the given status
STATUS_TIMESTAMP_FIELDS = {
    'assigned': 'assigned_at',
    'work_done': 'work_done_at',
    'completed': 'completed_at',
    'fully_completed': 'fully_completed_at',
    'cancelled': 'cancelled_at',
}


class Job(models.Model):
    client = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='jobs')
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')
    category = models.CharField(max_length=100)
    address = models.CharField(max_length=300)
    pincode = models.CharField(max_length=6)
    budget = models.DecimalField(max_digits=12, decimal_places=2)
    gender_preference = models.CharField(max_length=10, choices=GENDER_PREFERENCE_CHOICES, default='Any')
    status = models.CharField(max_length=20, choices=JOB_STATUS_CHOICES, default='open', db_index=True)
    assigned_freelancer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_jobs'
    )
    pickup_method = models.CharField(max_length=10, choices=PICKUP_METHOD_CHOICES, null=True, blank=True)
    assigned_at = models.DateTimeField(null=True, blank=True)
    work_done_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)
    fully_completed_at = models.DateTimeField(null=True, blank=True)
    cancelled_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} - {self.client.username}"

    def can_transition_to(self, new_status):
        return new_status in JOB_STATUS_TRANSITIONS.get(self.status, ())

    def transition(self, new_status):
        """
        Move the job to new_status and stamp the matching timestamp.
        Raises StateConflictError without touching the row if the move is not allowed.
        """
        if not self.can_transition_to(new_status):
            raise StateConflictError(f"Cannot move job from '{self.status}' to '{new_status}'")
        self.status = new_status
        timestamp_field = STATUS_TIMESTAMP_FIELDS.get(new_status)
        if timestamp_field:
            setattr(self, timestamp_field, timezone.now())

    @property
    def accepted_offer(self):
        return self.offers.filter(status='accepted').first()

    def has_accepted_offer(self):
        return self.offers.filter(status='accepted').exists()

    @property
    def agreed_amount(self):
        """Amount charged for the job: the accepted offer's amount, else the budget."""
        offer = self.accepted_offer
        return offer.amount if offer else self.budget

    def is_editable(self):
        return self.status == 'open' and not self.has_accepted_offer()


class Offer(models.Model):
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='offers')
    freelancer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='offers')
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    message = models.TextField(blank=True, default='')
    status = models.CharField(max_length=20, choices=OFFER_STATUS_CHOICES, default='pending')
    created_at = models.DateTimeField(auto_now_add=True)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Offer of {self.amount} by {self.freelancer.username} on {self.job.title}"

    def respond(self, new_status):
        if self.status != 'pending':
            raise StateConflictError(f"Offer has already been {self.status}")
        self.status = new_status
        self.responded_at = timezone.now()
        self.save(update_fields=['status', 'responded_at'])


class OfferCooldown(models.Model):
    """Last time a freelancer offered on a job; gates the next offer on the same pair."""
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='offer_cooldowns')
    freelancer = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='offer_cooldowns')
    last_offer_at = models.DateTimeField()

    class Meta:
        unique_together = ('job', 'freelancer')

    def __str__(self):
        return f"Cooldown for {self.freelancer.username} on job {self.job_id}"

    def remaining_ms(self, now=None):
        now = now or timezone.now()
        window_ms = settings.OFFER_COOLDOWN_SECONDS * 1000
        elapsed_ms = (now - self.last_offer_at) // timedelta(milliseconds=1)
        return max(0, window_ms - elapsed_ms)
