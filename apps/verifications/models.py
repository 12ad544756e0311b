from django.db import models
from django.conf import settings

from core.constants import REVIEW_STATUS_CHOICES


class FreelancerVerification(models.Model):
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='freelancer_verification')
    full_name = models.CharField(max_length=150)
    dob = models.DateField()
    gender = models.CharField(max_length=20)
    address = models.TextField()
    # Document references (URLs or storage keys), uploaded elsewhere
    aadhaar_front = models.CharField(max_length=500, null=True, blank=True)
    aadhaar_back = models.CharField(max_length=500, null=True, blank=True)
    pan_card = models.CharField(max_length=500, null=True, blank=True)
    profile_photo = models.CharField(max_length=500, null=True, blank=True)
    status = models.CharField(max_length=20, choices=REVIEW_STATUS_CHOICES, default='pending')
    rejection_reason = models.TextField(null=True, blank=True)
    reviewed_at = models.DateTimeField(null=True, blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='reviewed_verifications'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'freelancerverifications'
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"Verification for {self.user.username} ({self.status})"
