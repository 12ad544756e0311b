from django.db import models
from django.contrib.auth.models import AbstractUser

from core.constants import USER_ROLE_CHOICES


class User(AbstractUser):
    phone_number = models.CharField(max_length=15, blank=True, null=True, db_index=True)
    full_name = models.CharField(max_length=150, blank=True, default='')
    role = models.CharField(max_length=20, choices=USER_ROLE_CHOICES, default='client')
    profile_photo = models.URLField(max_length=500, blank=True, null=True)
    profile_setup_completed = models.BooleanField(default=False)

    @property
    def is_client(self):
        return self.role == 'client'

    @property
    def is_freelancer(self):
        return self.role == 'freelancer'

    @property
    def is_admin(self):
        return self.role == 'admin' or self.is_superuser

    @property
    def display_name(self):
        return self.full_name or self.get_full_name() or self.username

    @property
    def verification_status(self):
        """Status of the freelancer's identity verification, None if never submitted."""
        verification = getattr(self, 'freelancer_verification', None)
        return verification.status if verification else None

    def __str__(self):
        return f"{self.display_name} ({self.role})"
