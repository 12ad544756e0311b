from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.core.cache import cache
from rest_framework.test import APIClient

from apps.jobs import services as job_services
from apps.jobs.models import Job
from apps.payments.gateway import get_gateway

User = get_user_model()


@pytest.fixture(autouse=True)
def _isolated_settings(settings):
    settings.EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'
    settings.TWILIO_ACCOUNT_SID = ''
    cache.clear()


@pytest.fixture
def fake_gateway(settings):
    settings.PAYMENT_GATEWAY_BACKEND = 'tests.fakes.FakeGateway'
    return get_gateway()


@pytest.fixture
def make_user(db):
    counter = {'n': 0}

    def _make_user(role='client', **kwargs):
        counter['n'] += 1
        n = counter['n']
        defaults = {
            'username': f"{role}{n}",
            'full_name': f"{role.title()} {n}",
            'phone_number': f"+9198765{n:05d}",
            'email': f"{role}{n}@example.com",
        }
        defaults.update(kwargs)
        return User.objects.create_user(password='s3cret-pass', role=role, **defaults)

    return _make_user


@pytest.fixture
def client_user(make_user):
    return make_user('client')


@pytest.fixture
def freelancer(make_user):
    return make_user('freelancer')


@pytest.fixture
def other_freelancer(make_user):
    return make_user('freelancer')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def auth_client():
    def _auth_client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    return _auth_client


@pytest.fixture
def job_data():
    return {
        'title': 'Fix kitchen sink',
        'description': 'Leaking pipe under the sink',
        'category': 'Plumbing',
        'address': '12 MG Road, Pune',
        'pincode': '411001',
        'budget': Decimal('500'),
        'gender_preference': 'Any',
    }


@pytest.fixture
def open_job(client_user, job_data):
    return job_services.post_job(client_user, job_data)


@pytest.fixture
def make_job_in_status(client_user, freelancer, job_data):
    """Drive a fresh job through the real transitions up to the requested status."""

    def _make(status, budget=None, offer_amount=None):
        data = dict(job_data)
        if budget is not None:
            data['budget'] = Decimal(budget)
        job = job_services.post_job(client_user, data)
        if status == 'open':
            return job
        if offer_amount is not None:
            job_services.make_offer(job.id, freelancer, offer_amount)
            job_services.accept_offer(job.id, freelancer.id, client_user)
        else:
            job_services.pickup_job(job.id, freelancer)
        if status == 'assigned':
            return Job.objects.get(pk=job.id)
        job_services.mark_work_done(job.id, freelancer)
        return Job.objects.get(pk=job.id)

    return _make
