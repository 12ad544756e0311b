"""
Tests for role switching and profile maintenance.
"""
import pytest
from django.contrib.auth import get_user_model

from apps.jobs import services as job_services
from apps.payments import services as payment_services
from apps.users import services
from core.exceptions import ValidationError, PermissionDeniedError, StateConflictError

User = get_user_model()

pytestmark = pytest.mark.django_db


class TestSwitchRole:

    def test_client_without_jobs_becomes_freelancer(self, client_user):
        services.switch_role(client_user, 'freelancer')
        assert User.objects.get(pk=client_user.id).role == 'freelancer'

    def test_open_job_blocks_the_client(self, client_user, open_job):
        with pytest.raises(StateConflictError, match='active job'):
            services.switch_role(client_user, 'freelancer')
        assert User.objects.get(pk=client_user.id).role == 'client'

        job_services.cancel_job(open_job.id, client_user)
        services.switch_role(client_user, 'freelancer')
        assert User.objects.get(pk=client_user.id).role == 'freelancer'

    def test_assigned_job_blocks_the_freelancer(self, freelancer, make_job_in_status):
        make_job_in_status('assigned')
        assert services.has_active_jobs(freelancer)
        with pytest.raises(StateConflictError):
            services.switch_role(freelancer, 'client')

    def test_paid_job_no_longer_blocks(self, client_user, freelancer, make_job_in_status):
        job = make_job_in_status('work_done')
        payment_services.record_cash_payment(job.id, client_user)

        assert not services.has_active_jobs(client_user)
        assert not services.has_active_jobs(freelancer)
        services.switch_role(freelancer, 'client')
        assert User.objects.get(pk=freelancer.id).role == 'client'

    def test_other_users_jobs_do_not_count(self, open_job, make_user):
        bystander = make_user('client')
        assert not services.has_active_jobs(bystander)

    @pytest.mark.parametrize('role', ['admin', 'worker', ''])
    def test_invalid_role(self, client_user, role):
        with pytest.raises(ValidationError, match='Invalid role'):
            services.switch_role(client_user, role)

    def test_same_role(self, client_user):
        with pytest.raises(ValidationError, match='already in this role'):
            services.switch_role(client_user, 'client')

    def test_admin_cannot_switch(self, admin_user):
        with pytest.raises(PermissionDeniedError):
            services.switch_role(admin_user, 'client')


class TestProfile:

    def test_setup_marks_profile_complete(self, client_user):
        services.setup_profile(client_user, '  Asha Patil ', 'https://cdn.example.com/asha.jpg')

        user = User.objects.get(pk=client_user.id)
        assert user.full_name == 'Asha Patil'
        assert user.profile_photo == 'https://cdn.example.com/asha.jpg'
        assert user.profile_setup_completed is True

    def test_setup_requires_full_name(self, client_user):
        with pytest.raises(ValidationError):
            services.setup_profile(client_user, '   ')
        assert User.objects.get(pk=client_user.id).profile_setup_completed is False

    def test_update_changes_only_given_fields(self, client_user):
        original_name = client_user.full_name
        services.update_profile(client_user, profile_photo='https://cdn.example.com/new.jpg')

        user = User.objects.get(pk=client_user.id)
        assert user.full_name == original_name
        assert user.profile_photo == 'https://cdn.example.com/new.jpg'

    def test_update_rejects_blank_name(self, client_user):
        with pytest.raises(ValidationError):
            services.update_profile(client_user, full_name='')


class TestUserEndpoints:

    def test_switch_role_returns_token_and_user(self, auth_client, client_user):
        response = auth_client(client_user).post('/auth/switch-role', {'newRole': 'freelancer'}, format='json')

        assert response.status_code == 200
        body = response.json()
        assert body['message'] == 'Role switched successfully'
        assert body['token']
        assert body['user']['role'] == 'freelancer'

    def test_switch_role_with_active_job_is_a_conflict(self, auth_client, client_user, open_job):
        response = auth_client(client_user).post('/auth/switch-role', {'newRole': 'freelancer'}, format='json')

        assert response.status_code == 409
        assert response.json() == {
            'success': False,
            'message': 'You still have an active job. Complete it before switching role.',
        }

    def test_can_switch_role(self, auth_client, client_user):
        response = auth_client(client_user).get('/auth/can-switch-role')
        assert response.json() == {
            'success': True,
            'message': 'You can switch roles',
            'canSwitch': True,
            'currentRole': 'client',
        }

    def test_cannot_switch_role_with_open_job(self, auth_client, client_user, open_job):
        body = auth_client(client_user).get('/auth/can-switch-role').json()
        assert body['canSwitch'] is False
        assert body['message'] == 'You have active jobs. Complete them before switching role.'

    def test_active_jobs_status(self, auth_client, freelancer, make_job_in_status):
        assert auth_client(freelancer).get('/users/active-jobs-status').json() == {
            'success': True, 'hasActiveJobs': False, 'canSwitchRole': True,
        }

        make_job_in_status('assigned')
        assert auth_client(freelancer).get('/users/active-jobs-status').json() == {
            'success': True, 'hasActiveJobs': True, 'canSwitchRole': False,
        }

    def test_profile_setup_and_update(self, auth_client, client_user):
        api = auth_client(client_user)

        setup = api.post('/users/profile-setup', {'fullName': 'Asha Patil'}, format='json')
        assert setup.status_code == 200
        assert setup.json()['user']['fullName'] == 'Asha Patil'
        assert setup.json()['user']['profileSetupCompleted'] is True

        updated = api.put('/users/update-profile', {'fullName': 'Asha P.'}, format='json')
        assert updated.status_code == 200
        assert updated.json()['message'] == 'Profile updated successfully'
        assert User.objects.get(pk=client_user.id).full_name == 'Asha P.'

    def test_profile_setup_rejects_bad_photo_url(self, auth_client, client_user):
        response = auth_client(client_user).post(
            '/users/profile-setup', {'fullName': 'Asha Patil', 'profilePhoto': 'not a url'}, format='json'
        )
        assert response.status_code == 400
        assert response.json()['success'] is False

    def test_requires_authentication(self, api_client):
        assert api_client.get('/users/active-jobs-status').status_code == 401
