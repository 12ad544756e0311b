"""
Tests for wallet credits and the withdrawal request/approval workflow.
"""
from decimal import Decimal

import pytest

from apps.management.models import ManagementLog
from apps.wallets import services
from apps.wallets.models import Wallet, WithdrawalRequest
from core.exceptions import ValidationError, NotFoundError, StateConflictError

pytestmark = pytest.mark.django_db


@pytest.fixture
def funded_freelancer(freelancer):
    services.credit_wallet(freelancer, Decimal('500'), 'Payment for job: Seed')
    return freelancer


class TestWallet:

    def test_wallet_created_on_first_access(self, freelancer):
        wallet = services.get_wallet(freelancer)
        assert wallet.balance == Decimal('0')
        assert Wallet.objects.filter(freelancer=freelancer).count() == 1
        assert services.get_wallet(freelancer).pk == wallet.pk

    def test_credit_updates_balance_and_earnings(self, freelancer):
        services.credit_wallet(freelancer, Decimal('900'), 'Payment for job: A')
        services.credit_wallet(freelancer, Decimal('100.50'), 'Payment for job: B')
        wallet = services.get_wallet(freelancer)
        assert wallet.balance == Decimal('1000.50')
        assert wallet.total_earnings == Decimal('1000.50')
        assert wallet.transactions.filter(type='credit').count() == 2


class TestWithdrawalRequest:

    def test_below_minimum_fails(self, funded_freelancer):
        with pytest.raises(ValidationError):
            services.request_withdrawal(funded_freelancer, Decimal('99'), 'asha@okaxis')
        assert not WithdrawalRequest.objects.exists()

    def test_minimum_succeeds(self, funded_freelancer):
        withdrawal = services.request_withdrawal(funded_freelancer, Decimal('100'), 'asha@okaxis')
        assert withdrawal.status == 'pending'
        assert withdrawal.amount == Decimal('100')

    def test_request_does_not_debit(self, funded_freelancer):
        services.request_withdrawal(funded_freelancer, Decimal('200'), 'asha@okaxis')
        assert services.get_wallet(funded_freelancer).balance == Decimal('500')

    def test_cannot_exceed_balance(self, funded_freelancer):
        with pytest.raises(ValidationError):
            services.request_withdrawal(funded_freelancer, Decimal('500.01'), 'asha@okaxis')

    def test_pending_requests_hold_balance(self, funded_freelancer):
        services.request_withdrawal(funded_freelancer, Decimal('300'), 'asha@okaxis')
        with pytest.raises(ValidationError):
            services.request_withdrawal(funded_freelancer, Decimal('201'), 'asha@okaxis')
        services.request_withdrawal(funded_freelancer, Decimal('200'), 'asha@okaxis')
        assert services.get_wallet(funded_freelancer).available_balance() == Decimal('0')

    @pytest.mark.parametrize('upi_id', ['', '   ', 'no-at-sign', '@okaxis', 'asha@'])
    def test_upi_id_is_validated(self, funded_freelancer, upi_id):
        with pytest.raises(ValidationError):
            services.request_withdrawal(funded_freelancer, Decimal('100'), upi_id)

    def test_history_is_per_freelancer(self, funded_freelancer, other_freelancer):
        services.credit_wallet(other_freelancer, Decimal('150'), 'Payment for job: X')
        mine = services.request_withdrawal(funded_freelancer, Decimal('100'), 'asha@okaxis')
        services.request_withdrawal(other_freelancer, Decimal('150'), 'ravi@ybl')
        assert list(services.withdrawal_history(funded_freelancer)) == [mine]


class TestWithdrawalReview:

    @pytest.fixture
    def withdrawal(self, funded_freelancer):
        return services.request_withdrawal(funded_freelancer, Decimal('300'), 'asha@okaxis')

    def test_approve_debits_wallet(self, admin_user, funded_freelancer, withdrawal):
        approved = services.approve_withdrawal(withdrawal.id, admin_user)

        assert approved.status == 'approved'
        assert approved.reviewed_by == admin_user
        assert approved.reviewed_at is not None
        wallet = services.get_wallet(funded_freelancer)
        assert wallet.balance == Decimal('200')
        assert wallet.total_earnings == Decimal('500')
        debit = wallet.transactions.get(type='debit')
        assert debit.amount == Decimal('300')
        assert ManagementLog.objects.filter(admin=admin_user, action='approve_withdrawal').exists()

    def test_approve_twice_is_a_conflict(self, admin_user, funded_freelancer, withdrawal):
        services.approve_withdrawal(withdrawal.id, admin_user)
        with pytest.raises(StateConflictError):
            services.approve_withdrawal(withdrawal.id, admin_user)
        assert services.get_wallet(funded_freelancer).balance == Decimal('200')

    def test_reject_keeps_balance(self, admin_user, funded_freelancer, withdrawal):
        rejected = services.reject_withdrawal(withdrawal.id, admin_user, 'UPI ID does not match KYC name')

        assert rejected.status == 'rejected'
        assert rejected.rejection_reason == 'UPI ID does not match KYC name'
        wallet = services.get_wallet(funded_freelancer)
        assert wallet.balance == Decimal('500')
        assert wallet.available_balance() == Decimal('500')

    def test_reject_requires_reason(self, admin_user, withdrawal):
        with pytest.raises(ValidationError):
            services.reject_withdrawal(withdrawal.id, admin_user, '  ')
        withdrawal.refresh_from_db()
        assert withdrawal.status == 'pending'

    def test_reject_after_approval_is_a_conflict(self, admin_user, withdrawal):
        services.approve_withdrawal(withdrawal.id, admin_user)
        with pytest.raises(StateConflictError):
            services.reject_withdrawal(withdrawal.id, admin_user, 'Too late')

    def test_unknown_withdrawal(self, admin_user):
        with pytest.raises(NotFoundError):
            services.approve_withdrawal(424242, admin_user)

    def test_list_filters_by_status(self, admin_user, funded_freelancer, withdrawal):
        second = services.request_withdrawal(funded_freelancer, Decimal('100'), 'asha@okaxis')
        services.approve_withdrawal(withdrawal.id, admin_user)
        assert list(services.list_withdrawals('pending')) == [second]
        assert list(services.list_withdrawals('approved')) == [withdrawal]
        assert services.list_withdrawals().count() == 2
