"""
Tests for the commission split between platform and freelancer.
"""
import random
from decimal import Decimal, ROUND_HALF_UP

import pytest

from apps.payments.commission import calculate_payment_split


class TestCashSplit:
    """Cash commission is rounded half-up to paise."""

    def test_ten_percent_of_round_amount(self):
        split = calculate_payment_split(Decimal('1000'), 'cash')
        assert split.commission == Decimal('100.00')
        assert split.freelancer_amount == Decimal('900.00')

    def test_half_paisa_rounds_up(self):
        # 10% of 333.35 is 33.335
        split = calculate_payment_split(Decimal('333.35'), 'cash')
        assert split.commission == Decimal('33.34')
        assert split.freelancer_amount == Decimal('300.01')

    def test_below_half_paisa_rounds_down(self):
        # 10% of 333.34 is 33.334
        split = calculate_payment_split(Decimal('333.34'), 'cash')
        assert split.commission == Decimal('33.33')

    def test_parts_always_add_up_to_total(self):
        rng = random.Random(20240)
        for _ in range(500):
            total = Decimal(rng.randint(1000, 10_000_000)) / 100
            split = calculate_payment_split(total, 'cash')
            assert split.commission + split.freelancer_amount == total
            assert split.commission == (total * Decimal('0.10')).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


class TestUpiSplit:
    """UPI commission is rounded half-up to whole rupees."""

    def test_ten_percent_of_round_amount(self):
        split = calculate_payment_split(Decimal('1000'), 'upi')
        assert split.commission == Decimal('100')
        assert split.freelancer_amount == Decimal('900')

    def test_half_rupee_rounds_up(self):
        split = calculate_payment_split(Decimal('1005'), 'upi')
        assert split.commission == Decimal('101')
        assert split.freelancer_amount == Decimal('904')

    def test_below_half_rupee_rounds_down(self):
        split = calculate_payment_split(Decimal('1004'), 'upi')
        assert split.commission == Decimal('100')
        assert split.freelancer_amount == Decimal('904')

    def test_parts_always_add_up_to_total(self):
        rng = random.Random(7)
        for _ in range(500):
            total = Decimal(rng.randint(10, 100_000))
            split = calculate_payment_split(total, 'upi')
            assert split.commission + split.freelancer_amount == total
            assert split.commission == split.commission.to_integral_value()


class TestSplitConfiguration:

    def test_rate_comes_from_settings(self, settings):
        settings.PLATFORM_COMMISSION_RATE = '0.15'
        split = calculate_payment_split(Decimal('200'), 'cash')
        assert split.commission == Decimal('30.00')

    def test_unknown_method_is_rejected(self):
        with pytest.raises(ValueError):
            calculate_payment_split(Decimal('100'), 'card')

