from collections import namedtuple
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings

# Cash commission is rounded to paise, UPI commission to whole rupees
ROUNDING_UNITS = {
    'cash': Decimal('0.01'),
    'upi': Decimal('1'),
}

PaymentSplit = namedtuple('PaymentSplit', ['total_amount', 'commission', 'freelancer_amount'])


def commission_rate():
    return Decimal(str(settings.PLATFORM_COMMISSION_RATE))


def calculate_payment_split(total_amount, payment_method):
    """
    Split a job payment between the platform and the freelancer.

    Args:
        total_amount: Amount paid by the client
        payment_method: 'cash' or 'upi'

    Returns:
        PaymentSplit where commission + freelancer_amount == total_amount
    """
    if payment_method not in ROUNDING_UNITS:
        raise ValueError(f"Unsupported payment method: {payment_method}")
    total_amount = Decimal(str(total_amount))
    commission = (total_amount * commission_rate()).quantize(ROUNDING_UNITS[payment_method], rounding=ROUND_HALF_UP)
    freelancer_amount = total_amount - commission
    return PaymentSplit(total_amount, commission, freelancer_amount)

