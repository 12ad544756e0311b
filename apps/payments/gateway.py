import logging
from collections import namedtuple
from decimal import Decimal
from functools import lru_cache

import requests
from django.conf import settings
from django.core.cache import cache
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from core.exceptions import ExternalGatewayError

logger = logging.getLogger(__name__)

GatewayPayment = namedtuple('GatewayPayment', ['payment_url', 'gateway_order_id', 'state'])
GatewayStatus = namedtuple('GatewayStatus', ['state', 'is_success', 'transaction_id', 'raw'])

TOKEN_CACHE_KEY = 'phonepe_oauth_token'
# Refresh the token this many seconds before the gateway expires it
TOKEN_EXPIRY_MARGIN_SECONDS = 30
DEFAULT_TOKEN_LIFETIME_SECONDS = 3300
SUCCESS_STATE = 'COMPLETED'


class PhonePeGateway:
    """
    UPI checkout through PhonePe's v2 API.

    Authenticates with the client-credentials grant and keeps the access
    token in the Django cache until shortly before it expires.
    """

    def __init__(self):
        self.base_url = settings.PHONEPE_BASE_URL.rstrip('/')
        self.auth_base_url = settings.PHONEPE_AUTH_BASE_URL.rstrip('/')
        self.client_id = settings.PHONEPE_CLIENT_ID
        self.client_secret = settings.PHONEPE_CLIENT_SECRET
        self.client_version = settings.PHONEPE_CLIENT_VERSION
        self.timeout = settings.PHONEPE_TIMEOUT_SECONDS

    def get_auth_token(self):
        token = cache.get(TOKEN_CACHE_KEY)
        if token:
            return token
        try:
            response = requests.post(
                f"{self.auth_base_url}/v1/oauth/token",
                data={
                    'grant_type': 'client_credentials',
                    'client_id': self.client_id,
                    'client_secret': self.client_secret,
                    'client_version': self.client_version,
                },
                headers={'accept': 'application/json'},
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"PhonePe OAuth request failed: {str(e)}")
            raise ExternalGatewayError("Could not authenticate with the payment gateway")

        token = data.get('access_token') or data.get('accessToken')
        if not token:
            logger.error(f"PhonePe OAuth response without token: {data}")
            raise ExternalGatewayError("Could not authenticate with the payment gateway")
        expires_in = int(data.get('expires_in') or DEFAULT_TOKEN_LIFETIME_SECONDS)
        cache.set(TOKEN_CACHE_KEY, token, max(1, expires_in - TOKEN_EXPIRY_MARGIN_SECONDS))
        return token

    def _headers(self):
        return {
            'Content-Type': 'application/json',
            'accept': 'application/json',
            'Authorization': f"O-Bearer {self.get_auth_token()}",
        }

    def create_payment(self, order_id, amount, redirect_url):
        """Start a checkout for amount (in rupees) and return where to send the payer."""
        payload = {
            'merchantOrderId': order_id,
            'amount': int(Decimal(amount) * 100),
            'paymentFlow': {
                'type': 'PG_CHECKOUT',
                'message': f"Payment for order {order_id}",
                'merchantUrls': {'redirectUrl': redirect_url},
            },
        }
        try:
            logger.info(f"Sending PhonePe pay request for order {order_id}")
            response = requests.post(
                f"{self.base_url}/checkout/v2/pay",
                json=payload,
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            logger.error(f"PhonePe HTTP error for order {order_id}: {str(e)}, Response: {response.text}")
            raise ExternalGatewayError("Payment gateway rejected the payment request")
        except requests.exceptions.RequestException as e:
            logger.error(f"PhonePe pay request failed for order {order_id}: {str(e)}")
            raise ExternalGatewayError("Payment gateway is unreachable")

        payment_url = data.get('redirectUrl')
        if not payment_url:
            logger.error(f"PhonePe pay response without redirect URL: {data}")
            raise ExternalGatewayError("Payment gateway did not return a payment URL")
        return GatewayPayment(payment_url, data.get('orderId'), data.get('state'))

    def get_status(self, order_id):
        try:
            response = requests.get(
                f"{self.base_url}/checkout/v2/order/{order_id}/status",
                headers=self._headers(),
                timeout=self.timeout
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"PhonePe status check failed for order {order_id}: {str(e)}")
            raise ExternalGatewayError("Could not verify payment with the gateway")

        state = data.get('state')
        details = data.get('paymentDetails') or []
        transaction_id = details[0].get('transactionId') if details else None
        return GatewayStatus(state, state == SUCCESS_STATE, transaction_id, data)


@lru_cache(maxsize=None)
def get_gateway():
    """The backend named by PAYMENT_GATEWAY_BACKEND, built once per process."""
    return import_string(settings.PAYMENT_GATEWAY_BACKEND)()


@receiver(setting_changed)
def reset_gateway(setting, **kwargs):
    if setting == 'PAYMENT_GATEWAY_BACKEND':
        get_gateway.cache_clear()
