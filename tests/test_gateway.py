"""
Tests for the PhonePe gateway client with the HTTP layer mocked out.
"""
from decimal import Decimal
from unittest.mock import MagicMock, patch

import pytest
import requests

from apps.payments.gateway import PhonePeGateway, get_gateway
from core.exceptions import ExternalGatewayError


def make_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = str(payload)
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status_code} Error")
    return response


TOKEN_RESPONSE = {'access_token': 'tok-123', 'expires_in': 3600}


@pytest.fixture
def gateway(settings):
    settings.PHONEPE_BASE_URL = 'https://pg.example.test/apis/pg'
    settings.PHONEPE_AUTH_BASE_URL = 'https://auth.example.test/apis/pg'
    settings.PHONEPE_CLIENT_ID = 'client-id'
    settings.PHONEPE_CLIENT_SECRET = 'client-secret'
    return PhonePeGateway()


class TestPhonePeGateway:

    @patch('apps.payments.gateway.requests.post')
    def test_create_payment(self, mock_post, gateway):
        mock_post.side_effect = [
            make_response(TOKEN_RESPONSE),
            make_response({'orderId': 'OMO123', 'state': 'PENDING', 'redirectUrl': 'https://pay.example.test/r/1'}),
        ]

        payment = gateway.create_payment('ORDER_1_1700000000000', Decimal('1000'), 'https://app.example.test/ok')

        assert payment.payment_url == 'https://pay.example.test/r/1'
        assert payment.gateway_order_id == 'OMO123'
        pay_call = mock_post.call_args_list[1]
        assert pay_call.args[0] == 'https://pg.example.test/apis/pg/checkout/v2/pay'
        assert pay_call.kwargs['json']['amount'] == 100000
        assert pay_call.kwargs['json']['merchantOrderId'] == 'ORDER_1_1700000000000'
        assert pay_call.kwargs['headers']['Authorization'] == 'O-Bearer tok-123'

    @patch('apps.payments.gateway.requests.post')
    def test_token_is_cached(self, mock_post, gateway):
        mock_post.side_effect = [
            make_response(TOKEN_RESPONSE),
            make_response({'orderId': 'A', 'redirectUrl': 'https://pay.example.test/a'}),
            make_response({'orderId': 'B', 'redirectUrl': 'https://pay.example.test/b'}),
        ]
        gateway.create_payment('ORDER_1_1', Decimal('10'), 'https://app.example.test/ok')
        gateway.create_payment('ORDER_1_2', Decimal('10'), 'https://app.example.test/ok')

        token_calls = [c for c in mock_post.call_args_list if c.args[0].endswith('/v1/oauth/token')]
        assert len(token_calls) == 1

    @patch('apps.payments.gateway.requests.post')
    def test_http_error_raises_gateway_error(self, mock_post, gateway):
        mock_post.side_effect = [
            make_response(TOKEN_RESPONSE),
            make_response({'code': 'BAD_REQUEST'}, status_code=400),
        ]
        with pytest.raises(ExternalGatewayError):
            gateway.create_payment('ORDER_1_1', Decimal('10'), 'https://app.example.test/ok')

    @patch('apps.payments.gateway.requests.post')
    def test_network_error_raises_gateway_error(self, mock_post, gateway):
        mock_post.side_effect = requests.exceptions.ConnectionError("connection refused")
        with pytest.raises(ExternalGatewayError):
            gateway.create_payment('ORDER_1_1', Decimal('10'), 'https://app.example.test/ok')

    @patch('apps.payments.gateway.requests.get')
    @patch('apps.payments.gateway.requests.post')
    def test_completed_status(self, mock_post, mock_get, gateway):
        mock_post.return_value = make_response(TOKEN_RESPONSE)
        mock_get.return_value = make_response({
            'orderId': 'OMO123',
            'state': 'COMPLETED',
            'paymentDetails': [{'transactionId': 'T2401', 'state': 'COMPLETED'}],
        })

        status = gateway.get_status('ORDER_1_1')

        assert status.is_success
        assert status.transaction_id == 'T2401'
        assert mock_get.call_args.args[0] == 'https://pg.example.test/apis/pg/checkout/v2/order/ORDER_1_1/status'

    @patch('apps.payments.gateway.requests.get')
    @patch('apps.payments.gateway.requests.post')
    def test_pending_status(self, mock_post, mock_get, gateway):
        mock_post.return_value = make_response(TOKEN_RESPONSE)
        mock_get.return_value = make_response({'orderId': 'OMO123', 'state': 'PENDING'})

        status = gateway.get_status('ORDER_1_1')

        assert not status.is_success
        assert status.state == 'PENDING'
        assert status.transaction_id is None


class TestGatewaySelection:

    def test_backend_follows_setting(self, settings):
        settings.PAYMENT_GATEWAY_BACKEND = 'tests.fakes.FakeGateway'
        assert type(get_gateway()).__name__ == 'FakeGateway'
        settings.PAYMENT_GATEWAY_BACKEND = 'apps.payments.gateway.PhonePeGateway'
        assert isinstance(get_gateway(), PhonePeGateway)

    def test_backend_is_built_once(self, settings):
        settings.PAYMENT_GATEWAY_BACKEND = 'tests.fakes.FakeGateway'
        assert get_gateway() is get_gateway()
