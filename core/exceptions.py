import logging
import math

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ValidationError(APIException):
    """Bad input shape or range (budget, pincode, withdrawal amount...)."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid input.'
    default_code = 'invalid'


class NotFoundError(APIException):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Not found.'
    default_code = 'not_found'


class PermissionDeniedError(APIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You do not have permission to perform this action.'
    default_code = 'permission_denied'


class StateConflictError(APIException):
    """A transition was attempted from a state that does not allow it."""
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Invalid state for this action.'
    default_code = 'invalid_state'


class CooldownError(APIException):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_detail = 'Please wait before trying again.'
    default_code = 'cooldown'

    def __init__(self, retry_after_ms, detail=None):
        self.retry_after_ms = retry_after_ms
        super().__init__(detail=detail)


class ExternalGatewayError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Payment gateway request failed.'
    default_code = 'gateway_error'


def _first_error_message(errors):
    if isinstance(errors, dict):
        for field, value in errors.items():
            message = _first_error_message(value)
            if field in ('non_field_errors', 'detail'):
                return message
            return f"{field}: {message}"
    if isinstance(errors, (list, tuple)) and errors:
        return _first_error_message(errors[0])
    return str(errors)


def api_exception_handler(exc, context):
    """Render every handled API error as {"success": false, "message": ...}."""
    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    payload = {'success': False}
    if isinstance(data, dict) and set(data) == {'detail'}:
        payload['message'] = str(data['detail'])
    else:
        payload['message'] = _first_error_message(data)
        payload['errors'] = data

    if isinstance(exc, CooldownError):
        payload['retryAfterMs'] = exc.retry_after_ms
        response['Retry-After'] = str(max(1, math.ceil(exc.retry_after_ms / 1000)))

    if response.status_code >= 500:
        logger.error(f"{exc.__class__.__name__} in {context.get('view').__class__.__name__}: {payload['message']}")

    response.data = payload
    return response
