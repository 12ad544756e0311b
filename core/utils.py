from rest_framework import permissions, status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView


class IsClient(permissions.BasePermission):
    message = 'Only clients can perform this action'

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_client


class IsFreelancer(permissions.BasePermission):
    message = 'Only freelancers can perform this action'

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_freelancer


class IsAdmin(permissions.BasePermission):
    message = 'Admin access required'

    def has_permission(self, request, view):
        if not request.user.is_authenticated:
            return False
        return request.user.is_admin


def success_response(data=None, message=None, status_code=status.HTTP_200_OK):
    """Wrap a payload in the {"success": true, ...} envelope."""
    payload = {'success': True}
    if message:
        payload['message'] = message
    if data:
        payload.update(data)
    return Response(payload, status=status_code)


class HealthView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request):
        return success_response({'status': 'healthy'})
