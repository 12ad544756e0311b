from rest_framework.views import APIView
from rest_framework.authtoken.models import Token
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi
from django.utils import timezone

from core.utils import success_response
from . import services
from .serializers import (
    LoginSerializer, UserSerializer, SwitchRoleSerializer, ProfileSetupSerializer, ProfileUpdateSerializer,
)

import logging

logger = logging.getLogger(__name__)


class AuthLoginView(APIView):
    permission_classes = []

    @swagger_auto_schema(
        request_body=LoginSerializer,
        responses={
            200: openapi.Response(
                description='Login successful',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'token': openapi.Schema(type=openapi.TYPE_STRING),
                        'user': openapi.Schema(type=openapi.TYPE_OBJECT),
                    }
                )
            ),
            400: 'Bad Request'
        }
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data['user']
        token, created = Token.objects.get_or_create(user=user)
        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])
        logger.info(f"Login successful for user {user.id}")
        return success_response({"token": token.key, "user": UserSerializer(user).data})


class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Profile of the authenticated user",
        responses={200: UserSerializer, 401: 'Unauthorized'}
    )
    def get(self, request):
        return success_response({"user": UserSerializer(request.user).data})


class SwitchRoleView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Switch between the client and freelancer roles. Refused while the user has an active job.",
        request_body=SwitchRoleSerializer,
        responses={
            200: openapi.Response(
                description='Role switched',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'message': openapi.Schema(type=openapi.TYPE_STRING),
                        'token': openapi.Schema(type=openapi.TYPE_STRING),
                        'user': openapi.Schema(type=openapi.TYPE_OBJECT),
                    }
                )
            ),
            400: 'Bad Request',
            403: 'Forbidden',
            409: 'Active job in progress'
        }
    )
    def post(self, request):
        serializer = SwitchRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = services.switch_role(request.user, serializer.validated_data['newRole'])
        token, created = Token.objects.get_or_create(user=user)
        return success_response(
            {"token": token.key, "user": UserSerializer(user).data}, message="Role switched successfully"
        )


class CanSwitchRoleView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Whether the authenticated user may switch role right now",
        responses={
            200: openapi.Response(
                description='Switch eligibility',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'canSwitch': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'currentRole': openapi.Schema(type=openapi.TYPE_STRING),
                        'message': openapi.Schema(type=openapi.TYPE_STRING),
                    }
                )
            ),
            401: 'Unauthorized'
        }
    )
    def get(self, request):
        can_switch = not request.user.is_admin and not services.has_active_jobs(request.user)
        if can_switch:
            message = 'You can switch roles'
        elif request.user.is_admin:
            message = 'Admins cannot switch role'
        else:
            message = 'You have active jobs. Complete them before switching role.'
        return success_response({"canSwitch": can_switch, "currentRole": request.user.role}, message=message)


class ProfileSetupView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        request_body=ProfileSetupSerializer,
        responses={200: UserSerializer, 400: 'Bad Request'}
    )
    def post(self, request):
        serializer = ProfileSetupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        user = services.setup_profile(request.user, data['fullName'], data.get('profilePhoto'))
        return success_response({"user": UserSerializer(user).data}, message="Profile setup completed successfully")


class UpdateProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Update the full name and/or profile photo",
        request_body=ProfileUpdateSerializer,
        responses={200: UserSerializer, 400: 'Bad Request'}
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        user = services.update_profile(request.user, data.get('fullName'), data.get('profilePhoto'))
        return success_response({"user": UserSerializer(user).data}, message="Profile updated successfully")


class ActiveJobsStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        responses={
            200: openapi.Response(
                description='Active job status',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'hasActiveJobs': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'canSwitchRole': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                    }
                )
            ),
            401: 'Unauthorized'
        }
    )
    def get(self, request):
        has_active = services.has_active_jobs(request.user)
        return success_response({
            "hasActiveJobs": has_active,
            "canSwitchRole": not has_active and not request.user.is_admin,
        })
