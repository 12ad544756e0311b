from rest_framework.views import APIView
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema

from core.utils import IsFreelancer, success_response
from . import services
from .serializers import FreelancerVerificationSerializer, VerificationSubmitSerializer


class SubmitVerificationView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Submit identity documents for review. A rejected submission may be sent again.",
        request_body=VerificationSubmitSerializer,
        responses={201: FreelancerVerificationSerializer, 400: 'Bad Request', 409: 'Already pending or approved'}
    )
    def post(self, request):
        serializer = VerificationSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        verification = services.submit_verification(request.user, serializer.validated_data)
        return success_response(
            {"verification": FreelancerVerificationSerializer(verification).data, "status": verification.status},
            message="Verification documents submitted successfully",
            status_code=status.HTTP_201_CREATED
        )


class VerificationStatusView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="The freelancer's verification record, or null if nothing was submitted.",
        responses={200: FreelancerVerificationSerializer}
    )
    def get(self, request):
        verification = services.get_verification_status(request.user)
        return success_response({
            "status": verification.status if verification else None,
            "verification": FreelancerVerificationSerializer(verification).data if verification else None,
        })
