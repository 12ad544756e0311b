from rest_framework.views import APIView
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from core.utils import IsClient, IsFreelancer, success_response
from . import services
from .serializers import (
    JobSerializer, AvailableJobSerializer, OfferSerializer, JobInputSerializer,
    OfferActionSerializer, MakeOfferSerializer,
)

import logging

logger = logging.getLogger(__name__)

job_response = openapi.Response(
    description='Job',
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
            'message': openapi.Schema(type=openapi.TYPE_STRING),
            'job': openapi.Schema(type=openapi.TYPE_OBJECT),
        }
    )
)

jobs_response = openapi.Response(
    description='List of jobs',
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            'success': openapi.Schema(type=openapi.TYPE_BOOLEAN),
            'jobs': openapi.Schema(type=openapi.TYPE_ARRAY, items=openapi.Schema(type=openapi.TYPE_OBJECT)),
        }
    )
)


class JobCreateView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Post a new job. Budget must be at least 10 and pincode exactly 6 digits.",
        request_body=JobInputSerializer,
        responses={201: job_response, 400: 'Bad Request', 401: 'Unauthorized', 403: 'Forbidden'}
    )
    def post(self, request):
        serializer = JobInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job = services.post_job(request.user, serializer.validated_data)
        return success_response(
            {"job": JobSerializer(job).data},
            message="Job posted successfully",
            status_code=status.HTTP_201_CREATED
        )


class ClientActiveJobsView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Client's jobs that are still in progress (open, assigned or work done).",
        responses={200: jobs_response, 401: 'Unauthorized'}
    )
    def get(self, request):
        jobs = services.client_active_jobs(request.user)
        return success_response({"jobs": JobSerializer(jobs, many=True).data})


class ClientJobHistoryView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Client's completed, fully completed and cancelled jobs.",
        responses={200: jobs_response, 401: 'Unauthorized'}
    )
    def get(self, request):
        jobs = services.client_job_history(request.user)
        return success_response({"jobs": JobSerializer(jobs, many=True).data})


class ClientJobDetailView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Retrieve a job owned by the client, with its offers.",
        responses={200: job_response, 404: 'Not Found'}
    )
    def get(self, request, id):
        job = services.get_client_job(id, request.user)
        return success_response({"job": JobSerializer(job).data})

    @swagger_auto_schema(
        operation_description="Edit a job. Only allowed while the job is open and has no accepted offer.",
        request_body=JobInputSerializer,
        responses={200: job_response, 400: 'Bad Request', 404: 'Not Found', 409: 'Conflict'}
    )
    def put(self, request, id):
        serializer = JobInputSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        job = services.update_job(id, request.user, serializer.validated_data)
        return success_response({"job": JobSerializer(job).data}, message="Job updated successfully")

    @swagger_auto_schema(
        operation_description="Delete a job. Only allowed while the job is open and has no accepted offer.",
        responses={200: 'Deleted', 404: 'Not Found', 409: 'Conflict'}
    )
    def delete(self, request, id):
        services.delete_job(id, request.user)
        return success_response(message="Job deleted successfully")


class AcceptOfferView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Accept a freelancer's pending offer. The job becomes assigned to that freelancer.",
        request_body=OfferActionSerializer,
        responses={200: job_response, 404: 'Not Found', 409: 'Job is no longer open'}
    )
    def post(self, request, job_id):
        serializer = OfferActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job, offer = services.accept_offer(job_id, serializer.validated_data['freelancerId'], request.user)
        return success_response(
            {"job": JobSerializer(job).data, "offer": OfferSerializer(offer).data},
            message="Offer accepted successfully"
        )


class RejectOfferView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Reject a freelancer's pending offers on an open job.",
        request_body=OfferActionSerializer,
        responses={200: 'Offer rejected', 404: 'Not Found', 409: 'Job is no longer open'}
    )
    def post(self, request, job_id):
        serializer = OfferActionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        job, offers = services.reject_offer(job_id, serializer.validated_data['freelancerId'], request.user)
        return success_response(
            {"offers": OfferSerializer(offers, many=True).data},
            message="Offer rejected successfully"
        )


class ClientCompleteJobView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Confirm a paid job as fully completed.",
        responses={200: job_response, 403: 'Forbidden', 409: 'Conflict'}
    )
    def post(self, request, id):
        job = services.confirm_full_completion(id, request.user)
        return success_response({"job": JobSerializer(job).data}, message="Job marked as fully completed")


class ClientCancelJobView(APIView):
    permission_classes = [IsAuthenticated, IsClient]

    @swagger_auto_schema(
        operation_description="Cancel an open job that has no accepted offer.",
        responses={200: job_response, 404: 'Not Found', 409: 'Conflict'}
    )
    def post(self, request, id):
        job = services.cancel_job(id, request.user)
        return success_response({"job": JobSerializer(job).data}, message="Job cancelled successfully")


class AvailableJobsView(APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        operation_description="Open jobs accepting offers.",
        manual_parameters=[
            openapi.Parameter('category', openapi.IN_QUERY, type=openapi.TYPE_STRING),
            openapi.Parameter('pincode', openapi.IN_QUERY, type=openapi.TYPE_STRING),
        ],
        responses={200: jobs_response}
    )
    def get(self, request):
        jobs = services.available_jobs(
            category=request.query_params.get('category'),
            pincode=request.query_params.get('pincode'),
        )
        return success_response({"jobs": AvailableJobSerializer(jobs, many=True).data})


class FreelancerAssignedJobsView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Jobs assigned to the freelancer.",
        responses={200: jobs_response}
    )
    def get(self, request):
        jobs = services.freelancer_assigned_jobs(request.user)
        return success_response({"jobs": AvailableJobSerializer(jobs, many=True).data})


class PickupJobView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Take an open job directly, without an offer.",
        responses={200: job_response, 404: 'Not Found', 409: 'Job is no longer open'}
    )
    def post(self, request, job_id):
        job = services.pickup_job(job_id, request.user)
        return success_response({"job": AvailableJobSerializer(job).data}, message="Job picked up successfully")


class MakeOfferView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Offer a price for an open job. Limited to one offer per job every 5 minutes.",
        request_body=MakeOfferSerializer,
        responses={
            201: OfferSerializer,
            400: 'Bad Request',
            404: 'Not Found',
            409: 'Job is not accepting offers',
            429: 'Cooldown active, see retryAfterMs'
        }
    )
    def post(self, request, job_id):
        serializer = MakeOfferSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        offer = services.make_offer(
            job_id, request.user,
            serializer.validated_data['amount'],
            serializer.validated_data['message'],
        )
        return success_response(
            {"jobId": offer.job_id, "offer": OfferSerializer(offer).data},
            message="Offer submitted successfully",
            status_code=status.HTTP_201_CREATED
        )


class OfferCooldownView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Whether the freelancer can offer on the job now, and how long until they can.",
        responses={
            200: openapi.Response(
                description='Cooldown status',
                schema=openapi.Schema(
                    type=openapi.TYPE_OBJECT,
                    properties={
                        'canMakeOffer': openapi.Schema(type=openapi.TYPE_BOOLEAN),
                        'remainingMs': openapi.Schema(type=openapi.TYPE_INTEGER),
                    }
                )
            )
        }
    )
    def get(self, request, job_id):
        return success_response(services.check_cooldown_status(job_id, request.user))


class MarkWorkDoneView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Mark an assigned job as done. The client is asked to pay.",
        responses={200: job_response, 403: 'Forbidden', 409: 'Conflict'}
    )
    def post(self, request, job_id):
        job = services.mark_work_done(job_id, request.user)
        return success_response({"job": AvailableJobSerializer(job).data}, message="Job marked as complete successfully")


class FreelancerConfirmCompletionView(APIView):
    permission_classes = [IsAuthenticated, IsFreelancer]

    @swagger_auto_schema(
        operation_description="Confirm receipt of payment for a completed job.",
        responses={200: job_response, 403: 'Forbidden', 409: 'Conflict'}
    )
    def post(self, request, job_id):
        job = services.confirm_full_completion(job_id, request.user)
        return success_response({"job": AvailableJobSerializer(job).data}, message="Job marked as fully completed")
