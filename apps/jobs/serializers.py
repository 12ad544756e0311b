from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from core.constants import GENDER_PREFERENCE_CHOICES
from .models import Job, Offer


class OfferSerializer(serializers.ModelSerializer):
    jobId = serializers.IntegerField(source='job_id', read_only=True)
    freelancerId = serializers.IntegerField(source='freelancer_id', read_only=True)
    freelancer = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    respondedAt = serializers.DateTimeField(source='responded_at', read_only=True)

    class Meta:
        model = Offer
        fields = ['id', 'jobId', 'freelancerId', 'freelancer', 'amount', 'message', 'status', 'createdAt', 'respondedAt']
        read_only_fields = fields


class JobSerializer(serializers.ModelSerializer):
    clientId = serializers.IntegerField(source='client_id', read_only=True)
    gender = serializers.CharField(source='gender_preference', read_only=True)
    assignedFreelancer = UserSummarySerializer(source='assigned_freelancer', read_only=True)
    pickupMethod = serializers.CharField(source='pickup_method', read_only=True)
    agreedAmount = serializers.DecimalField(source='agreed_amount', max_digits=12, decimal_places=2, read_only=True)
    offers = OfferSerializer(many=True, read_only=True)
    assignedAt = serializers.DateTimeField(source='assigned_at', read_only=True)
    workDoneAt = serializers.DateTimeField(source='work_done_at', read_only=True)
    completedAt = serializers.DateTimeField(source='completed_at', read_only=True)
    fullyCompletedAt = serializers.DateTimeField(source='fully_completed_at', read_only=True)
    cancelledAt = serializers.DateTimeField(source='cancelled_at', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Job
        fields = [
            'id', 'clientId', 'title', 'description', 'category', 'address', 'pincode', 'budget',
            'gender', 'status', 'assignedFreelancer', 'pickupMethod', 'agreedAmount', 'offers',
            'assignedAt', 'workDoneAt', 'completedAt', 'fullyCompletedAt', 'cancelledAt',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class AvailableJobSerializer(serializers.ModelSerializer):
    """Open job as listed to freelancers; other freelancers' offers are not exposed."""
    client = UserSummarySerializer(read_only=True)
    gender = serializers.CharField(source='gender_preference', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Job
        fields = ['id', 'client', 'title', 'description', 'category', 'address', 'pincode', 'budget', 'gender', 'status', 'createdAt']
        read_only_fields = fields


class JobInputSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    category = serializers.CharField(max_length=100)
    address = serializers.CharField(max_length=300)
    pincode = serializers.CharField(max_length=10)
    budget = serializers.DecimalField(max_digits=12, decimal_places=2)
    gender = serializers.ChoiceField(choices=GENDER_PREFERENCE_CHOICES, source='gender_preference', required=False)


class OfferActionSerializer(serializers.Serializer):
    freelancerId = serializers.IntegerField(min_value=1)


class MakeOfferSerializer(serializers.Serializer):
    amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    message = serializers.CharField(required=False, allow_blank=True, default='')
    coverLetter = serializers.CharField(required=False, allow_blank=True, default='')

    def validate(self, data):
        cover_letter = data.pop('coverLetter', '')
        data['message'] = data.get('message') or cover_letter
        return data
