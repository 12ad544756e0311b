from rest_framework import serializers

from apps.users.serializers import UserSummarySerializer
from .models import FreelancerVerification


class FreelancerVerificationSerializer(serializers.ModelSerializer):
    user = UserSummarySerializer(read_only=True)
    fullName = serializers.CharField(source='full_name', read_only=True)
    aadhaarFront = serializers.CharField(source='aadhaar_front', read_only=True)
    aadhaarBack = serializers.CharField(source='aadhaar_back', read_only=True)
    panCard = serializers.CharField(source='pan_card', read_only=True)
    profilePhoto = serializers.CharField(source='profile_photo', read_only=True)
    rejectionReason = serializers.CharField(source='rejection_reason', read_only=True)
    reviewedAt = serializers.DateTimeField(source='reviewed_at', read_only=True)
    reviewedBy = serializers.IntegerField(source='reviewed_by_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = FreelancerVerification
        fields = [
            'id', 'user', 'fullName', 'dob', 'gender', 'address', 'aadhaarFront', 'aadhaarBack',
            'panCard', 'profilePhoto', 'status', 'rejectionReason', 'reviewedAt', 'reviewedBy',
            'createdAt', 'updatedAt',
        ]
        read_only_fields = fields


class VerificationSubmitSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=150, source='full_name')
    dob = serializers.DateField(required=False)
    dateOfBirth = serializers.DateField(required=False, write_only=True)
    gender = serializers.CharField(max_length=20)
    address = serializers.CharField()
    aadhaarFront = serializers.CharField(max_length=500, source='aadhaar_front', required=False, allow_null=True, allow_blank=True)
    aadhaarBack = serializers.CharField(max_length=500, source='aadhaar_back', required=False, allow_null=True, allow_blank=True)
    panCard = serializers.CharField(max_length=500, source='pan_card', required=False, allow_null=True, allow_blank=True)
    profilePhoto = serializers.CharField(max_length=500, source='profile_photo', required=False, allow_null=True, allow_blank=True)

    def validate(self, data):
        date_of_birth = data.pop('dateOfBirth', None)
        data['dob'] = data.get('dob') or date_of_birth
        if not data['dob']:
            raise serializers.ValidationError({'dob': 'Date of birth is required.'})
        return data


class ReviewReasonSerializer(serializers.Serializer):
    reason = serializers.CharField(allow_blank=True, required=False, default='')
