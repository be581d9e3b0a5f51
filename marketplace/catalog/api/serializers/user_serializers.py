from django.contrib.auth import get_user_model
from rest_framework import serializers


User = get_user_model()


class SellerSummarySerializer(serializers.ModelSerializer):
    """Minimal seller info shown on product cards and detail"""

    business_name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "business_name"]
        read_only_fields = fields

    def get_business_name(self, obj):
        profile = getattr(obj, "seller_profile", None)
        return profile.business_name if profile else None


class ReviewerSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ["id", "first_name", "last_name", "profile_image"]
        read_only_fields = fields
