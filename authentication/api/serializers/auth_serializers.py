from django.contrib.auth import get_user_model
from rest_framework import serializers


User = get_user_model()

REGISTRATION_ROLES = [User.ROLE_BUYER, User.ROLE_SELLER, User.ROLE_BOTH]


class UserSerializer(serializers.ModelSerializer):
    is_seller = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = [
            "id",
            "email",
            "first_name",
            "last_name",
            "phone",
            "role",
            "is_seller",
            "is_verified",
            "profile_image",
            "date_joined",
        ]
        read_only_fields = fields

    def get_is_seller(self, obj):
        return obj.is_seller()


class UserRegistrationSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=6, style={"input_type": "password"})
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True, allow_null=True)
    user_type = serializers.ChoiceField(choices=REGISTRATION_ROLES, default=User.ROLE_BUYER)

    def validate_email(self, value):
        return value.strip().lower()


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})
