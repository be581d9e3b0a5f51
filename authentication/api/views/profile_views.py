from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from authentication.api.serializers import ProfileUpdateSerializer, UserSerializer
from infrastructure.container import container
from utils.api_responses import error_response, status_for_error, success_response, validation_error_response


class ProfileAPIView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="auth_profile_get",
        summary="Current user's profile",
        responses={200: UserSerializer, 401: OpenApiResponse(description="Not authenticated")},
        tags=["Authentication"],
    )
    def get(self, request):
        return success_response({"user": UserSerializer(request.user).data})

    @extend_schema(
        operation_id="auth_profile_update",
        summary="Update profile",
        description="Only the fields sent are changed: first_name, last_name, phone, profile_image.",
        request=ProfileUpdateSerializer,
        responses={
            200: UserSerializer,
            400: OpenApiResponse(description="Validation failed"),
            409: OpenApiResponse(description="Phone number already in use"),
        },
        tags=["Authentication"],
    )
    def put(self, request):
        serializer = ProfileUpdateSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = container.auth_service().update_profile(request.user, serializer.validated_data)
        if not result.success:
            return error_response(result.error, status_code=status_for_error(result.error_code), errors=result.errors)

        return success_response({"user": UserSerializer(result.user).data}, message=result.message)
