from drf_spectacular.utils import OpenApiExample, OpenApiResponse, extend_schema
from rest_framework import permissions, status
from rest_framework.views import APIView
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.api.serializers import LoginSerializer, UserRegistrationSerializer, UserSerializer
from authentication.domain.services.auth_service import AuthService
from infrastructure.container import container
from utils.api_responses import error_response, status_for_error, success_response, validation_error_response


def get_auth_service() -> AuthService:
    return container.auth_service()


def _token_payload(result):
    return {
        "user": UserSerializer(result.user).data,
        "token": result.access_token,
        "refresh": result.refresh_token,
    }


class RegisterAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register a new account",
        description="""
        Create a buyer, seller or combined account. Sellers get a seller profile
        named after them. The response carries tokens so the client is signed in
        right away.
        """,
        request=UserRegistrationSerializer,
        responses={
            201: OpenApiResponse(description="User registered successfully"),
            400: OpenApiResponse(description="Validation failed"),
            409: OpenApiResponse(description="Email or phone already registered"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = UserRegistrationSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        result = get_auth_service().register(
            email=data["email"],
            password=data["password"],
            first_name=data["first_name"],
            last_name=data["last_name"],
            phone=data.get("phone"),
            user_type=data["user_type"],
        )
        if not result.success:
            return error_response(result.error, status_code=status_for_error(result.error_code), errors=result.errors)

        return success_response(_token_payload(result), message=result.message, status_code=status.HTTP_201_CREATED)


class LoginAPIView(APIView):
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Login with email and password",
        request=LoginSerializer,
        responses={
            200: OpenApiResponse(
                description="Login successful",
                examples=[
                    OpenApiExample(
                        "Successful Login",
                        value={
                            "success": True,
                            "message": "Login successful",
                            "data": {
                                "user": {"id": "123e4567-e89b-12d3-a456-426614174000", "email": "grower@example.com"},
                                "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                                "refresh": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                            },
                        },
                    )
                ],
            ),
            401: OpenApiResponse(description="Invalid credentials"),
            403: OpenApiResponse(description="Account is deactivated"),
        },
        tags=["Authentication"],
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = get_auth_service().login(serializer.validated_data["email"], serializer.validated_data["password"])
        if not result.success:
            return error_response(result.error, status_code=status_for_error(result.error_code))

        return success_response(_token_payload(result), message=result.message)


class EnvelopeTokenRefreshView(TokenRefreshView):
    """simplejwt refresh, answered in the standard envelope"""

    @extend_schema(operation_id="auth_token_refresh", summary="Exchange a refresh token", tags=["Authentication"])
    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        return success_response({"token": response.data["access"], **response.data})
