from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import AuthenticationFailed, PermissionDenied
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings


class ActiveAccountJWTAuthentication(JWTAuthentication):
    """
    Bearer token authentication.

    Missing users and bad tokens are 401; a valid token for a deactivated
    account is 403.
    """

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken(_("Token contained no recognizable user identification"))

        try:
            user = self.user_model.objects.get(**{api_settings.USER_ID_FIELD: user_id})
        except (self.user_model.DoesNotExist, DjangoValidationError, ValueError):
            raise AuthenticationFailed(_("User not found"), code="user_not_found")

        if not user.is_active:
            raise PermissionDenied(_("Account is deactivated"))

        return user


class OptionalJWTAuthentication(ActiveAccountJWTAuthentication):
    """For public endpoints: an unusable token means an anonymous request."""

    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (AuthenticationFailed, InvalidToken, PermissionDenied):
            return None
