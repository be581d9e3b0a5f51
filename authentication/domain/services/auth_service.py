"""
AuthService - Core Authentication Business Logic.

Registration, login and profile maintenance. Tokens are simplejwt refresh/access
pairs carrying the user id and role.
"""

import logging
from typing import Dict, Optional

from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction

from authentication.api.serializers.jwt_serializers import CustomRefreshToken
from authentication.domain.models.seller import SellerProfile
from utils.service_base import ErrorCodes

from .results import LoginResult, RegisterResult


User = get_user_model()
logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "phone", "profile_image")


class AuthService:
    """
    Authentication service encapsulating all auth business logic.
    """

    def _issue_tokens(self, user):
        refresh = CustomRefreshToken.for_user(user)
        return str(refresh.access_token), str(refresh)

    def login(self, email: str, password: str) -> LoginResult:
        """
        Authenticate user with email/password.

        Business Logic:
        1. Look the user up by email (case-insensitive)
        2. Reject deactivated accounts before checking the password
        3. Verify password
        4. Generate JWT tokens
        """
        if not email or not password:
            return LoginResult(
                success=False, error="Email and password are required.", error_code=ErrorCodes.VALIDATION_ERROR
            )

        user = User.objects.filter(email__iexact=email.strip()).first()
        if user is None:
            logger.info(f"Login failed for {email}: no such user")
            return LoginResult(success=False, error="Invalid credentials", error_code=ErrorCodes.INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info(f"Login refused for deactivated user {user.id}")
            return LoginResult(
                success=False, error="Account is deactivated", error_code=ErrorCodes.ACCOUNT_DEACTIVATED
            )

        if not user.check_password(password):
            logger.info(f"Login failed for user {user.id}: wrong password")
            return LoginResult(success=False, error="Invalid credentials", error_code=ErrorCodes.INVALID_CREDENTIALS)

        access_token, refresh_token = self._issue_tokens(user)
        logger.info(f"User {user.id} logged in")
        return LoginResult(
            success=True,
            user=user,
            access_token=access_token,
            refresh_token=refresh_token,
            message="Login successful",
        )

    def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        phone: Optional[str] = None,
        user_type: str = User.ROLE_BUYER,
    ) -> RegisterResult:
        """
        Register a new, immediately active user.

        Sellers (user_type "seller" or "both") also get a seller profile named
        after them. Returns tokens so the client is signed in right away.
        """
        email = User.objects.normalize_email(email).lower()
        phone = phone or None

        if User.objects.filter(email__iexact=email).exists():
            return RegisterResult(
                success=False,
                error="User already exists with this email",
                error_code=ErrorCodes.EMAIL_ALREADY_EXISTS,
                errors={"email": "User already exists with this email"},
            )
        if phone and User.objects.filter(phone=phone).exists():
            return RegisterResult(
                success=False,
                error="User already exists with this phone number",
                error_code=ErrorCodes.PHONE_ALREADY_EXISTS,
                errors={"phone": "User already exists with this phone number"},
            )

        try:
            with transaction.atomic():
                user = User.objects.create_user(
                    username=email,
                    email=email,
                    password=password,
                    first_name=first_name,
                    last_name=last_name,
                    phone=phone,
                    role=user_type,
                )
                if user.is_seller():
                    SellerProfile.objects.create(user=user, business_name=SellerProfile.default_business_name(user))
        except IntegrityError:
            logger.warning(f"Registration race for {email}", exc_info=True)
            return RegisterResult(
                success=False, error="User already exists", error_code=ErrorCodes.EMAIL_ALREADY_EXISTS
            )

        access_token, refresh_token = self._issue_tokens(user)
        logger.info(f"Registered user {user.id} as {user.role}")
        return RegisterResult(
            success=True,
            user=user,
            access_token=access_token,
            refresh_token=refresh_token,
            message="User registered successfully",
        )

    def update_profile(self, user, data: Dict) -> RegisterResult:
        """Update the editable profile fields present in data."""
        phone = data.get("phone")
        if phone and User.objects.filter(phone=phone).exclude(pk=user.pk).exists():
            return RegisterResult(
                success=False,
                error="Phone number already in use",
                error_code=ErrorCodes.PHONE_ALREADY_EXISTS,
                errors={"phone": "Phone number already in use"},
            )

        updated_fields = []
        for field in PROFILE_FIELDS:
            if field in data:
                value = data[field]
                if field == "phone":
                    value = value or None
                setattr(user, field, value)
                updated_fields.append(field)

        if updated_fields:
            user.save(update_fields=updated_fields + ["updated_at"])
            logger.info(f"User {user.id} updated profile fields {updated_fields}")

        return RegisterResult(success=True, user=user, message="Profile updated successfully")
