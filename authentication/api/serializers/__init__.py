from .address_serializers import AddressSerializer
from .auth_serializers import LoginSerializer, UserRegistrationSerializer, UserSerializer
from .profile_serializers import ProfileUpdateSerializer


__all__ = [
    "AddressSerializer",
    "LoginSerializer",
    "ProfileUpdateSerializer",
    "UserRegistrationSerializer",
    "UserSerializer",
]
