from .address_views import AddressDefaultAPIView, AddressDetailAPIView, AddressListCreateAPIView
from .auth_views import EnvelopeTokenRefreshView, LoginAPIView, RegisterAPIView
from .profile_views import ProfileAPIView


__all__ = [
    "AddressDefaultAPIView",
    "AddressDetailAPIView",
    "AddressListCreateAPIView",
    "EnvelopeTokenRefreshView",
    "LoginAPIView",
    "ProfileAPIView",
    "RegisterAPIView",
]
