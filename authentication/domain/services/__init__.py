from .address_service import AddressService
from .auth_service import AuthService

__all__ = [
    "AddressService",
    "AuthService",
]
