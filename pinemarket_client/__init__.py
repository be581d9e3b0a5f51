from .client import DEFAULT_TIMEOUT, MarketplaceClient
from .exceptions import ApiError


__all__ = ["ApiError", "DEFAULT_TIMEOUT", "MarketplaceClient"]
