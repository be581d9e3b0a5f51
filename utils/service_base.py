"""
Base classes and utilities for the service layer.

This module provides the ServiceResult pattern (inspired by Rust's Result type)
and the BaseService class shared by the authentication and marketplace services.

Guidelines
- Return structured results instead of raising for expected outcomes.
- Reserve exceptions for truly exceptional scenarios, or for aborting a
  transaction.atomic() block that must roll back.
"""

import logging
import time
from dataclasses import dataclass
from functools import wraps
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class ServiceResult(Generic[T]):
    """
    A result type that encapsulates success or failure from service operations.

    Attributes:
        ok: True if operation succeeded, False otherwise
        value: The success value (present if ok=True)
        error: Error code from ErrorCodes (present if ok=False)
        error_detail: Human-readable error message (present if ok=False)

    Examples:
        >>> result = service_ok(product)
        >>> if result.ok:
        ...     return success_response(ProductSerializer(result.value).data)

        >>> result = service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
        >>> print(result.error)  # "product_not_found"
    """

    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_detail: Optional[str] = None


def service_ok(value: T = None) -> ServiceResult[T]:
    """
    Create a successful ServiceResult.

    Example:
        >>> product = Product.objects.get(id=product_id)
        >>> return service_ok(product)
    """
    return ServiceResult(ok=True, value=value)


def service_err(error: str, error_detail: str = "") -> ServiceResult:
    """
    Create a failed ServiceResult.

    Args:
        error: Error code (e.g., "product_not_found", "invalid_quantity")
        error_detail: Human-readable error message

    Example:
        >>> return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")
    """
    return ServiceResult(ok=False, error=error, error_detail=error_detail or error)


class BaseService:
    """
    Base class for all services providing common functionality.

    Provides:
    - Logging with class name
    - Performance timing decorator

    Usage:
        class CatalogService(BaseService):
            @BaseService.log_performance
            def list_products(self, filters):
                self.logger.info(f"Listing products with filters: {filters}")
    """

    def __init__(self):
        """Initialize base service with logger."""
        self.logger = logging.getLogger(self.__class__.__module__ + "." + self.__class__.__name__)

    @staticmethod
    def log_performance(func: Callable) -> Callable:
        """
        Decorator to log performance of service methods.

        Logs execution time, failed ServiceResults and any exception raised.
        """

        @wraps(func)
        def wrapper(self, *args, **kwargs):
            start_time = time.time()
            method_name = f"{self.__class__.__name__}.{func.__name__}"

            try:
                self.logger.debug(f"{method_name} started")
                result = func(self, *args, **kwargs)
                elapsed_time = (time.time() - start_time) * 1000  # Convert to ms

                if isinstance(result, ServiceResult):
                    if result.ok:
                        self.logger.info(f"{method_name} completed successfully in {elapsed_time:.2f}ms")
                    else:
                        self.logger.warning(
                            f"{method_name} failed with error '{result.error}' in {elapsed_time:.2f}ms"
                        )
                else:
                    self.logger.info(f"{method_name} completed in {elapsed_time:.2f}ms")

                return result

            except Exception as e:
                elapsed_time = (time.time() - start_time) * 1000
                self.logger.error(
                    f"{method_name} raised exception after {elapsed_time:.2f}ms: {str(e)}",
                    exc_info=True,
                )
                raise

        return wrapper


class ErrorCodes:
    """Standard error codes used across services."""

    # Auth errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_DEACTIVATED = "account_deactivated"
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    PHONE_ALREADY_EXISTS = "phone_already_exists"

    # Product errors
    PRODUCT_NOT_FOUND = "product_not_found"
    CATEGORY_NOT_FOUND = "category_not_found"

    # Cart errors
    CART_EMPTY = "cart_empty"
    INVALID_QUANTITY = "invalid_quantity"
    ITEM_NOT_IN_CART = "item_not_in_cart"

    # Order errors
    ORDER_NOT_FOUND = "order_not_found"
    ORDER_NUMBER_EXHAUSTED = "order_number_exhausted"

    # Inventory errors
    INSUFFICIENT_STOCK = "insufficient_stock"

    # Address errors
    ADDRESS_NOT_FOUND = "address_not_found"
    ADDRESS_IN_USE = "address_in_use"

    # Review and favorite errors
    REVIEW_NOT_FOUND = "review_not_found"
    DUPLICATE_REVIEW = "duplicate_review"
    FAVORITE_NOT_FOUND = "favorite_not_found"
    ALREADY_FAVORITED = "already_favorited"

    # Permission errors
    PERMISSION_DENIED = "permission_denied"

    # Validation errors
    VALIDATION_ERROR = "validation_error"
    INVALID_INPUT = "invalid_input"

    # Internal errors
    INTERNAL_ERROR = "internal_error"
    DATABASE_ERROR = "database_error"
