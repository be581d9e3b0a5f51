from utils.service_base import ErrorCodes


class OrderPlacementError(Exception):
    """Base class for failures that abort the order placement transaction."""

    error_code = ErrorCodes.INTERNAL_ERROR
    default_message = "Failed to create order"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class EmptyCartError(OrderPlacementError):
    """Raised when the buyer has no active cart lines."""

    error_code = ErrorCodes.CART_EMPTY
    default_message = "Cart is empty"


class InsufficientStockError(OrderPlacementError):
    """Raised when a cart line asks for more than the product has in stock."""

    error_code = ErrorCodes.INSUFFICIENT_STOCK

    def __init__(self, product_name, available, requested):
        self.product_name = product_name
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient stock for {product_name}. Available: {available}, Requested: {requested}"
        )


class ShippingAddressNotFoundError(OrderPlacementError):
    """Raised when the requested shipping address does not belong to the buyer."""

    error_code = ErrorCodes.ADDRESS_NOT_FOUND
    default_message = "Shipping address not found"


class OrderNumberExhaustedError(OrderPlacementError):
    """Raised when no unique order number could be generated."""

    error_code = ErrorCodes.ORDER_NUMBER_EXHAUSTED
    default_message = "Could not generate a unique order number"
