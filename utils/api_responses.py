"""
Response envelope shared by every API view.

Every JSON response has the shape ``{success, message?, data?, errors?}``.
Views build successful responses with ``success_response`` and translate failed
ServiceResults with ``error_from_result``; framework exceptions are wrapped by
``envelope_exception_handler`` (configured as DRF's EXCEPTION_HANDLER).
"""

import logging

from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from utils.service_base import ErrorCodes, ServiceResult

logger = logging.getLogger(__name__)


ERROR_STATUS_MAP = {
    # 400
    ErrorCodes.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INVALID_QUANTITY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.CART_EMPTY: status.HTTP_400_BAD_REQUEST,
    ErrorCodes.INSUFFICIENT_STOCK: status.HTTP_400_BAD_REQUEST,
    # 401
    ErrorCodes.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    # 403
    ErrorCodes.ACCOUNT_DEACTIVATED: status.HTTP_403_FORBIDDEN,
    ErrorCodes.PERMISSION_DENIED: status.HTTP_403_FORBIDDEN,
    # 404
    ErrorCodes.PRODUCT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.CATEGORY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ITEM_NOT_IN_CART: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ORDER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.ADDRESS_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.REVIEW_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCodes.FAVORITE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409
    ErrorCodes.EMAIL_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCodes.PHONE_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCodes.DUPLICATE_REVIEW: status.HTTP_409_CONFLICT,
    ErrorCodes.ALREADY_FAVORITED: status.HTTP_409_CONFLICT,
    ErrorCodes.ADDRESS_IN_USE: status.HTTP_409_CONFLICT,
    # 500
    ErrorCodes.ORDER_NUMBER_EXHAUSTED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCodes.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCodes.DATABASE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

GENERIC_SERVER_ERROR = "Internal server error"


def status_for_error(error_code: str) -> int:
    return ERROR_STATUS_MAP.get(error_code, status.HTTP_500_INTERNAL_SERVER_ERROR)


def build_envelope(success: bool, message=None, data=None, errors=None) -> dict:
    body = {"success": success}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    return body


def success_response(data=None, message=None, status_code=status.HTTP_200_OK) -> Response:
    return Response(build_envelope(True, message=message, data=data), status=status_code)


def paginated_data(key: str, items, page) -> dict:
    """``{key: items, pagination: {page, limit, total, pages}}`` for a utils.pagination.Page"""
    return {key: items, "pagination": page.meta()}


def error_response(message, status_code=status.HTTP_400_BAD_REQUEST, errors=None) -> Response:
    return Response(build_envelope(False, message=message, errors=errors), status=status_code)


def error_from_result(result: ServiceResult) -> Response:
    """Render a failed ServiceResult, hiding internal details behind 5xx statuses."""
    status_code = status_for_error(result.error)
    message = result.error_detail
    if status_code >= 500:
        message = GENERIC_SERVER_ERROR
    return error_response(message, status_code=status_code)


def validation_error_response(errors) -> Response:
    return error_response("Validation failed", status_code=status.HTTP_400_BAD_REQUEST, errors=errors)


def envelope_exception_handler(exc, context):
    """
    DRF exception handler producing the standard envelope.

    Framework exceptions keep their status code; anything DRF does not know how
    to handle is logged and reported as a generic 500 without internals.
    """
    response = exception_handler(exc, context)

    if response is None:
        view = context.get("view")
        logger.error(
            f"Unhandled exception in {view.__class__.__name__ if view else 'unknown view'}: {exc}",
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return error_response(GENERIC_SERVER_ERROR, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if isinstance(exc, exceptions.ValidationError):
        response.data = build_envelope(False, message="Validation failed", errors=response.data)
        return response

    detail = response.data.get("detail") if isinstance(response.data, dict) else None
    response.data = build_envelope(False, message=str(detail) if detail else GENERIC_SERVER_ERROR)
    return response
