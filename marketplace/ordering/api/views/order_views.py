from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.ordering.api.serializers.order_serializers import (
    OrderListSerializer,
    OrderSerializer,
    PlaceOrderSerializer,
)
from marketplace.ordering.domain.services.order_service import OrderService
from utils.api_responses import error_from_result, paginated_data, success_response, validation_error_response
from utils.pagination import parse_pagination


class OrderViewSet(viewsets.ViewSet):
    """Checkout and the buyer's order history."""

    permission_classes = [IsAuthenticated]
    lookup_value_regex = "[0-9a-f-]{36}"

    def get_service(self) -> OrderService:
        return container.order_service()

    @extend_schema(
        operation_id="orders_list",
        summary="List my orders",
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, OpenApiParameter.QUERY),
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: OrderListSerializer(many=True)},
        tags=["Marketplace - Orders"],
    )
    def list(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=10)
        result = self.get_service().list_orders(
            request.user, page=page, limit=limit, status=request.query_params.get("status")
        )
        if not result.ok:
            return error_from_result(result)

        orders = OrderListSerializer(result.value.items, many=True).data
        return success_response(paginated_data("orders", orders, result.value))

    @extend_schema(
        operation_id="orders_retrieve",
        summary="Order detail",
        responses={200: OrderSerializer, 404: OpenApiResponse(description="Order not found")},
        tags=["Marketplace - Orders"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_order(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response({"order": OrderSerializer(result.value).data})

    @extend_schema(
        operation_id="orders_create",
        summary="Place an order from the cart",
        description="""
        **What it receives:**
        - `payment_method`: cash_on_delivery, bank_transfer, card or ewallet
        - `shipping_address_id` (optional): one of the buyer's addresses; the
          default address is used when omitted
        - `notes` (optional)

        **What it does:**
        Prices the cart (subtotal, flat shipping fee, tax), creates the order with
        its items, deducts stock and empties the cart in one transaction.
        """,
        request=PlaceOrderSerializer,
        responses={
            201: OrderSerializer,
            400: OpenApiResponse(description="Empty cart, insufficient stock or invalid input"),
            404: OpenApiResponse(description="Shipping address not found"),
        },
        tags=["Marketplace - Orders"],
    )
    def create(self, request):
        serializer = PlaceOrderSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().place_order(
            request.user,
            payment_method=data["payment_method"],
            shipping_address_id=data.get("shipping_address_id"),
            notes=data.get("notes", ""),
        )
        if not result.ok:
            return error_from_result(result)

        return success_response(
            {"order": OrderSerializer(result.value).data},
            message="Order created successfully",
            status_code=status.HTTP_201_CREATED,
        )
