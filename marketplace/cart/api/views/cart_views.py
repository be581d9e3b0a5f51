from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated

from infrastructure.container import container
from marketplace.cart.api.serializers.cart_serializers import (
    AddToCartSerializer,
    CartItemSerializer,
    CartServiceOutputSerializer,
    UpdateCartItemSerializer,
)
from marketplace.cart.domain.services.cart_service import CartService
from utils.api_responses import error_from_result, success_response, validation_error_response


class CartViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> CartService:
        return container.cart_service()

    @extend_schema(
        operation_id="cart_get",
        summary="Get user's shopping cart",
        description="""
        **What it returns:**
        - Cart lines for active products, each with its subtotal
        - Summary: item_count, total_quantity, subtotal, tax, shipping, total
        """,
        responses={200: CartServiceOutputSerializer, 401: OpenApiResponse(description="Not authenticated")},
        tags=["Marketplace - Cart"],
    )
    def list(self, request):
        result = self.get_service().get_cart(request.user)
        if not result.ok:
            return error_from_result(result)
        return success_response(CartServiceOutputSerializer(result.value).data)

    @extend_schema(
        operation_id="cart_add_item",
        summary="Add item to cart",
        description="""
        **What it receives:**
        - `product_id` (UUID): Product to add
        - `quantity` (integer, optional): Quantity to add (default: 1)

        Adding a product already in the cart increases that line's quantity.
        """,
        request=AddToCartSerializer,
        responses={
            201: CartItemSerializer,
            400: OpenApiResponse(description="Invalid quantity or insufficient stock"),
            404: OpenApiResponse(description="Product not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def create(self, request):
        serializer = AddToCartSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().add_to_cart(
            request.user, serializer.validated_data["product_id"], serializer.validated_data["quantity"]
        )
        if not result.ok:
            return error_from_result(result)

        return success_response(
            {"item": CartItemSerializer(result.value).data},
            message="Item added to cart",
            status_code=status.HTTP_201_CREATED,
        )

    @extend_schema(
        operation_id="cart_update_item",
        summary="Set the quantity of a cart line",
        request=UpdateCartItemSerializer,
        responses={
            200: CartItemSerializer,
            400: OpenApiResponse(description="Invalid quantity or insufficient stock"),
            404: OpenApiResponse(description="Cart item not found"),
        },
        tags=["Marketplace - Cart"],
    )
    def update(self, request, pk=None):
        serializer = UpdateCartItemSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_quantity(request.user, pk, serializer.validated_data["quantity"])
        if not result.ok:
            return error_from_result(result)
        return success_response({"item": CartItemSerializer(result.value).data}, message="Cart updated")

    @extend_schema(
        operation_id="cart_remove_item",
        summary="Remove a cart line",
        responses={200: OpenApiResponse(description="Item removed"), 404: OpenApiResponse(description="Not found")},
        tags=["Marketplace - Cart"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().remove_item(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response(message="Item removed from cart")

    @extend_schema(
        operation_id="cart_clear",
        summary="Empty the cart",
        responses={200: OpenApiResponse(description="Cart cleared")},
        tags=["Marketplace - Cart"],
    )
    def clear(self, request):
        result = self.get_service().clear_cart(request.user)
        if not result.ok:
            return error_from_result(result)
        return success_response({"removed": result.value}, message="Cart cleared")
