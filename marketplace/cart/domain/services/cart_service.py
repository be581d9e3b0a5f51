"""
CartService - Shopping Cart Operations

Handles shopping cart operations: get, add-or-merge, set quantity, remove and clear.
Validates stock availability and calculates totals using InventoryService and PricingService.
"""

from typing import Dict

from django.db import DatabaseError, transaction

from marketplace.cart.domain.models.cart import Cart, CartItem
from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import cart_operations_total
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .inventory_service import InventoryService
from .pricing_service import PricingService


class CartService(BaseService):
    """
    Service for managing shopping cart operations.

    A cart line is unique per (user, product) and its quantity never exceeds
    the product's stock at write time.

    Dependencies:
    - InventoryService: Check stock availability
    - PricingService: Calculate cart totals
    """

    def __init__(self, inventory_service: InventoryService = None, pricing_service: PricingService = None):
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        self.pricing_service = pricing_service or PricingService()

    def _active_items(self, user):
        return (
            CartItem.objects.filter(cart__user=user, product__status=Product.STATUS_ACTIVE)
            .select_related("product", "product__category", "product__seller")
            .prefetch_related("product__images")
            .order_by("-added_at")
        )

    @BaseService.log_performance
    def get_cart(self, user) -> ServiceResult[Dict]:
        """
        Get user's cart lines (active products only) with a priced summary.

        Example:
            >>> result = cart_service.get_cart(user)
            >>> if result.ok:
            ...     total = result.value["summary"]["total"]
        """
        try:
            items_data = []
            lines = []
            for cart_item in self._active_items(user):
                items_data.append(
                    {
                        "id": cart_item.id,
                        "product": cart_item.product,
                        "quantity": cart_item.quantity,
                        "subtotal": cart_item.total_price,
                        "added_at": cart_item.added_at,
                    }
                )
                lines.append({"unit_price": cart_item.product.price, "quantity": cart_item.quantity})

            totals_result = self.pricing_service.calculate_order_total(lines)
            if not totals_result.ok:
                return totals_result
            totals = totals_result.value

            summary = {
                "item_count": len(items_data),
                "total_quantity": sum(item["quantity"] for item in items_data),
                "subtotal": totals["subtotal"],
                "tax": totals["tax"],
                "shipping": totals["shipping"],
                "total": totals["total"],
            }

            self.logger.info(f"Retrieved cart for user {user.id}: {len(items_data)} items")
            return service_ok({"items": items_data, "summary": summary})

        except DatabaseError as e:
            self.logger.error(f"Error getting cart for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to fetch cart")

    @BaseService.log_performance
    @transaction.atomic
    def add_to_cart(self, user, product_id, quantity: int = 1) -> ServiceResult[CartItem]:
        """
        Add a product to the cart, merging into an existing line.

        The merged quantity is re-validated against the current stock.
        """
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be greater than 0")

        try:
            product = Product.objects.select_for_update().active().get(id=product_id)
        except Product.DoesNotExist:
            cart_operations_total.labels(operation="add", status="not_found").inc()
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        if product.stock_quantity < quantity:
            cart_operations_total.labels(operation="add", status="insufficient_stock").inc()
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")

        cart = Cart.get_or_create_cart(user)
        cart_item, created = CartItem.objects.get_or_create(cart=cart, product=product, defaults={"quantity": quantity})

        if not created:
            new_quantity = cart_item.quantity + quantity
            if new_quantity > product.stock_quantity:
                cart_operations_total.labels(operation="add", status="insufficient_stock").inc()
                return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Total quantity exceeds available stock")

            cart_item.quantity = new_quantity
            cart_item.save(update_fields=["quantity", "updated_at"])
            self.logger.info(
                f"Updated cart item for user {user.id}: {product.name} quantity "
                f"{new_quantity - quantity} -> {new_quantity}"
            )
        else:
            self.logger.info(f"Added to cart for user {user.id}: {quantity}x {product.name}")

        cart_operations_total.labels(operation="add", status="success").inc()
        return service_ok(cart_item)

    @BaseService.log_performance
    @transaction.atomic
    def update_quantity(self, user, item_id, quantity: int) -> ServiceResult[CartItem]:
        """Set the quantity of one of the user's cart lines."""
        if quantity <= 0:
            return service_err(ErrorCodes.INVALID_QUANTITY, "Quantity must be greater than 0")

        try:
            cart_item = CartItem.objects.select_related("product").get(id=item_id, cart__user=user)
        except CartItem.DoesNotExist:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Cart item not found")

        try:
            product = Product.objects.select_for_update().active().get(id=cart_item.product_id)
        except Product.DoesNotExist:
            cart_operations_total.labels(operation="update", status="not_found").inc()
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        if quantity > product.stock_quantity:
            cart_operations_total.labels(operation="update", status="insufficient_stock").inc()
            return service_err(ErrorCodes.INSUFFICIENT_STOCK, "Insufficient stock")

        cart_item.quantity = quantity
        cart_item.save(update_fields=["quantity", "updated_at"])
        cart_operations_total.labels(operation="update", status="success").inc()

        self.logger.info(f"Set cart item {item_id} quantity to {quantity} for user {user.id}")
        return service_ok(cart_item)

    @BaseService.log_performance
    def remove_item(self, user, item_id) -> ServiceResult[None]:
        deleted, _ = CartItem.objects.filter(id=item_id, cart__user=user).delete()
        if not deleted:
            return service_err(ErrorCodes.ITEM_NOT_IN_CART, "Cart item not found")

        cart_operations_total.labels(operation="remove", status="success").inc()
        self.logger.info(f"Removed cart item {item_id} for user {user.id}")
        return service_ok(None)

    @BaseService.log_performance
    def clear_cart(self, user) -> ServiceResult[int]:
        deleted, _ = CartItem.objects.filter(cart__user=user).delete()
        cart_operations_total.labels(operation="clear", status="success").inc()
        self.logger.info(f"Cleared cart for user {user.id}: {deleted} items removed")
        return service_ok(deleted)
