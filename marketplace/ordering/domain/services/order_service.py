"""
OrderService - Order Placement and History

Converts the buyer's cart into an immutable order inside a single database
transaction, and serves the buyer's order history.
"""

import time
from typing import Optional

from django.conf import settings
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Count

from authentication.domain.models.address import Address
from authentication.domain.services.address_service import AddressService
from marketplace.cart.domain.models.cart import CartItem
from marketplace.cart.domain.services.inventory_service import InventoryService
from marketplace.cart.domain.services.pricing_service import PricingService
from marketplace.catalog.domain.models.catalog import Product
from marketplace.infra.observability.metrics import (
    order_number_collisions_total,
    order_placement_duration,
    order_value,
    orders_placed_total,
)
from marketplace.ordering.domain.exceptions import (
    EmptyCartError,
    InsufficientStockError,
    OrderNumberExhaustedError,
    OrderPlacementError,
    ShippingAddressNotFoundError,
)
from marketplace.ordering.domain.models.order import Order, OrderItem
from marketplace.ordering.domain.order_numbers import generate_order_number
from utils.pagination import Page, paginate
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class OrderService(BaseService):
    """
    Service for placing orders and reading order history.

    Dependencies:
    - InventoryService: Row locks and stock deduction
    - PricingService: Subtotal, tax, shipping and total
    - AddressService: Default and placeholder shipping addresses
    """

    def __init__(
        self,
        inventory_service: InventoryService = None,
        pricing_service: PricingService = None,
        address_service: AddressService = None,
    ):
        super().__init__()
        self.inventory_service = inventory_service or InventoryService()
        self.pricing_service = pricing_service or PricingService()
        self.address_service = address_service or AddressService()

    @BaseService.log_performance
    def place_order(
        self, user, payment_method: str, shipping_address_id=None, notes: str = ""
    ) -> ServiceResult[Order]:
        """
        Place an order from the user's cart.

        Every step runs in one transaction: resolve the shipping address, lock and
        re-check stock, price the lines, insert the order and its items, deduct
        stock and clear the cart. Any failure rolls the whole unit back.

        Returns:
            ServiceResult with the created Order, or an error code:
            - validation_error: payment method missing
            - address_not_found: shipping address not owned by the user
            - cart_empty: no active cart lines
            - insufficient_stock: a line exceeds current stock
            - database_error: unexpected store failure

        Example:
            >>> result = order_service.place_order(user, "cash_on_delivery")
            >>> if result.ok:
            ...     print(result.value.order_number)
        """
        if not payment_method:
            return service_err(ErrorCodes.VALIDATION_ERROR, "Payment method is required")

        start_time = time.time()
        try:
            with transaction.atomic():
                order = self._place_order_atomic(user, payment_method, shipping_address_id, notes or "")
        except OrderPlacementError as e:
            orders_placed_total.labels(status=e.error_code).inc()
            self.logger.warning(f"Order placement rejected for user {user.id}: {e}")
            return service_err(e.error_code, str(e))
        except DatabaseError as e:
            orders_placed_total.labels(status=ErrorCodes.DATABASE_ERROR).inc()
            self.logger.error(f"Order placement failed for user {user.id}: {e}", exc_info=True)
            return service_err(ErrorCodes.DATABASE_ERROR, "Failed to create order")
        finally:
            order_placement_duration.observe(time.time() - start_time)

        orders_placed_total.labels(status="success").inc()
        order_value.observe(float(order.total_amount))
        self.logger.info(
            f"Order {order.order_number} placed by user {user.id}: "
            f"items={len(order.placed_items)}, total={order.total_amount}"
        )
        return service_ok(order)

    def _place_order_atomic(self, user, payment_method, shipping_address_id, notes) -> Order:
        address = self._resolve_shipping_address(user, shipping_address_id)

        cart_items = list(
            CartItem.objects.filter(cart__user=user, product__status=Product.STATUS_ACTIVE).order_by("added_at")
        )
        if not cart_items:
            raise EmptyCartError()

        # Re-read price and stock under row locks
        locked = self.inventory_service.lock_products(item.product_id for item in cart_items)
        products = {product.id: product for product in locked}

        lines = []
        for item in cart_items:
            product = products.get(item.product_id)
            if product is None:
                # Deleted between reading the cart and taking the lock
                continue
            if item.quantity > product.stock_quantity:
                raise InsufficientStockError(product.name, product.stock_quantity, item.quantity)
            lines.append({"product": product, "quantity": item.quantity, "unit_price": product.price})

        if not lines:
            raise EmptyCartError()

        totals_result = self.pricing_service.calculate_order_total(lines)
        if not totals_result.ok:
            raise OrderPlacementError(totals_result.error_detail)
        totals = totals_result.value

        order = self._create_order_row(
            buyer=user,
            payment_method=payment_method,
            shipping_address=address,
            notes=notes,
            subtotal=totals["subtotal"],
            shipping_fee=totals["shipping"],
            tax_amount=totals["tax"],
            total_amount=totals["total"],
        )

        order.placed_items = OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    product=line["product"],
                    seller_id=line["product"].seller_id,
                    product_name=line["product"].name,
                    quantity=line["quantity"],
                    unit_price=line["unit_price"],
                    total_price=line["unit_price"] * line["quantity"],
                )
                for line in lines
            ]
        )

        for line in lines:
            self.inventory_service.deduct_stock(line["product"].id, line["quantity"])

        CartItem.objects.filter(cart__user=user).delete()
        return order

    def _resolve_shipping_address(self, user, shipping_address_id) -> Address:
        if shipping_address_id:
            try:
                return Address.objects.get(id=shipping_address_id, user=user)
            except Address.DoesNotExist:
                raise ShippingAddressNotFoundError()
        return self.address_service.get_or_create_default(user)

    def _create_order_row(self, **fields) -> Order:
        """Insert the order, drawing a fresh order number whenever the unique constraint rejects one."""
        max_attempts = getattr(settings, "ORDER_NUMBER_MAX_ATTEMPTS", 5)
        for attempt in range(1, max_attempts + 1):
            order_number = generate_order_number()
            try:
                with transaction.atomic():
                    return Order.objects.create(order_number=order_number, **fields)
            except IntegrityError:
                if not Order.objects.filter(order_number=order_number).exists():
                    raise
                order_number_collisions_total.inc()
                self.logger.warning(f"Order number {order_number} already taken (attempt {attempt})")
        raise OrderNumberExhaustedError()

    @BaseService.log_performance
    def get_order(self, user, order_id) -> ServiceResult[Order]:
        """
        Get order details. Orders of other buyers are reported as not found.
        """
        try:
            order = (
                Order.objects.select_related("shipping_address")
                .prefetch_related("items__product__images", "items__seller")
                .get(id=order_id, buyer=user)
            )
        except Order.DoesNotExist:
            return service_err(ErrorCodes.ORDER_NOT_FOUND, "Order not found")

        self.logger.info(f"Retrieved order {order_id} for user {user.id}")
        return service_ok(order)

    @BaseService.log_performance
    def list_orders(self, user, page: int = 1, limit: int = 10, status: Optional[str] = None) -> ServiceResult[Page]:
        """
        List user's orders, newest first, with an item count per order.

        Example:
            >>> result = order_service.list_orders(user, status="pending")
            >>> if result.ok:
            ...     orders = result.value.items
        """
        queryset = (
            Order.objects.filter(buyer=user)
            .select_related("shipping_address")
            .annotate(item_count=Count("items"))
            .order_by("-created_at")
        )
        if status:
            queryset = queryset.filter(status=status)

        result_page = paginate(queryset, page, limit)
        self.logger.info(f"Listed orders for user {user.id}: {result_page.total} total, page {page}")
        return service_ok(result_page)
