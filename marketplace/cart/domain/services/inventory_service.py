"""
InventoryService - Stock Management

Handles row locking and stock movements for order placement.
Uses database-level locking to prevent race conditions and overselling.
"""

from typing import Iterable, List

from django.db.models import F

from marketplace.catalog.domain.models.catalog import Product
from utils.service_base import BaseService


class InventoryService(BaseService):
    """
    Service for product stock.

    ``lock_products`` and ``deduct_stock`` must run inside transaction.atomic();
    the order service owns that transaction.
    """

    def lock_products(self, product_ids: Iterable) -> List[Product]:
        """
        SELECT ... FOR UPDATE the active products, in primary-key order so that
        concurrent checkouts acquire row locks in the same sequence.
        """
        return list(Product.objects.select_for_update().active().filter(id__in=list(product_ids)).order_by("id"))

    def deduct_stock(self, product_id, quantity: int) -> None:
        """Decrement stock and count the sale; caller has already locked and checked the row."""
        Product.objects.filter(id=product_id).update(
            stock_quantity=F("stock_quantity") - quantity,
            total_sales=F("total_sales") + quantity,
        )
        self.logger.info(f"Stock deducted: product={product_id}, quantity={quantity}")
