"""
SellerAnalyticsService - Seller Dashboard

Aggregates a seller's catalogue and sales figures, and lists the orders that
contain the seller's products (showing only the seller's own lines).
"""

from datetime import timedelta
from decimal import Decimal
from typing import Dict, Optional

from django.db.models import Count, Prefetch, Q, Sum
from django.db.models.functions import TruncMonth
from django.utils import timezone

from marketplace.catalog.domain.models.catalog import Product
from marketplace.ordering.domain.models.order import Order, OrderItem
from utils.pagination import Page, paginate
from utils.service_base import BaseService, ServiceResult, service_ok

TOP_PRODUCTS_LIMIT = 10
MONTHLY_REVENUE_WINDOW_DAYS = 365


class SellerAnalyticsService(BaseService):
    def _revenue_items(self, seller):
        return OrderItem.objects.filter(seller=seller).exclude(order__status__in=Order.NON_REVENUE_STATUSES)

    @BaseService.log_performance
    def get_stats(self, seller) -> ServiceResult[Dict]:
        """
        Dashboard figures for a seller.

        Revenue and units only count orders that are not cancelled or refunded.

        Example:
            >>> stats = seller_analytics_service.get_stats(seller).value
            >>> stats["total_revenue"], stats["total_sales"]
            (Decimal('145.00'), 12)
        """
        product_counts = Product.objects.not_deleted().filter(seller=seller).aggregate(
            total_products=Count("id"),
            active_products=Count("id", filter=Q(stock_quantity__gt=0)),
        )

        revenue_items = self._revenue_items(seller)
        totals = revenue_items.aggregate(total_revenue=Sum("total_price"), total_sales=Sum("quantity"))

        since = timezone.now() - timedelta(days=MONTHLY_REVENUE_WINDOW_DAYS)
        monthly_rows = (
            revenue_items.filter(order__created_at__gte=since)
            .annotate(month=TruncMonth("order__created_at"))
            .values("month")
            .annotate(revenue=Sum("total_price"), units_sold=Sum("quantity"), orders=Count("order", distinct=True))
            .order_by("-month")
        )
        monthly_revenue = [
            {
                "month": row["month"].strftime("%Y-%m"),
                "revenue": row["revenue"] or Decimal("0.00"),
                "units_sold": row["units_sold"] or 0,
                "orders": row["orders"],
            }
            for row in monthly_rows
        ]

        top_rows = (
            revenue_items.values("product_id", "product__name")
            .annotate(units_sold=Sum("quantity"), revenue=Sum("total_price"))
            .order_by("-units_sold", "-revenue")[:TOP_PRODUCTS_LIMIT]
        )
        top_products = [
            {
                "product_id": row["product_id"],
                "name": row["product__name"],
                "units_sold": row["units_sold"],
                "revenue": row["revenue"],
            }
            for row in top_rows
        ]

        stats = {
            "total_products": product_counts["total_products"],
            "active_products": product_counts["active_products"],
            "total_sales": totals["total_sales"] or 0,
            "total_revenue": totals["total_revenue"] or Decimal("0.00"),
            "monthly_revenue": monthly_revenue,
            "top_products": top_products,
        }

        self.logger.info(
            f"Seller stats for {seller.id}: products={stats['total_products']}, revenue={stats['total_revenue']}"
        )
        return service_ok(stats)

    @BaseService.log_performance
    def list_orders(
        self, seller, page: int = 1, limit: int = 20, status: Optional[str] = None, product_id=None
    ) -> ServiceResult[Page]:
        """
        Orders containing the seller's items, newest first.

        Each order carries ``seller_items`` (only this seller's lines) and
        ``seller_total`` (the seller's share of the order).
        """
        item_filter = Q(items__seller=seller)
        if product_id:
            item_filter &= Q(items__product_id=product_id)

        queryset = (
            Order.objects.filter(item_filter)
            .distinct()
            .select_related("buyer", "shipping_address")
            .prefetch_related(
                Prefetch(
                    "items",
                    queryset=OrderItem.objects.filter(seller=seller).select_related("product"),
                    to_attr="seller_items",
                )
            )
            .order_by("-created_at")
        )
        if status:
            queryset = queryset.filter(status=status)

        result_page = paginate(queryset, page, limit)
        for order in result_page.items:
            order.seller_total = sum((item.total_price for item in order.seller_items), Decimal("0.00"))

        self.logger.info(f"Listed seller orders for {seller.id}: {result_page.total} total, page {page}")
        return service_ok(result_page)
