"""
ReviewMetricsService - Review Aggregations

The product's rating_average and total_reviews are derived values: they are
recomputed in full from the stored reviews after every review write.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict

from django.db import transaction
from django.db.models import Avg, Count

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.models.interaction import ProductReview
from utils.service_base import BaseService, ServiceResult, service_ok


class ReviewMetricsService(BaseService):
    def lock_product(self, product_id) -> None:
        """
        SELECT ... FOR UPDATE the product row so that concurrent review writes
        for the same product recompute its aggregates one after another.

        Must run inside transaction.atomic(); the lock is held until commit.
        """
        list(Product.objects.select_for_update().filter(id=product_id).values_list("id", flat=True))

    @BaseService.log_performance
    @transaction.atomic
    def update_metrics(self, product_id) -> ServiceResult[Dict]:
        """
        Recompute and store the rating aggregates of a product.

        Returns:
            ServiceResult with average_rating and review_count

        Example:
            >>> result = review_metrics_service.update_metrics(product.id)
            >>> result.value["average_rating"]
            Decimal('4.50')
        """
        self.lock_product(product_id)
        aggregates = ProductReview.objects.filter(product_id=product_id).aggregate(
            average=Avg("rating"), count=Count("id")
        )
        average = aggregates["average"]
        average_rating = (
            Decimal(str(average)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP) if average else Decimal("0.00")
        )
        review_count = aggregates["count"]

        Product.objects.filter(id=product_id).update(rating_average=average_rating, total_reviews=review_count)

        self.logger.info(
            f"Updated metrics for product {product_id}: average={average_rating}, count={review_count}"
        )
        return service_ok({"average_rating": average_rating, "review_count": review_count})
