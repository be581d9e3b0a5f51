"""
ReviewService - Product Review Management

Handles create, update, delete and listing of product reviews. Flags verified
purchases and refreshes the product's rating aggregates after every write.
"""

from typing import Optional

from django.db import IntegrityError, transaction

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.models.interaction import ProductReview
from marketplace.infra.observability.metrics import review_writes_total
from marketplace.ordering.domain.models.order import OrderItem
from utils.pagination import Page, paginate
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

from .review_metrics_service import ReviewMetricsService

REVIEW_SORT_FIELDS = ("created_at", "rating", "updated_at")


class ReviewService(BaseService):
    """
    Service for managing product reviews.

    Dependencies:
    - ReviewMetricsService: To update product rating aggregates after review changes
    """

    def __init__(self, review_metrics_service: ReviewMetricsService = None):
        super().__init__()
        self.review_metrics_service = review_metrics_service or ReviewMetricsService()

    @staticmethod
    def _validate_rating(rating) -> Optional[ServiceResult]:
        if rating is None or not (1 <= int(rating) <= 5):
            return service_err(ErrorCodes.INVALID_INPUT, "Rating must be between 1 and 5")
        return None

    def has_purchased(self, user, product_id) -> bool:
        """Verified purchase: any of the user's orders contains the product."""
        return OrderItem.objects.filter(order__buyer=user, product_id=product_id).exists()

    @BaseService.log_performance
    def create_review(self, user, product_id, rating: int, comment: str = "") -> ServiceResult[ProductReview]:
        """
        Create a review. A user reviews each product at most once.

        Example:
            >>> result = review_service.create_review(user, product.id, 5, "Sweet and juicy")
            >>> result.value.is_verified_purchase
            True
        """
        invalid = self._validate_rating(rating)
        if invalid:
            return invalid

        try:
            product = Product.objects.active().get(id=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        if ProductReview.objects.filter(product=product, reviewer=user).exists():
            return service_err(ErrorCodes.DUPLICATE_REVIEW, "You have already reviewed this product")

        try:
            with transaction.atomic():
                self.review_metrics_service.lock_product(product.id)
                review = ProductReview.objects.create(
                    product=product,
                    reviewer=user,
                    rating=rating,
                    comment=comment or "",
                    is_verified_purchase=self.has_purchased(user, product.id),
                )
                self.review_metrics_service.update_metrics(product.id)
        except IntegrityError:
            # Lost a race against a concurrent review by the same user
            return service_err(ErrorCodes.DUPLICATE_REVIEW, "You have already reviewed this product")

        review_writes_total.labels(operation="create").inc()
        self.logger.info(f"Created review {review.id} for product {product.id} by user {user.id}")
        return service_ok(review)

    @BaseService.log_performance
    @transaction.atomic
    def update_review(self, user, review_id, rating: int = None, comment: str = None) -> ServiceResult[ProductReview]:
        try:
            review = ProductReview.objects.select_related("product").get(id=review_id, reviewer=user)
        except ProductReview.DoesNotExist:
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found or unauthorized")

        self.review_metrics_service.lock_product(review.product_id)
        if rating is not None:
            invalid = self._validate_rating(rating)
            if invalid:
                return invalid
            review.rating = rating
        if comment is not None:
            review.comment = comment

        review.save()
        self.review_metrics_service.update_metrics(review.product_id)

        review_writes_total.labels(operation="update").inc()
        self.logger.info(f"Updated review {review_id} by user {user.id}")
        return service_ok(review)

    @BaseService.log_performance
    @transaction.atomic
    def delete_review(self, user, review_id) -> ServiceResult[None]:
        try:
            review = ProductReview.objects.get(id=review_id, reviewer=user)
        except ProductReview.DoesNotExist:
            return service_err(ErrorCodes.REVIEW_NOT_FOUND, "Review not found or unauthorized")

        product_id = review.product_id
        self.review_metrics_service.lock_product(product_id)
        review.delete()
        self.review_metrics_service.update_metrics(product_id)

        review_writes_total.labels(operation="delete").inc()
        self.logger.info(f"Deleted review {review_id} by user {user.id}")
        return service_ok(None)

    @BaseService.log_performance
    def list_product_reviews(
        self, product_id, page: int = 1, limit: int = 10, sort_by: str = "created_at", sort_order: str = "desc"
    ) -> ServiceResult[Page]:
        if not Product.objects.filter(id=product_id).exists():
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        field = sort_by if sort_by in REVIEW_SORT_FIELDS else "created_at"
        ordering = field if str(sort_order).lower() == "asc" else f"-{field}"
        queryset = ProductReview.objects.filter(product_id=product_id).select_related("reviewer").order_by(ordering)
        return service_ok(paginate(queryset, page, limit))

    @BaseService.log_performance
    def list_user_reviews(self, user, page: int = 1, limit: int = 10) -> ServiceResult[Page]:
        queryset = (
            ProductReview.objects.filter(reviewer=user)
            .select_related("product", "reviewer")
            .prefetch_related("product__images")
            .order_by("-created_at")
        )
        return service_ok(paginate(queryset, page, limit))
