"""
FavoriteService - Saved Products

A favorite is a plain (user, product) existence relation.
"""

from django.db import IntegrityError, transaction

from marketplace.catalog.domain.models.catalog import Product
from marketplace.catalog.domain.models.interaction import ProductFavorite
from utils.pagination import Page, paginate
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


class FavoriteService(BaseService):
    @BaseService.log_performance
    def list_favorites(self, user, page: int = 1, limit: int = 20) -> ServiceResult[Page]:
        queryset = (
            ProductFavorite.objects.filter(user=user)
            .select_related("product", "product__seller", "product__category")
            .prefetch_related("product__images")
            .order_by("-created_at")
        )
        return service_ok(paginate(queryset, page, limit))

    @BaseService.log_performance
    def add_favorite(self, user, product_id) -> ServiceResult[ProductFavorite]:
        if not Product.objects.active().filter(id=product_id).exists():
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        try:
            with transaction.atomic():
                favorite = ProductFavorite.objects.create(user=user, product_id=product_id)
        except IntegrityError:
            return service_err(ErrorCodes.ALREADY_FAVORITED, "Product already in favorites")

        self.logger.info(f"User {user.id} favorited product {product_id}")
        return service_ok(favorite)

    @BaseService.log_performance
    def remove_favorite(self, user, product_id) -> ServiceResult[None]:
        deleted, _ = ProductFavorite.objects.filter(user=user, product_id=product_id).delete()
        if not deleted:
            return service_err(ErrorCodes.FAVORITE_NOT_FOUND, "Favorite not found")

        self.logger.info(f"User {user.id} removed product {product_id} from favorites")
        return service_ok(None)

    def is_favorite(self, user, product_id) -> ServiceResult[bool]:
        return service_ok(ProductFavorite.objects.filter(user=user, product_id=product_id).exists())

    @BaseService.log_performance
    @transaction.atomic
    def toggle_favorite(self, user, product_id) -> ServiceResult[bool]:
        """
        Flip membership and return the new state (True when now a favorite).

        Example:
            >>> favorite_service.toggle_favorite(user, product.id).value
            True
            >>> favorite_service.toggle_favorite(user, product.id).value
            False
        """
        deleted, _ = ProductFavorite.objects.filter(user=user, product_id=product_id).delete()
        if deleted:
            self.logger.info(f"User {user.id} toggled product {product_id} out of favorites")
            return service_ok(False)

        if not Product.objects.active().filter(id=product_id).exists():
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        ProductFavorite.objects.get_or_create(user=user, product_id=product_id)
        self.logger.info(f"User {user.id} toggled product {product_id} into favorites")
        return service_ok(True)
