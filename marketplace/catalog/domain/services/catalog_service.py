"""
CatalogService - Product CRUD & Browsing

Handles product listing with filters, sorting and pagination, product detail,
seller-owned product writes (with soft delete) and category listing.
"""

from typing import Any, Dict, List, Optional

from django.db import transaction
from django.db.models import Exists, F, OuterRef, Q, Value

from authentication.domain.models.seller import SellerProfile
from marketplace.catalog.domain.models.catalog import Product, ProductImage
from marketplace.catalog.domain.models.category import Category
from marketplace.catalog.domain.models.interaction import ProductFavorite
from marketplace.filters import ProductFilter
from utils.pagination import Page, paginate
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

SORTABLE_FIELDS = {
    "created_at": "created_at",
    "price": "price",
    "rating_average": "rating_average",
    "total_sales": "total_sales",
    "name": "name",
    "product_name": "name",
}

UPDATABLE_FIELDS = [
    "name",
    "description",
    "price",
    "stock_quantity",
    "unit",
    "weight",
    "is_organic",
    "origin",
    "harvest_date",
]


class CatalogService(BaseService):
    """
    Service for managing product catalog operations.

    Responsibilities:
    - List products with filtering, sorting and pagination
    - Get product details (tracks views)
    - Create products (seller only)
    - Update and soft delete products (owner only)
    - List categories
    """

    @staticmethod
    def _with_favorite_flag(queryset, user):
        if user is not None and getattr(user, "is_authenticated", False):
            return queryset.annotate(
                is_favorite=Exists(ProductFavorite.objects.filter(user=user, product=OuterRef("pk")))
            )
        return queryset.annotate(is_favorite=Value(False))

    @BaseService.log_performance
    def list_products(
        self,
        filters: Optional[Dict[str, Any]] = None,
        page: int = 1,
        limit: int = 20,
        sort_by: str = "created_at",
        sort_order: str = "desc",
        user=None,
    ) -> ServiceResult[Page]:
        """
        List active products.

        Args:
            filters: Query params understood by ProductFilter (category, search,
                min_price, max_price, is_organic, seller_id, in_stock)
            sort_by: One of SORTABLE_FIELDS, anything else sorts by created_at
            sort_order: "asc" or "desc"
            user: Caller, used for the is_favorite flag

        Example:
            >>> result = catalog_service.list_products({"category": "Fresh Fruit"}, page=1, limit=20)
            >>> if result.ok:
            ...     products = result.value.items
        """
        queryset = Product.objects.active().select_related("seller", "seller__seller_profile", "category")
        queryset = queryset.prefetch_related("images")

        product_filter = ProductFilter(data=filters or {}, queryset=queryset)
        if not product_filter.is_valid():
            return service_err(ErrorCodes.VALIDATION_ERROR, f"Invalid filters: {dict(product_filter.errors)}")

        field = SORTABLE_FIELDS.get(sort_by, "created_at")
        ordering = field if str(sort_order).lower() == "asc" else f"-{field}"
        queryset = self._with_favorite_flag(product_filter.qs, user).order_by(ordering, "-created_at")

        result_page = paginate(queryset, page, limit)
        self.logger.info(f"Listed products: total={result_page.total}, page={page}/{result_page.pages}")
        return service_ok(result_page)

    @BaseService.log_performance
    def get_product(self, product_id, user=None, track_view: bool = True) -> ServiceResult[Product]:
        """
        Get product details by ID.

        Deleted products are only visible to the seller who owns them.
        """
        visible = Q(status=Product.STATUS_ACTIVE)
        if user is not None and getattr(user, "is_authenticated", False):
            visible |= Q(seller=user)

        queryset = Product.objects.filter(visible).select_related("seller", "seller__seller_profile", "category")
        queryset = self._with_favorite_flag(queryset.prefetch_related("images"), user)

        try:
            product = queryset.get(id=product_id)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found")

        if track_view:
            Product.objects.filter(id=product.id).update(view_count=F("view_count") + 1)
            product.view_count += 1

        self.logger.info(f"Retrieved product: {product.name} (id={product_id})")
        return service_ok(product)

    @BaseService.log_performance
    def list_categories(self) -> ServiceResult[List[Category]]:
        return service_ok(list(Category.objects.filter(is_active=True).order_by("name")))

    @staticmethod
    def _replace_images(product, image_urls):
        """The first URL becomes the primary image."""
        product.images.all().delete()
        for position, image_url in enumerate(image_urls):
            ProductImage.objects.create(product=product, image_url=image_url, is_primary=position == 0, order=position)

    def _resolve_category(self, data):
        category_id = data.get("category_id")
        if not category_id:
            return None
        return Category.objects.filter(id=category_id, is_active=True).first()

    @BaseService.log_performance
    @transaction.atomic
    def create_product(self, user, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Create a new product (seller only).

        Example:
            >>> result = catalog_service.create_product(
            ...     seller_user,
            ...     {"name": "MD2 Pineapple", "price": Decimal("8.50"), "stock_quantity": 40},
            ... )
        """
        if not user.can_sell_products():
            return service_err(ErrorCodes.PERMISSION_DENIED, "Seller account required")

        category = self._resolve_category(data)
        if data.get("category_id") and category is None:
            return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")

        product = Product.objects.create(
            seller=user,
            category=category,
            name=data["name"],
            description=data.get("description", ""),
            price=data["price"],
            stock_quantity=data["stock_quantity"],
            unit=data.get("unit") or Product.DEFAULT_UNIT,
            weight=data.get("weight"),
            is_organic=data.get("is_organic", False),
            origin=data.get("origin", ""),
            harvest_date=data.get("harvest_date"),
        )

        self._replace_images(product, data.get("images") or [])

        profile, _ = SellerProfile.objects.get_or_create(
            user=user, defaults={"business_name": SellerProfile.default_business_name(user)}
        )
        SellerProfile.objects.filter(pk=profile.pk).update(total_products=F("total_products") + 1)

        self.logger.info(f"Created product: {product.name} (id={product.id}) by seller {user.id}")
        return service_ok(product)

    @BaseService.log_performance
    @transaction.atomic
    def update_product(self, user, product_id, data: Dict[str, Any]) -> ServiceResult[Product]:
        """
        Update the given fields of a product owned by the user; other fields keep their values.
        """
        try:
            product = Product.objects.select_for_update().not_deleted().get(id=product_id, seller=user)
        except Product.DoesNotExist:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found or unauthorized")

        updated_fields = [field for field in UPDATABLE_FIELDS if field in data]
        for field in updated_fields:
            setattr(product, field, data[field])

        if "category_id" in data:
            category = self._resolve_category(data)
            if data["category_id"] and category is None:
                return service_err(ErrorCodes.CATEGORY_NOT_FOUND, "Category not found")
            product.category = category
            updated_fields.append("category")

        product.save(update_fields=updated_fields + ["updated_at"])

        if "images" in data:
            self._replace_images(product, data["images"] or [])
            updated_fields.append("images")

        self.logger.info(f"Updated product: {product.name} (id={product_id}), fields={updated_fields}")
        return service_ok(product)

    @BaseService.log_performance
    @transaction.atomic
    def delete_product(self, user, product_id) -> ServiceResult[None]:
        """Soft delete: the row stays for historical order items."""
        updated = Product.objects.not_deleted().filter(id=product_id, seller=user).update(
            status=Product.STATUS_DELETED
        )
        if not updated:
            return service_err(ErrorCodes.PRODUCT_NOT_FOUND, "Product not found or unauthorized")

        SellerProfile.objects.filter(user=user, total_products__gt=0).update(total_products=F("total_products") - 1)

        self.logger.info(f"Product {product_id} soft deleted by seller {user.id}")
        return service_ok(None)
