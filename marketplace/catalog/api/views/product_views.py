from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import SAFE_METHODS, AllowAny

from authentication.api.authentication import OptionalJWTAuthentication
from authentication.permissions import SellerRequired
from infrastructure.container import container
from marketplace.catalog.api.serializers.product_serializers import (
    ProductDetailSerializer,
    ProductListSerializer,
    ProductWriteSerializer,
)
from marketplace.catalog.domain.services.catalog_service import CatalogService
from utils.api_responses import error_from_result, paginated_data, success_response, validation_error_response
from utils.pagination import parse_pagination

PRODUCT_FILTER_PARAMS = (
    "category",
    "category_id",
    "search",
    "min_price",
    "max_price",
    "is_organic",
    "in_stock",
    "seller_id",
)


class ProductViewSet(viewsets.ViewSet):
    """
    Browse the catalogue (public) and manage one's own listings (sellers).

    Reads accept an optional bearer token: a valid one adds `is_favorite`, an
    unusable one is ignored. Writes need a seller account and, for existing
    products, ownership.
    """

    lookup_value_regex = "[0-9a-f-]{36}"

    def get_service(self) -> CatalogService:
        return container.catalog_service()

    def get_authenticators(self):
        if self.request.method in SAFE_METHODS:
            return [OptionalJWTAuthentication()]
        return super().get_authenticators()

    def get_permissions(self):
        if self.request.method in SAFE_METHODS:
            return [AllowAny()]
        return [SellerRequired()]

    @extend_schema(
        operation_id="products_list",
        summary="List products",
        description="""
        **What it receives:**
        - Filters: `category` (name), `category_id`, `search`, `min_price`, `max_price`,
          `is_organic`, `in_stock`, `seller_id`
        - Sorting: `sort_by` (created_at, price, rating_average, total_sales, name), `sort_order` (asc|desc)
        - Pagination: `page`, `limit` (default 20, max 100)

        **What it returns:**
        - `products` and `pagination`
        """,
        parameters=[
            OpenApiParameter("sort_by", OpenApiTypes.STR, OpenApiParameter.QUERY),
            OpenApiParameter("sort_order", OpenApiTypes.STR, OpenApiParameter.QUERY, enum=["asc", "desc"]),
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: ProductListSerializer(many=True), 400: OpenApiResponse(description="Invalid query")},
        tags=["Marketplace - Products"],
    )
    def list(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        filters = {key: request.query_params[key] for key in PRODUCT_FILTER_PARAMS if key in request.query_params}

        result = self.get_service().list_products(
            filters=filters,
            page=page,
            limit=limit,
            sort_by=request.query_params.get("sort_by", "created_at"),
            sort_order=request.query_params.get("sort_order", "desc"),
            user=request.user,
        )
        if not result.ok:
            return error_from_result(result)

        products = ProductListSerializer(result.value.items, many=True).data
        return success_response(paginated_data("products", products, result.value))

    @extend_schema(
        operation_id="products_retrieve",
        summary="Product detail",
        responses={200: ProductDetailSerializer, 404: OpenApiResponse(description="Product not found")},
        tags=["Marketplace - Products"],
    )
    def retrieve(self, request, pk=None):
        result = self.get_service().get_product(pk, user=request.user)
        if not result.ok:
            return error_from_result(result)
        return success_response({"product": ProductDetailSerializer(result.value).data})

    @extend_schema(
        operation_id="products_create",
        summary="Create a product",
        request=ProductWriteSerializer,
        responses={
            201: ProductDetailSerializer,
            400: OpenApiResponse(description="Validation failed"),
            403: OpenApiResponse(description="Seller account required"),
        },
        tags=["Marketplace - Products"],
    )
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().create_product(request.user, serializer.validated_data)
        if not result.ok:
            return error_from_result(result)

        product = self.get_service().get_product(result.value.id, user=request.user, track_view=False).value
        return success_response(
            {"product": ProductDetailSerializer(product).data},
            message="Product created successfully",
            status_code=status.HTTP_201_CREATED,
        )

    def _update(self, request, pk):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_product(request.user, pk, serializer.validated_data)
        if not result.ok:
            return error_from_result(result)

        product = self.get_service().get_product(pk, user=request.user, track_view=False).value
        return success_response({"product": ProductDetailSerializer(product).data}, message="Product updated successfully")

    @extend_schema(
        operation_id="products_update",
        summary="Update a product",
        description="Owner only. Fields not sent keep their values; `images`, when sent, replaces the gallery.",
        request=ProductWriteSerializer,
        responses={200: ProductDetailSerializer, 404: OpenApiResponse(description="Product not found or unauthorized")},
        tags=["Marketplace - Products"],
    )
    def update(self, request, pk=None):
        return self._update(request, pk)

    @extend_schema(
        operation_id="products_partial_update",
        summary="Partially update a product",
        request=ProductWriteSerializer,
        responses={200: ProductDetailSerializer, 404: OpenApiResponse(description="Product not found or unauthorized")},
        tags=["Marketplace - Products"],
    )
    def partial_update(self, request, pk=None):
        return self._update(request, pk)

    @extend_schema(
        operation_id="products_delete",
        summary="Delete a product",
        description="Soft delete; order history keeps referencing the product.",
        responses={200: OpenApiResponse(description="Product deleted"), 404: OpenApiResponse(description="Not found")},
        tags=["Marketplace - Products"],
    )
    def destroy(self, request, pk=None):
        result = self.get_service().delete_product(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response(message="Product deleted successfully")
