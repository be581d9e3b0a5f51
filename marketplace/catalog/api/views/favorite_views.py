from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.catalog.api.serializers.favorite_serializers import FavoriteRequestSerializer, FavoriteSerializer
from marketplace.catalog.domain.services.favorite_service import FavoriteService
from utils.api_responses import error_from_result, paginated_data, success_response, validation_error_response
from utils.pagination import parse_pagination


class FavoriteBaseView(APIView):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> FavoriteService:
        return container.favorite_service()


class FavoriteListCreateAPIView(FavoriteBaseView):
    @extend_schema(
        operation_id="favorites_list",
        summary="Saved products",
        responses={200: FavoriteSerializer(many=True)},
        tags=["Marketplace - Favorites"],
    )
    def get(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        result = self.get_service().list_favorites(request.user, page=page, limit=limit)
        if not result.ok:
            return error_from_result(result)

        favorites = FavoriteSerializer(result.value.items, many=True).data
        return success_response(paginated_data("favorites", favorites, result.value))

    @extend_schema(
        operation_id="favorites_add",
        summary="Save a product",
        request=FavoriteRequestSerializer,
        responses={
            201: OpenApiResponse(description="Product added to favorites"),
            404: OpenApiResponse(description="Product not found"),
            409: OpenApiResponse(description="Product already in favorites"),
        },
        tags=["Marketplace - Favorites"],
    )
    def post(self, request):
        serializer = FavoriteRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().add_favorite(request.user, serializer.validated_data["product_id"])
        if not result.ok:
            return error_from_result(result)
        return success_response(
            {"product_id": str(result.value.product_id), "is_favorite": True},
            message="Product added to favorites",
            status_code=status.HTTP_201_CREATED,
        )


class FavoriteDetailAPIView(FavoriteBaseView):
    @extend_schema(
        operation_id="favorites_remove",
        summary="Remove a saved product",
        responses={200: OpenApiResponse(description="Removed"), 404: OpenApiResponse(description="Favorite not found")},
        tags=["Marketplace - Favorites"],
    )
    def delete(self, request, product_id):
        result = self.get_service().remove_favorite(request.user, product_id)
        if not result.ok:
            return error_from_result(result)
        return success_response(message="Product removed from favorites")


class FavoriteCheckAPIView(FavoriteBaseView):
    @extend_schema(
        operation_id="favorites_check",
        summary="Is the product saved?",
        responses={200: OpenApiResponse(description="`is_favorite` flag")},
        tags=["Marketplace - Favorites"],
    )
    def get(self, request, product_id):
        result = self.get_service().is_favorite(request.user, product_id)
        if not result.ok:
            return error_from_result(result)
        return success_response({"is_favorite": result.value})


class FavoriteToggleAPIView(FavoriteBaseView):
    @extend_schema(
        operation_id="favorites_toggle",
        summary="Save or unsave a product",
        request=FavoriteRequestSerializer,
        responses={200: OpenApiResponse(description="New `is_favorite` state"), 404: OpenApiResponse(description="Not found")},
        tags=["Marketplace - Favorites"],
    )
    def post(self, request):
        serializer = FavoriteRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().toggle_favorite(request.user, serializer.validated_data["product_id"])
        if not result.ok:
            return error_from_result(result)

        message = "Product added to favorites" if result.value else "Product removed from favorites"
        return success_response({"is_favorite": result.value}, message=message)
