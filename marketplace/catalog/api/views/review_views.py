from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from authentication.api.authentication import OptionalJWTAuthentication
from infrastructure.container import container
from marketplace.catalog.api.serializers.review_serializers import (
    MyReviewSerializer,
    ProductReviewSerializer,
    ReviewCreateSerializer,
    ReviewUpdateSerializer,
)
from marketplace.catalog.domain.services.review_service import ReviewService
from utils.api_responses import error_from_result, paginated_data, success_response, validation_error_response
from utils.pagination import parse_pagination


class ReviewBaseView(APIView):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> ReviewService:
        return container.review_service()


class ProductReviewListAPIView(ReviewBaseView):
    permission_classes = [AllowAny]
    authentication_classes = [OptionalJWTAuthentication]

    @extend_schema(
        operation_id="reviews_for_product",
        summary="Reviews of a product",
        description="Paginated (default limit 10). `sort_by`: created_at, rating, updated_at.",
        responses={200: ProductReviewSerializer(many=True), 404: OpenApiResponse(description="Product not found")},
        tags=["Marketplace - Reviews"],
    )
    def get(self, request, product_id):
        page, limit = parse_pagination(request.query_params, default_limit=10)
        result = self.get_service().list_product_reviews(
            product_id,
            page=page,
            limit=limit,
            sort_by=request.query_params.get("sort_by", "created_at"),
            sort_order=request.query_params.get("sort_order", "desc"),
        )
        if not result.ok:
            return error_from_result(result)

        reviews = ProductReviewSerializer(result.value.items, many=True).data
        return success_response(paginated_data("reviews", reviews, result.value))


class ReviewCreateAPIView(ReviewBaseView):
    @extend_schema(
        operation_id="reviews_create",
        summary="Review a product",
        description="One review per user and product. Flags verified purchases.",
        request=ReviewCreateSerializer,
        responses={
            201: ProductReviewSerializer,
            400: OpenApiResponse(description="Validation failed"),
            404: OpenApiResponse(description="Product not found"),
            409: OpenApiResponse(description="You have already reviewed this product"),
        },
        tags=["Marketplace - Reviews"],
    )
    def post(self, request):
        serializer = ReviewCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        data = serializer.validated_data
        result = self.get_service().create_review(request.user, data["product_id"], data["rating"], data["comment"])
        if not result.ok:
            return error_from_result(result)

        return success_response(
            {"review": ProductReviewSerializer(result.value).data},
            message="Review created successfully",
            status_code=status.HTTP_201_CREATED,
        )


class ReviewDetailAPIView(ReviewBaseView):
    def _update(self, request, pk):
        serializer = ReviewUpdateSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_error_response(serializer.errors)

        result = self.get_service().update_review(
            request.user,
            pk,
            rating=serializer.validated_data.get("rating"),
            comment=serializer.validated_data.get("comment"),
        )
        if not result.ok:
            return error_from_result(result)
        return success_response({"review": ProductReviewSerializer(result.value).data}, message="Review updated successfully")

    @extend_schema(
        operation_id="reviews_update",
        summary="Edit own review",
        request=ReviewUpdateSerializer,
        responses={200: ProductReviewSerializer, 404: OpenApiResponse(description="Review not found or unauthorized")},
        tags=["Marketplace - Reviews"],
    )
    def put(self, request, pk):
        return self._update(request, pk)

    @extend_schema(
        operation_id="reviews_partial_update",
        summary="Edit own review",
        request=ReviewUpdateSerializer,
        responses={200: ProductReviewSerializer, 404: OpenApiResponse(description="Review not found or unauthorized")},
        tags=["Marketplace - Reviews"],
    )
    def patch(self, request, pk):
        return self._update(request, pk)

    @extend_schema(
        operation_id="reviews_delete",
        summary="Delete own review",
        responses={200: OpenApiResponse(description="Review deleted"), 404: OpenApiResponse(description="Not found")},
        tags=["Marketplace - Reviews"],
    )
    def delete(self, request, pk):
        result = self.get_service().delete_review(request.user, pk)
        if not result.ok:
            return error_from_result(result)
        return success_response(message="Review deleted successfully")


class MyReviewsAPIView(ReviewBaseView):
    @extend_schema(
        operation_id="reviews_mine",
        summary="Reviews written by the current user",
        responses={200: MyReviewSerializer(many=True)},
        tags=["Marketplace - Reviews"],
    )
    def get(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=10)
        result = self.get_service().list_user_reviews(request.user, page=page, limit=limit)
        if not result.ok:
            return error_from_result(result)

        reviews = MyReviewSerializer(result.value.items, many=True).data
        return success_response(paginated_data("reviews", reviews, result.value))
