from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import serializers
from rest_framework.views import APIView

from authentication.permissions import SellerRequired
from infrastructure.container import container
from marketplace.sellers.api.serializers.seller_serializers import SellerOrderSerializer, SellerStatsSerializer
from utils.api_responses import error_from_result, paginated_data, success_response
from utils.pagination import parse_pagination


class SellerStatsAPIView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="seller_stats",
        summary="Seller dashboard figures",
        description="""
        **What it returns:**
        - Product counts (total, in stock)
        - Units sold and revenue, excluding cancelled and refunded orders
        - Revenue per month for the last 12 months
        - Top 10 products by units sold
        """,
        responses={200: SellerStatsSerializer, 403: OpenApiResponse(description="Seller account required")},
        tags=["Marketplace - Sellers"],
    )
    def get(self, request):
        result = container.seller_analytics_service().get_stats(request.user)
        if not result.ok:
            return error_from_result(result)
        return success_response({"stats": SellerStatsSerializer(result.value).data})


class SellerOrdersAPIView(APIView):
    permission_classes = [SellerRequired]

    @extend_schema(
        operation_id="seller_orders",
        summary="Orders containing my products",
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, OpenApiParameter.QUERY),
            OpenApiParameter("product_id", OpenApiTypes.UUID, OpenApiParameter.QUERY),
            OpenApiParameter("page", OpenApiTypes.INT, OpenApiParameter.QUERY),
            OpenApiParameter("limit", OpenApiTypes.INT, OpenApiParameter.QUERY),
        ],
        responses={200: SellerOrderSerializer(many=True), 403: OpenApiResponse(description="Seller account required")},
        tags=["Marketplace - Sellers"],
    )
    def get(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        product_id = request.query_params.get("product_id")
        if product_id:
            product_id = serializers.UUIDField().run_validation(product_id)

        result = container.seller_analytics_service().list_orders(
            request.user,
            page=page,
            limit=limit,
            status=request.query_params.get("status"),
            product_id=product_id,
        )
        if not result.ok:
            return error_from_result(result)

        orders = SellerOrderSerializer(result.value.items, many=True).data
        return success_response(paginated_data("orders", orders, result.value))
