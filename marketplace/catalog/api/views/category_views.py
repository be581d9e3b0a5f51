from drf_spectacular.utils import extend_schema
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from infrastructure.container import container
from marketplace.catalog.api.serializers.category_serializers import CategorySerializer
from utils.api_responses import error_from_result, success_response


class CategoryListAPIView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="categories_list",
        summary="List active categories",
        responses={200: CategorySerializer(many=True)},
        tags=["Marketplace - Categories"],
    )
    def get(self, request):
        result = container.catalog_service().list_categories()
        if not result.ok:
            return error_from_result(result)
        return success_response({"categories": CategorySerializer(result.value, many=True).data})
