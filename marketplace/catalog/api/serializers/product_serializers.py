from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import Product

from .category_serializers import CategorySerializer
from .image_serializers import ProductImageSerializer
from .user_serializers import SellerSummarySerializer


class ProductListSerializer(serializers.ModelSerializer):
    """Product card: the essentials plus the primary image"""

    category_name = serializers.CharField(source="category.name", read_only=True, default=None)
    seller = SellerSummarySerializer(read_only=True)
    primary_image = serializers.SerializerMethodField()
    is_favorite = serializers.SerializerMethodField()

    class Meta:
        model = Product
        fields = [
            "id",
            "name",
            "slug",
            "price",
            "unit",
            "stock_quantity",
            "is_organic",
            "origin",
            "status",
            "rating_average",
            "total_reviews",
            "total_sales",
            "category_name",
            "seller",
            "primary_image",
            "is_favorite",
            "created_at",
        ]
        read_only_fields = fields

    def get_primary_image(self, obj):
        # images are prefetched and ordered primary-first
        images = list(obj.images.all())
        return images[0].image_url if images else None

    def get_is_favorite(self, obj):
        return bool(getattr(obj, "is_favorite", False))


class ProductDetailSerializer(ProductListSerializer):
    category = CategorySerializer(read_only=True)
    images = ProductImageSerializer(many=True, read_only=True)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            "description",
            "weight",
            "harvest_date",
            "category",
            "images",
            "view_count",
            "updated_at",
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """Input for creating a product; with partial=True, for updates"""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=0)
    stock_quantity = serializers.IntegerField(min_value=0)
    unit = serializers.CharField(required=False, max_length=30)
    weight = serializers.DecimalField(max_digits=8, decimal_places=2, required=False, allow_null=True, min_value=0)
    is_organic = serializers.BooleanField(required=False)
    origin = serializers.CharField(required=False, allow_blank=True, max_length=200)
    harvest_date = serializers.DateField(required=False, allow_null=True)
    category_id = serializers.IntegerField(required=False, allow_null=True)
    images = serializers.ListField(child=serializers.URLField(max_length=2000), required=False)
