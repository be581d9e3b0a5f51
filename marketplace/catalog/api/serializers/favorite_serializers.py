from rest_framework import serializers

from marketplace.catalog.domain.models.interaction import ProductFavorite

from .product_serializers import ProductListSerializer


class FavoriteSerializer(serializers.ModelSerializer):
    product = ProductListSerializer(read_only=True)

    class Meta:
        model = ProductFavorite
        fields = ["id", "product", "created_at"]
        read_only_fields = fields


class FavoriteRequestSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
