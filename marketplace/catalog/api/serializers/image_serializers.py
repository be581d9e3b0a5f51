from rest_framework import serializers

from marketplace.catalog.domain.models.catalog import ProductImage


class ProductImageSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductImage
        fields = ["id", "image_url", "alt_text", "is_primary", "order"]
        read_only_fields = fields
