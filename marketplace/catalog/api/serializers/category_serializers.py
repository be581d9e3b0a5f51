from rest_framework import serializers

from marketplace.catalog.domain.models.category import Category


class CategorySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["id", "name", "slug", "description", "image_url"]
        read_only_fields = fields
