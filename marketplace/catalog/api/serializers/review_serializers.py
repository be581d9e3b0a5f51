from rest_framework import serializers

from marketplace.catalog.domain.models.interaction import ProductReview

from .user_serializers import ReviewerSerializer


class ProductReviewSerializer(serializers.ModelSerializer):
    reviewer = ReviewerSerializer(read_only=True)

    class Meta:
        model = ProductReview
        fields = ["id", "product", "reviewer", "rating", "comment", "is_verified_purchase", "created_at", "updated_at"]
        read_only_fields = fields


class MyReviewSerializer(ProductReviewSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)
    product_image = serializers.SerializerMethodField()

    class Meta(ProductReviewSerializer.Meta):
        fields = ProductReviewSerializer.Meta.fields + ["product_name", "product_image"]
        read_only_fields = fields

    def get_product_image(self, obj):
        images = list(obj.product.images.all())
        return images[0].image_url if images else None


class ReviewCreateSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    rating = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class ReviewUpdateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5, required=False)
    comment = serializers.CharField(required=False, allow_blank=True)
