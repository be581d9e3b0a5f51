from rest_framework import serializers

from marketplace.cart.domain.models.cart import CartItem
from marketplace.catalog.api.serializers.product_serializers import ProductListSerializer


class AddToCartSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    quantity = serializers.IntegerField(required=False, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()


class CartItemSerializer(serializers.ModelSerializer):
    product = ProductListSerializer(read_only=True)
    subtotal = serializers.DecimalField(source="total_price", max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = ["id", "product", "quantity", "subtotal", "added_at", "updated_at"]
        read_only_fields = fields


class CartLineOutputSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    product = ProductListSerializer(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    added_at = serializers.DateTimeField(read_only=True)


class CartSummarySerializer(serializers.Serializer):
    item_count = serializers.IntegerField(read_only=True)
    total_quantity = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    tax = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    shipping = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


class CartServiceOutputSerializer(serializers.Serializer):
    """Shape of CartService.get_cart output"""

    items = CartLineOutputSerializer(many=True, read_only=True)
    summary = CartSummarySerializer(read_only=True)
