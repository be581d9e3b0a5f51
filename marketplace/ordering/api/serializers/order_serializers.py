from rest_framework import serializers

from authentication.domain.models.address import Address
from marketplace.ordering.domain.models.order import Order, OrderItem


class ShippingAddressSerializer(serializers.ModelSerializer):
    class Meta:
        model = Address
        fields = ["id", "street_address", "city", "state", "postal_code", "country"]
        read_only_fields = fields


class OrderItemSerializer(serializers.ModelSerializer):
    product_image = serializers.SerializerMethodField()

    class Meta:
        model = OrderItem
        fields = [
            "id",
            "product",
            "seller",
            "product_name",
            "product_image",
            "quantity",
            "unit_price",
            "total_price",
        ]
        read_only_fields = fields

    def get_product_image(self, obj):
        images = list(obj.product.images.all())
        return images[0].image_url if images else None


class OrderSerializer(serializers.ModelSerializer):
    items = OrderItemSerializer(many=True, read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "payment_method",
            "subtotal",
            "shipping_fee",
            "tax_amount",
            "total_amount",
            "shipping_address",
            "notes",
            "items",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class OrderListSerializer(serializers.ModelSerializer):
    item_count = serializers.IntegerField(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "payment_method",
            "total_amount",
            "item_count",
            "created_at",
        ]
        read_only_fields = fields


class PlaceOrderSerializer(serializers.Serializer):
    payment_method = serializers.ChoiceField(choices=Order.PAYMENT_METHOD_CHOICES)
    shipping_address_id = serializers.IntegerField(required=False, allow_null=True, min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, default="", max_length=1000)
