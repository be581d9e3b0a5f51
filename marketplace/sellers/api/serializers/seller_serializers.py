from rest_framework import serializers

from marketplace.ordering.api.serializers.order_serializers import ShippingAddressSerializer
from marketplace.ordering.domain.models.order import Order, OrderItem


class MonthlyRevenueSerializer(serializers.Serializer):
    month = serializers.CharField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    units_sold = serializers.IntegerField()
    orders = serializers.IntegerField()


class TopProductSerializer(serializers.Serializer):
    product_id = serializers.UUIDField()
    name = serializers.CharField()
    units_sold = serializers.IntegerField()
    revenue = serializers.DecimalField(max_digits=14, decimal_places=2)


class SellerStatsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    active_products = serializers.IntegerField()
    total_sales = serializers.IntegerField()
    total_revenue = serializers.DecimalField(max_digits=14, decimal_places=2)
    monthly_revenue = MonthlyRevenueSerializer(many=True)
    top_products = TopProductSerializer(many=True)


class SellerOrderItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = OrderItem
        fields = ["id", "product", "product_name", "quantity", "unit_price", "total_price"]
        read_only_fields = fields


class SellerOrderSerializer(serializers.ModelSerializer):
    """An order seen by one seller: only their lines and their share"""

    buyer_name = serializers.CharField(source="buyer.full_name", read_only=True)
    buyer_email = serializers.EmailField(source="buyer.email", read_only=True)
    items = SellerOrderItemSerializer(source="seller_items", many=True, read_only=True)
    seller_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    shipping_address = ShippingAddressSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "order_number",
            "status",
            "payment_method",
            "buyer_name",
            "buyer_email",
            "items",
            "seller_total",
            "shipping_address",
            "created_at",
        ]
        read_only_fields = fields
