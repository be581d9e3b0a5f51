from decimal import Decimal

from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from authentication.models import Address
from marketplace.models import CartItem, Order, OrderItem, Product
from marketplace.tests.factories import (
    AddressFactory,
    CartFactory,
    CartItemFactory,
    OrderFactory,
    OrderItemFactory,
    ProductFactory,
    UserFactory,
)


@override_settings(SHIPPING_FLAT_RATE=Decimal("50.00"), TAX_RATES={"default": Decimal("0.12")})
class PlaceOrderTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer = UserFactory()
        self.client.force_authenticate(user=self.buyer)
        self.url = reverse("marketplace:order-list")

        self.product_a = ProductFactory(price=Decimal("10.00"), stock_quantity=5)
        self.product_b = ProductFactory(price=Decimal("5.00"), stock_quantity=3)
        cart = CartFactory(user=self.buyer)
        CartItemFactory(cart=cart, product=self.product_a, quantity=2)
        CartItemFactory(cart=cart, product=self.product_b, quantity=1)

    def test_place_order_prices_and_persists(self):
        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data["success"])
        self.assertEqual(response.data["message"], "Order created successfully")

        order = response.data["data"]["order"]
        self.assertEqual(order["subtotal"], "25.00")
        self.assertEqual(order["shipping_fee"], "50.00")
        self.assertEqual(order["tax_amount"], "3.00")
        self.assertEqual(order["total_amount"], "78.00")
        self.assertEqual(order["status"], Order.STATUS_PENDING)
        self.assertTrue(order["order_number"].startswith("PM-"))
        self.assertEqual(len(order["items"]), 2)

    def test_place_order_clears_cart_and_deducts_stock(self):
        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

        self.assertFalse(CartItem.objects.filter(cart__user=self.buyer).exists())
        self.product_a.refresh_from_db()
        self.product_b.refresh_from_db()
        self.assertEqual(self.product_a.stock_quantity, 3)
        self.assertEqual(self.product_b.stock_quantity, 2)
        self.assertEqual(self.product_a.total_sales, 2)

    def test_order_items_snapshot_price_and_seller(self):
        response = self.client.post(self.url, {"payment_method": "bank_transfer"}, format="json")
        order_id = response.data["data"]["order"]["id"]

        Product.objects.filter(id=self.product_a.id).update(price=Decimal("99.00"), name="Renamed pineapple")

        item = OrderItem.objects.get(product=self.product_a)
        self.assertEqual(item.unit_price, Decimal("10.00"))
        self.assertEqual(item.total_price, Decimal("20.00"))
        self.assertEqual(item.seller, self.product_a.seller)
        self.assertEqual(item.product_name, self.product_a.name)
        self.assertEqual(Order.objects.get(id=order_id).total_amount, Decimal("78.00"))

        detail = self.client.get(reverse("marketplace:order-detail", args=[order_id]))
        self.assertEqual(detail.data["data"]["order"]["total_amount"], "78.00")
        line = next(i for i in detail.data["data"]["order"]["items"] if i["product_name"] == self.product_a.name)
        self.assertEqual(line["unit_price"], "10.00")

    def test_insufficient_stock_rolls_back(self):
        Product.objects.filter(id=self.product_a.id).update(stock_quantity=1)

        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(response.data["success"])
        self.assertIn("Insufficient stock", response.data["message"])
        self.assertFalse(Order.objects.exists())
        self.assertEqual(CartItem.objects.filter(cart__user=self.buyer).count(), 2)
        self.product_b.refresh_from_db()
        self.assertEqual(self.product_b.stock_quantity, 3)

    def test_empty_cart_writes_nothing(self):
        CartItem.objects.filter(cart__user=self.buyer).delete()

        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "Cart is empty")
        self.assertFalse(Order.objects.exists())
        self.assertFalse(Address.objects.filter(user=self.buyer).exists())

    def test_deleted_products_are_skipped(self):
        Product.objects.filter(id=self.product_b.id).update(status=Product.STATUS_DELETED)

        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["data"]["order"]["subtotal"], "20.00")
        self.assertEqual(len(response.data["data"]["order"]["items"]), 1)

    def test_placeholder_address_created_when_user_has_none(self):
        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        address = Address.objects.get(user=self.buyer)
        self.assertTrue(address.is_default)
        self.assertEqual(address.street_address, "Default Address")
        self.assertEqual(Order.objects.get().shipping_address, address)

    def test_default_address_is_used(self):
        address = AddressFactory(user=self.buyer, is_default=True)

        self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(Order.objects.get().shipping_address, address)
        self.assertEqual(Address.objects.filter(user=self.buyer).count(), 1)

    def test_explicit_address_must_belong_to_buyer(self):
        foreign_address = AddressFactory()

        response = self.client.post(
            self.url,
            {"payment_method": "cash_on_delivery", "shipping_address_id": foreign_address.id},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Order.objects.exists())

    def test_invalid_payment_method(self):
        response = self.client.post(self.url, {"payment_method": "barter"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("payment_method", response.data["errors"])

    def test_requires_authentication(self):
        self.client.force_authenticate(user=None)

        response = self.client.post(self.url, {"payment_method": "cash_on_delivery"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data["success"])


class OrderHistoryTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.buyer = UserFactory()
        self.client.force_authenticate(user=self.buyer)

    def test_list_orders_newest_first_with_item_count(self):
        older = OrderFactory(buyer=self.buyer)
        newer = OrderFactory(buyer=self.buyer)
        OrderItemFactory.create_batch(2, order=newer)
        OrderFactory()

        response = self.client.get(reverse("marketplace:order-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        orders = response.data["data"]["orders"]
        self.assertEqual(len(orders), 2)
        self.assertEqual({o["id"] for o in orders}, {str(older.id), str(newer.id)})
        by_id = {o["id"]: o for o in orders}
        self.assertEqual(by_id[str(newer.id)]["item_count"], 2)
        self.assertEqual(response.data["data"]["pagination"]["total"], 2)
        self.assertEqual(response.data["data"]["pagination"]["limit"], 10)

    def test_list_orders_filtered_by_status(self):
        OrderFactory(buyer=self.buyer, status=Order.STATUS_PENDING)
        OrderFactory(buyer=self.buyer, status=Order.STATUS_DELIVERED)

        response = self.client.get(reverse("marketplace:order-list"), {"status": Order.STATUS_DELIVERED})

        self.assertEqual(response.data["data"]["pagination"]["total"], 1)
        self.assertEqual(response.data["data"]["orders"][0]["status"], Order.STATUS_DELIVERED)

    def test_retrieve_own_order(self):
        order = OrderFactory(buyer=self.buyer)
        OrderItemFactory(order=order)

        response = self.client.get(reverse("marketplace:order-detail", args=[order.id]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["data"]["order"]["order_number"], order.order_number)
        self.assertEqual(len(response.data["data"]["order"]["items"]), 1)

    def test_other_buyers_order_is_not_found(self):
        order = OrderFactory()

        response = self.client.get(reverse("marketplace:order-detail", args=[order.id]))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Order not found")
