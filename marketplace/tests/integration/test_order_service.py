from decimal import Decimal
from unittest.mock import patch

from django.test import TestCase, override_settings

from marketplace.models import CartItem, Order
from marketplace.ordering.domain.services.order_service import OrderService
from marketplace.tests.factories import CartFactory, CartItemFactory, OrderFactory, ProductFactory, UserFactory
from utils.service_base import ErrorCodes

GENERATOR = "marketplace.ordering.domain.services.order_service.generate_order_number"


@override_settings(ORDER_NUMBER_MAX_ATTEMPTS=3)
class OrderNumberCollisionTests(TestCase):
    def setUp(self):
        self.service = OrderService()
        self.buyer = UserFactory()
        product = ProductFactory(price=Decimal("12.00"), stock_quantity=4)
        CartItemFactory(cart=CartFactory(user=self.buyer), product=product, quantity=1)
        OrderFactory(order_number="PM-TAKEN-00000")

    def test_regenerates_on_collision(self):
        with patch(GENERATOR, side_effect=["PM-TAKEN-00000", "PM-FRESH-00001"]) as generator:
            result = self.service.place_order(self.buyer, "cash_on_delivery")

        self.assertTrue(result.ok)
        self.assertEqual(result.value.order_number, "PM-FRESH-00001")
        self.assertEqual(generator.call_count, 2)

    def test_gives_up_after_max_attempts(self):
        with patch(GENERATOR, return_value="PM-TAKEN-00000"):
            result = self.service.place_order(self.buyer, "cash_on_delivery")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.ORDER_NUMBER_EXHAUSTED)
        self.assertEqual(Order.objects.filter(buyer=self.buyer).count(), 0)
        self.assertEqual(CartItem.objects.filter(cart__user=self.buyer).count(), 1)

    def test_missing_payment_method(self):
        result = self.service.place_order(self.buyer, "")

        self.assertFalse(result.ok)
        self.assertEqual(result.error, ErrorCodes.VALIDATION_ERROR)
