"""
PricingService - Price Calculations

Handles subtotal, tax, shipping and grand total for carts and orders.
All calculations use Decimal for precision (no floating point errors).
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from django.conf import settings

from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PricingService(BaseService):
    """
    Service for calculating order money fields.

    Each line is a dict with ``unit_price`` and ``quantity``. The shipping fee
    is a flat rate and tax is a percentage of the subtotal, both read from
    settings (SHIPPING_FLAT_RATE, TAX_RATES).

    All methods are stateless (pure functions) for easy testing.
    """

    def get_tax_rate(self, region: str = "default") -> Decimal:
        tax_rates = getattr(settings, "TAX_RATES", {"default": Decimal("0.12")})
        return Decimal(str(tax_rates.get(region, tax_rates["default"])))

    def calculate_shipping_cost(self) -> ServiceResult[Decimal]:
        """Flat shipping fee applied once per order."""
        flat_rate = to_money(getattr(settings, "SHIPPING_FLAT_RATE", "50.00"))
        return service_ok(flat_rate)

    @BaseService.log_performance
    def calculate_subtotal(self, lines: List[Dict]) -> ServiceResult[Decimal]:
        subtotal = Decimal("0")
        for line in lines:
            quantity = line.get("quantity", 0)
            if quantity <= 0:
                return service_err(ErrorCodes.INVALID_QUANTITY, f"Invalid quantity: {quantity}")
            subtotal += Decimal(str(line["unit_price"])) * quantity
        return service_ok(to_money(subtotal))

    @BaseService.log_performance
    def calculate_order_total(self, lines: List[Dict], region: str = "default") -> ServiceResult[Dict[str, Decimal]]:
        """
        Calculate the money fields of an order.

        Returns:
            ServiceResult with subtotal, tax, tax_rate, shipping and total

        Example:
            >>> result = pricing_service.calculate_order_total(
            ...     [{"unit_price": Decimal("10.00"), "quantity": 2}, {"unit_price": Decimal("5.00"), "quantity": 1}]
            ... )
            >>> result.value["total"]
            Decimal('78.00')
        """
        subtotal_result = self.calculate_subtotal(lines)
        if not subtotal_result.ok:
            return subtotal_result

        subtotal = subtotal_result.value
        tax_rate = self.get_tax_rate(region)
        tax = (subtotal * tax_rate).quantize(CENT, rounding=ROUND_HALF_UP)
        shipping = self.calculate_shipping_cost().value if lines else Decimal("0.00")
        total = subtotal + shipping + tax

        self.logger.info(f"Order total calculated: items={len(lines)}, shipping={shipping}, total={total}")

        return service_ok(
            {
                "subtotal": subtotal,
                "tax": tax,
                "tax_rate": tax_rate,
                "shipping": shipping,
                "total": total.quantize(CENT, rounding=ROUND_HALF_UP),
                "items_count": len(lines),
            }
        )
