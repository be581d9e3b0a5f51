import re

import pytest

from marketplace.ordering.domain.order_numbers import generate_order_number, to_base36


@pytest.mark.unit
class TestOrderNumbers:
    def test_to_base36(self):
        assert to_base36(0) == "0"
        assert to_base36(35) == "Z"
        assert to_base36(36) == "10"
        assert to_base36(1700000000000) == "LOYW3V28"

    def test_to_base36_rejects_negative(self):
        with pytest.raises(ValueError):
            to_base36(-1)

    def test_format(self):
        number = generate_order_number(now_ms=1700000000000)

        assert re.fullmatch(r"PM-LOYW3V28-[0-9A-Z]{5}", number)

    def test_uses_current_time_by_default(self):
        assert re.fullmatch(r"PM-[0-9A-Z]+-[0-9A-Z]{5}", generate_order_number())

    def test_suffix_varies(self):
        numbers = {generate_order_number(now_ms=1) for _ in range(20)}

        assert len(numbers) > 1
