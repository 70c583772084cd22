"""Money rounding shared by pricing and promo calculations."""

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP

MONEY_PLACES = Decimal("0.01")
ZERO = Decimal("0")


def to_money(value: Decimal) -> Decimal:
    return value.quantize(MONEY_PLACES, rounding=ROUND_HALF_UP)
