"""Shared numeric helpers for Decimal money math."""

from decimal import ROUND_HALF_UP, Decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def to_decimal(value) -> Decimal:
    """Coerce ints, floats and strings to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return part / whole x 100, defined as 0 when whole is 0."""
    if whole == 0:
        return ZERO
    return part / whole * HUNDRED


def round_half_up(value: Decimal, places: int = 0) -> Decimal:
    """Round half away from zero, matching how the figures are displayed."""
    exponent = Decimal(1).scaleb(-places)
    return value.quantize(exponent, rounding=ROUND_HALF_UP)
