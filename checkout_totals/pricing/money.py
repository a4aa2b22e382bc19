from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

import structlog

from checkout_totals.config import settings
from checkout_totals.schemas.line_item import Money, ZERO

logger = structlog.get_logger()

def clamp(value: Money) -> Money:
    """Floor a money value at zero."""
    return value if value > ZERO else ZERO

def to_money(value, field: str = "") -> Money:
    """Coerce a loosely typed backend value to Money.

    Missing values count as zero. Anything that cannot be read as a finite
    number also counts as zero and is logged, so a bad field never blocks a
    total from being computed.
    """
    if value is None or value == "":
        return ZERO
    # bool is an int subclass, flags are never amounts
    if isinstance(value, bool):
        logger.warning("malformed_amount", field=field, value=value)
        return ZERO
    if isinstance(value, dict):
        # BigNumber-like wrappers
        for key in ("numeric", "value"):
            if key in value:
                return to_money(value[key], field)
        logger.warning("malformed_amount", field=field, value=str(value))
        return ZERO
    if isinstance(value, (int, Decimal)):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            logger.warning("malformed_amount", field=field, value=value)
            return ZERO
    else:
        logger.warning("malformed_amount", field=field, value=str(value))
        return ZERO

    if not result.is_finite():
        logger.warning("malformed_amount", field=field, value=str(value))
        return ZERO
    return result

def currency_exponent(currency_code: str) -> int:
    if currency_code.lower() in settings.zero_decimal_currencies():
        return 0
    return 2

def to_minor_units(amount: Money, currency_code: str, amounts_in_minor_units: bool | None = None) -> int:
    """Convert an amount to the integer the payment processor is charged."""
    if amounts_in_minor_units is None:
        amounts_in_minor_units = settings.AMOUNTS_IN_MINOR_UNITS

    scaled = clamp(amount)
    if not amounts_in_minor_units:
        scaled = scaled.scaleb(currency_exponent(currency_code))
    return int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
