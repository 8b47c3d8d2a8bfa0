"""
Money helpers
Decimal coercion and the rounding policy applied to presented amounts
"""

import decimal
from decimal import Decimal, InvalidOperation
from typing import Any, Union

from gst_engine.exceptions import ValidationError


Number = Union[Decimal, int, float, str]

HUNDRED = Decimal("100")

# Rounding modes accepted by configuration, keyed by decimal module name
ROUNDING_MODES = {
    "ROUND_HALF_UP": decimal.ROUND_HALF_UP,
    "ROUND_HALF_EVEN": decimal.ROUND_HALF_EVEN,
    "ROUND_HALF_DOWN": decimal.ROUND_HALF_DOWN,
    "ROUND_UP": decimal.ROUND_UP,
    "ROUND_DOWN": decimal.ROUND_DOWN,
    "ROUND_CEILING": decimal.ROUND_CEILING,
    "ROUND_FLOOR": decimal.ROUND_FLOOR,
}


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """
    Coerce a number to Decimal without binary float drift

    Floats go through their shortest repr, so 0.1 becomes Decimal("0.1").

    Raises:
        ValidationError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number, not a boolean", field=field)

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise ValidationError(
                f"{field} is not a valid number: {value!r}", field=field
            ) from e
    else:
        raise ValidationError(
            f"{field} must be a number (got {type(value).__name__})", field=field
        )

    if not result.is_finite():
        raise ValidationError(f"{field} must be finite (got {value!r})", field=field)
    return result


def round_money(
    value: Number,
    places: int = 2,
    rounding: str = "ROUND_HALF_UP",
) -> Decimal:
    """
    Round an amount to a fixed number of decimal places

    Args:
        value: Amount to round
        places: Decimal places to keep (2 for paise)
        rounding: Name of a decimal rounding mode

    Returns:
        Quantized Decimal
    """
    if rounding not in ROUNDING_MODES:
        raise ValidationError(
            f"Unknown rounding mode: {rounding}", field="rounding_mode"
        )
    exponent = Decimal(1).scaleb(-places)
    return to_decimal(value).quantize(exponent, rounding=ROUNDING_MODES[rounding])


def percent_of(amount: Decimal, rate: Decimal) -> Decimal:
    """amount x rate / 100"""
    return amount * rate / HUNDRED
