"""Utilities module initialization"""

from gst_engine.utils.money import (
    ROUNDING_MODES,
    to_decimal,
    round_money,
    percent_of,
)

__all__ = ["ROUNDING_MODES", "to_decimal", "round_money", "percent_of"]
