"""Validation module initialization"""

from gst_engine.validation.gstin import GstinValidator, PanValidator
from gst_engine.validation.codes import HsnValidator, SacValidator
from gst_engine.validation.state import (
    normalize_state_code,
    is_intra_state,
    get_state_name,
    is_valid_state_code,
)

__all__ = [
    "GstinValidator",
    "PanValidator",
    "HsnValidator",
    "SacValidator",
    "normalize_state_code",
    "is_intra_state",
    "get_state_name",
    "is_valid_state_code",
]
