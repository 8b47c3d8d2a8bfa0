"""Calculation module initialization

This module provides the GST arithmetic:
- TaxCalculator: single-amount tax, reverse GST, composite rate, TDS
- LineItemEngine: per-line taxable value and tax
- InvoiceAggregator: invoice totals
- RateManager: rate lookup by HSN/SAC code with overrides
"""

from gst_engine.calculation.calculator import TaxCalculator
from gst_engine.calculation.line_item import LineItemEngine
from gst_engine.calculation.invoice import InvoiceAggregator
from gst_engine.calculation.rates import (
    RateManager,
    RateRule,
    STATUTORY_RATE_RULES,
)

__all__ = [
    "TaxCalculator",
    "LineItemEngine",
    "InvoiceAggregator",
    "RateManager",
    "RateRule",
    "STATUTORY_RATE_RULES",
]
