"""Models module initialization"""

from gst_engine.models.parsing import validate_model
from gst_engine.models.tax import (
    TaxCalculationInput,
    TaxBreakdown,
    ReverseGstResult,
    Supply,
    TdsResult,
)
from gst_engine.models.invoice import (
    GstInvoiceLineItem,
    GstInvoice,
    LineItemTaxResult,
    InvoiceTotals,
    InvoiceTaxResult,
)

__all__ = [
    "validate_model",
    "TaxCalculationInput",
    "TaxBreakdown",
    "ReverseGstResult",
    "Supply",
    "TdsResult",
    "GstInvoiceLineItem",
    "GstInvoice",
    "LineItemTaxResult",
    "InvoiceTotals",
    "InvoiceTaxResult",
]
