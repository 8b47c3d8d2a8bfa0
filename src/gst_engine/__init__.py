"""
GST Engine for Python

Deterministic Indian GST arithmetic: CGST/SGST/IGST splits, cess,
reverse GST, composite rates, TDS on GST, invoice totals and HSN/SAC
rate resolution
"""

from gst_engine.exceptions import (
    GstError,
    GstErrorCategory,
    TaxCalculationError,
    InvalidAmountError,
    InvalidRateError,
    InvalidCessRateError,
    EmptyInputError,
    InvalidTotalError,
    ValidationError,
    GstinValidationError,
    ConfigError,
)

# Constants
from gst_engine.constants import (
    GST_RATES,
    STATUTORY_GST_RATES,
    DEFAULT_GST_RATE,
    DEFAULT_TDS_RATE,
    MAX_GST_RATE,
    GST_STATE_CODES,
    GstInvoiceType,
    GstTransactionType,
)

# Configuration
from gst_engine.config import (
    GstConfig,
    PartialGstConfig,
    ConfigLoader,
    ConfigValidator,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)

# Models
from gst_engine.models import (
    TaxCalculationInput,
    TaxBreakdown,
    ReverseGstResult,
    Supply,
    TdsResult,
    GstInvoiceLineItem,
    GstInvoice,
    LineItemTaxResult,
    InvoiceTotals,
    InvoiceTaxResult,
)

# Calculation
from gst_engine.calculation import (
    TaxCalculator,
    LineItemEngine,
    InvoiceAggregator,
    RateManager,
    RateRule,
    STATUTORY_RATE_RULES,
)

# Validation
from gst_engine.validation import (
    GstinValidator,
    PanValidator,
    HsnValidator,
    SacValidator,
    is_intra_state,
    get_state_name,
    is_valid_state_code,
)

from gst_engine.utils import round_money

__version__ = "0.1.0"

__all__ = [
    # Exceptions
    "GstError",
    "GstErrorCategory",
    "TaxCalculationError",
    "InvalidAmountError",
    "InvalidRateError",
    "InvalidCessRateError",
    "EmptyInputError",
    "InvalidTotalError",
    "ValidationError",
    "GstinValidationError",
    "ConfigError",
    # Constants
    "GST_RATES",
    "STATUTORY_GST_RATES",
    "DEFAULT_GST_RATE",
    "DEFAULT_TDS_RATE",
    "MAX_GST_RATE",
    "GST_STATE_CODES",
    "GstInvoiceType",
    "GstTransactionType",
    # Configuration
    "GstConfig",
    "PartialGstConfig",
    "ConfigLoader",
    "ConfigValidator",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    # Models
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
    # Calculation
    "TaxCalculator",
    "LineItemEngine",
    "InvoiceAggregator",
    "RateManager",
    "RateRule",
    "STATUTORY_RATE_RULES",
    # Validation
    "GstinValidator",
    "PanValidator",
    "HsnValidator",
    "SacValidator",
    "is_intra_state",
    "get_state_name",
    "is_valid_state_code",
    # Utilities
    "round_money",
]
