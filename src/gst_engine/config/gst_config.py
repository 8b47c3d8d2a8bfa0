"""
GST Engine Configuration Types and Schema
Type-safe configuration objects for the tax engine
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from gst_engine.constants import DEFAULT_GST_RATE, DEFAULT_TDS_RATE, MAX_GST_RATE
from gst_engine.utils.money import ROUNDING_MODES


class ConfigDefaults:
    """Default configuration values"""
    DEFAULT_TDS_RATE = DEFAULT_TDS_RATE
    MAX_GST_RATE = MAX_GST_RATE
    DEFAULT_GST_RATE = DEFAULT_GST_RATE
    AMOUNT_PRECISION = 2
    ROUNDING_MODE = "ROUND_HALF_UP"
    ROUND_RESULTS = False
    DECIMAL_PRECISION = 28
    ENABLE_AUDIT_LOG = True


# Environment variable mapping
ENV_VAR_MAPPING = {
    "GST_DEFAULT_TDS_RATE": "default_tds_rate",
    "GST_MAX_RATE": "max_gst_rate",
    "GST_DEFAULT_RATE": "default_gst_rate",
    "GST_AMOUNT_PRECISION": "amount_precision",
    "GST_ROUNDING_MODE": "rounding_mode",
    "GST_ROUND_RESULTS": "round_results",
    "GST_DECIMAL_PRECISION": "decimal_precision",
    "GST_ENABLE_AUDIT_LOG": "enable_audit_log",
    "GST_CUSTOM_RATES_FILE": "custom_rates_file",
}


class GstConfig(BaseModel):
    """
    Main GST engine configuration class
    Defines the statutory knobs and the rounding policy of the engine
    """

    # Statutory parameters
    default_tds_rate: Decimal = Field(
        default=ConfigDefaults.DEFAULT_TDS_RATE,
        description="TDS percentage withheld on the GST amount",
        ge=0,
        le=100
    )
    max_gst_rate: Decimal = Field(
        default=ConfigDefaults.MAX_GST_RATE,
        description="Highest GST rate accepted by the calculator",
        gt=0,
        le=100
    )
    default_gst_rate: Decimal = Field(
        default=ConfigDefaults.DEFAULT_GST_RATE,
        description="Rate used when a classification code matches no rule",
        ge=0
    )

    # Rounding policy
    amount_precision: int = Field(
        default=ConfigDefaults.AMOUNT_PRECISION,
        description="Decimal places kept when results are rounded",
        ge=0,
        le=6
    )
    rounding_mode: str = Field(
        default=ConfigDefaults.ROUNDING_MODE,
        description="decimal module rounding mode name"
    )
    round_results: bool = Field(
        default=ConfigDefaults.ROUND_RESULTS,
        description="Round calculator results before returning them"
    )
    decimal_precision: int = Field(
        default=ConfigDefaults.DECIMAL_PRECISION,
        description="Significant digits used for intermediate arithmetic",
        ge=16,
        le=100
    )

    # Audit logging
    enable_audit_log: bool = Field(
        default=ConfigDefaults.ENABLE_AUDIT_LOG,
        description="Log every calculation at DEBUG level"
    )

    # Tenant overrides
    custom_rates_file: Optional[str] = Field(
        default=None,
        description="JSON file mapping HSN/SAC codes to override rates"
    )

    model_config = {
        "str_strip_whitespace": True,
        "validate_assignment": True,
    }

    @field_validator("rounding_mode")
    @classmethod
    def validate_rounding_mode(cls, v: str) -> str:
        """Validate rounding_mode names a decimal rounding constant"""
        v = v.upper()
        if v not in ROUNDING_MODES:
            raise ValueError(
                f"rounding_mode must be one of: {', '.join(ROUNDING_MODES)}"
            )
        return v

    @field_validator("custom_rates_file")
    @classmethod
    def validate_custom_rates_file(cls, v: Optional[str]) -> Optional[str]:
        """Validate the override file is a JSON path"""
        if v is not None and v != "":
            if not v.lower().endswith(".json"):
                raise ValueError("custom_rates_file must be a .json file")
        return v or None

    @model_validator(mode="after")
    def check_default_rate_in_range(self) -> "GstConfig":
        """The fallback rate must itself be an acceptable rate"""
        if self.default_gst_rate > self.max_gst_rate:
            raise ValueError("default_gst_rate cannot exceed max_gst_rate")
        return self


class PartialGstConfig(BaseModel):
    """
    Partial configuration for merging from multiple sources
    All fields are optional to allow partial configuration
    """

    default_tds_rate: Optional[Decimal] = None
    max_gst_rate: Optional[Decimal] = None
    default_gst_rate: Optional[Decimal] = None
    amount_precision: Optional[int] = None
    rounding_mode: Optional[str] = None
    round_results: Optional[bool] = None
    decimal_precision: Optional[int] = None
    enable_audit_log: Optional[bool] = None
    custom_rates_file: Optional[str] = None

    model_config = {
        "str_strip_whitespace": True,
    }
