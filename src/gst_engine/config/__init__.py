"""
Configuration module
"""

from gst_engine.config.gst_config import (
    GstConfig,
    PartialGstConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from gst_engine.config.config_loader import ConfigLoader
from gst_engine.config.config_validator import (
    ConfigValidator,
    ValidationResult,
    ValidationErrorDetail,
)

__all__ = [
    "GstConfig",
    "PartialGstConfig",
    "ENV_VAR_MAPPING",
    "ConfigDefaults",
    "ConfigLoader",
    "ConfigValidator",
    "ValidationResult",
    "ValidationErrorDetail",
]
