"""
Configuration Validator
Validates GST engine configuration with clear error messages
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

from gst_engine.utils.money import ROUNDING_MODES


@dataclass
class ValidationErrorDetail:
    """Validation error detail"""
    field: str
    message: str
    value: Optional[Any] = None


@dataclass
class ValidationResult:
    """Validation result"""
    valid: bool
    errors: List[ValidationErrorDetail] = field(default_factory=list)


def _as_decimal(value: Any) -> Optional[Decimal]:
    """Parse a numeric config value, None when it is not a number"""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        value = repr(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return None
    return result if result.is_finite() else None


class ConfigValidator:
    """
    ConfigValidator class
    Provides comprehensive validation for GST engine configuration
    """

    def __init__(self) -> None:
        self._errors: List[ValidationErrorDetail] = []

    def validate(self, config: Dict[str, Any]) -> ValidationResult:
        """
        Validate the entire configuration dictionary

        Args:
            config: Configuration dictionary to validate

        Returns:
            ValidationResult with any errors
        """
        self._errors = []

        self._validate_rates(config)
        self._validate_precision(config)
        self._validate_rounding_mode(config)
        self._validate_flags(config)
        self._validate_paths(config)

        return ValidationResult(
            valid=len(self._errors) == 0,
            errors=self._errors.copy()
        )

    def validate_or_raise(self, config: Dict[str, Any]) -> None:
        """
        Validate and raise if invalid

        Args:
            config: Configuration dictionary to validate

        Raises:
            ValidationError: If configuration is invalid
        """
        from gst_engine.exceptions import ValidationError

        result = self.validate(config)
        if not result.valid:
            error_messages = "; ".join(
                f"{e.field}: {e.message}" for e in result.errors
            )
            raise ValidationError(
                f"Configuration validation failed: {error_messages}",
                details={"errors": [e.field for e in result.errors]},
            )

    def _validate_rates(self, config: Dict[str, Any]) -> None:
        """Validate statutory rate fields"""
        max_rate: Optional[Decimal] = None

        raw_max = config.get("max_gst_rate")
        if raw_max is not None:
            max_rate = _as_decimal(raw_max)
            if max_rate is None or max_rate <= 0:
                self._errors.append(ValidationErrorDetail(
                    field="max_gst_rate",
                    message="max_gst_rate must be a positive number",
                    value=raw_max
                ))
                max_rate = None
            elif max_rate > 100:
                self._errors.append(ValidationErrorDetail(
                    field="max_gst_rate",
                    message="max_gst_rate should not exceed 100",
                    value=raw_max
                ))

        raw_tds = config.get("default_tds_rate")
        if raw_tds is not None:
            tds_rate = _as_decimal(raw_tds)
            if tds_rate is None or tds_rate < 0:
                self._errors.append(ValidationErrorDetail(
                    field="default_tds_rate",
                    message="default_tds_rate must be a non-negative number",
                    value=raw_tds
                ))
            elif tds_rate > 100:
                self._errors.append(ValidationErrorDetail(
                    field="default_tds_rate",
                    message="default_tds_rate should not exceed 100",
                    value=raw_tds
                ))

        raw_default = config.get("default_gst_rate")
        if raw_default is not None:
            default_rate = _as_decimal(raw_default)
            if default_rate is None or default_rate < 0:
                self._errors.append(ValidationErrorDetail(
                    field="default_gst_rate",
                    message="default_gst_rate must be a non-negative number",
                    value=raw_default
                ))
            elif max_rate is not None and default_rate > max_rate:
                self._errors.append(ValidationErrorDetail(
                    field="default_gst_rate",
                    message="default_gst_rate cannot exceed max_gst_rate",
                    value=raw_default
                ))

    def _validate_precision(self, config: Dict[str, Any]) -> None:
        """Validate integer precision settings"""
        amount_precision = config.get("amount_precision")
        if amount_precision is not None:
            if not isinstance(amount_precision, int) or isinstance(amount_precision, bool) \
                    or amount_precision < 0:
                self._errors.append(ValidationErrorDetail(
                    field="amount_precision",
                    message="amount_precision must be a non-negative integer",
                    value=amount_precision
                ))
            elif amount_precision > 6:
                self._errors.append(ValidationErrorDetail(
                    field="amount_precision",
                    message="amount_precision should not exceed 6",
                    value=amount_precision
                ))

        decimal_precision = config.get("decimal_precision")
        if decimal_precision is not None:
            if not isinstance(decimal_precision, int) or isinstance(decimal_precision, bool):
                self._errors.append(ValidationErrorDetail(
                    field="decimal_precision",
                    message="decimal_precision must be an integer",
                    value=decimal_precision
                ))
            elif decimal_precision < 16 or decimal_precision > 100:
                self._errors.append(ValidationErrorDetail(
                    field="decimal_precision",
                    message="decimal_precision must be between 16 and 100 digits",
                    value=decimal_precision
                ))

    def _validate_rounding_mode(self, config: Dict[str, Any]) -> None:
        """Validate rounding mode name"""
        rounding_mode = config.get("rounding_mode")
        if rounding_mode is not None:
            if not isinstance(rounding_mode, str) or rounding_mode.upper() not in ROUNDING_MODES:
                self._errors.append(ValidationErrorDetail(
                    field="rounding_mode",
                    message=f"rounding_mode must be one of: {', '.join(ROUNDING_MODES)}",
                    value=rounding_mode
                ))

    def _validate_flags(self, config: Dict[str, Any]) -> None:
        """Validate boolean switches"""
        for flag in ("round_results", "enable_audit_log"):
            value = config.get(flag)
            if value is not None and not isinstance(value, bool):
                self._errors.append(ValidationErrorDetail(
                    field=flag,
                    message=f"{flag} must be a boolean",
                    value=value
                ))

    def _validate_paths(self, config: Dict[str, Any]) -> None:
        """Validate path fields"""
        path_value = config.get("custom_rates_file")
        if path_value is not None and path_value != "":
            if not isinstance(path_value, str):
                self._errors.append(ValidationErrorDetail(
                    field="custom_rates_file",
                    message="custom_rates_file must be a string",
                    value=path_value
                ))
            elif not path_value.lower().endswith(".json"):
                self._errors.append(ValidationErrorDetail(
                    field="custom_rates_file",
                    message="custom_rates_file must be a .json file",
                    value=path_value
                ))
