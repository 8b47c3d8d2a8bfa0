"""Exception classes for the GST engine"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class GstErrorCategory(str, Enum):
    """GST error category codes"""
    CALCULATION = "CALC"
    VALIDATION = "VAL"
    CONFIG = "CONFIG"
    UNKNOWN = "UNKNOWN"


class GstError(Exception):
    """
    Base exception for GST errors

    All errors raised by the engine extend from this class.
    Provides consistent error handling and categorization so the
    hosting layer can translate failures into user-facing responses.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.cause = cause
        self.details = details
        self.timestamp = datetime.now(timezone.utc)
        self.category = self._determine_category(code)

    def _determine_category(self, code: Optional[str]) -> GstErrorCategory:
        """Determine error category from code"""
        if not code:
            return GstErrorCategory.UNKNOWN

        if code.startswith("CALC"):
            return GstErrorCategory.CALCULATION
        if code.startswith("VAL"):
            return GstErrorCategory.VALIDATION
        if code.startswith("CONFIG"):
            return GstErrorCategory.CONFIG

        return GstErrorCategory.UNKNOWN

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary"""
        return {
            "name": self.__class__.__name__,
            "message": str(self),
            "code": self.code,
            "category": self.category.value,
            "timestamp": self.timestamp.isoformat(),
            "details": _jsonable(self.details),
        }

    def has_code(self, code: str) -> bool:
        """Check if error has a specific code"""
        return self.code == code

    def is_category(self, category: GstErrorCategory) -> bool:
        """Check if error belongs to a category"""
        return self.category == category

    def get_description(self) -> str:
        """Get human-readable error description"""
        parts = [str(self)]

        if self.code:
            parts.insert(0, f"[{self.code}]")

        return " ".join(parts)


def _jsonable(details: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    # Decimal values are rendered as strings to keep them exact
    if details is None:
        return None
    return {
        key: str(value) if isinstance(value, Decimal) else value
        for key, value in details.items()
    }


class TaxCalculationError(GstError):
    """Tax calculation error"""

    def __init__(
        self,
        message: str,
        code: str = "CALC01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)


class InvalidAmountError(TaxCalculationError):
    """Amount is non-positive where positive is required, or negative where non-negative is required"""

    def __init__(self, amount: Any, message: str = "Amount must be positive") -> None:
        super().__init__(
            f"{message} (got {amount})",
            code="CALC_INVALID_AMOUNT",
            details={"amount": amount},
        )
        self.amount = amount


class InvalidRateError(TaxCalculationError):
    """GST rate outside the permitted range"""

    def __init__(
        self,
        rate: Any,
        minimum: Any = Decimal("0"),
        maximum: Any = Decimal("50"),
        message: Optional[str] = None,
    ) -> None:
        super().__init__(
            message or f"GST rate must be between {minimum} and {maximum} (got {rate})",
            code="CALC_INVALID_RATE",
            details={"rate": rate, "min": minimum, "max": maximum},
        )
        self.rate = rate
        self.minimum = minimum
        self.maximum = maximum


class InvalidCessRateError(TaxCalculationError):
    """Cess rate is negative"""

    def __init__(self, cess_rate: Any) -> None:
        super().__init__(
            f"Cess rate cannot be negative (got {cess_rate})",
            code="CALC_INVALID_CESS_RATE",
            details={"cess_rate": cess_rate},
        )
        self.cess_rate = cess_rate


class EmptyInputError(TaxCalculationError):
    """No supplies given to a weighted-average calculation"""

    def __init__(self, message: str = "No supplies provided") -> None:
        super().__init__(message, code="CALC_EMPTY_INPUT", details={"count": 0})


class InvalidTotalError(TaxCalculationError):
    """Denominator of a weighted average is not positive"""

    def __init__(self, total: Any) -> None:
        super().__init__(
            f"Total amount must be positive (got {total})",
            code="CALC_INVALID_TOTAL",
            details={"total": total},
        )
        self.total = total


class ValidationError(GstError):
    """Validation error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
        self.field = field


class GstinValidationError(ValidationError):
    """GSTIN, PAN, HSN or SAC format error"""

    def __init__(
        self,
        message: str,
        field: Optional[str] = "gstin",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, field=field, code="VAL_GSTIN", details=details)


class ConfigError(GstError):
    """Configuration error"""

    def __init__(
        self,
        message: str,
        code: str = "CONFIG01",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, code=code, details=details)
