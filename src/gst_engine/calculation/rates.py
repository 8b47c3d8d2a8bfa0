"""
GST rate resolution
Statutory rate schedule keyed by HSN/SAC chapter, with tenant overrides
"""

import logging
import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from gst_engine.config.config_loader import ConfigLoader
from gst_engine.config.gst_config import GstConfig
from gst_engine.constants import (
    DEFAULT_GST_RATE,
    GST_RATES,
    MAX_GST_RATE,
    MIN_GST_RATE,
)
from gst_engine.exceptions import InvalidRateError, ValidationError
from gst_engine.utils.money import to_decimal


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateRule:
    """
    One row of the statutory schedule

    Attributes:
        prefixes: Classification code prefixes (HSN/SAC chapters) the rule covers
        rate: GST rate in percent
        description: What the chapters hold
    """
    prefixes: Tuple[str, ...]
    rate: Decimal
    description: str

    def matches(self, code: str) -> bool:
        return code.startswith(self.prefixes)


# Evaluated in order; the first matching rule wins
STATUTORY_RATE_RULES: Tuple[RateRule, ...] = (
    RateRule(
        ("01", "02", "03", "04", "07", "08", "10"),
        GST_RATES.EXEMPT,
        "Live animals, meat, fish, dairy, vegetables, fruit, cereals",
    ),
    RateRule(
        ("11", "15", "17", "19", "20", "21"),
        GST_RATES.GST_5,
        "Milling products, edible oils, sugar, bakery and processed foods",
    ),
    RateRule(
        ("25", "27", "28", "29", "30"),
        GST_RATES.GST_12,
        "Minerals, fuels, chemicals, pharmaceuticals",
    ),
    RateRule(
        ("84", "85", "87", "90"),
        GST_RATES.GST_18,
        "Machinery, electrical equipment, vehicles, instruments",
    ),
    RateRule(
        ("22", "24", "33", "34"),
        GST_RATES.GST_28,
        "Beverages, tobacco, cosmetics, soaps",
    ),
    RateRule(
        ("99",),
        GST_RATES.GST_18,
        "Services (SAC)",
    ),
)


class RateManager:
    """
    GST rate lookup with tenant overrides

    Overrides are keyed by the normalized (uppercase, whitespace-free)
    classification code. Codes without an override fall back to the
    ordered rule table and then to the default rate.

    Every read and write of the override store happens under one lock,
    so a lookup never sees a half-applied bulk load or clear.

    Example:
        >>> manager = RateManager()
        >>> manager.get_rate("8471")
        Decimal('18')
        >>> manager.set_custom_rate("8471", 12)
        >>> manager.get_rate("8471")
        Decimal('12')
    """

    def __init__(
        self,
        rules: Iterable[RateRule] = STATUTORY_RATE_RULES,
        default_rate: Any = DEFAULT_GST_RATE,
        max_rate: Any = MAX_GST_RATE,
    ) -> None:
        """
        Create a rate manager

        Args:
            rules: Ordered rule table, the statutory schedule by default
            default_rate: Rate for codes no rule matches
            max_rate: Highest rate accepted for overrides
        """
        self._rules: Tuple[RateRule, ...] = tuple(rules)
        self._default_rate = to_decimal(default_rate, "default_rate")
        self._max_rate = to_decimal(max_rate, "max_rate")
        self._custom_rates: Dict[str, Decimal] = {}
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: GstConfig) -> "RateManager":
        """
        Build a manager from engine configuration

        Loads overrides from config.custom_rates_file when it is set.
        """
        manager = cls(
            default_rate=config.default_gst_rate,
            max_rate=config.max_gst_rate,
        )
        if config.custom_rates_file:
            rates = ConfigLoader().load_custom_rates(config.custom_rates_file)
            manager.load_custom_rates(rates)
        return manager

    @property
    def rules(self) -> Tuple[RateRule, ...]:
        return self._rules

    @staticmethod
    def normalize_code(code: str) -> str:
        """Canonical form of an HSN/SAC code used as the override key"""
        return "".join(code.split()).upper()

    def set_custom_rate(self, code: str, rate: Any) -> None:
        """
        Set a custom GST rate for an HSN/SAC code

        Raises:
            InvalidRateError: If rate is outside 0..max_rate
            ValidationError: If code is empty
        """
        key, value = self._validate_entry(code, rate)
        with self._lock:
            self._custom_rates[key] = value
        logger.info("Custom GST rate set: %s -> %s", key, value)

    def load_custom_rates(self, rates: Mapping[str, Any]) -> None:
        """
        Set many overrides at once

        Every entry is validated before any is stored, so a bad entry
        leaves the store untouched.
        """
        validated = dict(self._validate_entry(code, rate) for code, rate in rates.items())
        with self._lock:
            self._custom_rates.update(validated)
        logger.info("Loaded %d custom GST rates", len(validated))

    def get_rate(self, code: Optional[str]) -> Decimal:
        """GST rate for an HSN/SAC code: the override if set, else the schedule"""
        if code:
            key = self.normalize_code(code)
            with self._lock:
                custom = self._custom_rates.get(key)
            if custom is not None:
                return custom
        return self.get_applicable_gst_rate(code)

    def get_applicable_gst_rate(self, code: Optional[str]) -> Decimal:
        """
        Statutory rate for an HSN/SAC code, ignoring overrides

        Args:
            code: HSN or SAC code; missing codes get the default rate

        Returns:
            Rate of the first rule whose prefix matches, else the default
        """
        if not code:
            return self._default_rate

        normalized = self.normalize_code(code)
        for rule in self._rules:
            if rule.matches(normalized):
                return rule.rate
        return self._default_rate

    def has_custom_rate(self, code: str) -> bool:
        with self._lock:
            return self.normalize_code(code) in self._custom_rates

    def get_custom_rates(self) -> Dict[str, Decimal]:
        """Snapshot of the override store"""
        with self._lock:
            return dict(self._custom_rates)

    def clear_custom_rates(self) -> None:
        """Remove every override"""
        with self._lock:
            count = len(self._custom_rates)
            self._custom_rates.clear()
        logger.info("Cleared %d custom GST rates", count)

    @staticmethod
    def get_all_standard_rates() -> Dict[str, Decimal]:
        """Statutory rate schedule by name"""
        return {
            "EXEMPT": GST_RATES.EXEMPT,
            "GST_5": GST_RATES.GST_5,
            "GST_12": GST_RATES.GST_12,
            "GST_18": GST_RATES.GST_18,
            "GST_28": GST_RATES.GST_28,
        }

    def _validate_entry(self, code: str, rate: Any) -> Tuple[str, Decimal]:
        if not isinstance(code, str) or not code.strip():
            raise ValidationError("HSN/SAC code cannot be empty", field="code")

        value = to_decimal(rate, "rate")
        if value < MIN_GST_RATE or value > self._max_rate:
            logger.debug("Custom rate rejected for %s: %s", code, value)
            raise InvalidRateError(value, MIN_GST_RATE, self._max_rate)
        return self.normalize_code(code), value
