"""
Configuration Loader
Loads GST engine configuration from various sources
"""

import json
import os
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Optional, Union

from gst_engine.config.gst_config import (
    GstConfig,
    PartialGstConfig,
    ENV_VAR_MAPPING,
    ConfigDefaults,
)
from gst_engine.config.config_validator import ConfigValidator
from gst_engine.exceptions import ConfigError


ConfigSource = Union[Dict[str, Any], PartialGstConfig]


class ConfigLoader:
    """
    ConfigLoader class
    Provides multiple ways to load and merge configuration
    """

    def __init__(self) -> None:
        self._validator = ConfigValidator()

    def from_file(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Load configuration from a JSON file

        Args:
            path: Path to JSON configuration file

        Returns:
            Loaded configuration dictionary

        Raises:
            ConfigError: If file not found or invalid JSON
        """
        file_path = Path(path).resolve()
        config = self._read_json(file_path)
        if not isinstance(config, dict):
            raise ConfigError(
                f"Configuration file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )
        return self._process_rates_path(config, file_path.parent)

    def from_environment(self) -> Dict[str, Any]:
        """
        Load configuration from environment variables

        Returns:
            Configuration dictionary from environment variables
        """
        config: Dict[str, Any] = {}

        for env_var, config_key in ENV_VAR_MAPPING.items():
            value = os.environ.get(env_var)
            if value is not None and value != "":
                config[config_key] = self._parse_env_value(config_key, value)

        return config

    def from_dict(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Load configuration from a dictionary

        Args:
            config: Configuration dictionary

        Returns:
            Copy of configuration dictionary
        """
        return config.copy()

    def merge(self, *sources: ConfigSource) -> Dict[str, Any]:
        """
        Merge multiple configuration sources
        Priority: later sources override earlier sources

        Args:
            sources: Configuration dictionaries or PartialGstConfig objects
                in order of increasing priority

        Returns:
            Merged configuration dictionary
        """
        merged: Dict[str, Any] = {}

        for source in sources:
            if isinstance(source, PartialGstConfig):
                source = source.model_dump(exclude_none=True)
            filtered = self._filter_none(source)
            merged.update(filtered)

        return merged

    def resolve(self, config: Dict[str, Any]) -> GstConfig:
        """
        Resolve configuration with defaults and validation

        Args:
            config: Partial configuration dictionary

        Returns:
            Fully resolved GstConfig object

        Raises:
            ValidationError: If configuration is invalid
        """
        self._validator.validate_or_raise(config)

        # Pydantic fills in the defaults
        return GstConfig(**config)

    def load(
        self,
        file: Optional[Union[str, Path]] = None,
        env: bool = True,
        config: Optional[ConfigSource] = None,
    ) -> GstConfig:
        """
        Load, merge, and resolve configuration from multiple sources

        Args:
            file: Path to JSON configuration file (optional)
            env: Whether to load from environment variables (default: True)
            config: Programmatic configuration, as a dictionary or
                PartialGstConfig (optional)

        Returns:
            Fully resolved GstConfig object
        """
        sources: list[ConfigSource] = []

        if file is not None:
            sources.append(self.from_file(file))

        if env:
            sources.append(self.from_environment())

        if config is not None:
            sources.append(config)

        merged = self.merge(*sources)
        return self.resolve(merged)

    def load_custom_rates(self, path: Union[str, Path]) -> Dict[str, Decimal]:
        """
        Load tenant rate overrides from a JSON file

        The file holds one object mapping HSN/SAC codes to rates,
        e.g. {"8471": 12, "998314": "18"}. Range checks are left to
        RateManager so that they raise the calculation error types.

        Raises:
            ConfigError: If the file is missing, malformed, or holds non-numeric rates
        """
        file_path = Path(path).resolve()
        data = self._read_json(file_path)

        if not isinstance(data, dict):
            raise ConfigError(
                f"Custom rates file must contain a JSON object: {file_path}",
                code="CONFIG_PARSE_ERROR"
            )

        rates: Dict[str, Decimal] = {}
        for code, rate in data.items():
            if isinstance(rate, bool) or not isinstance(rate, (int, float, str)):
                raise ConfigError(
                    f"Rate for {code!r} must be a number",
                    code="CONFIG_INVALID_RATE",
                    details={"code": code, "rate": rate},
                )
            try:
                rates[code] = Decimal(repr(rate) if isinstance(rate, float) else rate)
            except ArithmeticError as e:
                raise ConfigError(
                    f"Rate for {code!r} is not a valid number: {rate!r}",
                    code="CONFIG_INVALID_RATE",
                    details={"code": code, "rate": rate},
                ) from e
        return rates

    def create_template(self, path: Union[str, Path]) -> None:
        """
        Create a configuration template file

        Args:
            path: Path to write template
        """
        template = {
            "default_tds_rate": str(ConfigDefaults.DEFAULT_TDS_RATE),
            "max_gst_rate": str(ConfigDefaults.MAX_GST_RATE),
            "default_gst_rate": str(ConfigDefaults.DEFAULT_GST_RATE),
            "amount_precision": ConfigDefaults.AMOUNT_PRECISION,
            "rounding_mode": ConfigDefaults.ROUNDING_MODE,
            "round_results": ConfigDefaults.ROUND_RESULTS,
            "decimal_precision": ConfigDefaults.DECIMAL_PRECISION,
            "enable_audit_log": ConfigDefaults.ENABLE_AUDIT_LOG,
            "custom_rates_file": "./custom-rates.json",
        }

        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(template, f, indent=2)

    def _read_json(self, file_path: Path) -> Any:
        if not file_path.exists():
            raise ConfigError(
                f"Configuration file not found: {file_path}",
                code="CONFIG_FILE_NOT_FOUND"
            )

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(
                f"Invalid JSON in configuration file: {file_path}",
                code="CONFIG_PARSE_ERROR"
            ) from e

    def _parse_env_value(self, key: str, value: str) -> Any:
        """Parse environment variable value to appropriate type"""
        # Boolean fields
        if key in ("round_results", "enable_audit_log"):
            return value.lower() in ("true", "1", "yes")

        # Integer fields
        if key in ("amount_precision", "decimal_precision"):
            try:
                return int(value)
            except ValueError:
                return value

        if key == "rounding_mode":
            return value.upper()

        # Rates stay as strings; Decimal parses them exactly
        return value

    def _process_rates_path(
        self, config: Dict[str, Any], base_path: Path
    ) -> Dict[str, Any]:
        """Resolve the custom rates path relative to the config file"""
        processed = config.copy()

        rates_file = processed.get("custom_rates_file")
        if isinstance(rates_file, str) and rates_file:
            rates_path = Path(rates_file)
            if not rates_path.is_absolute():
                processed["custom_rates_file"] = str(base_path / rates_path)

        return processed

    def _filter_none(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Filter out None values from config dictionary"""
        return {k: v for k, v in config.items() if v is not None}
