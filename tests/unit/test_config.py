"""
Configuration Module Unit Tests
"""

import os
import json
import tempfile
from decimal import Decimal
from pathlib import Path
import pytest

from gst_engine.config import (
    GstConfig,
    PartialGstConfig,
    ConfigLoader,
    ConfigValidator,
    ConfigDefaults,
    ENV_VAR_MAPPING,
)
from gst_engine.exceptions import ConfigError, ValidationError


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    for env_var in ENV_VAR_MAPPING:
        monkeypatch.delenv(env_var, raising=False)


class TestConfigValidator:
    """Tests for ConfigValidator"""

    @pytest.fixture
    def validator(self) -> ConfigValidator:
        return ConfigValidator()

    @pytest.fixture
    def valid_config(self) -> dict:
        return {
            "default_tds_rate": "2",
            "max_gst_rate": "50",
            "default_gst_rate": "18",
            "amount_precision": 2,
            "rounding_mode": "ROUND_HALF_UP",
            "round_results": False,
            "decimal_precision": 28,
            "enable_audit_log": True,
        }

    def test_validate_valid_config(self, validator: ConfigValidator, valid_config: dict):
        """Should pass with valid configuration"""
        result = validator.validate(valid_config)
        assert result.valid is True
        assert len(result.errors) == 0

    def test_validate_empty_config(self, validator: ConfigValidator):
        """Should pass with nothing set, defaults apply later"""
        assert validator.validate({}).valid is True

    def test_validate_non_numeric_rate(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when a rate is not a number"""
        valid_config["default_tds_rate"] = "two"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "default_tds_rate" for e in result.errors)

    def test_validate_negative_max_rate(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with a non-positive max_gst_rate"""
        valid_config["max_gst_rate"] = 0
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "max_gst_rate" and "positive" in e.message
            for e in result.errors
        )

    def test_validate_default_above_max(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when default_gst_rate exceeds max_gst_rate"""
        valid_config["default_gst_rate"] = "60"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "default_gst_rate" and "max_gst_rate" in e.message
            for e in result.errors
        )

    def test_validate_tds_rate_too_high(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with a TDS rate above 100"""
        valid_config["default_tds_rate"] = 101
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "default_tds_rate" for e in result.errors)

    def test_validate_bool_precision(self, validator: ConfigValidator, valid_config: dict):
        """Should reject a boolean where an integer is expected"""
        valid_config["amount_precision"] = True
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "amount_precision" for e in result.errors)

    def test_validate_decimal_precision_range(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with too few significant digits"""
        valid_config["decimal_precision"] = 8
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(
            e.field == "decimal_precision" and "16" in e.message
            for e in result.errors
        )

    def test_validate_invalid_rounding_mode(self, validator: ConfigValidator, valid_config: dict):
        """Should fail with an unknown rounding mode"""
        valid_config["rounding_mode"] = "BANKERS"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "rounding_mode" for e in result.errors)

    def test_validate_lowercase_rounding_mode(self, validator: ConfigValidator, valid_config: dict):
        """Should accept a rounding mode in any case"""
        valid_config["rounding_mode"] = "round_half_even"
        assert validator.validate(valid_config).valid is True

    def test_validate_non_bool_flag(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when a flag is not a boolean"""
        valid_config["round_results"] = "yes"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "round_results" for e in result.errors)

    def test_validate_rates_file_extension(self, validator: ConfigValidator, valid_config: dict):
        """Should fail when the custom rates file is not JSON"""
        valid_config["custom_rates_file"] = "rates.csv"
        result = validator.validate(valid_config)
        assert result.valid is False
        assert any(e.field == "custom_rates_file" for e in result.errors)

    def test_validate_collects_all_errors(self, validator: ConfigValidator, valid_config: dict):
        """Should report every invalid field at once"""
        valid_config["max_gst_rate"] = -5
        valid_config["rounding_mode"] = "NEAREST"
        result = validator.validate(valid_config)
        fields = {e.field for e in result.errors}
        assert {"max_gst_rate", "rounding_mode"} <= fields

    def test_validate_or_raise_invalid(self, validator: ConfigValidator, valid_config: dict):
        """Should raise ValidationError with invalid configuration"""
        valid_config["amount_precision"] = -1
        with pytest.raises(ValidationError) as exc_info:
            validator.validate_or_raise(valid_config)
        assert "amount_precision" in str(exc_info.value)


class TestConfigLoader:
    """Tests for ConfigLoader"""

    @pytest.fixture
    def loader(self) -> ConfigLoader:
        return ConfigLoader()

    def test_from_dict(self, loader: ConfigLoader):
        """Should return a copy of the configuration"""
        config = {"default_tds_rate": "1"}
        result = loader.from_dict(config)
        assert result == config
        assert result is not config

    def test_from_environment(self, loader: ConfigLoader, monkeypatch):
        """Should load configuration from environment variables"""
        monkeypatch.setenv("GST_DEFAULT_TDS_RATE", "1.5")
        monkeypatch.setenv("GST_MAX_RATE", "40")
        monkeypatch.setenv("GST_AMOUNT_PRECISION", "3")
        monkeypatch.setenv("GST_ROUNDING_MODE", "round_half_even")
        monkeypatch.setenv("GST_ENABLE_AUDIT_LOG", "false")

        result = loader.from_environment()

        assert result["default_tds_rate"] == "1.5"
        assert result["max_gst_rate"] == "40"
        assert result["amount_precision"] == 3
        assert result["rounding_mode"] == "ROUND_HALF_EVEN"
        assert result["enable_audit_log"] is False
        assert "round_results" not in result

    def test_from_environment_boolean_parsing(self, loader: ConfigLoader, monkeypatch):
        """Should parse boolean values correctly"""
        monkeypatch.setenv("GST_ROUND_RESULTS", "true")
        result = loader.from_environment()
        assert result["round_results"] is True

        monkeypatch.setenv("GST_ROUND_RESULTS", "1")
        result = loader.from_environment()
        assert result["round_results"] is True

        monkeypatch.setenv("GST_ROUND_RESULTS", "false")
        result = loader.from_environment()
        assert result["round_results"] is False

    def test_from_environment_ignores_empty(self, loader: ConfigLoader, monkeypatch):
        """Should skip variables set to an empty string"""
        monkeypatch.setenv("GST_CUSTOM_RATES_FILE", "")
        assert loader.from_environment() == {}

    def test_merge(self, loader: ConfigLoader):
        """Should merge multiple configurations with priority"""
        base = {"default_tds_rate": "2", "amount_precision": 2}
        override = {"default_tds_rate": "1", "round_results": True}

        result = loader.merge(base, override)

        assert result["default_tds_rate"] == "1"
        assert result["amount_precision"] == 2
        assert result["round_results"] is True

    def test_merge_filters_none(self, loader: ConfigLoader):
        """Should not include None values from overrides"""
        base = {"default_tds_rate": "2", "amount_precision": 3}
        override = {"default_tds_rate": "1", "amount_precision": None}

        result = loader.merge(base, override)

        assert result["default_tds_rate"] == "1"
        assert result["amount_precision"] == 3

    def test_merge_partial_config(self, loader: ConfigLoader):
        """Should merge PartialGstConfig sources, skipping unset fields"""
        base = {"default_tds_rate": "2", "amount_precision": 3}
        override = PartialGstConfig(default_tds_rate="1.5", round_results=True)

        result = loader.merge(base, override)

        assert result["default_tds_rate"] == Decimal("1.5")
        assert result["amount_precision"] == 3
        assert result["round_results"] is True

    def test_load_partial_config(self, loader: ConfigLoader):
        """Should resolve a PartialGstConfig passed as programmatic config"""
        result = loader.load(
            config=PartialGstConfig(rounding_mode="round_half_even"), env=False
        )

        assert result.rounding_mode == "ROUND_HALF_EVEN"
        assert result.default_tds_rate == ConfigDefaults.DEFAULT_TDS_RATE

    def test_resolve_applies_defaults(self, loader: ConfigLoader):
        """Should apply default values"""
        result = loader.resolve({})

        assert result.default_tds_rate == ConfigDefaults.DEFAULT_TDS_RATE
        assert result.max_gst_rate == ConfigDefaults.MAX_GST_RATE
        assert result.default_gst_rate == ConfigDefaults.DEFAULT_GST_RATE
        assert result.amount_precision == ConfigDefaults.AMOUNT_PRECISION
        assert result.rounding_mode == ConfigDefaults.ROUNDING_MODE
        assert result.round_results is False
        assert result.decimal_precision == ConfigDefaults.DECIMAL_PRECISION
        assert result.enable_audit_log == ConfigDefaults.ENABLE_AUDIT_LOG
        assert result.custom_rates_file is None

    def test_resolve_parses_rates(self, loader: ConfigLoader):
        """Should turn rate strings into Decimals"""
        result = loader.resolve({"default_tds_rate": "1.25"})
        assert result.default_tds_rate == Decimal("1.25")

    def test_resolve_invalid(self, loader: ConfigLoader):
        """Should raise ValidationError before building the config"""
        with pytest.raises(ValidationError):
            loader.resolve({"max_gst_rate": "-1"})

    def test_from_file(self, loader: ConfigLoader):
        """Should load configuration from JSON file"""
        with tempfile.NamedTemporaryFile(
            mode="w", suffix=".json", delete=False
        ) as f:
            json.dump({"default_tds_rate": "1", "round_results": True}, f)
            f.flush()

            try:
                result = loader.from_file(f.name)
                assert result["default_tds_rate"] == "1"
                assert result["round_results"] is True
            finally:
                os.unlink(f.name)

    def test_from_file_resolves_rates_path(self, loader: ConfigLoader, tmp_path: Path):
        """Should resolve a relative rates file against the config file"""
        config_path = tmp_path / "gst.json"
        config_path.write_text(json.dumps({"custom_rates_file": "rates.json"}))

        result = loader.from_file(config_path)

        assert result["custom_rates_file"] == str(tmp_path.resolve() / "rates.json")

    def test_from_file_not_found(self, loader: ConfigLoader):
        """Should raise error for missing file"""
        with pytest.raises(ConfigError) as exc_info:
            loader.from_file("/nonexistent/path.json")

        assert "CONFIG_FILE_NOT_FOUND" in str(exc_info.value.code)

    def test_from_file_invalid_json(self, loader: ConfigLoader, tmp_path: Path):
        """Should raise error for malformed JSON"""
        config_path = tmp_path / "broken.json"
        config_path.write_text("{not json")

        with pytest.raises(ConfigError) as exc_info:
            loader.from_file(config_path)

        assert exc_info.value.code == "CONFIG_PARSE_ERROR"

    def test_from_file_not_an_object(self, loader: ConfigLoader, tmp_path: Path):
        """Should reject a JSON document that is not an object"""
        config_path = tmp_path / "list.json"
        config_path.write_text("[1, 2, 3]")

        with pytest.raises(ConfigError):
            loader.from_file(config_path)

    def test_load_from_config(self, loader: ConfigLoader):
        """Should load and resolve configuration from dict"""
        result = loader.load(config={"round_results": True}, env=False)

        assert result.round_results is True
        assert result.default_tds_rate == ConfigDefaults.DEFAULT_TDS_RATE

    def test_load_priority(self, loader: ConfigLoader, tmp_path: Path, monkeypatch):
        """Programmatic config overrides environment, which overrides file"""
        config_path = tmp_path / "gst.json"
        config_path.write_text(json.dumps({
            "default_tds_rate": "1", "amount_precision": 4, "decimal_precision": 40,
        }))
        monkeypatch.setenv("GST_AMOUNT_PRECISION", "3")
        monkeypatch.setenv("GST_DEFAULT_TDS_RATE", "1.5")

        result = loader.load(file=config_path, config={"default_tds_rate": "0.5"})

        assert result.default_tds_rate == Decimal("0.5")
        assert result.amount_precision == 3
        assert result.decimal_precision == 40

    def test_load_custom_rates(self, loader: ConfigLoader, tmp_path: Path):
        """Should read overrides as Decimals"""
        rates_path = tmp_path / "rates.json"
        rates_path.write_text(json.dumps({"8471": 12, "998314": "5", "2402": 0.25}))

        rates = loader.load_custom_rates(rates_path)

        assert rates == {
            "8471": Decimal("12"),
            "998314": Decimal("5"),
            "2402": Decimal("0.25"),
        }

    def test_load_custom_rates_non_numeric(self, loader: ConfigLoader, tmp_path: Path):
        """Should reject a rate that is not a number"""
        rates_path = tmp_path / "rates.json"
        rates_path.write_text(json.dumps({"8471": "twelve"}))

        with pytest.raises(ConfigError) as exc_info:
            loader.load_custom_rates(rates_path)

        assert exc_info.value.code == "CONFIG_INVALID_RATE"

    def test_load_custom_rates_boolean(self, loader: ConfigLoader, tmp_path: Path):
        """Should reject booleans as rates"""
        rates_path = tmp_path / "rates.json"
        rates_path.write_text(json.dumps({"8471": True}))

        with pytest.raises(ConfigError):
            loader.load_custom_rates(rates_path)

    def test_create_template(self, loader: ConfigLoader):
        """Should create template configuration file"""
        with tempfile.TemporaryDirectory() as tmpdir:
            template_path = Path(tmpdir) / "config" / "template.json"
            loader.create_template(template_path)

            assert template_path.exists()

            with open(template_path) as f:
                template = json.load(f)

            assert template["default_tds_rate"] == "2"
            assert template["rounding_mode"] == "ROUND_HALF_UP"
            assert "custom_rates_file" in template

    def test_template_loads_back(self, loader: ConfigLoader, tmp_path: Path):
        """Should produce a template that resolves to the defaults"""
        template_path = tmp_path / "template.json"
        loader.create_template(template_path)

        config = loader.from_file(template_path)
        config.pop("custom_rates_file")
        result = loader.resolve(config)

        assert result == GstConfig()


class TestGstConfig:
    """Tests for GstConfig Pydantic model"""

    def test_defaults(self):
        """Should create config with default values"""
        config = GstConfig()
        assert config.default_tds_rate == Decimal("2")
        assert config.max_gst_rate == Decimal("50")
        assert config.default_gst_rate == Decimal("18")
        assert config.round_results is False

    def test_rounding_mode_normalized(self):
        """Should uppercase the rounding mode"""
        config = GstConfig(rounding_mode="round_half_even")
        assert config.rounding_mode == "ROUND_HALF_EVEN"

    def test_invalid_rounding_mode(self):
        """Should reject unknown rounding modes"""
        with pytest.raises(ValueError):
            GstConfig(rounding_mode="NEAREST")

    def test_default_rate_above_max(self):
        """Should reject a fallback rate above the maximum"""
        with pytest.raises(ValueError):
            GstConfig(max_gst_rate=Decimal("10"))

    def test_empty_rates_file(self):
        """Should treat an empty rates file as unset"""
        assert GstConfig(custom_rates_file="").custom_rates_file is None

    def test_invalid_rates_file(self):
        """Should reject non-JSON rates files"""
        with pytest.raises(ValueError):
            GstConfig(custom_rates_file="rates.yaml")

    def test_out_of_range_tds_rate(self):
        """Should reject a TDS rate above 100"""
        with pytest.raises(ValueError):
            GstConfig(default_tds_rate=Decimal("150"))
