"""Tests for config and logging."""

import json
import logging
import sys
from pathlib import Path

import pytest

import household_finance
from household_finance.config import (
    CacheConfig,
    DisplayConfig,
    HouseholdFinanceConfig,
    OutputConfig,
)
from household_finance.exceptions import ConfigurationError
from household_finance.logging import JsonFormatter, setup_logging

ENV_VARS = [
    "HF_CACHE_DIR",
    "HF_CACHE_TTL",
    "HF_LOAN_CACHE_TTL",
    "HF_CACHE_VERSION",
    "HF_CACHE_ENABLED",
    "SEED",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "HF_CURRENCY_SYMBOL",
    "HF_DECIMAL_SEPARATOR",
    "HF_THOUSANDS_SEPARATOR",
    "HF_DATE_FORMAT",
    "LOG_LEVEL",
    "LOG_FORMAT",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigDefaults:
    """Tests for config dataclass defaults."""

    def test_cache_config(self) -> None:
        config = CacheConfig()

        assert config.default_ttl_seconds == 300
        assert config.loan_ttl_seconds == 120
        assert config.version == "v1"
        assert config.enabled is True

    def test_output_config(self) -> None:
        config = OutputConfig()

        assert config.json_output_dir == Path("output")
        assert config.pretty_json is False

    def test_display_config(self) -> None:
        config = DisplayConfig()

        assert config.currency_symbol == "€"
        assert config.date_format == "%d.%m.%Y"

    def test_display_separators_must_differ(self) -> None:
        with pytest.raises(ConfigurationError):
            DisplayConfig(decimal_separator=".", thousands_separator=".")


class TestFromEnv:
    """Tests for HouseholdFinanceConfig.from_env."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        config = HouseholdFinanceConfig.from_env()

        assert config.seed is None
        assert config.log_level == "INFO"
        assert config.log_format == "standard"
        assert config.cache.default_ttl_seconds == 300
        assert config.display.decimal_separator == ","

    def test_custom(self, clean_env: pytest.MonkeyPatch, tmp_path: Path) -> None:
        clean_env.setenv("HF_CACHE_DIR", str(tmp_path))
        clean_env.setenv("HF_CACHE_TTL", "60")
        clean_env.setenv("HF_CACHE_ENABLED", "false")
        clean_env.setenv("SEED", "7")
        clean_env.setenv("PRETTY_JSON", "true")
        clean_env.setenv("HF_CURRENCY_SYMBOL", "EUR")
        clean_env.setenv("LOG_LEVEL", "DEBUG")
        clean_env.setenv("LOG_FORMAT", "json")

        config = HouseholdFinanceConfig.from_env()

        assert config.cache.directory == tmp_path
        assert config.cache.default_ttl_seconds == 60
        assert config.cache.enabled is False
        assert config.seed == 7
        assert config.output.pretty_json is True
        assert config.display.currency_symbol == "EUR"
        assert config.log_level == "DEBUG"
        assert config.log_format == "json"

    @pytest.mark.parametrize("name,value", [("SEED", "abc"), ("HF_CACHE_TTL", "soon")])
    def test_invalid_number(self, clean_env: pytest.MonkeyPatch, name: str, value: str) -> None:
        clean_env.setenv(name, value)

        with pytest.raises(ConfigurationError):
            HouseholdFinanceConfig.from_env()


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_default(self) -> None:
        setup_logging()

        assert logging.getLogger("household_finance").level == logging.INFO

    def test_invalid_level_defaults_to_info(self) -> None:
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_json_format(self) -> None:
        setup_logging(format_type="json")

        assert any(isinstance(h.formatter, JsonFormatter) for h in logging.getLogger().handlers)

    def test_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1

    def test_faker_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("faker").level == logging.WARNING


class TestJsonFormatter:
    """Tests for JsonFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        return logging.LogRecord(
            name="household_finance.engine",
            level=kwargs.pop("level", logging.INFO),
            pathname=__file__,
            lineno=1,
            msg="Generated %d entries",
            args=(36,),
            exc_info=kwargs.pop("exc_info", None),
        )

    def test_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "household_finance.engine"
        assert data["message"] == "Generated 36 entries"
        assert "timestamp" in data

    def test_exception(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(level=logging.ERROR, exc_info=exc_info)))

        assert "ValueError" in data["exception"]

    def test_extra(self) -> None:
        record = self._record()
        record.extra = {"loan_id": "loan-1"}

        assert json.loads(JsonFormatter().format(record))["loan_id"] == "loan-1"


def test_version_exported() -> None:
    assert household_finance.__version__ == "0.1.0"
