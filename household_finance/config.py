"""Configuration management for household-finance."""

from dataclasses import dataclass, field
from pathlib import Path

from household_finance.exceptions import ConfigurationError

DEFAULT_CACHE_TTL_SECONDS = 5 * 60
LOAN_CACHE_TTL_SECONDS = 2 * 60


@dataclass
class CacheConfig:
    """Owner-scoped cache configuration."""

    directory: Path = field(default_factory=lambda: Path(".cache") / "household_finance")
    default_ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS
    loan_ttl_seconds: float = LOAN_CACHE_TTL_SECONDS
    version: str = "v1"
    enabled: bool = True


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class DisplayConfig:
    """Presentation settings for amounts and dates."""

    currency_symbol: str = "€"
    decimal_separator: str = ","
    thousands_separator: str = "."
    date_format: str = "%d.%m.%Y"

    def __post_init__(self) -> None:
        if self.decimal_separator == self.thousands_separator:
            raise ConfigurationError("Decimal and thousands separators must differ")


@dataclass
class HouseholdFinanceConfig:
    """Main configuration for household-finance."""

    cache: CacheConfig = field(default_factory=CacheConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "HouseholdFinanceConfig":
        """Create config from environment variables."""
        import os

        try:
            cache = CacheConfig(
                directory=Path(os.getenv("HF_CACHE_DIR", str(Path(".cache") / "household_finance"))),
                default_ttl_seconds=float(os.getenv("HF_CACHE_TTL", str(DEFAULT_CACHE_TTL_SECONDS))),
                loan_ttl_seconds=float(os.getenv("HF_LOAN_CACHE_TTL", str(LOAN_CACHE_TTL_SECONDS))),
                version=os.getenv("HF_CACHE_VERSION", "v1"),
                enabled=os.getenv("HF_CACHE_ENABLED", "true").lower() == "true",
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except ValueError as exc:
            raise ConfigurationError(f"Invalid numeric configuration value: {exc}") from exc

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        display = DisplayConfig(
            currency_symbol=os.getenv("HF_CURRENCY_SYMBOL", "€"),
            decimal_separator=os.getenv("HF_DECIMAL_SEPARATOR", ","),
            thousands_separator=os.getenv("HF_THOUSANDS_SEPARATOR", "."),
            date_format=os.getenv("HF_DATE_FORMAT", "%d.%m.%Y"),
        )

        return cls(
            cache=cache,
            output=output,
            display=display,
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", "standard"),
        )
