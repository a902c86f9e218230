"""Configuration management for the order processor"""

import os
import re
from dataclasses import dataclass, replace
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

from order_processor.shared.constants import (
    BACKOFF_UNIT_SECONDS,
    DEFAULT_BASE_URL,
    DEFAULT_INPUT_FILE,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_RETRIES,
    DEFAULT_SIDE,
    DEFAULT_SYMBOL,
    DEFAULT_TIMEOUT,
    ENV_PREFIX,
)
from order_processor.shared.exceptions import ConfigurationError

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(ms|s|m|h)")
_DURATION_UNITS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration(value: str | float | int) -> float:
    """Parse a duration into seconds.

    Accepts plain numbers (seconds) and Go-style strings such as "30s",
    "500ms" or "1m30s". Zero means no timeout.

    Raises:
        ConfigurationError: If the value is not a valid non-negative duration
    """
    if isinstance(value, (int, float)):
        seconds = float(value)
    else:
        text = value.strip()
        try:
            seconds = float(text)
        except ValueError:
            parts = _DURATION_PART.findall(text)
            if not parts or "".join(n + u for n, u in parts) != text:
                raise ConfigurationError(
                    f"Invalid duration: {value!r}"
                ) from None
            seconds = sum(float(n) * _DURATION_UNITS[u] for n, u in parts)

    if seconds < 0:
        raise ConfigurationError(f"Duration must not be negative: {value!r}")
    return seconds


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    """Run configuration, fixed for the lifetime of one run"""

    input_file: Path = Path(DEFAULT_INPUT_FILE)
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    symbol: str = DEFAULT_SYMBOL
    side: str = DEFAULT_SIDE
    base_url: str = DEFAULT_BASE_URL
    retries: int = DEFAULT_RETRIES
    # Per-request timeout in seconds, 0 for none
    timeout: float = 30.0
    insecure: bool = False
    verbose: bool = False
    # Seconds slept per backoff step
    backoff_unit: float = BACKOFF_UNIT_SECONDS

    def __post_init__(self):
        if self.retries < 0:
            raise ConfigurationError(
                f"Retry budget must be non-negative, got {self.retries}"
            )
        if self.timeout < 0:
            raise ConfigurationError(
                f"Timeout must be non-negative, got {self.timeout}"
            )
        if self.backoff_unit < 0:
            raise ConfigurationError(
                f"Backoff unit must be non-negative, got {self.backoff_unit}"
            )

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """Load configuration from environment variables

        Variables are prefixed with ORDER_PROCESSOR_ (e.g.
        ORDER_PROCESSOR_SYMBOL). A .env file is loaded first if present;
        variables already set in the environment take precedence.

        Args:
            env_file: Optional explicit path to a .env file

        Returns:
            Config instance with values from environment

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        load_dotenv(env_file)

        def env(name: str, default: str) -> str:
            return os.getenv(f"{ENV_PREFIX}{name}", default)

        return cls(
            input_file=Path(env("FILE", DEFAULT_INPUT_FILE)),
            output_file=Path(env("OUTPUT", DEFAULT_OUTPUT_FILE)),
            symbol=env("SYMBOL", DEFAULT_SYMBOL),
            side=env("SIDE", DEFAULT_SIDE),
            base_url=env("URL", DEFAULT_BASE_URL),
            retries=_env_int(f"{ENV_PREFIX}RETRY", DEFAULT_RETRIES),
            timeout=parse_duration(env("TIMEOUT", DEFAULT_TIMEOUT)),
            insecure=_env_bool(f"{ENV_PREFIX}INSECURE", False),
            verbose=_env_bool(f"{ENV_PREFIX}VERBOSE", False),
        )

    def with_overrides(self, **overrides) -> "Config":
        """Return a copy with the non-None overrides applied"""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)

    def log(self) -> None:
        """Log the effective configuration"""
        timeout = f"{self.timeout}s" if self.timeout else "none"
        logger.info(f"Input file: {self.input_file}")
        logger.info(f"Output file: {self.output_file}")
        logger.info(f"Filtering for symbol: {self.symbol}, side: {self.side}")
        logger.info(f"Base URL: {self.base_url}")
        logger.info(
            f"Retries: {self.retries}, "
            f"Timeout: {timeout}, "
            f"Insecure: {self.insecure}"
        )
