"""Shared defaults for the order processor."""

DEFAULT_INPUT_FILE = "transaction-log.txt"
DEFAULT_OUTPUT_FILE = "output.txt"
DEFAULT_SYMBOL = "TSLA"
DEFAULT_SIDE = "sell"
DEFAULT_BASE_URL = "https://example.com/api"
DEFAULT_RETRIES = 3
DEFAULT_TIMEOUT = "30s"
BACKOFF_UNIT_SECONDS = 1.0
ENV_PREFIX = "ORDER_PROCESSOR_"
