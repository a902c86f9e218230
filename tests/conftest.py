"""Pytest fixtures for order processor tests"""

import json
import os
import sys
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from loguru import logger

# =============================================================================
# Global Test Setup
# =============================================================================

# Add src to Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from order_processor.delivery import DeliveryClient  # noqa: E402
from tests.factories import RecordingHandler  # noqa: E402

BASE_URL = "https://orders.test/api"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep ORDER_PROCESSOR_* variables from leaking into tests"""
    for key in list(os.environ):
        if key.startswith("ORDER_PROCESSOR_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def log_messages():
    """Capture loguru output as 'LEVEL|message' strings"""
    messages: list[str] = []
    token = logger.add(
        lambda m: messages.append(m.rstrip("\n")),
        format="{level}|{message}",
        level="DEBUG",
    )
    yield messages
    logger.remove(token)


@pytest.fixture
def sleeps() -> list[float]:
    """Records backoff delays instead of sleeping"""
    return []


@pytest.fixture
def make_client() -> Callable[..., tuple[DeliveryClient, RecordingHandler]]:
    """Build a DeliveryClient backed by a scripted MockTransport"""
    clients: list[DeliveryClient] = []

    def _make(*script, base_url: str = BASE_URL):
        handler = RecordingHandler(script or [200])
        client = DeliveryClient(
            base_url,
            timeout=5,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client, handler

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def write_log(tmp_path) -> Callable[..., Path]:
    """Write a transaction log of dicts / raw strings to a temp file"""

    def _write(*lines, name: str = "transaction-log.txt") -> Path:
        path = tmp_path / name
        rendered = [
            line if isinstance(line, str) else json.dumps(line)
            for line in lines
        ]
        path.write_text("\n".join(rendered) + "\n")
        return path

    return _write
