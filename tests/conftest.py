"""Shared test fixtures for the typednotion test suite."""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
from factories import TOKEN, RecordingHandler

from typednotion.config import NotionConfig


@pytest.fixture
def config() -> NotionConfig:
    """Default test configuration with a dummy token."""
    return NotionConfig(token=TOKEN)


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def http_client(handler: RecordingHandler) -> Iterator[httpx.Client]:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    yield client
    client.close()


@pytest.fixture
def async_http_client(handler: RecordingHandler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))
