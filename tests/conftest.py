"""Shared test fixtures for bundle-compressed tests.

Provides a recording content sink, a mock structlog logger and small build
graphs assembled from the fakes in ``tests/fakes.py``.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from bundle_compressed.config import ExtractionConfig
from fakes import AsyncFileSystem, FakeCompilation, FakeCompiler, RecordingSink

COMPRESSOR = {"name": "gzip", "level": 9}


@pytest.fixture
def anyio_backend() -> str:
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def sink() -> RecordingSink:
    """Create a sink recording handled resources."""
    return RecordingSink()


@pytest.fixture
def logger() -> MagicMock:
    """Create a mock structlog logger."""
    return MagicMock()


@pytest.fixture
def config() -> ExtractionConfig:
    """Create default extraction config."""
    return ExtractionConfig()


@pytest.fixture
def compressor() -> dict[str, object]:
    """Opaque compressor spec passed through to the sink."""
    return COMPRESSOR


@pytest.fixture
def scenario_graph() -> FakeCompilation:
    """Root compilation h1 with one asset and an empty child compilation h2."""
    file_system = AsyncFileSystem({"/dist/main.js": bytes([0x01, 0x02])})
    child = FakeCompilation(
        "h2",
        compiler=FakeCompiler(output_path="/dist/child", input_file_system=file_system),
    )
    return FakeCompilation(
        "h1",
        compiler=FakeCompiler(input_file_system=file_system),
        assets={"main.js": object()},
        children=[child],
    )
