"""Pytest configuration and fixtures."""

import logging
import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Set test environment variables
os.environ.setdefault("OPENROUTER_API_KEY", "sk-or-test")

from intent_bench.models.catalog import Catalog  # noqa: E402


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def catalog() -> Catalog:
    """The default 16-service catalog."""
    return Catalog.default()


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write a `;`-delimited file from raw lines and return its path."""

    def _write(*lines: str, name: str = "intents.csv") -> Path:
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo configure_logging calls made by CLI tests."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
