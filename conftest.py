"""
Repository-level pytest configuration.

Provides:
  - Safe defaults for local runs (no secrets embedded)
  - The project root path for tests that need repository files

Values below are placeholders; real projects load credentials from a secret
manager in CI/CD.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Generator

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session", autouse=True)
def _safe_env_defaults() -> Generator[None, None, None]:
    """
    Set placeholder environment defaults if not already provided by the user/CI.

    Keeps local runs predictable.
    """
    defaults = {
        "UI_BASE_URL": "https://practicetestautomation.com",
    }

    for k, v in defaults.items():
        os.environ.setdefault(k, v)

    yield
