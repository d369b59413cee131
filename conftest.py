"""
Repository-level pytest configuration.

Why this exists:
  - Register the UI harness plugin (options, fixtures, retries, artifacts)
  - Initialize loguru once per process with the suite's sinks
  - Keep behavior explicit and discoverable

Important:
  Target environment and credentials come from config/config.yaml, env vars
  (UI_ENVIRONMENT, UI_BASE_URL, ...) or --ui-* options. Nothing secret lives here.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from autotest_tools.common import init_logger

pytest_plugins = [
    "testsuites.ui_testing.framework.harness",
    "pytester",
]


def pytest_configure(config):
    init_logger()


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent
