"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the pytest configuration for the test suites.
It registers common markers and tags UI tests for the retry harness.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end tests simulating user flows"
    )
    config.addinivalue_line(
        "markers", "unit: Framework unit tests (no browser)"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "signup: Tests related to account registration"
    )
    config.addinivalue_line(
        "markers", "auth: Tests related to authentication"
    )
    config.addinivalue_line(
        "markers", "navigation: Tests related to site navigation"
    )


def pytest_collection_modifyitems(config, items):
    """
    Modify collected test items.

    Browser tests get the 'ui' marker (and with it the retry protocol);
    framework tests get 'unit'.
    """
    for item in items:
        path = str(item.fspath)
        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)
        elif "unit" in path:
            item.add_marker(pytest.mark.unit)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Sign-up / Login E2E Test Suite",
        "=" * 60,
        "",
    ]
