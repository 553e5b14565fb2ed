"""
================================================================================
Root Pytest Configuration
================================================================================

This module provides the root pytest configuration for the entire test suite.
It registers common markers and tags tests by directory.

================================================================================
"""

import pytest

from uitest_tools.common import init_logger


def pytest_configure(config):
    """Configure pytest with project-wide custom markers and logging."""
    init_logger()

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
    config.addinivalue_line(
        "markers", "P3: Low priority tests - extensive validation"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "regression: Full regression test suite"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: Browser-driven tests"
    )
    config.addinivalue_line(
        "markers", "unit: Tests against in-memory fakes, no browser"
    )

    # Feature markers
    config.addinivalue_line(
        "markers", "shadow: Tests related to shadow DOM lookup"
    )
    config.addinivalue_line(
        "markers", "calendar: Tests related to date pickers and date validation"
    )
    config.addinivalue_line(
        "markers", "table: Tests related to table queries"
    )
    config.addinivalue_line(
        "markers", "dialog: Tests related to browser dialogs"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-add the domain marker matching each test's directory."""
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
        "Playwright UI Toolkit",
        "=" * 60,
        "",
    ]
