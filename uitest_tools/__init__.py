"""
================================================================================
UI Test Tools
================================================================================

Shared infrastructure for the UI automation suites.

Modules:
    - common: Configuration loading and Loguru logging setup
    - report_tools: Allure attachment helpers

Example:
    from uitest_tools.common import get_config, init_logger

    init_logger()
    timeout = get_config("ui.default_timeout", 30000)

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
