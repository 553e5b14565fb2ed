"""
================================================================================
UI Test Tools Common Utilities
================================================================================

Configuration management and logging setup shared by the framework, page
objects and the test runner.

Exports:
    - get_config: Read a configuration value by dot-notation path
    - set_config: Override a configuration value at runtime
    - reload_config: Re-read configuration files and re-init logging
    - init_logger: Initialize the Loguru logger with standard settings

Usage:
    from uitest_tools.common import get_config, init_logger

    init_logger()
    max_retries = get_config("calendar.max_retries", 24)

================================================================================
"""

from .global_config import (
    get_config,
    init_logger,
    reload_config,
    set_config,
)

__all__ = [
    "get_config",
    "set_config",
    "reload_config",
    "init_logger",
]
