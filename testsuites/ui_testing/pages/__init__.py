"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .page_factory import PAGE_OBJECTS, create_page_object
from .widgets_page import WidgetsPage

__all__ = [
    "LoginPage",
    "WidgetsPage",
    "PAGE_OBJECTS",
    "create_page_object",
]
