"""
================================================================================
Page Object Factory
================================================================================

Builds page objects by short name, for data-driven tests that pick the page
from test data.

================================================================================
"""

from __future__ import annotations

from typing import Dict, Type

from playwright.async_api import Page

from testsuites.ui_testing.framework.errors import UnknownPageObject
from testsuites.ui_testing.framework.page_base import PageBase

from .login_page import LoginPage
from .widgets_page import WidgetsPage


PAGE_OBJECTS: Dict[str, Type[PageBase]] = {
    "login": LoginPage,
    "widgets": WidgetsPage,
}


def create_page_object(name: str, page: Page, base_url: str = "") -> PageBase:
    """
    Instantiate the page object registered as `name`.

    Raises:
        UnknownPageObject: No page object has that name
    """
    try:
        page_class = PAGE_OBJECTS[name]
    except KeyError:
        raise UnknownPageObject(name) from None
    return page_class(page, base_url=base_url)
