"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based DOM interaction and verification helpers.

Components:
    - locator: Lazy / resolved element handles behind one reference type
    - shadow_resolver: Element lookup across shadow-root boundaries
    - calendar_navigator: Paged date-picker driver and date validation
    - table_query: Header-indexed table reads and row predicates
    - element_actions: Everyday clicks, fills, waits, tabs and frames
    - dialogs: One-shot dialog subscriptions
    - assertions: Web-first assertion wrappers
    - page_base / browser_manager: Page objects and browser lifecycle

Author: Automation Team
License: MIT
================================================================================
"""

from .assertions import AssertionUtils
from .browser_manager import BrowserManager
from .calendar_navigator import CalendarNavigator, CalendarOptions, verify_date_range
from .dialogs import DialogWatcher, expect_dialog
from .element_actions import ElementActions
from .errors import (
    ColumnNotFound,
    DateNotReachable,
    DateRangeViolation,
    ElementNotFoundInShadow,
    HeaderNotFound,
    InvalidDate,
    InvalidMonthName,
    RowNotFound,
    ShadowHostNotFound,
    UIHelperError,
)
from .locator import LazyHandle, ResolvedHandle, resolve
from .page_base import BasePage, PageBase
from .shadow_resolver import ShadowResolver
from .table_query import TableQuery
from .ui_helper import UIHelper

__all__ = [
    "AssertionUtils",
    "BasePage",
    "PageBase",
    "BrowserManager",
    "CalendarNavigator",
    "CalendarOptions",
    "verify_date_range",
    "DialogWatcher",
    "expect_dialog",
    "ElementActions",
    "LazyHandle",
    "ResolvedHandle",
    "resolve",
    "ShadowResolver",
    "TableQuery",
    "UIHelper",
    "UIHelperError",
    "ShadowHostNotFound",
    "ElementNotFoundInShadow",
    "InvalidMonthName",
    "DateNotReachable",
    "InvalidDate",
    "DateRangeViolation",
    "ColumnNotFound",
    "HeaderNotFound",
    "RowNotFound",
]
