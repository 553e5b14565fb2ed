"""
================================================================================
UI Framework Errors
================================================================================

Error taxonomy raised by the DOM interaction helpers. Every error keeps the
inputs of the failing operation (selector, header, date) as attributes and
repeats them in its message so a failed report points at the culprit.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Optional


class UIHelperError(Exception):
    """Base class for all DOM interaction helper failures."""
    pass


# =============================================================================
# Shadow DOM
# =============================================================================

class ShadowDomError(UIHelperError):
    """Raised when an element inside a shadow tree cannot be reached."""
    pass


class ShadowHostNotFound(ShadowDomError):
    """The shadow host selector matched nothing in the current document."""

    def __init__(self, host: str, inner: str):
        self.host = host
        self.inner = inner
        super().__init__(
            f'Failed to find element in shadow DOM: host "{host}" does not exist '
            f'(looking for "{inner}")'
        )


class ElementNotFoundInShadow(ShadowDomError):
    """The host exists but the inner descriptor matched nothing in its shadow root."""

    def __init__(self, inner: str, host: str, reason: Optional[str] = None):
        self.inner = inner
        self.host = host
        self.reason = reason
        message = f'Element "{inner}" not found in shadow DOM of "{host}"'
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


# =============================================================================
# Calendar / dates
# =============================================================================

class CalendarError(UIHelperError):
    """Raised when a date picker cannot be driven to the requested date."""
    pass


class InvalidMonthName(CalendarError, ValueError):
    """A month name is not one of the twelve English month names."""

    def __init__(self, month: str):
        self.month = month
        super().__init__(f"Invalid month name: {month}")


class DateNotReachable(CalendarError):
    """The picker never displayed the target period within the retry budget."""

    def __init__(self, target_date: str, max_retries: int):
        self.target_date = target_date
        self.max_retries = max_retries
        super().__init__(
            f'Target date "{target_date}" not found within retry limit '
            f"({max_retries} navigation steps)."
        )


class NativeDateFillError(CalendarError):
    """Filling a native <input type="date"> failed."""

    def __init__(self, date: str, selector: str, cause: str):
        self.date = date
        self.selector = selector
        super().__init__(f"Failed to fill native date {date} into {selector}: {cause}")


class InvalidDate(UIHelperError, ValueError):
    """A date string could not be parsed."""

    def __init__(self, value: str, expected: str = ""):
        self.value = value
        message = f"Invalid date provided: {value}"
        if expected:
            message = f"{message} (expected {expected})"
        super().__init__(message)


class DateRangeViolation(UIHelperError, ValueError):
    """Start date is after end date."""

    def __init__(self, start: str, end: str):
        self.start = start
        self.end = end
        super().__init__(
            f"Date logical violation: Start date ({start}) cannot be after "
            f"End date ({end})."
        )


# =============================================================================
# Tables
# =============================================================================

class TableError(UIHelperError):
    """Raised when a table query cannot be answered."""
    pass


class ColumnNotFound(TableError):
    """Column header is not present in the table (or missing from the matched row)."""

    def __init__(self, column: str, table: str, row_text: Optional[str] = None):
        self.column = column
        self.table = table
        self.row_text = row_text
        if row_text is None:
            message = f'Column "{column}" not found in table {table}'
        else:
            message = (
                f'Column "{column}" has no cell in the row containing '
                f'"{row_text}" of table {table}'
            )
        super().__init__(message)


class HeaderNotFound(TableError):
    """A header named in a row predicate is not present in the table."""

    def __init__(self, header: str, table: str):
        self.header = header
        self.table = table
        super().__init__(f'Header "{header}" not found in table {table}.')


class RowNotFound(TableError):
    """No body row contains the requested text."""

    def __init__(self, row_text: str, table: str):
        self.row_text = row_text
        self.table = table
        super().__init__(f'No row containing "{row_text}" found in table {table}')


# =============================================================================
# Browser context
# =============================================================================

class BrowserContextError(UIHelperError):
    """Raised when a tab or frame cannot be located."""
    pass


class TabNotFound(BrowserContextError):
    def __init__(self, index: int, open_tabs: int):
        self.index = index
        self.open_tabs = open_tabs
        super().__init__(f"Tab index {index} out of bounds ({open_tabs} open)")


class FrameNotFound(BrowserContextError):
    def __init__(self, name_or_selector: str):
        self.name_or_selector = name_or_selector
        super().__init__(f'Frame "{name_or_selector}" not found')


class UnknownPageObject(UIHelperError, KeyError):
    """Page factory was asked for a page object it does not know."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown page object: {name}")

    def __str__(self) -> str:
        return self.args[0]


__all__ = [
    "UIHelperError",
    "ShadowDomError",
    "ShadowHostNotFound",
    "ElementNotFoundInShadow",
    "CalendarError",
    "InvalidMonthName",
    "DateNotReachable",
    "NativeDateFillError",
    "InvalidDate",
    "DateRangeViolation",
    "TableError",
    "ColumnNotFound",
    "HeaderNotFound",
    "RowNotFound",
    "BrowserContextError",
    "TabNotFound",
    "FrameNotFound",
    "UnknownPageObject",
]
