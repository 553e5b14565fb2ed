"""
================================================================================
UI Helper
================================================================================

Single entry point for the complex-widget helpers: date pickers and
header-indexed tables.

Usage:
    helper = UIHelper(page)
    await helper.select_date("#open-calendar", "15 April 2026")
    role = await helper.get_table_cell_value("#data-table", "Bob Smith", "Role")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Mapping, Optional

from playwright.async_api import Page

from .calendar_navigator import CalendarNavigator, CalendarOptions, verify_date_range
from .locator import ElementRef
from .table_query import TableQuery


class UIHelper:
    """Calendar and table helpers bound to one page."""

    def __init__(self, page: Page, max_calendar_retries: Optional[int] = None):
        self.page = page
        self.calendar = CalendarNavigator(page, max_retries=max_calendar_retries)
        self.tables = TableQuery(page)

    # =========================================================================
    # Calendar & Date Selectors
    # =========================================================================

    async def select_date(
        self,
        picker_ref: ElementRef,
        target_date: str,
        options: Optional[CalendarOptions] = None,
    ) -> None:
        """Select "D Month YYYY" in a paged month/year picker."""
        await self.calendar.select_date(picker_ref, target_date, options)

    async def fill_native_date(self, ref: ElementRef, date: str) -> None:
        """Fill an <input type="date"> with a YYYY-MM-DD value."""
        await self.calendar.fill_native_date(ref, date)

    @staticmethod
    def verify_date_range(start_date: str, end_date: str) -> None:
        """Raise unless start_date <= end_date; no DOM access."""
        verify_date_range(start_date, end_date)

    # =========================================================================
    # Table & Grid Utilities
    # =========================================================================

    async def get_table_cell_value(self, table_ref: ElementRef, row_text: str, column_header: str) -> str:
        return await self.tables.get_table_cell_value(table_ref, row_text, column_header)

    async def verify_row_exists(self, table_ref: ElementRef, expected_data: Mapping[str, str]) -> bool:
        return await self.tables.verify_row_exists(table_ref, expected_data)

    async def get_row_count(self, table_ref: ElementRef) -> int:
        return await self.tables.get_row_count(table_ref)

    async def get_column_count(self, table_ref: ElementRef) -> int:
        return await self.tables.get_column_count(table_ref)


__all__ = [
    "UIHelper",
]
