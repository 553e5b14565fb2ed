"""
================================================================================
Widgets Page Object (Async / Playwright)
================================================================================

Demo page holding a paged calendar, a native date input, a user table and a
shadow-DOM component. Tests load it from a local HTML fixture, so it has no
URL of its own.

================================================================================
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

import allure

from testsuites.ui_testing.framework.page_base import PageBase


class WidgetsPage(PageBase):
    """Calendar / table / shadow DOM demo page (async)."""

    CALENDAR_TRIGGER = "#open-calendar"
    SELECTED_DATE = "#selected-date-display"
    NATIVE_DATE = "#native-date-input"
    USERS_TABLE = "#data-table"
    SHADOW_HOST = "#host"

    @allure.step("Load widgets page from {html_path}")
    async def load(self, html_path: Path) -> "WidgetsPage":
        await self.page.set_content(Path(html_path).read_text(encoding="utf-8"))
        return self

    async def pick_date(self, date: str) -> None:
        await self.helper.select_date(self.CALENDAR_TRIGGER, date)

    async def selected_date(self) -> Optional[str]:
        return await self.page.locator(self.SELECTED_DATE).text_content()

    async def set_native_date(self, date: str) -> None:
        await self.helper.fill_native_date(self.NATIVE_DATE, date)

    async def user_field(self, name: str, column: str) -> str:
        return await self.helper.get_table_cell_value(self.USERS_TABLE, name, column)

    async def has_user(self, **fields: str) -> bool:
        expected: Dict[str, str] = dict(fields)
        return await self.helper.verify_row_exists(self.USERS_TABLE, expected)

    async def press_shadow_button(self, inner_selector: str = "#shadow-btn") -> None:
        await self.actions.click_in_shadow(self.SHADOW_HOST, inner_selector)
