"""
================================================================================
Calendar Navigator
================================================================================

Drives paged month/year date pickers to a target day.

The navigator never assumes it knows which month the widget shows: every
step re-reads the period label, compares it with the target period
(year * 12 + month index) and pages forward or backward once. The loop is
bounded by a retry budget, not a wall-clock timeout; each DOM call keeps its
own Playwright timeout.

Also covers the two non-widget date paths: filling a native
<input type="date"> and validating a start/end pair before driving the UI.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from uitest_tools.common import get_config

from .errors import (
    DateNotReachable,
    DateRangeViolation,
    InvalidDate,
    InvalidMonthName,
    NativeDateFillError,
)
from .locator import ElementRef, LazyHandle, resolve


MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

DEFAULT_MAX_RETRIES = 24


def month_index(name: str) -> int:
    """Zero-based index of a full English month name."""
    try:
        return MONTHS.index(name)
    except ValueError:
        raise InvalidMonthName(name) from None


def to_period(month: int, year: int) -> int:
    """Collapse (month index, year) to one comparable integer."""
    return year * 12 + month


@dataclass(frozen=True)
class CalendarTarget:
    """Parsed "D Month YYYY" date."""

    day: int
    month: int
    year: int

    @property
    def period(self) -> int:
        return to_period(self.month, self.year)

    @property
    def month_name(self) -> str:
        return MONTHS[self.month]


def parse_target_date(text: str) -> CalendarTarget:
    """
    Parse a "D Month YYYY" string, e.g. "15 October 2024".

    Raises:
        InvalidMonthName: Month is not a full English month name
        InvalidDate: Wrong shape, non-numeric parts or day outside 1-31
    """
    parts = text.split()
    if len(parts) != 3:
        raise InvalidDate(text, expected="D Month YYYY")

    day_text, month_name, year_text = parts
    month = month_index(month_name)
    try:
        day, year = int(day_text), int(year_text)
    except ValueError:
        raise InvalidDate(text, expected="D Month YYYY") from None

    if not 1 <= day <= 31:
        raise InvalidDate(text, expected="day between 1 and 31")
    return CalendarTarget(day=day, month=month, year=year)


def parse_period_label(label: str) -> int:
    """
    Parse a widget label such as "February 2026" into a period.

    Raises:
        InvalidMonthName: Month is not a full English month name
        InvalidDate: Label is not "Month YYYY"
    """
    parts = label.split()
    if len(parts) != 2:
        raise InvalidDate(label, expected="Month YYYY")
    month = month_index(parts[0])
    try:
        year = int(parts[1])
    except ValueError:
        raise InvalidDate(label, expected="Month YYYY") from None
    return to_period(month, year)


@dataclass
class CalendarOptions:
    """Selectors of the picker parts, all evaluated against the page."""

    next_button: str = "#next-month"
    prev_button: str = "#prev-month"
    period_label: str = "#current-month-year"
    day_cell: str = ".calendar-day"

    @classmethod
    def from_config(cls) -> "CalendarOptions":
        """Build options from the `calendar.*` configuration section."""
        defaults = cls()
        return cls(
            next_button=get_config("calendar.next_button", defaults.next_button),
            prev_button=get_config("calendar.prev_button", defaults.prev_button),
            period_label=get_config("calendar.period_label", defaults.period_label),
            day_cell=get_config("calendar.day_cell", defaults.day_cell),
        )


class CalendarNavigator:
    """
    Month/year picker driver.

    Usage:
        >>> calendar = CalendarNavigator(page)
        >>> await calendar.select_date("#open-calendar", "15 April 2026")

    Args:
        page: Page or Frame hosting the picker
        max_retries: Label reads allowed before giving up. Defaults to
            `calendar.max_retries` (24, two years of monthly paging)
    """

    def __init__(self, page: Any, max_retries: Optional[int] = None):
        self.page = page
        if max_retries is None:
            max_retries = int(get_config("calendar.max_retries", DEFAULT_MAX_RETRIES))
        self.max_retries = max_retries

    @allure.step("Select date {target_date}")
    async def select_date(
        self,
        picker_ref: ElementRef,
        target_date: str,
        options: Optional[CalendarOptions] = None,
    ) -> None:
        """
        Open the picker, page to the target month and click the day.

        Args:
            picker_ref: Element that opens the picker
            target_date: "D Month YYYY"
            options: Picker selectors; defaults come from configuration

        Raises:
            InvalidMonthName: Unknown month in target or widget label
            DateNotReachable: Target period not shown within the retry budget
        """
        options = options or CalendarOptions.from_config()

        await resolve(self.page, picker_ref).click()

        target = parse_target_date(target_date)
        logger.info(f"Navigating calendar to {target.month_name} {target.year}")

        await self._navigate_to(target.period, target_date, options)
        await self._click_day(target.day, options)

    async def _navigate_to(self, target_period: int, target_date: str, options: CalendarOptions) -> None:
        label = resolve(self.page, options.period_label)
        next_button = resolve(self.page, options.next_button)
        prev_button = resolve(self.page, options.prev_button)

        for step in range(self.max_retries):
            displayed_label = (await label.inner_text()).strip()
            displayed = parse_period_label(displayed_label)

            if displayed == target_period:
                logger.debug(f"Calendar aligned on '{displayed_label}' after {step} steps")
                return

            if displayed < target_period:
                logger.debug(f"Step {step + 1}: '{displayed_label}' -> next")
                await next_button.click()
            else:
                logger.debug(f"Step {step + 1}: '{displayed_label}' -> previous")
                await prev_button.click()

        logger.error(f"Calendar never reached '{target_date}' in {self.max_retries} steps")
        raise DateNotReachable(target_date, self.max_retries)

    async def _click_day(self, day: int, options: CalendarOptions) -> None:
        # Anchored match so "1" never selects "11" or "21"
        exact_day = re.compile(rf"^\s*{day}\s*$")
        cells = resolve(self.page, options.day_cell)
        logger.info(f"Selecting day {day}")
        await LazyHandle(cells.locator.filter(has_text=exact_day)).click()

    @allure.step("Fill native date {date}")
    async def fill_native_date(self, ref: ElementRef, date: str) -> None:
        """
        Fill an <input type="date"> directly.

        Args:
            ref: The date input
            date: Value in YYYY-MM-DD format

        Raises:
            NativeDateFillError: Playwright rejected the fill
        """
        handle = resolve(self.page, ref)
        try:
            await handle.fill(date)
        except PlaywrightError as e:
            logger.error(f"Failed to fill native date {date}: {e}")
            raise NativeDateFillError(date, handle.describe(), str(e).splitlines()[0]) from e


ACCEPTED_DATE_FORMATS = ("%d %B %Y", "%Y/%m/%d", "%m/%d/%Y")


def parse_date(value: str) -> datetime:
    """
    Parse a date string: ISO 8601 first, then "D Month YYYY" and slash forms.

    Raises:
        InvalidDate: No accepted format matches
    """
    text = value.strip()
    # fromisoformat only accepts a "Z" suffix from Python 3.11
    iso_text = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(iso_text)
    except ValueError:
        pass
    for fmt in ACCEPTED_DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    raise InvalidDate(value)


def verify_date_range(start_date: str, end_date: str) -> None:
    """
    Check that `start_date` is not after `end_date`. Touches no DOM.

    Raises:
        InvalidDate: Either value does not parse
        DateRangeViolation: Start is after end
    """
    start = parse_date(start_date)
    end = parse_date(end_date)
    if start.tzinfo is not None or end.tzinfo is not None:
        start, end = start.astimezone(), end.astimezone()

    if start > end:
        logger.error(f"Date range violation: {start_date} > {end_date}")
        raise DateRangeViolation(start_date, end_date)


__all__ = [
    "MONTHS",
    "CalendarTarget",
    "CalendarOptions",
    "CalendarNavigator",
    "month_index",
    "to_period",
    "parse_target_date",
    "parse_period_label",
    "parse_date",
    "verify_date_range",
]
