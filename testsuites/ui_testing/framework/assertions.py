"""
================================================================================
Assertion Utilities
================================================================================

Thin, reportable wrappers around Playwright's web-first `expect()` assertions.
Each wrapper accepts any element reference understood by `resolve()`.

expect() only takes Locators, so resolved handles are checked against their
ElementHandle instead: element states through wait_for_element_state(),
text and attributes by a single read. Failures raise AssertionError either way.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Optional, Pattern, Union

import allure
from playwright.async_api import Error as PlaywrightError, Page, expect

from .locator import ElementRef, Handle, ResolvedHandle, resolve


TextPattern = Union[str, Pattern[str]]


class AssertionUtils:
    """
    Element and page assertions with Allure steps.

    Usage:
        >>> checks = AssertionUtils(page)
        >>> await checks.assert_visible("#flash")
        >>> await checks.assert_url(re.compile(r".*/secure"))
    """

    def __init__(self, page: Page, timeout: Optional[float] = None):
        self.page = page
        self.timeout = timeout

    async def _assert_state(self, handle: ResolvedHandle, state: str) -> None:
        try:
            await handle.element.wait_for_element_state(state, timeout=self.timeout)
        except PlaywrightError as e:
            raise AssertionError(f"{handle.describe()} is not {state}: {str(e).splitlines()[0]}") from e

    @staticmethod
    def _check_text(handle: Handle, actual: Optional[str], expected: TextPattern, contains: bool) -> None:
        actual = " ".join((actual or "").split())
        if isinstance(expected, re.Pattern):
            matched = expected.search(actual) is not None
        else:
            expected_text = " ".join(expected.split())
            matched = expected_text in actual if contains else expected_text == actual
        if not matched:
            raise AssertionError(f"{handle.describe()} text '{actual}' does not match '{expected}'")

    # =========================================================================
    # Element Assertions
    # =========================================================================

    @allure.step("Assert visible: {ref}")
    async def assert_visible(self, ref: ElementRef) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            await self._assert_state(handle, "visible")
        else:
            await expect(handle.locator).to_be_visible(timeout=self.timeout)

    @allure.step("Assert hidden: {ref}")
    async def assert_hidden(self, ref: ElementRef) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            await self._assert_state(handle, "hidden")
        else:
            await expect(handle.locator).to_be_hidden(timeout=self.timeout)

    @allure.step("Assert enabled: {ref}")
    async def assert_enabled(self, ref: ElementRef) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            await self._assert_state(handle, "enabled")
        else:
            await expect(handle.locator).to_be_enabled(timeout=self.timeout)

    @allure.step("Assert disabled: {ref}")
    async def assert_disabled(self, ref: ElementRef) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            await self._assert_state(handle, "disabled")
        else:
            await expect(handle.locator).to_be_disabled(timeout=self.timeout)

    @allure.step("Assert text of {ref} is '{expected}'")
    async def assert_text(self, ref: ElementRef, expected: TextPattern) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            actual = await handle.element.text_content()
            self._check_text(handle, actual, expected, contains=False)
        else:
            await expect(handle.locator).to_have_text(expected, timeout=self.timeout)

    @allure.step("Assert {ref} contains '{expected}'")
    async def assert_contains_text(self, ref: ElementRef, expected: TextPattern) -> None:
        handle = resolve(self.page, ref)
        if isinstance(handle, ResolvedHandle):
            actual = await handle.element.text_content()
            self._check_text(handle, actual, expected, contains=True)
        else:
            await expect(handle.locator).to_contain_text(expected, timeout=self.timeout)

    @allure.step("Assert {ref} has {attr}='{value}'")
    async def assert_attribute(self, ref: ElementRef, attr: str, value: TextPattern) -> None:
        handle = resolve(self.page, ref)
        if not isinstance(handle, ResolvedHandle):
            await expect(handle.locator).to_have_attribute(attr, value, timeout=self.timeout)
            return

        actual = await handle.element.get_attribute(attr)
        if isinstance(value, re.Pattern):
            matched = actual is not None and value.search(actual) is not None
        else:
            matched = actual == value
        if not matched:
            raise AssertionError(f"{handle.describe()} attribute {attr}={actual!r} does not match {value!r}")

    # =========================================================================
    # Page Assertions
    # =========================================================================

    @allure.step("Assert URL: {expected}")
    async def assert_url(self, expected: TextPattern) -> None:
        await expect(self.page).to_have_url(expected, timeout=self.timeout)

    @allure.step("Assert title: {expected}")
    async def assert_title(self, expected: TextPattern) -> None:
        await expect(self.page).to_have_title(expected, timeout=self.timeout)

    @allure.step("Assert page contains '{text}'")
    async def assert_page_contains_text(self, text: str) -> None:
        await expect(self.page.locator("body")).to_contain_text(text, timeout=self.timeout)


__all__ = [
    "AssertionUtils",
]
