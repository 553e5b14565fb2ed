"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login form of the practice test-automation site.

Design goals:
  - Label and role based locators instead of brittle CSS
  - Post-login check that tolerates different success markups by trying
    candidate indicators in order

================================================================================
"""

from __future__ import annotations

import re
from typing import List, Optional

import allure
from loguru import logger
from playwright.async_api import Locator

from testsuites.ui_testing.framework.page_base import PageBase


SUBMIT_BUTTON_NAME = re.compile(r"submit|log ?in|login", re.IGNORECASE)


class LoginPage(PageBase):
    """Login page object (async)."""

    URL_PATH = "/practice-test-login/"
    PAGE_TITLE = "Test Login"

    @allure.step("Open login page")
    async def open(self, path: Optional[str] = None) -> "LoginPage":
        """Navigate to the login page; `path` overrides URL_PATH."""
        await self.navigate(path)
        return self

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """Fill the labelled fields and press the submit button."""
        await self.page.get_by_label("Username").fill(username)
        await self.page.get_by_label("Password").fill(password)
        await self.page.get_by_role("button", name=SUBMIT_BUTTON_NAME).click()

    def _post_login_candidates(self) -> List[Locator]:
        return [
            self.page.get_by_text(re.compile(r"logged in successfully", re.IGNORECASE)),
            self.page.get_by_text(re.compile(r"successfully logged in", re.IGNORECASE)),
            self.page.get_by_text(re.compile(r"welcome", re.IGNORECASE)),
            self.page.get_by_role("link", name=re.compile(r"logout|log out", re.IGNORECASE)),
        ]

    @allure.step("Find post-login indicator")
    async def get_post_login_indicator(self) -> Optional[Locator]:
        """
        First post-login marker present on the page.

        Returns:
            The matching Locator, or None when no candidate is present
        """
        for candidate in self._post_login_candidates():
            if await candidate.count() > 0:
                logger.debug(f"Post-login indicator found: {candidate}")
                return candidate
        logger.info("No post-login indicator on page")
        return None

    @allure.step("Read login error")
    async def get_error_message(self) -> Optional[str]:
        """Text of the error banner, or None when it is not shown."""
        error = self.page.locator("#error")
        if await error.is_visible():
            return (await error.inner_text()).strip()
        return None
