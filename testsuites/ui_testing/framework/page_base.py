"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation relative to the configured base URL
    - ElementActions, UIHelper and AssertionUtils bound to the page
    - Screenshot and failure capture with Allure attachments

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Locator, Page

from uitest_tools.common import get_config
from uitest_tools.report_tools import attach_html, attach_screenshot, attach_text

from .assertions import AssertionUtils
from .element_actions import ElementActions
from .ui_helper import UIHelper


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            URL_PATH = "/login"

            async def login(self, username: str, password: str):
                await self.actions.set_input_value("#username", username)
                await self.actions.set_input_value("#password", password)
                await self.actions.click("button[type='submit']")
    """

    # Override in subclasses
    URL_PATH: str = "/"
    PAGE_TITLE: str = ""

    def __init__(
        self,
        page: Page,
        base_url: str = "",
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application. Defaults to
                UI_BASE_URL, then `ui.base_url`.
        """
        self.page = page
        if not base_url:
            base_url = os.getenv("UI_BASE_URL") or get_config("ui.base_url", "http://localhost:3000")
        self.base_url = base_url.rstrip("/")

        self.actions = ElementActions(page)
        self.helper = UIHelper(page)
        self.assertions = AssertionUtils(page)

    @property
    def url(self) -> str:
        """Get full page URL."""
        return f"{self.base_url}{self.URL_PATH}"

    def locator(self, selector: str) -> Locator:
        return self.page.locator(selector)

    async def navigate(self, path: Optional[str] = None, wait_for: str = "load") -> None:
        """
        Navigate to this page, or to `path` under the base URL.

        Args:
            path: URL path overriding URL_PATH
            wait_for: Wait condition - 'load', 'domcontentloaded', 'networkidle'
        """
        target = f"{self.base_url}{path}" if path is not None else self.url
        with allure.step(f"Navigate to {target}"):
            await self.page.goto(target, wait_until=wait_for)
            logger.debug(f"Navigated to: {target}")

    async def wait_for_page_load(
        self,
        state: str = "networkidle",
        timeout: int = 15000,
    ) -> None:
        """Wait for the page to reach a stable load state."""
        await self.page.wait_for_load_state(state, timeout=timeout)

    async def get_title(self) -> str:
        return await self.page.title()

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        png = await self.page.screenshot(path=str(filepath), full_page=full_page)
        if attach_to_allure:
            attach_screenshot(png, name=name)

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> None:
        """
        Capture debugging information on test failure.

        Saves:
            - Screenshot
            - Current URL
            - Page HTML
        """
        with allure.step("Capture failure details"):
            await self.screenshot(f"failure_{test_name}", full_page=True)
            attach_text(self.page.url, name="Current URL")
            attach_html(await self.page.content(), name="Page HTML")


__all__ = [
    "BasePage",
    "PageBase",
]

# Backward-compatible alias (many Page Objects prefer PageBase naming)
PageBase = BasePage
