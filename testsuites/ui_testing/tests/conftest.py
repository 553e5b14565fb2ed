"""
================================================================================
UI Testing Pytest Configuration
================================================================================

This module configures pytest for UI tests, providing fixtures for browser
management, page objects, and test setup/teardown.

Key Features:
- Browser and page lifecycle management (one browser per test)
- Local HTML fixtures loaded with `page.set_content`, no server required
- Page Object fixtures
- Screenshot capture on failure

Browser tests are skipped when no Playwright browser is installed
(`playwright install chromium` enables them).

================================================================================
"""

from pathlib import Path
from typing import AsyncGenerator

import pytest
from loguru import logger
from playwright.async_api import Error as PlaywrightError, Page

from testsuites.ui_testing.framework.browser_manager import BrowserManager
from testsuites.ui_testing.framework.page_base import BasePage
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.pages.widgets_page import WidgetsPage


FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest.fixture
async def browser_manager() -> AsyncGenerator[BrowserManager, None]:
    """
    Function-scoped browser manager.

    Skips the test when the configured browser cannot be launched.
    """
    manager = BrowserManager()
    try:
        await manager.start()
    except PlaywrightError as e:
        pytest.skip(f"Playwright browser '{manager.browser_type}' unavailable: {str(e).splitlines()[0]}")
    yield manager
    await manager.close()


@pytest.fixture
async def page(request, browser_manager: BrowserManager) -> AsyncGenerator[Page, None]:
    """
    Fresh page in its own context.

    Attaches screenshot, URL and DOM to the Allure report when the test fails.
    """
    page = await browser_manager.new_page()
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        try:
            await BasePage(page).capture_failure(request.node.name)
        except PlaywrightError as e:
            logger.warning(f"Failed to capture failure details: {e}")


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
async def widgets_page(page: Page) -> WidgetsPage:
    """WidgetsPage with the calendar / table playground loaded."""
    return await WidgetsPage(page).load(FIXTURES_DIR / "complex_ui.html")


@pytest.fixture
async def shadow_page(page: Page) -> WidgetsPage:
    """WidgetsPage with the shadow DOM playground loaded."""
    return await WidgetsPage(page).load(FIXTURES_DIR / "shadow_test.html")


@pytest.fixture
def login_page(page: Page) -> LoginPage:
    return LoginPage(page)


# ================================================================================
# Test Lifecycle Hooks
# ================================================================================

@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Expose the call-phase report to fixtures as `item.rep_call`."""
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        item.rep_call = report
