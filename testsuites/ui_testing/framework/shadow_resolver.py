"""
================================================================================
Shadow DOM Resolver
================================================================================

Locates elements nested inside shadow trees.

Two strategies with different guarantees:
    - Native selectors (CSS, text, role...) pierce open shadow roots inside
      Playwright itself. The resolver returns a LazyHandle immediately and
      performs no existence check; a missing element fails later, when the
      handle is acted upon, with Playwright's own timeout.
    - Path selectors (XPath) never cross shadow boundaries. The resolver
      checks the host, fetches its shadow root in the page and evaluates
      the XPath against that root, failing right away with
      ShadowHostNotFound or ElementNotFoundInShadow.

Usage:
    >>> shadow = ShadowResolver(page)
    >>> await shadow.click_in_shadow("#host", "#shadow-btn")
    >>> await shadow.fill_in_shadow("#host", "xpath=.//input[@id='q']", "hello")

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any

import allure
from loguru import logger
from playwright.async_api import Error as PlaywrightError

from .errors import ElementNotFoundInShadow, ShadowHostNotFound
from .locator import (
    ElementRef,
    Handle,
    LazyHandle,
    NativeSelector,
    PathSelector,
    ResolvedHandle,
    parse_selector,
    resolve,
)


SHADOW_ROOT_SCRIPT = "host => host.shadowRoot"

XPATH_IN_ROOT_SCRIPT = """(root, expression) => {
    const result = document.evaluate(
        expression, root, null, XPathResult.FIRST_ORDERED_NODE_TYPE, null
    );
    return result.singleNodeValue;
}"""


class ShadowResolver:
    """
    Finds, clicks and fills elements behind shadow-root boundaries.

    Args:
        scope: Page or Frame that host selectors are evaluated in
    """

    def __init__(self, scope: Any):
        self.scope = scope

    @allure.step("Find in shadow DOM: {inner_selector}")
    async def find_in_shadow(self, host_ref: ElementRef, inner_selector: str) -> Handle:
        """
        Locate an element inside the shadow tree of `host_ref`.

        Args:
            host_ref: Shadow host (selector string or handle)
            inner_selector: Native selector, or XPath prefixed with `xpath=`

        Returns:
            LazyHandle for native selectors on a lazy host,
            ResolvedHandle for XPath selectors

        Raises:
            ShadowHostNotFound: XPath strategy and the host does not exist
            ElementNotFoundInShadow: XPath strategy (or a resolved host) and
                nothing matches inside the shadow root
        """
        host = resolve(self.scope, host_ref)
        inner = parse_selector(inner_selector)

        if isinstance(inner, NativeSelector):
            return await self._find_native(host, inner)
        return await self._find_by_path(host, inner)

    async def click_in_shadow(
        self,
        host_ref: ElementRef,
        inner_selector: str,
        **click_options: Any,
    ) -> None:
        """Find an element inside a shadow tree and click it."""
        handle = await self.find_in_shadow(host_ref, inner_selector)
        logger.info(f"Clicking in shadow DOM: {handle.describe()}")
        await handle.click(**click_options)

    async def fill_in_shadow(
        self,
        host_ref: ElementRef,
        inner_selector: str,
        value: str,
        **fill_options: Any,
    ) -> None:
        """Find an input inside a shadow tree and set its value."""
        handle = await self.find_in_shadow(host_ref, inner_selector)
        logger.info(f"Filling in shadow DOM: {handle.describe()}")
        await handle.fill(value, **fill_options)

    async def _find_native(self, host: Handle, inner: NativeSelector) -> Handle:
        if isinstance(host, LazyHandle):
            logger.debug(f"Native shadow query (lazy): {host.describe()} >> {inner.value}")
            return host.find(inner.value)

        # A resolved host has no selector scope left to stay lazy in
        found = await host.query(inner.value)
        if found is None:
            logger.error(f"'{inner.value}' not found under resolved host {host.describe()}")
            raise ElementNotFoundInShadow(inner.value, host.describe())
        return found

    async def _find_by_path(self, host: Handle, inner: PathSelector) -> ResolvedHandle:
        host_desc = host.describe()

        if await host.count() == 0:
            logger.error(f"Shadow host not found: {host_desc}")
            raise ShadowHostNotFound(host_desc, inner.value)

        try:
            host_element = await host.element_handle()
            shadow_root = await host_element.evaluate_handle(SHADOW_ROOT_SCRIPT)
            if shadow_root.as_element() is None:
                raise ElementNotFoundInShadow(
                    inner.value, host_desc, reason="host has no open shadow root"
                )
            match = await shadow_root.evaluate_handle(XPATH_IN_ROOT_SCRIPT, inner.expression)
        except PlaywrightError as e:
            # Document navigated (or host detached) between the two evaluations
            reason = str(e).splitlines()[0] if str(e) else type(e).__name__
            logger.error(f"Shadow evaluation failed for {host_desc}: {reason}")
            raise ElementNotFoundInShadow(inner.value, host_desc, reason=reason) from e

        element = match.as_element()
        if element is None:
            logger.error(f"'{inner.value}' not found in shadow DOM of {host_desc}")
            raise ElementNotFoundInShadow(inner.value, host_desc)

        logger.debug(f"Resolved '{inner.value}' inside shadow root of {host_desc}")
        return ResolvedHandle(element, f"{host_desc} >> shadow >> {inner.value}")


__all__ = [
    "ShadowResolver",
    "SHADOW_ROOT_SCRIPT",
    "XPATH_IN_ROOT_SCRIPT",
]
