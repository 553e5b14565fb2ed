"""
================================================================================
Locator Abstraction
================================================================================

Uniform element references for every DOM helper in the framework.

Callers may pass a raw selector string, a Playwright Locator, a Playwright
ElementHandle or a handle produced earlier by this module. `resolve()` turns
any of those into one of two handle types:

    - LazyHandle: selector + scope (page, frame or Locator). Nothing is
      checked until an action runs, so Playwright's auto-waiting applies.
    - ResolvedHandle: an element whose existence has already been confirmed.
      It belongs to the document snapshot it was taken from and must not be
      used after that document navigates away.

Selectors are classified once, at the call boundary, into NativeSelector
(CSS / text / role engines, which pierce open shadow roots) or PathSelector
(XPath, which does not).

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, List, Optional, Union

from loguru import logger
from playwright.async_api import ElementHandle, Locator


# Prefixes Playwright itself treats as XPath
PATH_PREFIXES = ("xpath=", "//", "..")


class SelectorStrategy(str, Enum):
    """How a selector is evaluated relative to shadow boundaries."""

    NATIVE = "native"
    PATH = "path"


@dataclass(frozen=True)
class NativeSelector:
    """Selector the engine can evaluate across shadow boundaries."""

    value: str
    strategy: ClassVar[SelectorStrategy] = SelectorStrategy.NATIVE


@dataclass(frozen=True)
class PathSelector:
    """XPath selector; only evaluates against the light DOM unless re-rooted."""

    value: str
    strategy: ClassVar[SelectorStrategy] = SelectorStrategy.PATH

    @property
    def expression(self) -> str:
        """Raw XPath expression without the `xpath=` engine prefix."""
        if self.value.startswith("xpath="):
            return self.value[len("xpath="):]
        return self.value


Selector = Union[NativeSelector, PathSelector]


def parse_selector(raw: Union[str, Selector]) -> Selector:
    """
    Classify a selector string by its prefix.

    Args:
        raw: Selector string, or an already classified selector

    Returns:
        PathSelector for `xpath=`, `//` and `..` prefixes, else NativeSelector
    """
    if isinstance(raw, (NativeSelector, PathSelector)):
        return raw
    if raw.startswith(PATH_PREFIXES):
        return PathSelector(raw)
    return NativeSelector(raw)


@dataclass(frozen=True)
class LazyHandle:
    """
    Unchecked reference: a selector evaluated against a scope on every use.

    Attributes:
        scope: Page, Frame or Locator the selector is evaluated against.
            When `selector` is None the scope itself is the target Locator.
        selector: Selector string, or None for a wrapped Locator
    """

    scope: Any
    selector: Optional[str] = None
    is_resolved: ClassVar[bool] = False

    @property
    def locator(self) -> Locator:
        """Fresh Playwright Locator for this handle."""
        if self.selector is None:
            return self.scope
        return self.scope.locator(self.selector)

    @property
    def strategy(self) -> SelectorStrategy:
        if self.selector is None:
            return SelectorStrategy.NATIVE
        return parse_selector(self.selector).strategy

    def describe(self) -> str:
        return self.selector if self.selector is not None else str(self.scope)

    def find(self, selector: str) -> "LazyHandle":
        """Chain a selector under this handle, still lazily."""
        return LazyHandle(self.locator, selector)

    async def count(self) -> int:
        return await self.locator.count()

    async def click(self, **options: Any) -> None:
        await self.locator.click(**options)

    async def fill(self, value: str, **options: Any) -> None:
        await self.locator.fill(value, **options)

    async def inner_text(self, **options: Any) -> str:
        return await self.locator.inner_text(**options)

    async def is_visible(self) -> bool:
        return await self.locator.is_visible()

    async def element_handle(self, **options: Any) -> ElementHandle:
        """ElementHandle of the first match (waits for it to attach)."""
        return await self.locator.first.element_handle(**options)

    async def all_inner_texts(self, selector: str) -> List[str]:
        """Inner texts of all descendants matching `selector`, in document order."""
        return await self.locator.locator(selector).all_inner_texts()

    async def query_all(self, selector: str) -> List["LazyHandle"]:
        """One lazy handle per descendant currently matching `selector`."""
        matches = await self.locator.locator(selector).all()
        return [LazyHandle(match) for match in matches]


@dataclass(frozen=True)
class ResolvedHandle:
    """
    Confirmed element reference wrapping a Playwright ElementHandle.

    Attributes:
        element: The underlying ElementHandle
        description: Human-readable origin (selectors used to reach it)
    """

    element: ElementHandle
    description: str = ""
    is_resolved: ClassVar[bool] = True

    def describe(self) -> str:
        return self.description or str(self.element)

    async def count(self) -> int:
        return 1

    async def click(self, **options: Any) -> None:
        await self.element.click(**options)

    async def fill(self, value: str, **options: Any) -> None:
        await self.element.fill(value, **options)

    async def inner_text(self, **options: Any) -> str:
        return await self.element.inner_text()

    async def is_visible(self) -> bool:
        return await self.element.is_visible()

    async def element_handle(self, **options: Any) -> ElementHandle:
        return self.element

    async def all_inner_texts(self, selector: str) -> List[str]:
        return [await child.inner_text() for child in await self.element.query_selector_all(selector)]

    async def query_all(self, selector: str) -> List["ResolvedHandle"]:
        children = await self.element.query_selector_all(selector)
        return [
            ResolvedHandle(child, f"{self.describe()} >> {selector} >> nth={index}")
            for index, child in enumerate(children)
        ]

    async def query(self, selector: str) -> Optional["ResolvedHandle"]:
        """First descendant matching `selector`, or None."""
        child = await self.element.query_selector(selector)
        if child is None:
            return None
        return ResolvedHandle(child, f"{self.describe()} >> {selector}")


Handle = Union[LazyHandle, ResolvedHandle]
ElementRef = Union[str, Selector, Locator, ElementHandle, LazyHandle, ResolvedHandle]


def resolve(scope: Any, ref: ElementRef) -> Handle:
    """
    Turn any element reference into a handle without touching the document.

    Args:
        scope: Page, Frame or Locator that selector strings are evaluated in
        ref: Selector string, classified selector, Locator, ElementHandle
            or an existing handle

    Returns:
        The handle itself if `ref` already is one, a LazyHandle for
        selectors and Locators, a ResolvedHandle for ElementHandles

    Raises:
        TypeError: If `ref` is none of the supported reference types
    """
    if isinstance(ref, (LazyHandle, ResolvedHandle)):
        return ref
    if isinstance(ref, (NativeSelector, PathSelector)):
        ref = ref.value
    if isinstance(ref, str):
        logger.debug(f"Lazy reference: {ref}")
        return LazyHandle(scope, ref)
    if isinstance(ref, Locator):
        return LazyHandle(ref)
    if isinstance(ref, ElementHandle):
        return ResolvedHandle(ref)
    raise TypeError(f"Unsupported element reference: {ref!r}")


__all__ = [
    "SelectorStrategy",
    "NativeSelector",
    "PathSelector",
    "Selector",
    "parse_selector",
    "LazyHandle",
    "ResolvedHandle",
    "Handle",
    "ElementRef",
    "resolve",
]
