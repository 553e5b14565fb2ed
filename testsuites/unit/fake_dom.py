"""
In-memory stand-ins for the slice of the Playwright async API the framework
touches: Page.locator(), Locator queries/actions and ElementHandle /
JSHandle evaluation for the shadow-root scripts.

Selector support is deliberately small: `#id`, `.class`, `tag`,
`tbody tr`, `tr:has(td)` and single-step XPath (`.//tag[@id='x']`).
CSS-style selectors pierce shadow roots, XPath does not, like Playwright.
"""

import re
from typing import Callable, Iterator, List, Optional, Union

from playwright.async_api import Error as PlaywrightError

from testsuites.ui_testing.framework.shadow_resolver import (
    SHADOW_ROOT_SCRIPT,
    XPATH_IN_ROOT_SCRIPT,
)


XPATH_STEP = re.compile(r"^\.?//(?P<tag>[\w*]+)(?:\[@id=['\"](?P<id>[^'\"]+)['\"]\])?$")

TextSource = Union[str, Callable[[], str], None]


class FakeElement:
    def __init__(
        self,
        tag: str,
        text: TextSource = None,
        children=None,
        id: Optional[str] = None,
        classes=(),
        visible: bool = True,
        disabled: bool = False,
        attributes=None,
        on_click: Optional[Callable[["FakeElement"], None]] = None,
    ):
        self.tag = tag
        self._text = text
        self.children: List["FakeElement"] = list(children or [])
        self.id = id
        self.classes = set(classes)
        self.visible = visible
        self.disabled = disabled
        self.attributes = dict(attributes or {})
        self.on_click = on_click
        self.shadow_root: Optional["FakeElement"] = None

        self.value = ""
        self.clicks = 0
        self.hovers = 0
        self.checked = False
        self.text_reads = 0
        self.detached = False

    def __repr__(self) -> str:
        return f"<FakeElement {self.tag}#{self.id}>" if self.id else f"<FakeElement {self.tag}>"

    def attach_shadow(self, *children: "FakeElement") -> "FakeElement":
        self.shadow_root = FakeElement("#shadow-root", children=children)
        return self.shadow_root

    def text_value(self) -> str:
        if self._text is not None:
            return self._text() if callable(self._text) else self._text
        return "\t".join(child.text_value() for child in self.children)

    def _check_attached(self) -> None:
        if self.detached:
            raise PlaywrightError("Execution context was destroyed, most likely because of a navigation")

    # ElementHandle surface -------------------------------------------------

    async def inner_text(self) -> str:
        self._check_attached()
        self.text_reads += 1
        return self.text_value()

    async def click(self, **options) -> None:
        self._check_attached()
        self.clicks += 1
        if self.on_click:
            self.on_click(self)

    async def fill(self, value: str, **options) -> None:
        self._check_attached()
        self.value = value

    async def is_visible(self) -> bool:
        return self.visible and not self.detached

    async def text_content(self) -> str:
        self._check_attached()
        return self.text_value()

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    async def hover(self, **options) -> None:
        self._check_attached()
        self.hovers += 1

    async def dblclick(self, **options) -> None:
        await self.click()
        await self.click()

    async def type(self, text: str, **options) -> None:
        self._check_attached()
        self.value += text

    async def input_value(self, **options) -> str:
        self._check_attached()
        return self.value

    async def check(self, **options) -> None:
        self._check_attached()
        self.checked = True

    async def uncheck(self, **options) -> None:
        self._check_attached()
        self.checked = False

    async def is_checked(self) -> bool:
        return self.checked

    async def wait_for_element_state(self, state: str, timeout=None) -> None:
        visible = await self.is_visible()
        satisfied = {
            "visible": visible,
            "hidden": not visible,
            "enabled": not self.disabled,
            "disabled": self.disabled,
        }[state]
        if not satisfied:
            raise PlaywrightError(f"Timeout {timeout}ms exceeded waiting for element to be {state}")

    async def query_selector(self, selector: str) -> Optional["FakeElement"]:
        matches = select(self, selector)
        return matches[0] if matches else None

    async def query_selector_all(self, selector: str) -> List["FakeElement"]:
        return select(self, selector)

    async def evaluate_handle(self, script: str, arg=None) -> "FakeJSHandle":
        self._check_attached()
        if script == SHADOW_ROOT_SCRIPT:
            return FakeJSHandle(self.shadow_root)
        if script == XPATH_IN_ROOT_SCRIPT:
            return FakeJSHandle(xpath_first(self, arg))
        raise AssertionError(f"Unexpected script: {script}")


class FakeJSHandle:
    def __init__(self, target: Optional[FakeElement]):
        self.target = target

    def as_element(self) -> Optional[FakeElement]:
        return self.target

    async def evaluate_handle(self, script: str, arg=None) -> "FakeJSHandle":
        return await self.target.evaluate_handle(script, arg)


def descendants(root: FakeElement, pierce: bool = True) -> Iterator[FakeElement]:
    children = list(root.children)
    if pierce and root.shadow_root is not None:
        children.extend(root.shadow_root.children)
    for child in children:
        yield child
        yield from descendants(child, pierce)


def xpath_all(root: FakeElement, expression: str) -> List[FakeElement]:
    match = XPATH_STEP.match(expression)
    if match is None:
        raise AssertionError(f"Unsupported XPath in fake DOM: {expression}")
    tag, element_id = match.group("tag"), match.group("id")
    return [
        e for e in descendants(root, pierce=False)
        if (tag == "*" or e.tag == tag) and (element_id is None or e.id == element_id)
    ]


def xpath_first(root: FakeElement, expression: str) -> Optional[FakeElement]:
    matches = xpath_all(root, expression)
    return matches[0] if matches else None


def select(root: FakeElement, selector: str) -> List[FakeElement]:
    if selector.startswith("xpath="):
        return xpath_all(root, selector[len("xpath="):])
    if selector.startswith("//"):
        return xpath_all(root, selector)
    if selector == "tbody tr":
        return [row for body in select(root, "tbody") for row in body.children if row.tag == "tr"]
    if selector == "tr:has(td)":
        return [
            e for e in descendants(root)
            if e.tag == "tr" and any(child.tag == "td" for child in e.children)
        ]
    if selector.startswith("#"):
        return [e for e in descendants(root) if e.id == selector[1:]]
    if selector.startswith("."):
        return [e for e in descendants(root) if selector[1:] in e.classes]
    return [e for e in descendants(root) if e.tag == selector]


class FakeLocator:
    """Lazy query over a list of root elements; evaluated on every call."""

    def __init__(self, page: "FakePage", query: Callable[[], List[FakeElement]], description: str):
        self.page = page
        self._query = query
        self.description = description

    def __repr__(self) -> str:
        return f"<FakeLocator {self.description}>"

    def _elements(self) -> List[FakeElement]:
        return self._query()

    def _single(self) -> FakeElement:
        self.page.awaited_calls += 1
        elements = self._elements()
        if not elements:
            raise PlaywrightError(f"Timeout 500ms exceeded waiting for locator('{self.description}')")
        if len(elements) > 1:
            raise PlaywrightError(
                f"strict mode violation: locator('{self.description}') resolved to {len(elements)} elements"
            )
        return elements[0]

    # Chaining (sync, like Playwright) --------------------------------------

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(
            self.page,
            lambda: [m for e in self._elements() for m in select(e, selector)],
            f"{self.description} >> {selector}",
        )

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(
            self.page,
            lambda: self._elements()[index:index + 1],
            f"{self.description} >> nth={index}",
        )

    def filter(self, has_text=None) -> "FakeLocator":
        def matches(element: FakeElement) -> bool:
            text = element.text_value()
            if hasattr(has_text, "search"):
                return has_text.search(text) is not None
            return has_text in text

        return FakeLocator(
            self.page,
            lambda: [e for e in self._elements() if matches(e)],
            f"{self.description} >> filter({has_text!r})",
        )

    # Queries & actions -----------------------------------------------------

    async def count(self) -> int:
        self.page.awaited_calls += 1
        return len(self._elements())

    async def all(self) -> List["FakeLocator"]:
        self.page.awaited_calls += 1
        return [self.nth(i) for i in range(len(self._elements()))]

    async def all_inner_texts(self) -> List[str]:
        self.page.awaited_calls += 1
        return [await e.inner_text() for e in self._elements()]

    async def inner_text(self, **options) -> str:
        return await self._single().inner_text()

    async def click(self, **options) -> None:
        await self._single().click(**options)

    async def fill(self, value: str, **options) -> None:
        await self._single().fill(value, **options)

    async def is_visible(self) -> bool:
        self.page.awaited_calls += 1
        elements = self._elements()
        return bool(elements) and await elements[0].is_visible()

    async def element_handle(self, **options) -> FakeElement:
        return self._single()


class FakePage:
    def __init__(self, *body: FakeElement):
        self.document = FakeElement("html", children=[FakeElement("body", children=body)])
        self.awaited_calls = 0

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, lambda: select(self.document, selector), selector)


# =============================================================================
# Canned documents
# =============================================================================

def shadow_page() -> FakePage:
    """Host #host with an open shadow root holding a button and an input."""
    host = FakeElement("div", id="host")
    host.attach_shadow(
        FakeElement("button", "Click me", id="shadow-btn"),
        FakeElement("input", id="shadow-input"),
        FakeElement("span", "Text inside shadow"),
    )
    plain = FakeElement("div", id="plain-host")
    return FakePage(host, plain)


def users_table_page(rows=None, headers=("Name", "Email", "Role", "Status")) -> FakePage:
    """#data-table with a thead header row and one tbody row per entry."""
    rows = rows if rows is not None else [
        ("Alice Johnson", "alice@example.com", "Admin", "Active"),
        ("Bob Smith", "bob@example.com", "Editor", "Active"),
        ("Charlie Brown", "charlie@example.com", "Viewer", "Inactive"),
    ]
    head = FakeElement("thead", children=[
        FakeElement("tr", children=[FakeElement("th", f" {h} ") for h in headers]),
    ])
    body = FakeElement("tbody", children=[
        FakeElement("tr", children=[FakeElement("td", f"  {cell}  ") for cell in row])
        for row in rows
    ])
    return FakePage(FakeElement("table", id="data-table", children=[head, body]))
