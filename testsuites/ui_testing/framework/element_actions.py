# ================================================================================
# Element Actions Module
# ================================================================================
#
# Everyday UI interactions composed from Playwright primitives, plus the
# shadow DOM entry points.
#
# Key Features:
#   - Every target accepts a selector string, Locator, ElementHandle or handle;
#     resolved handles are acted on through their ElementHandle
#   - Allure step per action, Loguru log per action
#   - Navigation, mouse, keyboard, form, select and checkbox helpers
#   - Scroll, script, wait, request, popup, tab and frame helpers
#   - Shadow DOM find / click / fill (see shadow_resolver)
#
# wait_for_text relies on expect() and needs a lazy reference.
#
# None of these retry on their own: Playwright's auto-waiting and per-call
# timeouts are the only waiting involved.
#
# ================================================================================

from typing import Any, Awaitable, Callable, List, Optional, Pattern, Union

import allure
from loguru import logger
from playwright.async_api import ElementHandle, Frame, Locator, Page, Request, Response, expect

from uitest_tools.common import get_config

from .errors import FrameNotFound, TabNotFound
from .locator import ElementRef, Handle, LazyHandle, ResolvedHandle, resolve
from .shadow_resolver import ShadowResolver


# Locator and ElementHandle share the action methods used below
Target = Union[Locator, ElementHandle]


class ElementActions:
    """
    Enhanced element interaction methods bound to one page.

    Example:
        actions = ElementActions(page)
        await actions.click("button#submit", description="Submit button")
        await actions.set_input_value("#username", "tomsmith")
        await actions.click_in_shadow("#host", "xpath=.//button[@id='shadow-btn']")
    """

    def __init__(self, page: Page, default_timeout: Optional[int] = None):
        """
        Initialize ElementActions with a Playwright page.

        Args:
            page: Playwright Page object
            default_timeout: Default timeout for waits in milliseconds.
                Defaults to `ui.default_timeout`.
        """
        self.page = page
        self.default_timeout = default_timeout or get_config("ui.default_timeout", 30000)
        self.shadow = ShadowResolver(page)

    def _handle(self, ref: ElementRef) -> Handle:
        return resolve(self.page, ref)

    def _target(self, ref: ElementRef) -> Target:
        """Fresh Locator for lazy references, the ElementHandle for resolved ones."""
        handle = self._handle(ref)
        if isinstance(handle, LazyHandle):
            return handle.locator
        return handle.element

    def _get_locator(self, ref: ElementRef) -> Locator:
        """Lazy Locator for helpers built on expect()."""
        handle = self._handle(ref)
        if not isinstance(handle, LazyHandle):
            raise TypeError(f"{handle.describe()} is already resolved; pass a selector or Locator")
        return handle.locator

    # =========================================================================
    # Navigation
    # =========================================================================

    @allure.step("Navigate to {url}")
    async def navigate_to(self, url: str) -> Optional[Response]:
        logger.info(f"Navigating to: {url}")
        return await self.page.goto(url)

    @allure.step("Reload page")
    async def reload_page(self) -> None:
        await self.page.reload()

    @allure.step("Go back")
    async def go_back(self) -> None:
        await self.page.go_back()

    @allure.step("Go forward")
    async def go_forward(self) -> None:
        await self.page.go_forward()

    @allure.step("Wait for page load")
    async def wait_for_page_load(self) -> None:
        """Wait for DOMContentLoaded, then for network idle."""
        await self.page.wait_for_load_state("domcontentloaded")
        await self.page.wait_for_load_state("networkidle")

    # =========================================================================
    # Click & Mouse Actions
    # =========================================================================

    @allure.step("Click element: {description}")
    async def click(self, ref: ElementRef, description: str = "", **options: Any) -> None:
        """
        Click on an element.

        Args:
            ref: Element reference
            description: Human-readable description for reporting
            **options: Passed to Playwright click() (button, force, timeout...)
        """
        handle = self._handle(ref)
        logger.info(f"Clicking element: {description or handle.describe()}")
        await handle.click(**options)

    @allure.step("Double click: {description}")
    async def double_click(self, ref: ElementRef, description: str = "") -> None:
        logger.info(f"Double clicking: {description or ref}")
        await self._target(ref).dblclick()

    @allure.step("Right click: {description}")
    async def right_click(self, ref: ElementRef, description: str = "") -> None:
        await self.click(ref, description, button="right")

    @allure.step("Hover element: {description}")
    async def hover(self, ref: ElementRef, description: str = "") -> None:
        logger.info(f"Hovering over: {description or ref}")
        await self._target(ref).hover()

    @allure.step("Click by text: {text}")
    async def click_by_text(self, text: str, exact: bool = False) -> None:
        await self.page.get_by_text(text, exact=exact).click()

    @allure.step("Click by role: {role} '{name}'")
    async def click_by_role(self, role: str, name: str) -> None:
        await self.page.get_by_role(role, name=name).click()

    @allure.step("Click if visible: {description}")
    async def click_if_visible(self, ref: ElementRef, description: str = "") -> bool:
        """
        Click only when the element is currently visible.

        Returns:
            True if a click happened
        """
        handle = self._handle(ref)
        if not await handle.is_visible():
            logger.debug(f"Skipping click, not visible: {description or handle.describe()}")
            return False
        await handle.click()
        return True

    @allure.step("Force click: {description}")
    async def force_click(self, ref: ElementRef, description: str = "") -> None:
        await self.click(ref, description, force=True)

    # =========================================================================
    # Keyboard Actions
    # =========================================================================

    @allure.step("Type text: {description}")
    async def type_text(self, ref: ElementRef, text: str, description: str = "", delay: int = 0) -> None:
        """Type text character by character (simulates real typing)."""
        logger.info(f"Typing into: {description or ref}")
        handle = self._handle(ref)
        if isinstance(handle, ResolvedHandle):
            await handle.element.type(text, delay=delay)
        else:
            await handle.locator.press_sequentially(text, delay=delay)

    @allure.step("Clear and type: {description}")
    async def clear_and_type(self, ref: ElementRef, text: str, description: str = "") -> None:
        target = self._target(ref)
        await target.fill("")
        await target.fill(text)

    @allure.step("Press key: {key}")
    async def press_key(self, key: str) -> None:
        """Press a keyboard key or shortcut ("Enter", "Tab", "Control+A")."""
        await self.page.keyboard.press(key)
        logger.debug(f"Pressed key: {key}")

    async def press_sequential_keys(self, keys: List[str]) -> None:
        for key in keys:
            await self.press_key(key)

    # =========================================================================
    # Input / Form Actions
    # =========================================================================

    @allure.step("Fill input: {description}")
    async def set_input_value(self, ref: ElementRef, value: str, description: str = "") -> None:
        handle = self._handle(ref)
        logger.info(f"Filling input: {description or handle.describe()} with '{value[:50]}'")
        await handle.fill(value)

    @allure.step("Clear input: {description}")
    async def clear_input(self, ref: ElementRef, description: str = "") -> None:
        await self._target(ref).fill("")

    async def get_input_value(self, ref: ElementRef) -> str:
        return await self._target(ref).input_value()

    async def is_input_editable(self, ref: ElementRef) -> bool:
        return await self._target(ref).is_editable()

    @allure.step("Upload file: {description}")
    async def upload_file(
        self,
        ref: ElementRef,
        file_path: Union[str, List[str]],
        description: str = "",
    ) -> None:
        """
        Upload file(s) to a file input.

        Args:
            ref: File input reference
            file_path: Path or list of paths
            description: Human-readable description for reporting
        """
        logger.info(f"Uploading file to: {description or ref}")
        await self._target(ref).set_input_files(file_path)

    async def upload_multiple_files(self, ref: ElementRef, files: List[str], description: str = "") -> None:
        await self.upload_file(ref, list(files), description)

    # =========================================================================
    # Dropdowns
    # =========================================================================

    @allure.step("Select by value: {value}")
    async def select_by_value(self, ref: ElementRef, value: str) -> List[str]:
        return await self._target(ref).select_option(value=value)

    @allure.step("Select by label: {label}")
    async def select_by_label(self, ref: ElementRef, label: str) -> List[str]:
        return await self._target(ref).select_option(label=label)

    @allure.step("Select by index: {index}")
    async def select_by_index(self, ref: ElementRef, index: int) -> List[str]:
        return await self._target(ref).select_option(index=index)

    @allure.step("Select options: {values}")
    async def select_multi_options(self, ref: ElementRef, values: List[str]) -> List[str]:
        return await self._target(ref).select_option(values)

    async def get_selected_option(self, ref: ElementRef) -> List[str]:
        """Values of the currently selected options of a <select>."""
        return await self._target(ref).evaluate(
            "select => Array.from(select.selectedOptions).map(option => option.value)"
        )

    # =========================================================================
    # Drag & Drop
    # =========================================================================

    @allure.step("Drag and drop: {source} -> {target}")
    async def drag_and_drop(self, source: ElementRef, target: ElementRef) -> None:
        """Locator pairs use drag_to(); resolved handles are dragged with the mouse."""
        source_handle, target_handle = self._handle(source), self._handle(target)
        if isinstance(source_handle, LazyHandle) and isinstance(target_handle, LazyHandle):
            await source_handle.locator.drag_to(target_handle.locator)
            return
        await self._target(source_handle).hover()
        await self.page.mouse.down()
        await self._target(target_handle).hover()
        await self.page.mouse.up()

    @allure.step("Drag by offset: ({x}, {y})")
    async def drag_by_offset(self, ref: ElementRef, x: float, y: float) -> None:
        """Press on the element, move the mouse to page coordinates (x, y), release."""
        await self._target(ref).hover()
        await self.page.mouse.down()
        await self.page.mouse.move(x, y)
        await self.page.mouse.up()

    @allure.step("HTML5 drag and drop: {source} -> {target}")
    async def html5_drag_drop(self, source: ElementRef, target: ElementRef) -> None:
        """
        Dispatch the HTML5 drag event sequence with a shared DataTransfer.

        For drop zones that listen to dragstart / drop events and ignore the
        synthetic mouse moves drag_and_drop() produces.
        """
        source_target, drop_target = self._target(source), self._target(target)
        data_transfer = await self.page.evaluate_handle("() => new DataTransfer()")
        event_init = {"dataTransfer": data_transfer}

        await source_target.dispatch_event("dragstart", event_init)
        for event in ("dragenter", "dragover", "drop"):
            await drop_target.dispatch_event(event, event_init)
        await source_target.dispatch_event("dragend", event_init)
        logger.debug(f"HTML5 drag: {source} -> {target}")

    # =========================================================================
    # Checkboxes / Radio Buttons
    # =========================================================================

    @allure.step("Check: {ref}")
    async def select_checkbox(self, ref: ElementRef) -> None:
        await self._target(ref).check()

    @allure.step("Uncheck: {ref}")
    async def unselect_checkbox(self, ref: ElementRef) -> None:
        await self._target(ref).uncheck()

    @allure.step("Toggle: {ref}")
    async def toggle_checkbox(self, ref: ElementRef) -> bool:
        """Flip a checkbox; returns the new checked state."""
        target = self._target(ref)
        if await target.is_checked():
            await target.uncheck()
            return False
        await target.check()
        return True

    async def is_checkbox_checked(self, ref: ElementRef) -> bool:
        return await self._target(ref).is_checked()

    @allure.step("Select radio: {ref}")
    async def select_radio_button(self, ref: ElementRef) -> None:
        await self._target(ref).check()

    async def get_selected_radio(self, group_ref: ElementRef) -> Optional[str]:
        """
        Value of the checked radio button inside a group container.

        Returns:
            The checked radio's value, or None when none is checked
        """
        return await self._target(group_ref).evaluate(
            "group => { const checked = group.querySelector('input[type=radio]:checked');"
            " return checked ? checked.value : null; }"
        )

    # =========================================================================
    # Scroll Utilities
    # =========================================================================

    @allure.step("Scroll to top")
    async def scroll_to_top(self) -> None:
        await self.page.evaluate("window.scrollTo(0, 0)")

    @allure.step("Scroll to bottom")
    async def scroll_to_bottom(self) -> None:
        await self.page.evaluate("window.scrollTo(0, document.body.scrollHeight)")

    @allure.step("Scroll into view: {ref}")
    async def scroll_into_view(self, ref: ElementRef) -> None:
        await self._target(ref).scroll_into_view_if_needed()

    @allure.step("Scroll by ({dx}, {dy})")
    async def scroll_by_pixels(self, dx: float, dy: float) -> None:
        await self.page.mouse.wheel(dx, dy)

    # =========================================================================
    # JavaScript Utilities
    # =========================================================================

    async def execute_js(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def execute_js_on_element(self, ref: ElementRef, script: str, arg: Any = None) -> Any:
        """Run `script` with the element as its first argument, e.g. "(el, arg) => el.value"."""
        return await self._target(ref).evaluate(script, arg)

    async def get_attribute(self, ref: ElementRef, attr: str) -> Optional[str]:
        value = await self._target(ref).get_attribute(attr)
        logger.debug(f"Got attribute {attr} from {ref}: '{value}'")
        return value

    @allure.step("Set attribute {attr}='{value}'")
    async def set_attribute(self, ref: ElementRef, attr: str, value: str) -> None:
        await self._target(ref).evaluate(
            "(element, args) => element.setAttribute(args.attr, args.value)",
            {"attr": attr, "value": value},
        )

    @allure.step("Remove attribute {attr}")
    async def remove_attribute(self, ref: ElementRef, attr: str) -> None:
        await self._target(ref).evaluate(
            "(element, attr) => element.removeAttribute(attr)", attr
        )

    async def highlight_element(self, ref: ElementRef) -> None:
        """Outline an element in red, handy before a screenshot."""
        await self._target(ref).evaluate(
            "element => { element.style.border = '2px solid red';"
            " element.style.backgroundColor = 'yellow'; }"
        )

    # =========================================================================
    # Wait & Sync Utilities
    # =========================================================================

    async def _wait_for_state(self, ref: ElementRef, state: str, timeout: Optional[int]) -> None:
        handle = self._handle(ref)
        timeout = timeout or self.default_timeout
        if isinstance(handle, ResolvedHandle):
            await handle.element.wait_for_element_state(state, timeout=timeout)
        else:
            await handle.locator.wait_for(state=state, timeout=timeout)

    @allure.step("Wait for visible: {ref}")
    async def wait_for_element_visible(self, ref: ElementRef, timeout: Optional[int] = None) -> None:
        await self._wait_for_state(ref, "visible", timeout)

    @allure.step("Wait for hidden: {ref}")
    async def wait_for_element_hidden(self, ref: ElementRef, timeout: Optional[int] = None) -> None:
        await self._wait_for_state(ref, "hidden", timeout)

    @allure.step("Wait for enabled: {ref}")
    async def wait_for_element_enabled(self, ref: ElementRef) -> None:
        handle = self._handle(ref)
        if isinstance(handle, ResolvedHandle):
            await handle.element.wait_for_element_state("enabled", timeout=self.default_timeout)
        else:
            await expect(handle.locator).to_be_enabled(timeout=self.default_timeout)

    @allure.step("Wait for text '{text}' in {ref}")
    async def wait_for_text(self, ref: ElementRef, text: str) -> None:
        """Raises TypeError for resolved handles; expect() only takes Locators."""
        await expect(self._get_locator(ref)).to_contain_text(text, timeout=self.default_timeout)

    @allure.step("Wait for URL: {url}")
    async def wait_for_url(self, url: Union[str, Pattern[str]]) -> None:
        await self.page.wait_for_url(url, timeout=self.default_timeout)

    @allure.step("Wait for title: {title}")
    async def wait_for_title(self, title: Union[str, Pattern[str]]) -> None:
        await expect(self.page).to_have_title(title, timeout=self.default_timeout)

    @allure.step("Wait for API response: {url_part} ({status})")
    async def wait_for_api_response(self, url_part: str, status: int = 200) -> Response:
        """Wait for a response whose URL contains `url_part` with the given status."""
        return await self.page.wait_for_event(
            "response",
            predicate=lambda response: url_part in response.url and response.status == status,
            timeout=self.default_timeout,
        )

    @allure.step("Wait for request: {url_part}")
    async def wait_for_request(self, url_part: str) -> Request:
        """Wait for a request whose URL contains `url_part`."""
        return await self.page.wait_for_event(
            "request",
            predicate=lambda request: url_part in request.url,
            timeout=self.default_timeout,
        )

    @allure.step("Wait for network idle")
    async def wait_for_network_idle(self) -> None:
        await self.page.wait_for_load_state("networkidle", timeout=self.default_timeout)

    # =========================================================================
    # Tabs & Frames
    # =========================================================================

    @allure.step("Open new tab")
    async def open_new_tab(self) -> Page:
        return await self.page.context.new_page()

    @allure.step("Switch to tab {index}")
    async def switch_to_tab(self, index: int) -> Page:
        """
        Bring the tab at `index` (context page order) to the front.

        Raises:
            TabNotFound: index is outside the open tabs
        """
        pages = self.page.context.pages
        if not 0 <= index < len(pages):
            raise TabNotFound(index, len(pages))
        target = pages[index]
        await target.bring_to_front()
        return target

    @allure.step("Close tab")
    async def close_tab(self) -> None:
        await self.page.close()

    @allure.step("Handle popup")
    async def handle_popup(self, trigger: Callable[[], Awaitable[Any]]) -> Page:
        """
        Run `trigger` and return the popup page it opens, once loaded.

        Args:
            trigger: Coroutine function performing the opening action
        """
        async with self.page.expect_popup(timeout=self.default_timeout) as popup_info:
            await trigger()
        popup = await popup_info.value
        await popup.wait_for_load_state()
        logger.info(f"Popup opened: {popup.url}")
        return popup

    async def get_frame(self, name_or_selector: str) -> Frame:
        """
        Frame by name, else the content frame of the <iframe> matching a selector.

        Playwright acts on Frame objects directly; nothing is "switched".

        Raises:
            FrameNotFound: Neither lookup succeeds
        """
        frame = self.page.frame(name=name_or_selector)
        if frame is not None:
            return frame

        element = await self.page.query_selector(name_or_selector)
        if element is not None:
            frame = await element.content_frame()
            if frame is not None:
                return frame
        raise FrameNotFound(name_or_selector)

    # =========================================================================
    # Shadow DOM
    # =========================================================================

    async def find_in_shadow(self, host_ref: ElementRef, inner_selector: str) -> Handle:
        return await self.shadow.find_in_shadow(host_ref, inner_selector)

    async def click_in_shadow(self, host_ref: ElementRef, inner_selector: str, **options: Any) -> None:
        await self.shadow.click_in_shadow(host_ref, inner_selector, **options)

    async def fill_in_shadow(self, host_ref: ElementRef, inner_selector: str, value: str, **options: Any) -> None:
        await self.shadow.fill_in_shadow(host_ref, inner_selector, value, **options)


__all__ = [
    "ElementActions",
]
