"""
================================================================================
Dialog & Element Action UI Tests (Async / Playwright)
================================================================================

One-shot dialog handling and a sample of everyday element actions on inline
HTML content.

================================================================================
"""

import asyncio

import allure
import pytest
from playwright.async_api import Page

from testsuites.ui_testing.framework.dialogs import DialogWatcher, read_dialog_text
from testsuites.ui_testing.framework.element_actions import ElementActions
from testsuites.ui_testing.framework.errors import FrameNotFound, TabNotFound


DIALOG_HTML = """
<button id="alert-btn" onclick="alert('Saved!')">Alert</button>
<button id="confirm-btn"
        onclick="document.getElementById('result').textContent = confirm('Delete?') ? 'yes' : 'no'">
  Confirm
</button>
<button id="prompt-btn"
        onclick="document.getElementById('result').textContent = prompt('Your name?')">
  Prompt
</button>
<span id="result"></span>
"""

FORM_HTML = """
<input id="name" type="text">
<input id="agree" type="checkbox">
<select id="color">
  <option value="r">Red</option>
  <option value="g">Green</option>
</select>
<button id="hidden-btn" style="display:none">Hidden</button>
<a id="link" href="#" data-state="idle">Link</a>
"""

WIDGETS_HTML = """
<select id="sizes" multiple>
  <option value="s">Small</option>
  <option value="m">Medium</option>
  <option value="l">Large</option>
</select>
<fieldset id="plan">
  <input type="radio" name="plan" id="plan-free" value="free">
  <input type="radio" name="plan" id="plan-pro" value="pro">
</fieldset>
<input id="files" type="file" multiple>
<div id="card" draggable="true"
     ondragstart="event.dataTransfer.setData('text/plain', 'card-1')">Card</div>
<div id="lane"
     ondragover="event.preventDefault()"
     ondrop="this.textContent = 'dropped ' + event.dataTransfer.getData('text/plain')">Lane</div>
<button id="open-popup" onclick="window.open('about:blank')">Open</button>
"""


@allure.epic("UI Testing")
@allure.feature("Dialogs")
class TestDialogs:
    """Dialog handling suite (async)."""

    @allure.title("Accept a confirm dialog")
    @pytest.mark.P1
    @pytest.mark.dialog
    async def test_accept_confirm(self, page: Page):
        await page.set_content(DIALOG_HTML)

        async with DialogWatcher(page, action="accept") as dialog:
            await page.click("#confirm-btn")

        assert dialog.handled and dialog.dialog_type == "confirm"
        assert dialog.message == "Delete?"
        assert await page.text_content("#result") == "yes"

    @allure.title("Dismiss a confirm dialog")
    @pytest.mark.P1
    @pytest.mark.dialog
    async def test_dismiss_confirm(self, page: Page):
        await page.set_content(DIALOG_HTML)

        async with DialogWatcher(page, action="dismiss"):
            await page.click("#confirm-btn")

        assert await page.text_content("#result") == "no"

    @allure.title("Answer a prompt and read an alert")
    @pytest.mark.P2
    @pytest.mark.dialog
    async def test_prompt_and_alert(self, page: Page):
        await page.set_content(DIALOG_HTML)

        async with DialogWatcher(page, prompt_text="Ada"):
            await page.click("#prompt-btn")
        assert await page.text_content("#result") == "Ada"

        assert await read_dialog_text(page, lambda: page.click("#alert-btn")) == "Saved!"


@allure.epic("UI Testing")
@allure.feature("Element Actions")
class TestElementActions:
    """Element actions suite (async)."""

    @allure.title("Fill, check and select")
    @pytest.mark.P1
    async def test_form_actions(self, page: Page):
        await page.set_content(FORM_HTML)
        actions = ElementActions(page)

        await actions.set_input_value("#name", "Alice")
        assert await actions.get_input_value("#name") == "Alice"

        assert await actions.toggle_checkbox("#agree") is True
        assert await actions.is_checkbox_checked("#agree")

        assert await actions.select_by_label("#color", "Green") == ["g"]

    @allure.title("Click only when visible")
    @pytest.mark.P2
    async def test_click_if_visible(self, page: Page):
        await page.set_content(FORM_HTML)
        assert await ElementActions(page).click_if_visible("#hidden-btn") is False

    @allure.title("Attributes via script")
    @pytest.mark.P2
    async def test_attributes(self, page: Page):
        await page.set_content(FORM_HTML)
        actions = ElementActions(page)

        await actions.set_attribute("#link", "data-state", "busy")
        assert await actions.get_attribute("#link", "data-state") == "busy"
        await actions.remove_attribute("#link", "data-state")
        assert await actions.get_attribute("#link", "data-state") is None

    @allure.title("Unknown tab and frame raise")
    @pytest.mark.P3
    async def test_missing_tab_and_frame(self, page: Page):
        await page.set_content(FORM_HTML)
        actions = ElementActions(page)

        with pytest.raises(TabNotFound):
            await actions.switch_to_tab(5)
        with pytest.raises(FrameNotFound):
            await actions.get_frame("#no-such-frame")

    @allure.title("Selected options and radio groups")
    @pytest.mark.P2
    async def test_selected_option_and_radio(self, page: Page):
        await page.set_content(WIDGETS_HTML)
        actions = ElementActions(page)

        await actions.select_multi_options("#sizes", ["s", "l"])
        assert await actions.get_selected_option("#sizes") == ["s", "l"]

        assert await actions.get_selected_radio("#plan") is None
        await actions.select_radio_button("#plan-pro")
        assert await actions.get_selected_radio("#plan") == "pro"

    @allure.title("Upload several files at once")
    @pytest.mark.P2
    async def test_upload_multiple_files(self, page: Page, tmp_path):
        first, second = tmp_path / "a.txt", tmp_path / "b.txt"
        first.write_text("a", encoding="utf-8")
        second.write_text("b", encoding="utf-8")
        await page.set_content(WIDGETS_HTML)
        actions = ElementActions(page)

        await actions.upload_multiple_files("#files", [str(first), str(second)])
        names = await actions.execute_js_on_element("#files", "el => Array.from(el.files).map(f => f.name)")
        assert names == ["a.txt", "b.txt"]

    @allure.title("Script on an element with an argument")
    @pytest.mark.P3
    async def test_execute_js_on_element(self, page: Page):
        await page.set_content(WIDGETS_HTML)
        result = await ElementActions(page).execute_js_on_element("#card", "(el, suffix) => el.id + suffix", "-x")
        assert result == "card-x"

    @allure.title("HTML5 drag and drop carries DataTransfer")
    @pytest.mark.P2
    async def test_html5_drag_drop(self, page: Page):
        await page.set_content(WIDGETS_HTML)
        await ElementActions(page).html5_drag_drop("#card", "#lane")
        assert await page.text_content("#lane") == "dropped card-1"

    @allure.title("Wait for a request and for network idle")
    @pytest.mark.P2
    async def test_wait_for_request_and_network_idle(self, page: Page):
        async def fulfill(route):
            await route.fulfill(status=200, body="pong")

        await page.route("**/api/ping", fulfill)
        await page.set_content(WIDGETS_HTML)
        actions = ElementActions(page, default_timeout=5000)

        request, _ = await asyncio.gather(
            actions.wait_for_request("/api/ping"),
            page.evaluate("() => fetch('https://example.test/api/ping').catch(() => null)"),
        )
        assert request.url == "https://example.test/api/ping"

        await actions.wait_for_network_idle()

    @allure.title("Popup opened by an action")
    @pytest.mark.P2
    async def test_handle_popup(self, page: Page):
        await page.set_content(WIDGETS_HTML)

        popup = await ElementActions(page).handle_popup(lambda: page.click("#open-popup"))

        assert popup is not page
        assert popup.url == "about:blank"
        await popup.close()
