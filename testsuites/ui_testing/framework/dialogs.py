"""
================================================================================
Dialog Handling
================================================================================

One-shot subscriptions for alert / confirm / prompt / beforeunload dialogs.

A DialogWatcher is registered right before the action that triggers the
dialog and removed when its block exits, fired or not, so no page-wide
listener outlives the call that needed it.

Usage:
    async with DialogWatcher(page, action="accept") as dialog:
        await page.click("#confirm-delete")
    assert dialog.message == "Are you sure?"

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

from loguru import logger
from playwright.async_api import Dialog, Page


DIALOG_ACTIONS = ("accept", "dismiss")


class DialogWatcher:
    """
    Async context manager handling the next dialog raised on a page.

    Attributes:
        message: Dialog text once fired, else None
        dialog_type: "alert", "confirm", "prompt" or "beforeunload"
        handled: Whether a dialog fired inside the block
    """

    def __init__(
        self,
        page: Page,
        action: str = "accept",
        prompt_text: Optional[str] = None,
    ):
        if action not in DIALOG_ACTIONS:
            raise ValueError(f"Unknown dialog action: {action} (expected one of {DIALOG_ACTIONS})")
        self.page = page
        self.action = action
        self.prompt_text = prompt_text

        self.message: Optional[str] = None
        self.dialog_type: Optional[str] = None
        self.handled = False
        self._subscribed = False

    async def __aenter__(self) -> "DialogWatcher":
        self.page.on("dialog", self._on_dialog)
        self._subscribed = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        self._unsubscribe()

    def _unsubscribe(self) -> None:
        if self._subscribed:
            self.page.remove_listener("dialog", self._on_dialog)
            self._subscribed = False

    async def _on_dialog(self, dialog: Dialog) -> None:
        # One-shot: detach before handling so a second dialog is not consumed
        self._unsubscribe()
        self.message = dialog.message
        self.dialog_type = dialog.type
        self.handled = True
        logger.info(f"Dialog [{dialog.type}] '{dialog.message}' -> {self.action}")

        if self.action == "accept":
            if self.prompt_text is not None:
                await dialog.accept(self.prompt_text)
            else:
                await dialog.accept()
        else:
            await dialog.dismiss()


def expect_dialog(
    page: Page,
    action: str = "accept",
    prompt_text: Optional[str] = None,
) -> DialogWatcher:
    """Shorthand for `DialogWatcher(page, action, prompt_text)`."""
    return DialogWatcher(page, action=action, prompt_text=prompt_text)


async def handle_dialog(
    page: Page,
    trigger: Callable[[], Awaitable[Any]],
    action: str = "accept",
    prompt_text: Optional[str] = None,
) -> DialogWatcher:
    """
    Run `trigger` with a one-shot dialog handler installed.

    Args:
        page: Page raising the dialog
        trigger: Coroutine function performing the triggering action
        action: "accept" or "dismiss"
        prompt_text: Text entered into a prompt() before accepting

    Returns:
        The finished watcher (check `.handled` / `.message`)
    """
    async with DialogWatcher(page, action=action, prompt_text=prompt_text) as watcher:
        await trigger()
    return watcher


async def accept_dialog(page: Page, trigger: Callable[[], Awaitable[Any]], prompt_text: Optional[str] = None) -> Optional[str]:
    """Accept the dialog raised by `trigger`; returns its message."""
    return (await handle_dialog(page, trigger, "accept", prompt_text)).message


async def dismiss_dialog(page: Page, trigger: Callable[[], Awaitable[Any]]) -> Optional[str]:
    """Dismiss the dialog raised by `trigger`; returns its message."""
    return (await handle_dialog(page, trigger, "dismiss")).message


async def read_dialog_text(page: Page, trigger: Callable[[], Awaitable[Any]]) -> Optional[str]:
    """Message of the dialog raised by `trigger`, dismissing it so the page is not blocked."""
    return await dismiss_dialog(page, trigger)


__all__ = [
    "DialogWatcher",
    "expect_dialog",
    "handle_dialog",
    "accept_dialog",
    "dismiss_dialog",
    "read_dialog_text",
]
