"""Allure reporting helpers."""

from .allure_utils import (
    TestResultSummary,
    attach_html,
    attach_screenshot,
    attach_text,
    summarize_results,
)

__all__ = [
    "attach_text",
    "attach_html",
    "attach_screenshot",
    "TestResultSummary",
    "summarize_results",
]
