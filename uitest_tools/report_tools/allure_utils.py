"""
================================================================================
Allure Report Utilities
================================================================================

Helpers for enriching Allure reports from UI tests and for summarising a
finished run.

Features:
- Attachment helpers (text, HTML, screenshots)
- Result summary for the test runner

================================================================================
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import allure
from loguru import logger


# ================================================================================
# Attachment Helpers
# ================================================================================

def attach_text(text: str, name: str = "Text"):
    """Attach text content to Allure report."""
    allure.attach(
        text,
        name=name,
        attachment_type=allure.attachment_type.TEXT
    )


def attach_html(html: str, name: str = "HTML"):
    """
    Attach HTML content to Allure report.

    Used to snapshot the page DOM when a UI test fails.
    """
    allure.attach(
        html,
        name=name,
        attachment_type=allure.attachment_type.HTML
    )


def attach_screenshot(png: bytes, name: str = "Screenshot"):
    """Attach PNG bytes (as returned by page.screenshot()) to Allure report."""
    allure.attach(
        png,
        name=name,
        attachment_type=allure.attachment_type.PNG
    )


# ================================================================================
# Result Summary
# ================================================================================

@dataclass
class TestResultSummary:
    """Summary of test execution results."""
    __test__ = False

    total: int = 0
    passed: int = 0
    failed: int = 0
    broken: int = 0
    skipped: int = 0
    unknown: int = 0
    duration_ms: int = 0
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @property
    def pass_rate(self) -> float:
        """Calculate pass rate percentage."""
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "broken": self.broken,
            "skipped": self.skipped,
            "unknown": self.unknown,
            "pass_rate": f"{self.pass_rate:.2f}%",
            "duration_ms": self.duration_ms,
            "timestamp": self.timestamp,
        }


def parse_results(results_dir: Path) -> List[Dict[str, Any]]:
    """
    Parse Allure result files.

    Args:
        results_dir: allure-results directory

    Returns:
        List of test result dictionaries
    """
    results = []
    for result_file in Path(results_dir).glob("*-result.json"):
        try:
            with open(result_file, encoding="utf-8") as f:
                results.append(json.load(f))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to parse {result_file}: {e}")
    return results


def summarize_results(results_dir: Path) -> TestResultSummary:
    """
    Build a TestResultSummary from an allure-results directory.

    Args:
        results_dir: allure-results directory

    Returns:
        TestResultSummary object
    """
    summary = TestResultSummary()
    results = parse_results(results_dir)
    summary.total = len(results)

    for result in results:
        status = result.get("status", "unknown")
        if status == "passed":
            summary.passed += 1
        elif status == "failed":
            summary.failed += 1
        elif status == "broken":
            summary.broken += 1
        elif status == "skipped":
            summary.skipped += 1
        else:
            summary.unknown += 1

        summary.duration_ms += result.get("stop", 0) - result.get("start", 0)

    return summary


__all__ = [
    "attach_text",
    "attach_html",
    "attach_screenshot",
    "TestResultSummary",
    "parse_results",
    "summarize_results",
]
