# File: tests/test_auditor.py
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from a11y_scout.auditor import (
    AXE_TAGS,
    AccessibilityAuditor,
    build_audit_result,
    map_wcag_level,
    process_violations,
)
from a11y_scout.config import AuditConfig
from a11y_scout.exceptions import AuditError
from conftest import AXE_SCENARIOS

# --------------------------------------------------------------------------- #
#                              Result mapping                                 #
# --------------------------------------------------------------------------- #


@pytest.mark.parametrize(
    "tags,expected",
    [
        (["wcag2a", "wcag21aa", "wcag2aa"], "WCAG 2.1 AA"),
        (["wcag2a", "wcag2aa", "wcag21a"], "WCAG 2.0 AA"),
        (["wcag2a", "wcag21a"], "WCAG 2.1 A"),
        (["cat.text-alternatives", "wcag2a"], "WCAG 2.0 A"),
        (["best-practice"], "Other"),
        ([], "Other"),
    ],
)
def test_map_wcag_level_priority(tags, expected):
    assert map_wcag_level(tags) == expected


def test_process_violations_defaults_missing_impact_to_minor():
    violations = process_violations(AXE_SCENARIOS["violations-page"]["violations"])

    assert [v.id for v in violations] == ["image-alt", "region"]
    assert violations[0].impact == "critical"
    assert violations[0].wcag_level == "WCAG 2.0 A"
    assert violations[0].nodes[0].target == ["img.hero"]
    assert violations[1].impact == "minor"
    assert violations[1].nodes == []


@pytest.mark.parametrize("scenario", sorted(AXE_SCENARIOS))
def test_build_audit_result_summary_invariant(scenario):
    raw = AXE_SCENARIOS[scenario]
    result = build_audit_result("https://example.com/", raw)
    summary = result.summary

    assert summary.total_violations == (
        summary.critical_violations
        + summary.serious_violations
        + summary.moderate_violations
        + summary.minor_violations
    )
    assert summary.total_violations == len(raw["violations"])
    assert summary.total_passes == len(raw["passes"])
    assert summary.incomplete == len(raw["incomplete"])
    assert result.raw_engine_output == raw
    assert "raw_engine_output" not in result.to_dict()


def test_build_audit_result_counts_by_impact():
    result = build_audit_result("https://example.com/", AXE_SCENARIOS["violations-page"])
    assert result.summary.critical_violations == 1
    assert result.summary.minor_violations == 1
    assert result.timestamp.endswith("+00:00")


# --------------------------------------------------------------------------- #
#                    Browser lifecycle with fake Playwright                   #
# --------------------------------------------------------------------------- #


class FakePage:
    def __init__(self, fail_with: Optional[BaseException] = None) -> None:
        self.fail_with = fail_with
        self.closed = False
        self.visited: List[Dict[str, Any]] = []

    async def goto(self, url, wait_until=None, timeout=None):
        self.visited.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        if self.fail_with is not None:
            raise self.fail_with

    async def set_content(self, html, wait_until=None, timeout=None):
        self.visited.append({"html": html, "wait_until": wait_until, "timeout": timeout})

    async def close(self):
        self.closed = True


class FakeContext:
    def __init__(self, page: FakePage) -> None:
        self.page = page
        self.closed = False

    async def new_page(self):
        return self.page

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, fail_with: Optional[BaseException] = None) -> None:
        self.fail_with = fail_with
        self.contexts: List[FakeContext] = []
        self.closed = 0

    async def new_context(self, **kwargs):
        context = FakeContext(FakePage(self.fail_with))
        self.contexts.append(context)
        return context

    async def close(self):
        self.closed += 1


class FakePlaywright:
    def __init__(self) -> None:
        self.stopped = 0

    async def stop(self):
        self.stopped += 1


class FakeAxe:
    def __init__(self, response: Any) -> None:
        self.response = response
        self.options: List[Dict[str, Any]] = []

    async def run(self, page, context=None, options=None):
        self.options.append(options)
        return SimpleNamespace(response=self.response)


def make_auditor(browser: FakeBrowser, response: Any = None, **config) -> AccessibilityAuditor:
    axe = FakeAxe(AXE_SCENARIOS["simple-page"] if response is None else response)
    auditor = AccessibilityAuditor(AuditConfig(**config), axe=axe)
    auditor.browser = browser
    auditor.playwright = FakePlaywright()
    return auditor


@pytest.mark.asyncio()
async def test_audit_reuses_browser_and_closes_page_and_context():
    browser = FakeBrowser()
    auditor = make_auditor(browser, timeout=5000)

    first = await auditor.audit("https://example.com/")
    second = await auditor.audit("https://example.com/about", timeout=1234)

    assert first.url == "https://example.com/"
    assert second.summary.serious_violations == 1
    assert len(browser.contexts) == 2
    assert all(c.closed and c.page.closed for c in browser.contexts)
    assert browser.contexts[0].page.visited[0]["timeout"] == 5000
    assert browser.contexts[0].page.visited[0]["wait_until"] == "domcontentloaded"
    assert browser.contexts[1].page.visited[0]["timeout"] == 1234
    assert auditor._axe.options[0]["runOnly"]["values"] == list(AXE_TAGS)


@pytest.mark.asyncio()
async def test_audit_releases_resources_when_navigation_fails():
    browser = FakeBrowser(fail_with=TimeoutError("Timeout 30000ms exceeded."))
    auditor = make_auditor(browser)

    with pytest.raises(TimeoutError):
        await auditor.audit("https://example.com/slow")

    context = browser.contexts[0]
    assert context.page.closed
    assert context.closed


@pytest.mark.asyncio()
async def test_audit_raises_when_axe_returns_nothing():
    browser = FakeBrowser()
    auditor = make_auditor(browser, response={"error": "axe not loaded"})

    with pytest.raises(AuditError):
        await auditor.audit("https://example.com/")
    assert browser.contexts[0].closed


@pytest.mark.asyncio()
async def test_audit_html_labels_result_with_given_url():
    browser = FakeBrowser()
    auditor = make_auditor(browser, response=AXE_SCENARIOS["valid-page"])

    result = await auditor.audit_html("<html lang='en'></html>", url="memory://snippet")

    assert result.url == "memory://snippet"
    assert result.summary.total_violations == 0
    assert result.summary.total_passes == 3
    assert browser.contexts[0].page.visited[0]["html"] == "<html lang='en'></html>"


@pytest.mark.asyncio()
async def test_close_is_idempotent():
    browser = FakeBrowser()
    auditor = make_auditor(browser)
    playwright = auditor.playwright

    await auditor.close()
    await auditor.close()

    assert browser.closed == 1
    assert playwright.stopped == 1
    assert auditor.browser is None


@pytest.mark.asyncio()
async def test_close_before_any_audit():
    auditor = AccessibilityAuditor(axe=FakeAxe({}))
    await auditor.close()
    assert auditor.browser is None
