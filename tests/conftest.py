# File: tests/conftest.py
from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, Tuple

import pytest

from a11y_scout.auditor import build_audit_result
from a11y_scout.crawler.models import FetchResponse
from a11y_scout.models import AuditResult

# --------------------------------------------------------------------------- #
#                         Raw axe-core results by scenario                    #
# --------------------------------------------------------------------------- #


def _node(target: str, impact: Optional[str] = "serious") -> Dict[str, Any]:
    return {
        "target": [target],
        "html": f'<div class="{target.lstrip(".")}"></div>',
        "failureSummary": "Fix any of the following",
        "impact": impact,
    }


AXE_SCENARIOS: Dict[str, Dict[str, Any]] = {
    "valid-page": {
        "violations": [],
        "passes": [{"id": "document-title"}, {"id": "html-has-lang"}, {"id": "image-alt"}],
        "incomplete": [],
    },
    "simple-page": {
        "violations": [
            {
                "id": "color-contrast",
                "impact": "serious",
                "description": "Elements must have sufficient color contrast",
                "help": "Elements must meet minimum color contrast ratio thresholds",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/color-contrast",
                "tags": ["cat.color", "wcag2aa", "wcag143"],
                "nodes": [_node(".header"), _node(".footer")],
            }
        ],
        "passes": [{"id": "document-title"}],
        "incomplete": [{"id": "color-contrast"}],
    },
    "violations-page": {
        "violations": [
            {
                "id": "image-alt",
                "impact": "critical",
                "description": "Images must have alternate text",
                "help": "Images must have alternate text",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
                "tags": ["cat.text-alternatives", "wcag2a", "wcag111"],
                "nodes": [_node("img.hero", "critical")],
            },
            {
                "id": "region",
                "impact": None,
                "description": "All page content should be contained by landmarks",
                "help": "All page content should be contained by landmarks",
                "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/region",
                "tags": ["cat.keyboard", "best-practice"],
                "nodes": [],
            },
        ],
        "passes": [],
        "incomplete": [],
    },
}


# --------------------------------------------------------------------------- #
#                                 Test doubles                                #
# --------------------------------------------------------------------------- #


class StubAuditor:
    """Auditor double: returns canned axe scenarios per URL, fails for unknown URLs."""

    def __init__(self, scenarios: Optional[Dict[str, str]] = None) -> None:
        self.scenarios: Dict[str, str] = dict(scenarios or {})
        self.calls: List[Tuple[str, Optional[float]]] = []
        self.close_calls = 0

    def setup_scenario(self, url: str, scenario: str) -> None:
        self.scenarios[url] = scenario

    async def audit(self, url: str, *, timeout: Optional[float] = None) -> AuditResult:
        self.calls.append((url, timeout))
        scenario = self.scenarios.get(url)
        if scenario is None:
            raise RuntimeError(f"No mock scenario configured for URL: {url}")
        return build_audit_result(url, AXE_SCENARIOS[scenario])

    async def close(self) -> None:
        self.close_calls += 1


def make_fetch(pages: Dict[str, Any], calls: Optional[List[str]] = None) -> Callable:
    """Build an async fetch over a URL -> body/FetchResponse/Exception mapping; unknown URLs are 404."""

    async def fetch(url: str) -> FetchResponse:
        if calls is not None:
            calls.append(url)
        entry = pages.get(url)
        if entry is None:
            return FetchResponse(404, "Not Found")
        if isinstance(entry, Exception):
            raise entry
        if isinstance(entry, FetchResponse):
            return entry
        return FetchResponse(200, "OK", entry)

    return fetch


def links_page(*hrefs: str) -> str:
    anchors = "".join(f'<a href="{href}">{href}</a>' for href in hrefs)
    return f"<html><body>{anchors}</body></html>"


# --------------------------------------------------------------------------- #
#                                  Fixtures                                   #
# --------------------------------------------------------------------------- #


@pytest.fixture()
def stub_auditor() -> StubAuditor:
    return StubAuditor()


@pytest.fixture()
def three_page_site() -> Dict[str, Any]:
    """Root linking to /about and /contact, both static."""
    return {
        "https://example.com/": links_page("/about", "/contact"),
        "https://example.com/about": "<html><body>About</body></html>",
        "https://example.com/contact": "<html><body>Contact</body></html>",
    }


@pytest.fixture()
def site_audit_records():
    """Two successful pages sharing color-contrast plus one failed page."""
    from a11y_scout.models import PageAuditFailure, PageAuditSuccess

    home = build_audit_result("https://example.com/", AXE_SCENARIOS["simple-page"])
    about_raw = {
        "violations": [
            {
                **AXE_SCENARIOS["simple-page"]["violations"][0],
                "nodes": [_node(".cta")],
            },
            *AXE_SCENARIOS["violations-page"]["violations"],
        ],
        "passes": [],
        "incomplete": [],
    }
    about = build_audit_result("https://example.com/about", about_raw)
    return [
        PageAuditSuccess(url="https://example.com/", result=home),
        PageAuditSuccess(url="https://example.com/about", result=about),
        PageAuditFailure(url="https://example.com/contact", error="Timeout 30000ms exceeded."),
    ]
