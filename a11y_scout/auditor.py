# === FILE: a11y_scout/auditor.py ===
"""Page auditor: loads a page in Chromium via Playwright and runs axe-core on it.

The browser is launched lazily on the first audit and reused for every
following one; each audit gets its own context and page, which are always
closed before the call returns or raises.

Raw axe output is mapped into :class:`~a11y_scout.models.AuditResult` by the
pure helpers :func:`process_violations` and :func:`build_audit_result`, so
the mapping can be exercised without a browser.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from types import TracebackType
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Type

from axe_playwright_python.async_playwright import Axe
from playwright.async_api import Browser, Page, Playwright, async_playwright

from a11y_scout.config import AuditConfig
from a11y_scout.exceptions import AuditError
from a11y_scout.models import IMPACTS, AuditResult, AuditSummary, Violation, ViolationNode

__all__ = [
    "AXE_TAGS",
    "AccessibilityAuditor",
    "map_wcag_level",
    "process_violations",
    "build_audit_result",
]

logger = logging.getLogger("A11yScout")

AXE_TAGS: tuple[str, ...] = ("wcag2a", "wcag2aa", "wcag21a", "wcag21aa")
AXE_RUN_OPTIONS: Dict[str, Any] = {"runOnly": {"type": "tag", "values": list(AXE_TAGS)}}
BROWSER_ARGS: List[str] = ["--no-sandbox", "--disable-setuid-sandbox"]

# highest priority first
_WCAG_LEVELS: tuple[tuple[str, str], ...] = (
    ("wcag21aa", "WCAG 2.1 AA"),
    ("wcag2aa", "WCAG 2.0 AA"),
    ("wcag21a", "WCAG 2.1 A"),
    ("wcag2a", "WCAG 2.0 A"),
)

_PageLoader = Callable[[Page, float], Awaitable[Any]]


def map_wcag_level(tags: Iterable[str]) -> str:
    """Pick the highest-priority WCAG level present in an axe rule's tags."""
    tag_set = set(tags)
    for tag, level in _WCAG_LEVELS:
        if tag in tag_set:
            return level
    return "Other"


def _process_node(node: Mapping[str, Any]) -> ViolationNode:
    return ViolationNode(
        target=list(node.get("target") or []),
        html=node.get("html", ""),
        failure_summary=node.get("failureSummary") or "",
        impact=node.get("impact"),
    )


def process_violations(raw_violations: Iterable[Mapping[str, Any]]) -> List[Violation]:
    """Map axe ``violations`` entries to :class:`Violation`; missing impact means ``minor``."""
    violations: List[Violation] = []
    for raw in raw_violations:
        impact = raw.get("impact")
        if impact not in IMPACTS:
            impact = "minor"
        violations.append(
            Violation(
                id=raw["id"],
                impact=impact,
                description=raw.get("description", ""),
                help=raw.get("help", ""),
                help_url=raw.get("helpUrl", ""),
                wcag_level=map_wcag_level(raw.get("tags") or []),
                nodes=[_process_node(node) for node in raw.get("nodes") or []],
            )
        )
    return violations


def build_audit_result(url: str, raw: Mapping[str, Any]) -> AuditResult:
    """Turn raw axe results for ``url`` into an :class:`AuditResult`."""
    violations = process_violations(raw.get("violations") or [])
    summary = AuditSummary.from_violations(
        violations,
        passes=len(raw.get("passes") or []),
        incomplete=len(raw.get("incomplete") or []),
    )
    return AuditResult(
        url=url,
        timestamp=datetime.now(timezone.utc).isoformat(),
        summary=summary,
        violations=violations,
        raw_engine_output=dict(raw),
    )


class AccessibilityAuditor:
    """Headless Chromium + axe-core, one browser for many sequential audits."""

    def __init__(self, config: Optional[AuditConfig] = None, axe: Optional[Axe] = None) -> None:
        self.config = config or AuditConfig()
        self._axe = axe or Axe()
        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None

    async def __aenter__(self) -> AccessibilityAuditor:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        await self.close()

    async def start(self) -> None:
        """Start Playwright and launch Chromium."""
        if self.browser is not None:
            return
        logger.debug("Launching Chromium (headless=%s)", self.config.headless)
        try:
            self.playwright = await async_playwright().start()
            self.browser = await self.playwright.chromium.launch(
                headless=self.config.headless,
                args=BROWSER_ARGS,
            )
        except Exception as exc:
            logger.error("Failed to start browser: %s", exc)
            await self.close()
            raise

    async def audit(self, url: str, *, timeout: Optional[float] = None) -> AuditResult:
        """Navigate to ``url`` and audit it. ``timeout`` is in milliseconds."""

        async def load(page: Page, timeout_ms: float) -> None:
            await page.goto(url, wait_until=self.config.wait_until, timeout=timeout_ms)

        return await self._analyze(url, load, timeout)

    async def audit_html(
        self, html: str, *, url: str = "about:blank", timeout: Optional[float] = None
    ) -> AuditResult:
        """Audit a raw HTML document; ``url`` is only used to label the result."""

        async def load(page: Page, timeout_ms: float) -> None:
            await page.set_content(html, wait_until=self.config.wait_until, timeout=timeout_ms)

        return await self._analyze(url, load, timeout)

    async def close(self) -> None:
        """Close the browser and stop Playwright. Safe to call repeatedly."""
        browser, self.browser = self.browser, None
        playwright, self.playwright = self.playwright, None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()

    async def _analyze(self, url: str, load: _PageLoader, timeout: Optional[float]) -> AuditResult:
        if self.browser is None:
            await self.start()
        assert self.browser is not None
        timeout_ms = float(timeout if timeout is not None else self.config.timeout)

        context = await self.browser.new_context(user_agent=self.config.user_agent)
        try:
            page = await context.new_page()
            try:
                await load(page, timeout_ms)
                raw = await self._run_axe(page, timeout_ms)
            finally:
                await page.close()
        finally:
            await context.close()

        result = build_audit_result(url, raw)
        logger.debug("Audited %s: %d violations", url, result.summary.total_violations)
        return result

    async def _run_axe(self, page: Page, timeout_ms: float) -> Dict[str, Any]:
        results = await asyncio.wait_for(
            self._axe.run(page, options=AXE_RUN_OPTIONS),
            timeout=timeout_ms / 1000,
        )
        raw = getattr(results, "response", None)
        if not isinstance(raw, dict) or "violations" not in raw:
            raise AuditError("axe-core returned no result")
        return raw
