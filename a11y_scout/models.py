# File: a11y_scout/models.py
"""a11y_scout.models: результаты аудита страницы и сайта.

Все структуры сериализуются в JSON через ``to_dict()`` без потерь.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

from a11y_scout.crawler.models import CrawlResult

__all__ = [
    "Impact",
    "WCAGLevel",
    "IMPACTS",
    "ViolationNode",
    "Violation",
    "AuditSummary",
    "AuditResult",
    "PageAuditSuccess",
    "PageAuditFailure",
    "PageAuditRecord",
    "SiteAuditSummary",
    "SiteAuditResult",
    "PageOccurrences",
    "ViolationOverviewEntry",
]

Impact = Literal["critical", "serious", "moderate", "minor"]
WCAGLevel = Literal["WCAG 2.1 AA", "WCAG 2.0 AA", "WCAG 2.1 A", "WCAG 2.0 A", "Other"]

IMPACTS: tuple[Impact, ...] = ("critical", "serious", "moderate", "minor")


@dataclass(slots=True, frozen=True)
class ViolationNode:
    """Один элемент страницы, нарушающий правило."""

    target: List[str]
    html: str
    failure_summary: str = ""
    impact: Optional[str] = None


@dataclass(slots=True, frozen=True)
class Violation:
    """Нарушенное правило и все затронутые элементы."""

    id: str
    impact: Impact
    description: str
    help: str
    help_url: str
    wcag_level: WCAGLevel
    nodes: List[ViolationNode] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class AuditSummary:
    total_violations: int = 0
    critical_violations: int = 0
    serious_violations: int = 0
    moderate_violations: int = 0
    minor_violations: int = 0
    total_passes: int = 0
    incomplete: int = 0

    @classmethod
    def from_violations(cls, violations: List[Violation], passes: int, incomplete: int) -> AuditSummary:
        counts = {impact: 0 for impact in IMPACTS}
        for violation in violations:
            counts[violation.impact] += 1
        return cls(
            total_violations=sum(counts.values()),
            critical_violations=counts["critical"],
            serious_violations=counts["serious"],
            moderate_violations=counts["moderate"],
            minor_violations=counts["minor"],
            total_passes=passes,
            incomplete=incomplete,
        )


@dataclass(slots=True, frozen=True)
class AuditResult:
    """Результат аудита одной страницы."""

    url: str
    timestamp: str
    summary: AuditSummary
    violations: List[Violation] = field(default_factory=list)
    raw_engine_output: Optional[Dict[str, Any]] = None

    def to_dict(self, *, include_raw: bool = False) -> Dict[str, Any]:
        data = asdict(self)
        if not include_raw:
            data.pop("raw_engine_output", None)
        return data


@dataclass(slots=True, frozen=True)
class PageAuditSuccess:
    url: str
    result: AuditResult
    status: Literal["success"] = "success"

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "status": self.status, "result": self.result.to_dict()}


@dataclass(slots=True, frozen=True)
class PageAuditFailure:
    url: str
    error: str
    status: Literal["error"] = "error"

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "status": self.status, "error": self.error}


PageAuditRecord = Union[PageAuditSuccess, PageAuditFailure]


@dataclass(slots=True, frozen=True)
class SiteAuditSummary:
    total_pages: int
    successes: int
    failures: int
    total_violations: int


@dataclass(slots=True, frozen=True)
class SiteAuditResult:
    """Итог одного запуска: обход, записи аудита по страницам и сводка."""

    start_url: str
    crawl: CrawlResult
    audits: List[PageAuditRecord]
    summary: SiteAuditSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_url": self.start_url,
            "crawl": self.crawl.to_dict(),
            "audits": [record.to_dict() for record in self.audits],
            "summary": asdict(self.summary),
        }


@dataclass(slots=True, frozen=True)
class PageOccurrences:
    url: str
    occurrences: int


@dataclass(slots=True, frozen=True)
class ViolationOverviewEntry:
    """Сводка по одному правилу на всех страницах сайта."""

    id: str
    description: str
    impact: Impact
    help_url: str
    wcag_level: WCAGLevel
    total_occurrences: int
    pages: List[PageOccurrences]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
