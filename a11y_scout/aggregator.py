# File: a11y_scout/aggregator.py
"""a11y_scout.aggregator: сводка нарушений по всем страницам сайта.

Правило, найденное на нескольких страницах, считается *структурным*
(ошибка общего шаблона или компонента), найденное на одной: *изолированным*.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Tuple

from a11y_scout.models import (
    PageAuditRecord,
    PageAuditSuccess,
    PageOccurrences,
    Violation,
    ViolationOverviewEntry,
)

__all__ = ["Scope", "aggregate_violations", "classify", "split_by_scope"]

Scope = Literal["structural", "isolated"]


@dataclass(slots=True)
class _Accumulator:
    meta: Violation
    total: int = 0
    per_page: Dict[str, int] = field(default_factory=dict)


def aggregate_violations(audits: Iterable[PageAuditRecord]) -> List[ViolationOverviewEntry]:
    """Группирует нарушения успешных аудитов по id правила.

    Нарушение без узлов всё равно считается одним вхождением.
    """
    grouped: Dict[str, _Accumulator] = {}
    for record in audits:
        if not isinstance(record, PageAuditSuccess):
            continue
        for violation in record.result.violations:
            occurrences = max(len(violation.nodes), 1)
            acc = grouped.get(violation.id)
            if acc is None:
                acc = grouped[violation.id] = _Accumulator(meta=violation)
            acc.total += occurrences
            acc.per_page[record.url] = acc.per_page.get(record.url, 0) + occurrences

    overview: List[ViolationOverviewEntry] = []
    for acc in grouped.values():
        pages = sorted(
            (PageOccurrences(url, count) for url, count in acc.per_page.items()),
            key=lambda p: (-p.occurrences, p.url),
        )
        overview.append(
            ViolationOverviewEntry(
                id=acc.meta.id,
                description=acc.meta.description,
                impact=acc.meta.impact,
                help_url=acc.meta.help_url,
                wcag_level=acc.meta.wcag_level,
                total_occurrences=acc.total,
                pages=pages,
            )
        )

    overview.sort(key=lambda e: (-e.total_occurrences, -len(e.pages), e.id))
    return overview


def classify(entry: ViolationOverviewEntry) -> Scope:
    """``structural`` если правило нарушено более чем на одной странице."""
    return "structural" if len(entry.pages) > 1 else "isolated"


def split_by_scope(
    overview: Iterable[ViolationOverviewEntry],
) -> Tuple[List[ViolationOverviewEntry], List[ViolationOverviewEntry]]:
    """Делит сводку на структурные и изолированные нарушения, сохраняя порядок."""
    structural: List[ViolationOverviewEntry] = []
    isolated: List[ViolationOverviewEntry] = []
    for entry in overview:
        (structural if classify(entry) == "structural" else isolated).append(entry)
    return structural, isolated
