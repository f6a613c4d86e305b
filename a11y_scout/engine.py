# File: a11y_scout/engine.py
"""a11y_scout.engine: оркестрация: обход сайта и последовательный аудит каждой страницы."""

from __future__ import annotations

import inspect
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional, Protocol, Union

from a11y_scout.auditor import AccessibilityAuditor
from a11y_scout.config import AuditConfig
from a11y_scout.crawler.crawler import SiteCrawler
from a11y_scout.logger import logger
from a11y_scout.models import (
    AuditResult,
    PageAuditFailure,
    PageAuditRecord,
    PageAuditSuccess,
    SiteAuditResult,
    SiteAuditSummary,
)
from a11y_scout.utils import normalize_url

__all__ = [
    "AuditorLike",
    "AuditorFactory",
    "CrawlerFactory",
    "SiteAuditRunner",
    "split_options",
    "audit_page",
    "run_site_audit",
]


class AuditorLike(Protocol):
    """Всё, что нужно раннеру от аудитора: ``audit`` и ``close``."""

    async def audit(self, url: str, *, timeout: Optional[float] = None) -> AuditResult: ...

    async def close(self) -> None: ...


AuditorFactory = Callable[[], Union[AuditorLike, Awaitable[AuditorLike]]]
CrawlerFactory = Callable[[], SiteCrawler]

_NUMERIC_CRAWL_FIELDS = ("max_pages", "max_depth", "delay_ms")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_count(value: Any) -> Optional[int]:
    """Целое значение для границ обхода; ``2.0`` допустимо, ``2.5`` нет."""
    if not _is_number(value):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    return value


def split_options(options: Optional[Mapping[str, Any]]) -> tuple[Dict[str, Any], Optional[float]]:
    """Делит опции запуска на переопределения обхода и таймаут аудита.

    В переопределения попадают только явно переданные поля подходящего типа;
    дробные значения границ обхода отбрасываются.
    """
    options = options or {}
    overrides: Dict[str, Any] = {}
    for name in _NUMERIC_CRAWL_FIELDS:
        count = _as_count(options.get(name))
        if count is not None:
            overrides[name] = count
    if isinstance(options.get("same_origin"), bool):
        overrides["same_origin"] = options["same_origin"]
    timeout = options.get("timeout")
    return overrides, timeout if _is_number(timeout) else None


class SiteAuditRunner:
    """Фасад для CLI и тестов: обход сайта, аудит найденных страниц и сводка.

    Краулер и аудитор создаются фабриками, поэтому в тестах их можно
    заменить заглушками, не трогая логику раннера.
    """

    def __init__(
        self,
        crawler_factory: Optional[CrawlerFactory] = None,
        auditor_factory: Optional[AuditorFactory] = None,
        config: Optional[AuditConfig] = None,
    ) -> None:
        self.config = config or AuditConfig()
        self._create_crawler = crawler_factory or (lambda: SiteCrawler(config=self.config))
        self._create_auditor = auditor_factory or (lambda: AccessibilityAuditor(self.config))

    async def run(self, start_url: str, options: Optional[Mapping[str, Any]] = None) -> SiteAuditResult:
        """Обходит сайт с ``start_url`` и проводит аудит каждой страницы по очереди.

        Ошибка аудита одной страницы записывается как ``PageAuditFailure`` и
        не прерывает запуск. Аудитор закрывается ровно один раз.
        """
        overrides, timeout = split_options(options)
        crawler = self._create_crawler()
        crawl_result = await crawler.crawl(start_url, overrides)

        auditor = self._create_auditor()
        if inspect.isawaitable(auditor):
            auditor = await auditor

        audits: List[PageAuditRecord] = []
        total_violations = 0
        successes = 0
        failures = 0

        try:
            for index, page in enumerate(crawl_result.pages, start=1):
                logger.info("Auditing %d/%d: %s", index, len(crawl_result.pages), page)
                try:
                    result = await auditor.audit(page, timeout=timeout)
                except Exception as exc:
                    message = str(exc) or type(exc).__name__
                    logger.warning("Audit failed for %s: %s", page, message)
                    audits.append(PageAuditFailure(url=page, error=message))
                    failures += 1
                    continue
                audits.append(PageAuditSuccess(url=page, result=result))
                total_violations += result.summary.total_violations
                successes += 1
        finally:
            await auditor.close()

        summary = SiteAuditSummary(
            total_pages=len(crawl_result.pages),
            successes=successes,
            failures=failures,
            total_violations=total_violations,
        )
        logger.info(
            "Site audit finished: %d pages, %d failed, %d violations",
            summary.total_pages,
            summary.failures,
            summary.total_violations,
        )

        if crawl_result.pages:
            normalized_start = crawl_result.pages[0]
        else:
            normalized_start = normalize_url(start_url) or start_url

        return SiteAuditResult(
            start_url=normalized_start,
            crawl=crawl_result,
            audits=audits,
            summary=summary,
        )


async def audit_page(url: str, config: Optional[AuditConfig] = None, timeout: Optional[float] = None) -> AuditResult:
    """Аудит одной страницы в отдельном браузере."""
    async with AccessibilityAuditor(config) as auditor:
        return await auditor.audit(url, timeout=timeout)


async def run_site_audit(
    start_url: str,
    options: Optional[Mapping[str, Any]] = None,
    config: Optional[AuditConfig] = None,
) -> SiteAuditResult:
    """Запускает SiteAuditRunner с реальным краулером и браузером."""
    return await SiteAuditRunner(config=config).run(start_url, options)
