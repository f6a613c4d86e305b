# === FILE: a11y_scout/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import logging
import time
from collections import deque
from typing import TYPE_CHECKING, Any, Deque, List, Mapping, Optional, Set, Union

from a11y_scout.crawler.fetcher import FetchFn, HttpFetcher
from a11y_scout.crawler.link_extractor import extract_hrefs, is_followable_href
from a11y_scout.crawler.models import CrawlError, CrawlOptions, CrawlResult, QueueItem
from a11y_scout.exceptions import InvalidUrlError
from a11y_scout.utils import is_http_url, normalize_url, url_origin

if TYPE_CHECKING:
    from a11y_scout.config import AuditConfig

__all__ = ("SiteCrawler", "resolve_options")

OptionsT = Union[CrawlOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsT) -> CrawlOptions:
    """Merge partial overrides onto the crawl defaults."""
    if options is None:
        return CrawlOptions()
    if isinstance(options, CrawlOptions):
        return options
    return CrawlOptions(**dict(options))


class SiteCrawler:
    """Breadth-first crawler bounded by page count, link depth and origin.

    Pages are fetched one at a time in queue order, so ``pages`` in the result
    is the exact BFS visit order. All traversal state lives inside a single
    :meth:`crawl` call.
    """

    def __init__(self, fetch: Optional[FetchFn] = None, config: Optional[AuditConfig] = None) -> None:
        self._fetch = fetch
        self.config = config
        self.logger = logging.getLogger("A11yScout")

    async def crawl(self, start_url: str, options: OptionsT = None) -> CrawlResult:
        opts = resolve_options(options)
        root = normalize_url(start_url)
        if root is None:
            raise InvalidUrlError(start_url)

        if self._fetch is not None:
            return await self._crawl(root, opts, self._fetch)

        async with self._default_fetcher() as fetcher:
            return await self._crawl(root, opts, fetcher.fetch)

    def _default_fetcher(self) -> HttpFetcher:
        if self.config is None:
            from a11y_scout.config import AuditConfig

            self.config = AuditConfig()
        return HttpFetcher.from_config(self.config)

    async def _crawl(self, root: str, opts: CrawlOptions, fetch: FetchFn) -> CrawlResult:
        self.logger.info(
            "Crawl started: %s (max_pages=%d, max_depth=%d)", root, opts.max_pages, opts.max_depth
        )
        started = time.monotonic()
        origin = url_origin(root)

        visited: Set[str] = set()
        queued: Set[str] = {root}
        queue: Deque[QueueItem] = deque([QueueItem(root, 0)])
        result = CrawlResult()

        while queue and len(result.pages) < opts.max_pages:
            current = queue.popleft()
            queued.discard(current.url)
            if current.url in visited:
                continue

            visited.add(current.url)
            result.pages.append(current.url)

            html = await self._fetch_body(fetch, current.url, result.errors)

            if html is not None and current.depth < opts.max_depth:
                for href in self._extract_links(html, current.url):
                    link = normalize_url(href, current.url)
                    if link is None:
                        continue
                    if not is_http_url(link):
                        result.skipped += 1
                        continue
                    if opts.same_origin and url_origin(link) != origin:
                        result.skipped += 1
                        continue
                    if link in visited or link in queued:
                        result.skipped += 1
                        continue
                    queued.add(link)
                    queue.append(QueueItem(link, current.depth + 1))

            if opts.delay_ms > 0 and queue and len(result.pages) < opts.max_pages:
                await asyncio.sleep(opts.delay_ms / 1000)

        duration = time.monotonic() - started
        self.logger.info(
            "Crawl finished: %d pages, %d errors, %d skipped links in %.2f s",
            len(result.pages),
            len(result.errors),
            result.skipped,
            duration,
        )
        return result

    async def _fetch_body(self, fetch: FetchFn, url: str, errors: List[CrawlError]) -> Optional[str]:
        try:
            response = await fetch(url)
        except Exception as exc:
            message = str(exc) or type(exc).__name__
            self.logger.warning("Failed %s: %s", url, message)
            errors.append(CrawlError(url, message))
            return None
        if not response.ok:
            message = f"HTTP {response.status} {response.status_text}"
            self.logger.warning("Failed %s: %s", url, message)
            errors.append(CrawlError(url, message))
            return None
        return response.text

    def _extract_links(self, html: str, page_url: str) -> List[str]:
        try:
            hrefs = extract_hrefs(html)
        except Exception as exc:
            self.logger.warning("Failed to parse HTML from %s: %s", page_url, exc)
            return []
        return [href for href in hrefs if is_followable_href(href)]
