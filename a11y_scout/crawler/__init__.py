"""a11y_scout.crawler: breadth-first site crawler and its HTTP/HTML collaborators."""

from a11y_scout.crawler.crawler import SiteCrawler, resolve_options
from a11y_scout.crawler.fetcher import FetchFn, HttpFetcher
from a11y_scout.crawler.link_extractor import extract_hrefs
from a11y_scout.crawler.models import CrawlError, CrawlOptions, CrawlResult, FetchResponse, QueueItem

__all__ = [
    "SiteCrawler",
    "resolve_options",
    "FetchFn",
    "HttpFetcher",
    "extract_hrefs",
    "CrawlError",
    "CrawlOptions",
    "CrawlResult",
    "FetchResponse",
    "QueueItem",
]
