# a11y_scout/crawler/models.py
"""
Data models for the A11yScout crawler.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field

__all__ = ("CrawlOptions", "QueueItem", "CrawlError", "CrawlResult", "FetchResponse")


class CrawlOptions(BaseModel):
    """Bounds of one crawl: page budget, link depth, politeness delay and origin policy."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    max_pages: int = Field(20, gt=0, description="Hard limit on visited pages.")
    max_depth: int = Field(2, ge=0, description="Link hops followed from the start URL.")
    delay_ms: int = Field(0, ge=0, description="Pause between requests, milliseconds.")
    same_origin: bool = Field(True, description="Only follow links on the start URL's origin.")


@dataclass(slots=True)
class QueueItem:
    """Pending crawl work: normalized URL and its hop distance from the seed."""

    url: str
    depth: int


@dataclass(slots=True, frozen=True)
class CrawlError:
    """A page that was visited but could not be fetched."""

    url: str
    error: str


@dataclass(slots=True)
class CrawlResult:
    """Visited pages in BFS order, per-URL fetch errors and dropped-link counter."""

    pages: List[str] = field(default_factory=list)
    errors: List[CrawlError] = field(default_factory=list)
    skipped: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class FetchResponse:
    """What the crawler needs from an HTTP response."""

    status: int
    status_text: str = ""
    text: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300
