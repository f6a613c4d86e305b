# a11y_scout/crawler/link_extractor.py
"""
Anchor extraction for the A11yScout crawler.
"""
from __future__ import annotations

from typing import List

from bs4 import BeautifulSoup
from bs4.element import Tag

__all__ = ("extract_hrefs", "is_followable_href")


def is_followable_href(href: str) -> bool:
    """False for ``javascript:`` pseudo-links and in-page ``#fragment`` links."""
    return bool(href) and not href.startswith(("javascript:", "#"))


def extract_hrefs(html: str) -> List[str]:
    """
    Return raw ``href`` values of ``<a href>`` elements in document order.

    Values are stripped but neither resolved nor filtered; the crawler
    decides what to follow.
    """
    soup = BeautifulSoup(html, "html.parser")
    hrefs: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        hrefs.append(href_val.strip())
    return hrefs
