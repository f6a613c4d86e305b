"""Exception hierarchy for A11yScout."""

from __future__ import annotations

__all__ = ["A11yScoutError", "InvalidUrlError", "AuditError"]


class A11yScoutError(Exception):
    """Base class for errors raised by a11y_scout."""


class InvalidUrlError(A11yScoutError, ValueError):
    """The start URL of a crawl or site audit cannot be parsed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Invalid start URL: {url}")
        self.url = url


class AuditError(A11yScoutError, RuntimeError):
    """The browser or the rule engine failed to produce a result for a page."""
