# File: a11y_scout/utils.py
"""a11y_scout.utils: нормализация URL и связанные утилиты.

Нормализованные URL используются краулером как ключи множества посещённых
страниц, поэтому эквивалентные адреса должны совпадать побайтно.
"""

from __future__ import annotations

from typing import Dict, Optional, Sequence
from urllib.parse import urljoin, urlsplit, urlunsplit

__all__: Sequence[str] = (
    "HTTP_SCHEMES",
    "normalize_url",
    "url_origin",
    "is_http_url",
)

HTTP_SCHEMES = frozenset({"http", "https"})

_DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443}


def _normalize_netloc(scheme: str, netloc: str, port: Optional[int]) -> str:
    userinfo, at, hostport = netloc.rpartition("@")
    hostport = hostport.lower()
    if port is not None and _DEFAULT_PORTS.get(scheme) == port:
        hostport = hostport.rsplit(":", 1)[0]
    elif hostport.endswith(":"):
        # "host:" carries an empty port
        hostport = hostport[:-1]
    return f"{userinfo}{at}{hostport}"


def normalize_url(url: str, base: Optional[str] = None) -> Optional[str]:
    """Приводит URL к канонической форме или возвращает ``None``.

    * относительный ``url`` разрешается относительно ``base``;
    * фрагмент (``#...``) удаляется;
    * завершающие слеши пути убираются, корень остаётся ``/``;
    * схема и хост переводятся в нижний регистр, порт по умолчанию убирается.

    Функция идемпотентна и никогда не бросает исключений.
    """
    if not isinstance(url, str):
        return None
    candidate = url.strip()
    try:
        if base:
            candidate = urljoin(base, candidate)
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    if not scheme:
        return None

    netloc = parts.netloc
    path = parts.path
    if scheme in HTTP_SCHEMES:
        if not parts.hostname:
            return None
        netloc = _normalize_netloc(scheme, netloc, port)
        if not path:
            path = "/"

    if path and path != "/":
        path = path.rstrip("/") or "/"

    return urlunsplit((scheme, netloc, path, parts.query, ""))


def url_origin(url: str) -> str:
    """Возвращает origin (``scheme://host[:port]``) для уже нормализованного URL."""
    parts = urlsplit(url)
    hostport = parts.netloc.rpartition("@")[2]
    return f"{parts.scheme}://{hostport}"


def is_http_url(url: str) -> bool:
    """Проверяет, что URL использует схему http или https."""
    return urlsplit(url).scheme in HTTP_SCHEMES
