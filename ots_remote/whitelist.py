"""
Glob-matching allow-list for calendar URLs.

Entries are URL glob patterns, always schemed. A pattern added without
a scheme is stored twice, once for http:// and once for https://.

Matching follows minimatch path semantics: pattern and candidate are
split on "/" and compared segment by segment with fnmatch, so

    https://*.calendar.opentimestamps.org

matches ``https://alice.calendar.opentimestamps.org`` and
``https://a.b.calendar.opentimestamps.org`` (``*`` crosses dots) but not
``https://evil.com/x.calendar.opentimestamps.org`` (``*`` never crosses
"/"). Matching is case-sensitive and the segment counts must agree, so
a trailing "/" or extra path makes a URL a non-match.

The whitelist is filled at setup and only read afterwards; concurrent
lookups need no locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from fnmatch import fnmatchcase

_SCHEMES = ("http://", "https://")


def _glob_match(url: str, pattern: str) -> bool:
    url_parts = url.split("/")
    pattern_parts = pattern.split("/")
    if len(url_parts) != len(pattern_parts):
        return False
    return all(fnmatchcase(u, p) for u, p in zip(url_parts, pattern_parts))


class UrlWhitelist:
    """Set of URL glob patterns with membership by glob match.

    A whitelist built with ``frozen=True`` rejects further ``add`` calls;
    use ``copy()`` to get an extendable one.
    """

    def __init__(self, urls: Iterable[str] = (), *, frozen: bool = False) -> None:
        self._frozen = False
        self._patterns: set[str] = set()
        for url in urls:
            self.add(url)
        self._frozen = frozen

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add(self, url: str) -> None:
        """Add a pattern, expanding a scheme-less one to http and https."""
        if self._frozen:
            raise TypeError("UrlWhitelist is frozen")
        if not isinstance(url, str):
            raise TypeError("URL must be a string")
        if url.startswith(_SCHEMES):
            self._patterns.add(url)
        else:
            for scheme in _SCHEMES:
                self._patterns.add(scheme + url)

    def contains(self, url: str) -> bool:
        """True if any pattern matches ``url``."""
        if not isinstance(url, str):
            return False
        return any(_glob_match(url, pattern) for pattern in self._patterns)

    def __contains__(self, url: object) -> bool:
        return self.contains(url)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    def copy(self) -> UrlWhitelist:
        """Return a mutable copy with the same patterns."""
        clone = UrlWhitelist()
        clone._patterns = set(self._patterns)
        return clone

    def __repr__(self) -> str:
        return "UrlWhitelist([" + ",".join(sorted(self._patterns)) + "])"


DEFAULT_CALENDAR_WHITELIST = UrlWhitelist(
    [
        "https://*.calendar.opentimestamps.org",  # Run by Peter Todd
        "https://*.calendar.eternitywall.com",  # Run by Riccardo Casatta of Eternity Wall
        "https://*.calendar.catallaxy.com",  # Run by Vincent Cloutier of Catallaxy
    ],
    frozen=True,
)

# Aggregators the orchestrator submits to; not matched through a whitelist.
DEFAULT_AGGREGATORS: tuple[str, ...] = (
    "https://a.pool.opentimestamps.org",
    "https://b.pool.opentimestamps.org",
    "https://a.pool.eternitywall.com",
    "https://ots.btc.catallaxy.com",
)
