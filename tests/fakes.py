"""Test doubles for the directory search client and entries."""
from __future__ import annotations

from dataclasses import dataclass, field

from ad_membership.ad.search import Referral, SearchEntry, SearchResult


class FakeSearchClient:
    """Search client returning queued results and recording every request."""

    def __init__(self, results=None, error: Exception | None = None, is_ad: bool = True):
        self.results = list(results or [])
        self.error = error
        self.is_ad = is_ad
        self.calls = []

    def search(self, options):
        self.calls.append(options)
        if self.error is not None:
            raise self.error
        if self.results:
            return self.results.pop(0)
        return SearchResult()

    def is_active_directory(self) -> bool:
        return self.is_ad


@dataclass
class Entry:
    dn: str
    member_of: list[str] = field(default_factory=list)


@dataclass
class Group:
    dn: str


def result(*dns: str, referrals=()) -> SearchResult:
    return SearchResult(
        entries=[SearchEntry(dn=d) for d in dns],
        referrals=[Referral(r) for r in referrals],
    )
