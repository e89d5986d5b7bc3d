"""Search request/response types shared by ADClient and the validators."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol
from urllib.parse import unquote, urlsplit

from ldap3 import BASE, LEVEL, SUBTREE

from .filters import Filter


class SearchScope(str, Enum):
    BASE = "base"
    LEVEL = "one"
    SUBTREE = "sub"

    @property
    def ldap3(self) -> str:
        return {"base": BASE, "one": LEVEL, "sub": SUBTREE}[self.value]


@dataclass(frozen=True)
class Referral:
    """Redirect target returned by the server instead of (or along with) entries.

    ``uri`` is an LDAP URL (ldap://host[:port]/<dn>[?...]) or a bare DN.
    """

    uri: str

    @property
    def _parts(self):
        return urlsplit(self.uri) if "://" in self.uri else None

    @property
    def host(self) -> str:
        p = self._parts
        return (p.hostname or "") if p else ""

    @property
    def port(self) -> Optional[int]:
        p = self._parts
        return p.port if p else None

    @property
    def use_ssl(self) -> bool:
        p = self._parts
        return bool(p and p.scheme.lower() == "ldaps")

    @property
    def dn(self) -> str:
        p = self._parts
        if p is None:
            return self.uri.strip()
        return unquote(p.path.lstrip("/"))


@dataclass
class SearchOptions:
    filter: Filter
    base: str
    scope: SearchScope = SearchScope.BASE
    return_referrals: bool = True
    attributes: list[str] = field(default_factory=lambda: ["dn"])
    # Another server/partition to query instead of the configured DC.
    target: Optional[Referral] = None


@dataclass
class SearchEntry:
    dn: str
    attributes: dict = field(default_factory=dict)


@dataclass
class SearchResult:
    entries: list[SearchEntry] = field(default_factory=list)
    referrals: list[Referral] = field(default_factory=list)


class DirectorySearchClient(Protocol):
    def search(self, options: SearchOptions) -> SearchResult:
        """Run one search. Raises SearchFailed on transport/protocol errors."""
        ...
