"""Active Directory (LDAP) client package.

Public API:
    - ADConfig, ADUser, ADGroup
    - ADClient
    - SearchOptions, SearchResult, SearchEntry, SearchScope, Referral
"""

from .models import ADConfig, ADUser, ADGroup
from .client import ADClient
from .search import (
    DirectorySearchClient,
    Referral,
    SearchEntry,
    SearchOptions,
    SearchResult,
    SearchScope,
)

__all__ = [
    "ADConfig",
    "ADUser",
    "ADGroup",
    "ADClient",
    "DirectorySearchClient",
    "Referral",
    "SearchEntry",
    "SearchOptions",
    "SearchResult",
    "SearchScope",
]
