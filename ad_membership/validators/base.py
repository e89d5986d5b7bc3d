from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Protocol

from ..ad.search import DirectorySearchClient


class HasDN(Protocol):
    dn: str


class MembershipValidator(ABC):
    """Checks whether an entry belongs to at least one of a fixed set of groups.

    Strategies differ in how membership is resolved; callers only use
    ``validate(entry)``. An empty group set means no restriction and always
    validates.
    """

    def __init__(self, client: DirectorySearchClient, groups: Iterable[HasDN]) -> None:
        self.client = client
        self.groups = tuple(groups)
        self.group_dns: tuple[str, ...] = tuple(g.dn for g in self.groups)

    def validate(self, entry: HasDN) -> bool:
        if not self.groups:
            return True
        return self.perform(entry)

    @abstractmethod
    def perform(self, entry: HasDN) -> bool:
        raise NotImplementedError
