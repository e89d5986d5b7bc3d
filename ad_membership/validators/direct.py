from __future__ import annotations

from ..utils.dn import normalize_dn
from .base import HasDN, MembershipValidator


class DirectMembershipValidator(MembershipValidator):
    """Non-nested check against the entry's own ``memberOf`` values.

    For directories without the in-chain matching rule. The entry must carry
    ``member_of`` (ADUser does); no search is issued.
    """

    def perform(self, entry: HasDN) -> bool:
        if not self.group_dns:
            return True
        entry_groups = {normalize_dn(dn) for dn in (getattr(entry, "member_of", None) or [])}
        return any(normalize_dn(dn) in entry_groups for dn in self.group_dns)
