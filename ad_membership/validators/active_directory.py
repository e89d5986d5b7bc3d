"""Membership validation with the Active Directory "in chain" matching rule.

LDAP_MATCHING_RULE_IN_CHAIN (1.2.840.113556.1.4.1941) walks the chain of
ancestry in objects all the way to the root until it finds a match, so nested
group membership is resolved by the server in a single round trip:
https://learn.microsoft.com/en-us/windows/win32/adsi/search-filter-syntax

The entry itself is used as the search base with a base-object scope: the
server answers "does this one object satisfy the filter", nothing is
enumerated.
"""

from __future__ import annotations

import logging

from ..ad.filters import And, Equality, Filter, membership_in_chain_filter
from ..ad.search import Referral, SearchEntry, SearchOptions, SearchScope
from ..utils.dn import dn_base_suffix, normalize_dn
from .base import HasDN, MembershipValidator

log = logging.getLogger(__name__)

ATTRS = ["dn"]


class ChainMembershipValidator(MembershipValidator):
    def perform(self, entry: HasDN) -> bool:
        if not self.group_dns:
            return True
        flt = self.membership_in_chain_filter()
        options = SearchOptions(
            filter=flt,
            base=entry.dn,
            scope=SearchScope.BASE,
            return_referrals=True,
            attributes=list(ATTRS),
        )
        result = self.client.search(options)

        matched = result.entries
        if not matched and result.referrals:
            matched = self.chase_referrals(entry, flt, result.referrals)

        # AD DNs are case-insensitive
        entry_dn = normalize_dn(entry.dn)
        ok = any(normalize_dn(m.dn) == entry_dn for m in matched)
        log.debug("in-chain membership dn=%s groups=%d -> %s", entry.dn, len(self.group_dns), ok)
        return ok

    def chase_referrals(self, entry: HasDN, flt: Filter, referrals: list[Referral]) -> list[SearchEntry]:
        """Repeat the search once per referral target under the entry's naming context.

        The entry's own partition is the DC suffix of its DN; the search there is
        narrowed back to the entry by DN. Referrals returned by these searches
        are not followed.
        """
        base = dn_base_suffix(entry.dn)
        narrowed = And(Equality("distinguishedName", entry.dn), flt)

        matched: list[SearchEntry] = []
        for ref in referrals:
            log.info("Следуем по referral %s для %s (base=%s)", ref.uri, entry.dn, base)
            options = SearchOptions(
                filter=narrowed,
                base=base,
                scope=SearchScope.SUBTREE,
                return_referrals=True,
                attributes=list(ATTRS),
                target=ref,
            )
            matched.extend(self.client.search(options).entries)
        return matched

    def membership_in_chain_filter(self) -> Filter:
        return membership_in_chain_filter(self.group_dns)
