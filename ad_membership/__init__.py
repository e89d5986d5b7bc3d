"""Group membership checks against Active Directory.

Nested membership is resolved by the directory server through the
LDAP_MATCHING_RULE_IN_CHAIN extensible match; see
``validators.active_directory``.

Public API:
    - ChainMembershipValidator, DirectMembershipValidator, MembershipValidator
    - build_validator(), validate_membership()
    - ADClient, ADConfig
    - MembershipError, SearchFailed, MalformedDNError
"""

from .ad import ADClient, ADConfig
from .errors import MalformedDNError, MembershipError, SearchFailed
from .validators import (
    ChainMembershipValidator,
    DirectMembershipValidator,
    MembershipValidator,
    build_validator,
    validate_membership,
)

__all__ = [
    "ADClient",
    "ADConfig",
    "MalformedDNError",
    "MembershipError",
    "SearchFailed",
    "ChainMembershipValidator",
    "DirectMembershipValidator",
    "MembershipValidator",
    "build_validator",
    "validate_membership",
]
