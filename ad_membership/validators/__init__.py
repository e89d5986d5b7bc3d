"""Group membership validators.

Public API:
    - MembershipValidator (base)
    - ChainMembershipValidator (server-side nested check, AD in-chain rule)
    - DirectMembershipValidator (entry's own memberOf, no nesting)
    - build_validator(), validate_membership()
"""

from __future__ import annotations

import logging
from typing import Iterable, Literal

from ..ad.search import DirectorySearchClient
from .active_directory import ChainMembershipValidator
from .base import HasDN, MembershipValidator
from .direct import DirectMembershipValidator

log = logging.getLogger(__name__)

Strategy = Literal["in_chain", "direct", "detect"]


def build_validator(strategy: str, client: DirectorySearchClient, groups: Iterable[HasDN]) -> MembershipValidator:
    """Pick a validator for the configured strategy.

    ``detect`` asks the server (``client.is_active_directory()``) and falls back
    to the direct check when the in-chain rule is not available.
    """
    s = (strategy or "").strip().lower()
    if s == "in_chain":
        return ChainMembershipValidator(client, groups)
    if s == "direct":
        return DirectMembershipValidator(client, groups)
    if s == "detect":
        if client.is_active_directory():
            return ChainMembershipValidator(client, groups)
        log.info("Сервер не объявляет возможности AD, используется прямая проверка memberOf")
        return DirectMembershipValidator(client, groups)
    raise ValueError(f"Неизвестная стратегия проверки членства: {strategy}")


def validate_membership(client: DirectorySearchClient, entry: HasDN, groups: Iterable[HasDN]) -> bool:
    """One-shot in-chain check of ``entry`` against ``groups``."""
    return ChainMembershipValidator(client, groups).validate(entry)


__all__ = [
    "MembershipValidator",
    "ChainMembershipValidator",
    "DirectMembershipValidator",
    "Strategy",
    "build_validator",
    "validate_membership",
]
