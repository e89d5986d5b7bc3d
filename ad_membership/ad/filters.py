"""LDAP search filter expressions.

Small immutable expression tree rendered to RFC 4515 strings that ldap3
accepts as ``search_filter``:

    Equality("sAMAccountName", "bob")                -> (sAMAccountName=bob)
    Extensible("memberOf", dn, IN_CHAIN_OID)         -> (memberOf:1.2.840.113556.1.4.1941:=<dn>)
    Or(a, b) / And(a, b)                             -> (|ab) / (&ab)

``Or``/``And`` over a single operand render as that operand.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Iterable, Optional, Union

from .utils import escape_ldap_filter_value

# LDAP_MATCHING_RULE_IN_CHAIN: walks the chain of ancestry of a DN-valued
# attribute on the server side.
IN_CHAIN_OID = "1.2.840.113556.1.4.1941"
MEMBER_OF_ATTR = "memberOf"


@dataclass(frozen=True)
class Equality:
    attr: str
    value: str

    def __str__(self) -> str:
        return f"({self.attr}={escape_ldap_filter_value(self.value)})"


@dataclass(frozen=True)
class Extensible:
    attr: str
    value: str
    matching_rule: Optional[str] = None

    def __str__(self) -> str:
        rule = f":{self.matching_rule}" if self.matching_rule else ""
        return f"({self.attr}{rule}:={escape_ldap_filter_value(self.value)})"


@dataclass(frozen=True, init=False)
class Or:
    operands: tuple["Filter", ...]

    def __init__(self, *operands: "Filter") -> None:
        if not operands:
            raise ValueError("Or() requires at least one operand")
        object.__setattr__(self, "operands", tuple(operands))

    def __or__(self, other: "Filter") -> "Or":
        return Or(*self.operands, other)

    def __str__(self) -> str:
        if len(self.operands) == 1:
            return str(self.operands[0])
        return "(|" + "".join(str(o) for o in self.operands) + ")"


@dataclass(frozen=True, init=False)
class And:
    operands: tuple["Filter", ...]

    def __init__(self, *operands: "Filter") -> None:
        if not operands:
            raise ValueError("And() requires at least one operand")
        object.__setattr__(self, "operands", tuple(operands))

    def __str__(self) -> str:
        if len(self.operands) == 1:
            return str(self.operands[0])
        return "(&" + "".join(str(o) for o in self.operands) + ")"


Filter = Union[Equality, Extensible, Or, And]


def _or(a: Filter, b: Filter) -> Or:
    if isinstance(a, Or):
        return a | b
    return Or(a, b)


def any_of(filters: Iterable[Filter]) -> Filter:
    """OR the given filters together; a single filter is returned unchanged."""
    items = list(filters)
    if not items:
        raise ValueError("any_of() requires at least one filter")
    return reduce(_or, items)


def in_chain(value: str, attr: str = MEMBER_OF_ATTR) -> Extensible:
    return Extensible(attr, value, IN_CHAIN_OID)


def membership_in_chain_filter(group_dns: Iterable[str]) -> Filter:
    """One in-chain predicate per group DN, combined with OR."""
    return any_of(in_chain(dn) for dn in group_dns)
