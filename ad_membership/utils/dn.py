from __future__ import annotations

from ..errors import MalformedDNError


def normalize_dn(dn: str) -> str:
    """Case-folded DN for comparisons (AD DNs are case-insensitive)."""
    return (dn or "").strip().lower()


def dn_equal(a: str, b: str) -> bool:
    return normalize_dn(a) == normalize_dn(b)


def _rdn_starts(s: str) -> list[int]:
    """Offsets where each RDN of s begins (after an unescaped comma)."""
    starts = [0]
    esc = False
    for i, ch in enumerate(s):
        if esc:
            esc = False
            continue
        if ch == "\\":
            esc = True
            continue
        if ch == ",":
            starts.append(i + 1)
    return starts


def dn_base_suffix(dn: str) -> str:
    """Return the root naming context part of a DN.

    CN=Bob,OU=Eng,DC=Corp,DC=Net -> DC=Corp,DC=Net

    Raises MalformedDNError when the DN carries no DC= components.
    """
    s = (dn or "").strip()
    for start in _rdn_starts(s):
        rest = s[start:].lstrip()
        if rest[:3].upper() == "DC=":
            return rest.rstrip()
    raise MalformedDNError(s)
