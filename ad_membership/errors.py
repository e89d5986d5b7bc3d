from __future__ import annotations


class MembershipError(Exception):
    """Base class for failures raised while checking group membership."""


class SearchFailed(MembershipError):
    """Directory search did not complete (transport, bind or protocol error)."""

    def __init__(self, message: str, *, result: int | None = None, description: str = "") -> None:
        super().__init__(message)
        self.result = result
        self.description = description


class MalformedDNError(MembershipError, ValueError):
    """DN has no trailing DC= components, so no naming context can be derived."""

    def __init__(self, dn: str) -> None:
        super().__init__(f"DN has no domain component suffix: {dn!r}")
        self.dn = dn
