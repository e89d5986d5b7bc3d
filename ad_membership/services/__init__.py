"""Application service layer.

Stable import surface:
    from ad_membership.services import ...
"""

from .ad import ad_cfg_from_settings
from .auth import AuthResult, authenticate

__all__ = [
    "ad_cfg_from_settings",
    "AuthResult",
    "authenticate",
]
