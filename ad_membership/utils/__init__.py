"""Small, side-effect free helpers.

Keep this package dependency-light to avoid circular imports.
"""

from .dn import dn_base_suffix, dn_equal, normalize_dn  # noqa: F401
