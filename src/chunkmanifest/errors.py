"""
Errors raised for problems the user can fix, such as a malformed manifest
configuration. Failures of the host (unreadable stats, failed writes) are not
wrapped and propagate as they are.
"""

from __future__ import annotations


class ManifestConfigError(ValueError):
    """Invalid manifest options (wrong type or unknown shape)."""
    pass


__all__ = ["ManifestConfigError"]
