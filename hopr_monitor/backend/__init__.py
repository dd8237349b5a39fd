"""Backend package exports."""
from __future__ import annotations

from .factory import DEFAULT_PROFILES, create_profile, resolve_endpoints
from .profiles import (
    AddressingProfile,
    LocalCustomProfile,
    ManagedCloudProfile,
    ResolvedEndpoints,
)

__all__ = [
    "DEFAULT_PROFILES",
    "AddressingProfile",
    "LocalCustomProfile",
    "ManagedCloudProfile",
    "ResolvedEndpoints",
    "create_profile",
    "resolve_endpoints",
]
