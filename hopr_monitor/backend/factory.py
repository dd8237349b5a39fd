"""Addressing profile factory."""

from __future__ import annotations

from collections.abc import Sequence

from yarl import URL

from .profiles import (
    AddressingProfile,
    LocalCustomProfile,
    ManagedCloudProfile,
    ResolvedEndpoints,
)

DEFAULT_PROFILES: tuple[AddressingProfile, ...] = (
    ManagedCloudProfile(),
    LocalCustomProfile(),
)


def create_profile(
    environment: str, *, profiles: Sequence[AddressingProfile] = DEFAULT_PROFILES
) -> AddressingProfile:
    """Return the first profile that addresses ``environment``."""

    for profile in profiles:
        if profile.matches(environment):
            return profile
    raise LookupError(f"No addressing profile for environment {environment!r}")


def resolve_endpoints(
    environment: str,
    url: URL,
    user_token: str,
    *,
    profiles: Sequence[AddressingProfile] = DEFAULT_PROFILES,
) -> ResolvedEndpoints:
    """Return the endpoint functions for every instance behind ``url``."""

    return create_profile(environment, profiles=profiles).resolve(url, user_token)
