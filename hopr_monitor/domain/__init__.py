"""Domain model for hosts, snapshots and fleets."""

from __future__ import annotations

from .host import Host, environment_of
from .snapshot import Balance, Fleet, Identity, NodeSnapshot, build_fleet

__all__ = [
    "Balance",
    "Fleet",
    "Host",
    "Identity",
    "NodeSnapshot",
    "build_fleet",
    "environment_of",
]
