"""Immutable node snapshots and fleets."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Identity:
    """On-chain and peer addresses of a node."""

    hopr_address: str
    native_address: str


@dataclass(frozen=True, slots=True)
class Balance:
    """Node balances as base-unit decimal strings."""

    hopr: str
    native: str


@dataclass(frozen=True, slots=True)
class NodeSnapshot:
    """Everything queried from one instance during one load cycle."""

    instance_index: int
    http_endpoint: str
    ws_endpoint: str
    health_endpoint: str
    identity: Identity
    balance: Balance
    version: str
    info: Any = None
    channels: Any = None
    tickets: Any = None

    def __post_init__(self) -> None:
        """Reject negative instance indices."""

        if self.instance_index < 0:
            msg = "instance_index must be >= 0"
            raise ValueError(msg)


Fleet = tuple[NodeSnapshot, ...]


def build_fleet(snapshots: Iterable[NodeSnapshot]) -> Fleet:
    """Return snapshots ordered by index, enforcing ``0..n-1`` without gaps."""

    ordered = tuple(sorted(snapshots, key=lambda node: node.instance_index))
    indices = [node.instance_index for node in ordered]
    if indices != list(range(len(ordered))):
        raise ValueError(f"Fleet indices must be 0..{len(ordered) - 1}: {indices}")
    return ordered
