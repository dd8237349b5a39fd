"""Discover HOPR node hosts, poll their instances and sample liveness."""

from __future__ import annotations

from .config import DashboardConfig
from .dashboard import Dashboard
from .domain import Balance, Fleet, Host, Identity, NodeSnapshot
from .example import EXAMPLE_HOST, example_fleet
from .fleet import async_load_fleet, async_load_host
from .formatting import format_balance, parse_ether, truncate
from .liveness import LivenessSampler, LivenessWindow
from .poller import async_poll_instance
from .registry import HostRegistry, parse_host_input
from .store import FleetStore

__all__ = [
    "Balance",
    "Dashboard",
    "DashboardConfig",
    "EXAMPLE_HOST",
    "Fleet",
    "FleetStore",
    "Host",
    "HostRegistry",
    "Identity",
    "LivenessSampler",
    "LivenessWindow",
    "NodeSnapshot",
    "async_load_fleet",
    "async_load_host",
    "async_poll_instance",
    "example_fleet",
    "format_balance",
    "parse_host_input",
    "parse_ether",
    "truncate",
]
