"""Constants for the HOPR node monitor."""

from __future__ import annotations

from typing import Final

# REST paths (HOPR node API v2)
ADDRESSES_PATH: Final = "/api/v2/account/addresses"
BALANCES_PATH: Final = "/api/v2/account/balances"
VERSION_PATH: Final = "/api/v2/node/version"
INFO_PATH: Final = "/api/v2/node/info"
CHANNELS_PATH: Final = "/api/v2/channels"
TICKETS_PATH: Final = "/api/v2/tickets/statistics"

# Healthcheck server (unauthenticated)
UPTIME_PATH: Final = "/healthcheck/v1/uptime"

# Managed cloud workspaces: one subdomain per port, ``<port>-<hostname>``
MANAGED_CLOUD_DOMAINS: Final = ("gitpod.io",)
MANAGED_CLOUD_NODES: Final = 5
MANAGED_CLOUD_TOKEN: Final = "^^LOCAL-testing-123^^"
MANAGED_HTTP_PREFIX: Final = "1330"
MANAGED_WS_PREFIX: Final = "1950"
MANAGED_HEALTH_PREFIX: Final = "1808"

# Local / custom nodes: fixed ports on the registered hostname
LOCAL_NODES: Final = 1
LOCAL_HTTP_PORT: Final = 3001
LOCAL_WS_PORT: Final = 3000
LOCAL_HEALTH_PORT: Final = 8080

# Balances arrive in base units (18 decimals); display keeps 4 decimals
BALANCE_SCALE_DIVISOR: Final = 10**14
BALANCE_DISPLAY_DIVISOR: Final = 10_000

# Liveness sampling
DEFAULT_SAMPLE_INTERVAL: Final = 1.0  # seconds
DEFAULT_WINDOW_CAPACITY: Final = 11
SYNTHETIC_SAMPLE_SCALE: Final = 10.0

# Polling
DEFAULT_REQUEST_TIMEOUT: Final = 25.0  # seconds
