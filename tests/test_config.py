from __future__ import annotations

import pydantic
import pytest

from hopr_monitor.backend import LocalCustomProfile, ManagedCloudProfile
from hopr_monitor.config import DashboardConfig
from hopr_monitor.const import MANAGED_CLOUD_TOKEN


def test_defaults() -> None:
    config = DashboardConfig.from_mapping()

    assert config.request_timeout == 25.0
    assert config.sample_interval == 1.0
    assert config.window_capacity == 11
    assert config.managed_cloud_token == MANAGED_CLOUD_TOKEN
    assert config.managed_cloud_domains == ("gitpod.io",)


def test_domains_are_normalised() -> None:
    config = DashboardConfig.from_mapping(
        {"managed_cloud_domains": " Gitpod.IO , example.dev"}
    )

    assert config.managed_cloud_domains == ("gitpod.io", "example.dev")


@pytest.mark.parametrize(
    "data",
    [
        {"request_timeout": 0},
        {"sample_interval": -1},
        {"window_capacity": 0},
        {"managed_cloud_domains": []},
        {"managed_cloud_domains": ["gitpod.io", " "]},
        {"unknown": 1},
    ],
)
def test_invalid_values_are_rejected(data: dict[str, object]) -> None:
    with pytest.raises(pydantic.ValidationError):
        DashboardConfig.from_mapping(data)


def test_config_is_frozen() -> None:
    config = DashboardConfig()

    with pytest.raises(pydantic.ValidationError):
        config.request_timeout = 3  # type: ignore[misc]


def test_profiles_follow_config() -> None:
    config = DashboardConfig(managed_cloud_domains=("example.dev",), managed_cloud_token="t")

    managed, local = config.profiles()

    assert isinstance(managed, ManagedCloudProfile)
    assert managed.matches("example.dev")
    assert not managed.matches("gitpod.io")
    assert managed.access_token("user") == "t"
    assert isinstance(local, LocalCustomProfile)
