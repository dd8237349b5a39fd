"""Configuration for the monitor."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .backend import AddressingProfile, LocalCustomProfile, ManagedCloudProfile
from .const import (
    DEFAULT_REQUEST_TIMEOUT,
    DEFAULT_SAMPLE_INTERVAL,
    DEFAULT_WINDOW_CAPACITY,
    MANAGED_CLOUD_DOMAINS,
    MANAGED_CLOUD_TOKEN,
)


class DashboardConfig(BaseModel):
    """Validated monitor settings.

    Unknown keys and out-of-range values raise ``pydantic.ValidationError``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)
    sample_interval: float = Field(default=DEFAULT_SAMPLE_INTERVAL, gt=0)
    window_capacity: int = Field(default=DEFAULT_WINDOW_CAPACITY, ge=1)
    managed_cloud_token: str = MANAGED_CLOUD_TOKEN
    managed_cloud_domains: tuple[str, ...] = Field(
        default=MANAGED_CLOUD_DOMAINS, min_length=1
    )

    @field_validator("managed_cloud_domains", mode="before")
    @classmethod
    def _normalise_domains(cls, value: Any) -> Any:
        """Accept a comma separated string and lower-case every domain."""

        if isinstance(value, str):
            value = value.split(",")
        if isinstance(value, (list, tuple)):
            domains = tuple(str(item).strip().lower() for item in value)
            if any(not domain for domain in domains):
                raise ValueError("managed_cloud_domains must not contain blanks")
            return domains
        return value

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None = None) -> DashboardConfig:
        """Validate ``data`` and build a config."""

        return cls.model_validate(dict(data or {}))

    def profiles(self) -> tuple[AddressingProfile, ...]:
        """Return the addressing profiles in match order."""

        return (
            ManagedCloudProfile(
                domains=self.managed_cloud_domains, token=self.managed_cloud_token
            ),
            LocalCustomProfile(),
        )
