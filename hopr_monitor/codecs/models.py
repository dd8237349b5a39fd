"""Pydantic models for HOPR node API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def _stringify_amount(value: Any) -> Any:
    """Return integer base-unit amounts as decimal strings."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, str):
        return value.strip()
    return value


class AddressesResponse(BaseModel):
    """Account addresses returned by ``/api/v2/account/addresses``."""

    model_config = ConfigDict(extra="ignore")

    hopr: str = Field(validation_alias=AliasChoices("hopr", "hoprAddress"))
    native: str = Field(validation_alias=AliasChoices("native", "nativeAddress"))


class BalancesResponse(BaseModel):
    """Account balances in base units returned by ``/api/v2/account/balances``."""

    model_config = ConfigDict(extra="ignore")

    hopr: str = Field(validation_alias=AliasChoices("hopr", "hoprBalance"))
    native: str = Field(validation_alias=AliasChoices("native", "nativeBalance"))

    @field_validator("hopr", "native", mode="before")
    @classmethod
    def _normalise_amount(cls, value: Any) -> Any:
        """Accept numeric amounts and require decimal digits."""

        value = _stringify_amount(value)
        if isinstance(value, str) and not value.isdigit():
            raise ValueError(f"balance is not a base-unit integer: {value!r}")
        return value

