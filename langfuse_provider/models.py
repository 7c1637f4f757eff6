"""Records exchanged between the Langfuse Admin API, the reconcilers and the host.

Field names are snake_case in Python and in stored state; the Admin API uses
camelCase, handled through aliases. Server-assigned values that the API only
returns once are annotated as write-once and are never overwritten by a later
read.
"""

from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from .settings import DEFAULT_BASE_URL

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Organization(BaseModel):
    """A Langfuse organization.

    Attributes:
        id: Server-assigned identifier, immutable once created
        name: User-supplied display name
    """

    model_config = _RECORD_CONFIG

    id: str | None = None
    name: str | None = None


class Project(BaseModel):
    """A Langfuse project inside an organization.

    Attributes:
        id: Server-assigned identifier
        name: User-supplied display name
        organization_id: Parent organization, fixed at creation
        public_key: Server-assigned API public key
        secret_key: Server-assigned API secret key, only returned by create
    """

    model_config = _RECORD_CONFIG

    id: str | None = None
    name: str | None = None
    organization_id: str | None = Field(default=None, alias="organizationId")
    public_key: str | None = Field(
        default=None, alias="publicKey", json_schema_extra={"sensitive": True}
    )
    secret_key: str | None = Field(
        default=None,
        alias="secretKey",
        json_schema_extra={"sensitive": True, "write_once": True},
    )


class ProviderConfig(BaseModel):
    """Provider-wide configuration, immutable after construction."""

    model_config = ConfigDict(frozen=True)

    admin_key: SecretStr
    base_url: str = DEFAULT_BASE_URL

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, value: str) -> str:
        """Require an absolute http(s) URL; a trailing slash is dropped."""
        try:
            url = httpx.URL(value)
        except httpx.InvalidURL as e:
            raise ValueError(f"invalid base_url {value!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"base_url must be an http(s) URL with a host, got {value!r}")
        return value.rstrip("/")


def _fields_flagged(model_cls: type[BaseModel], flag: str) -> frozenset[str]:
    flagged = set()
    for name, info in model_cls.model_fields.items():
        extra = info.json_schema_extra
        if isinstance(extra, dict) and extra.get(flag):
            flagged.add(name)
    return frozenset(flagged)


def write_once_fields(model_cls: type[BaseModel]) -> frozenset[str]:
    """Names of fields captured at create time and preserved across reads."""
    return _fields_flagged(model_cls, "write_once")


def sensitive_fields(model_cls: type[BaseModel]) -> frozenset[str]:
    """Names of fields that must be treated as secrets by the host."""
    return _fields_flagged(model_cls, "sensitive")


def overlay(state: BaseModel, remote: BaseModel, fields: tuple[str, ...]) -> Any:
    """Return a copy of ``state`` with ``fields`` taken from ``remote``.

    Values the remote record does not carry (None) never replace stored ones,
    and write-once fields keep whatever value the state already holds.
    """
    protected = write_once_fields(type(state))
    update = {}
    for name in fields:
        value = getattr(remote, name)
        if value is None:
            continue
        if name in protected and getattr(state, name) is not None:
            continue
        update[name] = value
    return state.model_copy(update=update)
