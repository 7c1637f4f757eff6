"""Capability interface shared by the Langfuse resource reconcilers."""

from typing import Protocol, TypeVar

from pydantic import BaseModel

from ..client import LangfuseClient
from ..errors import ConfigurationError, ValidationError

StateT = TypeVar("StateT", bound=BaseModel)


class AttributeSchema(BaseModel):
    """Schema entry for one resource attribute."""

    description: str
    required: bool = False
    optional: bool = False
    computed: bool = False
    sensitive: bool = False
    requires_replace: bool = False


class ResourceSchema(BaseModel):
    """Schema of a resource kind, keyed by attribute name."""

    description: str
    attributes: dict[str, AttributeSchema]


class Reconciler(Protocol[StateT]):
    """Protocol for resource reconcilers.

    Each reconciler maps one resource kind's desired state onto Admin API
    calls. Every phase either returns the new state record or raises; a
    failed phase never returns a partial record.
    """

    def metadata(self, provider_type_name: str) -> str:
        """Resource type name, e.g. ``langfuse_organization``."""
        ...

    def schema(self) -> ResourceSchema:
        ...

    def configure(self, provider_data: object | None) -> None:
        """Accept the shared client supplied by the provider."""
        ...

    def create(self, plan: StateT) -> StateT:
        ...

    def read(self, state: StateT) -> StateT:
        ...

    def update(self, plan: StateT) -> StateT:
        ...

    def delete(self, state: StateT) -> None:
        ...

    def import_state(self, import_id: str) -> StateT:
        """Seed a state record from an external identifier."""
        ...


def accept_client(provider_data: object | None) -> LangfuseClient | None:
    """Validate the value a provider hands to ``Reconciler.configure``.

    Returns None when the host has not configured the provider yet.

    Raises:
        ConfigurationError: If the value is not a LangfuseClient
    """
    if provider_data is None:
        return None
    if not isinstance(provider_data, LangfuseClient):
        raise ConfigurationError(
            "Unexpected Resource Configure Type: expected LangfuseClient, "
            f"got {type(provider_data).__name__}"
        )
    return provider_data


def require_client(client: LangfuseClient | None, type_name: str) -> LangfuseClient:
    if client is None:
        raise ConfigurationError(
            f"{type_name} used before the provider was configured"
        )
    return client


def require_fields(record: BaseModel, action: str, *names: str) -> None:
    """Raise ValidationError if any of ``names`` is unset or blank on ``record``."""
    missing = [
        name
        for name in names
        if getattr(record, name) is None or not str(getattr(record, name)).strip()
    ]
    if missing:
        raise ValidationError(f"{action}: missing {', '.join(missing)}")
