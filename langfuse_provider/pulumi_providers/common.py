"""Helpers shared by the Langfuse dynamic providers."""

from typing import Any

import httpx
from pydantic import BaseModel

from ..models import ProviderConfig
from ..provider import LangfuseProvider
from ..reconcilers import Reconciler


def resolve_config(config: ProviderConfig | None) -> ProviderConfig:
    """Return ``config``, or build one from settings when it is None."""
    if config is not None:
        return config
    return LangfuseProvider().configure()


def build_reconciler(
    config: ProviderConfig,
    type_name: str,
    transport: httpx.BaseTransport | None = None,
) -> Reconciler:
    provider = LangfuseProvider(transport=transport)
    provider.configure_from(config)
    return provider.resource(type_name)


def outputs(state: BaseModel) -> dict[str, Any]:
    """State as Pulumi outputs; the id travels as the Pulumi resource ID."""
    return state.model_dump(exclude={"id"})
