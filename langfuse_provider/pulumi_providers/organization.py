"""Pulumi dynamic provider for Langfuse organizations."""

from typing import Any, Optional

import httpx
import pulumi
from pulumi import Input, Output
from pulumi.dynamic import (
    CheckFailure,
    CheckResult,
    CreateResult,
    DiffResult,
    ReadResult,
    ResourceProvider,
    UpdateResult,
)

from ..models import Organization, ProviderConfig
from ..reconcilers import OrganizationReconciler
from .common import build_reconciler, outputs, resolve_config


class OrganizationProvider(ResourceProvider):
    """Dynamic provider that delegates each lifecycle call to OrganizationReconciler.

    The Pulumi resource ID is the organization id.
    """

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__()
        self.config = config
        self._transport = transport

    def _reconciler(self) -> OrganizationReconciler:
        return build_reconciler(self.config, "langfuse_organization", self._transport)

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        failures = []
        if not str(news.get("name") or "").strip():
            failures.append(CheckFailure("name", "name is required"))
        return CheckResult(news, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        """
        Create an organization.

        Args:
            props: Resource inputs

        Returns:
            CreateResult with the organization id and remote-verified outputs
        """
        state = self._reconciler().create(Organization(name=props.get("name")))
        return CreateResult(id_=state.id, outs=outputs(state))

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        """Refresh an organization, or import it when no prior state exists."""
        reconciler = self._reconciler()
        if props and props.get("name") is not None:
            state = Organization.model_validate({**props, "id": id_})
        else:
            state = reconciler.import_state(id_)
        state = reconciler.read(state)
        return ReadResult(id_=state.id, outs=outputs(state))

    def update(
        self, id_: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> UpdateResult:
        prior = Organization.model_validate({**olds, "id": id_})
        plan = prior.model_copy(update={"name": news.get("name")})
        state = self._reconciler().update(plan)
        return UpdateResult(outs=outputs(state))

    def delete(self, id_: str, props: dict[str, Any]) -> None:
        self._reconciler().delete(Organization.model_validate({**props, "id": id_}))

    def diff(
        self, id_: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> DiffResult:
        """Renames are in-place updates."""
        changes = olds.get("name") != news.get("name")
        return DiffResult(
            changes=changes,
            replaces=[],
            stables=[],
            delete_before_replace=False,
        )


class LangfuseOrganization(pulumi.dynamic.Resource):
    """
    A Langfuse organization managed through the Admin API.

    Args:
        resource_name: Pulumi resource name
        name: Organization name
        config: Provider configuration (defaults to settings)
        opts: Standard Pulumi resource options
    """

    name: Output[str]

    def __init__(
        self,
        resource_name: str,
        name: Input[str],
        config: ProviderConfig | None = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        super().__init__(
            OrganizationProvider(resolve_config(config)),
            resource_name,
            {"name": name},
            opts,
        )
