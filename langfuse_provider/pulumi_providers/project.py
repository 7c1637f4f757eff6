"""Pulumi dynamic provider for Langfuse projects.

The Pulumi resource ID is the composite ``<organization_id>/<project_id>``,
which is also the identifier accepted on import.
"""

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

from ..models import Project, ProviderConfig, sensitive_fields
from ..reconcilers import ProjectReconciler, format_import_id, parse_import_id
from .common import build_reconciler, outputs, resolve_config


def _resource_id(state: Project) -> str:
    return format_import_id(state.organization_id, state.id)


def _state(id_: str, props: dict[str, Any]) -> Project:
    organization_id, project_id = parse_import_id(id_)
    return Project.model_validate(
        {**props, "id": project_id, "organization_id": organization_id}
    )


class ProjectProvider(ResourceProvider):
    """Dynamic provider that delegates each lifecycle call to ProjectReconciler."""

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        super().__init__()
        self.config = config
        self._transport = transport

    def _reconciler(self) -> ProjectReconciler:
        return build_reconciler(self.config, "langfuse_project", self._transport)

    def check(self, _olds: dict[str, Any], news: dict[str, Any]) -> CheckResult:
        failures = []
        for field in ("name", "organization_id"):
            if not str(news.get(field) or "").strip():
                failures.append(CheckFailure(field, f"{field} is required"))
        return CheckResult(news, failures)

    def create(self, props: dict[str, Any]) -> CreateResult:
        """
        Create a project.

        Args:
            props: Resource inputs (name, organization_id)

        Returns:
            CreateResult with the composite ID and outputs including both API keys
        """
        plan = Project(
            name=props.get("name"), organization_id=props.get("organization_id")
        )
        state = self._reconciler().create(plan)
        return CreateResult(id_=_resource_id(state), outs=outputs(state))

    def read(self, id_: str, props: dict[str, Any]) -> ReadResult:
        """Refresh a project, or import it from ``<organization_id>/<project_id>``.

        A stored ``secret_key`` survives the refresh unchanged.
        """
        reconciler = self._reconciler()
        if props and props.get("name") is not None:
            state = _state(id_, props)
        else:
            state = reconciler.import_state(id_)
        state = reconciler.read(state)
        return ReadResult(id_=_resource_id(state), outs=outputs(state))

    def update(
        self, id_: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> UpdateResult:
        """Rename a project; the keys in prior outputs carry over."""
        prior = _state(id_, olds)
        plan = prior.model_copy(update={"name": news.get("name")})
        state = self._reconciler().update(plan)
        return UpdateResult(outs=outputs(state))

    def delete(self, id_: str, props: dict[str, Any]) -> None:
        self._reconciler().delete(_state(id_, props))

    def diff(
        self, id_: str, olds: dict[str, Any], news: dict[str, Any]
    ) -> DiffResult:
        """A new organization_id means a new project; renames are in-place."""
        changes = []
        replaces = []

        if olds.get("organization_id") != news.get("organization_id"):
            changes.append("organization_id")
            replaces.append("organization_id")

        if olds.get("name") != news.get("name"):
            changes.append("name")

        return DiffResult(
            changes=len(changes) > 0,
            replaces=replaces,
            stables=[],
            delete_before_replace=False,
        )


class LangfuseProject(pulumi.dynamic.Resource):
    """
    A Langfuse project managed through the Admin API.

    ``public_key`` and ``secret_key`` are stored as Pulumi secrets.

    Args:
        resource_name: Pulumi resource name
        name: Project name
        organization_id: ID of the parent organization
        config: Provider configuration (defaults to settings)
        opts: Standard Pulumi resource options
    """

    name: Output[str]
    organization_id: Output[str]
    public_key: Output[str]
    secret_key: Output[str]

    def __init__(
        self,
        resource_name: str,
        name: Input[str],
        organization_id: Input[str],
        config: ProviderConfig | None = None,
        opts: Optional[pulumi.ResourceOptions] = None,
    ):
        secret_opts = pulumi.ResourceOptions(
            additional_secret_outputs=sorted(sensitive_fields(Project))
        )
        super().__init__(
            ProjectProvider(resolve_config(config)),
            resource_name,
            {
                "name": name,
                "organization_id": organization_id,
                "public_key": None,
                "secret_key": None,
            },
            pulumi.ResourceOptions.merge(opts, secret_opts),
        )
