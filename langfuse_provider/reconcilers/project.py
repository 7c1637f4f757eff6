"""Reconciler for the langfuse_project resource.

Projects live inside an organization, so every API call is addressed by both
ids. The project's secret key is only ever returned by the create call; the
reconciler captures it once and carries it forward in state from then on.
"""

import logging

from ..client import LangfuseClient
from ..errors import ValidationError
from ..models import Project, overlay
from .base import (
    AttributeSchema,
    ResourceSchema,
    accept_client,
    require_client,
    require_fields,
)

logger = logging.getLogger(__name__)

TYPE_NAME = "langfuse_project"

IMPORT_ID_SEPARATOR = "/"


def parse_import_id(import_id: str) -> tuple[str, str]:
    """Split ``"<organization_id>/<project_id>"`` into its two parts.

    Raises:
        ValidationError: If the identifier does not contain exactly one separator
            or either part is empty
    """
    parts = import_id.split(IMPORT_ID_SEPARATOR)
    if len(parts) != 2 or not all(parts):
        raise ValidationError(
            "Invalid import identifier: expected import ID in the form "
            '"<organization_id>/<project_id>" (e.g. "org123/proj456"), '
            f"got {import_id!r}"
        )
    return parts[0], parts[1]


def format_import_id(organization_id: str, project_id: str) -> str:
    return f"{organization_id}{IMPORT_ID_SEPARATOR}{project_id}"


class ProjectReconciler:
    """Create, read, rename, delete and import Langfuse projects."""

    def __init__(self, client: LangfuseClient | None = None):
        self.client = client

    def metadata(self, provider_type_name: str) -> str:
        return f"{provider_type_name}_project"

    def schema(self) -> ResourceSchema:
        return ResourceSchema(
            description="Resource for managing Langfuse projects (within an organization).",
            attributes={
                "id": AttributeSchema(computed=True, description="ID of the project."),
                "name": AttributeSchema(
                    required=True, description="Name of the project."
                ),
                "organization_id": AttributeSchema(
                    required=True,
                    requires_replace=True,
                    description="ID of the parent organization.",
                ),
                "public_key": AttributeSchema(
                    computed=True,
                    sensitive=True,
                    description="Public API key for this project (returned on create).",
                ),
                "secret_key": AttributeSchema(
                    computed=True,
                    sensitive=True,
                    description="Secret API key for this project (returned on create).",
                ),
            },
        )

    def configure(self, provider_data: object | None) -> None:
        client = accept_client(provider_data)
        if client is not None:
            self.client = client

    def create(self, plan: Project) -> Project:
        """Create the project and capture its API keys."""
        require_fields(plan, "create project", "organization_id", "name")
        client = require_client(self.client, TYPE_NAME)

        proj = client.create_project(plan.organization_id, plan.name)
        logger.info(f"Created project {proj.id} in organization {plan.organization_id}")
        return Project(
            id=proj.id,
            name=proj.name,
            organization_id=proj.organization_id or plan.organization_id,
            public_key=proj.public_key,
            secret_key=proj.secret_key,
        )

    def read(self, state: Project) -> Project:
        """Refresh ``name`` and ``public_key``; ``secret_key`` is left as stored.

        Raises:
            NotFoundError: If the project was removed outside of the provider
        """
        require_fields(state, "read project", "organization_id", "id")
        client = require_client(self.client, TYPE_NAME)

        proj = client.get_project(state.organization_id, state.id)
        return overlay(state, proj, ("name", "public_key"))

    def update(self, plan: Project) -> Project:
        """Rename the project and adopt the plan as the new state.

        Only the name is sent. The plan is expected to carry the keys from
        prior state; they are not re-fetched.
        """
        require_fields(plan, "update project", "organization_id", "id", "name")
        client = require_client(self.client, TYPE_NAME)

        client.update_project(plan.organization_id, plan.id, plan.name)
        logger.info(f"Updated project {plan.id}")
        return plan

    def delete(self, state: Project) -> None:
        require_fields(state, "delete project", "organization_id", "id")
        client = require_client(self.client, TYPE_NAME)

        client.delete_project(state.organization_id, state.id)
        logger.info(f"Deleted project {state.id}")

    def import_state(self, import_id: str) -> Project:
        """Seed ``organization_id`` and ``id``; ``read`` fills in the rest."""
        organization_id, project_id = parse_import_id(import_id)
        return Project(id=project_id, organization_id=organization_id)
