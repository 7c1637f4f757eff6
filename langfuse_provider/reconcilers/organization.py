"""Reconciler for the langfuse_organization resource."""

import logging

from ..client import LangfuseClient
from ..errors import ValidationError
from ..models import Organization, overlay
from .base import (
    AttributeSchema,
    ResourceSchema,
    accept_client,
    require_client,
    require_fields,
)

logger = logging.getLogger(__name__)

TYPE_NAME = "langfuse_organization"


class OrganizationReconciler:
    """Create, read, rename, delete and import Langfuse organizations."""

    def __init__(self, client: LangfuseClient | None = None):
        self.client = client

    def metadata(self, provider_type_name: str) -> str:
        return f"{provider_type_name}_organization"

    def schema(self) -> ResourceSchema:
        return ResourceSchema(
            description="Resource for managing Langfuse organizations.",
            attributes={
                "id": AttributeSchema(
                    computed=True, description="ID of the organization."
                ),
                "name": AttributeSchema(
                    required=True, description="Name of the organization."
                ),
            },
        )

    def configure(self, provider_data: object | None) -> None:
        client = accept_client(provider_data)
        if client is not None:
            self.client = client

    def create(self, plan: Organization) -> Organization:
        """Create the organization; state comes from the API response."""
        require_fields(plan, "create organization", "name")
        client = require_client(self.client, TYPE_NAME)

        org = client.create_organization(plan.name)
        logger.info(f"Created organization {org.id}")
        return Organization(id=org.id, name=org.name)

    def read(self, state: Organization) -> Organization:
        """Refresh ``name`` from the API.

        Raises:
            NotFoundError: If the organization was removed outside of the provider
        """
        require_fields(state, "read organization", "id")
        client = require_client(self.client, TYPE_NAME)

        org = client.get_organization(state.id)
        return overlay(state, org, ("name",))

    def update(self, plan: Organization) -> Organization:
        """Rename the organization and adopt the plan as the new state."""
        require_fields(plan, "update organization", "id", "name")
        client = require_client(self.client, TYPE_NAME)

        client.update_organization(plan.id, plan.name)
        logger.info(f"Updated organization {plan.id}")
        return plan

    def delete(self, state: Organization) -> None:
        require_fields(state, "delete organization", "id")
        client = require_client(self.client, TYPE_NAME)

        client.delete_organization(state.id)
        logger.info(f"Deleted organization {state.id}")

    def import_state(self, import_id: str) -> Organization:
        """Seed state from an organization id; ``read`` fills in the rest."""
        if not import_id or not import_id.strip() or "/" in import_id:
            raise ValidationError(
                f"Invalid import identifier: expected an organization id, got {import_id!r}"
            )
        return Organization(id=import_id)
