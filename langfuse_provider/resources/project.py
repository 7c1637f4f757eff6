"""Project declaration."""

import pulumi
from pydantic import model_validator

from ..models import ProviderConfig
from ..pulumi_providers import LangfuseProject
from .base import Resource
from .organization import OrganizationResource


class ProjectResource(Resource):
    """Desired state of a Langfuse project.

    The parent organization is given either as an existing id or as an
    OrganizationResource declared in the same program.

    Example:
        >>> acme = OrganizationResource(name="Acme Corp")
        >>> ProjectResource(name="chatbot", organization=acme)
        >>> ProjectResource(name="batch", organization_id="org123")

    Attributes:
        organization: Parent organization declaration
        organization_id: Parent organization id (when not declared here)
    """

    organization: OrganizationResource | None = None
    organization_id: str | None = None

    @model_validator(mode="after")
    def _exactly_one_parent(self) -> "ProjectResource":
        if (self.organization is None) == (self.organization_id is None):
            raise ValueError(
                "ProjectResource needs exactly one of organization or organization_id"
            )
        return self

    def to_pulumi(self, config: ProviderConfig | None = None) -> pulumi.Resource:
        """Convert to a LangfuseProject and export its id and API keys."""
        if self._pulumi_resource is not None:
            return self._pulumi_resource

        if self.organization is not None:
            organization_id = self.organization.to_pulumi(config).id
        else:
            organization_id = self.organization_id

        project = LangfuseProject(
            self.logical_name,
            name=self.name,
            organization_id=organization_id,
            config=config,
        )
        pulumi.export(f"{self.logical_name}_id", project.id)
        pulumi.export(f"{self.logical_name}_public_key", project.public_key)
        pulumi.export(f"{self.logical_name}_secret_key", project.secret_key)

        self._pulumi_resource = project
        return project
