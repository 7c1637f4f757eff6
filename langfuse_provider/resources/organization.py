"""Organization declaration."""

import pulumi

from ..models import ProviderConfig
from ..pulumi_providers import LangfuseOrganization
from .base import Resource


class OrganizationResource(Resource):
    """Desired state of a Langfuse organization.

    Example:
        >>> OrganizationResource(name="Acme Corp")
    """

    def to_pulumi(self, config: ProviderConfig | None = None) -> pulumi.Resource:
        """Convert to a LangfuseOrganization and export its id.

        Calling it again returns the resource created by the first call.
        """
        if self._pulumi_resource is not None:
            return self._pulumi_resource

        org = LangfuseOrganization(self.logical_name, name=self.name, config=config)
        pulumi.export(f"{self.logical_name}_id", org.id)

        self._pulumi_resource = org
        return org
