"""Base resource class for declarative Langfuse resources."""

import logging
import re

import pulumi
from pydantic import BaseModel, PrivateAttr

from ..models import ProviderConfig

logger = logging.getLogger(__name__)


class Resource(BaseModel):
    """Base resource class - all declarations inherit from this.

    A declaration describes the desired state of one Langfuse entity in a
    project's ``main.py``. ``to_pulumi()`` turns it into the matching Pulumi
    dynamic resource when the stack program runs.

    Attributes:
        name: Display name of the entity in Langfuse
        resource_name: Pulumi logical name (derived from ``name`` when omitted)
        description: Optional human-readable description
    """

    name: str
    resource_name: str | None = None
    description: str | None = None

    _pulumi_resource: pulumi.Resource | None = PrivateAttr(default=None)

    @property
    def logical_name(self) -> str:
        """Pulumi logical name, e.g. ``"Acme Corp"`` -> ``"acme-corp"``."""
        if self.resource_name:
            return self.resource_name
        return re.sub(r"[^a-z0-9]+", "-", self.name.lower()).strip("-")

    @property
    def pulumi_resource(self) -> pulumi.Resource | None:
        return self._pulumi_resource

    def to_pulumi(self, config: ProviderConfig | None = None) -> pulumi.Resource:
        """Create the Pulumi resource for this declaration.

        Subclasses must override this method.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not implement to_pulumi()"
        )
