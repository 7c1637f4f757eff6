"""Pulumi dynamic providers for Langfuse resources."""

from .organization import LangfuseOrganization, OrganizationProvider
from .project import LangfuseProject, ProjectProvider

__all__ = [
    "LangfuseOrganization",
    "LangfuseProject",
    "OrganizationProvider",
    "ProjectProvider",
]
