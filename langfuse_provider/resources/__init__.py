"""
Langfuse Resources - Pydantic declarations of desired Langfuse state.
"""

from .base import Resource
from .organization import OrganizationResource
from .project import ProjectResource

__all__ = [
    "OrganizationResource",
    "ProjectResource",
    "Resource",
]
