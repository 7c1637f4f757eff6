"""Langfuse resource reconcilers."""

from .base import AttributeSchema, Reconciler, ResourceSchema
from .organization import OrganizationReconciler
from .project import ProjectReconciler, format_import_id, parse_import_id

__all__ = [
    "AttributeSchema",
    "OrganizationReconciler",
    "ProjectReconciler",
    "Reconciler",
    "ResourceSchema",
    "format_import_id",
    "parse_import_id",
]
