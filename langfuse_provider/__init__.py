"""
Langfuse Provider - Langfuse organizations and projects as code.

Declare organizations and projects in Python and reconcile them against the
Langfuse Admin API, either directly through the reconcilers or as Pulumi
dynamic resources.
"""

__version__ = "0.1.0"

from .client import LangfuseClient  # noqa: E402
from .provider import LangfuseProvider  # noqa: E402
from .settings import ProviderSettings, get_settings, reload_settings  # noqa: E402

__all__ = [
    "LangfuseClient",
    "LangfuseProvider",
    "ProviderSettings",
    "get_settings",
    "reload_settings",
]
