"""Langfuse provider root.

Owns provider configuration, builds one shared LangfuseClient on first use
and hands it to every reconciler it constructs.
"""

import logging
from collections.abc import Callable

import httpx
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .client import LangfuseClient
from .errors import ConfigurationError
from .models import ProviderConfig
from .reconcilers import (
    AttributeSchema,
    OrganizationReconciler,
    ProjectReconciler,
    Reconciler,
    ResourceSchema,
)
from .settings import get_settings

logger = logging.getLogger(__name__)

TYPE_NAME = "langfuse"


class LangfuseProvider:
    """Provider for Langfuse organizations and projects."""

    def __init__(
        self,
        version: str = __version__,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the provider.

        Args:
            version: Provider version reported by ``metadata``
            transport: Optional httpx transport passed to the client
        """
        self.version = version
        self._transport = transport
        self._config: ProviderConfig | None = None
        self._client: LangfuseClient | None = None

    def metadata(self) -> tuple[str, str]:
        """Return (type name, version)."""
        return TYPE_NAME, self.version

    def schema(self) -> ResourceSchema:
        return ResourceSchema(
            description="Manage Langfuse organizations and projects through the Admin API.",
            attributes={
                "admin_api_key": AttributeSchema(
                    required=True,
                    sensitive=True,
                    description="Langfuse Admin API Key (for self-hosted instances; used as a Bearer token).",
                ),
                "base_url": AttributeSchema(
                    optional=True,
                    description="Base URL of the Langfuse API (e.g. http://localhost:3000). Defaults to http://localhost:3000.",
                ),
            },
        )

    def configure(
        self,
        admin_api_key: str | None = None,
        base_url: str | None = None,
    ) -> ProviderConfig:
        """
        Accept provider configuration.

        Explicit arguments override settings (LANGFUSE_ADMIN_API_KEY,
        LANGFUSE_BASE_URL). Reconfiguring drops the previously built client.

        Returns:
            The immutable ProviderConfig now in effect

        Raises:
            ConfigurationError: If no admin API key is available or base_url is malformed
        """
        settings = get_settings()
        admin_api_key = admin_api_key or settings.admin_api_key
        base_url = base_url or settings.base_url

        if admin_api_key is None or not admin_api_key.strip():
            raise ConfigurationError(
                "Missing Admin API key: the provider requires `admin_api_key` to be configured."
            )

        try:
            self._config = ProviderConfig(admin_key=admin_api_key, base_url=base_url)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid provider configuration: {e}") from e
        self._client = None
        logger.info(f"Configured Langfuse provider for {self._config.base_url}")
        return self._config

    def configure_from(self, config: ProviderConfig) -> None:
        """Adopt an already-built configuration (e.g. from a Pulumi provider)."""
        self._config = config
        self._client = None

    @property
    def config(self) -> ProviderConfig | None:
        return self._config

    @property
    def client(self) -> LangfuseClient:
        """The shared client, built on first access.

        Raises:
            ConfigurationError: If the provider has not been configured
        """
        if self._config is None:
            raise ConfigurationError("Provider has not been configured")
        if self._client is None:
            self._client = LangfuseClient(self._config, transport=self._transport)
        return self._client

    def resources(self) -> list[Callable[[], Reconciler]]:
        """Reconciler constructors, one per resource kind."""
        return [OrganizationReconciler, ProjectReconciler]

    def resource(self, type_name: str) -> Reconciler:
        """Build the reconciler for ``type_name`` with the shared client injected.

        Raises:
            ConfigurationError: If no resource kind has that type name
        """
        for factory in self.resources():
            reconciler = factory()
            if reconciler.metadata(TYPE_NAME) == type_name:
                reconciler.configure(self.client)
                return reconciler
        raise ConfigurationError(f"Unknown resource type: {type_name}")

    def organizations(self) -> OrganizationReconciler:
        return self.resource("langfuse_organization")

    def projects(self) -> ProjectReconciler:
        return self.resource("langfuse_project")
