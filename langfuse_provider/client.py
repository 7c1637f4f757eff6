"""Langfuse Admin API client.

Thin synchronous wrapper over the organization and project endpoints under
``{base_url}/api/admin``. Every call authenticates with the Admin API key as a
Bearer token, opens its own HTTP connection and releases it before returning.
"""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import DecodeError, NotFoundError, RemoteError
from .models import Organization, Project, ProviderConfig

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def _segment(value: str) -> str:
    """Percent-encode one path segment, including any "/"."""
    return quote(value, safe="")


class LangfuseClient:
    """Langfuse API client using the Admin API key."""

    def __init__(
        self,
        config: ProviderConfig,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Provider configuration (base URL and admin key)
            transport: Optional httpx transport, used to fake the API in tests
        """
        self.config = config
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.admin_key.get_secret_value()}",
        }

    def _request(
        self,
        method: str,
        path: str,
        action: str,
        body: dict[str, Any] | None = None,
        not_found: tuple[str, str] | None = None,
    ) -> httpx.Response:
        """Send one request and map failures to provider errors.

        Args:
            method: HTTP verb
            path: Path below the base URL
            action: Human-readable operation, e.g. "create organization"
            body: JSON body for create/update calls
            not_found: (entity, id) reported as NotFoundError on a 404

        Returns:
            The successful response, body already read

        Raises:
            NotFoundError: 404 on a request that declares ``not_found``
            RemoteError: Any other status >= 300, or a transport failure
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {path}")

        try:
            with httpx.Client(transport=self._transport) as http:
                response = http.request(
                    method,
                    url,
                    json=body,
                    headers=self._headers(),
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"{action} failed: {e}")
            raise RemoteError(f"{action} failed: {e}", detail=str(e)) from e

        if not_found is not None and response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(*not_found)

        if response.status_code >= 300:
            detail = response.text
            logger.warning(f"{action} failed with HTTP {response.status_code}")
            raise RemoteError(
                f"{action} failed: {detail}",
                status_code=response.status_code,
                detail=detail,
            )

        return response

    @staticmethod
    def _decode(response: httpx.Response, model: type[RecordT], action: str) -> RecordT:
        try:
            record = model.model_validate(response.json())
        except (ValueError, PydanticValidationError) as e:
            raise DecodeError(f"{action}: unexpected response body: {e}") from e
        if getattr(record, "id", None) is None:
            raise DecodeError(f"{action}: response body has no id")
        return record

    # Organizations

    def create_organization(self, name: str) -> Organization:
        """Create an organization (POST /api/admin/organizations)."""
        action = "create organization"
        response = self._request(
            "POST", "/api/admin/organizations", action, body={"name": name}
        )
        return self._decode(response, Organization, action)

    def get_organization(self, org_id: str) -> Organization:
        """Fetch an organization (GET /api/admin/organizations/{orgId}).

        Raises:
            NotFoundError: If the organization does not exist
        """
        action = "get organization"
        response = self._request(
            "GET",
            f"/api/admin/organizations/{_segment(org_id)}",
            action,
            not_found=("organization", org_id),
        )
        return self._decode(response, Organization, action)

    def update_organization(self, org_id: str, name: str) -> Organization:
        """Rename an organization (PUT /api/admin/organizations/{orgId})."""
        action = "update organization"
        response = self._request(
            "PUT",
            f"/api/admin/organizations/{_segment(org_id)}",
            action,
            body={"name": name},
        )
        return self._decode(response, Organization, action)

    def delete_organization(self, org_id: str) -> None:
        """Delete an organization (DELETE /api/admin/organizations/{orgId})."""
        self._request(
            "DELETE", f"/api/admin/organizations/{_segment(org_id)}", "delete organization"
        )

    # Projects

    def create_project(self, org_id: str, name: str) -> Project:
        """Create a project (POST /api/admin/organizations/{orgId}/projects).

        The response is the only one that carries the project's secret key.
        """
        action = "create project"
        response = self._request(
            "POST",
            f"/api/admin/organizations/{_segment(org_id)}/projects",
            action,
            body={"name": name},
        )
        return self._decode(response, Project, action)

    def get_project(self, org_id: str, project_id: str) -> Project:
        """Fetch a project (GET /api/admin/organizations/{orgId}/projects/{projId}).

        Raises:
            NotFoundError: If the project does not exist
        """
        action = "get project"
        response = self._request(
            "GET",
            f"/api/admin/organizations/{_segment(org_id)}/projects/{_segment(project_id)}",
            action,
            not_found=("project", project_id),
        )
        return self._decode(response, Project, action)

    def update_project(self, org_id: str, project_id: str, name: str) -> Project:
        """Rename a project (PUT /api/admin/organizations/{orgId}/projects/{projId})."""
        action = "update project"
        response = self._request(
            "PUT",
            f"/api/admin/organizations/{_segment(org_id)}/projects/{_segment(project_id)}",
            action,
            body={"name": name},
        )
        return self._decode(response, Project, action)

    def delete_project(self, org_id: str, project_id: str) -> None:
        """Delete a project (DELETE /api/admin/organizations/{orgId}/projects/{projId})."""
        self._request(
            "DELETE",
            f"/api/admin/organizations/{_segment(org_id)}/projects/{_segment(project_id)}",
            "delete project",
        )
