"""Tests for the Langfuse Admin API client."""

import json

import httpx
import pytest
from pydantic import SecretStr

from langfuse_provider.client import LangfuseClient
from langfuse_provider.errors import DecodeError, NotFoundError, RemoteError
from langfuse_provider.models import ProviderConfig

from .conftest import ADMIN_KEY, BASE_URL


def client_returning(response: httpx.Response, seen: list | None = None) -> LangfuseClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return response

    config = ProviderConfig(admin_key=ADMIN_KEY, base_url=BASE_URL)
    return LangfuseClient(config, transport=httpx.MockTransport(handler))


class TestRequests:
    """Request construction: URL, verb, headers and body."""

    def test_create_organization_request(self, client, fake_api):
        client.create_organization("Acme")

        request = fake_api.requests[-1]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/api/admin/organizations"
        assert request.headers["Authorization"] == f"Bearer {ADMIN_KEY}"
        assert request.headers["Content-Type"] == "application/json"
        assert fake_api.last_body() == {"name": "Acme"}

    def test_get_sends_no_body(self, client, fake_api):
        org = client.create_organization("Acme")
        client.get_organization(org.id)

        request = fake_api.requests[-1]
        assert request.method == "GET"
        assert request.url.path == f"/api/admin/organizations/{org.id}"
        assert request.content == b""

    def test_project_paths(self, client, fake_api):
        org = client.create_organization("Acme")
        proj = client.create_project(org.id, "chatbot")
        client.update_project(org.id, proj.id, "assistant")
        client.delete_project(org.id, proj.id)

        paths = [(r.method, r.url.path) for r in fake_api.requests[1:]]
        assert paths == [
            ("POST", f"/api/admin/organizations/{org.id}/projects"),
            ("PUT", f"/api/admin/organizations/{org.id}/projects/{proj.id}"),
            ("DELETE", f"/api/admin/organizations/{org.id}/projects/{proj.id}"),
        ]

    def test_update_project_sends_only_name(self, client, fake_api):
        org = client.create_organization("Acme")
        proj = client.create_project(org.id, "chatbot")

        client.update_project(org.id, proj.id, "assistant")

        assert fake_api.last_body() == {"name": "assistant"}

    def test_ids_are_encoded_as_single_path_segments(self, client, fake_api):
        with pytest.raises(NotFoundError):
            client.get_organization("org-1/projects/proj-2")
        with pytest.raises(NotFoundError):
            client.get_project("org 1", "proj/2")

        raw_paths = [r.url.raw_path for r in fake_api.requests]
        assert raw_paths == [
            b"/api/admin/organizations/org-1%2Fprojects%2Fproj-2",
            b"/api/admin/organizations/org%201/projects/proj%2F2",
        ]

    def test_trailing_slash_in_base_url(self, fake_api):
        config = ProviderConfig(admin_key=ADMIN_KEY, base_url=f"{BASE_URL}/")
        client = LangfuseClient(config, transport=fake_api.transport)

        client.create_organization("Acme")

        assert fake_api.requests[-1].url.path == "/api/admin/organizations"


class TestOrganizations:
    def test_create_then_get_returns_created_name(self, client):
        org = client.create_organization("Acme")

        fetched = client.get_organization(org.id)

        assert fetched.id == org.id
        assert fetched.name == "Acme"

    def test_update_then_get_reflects_new_name(self, client):
        org = client.create_organization("Acme")

        client.update_organization(org.id, "Acme Corp")

        assert client.get_organization(org.id).name == "Acme Corp"

    def test_get_deleted_organization_is_not_found(self, client):
        org = client.create_organization("Acme")
        client.delete_organization(org.id)

        with pytest.raises(NotFoundError) as exc_info:
            client.get_organization(org.id)

        assert not isinstance(exc_info.value, RemoteError)
        assert str(exc_info.value) == f"organization {org.id} not found"

    def test_get_unknown_organization_is_not_found(self, client):
        with pytest.raises(NotFoundError):
            client.get_organization("org-missing")


class TestProjects:
    def test_create_returns_both_keys(self, client):
        org = client.create_organization("Acme")

        proj = client.create_project(org.id, "chatbot")

        assert proj.organization_id == org.id
        assert proj.public_key
        assert proj.secret_key

    def test_get_omits_secret_key(self, client):
        org = client.create_organization("Acme")
        proj = client.create_project(org.id, "chatbot")

        fetched = client.get_project(org.id, proj.id)

        assert fetched.public_key == proj.public_key
        assert fetched.secret_key is None

    def test_get_unknown_project_is_not_found(self, client):
        org = client.create_organization("Acme")

        with pytest.raises(NotFoundError, match="project proj-x not found"):
            client.get_project(org.id, "proj-x")


class TestErrors:
    def test_error_status_carries_body_verbatim(self):
        client = client_returning(httpx.Response(500, text='{"message": "boom"}'))

        with pytest.raises(RemoteError) as exc_info:
            client.create_organization("Acme")

        error = exc_info.value
        assert error.status_code == 500
        assert error.detail == '{"message": "boom"}'
        assert str(error) == 'create organization failed: {"message": "boom"}'

    def test_redirect_status_is_failure(self):
        client = client_returning(httpx.Response(302, text="moved"))

        with pytest.raises(RemoteError):
            client.delete_organization("org-1")

    def test_404_on_write_is_remote_error(self):
        client = client_returning(httpx.Response(404, text="gone"))

        with pytest.raises(RemoteError) as exc_info:
            client.update_project("org-1", "proj-1", "x")

        assert exc_info.value.status_code == 404

    def test_wrong_admin_key_is_remote_error(self, fake_api):
        config = ProviderConfig(admin_key="wrong", base_url=BASE_URL)
        client = LangfuseClient(config, transport=fake_api.transport)

        with pytest.raises(RemoteError) as exc_info:
            client.create_organization("Acme")

        assert exc_info.value.status_code == 401

    def test_invalid_json_is_decode_error(self):
        client = client_returning(httpx.Response(200, text="<html>"))

        with pytest.raises(DecodeError):
            client.get_organization("org-1")

    def test_wrong_shape_is_decode_error(self):
        client = client_returning(httpx.Response(200, json=["org-1"]))

        with pytest.raises(DecodeError):
            client.get_organization("org-1")

    def test_missing_id_is_decode_error(self):
        client = client_returning(httpx.Response(201, json={"name": "Acme"}))

        with pytest.raises(DecodeError, match="no id"):
            client.create_organization("Acme")

    def test_transport_failure_is_remote_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        config = ProviderConfig(admin_key=ADMIN_KEY, base_url=BASE_URL)
        client = LangfuseClient(config, transport=httpx.MockTransport(handler))

        with pytest.raises(RemoteError) as exc_info:
            client.get_project("org-1", "proj-1")

        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.detail

    def test_unparseable_base_url_is_remote_error(self):
        config = ProviderConfig.model_construct(
            admin_key=SecretStr(ADMIN_KEY), base_url="http://[::1"
        )
        client = LangfuseClient(config)

        with pytest.raises(RemoteError) as exc_info:
            client.get_organization("org-1")

        assert exc_info.value.status_code is None

    def test_delete_ignores_response_body(self):
        seen = []
        client = client_returning(httpx.Response(204), seen)

        assert client.delete_project("org-1", "proj-1") is None
        assert seen[0].method == "DELETE"


def test_admin_key_not_in_request_body(client, fake_api):
    client.create_organization("Acme")

    assert ADMIN_KEY not in json.dumps(fake_api.last_body())
