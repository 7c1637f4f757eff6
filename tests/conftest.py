"""
Pytest configuration and fixtures for Langfuse provider tests.
"""

import itertools
import json
import tempfile
import threading
from pathlib import Path
from urllib.parse import unquote

import httpx
import pytest

from langfuse_provider.client import LangfuseClient
from langfuse_provider.models import ProviderConfig
from langfuse_provider.provider import LangfuseProvider
from langfuse_provider.settings import reload_settings

ADMIN_KEY = "admin-key"
BASE_URL = "http://langfuse.test"


class FakeLangfuseAPI:
    """In-memory stand-in for the Langfuse Admin API.

    Organization and project names are stripped of surrounding whitespace,
    so tests can tell server-normalized values from submitted ones. Project
    secret keys are only present in create responses.
    """

    def __init__(self, admin_key: str = ADMIN_KEY):
        self.admin_key = admin_key
        self.organizations: dict[str, dict] = {}
        self.projects: dict[str, dict] = {}
        self.requests: list[httpx.Request] = []
        self.fail_with: tuple[int, str] | None = None
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def handler(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
            if request.headers.get("Authorization") != f"Bearer {self.admin_key}":
                return httpx.Response(401, text="Unauthorized")
            if self.fail_with is not None:
                status, body = self.fail_with
                return httpx.Response(status, text=body)
            return self._route(request)

    def _route(self, request: httpx.Request) -> httpx.Response:
        raw_path = request.url.raw_path.decode().split("?")[0]
        parts = [unquote(part) for part in raw_path.strip("/").split("/")]
        if parts[:3] != ["api", "admin", "organizations"]:
            return httpx.Response(404, text="no such route")
        rest = parts[3:]
        method = request.method
        body = json.loads(request.content) if request.content else {}

        if not rest:
            if method == "POST":
                org = {"id": f"org-{next(self._ids)}", "name": body["name"].strip()}
                self.organizations[org["id"]] = org
                return httpx.Response(201, json=org)
            return httpx.Response(405, text="method not allowed")

        org_id = rest[0]
        org = self.organizations.get(org_id)
        if org is None:
            return httpx.Response(404, text=f"organization {org_id} not found")

        if len(rest) == 1:
            if method == "GET":
                return httpx.Response(200, json=org)
            if method == "PUT":
                org["name"] = body["name"].strip()
                return httpx.Response(200, json=org)
            if method == "DELETE":
                del self.organizations[org_id]
                return httpx.Response(200, json={"success": True})
            return httpx.Response(405, text="method not allowed")

        if len(rest) == 2 and rest[1] == "projects" and method == "POST":
            n = next(self._ids)
            project = {
                "id": f"proj-{n}",
                "name": body["name"].strip(),
                "organizationId": org_id,
                "publicKey": f"pk-lf-{n}",
            }
            self.projects[project["id"]] = project
            return httpx.Response(201, json={**project, "secretKey": f"sk-lf-{n}"})

        if len(rest) == 3 and rest[1] == "projects":
            project = self.projects.get(rest[2])
            if project is None or project["organizationId"] != org_id:
                return httpx.Response(404, text=f"project {rest[2]} not found")
            if method == "GET":
                return httpx.Response(200, json=project)
            if method == "PUT":
                project["name"] = body["name"].strip()
                return httpx.Response(200, json=project)
            if method == "DELETE":
                del self.projects[project["id"]]
                return httpx.Response(200, json={"success": True})

        return httpx.Response(405, text="method not allowed")

    def last_body(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch):
    """Keep LANGFUSE_* variables from the developer's environment out of tests."""
    for var in (
        "LANGFUSE_ADMIN_API_KEY",
        "LANGFUSE_BASE_URL",
        "LANGFUSE_LOG_LEVEL",
        "LANGFUSE_STACK_NAME",
        "LANGFUSE_PULUMI_CONFIG_PASSPHRASE",
        "PULUMI_CONFIG_PASSPHRASE",
    ):
        monkeypatch.delenv(var, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def fake_api():
    return FakeLangfuseAPI()


@pytest.fixture
def config():
    return ProviderConfig(admin_key=ADMIN_KEY, base_url=BASE_URL)


@pytest.fixture
def client(config, fake_api):
    return LangfuseClient(config, transport=fake_api.transport)


@pytest.fixture
def provider(fake_api):
    provider = LangfuseProvider(transport=fake_api.transport)
    provider.configure(admin_api_key=ADMIN_KEY, base_url=BASE_URL)
    return provider


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)
