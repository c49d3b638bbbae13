"""Pytest configuration and shared fixtures."""

import json
import os

# Plain, wide, uncolored output for every console created during the run
os.environ["TERM"] = "dumb"
os.environ["COLUMNS"] = "200"
os.environ.pop("FORCE_COLOR", None)

import httpx
import pytest

from taxjar_cli.core.config import CLIConfig, ConfigStore, EnvSettings
from taxjar_cli.main import TaxJarCLI

TEST_API_KEY = "test1234abcd5678"


class MockTaxJarAPI:
    """
    Records requests and answers them from a table of canned responses.

    Routes are keyed by (method, path) where path includes the /v2 prefix.
    Unrouted requests get a 404 with a TaxJar-style error body.
    """

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, status=200, json_body=None, text=None, exc=None):
        self.routes[(method, path)] = (status, json_body, text, exc)

    def handler(self, request):
        self.requests.append(request)
        status, body, text, exc = self.routes.get(
            (request.method, request.url.path),
            (404, {"error": "Not Found", "detail": "No mock route", "status": 404}, None, None),
        )
        if exc is not None:
            raise exc
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)

    @property
    def last_request(self):
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep the developer's TAXJAR_* variables out of the tests."""
    for name in ("TAXJAR_API_KEY", "TAXJAR_BASE_URL", "TAXJAR_CONFIG_DIR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def config_path(tmp_path):
    return tmp_path / "taxjar-cli" / "config.json"


@pytest.fixture
def store(config_path):
    """Config store backed by a temp file, with no key stored."""
    return ConfigStore(config_path, env=EnvSettings())


@pytest.fixture
def keyed_store(store):
    """Config store with an API key already saved."""
    store.set_api_key(TEST_API_KEY)
    return store


@pytest.fixture
def mock_api():
    return MockTaxJarAPI()


@pytest.fixture
def run_cli(keyed_store, mock_api):
    """
    Run one CLI invocation against the mock API.

    Returns the exit code; read output with capsys.
    """
    def run(*argv, store=None):
        cli = TaxJarCLI(CLIConfig(store=store or keyed_store), transport=mock_api.transport)
        return cli.run(list(argv))
    return run
