"""Tests for the registry client."""

import json
from unittest.mock import Mock, patch

import pytest
import requests

from cargo_info.registry_client import (
    CrateNotFoundError,
    NetworkError,
    RegistryClient,
    RegistryError,
    RegistryResponse,
)

SERDE_BODY = json.dumps(
    {
        "crate": {"name": "serde", "max_version": "1.0.197", "downloads": 300000000},
        "versions": [],
        "keywords": [],
    }
)


def make_response(status_code=200, text=SERDE_BODY, payload=None, reason="OK"):
    response = Mock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    response.url = "https://crates.io/api/v1/crates/serde"
    if payload is None:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


class TestRegistryClient:
    """Unit tests for RegistryClient."""

    def test_fetch_success(self):
        """Test a successful lookup returns the raw body."""
        client = RegistryClient()

        with patch.object(client.session, "get", return_value=make_response()) as get:
            response = client.fetch("serde")

        get.assert_called_once_with("https://crates.io/api/v1/crates/serde", timeout=30.0)
        assert response.name == "serde"
        assert response.status_code == 200
        assert response.text == SERDE_BODY
        assert response.json()["crate"]["max_version"] == "1.0.197"

    def test_session_sends_user_agent(self):
        client = RegistryClient(user_agent="cargo-info-tests")
        assert client.session.headers["User-Agent"] == "cargo-info-tests"

    def test_default_user_agent_names_the_tool(self):
        client = RegistryClient()
        assert client.session.headers["User-Agent"] == "cargo-info/0.3.0"

    def test_crate_url_strips_trailing_slash_and_quotes_name(self):
        client = RegistryClient(base_url="http://localhost:8080/crates/")
        assert client.crate_url("a b") == "http://localhost:8080/crates/a%20b"

    def test_not_found_uses_registry_detail(self):
        """Test a 404 surfaces the registry's own error detail."""
        client = RegistryClient()
        payload = {"errors": [{"detail": "crate `nope` does not exist"}]}
        response = make_response(404, json.dumps(payload), payload, reason="Not Found")

        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(CrateNotFoundError, match="crate `nope` does not exist"):
                client.fetch("nope")

    def test_server_error_without_detail(self):
        """Test an HTTP error without a JSON body falls back to the status line."""
        client = RegistryClient()
        response = make_response(503, "<html>down</html>", reason="Service Unavailable")

        with patch.object(client.session, "get", return_value=response):
            with pytest.raises(NetworkError, match="503 Service Unavailable"):
                client.fetch("serde")

    def test_connection_error(self):
        """Test handling of connection errors."""
        client = RegistryClient()

        with patch.object(
            client.session,
            "get",
            side_effect=requests.ConnectionError("Name or service not known"),
        ):
            with pytest.raises(NetworkError, match="unable to connect"):
                client.fetch("serde")

    def test_timeout(self):
        client = RegistryClient(timeout=0.5)

        with patch.object(client.session, "get", side_effect=requests.Timeout()):
            with pytest.raises(NetworkError, match="timed out"):
                client.fetch("serde")

    def test_other_request_errors_are_registry_errors(self):
        client = RegistryClient()

        with patch.object(
            client.session, "get", side_effect=requests.RequestException("boom")
        ):
            with pytest.raises(RegistryError, match="boom"):
                client.fetch("serde")

    def test_not_found_is_a_registry_error(self):
        assert issubclass(CrateNotFoundError, RegistryError)
        assert issubclass(NetworkError, RegistryError)


class TestRegistryResponse:
    def test_json_parses_text(self):
        response = RegistryResponse(name="x", status_code=200, text='{"a": 1}')
        assert response.json() == {"a": 1}

    def test_invalid_json_raises(self):
        response = RegistryResponse(name="x", status_code=200, text="Invalid JSON content")
        with pytest.raises(json.JSONDecodeError):
            response.json()
