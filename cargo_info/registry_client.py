"""HTTP client for the crates.io registry API."""

import json
import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

from .config import DEFAULT_REGISTRY_URL, DEFAULT_TIMEOUT, DEFAULT_USER_AGENT

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base exception for failed registry lookups."""

    pass


class CrateNotFoundError(RegistryError):
    """Raised when the registry has no crate by the requested name."""

    pass


class NetworkError(RegistryError):
    """Raised when the registry cannot be reached or answers with an error."""

    pass


@dataclass(frozen=True)
class RegistryResponse:
    """Body of a successful crate lookup."""

    name: str
    status_code: int
    text: str

    def json(self) -> Any:
        """Parse the body as JSON.

        Raises:
            json.JSONDecodeError: If the body is not valid JSON
        """
        return json.loads(self.text)


def _error_detail(response: requests.Response) -> str:
    """Extract the registry's own error message, if it sent one."""
    try:
        errors = response.json().get("errors")
    except (ValueError, AttributeError):
        errors = None

    if isinstance(errors, list):
        details = [e.get("detail") for e in errors if isinstance(e, dict) and e.get("detail")]
        if details:
            return "; ".join(str(d) for d in details)

    return f"{response.status_code} {response.reason or 'Error'} for url: {response.url}"


class RegistryClient:
    """Client for fetching crate metadata documents from the registry."""

    def __init__(
        self,
        base_url: str = DEFAULT_REGISTRY_URL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize the registry client.

        Args:
            base_url: Crates endpoint; the crate name is appended as a path segment
            timeout: Request timeout in seconds
            user_agent: User-Agent header, which crates.io requires
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = self._create_session(user_agent)

    def _create_session(self, user_agent: str) -> requests.Session:
        session = requests.Session()
        session.headers.update({"User-Agent": user_agent, "Accept": "application/json"})
        return session

    def crate_url(self, name: str) -> str:
        return f"{self.base_url}/{quote(name, safe='')}"

    def fetch(self, name: str) -> RegistryResponse:
        """Fetch the metadata document for one crate.

        Args:
            name: Crate name

        Returns:
            RegistryResponse holding the raw body

        Raises:
            CrateNotFoundError: If the registry answers 404
            NetworkError: If the request fails or the registry answers with an error
        """
        url = self.crate_url(name)
        logger.info(f"Fetching crate metadata from {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise NetworkError(f"connection to {url} timed out") from e
        except requests.exceptions.ConnectionError as e:
            raise NetworkError(f"unable to connect to {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(str(e)) from e

        if response.status_code == 404:
            raise CrateNotFoundError(_error_detail(response))
        if response.status_code >= 400:
            logger.error(f"Registry answered {response.status_code} for crate {name!r}")
            raise NetworkError(_error_detail(response))

        logger.info(f"Fetched metadata for {name!r} (status: {response.status_code})")
        return RegistryResponse(name=name, status_code=response.status_code, text=response.text)
