"""Authenticated client for the GitLab REST API v4.

Works against gitlab.com and self-hosted instances. Every request carries the
``PRIVATE-TOKEN`` header; non-2xx responses raise ``GitLabApiError`` and are
never retried.
"""

import logging
import urllib.parse
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

import httpx

from .exceptions import GitLabApiError

if TYPE_CHECKING:
    from ..config import Settings

logger = logging.getLogger(__name__)

# Characters left alone by URI-component encoding besides letters, digits and "-_.~"
_URI_COMPONENT_SAFE = "!*'()"


def encode_project_path(identifier: str) -> str:
    """URL-encode a project ID for use as a single GitLab API path segment.

    GitLab accepts both numeric IDs and namespace/project paths, the latter
    only with the slash escaped (e.g. "group%2Fproject"). Numeric strings
    contain nothing to escape and pass through unchanged.
    """
    return urllib.parse.quote(str(identifier), safe=_URI_COMPONENT_SAFE)


def encode_file_path(file_path: str) -> str:
    """URL-encode a repository file path ("src/app.py" -> "src%2Fapp.py")."""
    return urllib.parse.quote(str(file_path), safe=_URI_COMPONENT_SAFE)


def build_query(params: Mapping[str, Any]) -> str:
    """Build a query string, skipping parameters that were not supplied.

    ``None`` and empty strings are dropped so the API never sees ``key=``.
    Insertion order is preserved.
    """
    supplied = [
        (key, value)
        for key, value in params.items()
        if value is not None and value != ""
    ]
    return urllib.parse.urlencode(supplied)


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings owned by a single GitLabClient."""

    api_base: str
    token: str


class GitLabClient:
    """Thin async wrapper over httpx for GitLab API v4 calls.

    Holds no state besides its configuration and the underlying transport,
    so one instance can serve concurrent tool invocations.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 30.0,
    ):
        self.config = config
        self._http = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "GitLabClient":
        """Build a client from application settings."""
        return cls(
            ClientConfig(api_base=settings.api_base, token=settings.gitlab_token),
            timeout=settings.request_timeout,
        )

    async def request(
        self,
        method: str,
        endpoint: str,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Send an authenticated request and return the parsed JSON body.

        Args:
            method: HTTP method.
            endpoint: Path relative to the API base, including any query string.
            body: JSON-serializable request body (omitted when None).
            headers: Extra headers merged over the defaults.

        Returns:
            The decoded JSON payload, unvalidated.

        Raises:
            GitLabApiError: If the response status is not 2xx.
        """
        url = f"{self.config.api_base}{endpoint}"
        request_headers = {
            "PRIVATE-TOKEN": self.config.token,
            "Content-Type": "application/json",
        }
        if headers:
            request_headers.update(headers)

        logger.debug("GitLab request: %s %s", method, endpoint)

        kwargs: Dict[str, Any] = {"headers": request_headers}
        if body is not None:
            kwargs["json"] = body

        response = await self._http.request(method, url, **kwargs)

        if not response.is_success:
            logger.warning(
                "GitLab API returned HTTP %d for %s %s",
                response.status_code, method, endpoint,
            )
            raise GitLabApiError(response.status_code, response.text, endpoint)

        return response.json()

    async def get(self, endpoint: str) -> Any:
        return await self.request("GET", endpoint)

    async def post(self, endpoint: str, body: Any) -> Any:
        return await self.request("POST", endpoint, body=body)

    async def put(self, endpoint: str, body: Any) -> Any:
        return await self.request("PUT", endpoint, body=body)

    async def aclose(self):
        """Release the underlying HTTP transport."""
        await self._http.aclose()

    async def __aenter__(self) -> "GitLabClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
