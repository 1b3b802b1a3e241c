"""Base interfaces for the remote services the upload stage talks to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx

from cfdeploy.config.settings import DeploySettings
from cfdeploy.lib.errors import UploadError
from cfdeploy.lib.logging_config import get_logger
from cfdeploy.models.upload import UploadDestination

if TYPE_CHECKING:
    from cfdeploy.deploy.context import DeployContext

logger = get_logger(__name__)


class AccessChecker(ABC):
    """Pre-flight permission check run before anything is uploaded."""

    @abstractmethod
    async def check_access(
        self, context: DeployContext, options: Any, payload: Any
    ) -> None:
        """Verify the caller may deploy the desired backend.

        Args:
            context: Deploy context for this invocation.
            options: Command-wide options.
            payload: Deploy payload holding the desired backend.

        Raises:
            PermissionDeniedError: If the check fails.
        """


class AllowAllChecker(AccessChecker):
    """Access checker that accepts every deploy."""

    async def check_access(
        self, context: DeployContext, options: Any, payload: Any
    ) -> None:
        logger.debug("Skipping access check for project %s", context.project_id)


class GenerationOneApi(ABC):
    """Gen-1 Cloud Functions upload URL API."""

    @abstractmethod
    async def generate_upload_url(self, project_id: str, region: str) -> str:
        """Request a signed URL to upload a gen-1 source archive to.

        Raises:
            UploadError: If the request fails.
        """


class GenerationTwoApi(ABC):
    """Gen-2 Cloud Functions upload URL API."""

    @abstractmethod
    async def generate_upload_url(
        self, project_id: str, region: str
    ) -> UploadDestination:
        """Request a signed URL and storage descriptor for a region.

        Raises:
            UploadError: If the request fails.
        """


class SourceUploader(ABC):
    """Transfers archive bytes to a signed upload URL."""

    @abstractmethod
    async def upload(
        self,
        path: Path,
        url: str,
        extra_headers: dict[str, str] | None = None,
    ) -> None:
        """Stream a file to the destination URL.

        Raises:
            UploadError: If the transfer fails.
        """


class HttpApiClient:
    """Shared httpx plumbing for the Cloud Functions API clients."""

    def __init__(
        self,
        settings: DeploySettings,
        origin: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Resolved deploy settings (token, timeout).
            origin: API base URL.
            client: Optional preconfigured httpx client, e.g. with a mock
                transport. The caller owns its lifecycle.
        """
        self._settings = settings
        self._origin = origin.rstrip("/")
        self._client = client

    def _headers(self) -> dict[str, str]:
        headers = {"content-type": "application/json"}
        if self._settings.access_token:
            headers["authorization"] = f"Bearer {self._settings.access_token}"
        return headers

    async def _post_json(self, path: str, body: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._origin}/{path.lstrip('/')}"
        logger.debug("POST %s", url)
        try:
            if self._client is not None:
                response = await self._client.post(
                    url, json=body, headers=self._headers()
                )
            else:
                async with httpx.AsyncClient(
                    timeout=self._settings.http_timeout
                ) as client:
                    response = await client.post(
                        url, json=body, headers=self._headers()
                    )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UploadError(
                f"Request to {url} failed with HTTP {exc.response.status_code}: "
                f"{_error_message(exc.response)}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UploadError(f"Request to {url} failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise UploadError(f"Invalid JSON response from {url}") from exc
        if not isinstance(data, dict):
            raise UploadError(f"Unexpected response from {url}: {data!r}")
        return data


def _error_message(response: httpx.Response) -> str:
    """Extract the API error message from a Google-style error body."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message", body["error"]))
    return response.text or response.reason_phrase
