"""Streaming uploads of source archives to signed URLs."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from contextlib import aclosing
from pathlib import Path

import httpx

from cfdeploy.config.defaults import SOURCE_CONTENT_TYPE
from cfdeploy.config.settings import DeploySettings
from cfdeploy.gcp.base import SourceUploader
from cfdeploy.lib.errors import UploadError
from cfdeploy.lib.logging_config import get_logger

logger = get_logger(__name__)


async def _iter_file(path: Path, chunk_size: int) -> AsyncIterator[bytes]:
    with path.open("rb") as handle:
        while True:
            chunk = await asyncio.to_thread(handle.read, chunk_size)
            if not chunk:
                break
            yield chunk


class StorageUploader(SourceUploader):
    """PUTs archives to signed Cloud Storage URLs."""

    def __init__(
        self, settings: DeploySettings, client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize the uploader.

        Args:
            settings: Resolved deploy settings (timeout, chunk size).
            client: Optional preconfigured httpx client owned by the caller.
        """
        self._settings = settings
        self._client = client

    async def upload(
        self,
        path: Path,
        url: str,
        extra_headers: dict[str, str] | None = None,
    ) -> None:
        """Stream ``path`` to ``url``.

        The signed URL carries its own authorization, so no bearer token is
        sent. Size limits are declared in ``extra_headers`` and enforced by
        the server.
        """
        headers = {
            "content-type": SOURCE_CONTENT_TYPE,
            "content-length": str(path.stat().st_size),
        }
        headers.update(extra_headers or {})
        logger.debug("Uploading %s", path)
        try:
            async with aclosing(
                _iter_file(path, self._settings.upload_chunk_size)
            ) as content:
                if self._client is not None:
                    response = await self._client.put(
                        url, content=content, headers=headers
                    )
                else:
                    async with httpx.AsyncClient(
                        timeout=self._settings.http_timeout
                    ) as client:
                        response = await client.put(
                            url, content=content, headers=headers
                        )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise UploadError(
                f"Upload of {path.name} failed with HTTP "
                f"{exc.response.status_code}: {exc.response.text}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise UploadError(f"Upload of {path.name} failed: {exc}") from exc
        logger.debug("Uploaded %s (%s)", path, response.status_code)
