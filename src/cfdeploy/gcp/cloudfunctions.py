"""Gen-1 Cloud Functions API client."""

from __future__ import annotations

import httpx

from cfdeploy.config.defaults import FUNCTIONS_V1_API_VERSION
from cfdeploy.config.settings import DeploySettings
from cfdeploy.gcp.base import GenerationOneApi, HttpApiClient
from cfdeploy.lib.errors import UploadError


class CloudFunctionsClient(HttpApiClient, GenerationOneApi):
    """Requests upload URLs from the gen-1 Cloud Functions API."""

    def __init__(
        self, settings: DeploySettings, client: httpx.AsyncClient | None = None
    ) -> None:
        super().__init__(settings, settings.functions_origin, client)

    async def generate_upload_url(self, project_id: str, region: str) -> str:
        """Return a signed upload URL for a gen-1 source archive."""
        data = await self._post_json(
            f"{FUNCTIONS_V1_API_VERSION}/projects/{project_id}/locations/{region}"
            "/functions:generateUploadUrl",
            {},
        )
        upload_url = data.get("uploadUrl")
        if not upload_url:
            raise UploadError(
                f"Cloud Functions did not return an upload URL for {region}"
            )
        return str(upload_url)
