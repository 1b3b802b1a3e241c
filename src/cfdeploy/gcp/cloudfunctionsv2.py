"""Gen-2 Cloud Functions API client."""

from __future__ import annotations

import httpx
from pydantic import ValidationError as PydanticValidationError

from cfdeploy.config.defaults import FUNCTIONS_V2_API_VERSION
from cfdeploy.config.settings import DeploySettings
from cfdeploy.gcp.base import GenerationTwoApi, HttpApiClient
from cfdeploy.lib.errors import UploadError
from cfdeploy.models.upload import UploadDestination


class CloudFunctionsV2Client(HttpApiClient, GenerationTwoApi):
    """Requests regional upload URLs from the gen-2 Cloud Functions API."""

    def __init__(
        self, settings: DeploySettings, client: httpx.AsyncClient | None = None
    ) -> None:
        super().__init__(settings, settings.functions_v2_origin, client)

    async def generate_upload_url(
        self, project_id: str, region: str
    ) -> UploadDestination:
        """Return a signed URL plus the storage descriptor for the region."""
        data = await self._post_json(
            f"{FUNCTIONS_V2_API_VERSION}/projects/{project_id}/locations/{region}"
            "/functions:generateUploadUrl",
            {},
        )
        try:
            destination = UploadDestination.model_validate(data)
        except PydanticValidationError as exc:
            raise UploadError(
                f"Unexpected generateUploadUrl response for {region}: {exc}"
            ) from exc
        if destination.storage_source is None:
            raise UploadError(
                f"Cloud Functions did not return a storage source for {region}"
            )
        return destination
