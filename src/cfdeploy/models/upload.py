"""Models returned by the upload destination APIs."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from cfdeploy.models.backend import Platform


class StorageSource(BaseModel):
    """Location of an uploaded gen-2 source archive."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    bucket: str = Field(..., description="Staging bucket")
    object: str = Field(..., description="Object name inside the bucket")
    generation: str | None = Field(default=None, description="Object generation")


class UploadDestination(BaseModel):
    """A short-lived signed URL plus, for gen-2, where the bytes will land."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    upload_url: str = Field(..., description="Signed URL to PUT the archive to")
    storage_source: StorageSource | None = Field(
        default=None, description="Storage descriptor (gen-2 only)"
    )


class UploadTask(BaseModel):
    """One scheduled upload: a platform generation and the region it targets."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    region: str
