"""Clients for the Cloud Functions and Cloud Storage services."""

from cfdeploy.gcp.base import (
    AccessChecker,
    AllowAllChecker,
    GenerationOneApi,
    GenerationTwoApi,
    SourceUploader,
)
from cfdeploy.gcp.cloudfunctions import CloudFunctionsClient
from cfdeploy.gcp.cloudfunctionsv2 import CloudFunctionsV2Client
from cfdeploy.gcp.storage import StorageUploader

__all__ = [
    "AccessChecker",
    "AllowAllChecker",
    "CloudFunctionsClient",
    "CloudFunctionsV2Client",
    "GenerationOneApi",
    "GenerationTwoApi",
    "SourceUploader",
    "StorageUploader",
]
