"""Data models for backends and uploads."""

from cfdeploy.models.backend import Backend, Endpoint, Platform, SecretEnvVar
from cfdeploy.models.upload import StorageSource, UploadDestination, UploadTask

__all__ = [
    "Backend",
    "Endpoint",
    "Platform",
    "SecretEnvVar",
    "StorageSource",
    "UploadDestination",
    "UploadTask",
]
