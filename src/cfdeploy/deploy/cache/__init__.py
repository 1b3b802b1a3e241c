"""Fingerprinting used to skip deploys when nothing relevant changed."""

from cfdeploy.deploy.cache.hash import (
    compute_endpoint_hashes,
    get_endpoint_hash,
    get_environment_variables_hash,
    get_secret_versions,
    get_secrets_hash,
    get_source_hash,
)

__all__ = [
    "compute_endpoint_hashes",
    "get_endpoint_hash",
    "get_environment_variables_hash",
    "get_secret_versions",
    "get_secrets_hash",
    "get_source_hash",
]
