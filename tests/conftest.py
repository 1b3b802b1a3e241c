"""Pytest configuration and shared fixtures for cfdeploy tests."""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from cfdeploy.models.backend import Endpoint, Platform, SecretEnvVar


def _make_endpoint(
    endpoint_id: str,
    region: str = "us-central1",
    platform: Platform = Platform.GCFV2,
    secrets: list[tuple[str, str | None]] | None = None,
) -> Endpoint:
    """Build an Endpoint with optional ``(secret, version)`` bindings."""
    bindings = None
    if secrets is not None:
        bindings = [
            SecretEnvVar(key=secret.upper(), secret=secret, version=version)
            for secret, version in secrets
        ]
    return Endpoint(
        id=endpoint_id,
        region=region,
        platform=platform,
        project="demo-project",
        runtime="nodejs20",
        entry_point=endpoint_id,
        secret_environment_variables=bindings,
    )


@pytest.fixture
def make_endpoint() -> Callable[..., Endpoint]:
    """Return a factory for test endpoints."""
    return _make_endpoint


@pytest.fixture
def isolated_env() -> Generator[dict[str, str]]:
    """Provide isolated environment variables for testing.

    Yields:
        Dictionary of original environment variables

    Cleanup:
        Restores original environment after test
    """
    original_env = os.environ.copy()
    yield original_env
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def source_archive(tmp_path: Path) -> Path:
    """Write a small fake source archive and return its path."""
    archive = tmp_path / "source.zip"
    archive.write_bytes(b"PK\x03\x04fake-archive-bytes")
    return archive
