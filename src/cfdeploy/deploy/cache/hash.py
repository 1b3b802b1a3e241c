"""Deterministic fingerprints for deploy change detection.

Each digest is a lowercase hex SHA-256. The environment, secrets and source
digests are computed independently so a caller can recompute only the piece
that changed and combine them with :func:`get_endpoint_hash`.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
import re
from pathlib import Path
from typing import Any

from cfdeploy.models.backend import Backend, Endpoint, all_endpoints


_ARRAY_INDEX = re.compile(r"0|[1-9][0-9]*")
_MAX_ARRAY_INDEX = 2**32 - 2

_SURROGATE_PAIR = re.compile("[\ud800-\udbff][\udc00-\udfff]")
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def _is_array_index(key: str) -> bool:
    return (
        _ARRAY_INDEX.fullmatch(key) is not None and int(key) <= _MAX_ARRAY_INDEX
    )


def _key_order(mapping: dict[str, Any]) -> dict[str, Any]:
    # Array-index keys ascend numerically ahead of all other keys, which keep
    # insertion order. This is the object key order JSON.stringify emits.
    indexes = sorted((k for k in mapping if _is_array_index(k)), key=int)
    if not indexes:
        return mapping
    ordered = {k: mapping[k] for k in indexes}
    ordered.update((k, v) for k, v in mapping.items() if not _is_array_index(k))
    return ordered


def _join_pair(match: re.Match[str]) -> str:
    return match.group().encode("utf-16-le", "surrogatepass").decode("utf-16-le")


def _serialize(mapping: dict[str, Any]) -> bytes:
    # Compact, non-ASCII kept as-is, lone surrogates as lowercase \uXXXX
    # escapes. Changing any of these changes every previously computed
    # fingerprint.
    text = json.dumps(_key_order(mapping), separators=(",", ":"), ensure_ascii=False)
    text = _SURROGATE_PAIR.sub(_join_pair, text)
    text = _LONE_SURROGATE.sub(lambda m: f"\\u{ord(m.group()):04x}", text)
    return text.encode("utf-8")


def get_environment_variables_hash(backend: Backend) -> str:
    """Hash the environment variables of a backend.

    An empty mapping hashes to the digest of empty input.
    """
    digest = hashlib.sha256()
    if backend.environment_variables:
        digest.update(_serialize(backend.environment_variables))
    return digest.hexdigest()


def get_secret_versions(endpoint: Endpoint) -> dict[str, str]:
    """Map secret name to pinned version for an endpoint.

    Bindings without a version follow "latest" and have no stable identity,
    so they are left out.
    """
    versions: dict[str, str] = {}
    for binding in endpoint.secret_environment_variables or []:
        if binding.version:
            versions[binding.secret] = binding.version
    return versions


def get_secrets_hash(endpoint: Endpoint) -> str:
    """Hash the pinned secret versions of an endpoint."""
    digest = hashlib.sha256()
    secret_versions = get_secret_versions(endpoint)
    if secret_versions:
        digest.update(_serialize(secret_versions))
    return digest.hexdigest()


async def get_source_hash(package_path: Path | str | None = None) -> str:
    """Hash the bytes of a packaged source archive.

    Args:
        package_path: Archive to hash. None hashes empty input.

    Raises:
        OSError: If the archive cannot be read.
    """
    digest = hashlib.sha256()
    if package_path:
        data = await asyncio.to_thread(Path(package_path).read_bytes)
        digest.update(data)
    return digest.hexdigest()


def get_endpoint_hash(source_hash: str, env_hash: str, secrets_hash: str) -> str:
    """Combine the component digests into one endpoint fingerprint.

    The digests are concatenated as environment, source, secrets.
    """
    combined = "".join([env_hash, source_hash, secrets_hash])
    return hashlib.sha256(combined.encode("utf-8")).hexdigest()


async def compute_endpoint_hashes(
    backend: Backend, package_path: Path | str | None = None
) -> dict[tuple[str, str], str]:
    """Fingerprint every endpoint of a backend against one source archive.

    The source and environment digests are shared by all endpoints and
    computed once.

    Returns:
        Endpoint hash keyed by ``(region, endpoint_id)``, in enumeration order.
    """
    source_hash = await get_source_hash(package_path)
    env_hash = get_environment_variables_hash(backend)
    return {
        (endpoint.region, endpoint.id): get_endpoint_hash(
            source_hash, env_hash, get_secrets_hash(endpoint)
        )
        for endpoint in all_endpoints(backend)
    }
