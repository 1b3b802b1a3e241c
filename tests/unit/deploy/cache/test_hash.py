"""Unit tests for deploy fingerprint helpers."""

from __future__ import annotations

import hashlib
from collections.abc import Callable
from pathlib import Path

import pytest

from cfdeploy.deploy.cache.hash import (
    compute_endpoint_hashes,
    get_endpoint_hash,
    get_environment_variables_hash,
    get_secret_versions,
    get_secrets_hash,
    get_source_hash,
)
from cfdeploy.models.backend import Backend, Endpoint, Platform, of

EMPTY_DIGEST = hashlib.sha256(b"").hexdigest()


@pytest.mark.unit
class TestEnvironmentVariablesHash:
    """Tests for get_environment_variables_hash."""

    def test_empty_environment_hashes_empty_input(self) -> None:
        """No environment variables gives the digest of empty input."""
        assert get_environment_variables_hash(Backend()) == EMPTY_DIGEST

    def test_same_environment_same_hash(self) -> None:
        """Identical mappings produce identical digests."""
        first = Backend(environment_variables={"A": "1", "B": "2"})
        second = Backend(environment_variables={"A": "1", "B": "2"})

        assert get_environment_variables_hash(first) == get_environment_variables_hash(
            second
        )

    def test_matches_compact_json_digest(self) -> None:
        """Digest covers the compact JSON serialization of the mapping."""
        backend = Backend(environment_variables={"GREETING": "héllo", "N": "1"})
        expected = hashlib.sha256(
            '{"GREETING":"héllo","N":"1"}'.encode()
        ).hexdigest()

        assert get_environment_variables_hash(backend) == expected

    def test_value_change_changes_hash(self) -> None:
        """Changing a value changes the digest."""
        before = Backend(environment_variables={"A": "1"})
        after = Backend(environment_variables={"A": "2"})

        assert get_environment_variables_hash(before) != get_environment_variables_hash(
            after
        )

    def test_integer_like_keys_sort_first(self) -> None:
        """Array-index keys come first in ascending order, others keep theirs."""
        backend = Backend(
            environment_variables={"b": "1", "10": "x", "a": "2", "2": "y"}
        )
        expected = hashlib.sha256(
            b'{"2":"y","10":"x","b":"1","a":"2"}'
        ).hexdigest()

        assert get_environment_variables_hash(backend) == expected

    def test_non_index_numeric_keys_keep_insertion_order(self) -> None:
        """Leading zeros and out-of-range numbers are ordinary keys."""
        backend = Backend(
            environment_variables={"b": "1", "01": "x", "4294967295": "y"}
        )
        expected = hashlib.sha256(
            b'{"b":"1","01":"x","4294967295":"y"}'
        ).hexdigest()

        assert get_environment_variables_hash(backend) == expected

    def test_lone_surrogate_is_escaped(self) -> None:
        """An unpaired surrogate is written as a lowercase escape."""
        backend = Backend.model_construct(environment_variables={"A": "\ud800x"})
        expected = hashlib.sha256(b'{"A":"\\ud800x"}').hexdigest()

        assert get_environment_variables_hash(backend) == expected

    def test_surrogate_pair_hashes_as_character(self) -> None:
        """A split surrogate pair hashes like the character it encodes."""
        split = Backend.model_construct(environment_variables={"A": "\ud83d\ude00"})
        joined = Backend(environment_variables={"A": "\U0001f600"})

        assert get_environment_variables_hash(split) == get_environment_variables_hash(
            joined
        )


@pytest.mark.unit
class TestSecretsHash:
    """Tests for get_secrets_hash and get_secret_versions."""

    def test_unversioned_bindings_are_excluded(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """Only bindings with a pinned version contribute."""
        endpoint = make_endpoint("fn", secrets=[("A", "1"), ("B", None)])
        expected = hashlib.sha256(b'{"A":"1"}')

        assert get_secret_versions(endpoint) == {"A": "1"}
        assert get_secrets_hash(endpoint) == expected.hexdigest()

    def test_no_secrets_hashes_empty_input(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """Endpoints without bindings hash to the empty digest."""
        assert get_secrets_hash(make_endpoint("fn")) == EMPTY_DIGEST

    def test_only_unversioned_bindings_hash_empty_input(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """An endpoint whose bindings all follow latest hashes like no secrets."""
        endpoint = make_endpoint("fn", secrets=[("A", None), ("B", None)])

        assert get_secrets_hash(endpoint) == EMPTY_DIGEST

    def test_later_binding_of_same_secret_wins(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """A secret bound twice keeps the last pinned version."""
        endpoint = make_endpoint("fn", secrets=[("A", "1"), ("A", "3")])

        assert get_secret_versions(endpoint) == {"A": "3"}


@pytest.mark.unit
class TestSourceHash:
    """Tests for get_source_hash."""

    @pytest.mark.asyncio
    async def test_no_path_hashes_empty_input(self) -> None:
        """Missing package path gives the digest of empty input."""
        assert await get_source_hash() == EMPTY_DIGEST
        assert await get_source_hash(None) == EMPTY_DIGEST

    @pytest.mark.asyncio
    async def test_hashes_raw_file_bytes(self, tmp_path: Path) -> None:
        """Digest equals SHA-256 of the file's bytes and is stable."""
        archive = tmp_path / "source.zip"
        archive.write_bytes(b"\x00\x01binary")

        first = await get_source_hash(archive)
        second = await get_source_hash(str(archive))

        assert first == hashlib.sha256(b"\x00\x01binary").hexdigest()
        assert first == second

    @pytest.mark.asyncio
    async def test_changed_bytes_change_hash(self, tmp_path: Path) -> None:
        """Rewriting the file with different bytes changes the digest."""
        archive = tmp_path / "source.zip"
        archive.write_bytes(b"v1")
        before = await get_source_hash(archive)

        archive.write_bytes(b"v2")

        assert await get_source_hash(archive) != before

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Unreadable files propagate the I/O error."""
        with pytest.raises(FileNotFoundError):
            await get_source_hash(tmp_path / "missing.zip")


@pytest.mark.unit
class TestEndpointHash:
    """Tests for get_endpoint_hash."""

    def test_concatenates_env_source_secrets(self) -> None:
        """Digest covers env + source + secrets, in that order."""
        expected = hashlib.sha256(b"envsourcesecrets").hexdigest()

        assert get_endpoint_hash("source", "env", "secrets") == expected

    def test_argument_order_matters(self) -> None:
        """Swapping source and environment changes the fingerprint."""
        assert get_endpoint_hash("x", "y", "z") != get_endpoint_hash("y", "x", "z")

    @pytest.mark.asyncio
    async def test_compute_endpoint_hashes_composes_pieces(
        self, source_archive: Path, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """Per-endpoint hashes share source/env digests and differ by secrets."""
        plain = make_endpoint("plain", region="us-central1")
        pinned = make_endpoint(
            "pinned",
            region="europe-west1",
            platform=Platform.GCFV1,
            secrets=[("API_KEY", "7")],
        )
        backend = of(plain, pinned, environment_variables={"MODE": "prod"})

        hashes = await compute_endpoint_hashes(backend, source_archive)

        source_hash = await get_source_hash(source_archive)
        env_hash = get_environment_variables_hash(backend)
        assert list(hashes) == [("europe-west1", "pinned"), ("us-central1", "plain")]
        assert hashes[("us-central1", "plain")] == get_endpoint_hash(
            source_hash, env_hash, EMPTY_DIGEST
        )
        assert hashes[("europe-west1", "pinned")] == get_endpoint_hash(
            source_hash, env_hash, get_secrets_hash(pinned)
        )
