"""Unit tests for backend models and helpers."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from pydantic import ValidationError

from cfdeploy.lib.errors import ConfigError
from cfdeploy.models.backend import (
    Backend,
    Endpoint,
    Platform,
    all_endpoints,
    has_platform,
    load_backend,
    of,
    regional_endpoints,
    regions,
)


@pytest.mark.unit
class TestBackendHelpers:
    """Tests for backend enumeration helpers."""

    def test_of_groups_by_region(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """Endpoints are filed under their region and id."""
        backend = of(
            make_endpoint("a", region="us-central1"),
            make_endpoint("b", region="europe-west1"),
            environment_variables={"K": "V"},
        )

        assert set(backend.endpoints) == {"us-central1", "europe-west1"}
        assert backend.endpoints["europe-west1"]["b"].id == "b"
        assert backend.environment_variables == {"K": "V"}

    def test_enumeration_is_sorted(self, make_endpoint: Callable[..., Endpoint]) -> None:
        """Regions then ids are enumerated in sorted order."""
        backend = of(
            make_endpoint("z", region="us-central1"),
            make_endpoint("b", region="asia-east1"),
            make_endpoint("a", region="us-central1"),
        )

        assert regions(backend) == ["asia-east1", "us-central1"]
        assert [e.id for e in regional_endpoints(backend, "us-central1")] == ["a", "z"]
        assert [e.id for e in all_endpoints(backend)] == ["b", "a", "z"]
        assert regional_endpoints(backend, "missing-region") == []

    def test_has_platform(self, make_endpoint: Callable[..., Endpoint]) -> None:
        """has_platform checks any endpoint's generation."""
        endpoints = [make_endpoint("a", platform=Platform.GCFV1)]

        assert has_platform(endpoints, Platform.GCFV1)
        assert not has_platform(endpoints, Platform.GCFV2)

    def test_endpoint_filed_under_wrong_region_is_rejected(
        self, make_endpoint: Callable[..., Endpoint]
    ) -> None:
        """An endpoint belongs to exactly one region."""
        endpoint = make_endpoint("a", region="us-central1")

        with pytest.raises(ValidationError, match="declares region"):
            Backend(endpoints={"europe-west1": {"a": endpoint}})

    def test_camel_case_keys_validate(self) -> None:
        """Documents from other stages use camelCase keys."""
        backend = Backend.model_validate(
            {
                "environmentVariables": {"A": "1"},
                "endpoints": {
                    "us-central1": {
                        "fn": {
                            "id": "fn",
                            "platform": "gcfv2",
                            "region": "us-central1",
                            "secretEnvironmentVariables": [
                                {"key": "K", "secret": "s", "version": "2"}
                            ],
                        }
                    }
                },
            }
        )

        endpoint = backend.endpoints["us-central1"]["fn"]
        assert endpoint.platform is Platform.GCFV2
        assert endpoint.secret_environment_variables is not None
        assert endpoint.secret_environment_variables[0].version == "2"


@pytest.mark.unit
class TestLoadBackend:
    """Tests for load_backend."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        """YAML documents are parsed and validated."""
        path = tmp_path / "backend.yaml"
        path.write_text(
            """
environmentVariables:
  MODE: prod
endpoints:
  us-east1:
    api:
      id: api
      platform: gcfv1
      region: us-east1
""",
            encoding="utf-8",
        )

        backend = load_backend(path)

        assert backend.environment_variables == {"MODE": "prod"}
        assert backend.endpoints["us-east1"]["api"].platform is Platform.GCFV1

    def test_empty_file_is_empty_backend(self, tmp_path: Path) -> None:
        """An empty document is a backend with nothing in it."""
        path = tmp_path / "backend.yaml"
        path.write_text("", encoding="utf-8")

        assert load_backend(path) == Backend()

    def test_invalid_backend_raises_config_error(self, tmp_path: Path) -> None:
        """Schema errors are reported as ConfigError."""
        path = tmp_path / "backend.json"
        path.write_text('{"endpoints": []}', encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid backend"):
            load_backend(path)

    def test_missing_file_raises_config_error(self, tmp_path: Path) -> None:
        """Unreadable files are reported as ConfigError."""
        with pytest.raises(ConfigError, match="Failed to read"):
            load_backend(tmp_path / "missing.json")
