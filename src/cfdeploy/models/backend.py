"""Pydantic models for the desired deployment state.

A Backend is the fully resolved set of endpoints a deploy wants to exist,
grouped by region. Documents produced by other pipeline stages use camelCase
keys; both spellings validate.
"""

from collections.abc import Iterable
from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from cfdeploy.lib.errors import ConfigError


class Platform(str, Enum):
    """Cloud Functions platform generations."""

    GCFV1 = "gcfv1"
    GCFV2 = "gcfv2"


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid", alias_generator=to_camel, populate_by_name=True
    )


class SecretEnvVar(_CamelModel):
    """A secret bound to an environment variable of an endpoint.

    Attributes:
        key: Environment variable name the secret is exposed as
        secret: Secret Manager secret name
        project_id: Project owning the secret, if not the deploying project
        version: Pinned version; None means the binding follows "latest"
    """

    key: str = Field(..., description="Environment variable name")
    secret: str = Field(..., description="Secret name")
    project_id: str | None = Field(default=None, description="Secret project")
    version: str | None = Field(default=None, description="Pinned secret version")


class Endpoint(_CamelModel):
    """One deployed function."""

    id: str = Field(..., description="Function id, unique within its region")
    platform: Platform = Field(..., description="Platform generation")
    region: str = Field(..., description="Region the function runs in")
    project: str | None = Field(default=None, description="Owning project")
    codebase: str = Field(default="default", description="Owning codebase")
    runtime: str | None = Field(default=None, description="Language runtime")
    entry_point: str | None = Field(default=None, description="Exported symbol")
    secret_environment_variables: list[SecretEnvVar] | None = Field(
        default=None, description="Secret bindings in declaration order"
    )


class Backend(_CamelModel):
    """Desired deployment state for a project.

    Attributes:
        endpoints: Endpoints keyed by region, then by endpoint id
        environment_variables: Project-level environment variables
    """

    endpoints: dict[str, dict[str, Endpoint]] = Field(default_factory=dict)
    environment_variables: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_endpoint_keys(self) -> "Backend":
        """Ensure every endpoint is filed under its own region and id."""
        for region, by_id in self.endpoints.items():
            for endpoint_id, endpoint in by_id.items():
                if endpoint.region != region:
                    raise ValueError(
                        f"Endpoint {endpoint.id} declares region {endpoint.region} "
                        f"but is listed under {region}"
                    )
                if endpoint.id != endpoint_id:
                    raise ValueError(
                        f"Endpoint {endpoint.id} is listed under id {endpoint_id}"
                    )
        return self


def of(
    *endpoints: Endpoint, environment_variables: dict[str, str] | None = None
) -> Backend:
    """Build a Backend from a flat list of endpoints."""
    grouped: dict[str, dict[str, Endpoint]] = {}
    for endpoint in endpoints:
        grouped.setdefault(endpoint.region, {})[endpoint.id] = endpoint
    return Backend(
        endpoints=grouped, environment_variables=dict(environment_variables or {})
    )


def regions(backend: Backend) -> list[str]:
    """Return the backend's regions in sorted order."""
    return sorted(backend.endpoints)


def regional_endpoints(backend: Backend, region: str) -> list[Endpoint]:
    """Return a region's endpoints sorted by id."""
    by_id = backend.endpoints.get(region, {})
    return [by_id[endpoint_id] for endpoint_id in sorted(by_id)]


def all_endpoints(backend: Backend) -> list[Endpoint]:
    """Return every endpoint, ordered by region then id.

    The order is stable across runs so anything that picks "the first"
    endpoint makes the same choice each time.
    """
    return [
        endpoint
        for region in regions(backend)
        for endpoint in regional_endpoints(backend, region)
    ]


def has_platform(endpoints: Iterable[Endpoint], platform: Platform) -> bool:
    """Return True if any endpoint runs on the given platform generation."""
    return any(endpoint.platform == platform for endpoint in endpoints)


def load_backend(path: Path) -> Backend:
    """Load a Backend from a JSON or YAML document.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError("backend", f"Failed to read {path}: {exc}") from exc

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as exc:
        raise ConfigError("backend", f"Failed to parse {path}: {exc}") from exc

    try:
        return Backend.model_validate(data or {})
    except PydanticValidationError as exc:
        raise ConfigError("backend", f"Invalid backend in {path}: {exc}") from exc
