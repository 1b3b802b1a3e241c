"""Runtime settings for the remote Cloud Functions clients.

Settings are resolved from ``CFDEPLOY_*`` environment variables over the
defaults in :mod:`cfdeploy.config.defaults`.
"""

import logging
import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from cfdeploy.config.defaults import DEFAULT_HTTP_SETTINGS, FUNCTIONS_ORIGIN
from cfdeploy.lib.errors import ConfigError

logger = logging.getLogger(__name__)

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "functions_origin": "CFDEPLOY_FUNCTIONS_ORIGIN",
    "functions_v2_origin": "CFDEPLOY_FUNCTIONS_V2_ORIGIN",
    "access_token": "CFDEPLOY_ACCESS_TOKEN",
    "http_timeout": "CFDEPLOY_HTTP_TIMEOUT",
    "upload_chunk_size": "CFDEPLOY_UPLOAD_CHUNK_SIZE",
}


class DeploySettings(BaseModel):
    """Connection settings for the upload stage.

    Attributes:
        functions_origin: Base URL of the gen-1 Cloud Functions API
        functions_v2_origin: Base URL of the gen-2 Cloud Functions API
        access_token: OAuth bearer token sent to the Cloud Functions APIs
        http_timeout: Per-request timeout in seconds
        upload_chunk_size: Bytes read from the bundle per streamed chunk
    """

    model_config = ConfigDict(extra="forbid")

    functions_origin: str = Field(default=FUNCTIONS_ORIGIN)
    functions_v2_origin: str = Field(default=FUNCTIONS_ORIGIN)
    access_token: str | None = Field(default=None)
    http_timeout: float = Field(
        default=DEFAULT_HTTP_SETTINGS["http_timeout"], gt=0
    )
    upload_chunk_size: int = Field(
        default=int(DEFAULT_HTTP_SETTINGS["upload_chunk_size"]), gt=0
    )

    @field_validator("functions_origin", "functions_v2_origin")
    @classmethod
    def validate_origin(cls, v: str) -> str:
        """Require an http(s) origin and strip trailing slashes."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Invalid API origin: {v}. Must start with http(s)://")
        return v.rstrip("/")


def load_settings(
    env_vars: Mapping[str, str] | None = None, **overrides: Any
) -> DeploySettings:
    """Resolve settings from environment variables and explicit overrides.

    Precedence: overrides > environment > defaults.

    Args:
        env_vars: Environment mapping (defaults to ``os.environ``)
        **overrides: Field values that win over the environment; None values
            are ignored

    Returns:
        Validated DeploySettings

    Raises:
        ConfigError: If a value fails validation
    """
    env = os.environ if env_vars is None else env_vars
    resolved: dict[str, Any] = {}
    for field, env_name in ENV_VAR_MAP.items():
        if env_name in env and env[env_name] != "":
            resolved[field] = env[env_name]
    resolved.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = DeploySettings.model_validate(resolved)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "settings"
        raise ConfigError(field, first["msg"]) from exc

    logger.debug(
        "Resolved deploy settings (origin=%s, v2 origin=%s, timeout=%s)",
        settings.functions_origin,
        settings.functions_v2_origin,
        settings.http_timeout,
    )
    return settings
