"""Configuration for cfdeploy."""

from cfdeploy.config.settings import DeploySettings, load_settings

__all__ = ["DeploySettings", "load_settings"]
