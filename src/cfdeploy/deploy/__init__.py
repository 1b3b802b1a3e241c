"""Cloud Functions deploy stages.

This package provides fingerprinting of endpoints for change detection and
the upload stage that publishes packaged source for each platform/region.
"""

from cfdeploy.deploy.context import (
    CodebaseConfig,
    CodebaseSource,
    DeployContext,
    DeployPayload,
    RegionStorageMap,
)
from cfdeploy.deploy.upload import deploy, plan_uploads

__all__ = [
    "CodebaseConfig",
    "CodebaseSource",
    "DeployContext",
    "DeployPayload",
    "RegionStorageMap",
    "deploy",
    "plan_uploads",
]
