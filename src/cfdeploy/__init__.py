"""cfdeploy - change detection and source upload for Cloud Functions deploys.

Main features:
- Deterministic fingerprints from environment, secret bindings and source
- One gen-1 upload per codebase, one gen-2 upload per region
- Concurrent uploads with first-failure propagation
"""

from cfdeploy.lib.errors import CfDeployError, ConfigError, DeploymentError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CfDeployError",
    "ConfigError",
    "DeploymentError",
]
