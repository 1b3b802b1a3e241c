"""Custom exception hierarchy for cfdeploy configuration and deploy stages."""


class CfDeployError(Exception):
    """Base exception for all cfdeploy errors.

    All cfdeploy-specific exceptions inherit from this class, enabling
    centralized exception handling in the CLI.
    """

    pass


class ConfigError(CfDeployError):
    """Exception raised for configuration errors.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class DeploymentError(CfDeployError):
    """Exception raised when a deploy stage fails.

    Attributes:
        operation: Short name of the failing operation (e.g. "upload")
        message: Human-readable error message
    """

    def __init__(self, operation: str, message: str) -> None:
        """Create a deployment error for an operation."""
        self.operation = operation
        self.message = message
        super().__init__(message)


class SourceMissingError(DeploymentError):
    """Raised when endpoints are scheduled for a codebase with no packaged source.

    This means the packaging and planning stages disagreed about what had to
    be built, so it is reported as an internal inconsistency.
    """

    def __init__(self, codebase: str, generation: str | None = None) -> None:
        """Create an error naming the codebase (and generation, if known)."""
        self.codebase = codebase
        self.generation = generation
        detail = f" ({generation})" if generation else ""
        super().__init__(
            operation="upload",
            message=(
                f"Source for codebase {codebase}{detail} unexpectedly empty. "
                "This should never happen; the packaging and planning stages "
                "disagree about what needed building."
            ),
        )


class UploadError(DeploymentError):
    """Raised when requesting an upload destination or transferring bytes fails.

    Attributes:
        status_code: HTTP status returned by the remote service, if any
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Create an upload error with an optional HTTP status code."""
        self.status_code = status_code
        super().__init__(operation="upload", message=message)


class PermissionDeniedError(DeploymentError):
    """Raised by access checkers when the caller may not deploy the backend."""

    def __init__(self, message: str) -> None:
        """Create a permission error."""
        super().__init__(operation="permissions", message=message)
