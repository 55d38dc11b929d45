"""Exception definitions module."""

from graalbuild.core.exceptions.errors import (
    ArchiveReadError,
    BuildFailedError,
    ConfigurationError,
    GraalBuildError,
    IdentityRequiredError,
    MissingArtifactError,
    ProbeExecutionError,
    ProcessError,
)

__all__ = [
    "GraalBuildError",
    "MissingArtifactError",
    "ArchiveReadError",
    "IdentityRequiredError",
    "ProbeExecutionError",
    "BuildFailedError",
    "ProcessError",
    "ConfigurationError",
]
