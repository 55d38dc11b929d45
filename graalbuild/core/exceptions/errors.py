"""Custom exception definitions for graalbuild."""

from typing import Any


class GraalBuildError(Exception):
    """Base exception for all graalbuild errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class MissingArtifactError(GraalBuildError):
    """Raised when a classpath artifact has no resolved file.

    This means the step ran before the packaging phase produced the archive.
    """

    def __init__(
        self,
        message: str,
        artifact: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize missing artifact error.

        Args:
            message: Error message.
            artifact: Coordinates of the artifact without a file.
            details: Additional error details.
        """
        details = details or {}
        if artifact:
            details["artifact"] = artifact
        super().__init__(message, details)


class ArchiveReadError(GraalBuildError):
    """Raised when a classpath archive cannot be opened or walked."""

    def __init__(
        self,
        message: str,
        artifact: str | None = None,
        archive_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize archive read error.

        Args:
            message: Error message.
            artifact: Coordinates of the artifact.
            archive_path: Path of the archive on disk.
            details: Additional error details.
        """
        details = details or {}
        if artifact:
            details["artifact"] = artifact
        if archive_path:
            details["archive_path"] = archive_path
        super().__init__(message, details)


class IdentityRequiredError(GraalBuildError):
    """Raised when uid/gid lookup fails while enforcement is enabled."""


class ProbeExecutionError(GraalBuildError):
    """Raised when the native-image version probe cannot run or fails."""

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize probe execution error.

        Args:
            message: Error message.
            command: The probe command line.
            details: Additional error details.
        """
        details = details or {}
        if command:
            details["command"] = " ".join(command)
        super().__init__(message, details)


class BuildFailedError(GraalBuildError):
    """Raised when the native-image build process exits non-zero.

    The message always contains the full command line so the build can be
    reproduced by hand.
    """

    def __init__(
        self,
        message: str,
        command: str,
        return_code: int,
    ) -> None:
        """Initialize build failure.

        Args:
            message: Error message.
            command: Space-joined command line that was executed.
            return_code: Exit status of the process.
        """
        super().__init__(message)
        self.command = command
        self.return_code = return_code


class ProcessError(GraalBuildError):
    """Raised when spawning or awaiting the build process fails."""

    def __init__(
        self,
        message: str,
        executable: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize process error.

        Args:
            message: Error message.
            executable: Executable or container runtime that was launched.
            details: Additional error details.
        """
        details = details or {}
        if executable:
            details["executable"] = executable
        super().__init__(message, details)


class ConfigurationError(GraalBuildError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
