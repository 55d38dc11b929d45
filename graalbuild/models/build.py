"""Data models for a native-image build invocation."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

UNKNOWN_VERSION = "Unknown"


class VolumeMapping(BaseModel):
    """A host path mounted at a container path."""

    host: str = Field(description="Existing path on the host")
    container: str = Field(description="Mount point inside the container")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.host}:{self.container}"


class VersionInfo(BaseModel):
    """Result of probing the native-image executable."""

    version: str = Field(default=UNKNOWN_VERSION, description="Reported version")
    executable: str = Field(description="Local executable path or container runtime")

    model_config = {"frozen": True}

    @property
    def known(self) -> bool:
        """Whether the probe found a version marker."""
        return self.version != UNKNOWN_VERSION


@dataclass
class ClasspathEntry:
    """A resolved archive on the image classpath.

    Attributes:
        path: Absolute path to the archive.
        artifact: Coordinates of the artifact it belongs to.
        layout_warnings: Metadata files that do not follow the recommended layout.
    """

    path: Path
    artifact: str
    layout_warnings: int = 0


@dataclass
class BuildResult:
    """Result of a native-image build step.

    Attributes:
        success: Whether the build succeeded.
        skipped: Whether the step was bypassed.
        skip_reason: Why the step was bypassed.
        command: The command line that was executed.
        return_code: Exit code of the build process.
        version_info: Probed native-image version.
        duration_seconds: Time taken by the build process.
    """

    success: bool
    skipped: bool = False
    skip_reason: str | None = None
    command: str | None = None
    return_code: int = 0
    version_info: VersionInfo | None = None
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        return {
            "success": self.success,
            "skipped": self.skipped,
            "skip_reason": self.skip_reason,
            "command": self.command,
            "return_code": self.return_code,
            "version": self.version_info.version if self.version_info else None,
            "duration_seconds": self.duration_seconds,
        }
