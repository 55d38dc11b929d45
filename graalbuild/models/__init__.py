"""Data models module."""

from graalbuild.models.build import (
    UNKNOWN_VERSION,
    BuildResult,
    ClasspathEntry,
    VersionInfo,
    VolumeMapping,
)
from graalbuild.models.project import (
    Artifact,
    ConfigNode,
    Plugin,
    PluginExecution,
    Project,
)

__all__ = [
    "Artifact",
    "ConfigNode",
    "Plugin",
    "PluginExecution",
    "Project",
    "UNKNOWN_VERSION",
    "BuildResult",
    "ClasspathEntry",
    "VersionInfo",
    "VolumeMapping",
]
