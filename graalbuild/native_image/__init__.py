"""Native-image build step.

This module provides:
- Image classpath resolution with metadata layout checks
- Container volume and user identity computation
- native-image version probing
- Main class inference from other plugins
- Command assembly and execution
"""

from graalbuild.native_image.classpath import ClasspathResolver
from graalbuild.native_image.command import CommandBuilder, compiler_arguments
from graalbuild.native_image.environment import Environment
from graalbuild.native_image.identity import UidResolver
from graalbuild.native_image.main_class import (
    DEFAULT_PROVIDERS,
    MainClassResolver,
    PluginConfigurationProvider,
    PluginExecutionsProvider,
)
from graalbuild.native_image.orchestrator import NativeImageBuild
from graalbuild.native_image.process import ProcessRunner
from graalbuild.native_image.version import VersionProbe, check_version, major_minor
from graalbuild.native_image.volumes import VolumeMapper

__all__ = [
    "ClasspathResolver",
    "CommandBuilder",
    "compiler_arguments",
    "Environment",
    "UidResolver",
    "DEFAULT_PROVIDERS",
    "MainClassResolver",
    "PluginConfigurationProvider",
    "PluginExecutionsProvider",
    "NativeImageBuild",
    "ProcessRunner",
    "VersionProbe",
    "check_version",
    "major_minor",
    "VolumeMapper",
]
