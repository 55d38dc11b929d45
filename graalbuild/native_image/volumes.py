"""Container bind-mount computation.

Rules:
- the home directory is always mounted onto itself, unless automatic
  volumes are disabled;
- the output directory and local repository are mounted onto themselves
  when they exist and are not already covered by the home mount;
- user mappings must point at an existing host path, must not live under
  the auto-mounted home and need a non-blank container path;
- host paths are normalised, and a user mapping replaces a default with the
  same host path.
"""

import os
from collections.abc import Mapping
from pathlib import PurePath
from typing import Any

from graalbuild.core.logger.logger import get_logger
from graalbuild.models.build import VolumeMapping
from graalbuild.native_image.environment import Environment

logger = get_logger(__name__)


def _normalized(path: str | None) -> str | None:
    if path is None or not path.strip():
        return path
    return os.path.normpath(path)


def is_nested(path: str, root: str) -> bool:
    """Whether ``path`` equals ``root`` or lies below it."""
    return PurePath(path).is_relative_to(PurePath(root))


class VolumeMapper:
    """Computes the -v arguments for a containerized build."""

    def __init__(self, environment: Environment) -> None:
        self.environment = environment

    def compute(
        self,
        output_directory: str,
        local_repository: str | None,
        volumes: Mapping[Any, Any] | None,
        disable_automatic_volumes: bool,
        home: str | None = None,
    ) -> list[VolumeMapping]:
        """Compute the volume mappings, sorted by host path.

        Args:
            output_directory: Build output directory.
            local_repository: Local artifact repository.
            volumes: User-supplied host -> container paths.
            disable_automatic_volumes: Skip the home/output/repository mounts.
            home: Home directory, defaults to the environment's.

        Returns:
            Mappings whose host paths all exist.
        """
        if home is None:
            home = str(self.environment.home())
        home = os.path.normpath(home)

        mappings: dict[str, VolumeMapping] = {}

        if not disable_automatic_volumes:
            mappings[home] = VolumeMapping(host=home, container=home)
            for path in (output_directory, local_repository):
                path = _normalized(path)
                if self._exists(path) and not is_nested(path, home):
                    mappings[path] = VolumeMapping(host=path, container=path)

        for key, value in (volumes or {}).items():
            host = _normalized(self._as_string(key))
            container = self._as_string(value)

            if not self._exists(host):
                continue
            if not disable_automatic_volumes and is_nested(host, home):
                logger.warning(f"Discarding volume map <{host}:{container}> since it is prefixed by $HOME")
            elif not container.strip():
                logger.warning(f"Invalid image path {container}")
            else:
                mappings[host] = VolumeMapping(host=host, container=container)

        return sorted(mappings.values(), key=lambda mapping: mapping.host)

    def _exists(self, path: str | None) -> bool:
        if path is None or not path.strip():
            return False
        try:
            exists = self.environment.exists(path)
        except (ValueError, OSError) as e:
            logger.error(f"Invalid path {path}: {e}")
            return False
        if not exists:
            logger.error(f"Local Volume <{path}> does not exist")
        return exists

    def _as_string(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if value is not None:
            logger.warning(f"Expected string, got {type(value).__name__}")
        return ""
