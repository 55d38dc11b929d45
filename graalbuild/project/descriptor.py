"""Project descriptor loading.

A descriptor is a YAML file that stands in for the host build system: it
lists the project artifact, its resolved dependencies, properties and the
configuration of other plugins. An optional ``pom`` key merges plugins and
properties from a Maven POM.

Example::

    pom: pom.xml
    build_directory: target
    artifact:
      file: target/app-1.0.jar
    dependencies:
      - group_id: org.slf4j
        artifact_id: slf4j-api
        version: "2.0.9"
        scope: compile
        file: ~/.m2/repository/org/slf4j/slf4j-api/2.0.9/slf4j-api-2.0.9.jar
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from graalbuild.core.config.loader import ConfigLoader
from graalbuild.core.exceptions.errors import ConfigurationError
from graalbuild.core.logger.logger import get_logger
from graalbuild.models.project import (
    DEFAULT_PLUGIN_GROUP_ID,
    Artifact,
    ConfigNode,
    Plugin,
    PluginExecution,
    Project,
)
from graalbuild.project.pom import PomReader

logger = get_logger(__name__)


def _resolve_path(value: Any, base_dir: Path) -> Path | None:
    if value is None or str(value).strip() == "":
        return None
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base_dir / path
    return path.resolve()


def _artifact(data: dict[str, Any], base_dir: Path, defaults: dict[str, Any] | None = None) -> Artifact:
    merged = dict(defaults or {})
    merged.update({k: v for k, v in data.items() if v is not None})
    merged["file"] = _resolve_path(merged.get("file"), base_dir)
    return Artifact(**merged)


def _plugin(data: dict[str, Any]) -> Plugin:
    executions = [
        PluginExecution(
            id=str(execution.get("id", "default")),
            goals=list(execution.get("goals") or []),
            configuration=(
                ConfigNode.from_data("configuration", execution["configuration"])
                if execution.get("configuration") is not None
                else None
            ),
        )
        for execution in data.get("executions") or []
    ]
    return Plugin(
        group_id=data.get("group_id") or DEFAULT_PLUGIN_GROUP_ID,
        artifact_id=data["artifact_id"],
        configuration=(
            ConfigNode.from_data("configuration", data["configuration"])
            if data.get("configuration") is not None
            else None
        ),
        executions=executions,
    )


def load_project(path: Path) -> Project:
    """Load a project descriptor.

    Args:
        path: Descriptor YAML file. Relative paths inside it are resolved
            against its directory.

    Returns:
        The described Project.

    Raises:
        ConfigurationError: If the descriptor or referenced POM is invalid.
    """
    config = ConfigLoader(path).load()
    base_dir = path.resolve().parent

    artifact_defaults: dict[str, Any] = {}
    properties: dict[str, str] = {}
    pom_plugins: list[Plugin] = []

    pom_path = _resolve_path(config.get("pom"), base_dir)
    if pom_path is not None:
        pom = PomReader().read(pom_path)
        artifact_defaults = {
            "group_id": pom.group_id,
            "artifact_id": pom.artifact_id,
            "version": pom.version,
            "type": pom.packaging,
        }
        properties.update(pom.properties)
        pom_plugins = pom.plugins
        logger.info(f"Using POM {pom_path} ({pom.group_id}:{pom.artifact_id})")

    try:
        properties.update({str(k): str(v) for k, v in (config.get("properties") or {}).items()})
        # Descriptor plugins come first so they shadow POM declarations.
        plugins = [_plugin(p) for p in config.get("plugins") or []] + pom_plugins

        project = Project(
            artifact=_artifact(config.get("artifact") or {}, base_dir, artifact_defaults),
            dependencies=[_artifact(d, base_dir) for d in config.get("dependencies") or []],
            properties=properties,
            plugins=plugins,
            build_directory=_resolve_path(config.get("build_directory"), base_dir),
        )
    except (ValidationError, KeyError, AttributeError, TypeError) as e:
        raise ConfigurationError(
            f"Invalid project descriptor {path}",
            config_key=str(path),
            details={"error": str(e)},
        ) from e

    logger.debug(f"Loaded project {project.artifact} with {len(project.dependencies)} dependencies")
    return project
