"""Maven pom.xml reader for plugin configuration and properties."""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path

from graalbuild.core.exceptions.errors import ConfigurationError
from graalbuild.core.logger.logger import get_logger
from graalbuild.models.project import (
    DEFAULT_PLUGIN_GROUP_ID,
    ConfigNode,
    Plugin,
    PluginExecution,
)

logger = get_logger(__name__)


@dataclass
class PomInfo:
    """The parts of a POM the native-image step cares about.

    Attributes:
        group_id: Project groupId (inherited from parent when absent).
        artifact_id: Project artifactId.
        version: Project version (inherited from parent when absent).
        packaging: Packaging type.
        properties: Declared <properties>.
        plugins: Plugins declared under <build><plugins>.
    """

    group_id: str = ""
    artifact_id: str = ""
    version: str = ""
    packaging: str = "jar"
    properties: dict[str, str] = field(default_factory=dict)
    plugins: list[Plugin] = field(default_factory=list)


class PomReader:
    """Reads a pom.xml into a PomInfo."""

    def __init__(self) -> None:
        self.namespace = ""

    def read(self, pom_file: Path) -> PomInfo:
        """Parse ``pom_file``.

        Raises:
            ConfigurationError: If the file cannot be read or parsed.
        """
        try:
            content = pom_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read POM {pom_file}",
                config_key=str(pom_file),
                details={"error": str(e)},
            ) from e

        try:
            root = ET.fromstring(self._clean_xml(content))
        except ET.ParseError as e:
            raise ConfigurationError(
                f"Failed to parse {pom_file}",
                config_key=str(pom_file),
                details={"error": str(e)},
            ) from e

        self.namespace = self._extract_namespace(root)
        parent = self._get_element(root, "parent")

        info = PomInfo(
            group_id=self._text(root, "groupId") or self._text(parent, "groupId"),
            artifact_id=self._text(root, "artifactId"),
            version=self._text(root, "version") or self._text(parent, "version"),
            packaging=self._text(root, "packaging") or "jar",
        )

        properties = self._get_element(root, "properties")
        if properties is not None:
            for prop in properties:
                if isinstance(prop.tag, str):
                    info.properties[prop.tag.split("}")[-1]] = (prop.text or "").strip()

        build = self._get_element(root, "build")
        plugins = self._get_element(build, "plugins")
        if plugins is not None:
            for plugin in self._get_children(plugins, "plugin"):
                info.plugins.append(self._read_plugin(plugin))

        logger.debug(f"Read {len(info.plugins)} plugins from {pom_file}")
        return info

    def _read_plugin(self, element: ET.Element) -> Plugin:
        configuration = self._get_element(element, "configuration")
        executions: list[PluginExecution] = []

        executions_elem = self._get_element(element, "executions")
        if executions_elem is not None:
            for execution in self._get_children(executions_elem, "execution"):
                exec_config = self._get_element(execution, "configuration")
                goals_elem = self._get_element(execution, "goals")
                goals = (
                    [(g.text or "").strip() for g in self._get_children(goals_elem, "goal")]
                    if goals_elem is not None
                    else []
                )
                executions.append(
                    PluginExecution(
                        id=self._text(execution, "id") or "default",
                        goals=goals,
                        configuration=(
                            ConfigNode.from_element(exec_config) if exec_config is not None else None
                        ),
                    )
                )

        return Plugin(
            group_id=self._text(element, "groupId") or DEFAULT_PLUGIN_GROUP_ID,
            artifact_id=self._text(element, "artifactId"),
            configuration=ConfigNode.from_element(configuration) if configuration is not None else None,
            executions=executions,
        )

    def _clean_xml(self, content: str) -> str:
        """Strip the XML declaration and comments before parsing."""
        content = re.sub(r"<\?xml[^>]*\?>", "", content)
        content = re.sub(r"<!--.*?-->", "", content, flags=re.DOTALL)
        return content.strip()

    def _extract_namespace(self, root: ET.Element) -> str:
        if "}" in root.tag:
            return root.tag.split("}")[0] + "}"
        return ""

    def _get_element(self, parent: ET.Element | None, tag: str) -> ET.Element | None:
        """Get a direct child element, handling namespace."""
        if parent is None:
            return None
        elem = parent.find(f"{self.namespace}{tag}")
        if elem is not None:
            return elem
        return parent.find(tag)

    def _get_children(self, parent: ET.Element, tag: str) -> list[ET.Element]:
        return parent.findall(f"{self.namespace}{tag}") or parent.findall(tag)

    def _text(self, parent: ET.Element | None, tag: str) -> str:
        elem = self._get_element(parent, tag)
        if elem is None or elem.text is None:
            return ""
        return elem.text.strip()
