"""Host project model consumed by the native-image step."""

from __future__ import annotations

from pathlib import Path
from typing import Any
from xml.etree.ElementTree import Element

from pydantic import BaseModel, Field

DEFAULT_PLUGIN_GROUP_ID = "org.apache.maven.plugins"


class Artifact(BaseModel):
    """A packaged artifact and its resolved file."""

    group_id: str = Field(description="Maven groupId")
    artifact_id: str = Field(description="Maven artifactId")
    version: str = Field(default="", description="Artifact version")
    type: str = Field(default="jar", description="Packaging type")
    scope: str | None = Field(default=None, description="Dependency scope")
    file: Path | None = Field(
        default=None,
        description="Resolved file location (None until packaged)",
    )

    @property
    def coordinates(self) -> str:
        """Return groupId:artifactId:type:version[:scope]."""
        parts = [self.group_id, self.artifact_id, self.type, self.version]
        if self.scope:
            parts.append(self.scope)
        return ":".join(parts)

    def __str__(self) -> str:
        return self.coordinates


class ConfigNode(BaseModel):
    """One element of a plugin configuration tree."""

    name: str
    value: str | None = None
    children: list[ConfigNode] = Field(default_factory=list)

    def child(self, name: str) -> ConfigNode | None:
        """Return the first child called ``name``."""
        for node in self.children:
            if node.name == name:
                return node
        return None

    def find(self, *path: str) -> ConfigNode | None:
        """Walk ``path`` taking the first matching child at every level."""
        node: ConfigNode | None = self
        for name in path:
            node = node.child(name)
            if node is None:
                return None
        return node

    @classmethod
    def from_element(cls, element: Element) -> ConfigNode:
        """Build a tree from an XML element, dropping namespaces."""
        name = element.tag.split("}")[-1]
        children = [cls.from_element(child) for child in element if isinstance(child.tag, str)]
        text = element.text.strip() if element.text else None
        return cls(name=name, value=text or None, children=children)

    @classmethod
    def from_data(cls, name: str, data: Any) -> ConfigNode:
        """Build a tree from YAML data.

        Mappings become children, lists become repeated children with the
        same name, scalars become the node value.
        """
        node = cls(name=name)
        if isinstance(data, dict):
            for key, value in data.items():
                if isinstance(value, list):
                    node.children.extend(cls.from_data(str(key), item) for item in value)
                else:
                    node.children.append(cls.from_data(str(key), value))
        elif data is not None:
            node.value = str(data)
        return node


class PluginExecution(BaseModel):
    """A declared plugin execution."""

    id: str = "default"
    goals: list[str] = Field(default_factory=list)
    configuration: ConfigNode | None = None


class Plugin(BaseModel):
    """A build plugin with its configuration and executions."""

    group_id: str = DEFAULT_PLUGIN_GROUP_ID
    artifact_id: str
    configuration: ConfigNode | None = None
    executions: list[PluginExecution] = Field(default_factory=list)

    @property
    def key(self) -> str:
        """Return groupId:artifactId."""
        return f"{self.group_id}:{self.artifact_id}"


class Project(BaseModel):
    """The project being packaged."""

    artifact: Artifact
    dependencies: list[Artifact] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    plugins: list[Plugin] = Field(default_factory=list)
    build_directory: Path | None = None

    def get_plugin(self, key: str) -> Plugin | None:
        """Look up a plugin by groupId:artifactId."""
        for plugin in self.plugins:
            if plugin.key == key:
                return plugin
        return None
