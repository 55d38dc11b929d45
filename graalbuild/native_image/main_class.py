"""Entry point inference from other plugins' configuration."""

from collections.abc import Sequence
from dataclasses import dataclass

from graalbuild.core.logger.logger import get_logger
from graalbuild.models.project import ConfigNode, Project
from graalbuild.native_image.command import MAIN_CLASS_NONE
from graalbuild.project.evaluator import PropertyEvaluator

logger = get_logger(__name__)


@dataclass(frozen=True)
class PluginConfigurationProvider:
    """Reads a value from a plugin's top-level configuration."""

    plugin_key: str
    path: tuple[str, ...]

    def lookup(self, project: Project, evaluator: PropertyEvaluator) -> str | None:
        plugin = project.get_plugin(self.plugin_key)
        if plugin is None:
            return None
        return self._value(plugin.configuration, evaluator)

    def _value(self, configuration: ConfigNode | None, evaluator: PropertyEvaluator) -> str | None:
        if configuration is None:
            return None
        node = configuration.find(*self.path)
        if node is None:
            return None
        return evaluator.evaluate_or_none(node.value)


@dataclass(frozen=True)
class PluginExecutionsProvider(PluginConfigurationProvider):
    """Reads a value from the first plugin execution that declares it."""

    def lookup(self, project: Project, evaluator: PropertyEvaluator) -> str | None:
        plugin = project.get_plugin(self.plugin_key)
        if plugin is None:
            return None
        for execution in plugin.executions:
            value = self._value(execution.configuration, evaluator)
            if value is not None:
                return value
        return None


DEFAULT_PROVIDERS: tuple[PluginConfigurationProvider, ...] = (
    PluginExecutionsProvider(
        "org.apache.maven.plugins:maven-shade-plugin",
        ("transformers", "transformer", "mainClass"),
    ),
    PluginConfigurationProvider(
        "org.apache.maven.plugins:maven-assembly-plugin",
        ("archive", "manifest", "mainClass"),
    ),
    PluginConfigurationProvider(
        "org.apache.maven.plugins:maven-jar-plugin",
        ("archive", "manifest", "mainClass"),
    ),
)


class MainClassResolver:
    """Resolves the application entry point once per build.

    An explicit main class always wins (``"."`` means "none"); otherwise the
    providers are tried in order and the first value found is used.
    """

    def __init__(
        self,
        project: Project,
        evaluator: PropertyEvaluator,
        providers: Sequence[PluginConfigurationProvider] = DEFAULT_PROVIDERS,
    ) -> None:
        self.project = project
        self.evaluator = evaluator
        self.providers = providers
        self._resolved = False
        self._main_class: str | None = None

    def resolve(self, explicit: str | None = None) -> str | None:
        """Return the main class, consulting providers only on first call."""
        if self._resolved:
            return self._main_class

        main_class = explicit
        if main_class is None:
            for provider in self.providers:
                main_class = provider.lookup(self.project, self.evaluator)
                if main_class is not None:
                    logger.info(
                        f"Obtained main class from plugin {provider.plugin_key} "
                        f"with the following path: {' -> '.join(provider.path)}"
                    )
                    break
        elif main_class == MAIN_CLASS_NONE:
            logger.debug("Main class explicitly disabled")

        self._main_class = main_class
        self._resolved = True
        return main_class
