"""Property substitution for plugin configuration values."""

import re

from graalbuild.models.project import Project

PLACEHOLDER_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ExpressionEvaluationError(Exception):
    """Raised when a ${...} expression cannot be resolved."""


class PropertyEvaluator:
    """Evaluates ${name} expressions against project properties.

    Besides the declared properties, the usual project expressions
    (project.groupId, project.artifactId, project.version,
    project.build.directory) are available.
    """

    def __init__(self, project: Project) -> None:
        self.values: dict[str, str] = {
            "project.groupId": project.artifact.group_id,
            "project.artifactId": project.artifact.artifact_id,
            "project.version": project.artifact.version,
        }
        if project.build_directory is not None:
            self.values["project.build.directory"] = str(project.build_directory)
        self.values.update(project.properties)

    def evaluate(self, expression: str) -> str:
        """Substitute every placeholder in ``expression``.

        Raises:
            ExpressionEvaluationError: If a placeholder is undefined or
                expands into itself.
        """
        seen: set[str] = set()

        def substitute(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in self.values:
                raise ExpressionEvaluationError(f"Undefined property: {name}")
            if name in seen:
                raise ExpressionEvaluationError(f"Recursive property: {name}")
            seen.add(name)
            try:
                return PLACEHOLDER_PATTERN.sub(substitute, self.values[name])
            finally:
                seen.discard(name)

        return PLACEHOLDER_PATTERN.sub(substitute, expression)

    def evaluate_or_none(self, expression: str | None) -> str | None:
        """Evaluate ``expression``, mapping any failure to None."""
        if expression is None:
            return None
        try:
            return self.evaluate(expression)
        except ExpressionEvaluationError:
            return None
