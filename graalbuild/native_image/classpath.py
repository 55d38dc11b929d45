"""Image classpath resolution.

Collects the archives native-image has to see (runtime dependencies plus the
project's own archive) and checks that bundled native-image configuration
follows the recommended ``META-INF/native-image/<groupId>/<artifactId>``
layout.
"""

import os
import zipfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from graalbuild.core.exceptions.errors import ArchiveReadError, MissingArtifactError
from graalbuild.core.logger.logger import get_logger
from graalbuild.models.build import ClasspathEntry
from graalbuild.models.project import Artifact

logger = get_logger(__name__)

NATIVE_IMAGE_META_INF = "META-INF/native-image"
NATIVE_IMAGE_PROPERTIES_FILENAME = "native-image.properties"
RECOMMENDED_LAYOUT = "META-INF/native-image/${groupId}/${artifactId}/native-image.properties"

IMAGE_CLASSPATH_SCOPES = ("compile", "runtime")
ARCHIVE_TYPE = "jar"


class ClasspathResolver:
    """Builds the ordered image classpath for one build invocation."""

    def __init__(self, step_name: str = "graalbuild") -> None:
        """Initialize the resolver.

        Args:
            step_name: Name used in the hint when an artifact is unpackaged.
        """
        self.step_name = step_name
        self.entries: list[ClasspathEntry] = []

    def resolve(
        self,
        dependencies: Iterable[Artifact],
        project_artifact: Artifact,
    ) -> list[ClasspathEntry]:
        """Resolve the classpath.

        Dependencies outside the compile and runtime scopes are left out.
        The project artifact always comes last.

        Args:
            dependencies: Project dependencies in declaration order.
            project_artifact: The project's own archive.

        Returns:
            Ordered classpath entries.

        Raises:
            MissingArtifactError: If an artifact has no file.
            ArchiveReadError: If an archive cannot be read.
        """
        self.entries.clear()
        for dependency in dependencies:
            if (dependency.scope or "compile") not in IMAGE_CLASSPATH_SCOPES:
                logger.debug(f"Ignoring {dependency.scope}-scoped dependency {dependency}")
                continue
            self.add(dependency)
        self.add(project_artifact)
        return list(self.entries)

    def add(self, artifact: Artifact) -> None:
        """Validate ``artifact`` and append it to the classpath."""
        if artifact.type != ARCHIVE_TYPE:
            logger.warning(f"Ignoring non-jar type ImageClasspath Entry {artifact}")
            return

        if artifact.file is None:
            raise MissingArtifactError(
                f"Missing jar-file for {artifact}. "
                f"Ensure {self.step_name} runs after the package phase.",
                artifact=artifact.coordinates,
            )

        archive_path = artifact.file.absolute()
        logger.info(f"ImageClasspath Entry: {artifact} ({archive_path.as_uri()})")

        warnings = self.check_layout(artifact, archive_path)
        self.entries.append(
            ClasspathEntry(path=archive_path, artifact=artifact.coordinates, layout_warnings=warnings)
        )

    def check_layout(self, artifact: Artifact, archive_path: Path) -> int:
        """Warn about native-image.properties files outside the recommended layout.

        Returns:
            Number of offending files.

        Raises:
            ArchiveReadError: If the archive cannot be opened or listed.
        """
        try:
            with zipfile.ZipFile(archive_path) as archive:
                names = archive.namelist()
        except (OSError, zipfile.BadZipFile) as e:
            raise ArchiveReadError(
                f"Artifact {artifact} cannot be added to image classpath",
                artifact=artifact.coordinates,
                archive_path=str(archive_path),
                details={"error": str(e)},
            ) from e

        prefix = NATIVE_IMAGE_META_INF + "/"
        offending = 0
        for name in names:
            if not name.startswith(prefix) or name.endswith("/"):
                continue
            relative = PurePosixPath(name[len(prefix):])
            if relative.name != NATIVE_IMAGE_PROPERTIES_FILENAME:
                continue
            if relative.parent.parts != (artifact.group_id, artifact.artifact_id):
                offending += 1
                logger.warning(
                    f"jar:{archive_path.as_uri()}!/{name} does not match "
                    f"recommended {RECOMMENDED_LAYOUT} layout."
                )
        return offending

    def classpath_string(self) -> str:
        """Join the resolved entries with the platform path separator."""
        return os.pathsep.join(str(entry.path) for entry in self.entries)
