"""native-image version probing and compatibility check."""

import re
from collections.abc import Iterable
from pathlib import Path

from graalbuild.core.exceptions.errors import ProbeExecutionError
from graalbuild.core.logger.logger import get_logger
from graalbuild.models.build import UNKNOWN_VERSION, VersionInfo
from graalbuild.native_image.command import CommandBuilder
from graalbuild.native_image.environment import Environment
from graalbuild.native_image.process import ProcessRunner

logger = get_logger(__name__)

VERSION_MARKER = "GraalVM Version "
VERSION_FLAG = "--version"
MAJOR_MINOR_PATTERN = re.compile(r"(\d+\.\d+)\.")

# Relative to the GraalVM home, in lookup order.
EXECUTABLE_DIRECTORIES = (
    Path("lib", "svm", "bin"),
    Path("jre", "lib", "svm", "bin"),
    Path("bin"),
)


def major_minor(version: str) -> str:
    """Return the ``major.minor`` prefix of ``version``, or ``version`` itself."""
    match = MAJOR_MINOR_PATTERN.search(version)
    if match is None:
        return version
    return match.group(1)


def scan_version(lines: Iterable[str]) -> str:
    """Return the token following the first version marker in ``lines``."""
    for line in lines:
        index = line.find(VERSION_MARKER)
        if index < 0:
            continue
        tokens = line[index + len(VERSION_MARKER):].split()
        if tokens:
            return tokens[0]
    return UNKNOWN_VERSION


def check_version(
    version_info: VersionInfo,
    expected_version: str,
    containerized: bool,
) -> bool:
    """Compare major.minor versions, warning on a local mismatch.

    A mismatch never fails the build. Containerized builds are not checked
    since the image pins its own native-image.

    Returns:
        False when a mismatch was reported.
    """
    if containerized:
        return True
    if major_minor(version_info.version) == major_minor(expected_version):
        return True
    logger.warning(
        f"Major.Minor version mismatch between graalbuild ({expected_version}) "
        f"and native-image executable ({version_info.version})"
    )
    return False


class VersionProbe:
    """Runs ``native-image --version`` locally or in a container."""

    def __init__(
        self,
        environment: Environment,
        runner: ProcessRunner,
        builder: CommandBuilder,
    ) -> None:
        self.environment = environment
        self.runner = runner
        self.builder = builder

    def locate_executable(self, java_home: Path | None) -> Path:
        """Find the native-image executable under ``java_home``.

        Raises:
            ProbeExecutionError: If no executable candidate exists.
        """
        if java_home is None:
            raise ProbeExecutionError(
                "Could not determine the GraalVM home; set java_home, GRAALVM_HOME or JAVA_HOME"
            )

        names = ["native-image.exe", "native-image.cmd"] if self.environment.is_windows() else ["native-image"]
        candidate = java_home
        for directory in EXECUTABLE_DIRECTORIES:
            for name in names:
                candidate = java_home / directory / name
                if self.environment.is_executable(candidate):
                    return candidate

        raise ProbeExecutionError(f"Could not find executable native-image in {candidate}")

    def command(
        self,
        docker_image: str | None,
        entry_point: str | None,
        java_home: Path | None,
    ) -> tuple[list[str], str]:
        """Build the probe command.

        Returns:
            Tuple of (command, executable reference).
        """
        if not docker_image:
            executable = str(self.locate_executable(java_home))
            return [executable, VERSION_FLAG], executable

        logger.info(f"Checking: {docker_image}")
        prefix = self.builder.container(docker_image, entry_point=entry_point)
        return [*prefix, VERSION_FLAG], self.builder.container_runtime

    def probe(
        self,
        docker_image: str | None = None,
        entry_point: str | None = None,
        java_home: Path | None = None,
    ) -> VersionInfo:
        """Probe the native-image version.

        Args:
            docker_image: Container image, or None for a local executable.
            entry_point: Custom container entry point.
            java_home: GraalVM home for local execution.

        Returns:
            The version (or the unknown sentinel) and executable reference.

        Raises:
            ProbeExecutionError: If the probe cannot run or exits non-zero.
        """
        command, executable = self.command(docker_image, entry_point, java_home)

        try:
            with self.runner.probe(command) as process:
                version = scan_version(process.stdout or ())
                # Drain so the probe never blocks on a full pipe.
                for _ in process.stdout or ():
                    pass
                return_code = process.wait()
        except (OSError, KeyboardInterrupt) as e:
            raise ProbeExecutionError(
                f"Probing version info of native-image executable {command} failed",
                command=command,
                details={"error": str(e) or type(e).__name__},
            ) from e

        if return_code != 0:
            raise ProbeExecutionError(
                f"Execution of {' '.join(command)} returned non-zero result",
                command=command,
                details={"return_code": return_code},
            )

        logger.debug(f"native-image version {version} ({executable})")
        return VersionInfo(version=version, executable=executable)
