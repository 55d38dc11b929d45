"""Native-image build step driver.

The step runs once per invocation, without retries:

1. skip gate
2. classpath resolution
3. version probe and major.minor check
4. command assembly (local or containerized)
5. execution with inherited standard streams, blocking until exit
"""

import time
from pathlib import Path

from graalbuild import __version__
from graalbuild.core.config.settings import NativeImageSettings
from graalbuild.core.exceptions.errors import BuildFailedError, ProcessError
from graalbuild.core.logger.logger import get_logger
from graalbuild.models.build import BuildResult, VersionInfo
from graalbuild.models.project import Project
from graalbuild.native_image.classpath import ClasspathResolver
from graalbuild.native_image.command import CommandBuilder, compiler_arguments
from graalbuild.native_image.environment import Environment
from graalbuild.native_image.identity import UidResolver
from graalbuild.native_image.main_class import MainClassResolver
from graalbuild.native_image.process import ProcessRunner
from graalbuild.native_image.version import VersionProbe, check_version
from graalbuild.native_image.volumes import VolumeMapper
from graalbuild.project.evaluator import PropertyEvaluator

logger = get_logger(__name__)

DEFAULT_OUTPUT_DIRECTORY = Path("target")


class NativeImageBuild:
    """Builds a native executable for a project."""

    def __init__(
        self,
        project: Project,
        settings: NativeImageSettings,
        environment: Environment | None = None,
        runner: ProcessRunner | None = None,
        own_version: str = __version__,
    ) -> None:
        """Initialize the build step.

        Args:
            project: Project providing artifacts and plugin configuration.
            settings: Step options.
            environment: Platform access (real OS by default).
            runner: Process runner (subprocess by default).
            own_version: Version compared against native-image.
        """
        self.project = project
        self.settings = settings
        self.environment = environment or Environment()
        self.runner = runner or ProcessRunner()
        self.own_version = settings.expected_version or own_version

        self.command_builder = CommandBuilder(settings.container_runtime)
        self.classpath_resolver = ClasspathResolver()
        self.version_probe = VersionProbe(self.environment, self.runner, self.command_builder)
        self.volume_mapper = VolumeMapper(self.environment)
        self.uid_resolver = UidResolver(self.environment, enforce=settings.enforce_uid)
        self.main_class_resolver = MainClassResolver(project, PropertyEvaluator(project))

    @property
    def output_directory(self) -> Path:
        directory = (
            self.settings.output_directory
            or self.project.build_directory
            or DEFAULT_OUTPUT_DIRECTORY
        )
        return directory.absolute()

    @property
    def local_repository(self) -> Path:
        if self.settings.local_repository is not None:
            return self.settings.local_repository
        return self.environment.home() / ".m2" / "repository"

    @property
    def java_home(self) -> Path | None:
        return self.settings.java_home or self.environment.java_home()

    def probe_version(self) -> VersionInfo:
        """Probe native-image and warn on a local major.minor mismatch."""
        version_info = self.version_probe.probe(
            docker_image=self.settings.docker_image,
            entry_point=self.settings.docker_entry_point,
            java_home=None if self.settings.uses_container else self.java_home,
        )
        check_version(version_info, self.own_version, self.settings.uses_container)
        return version_info

    def arguments(self) -> list[str]:
        """Return the native-image arguments following the classpath."""
        main_class = self.main_class_resolver.resolve(self.settings.main_class)
        return compiler_arguments(self.settings.build_args, main_class, self.settings.image_name)

    def command_prefix(self, executable: str) -> list[str]:
        """Return the local executable or the container run prefix."""
        if not self.settings.uses_container:
            return self.command_builder.local(executable)

        output = str(self.output_directory)
        volumes = self.volume_mapper.compute(
            output_directory=output,
            local_repository=str(self.local_repository),
            volumes=self.settings.volumes,
            disable_automatic_volumes=self.settings.disable_automatic_volumes,
            home=str(self.environment.home()),
        )
        return self.command_builder.container(
            self.settings.docker_image,
            workdir=output,
            user=self.uid_resolver.resolve(),
            volumes=volumes,
            entry_point=self.settings.docker_entry_point,
        )

    def build_command(self, executable: str, classpath: str) -> tuple[str, ...]:
        return self.command_builder.build(self.command_prefix(executable), classpath, self.arguments())

    def execute(self) -> BuildResult:
        """Run the build step.

        Returns:
            BuildResult describing a successful or skipped build.

        Raises:
            MissingArtifactError: If an artifact was not packaged yet.
            ArchiveReadError: If a classpath archive is unreadable.
            ProbeExecutionError: If the version probe fails.
            IdentityRequiredError: If uid/gid is enforced and unavailable.
            BuildFailedError: If native-image exits non-zero.
            ProcessError: If native-image cannot be started or awaited.
        """
        if self.settings.skip:
            logger.info("Skipping native-image generation (parameter 'skip' is true).")
            return BuildResult(
                success=True,
                skipped=True,
                skip_reason="Parameter 'skip' is true",
            )

        self.classpath_resolver.resolve(self.project.dependencies, self.project.artifact)
        classpath = self.classpath_resolver.classpath_string()

        version_info = self.probe_version()

        command = self.build_command(version_info.executable, classpath)
        command_string = " ".join(command)
        logger.info(f"Executing: {command_string}")

        start_time = time.time()
        try:
            return_code = self.runner.run(command, cwd=self.output_directory)
        except (OSError, KeyboardInterrupt) as e:
            raise ProcessError(
                f"Building image with {version_info.executable} failed",
                executable=version_info.executable,
                details={"error": str(e) or type(e).__name__},
            ) from e

        if return_code != 0:
            raise BuildFailedError(
                f"Execution of {command_string} returned non-zero result",
                command=command_string,
                return_code=return_code,
            )

        duration = time.time() - start_time
        logger.info(f"native-image completed successfully in {duration:.1f}s")
        result = BuildResult(
            success=True,
            command=command_string,
            return_code=return_code,
            version_info=version_info,
            duration_seconds=duration,
        )
        logger.debug(f"Build result: {result.to_dict()}")
        return result
