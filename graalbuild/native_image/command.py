"""native-image command line assembly."""

from collections.abc import Iterable, Sequence

from graalbuild.models.build import VolumeMapping

MAIN_CLASS_NONE = "."


class CommandBuilder:
    """Builds local and containerized native-image command lines."""

    def __init__(self, container_runtime: str = "docker") -> None:
        self.container_runtime = container_runtime

    def local(self, executable: str) -> list[str]:
        return [executable]

    def container(
        self,
        image: str,
        workdir: str | None = None,
        user: str | None = None,
        volumes: Iterable[VolumeMapping] = (),
        entry_point: str | None = None,
    ) -> list[str]:
        """Build a ``<runtime> container run`` prefix ending with the image.

        Args:
            image: Container image holding native-image.
            workdir: Working directory inside the container.
            user: ``uid:gid`` to run as.
            volumes: Bind mounts.
            entry_point: Entry point overriding the image's.

        Returns:
            Command prefix.
        """
        command = [self.container_runtime, "container", "run"]
        if workdir:
            command += ["--workdir", workdir]
        if user:
            command += ["--user", user]
        for volume in volumes:
            command += ["-v", str(volume)]
        command.append("--rm")
        if entry_point and entry_point.strip():
            command += ["--entrypoint", entry_point.strip()]
        command.append(image)
        return command

    def build(
        self,
        prefix: Sequence[str],
        classpath: str,
        arguments: Sequence[str],
    ) -> tuple[str, ...]:
        """Combine prefix, classpath and compiler arguments into the final command."""
        return (*prefix, "-cp", classpath, *arguments)


def compiler_arguments(
    build_args: Iterable[str] | None,
    main_class: str | None,
    image_name: str | None,
) -> list[str]:
    """Translate step options into native-image arguments.

    Each build argument is split on whitespace. A main class of ``"."``
    suppresses the ``-H:Class`` flag.
    """
    arguments: list[str] = []
    for build_arg in build_args or []:
        arguments.extend(build_arg.split())
    if main_class is not None and main_class != MAIN_CLASS_NONE:
        arguments.append(f"-H:Class={main_class}")
    if image_name is not None:
        arguments.append(f"-H:Name={image_name}")
    return arguments
