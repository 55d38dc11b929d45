"""Pytest configuration and shared fixtures."""

import io
import shutil
import tempfile
import zipfile
from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Generator
from unittest.mock import MagicMock

import pytest

from graalbuild.models.project import Artifact, Project
from graalbuild.native_image.environment import Environment
from graalbuild.native_image.process import ProcessRunner


class FakeEnvironment(Environment):
    """Deterministic platform: fixed home, owner ids and executables.

    Path existence is still checked against the real (temporary) filesystem.
    """

    def __init__(self, home: Path) -> None:
        self.home_dir = home
        self.windows = False
        self.owner: tuple[int, int] = (1000, 1000)
        self.owner_error: OSError | None = None
        self.graal_home: Path | None = None
        self.executables: set[Path] = set()

    def os_name(self) -> str:
        return "Windows 11" if self.windows else "Linux"

    def home(self) -> Path:
        return self.home_dir

    def java_home(self) -> Path | None:
        return self.graal_home

    def is_executable(self, path: Path) -> bool:
        return path in self.executables

    def owner_ids(self, path: Path) -> tuple[int, int]:
        if self.owner_error is not None:
            raise self.owner_error
        return self.owner


class FakeRunner(ProcessRunner):
    """Records commands instead of spawning processes."""

    def __init__(self) -> None:
        self.probe_output = "GraalVM Version 22.3.0 (Java Version 17.0.5+8-jvmci-22.3-b08)\n"
        self.probe_return_code = 0
        self.probe_error: BaseException | None = None
        self.build_return_code = 0
        self.build_error: BaseException | None = None
        self.probe_commands: list[list[str]] = []
        self.run_commands: list[tuple[tuple[str, ...], Path]] = []
        self.probes_killed = 0

    @contextmanager
    def probe(self, command: Sequence[str]) -> Iterator[MagicMock]:
        self.probe_commands.append(list(command))
        if self.probe_error is not None:
            raise self.probe_error
        process = MagicMock()
        process.stdout = io.StringIO(self.probe_output)
        process.wait.return_value = self.probe_return_code
        try:
            yield process
        finally:
            self.probes_killed += 1

    def run(self, command: Sequence[str], cwd: Path) -> int:
        self.run_commands.append((tuple(command), cwd))
        if self.build_error is not None:
            raise self.build_error
        return self.build_return_code


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test.

    Yields:
        Path to the temporary directory.
    """
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def home_dir(temp_dir: Path) -> Path:
    """Create a fake home directory."""
    home = temp_dir / "home" / "builder"
    home.mkdir(parents=True)
    return home


@pytest.fixture
def fake_environment(home_dir: Path) -> FakeEnvironment:
    """Create a Linux environment rooted at the fake home."""
    return FakeEnvironment(home_dir)


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Create a process runner that records commands."""
    return FakeRunner()


@pytest.fixture
def make_jar(temp_dir: Path) -> Callable[..., Path]:
    """Factory writing a jar with the given entry names.

    Returns:
        Function taking a file name and entry names, returning the jar path.
    """

    def _make_jar(name: str, entries: Sequence[str] = ()) -> Path:
        jar_dir = temp_dir / "jars"
        jar_dir.mkdir(exist_ok=True)
        jar_path = jar_dir / name
        with zipfile.ZipFile(jar_path, "w") as archive:
            archive.writestr("META-INF/MANIFEST.MF", "Manifest-Version: 1.0\n")
            for entry in entries:
                archive.writestr(entry, "Args = --no-fallback\n")
        return jar_path

    return _make_jar


@pytest.fixture
def sample_project(temp_dir: Path, make_jar: Callable[..., Path]) -> Project:
    """Create a project with two compile dependencies and a packaged artifact."""
    build_dir = temp_dir / "target"
    build_dir.mkdir()
    return Project(
        artifact=Artifact(
            group_id="com.example",
            artifact_id="app",
            version="1.0.0",
            file=make_jar("app-1.0.0.jar"),
        ),
        dependencies=[
            Artifact(
                group_id="org.slf4j",
                artifact_id="slf4j-api",
                version="2.0.9",
                scope="compile",
                file=make_jar("slf4j-api-2.0.9.jar"),
            ),
            Artifact(
                group_id="info.picocli",
                artifact_id="picocli",
                version="4.7.5",
                scope="runtime",
                file=make_jar("picocli-4.7.5.jar"),
            ),
        ],
        build_directory=build_dir,
    )
