"""Unit tests for native-image version probing."""

from pathlib import Path
from unittest.mock import patch

import pytest

from graalbuild.core.exceptions.errors import ProbeExecutionError
from graalbuild.models.build import UNKNOWN_VERSION, VersionInfo
from graalbuild.native_image.command import CommandBuilder
from graalbuild.native_image.version import (
    VersionProbe,
    check_version,
    major_minor,
    scan_version,
)


class TestMajorMinor:
    """Tests for major.minor extraction."""

    def test_patch_versions_compare_equal(self) -> None:
        assert major_minor("22.3.1") == major_minor("22.3.9") == "22.3"

    def test_different_minor_compare_unequal(self) -> None:
        assert major_minor("22.3.0") != major_minor("21.9.0")

    def test_unmatched_input_returned_as_is(self) -> None:
        assert major_minor(UNKNOWN_VERSION) == UNKNOWN_VERSION
        assert major_minor("22.3") == "22.3"

    def test_prefix_with_suffix(self) -> None:
        assert major_minor("22.3.0-dev") == "22.3"


class TestScanVersion:
    """Tests for scanning probe output."""

    def test_marker_found(self) -> None:
        lines = ["GraalVM Version 22.3.0 (Java Version 17.0.5+8-jvmci-22.3-b08)\n"]
        assert scan_version(lines) == "22.3.0"

    def test_marker_on_later_line(self) -> None:
        lines = ["Picked up JAVA_TOOL_OPTIONS\n", "native-image GraalVM Version 21.3.1 CE\n"]
        assert scan_version(lines) == "21.3.1"

    def test_first_match_wins(self) -> None:
        lines = ["GraalVM Version 22.3.0\n", "GraalVM Version 23.0.0\n"]
        assert scan_version(lines) == "22.3.0"

    def test_no_marker_returns_unknown(self) -> None:
        lines = ["native-image 21 2023-09-19\n", "GraalVM Runtime Environment\n"]
        assert scan_version(lines) == UNKNOWN_VERSION

    def test_empty_output(self) -> None:
        assert scan_version([]) == UNKNOWN_VERSION


class TestCheckVersion:
    """Tests for the advisory compatibility check."""

    def test_matching_versions(self) -> None:
        info = VersionInfo(version="22.3.1", executable="/graal/native-image")
        with patch("graalbuild.native_image.version.logger") as mock_logger:
            assert check_version(info, "22.3.0", containerized=False) is True
        mock_logger.warning.assert_not_called()

    def test_mismatch_warns_locally(self) -> None:
        info = VersionInfo(version="21.9.0", executable="/graal/native-image")
        with patch("graalbuild.native_image.version.logger") as mock_logger:
            assert check_version(info, "22.3.0", containerized=False) is False
        mock_logger.warning.assert_called_once()
        assert "Major.Minor version mismatch" in mock_logger.warning.call_args[0][0]

    def test_mismatch_ignored_in_container(self) -> None:
        info = VersionInfo(version="21.9.0", executable="docker")
        with patch("graalbuild.native_image.version.logger") as mock_logger:
            assert check_version(info, "22.3.0", containerized=True) is True
        mock_logger.warning.assert_not_called()


class TestVersionProbe:
    """Tests for VersionProbe."""

    @pytest.fixture
    def graal_home(self, temp_dir: Path, fake_environment) -> Path:
        home = temp_dir / "graalvm"
        fake_environment.executables.add(home / "lib" / "svm" / "bin" / "native-image")
        return home

    @pytest.fixture
    def probe(self, fake_environment, fake_runner) -> VersionProbe:
        return VersionProbe(fake_environment, fake_runner, CommandBuilder())

    def test_local_probe(self, probe: VersionProbe, fake_runner, graal_home: Path) -> None:
        info = probe.probe(java_home=graal_home)

        executable = str(graal_home / "lib" / "svm" / "bin" / "native-image")
        assert info == VersionInfo(version="22.3.0", executable=executable)
        assert fake_runner.probe_commands == [[executable, "--version"]]
        assert fake_runner.probes_killed == 1

    def test_unknown_version_when_marker_missing(
        self, probe: VersionProbe, fake_runner, graal_home: Path
    ) -> None:
        fake_runner.probe_output = "native-image 21.0.1 2023-10-17\n"

        info = probe.probe(java_home=graal_home)

        assert info.version == UNKNOWN_VERSION
        assert not info.known
        assert fake_runner.probes_killed == 1

    def test_container_probe(self, probe: VersionProbe, fake_runner) -> None:
        info = probe.probe(docker_image="ghcr.io/graalvm/native-image:22.3.0")

        assert info.executable == "docker"
        assert fake_runner.probe_commands == [
            ["docker", "container", "run", "--rm", "ghcr.io/graalvm/native-image:22.3.0", "--version"]
        ]

    def test_container_probe_with_entry_point(self, probe: VersionProbe, fake_runner) -> None:
        probe.probe(docker_image="graal:22", entry_point=" native-image ")

        assert fake_runner.probe_commands == [
            ["docker", "container", "run", "--rm", "--entrypoint", "native-image", "graal:22", "--version"]
        ]

    def test_non_zero_exit_raises(self, probe: VersionProbe, fake_runner, graal_home: Path) -> None:
        fake_runner.probe_return_code = 3

        with pytest.raises(ProbeExecutionError) as exc_info:
            probe.probe(java_home=graal_home)

        assert "returned non-zero result" in str(exc_info.value)
        assert fake_runner.probes_killed == 1

    def test_start_failure_raises(self, probe: VersionProbe, fake_runner) -> None:
        fake_runner.probe_error = FileNotFoundError("docker")

        with pytest.raises(ProbeExecutionError) as exc_info:
            probe.probe(docker_image="graal:22")

        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_interrupt_raises(self, probe: VersionProbe, fake_runner, graal_home: Path) -> None:
        fake_runner.probe_error = KeyboardInterrupt()

        with pytest.raises(ProbeExecutionError):
            probe.probe(java_home=graal_home)


class TestLocateExecutable:
    """Tests for native-image lookup under the GraalVM home."""

    def test_jre_fallback(self, fake_environment, fake_runner, temp_dir: Path) -> None:
        home = temp_dir / "graalvm"
        expected = home / "jre" / "lib" / "svm" / "bin" / "native-image"
        fake_environment.executables.add(expected)

        probe = VersionProbe(fake_environment, fake_runner, CommandBuilder())

        assert probe.locate_executable(home) == expected

    def test_bin_fallback(self, fake_environment, fake_runner, temp_dir: Path) -> None:
        home = temp_dir / "graalvm"
        expected = home / "bin" / "native-image"
        fake_environment.executables.add(expected)

        probe = VersionProbe(fake_environment, fake_runner, CommandBuilder())

        assert probe.locate_executable(home) == expected

    def test_windows_suffix(self, fake_environment, fake_runner, temp_dir: Path) -> None:
        fake_environment.windows = True
        home = temp_dir / "graalvm"
        expected = home / "lib" / "svm" / "bin" / "native-image.exe"
        fake_environment.executables.add(expected)

        probe = VersionProbe(fake_environment, fake_runner, CommandBuilder())

        assert probe.locate_executable(home) == expected

    def test_missing_executable_raises(self, fake_environment, fake_runner, temp_dir: Path) -> None:
        probe = VersionProbe(fake_environment, fake_runner, CommandBuilder())

        with pytest.raises(ProbeExecutionError) as exc_info:
            probe.locate_executable(temp_dir / "graalvm")

        assert "Could not find executable native-image" in str(exc_info.value)
        assert fake_runner.probe_commands == []

    def test_missing_home_raises(self, fake_environment, fake_runner) -> None:
        probe = VersionProbe(fake_environment, fake_runner, CommandBuilder())

        with pytest.raises(ProbeExecutionError):
            probe.locate_executable(None)
