"""Tests for CLI main module."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from graalbuild import __version__
from graalbuild.core.config.settings import NativeImageSettings
from graalbuild.core.exceptions.errors import BuildFailedError, ProbeExecutionError
from graalbuild.models.build import BuildResult, VersionInfo, VolumeMapping
from graalbuild.cli.main import _parse_volume, _step_settings, main


@pytest.fixture
def project_file(temp_dir: Path) -> Path:
    """Create an (unused) project descriptor so click's path check passes."""
    path = temp_dir / "project.yaml"
    path.write_text("artifact:\n  group_id: com.example\n  artifact_id: app\n")
    return path


class TestMainCommand:
    """Test main CLI group."""

    def test_version_flag(self) -> None:
        """Test version flag."""
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_without_command(self) -> None:
        runner = CliRunner()
        result = runner.invoke(main, [])
        assert result.exit_code == 0
        assert "build" in result.output

    @patch("graalbuild.cli.main.show_error")
    def test_invalid_config_exits(self, mock_error: MagicMock, temp_dir: Path) -> None:
        config = temp_dir / "graalbuild.yaml"
        config.write_text("native_image:\n  skip: [not, a, bool]\n")

        runner = CliRunner()
        result = runner.invoke(main, ["--config", str(config), "build", "--help"])

        assert result.exit_code == 1
        mock_error.assert_called_once()


class TestBuildCommand:
    """Test build subcommand."""

    @patch("graalbuild.cli.main.show_build_result")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_build_success(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_show: MagicMock,
        project_file: Path,
    ) -> None:
        """Test a successful build passes options through."""
        result_obj = BuildResult(success=True, command="native-image -cp a.jar")
        mock_build.return_value.execute.return_value = result_obj

        runner = CliRunner()
        result = runner.invoke(
            main,
            [
                "build",
                "--project", str(project_file),
                "--main-class", "com.example.Main",
                "--image-name", "app",
                "--build-arg=--no-fallback -O2",
                "--docker-image", "graal:22",
                "--volume", "/data:/d",
                "--enforce-uid",
            ],
        )

        assert result.exit_code == 0
        mock_load.assert_called_once_with(project_file)
        settings = mock_build.call_args[0][1]
        assert settings.main_class == "com.example.Main"
        assert settings.image_name == "app"
        assert settings.build_args == ["--no-fallback -O2"]
        assert settings.docker_image == "graal:22"
        assert settings.volumes == {"/data": "/d"}
        assert settings.enforce_uid is True
        assert settings.skip is False
        mock_show.assert_called_once_with(result_obj)

    @patch("graalbuild.cli.main.show_error")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_build_failure_exits(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_error: MagicMock,
        project_file: Path,
    ) -> None:
        mock_build.return_value.execute.side_effect = BuildFailedError(
            "Execution of native-image -cp a.jar returned non-zero result",
            command="native-image -cp a.jar",
            return_code=1,
        )

        runner = CliRunner()
        result = runner.invoke(main, ["build", "--project", str(project_file)])

        assert result.exit_code == 1
        assert "returned non-zero result" in mock_error.call_args[0][1]

    def test_missing_project_file(self, temp_dir: Path) -> None:
        runner = CliRunner()
        result = runner.invoke(main, ["build", "--project", str(temp_dir / "nope.yaml")])
        assert result.exit_code == 2


class TestInspectionCommands:
    """Test probe, classpath and volumes subcommands."""

    @patch("graalbuild.cli.main.show_version_info")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_probe(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_show: MagicMock,
        project_file: Path,
    ) -> None:
        step = mock_build.return_value
        step.probe_version.return_value = VersionInfo(version="22.3.1", executable="/graal/native-image")
        step.own_version = "22.3.0"
        step.settings = NativeImageSettings()

        runner = CliRunner()
        result = runner.invoke(main, ["probe", "--project", str(project_file)])

        assert result.exit_code == 0
        mock_show.assert_called_once_with(step.probe_version.return_value, "22.3.0", True)

    @patch("graalbuild.cli.main.show_error")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_probe_failure(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_error: MagicMock,
        project_file: Path,
    ) -> None:
        mock_build.return_value.probe_version.side_effect = ProbeExecutionError("no native-image")

        runner = CliRunner()
        result = runner.invoke(main, ["probe", "--project", str(project_file)])

        assert result.exit_code == 1
        mock_error.assert_called_once()

    @patch("graalbuild.cli.main.show_classpath")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_classpath(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_show: MagicMock,
        project_file: Path,
    ) -> None:
        step = mock_build.return_value
        step.classpath_resolver.resolve.return_value = []

        runner = CliRunner()
        result = runner.invoke(main, ["classpath", "--project", str(project_file)])

        assert result.exit_code == 0
        step.classpath_resolver.resolve.assert_called_once_with(
            step.project.dependencies, step.project.artifact
        )
        mock_show.assert_called_once_with([])

    @patch("graalbuild.cli.main.show_volumes")
    @patch("graalbuild.cli.main.NativeImageBuild")
    @patch("graalbuild.cli.main.load_project")
    def test_volumes(
        self,
        mock_load: MagicMock,
        mock_build: MagicMock,
        mock_show: MagicMock,
        project_file: Path,
    ) -> None:
        step = mock_build.return_value
        mappings = [VolumeMapping(host="/home/u", container="/home/u")]
        step.volume_mapper.compute.return_value = mappings
        step.uid_resolver.resolve.return_value = "1000:1000"

        runner = CliRunner()
        result = runner.invoke(main, ["volumes", "--project", str(project_file)])

        assert result.exit_code == 0
        mock_show.assert_called_once_with(mappings, "1000:1000")


class TestOptionHelpers:
    """Test option parsing helpers."""

    def test_parse_volume_splits_on_last_colon(self) -> None:
        assert _parse_volume("C:/data:/data") == ("C:/data", "/data")

    def test_parse_volume_rejects_missing_separator(self) -> None:
        import click

        with pytest.raises(click.BadParameter):
            _parse_volume("/data")

    def test_step_settings_keeps_configured_values(self) -> None:
        base = NativeImageSettings(image_name="configured", volumes={"/a": "/a"}, enforce_uid=True)

        settings = _step_settings(
            base,
            image_name=None,
            enforce_uid=False,
            docker_image="graal:22",
            volumes=("/b:/bb",),
        )

        assert settings.image_name == "configured"
        assert settings.enforce_uid is True
        assert settings.docker_image == "graal:22"
        assert settings.volumes == {"/a": "/a", "/b": "/bb"}
