"""Main CLI entry point for graalbuild."""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click

from graalbuild.cli.display import (
    show_build_result,
    show_classpath,
    show_error,
    show_version_info,
    show_volumes,
)
from graalbuild.core.config.settings import NativeImageSettings, Settings
from graalbuild.core.exceptions.errors import GraalBuildError
from graalbuild.core.logger.logger import setup_logging
from graalbuild.native_image.orchestrator import NativeImageBuild
from graalbuild.native_image.version import major_minor
from graalbuild.project.descriptor import load_project


def _parse_volume(value: str) -> tuple[str, str]:
    host, sep, container = value.rpartition(":")
    if not sep or not host:
        raise click.BadParameter(f"Expected HOST:CONTAINER, got {value!r}")
    return host, container


def step_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that drives the build step."""
    options = [
        click.option("--project", "-p", "project_path", required=True,
                     type=click.Path(exists=True, dir_okay=False, path_type=Path),
                     help="Project descriptor (YAML)"),
        click.option("--output-dir", "-o", "output_directory", type=click.Path(path_type=Path),
                     help="Build output directory"),
        click.option("--docker-image", help="Run native-image in this container image"),
        click.option("--docker-entry-point", help="Container entry point"),
        click.option("--java-home", type=click.Path(path_type=Path), help="GraalVM home"),
        click.option("--volume", "volumes", multiple=True, help="Extra HOST:CONTAINER mount"),
        click.option("--disable-automatic-volumes", is_flag=True,
                     help="Do not mount home, output and local repository"),
        click.option("--enforce-uid", is_flag=True,
                     help="Fail when the container uid/gid cannot be determined"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _step_settings(base: NativeImageSettings, **overrides: Any) -> NativeImageSettings:
    """Apply command line overrides on top of configured settings.

    Unset options and flags that were not given leave the configured value.
    """
    volumes = overrides.pop("volumes", ())
    update = {
        key: value
        for key, value in overrides.items()
        if value is not None and value is not False and value != ()
    }
    if volumes:
        merged = dict(base.volumes)
        merged.update(_parse_volume(v) for v in volumes)
        update["volumes"] = merged
    return NativeImageSettings.model_validate({**base.model_dump(), **update})


def _prepare(ctx: click.Context, project_path: Path, **overrides: Any) -> NativeImageBuild:
    settings: Settings = ctx.obj["settings"]
    project = load_project(project_path)
    return NativeImageBuild(project, _step_settings(settings.native_image, **overrides))


@click.group(invoke_without_command=True)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help="Settings file (defaults to ./graalbuild.yaml)")
@click.pass_context
def main(ctx: click.Context, version: bool, config_path: Path | None) -> None:
    """graalbuild - build native executables with GraalVM native-image."""
    if version:
        from graalbuild import __version__

        click.echo(f"graalbuild version {__version__}")
        return

    try:
        settings = Settings.load(config_path)
    except GraalBuildError as e:
        show_error("Configuration Error", str(e))
        sys.exit(1)

    setup_logging(settings.logging)
    ctx.obj = {"settings": settings}

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@main.command()
@step_options
@click.option("--skip", is_flag=True, help="Skip native-image generation")
@click.option("--main-class", "-m", help="Application entry point ('.' for none)")
@click.option("--image-name", "-n", help="Name of the produced binary")
@click.option("--build-arg", "build_args", multiple=True, help="Extra native-image arguments")
@click.pass_context
def build(ctx: click.Context, project_path: Path, build_args: tuple[str, ...], **options: Any) -> None:
    """Build a native executable for a project.

    Example:
        graalbuild build --project graalbuild-project.yaml --image-name app
    """
    if build_args:
        options["build_args"] = list(build_args)

    try:
        step = _prepare(ctx, project_path, **options)
        result = step.execute()
    except GraalBuildError as e:
        show_error("Native Image Build Failed", str(e))
        sys.exit(1)

    show_build_result(result)


@main.command()
@step_options
@click.pass_context
def probe(ctx: click.Context, project_path: Path, **options: Any) -> None:
    """Show the native-image version that would be used."""
    try:
        step = _prepare(ctx, project_path, **options)
        version_info = step.probe_version()
    except GraalBuildError as e:
        show_error("Version Probe Failed", str(e))
        sys.exit(1)

    compatible = step.settings.uses_container or (
        major_minor(version_info.version) == major_minor(step.own_version)
    )
    show_version_info(version_info, step.own_version, compatible)


@main.command()
@step_options
@click.pass_context
def classpath(ctx: click.Context, project_path: Path, **options: Any) -> None:
    """Resolve and show the image classpath."""
    try:
        step = _prepare(ctx, project_path, **options)
        entries = step.classpath_resolver.resolve(step.project.dependencies, step.project.artifact)
    except GraalBuildError as e:
        show_error("Classpath Resolution Failed", str(e))
        sys.exit(1)

    show_classpath(entries)


@main.command()
@step_options
@click.pass_context
def volumes(ctx: click.Context, project_path: Path, **options: Any) -> None:
    """Show the container volumes and user for a containerized build."""
    try:
        step = _prepare(ctx, project_path, **options)
        mappings = step.volume_mapper.compute(
            output_directory=str(step.output_directory),
            local_repository=str(step.local_repository),
            volumes=step.settings.volumes,
            disable_automatic_volumes=step.settings.disable_automatic_volumes,
        )
        user = step.uid_resolver.resolve()
    except GraalBuildError as e:
        show_error("Volume Computation Failed", str(e))
        sys.exit(1)

    show_volumes(mappings, user)


if __name__ == "__main__":
    main()
