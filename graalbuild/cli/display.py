"""Display components for CLI using Rich."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from graalbuild.models.build import BuildResult, ClasspathEntry, VersionInfo, VolumeMapping

console = Console()


def show_success(title: str, message: str) -> None:
    """Display a success message."""
    console.print()
    console.print(
        Panel(
            f"[bold green]{escape(message)}[/]",
            title=f"[bold]{title}[/]",
            border_style="green",
        )
    )


def show_error(title: str, message: str) -> None:
    """Display an error message."""
    console.print()
    console.print(
        Panel(
            f"[bold red]{escape(message)}[/]",
            title=f"[bold]{escape(title)}[/]",
            border_style="red",
        )
    )


def show_info(title: str, message: str) -> None:
    """Display an info message."""
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold]{title}[/]",
            border_style="blue",
        )
    )


def show_build_result(result: BuildResult) -> None:
    """Display the outcome of a build step.

    Args:
        result: Result returned by the build step.
    """
    console.print()

    table = Table(title="[bold]Native Image Build[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    if result.skipped:
        table.add_row("Status", "[bold yellow]SKIPPED[/]")
        table.add_row("Reason", result.skip_reason or "N/A")
    else:
        table.add_row("Status", "[bold green]SUCCESS[/]")
        if result.version_info:
            table.add_row("native-image", result.version_info.version)
            table.add_row("Executable", result.version_info.executable)
        table.add_row("Duration", f"{result.duration_seconds:.1f}s")

    console.print(Panel(table, border_style="yellow" if result.skipped else "green"))


def show_version_info(version_info: VersionInfo, expected_version: str, compatible: bool) -> None:
    """Display the probed native-image version."""
    table = Table(title="[bold]native-image[/]", show_header=False, box=None)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row(
        "Version",
        version_info.version if version_info.known else f"[yellow]{version_info.version}[/]",
    )
    table.add_row("Executable", version_info.executable)
    table.add_row("Expected", expected_version)
    table.add_row(
        "Compatible",
        "[green]yes[/]" if compatible else "[yellow]major.minor mismatch[/]",
    )

    console.print(Panel(table, border_style="blue"))


def show_classpath(entries: list[ClasspathEntry]) -> None:
    """Display resolved classpath entries in order."""
    table = Table(title=f"[bold]Image Classpath ({len(entries)} entries)[/]")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Artifact", style="cyan")
    table.add_column("Path", style="white")
    table.add_column("Layout", justify="center")

    for index, entry in enumerate(entries, start=1):
        layout = "[green]ok[/]" if entry.layout_warnings == 0 else f"[yellow]{entry.layout_warnings} warning(s)[/]"
        table.add_row(str(index), entry.artifact, str(entry.path), layout)

    console.print(table)


def show_volumes(volumes: list[VolumeMapping], user: str | None) -> None:
    """Display container bind mounts."""
    table = Table(title="[bold]Container Volumes[/]")
    table.add_column("Host", style="cyan")
    table.add_column("Container", style="white")

    for volume in volumes:
        table.add_row(volume.host, volume.container)

    console.print(table)
    console.print(f"[dim]Container user:[/] {user or 'image default'}")
