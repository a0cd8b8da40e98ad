"""CLI entrypoint for framefit."""

from __future__ import annotations

from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Resize desktop windows to preset or custom sizes")
presets_app = typer.Typer(help="Preset commands")
permissions_app = typer.Typer(help="Permission commands")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    root: Path | None = typer.Option(None, "--root", help="Directory holding config/ and workspace/"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    commands.configure(root=root, verbose=verbose)


@app.command("status")
def status_cmd() -> None:
    """Show size, window count, permission and presets."""
    commands.status()


@app.command("windows")
def windows_cmd() -> None:
    """List resizable windows."""
    commands.windows()


@app.command("resize")
def resize_cmd(
    width: int | None = typer.Option(None, "--width", min=1),
    height: int | None = typer.Option(None, "--height", min=1),
    preset: str | None = typer.Option(None, "--preset", "-p", help="Preset name to apply"),
    window_id: int | None = typer.Option(None, "--window-id", help="Resize this window instead of the frontmost"),
    center: bool = typer.Option(True, "--center/--no-center", help="Center the window after resizing"),
) -> None:
    """Resize a window."""
    commands.resize(width=width, height=height, preset=preset, window_id=window_id, center=center)


@presets_app.command("list")
def presets_list_cmd() -> None:
    """List presets."""
    commands.presets_list()


@presets_app.command("add")
def presets_add_cmd(
    name: str = typer.Argument(..., help="Preset name"),
    width: int | None = typer.Option(None, "--width"),
    height: int | None = typer.Option(None, "--height"),
) -> None:
    """Save a custom preset."""
    commands.presets_add(name=name, width=width, height=height)


@presets_app.command("delete")
def presets_delete_cmd(index: int = typer.Argument(..., help="Index from 'presets list'")) -> None:
    """Delete a custom preset."""
    commands.presets_delete(index=index)


@presets_app.command("export")
def presets_export_cmd(
    output: Path | None = typer.Option(None, "--output", "-o", help="Destination JSON file"),
) -> None:
    """Export custom presets."""
    commands.presets_export(output=output)


@presets_app.command("import")
def presets_import_cmd(source: Path = typer.Argument(..., help="JSON file to import")) -> None:
    """Import custom presets, replacing the current ones."""
    commands.presets_import(source=source)


@presets_app.command("reset")
def presets_reset_cmd(yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation")) -> None:
    """Remove all custom presets."""
    commands.presets_reset(yes=yes)


@permissions_app.command("check")
def permissions_check_cmd() -> None:
    """Check window-control permission."""
    commands.permissions_check()


@config_app.command("show")
def config_show_cmd() -> None:
    """Show effective configuration."""
    commands.config_show()


app.add_typer(presets_app, name="presets")
app.add_typer(permissions_app, name="permissions")
app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
