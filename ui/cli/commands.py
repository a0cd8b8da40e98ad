"""Typer command handlers."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from core.messages import MessageKind
from core.orchestrator import Orchestrator, RuntimeBundle
from presets.file_io import FixedDestination, SaveCancelled, SaveDestination, SaveSelected

_ICONS = {
    MessageKind.SUCCESS: "[ok]",
    MessageKind.ERROR: "[error]",
    MessageKind.WARNING: "[warning]",
    MessageKind.INFO: "[info]",
}

_root: Path | None = None


def configure(root: Path | None, verbose: bool) -> None:
    """Apply global options before any command runs."""
    global _root
    _root = root
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _runtime() -> RuntimeBundle:
    bundle = Orchestrator(root=_root).build()
    bundle.start()
    return bundle


def _report(bundle: RuntimeBundle) -> None:
    """Print the current status message; exit non-zero on errors."""
    message = bundle.state.state.message
    if message is None:
        return
    typer.echo(f"{_ICONS[message.kind]} {message.text}", err=message.is_error)
    if message.is_error:
        raise typer.Exit(code=1)


def _require_permission(bundle: RuntimeBundle) -> None:
    if not bundle.can_resize:
        _report(bundle)
        raise typer.Exit(code=1)


class PromptDestination:
    """Asks for the export path on the terminal; an empty answer cancels."""

    def choose_save_destination(self, suggested_name: str, allowed_extension: str) -> SaveDestination:
        answer = typer.prompt(f"Save presets to (*.{allowed_extension})", default=suggested_name)
        if not answer.strip():
            return SaveCancelled()
        return SaveSelected(Path(answer.strip()).expanduser())


def status() -> None:
    """Show the current session state."""
    bundle = _runtime()
    state = bundle.state.state
    typer.echo(f"Size: {state.width} x {state.height}")
    typer.echo(f"Windows: {len(state.windows)}")
    typer.echo(f"Center: {'yes' if state.center_window else 'no'}")
    typer.echo(f"Permission: {'granted' if state.has_permission else 'missing'}")
    typer.echo(f"Presets: {len(state.presets)} ({len(bundle.catalog.custom_presets())} custom)")
    _report(bundle)


def windows() -> None:
    """List resizable windows."""
    bundle = _runtime()
    for window in bundle.state.state.windows:
        typer.echo(
            f"{window.id:>8}  {window.label:<40}  "
            f"{window.width}x{window.height} at ({window.x}, {window.y})"
        )
    _report(bundle)


def resize(
    width: int | None,
    height: int | None,
    preset: str | None,
    window_id: int | None,
    center: bool,
) -> None:
    """Resize the frontmost or a specific window."""
    bundle = _runtime()
    state = bundle.state
    if preset is not None:
        names = [p.name.lower() for p in state.state.presets]
        if preset.lower() not in names:
            typer.echo(f"Unknown preset: {preset}", err=True)
            raise typer.Exit(code=2)
        state.apply_preset(names.index(preset.lower()))
    state.set_dimensions(
        width if width is not None else state.state.width,
        height if height is not None else state.state.height,
    )
    state.set_center_window(center)
    _require_permission(bundle)

    if window_id is None:
        bundle.gateway.resize_frontmost()
    else:
        state.select_window(window_id)
        bundle.gateway.resize_selected()
    _report(bundle)


def presets_list() -> None:
    """List presets, built-ins first."""
    bundle = _runtime()
    builtin_count = len(bundle.catalog.builtins)
    for index, preset in enumerate(bundle.state.state.presets):
        marker = "" if index < builtin_count else "  (custom)"
        typer.echo(f"{index:>3}  {preset.name:<20}  {preset.width}x{preset.height}{marker}")


def presets_add(name: str, width: int | None, height: int | None) -> None:
    """Save a custom preset."""
    bundle = _runtime()
    state = bundle.state
    state.set_new_preset_name(name)
    bundle.catalog.add_preset(
        width if width is not None else state.state.width,
        height if height is not None else state.state.height,
    )
    _report(bundle)


def presets_delete(index: int) -> None:
    """Delete a custom preset by its list index."""
    bundle = _runtime()
    before = bundle.state.state.message
    if not bundle.catalog.delete_preset(index) and bundle.state.state.message is before:
        typer.echo(f"Nothing deleted: index {index} is not a custom preset.")
        return
    _report(bundle)


def presets_export(output: Path | None) -> None:
    """Export custom presets to JSON."""
    bundle = _runtime()
    chooser = FixedDestination(output) if output is not None else PromptDestination()
    bundle.catalog.export_presets(chooser)
    _report(bundle)


def presets_import(source: Path) -> None:
    """Replace custom presets with the contents of a JSON file."""
    bundle = _runtime()
    bundle.catalog.import_presets(source)
    _report(bundle)


def presets_reset(yes: bool) -> None:
    """Delete every custom preset after confirmation."""
    bundle = _runtime()
    if not yes and not typer.confirm(
        "Reset to default presets? This will delete all custom presets."
    ):
        typer.echo("Cancelled.")
        return
    bundle.catalog.reset_presets()
    _report(bundle)


def permissions_check() -> None:
    """Query window-control permission."""
    bundle = Orchestrator(root=_root).build()
    granted = bundle.refresh_permission()
    typer.echo(f"Permission: {'granted' if granted else 'missing'}")
    if not granted:
        _report(bundle)
        raise typer.Exit(code=1)


def config_show() -> None:
    """Show effective runtime config."""
    bundle = Orchestrator(root=_root).build()
    typer.echo(json.dumps(bundle.config, indent=2))
