from __future__ import annotations

"""Wrapette Command Line Interface."""

import importlib.util
import json
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console

from wrapette.core.wrap import Wrap
from wrapette.utils.logging import setup as setup_logging
from wrapette.yaml_loader import load_wrap

app = typer.Typer(
    name="wrapette",
    help="CLI for Wrapette: load composed units and inspect their groups.",
    add_completion=False,
)

console = Console()

_YAML_SUFFIXES = {".yml", ".yaml"}


def _load_wrap_from_file(file_path: Path, wrap_name: str) -> Wrap:
    """Load a Wrap from a YAML definition or a variable in a Python file."""
    if not file_path.exists():
        console.print(f"[bold red]Error: File not found: {file_path}[/]")
        raise typer.Exit(code=1)

    if file_path.suffix in _YAML_SUFFIXES:
        try:
            return load_wrap(file_path)
        except Exception as e:  # noqa: BLE001
            console.print(f"[bold red]Error loading YAML definition {file_path}: {e}[/]")
            raise typer.Exit(code=1)

    module_name = file_path.stem
    spec = importlib.util.spec_from_file_location(module_name, file_path)
    if spec is None or spec.loader is None:
        console.print(f"[bold red]Error: Could not load module from {file_path}[/]")
        raise typer.Exit(code=1)

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:  # noqa: BLE001
        console.print(f"[bold red]Error executing Python file {file_path}: {e}[/]")
        raise typer.Exit(code=1)

    if not hasattr(module, wrap_name):
        console.print(f"[bold red]Error: Wrap '{wrap_name}' not found in {file_path}[/]")
        raise typer.Exit(code=1)

    wrap_obj = getattr(module, wrap_name)
    if not isinstance(wrap_obj, Wrap):
        console.print(f"[bold red]Error: Object '{wrap_name}' in {file_path} is not a Wrap.[/]")
        raise typer.Exit(code=1)
    return wrap_obj


@app.command()
def inspect(
    wrap_file: Path = typer.Argument(..., help="Python file or YAML definition of the wrap.", exists=True, file_okay=True, dir_okay=False, readable=True),
    wrap_name: str = typer.Argument("wrap", help="Name of the Wrap variable (Python files only)."),
):
    """Show the groups and units of a wrap as a tree."""
    from wrapette.utils.tree import build_rich_tree  # noqa: WPS433

    wrap_obj = _load_wrap_from_file(wrap_file, wrap_name)
    console.print(build_rich_tree(wrap_obj))
    console.print(
        f"[bold]Units:[/] {len(wrap_obj)} • [bold]Containers:[/] {len(wrap_obj.containers)}"
    )


@app.command()
def run(
    wrap_file: Path = typer.Argument(..., help="Python file or YAML definition of the wrap.", exists=True, file_okay=True, dir_okay=False, readable=True),
    wrap_name: str = typer.Argument("wrap", help="Name of the Wrap variable (Python files only)."),
    context: Optional[str] = typer.Option(None, "--context", "-c", help="JSON object used as the load context."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Deadline for the whole load, in seconds."),
    progress: bool = typer.Option(False, "--progress/--no-progress", help="Show a live progress bar."),
    log_level: str = typer.Option("warning", "--log-level", help="debug, info, warning or error."),
):
    """Load a wrap and print the merged results as JSON."""
    setup_logging(log_level)
    wrap_obj = _load_wrap_from_file(wrap_file, wrap_name)

    ctx: Any = None
    if context:
        try:
            ctx = json.loads(context)
        except json.JSONDecodeError as e:
            console.print(f"[bold red]Invalid --context JSON: {e}[/]")
            raise typer.Exit(code=1)
        if not isinstance(ctx, dict):
            console.print("[bold red]--context must be a JSON object.[/]")
            raise typer.Exit(code=1)

    try:
        if progress:
            from wrapette.utils.progress import LoadProgress  # noqa: WPS433

            with LoadProgress(console=console) as bar:
                bar.attach(wrap_obj)
                results = wrap_obj.run(ctx, timeout=timeout)
        else:
            results = wrap_obj.run(ctx, timeout=timeout)
    except Exception as e:  # noqa: BLE001
        console.print(f"[bold red]Load failed: {type(e).__name__}: {e}[/]")
        raise typer.Exit(code=1)

    console.print_json(json.dumps(results, default=str))


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
