"""Main CLI application."""

import logging
from pathlib import Path
from typing import Optional

import msgspec
import typer
from rich.console import Console

from .bindings import BindingIndex, load_workspace, write_workspace
from .config import FixConfig, load_config
from .errors import FixError
from .fixes import AddImportFixProvider, DeferredFix
from .models import Solution
from .output import print_applied, print_fixes, print_json

app = typer.Typer(
    name="addref",
    help="Offer and apply add-import / add-reference fixes",
    add_completion=False,
)
console = Console()


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Offer and apply add-import / add-reference fixes."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _fail(message: str, as_json: bool = False):
    if as_json:
        print_json({"error": message})
    else:
        console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _load_config(config: Optional[Path], place_system_first: Optional[bool]) -> FixConfig:
    if config and not config.exists():
        _fail(f"Config file not found: {config}")
    try:
        cfg = load_config(config)
    except (msgspec.DecodeError, ValueError) as e:
        _fail(f"Invalid config {config}: {e}")
    if place_system_first is not None:
        cfg = msgspec.structs.replace(cfg, place_system_first=place_system_first)
    return cfg


def _load_provider(
    workspace: Path,
    bindings: Optional[Path],
    config: Optional[Path],
    place_system_first: Optional[bool],
    no_cache: bool,
) -> tuple[Solution, AddImportFixProvider]:
    """Load the workspace snapshot and build a provider over the bindings file."""
    cfg = _load_config(config, place_system_first)
    if not workspace.exists():
        _fail(f"Workspace file not found: {workspace}")
    if bindings and not bindings.exists():
        _fail(f"Bindings file not found: {bindings}")
    try:
        solution = load_workspace(workspace)
        index = BindingIndex.load(bindings, use_cache=not no_cache) if bindings else None
    except (OSError, msgspec.DecodeError, ValueError) as e:
        _fail(str(e))
    provider = AddImportFixProvider(search_service=index, resolver=index, config=cfg)
    return solution, provider


def _document_id(solution: Solution, document: str, as_json: bool) -> str:
    found = solution.find_document_by_path(document)
    if found is None:
        _fail(f"Document not found in workspace: {document}", as_json)
    return found.id


def _offered(
    solution: Solution, provider: AddImportFixProvider, document_id: str, name: str,
) -> list[tuple[DeferredFix, bool]]:
    fixes = provider.get_fixes(solution, document_id, name)
    return [(fix, fix.is_applicable(solution)) for fix in fixes]


@app.command()
def fixes(
    name: str = typer.Argument(..., help="Unresolved symbol name"),
    workspace: Path = typer.Option(..., "--workspace", "-w", help="Path to workspace JSON"),
    document: str = typer.Option(..., "--document", "-d", help="Document id or path"),
    bindings: Optional[Path] = typer.Option(None, "--bindings", "-b", help="Path to bindings JSON"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON"),
    place_system_first: Optional[bool] = typer.Option(
        None, "--place-system-first/--no-place-system-first", help="Sort System imports first",
    ),
    show_all: bool = typer.Option(False, "--all", "-a", help="Include fixes that cannot be resolved"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the bindings cache"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List fixes for an unresolved symbol."""
    solution, provider = _load_provider(workspace, bindings, config, place_system_first, no_cache)
    document_id = _document_id(solution, document, json_output)

    offered = _offered(solution, provider, document_id, name)
    if not show_all:
        offered = [(fix, ok) for fix, ok in offered if ok]
    print_fixes(offered, name, as_json=json_output)


@app.command()
def apply(
    name: str = typer.Argument(..., help="Unresolved symbol name"),
    workspace: Path = typer.Option(..., "--workspace", "-w", help="Path to workspace JSON"),
    document: str = typer.Option(..., "--document", "-d", help="Document id or path"),
    choice: int = typer.Option(1, "--choice", "-n", help="1-based fix number as listed by 'fixes'"),
    bindings: Optional[Path] = typer.Option(None, "--bindings", "-b", help="Path to bindings JSON"),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config JSON"),
    place_system_first: Optional[bool] = typer.Option(
        None, "--place-system-first/--no-place-system-first", help="Sort System imports first",
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write workspace here, even if unchanged (default: in place, only when changed)"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Skip the bindings cache"),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """Apply one fix and write the resulting workspace."""
    solution, provider = _load_provider(workspace, bindings, config, place_system_first, no_cache)
    document_id = _document_id(solution, document, json_output)

    offered = [fix for fix, ok in _offered(solution, provider, document_id, name) if ok]
    if not offered:
        _fail(f"No applicable fixes for {name}", json_output)
    if choice < 1 or choice > len(offered):
        _fail(f"Choice {choice} out of range (1-{len(offered)})", json_output)

    fix = offered[choice - 1]
    # Check again right before applying
    if not fix.is_applicable(solution):
        _fail(f"Fix is no longer applicable: {fix.title}", json_output)
    try:
        operations = fix.execute(solution)
    except FixError as e:
        _fail(str(e), json_output)

    new_solution = operations[0].changed_solution
    if output is not None:
        write_workspace(output, new_solution)
    elif new_solution != solution:
        write_workspace(workspace, new_solution)
    print_applied(fix, solution, new_solution, as_json=json_output)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
