"""Console output formatters using Rich."""

from rich.console import Console
from rich.table import Table

from .json_formatter import print_json
from ..fixes import DeferredFix
from ..models import Document, Solution

console = Console()


def fix_to_dict(number: int, fix: DeferredFix, applicable: bool) -> dict:
    """Serializable view of an offered fix."""
    return {
        "choice": number,
        "title": fix.title,
        "priority": fix.priority.name.lower(),
        "kind": type(fix.kind).__name__,
        "container": fix.candidate.container_name,
        "symbol": fix.search_result.fqn,
        "applicable": applicable,
        "resolved_path": fix.resolved_path,
    }


def print_fixes(offered: list[tuple[DeferredFix, bool]], name: str, as_json: bool = False):
    """Print offered fixes with their applicability."""
    if as_json:
        print_json([fix_to_dict(i, fix, ok) for i, (fix, ok) in enumerate(offered, 1)])
        return

    if not offered:
        console.print(f"[dim]No fixes found for {name}[/dim]")
        return

    table = Table(title=f"Fixes for {name}")
    table.add_column("#", justify="right")
    table.add_column("Fix")
    table.add_column("Priority")
    table.add_column("Status")
    for i, (fix, ok) in enumerate(offered, 1):
        status = "[green]ok[/green]" if ok else "[red]unresolved[/red]"
        table.add_row(str(i), fix.title, fix.priority.name.lower(), status)
    console.print(table)


def print_applied(fix: DeferredFix, before: Solution, after: Solution, as_json: bool = False):
    """Print the outcome of applying a fix."""
    document: Document = after.get_document(fix.document_id)
    project = after.get_project(fix.project_id)
    if as_json:
        print_json({
            "applied": fix.title,
            "document": document.id,
            "project": project.id,
            "version": after.version,
            "changed": before != after,
            "references": [r.path for r in project.metadata_references],
            "project_references": list(project.project_references),
            "text": document.text,
        })
        return

    if before == after:
        console.print(f"[yellow]Nothing to change: {fix.title}[/yellow]")
        return
    console.print(f"[bold green]Applied:[/bold green] {fix.title}")
    console.print(f"  Document: {document.path}")
    if fix.resolved_path:
        console.print(f"  Reference: {fix.resolved_path}")
