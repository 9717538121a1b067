"""Compose an import edit and a reference addition into one snapshot."""

import logging
from typing import Callable, Optional

from ..cancellation import CancellationToken
from ..errors import CompositionConflict
from ..models import Project, Solution
from ..services import ImportInserter

logger = logging.getLogger(__name__)


def compose_fix(
    solution: Solution,
    document_id: str,
    project_id: str,
    namespace_parts: tuple[str, ...],
    inserter: ImportInserter,
    place_system_first: bool,
    attach: Optional[Callable[[Project], Project]] = None,
    cancellation: Optional[CancellationToken] = None,
) -> Solution:
    """Insert the import, then attach the reference, returning the final solution.

    Both steps run against new snapshots derived from ``solution``; the input
    is never modified. The reference goes to the project owning the edited
    document in the intermediate solution.

    Args:
        solution: Snapshot to start from.
        document_id: Document receiving the import directive.
        project_id: Project the document must belong to.
        namespace_parts: Namespace to import; empty means no directive.
        inserter: Import insertion collaborator.
        place_system_first: Sort system namespaces ahead of the rest.
        attach: Returns the project with the new reference added, or None
            for an import-only fix.
        cancellation: Checked between steps.

    Raises:
        CompositionConflict: If the document is missing or owned by another
            project than ``project_id``.
        FixCancelled: If ``cancellation`` fires.
    """
    document = solution.get_document(document_id)
    if document is None:
        raise CompositionConflict(f"Document not found in snapshot: {document_id}")
    if document.project_id != project_id:
        raise CompositionConflict(
            f"Document {document_id} belongs to {document.project_id}, expected {project_id}"
        )

    # First add the import directive in the code.
    edit = inserter.insert_import(document, namespace_parts, place_system_first, cancellation)
    new_document = edit.document
    if new_document.id != document.id or new_document.project_id != document.project_id:
        raise CompositionConflict(f"Import insertion moved document {document_id}")
    intermediate = solution.with_document(new_document)

    if cancellation is not None:
        cancellation.raise_if_cancelled()
    if attach is None:
        return intermediate

    # Now add the reference to the project owning the edited document.
    project = intermediate.get_project(new_document.project_id)
    if project is None or new_document.id not in project.document_ids:
        raise CompositionConflict(
            f"Project {new_document.project_id} does not own document {document_id}"
        )
    final = intermediate.with_project(attach(project))
    logger.debug(f"Composed fix for {document_id}: version {solution.version} -> {final.version}")
    return final
