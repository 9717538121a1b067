"""Add-import fix provider: turns discovered symbols into deferred fixes."""

import logging
import os
from typing import Optional

from ..cancellation import CancellationToken
from ..config import FixConfig
from ..models import ExternalBindingCandidate, Project, SearchResult, Solution
from ..services import (
    BindingResolver,
    FileMetadataService,
    ImportInserter,
    MetadataService,
    SymbolSearchService,
    TextImportInserter,
)
from .deferred import DeferredFix
from .kinds import AssemblyFix, NamespaceFix, ProjectFix

logger = logging.getLogger(__name__)


def _matches(fqn: str, name: str) -> bool:
    return fqn == name or fqn.endswith("." + name)


def _split(fqn: str) -> tuple[str, ...]:
    return tuple(p for p in fqn.split(".") if p)


def already_references(project: Project, container_name: str) -> bool:
    """Whether ``project`` has a metadata reference named after the container."""
    for reference in project.metadata_references:
        stem = os.path.splitext(reference.display)[0]
        if stem == container_name:
            return True
    return False


def dedupe_fixes(fixes: list[DeferredFix]) -> list[DeferredFix]:
    """Drop equal fixes, keeping the first occurrence of each."""
    seen: set[DeferredFix] = set()
    unique = []
    for fix in fixes:
        if fix in seen:
            logger.debug(f"Dropping duplicate fix: {fix.title}")
            continue
        seen.add(fix)
        unique.append(fix)
    return unique


class AddImportFixProvider:
    """Offers fixes for an unresolved name in a document.

    Candidates come from three sources, in order: the owning project
    (import only), other projects of the solution (project reference) and
    the external symbol search service (assembly reference).
    """

    name = "add-import"

    def __init__(
        self,
        search_service: Optional[SymbolSearchService] = None,
        resolver: Optional[BindingResolver] = None,
        metadata_service: Optional[MetadataService] = None,
        inserter: Optional[ImportInserter] = None,
        config: Optional[FixConfig] = None,
    ):
        self.config = config or FixConfig()
        self.search_service = search_service
        self.resolver = resolver
        self.metadata_service = metadata_service or FileMetadataService()
        self.inserter = inserter or TextImportInserter(
            template=self.config.import_template,
            system_prefix=self.config.system_prefix,
        )

    def get_description(self, name_parts: tuple[str, ...]) -> str:
        """Display text for importing the namespace of ``name_parts``."""
        namespace_parts = tuple(name_parts[:-1])
        if not namespace_parts:
            return ".".join(name_parts)
        return self.config.import_template.format(namespace=".".join(namespace_parts))

    def get_fixes(
        self,
        solution: Solution,
        document_id: str,
        name: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[DeferredFix]:
        """Collect deduplicated fixes for ``name`` in ``document_id``.

        Nothing is resolved here; fixes are ordered by priority tier, then by
        discovery order.

        Raises:
            ValueError: If the document or its project is not in ``solution``.
            FixCancelled: If ``cancellation`` fires.
        """
        document = solution.get_document(document_id)
        if document is None:
            raise ValueError(f"Unknown document: {document_id}")
        project = solution.get_project(document.project_id)
        if project is None:
            raise ValueError(f"Unknown project: {document.project_id}")

        name = name.strip()
        fixes: list[DeferredFix] = []

        def add(search_result, candidate, kind):
            fixes.append(DeferredFix(self, search_result, candidate, kind, document.id, project.id))

        # Symbols of the owning project only need an import
        for fqn in project.declared_symbols:
            parts = _split(fqn)
            if len(parts) > 1 and _matches(fqn, name):
                add(
                    SearchResult(name_parts=parts, source="namespace", weight=1.0),
                    ExternalBindingCandidate(project.id, parts[:-1], parts[-1]),
                    NamespaceFix(),
                )

        # Symbols of other projects need a project reference
        for other in solution.projects:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            if other.id == project.id or solution.depends_on(other.id, project.id):
                continue
            for fqn in other.declared_symbols:
                if _matches(fqn, name):
                    parts = _split(fqn)
                    add(
                        SearchResult(name_parts=parts, source="project", weight=1.0),
                        ExternalBindingCandidate(other.id, parts[:-1], parts[-1]),
                        ProjectFix(project_id=other.id, project_name=other.name),
                    )

        # External containers need a metadata reference
        if self.search_service is not None:
            found = self.search_service.search(name, cancellation, limit=self.config.max_results)
            for search_result, candidate in found:
                if already_references(project, candidate.container_name):
                    continue
                add(search_result, candidate, AssemblyFix())

        unique = dedupe_fixes(fixes)
        unique.sort(key=lambda fix: fix.priority, reverse=True)
        logger.debug(f"Offering {len(unique)} fixes for {name!r} in {document_id}")
        return unique
