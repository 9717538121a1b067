"""Deferred fix: cheap to describe, resolved and composed only on demand."""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from ..cancellation import CancellationToken
from ..errors import CompositionConflict, FixCancelled, ResolutionFailed
from ..models import (
    ApplyChangesOperation,
    ExternalBindingCandidate,
    FixDescription,
    Project,
    SearchResult,
    Solution,
)
from .compose import compose_fix
from .kinds import AssemblyFix, FixKind, NamespaceFix, ProjectFix, priority_of
from .resolution import ResolutionCache

if TYPE_CHECKING:
    from .provider import AddImportFixProvider

logger = logging.getLogger(__name__)


class DeferredFix:
    """An offered fix for one (search result, binding candidate) pair.

    ``describe()`` only formats known fields. The binding path is resolved
    at most once, the first time ``is_applicable()`` or ``execute()`` needs
    it; a cancelled resolution leaves the slot unset so a later call can
    retry, while a resolver error is remembered as "not found".

    Two fixes are equal when their kinds and search results match and they
    bind through the same container.
    """

    def __init__(
        self,
        provider: "AddImportFixProvider",
        search_result: SearchResult,
        candidate: ExternalBindingCandidate,
        kind: FixKind,
        document_id: str,
        project_id: str,
    ):
        self.provider = provider
        self.search_result = search_result
        self.candidate = candidate
        self.kind = kind
        self.document_id = document_id
        self.project_id = project_id
        self.title = self._format_title()
        self.priority = priority_of(kind)
        self._resolution: ResolutionCache[Optional[str]] = ResolutionCache()

    def __repr__(self) -> str:
        return f"DeferredFix({self.title!r}, {self.priority.name})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DeferredFix):
            return NotImplemented
        return (
            type(self.kind) is type(other.kind)
            and self.search_result == other.search_result
            and self.candidate.container_name == other.candidate.container_name
        )

    def __hash__(self) -> int:
        return hash((self.candidate.container_name, hash(self.search_result)))

    def _format_title(self) -> str:
        description = self.provider.get_description(self.search_result.name_parts)
        kind = self.kind
        if isinstance(kind, AssemblyFix):
            return f"{description} (from {self.candidate.container_name})"
        if isinstance(kind, ProjectFix):
            return f"{description} (from project {kind.project_name})"
        if isinstance(kind, NamespaceFix):
            return description
        raise TypeError(f"Unknown fix kind: {kind!r}")

    def describe(self) -> FixDescription:
        return FixDescription(title=self.title, priority=self.priority)

    @property
    def resolved_path(self) -> Optional[str]:
        """Resolved binding path, or None if unresolved or not found."""
        return self._resolution.peek()

    def _resolve_path(self, cancellation: Optional[CancellationToken] = None) -> Optional[str]:
        return self._resolution.get_or_compute(self._compute_path, cancellation)

    def _compute_path(self, cancellation: Optional[CancellationToken]) -> Optional[str]:
        resolver = self.provider.resolver
        if resolver is None:
            return None
        try:
            path = resolver.resolve(
                self.project_id,
                self.candidate.container_name,
                self.candidate.fqn,
                cancellation,
            )
        except FixCancelled:
            raise
        except Exception as e:
            logger.debug(f"Resolver error for {self.candidate.fqn} in {self.candidate.container_name}: {e!r}")
            return None
        if not path or not path.strip():
            logger.debug(f"No path for {self.candidate.fqn} in {self.candidate.container_name}")
            return None
        return path

    def is_applicable(
        self,
        solution: Optional[Solution] = None,
        cancellation: Optional[CancellationToken] = None,
    ) -> bool:
        """Final check right before applying.

        Forces resolution for assembly fixes. With ``solution``, project fixes
        also check that the target project exists and does not depend on
        the owning project.

        Raises:
            FixCancelled: If ``cancellation`` fires during resolution.
        """
        kind = self.kind
        if isinstance(kind, AssemblyFix):
            return self._resolve_path(cancellation) is not None
        if isinstance(kind, ProjectFix):
            if solution is None:
                return True
            return self._can_reference_project(solution, kind)
        if isinstance(kind, NamespaceFix):
            return True
        raise TypeError(f"Unknown fix kind: {kind!r}")

    def execute(
        self,
        solution: Solution,
        cancellation: Optional[CancellationToken] = None,
    ) -> list[ApplyChangesOperation]:
        """Compute the single operation that applies this fix to ``solution``.

        Raises:
            ResolutionFailed: If no binding path could be resolved.
            FixCancelled: If ``cancellation`` fires.
            CompositionConflict: If ``solution`` no longer matches the fix.
        """
        if cancellation is not None:
            cancellation.raise_if_cancelled()

        attach = self._reference_attachment(solution, cancellation)
        new_solution = compose_fix(
            solution,
            self.document_id,
            self.project_id,
            self.search_result.namespace_parts,
            self.provider.inserter,
            self.provider.config.place_system_first,
            attach=attach,
            cancellation=cancellation,
        )
        return [ApplyChangesOperation(new_solution)]

    def _reference_attachment(
        self,
        solution: Solution,
        cancellation: Optional[CancellationToken],
    ) -> Optional[Callable[[Project], Project]]:
        kind = self.kind
        if isinstance(kind, AssemblyFix):
            path = self._resolve_path(cancellation)
            if path is None:
                raise ResolutionFailed(self.candidate.container_name, self.candidate.fqn)
            reference = self.provider.metadata_service.get_reference(path, kind.properties)
            return lambda project: project.with_added_reference(reference)
        if isinstance(kind, ProjectFix):
            if not self._can_reference_project(solution, kind):
                raise CompositionConflict(f"Cannot reference project {kind.project_id} from {self.project_id}")
            return lambda project: project.with_added_project_reference(kind.project_id)
        if isinstance(kind, NamespaceFix):
            return None
        raise TypeError(f"Unknown fix kind: {kind!r}")

    def _can_reference_project(self, solution: Solution, kind: ProjectFix) -> bool:
        return (
            kind.project_id != self.project_id
            and solution.get_project(kind.project_id) is not None
            and not solution.depends_on(kind.project_id, self.project_id)
        )
