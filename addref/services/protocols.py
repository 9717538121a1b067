"""Collaborator interfaces consumed by the fix core."""

from typing import NamedTuple, Optional, Protocol

from ..cancellation import CancellationToken
from ..models import (
    Document,
    ExternalBindingCandidate,
    MetadataReference,
    MetadataReferenceProperties,
    SearchResult,
)


class ImportEdit(NamedTuple):
    """Outcome of inserting an import: the directive text and new document."""

    directive: Optional[str]
    document: Document


class SymbolSearchService(Protocol):
    def search(
        self,
        name: str,
        cancellation: Optional[CancellationToken] = None,
        limit: int = 50,
    ) -> list[tuple[SearchResult, ExternalBindingCandidate]]:
        ...


class BindingResolver(Protocol):
    def resolve(
        self,
        project_id: str,
        container_name: str,
        fqn: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Pure lookup; returns a path or None."""
        ...


class ImportInserter(Protocol):
    def insert_import(
        self,
        document: Document,
        name_parts: tuple[str, ...],
        place_system_first: bool,
        cancellation: Optional[CancellationToken] = None,
    ) -> ImportEdit:
        ...


class MetadataService(Protocol):
    def get_reference(
        self,
        path: str,
        properties: MetadataReferenceProperties,
    ) -> MetadataReference:
        ...
