"""Immutable solution snapshot.

Solution -> Project -> Document, each replaced on write. Every ``with_*``
method returns a new value and bumps the solution version; previously
returned snapshots never change.
"""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class MetadataReferenceProperties(str, Enum):
    """Kind of metadata a reference points at."""

    ASSEMBLY = "assembly"
    MODULE = "module"


@dataclass(frozen=True)
class MetadataReference:
    """Handle to an external binary the project compiles against."""

    path: str
    properties: MetadataReferenceProperties = MetadataReferenceProperties.ASSEMBLY

    @property
    def key(self) -> tuple[str, "MetadataReferenceProperties"]:
        """Identity for set semantics: normalized absolute path plus kind."""
        return (os.path.normcase(os.path.normpath(os.path.abspath(self.path))), self.properties)

    @property
    def display(self) -> str:
        return self.path.replace("\\", "/").rsplit("/", 1)[-1]


@dataclass(frozen=True)
class Document:
    """Source document owned by a project."""

    id: str
    project_id: str
    path: str
    text: str

    def with_text(self, text: str) -> "Document":
        return replace(self, text=text)


@dataclass(frozen=True)
class Project:
    """Project with its documents and references."""

    id: str
    name: str
    document_ids: tuple[str, ...] = ()
    metadata_references: tuple[MetadataReference, ...] = ()
    project_references: tuple[str, ...] = ()
    declared_symbols: tuple[str, ...] = ()

    def with_added_reference(self, reference: MetadataReference) -> "Project":
        """Return a project that references ``reference``.

        Adding a reference already present, under any spelling of the same
        file path, returns ``self``.
        """
        key = reference.key
        if any(existing.key == key for existing in self.metadata_references):
            return self
        return replace(self, metadata_references=self.metadata_references + (reference,))

    def with_added_project_reference(self, project_id: str) -> "Project":
        if project_id in self.project_references:
            return self
        return replace(self, project_references=self.project_references + (project_id,))


@dataclass(frozen=True)
class Solution:
    """Versioned, immutable set of projects and documents."""

    projects: tuple[Project, ...] = ()
    documents: tuple[Document, ...] = ()
    version: int = 0
    _project_map: dict = field(default=None, init=False, repr=False, compare=False)
    _document_map: dict = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        # Lookup tables are private and never handed out.
        object.__setattr__(self, "_project_map", {p.id: p for p in self.projects})
        object.__setattr__(self, "_document_map", {d.id: d for d in self.documents})

    def get_project(self, project_id: str) -> Optional[Project]:
        return self._project_map.get(project_id)

    def get_document(self, document_id: str) -> Optional[Document]:
        return self._document_map.get(document_id)

    def find_document_by_path(self, path: str) -> Optional[Document]:
        for document in self.documents:
            if document.path == path or document.id == path:
                return document
        return None

    def with_document(self, document: Document) -> "Solution":
        """Replace the document with the same id."""
        if self.get_document(document.id) == document:
            return self
        documents = tuple(document if d.id == document.id else d for d in self.documents)
        return Solution(projects=self.projects, documents=documents, version=self.version + 1)

    def with_project(self, project: Project) -> "Solution":
        """Replace the project with the same id."""
        if self.get_project(project.id) == project:
            return self
        projects = tuple(project if p.id == project.id else p for p in self.projects)
        return Solution(projects=projects, documents=self.documents, version=self.version + 1)

    def depends_on(self, from_id: str, to_id: str) -> bool:
        """Whether project ``from_id`` references ``to_id``, directly or not."""
        stack = [from_id]
        seen: set[str] = set()
        while stack:
            current = stack.pop()
            if current == to_id:
                return True
            if current in seen:
                continue
            seen.add(current)
            project = self.get_project(current)
            if project is not None:
                stack.extend(project.project_references)
        return False
