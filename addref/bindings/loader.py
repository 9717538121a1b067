"""JSON loading for binding index and workspace files.

Uses msgspec for typed, fast parsing.
"""

import logging
from pathlib import Path
from typing import Optional

import msgspec

from ..models import (
    Document,
    MetadataReference,
    MetadataReferenceProperties,
    Project,
    Solution,
)

logger = logging.getLogger(__name__)


class ContainerSpec(msgspec.Struct, omit_defaults=True):
    """External container (assembly or package) in a bindings file."""

    name: str
    path: str
    kind: str = "assembly"
    types: list[str] = []


class BindingsSpec(msgspec.Struct, omit_defaults=True):
    """Full bindings file specification."""

    version: str = "1.0"
    containers: list[ContainerSpec] = []


class ReferenceSpec(msgspec.Struct, omit_defaults=True):
    """Metadata reference in a workspace file."""

    path: str
    properties: MetadataReferenceProperties = MetadataReferenceProperties.ASSEMBLY


class DocumentSpec(msgspec.Struct, omit_defaults=True):
    """Document in a workspace file.

    ``text`` is read from ``path`` (relative to the workspace file) when
    omitted.
    """

    id: str
    path: str
    text: Optional[str] = None


class ProjectSpec(msgspec.Struct, omit_defaults=True):
    """Project in a workspace file."""

    id: str
    name: str
    documents: list[DocumentSpec] = []
    references: list[ReferenceSpec] = []
    project_references: list[str] = []
    declared_symbols: list[str] = []


class WorkspaceSpec(msgspec.Struct, omit_defaults=True):
    """Full workspace file specification."""

    version: str = "1.0"
    projects: list[ProjectSpec] = []


_bindings_decoder = msgspec.json.Decoder(BindingsSpec)
_workspace_decoder = msgspec.json.Decoder(WorkspaceSpec)
_encoder = msgspec.json.Encoder()


def load_bindings(path: str | Path) -> BindingsSpec:
    """Load a bindings file.

    Container paths are made absolute relative to the bindings file.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
    """
    path = Path(path)
    with open(path, "rb") as f:
        spec = _bindings_decoder.decode(f.read())
    for container in spec.containers:
        container_path = Path(container.path)
        if not container_path.is_absolute():
            container.path = str(path.parent / container_path)
    return spec


def load_workspace(path: str | Path) -> Solution:
    """Load a workspace file into a ``Solution`` snapshot.

    Raises:
        FileNotFoundError: If the file or a referenced document doesn't exist.
        msgspec.DecodeError: If the file is not valid JSON.
        ValueError: If two documents share an id.
    """
    path = Path(path)
    with open(path, "rb") as f:
        spec = _workspace_decoder.decode(f.read())

    projects: list[Project] = []
    documents: list[Document] = []
    seen_ids: set[str] = set()

    for p in spec.projects:
        for d in p.documents:
            if d.id in seen_ids:
                raise ValueError(f"Duplicate document id: {d.id}")
            seen_ids.add(d.id)
            text = d.text
            if text is None:
                text = (path.parent / d.path).read_text(encoding="utf-8")
            documents.append(Document(id=d.id, project_id=p.id, path=d.path, text=text))

        projects.append(Project(
            id=p.id,
            name=p.name,
            document_ids=tuple(d.id for d in p.documents),
            metadata_references=tuple(
                MetadataReference(path=r.path, properties=r.properties)
                for r in p.references
            ),
            project_references=tuple(p.project_references),
            declared_symbols=tuple(p.declared_symbols),
        ))

    logger.debug(f"Loaded workspace {path}: {len(projects)} projects, {len(documents)} documents")
    return Solution(projects=tuple(projects), documents=tuple(documents))


def solution_to_spec(solution: Solution) -> WorkspaceSpec:
    """Convert a snapshot back to its file form, with document text inlined."""
    projects = []
    for project in solution.projects:
        documents = []
        for document_id in project.document_ids:
            document = solution.get_document(document_id)
            if document is None:
                continue
            documents.append(DocumentSpec(id=document.id, path=document.path, text=document.text))
        projects.append(ProjectSpec(
            id=project.id,
            name=project.name,
            documents=documents,
            references=[
                ReferenceSpec(path=r.path, properties=r.properties)
                for r in project.metadata_references
            ],
            project_references=list(project.project_references),
            declared_symbols=list(project.declared_symbols),
        ))
    return WorkspaceSpec(projects=projects)


def write_workspace(path: str | Path, solution: Solution) -> Path:
    """Write ``solution`` as a workspace file."""
    path = Path(path)
    encoded = msgspec.json.format(_encoder.encode(solution_to_spec(solution)), indent=2)
    with open(path, "wb") as f:
        f.write(encoded)
    return path
