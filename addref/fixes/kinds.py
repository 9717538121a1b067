"""Closed set of fix kinds.

Each kind carries only the data it needs beyond the search result and
binding candidate. ``DeferredFix`` dispatches on the kind in one place per
operation.
"""

from dataclasses import dataclass
from typing import Union

from ..models import MetadataReferenceProperties, Priority


@dataclass(frozen=True)
class AssemblyFix:
    """Reference an external assembly and import its namespace."""

    properties: MetadataReferenceProperties = MetadataReferenceProperties.ASSEMBLY


@dataclass(frozen=True)
class ProjectFix:
    """Reference another project of the solution and import its namespace."""

    project_id: str
    project_name: str


@dataclass(frozen=True)
class NamespaceFix:
    """The symbol lives in the owning project; only import the namespace."""


FixKind = Union[AssemblyFix, ProjectFix, NamespaceFix]


def priority_of(kind: FixKind) -> Priority:
    # Adding a reference is always low priority.
    if isinstance(kind, AssemblyFix):
        return Priority.LOW
    if isinstance(kind, ProjectFix):
        return Priority.MEDIUM
    if isinstance(kind, NamespaceFix):
        return Priority.HIGH
    raise TypeError(f"Unknown fix kind: {kind!r}")
