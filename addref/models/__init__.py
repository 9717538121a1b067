"""Data models for addref."""

from .search import SearchResult, ExternalBindingCandidate
from .snapshot import (
    Document,
    MetadataReference,
    MetadataReferenceProperties,
    Project,
    Solution,
)
from .operations import ApplyChangesOperation, FixDescription, Priority

__all__ = [
    "SearchResult",
    "ExternalBindingCandidate",
    "Document",
    "MetadataReference",
    "MetadataReferenceProperties",
    "Project",
    "Solution",
    "ApplyChangesOperation",
    "FixDescription",
    "Priority",
]
