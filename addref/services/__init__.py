"""Collaborator services: protocols and default implementations."""

from .protocols import (
    BindingResolver,
    ImportEdit,
    ImportInserter,
    MetadataService,
    SymbolSearchService,
)
from .imports import TextImportInserter
from .metadata import FileMetadataService

__all__ = [
    "BindingResolver",
    "ImportEdit",
    "ImportInserter",
    "MetadataService",
    "SymbolSearchService",
    "TextImportInserter",
    "FileMetadataService",
]
