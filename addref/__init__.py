"""addref - offer and apply deferred add-import/add-reference fixes."""

from .bindings import BindingIndex
from .cancellation import CancellationToken
from .config import FixConfig
from .errors import CompositionConflict, FixCancelled, FixError, NotFound, ResolutionFailed
from .fixes import AddImportFixProvider, DeferredFix, ResolutionCache
from .models import (
    ApplyChangesOperation,
    Document,
    ExternalBindingCandidate,
    FixDescription,
    Priority,
    Project,
    SearchResult,
    Solution,
)

__version__ = "0.1.0"

__all__ = [
    "BindingIndex",
    "CancellationToken",
    "FixConfig",
    "CompositionConflict",
    "FixCancelled",
    "FixError",
    "NotFound",
    "ResolutionFailed",
    "AddImportFixProvider",
    "DeferredFix",
    "ResolutionCache",
    "ApplyChangesOperation",
    "Document",
    "ExternalBindingCandidate",
    "FixDescription",
    "Priority",
    "Project",
    "SearchResult",
    "Solution",
]
