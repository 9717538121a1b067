"""Deferred fixes: identity, lazy resolution and snapshot composition."""

from .resolution import ResolutionCache
from .kinds import AssemblyFix, FixKind, NamespaceFix, ProjectFix
from .compose import compose_fix
from .deferred import DeferredFix
from .provider import AddImportFixProvider, dedupe_fixes

__all__ = [
    "ResolutionCache",
    "AssemblyFix",
    "FixKind",
    "NamespaceFix",
    "ProjectFix",
    "compose_fix",
    "DeferredFix",
    "AddImportFixProvider",
    "dedupe_fixes",
]
