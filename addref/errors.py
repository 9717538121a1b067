"""Errors raised while computing or applying fixes."""


class FixError(Exception):
    """Base class for fix errors."""


class ResolutionFailed(FixError):
    """The binding resolver found no usable location for a fix."""

    def __init__(self, container_name: str, fqn: str):
        self.container_name = container_name
        self.fqn = fqn
        super().__init__(f"Could not resolve {fqn} in {container_name}")


NotFound = ResolutionFailed


class FixCancelled(FixError):
    """The caller cancelled the operation."""


class CompositionConflict(FixError):
    """The snapshot no longer matches the document/project the fix targets."""
