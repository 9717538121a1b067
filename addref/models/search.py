"""Search result and binding candidate models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SearchResult:
    """A symbol found by a discovery source.

    Identity is the name parts plus the source that found them. The weight
    is discovery metadata and does not take part in equality.
    """

    name_parts: tuple[str, ...]
    source: str
    weight: float = field(default=0.0, compare=False)

    @property
    def symbol_name(self) -> str:
        return self.name_parts[-1] if self.name_parts else ""

    @property
    def namespace_parts(self) -> tuple[str, ...]:
        """Name parts of the namespace that must be imported."""
        return self.name_parts[:-1]

    @property
    def fqn(self) -> str:
        return ".".join(self.name_parts)


@dataclass(frozen=True)
class ExternalBindingCandidate:
    """A container (assembly, package, project) that defines a symbol."""

    container_name: str
    namespace_parts: tuple[str, ...]
    symbol_name: str

    @property
    def fqn(self) -> str:
        """Fully qualified symbol path inside the container."""
        return ".".join(self.namespace_parts + (self.symbol_name,))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ExternalBindingCandidate):
            return NotImplemented
        return self.container_name == other.container_name and self.fqn == other.fqn

    def __hash__(self) -> int:
        return hash((self.container_name, self.fqn))
