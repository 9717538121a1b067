"""Binding index: which external container defines which symbol."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..cancellation import CancellationToken
from ..models import ExternalBindingCandidate, SearchResult
from .cache import get_cache_path, read_cache, write_cache
from .loader import ContainerSpec, load_bindings
from .trie import build_suffix_trie, group_by_short_name

logger = logging.getLogger(__name__)


def _entry_key(container_name: str, fqn: str) -> str:
    return f"{container_name}|{fqn}"


class BindingIndex:
    """In-memory index over a bindings file.

    Serves both as the symbol search service and as the binding resolver
    for assembly fixes.
    """

    def __init__(
        self,
        containers: list[ContainerSpec],
        version: str = "1.0",
        verify_paths: bool = True,
    ):
        """Initialize the index.

        Args:
            containers: External containers and the types they define.
            version: Bindings format version.
            verify_paths: Only resolve to container paths that exist on disk.
        """
        self.version = version
        self.verify_paths = verify_paths
        self.containers: dict[str, ContainerSpec] = {}
        for container in containers:
            # First definition wins for duplicated container names
            self.containers.setdefault(container.name, container)
        self._build_indexes()

    @classmethod
    def load(cls, path: str | Path, use_cache: bool = True, verify_paths: bool = True) -> "BindingIndex":
        """Load an index from a bindings file, going through the binary cache.

        Args:
            path: Path to the bindings JSON file.
            use_cache: Read and refresh ``.bindings.cache`` beside the file.
            verify_paths: Only resolve to container paths that exist on disk.
        """
        path = Path(path)
        if use_cache:
            cached = read_cache(get_cache_path(path), path)
            if cached is not None:
                logger.debug(f"Loaded bindings from cache for {path}")
                return cls(cached.containers, version=cached.version, verify_paths=verify_paths)

        spec = load_bindings(path)
        index = cls(spec.containers, version=spec.version, verify_paths=verify_paths)
        if use_cache:
            write_cache(path, index)
        return index

    def _build_indexes(self):
        """Build lookup indexes."""
        # Entry key to (container, namespace parts, symbol name)
        self.entries: dict[str, tuple[str, tuple[str, ...], str]] = {}
        fqns: dict[str, str] = {}

        for container in self.containers.values():
            for fqn in container.types:
                parts = tuple(p for p in fqn.split(".") if p)
                if not parts:
                    continue
                key = _entry_key(container.name, ".".join(parts))
                self.entries[key] = (container.name, parts[:-1], parts[-1])
                fqns[key] = ".".join(parts)

        self.name_to_keys = group_by_short_name(fqns)
        self.trie = build_suffix_trie(fqns)

    def search(
        self,
        name: str,
        cancellation: Optional[CancellationToken] = None,
        limit: int = 50,
    ) -> list[tuple[SearchResult, ExternalBindingCandidate]]:
        """Find containers defining a symbol called ``name``.

        ``name`` may be a short name (``Bar``) or a dotted suffix
        (``Foo.Bar``). Exact-case short name matches weigh more than
        case-insensitive ones.
        """
        name = name.strip().strip(".")
        if not name:
            return []

        if "." in name:
            keys = self.trie.search_suffix(name, limit=limit)
        else:
            keys = list(self.name_to_keys.get(name, []))
            for key in self.name_to_keys.get(name.lower(), []):
                if key not in keys:
                    keys.append(key)

        results = []
        for key in keys[:limit]:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            container_name, namespace_parts, symbol_name = self.entries[key]
            container = self.containers[container_name]
            weight = 1.0 if symbol_name == name.rsplit(".", 1)[-1] else 0.5
            results.append((
                SearchResult(
                    name_parts=namespace_parts + (symbol_name,),
                    source=container.kind,
                    weight=weight,
                ),
                ExternalBindingCandidate(
                    container_name=container_name,
                    namespace_parts=namespace_parts,
                    symbol_name=symbol_name,
                ),
            ))
        return results

    def resolve(
        self,
        project_id: str,
        container_name: str,
        fqn: str,
        cancellation: Optional[CancellationToken] = None,
    ) -> Optional[str]:
        """Return the on-disk path of ``container_name`` if it defines ``fqn``.

        Returns None when the container is unknown, does not define the
        symbol, or (with ``verify_paths``) its file is missing.
        """
        if cancellation is not None:
            cancellation.raise_if_cancelled()
        container = self.containers.get(container_name)
        if container is None:
            return None
        if _entry_key(container_name, fqn) not in self.entries:
            return None
        if self.verify_paths and not os.path.isfile(container.path):
            logger.debug(f"Container {container_name} missing on disk: {container.path}")
            return None
        return container.path
