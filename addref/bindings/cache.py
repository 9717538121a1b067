"""Binary cache for parsed bindings files.

Saves the containers of a loaded BindingIndex to a .bindings.cache file
beside the bindings JSON so later loads skip JSON parsing.

Uses msgspec.msgpack for safe, fast serialization (no pickle).
"""

import os
import logging
from pathlib import Path
from typing import Optional, TYPE_CHECKING

import msgspec

from .loader import ContainerSpec

if TYPE_CHECKING:
    from .index import BindingIndex

logger = logging.getLogger(__name__)

CACHE_VERSION = 1


class CacheData(msgspec.Struct):
    """Full cache structure for msgspec.msgpack serialization."""
    source_mtime: float
    source_size: int
    cache_version: int
    version: str
    containers: list[ContainerSpec]


def get_cache_path(bindings_path: Path) -> Path:
    """Return .bindings.cache path for a given bindings file."""
    return bindings_path.parent / ".bindings.cache"


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(CacheData)


def write_cache(bindings_path: Path, index: "BindingIndex") -> Optional[Path]:
    """Serialize the index containers to .bindings.cache.

    Args:
        bindings_path: Path to the source bindings file.
        index: The loaded BindingIndex to cache.

    Returns:
        Path to the cache file, or None if write failed.
    """
    cache_path = get_cache_path(bindings_path)
    try:
        cache_data = CacheData(
            source_mtime=os.path.getmtime(bindings_path),
            source_size=os.path.getsize(bindings_path),
            cache_version=CACHE_VERSION,
            version=index.version,
            containers=list(index.containers.values()),
        )
        encoded = _encoder.encode(cache_data)
        with open(cache_path, "wb") as f:
            f.write(encoded)
        return cache_path
    except (OSError, msgspec.EncodeError) as e:
        logger.debug(f"Failed to write cache: {e}")
        return None


def read_cache(cache_path: Path, bindings_path: Path) -> Optional[CacheData]:
    """Load cached containers if the cache is valid.

    Args:
        cache_path: Path to the .bindings.cache file.
        bindings_path: Path to the source bindings file.

    Returns:
        CacheData, or None if cache is stale/missing/corrupt.
    """
    if not cache_path.exists():
        return None

    try:
        with open(cache_path, "rb") as f:
            raw = f.read()
        cache_data = _decoder.decode(raw)
    except (OSError, msgspec.DecodeError, ValueError) as e:
        logger.debug(f"Failed to read cache: {e}")
        return None

    if cache_data.cache_version != CACHE_VERSION:
        logger.debug("Cache version mismatch")
        return None

    # Check source file hasn't changed
    try:
        current_mtime = os.path.getmtime(bindings_path)
        current_size = os.path.getsize(bindings_path)
    except OSError:
        return None

    if (cache_data.source_mtime != current_mtime or
            cache_data.source_size != current_size):
        logger.debug("Source file changed, cache invalidated")
        return None

    return cache_data
