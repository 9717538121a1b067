"""Fix configuration.

Loaded from an optional JSON file; CLI flags override file values.

Example:
    {
        "place_system_first": true,
        "import_template": "using {namespace};",
        "system_prefix": "System",
        "max_results": 50
    }
"""

import logging
from pathlib import Path
from typing import Optional

import msgspec

logger = logging.getLogger(__name__)


class FixConfig(msgspec.Struct, omit_defaults=True, forbid_unknown_fields=True):
    """Options shared by the provider, the import inserter and the CLI."""

    place_system_first: bool = True
    import_template: str = "using {namespace};"
    system_prefix: str = "System"
    max_results: int = 50

    def __post_init__(self):
        if "{namespace}" not in self.import_template:
            raise ValueError("import_template must contain '{namespace}'")
        try:
            self.import_template.format(namespace="X")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"import_template must only use the {{namespace}} field: {e!r}") from None
        if self.max_results < 1:
            raise ValueError("max_results must be positive")


_decoder = msgspec.json.Decoder(FixConfig)


def load_config(path: Optional[str | Path] = None) -> FixConfig:
    """Load configuration from ``path``, or defaults when no path is given.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        msgspec.ValidationError: If a field has the wrong type or value.
    """
    if path is None:
        return FixConfig()
    with open(path, "rb") as f:
        config = _decoder.decode(f.read())
    logger.debug(f"Loaded config from {path}: {config}")
    return config
