"""Output formatting module."""

from .json_formatter import print_json
from .console import fix_to_dict, print_applied, print_fixes

__all__ = [
    "print_json",
    "fix_to_dict",
    "print_applied",
    "print_fixes",
]
