"""Fix descriptions and code action operations."""

from dataclasses import dataclass
from enum import IntEnum

from .snapshot import Solution


class Priority(IntEnum):
    """Priority tier of an offered fix."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


@dataclass(frozen=True)
class FixDescription:
    """Cheap, display-only view of a fix."""

    title: str
    priority: Priority


@dataclass(frozen=True)
class ApplyChangesOperation:
    """Replace the caller's solution with ``changed_solution``."""

    changed_solution: Solution
