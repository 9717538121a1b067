"""Single-assignment, lazily computed value shared between threads."""

import logging
import threading
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from ..cancellation import CancellationToken

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Seconds between cancellation checks while another thread computes.
_WAIT_INTERVAL = 0.05


class _State(Enum):
    UNSET = "unset"
    IN_PROGRESS = "in_progress"
    SET = "set"


class ResolutionCache(Generic[T]):
    """Memo cell holding ``unset | in progress | value``.

    The first caller of ``get_or_compute`` runs ``compute``; concurrent
    callers wait for it and every later caller gets the stored value.
    Once set, the value never changes.

    If ``compute`` raises (including cancellation) the cell goes back to
    unset and one of the waiting or later callers computes again.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._state = _State.UNSET
        self._value: Optional[T] = None

    @property
    def is_set(self) -> bool:
        with self._cond:
            return self._state is _State.SET

    def peek(self) -> Optional[T]:
        """Return the value if computed, without computing it."""
        with self._cond:
            return self._value if self._state is _State.SET else None

    def get_or_compute(
        self,
        compute: Callable[[Optional[CancellationToken]], T],
        cancellation: Optional[CancellationToken] = None,
    ) -> T:
        """Return the cached value, running ``compute`` if nobody has yet.

        Raises:
            FixCancelled: If ``cancellation`` fires while computing or while
                waiting for another thread's computation.
        """
        with self._cond:
            while True:
                if self._state is _State.SET:
                    return self._value
                if self._state is _State.UNSET:
                    self._state = _State.IN_PROGRESS
                    break
                self._cond.wait(_WAIT_INTERVAL)
                if cancellation is not None:
                    cancellation.raise_if_cancelled()

        try:
            if cancellation is not None:
                cancellation.raise_if_cancelled()
            value = compute(cancellation)
        except BaseException:
            with self._cond:
                self._state = _State.UNSET
                self._cond.notify_all()
            raise

        with self._cond:
            self._value = value
            self._state = _State.SET
            self._cond.notify_all()
        return value
