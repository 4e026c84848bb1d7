"""
CHASSIS - Disposal Protocol

Every participant of the ownership tree exposes the same deterministic
finalization contract:

- ``dispose()`` is idempotent: the first call sets the disposed flag and
  then runs the ``_on_dispose()`` teardown hook exactly once; later calls,
  including re-entrant calls made from inside the hook, do nothing.
- ``is_disposed`` reports the flag.
- ``_on_dispose()`` is the overridable teardown hook (empty by default).

Disposal is always explicit. Nothing here relies on garbage collection,
so callers must dispose on every exit path. The context manager protocol
does exactly that:

    with application({"id": "billing"}) as app:
        ...
    # app.dispose() has run, even if the block raised

The disposed flag lives in a :class:`DisposalState` holder that
:class:`Disposable` owns by composition, so the flag and its transition
rule can be embedded in classes with unrelated bases.
"""

from __future__ import annotations

import threading
from typing import Any, Optional, Protocol, Type, runtime_checkable
from types import TracebackType


@runtime_checkable
class IDisposable(Protocol):
    """Protocol for objects with deterministic, idempotent finalization."""

    @property
    def is_disposed(self) -> bool:
        """True once dispose() has been called."""
        ...

    def dispose(self) -> None:
        """Finalize the object. Safe to call more than once."""
        ...


class DisposalState:
    """Holds the disposed flag and enforces its single false -> true transition."""

    __slots__ = ("_disposed", "_lock")

    def __init__(self) -> None:
        self._disposed = False
        self._lock = threading.Lock()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def try_mark_disposed(self) -> bool:
        """
        Set the flag.

        Returns:
            True if this call performed the transition, False if the flag
            was already set.
        """
        with self._lock:
            if self._disposed:
                return False
            self._disposed = True
            return True


class Disposable:
    """
    Mixin implementing :class:`IDisposable` on top of a :class:`DisposalState`.

    Subclasses override :meth:`_on_dispose` and must call
    ``super().__init__()`` so the state holder exists.
    """

    def __init__(self) -> None:
        self._disposal = DisposalState()

    @property
    def is_disposed(self) -> bool:
        return self._disposal.disposed

    def dispose(self) -> None:
        if not self._disposal.try_mark_disposed():
            return
        self._on_dispose()

    def _on_dispose(self) -> None:
        """Teardown hook. Runs once, after the disposed flag is set."""

    def __enter__(self) -> Any:
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.dispose()
