"""
chainnode_core.context
----------------------
Cancellation and deadlines for long-running bootstrap work.

A Context is passed down through `init`; collaborators that honor it call
`check()` at safe points. Children inherit their parent's cancellation.
"""

from __future__ import annotations
import threading, time
from typing import Optional

from .errors import ContextCancelledError, DeadlineExceededError


class Context:
    def __init__(self, parent: Optional["Context"] = None, deadline: Optional[float] = None):
        self._parent = parent
        self._cancelled = threading.Event()
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self.deadline = deadline

    @classmethod
    def background(cls) -> "Context":
        return cls()

    def with_cancel(self) -> "Context":
        return Context(parent=self)

    def with_timeout(self, seconds: float) -> "Context":
        return Context(parent=self, deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    def err(self) -> Optional[Exception]:
        if self._cancelled.is_set():
            return ContextCancelledError("context cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            return DeadlineExceededError("context deadline exceeded")
        if self._parent is not None:
            return self._parent.err()
        return None

    def done(self) -> bool:
        return self.err() is not None

    def check(self) -> None:
        err = self.err()
        if err is not None:
            raise err
