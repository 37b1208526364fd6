"""
Lock-guarded owner of a single Round.

Drivers that share a round between concurrent handlers go through a
Table: every action runs inside `acquire()`, so actions apply one at a
time in arrival order and nobody sees a round mid-mutation.

Usage:
    table = Table("room-1")
    with table.acquire() as rnd:
        rnd.add_player("alice", 1000)
"""

from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from holdem.core.game import Round


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Table:
    """A Round plus the lock that serializes access to it."""

    def __init__(self, table_id: str, round_: Optional[Round] = None):
        self.table_id = table_id
        self._round = round_ if round_ is not None else Round()
        self._lock = threading.Lock()

    @contextmanager
    def acquire(self) -> Iterator[Round]:
        """Hold the table lock for the duration of one action."""
        with self._lock:
            yield self._round

    def apply(self, action: Callable[[Round], T]) -> T:
        """Run `action` against the round under the lock and return its result."""
        with self.acquire() as rnd:
            return action(rnd)

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    def __repr__(self) -> str:
        return f"Table({self.table_id})"
