"""
HistoryStore - Per-object linear undo/redo history over opaque snapshots.

Each key (usually an entity's unique_id) owns a non-empty list of
snapshots and a cursor into it. Pushing after an undo discards the
"future" snapshots. Snapshots are never inspected.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
S = TypeVar("S")


class HistoryKeyError(KeyError):
    """Raised when an operation targets a key that was never initialized."""

    def __init__(self, key):
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f'Object with id "{self.key}" is not initialized.'


class HistoryIndexError(IndexError):
    """Raised when restore() is given an index outside the key's history."""


@dataclass
class HistoryEntry(Generic[S]):
    """Snapshots for one key. Invariant: 0 <= current_index < len(states)."""

    states: list[S] = field(default_factory=list)
    current_index: int = 0

    @property
    def current(self) -> S:
        return self.states[self.current_index]

    def can_undo(self) -> bool:
        return self.current_index > 0

    def can_redo(self) -> bool:
        return self.current_index < len(self.states) - 1


class HistoryStore(Generic[K, S]):
    """
    Linear undo/redo log keyed by object id.

    Every operation except initialize() and clear_all() raises
    HistoryKeyError for a key that has not been initialized.
    """

    def __init__(self, max_depth: Optional[int] = None):
        """
        Initialize the history store.

        Args:
            max_depth: Maximum snapshots kept per key (oldest dropped first).
                None keeps every snapshot.
        """
        if max_depth is not None and max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth
        self._entries: dict[K, HistoryEntry[S]] = {}

    def _entry(self, key: K) -> HistoryEntry[S]:
        entry = self._entries.get(key)
        if entry is None:
            raise HistoryKeyError(key)
        return entry

    def __contains__(self, key) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[K]:
        return list(self._entries)

    # --- Lifecycle ---

    def initialize(self, key: K, state: S) -> bool:
        """
        Start a history for ``key`` with ``state`` as its only snapshot.

        Returns:
            True if a new history was created, False if the key already existed.
        """
        if key in self._entries:
            return False
        self._entries[key] = HistoryEntry(states=[state], current_index=0)
        logger.debug("History initialized for %s", key)
        return True

    def clear(self, key: K) -> None:
        """Drop the history for ``key``; it must be re-initialized before reuse."""
        self._entry(key)
        del self._entries[key]

    def clear_all(self) -> None:
        self._entries.clear()

    # --- Mutation ---

    def push(self, key: K, state: S) -> None:
        """
        Append a snapshot and move the cursor to it.

        Snapshots after the cursor (left over from undo) are discarded first.
        """
        entry = self._entry(key)
        if entry.current_index < len(entry.states) - 1:
            del entry.states[entry.current_index + 1:]
        entry.states.append(state)

        if self.max_depth is not None and len(entry.states) > self.max_depth:
            del entry.states[: len(entry.states) - self.max_depth]

        entry.current_index = len(entry.states) - 1

    def pop_latest(self, key: K) -> Optional[S]:
        """
        Remove the newest snapshot unless it is the only one.

        The cursor moves to the new last snapshot.

        Returns:
            The removed snapshot, or None if the history has a single state.
        """
        entry = self._entry(key)
        if len(entry.states) <= 1:
            return None
        removed = entry.states.pop()
        entry.current_index = len(entry.states) - 1
        return removed

    # --- Cursor movement ---

    def undo(self, key: K) -> S:
        """Step the cursor back (stopping at the first snapshot) and return it."""
        entry = self._entry(key)
        entry.current_index = max(0, entry.current_index - 1)
        return entry.current

    def redo(self, key: K) -> S:
        """Step the cursor forward (stopping at the last snapshot) and return it."""
        entry = self._entry(key)
        entry.current_index = min(len(entry.states) - 1, entry.current_index + 1)
        return entry.current

    def restore(self, key: K, index: int) -> S:
        """
        Jump the cursor to ``index`` and return that snapshot.

        Raises:
            HistoryIndexError: If index is outside [0, len(states)).
        """
        entry = self._entry(key)
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(entry.states):
            raise HistoryIndexError(f'State index "{index}" is out of bounds.')
        entry.current_index = index
        return entry.current

    # --- Queries ---

    def current(self, key: K) -> S:
        return self._entry(key).current

    def current_index(self, key: K) -> int:
        return self._entry(key).current_index

    def list_states(self, key: K) -> list[S]:
        """Return a shallow copy of the snapshots for ``key``."""
        return list(self._entry(key).states)

    def can_undo(self, key: K) -> bool:
        return self._entry(key).can_undo()

    def can_redo(self, key: K) -> bool:
        return self._entry(key).can_redo()

    def get_state_count(self, key: K) -> int:
        return len(self._entry(key).states)

    def describe(self, key: K) -> dict[str, Any]:
        """Summary of one history, for status bars and logging."""
        entry = self._entry(key)
        return {
            "count": len(entry.states),
            "index": entry.current_index,
            "can_undo": entry.can_undo(),
            "can_redo": entry.can_redo(),
        }

    # list(key) alias; defined last so the class body still sees builtin list
    list = list_states
