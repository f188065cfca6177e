"""
Caption timeline synchronization for LRCKit.

Keeps track of which caption line is active while playback position
samples arrive. Samples may arrive in any order (seeks, players that
report stale positions before starting), so every sample is resolved
independently of the previous one.
"""

import logging
import math
from bisect import bisect_right
from typing import Callable, Iterable, List, Optional, Tuple

from .models import CaptionEntry
from .parser import parse_lrc

logger = logging.getLogger(__name__)

# Reported when no caption line is active
NO_ACTIVE_INDEX = -1

IndexListener = Callable[[int], None]


class CaptionTimeline:
    """
    Stateful cursor over a parsed caption sequence.

    The active line for a position is the LAST entry whose timestamp is at
    or before that position. Among entries sharing a timestamp the one with
    the highest index wins. Positions before the first entry, NaN positions,
    and empty timelines report NO_ACTIVE_INDEX.

    Listeners registered with subscribe() are called with the new index
    only when it differs from the previously reported one.

    Example:
        >>> timeline = CaptionTimeline.from_text("[00:00]a\\n[00:05]b")
        >>> timeline.update(6.0)
        1
        >>> timeline.current_entry.text
        'b'
    """

    def __init__(self, entries: Iterable[CaptionEntry] = ()):
        self._entries: Tuple[CaptionEntry, ...] = ()
        self._timestamps: List[float] = []
        self._active_index = NO_ACTIVE_INDEX
        self._changed = False
        self._listeners: List[IndexListener] = []
        self._install(entries)

    @classmethod
    def from_text(cls, raw: Optional[str], expand_repeated_tags: bool = False) -> "CaptionTimeline":
        """Build a timeline straight from LRC content."""
        return cls(parse_lrc(raw, expand_repeated_tags=expand_repeated_tags))

    @property
    def entries(self) -> Tuple[CaptionEntry, ...]:
        """Caption entries in timestamp order."""
        return self._entries

    @property
    def active_index(self) -> int:
        """Index of the active entry, or NO_ACTIVE_INDEX."""
        return self._active_index

    @property
    def changed(self) -> bool:
        """Whether the most recent update/load/reset altered active_index."""
        return self._changed

    @property
    def is_empty(self) -> bool:
        """Whether the timeline holds no entries."""
        return not self._entries

    @property
    def current_entry(self) -> Optional[CaptionEntry]:
        """The active entry, or None when no line is active."""
        if self._active_index == NO_ACTIVE_INDEX:
            return None
        return self._entries[self._active_index]

    def __len__(self) -> int:
        return len(self._entries)

    def subscribe(self, listener: IndexListener) -> None:
        """Register a callable invoked with the new index on every change."""
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: IndexListener) -> None:
        """Remove a listener registered with subscribe()."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load(self, entries: Iterable[CaptionEntry]) -> None:
        """
        Replace the caption sequence, e.g. when a new track starts.

        The active index returns to NO_ACTIVE_INDEX. Entries are assumed to
        come from parse_lrc and are stability-sorted again to keep the
        ordering invariant for hand-built lists.
        """
        self._install(entries)
        logger.debug(f"Loaded caption timeline with {len(self._entries)} entries")
        self._report(NO_ACTIVE_INDEX)

    def reset(self) -> None:
        """Drop all entries and return to the empty state."""
        self.load(())

    def update(self, position: float) -> int:
        """
        Resolve the active caption for a playback position sample.

        Args:
            position: Playback position in seconds

        Returns:
            Index of the active entry, or NO_ACTIVE_INDEX
        """
        return self._report(self._resolve(position))

    def _install(self, entries: Iterable[CaptionEntry]) -> None:
        self._entries = tuple(sorted(entries, key=lambda entry: entry.timestamp))
        self._timestamps = [entry.timestamp for entry in self._entries]

    def _resolve(self, position: float) -> int:
        if not self._timestamps or math.isnan(position):
            return NO_ACTIVE_INDEX

        # Most samples land in the same line as the previous one
        current = self._active_index
        if current != NO_ACTIVE_INDEX and self._timestamps[current] <= position:
            following = current + 1
            if following == len(self._timestamps) or position < self._timestamps[following]:
                return current

        return bisect_right(self._timestamps, position) - 1

    def _report(self, index: int) -> int:
        self._changed = index != self._active_index
        if self._changed:
            logger.debug(f"Active caption index {self._active_index} -> {index}")
            self._active_index = index
            for listener in list(self._listeners):
                listener(index)
        return index
