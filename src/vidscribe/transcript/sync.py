"""Map a playback position to the active transcript segment.

Segments are treated as half-open intervals ``[start, end)``: a position
that falls exactly on a boundary belongs to the segment starting there.
"""

from __future__ import annotations

from typing import Protocol, Sequence

from vidscribe.core.models import TimedSegment


class PlaybackSurface(Protocol):
    """Anything with a writable playback position in seconds (e.g. an mpv player)."""

    time_pos: float | None


def is_active(segment: TimedSegment, current_time: float) -> bool:
    """True if ``current_time`` lies in ``[segment.start, segment.end)``."""
    return segment.start <= current_time < segment.end


def find_active(segments: Sequence[TimedSegment], current_time: float | None) -> int | None:
    """Index of the active segment, or None.

    The first match in sequence order wins if segments overlap.
    """
    if current_time is None:
        return None
    for i, segment in enumerate(segments):
        if is_active(segment, current_time):
            return i
    return None


def seek(segment: TimedSegment, surface: PlaybackSurface) -> None:
    """Move the playback surface to the start of ``segment``.

    No range check; the surface clamps or rejects out-of-range positions.
    """
    surface.time_pos = segment.start


class SegmentFollower:
    """Report the active segment index only when it changes.

    Used by tick-driven consumers that print or redraw on change. The
    active index is recomputed from scratch on every update.
    """

    def __init__(self, segments: Sequence[TimedSegment]):
        self.segments = segments
        self.current: int | None = None

    def update(self, current_time: float | None) -> bool:
        """Recompute the active index; True if it differs from the last tick."""
        index = find_active(self.segments, current_time)
        if index == self.current:
            return False
        self.current = index
        return True
