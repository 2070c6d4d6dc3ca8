"""Parse the timestamped Markdown transcript into timed segments.

The generation service returns a Markdown document in which each spoken
line may start with a ``(HH:MM:SS.mmm)`` timecode:

    # Transcript (with actions)
    (00:00:01.000) Speaker 1: Hello there. [door closes]
    (00:00:03.500) Speaker 2: Hi!

Only lines carrying that exact prefix become segments. Headings, prose and
malformed timecodes are treated as noise and dropped. Each segment ends
where the next one starts; the last one ends at the media duration.
"""

from __future__ import annotations

import math
import re

from vidscribe.core.models import TimedSegment

# ASCII digits only; fullwidth or Arabic-Indic timecodes are noise.
_LINE_RE = re.compile(r"^\((\d{2}):(\d{2}):(\d{2})\.(\d{3})\)\s*(.*)", re.ASCII)
_TIMESTAMP_RE = re.compile(r"^(\d{2}):(\d{2}):(\d{2})\.(\d{3})$", re.ASCII)


def _to_seconds(hours: str, minutes: str, seconds: str, millis: str) -> float:
    return int(hours, 10) * 3600 + int(minutes, 10) * 60 + int(seconds, 10) + int(millis, 10) / 1000


def parse_timestamp(value: str) -> float | None:
    """Decode a bare ``HH:MM:SS.mmm`` timestamp, or None if it is malformed."""
    match = _TIMESTAMP_RE.match(value.strip())
    if match is None:
        return None
    return _to_seconds(*match.groups())


def format_timestamp(seconds: float) -> str:
    """Format seconds as ``HH:MM:SS.mmm``, carrying millisecond rounding."""
    total_ms = int(round(seconds * 1000))
    h, rem = divmod(total_ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def validate_duration(value: float | None) -> float:
    """Return ``value`` if it is a usable media duration, else raise ValueError.

    The parser itself does not check the duration it is given; callers
    must run this first.
    """
    if value is None or not math.isfinite(value) or value <= 0:
        raise ValueError(
            "Could not determine a valid video duration. "
            "The video file may be corrupt or still loading."
        )
    return float(value)


def parse_transcript(markdown: str | None, total_duration: float) -> list[TimedSegment]:
    """Convert a timestamped Markdown transcript into ordered timed segments.

    Args:
        markdown: Transcript text. Empty or None yields no segments.
        total_duration: Media duration in seconds, used as the end of the
            last segment. Must already be validated by the caller.

    Returns:
        Segments in input line order (never sorted), with
        ``segments[i].end == segments[i + 1].start``.
    """
    if not markdown:
        return []

    starts: list[tuple[float, str]] = []
    for line in markdown.split("\n"):
        match = _LINE_RE.match(line)
        if match is None:
            continue
        hours, minutes, seconds, millis, text = match.groups()
        starts.append((_to_seconds(hours, minutes, seconds, millis), text.strip()))

    segments = []
    for i, (start, text) in enumerate(starts):
        end = starts[i + 1][0] if i + 1 < len(starts) else total_duration
        segments.append(TimedSegment(start=start, end=end, text=text))
    return segments
