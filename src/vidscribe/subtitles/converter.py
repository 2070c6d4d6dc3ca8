"""Subtitle conversion utilities.

The generation service already returns WebVTT, so most of the time the
text is written to disk as-is. This module handles:
- Checking WebVTT returned by the service (cue counts, header)
- Serialising parsed transcript segments as subtitle cues
- Loading WebVTT text back into segments
"""

from __future__ import annotations

from pathlib import Path

import pysubs2

from vidscribe.core.models import TimedSegment


def _to_ssa(segments: list[TimedSegment]) -> pysubs2.SSAFile:
    subs = pysubs2.SSAFile()
    for seg in segments:
        subs.events.append(
            pysubs2.SSAEvent(
                start=pysubs2.make_time(s=seg.start),
                end=pysubs2.make_time(s=seg.end),
                text=seg.text,
            )
        )
    return subs


def _from_ssa(subs: pysubs2.SSAFile) -> list[TimedSegment]:
    return [
        TimedSegment(
            start=event.start / 1000.0,
            end=event.end / 1000.0,
            text=event.plaintext,
        )
        for event in subs.events
        if not event.is_comment
    ]


def is_webvtt(text: str) -> bool:
    """True if ``text`` carries the mandatory WEBVTT header."""
    return text.lstrip("\ufeff").startswith("WEBVTT")


def load_vtt_text(text: str) -> list[TimedSegment]:
    """Parse WebVTT text into segments."""
    if not text.strip():
        return []
    return _from_ssa(pysubs2.SSAFile.from_string(text, format_="vtt"))


def count_cues(text: str) -> int:
    """Number of cues in a WebVTT document."""
    return len(load_vtt_text(text))


def segments_to_vtt(segments: list[TimedSegment]) -> str:
    """Serialise segments as a WebVTT document (``HH:MM:SS.mmm --> HH:MM:SS.mmm``)."""
    return _to_ssa(segments).to_string("vtt")


def save_subtitles(segments: list[TimedSegment], path: Path, fmt: str = "vtt") -> Path:
    """Save segments to a subtitle file.

    Args:
        segments: Timed segments.
        path: Output file path.
        fmt: Format: "srt", "vtt", or "txt".

    Returns:
        The path the file was written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "txt":
        text = "\n".join(seg.text for seg in segments if seg.text.strip())
        path.write_text(text, encoding="utf-8")
    else:
        _to_ssa(segments).save(str(path), format_=fmt)

    return path
