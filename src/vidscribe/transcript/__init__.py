"""Transcript parsing and playback synchronisation."""

from vidscribe.transcript.parser import (
    format_timestamp,
    parse_timestamp,
    parse_transcript,
    validate_duration,
)
from vidscribe.transcript.sync import SegmentFollower, find_active, is_active, seek

__all__ = [
    "SegmentFollower",
    "find_active",
    "format_timestamp",
    "is_active",
    "parse_timestamp",
    "parse_transcript",
    "seek",
    "validate_duration",
]
