"""Media inspection helpers using ffprobe."""

from __future__ import annotations

import json
import mimetypes
import shutil
import subprocess
from pathlib import Path

_EXTRA_MIME = {
    ".mkv": "video/x-matroska",
    ".webm": "video/webm",
    ".ts": "video/mp2t",
    ".flv": "video/x-flv",
}


def check_ffprobe() -> bool:
    """Check if ffprobe is available on the system."""
    return shutil.which("ffprobe") is not None


def guess_video_mime(path: Path) -> str:
    """Guess the MIME type of a media file from its extension."""
    path = Path(path)
    mime = _EXTRA_MIME.get(path.suffix.lower())
    if mime is None:
        mime, _ = mimetypes.guess_type(path.name)
    return mime or "application/octet-stream"


def is_video_file(path: Path) -> bool:
    """True if the file's MIME type is ``video/*``."""
    return guess_video_mime(path).startswith("video/")


def probe_duration(video_path: Path) -> float | None:
    """Read the container duration in seconds, or None if ffprobe reports none.

    Raises:
        FileNotFoundError: If ffprobe is not installed or the video doesn't exist.
        subprocess.CalledProcessError: If ffprobe fails.
    """
    if not check_ffprobe():
        raise FileNotFoundError("ffprobe not found. Install ffmpeg, e.g.: brew install ffmpeg")

    video_path = Path(video_path)
    if not video_path.is_file():
        raise FileNotFoundError(f"Video file not found: {video_path}")

    cmd = [
        "ffprobe",
        "-v",
        "error",
        "-show_entries",
        "format=duration",
        "-of",
        "json",
        str(video_path),
    ]
    result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.PIPE)
    if result.returncode != 0:
        stderr_msg = result.stderr.decode(errors="replace").strip()
        raise subprocess.CalledProcessError(result.returncode, cmd, stderr=stderr_msg)

    data = json.loads(result.stdout or b"{}")
    duration = data.get("format", {}).get("duration")
    if duration in (None, "N/A"):
        return None
    return float(duration)
