"""Workspace directory management for per-video output."""

from __future__ import annotations

import json
import os
import re
import shutil
from datetime import datetime, timezone
from pathlib import Path

from vidscribe.core.languages import ORIGINAL


def slugify(text: str) -> str:
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    return text[:80].strip("-")


def create_workspace(
    title: str,
    base_dir: Path = Path("./vidscribe_workspace"),
) -> Path:
    """Create a timestamped workspace directory for a video.

    Structure: <base_dir>/<slug>/<YYYYMMDD_HHMMSS>/
    Groups multiple runs of the same source under one parent slug dir.
    Runs started within the same second get a ``_2``, ``_3``... suffix.
    """
    slug = slugify(title) or "untitled"
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    parent = Path(base_dir) / slug
    parent.mkdir(parents=True, exist_ok=True)

    workspace = parent / timestamp
    counter = 1
    while True:
        try:
            workspace.mkdir()
            return workspace
        except FileExistsError:
            counter += 1
            workspace = parent / f"{timestamp}_{counter}"


def link_or_copy(source: Path, dest: Path) -> None:
    """Symlink source to dest, with copy fallback.

    Creates parent directories as needed and replaces an existing dest.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    if dest.is_symlink() or dest.exists():
        dest.unlink()
    try:
        os.symlink(source.resolve(), dest)
    except OSError:
        shutil.copy2(source, dest)


_VIDEO_EXTENSIONS = (".mp4", ".mkv", ".webm", ".avi", ".mov", ".ts", ".flv")


def find_video(workspace: Path) -> Path | None:
    """Find the video file in a workspace by globbing known extensions.

    Returns the first match, or None if no video is found.
    """
    for ext in _VIDEO_EXTENSIONS:
        candidates = sorted(workspace.glob(f"video{ext}"))
        if candidates:
            return candidates[0]
    return None


def workspace_paths(workspace: Path, language: str = ORIGINAL, video_ext: str = ".mp4") -> dict:
    """Generate standard output paths for a workspace.

    Returns a dict with keys: video, transcript_md, subtitles_vtt,
    segments_json, result_json, translations_json, metadata.
    """
    return {
        "video": workspace / f"video{video_ext}",
        "transcript_md": workspace / f"transcript.{language}.md",
        "subtitles_vtt": workspace / f"subtitles.{language}.vtt",
        "segments_json": workspace / f"segments.{language}.json",
        "result_json": workspace / "result.json",
        "translations_json": workspace / "translations.json",
        "metadata": workspace / "metadata.json",
    }


def available_languages(workspace: Path) -> list[str]:
    """Language labels that have a transcript in the workspace, original first."""
    labels = [f.name.split(".")[1] for f in sorted(workspace.glob("transcript.*.md"))]
    if ORIGINAL in labels:
        labels.remove(ORIGINAL)
        labels.insert(0, ORIGINAL)
    return labels


def load_metadata(workspace: Path) -> dict:
    """Read metadata.json from a workspace, or an empty dict if missing."""
    meta_path = workspace / "metadata.json"
    if not meta_path.is_file():
        return {}
    return json.loads(meta_path.read_text(encoding="utf-8"))


def save_metadata(workspace: Path, **kwargs: object) -> Path:
    """Save processing metadata to the workspace.

    Creates a metadata.json with source info, processing parameters,
    and an inventory of output files.
    """
    meta_path = workspace / "metadata.json"

    files = {}
    for f in sorted(workspace.iterdir()):
        if f.name == "metadata.json" or f.name.startswith("."):
            continue
        files[f.name] = {
            "size_bytes": f.stat().st_size,
            "type": _classify_file(f.name),
        }

    data = {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "files": files,
    }
    data.update({k: str(v) if isinstance(v, Path) else v for k, v in kwargs.items()})

    meta_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    return meta_path


def _classify_file(name: str) -> str:
    """Classify a workspace file by its name."""
    if name.startswith("video"):
        return "source_video"
    if name.startswith("transcript") and name.endswith(".md"):
        return "transcript"
    if name.startswith("subtitles") and name.endswith((".srt", ".vtt")):
        return "subtitles"
    if name.startswith("segments") and name.endswith(".json"):
        return "segments"
    if name in ("result.json", "translations.json"):
        return "service_response"
    return "other"
