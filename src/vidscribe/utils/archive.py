"""ZIP packaging of workspace results."""

from __future__ import annotations

import zipfile
from pathlib import Path

from vidscribe.utils.paths import find_video


def bundle_workspace(
    workspace: Path,
    output_path: Path | None = None,
    include_video: bool = False,
) -> Path:
    """Pack transcripts, subtitles and metadata of a workspace into a ZIP.

    The video is left out unless ``include_video`` is set. Symlinked videos
    are stored by content.

    Args:
        workspace: Workspace directory.
        output_path: Archive path. Defaults to ``<slug>-<timestamp>.zip``
            next to the workspace.
        include_video: Also store the source video.

    Returns:
        Path to the written archive.
    """
    workspace = Path(workspace)
    if output_path is None:
        output_path = workspace.parent / f"{workspace.parent.name}-{workspace.name}.zip"
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    video = find_video(workspace)
    with zipfile.ZipFile(output_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for f in sorted(workspace.iterdir()):
            if f.name.startswith(".") or not f.is_file() or f == output_path:
                continue
            if video is not None and f.name == video.name and not include_video:
                continue
            zf.write(f, arcname=f.name)
    return output_path
