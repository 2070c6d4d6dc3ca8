"""vidscribe export command: ZIP a workspace's results."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from vidscribe.cli.utils import fail, resolve_workspace
from vidscribe.utils.archive import bundle_workspace
from vidscribe.utils.console import console


def export(
    workspace: Annotated[
        Path,
        typer.Argument(help="Workspace directory."),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Archive path (default: next to the workspace)."),
    ] = None,
    include_video: Annotated[
        bool,
        typer.Option("--include-video", help="Also store the source video."),
    ] = False,
) -> None:
    """Bundle transcripts, subtitles and metadata into a ZIP archive."""
    try:
        ws = resolve_workspace(workspace)
    except FileNotFoundError as e:
        fail(e)

    archive = bundle_workspace(ws, output, include_video=include_video)
    console.print(f"[green]Saved:[/green] {archive}")
