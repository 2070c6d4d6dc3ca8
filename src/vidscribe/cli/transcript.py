"""vidscribe transcript command: show or export parsed transcript segments."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from vidscribe.cli.utils import fail, resolve_workspace
from vidscribe.core.languages import ORIGINAL, validate_language
from vidscribe.utils.console import console


def transcript(
    workspace: Annotated[
        Path,
        typer.Argument(help="Workspace directory."),
    ],
    lang: Annotated[
        str,
        typer.Option("--lang", "-l", help="'original' or a translation code (es, de, it, fr, nl)."),
    ] = ORIGINAL,
    at: Annotated[
        Optional[float],
        typer.Option("--at", help="Highlight the segment active at this position (seconds)."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write segments as cues to this file."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: vtt, srt, txt."),
    ] = "vtt",
) -> None:
    """List the timed segments of a workspace transcript."""
    from vidscribe.core.pipeline import load_segments
    from vidscribe.subtitles.converter import save_subtitles
    from vidscribe.transcript.parser import format_timestamp
    from vidscribe.transcript.sync import find_active

    try:
        validate_language(lang)
        ws = resolve_workspace(workspace)
        segments = load_segments(ws, lang)
    except (ValueError, FileNotFoundError) as e:
        fail(e)

    if not segments:
        console.print("[yellow]No timestamped lines found in the transcript.[/yellow]")
        return

    active = find_active(segments, at)

    table = Table(title=f"Transcript ({lang}): {len(segments)} segments")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Start", style="cyan", no_wrap=True)
    table.add_column("End", style="cyan", no_wrap=True)
    table.add_column("Text")

    for i, seg in enumerate(segments):
        style = "bold reverse" if i == active else None
        table.add_row(
            str(i + 1), format_timestamp(seg.start), format_timestamp(seg.end), seg.text, style=style
        )
    console.print(table)

    if at is not None and active is None:
        console.print(f"[dim]No segment is active at {at:.3f}s.[/dim]")

    if output is not None:
        save_subtitles(segments, output, fmt=fmt)
        console.print(f"[green]Saved:[/green] {output}")
