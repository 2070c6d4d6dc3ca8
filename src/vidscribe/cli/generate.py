"""vidscribe generate command: subtitles and action transcript from video files."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.table import Table

from vidscribe.cli.utils import expand_inputs, fail
from vidscribe.core.config import load_config
from vidscribe.core.errors import VidscribeError
from vidscribe.core.models import ProfanityMode
from vidscribe.utils.console import console


def generate(
    inputs: Annotated[
        list[str],
        typer.Argument(help="Video files, glob patterns, or .txt lists of paths."),
    ],
    profanity: Annotated[
        Optional[ProfanityMode],
        typer.Option("--profanity", "-p", help="Profanity handling: verbatim, mask, or beep."),
    ] = None,
    translate: Annotated[
        bool,
        typer.Option("--translate/--no-translate", help="Translate into es, de, it, fr, nl."),
    ] = False,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Gemini model for generation."),
    ] = None,
    llm_model: Annotated[
        Optional[str],
        typer.Option("--llm-model", help="LiteLLM model for translation."),
    ] = None,
    play: Annotated[
        bool,
        typer.Option(
            "--play", help="Play the video with its transcript afterwards (single input only)."
        ),
    ] = False,
    workspace_dir: Annotated[
        Optional[Path],
        typer.Option("--workspace-dir", "-w", help="Base directory for workspaces."),
    ] = None,
) -> None:
    """Generate WebVTT subtitles and a transcript with actions for each video.

    Accepts multiple inputs: files, glob patterns (*.mp4), or .txt files
    containing one path per line.
    """
    from vidscribe.core.pipeline import run_generate

    config = load_config(
        **{
            "gemini.model": model,
            "gemini.profanity_mode": profanity.value if profanity else None,
            "llm.model": llm_model,
            "workspace_dir": str(workspace_dir) if workspace_dir else None,
        }
    )

    expanded = expand_inputs(inputs)
    if not expanded:
        fail("No inputs resolved. Check your paths or patterns.")
    if play and len(expanded) > 1:
        fail("--play works with a single video only.")

    if len(expanded) == 1:
        try:
            run_generate(Path(expanded[0]), config, translate=translate, play=play)
        except (VidscribeError, ValueError, FileNotFoundError) as e:
            fail(f"Failed to generate content: {e}")
        return

    results: list[tuple[str, str, str]] = []  # (input, status, workspace or error)
    console.print(f"[bold]Batch processing {len(expanded)} videos...[/bold]\n")

    for i, input_path in enumerate(expanded, 1):
        console.rule(f"[bold][{i}/{len(expanded)}] {input_path}[/bold]")
        try:
            workspace = run_generate(Path(input_path), config, translate=translate)
            results.append((input_path, "success", str(workspace)))
        except (VidscribeError, ValueError, FileNotFoundError) as e:
            console.print(f"[red]Failed:[/red] {e}")
            results.append((input_path, "failed", str(e)))

    console.print()
    table = Table(title=f"Batch Results ({len(expanded)} files)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Input", max_width=50, no_wrap=True)
    table.add_column("Status")
    table.add_column("Output", max_width=50, no_wrap=True)

    succeeded = 0
    for i, (inp, status, output) in enumerate(results, 1):
        style = "green" if status == "success" else "red"
        table.add_row(str(i), inp, f"[{style}]{status}[/{style}]", output)
        if status == "success":
            succeeded += 1

    console.print(table)
    console.print(f"\n[bold]{succeeded}/{len(results)} succeeded.[/bold]")
    if succeeded < len(results):
        raise typer.Exit(1)
