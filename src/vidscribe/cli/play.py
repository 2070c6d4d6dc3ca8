"""vidscribe play command: play a workspace video with its transcript."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from vidscribe.cli.utils import fail, resolve_workspace
from vidscribe.core.config import load_config
from vidscribe.core.languages import ORIGINAL, validate_language


def play(
    workspace: Annotated[
        Path,
        typer.Argument(help="Workspace directory."),
    ],
    lang: Annotated[
        str,
        typer.Option("--lang", "-l", help="'original' or a translation code (es, de, it, fr, nl)."),
    ] = ORIGINAL,
) -> None:
    """Play a video in mpv, following the transcript in the console.

    Press n / p in the player window to jump to the next / previous segment.
    """
    from vidscribe.core.pipeline import play_workspace

    config = load_config()

    try:
        validate_language(lang)
        play_workspace(resolve_workspace(workspace), lang, config)
    except (ValueError, FileNotFoundError) as e:
        fail(e)
