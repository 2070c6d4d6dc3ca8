"""vidscribe translate command: translate an existing workspace."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from vidscribe.cli.utils import fail, resolve_workspace
from vidscribe.core.config import load_config
from vidscribe.core.errors import VidscribeError
from vidscribe.utils.console import console


def translate(
    workspace: Annotated[
        Path,
        typer.Argument(help="Workspace directory produced by 'vidscribe generate'."),
    ],
    llm_model: Annotated[
        Optional[str],
        typer.Option("--llm-model", help="LiteLLM model for translation."),
    ] = None,
) -> None:
    """Translate a workspace's subtitles and transcript into es, de, it, fr and nl."""
    from vidscribe.core.pipeline import run_translate

    config = load_config(**{"llm.model": llm_model})

    try:
        ws = resolve_workspace(workspace)
        console.print(f"[bold]Workspace:[/bold] {ws}")
        result = run_translate(ws, config)
    except (VidscribeError, ValueError, FileNotFoundError) as e:
        fail(f"Failed to translate content: {e}")

    console.print(f"[green]Languages:[/green] {', '.join(sorted(result.translations))}")
