"""Shared CLI utilities."""

from __future__ import annotations

from pathlib import Path

import typer

from vidscribe.utils.console import console


def expand_inputs(inputs: list[str]) -> list[str]:
    """Expand glob patterns and path list files into individual paths."""
    expanded = []
    for inp in inputs:
        path = Path(inp)

        # .txt file: read as path list (one per line)
        if path.suffix == ".txt" and path.is_file():
            for line in path.read_text().splitlines():
                line = line.strip()
                if line and not line.startswith("#"):
                    expanded.append(line)
            continue

        if any(c in inp for c in "*?["):
            matches = sorted(Path(".").glob(inp))
            if matches:
                expanded.extend(str(m) for m in matches)
                continue

        expanded.append(inp)

    return expanded


def resolve_workspace(path: Path) -> Path:
    """Accept a workspace or its slug directory; the latest run wins for the latter.

    Raises:
        FileNotFoundError: If no workspace is found at ``path``.
    """
    path = Path(path)
    if not path.is_dir():
        raise FileNotFoundError(f"Not a directory: {path}")
    if (path / "metadata.json").is_file() or (path / "result.json").is_file():
        return path
    runs = sorted(p for p in path.iterdir() if p.is_dir() and (p / "metadata.json").is_file())
    if not runs:
        raise FileNotFoundError(f"No workspace found in: {path}")
    return runs[-1]


def fail(message: object) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(1)
