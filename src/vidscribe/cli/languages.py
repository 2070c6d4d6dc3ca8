"""vidscribe languages command: list translation targets."""

from __future__ import annotations

from rich.table import Table

from vidscribe.core.languages import ORIGINAL, TARGET_LANGUAGES
from vidscribe.utils.console import console


def languages() -> None:
    """List the languages produced by 'vidscribe translate'."""
    table = Table(title=f"Translation Targets ({len(TARGET_LANGUAGES)})")
    table.add_column("Code", style="bold cyan", width=5)
    table.add_column("Language", width=20)

    for code, name in TARGET_LANGUAGES.items():
        table.add_row(code, name.title())

    console.print(table)
    console.print(
        f"\n[dim]The source language is auto-detected and stored as '{ORIGINAL}'.[/dim]"
    )
