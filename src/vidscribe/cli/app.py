"""vidscribe CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from vidscribe import __version__
from vidscribe.cli.export import export
from vidscribe.cli.generate import generate
from vidscribe.cli.languages import languages
from vidscribe.cli.play import play
from vidscribe.cli.serve import serve
from vidscribe.cli.transcript import transcript
from vidscribe.cli.translate import translate

app = typer.Typer(
    name="vidscribe",
    help="vidscribe: AI subtitles and action transcripts for video files.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"vidscribe {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """vidscribe: AI subtitles and action transcripts for video files."""
    # Load .env file for API keys (GEMINI_API_KEY, etc.)
    # Does not override existing env vars; shell exports take precedence
    load_dotenv(override=False)


app.command("generate")(generate)
app.command("translate")(translate)
app.command("transcript")(transcript)
app.command("play")(play)
app.command("serve")(serve)
app.command("export")(export)
app.command("languages")(languages)
