"""Gemini generation backend: upload a video, wait for it, analyze it.

The Files API processes uploads asynchronously, so the flow is:
upload → poll ``files.get`` until the file leaves ``PROCESSING`` →
``generate_content`` with the file reference → delete the upload.
Giving up on the poll (timeout) just abandons the loop; there is nothing
to roll back server-side beyond the best-effort delete.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable

from google import genai
from google.genai import types
from pydantic import ValidationError

from vidscribe.core.config import GeminiConfig
from vidscribe.core.errors import ServiceError
from vidscribe.core.events import EventCallback, emitter
from vidscribe.core.models import GenerationResult, ProfanityMode
from vidscribe.llm.prompts import (
    GENERATION_SCHEMA,
    GENERATION_SYSTEM,
    GENERATION_USER,
    extract_json,
)
from vidscribe.utils.console import console
from vidscribe.utils.media import guess_video_mime


def make_client(config: GeminiConfig) -> genai.Client:
    """Create a Gemini client; without an explicit key the SDK reads GEMINI_API_KEY."""
    if config.api_key:
        return genai.Client(api_key=config.api_key)
    return genai.Client()


def check_upload_size(video_path: Path, config: GeminiConfig) -> None:
    """Raise ServiceError if the video exceeds the upload limit."""
    if Path(video_path).stat().st_size > config.max_upload_bytes:
        raise ServiceError(
            f"File is too large. Please upload a video under {config.max_upload_mb} MB."
        )


def wait_until_active(
    client: genai.Client,
    uploaded: types.File,
    poll_interval: float,
    poll_timeout: float | None = None,
    on_poll: Callable[[types.File], None] | None = None,
    sleep: Callable[[float], None] = time.sleep,
    clock: Callable[[], float] = time.monotonic,
) -> types.File:
    """Poll an uploaded file on a fixed interval until it is no longer processing.

    Returns:
        The file in state ACTIVE.

    Raises:
        ServiceError: If processing ends in any other state, or the
            timeout elapses first.
    """
    deadline = clock() + poll_timeout if poll_timeout is not None else None

    while uploaded.state == types.FileState.PROCESSING:
        if deadline is not None and clock() >= deadline:
            raise ServiceError(
                f"Timed out after {poll_timeout:.0f}s waiting for the server to process the video."
            )
        sleep(poll_interval)
        uploaded = client.files.get(name=uploaded.name)
        if on_poll:
            on_poll(uploaded)

    if uploaded.state != types.FileState.ACTIVE:
        state = getattr(uploaded.state, "value", uploaded.state)
        raise ServiceError(f"File processing failed on the server. Status: {state}")
    return uploaded


def _parse_envelope(text: str) -> GenerationResult:
    try:
        result = GenerationResult.model_validate_json(extract_json(text))
    except ValidationError as e:
        raise ServiceError(f"The AI response was not a valid envelope: {e}") from e

    if result.status == "error" or not result.subtitles_vtt or not result.transcript_markdown:
        raise ServiceError(
            result.first_error_message("AI generation failed with an unknown error.")
        )
    return result


def generate_transcript_and_subtitles(
    video_path: Path,
    profanity_mode: ProfanityMode,
    config: GeminiConfig,
    on_event: EventCallback | None = None,
    client: genai.Client | None = None,
) -> GenerationResult:
    """Generate WebVTT subtitles and an action transcript for a video.

    Args:
        video_path: Local video file.
        profanity_mode: Passed through to the model unchanged.
        config: Gemini configuration (model, polling, upload limit).
        on_event: Optional callback for progress events.
        client: Pre-built client, mainly for tests.

    Returns:
        The validated generation envelope.

    Raises:
        ServiceError: On oversize files, failed processing, timeouts,
            SDK errors or an error/incomplete envelope.
    """
    emit = emitter(on_event)
    video_path = Path(video_path)
    check_upload_size(video_path, config)

    client = client or make_client(config)
    mime_type = guess_video_mime(video_path)
    uploaded: types.File | None = None

    try:
        emit("upload", 0.0, "Uploading video... This may take a while for large files.")
        console.print(f"[bold]Uploading:[/bold] {video_path.name}")
        uploaded = client.files.upload(
            file=str(video_path),
            config=types.UploadFileConfig(mime_type=mime_type, display_name=video_path.name),
        )
        emit("upload", 1.0, "File uploaded. Server is processing the video...")

        def _on_poll(f: types.File) -> None:
            emit("process", 0.5, "Still processing...", {"state": str(f.state)})

        with console.status("[bold]Server is processing the video...[/bold]"):
            uploaded = wait_until_active(
                client,
                uploaded,
                poll_interval=config.poll_interval,
                poll_timeout=config.poll_timeout,
                on_poll=_on_poll,
            )
        emit("process", 1.0, "Video processed. Preparing AI analysis...")

        emit("analyze", 0.0, "Analyzing video... this may take several minutes.")
        with console.status(f"[bold]Analyzing with {config.model}...[/bold]"):
            response = client.models.generate_content(
                model=config.model,
                contents=[
                    types.Part.from_uri(file_uri=uploaded.uri, mime_type=mime_type),
                    GENERATION_USER.format(profanity_mode=ProfanityMode(profanity_mode).value),
                ],
                config=types.GenerateContentConfig(
                    system_instruction=GENERATION_SYSTEM,
                    response_mime_type="application/json",
                    response_schema=GENERATION_SCHEMA,
                ),
            )
        result = _parse_envelope(response.text or "")
        emit("analyze", 1.0, "Analysis complete")
    except ServiceError:
        raise
    except Exception as e:
        raise ServiceError(f"The AI process failed: {e}") from e
    finally:
        if uploaded is not None:
            _delete_upload(client, uploaded)

    meta = result.metadata
    console.print(
        f"[green]Generation complete:[/green] language {meta.language or 'unknown'}, "
        f"profanity {meta.profanity_mode.value} "
        f"({meta.masked_terms_count} masked, {meta.beeped_terms_count} beeped)"
    )
    return result


def _delete_upload(client: genai.Client, uploaded: types.File) -> None:
    """Remove the uploaded file from the Files API; failures are only reported."""
    try:
        client.files.delete(name=uploaded.name)
    except Exception as e:
        console.print(f"[yellow]Could not delete uploaded file {uploaded.name}:[/yellow] {e}")
