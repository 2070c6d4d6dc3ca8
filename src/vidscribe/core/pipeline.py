"""Pipeline orchestrator: probe, generate, translate, save, play."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path

from vidscribe.core.config import VidscribeConfig
from vidscribe.core.events import EventCallback, emitter
from vidscribe.core.languages import ORIGINAL, TARGET_LANGUAGES
from vidscribe.core.models import GenerationResult, ProfanityMode, TimedSegment, TranslationResult
from vidscribe.transcript.parser import parse_transcript, validate_duration
from vidscribe.utils.console import console
from vidscribe.utils.media import is_video_file, probe_duration
from vidscribe.utils.paths import (
    create_workspace,
    link_or_copy,
    load_metadata,
    save_metadata,
    workspace_paths,
)


def write_language_outputs(
    workspace: Path,
    language: str,
    subtitles_vtt: str,
    transcript_markdown: str,
    duration: float,
) -> list[TimedSegment]:
    """Write one language's transcript, subtitles and parsed segments.

    Returns:
        The segments parsed from the transcript.
    """
    paths = workspace_paths(workspace, language)

    paths["transcript_md"].write_text(transcript_markdown, encoding="utf-8")
    paths["subtitles_vtt"].write_text(subtitles_vtt, encoding="utf-8")

    segments = parse_transcript(transcript_markdown, duration)
    paths["segments_json"].write_text(
        json.dumps([asdict(seg) for seg in segments], indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    console.print(
        f"[green]Saved:[/green] {paths['transcript_md'].name}, "
        f"{paths['subtitles_vtt'].name} ({len(segments)} segments)"
    )
    return segments


def _save_translations(workspace: Path, translated: TranslationResult, duration: float) -> None:
    workspace_paths(workspace)["translations_json"].write_text(
        translated.model_dump_json(indent=2), encoding="utf-8"
    )
    for code in TARGET_LANGUAGES:
        translation = translated.translations.get(code)
        if translation is None:
            continue
        write_language_outputs(
            workspace,
            code,
            translation.subtitles_vtt,
            translation.transcript_markdown,
            duration,
        )


def run_generate(
    video_path: Path,
    config: VidscribeConfig,
    profanity_mode: ProfanityMode | None = None,
    translate: bool = False,
    play: bool = False,
    on_event: EventCallback | None = None,
) -> Path:
    """Run the full generation pipeline for one video.

    Args:
        video_path: Local video file.
        config: Full application config.
        profanity_mode: Overrides ``config.gemini.profanity_mode``.
        translate: Also translate into all target languages.
        play: Play the video with the transcript afterwards.
        on_event: Optional callback for streaming progress events.

    Returns:
        Path to the workspace directory.

    Raises:
        FileNotFoundError: If the video is missing or ffprobe is unavailable.
        ValueError: If the file is not a video or its duration is unusable.
        ServiceError: If generation fails.
        TranslationError: If translation was requested and fails.
    """
    emit = emitter(on_event)
    video_path = Path(video_path)
    mode = ProfanityMode(profanity_mode or config.gemini.profanity_mode)

    if not video_path.is_file():
        raise FileNotFoundError(f"File not found: {video_path}")
    if not is_video_file(video_path):
        raise ValueError(f"Please upload a valid video file: {video_path.name}")

    # Step 1: Duration must be known before any transcript can be parsed
    emit("probe", 0.0, "Reading video duration...")
    duration = validate_duration(probe_duration(video_path))
    emit("probe", 1.0, f"Duration: {duration:.3f}s")

    # Step 2: Workspace
    workspace = create_workspace(video_path.stem, base_dir=config.workspace_dir)
    paths = workspace_paths(workspace, video_ext=video_path.suffix.lower())
    console.print(f"[bold]Workspace:[/bold] {workspace}")
    link_or_copy(video_path, paths["video"])

    # Step 3: Generate
    from vidscribe.service.gemini import generate_transcript_and_subtitles

    result = generate_transcript_and_subtitles(video_path, mode, config.gemini, on_event=on_event)
    paths["result_json"].write_text(result.model_dump_json(indent=2), encoding="utf-8")
    write_language_outputs(
        workspace, ORIGINAL, result.subtitles_vtt, result.transcript_markdown, duration
    )

    # Step 4: Optional translation
    if translate:
        from vidscribe.llm.translator import translate_result

        emit("translate", 0.0, "Translating content...")

        def _on_translate_progress(frac: float) -> None:
            emit("translate", frac, f"Translating ({frac:.0%})...")

        translated = translate_result(result, config.llm, on_progress=_on_translate_progress)
        _save_translations(workspace, translated, duration)
        emit("translate", 1.0, "Translation complete")

    # Step 5: Metadata
    emit("save", 0.0, "Saving metadata...")
    save_metadata(
        workspace,
        title=video_path.stem,
        source_path=video_path.resolve(),
        duration=duration,
        profanity_mode=mode.value,
        gemini_model=config.gemini.model,
        llm_model=config.llm.model if translate else None,
        detected_language=result.metadata.language,
        masked_terms_count=result.metadata.masked_terms_count,
        beeped_terms_count=result.metadata.beeped_terms_count,
    )

    # Step 6: Optional playback
    if play:
        play_workspace(workspace, ORIGINAL, config)

    emit("save", 1.0, "Done", data={"workspace": str(workspace)})
    console.print(f"\n[bold green]Done![/bold green] Workspace: {workspace}")
    return workspace


def run_translate(
    workspace: Path,
    config: VidscribeConfig,
    on_event: EventCallback | None = None,
) -> TranslationResult:
    """Translate the generation result stored in an existing workspace.

    Raises:
        FileNotFoundError: If the workspace has no result.json.
        TranslationError: If translation fails.
    """
    from vidscribe.llm.translator import translate_result

    emit = emitter(on_event)
    paths = workspace_paths(workspace)
    if not paths["result_json"].is_file():
        raise FileNotFoundError(f"No result.json in workspace: {workspace}")

    result = GenerationResult.model_validate_json(
        paths["result_json"].read_text(encoding="utf-8")
    )
    metadata = load_metadata(workspace)
    duration = validate_duration(metadata.get("duration"))

    emit("translate", 0.0, "Translating content...")
    translated = translate_result(result, config.llm)
    _save_translations(workspace, translated, duration)
    emit("translate", 1.0, "Translation complete")

    metadata.pop("created_at", None)
    metadata.pop("files", None)
    metadata["llm_model"] = config.llm.model
    save_metadata(workspace, **metadata)
    return translated


def load_segments(
    workspace: Path,
    language: str = ORIGINAL,
    duration: float | None = None,
) -> list[TimedSegment]:
    """Parse the stored transcript of ``language`` in a workspace.

    The duration defaults to the one recorded in metadata.json.

    Raises:
        FileNotFoundError: If the transcript does not exist.
        ValueError: If no valid duration is available.
    """
    transcript = workspace_paths(workspace, language)["transcript_md"]
    if not transcript.is_file():
        raise FileNotFoundError(f"No {language} transcript in workspace: {workspace}")
    if duration is None:
        duration = load_metadata(workspace).get("duration")
    return parse_transcript(transcript.read_text(encoding="utf-8"), validate_duration(duration))


def play_workspace(workspace: Path, language: str, config: VidscribeConfig) -> None:
    """Play a workspace video in mpv following the transcript of ``language``."""
    from vidscribe.player.mpv_player import check_mpv
    from vidscribe.player.mpv_player import play as mpv_play
    from vidscribe.utils.paths import find_video

    video = find_video(workspace)
    if video is None:
        raise FileNotFoundError(f"No video file found in: {workspace}")
    if not check_mpv():
        console.print("[yellow]mpv not found, skipping playback.[/yellow]")
        return

    segments = load_segments(workspace, language)
    subtitles = workspace_paths(workspace, language)["subtitles_vtt"]
    mpv_play(
        video,
        segments,
        subtitles=subtitles if subtitles.is_file() else None,
        config=config.player,
    )
