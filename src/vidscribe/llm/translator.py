"""LLM-based translation of a generation envelope into the target languages."""

from __future__ import annotations

from typing import Callable

from pydantic import ValidationError

from vidscribe.core.config import LLMConfig
from vidscribe.core.errors import TranslationError
from vidscribe.core.languages import TARGET_LANGUAGES
from vidscribe.core.models import GenerationResult, TranslationResult
from vidscribe.llm.client import complete
from vidscribe.llm.prompts import extract_json, translation_system_prompt
from vidscribe.subtitles.converter import count_cues, is_webvtt
from vidscribe.utils.console import console


def check_translation(source: GenerationResult, result: TranslationResult) -> list[str]:
    """Return human-readable problems found in a translation envelope.

    Checks each expected language is present, each VTT has its header and
    the same cue count as the source, and flags keys that are not target
    languages.
    """
    problems = []
    source_cues = count_cues(source.subtitles_vtt)
    for code in TARGET_LANGUAGES:
        translation = result.translations.get(code)
        if translation is None:
            problems.append(f"{code}: missing from response")
            continue
        if not is_webvtt(translation.subtitles_vtt):
            problems.append(f"{code}: subtitles do not start with WEBVTT")
            continue
        cues = count_cues(translation.subtitles_vtt)
        if cues != source_cues:
            problems.append(f"{code}: {cues} cues, expected {source_cues}")
    for code in result.translations:
        if code not in TARGET_LANGUAGES:
            problems.append(f"{code}: not a target language, ignored")
    return problems


def translate_result(
    result: GenerationResult,
    config: LLMConfig,
    on_progress: Callable[[float], None] | None = None,
) -> TranslationResult:
    """Translate generated subtitles and transcript into all target languages.

    Sends the whole generation envelope in a single request. Timing must be
    preserved by the model; cue-count mismatches are reported but kept.
    Keys that are not target languages are reported and dropped.

    Args:
        result: A successful generation envelope.
        config: LLM configuration.
        on_progress: Optional callback receiving progress fraction (0.0–1.0).

    Returns:
        The validated translation envelope.

    Raises:
        TranslationError: If the call fails, the reply is not a valid
            envelope, or the model reports an error status.
    """
    messages = [
        {"role": "system", "content": translation_system_prompt()},
        {"role": "user", "content": result.model_dump_json(indent=2)},
    ]

    if on_progress:
        on_progress(0.0)

    with console.status("[bold blue]Translating content...[/bold blue]"):
        try:
            response = complete(messages, config, response_format={"type": "json_object"})
        except Exception as e:
            raise TranslationError(f"Could not translate content from the AI model: {e}") from e

    try:
        translated = TranslationResult.model_validate_json(extract_json(response))
    except ValidationError as e:
        raise TranslationError(f"Translation response was not a valid envelope: {e}") from e

    if translated.status == "error":
        raise TranslationError(
            translated.first_error_message("AI translation failed with an unknown error.")
        )

    for problem in check_translation(result, translated):
        console.print(f"[yellow]Translation check:[/yellow] {problem}")
    translated.translations = {
        code: t for code, t in translated.translations.items() if code in TARGET_LANGUAGES
    }

    if on_progress:
        on_progress(1.0)

    console.print(
        f"[green]Translation complete:[/green] {len(translated.translations)} languages"
    )
    return translated
