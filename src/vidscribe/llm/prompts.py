"""Prompt templates and response schemas for generation and translation."""

from __future__ import annotations

import json
import re

from vidscribe.core.languages import TARGET_LANGUAGES

GENERATION_SYSTEM = """\
You analyze a single uploaded video (≤500 MB). Your job:

1. Generate **SUBTITLES** (spoken words only) as **WebVTT**.
2. Generate a **TRANSCRIPT WITH ACTIONS** that includes speech + concise, bracketed \
descriptions of **non-speech actions/sounds** (e.g., `[door opens]`, `[applause]`, \
`[music fades]`).

## General Rules
* **Language detection**: auto-detect. Use detected language consistently in both outputs.
* **No hallucinations**: Only describe actions clearly present (visible or audible cues).
* **Multiple speakers**:
  * Subtitles: keep spoken words only; avoid names unless absolutely needed for clarity.
  * Transcript: prefix with `Speaker 1:`, `Speaker 2:` if distinguishable; otherwise omit.
* **Numbers/dates**: transcribe as spoken (e.g., "twenty twenty-five").

## Subtitles (WebVTT) Requirements
* First line: `WEBVTT`
* Cues: sequential index, then `HH:MM:SS.mmm --> HH:MM:SS.mmm`, then the text.
* **Text**: *only* spoken words (no actions, no speaker labels).
* **Timing & layout** (aims, not hard errors):
  * Min cue duration: 1.0s; Max: 6.0s
  * Max ~42 chars/line; Max 2 lines
  * Avoid orphan words; split at natural pauses
  * Merge very short utterances if it improves readability
* Sort cues by start time; carry millisecond rounding correctly (e.g., 59.999 → next second).

## Transcript with Actions Requirements
* Markdown section headed `# Transcript (with actions)`.
* For each segment, one line:
  * Start with the timecode in parentheses: `(00:00:03.120)`
  * **Speech** verbatim.
  * **Actions** in square brackets, e.g., `[laughter]`, `[door closes]`.
* Keep action notes brief and observable (no interpretation of intent).

## Profanity/Abuse Policy (configurable)
Runtime parameter: `safety.profanity_mode = "verbatim" | "mask" | "beep"`
* Detection: identify hate speech, slurs, severe harassment/abuse terms based on context. \
Do **not** censor neutral words or quoted homographs.
* Subtitles: `"verbatim"` → leave as-is; `"mask"` → mask inner letters, preserve length \
and first/last characters (`f***`); `"beep"` → replace the token with `[BEEP]`.
* Transcript: same as subtitles, except `"beep"` uses `[beep]` and adds `[slur masked]` \
once at the end of that line.
* Never invent or expand slurs. Keep punctuation and timing intact.

## Output Contract (always return this JSON envelope)
{
  "status": "ok" | "error",
  "errors": [ { "code": "...", "message": "..." } ],
  "metadata": {
    "language": "auto-detected BCP-47 code if known",
    "duration_s": 0,
    "speaker_count": 0,
    "confidence_overall": 0.0,
    "profanity_mode": "<verbatim|mask|beep>",
    "masked_terms_count": 0,
    "beeped_terms_count": 0
  },
  "subtitles_vtt": "WEBVTT\\n... full file ...",
  "transcript_markdown": "# Transcript (with actions)\\n... full text ..."
}

## Error Handling & Quality Checks
* Use error codes such as `FILE_TOO_LARGE`, `UNSUPPORTED_FORMAT`.
* Ensure `subtitles_vtt` starts with `WEBVTT`.
* Actions appear **only** in `transcript_markdown`.
* Times are monotonically increasing.
"""

GENERATION_USER = """\
You will receive one video file.
Please analyze it and return **both**:

1. `subtitles_vtt`: spoken words only, in WebVTT format.
2. `transcript_markdown`: speech **plus** concise bracketed action notes.

Runtime parameter:
safety.profanity_mode = "{profanity_mode}"

Follow the **Output Contract** and **Error Handling Rules** from the system instructions.
**Deliver only the JSON envelope** specified.
"""

_ERRORS_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "code": {"type": "STRING"},
            "message": {"type": "STRING"},
        },
        "required": ["code", "message"],
    },
}

GENERATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "status": {"type": "STRING", "enum": ["ok", "error"]},
        "errors": _ERRORS_SCHEMA,
        "metadata": {
            "type": "OBJECT",
            "properties": {
                "language": {"type": "STRING"},
                "duration_s": {"type": "NUMBER"},
                "speaker_count": {"type": "INTEGER"},
                "confidence_overall": {"type": "NUMBER"},
                "profanity_mode": {"type": "STRING", "enum": ["verbatim", "mask", "beep"]},
                "masked_terms_count": {"type": "INTEGER"},
                "beeped_terms_count": {"type": "INTEGER"},
            },
            "required": ["profanity_mode", "masked_terms_count", "beeped_terms_count"],
        },
        "subtitles_vtt": {"type": "STRING"},
        "transcript_markdown": {"type": "STRING"},
    },
    "required": ["status", "metadata", "subtitles_vtt", "transcript_markdown"],
}

TRANSLATION_SYSTEM = """\
You receive a JSON envelope previously produced by our pipeline. Your task: create \
**faithful translations** into these target languages: {languages}

## Output Contract
Return only a JSON object:
{{
  "status": "ok" | "error",
  "errors": [ {{ "code": "...", "message": "..." }} ],
  "translations": {{
{translation_keys}
  }}
}}

## Rules
* **Preserve timing & structure**: In every `subtitles_vtt`, keep all cue indices, \
start/end times, line breaks, and cue count identical to the source. **Translate text only.**
* **Transcript timecodes**: keep every `(HH:MM:SS.mmm)` prefix in `transcript_markdown` \
exactly as in the source, one line per source line.
* **Bracketed items**: Keep square brackets. Translate the action text inside \
(e.g., `[applause]` → `[aplausos]`); `[BEEP]` stays `[BEEP]` unchanged.
* **Profanity handling**: If the source contains `[BEEP]` or masked words (`f***`), keep \
the **same pattern and length** in the translation.
* **Proper nouns/brands**: keep as-is unless there's a well-established localized exonym.
* **Validation**: Every target's `subtitles_vtt` must start with `WEBVTT` and have the same \
number of cues as the source.
* **Error handling**: If the input envelope is malformed, return `status:"error"`, \
`code:"INVALID_INPUT"`.
"""

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def translation_system_prompt(languages: list[str] | None = None) -> str:
    """Build the translation system prompt for the given target language codes."""
    codes = list(languages or TARGET_LANGUAGES)
    keys = ",\n".join(
        f'    "{code}": {{ "subtitles_vtt": "...", "transcript_markdown": "..." }}'
        for code in codes
    )
    return TRANSLATION_SYSTEM.format(languages=json.dumps(codes), translation_keys=keys)


def extract_json(text: str) -> str:
    """Strip surrounding whitespace and Markdown code fences from a JSON reply."""
    text = text.strip()
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1)
    return text
