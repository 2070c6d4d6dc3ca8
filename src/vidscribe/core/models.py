"""Shared data models for vidscribe."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class ProfanityMode(str, Enum):
    """How the AI service treats slurs and abusive terms."""

    VERBATIM = "verbatim"
    MASK = "mask"
    BEEP = "beep"


@dataclass(frozen=True)
class TimedSegment:
    """A single line of transcript text anchored to the media timeline."""

    start: float  # seconds
    end: float  # seconds
    text: str

    @property
    def duration(self) -> float:
        return self.end - self.start


# --- Service envelopes ---


class GenerationError(BaseModel):
    code: str
    message: str
    details: dict | None = None


class GenerationMetadata(BaseModel):
    language: str | None = None
    duration_s: float | None = None
    speaker_count: int | None = None
    confidence_overall: float | None = None
    profanity_mode: ProfanityMode = ProfanityMode.VERBATIM
    masked_terms_count: int = 0
    beeped_terms_count: int = 0


class GenerationResult(BaseModel):
    """JSON envelope returned by the subtitle/transcript generation call."""

    status: Literal["ok", "error"]
    errors: list[GenerationError] = Field(default_factory=list)
    metadata: GenerationMetadata = Field(default_factory=GenerationMetadata)
    subtitles_vtt: str = ""
    transcript_markdown: str = ""

    def first_error_message(self, default: str) -> str:
        if self.errors and self.errors[0].message:
            return self.errors[0].message
        return default


class Translation(BaseModel):
    subtitles_vtt: str = ""
    transcript_markdown: str = ""


class TranslationResult(BaseModel):
    """JSON envelope returned by the translation call."""

    status: Literal["ok", "error"]
    errors: list[GenerationError] = Field(default_factory=list)
    translations: dict[str, Translation] = Field(default_factory=dict)

    def first_error_message(self, default: str) -> str:
        if self.errors and self.errors[0].message:
            return self.errors[0].message
        return default
