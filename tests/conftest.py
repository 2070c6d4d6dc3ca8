"""Shared test fixtures."""

from pathlib import Path

import pytest

from vidscribe.core.models import GenerationResult
from vidscribe.core.pipeline import write_language_outputs
from vidscribe.utils.paths import save_metadata

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_vtt(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample.vtt"


@pytest.fixture
def sample_transcript(fixtures_dir: Path) -> str:
    return (fixtures_dir / "sample_transcript.md").read_text(encoding="utf-8")


@pytest.fixture
def generation_result(sample_vtt: Path, sample_transcript: str) -> GenerationResult:
    return GenerationResult.model_validate(
        {
            "status": "ok",
            "errors": [],
            "metadata": {
                "language": "en",
                "duration_s": 12.0,
                "speaker_count": 2,
                "profanity_mode": "verbatim",
                "masked_terms_count": 0,
                "beeped_terms_count": 0,
            },
            "subtitles_vtt": sample_vtt.read_text(encoding="utf-8"),
            "transcript_markdown": sample_transcript,
        }
    )


@pytest.fixture
def workspace(tmp_path: Path, generation_result: GenerationResult) -> Path:
    """A finished workspace for a 12 second video."""
    ws = tmp_path / "my-video" / "20260101_120000"
    ws.mkdir(parents=True)
    (ws / "video.mp4").write_bytes(b"fake video")
    (ws / "result.json").write_text(generation_result.model_dump_json(), encoding="utf-8")
    write_language_outputs(
        ws,
        "original",
        generation_result.subtitles_vtt,
        generation_result.transcript_markdown,
        12.0,
    )
    save_metadata(ws, title="my-video", duration=12.0)
    return ws
