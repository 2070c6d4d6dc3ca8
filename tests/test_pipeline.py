"""Tests for the generation and translation pipeline with mocked services."""

import json
from unittest.mock import patch

import pytest

from vidscribe.core.config import VidscribeConfig
from vidscribe.core.errors import ServiceError
from vidscribe.core.languages import TARGET_LANGUAGES
from vidscribe.core.models import ProfanityMode
from vidscribe.core.pipeline import load_segments, run_generate, run_translate
from vidscribe.utils.paths import load_metadata


@pytest.fixture
def config(tmp_path) -> VidscribeConfig:
    return VidscribeConfig(workspace_dir=tmp_path / "workspace")


@pytest.fixture
def video(tmp_path):
    path = tmp_path / "My Clip.mp4"
    path.write_bytes(b"fake video")
    return path


def _translation_reply(result) -> str:
    return json.dumps(
        {
            "status": "ok",
            "errors": [],
            "translations": {
                code: {
                    "subtitles_vtt": result.subtitles_vtt,
                    "transcript_markdown": result.transcript_markdown,
                }
                for code in TARGET_LANGUAGES
            },
        }
    )


class TestRunGenerate:
    def test_writes_workspace(self, video, config, generation_result):
        events = []
        with (
            patch("vidscribe.core.pipeline.probe_duration", return_value=12.0),
            patch(
                "vidscribe.service.gemini.generate_transcript_and_subtitles",
                return_value=generation_result,
            ) as mock_generate,
        ):
            ws = run_generate(video, config, ProfanityMode.BEEP, on_event=events.append)

        assert ws.parent.name == "my-clip"
        assert (ws / "video.mp4").read_bytes() == b"fake video"
        assert (ws / "result.json").is_file()
        assert (ws / "transcript.original.md").read_text() == generation_result.transcript_markdown
        assert (ws / "subtitles.original.vtt").read_text().startswith("WEBVTT")

        segments = json.loads((ws / "segments.original.json").read_text())
        assert segments[0] == {"start": 0.5, "end": 1.0, "text": "[door opens]"}
        assert segments[-1]["end"] == 12.0

        assert mock_generate.call_args.args[1] == ProfanityMode.BEEP

        meta = load_metadata(ws)
        assert meta["duration"] == 12.0
        assert meta["profanity_mode"] == "beep"
        assert meta["detected_language"] == "en"
        assert meta["llm_model"] is None

        assert events[0].stage == "probe"
        assert events[-1].data == {"workspace": str(ws)}

    def test_with_translation(self, video, config, generation_result):
        with (
            patch("vidscribe.core.pipeline.probe_duration", return_value=12.0),
            patch(
                "vidscribe.service.gemini.generate_transcript_and_subtitles",
                return_value=generation_result,
            ),
            patch(
                "vidscribe.llm.translator.complete",
                return_value=_translation_reply(generation_result),
            ),
        ):
            ws = run_generate(video, config, translate=True)

        for code in TARGET_LANGUAGES:
            assert (ws / f"transcript.{code}.md").is_file()
            assert (ws / f"subtitles.{code}.vtt").is_file()
        assert (ws / "translations.json").is_file()
        assert load_metadata(ws)["llm_model"] == config.llm.model

    def test_rejects_non_video(self, tmp_path, config):
        doc = tmp_path / "notes.pdf"
        doc.write_bytes(b"%PDF")
        with pytest.raises(ValueError, match="valid video file"):
            run_generate(doc, config)

    def test_missing_file(self, tmp_path, config):
        with pytest.raises(FileNotFoundError):
            run_generate(tmp_path / "missing.mp4", config)

    @pytest.mark.parametrize("duration", [None, 0.0, float("nan")], ids=["none", "zero", "nan"])
    def test_invalid_duration_stops_before_upload(self, video, config, duration):
        with (
            patch("vidscribe.core.pipeline.probe_duration", return_value=duration),
            patch("vidscribe.service.gemini.generate_transcript_and_subtitles") as mock_generate,
        ):
            with pytest.raises(ValueError, match="valid video duration"):
                run_generate(video, config)
        mock_generate.assert_not_called()
        assert not config.workspace_dir.exists()

    def test_service_error_propagates(self, video, config):
        with (
            patch("vidscribe.core.pipeline.probe_duration", return_value=12.0),
            patch(
                "vidscribe.service.gemini.generate_transcript_and_subtitles",
                side_effect=ServiceError("File processing failed on the server. Status: FAILED"),
            ),
        ):
            with pytest.raises(ServiceError, match="Status: FAILED"):
                run_generate(video, config)


class TestRunTranslate:
    def test_translates_existing_workspace(self, workspace, config, generation_result):
        reply = _translation_reply(generation_result)
        with patch("vidscribe.llm.translator.complete", return_value=reply):
            translated = run_translate(workspace, config)

        assert set(translated.translations) == set(TARGET_LANGUAGES)
        assert (workspace / "transcript.es.md").is_file()

        meta = load_metadata(workspace)
        assert meta["llm_model"] == config.llm.model
        assert meta["title"] == "my-video"
        assert "transcript.es.md" in meta["files"]

    def test_unexpected_language_keys_are_ignored(self, workspace, config, generation_result):
        original_md = (workspace / "transcript.original.md").read_text(encoding="utf-8")
        stray = {"subtitles_vtt": "WEBVTT\n", "transcript_markdown": "(00:00:01.000) x"}
        reply = json.dumps(
            {
                "status": "ok",
                "errors": [],
                "translations": {
                    "es": {
                        "subtitles_vtt": generation_result.subtitles_vtt,
                        "transcript_markdown": generation_result.transcript_markdown,
                    },
                    "original": stray,
                    "../../escaped": stray,
                },
            }
        )
        with patch("vidscribe.llm.translator.complete", return_value=reply):
            translated = run_translate(workspace, config)

        assert set(translated.translations) == {"es"}
        assert (workspace / "transcript.original.md").read_text(encoding="utf-8") == original_md
        assert (workspace / "transcript.es.md").is_file()
        assert not list(workspace.parent.parent.glob("**/*escaped*"))
        saved = json.loads((workspace / "translations.json").read_text(encoding="utf-8"))
        assert set(saved["translations"]) == {"es"}

    def test_missing_result(self, tmp_path, config):
        with pytest.raises(FileNotFoundError, match="result.json"):
            run_translate(tmp_path, config)


class TestLoadSegments:
    def test_uses_metadata_duration(self, workspace):
        segments = load_segments(workspace)
        assert [seg.start for seg in segments] == [0.5, 1.0, 3.5, 6.0, 9.25]
        assert segments[-1].end == 12.0

    def test_explicit_duration(self, workspace):
        assert load_segments(workspace, duration=10.0)[-1].end == 10.0

    def test_missing_language(self, workspace):
        with pytest.raises(FileNotFoundError, match="No fr transcript"):
            load_segments(workspace, "fr")
