"""Tests for workspace directory management utilities."""

import json
from unittest.mock import patch

from vidscribe.utils.paths import (
    available_languages,
    create_workspace,
    find_video,
    link_or_copy,
    load_metadata,
    save_metadata,
    slugify,
    workspace_paths,
)


class TestSlugify:
    def test_basic(self):
        assert slugify("Hello World") == "hello-world"

    def test_special_characters(self):
        assert slugify("Interview: Édition spéciale!") == "interview-édition-spéciale"

    def test_collapses_dashes(self):
        assert slugify("a---b   c") == "a-b-c"

    def test_strips_leading_trailing(self):
        assert slugify("--hello--") == "hello"

    def test_truncates_long_strings(self):
        assert len(slugify("a" * 200)) <= 80

    def test_empty_string(self):
        assert slugify("") == ""


class TestCreateWorkspace:
    def test_nested_structure(self, tmp_path):
        """Workspace is <base>/<slug>/<timestamp>/."""
        ws = create_workspace("My Video", base_dir=tmp_path)
        assert ws.is_dir()
        assert ws.parent.name == "my-video"
        assert ws.parent.parent == tmp_path
        assert len(ws.name) == 15  # YYYYMMDD_HHMMSS

    def test_untitled_fallback(self, tmp_path):
        ws = create_workspace("!!!", base_dir=tmp_path)
        assert ws.parent.name == "untitled"

    def test_multiple_runs_same_source(self, tmp_path):
        ws1 = create_workspace("My Video", base_dir=tmp_path)
        ws2 = create_workspace("My Video", base_dir=tmp_path)
        assert ws1.parent == ws2.parent

    def test_same_second_runs_get_distinct_dirs(self, tmp_path):
        ws1 = create_workspace("My Video", base_dir=tmp_path)
        ws2 = create_workspace("My Video", base_dir=tmp_path)
        assert ws1 != ws2
        assert ws1.is_dir() and ws2.is_dir()

    def test_existing_timestamp_gets_suffix(self, tmp_path):
        first = create_workspace("clip", base_dir=tmp_path)
        with patch("vidscribe.utils.paths.datetime") as mock_dt:
            mock_dt.now.return_value.strftime.return_value = first.name
            second = create_workspace("clip", base_dir=tmp_path)
            third = create_workspace("clip", base_dir=tmp_path)
        assert second.name == f"{first.name}_2"
        assert third.name == f"{first.name}_3"


class TestWorkspacePaths:
    def test_original_language(self, tmp_path):
        paths = workspace_paths(tmp_path)
        assert paths["video"] == tmp_path / "video.mp4"
        assert paths["transcript_md"] == tmp_path / "transcript.original.md"
        assert paths["subtitles_vtt"] == tmp_path / "subtitles.original.vtt"
        assert paths["segments_json"] == tmp_path / "segments.original.json"
        assert paths["result_json"] == tmp_path / "result.json"
        assert paths["metadata"] == tmp_path / "metadata.json"

    def test_translated_language_and_extension(self, tmp_path):
        paths = workspace_paths(tmp_path, "de", video_ext=".mkv")
        assert paths["video"] == tmp_path / "video.mkv"
        assert paths["transcript_md"] == tmp_path / "transcript.de.md"
        assert paths["translations_json"] == tmp_path / "translations.json"


class TestFindVideo:
    def test_finds_video(self, tmp_path):
        (tmp_path / "video.webm").write_bytes(b"x")
        assert find_video(tmp_path) == tmp_path / "video.webm"

    def test_none_when_missing(self, tmp_path):
        assert find_video(tmp_path) is None


def test_link_or_copy(tmp_path):
    source = tmp_path / "in.mp4"
    source.write_bytes(b"data")
    dest = tmp_path / "ws" / "video.mp4"
    link_or_copy(source, dest)
    assert dest.read_bytes() == b"data"


def test_link_or_copy_replaces_existing(tmp_path):
    source = tmp_path / "in.mp4"
    source.write_bytes(b"data")
    dest = tmp_path / "ws" / "video.mp4"
    link_or_copy(source, dest)
    link_or_copy(source, dest)
    assert dest.read_bytes() == b"data"
    assert source.read_bytes() == b"data"


def test_available_languages_original_first(tmp_path):
    for label in ("de", "original", "es"):
        (tmp_path / f"transcript.{label}.md").write_text("x")
    assert available_languages(tmp_path) == ["original", "de", "es"]


class TestSaveMetadata:
    def test_saves_json(self, tmp_path):
        meta_path = save_metadata(tmp_path, title="Test", duration=12.5)
        data = json.loads(meta_path.read_text())
        assert data["title"] == "Test"
        assert data["duration"] == 12.5
        assert "created_at" in data
        assert "files" in data

    def test_paths_are_stringified(self, tmp_path):
        save_metadata(tmp_path, source_path=tmp_path / "in.mp4")
        assert load_metadata(tmp_path)["source_path"] == str(tmp_path / "in.mp4")

    def test_includes_file_inventory(self, tmp_path):
        (tmp_path / "video.mp4").write_bytes(b"fake video")
        (tmp_path / "transcript.original.md").write_text("(00:00:00.000) Hi")
        (tmp_path / "subtitles.es.vtt").write_text("WEBVTT\n")
        (tmp_path / "segments.original.json").write_text("[]")
        (tmp_path / "result.json").write_text("{}")
        (tmp_path / "notes.txt").write_text("x")

        data = json.loads(save_metadata(tmp_path, title="Test").read_text())
        files = data["files"]

        assert files["video.mp4"]["type"] == "source_video"
        assert files["video.mp4"]["size_bytes"] == 10
        assert files["transcript.original.md"]["type"] == "transcript"
        assert files["subtitles.es.vtt"]["type"] == "subtitles"
        assert files["segments.original.json"]["type"] == "segments"
        assert files["result.json"]["type"] == "service_response"
        assert files["notes.txt"]["type"] == "other"


def test_load_metadata_missing(tmp_path):
    assert load_metadata(tmp_path) == {}
