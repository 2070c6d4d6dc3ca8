"""Tests for CLI utility functions."""

import pytest
import typer

from vidscribe.cli.utils import expand_inputs, fail, resolve_workspace
from vidscribe.utils.paths import save_metadata


class TestExpandInputs:
    def test_txt_file_expansion(self, tmp_path):
        txt_file = tmp_path / "videos.txt"
        txt_file.write_text("/videos/1.mp4\n# comment\n/videos/2.mp4\n\n")
        assert expand_inputs([str(txt_file)]) == ["/videos/1.mp4", "/videos/2.mp4"]

    def test_glob_expansion(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / "a.mp4").touch()
        (tmp_path / "b.mp4").touch()
        (tmp_path / "c.mkv").touch()
        result = expand_inputs(["*.mp4"])
        assert result == ["a.mp4", "b.mp4"]

    def test_regular_path_passthrough(self):
        assert expand_inputs(["/some/path/video.mp4"]) == ["/some/path/video.mp4"]

    def test_empty_input(self):
        assert expand_inputs([]) == []

    def test_nonexistent_glob_returns_literal(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert expand_inputs(["*.nonexistent"]) == ["*.nonexistent"]


class TestResolveWorkspace:
    def test_workspace_itself(self, workspace):
        assert resolve_workspace(workspace) == workspace

    def test_slug_dir_picks_latest_run(self, tmp_path):
        slug = tmp_path / "clip"
        for name in ("20260101_100000", "20260102_100000"):
            (slug / name).mkdir(parents=True)
            save_metadata(slug / name, title="clip")
        (slug / "20260103_100000").mkdir()  # unfinished run, no metadata
        assert resolve_workspace(slug) == slug / "20260102_100000"

    def test_missing_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            resolve_workspace(tmp_path / "nope")

    def test_empty_dir(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="No workspace found"):
            resolve_workspace(tmp_path)


def test_fail_exits_with_status_one():
    with pytest.raises(typer.Exit) as exc_info:
        fail("boom")
    assert exc_info.value.exit_code == 1
