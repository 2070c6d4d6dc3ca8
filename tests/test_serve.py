"""Tests for the local web player."""

import functools
import http.server
import threading
import urllib.error
import urllib.request

import pytest

from vidscribe.cli.serve import _build_html, _discover_tracks, _WorkspaceHandler
from vidscribe.utils.paths import save_metadata


def test_discover_tracks_original_first(workspace):
    (workspace / "subtitles.de.vtt").write_text("WEBVTT\n", encoding="utf-8")
    (workspace / "transcript.de.md").write_text("(00:00:01.000) Hallo", encoding="utf-8")

    tracks = _discover_tracks(workspace)
    assert [t["lang"] for t in tracks] == ["original", "de"]
    assert [t["label"] for t in tracks] == ["Original", "German"]
    assert tracks[0]["file"] == "subtitles.original.vtt"


def test_build_html(workspace):
    html = _build_html(workspace, workspace / "video.mp4")
    assert "Detected language: unknown" in html
    assert '"original": "Original"' in html
    assert 'label="Original"' in html
    assert "<title>my-video - vidscribe</title>" in html
    assert 'src="/subtitles.original.vtt"' in html
    assert 'type="video/mp4"' in html
    assert "t >= seg.start && t < seg.end" in html


def test_header_summary_from_metadata(workspace):
    save_metadata(
        workspace,
        title="my-video",
        duration=12.0,
        detected_language="en",
        profanity_mode="mask",
        masked_terms_count=3,
        beeped_terms_count=0,
    )
    html = _build_html(workspace, workspace / "video.mp4")
    assert "Detected language: en | Profanity: mask | Masked terms: 3" in html


@pytest.fixture
def server_url(workspace):
    handler = functools.partial(
        _WorkspaceHandler, workspace=workspace, player_html="<html>player</html>"
    )
    server = http.server.HTTPServer(("127.0.0.1", 0), handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


def test_serves_player_and_files(server_url):
    with urllib.request.urlopen(server_url + "/") as resp:
        assert resp.read() == b"<html>player</html>"

    with urllib.request.urlopen(server_url + "/subtitles.original.vtt") as resp:
        assert resp.headers["Content-Type"] == "text/vtt; charset=utf-8"
        assert resp.read().startswith(b"WEBVTT")


def test_range_request(server_url):
    request = urllib.request.Request(server_url + "/video.mp4", headers={"Range": "bytes=0-3"})
    with urllib.request.urlopen(request) as resp:
        assert resp.status == 206
        assert resp.read() == b"fake"


def test_missing_file_is_404(server_url):
    with pytest.raises(urllib.error.HTTPError) as exc_info:
        urllib.request.urlopen(server_url + "/../etc/passwd")
    assert exc_info.value.code == 404
