"""vidscribe serve command: local web player with a synchronised transcript."""

from __future__ import annotations

import functools
import html
import http.server
import json
import mimetypes
import tempfile
import urllib.parse
import webbrowser
from pathlib import Path
from typing import Annotated, Optional

import typer

from vidscribe.cli.utils import fail, resolve_workspace
from vidscribe.core.languages import ORIGINAL, language_name
from vidscribe.utils.archive import bundle_workspace
from vidscribe.utils.console import console
from vidscribe.utils.media import guess_video_mime
from vidscribe.utils.paths import available_languages, find_video, load_metadata

PLAYER_HTML = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>{title} - vidscribe</title>
<style>
  * {{ margin: 0; padding: 0; box-sizing: border-box; }}
  body {{ background: #111827; color: #f3f4f6; font-family: system-ui, sans-serif; }}
  .container {{ max-width: 1280px; margin: 0 auto; padding: 20px;
               display: grid; grid-template-columns: 3fr 2fr; gap: 24px; }}
  header {{ grid-column: 1 / -1; }}
  h1 {{ font-size: 1.4rem; margin-bottom: 4px; color: #22d3ee; }}
  .summary {{ font-size: 0.85rem; color: #9ca3af; margin-bottom: 12px; }}
  video {{ width: 100%; border-radius: 8px; background: #000; }}
  video::cue {{ font-size: 1.1rem; background: rgba(0,0,0,0.7); }}
  .tabs {{ display: flex; gap: 4px; border-bottom: 1px solid #374151; margin-bottom: 12px; }}
  .tabs button {{ padding: 6px 14px; border: 0; border-radius: 6px 6px 0 0;
                 background: transparent; color: #9ca3af; cursor: pointer; }}
  .tabs button.selected {{ background: #374151; color: #fff; }}
  #transcript {{ height: 70vh; overflow-y: auto; padding-right: 8px; }}
  .segment {{ padding: 10px; border-radius: 6px; cursor: pointer; margin-bottom: 6px; }}
  .segment:hover {{ background: #1f2937; }}
  .segment.active {{ background: rgba(22, 78, 99, 0.6); }}
  .segment .ts {{ font-family: monospace; font-size: 0.85rem; color: #9ca3af; }}
  .segment.active .ts {{ color: #22d3ee; }}
  .empty {{ color: #6b7280; padding: 20px; text-align: center; }}
  .downloads {{ margin-top: 12px; display: flex; gap: 8px; flex-wrap: wrap; }}
  .downloads a {{ padding: 6px 14px; border-radius: 6px; background: #1f2937;
                 color: #e5e7eb; text-decoration: none; font-size: 0.85rem; }}
  .info {{ margin-top: 16px; font-size: 0.8rem; color: #6b7280; }}
</style>
</head>
<body>
<div class="container">
  <header>
    <h1>{title}</h1>
    <p class="summary">{summary}</p>
  </header>
  <div>
    <video id="player" controls>
      <source src="/{video_filename}" type="{video_mime}">
      {tracks}
    </video>
    <div class="downloads" id="downloads"></div>
    <div class="info">
      Served by <strong>vidscribe serve</strong> &mdash; press Ctrl+C to stop
    </div>
  </div>
  <div>
    <div class="tabs" id="tabs"></div>
    <div id="transcript"></div>
  </div>
</div>
<script>
  const LANGUAGES = {languages};
  const LABELS = {labels};
  const video = document.getElementById('player');
  const tabs = document.getElementById('tabs');
  const list = document.getElementById('transcript');
  const downloads = document.getElementById('downloads');
  let segments = [];
  let activeIndex = -1;

  // Half-open [start, end): a boundary instant belongs to the later segment.
  function isActive(seg, t) {{ return t >= seg.start && t < seg.end; }}

  function findActive(t) {{
    for (let i = 0; i < segments.length; i++) {{
      if (isActive(segments[i], t)) return i;
    }}
    return -1;
  }}

  function formatTime(t) {{
    const m = Math.floor(t / 60), s = Math.floor(t % 60), ms = Math.floor((t % 1) * 1000);
    return String(m).padStart(2, '0') + ':' + String(s).padStart(2, '0') +
      '.' + String(ms).padStart(3, '0');
  }}

  function render() {{
    list.innerHTML = '';
    activeIndex = -1;
    if (segments.length === 0) {{
      list.innerHTML = '<p class="empty">No timestamped transcript lines.</p>';
      return;
    }}
    segments.forEach((seg, i) => {{
      const div = document.createElement('div');
      div.className = 'segment';
      div.innerHTML = '<div class="ts"></div><p></p>';
      div.querySelector('.ts').textContent = formatTime(seg.start);
      div.querySelector('p').textContent = seg.text;
      div.addEventListener('click', () => {{ video.currentTime = seg.start; }});
      list.appendChild(div);
    }});
    highlight();
  }}

  function highlight() {{
    const i = findActive(video.currentTime);
    if (i === activeIndex) return;
    if (activeIndex >= 0) list.children[activeIndex].classList.remove('active');
    if (i >= 0) {{
      list.children[i].classList.add('active');
      list.children[i].scrollIntoView({{ block: 'nearest', behavior: 'smooth' }});
    }}
    activeIndex = i;
  }}

  function selectTrack(lang) {{
    for (const track of video.textTracks) {{
      track.mode = track.language === lang ? 'showing' : 'hidden';
    }}
  }}

  function renderDownloads(lang) {{
    downloads.innerHTML = '';
    const files = [
      ['transcript.' + lang + '.md', 'Transcript (.md)'],
      ['subtitles.' + lang + '.vtt', 'Subtitles (.vtt)'],
      ['bundle.zip', 'All results (.zip)'],
    ];
    for (const [file, label] of files) {{
      const a = document.createElement('a');
      a.href = '/' + file;
      a.download = file;
      a.textContent = label;
      downloads.appendChild(a);
    }}
  }}

  async function selectLanguage(lang) {{
    for (const b of tabs.children) b.classList.toggle('selected', b.dataset.lang === lang);
    const resp = await fetch('/segments.' + lang + '.json');
    segments = resp.ok ? await resp.json() : [];
    render();
    selectTrack(lang);
    renderDownloads(lang);
  }}

  LANGUAGES.forEach(lang => {{
    const b = document.createElement('button');
    b.textContent = LABELS[lang] || lang;
    b.dataset.lang = lang;
    b.addEventListener('click', () => selectLanguage(lang));
    tabs.appendChild(b);
  }});

  video.addEventListener('timeupdate', highlight);
  video.addEventListener('seeked', highlight);
  if (LANGUAGES.length > 0) selectLanguage(LANGUAGES[0]);
</script>
</body>
</html>
"""


def _track_label(lang: str) -> str:
    return "Original" if lang == ORIGINAL else language_name(lang).title()


def _summary(metadata: dict) -> str:
    """One-line header summary of the generation metadata."""
    parts = [f"Detected language: {metadata.get('detected_language') or 'unknown'}"]
    mode = metadata.get("profanity_mode")
    if mode:
        parts.append(f"Profanity: {mode}")
    if mode == "mask":
        parts.append(f"Masked terms: {metadata.get('masked_terms_count', 0)}")
    elif mode == "beep":
        parts.append(f"Beeped terms: {metadata.get('beeped_terms_count', 0)}")
    return html.escape(" | ".join(parts))


def _discover_tracks(workspace: Path) -> list[dict[str, str]]:
    """Find subtitle files in a workspace and build track metadata."""
    tracks = []
    for lang in available_languages(workspace):
        vtt = workspace / f"subtitles.{lang}.vtt"
        if vtt.is_file():
            tracks.append({"file": vtt.name, "label": _track_label(lang), "lang": lang})
    return tracks


def _build_html(workspace: Path, video_path: Path) -> str:
    """Generate the player HTML for a workspace."""
    tracks = _discover_tracks(workspace)
    title = workspace.parent.name  # slug directory name
    languages = available_languages(workspace)

    track_tags = []
    for i, t in enumerate(tracks):
        default = " default" if i == 0 else ""
        tag = (
            f'<track kind="subtitles" src="/{t["file"]}" '
            f'srclang="{t["lang"]}" label="{t["label"]}"{default}>'
        )
        track_tags.append(tag)

    return PLAYER_HTML.format(
        title=title,
        tracks="\n      ".join(track_tags),
        video_filename=video_path.name,
        video_mime=guess_video_mime(video_path),
        languages=json.dumps(languages),
        labels=json.dumps({lang: _track_label(lang) for lang in languages}),
        summary=_summary(load_metadata(workspace)),
    )


def serve(
    workspace: Annotated[
        Path,
        typer.Argument(help="Path to workspace directory."),
    ],
    port: Annotated[
        int,
        typer.Option("--port", "-p", help="Port to serve on."),
    ] = 8321,
    no_open: Annotated[
        bool,
        typer.Option("--no-open", help="Don't open browser automatically."),
    ] = False,
    host: Annotated[
        Optional[str],
        typer.Option("--host", help="Host to bind to."),
    ] = "127.0.0.1",
) -> None:
    """Serve a workspace as a web video player with a clickable transcript."""
    try:
        workspace = resolve_workspace(workspace).resolve()
    except FileNotFoundError as e:
        fail(e)

    video_path = find_video(workspace)
    if video_path is None:
        fail(f"No video file found in: {workspace}")

    player_html = _build_html(workspace, video_path)

    handler_class = functools.partial(
        _WorkspaceHandler, workspace=workspace, player_html=player_html
    )
    server = http.server.HTTPServer((host, port), handler_class)

    url = f"http://{host}:{port}"
    console.print(f"[bold green]Serving:[/bold green] {url}")
    console.print(f"[bold]Workspace:[/bold] {workspace}")
    for t in _discover_tracks(workspace):
        console.print(f"  [dim]Track:[/dim] {t['label']} ({t['file']})")
    console.print("[dim]Press Ctrl+C to stop[/dim]")

    if not no_open:
        webbrowser.open(url)

    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("\n[bold]Stopped.[/bold]")
    finally:
        server.server_close()


class _WorkspaceHandler(http.server.BaseHTTPRequestHandler):
    """Serve workspace files, a ZIP bundle, and the player HTML."""

    def __init__(self, *args, workspace: Path, player_html: str, **kwargs):
        self.workspace = workspace
        self.player_html = player_html
        super().__init__(*args, **kwargs)

    def do_GET(self) -> None:
        parsed = urllib.parse.urlparse(self.path)
        path = parsed.path.lstrip("/")

        if path == "" or path == "index.html":
            self._send_bytes(self.player_html.encode("utf-8"), "text/html; charset=utf-8")
        elif path == "bundle.zip":
            self._serve_bundle()
        else:
            self._serve_file(path)

    def _send_bytes(self, content: bytes, content_type: str) -> None:
        self.send_response(200)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(content)))
        self.end_headers()
        self.wfile.write(content)

    def _serve_bundle(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            archive = bundle_workspace(self.workspace, Path(tmp) / "bundle.zip")
            self._send_bytes(archive.read_bytes(), "application/zip")

    def _serve_file(self, filename: str) -> None:
        # Only serve files that exist in the workspace (no path traversal)
        safe_name = Path(filename).name
        file_path = self.workspace / safe_name

        if not file_path.is_file():
            self.send_error(404)
            return

        content_type, _ = mimetypes.guess_type(file_path.name)
        if file_path.suffix == ".vtt":
            content_type = "text/vtt"
        if content_type is None:
            content_type = "application/octet-stream"
        if file_path.suffix in (".vtt", ".md", ".json", ".txt"):
            content_type = f"{content_type}; charset=utf-8"

        file_size = file_path.stat().st_size

        # Support Range requests for video seeking
        range_header = self.headers.get("Range")
        if range_header and file_path.stem == "video":
            self._serve_range(file_path, file_size, content_type, range_header)
        else:
            self.send_response(200)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(file_size))
            self.send_header("Accept-Ranges", "bytes")
            self.end_headers()
            with open(file_path, "rb") as f:
                while chunk := f.read(1 << 20):  # 1 MB chunks
                    self.wfile.write(chunk)

    def _serve_range(
        self, file_path: Path, file_size: int, content_type: str, range_header: str
    ) -> None:
        """Handle HTTP Range requests for video seeking."""
        try:
            range_spec = range_header.replace("bytes=", "")
            start_str, end_str = range_spec.split("-", 1)
            start = int(start_str) if start_str else 0
            end = int(end_str) if end_str else file_size - 1
            end = min(end, file_size - 1)
            if start < 0 or end < 0 or start > end or start >= file_size:
                self.send_error(416)
                return
            length = end - start + 1

            self.send_response(206)
            self.send_header("Content-Type", content_type)
            self.send_header("Content-Length", str(length))
            self.send_header("Content-Range", f"bytes {start}-{end}/{file_size}")
            self.send_header("Accept-Ranges", "bytes")
            self.end_headers()

            with open(file_path, "rb") as f:
                f.seek(start)
                remaining = length
                while remaining > 0:
                    chunk = f.read(min(remaining, 1 << 20))
                    if not chunk:
                        break
                    self.wfile.write(chunk)
                    remaining -= len(chunk)
        except (ValueError, IndexError):
            self.send_error(416)

    def log_message(self, format, *args):
        """Suppress default access logs."""
        pass
