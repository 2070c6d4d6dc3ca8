"""Video playback with a synchronised transcript using mpv."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence

from vidscribe.core.config import PlayerConfig
from vidscribe.core.models import TimedSegment
from vidscribe.transcript.parser import format_timestamp
from vidscribe.transcript.sync import SegmentFollower, seek
from vidscribe.utils.console import console


def check_mpv() -> bool:
    """Check if mpv is available on the system."""
    return shutil.which("mpv") is not None


def neighbour_segment(
    segments: Sequence[TimedSegment], current_time: float | None, step: int
) -> TimedSegment | None:
    """The segment starting after (step=1) or before (step=-1) the current one.

    Compares start times only, so it works in gaps between segments too.
    """
    if not segments:
        return None
    t = current_time or 0.0
    if step > 0:
        return next((seg for seg in segments if seg.start > t), None)
    earlier = [seg for seg in segments if seg.start < t]
    # Jump to the start of the current segment only when well into it
    if len(earlier) >= 2 and t - earlier[-1].start < 1.0:
        return earlier[-2]
    return earlier[-1] if earlier else segments[0]


def print_segment(segment: TimedSegment) -> None:
    console.print(f"[cyan]{format_timestamp(segment.start)}[/cyan]  {segment.text}")


def play(
    video_path: Path,
    segments: Sequence[TimedSegment],
    subtitles: Path | None = None,
    config: PlayerConfig | None = None,
) -> None:
    """Play a video while echoing the active transcript segment to the console.

    Keys: ``n`` seeks to the next segment, ``p`` to the previous one.

    Args:
        video_path: Path to the video file.
        segments: Parsed transcript segments.
        subtitles: Optional subtitle file shown by mpv.
        config: Player configuration.
    """
    if not check_mpv():
        raise FileNotFoundError("mpv not found. Install it with: brew install mpv")

    import mpv

    if config is None:
        config = PlayerConfig()

    player = mpv.MPV(
        input_default_bindings=True,
        input_vo_keyboard=True,
        osc=True,
    )
    player["sub-font-size"] = config.sub_font_size
    if subtitles and subtitles.is_file():
        player["sub-file"] = str(subtitles)

    follower = SegmentFollower(segments)

    @player.property_observer("time-pos")
    def _on_time(_name: str, value: float | None) -> None:
        if follower.update(value) and follower.current is not None:
            print_segment(segments[follower.current])

    def _jump(step: int) -> None:
        target = neighbour_segment(segments, player.time_pos, step)
        if target is not None:
            seek(target, player)

    player.on_key_press("n")(lambda: _jump(1))
    player.on_key_press("p")(lambda: _jump(-1))

    console.print(f"[bold]Playing:[/bold] {video_path.name}")
    console.print(f"[bold]Segments:[/bold] {len(segments)}  [dim](n/p: next/previous)[/dim]")
    if subtitles:
        console.print(f"[bold]Subtitles:[/bold] {subtitles.name}")

    player.play(str(video_path))

    try:
        player.wait_for_playback()
    except mpv.ShutdownError:
        pass
    finally:
        player.terminate()
