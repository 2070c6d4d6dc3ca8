"""Tests for the pipeline event system."""

from vidscribe.core.events import EventCallback, PipelineEvent, emitter


def test_pipeline_event_creation():
    """PipelineEvent stores stage, progress, message, and optional data."""
    event = PipelineEvent(stage="analyze", progress=0.5, message="Halfway done")
    assert event.stage == "analyze"
    assert event.progress == 0.5
    assert event.message == "Halfway done"
    assert event.data is None


def test_event_callback_type():
    """EventCallback is a callable type alias accepting PipelineEvent."""
    collected: list[PipelineEvent] = []

    def handler(event: PipelineEvent) -> None:
        collected.append(event)

    cb: EventCallback = handler
    cb(PipelineEvent(stage="upload", progress=0.0, message="Starting"))
    assert len(collected) == 1
    assert collected[0].stage == "upload"


def test_emitter_forwards_events():
    collected: list[PipelineEvent] = []
    emit = emitter(collected.append)
    emit("save", 1.0, "Done", {"workspace": "/tmp/ws"})
    assert collected == [
        PipelineEvent(stage="save", progress=1.0, message="Done", data={"workspace": "/tmp/ws"})
    ]


def test_emitter_without_callback_is_noop():
    emit = emitter(None)
    emit("save", 1.0, "Done")
