"""Pipeline event system for streaming progress to external consumers.

Provides a lightweight callback mechanism that the pipeline and the AI
service client emit events through. Consumers (CLI status lines, the web
player, tests) register a callback to receive updates without modifying
pipeline logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class PipelineEvent:
    """A progress event emitted during pipeline execution.

    Attributes:
        stage: Pipeline stage name (probe, upload, process, analyze, translate, save).
        progress: Progress within this stage, 0.0 to 1.0.
        message: Human-readable status message.
        data: Optional payload (e.g. file state, workspace path).
    """

    stage: str
    progress: float
    message: str
    data: dict | None = field(default=None)


EventCallback = Callable[[PipelineEvent], None]


def emitter(on_event: EventCallback | None) -> Callable[..., None]:
    """Wrap an optional callback into an ``emit(stage, progress, message, data)`` function."""

    def emit(stage: str, progress: float, message: str, data: dict | None = None) -> None:
        if on_event:
            on_event(PipelineEvent(stage=stage, progress=progress, message=message, data=data))

    return emit
