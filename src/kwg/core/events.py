from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
from itertools import count
from typing import Any, Callable, DefaultDict
from uuid import uuid4

from kwg.contracts import CueEvent, CueType

CueHandler = Callable[[CueEvent], None]

_SESSION_TAG = uuid4().hex[:6]
_sequence = count(1)


def now_utc() -> datetime:
    return datetime.now(UTC)


def make_id(prefix: str) -> str:
    """Process-unique id; the running sequence keeps ids sortable by creation."""
    return f"{prefix}-{_SESSION_TAG}-{next(_sequence):06d}"


class EventBus:
    """Fan-out of audio and speech requests to whatever plays them."""

    def __init__(self) -> None:
        self._cue_handlers: list[CueHandler] = []
        self._counter: DefaultDict[str, int] = defaultdict(int)

    def subscribe_cues(self, handler: CueHandler) -> None:
        self._cue_handlers.append(handler)

    def publish_cue(self, event: CueEvent) -> None:
        self._counter[event.scope] += 1
        for handler in self._cue_handlers:
            handler(event)

    def cue(self, scope: str, cue_type: CueType, text: str, **payload: Any) -> CueEvent:
        event = CueEvent(
            event_id=make_id("cue"),
            time=now_utc(),
            scope=scope,
            cue_type=cue_type,
            text=text,
            payload=dict(payload),
        )
        self.publish_cue(event)
        return event

    def emitted_count(self, scope: str | None = None) -> int:
        if scope is None:
            return sum(self._counter.values())
        return self._counter[scope]
