# world_simulator/tracking.py

"""
================================================================================
SIMULATION TRACKERS
================================================================================
Concrete implementations of the Tracker protocol. The simulation core only
ever calls `track(label, payload, debounce)`; where the events go is decided
here.

Data Contract:
---------------
- SimulationTracker:
    - Immediate events are built and handed to the sink straight away.
    - Debounced events are coalesced per label (later payload keys win) and
      handed to the sink at most once per `debounce_seconds`, or on flush().
    - Sink failures are logged and never raised to the caller.
- NullTracker: discards everything.
================================================================================
"""
import logging
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Optional

from . import config as DEFAULTS


@dataclass
class _PendingEvent:
    first_seen: float
    payload: dict = field(default_factory=dict)


class SimulationTracker:
    """Tracks simulation diagnostics and writes them to a sink (the log by default)."""

    def __init__(
        self,
        sink: Optional[Callable[[dict], None]] = None,
        session_id: Optional[str] = None,
        debounce_seconds: float = DEFAULTS.TRACKER_DEBOUNCE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.logger = logging.getLogger(__name__)
        self.session_id = session_id or uuid.uuid4().hex
        self.debounce_seconds = debounce_seconds
        self._sink = sink or self._log_event
        self._clock = clock
        self._pending: dict[str, _PendingEvent] = {}

    def track(self, label: str, payload: Optional[dict] = None, debounce: bool = False) -> None:
        payload = dict(payload or {})
        if not debounce:
            self._emit(label, payload)
            return

        now = self._clock()
        pending = self._pending.get(label)
        if pending is None:
            self._pending[label] = _PendingEvent(first_seen=now, payload=payload)
        else:
            pending.payload.update(payload)
        self._flush_due(now)

    def flush(self) -> None:
        """Emits every pending debounced event regardless of age."""
        for label in list(self._pending):
            self._flush_label(label)

    @property
    def pending_labels(self) -> list[str]:
        return list(self._pending)

    def _flush_due(self, now: float):
        for label, pending in list(self._pending.items()):
            if now - pending.first_seen >= self.debounce_seconds:
                self._flush_label(label)

    def _flush_label(self, label: str):
        pending = self._pending.pop(label, None)
        if pending is not None:
            self._emit(label, pending.payload)

    def _emit(self, label: str, payload: dict):
        event = {
            'id': uuid.uuid4().hex,
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'session_id': self.session_id,
            'event': label,
            'payload': payload,
        }
        try:
            self._sink(event)
        except Exception:
            self.logger.warning(f"Tracker sink failed for event '{label}'", exc_info=True)

    def _log_event(self, event: dict):
        self.logger.debug(f"[{event['event']}] {event['payload']}")


class NullTracker:
    """A tracker that discards every event."""

    def track(self, label: str, payload: Optional[dict] = None, debounce: bool = False) -> None:
        pass
