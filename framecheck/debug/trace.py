"""
Event tracing and logging for debugging.

Provides structured logging of matcher and scoring events
for analysis and replay.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class EventType(Enum):
    """Types of traced events."""
    ACTION_RECEIVED = "action_received"
    STEP_MATCHED = "step_matched"
    ATTEMPT_TIMED_OUT = "attempt_timed_out"
    SEQUENCE_COMPLETED = "sequence_completed"
    RUN_SCORED = "run_scored"


@dataclass
class TraceEvent:
    """A single trace event."""
    timestamp: float
    event_type: EventType
    data: dict[str, Any]
    template: str = ""

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp,
            "event_type": self.event_type.value,
            "template": self.template,
            "data": self.data,
        }


@dataclass
class Tracer:
    """
    Event tracer for debugging and analysis.

    Records events during a session for later analysis. Events are
    stamped with the input timeline when a timestamp is supplied, and
    with time since ``start()`` otherwise.
    """
    enabled: bool = True
    max_events: int = 100000

    _events: list[TraceEvent] = field(default_factory=list, init=False)
    _start_time: float = field(default=0.0, init=False)

    def start(self) -> None:
        """Start tracing."""
        self._start_time = time.perf_counter()
        self._events.clear()

    def trace(
        self,
        event_type: EventType,
        data: dict[str, Any] | None = None,
        template: str = "",
        timestamp: float | None = None,
    ) -> None:
        """
        Record a trace event.

        Args:
            event_type: Type of event.
            data: Event data.
            template: Name of the template the event concerns, if any.
            timestamp: Input timestamp; defaults to time since start.
        """
        if not self.enabled:
            return

        if timestamp is None:
            timestamp = time.perf_counter() - self._start_time

        self._events.append(TraceEvent(
            timestamp=timestamp,
            event_type=event_type,
            data=data or {},
            template=template,
        ))

        # Limit size
        if len(self._events) > self.max_events:
            self._events = self._events[-self.max_events // 2:]

    def trace_action(self, token: str, timestamp: float) -> None:
        """Record a delivered action."""
        self.trace(EventType.ACTION_RECEIVED, {"action": token}, timestamp=timestamp)

    def trace_step(self, template: str, step_index: int, token: str, timestamp: float) -> None:
        """Record a matched step."""
        self.trace(EventType.STEP_MATCHED, {
            "step": step_index,
            "action": token,
        }, template=template, timestamp=timestamp)

    def trace_timeout(self, template: str, restarted: bool, timestamp: float) -> None:
        """Record an abandoned attempt."""
        self.trace(EventType.ATTEMPT_TIMED_OUT, {"restarted": restarted}, template=template, timestamp=timestamp)

    def trace_score(
        self,
        template: str,
        verdicts: list[str],
        success_probability: float | None,
        timestamp: float,
    ) -> None:
        """Record a completed and scored run."""
        self.trace(EventType.SEQUENCE_COMPLETED, {}, template=template, timestamp=timestamp)
        self.trace(EventType.RUN_SCORED, {
            "verdicts": verdicts,
            "success_probability": success_probability,
        }, template=template, timestamp=timestamp)

    def get_events(
        self,
        event_type: EventType | None = None,
        start_time: float | None = None,
        end_time: float | None = None,
        template: str | None = None,
    ) -> list[TraceEvent]:
        """
        Get filtered events.

        Args:
            event_type: Filter by event type.
            start_time: Filter by start time.
            end_time: Filter by end time.
            template: Filter by template name.

        Returns:
            Filtered list of events.
        """
        events = self._events

        if event_type:
            events = [e for e in events if e.event_type == event_type]

        if start_time is not None:
            events = [e for e in events if e.timestamp >= start_time]

        if end_time is not None:
            events = [e for e in events if e.timestamp <= end_time]

        if template is not None:
            events = [e for e in events if e.template == template]

        return events

    def save(self, path: str | Path) -> None:
        """
        Save trace to file.

        Args:
            path: Output file path (JSON format).
        """
        path = Path(path)

        data = {
            "start_time": self._start_time,
            "event_count": len(self._events),
            "events": [e.to_dict() for e in self._events],
        }

        with path.open("w") as f:
            json.dump(data, f, indent=2)

    @classmethod
    def load(cls, path: str | Path) -> Tracer:
        """
        Load trace from file.

        Args:
            path: Input file path.

        Returns:
            Tracer with loaded events.
        """
        path = Path(path)

        with path.open() as f:
            data = json.load(f)

        tracer = cls()
        tracer._start_time = data.get("start_time", 0)

        for event_data in data.get("events", []):
            tracer._events.append(TraceEvent(
                timestamp=event_data["timestamp"],
                event_type=EventType(event_data["event_type"]),
                data=event_data["data"],
                template=event_data.get("template", ""),
            ))

        return tracer

    def get_summary(self) -> dict[str, Any]:
        """Get summary statistics of traced events."""
        summary: dict[str, Any] = {
            "total_events": len(self._events),
            "duration": self._events[-1].timestamp - self._events[0].timestamp if self._events else 0,
            "event_counts": {},
        }

        for event_type in EventType:
            count = sum(1 for e in self._events if e.event_type == event_type)
            if count > 0:
                summary["event_counts"][event_type.value] = count

        return summary


def setup_logging(
    level: int = logging.INFO,
    log_file: str | Path | None = None,
) -> None:
    """
    Configure logging for framecheck.

    Args:
        level: Logging level.
        log_file: Optional file to write logs to.
    """
    # Create formatter
    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Configure package logger
    root_logger = logging.getLogger("framecheck")
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # File handler
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
