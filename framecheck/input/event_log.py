"""
Recorded event log loader.

Reads ``(action, time)`` streams captured elsewhere so they can be
replayed through matchers. Events keep their file order, which is the
delivery order the matchers see.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..patterns.actions import Action


class EventLogError(ValueError):
    """Raised when an event log cannot be read."""


@dataclass(frozen=True)
class TimedAction:
    """One delivered action."""
    action: Action
    timestamp: float  # seconds


def load_event_log(file_path: str | Path) -> list[TimedAction]:
    """
    Load an event log, auto-detecting format from the suffix.

    Supported formats:
    - JSON: ``{"events": [{"time": 0.05, "action": "press:Y"}, ...]}``
      (``time_ms`` may be given instead of ``time``)
    - CSV: ``time_ms,action`` per line, ``#`` comments allowed

    Raises:
        EventLogError: On unsupported formats or malformed entries.
    """
    path = Path(file_path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _parse_json(path)
    elif suffix == ".csv":
        return _parse_csv(path)
    else:
        raise EventLogError(f"Unsupported event log format: {suffix}")


def _parse_json(path: Path) -> list[TimedAction]:
    with path.open(encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise EventLogError(f"{path}: invalid JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise EventLogError(f"{path}: not UTF-8 ({e})") from e

    raw_events = data.get("events") if isinstance(data, dict) else data
    if not isinstance(raw_events, list):
        raise EventLogError(f"{path}: expected an 'events' list")

    return [_parse_json_event(path, i, item) for i, item in enumerate(raw_events)]


def _parse_json_event(path: Path, index: int, item: Any) -> TimedAction:
    if not isinstance(item, dict) or "action" not in item:
        raise EventLogError(f"{path}: event {index} has no action")

    try:
        if "time" in item:
            timestamp = float(item["time"])
        elif "time_ms" in item:
            timestamp = float(item["time_ms"]) / 1000.0
        else:
            raise EventLogError(f"{path}: event {index} has no time")
        action = Action.parse(str(item["action"]))
    except (TypeError, ValueError) as e:
        if isinstance(e, EventLogError):
            raise
        raise EventLogError(f"{path}: event {index}: {e}") from e

    return TimedAction(action, timestamp)


def _parse_csv(path: Path) -> list[TimedAction]:
    try:
        with path.open(encoding="utf-8") as f:
            lines = f.readlines()
    except UnicodeDecodeError as e:
        raise EventLogError(f"{path}: not UTF-8 ({e})") from e

    events = []
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        time_part, sep, token = line.partition(",")
        if not sep:
            raise EventLogError(f"{path}:{line_no}: expected 'time_ms,action'")
        try:
            events.append(TimedAction(Action.parse(token), float(time_part) / 1000.0))
        except ValueError as e:
            raise EventLogError(f"{path}:{line_no}: {e}") from e
    return events


def save_event_log(events: list[TimedAction], file_path: str | Path) -> None:
    """Write events as a JSON event log."""
    path = Path(file_path)
    data = {
        "event_count": len(events),
        "events": [{"time": e.timestamp, "action": e.action.token} for e in events],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
