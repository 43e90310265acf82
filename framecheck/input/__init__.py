"""Input collaborators: snapshot edge detection and recorded event logs."""
from .edges import EdgeDetector, clamp_stick
from .event_log import EventLogError, TimedAction, load_event_log, save_event_log

__all__ = ["EdgeDetector", "clamp_stick", "EventLogError", "TimedAction", "load_event_log", "save_event_log"]
