"""
Sequence matcher.

A small automaton bound to one template. It consumes ``(action, time)``
pairs one at a time, advances on the next expected action, abandons the
attempt when the timing drifts too far outside the expected window, and
archives the full history of every completed attempt.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

from ..patterns.actions import Action
from ..patterns.template import SequenceTemplate
from .frames import FRAME_RATE, frames_between

log = logging.getLogger(__name__)

DEFAULT_TIMEOUT_TOLERANCE_FRAMES = 5.0


class MatchOutcome(Enum):
    """Result of feeding one action to a matcher."""
    IGNORED = "ignored"        # not expected at the current step
    ADVANCED = "advanced"      # matched a step, attempt still in progress
    COMPLETED = "completed"    # matched the last step, run archived
    TIMED_OUT = "timed_out"    # attempt abandoned, action did not start a new one
    RESTARTED = "restarted"    # attempt abandoned, action started a new one

    @property
    def timed_out(self) -> bool:
        return self in (MatchOutcome.TIMED_OUT, MatchOutcome.RESTARTED)


@dataclass(frozen=True)
class RecordedAction:
    """An action together with the time it was observed."""
    action: Action
    timestamp: float


@dataclass(frozen=True)
class CompletedRun:
    """Immutable history of one fully matched attempt."""
    template: SequenceTemplate
    entries: tuple[RecordedAction, ...]

    @property
    def start_time(self) -> float:
        return self.entries[0].timestamp

    @property
    def duration(self) -> float:
        """Seconds between the first and last recorded action."""
        return self.entries[-1].timestamp - self.entries[0].timestamp

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RecordedAction]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> RecordedAction:
        return self.entries[index]


@dataclass
class SequenceMatcher:
    """
    Per-(template, player) matching state.

    Invariant: ``len(history) == step_index < len(template)`` between calls.
    Reaching the last step archives the run and resets in the same call.
    """
    template: SequenceTemplate
    timeout_tolerance_frames: float = DEFAULT_TIMEOUT_TOLERANCE_FRAMES
    frame_rate: float = FRAME_RATE

    step_index: int = field(default=0, init=False)
    history: list[RecordedAction] = field(default_factory=list, init=False)
    completed: CompletedRun | None = field(default=None, init=False)

    def feed(self, action: Action, now: float) -> MatchOutcome:
        """
        Consume one action.

        Args:
            action: Observed action.
            now: Timestamp of the action (seconds, monotonic).

        Returns:
            What the action did to the matcher.
        """
        if self.step_index >= len(self.template):
            return MatchOutcome.IGNORED

        timed_out = self._check_timeout(now)
        expected = self.template[self.step_index]

        if not expected.accepts(action):
            return MatchOutcome.TIMED_OUT if timed_out else MatchOutcome.IGNORED

        self.history.append(RecordedAction(action, now))
        self.step_index += 1

        if self.step_index == len(self.template):
            self._complete()
            return MatchOutcome.COMPLETED
        return MatchOutcome.RESTARTED if timed_out else MatchOutcome.ADVANCED

    def advance(self, action: Action, now: float) -> bool:
        """Consume one action; True iff it completed the sequence."""
        return self.feed(action, now) is MatchOutcome.COMPLETED

    def reset(self) -> None:
        """Abandon the in-progress attempt. The last completed run is kept."""
        self.step_index = 0
        self.history.clear()

    @property
    def in_progress(self) -> bool:
        return bool(self.history)

    def _check_timeout(self, now: float) -> bool:
        if not self.history:
            return False

        window = self.template[self.step_index].window
        elapsed = frames_between(now, self.history[-1].timestamp, self.frame_rate)
        tolerance = self.timeout_tolerance_frames
        if window.min - elapsed > tolerance or elapsed - window.max > tolerance:
            log.debug(
                "%s: step %d timed out (%.3f frames, window %s)",
                self.template.name, self.step_index, elapsed, window,
            )
            self.reset()
            return True
        return False

    def _complete(self) -> None:
        self.completed = CompletedRun(self.template, tuple(self.history))
        log.debug(
            "%s: completed in %.3f frames",
            self.template.name,
            frames_between(self.completed.entries[-1].timestamp, self.completed.start_time, self.frame_rate),
        )
        self.reset()
