"""
Trainer session: one matcher per watched template, fed from a single
broadcast action stream.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Iterable

from .config import TimingSettings
from .debug.trace import Tracer
from .input.event_log import TimedAction
from .patterns.actions import Action
from .patterns.template import SequenceTemplate
from .timing.matcher import MatchOutcome, SequenceMatcher
from .timing.scorer import RunScore, score_run

log = logging.getLogger(__name__)


class TrainerSession:
    """
    Watches every template against the same input stream for one player.

    Matchers are independent, so the order they see a shared timestamp in
    does not matter. Track several players with several sessions.
    """

    def __init__(
        self,
        templates: Iterable[SequenceTemplate],
        timing: TimingSettings | None = None,
        tracer: Tracer | None = None,
        max_reports: int = 50,
    ):
        self.timing = timing or TimingSettings()
        self.tracer = tracer
        self.matchers = [
            SequenceMatcher(
                template,
                timeout_tolerance_frames=self.timing.timeout_tolerance_frames,
                frame_rate=self.timing.frame_rate,
            )
            for template in templates
        ]
        self.reports: deque[RunScore] = deque(maxlen=max_reports)

    def feed(self, action: Action, now: float) -> list[RunScore]:
        """
        Deliver one action to every matcher.

        Args:
            action: Observed action.
            now: Timestamp in seconds.

        Returns:
            Scores for every template this action completed.
        """
        if self.tracer:
            self.tracer.trace_action(action.token, now)

        completed = []
        for matcher in self.matchers:
            step_index = matcher.step_index
            outcome = matcher.feed(action, now)
            if outcome is MatchOutcome.IGNORED:
                continue

            name = matcher.template.name
            if self.tracer and outcome.timed_out:
                self.tracer.trace_timeout(name, outcome is MatchOutcome.RESTARTED, now)
            if self.tracer and outcome is not MatchOutcome.TIMED_OUT:
                matched = 0 if outcome is MatchOutcome.RESTARTED else step_index
                self.tracer.trace_step(name, matched, action.token, now)

            if outcome is MatchOutcome.COMPLETED:
                score = score_run(matcher.completed, self.timing.soft_margin_frames, self.timing.frame_rate)
                self._record(score, now)
                completed.append(score)
        return completed

    def feed_many(self, events: Iterable[TimedAction]) -> list[RunScore]:
        """Deliver a recorded stream in order; returns every score produced."""
        scores = []
        for event in events:
            scores.extend(self.feed(event.action, event.timestamp))
        return scores

    def latest(self) -> RunScore | None:
        """Most recent score, if any attempt has completed."""
        return self.reports[-1] if self.reports else None

    def reset(self) -> None:
        """Abandon every in-progress attempt."""
        for matcher in self.matchers:
            matcher.reset()

    def _record(self, score: RunScore, now: float) -> None:
        self.reports.append(score)
        probability = score.success_probability
        log.info(
            "%s completed: %s (chance of success %s)",
            score.template_name,
            ", ".join(str(s.verdict) for s in score.steps),
            "n/a" if probability is None else f"{probability:.0%}",
        )
        if self.tracer:
            self.tracer.trace_score(
                score.template_name,
                [s.verdict.value for s in score.steps],
                probability,
                now,
            )
