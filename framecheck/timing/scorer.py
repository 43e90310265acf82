"""
Timing-fidelity scoring for completed runs.

Two views of one attempt:
- a per-step early/on-time/late verdict against the raw sub-frame delays
- the probability that a 60Hz game clock, whose phase relative to the
  input timestamps is unknown, would have accepted the whole attempt

Timestamps are recorded at sub-frame resolution, but the game buckets
inputs into whole frames at boundaries we cannot observe. With a phase
shift ``d`` in ``[0, 1)`` an action ``f`` frames after the run origin
lands in frame ``floor(f + d)``. That value only changes where
``d == (1 - frac(f)) % 1``, so acceptance is piecewise constant in ``d``
and the accepted measure can be integrated exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import numpy as np

from ..patterns.actions import Action
from .frames import FRAME_RATE, frames_between
from .matcher import CompletedRun

DEFAULT_SOFT_MARGIN_FRAMES = 1.0


class Verdict(Enum):
    """Per-step timing classification."""
    EARLY_MISS = "EARLY"
    EARLY = "SLIGHTLY EARLY"
    SUCCESS = "SUCCESS"
    LATE = "SLIGHTLY LATE"
    LATE_MISS = "LATE"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class StepReport:
    """Classification of one recorded step."""
    action: Action
    elapsed: float   # seconds since the previous recorded action
    frames: float    # frame offset from the step's reference step
    verdict: Verdict


@dataclass(frozen=True)
class RunScore:
    """Scored view of a completed run, ready for presentation."""
    template_name: str
    steps: tuple[StepReport, ...]
    success_probability: float | None

    @property
    def all_success(self) -> bool:
        return all(s.verdict is Verdict.SUCCESS for s in self.steps)


def classify_offset(
    frames: float,
    window_min: int,
    window_max: int,
    soft_margin: float = DEFAULT_SOFT_MARGIN_FRAMES,
) -> Verdict:
    """
    Classify a measured frame offset against an inclusive window.

    Offsets within ``soft_margin`` frames outside the window are only
    slightly early/late; anything further is a miss.
    """
    if frames > window_max + soft_margin:
        return Verdict.LATE_MISS
    if frames > window_max:
        return Verdict.LATE
    if frames < window_min - soft_margin:
        return Verdict.EARLY_MISS
    if frames < window_min:
        return Verdict.EARLY
    return Verdict.SUCCESS


def classify(
    run: CompletedRun | None,
    soft_margin_frames: float = DEFAULT_SOFT_MARGIN_FRAMES,
    frame_rate: float = FRAME_RATE,
) -> list[StepReport] | None:
    """
    Classify every step of a completed run.

    Args:
        run: Completed run, or None.
        soft_margin_frames: Width of the "slightly early/late" band.
        frame_rate: Frames per second.

    Returns:
        One report per step, or None for runs with fewer than 2 actions.
    """
    if run is None or len(run) < 2:
        return None

    reports = []
    for i, (entry, step) in enumerate(zip(run.entries, run.template.steps)):
        if step.from_index is None:
            reports.append(StepReport(entry.action, 0.0, 0.0, Verdict.SUCCESS))
            continue

        reference = run.entries[step.from_index].timestamp
        frames = frames_between(entry.timestamp, reference, frame_rate)
        elapsed = entry.timestamp - run.entries[i - 1].timestamp
        verdict = classify_offset(frames, step.window.min, step.window.max, soft_margin_frames)
        reports.append(StepReport(entry.action, elapsed, frames, verdict))
    return reports


def accepted_phase_measure(
    breakpoints: Iterable[float],
    accepts: Callable[[float], bool],
) -> float:
    """
    Measure of phases in ``[0, 1)`` accepted by a piecewise-constant predicate.

    Args:
        breakpoints: Points on the unit circle where ``accepts`` may change
            value. Duplicates and order do not matter.
        accepts: Predicate evaluated once per interval, at its midpoint.

    Returns:
        ``1 - sum(length of rejected intervals)``, clamped to ``[0, 1]``.
    """
    points = np.unique(np.mod(np.asarray(list(breakpoints), dtype=float), 1.0))
    if points.size == 0:
        return 1.0 if accepts(0.5) else 0.0

    if points.size == 1:
        lengths = np.array([1.0])
    else:
        lengths = np.mod(np.roll(points, -1) - points, 1.0)
    midpoints = np.mod(points + lengths / 2.0, 1.0)

    rejected = 0.0
    for midpoint, length in zip(midpoints, lengths):
        if length <= 0.0:
            continue
        if not accepts(float(midpoint)):
            rejected += float(length)
    return float(min(1.0, max(0.0, 1.0 - rejected)))


def run_frames(run: CompletedRun, frame_rate: float = FRAME_RATE) -> np.ndarray:
    """Frames elapsed from the run origin to every recorded action."""
    return np.array([
        frames_between(entry.timestamp, run.start_time, frame_rate)
        for entry in run.entries
    ])


def frame_indices(
    run: CompletedRun,
    phase: float,
    frame_rate: float = FRAME_RATE,
) -> np.ndarray:
    """Integer frame each recorded action lands in under a phase shift."""
    return np.floor(run_frames(run, frame_rate) + phase).astype(int)


def _accepted(run: CompletedRun, indices: np.ndarray) -> bool:
    for i, step in enumerate(run.template.steps):
        if step.from_index is None:
            continue
        if not step.window.contains(int(indices[i] - indices[step.from_index])):
            return False
    return True


def is_successful_at_phase(
    run: CompletedRun,
    phase: float,
    frame_rate: float = FRAME_RATE,
) -> bool:
    """Would a frame clock shifted by ``phase`` accept every step of the run."""
    return _accepted(run, frame_indices(run, phase, frame_rate))


def success_probability(
    run: CompletedRun | None,
    frame_rate: float = FRAME_RATE,
) -> float | None:
    """
    Probability that the run is accepted under a uniformly random frame phase.

    Args:
        run: Completed run, or None.
        frame_rate: Frames per second.

    Returns:
        Probability in ``[0, 1]``, or None for runs with fewer than 2 actions.
    """
    if run is None or len(run) < 2:
        return None

    frames = run_frames(run, frame_rate)
    residuals = frames - np.floor(frames)
    breakpoints = np.mod(1.0 - residuals, 1.0)

    def accepts(phase: float) -> bool:
        return _accepted(run, np.floor(frames + phase).astype(int))

    return accepted_phase_measure(breakpoints, accepts)


def score_run(
    run: CompletedRun,
    soft_margin_frames: float = DEFAULT_SOFT_MARGIN_FRAMES,
    frame_rate: float = FRAME_RATE,
) -> RunScore:
    """Classify and score a completed run in one pass."""
    steps = classify(run, soft_margin_frames, frame_rate) or []
    return RunScore(
        template_name=run.template.name,
        steps=tuple(steps),
        success_probability=success_probability(run, frame_rate),
    )
