"""Sequence matching and timing-fidelity scoring."""
from .frames import FRAME_RATE, frames_between
from .matcher import CompletedRun, MatchOutcome, RecordedAction, SequenceMatcher
from .scorer import (
    RunScore,
    StepReport,
    Verdict,
    accepted_phase_measure,
    classify,
    score_run,
    success_probability,
)

__all__ = [
    "FRAME_RATE",
    "frames_between",
    "CompletedRun",
    "MatchOutcome",
    "RecordedAction",
    "SequenceMatcher",
    "RunScore",
    "StepReport",
    "Verdict",
    "accepted_phase_measure",
    "classify",
    "score_run",
    "success_probability",
]
