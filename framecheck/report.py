"""
Plain-text rendering of templates and scored runs.
"""

from __future__ import annotations

from .patterns.template import SequenceTemplate
from .timing.frames import FRAME_RATE, frames_to_ms
from .timing.scorer import RunScore


def format_report(score: RunScore, frame_rate: float = FRAME_RATE) -> list[str]:
    """
    Render a scored run, one line per step plus a success-chance line.

    Frames and milliseconds on a line both measure the gap from the
    step's reference step, which is not always the previous one.

    Example:
        Pressed Y, time: 0.000 frames (0 ms) SUCCESS
        Pressed B, time: 3.600 frames (60 ms) SLIGHTLY LATE
        chance of success: 40.0%
    """
    lines = [
        f"{step.action.label}, time: {step.frames:.3f} frames "
        f"({round(frames_to_ms(step.frames, frame_rate))} ms) {step.verdict}"
        for step in score.steps
    ]
    if score.success_probability is None:
        lines.append("chance of success: n/a")
    else:
        lines.append(f"chance of success: {score.success_probability * 100:.1f}%")
    return lines


def format_template(template: SequenceTemplate, frame_rate: float = FRAME_RATE) -> list[str]:
    """Render a template's steps with their windows in frames and milliseconds."""
    lines = [template.name]
    for i, step in enumerate(template.steps):
        labels = " | ".join(sorted(a.label for a in step.actions))
        if step.from_index is None:
            lines.append(f"  {i}. {labels}")
            continue
        window = step.window
        lo, hi = frames_to_ms(window.min, frame_rate), frames_to_ms(window.max, frame_rate)
        lines.append(
            f"  {i}. {labels} @ {window} after step {step.from_index} "
            f"({lo:.1f}-{hi:.1f} ms)"
        )
    return lines
