from __future__ import annotations

import pytest

from framecheck.patterns.actions import Action, Button
from framecheck.patterns.template import SequenceTemplate, TemplateBuilder
from framecheck.timing.matcher import CompletedRun, RecordedAction


@pytest.fixture
def jc_shine() -> SequenceTemplate:
    return (
        TemplateBuilder("jc shine")
        .add(Action.press(Button.Y), 0)
        .add(Action.press(Button.B), 3)
        .build()
    )


def make_run(template: SequenceTemplate, times_ms: list[float], actions: list[Action] | None = None) -> CompletedRun:
    """Build a completed run directly, using the first accepted action of each step by default."""
    if actions is None:
        actions = [sorted(step.actions, key=lambda a: a.token)[0] for step in template.steps]
    return CompletedRun(
        template,
        tuple(RecordedAction(a, t / 1000.0) for a, t in zip(actions, times_ms)),
    )
