import pytest

from framecheck.patterns.actions import Action, Button
from framecheck.patterns.library import TemplateRegistry
from framecheck.patterns.template import TemplateBuilder
from framecheck.timing.matcher import MatchOutcome, RecordedAction, SequenceMatcher

Y = Action.press(Button.Y)
X = Action.press(Button.X)
B = Action.press(Button.B)
A = Action.press(Button.A)


def test_completes_on_expected_sequence(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    assert matcher.feed(Y, 0.0) is MatchOutcome.ADVANCED
    assert matcher.step_index == 1
    assert matcher.history == [RecordedAction(Y, 0.0)]

    assert matcher.feed(B, 0.05) is MatchOutcome.COMPLETED
    assert matcher.step_index == 0
    assert matcher.history == []
    assert matcher.completed is not None
    assert [e.action for e in matcher.completed] == [Y, B]
    assert matcher.completed.start_time == 0.0
    assert matcher.completed.duration == pytest.approx(0.05)


def test_advance_returns_true_only_on_completion(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    assert matcher.advance(Y, 0.0) is False
    assert matcher.advance(B, 0.05) is True


def test_unexpected_action_is_ignored(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    assert matcher.feed(B, 0.0) is MatchOutcome.IGNORED
    assert matcher.step_index == 0

    matcher.feed(Y, 0.1)
    assert matcher.feed(A, 0.12) is MatchOutcome.IGNORED
    assert matcher.step_index == 1
    assert len(matcher.history) == 1


def test_no_completed_run_before_first_completion(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    assert matcher.completed is None
    matcher.feed(Y, 0.0)
    assert matcher.completed is None


def test_timeout_resets_and_drops_non_starting_action(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    matcher.feed(Y, 0.0)
    # 200 ms is 12 frames, 9 past the window and beyond the 5 frame tolerance
    assert matcher.feed(B, 0.2) is MatchOutcome.TIMED_OUT
    assert matcher.step_index == 0
    assert matcher.history == []
    assert matcher.completed is None


def test_timeout_retries_action_as_new_attempt(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    matcher.feed(Y, 0.0)
    assert matcher.feed(Y, 1.0) is MatchOutcome.RESTARTED
    assert matcher.step_index == 1
    assert matcher.history == [RecordedAction(Y, 1.0)]
    assert matcher.advance(B, 1.05)
    assert matcher.completed.start_time == 1.0


def test_timeout_tolerance_boundary():
    template = TemplateBuilder("t").add(Y, 0).add(B, 1).build()

    matcher = SequenceMatcher(template)
    matcher.feed(Y, 1.0)
    # exactly 6.0 frames: 5 past the window, not beyond tolerance
    assert matcher.feed(B, 1.1) is MatchOutcome.COMPLETED

    matcher.feed(Y, 2.0)
    assert matcher.feed(B, 2.101) is MatchOutcome.TIMED_OUT


def test_early_timeout():
    template = TemplateBuilder("t").add(Y, 0).add(B, (10, 12)).build()
    matcher = SequenceMatcher(template)
    matcher.feed(Y, 0.0)
    # 3 frames is 7 frames before the window opens
    assert matcher.feed(B, 0.05) is MatchOutcome.TIMED_OUT


def test_configurable_tolerance(jc_shine):
    matcher = SequenceMatcher(jc_shine, timeout_tolerance_frames=1.0)
    matcher.feed(Y, 0.0)
    # 5.4 frames, more than one frame past the window
    assert not matcher.advance(B, 0.09)
    assert matcher.step_index == 0

    lenient = SequenceMatcher(jc_shine)
    lenient.feed(Y, 0.0)
    assert lenient.advance(B, 0.09)


def test_any_listed_action_satisfies_step():
    short_hop = TemplateRegistry.with_defaults().find("3f short hop")[0]
    matcher = SequenceMatcher(short_hop)
    matcher.feed(X, 0.0)
    assert matcher.advance(Action.release(Button.Y), 0.03)


def test_same_frame_pair_in_caller_order():
    template = TemplateBuilder("A+B").add(A, 0).add(B, 0).build()
    matcher = SequenceMatcher(template)
    assert matcher.feed(A, 0.5) is MatchOutcome.ADVANCED
    assert matcher.feed(B, 0.5) is MatchOutcome.COMPLETED


def test_reset_keeps_completed_run(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    matcher.feed(Y, 0.0)
    matcher.feed(B, 0.05)
    matcher.feed(Y, 1.0)
    assert matcher.in_progress
    matcher.reset()
    assert not matcher.in_progress
    assert matcher.step_index == 0
    assert matcher.completed is not None


def test_completed_run_is_replaced_by_next_attempt(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    matcher.feed(Y, 0.0)
    matcher.feed(B, 0.05)
    first = matcher.completed
    matcher.feed(Y, 1.0)
    matcher.feed(B, 1.06)
    assert matcher.completed is not first
    assert first.start_time == 0.0
    assert len(first) == 2


def test_completed_run_is_immutable(jc_shine):
    matcher = SequenceMatcher(jc_shine)
    matcher.feed(Y, 0.0)
    matcher.feed(B, 0.05)
    with pytest.raises(AttributeError):
        matcher.completed.entries = ()
    assert isinstance(matcher.completed.entries, tuple)


def test_history_never_exceeds_step_index():
    registry = TemplateRegistry.with_defaults()
    stream = [Y, B, X, Action.release(Button.Y), A, B, Y, Action.press(Button.R), Y, B]
    for template in registry:
        matcher = SequenceMatcher(template)
        for i, action in enumerate(stream):
            completed = matcher.advance(action, i * 0.02)
            assert len(matcher.history) == matcher.step_index < len(template)
            if completed:
                assert matcher.step_index == 0
                assert len(matcher.completed) == len(template)


def test_deterministic(jc_shine):
    stream = [(Y, 0.0), (B, 0.05), (Y, 0.3), (A, 0.31), (B, 0.36), (Y, 1.0), (B, 1.5)]

    def trajectory():
        matcher = SequenceMatcher(jc_shine)
        steps, runs = [], []
        for action, now in stream:
            if matcher.advance(action, now):
                runs.append(matcher.completed)
            steps.append(matcher.step_index)
        return steps, runs

    assert trajectory() == trajectory()
