from framecheck.input.edges import EdgeDetector, clamp_stick
from framecheck.patterns.actions import Action, Button, Stick
from framecheck.patterns.library import LEFT_SMASH, LIGHTSHIELD, RIGHT_SMASH, UP_SMASH, default_zones


def test_clamp_inside_gate_unchanged():
    assert clamp_stick(30, -40) == (30, -40)
    assert clamp_stick(0, 0) == (0, 0)
    assert clamp_stick(80, 0) == (80, 0)


def test_clamp_outside_gate():
    assert clamp_stick(100, 0) == (80, 0)
    assert clamp_stick(-100, 0) == (-80, 0)
    assert clamp_stick(80, 80) == (56, 56)


def test_button_edges():
    detector = EdgeDetector()
    assert detector.update({Button.Y, Button.A}) == [Action.press(Button.A), Action.press(Button.Y)]
    assert detector.update({Button.Y, Button.A}) == []
    assert detector.update({Button.A, Button.R}) == [Action.press(Button.R), Action.release(Button.Y)]
    assert detector.update(set()) == [Action.release(Button.A), Action.release(Button.R)]


def test_zone_transitions():
    detector = EdgeDetector(zones=[(Stick.MAIN, LEFT_SMASH), (Stick.MAIN, RIGHT_SMASH)])
    assert detector.update(set(), {Stick.MAIN: (75, 0)}) == [Action.enter(RIGHT_SMASH)]
    assert detector.update(set(), {Stick.MAIN: (75, 5)}) == []
    assert detector.update(set(), {Stick.MAIN: (0, 0)}) == [Action.leave(RIGHT_SMASH)]
    assert detector.update(set(), {Stick.MAIN: (-75, 0)}) == [Action.enter(LEFT_SMASH)]
    # missing sticks count as centred
    assert detector.update(set()) == [Action.leave(LEFT_SMASH)]


def test_zone_queries_use_clamped_position():
    detector = EdgeDetector(zones=[(Stick.C, UP_SMASH)])
    # (0, 110) clamps to (0, 80)
    assert detector.update(set(), {Stick.C: (0, 110)}) == [Action.enter(UP_SMASH, Stick.C)]

    raw = EdgeDetector(zones=[(Stick.C, UP_SMASH)], clamp=False)
    assert raw.update(set(), {Stick.C: (0, 110)}) == []


def test_trigger_ranges():
    detector = EdgeDetector(zones=default_zones())
    actions = detector.update(set(), {Stick.L_TRIGGER: (50, 0)})
    assert actions == [Action.enter(LIGHTSHIELD, Stick.L_TRIGGER)]
    assert actions[0].label == "L Entered [43, 140]"


def test_button_edges_precede_zone_transitions():
    detector = EdgeDetector(zones=[(Stick.C, UP_SMASH)])
    actions = detector.update({Button.Y}, {Stick.C: (0, 70)})
    assert actions == [Action.press(Button.Y), Action.enter(UP_SMASH, Stick.C)]


def test_reset():
    detector = EdgeDetector(zones=[(Stick.C, UP_SMASH)])
    detector.update({Button.Y}, {Stick.C: (0, 70)})
    detector.reset()
    assert detector.update({Button.Y}, {Stick.C: (0, 70)}) == [
        Action.press(Button.Y),
        Action.enter(UP_SMASH, Stick.C),
    ]
