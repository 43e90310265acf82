"""
Controller snapshot diffing.

Turns successive controller states (held buttons plus analog positions)
into the discrete press/release and zone enter/leave actions the
sequence matcher consumes.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..patterns.actions import Action, Button, Stick, Zone

GATE_RADIUS = 80

# Emission order of button edges within one snapshot
BUTTON_ORDER: tuple[Button, ...] = (
    Button.A, Button.B, Button.X, Button.Y,
    Button.D_LEFT, Button.D_RIGHT, Button.D_UP, Button.D_DOWN,
    Button.START, Button.Z, Button.R, Button.L,
)


def clamp_stick(x: int, y: int, radius: float = GATE_RADIUS) -> tuple[int, int]:
    """
    Scale a stick position back onto the gate circle.

    Positions inside the circle are returned unchanged; positions outside
    are scaled towards the origin and truncated.
    """
    magnitude = math.hypot(x, y)
    if magnitude == 0 or radius / magnitude >= 1.0:
        return (int(x), int(y))
    scale = radius / magnitude
    return (math.trunc(x * scale), math.trunc(y * scale))


@dataclass
class EdgeDetector:
    """
    Diffs controller snapshots into actions.

    Example usage:
        detector = EdgeDetector(zones=default_zones())
        for state, timestamp in samples:
            for action in detector.update(state.buttons, state.sticks):
                session.feed(action, timestamp)
    """
    zones: list[tuple[Stick, Zone]] = field(default_factory=list)
    clamp: bool = True

    _pressed: frozenset[Button] = field(default_factory=frozenset, init=False)
    _inside: list[bool] = field(default_factory=list, init=False)

    def __post_init__(self):
        self._inside = [False] * len(self.zones)

    def update(
        self,
        pressed: Iterable[Button],
        positions: Mapping[Stick, tuple[int, int]] | None = None,
    ) -> list[Action]:
        """
        Feed one controller snapshot.

        Args:
            pressed: Buttons currently held.
            positions: Analog positions per stick. Triggers use ``(value, 0)``.
                Missing sticks count as centred.

        Returns:
            Actions in emission order: presses, releases, then zone
            transitions in zone registration order.
        """
        pressed = frozenset(pressed)
        positions = positions or {}
        actions: list[Action] = []

        actions.extend(Action.press(b) for b in BUTTON_ORDER if b in pressed and b not in self._pressed)
        actions.extend(Action.release(b) for b in BUTTON_ORDER if b in self._pressed and b not in pressed)
        self._pressed = pressed

        for i, (stick, zone) in enumerate(self.zones):
            point = positions.get(stick, (0, 0))
            if self.clamp and stick in (Stick.MAIN, Stick.C):
                point = clamp_stick(*point)
            inside = zone.contains(point)
            if inside and not self._inside[i]:
                actions.append(Action.enter(zone, stick))
            elif not inside and self._inside[i]:
                actions.append(Action.leave(zone, stick))
            self._inside[i] = inside

        return actions

    def reset(self) -> None:
        """Forget the previous snapshot."""
        self._pressed = frozenset()
        self._inside = [False] * len(self.zones)
