"""
Controller action model.

Defines the closed set of discrete events the sequence matcher understands
(button edges and analog zone crossings), the zone membership contract,
and the textual token form used by configuration files and event logs.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Protocol, runtime_checkable


class Button(Enum):
    """GameCube controller buttons."""
    A = "A"
    B = "B"
    X = "X"
    Y = "Y"
    Z = "Z"
    L = "L"
    R = "R"
    START = "START"
    D_UP = "D_UP"
    D_DOWN = "D_DOWN"
    D_LEFT = "D_LEFT"
    D_RIGHT = "D_RIGHT"


# Aliases for button names (normalized)
BUTTON_ALIASES: dict[str, Button] = {
    **{b.value.lower(): b for b in Button},
    "d-up": Button.D_UP,
    "dup": Button.D_UP,
    "d-down": Button.D_DOWN,
    "ddown": Button.D_DOWN,
    "d-left": Button.D_LEFT,
    "dleft": Button.D_LEFT,
    "d-right": Button.D_RIGHT,
    "dright": Button.D_RIGHT,
    "start/pause": Button.START,
}


def normalize_button(name: str) -> Button | None:
    """
    Normalize a button name to the Button enum.

    Args:
        name: Button name (case-insensitive, some aliases accepted).

    Returns:
        Button enum value, or None if not recognized.
    """
    return BUTTON_ALIASES.get(name.lower().strip())


class Stick(Enum):
    """Analog input a zone transition is measured on."""
    MAIN = "main"
    C = "c"
    L_TRIGGER = "l"
    R_TRIGGER = "r"


# Label prefix per analog source ("C Entered up smash")
_STICK_PREFIX: dict[Stick, str] = {
    Stick.MAIN: "",
    Stick.C: "C ",
    Stick.L_TRIGGER: "L ",
    Stick.R_TRIGGER: "R ",
}


class ActionKind(Enum):
    """Kinds of discrete controller events."""
    PRESS = "press"
    RELEASE = "release"
    ENTER = "enter"
    LEAVE = "leave"

    @property
    def is_zone(self) -> bool:
        return self in (ActionKind.ENTER, ActionKind.LEAVE)


_KIND_VERBS: dict[ActionKind, str] = {
    ActionKind.PRESS: "Pressed",
    ActionKind.RELEASE: "Released",
    ActionKind.ENTER: "Entered",
    ActionKind.LEAVE: "Left",
}


@runtime_checkable
class Zone(Protocol):
    """Anything that can answer "is this analog position inside me"."""
    name: str

    def contains(self, point: tuple[int, int]) -> bool:
        ...


@dataclass(frozen=True)
class SquareZone:
    """Axis-aligned box on a 2-D stick, bounds inclusive."""
    name: str
    x_min: int
    x_max: int
    y_min: int
    y_max: int

    def contains(self, point: tuple[int, int]) -> bool:
        x, y = point
        return self.x_min <= x <= self.x_max and self.y_min <= y <= self.y_max


@dataclass(frozen=True)
class RangeZone:
    """
    Inclusive range on a 1-D analog input (trigger depression).

    Points are given as ``(value, 0)`` so triggers share the 2-D
    membership contract with sticks.
    """
    name: str
    low: int
    high: int

    def contains(self, point: tuple[int, int]) -> bool:
        return self.low <= point[0] <= self.high


@dataclass(frozen=True)
class Action:
    """
    One discrete, instantaneous controller event.

    Button actions identify their button by name; zone actions identify
    their zone by name and the analog source it was crossed on. Actions
    carry no timestamp.
    """
    kind: ActionKind
    target: str
    stick: Stick | None = None

    def __post_init__(self):
        if self.kind.is_zone and self.stick is None:
            object.__setattr__(self, "stick", Stick.MAIN)
        elif not self.kind.is_zone and self.stick is not None:
            raise ValueError(f"{self.kind.value} actions do not take a stick")

    @classmethod
    def press(cls, button: Button | str) -> Action:
        return cls(ActionKind.PRESS, _button_name(button))

    @classmethod
    def release(cls, button: Button | str) -> Action:
        return cls(ActionKind.RELEASE, _button_name(button))

    @classmethod
    def enter(cls, zone: Zone | str, stick: Stick = Stick.MAIN) -> Action:
        return cls(ActionKind.ENTER, _zone_name(zone), stick)

    @classmethod
    def leave(cls, zone: Zone | str, stick: Stick = Stick.MAIN) -> Action:
        return cls(ActionKind.LEAVE, _zone_name(zone), stick)

    @classmethod
    def parse(cls, token: str) -> Action:
        """
        Parse an action token.

        Accepted forms: ``press:Y``, ``release:Y``, ``enter:up smash``,
        ``leave@c:up smash``.

        Args:
            token: Action token.

        Returns:
            Parsed action.

        Raises:
            ValueError: If the token is malformed or names an unknown button.
        """
        head, sep, target = token.partition(":")
        target = target.strip()
        if not sep or not target:
            raise ValueError(f"Malformed action token: {token!r}")

        kind_name, _, stick_name = head.strip().lower().partition("@")
        try:
            kind = ActionKind(kind_name)
        except ValueError:
            raise ValueError(f"Unknown action kind in {token!r}") from None

        if not kind.is_zone:
            if stick_name:
                raise ValueError(f"Button actions do not take a stick: {token!r}")
            return cls(kind, _button_name(target))

        try:
            stick = Stick(stick_name) if stick_name else Stick.MAIN
        except ValueError:
            raise ValueError(f"Unknown stick in {token!r}") from None
        return cls(kind, target, stick)

    @property
    def token(self) -> str:
        """Canonical token; ``Action.parse(a.token) == a``."""
        if self.stick is None or self.stick is Stick.MAIN:
            return f"{self.kind.value}:{self.target}"
        return f"{self.kind.value}@{self.stick.value}:{self.target}"

    @property
    def label(self) -> str:
        """Human-readable description, e.g. ``"C Entered up smash"``."""
        prefix = _STICK_PREFIX[self.stick] if self.stick else ""
        return f"{prefix}{_KIND_VERBS[self.kind]} {self.target}"

    def __str__(self) -> str:
        return self.label


def _button_name(button: Button | str) -> str:
    if isinstance(button, Button):
        return button.value
    resolved = normalize_button(button)
    if resolved is None:
        raise ValueError(f"Unknown button: {button!r}")
    return resolved.value


def _zone_name(zone: Zone | str) -> str:
    return zone if isinstance(zone, str) else zone.name


def as_action_set(actions: Action | str | Iterable[Action | str]) -> frozenset[Action]:
    """
    Coerce one action, one token, or an iterable of either into a frozenset.

    Used wherever a step's "any of these" action set is authored.
    """
    if isinstance(actions, (Action, str)):
        actions = [actions]
    return frozenset(a if isinstance(a, Action) else Action.parse(a) for a in actions)
