"""
Built-in technique templates and the template registry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .actions import Action, Button, RangeZone, SquareZone, Stick
from .template import SequenceTemplate, TemplateBuilder

# Stick coordinates are clamped to the gate circle (radius 80)
UP_SMASH = SquareZone("up smash", -63, 63, 53, 80)
LEFT_SMASH = SquareZone("left smash", -80, -64, -63, 63)
RIGHT_SMASH = SquareZone("right smash", 64, 80, -63, 63)
LIGHTSHIELD = RangeZone("[43, 140]", 43, 140)


def default_zones() -> list[tuple[Stick, SquareZone | RangeZone]]:
    """Zones watched by the built-in templates, with the input they are read from."""
    return [
        (Stick.MAIN, LEFT_SMASH),
        (Stick.MAIN, RIGHT_SMASH),
        (Stick.C, UP_SMASH),
        (Stick.L_TRIGGER, LIGHTSHIELD),
        (Stick.R_TRIGGER, LIGHTSHIELD),
    ]


def default_templates() -> list[SequenceTemplate]:
    """Create the built-in technique set."""
    press, release = Action.press, Action.release
    jump_press = [press(Button.Y), press(Button.X)]
    templates = []

    templates.append(
        TemplateBuilder("3f short hop")
        .add(jump_press, 0)
        .add([release(Button.Y), release(Button.X)], (1, 2))
        .build()
    )

    for shield in (Button.R, Button.L):
        templates.append(
            TemplateBuilder("3f wavedash")
            .add(press(Button.Y), 0)
            .add(press(shield), 3)
            .build()
        )

    shield_press = [press(Button.L), press(Button.R)]
    templates.append(
        TemplateBuilder("hax OS wavedash 3f")
        .add(jump_press, 0)
        .add(shield_press, (2, 3))
        .add(shield_press, (0, 1))
        .build()
    )

    # Both shield presses land relative to the jump, not to each other
    templates.append(
        TemplateBuilder("hax OS wavedash 3f")
        .add(press(Button.Y), 0)
        .add(press(Button.R), (2, 3))
        .add_from(press(Button.L), (2, 4), 0)
        .build()
    )

    templates.append(
        TemplateBuilder("jc shine")
        .add(press(Button.Y), 0)
        .add(press(Button.B), 3)
        .build()
    )

    for jump in (Button.Y, Button.X):
        templates.append(
            TemplateBuilder("jc grab")
            .add(press(jump), 0)
            .add(press(Button.Z), (1, 2))
            .build()
        )

    for jump in (Button.Y, Button.X):
        templates.append(
            TemplateBuilder("jc up_smash")
            .add(press(jump), 0)
            .add(Action.enter(UP_SMASH, Stick.C), (1, 2))
            .build()
        )

    for first, second in ((Button.A, Button.B), (Button.B, Button.A)):
        templates.append(
            TemplateBuilder("press A+B on same frame")
            .add(press(first), 0)
            .add(press(second), 0)
            .build()
        )

    for start, end, direction in ((RIGHT_SMASH, LEFT_SMASH, "right"), (LEFT_SMASH, RIGHT_SMASH, "left")):
        templates.append(
            TemplateBuilder(f"pivot {direction}")
            .add(Action.leave(start), 0)
            .add(Action.enter(end), (0, 5))
            .add(Action.leave(end), 1)
            .build()
        )

    templates.append(
        TemplateBuilder("adt")
        .add([Action.enter(LIGHTSHIELD, Stick.L_TRIGGER), Action.enter(LIGHTSHIELD, Stick.R_TRIGGER)], 0)
        .add([press(Button.L), press(Button.R)], 1)
        .build()
    )

    return templates


@dataclass
class TemplateRegistry:
    """
    Ordered set of templates watched at runtime.

    Several templates may share a name (variants of the same technique);
    the same template object cannot be registered twice.
    """
    _templates: list[SequenceTemplate] = field(default_factory=list, init=False)

    @classmethod
    def with_defaults(cls) -> TemplateRegistry:
        registry = cls()
        registry.extend(default_templates())
        return registry

    def register(self, template: SequenceTemplate) -> None:
        """
        Add a template.

        Raises:
            TypeError: If ``template`` is not a SequenceTemplate.
            ValueError: If this exact template object is already registered.
        """
        if not isinstance(template, SequenceTemplate):
            raise TypeError(f"Expected SequenceTemplate, got {type(template).__name__}")
        if any(t is template for t in self._templates):
            raise ValueError(f"Template {template.name!r} is already registered")
        self._templates.append(template)

    def extend(self, templates: Iterable[SequenceTemplate]) -> None:
        for template in templates:
            self.register(template)

    def find(self, name: str) -> list[SequenceTemplate]:
        """Get every template registered under ``name``."""
        return [t for t in self._templates if t.name == name]

    def names(self) -> list[str]:
        """Unique template names in registration order."""
        return list(dict.fromkeys(t.name for t in self._templates))

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[SequenceTemplate]:
        return iter(self._templates)
