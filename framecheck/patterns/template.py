"""
Sequence templates for multi-step input techniques.

A template is an ordered, read-only list of steps. Each step accepts any
one of a set of actions and must land inside a frame window measured
from an earlier step of the same template.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from .actions import Action, as_action_set


class TemplateError(ValueError):
    """Raised when a template definition is malformed."""


@dataclass(frozen=True)
class FrameWindow:
    """Inclusive window of frame offsets."""
    min: int
    max: int

    def __post_init__(self):
        if self.min > self.max:
            raise TemplateError(f"Frame window min {self.min} exceeds max {self.max}")

    @classmethod
    def of(cls, frames: int | tuple[int, int] | list[int] | FrameWindow) -> FrameWindow:
        """Build a window from ``n`` (meaning ``[n, n]``) or ``(min, max)``."""
        if isinstance(frames, FrameWindow):
            return frames
        if isinstance(frames, int):
            return cls(frames, frames)
        lo, hi = frames
        return cls(int(lo), int(hi))

    def contains(self, frames: float) -> bool:
        return self.min <= frames <= self.max

    def __str__(self) -> str:
        if self.min == self.max:
            return f"{self.min}f"
        return f"{self.min}-{self.max}f"


@dataclass(frozen=True)
class Step:
    """One element of a template."""
    actions: frozenset[Action]
    window: FrameWindow
    # None marks the template origin (no timing constraint)
    from_index: int | None = None

    def accepts(self, action: Action) -> bool:
        return action in self.actions


@dataclass(frozen=True)
class SequenceTemplate:
    """
    Immutable technique definition.

    Validated eagerly so that every matcher built from it can assume:
    - at least one step
    - step 0 has no timing reference
    - every later step references a strictly earlier step
    """
    name: str
    steps: tuple[Step, ...]

    def __post_init__(self):
        object.__setattr__(self, "steps", tuple(self.steps))
        if not self.name:
            raise TemplateError("Template name must not be empty")
        if not self.steps:
            raise TemplateError(f"Template {self.name!r} has no steps")

        for i, step in enumerate(self.steps):
            if not step.actions:
                raise TemplateError(f"Template {self.name!r} step {i} accepts no actions")
            if i == 0:
                if step.from_index is not None:
                    raise TemplateError(
                        f"Template {self.name!r} step 0 cannot reference another step"
                    )
                continue
            if step.from_index is None or not 0 <= step.from_index < i:
                raise TemplateError(
                    f"Template {self.name!r} step {i} must reference an earlier step, "
                    f"got from={step.from_index}"
                )

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self.steps)

    def __getitem__(self, index: int) -> Step:
        return self.steps[index]


@dataclass
class TemplateBuilder:
    """
    Fluent authoring helper.

    Example:
        jc_shine = (
            TemplateBuilder("jc shine")
            .add(Action.press(Button.Y), 0)
            .add(Action.press(Button.B), 3)
            .build()
        )
    """
    name: str
    _steps: list[Step] = field(default_factory=list, init=False)

    def add(
        self,
        actions: Action | str | Iterable[Action | str],
        frames: int | tuple[int, int] | list[int] | FrameWindow,
    ) -> TemplateBuilder:
        """Append a step timed from the previous step."""
        from_index = len(self._steps) - 1 if self._steps else None
        return self.add_from(actions, frames, from_index)

    def add_from(
        self,
        actions: Action | str | Iterable[Action | str],
        frames: int | tuple[int, int] | list[int] | FrameWindow,
        from_index: int | None,
    ) -> TemplateBuilder:
        """Append a step timed from an arbitrary earlier step."""
        self._steps.append(Step(
            actions=as_action_set(actions),
            window=FrameWindow.of(frames),
            from_index=from_index,
        ))
        return self

    def build(self) -> SequenceTemplate:
        return SequenceTemplate(name=self.name, steps=tuple(self._steps))
