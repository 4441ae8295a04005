"""Macro step models.

A macro is an ordered list of steps replayed against a pointerbridge
server. Each step carries the pause that follows it; a pause of 0 means
the macro-wide action delay applies.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_ACTION_DELAY_MS = 1500
DEFAULT_DRAG_DURATION_MS = 600
DEFAULT_DRAG_STEPS = 30


class _Step(BaseModel):
    model_config = ConfigDict(frozen=True)

    delay_ms: int = Field(default=0, ge=0, description="Pause after the step; 0 = macro default")


class TapStep(_Step):
    """Move to a point and click it."""

    kind: Literal["tap"] = "tap"
    x: int
    y: int
    button: str = Field(default="left")


class DragStep(_Step):
    """Press at (x, y), move to (x2, y2), release."""

    kind: Literal["drag"] = "drag"
    x: int
    y: int
    x2: int
    y2: int
    button: str = Field(default="left")
    duration_ms: int = Field(default=DEFAULT_DRAG_DURATION_MS, ge=0)
    steps: int = Field(default=DEFAULT_DRAG_STEPS, gt=0)


class TypeStep(_Step):
    kind: Literal["type"] = "type"
    text: str


class KeyStep(_Step):
    """Named key or '+'-joined combo, e.g. 'ctrl+shift+t'."""

    kind: Literal["key"] = "key"
    text: str = Field(min_length=1)


class WaitStep(_Step):
    kind: Literal["wait"] = "wait"


MacroStep = Annotated[
    Union[TapStep, DragStep, TypeStep, KeyStep, WaitStep],
    Field(discriminator="kind"),
]


class Macro(BaseModel):
    """A named, replayable sequence of steps."""

    name: str = Field(default="macro")
    action_delay_ms: int = Field(default=DEFAULT_ACTION_DELAY_MS, ge=0)
    loops: int = Field(default=1, ge=0, description="Number of runs; 0 repeats until stopped")
    steps: list[MacroStep] = Field(default_factory=list)

    def pause_after(self, step: _Step) -> float:
        """Seconds to wait after a step."""
        ms = step.delay_ms if step.delay_ms > 0 else self.action_delay_ms
        return ms / 1000

    # Step editing. Positions are 1-based, as shown by describe_steps().

    def _index(self, position: int) -> int:
        if not 1 <= position <= len(self.steps):
            raise IndexError(
                f"step {position} out of range (macro has {len(self.steps)} steps)"
            )
        return position - 1

    def delete_step(self, position: int) -> MacroStep:
        """Remove and return the step at ``position``."""
        return self.steps.pop(self._index(position))

    def move_step(self, position: int, direction: Literal["up", "down"]) -> bool:
        """Swap a step with its neighbour.

        Returns:
            False when the step is already first (up) or last (down).
        """
        i = self._index(position)
        j = i - 1 if direction == "up" else i + 1
        if not 0 <= j < len(self.steps):
            return False
        self.steps[i], self.steps[j] = self.steps[j], self.steps[i]
        return True

    def clear_steps(self) -> int:
        """Drop every step; returns how many were removed."""
        removed = len(self.steps)
        self.steps.clear()
        return removed

    def describe_steps(self) -> list[str]:
        """One numbered line per step, for listings."""
        return [f"{n:3d}. {describe_step(step)}" for n, step in enumerate(self.steps, start=1)]


def describe_step(step: _Step) -> str:
    if isinstance(step, TapStep):
        text = f"tap ({step.x}, {step.y}) {step.button}"
    elif isinstance(step, DragStep):
        text = (
            f"drag ({step.x}, {step.y}) -> ({step.x2}, {step.y2}) {step.button} "
            f"{step.duration_ms}ms/{step.steps} steps"
        )
    elif isinstance(step, (TypeStep, KeyStep)):
        text = f"{step.kind} {step.text!r}"
    else:
        text = "wait"
    if step.delay_ms:
        text += f" +{step.delay_ms}ms"
    return text
