"""
stepper.py — Step-by-Step Playback Cursor
==========================================
The Stepper is an index into a recorded step log.  The UI moves it
forward / backward; it never runs the algorithm itself.

Positions run from -1 ("before the first step") to len(steps) - 1.

State machine:
    IDLE      →  load()            →  READY      (position -1)
    READY     →  advance() at end  →  FINISHED
    FINISHED  →  retreat()/seek()  →  READY
    any       →  reset()           →  IDLE

Auto-play is the browser's job: it calls advance() every SPEED_PRESETS
seconds until advance() reports completion.

Thread safety:
  This class is NOT thread-safe.  The UI must call advance() / retreat()
  from a single thread.
"""

from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

from algorithms.step import Step


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    READY    = "ready"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.15,   # demo mode
    "turbo":  0.05,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        steps       : The step log being walked (immutable tuple).
        position    : Index into `steps` that is currently shown, -1 before the first.
        state       : Current StepperState.
        on_step     : Optional callback(Step) fired every time the position
                      lands on a step.  The UI hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[Step], None]] = None):
        self.steps:    Tuple[Step, ...] = ()
        self.position: int              = -1
        self.state:    StepperState     = StepperState.IDLE
        self.on_step:  Optional[Callable[[Step], None]] = on_step

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def load(self, steps: Sequence[Step]) -> None:
        """Attach a fresh step log; the cursor starts before its first step."""
        self.steps    = tuple(steps)
        self.position = -1
        self.state    = StepperState.READY

    def reset(self) -> None:
        """Back to IDLE with an empty log.  Caller must load() again."""
        self.steps    = ()
        self.position = -1
        self.state    = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def advance(self) -> Optional[Step]:
        """Move one step forward and return it.  None (and FINISHED) at the end."""
        if self.position >= len(self.steps) - 1:
            if self.state != StepperState.IDLE:
                self.state = StepperState.FINISHED
            return None
        return self._goto(self.position + 1)

    def retreat(self) -> Optional[Step]:
        """Move one step back, never below -1.  Returns the step now current."""
        if self.position > -1:
            self._goto(self.position - 1)
        return self.current()

    def seek(self, idx: int) -> bool:
        """Jump to any position in [-1, len - 1].  False if out of range."""
        if -1 <= idx < len(self.steps):
            self._goto(idx)
            return True
        return False

    def rewind(self) -> None:
        """Jump back to before the first step."""
        self._goto(-1)

    def jump_to_end(self) -> Optional[Step]:
        """Jump to the final step (instant mode)."""
        if not self.steps:
            return None
        return self._goto(len(self.steps) - 1)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def current(self) -> Optional[Step]:
        if 0 <= self.position < len(self.steps):
            return self.steps[self.position]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def at_end(self) -> bool:
        return bool(self.steps) and self.position == len(self.steps) - 1

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _goto(self, idx: int) -> Optional[Step]:
        self.position = idx
        if self.state == StepperState.FINISHED:
            self.state = StepperState.READY
        step = self.current()
        if self.on_step and step is not None:
            self.on_step(step)
        return step
