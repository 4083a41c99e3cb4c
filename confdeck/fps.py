"""A component that measures and shows tick and frame rates."""

from __future__ import annotations

import time
from typing import Callable

from confdeck.action import Action, ActionKind
from confdeck.component import Component
from confdeck.screen import Constraint, Frame, Rect, vertical
from confdeck.styles import Modifier, Style


class _RateMeter:
    def __init__(self, clock: Callable[[], float]) -> None:
        self._clock = clock
        self._last_update = clock()
        self._count = 0
        self.per_second = 0.0

    def record(self) -> None:
        self._count += 1
        now = self._clock()
        elapsed = now - self._last_update
        if elapsed >= 1.0:
            self.per_second = self._count / elapsed
            self._last_update = now
            self._count = 0


class FpsCounter(Component):
    """Counts Tick and Render actions and reports their rates once a second."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._ticks = _RateMeter(clock)
        self._frames = _RateMeter(clock)

    @property
    def ticks_per_second(self) -> float:
        return self._ticks.per_second

    @property
    def frames_per_second(self) -> float:
        return self._frames.per_second

    def update(self, action: Action) -> Action | None:
        if action.kind is ActionKind.TICK:
            self._ticks.record()
        elif action.kind is ActionKind.RENDER:
            self._frames.record()
        return None

    def draw(self, frame: Frame, area: Rect) -> None:
        top, _ = vertical(area, [Constraint.length(1), Constraint.min(0)])
        if top.height == 0 or top.width == 0:
            return
        message = f"{self.ticks_per_second:.2f} ticks/sec, {self.frames_per_second:.2f} FPS"
        message = message[: top.width]
        x = top.x + top.width - len(message)
        frame.set_string(x, top.y, message, Style(add_modifier=Modifier.DIM))