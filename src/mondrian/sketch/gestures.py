from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

Point = Tuple[int, int]


@dataclass(frozen=True)
class Release:
    press_pos: Point
    pos: Point
    held_ms: int
    double_click: bool = False
    long_press: bool = False


class PointerTracker:
    """Turns raw press/release pairs into clicks, double-clicks and long presses.

    Timing is sampled at release, nothing is scheduled.
    """

    def __init__(self, *, long_press_ms: int = 2000, double_click_ms: int = 400, double_click_slop: int = 8) -> None:
        self.long_press_ms = long_press_ms
        self.double_click_ms = double_click_ms
        self.double_click_slop = double_click_slop
        self._press: Optional[Tuple[Point, int]] = None
        self._last_click: Optional[Tuple[Point, int]] = None

    @property
    def pressed(self) -> bool:
        return self._press is not None

    def press(self, pos: Point, now_ms: int) -> None:
        self._press = (pos, now_ms)

    def cancel(self) -> None:
        self._press = None
        self._last_click = None

    def release(self, pos: Point, now_ms: int) -> Optional[Release]:
        if self._press is None:
            return None
        press_pos, pressed_at = self._press
        self._press = None
        held_ms = max(0, now_ms - pressed_at)

        if held_ms >= self.long_press_ms:
            self._last_click = None
            return Release(press_pos=press_pos, pos=pos, held_ms=held_ms, long_press=True)

        double_click = False
        if self._last_click is not None:
            last_pos, last_at = self._last_click
            close = math.dist(last_pos, pos) <= self.double_click_slop
            double_click = close and now_ms - last_at <= self.double_click_ms
        # A double-click consumes the pending click.
        self._last_click = None if double_click else (pos, now_ms)
        return Release(press_pos=press_pos, pos=pos, held_ms=held_ms, double_click=double_click)
