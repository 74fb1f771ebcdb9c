from __future__ import annotations

import logging
import random
import sys
from typing import Any, Dict, Optional, Tuple

import pygame

from mondrian.config import color_table, load_config, sketch_settings
from mondrian.logging_config import setup_logging
from mondrian.sketch.gestures import PointerTracker, Release
from mondrian.sketch.model import Line, Orientation, Sketch
from mondrian.ui.common import create_window, draw_text_panel, is_primary_pointer_event, pointer_event_pos

logger = logging.getLogger(__name__)

Color = Tuple[int, int, int]
Point = Tuple[int, int]

INSTRUCTIONS = (
    "Click near the edge of the canvas to add straight lines.\n"
    "Double-click inside the grid to fill a rectangle "
    "(after at least five lines are placed).\n"
    "Press and hold a filled rectangle for two seconds to erase it.\n"
    "Press N for a new canvas, Esc to quit.\n"
    "Click anywhere to start."
)


class SketchApp:
    def __init__(
        self,
        *,
        screen: Optional[pygame.Surface] = None,
        screen_rect: Optional[pygame.Rect] = None,
        clock: Optional[pygame.time.Clock] = None,
        rng: Optional[random.Random] = None,
        config: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.config = config if config is not None else load_config()
        self.settings = sketch_settings(self.config)
        self.colors: Dict[str, Color] = color_table(self.config)

        if screen is None:
            window = self.config.get("window", {})
            self.screen, self.screen_rect = create_window(
                (int(window.get("width", 1280)), int(window.get("height", 800))),
                fullscreen=bool(window.get("fullscreen", False)),
                title=str(window.get("title", "")),
            )
        else:
            self.screen = screen
            self.screen_rect = screen_rect or screen.get_rect()
        self.clock = clock or pygame.time.Clock()

        self.sketch = Sketch(self.screen_rect.width, self.screen_rect.height, self.settings, rng=rng)
        self.tracker = PointerTracker(
            long_press_ms=self.settings.long_press_ms,
            double_click_ms=self.settings.double_click_ms,
            double_click_slop=self.settings.double_click_slop,
        )
        self.font = pygame.font.SysFont("sans", 18)
        panel_w = min(self.screen_rect.width - 40, 720)
        panel_h = min(self.screen_rect.height - 40, 260)
        self.instructions_rect = pygame.Rect(0, 0, max(1, panel_w), max(1, panel_h))
        self.instructions_rect.center = self.screen_rect.center
        self.pointer_down = False
        self.dirty = True

    def _handle_pointer_down(self, pos: Point, now_ms: int) -> None:
        if self.pointer_down:
            # Ignore duplicate emulated pointer-down events from touch stacks.
            return
        self.pointer_down = True
        if self.sketch.start():
            self.tracker.cancel()
            self.dirty = True
            return
        self.tracker.press(pos, now_ms)
        if self.sketch.add_line(pos) is not None:
            self.dirty = True

    def _handle_pointer_up(self, pos: Point, now_ms: int) -> None:
        if not self.pointer_down:
            # Ignore duplicate emulated pointer-up events.
            return
        self.pointer_down = False
        release = self.tracker.release(pos, now_ms)
        if release is None:
            return
        self._apply_release(release)

    def _apply_release(self, release: Release) -> None:
        if release.long_press:
            if self.sketch.erase_at(release.press_pos, release.held_ms) is not None:
                self.dirty = True
            return
        if release.double_click and self.sketch.fill_at(release.pos) is not None:
            self.dirty = True

    def _handle_key(self, event: pygame.event.Event) -> bool:
        if event.key == pygame.K_ESCAPE:
            return True
        if event.key == pygame.K_n and self.sketch.started:
            self.sketch.reset()
            self.tracker.cancel()
            self.dirty = True
        return False

    def _draw_line(self, line: Line) -> None:
        color = self.colors["line"]
        width = self.settings.stroke_width
        coordinate = int(round(line.coordinate))
        if line.orientation == Orientation.VERTICAL:
            pygame.draw.line(self.screen, color, (coordinate, 0), (coordinate, self.screen_rect.height), width)
        else:
            pygame.draw.line(self.screen, color, (0, coordinate), (self.screen_rect.width, coordinate), width)

    def _render(self) -> None:
        self.screen.fill(self.colors["background"])
        if self.sketch.instructions_visible:
            draw_text_panel(self.screen, self.instructions_rect, INSTRUCTIONS, self.font)
            pygame.display.flip()
            return

        under, cells, over = self.sketch.render_layers()
        for line in under:
            self._draw_line(line)
        for cell in cells:
            rect = pygame.Rect(
                int(round(cell.x)),
                int(round(cell.y)),
                int(round(cell.width)),
                int(round(cell.height)),
            )
            pygame.draw.rect(self.screen, self.colors[cell.color], rect)
        for line in over:
            self._draw_line(line)
        pygame.display.flip()

    def run(self, *, quit_on_exit: bool = True) -> None:
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if self._handle_key(event):
                        running = False
                elif event.type == pygame.VIDEOEXPOSE:
                    self.dirty = True
                elif is_primary_pointer_event(event, is_down=True):
                    pos = pointer_event_pos(event, self.screen_rect)
                    if pos is None:
                        continue
                    self._handle_pointer_down(pos, pygame.time.get_ticks())
                elif is_primary_pointer_event(event, is_down=False):
                    pos = pointer_event_pos(event, self.screen_rect)
                    if pos is None:
                        continue
                    self._handle_pointer_up(pos, pygame.time.get_ticks())

            if self.dirty:
                self._render()
                self.dirty = False
            self.clock.tick(60)

        if quit_on_exit:
            pygame.quit()


def main() -> None:
    config = load_config()
    log_config = config.get("logging", {}) or {}
    setup_logging(log_config.get("level", "INFO"), log_config.get("file"))
    try:
        SketchApp(config=config).run(quit_on_exit=True)
    except Exception:
        logger.exception("Sketch crashed")
        pygame.quit()
        sys.exit(1)


if __name__ == "__main__":
    main()
