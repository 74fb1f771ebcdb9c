from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from mondrian.config import SketchSettings

logger = logging.getLogger(__name__)

Point = Tuple[float, float]
Rect = Tuple[float, float, float, float]

RED = "red"
YELLOW = "yellow"
BLUE = "blue"
WHITE = "white"
FILL_COLORS: Tuple[str, ...] = (RED, YELLOW, BLUE)


class Orientation(str, Enum):
    HORIZONTAL = "h"
    VERTICAL = "v"


@dataclass(frozen=True)
class Line:
    orientation: Orientation
    coordinate: float
    sequence: int
    before_first_fill: bool


@dataclass
class FilledCell:
    x: float
    y: float
    width: float
    height: float
    color: str

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)

    def contains(self, point: Point) -> bool:
        return _rect_contains(self.rect, point)


def _rect_contains(rect: Rect, point: Point) -> bool:
    x, y, width, height = rect
    px, py = point
    return x < px < x + width and y < py < y + height


def _touches(cell: FilledCell, rect: Rect, tolerance: float) -> bool:
    x, y, width, height = rect
    overlaps_x = cell.x < x + width and cell.x + cell.width > x
    overlaps_y = cell.y < y + height and cell.y + cell.height > y
    if overlaps_x and abs(cell.y + cell.height - y) <= tolerance:
        return True
    if overlaps_x and abs(y + height - cell.y) <= tolerance:
        return True
    if overlaps_y and abs(cell.x + cell.width - x) <= tolerance:
        return True
    return overlaps_y and abs(x + width - cell.x) <= tolerance


class Sketch:
    """Lines, filled cells and session flags for one drawing.

    Every operation is total: input that does not apply is ignored and the
    method returns ``None`` (or ``False``) without touching state.
    """

    def __init__(
        self,
        width: int,
        height: int,
        settings: Optional[SketchSettings] = None,
        *,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.width = width
        self.height = height
        self.settings = settings or SketchSettings()
        self.rng = rng or random.Random()
        self.started = False
        self.instructions_visible = True
        self.lines: List[Line] = []
        self.cells: List[FilledCell] = []

    def start(self) -> bool:
        if self.started:
            return False
        self.started = True
        self.instructions_visible = False
        logger.info("Sketch started on a %dx%d canvas", self.width, self.height)
        return True

    def reset(self) -> None:
        self.lines = []
        self.cells = []
        logger.info("Sketch cleared")

    def is_near_edge(self, point: Point) -> bool:
        x, y = point
        margin = self.settings.edge_margin
        return x < margin or x > self.width - margin or y < margin or y > self.height - margin

    def add_line(self, point: Point) -> Optional[Line]:
        if not self.is_near_edge(point):
            logger.debug("Ignoring click at %s away from the edges", point)
            return None
        x, y = point
        if x > y:
            orientation, coordinate = Orientation.VERTICAL, x
        else:
            orientation, coordinate = Orientation.HORIZONTAL, y
        line = Line(
            orientation=orientation,
            coordinate=coordinate,
            sequence=len(self.lines),
            before_first_fill=not self.cells,
        )
        self.lines.append(line)
        logger.debug("Added %s line at %s", orientation.name.lower(), coordinate)
        return line

    def _coordinates(self, orientation: Orientation) -> List[float]:
        return sorted(line.coordinate for line in self.lines if line.orientation == orientation)

    def locate_cell(self, point: Point) -> Optional[Rect]:
        """Return the grid cell containing ``point``, inset by the stroke width."""
        if len(self.lines) < self.settings.min_lines:
            return None
        stroke = self.settings.stroke_width
        horizontals = self._coordinates(Orientation.HORIZONTAL)
        verticals = self._coordinates(Orientation.VERTICAL)
        for top, bottom in zip(horizontals, horizontals[1:]):
            for left, right in zip(verticals, verticals[1:]):
                rect = (
                    left + stroke / 2,
                    top + stroke / 2,
                    right - left - stroke,
                    bottom - top - stroke,
                )
                if _rect_contains(rect, point):
                    return rect
        return None

    def neighbor_colors(self, rect: Rect) -> List[str]:
        tolerance = self.settings.stroke_width
        return [cell.color for cell in self.cells if _touches(cell, rect, tolerance)]

    def allowed_colors(self, rect: Rect) -> List[str]:
        taken = set(self.neighbor_colors(rect))
        return [color for color in FILL_COLORS if color not in taken]

    def fill_at(self, point: Point) -> Optional[FilledCell]:
        rect = self.locate_cell(point)
        if rect is None:
            logger.debug("No cell under %s", point)
            return None
        choices = self.allowed_colors(rect)
        if not choices:
            logger.info("No color left for cell at %s", point)
            return None
        x, y, width, height = rect
        cell = FilledCell(x=x, y=y, width=width, height=height, color=self.rng.choice(choices))
        self.cells.append(cell)
        logger.info("Filled cell %s with %s", rect, cell.color)
        return cell

    def erase_at(self, point: Point, held_ms: float) -> Optional[FilledCell]:
        if held_ms < self.settings.long_press_ms:
            return None
        for cell in self.cells:
            if cell.contains(point):
                cell.color = WHITE
                logger.info("Erased cell %s", cell.rect)
                return cell
        return None

    def render_layers(self) -> Tuple[List[Line], Sequence[FilledCell], List[Line]]:
        """Lines drawn under the cells, the cells, and lines drawn over them."""
        ordered = sorted(self.lines, key=lambda line: line.sequence)
        under = [line for line in ordered if not line.before_first_fill]
        over = [line for line in ordered if line.before_first_fill]
        return under, list(self.cells), over
