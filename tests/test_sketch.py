import random

from mondrian.config import SketchSettings
from mondrian.sketch.model import BLUE, FILL_COLORS, RED, WHITE, YELLOW
from mondrian.sketch.model import FilledCell, Orientation, Sketch


class FirstChoice:
    def choice(self, seq):
        return seq[0]


def _grid_sketch(rng=None):
    sketch = Sketch(800, 600, SketchSettings(), rng=rng or FirstChoice())
    sketch.start()
    # Top-edge clicks make vertical lines, left-edge clicks horizontal ones.
    for x in (100, 300, 500):
        sketch.add_line((x, 10))
    for y in (100, 300, 500):
        sketch.add_line((10, y))
    return sketch


def test_start_hides_instructions_once():
    sketch = Sketch(800, 600)
    assert sketch.instructions_visible
    assert sketch.start()
    assert not sketch.instructions_visible
    assert not sketch.start()


def test_add_line_ignores_points_away_from_edges():
    sketch = Sketch(800, 600)
    for point in [(30, 30), (400, 300), (770, 570), (100, 200)]:
        assert sketch.add_line(point) is None
    assert sketch.lines == []


def test_add_line_classifies_by_comparing_coordinates():
    sketch = Sketch(800, 600)
    vertical = sketch.add_line((250, 5))
    horizontal = sketch.add_line((5, 250))
    # Bottom edge, x still larger than y: vertical even though nearest edge is horizontal.
    bottom = sketch.add_line((700, 590))
    assert vertical.orientation == Orientation.VERTICAL
    assert vertical.coordinate == 250
    assert horizontal.orientation == Orientation.HORIZONTAL
    assert horizontal.coordinate == 250
    assert bottom.orientation == Orientation.VERTICAL
    assert bottom.coordinate == 700
    assert [line.sequence for line in sketch.lines] == [0, 1, 2]


def test_fill_requires_minimum_line_count():
    sketch = Sketch(800, 600, rng=FirstChoice())
    sketch.start()
    for point in [(100, 10), (300, 10), (10, 100), (10, 300)]:
        sketch.add_line(point)
    assert sketch.locate_cell((200, 200)) is None
    assert sketch.fill_at((200, 200)) is None
    assert sketch.cells == []


def test_fill_scenario_cell_bounds():
    sketch = _grid_sketch(rng=random.Random(3))
    cell = sketch.fill_at((200, 200))
    assert cell is not None
    assert (cell.x, cell.y, cell.width, cell.height) == (103, 103, 194, 194)
    assert cell.color in FILL_COLORS


def test_click_on_a_line_fills_nothing():
    sketch = _grid_sketch()
    assert sketch.fill_at((300, 200)) is None
    assert sketch.fill_at((700, 200)) is None
    assert sketch.cells == []


def test_locate_cell_picks_cell_in_row_then_column_order():
    sketch = _grid_sketch()
    assert sketch.locate_cell((400, 200)) == (303, 103, 194, 194)
    assert sketch.locate_cell((200, 400)) == (103, 303, 194, 194)


def test_cell_next_to_red_cell_is_never_red():
    sketch = _grid_sketch()
    first = sketch.fill_at((200, 200))
    assert first.color == RED
    second = sketch.fill_at((400, 200))
    assert second.color in {YELLOW, BLUE}


def test_neighbors_on_all_sides_are_collected():
    sketch = _grid_sketch()
    sketch.cells = [
        FilledCell(303, 103, 194, 194, RED),
        FilledCell(103, 303, 194, 194, YELLOW),
    ]
    target = (303, 303, 194, 194)
    assert sorted(sketch.neighbor_colors(target)) == [RED, YELLOW]
    assert sketch.allowed_colors(target) == [BLUE]


def test_diagonal_cell_is_not_a_neighbor():
    sketch = _grid_sketch()
    sketch.cells = [FilledCell(103, 103, 194, 194, RED)]
    assert sketch.neighbor_colors((303, 303, 194, 194)) == []


def test_fill_aborts_when_every_color_is_taken():
    sketch = _grid_sketch()
    sketch.cells = [
        FilledCell(103, 303, 194, 194, RED),
        FilledCell(303, 103, 194, 194, YELLOW),
        FilledCell(303, 303, 194, 194, BLUE),
    ]
    # Only two of those touch (103, 103); add a third neighbor by hand.
    sketch.cells.append(FilledCell(103, -97, 194, 194, BLUE))
    assert sketch.fill_at((200, 200)) is None
    assert len(sketch.cells) == 4


def test_adjacent_cells_never_share_a_color():
    sketch = _grid_sketch(rng=random.Random(11))
    for point in [(200, 200), (400, 200), (200, 400), (400, 400)]:
        sketch.fill_at(point)
    assert len(sketch.cells) == 4
    for idx, cell in enumerate(sketch.cells):
        others = Sketch(800, 600)
        others.cells = sketch.cells[:idx] + sketch.cells[idx + 1:]
        assert cell.color not in others.neighbor_colors(cell.rect)


def test_refill_appends_a_new_cell_on_top():
    sketch = _grid_sketch()
    first = sketch.fill_at((200, 200))
    second = sketch.fill_at((210, 210))
    assert len(sketch.cells) == 2
    assert second.rect == first.rect


def test_short_press_never_erases():
    sketch = _grid_sketch()
    cell = sketch.fill_at((200, 200))
    assert sketch.erase_at((200, 200), 1999) is None
    assert cell.color == RED


def test_long_press_whitens_only_the_pressed_cell():
    sketch = _grid_sketch()
    left = sketch.fill_at((200, 200))
    right = sketch.fill_at((400, 200))
    right_color = right.color
    erased = sketch.erase_at((200, 200), 2000)
    assert erased is left
    assert left.color == WHITE
    assert right.color == right_color


def test_long_press_outside_cells_does_nothing():
    sketch = _grid_sketch()
    sketch.fill_at((200, 200))
    assert sketch.erase_at((400, 400), 5000) is None


def test_erase_hits_the_first_cell_in_creation_order():
    sketch = _grid_sketch()
    first = sketch.fill_at((200, 200))
    second = sketch.fill_at((200, 200))
    second_color = second.color
    sketch.erase_at((200, 200), 2500)
    assert first.color == WHITE
    assert second.color == second_color


def test_cell_bounds_stay_fixed_when_lines_are_added_later():
    sketch = _grid_sketch()
    cell = sketch.fill_at((200, 200))
    sketch.add_line((200, 10))
    assert cell.rect == (103, 103, 194, 194)
    assert sketch.locate_cell((150, 200)) == (103, 103, 94, 194)


def test_render_layers_split_lines_around_first_fill():
    sketch = _grid_sketch()
    sketch.fill_at((200, 200))
    late = sketch.add_line((200, 10))
    under, cells, over = sketch.render_layers()
    assert under == [late]
    assert len(over) == 6
    assert [line.sequence for line in over] == sorted(line.sequence for line in over)
    assert len(cells) == 1


def test_reset_clears_drawing_but_keeps_session():
    sketch = _grid_sketch()
    sketch.fill_at((200, 200))
    sketch.reset()
    assert sketch.lines == []
    assert sketch.cells == []
    assert sketch.started
    assert sketch.add_line((100, 10)).before_first_fill
