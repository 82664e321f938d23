# maze_data.py
import random
from collections import namedtuple
from enum import Enum

# Default cell size in pixels (used by main.py)
CELL_SIZE = 30

MIN_SIZE = 5


class InvalidDimensionsError(ValueError):
    pass


class OutOfBoundsError(IndexError):
    pass


class CellKind(Enum):
    """Cell tag. The value is the symbol used in map strings."""
    WALL = "1"
    PATH = "0"
    PLAYER = "S"
    TARGET = "E"


Position = namedtuple("Position", ["x", "y"])


class Grid:
    """
    Rectangular W x H grid of cells, all WALL at construction.
    Width and height must be odd and >= 5 so the room lattice and the
    outer wall ring both fit.
    """

    def __init__(self, width, height):
        for name, value in (("width", width), ("height", height)):
            if not isinstance(value, int) or value < MIN_SIZE or value % 2 == 0:
                raise InvalidDimensionsError(
                    f"{name} must be an odd integer >= {MIN_SIZE}, got {value!r}"
                )
        self.width = width
        self.height = height
        self.cells = [[CellKind.WALL for _ in range(width)] for _ in range(height)]

    @classmethod
    def from_strings(cls, lines):
        """Build a grid from map strings ("1" wall, "0" path, "S", "E")."""
        if not lines:
            raise InvalidDimensionsError("map has no rows")
        grid = cls(len(lines[0]), len(lines))
        for y, line in enumerate(lines):
            if len(line) != grid.width:
                raise InvalidDimensionsError(f"row {y} has length {len(line)}, expected {grid.width}")
            for x, symbol in enumerate(line):
                grid.cells[y][x] = CellKind(symbol)
        return grid

    def to_strings(self):
        return ["".join(kind.value for kind in row) for row in self.cells]

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x, y):
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(f"({x}, {y}) outside {self.width}x{self.height} grid")

    def cell_at(self, x, y):
        self._check(x, y)
        return self.cells[y][x]

    def set_cell_kind(self, x, y, kind):
        self._check(x, y)
        self.cells[y][x] = kind

    def is_walkable(self, x, y):
        return self.in_bounds(x, y) and self.cells[y][x] is not CellKind.WALL

    def fill(self, kind):
        for row in self.cells:
            for x in range(self.width):
                row[x] = kind

    def positions(self, kind):
        """All positions currently tagged with `kind`, row by row."""
        return [Position(x, y) for y, row in enumerate(self.cells)
                for x, cell in enumerate(row) if cell is kind]

    def __str__(self):
        return "\n".join(self.to_strings())


def start_position(grid):
    return Position(1, 1)


def end_position(grid):
    return Position(grid.width - 2, grid.height - 2)


class MazeGenerator:
    """
    Perfect maze by recursive backtracking over the odd-coordinate rooms.
    Uses an explicit stack instead of recursion so big grids don't hit
    the recursion limit.
    """

    # Step two cells at a time: right, left, down, up
    ROOM_STEPS = [(2, 0), (-2, 0), (0, 2), (0, -2)]

    def __init__(self, seed=None, rng=None):
        # One random stream per generator, never reseeded while carving
        self.rng = rng if rng is not None else random.Random(seed)

    def _unvisited_rooms(self, grid, visited, x, y):
        rooms = []
        for dx, dy in self.ROOM_STEPS:
            nx, ny = x + dx, y + dy
            # Stay inside the border ring
            if 1 <= nx < grid.width - 1 and 1 <= ny < grid.height - 1 \
                    and (nx, ny) not in visited:
                rooms.append(Position(nx, ny))
        return rooms

    def generate(self, grid):
        """Carve a fresh maze into `grid`. Returns the number of passages carved."""
        grid.fill(CellKind.WALL)

        start = start_position(grid)
        end = end_position(grid)
        grid.set_cell_kind(start.x, start.y, CellKind.PATH)
        grid.set_cell_kind(end.x, end.y, CellKind.PATH)

        visited = {start}
        stack = [start]
        carved = 0

        while stack:
            x, y = stack[-1]
            rooms = self._unvisited_rooms(grid, visited, x, y)

            if rooms:
                nx, ny = self.rng.choice(rooms)
                # Open the wall between the two rooms
                grid.set_cell_kind((x + nx) // 2, (y + ny) // 2, CellKind.PATH)
                grid.set_cell_kind(nx, ny, CellKind.PATH)
                visited.add(Position(nx, ny))
                stack.append(Position(nx, ny))
                carved += 1
            else:
                stack.pop()

        return carved


def generate_maze(width=21, height=21, seed=None):
    """
    Generate a perfect maze with recursive backtracking.
    Start (1, 1) and end (W-2, H-2) are left as PATH.
    """
    grid = Grid(width, height)
    MazeGenerator(seed=seed).generate(grid)
    return grid
