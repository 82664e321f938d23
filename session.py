# session.py
from maze_data import CellKind, Grid, MazeGenerator, Position, end_position, start_position
from pathfinder import find_path


class MazeSession:
    """
    Owns the grid, the generator and all path / animation state.

    Adapters read it (cell_at, path, path_found) and drive it with one
    method call per input event or timer tick. Nothing here reads the clock.
    """

    def __init__(self, width=21, height=21, seed=None):
        self.grid = Grid(width, height)
        self.generator = MazeGenerator(seed=seed)

        self.player = start_position(self.grid)
        self.target = end_position(self.grid)
        self.path = []
        self.path_found = False

        # Auto-solve animation
        self.auto_moving = False
        self.move_index = 0
        self.move_path = []

        self.generate_new_maze()

    # ==== READ-ONLY VIEW ====
    @property
    def width(self):
        return self.grid.width

    @property
    def height(self):
        return self.grid.height

    def cell_at(self, x, y):
        return self.grid.cell_at(x, y)

    def is_walkable(self, x, y):
        return self.grid.is_walkable(x, y)

    @property
    def at_target(self):
        return self.player == self.target

    @property
    def path_length(self):
        return len(self.path) if self.path_found else None

    # ==== STATE HELPERS ====
    def _clear_path(self):
        self.path = []
        self.path_found = False

    def _cancel_auto_move(self):
        self.auto_moving = False
        self.move_index = 0
        self.move_path = []

    def _place_player(self, pos):
        """Move the PLAYER tag, putting back whatever the old cell really is."""
        old_kind = CellKind.TARGET if self.player == self.target else CellKind.PATH
        self.grid.set_cell_kind(self.player.x, self.player.y, old_kind)
        self.player = pos
        self.grid.set_cell_kind(pos.x, pos.y, CellKind.PLAYER)

    # ==== OPERATIONS ====
    def reset(self):
        """Player back to the start, target to the far corner, no path, no animation."""
        self._cancel_auto_move()
        self._clear_path()

        for pos in self.grid.positions(CellKind.PLAYER):
            self.grid.set_cell_kind(pos.x, pos.y, CellKind.PATH)
        for pos in self.grid.positions(CellKind.TARGET):
            self.grid.set_cell_kind(pos.x, pos.y, CellKind.PATH)

        self.player = start_position(self.grid)
        self.grid.set_cell_kind(self.player.x, self.player.y, CellKind.PLAYER)

        self.target = end_position(self.grid)
        self.grid.set_cell_kind(self.target.x, self.target.y, CellKind.TARGET)

    def generate_new_maze(self):
        self._cancel_auto_move()
        self.generator.generate(self.grid)
        self.reset()

    def move_player(self, dx, dy):
        """
        Step one cell in a cardinal direction. Returns True if the player moved.

        While auto-solving the move is ignored; it does not cancel the animation.
        """
        if dx not in (-1, 0, 1) or dy not in (-1, 0, 1) or abs(dx) + abs(dy) != 1:
            raise ValueError(f"move must be one cardinal step, got ({dx}, {dy})")

        # The animation owns the player until it finishes or is cancelled
        if self.auto_moving:
            return False

        new_pos = Position(self.player.x + dx, self.player.y + dy)
        if not self.grid.is_walkable(new_pos.x, new_pos.y):
            return False

        self._place_player(new_pos)
        # A shown route no longer starts at the player
        self._clear_path()
        return True

    def find_path_bfs(self):
        """Shortest route player -> target. Returns path_found."""
        self._clear_path()

        route = find_path(self.grid, self.player, self.target)
        if route is None:
            return False

        # Stored without the player's own cell
        self.path = route[1:]
        self.path_found = True
        return True

    def prepare_auto_move(self):
        if not self.find_path_bfs():
            self._cancel_auto_move()
            return False

        self.move_path = [self.player] + self.path
        self.move_index = 0
        self.auto_moving = True
        return True

    def auto_move_step(self):
        """Advance the animation one cell. Returns True if a step happened."""
        if not self.auto_moving or self.move_index >= len(self.move_path) - 1:
            self.auto_moving = False
            return False

        self.move_index += 1
        self._place_player(self.move_path[self.move_index])

        if self.player == self.target:
            self.auto_moving = False
        return True
