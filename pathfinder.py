# pathfinder.py
from collections import deque

from maze_data import Position

# Expansion order: +x, -x, +y, -y. Picks the winner among equal-length
# shortest paths, so keep it fixed.
DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))


class NoPathFoundError(LookupError):
    pass


def _search(grid, start, goal):
    """Run BFS and return the parent map, or None if goal is unreachable."""
    queue = deque([start])
    # Mark on enqueue so no cell is queued twice
    visited = {start}
    parents = {}

    while queue:
        current = queue.popleft()
        if current == goal:
            return parents

        for dx, dy in DIRECTIONS:
            nxt = Position(current.x + dx, current.y + dy)
            if nxt not in visited and grid.is_walkable(nxt.x, nxt.y):
                visited.add(nxt)
                parents[nxt] = current
                queue.append(nxt)

    return None


def find_path(grid, start, goal):
    """
    Shortest path from `start` to `goal` over walkable cells, both ends
    included. Returns None when the goal can't be reached.
    """
    start, goal = Position(*start), Position(*goal)
    parents = _search(grid, start, goal)
    if parents is None:
        return None

    path = [goal]
    while path[-1] != start:
        path.append(parents[path[-1]])
    path.reverse()
    return path


def find_path_or_raise(grid, start, goal):
    path = find_path(grid, start, goal)
    if path is None:
        raise NoPathFoundError(f"no path from {tuple(start)} to {tuple(goal)}")
    return path


def distances_from(grid, start):
    """BFS layer of every cell reachable from `start`."""
    start = Position(*start)
    layers = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for dx, dy in DIRECTIONS:
            nxt = Position(current.x + dx, current.y + dy)
            if nxt not in layers and grid.is_walkable(nxt.x, nxt.y):
                layers[nxt] = layers[current] + 1
                queue.append(nxt)
    return layers


def bfs_distance(grid, start, goal):
    """BFS layer distance (number of edges), or None if unreachable."""
    return distances_from(grid, start).get(Position(*goal))
