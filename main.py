import pygame
import sys
import asyncio

from maze_data import CellKind, CELL_SIZE
from session import MazeSession

# ==== DETECT WEB ====
IS_WEB = sys.platform == "emscripten"

# ==== CONFIG ====
MAZE_WIDTH = 21
MAZE_HEIGHT = 21
FPS = 60                      # ~16 ms per tick
AUTO_MOVE_INTERVAL_MS = 20    # minimum gap between auto-solve steps
PANEL_HEIGHT = 60

SCREEN_WIDTH = MAZE_WIDTH * CELL_SIZE
SCREEN_HEIGHT = MAZE_HEIGHT * CELL_SIZE + PANEL_HEIGHT

# ==== COLORS ====
WALL_COLOR = (77, 77, 77)
PATH_COLOR = (230, 230, 230)
PLAYER_COLOR = (66, 135, 245)
TARGET_COLOR = (245, 66, 66)
SOLUTION_COLOR = (66, 245, 173)
BG_COLOR = (41, 41, 41)
PANEL_COLOR = (128, 128, 128)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)

CELL_COLORS = {
    CellKind.WALL: WALL_COLOR,
    CellKind.PATH: PATH_COLOR,
    CellKind.PLAYER: PLAYER_COLOR,
    CellKind.TARGET: TARGET_COLOR,
}

MOVE_KEYS = {
    pygame.K_UP: (0, -1),
    pygame.K_DOWN: (0, 1),
    pygame.K_LEFT: (-1, 0),
    pygame.K_RIGHT: (1, 0),
}

CONTROLS = [
    "Arrow keys - move player",
    "Space      - show shortest path",
    "R          - reset maze",
    "N          - generate new maze",
    "A          - auto-solve",
    "ESC        - quit",
]


def print_controls():
    # No terminal to read it in the browser build
    if IS_WEB:
        return
    print("Maze controls:")
    for line in CONTROLS:
        print(line)


# ==== AUTO-MOVE TIMER ====
class AutoMoveTimer:
    """Paces auto_move_step() calls; fed with pygame.time.get_ticks()."""

    def __init__(self, interval_ms=AUTO_MOVE_INTERVAL_MS):
        self.interval_ms = interval_ms
        self.last_step = 0

    def restart(self, now):
        self.last_step = now

    def due(self, now):
        if now - self.last_step >= self.interval_ms:
            self.last_step = now
            return True
        return False


# ==== INPUT ====
def handle_key(session, key):
    """
    Turn one key press into one session call.
    Returns the action name, "quit", or None for keys we ignore.
    """
    if key in MOVE_KEYS:
        # Arrow keys do nothing while the auto-solve is running
        if session.auto_moving:
            return None
        session.move_player(*MOVE_KEYS[key])
        return "move"

    if key == pygame.K_SPACE:
        session.find_path_bfs()
        print("Show shortest path")
        if not session.path_found:
            print("⚠️ No path found")
        return "path"

    if key == pygame.K_r:
        session.reset()
        print("Reset maze")
        return "reset"

    if key == pygame.K_n:
        session.generate_new_maze()
        print("Generate new maze")
        return "new"

    if key == pygame.K_a:
        session.prepare_auto_move()
        print("Start auto-solve")
        if not session.path_found:
            print("⚠️ No path found")
        return "auto"

    if key == pygame.K_ESCAPE:
        return "quit"

    return None


# ==== DRAW ====
def draw_maze(screen, session):
    for y in range(session.height):
        for x in range(session.width):
            rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE - 1, CELL_SIZE - 1)
            pygame.draw.rect(screen, CELL_COLORS[session.cell_at(x, y)], rect)

    if session.path_found:
        half = CELL_SIZE // 4
        for pos in session.path:
            if session.cell_at(pos.x, pos.y) in (CellKind.PLAYER, CellKind.TARGET):
                continue
            center_x = pos.x * CELL_SIZE + CELL_SIZE // 2
            center_y = pos.y * CELL_SIZE + CELL_SIZE // 2
            rect = pygame.Rect(center_x - half, center_y - half, half * 2, half * 2)
            pygame.draw.rect(screen, SOLUTION_COLOR, rect)


def draw_panel(screen, session, font):
    ui_y = session.height * CELL_SIZE
    pygame.draw.rect(screen, PANEL_COLOR, (0, ui_y, SCREEN_WIDTH, PANEL_HEIGHT))

    help_text = font.render("Arrows move  Space path  A auto  R reset  N new", True, WHITE)
    screen.blit(help_text, (10, ui_y + 8))

    if session.at_target:
        status, color = "Target reached!", YELLOW
    elif session.auto_moving:
        status, color = "Auto-solving...", WHITE
    elif session.path_found:
        status, color = f"Path length: {session.path_length}", WHITE
    else:
        status, color = "", WHITE
    if status:
        screen.blit(font.render(status, True, color), (10, ui_y + 32))


# ==== MAIN GAME LOOP ====
async def main():
    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))
    pygame.display.set_caption("Random Maze Generator & Solver")

    try:
        font = pygame.font.SysFont(None, 24)
    except Exception as e:
        print(f"⚠️ Font unavailable, panel disabled: {e}")
        font = None

    session = MazeSession(MAZE_WIDTH, MAZE_HEIGHT)
    timer = AutoMoveTimer(AUTO_MOVE_INTERVAL_MS)

    print_controls()

    clock = pygame.time.Clock()
    running = True
    was_at_target = False

    while running:
        clock.tick(FPS)
        current_time = pygame.time.get_ticks()

        # Handle events
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                action = handle_key(session, event.key)
                if action == "quit":
                    running = False
                elif action == "auto":
                    timer.restart(current_time)

        # ============ AUTO-SOLVE ============
        if session.auto_moving and timer.due(current_time):
            session.auto_move_step()

        if session.at_target and not was_at_target:
            print("🎉 Target reached!")
        was_at_target = session.at_target

        # ============ DRAW ============
        screen.fill(BG_COLOR)
        draw_maze(screen, session)
        if font is not None:
            draw_panel(screen, session, font)

        pygame.display.flip()
        await asyncio.sleep(0)  # keeps the browser build (pygbag) responsive

    pygame.quit()


# ==== RUN ====
def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
