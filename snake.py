import argparse
import functools
import logging
import sys

import pygame

from gridsnake.audio import SAMPLE_RATE, SoundBoard
from gridsnake.config import GRID_SIZE, INITIAL_SNAKE, GameConfig, Speed
from gridsnake.game import GameEvent, GameState, SnakeGame
from gridsnake.geometry import Direction

logger = logging.getLogger(__name__)

# Window configuration
CELL_SIZE = 40
HUD_HEIGHT = 64
FOOTER_HEIGHT = 30
FPS = 60
HUD_BASE_SIZE = 22
HUD_MIN_SIZE = 14

# Colors (R, G, B)
BG_TOP = (18, 26, 38)
BG_BOTTOM = (9, 14, 22)
GRID_LINE = (30, 44, 61)
HEAD_COLOR = (112, 224, 120)
BODY_COLOR = (66, 168, 90)
FOOD_COLOR = (255, 83, 95)
FOOD_INNER = (255, 178, 184)
WHITE = (240, 240, 240)
SHADOW = (0, 0, 0)

KEY_TO_DIRECTION = {
    pygame.K_UP: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
}
KEY_TO_SPEED = {
    pygame.K_1: Speed.SLOW,
    pygame.K_2: Speed.NORMAL,
    pygame.K_3: Speed.FAST,
}


class Board:
    """Pixel geometry for a square grid drawn under the HUD."""

    def __init__(self, grid_size, cell_size=CELL_SIZE):
        self.grid_size = grid_size
        self.cell_size = cell_size
        self.width = grid_size * cell_size
        self.height = HUD_HEIGHT + grid_size * cell_size + FOOTER_HEIGHT
        self.top = HUD_HEIGHT

    def grid_rect(self, grid_pos, padding=0):
        """Return a pixel rectangle for a grid position."""
        x, y = grid_pos
        return pygame.Rect(
            x * self.cell_size + padding,
            self.top + y * self.cell_size + padding,
            self.cell_size - padding * 2,
            self.cell_size - padding * 2,
        )


class HudState:
    """Session-only HUD data: best score/size and short-lived animations."""

    def __init__(self, initial_length):
        self.best_score = 0
        self.best_size = initial_length
        self.size_anim_remaining_ms = 0
        self.speed_toast_remaining_ms = 0
        self.show_help = False
        self.show_debug = False

    def __call__(self, event, snapshot):
        if event is GameEvent.ATE:
            self.best_score = max(self.best_score, snapshot.score)
            self.best_size = max(self.best_size, snapshot.length)
            self.size_anim_remaining_ms = 400
        elif event is GameEvent.SPEED_CHANGED:
            self.speed_toast_remaining_ms = 1000

    def update(self, dt_ms):
        self.size_anim_remaining_ms = max(0, self.size_anim_remaining_ms - dt_ms)
        self.speed_toast_remaining_ms = max(0, self.speed_toast_remaining_ms - dt_ms)


@functools.lru_cache(maxsize=None)
def get_ui_font(size):
    """Load a preferred UI font, then fall back safely to pygame default."""
    preferred = ["Bahnschrift", "Impact", "Segoe UI Black", "Arial Black"]
    for name in preferred:
        path = pygame.font.match_font(name)
        if path:
            return pygame.font.Font(path, size)
    return pygame.font.Font(None, size)


def draw_background(surface, board):
    """Draw a gradient background and subtle grid lines."""
    for y in range(board.height):
        t = y / board.height
        r = int(BG_TOP[0] + (BG_BOTTOM[0] - BG_TOP[0]) * t)
        g = int(BG_TOP[1] + (BG_BOTTOM[1] - BG_TOP[1]) * t)
        b = int(BG_TOP[2] + (BG_BOTTOM[2] - BG_TOP[2]) * t)
        pygame.draw.line(surface, (r, g, b), (0, y), (board.width, y))

    bottom = board.top + board.grid_size * board.cell_size
    for x in range(0, board.width + 1, board.cell_size):
        pygame.draw.line(surface, GRID_LINE, (x, board.top), (x, bottom), 1)
    for y in range(board.top, bottom + 1, board.cell_size):
        pygame.draw.line(surface, GRID_LINE, (0, y), (board.width, y), 1)


def draw_food(surface, board, grid_pos):
    """Draw a round, highlighted food pellet."""
    rect = board.grid_rect(grid_pos, padding=3)
    center = rect.center
    radius = rect.width // 2
    pygame.draw.circle(surface, FOOD_COLOR, center, radius)
    pygame.draw.circle(surface, FOOD_INNER, (center[0] - 3, center[1] - 3), max(2, radius // 3))


def draw_snake(surface, board, snapshot):
    """Draw snake body with rounded corners and a distinct head."""
    for i, segment in enumerate(snapshot.snake):
        rect = board.grid_rect(segment, padding=1)
        color = HEAD_COLOR if i == 0 else BODY_COLOR
        pygame.draw.rect(surface, color, rect, border_radius=6)

    # Eyes make the heading easy to read.
    head_rect = board.grid_rect(snapshot.head, padding=1)
    cx, cy = head_rect.center
    eye_offset = board.cell_size // 5
    dx, dy = snapshot.direction.vector
    if dx:
        eyes = [(cx + dx * eye_offset, cy - 4), (cx + dx * eye_offset, cy + 4)]
    else:
        eyes = [(cx - 4, cy + dy * eye_offset), (cx + 4, cy + dy * eye_offset)]
    for ex, ey in eyes:
        pygame.draw.circle(surface, SHADOW, (ex, ey), 3)


def draw_hud(surface, board, snapshot, hud):
    """Draw the top HUD: score, size, speed and session best."""
    bar = pygame.Rect(6, 6, board.width - 12, HUD_HEIGHT - 12)
    panel_surface = pygame.Surface((bar.width, bar.height), pygame.SRCALPHA)
    panel_surface.fill((0, 0, 0, 120))
    surface.blit(panel_surface, bar.topleft)

    top_label = f"Score: {snapshot.score}   Size: {snapshot.length}   {snapshot.speed.label}"
    best_label = f"Best: {hud.best_score}  |  Best Size: {hud.best_size}"

    # Shrink the font until the top row fits the bar.
    font = get_ui_font(HUD_MIN_SIZE)
    for size in range(HUD_BASE_SIZE, HUD_MIN_SIZE - 1, -1):
        font = get_ui_font(size)
        if font.size(top_label)[0] <= bar.width - 16:
            break

    pulse = min(1.0, max(0.0, hud.size_anim_remaining_ms / 400.0))
    color = WHITE if pulse == 0 else (255, 210 + int(30 * (1 - pulse)), 80 + int(160 * (1 - pulse)))
    top_text = font.render(top_label, True, color)
    best_text = get_ui_font(HUD_MIN_SIZE).render(best_label, True, WHITE)
    surface.blit(top_text, top_text.get_rect(centerx=bar.centerx, top=bar.top + 4))
    surface.blit(best_text, best_text.get_rect(centerx=bar.centerx, bottom=bar.bottom - 4))


def draw_bottom_bar(surface, board, font):
    """Draw a compact bottom control bar."""
    text = "H: help  |  P: pause  |  R: restart  |  Esc: quit"
    label = font.render(text, True, WHITE)
    panel_rect = pygame.Rect(0, board.height - FOOTER_HEIGHT, board.width, FOOTER_HEIGHT)
    surface.blit(label, label.get_rect(center=panel_rect.center))


def draw_debug_status(surface, board, font, snapshot):
    """Draw debug line when debug mode is enabled."""
    debug = (
        f"paused={str(snapshot.paused).lower()}  "
        f"direction={snapshot.direction.name.lower()}  "
        f"game_over_reason={snapshot.game_over_reason or 'none'}"
    )
    text = font.render(debug, True, WHITE)
    surface.blit(text, (8, board.height - FOOTER_HEIGHT - text.get_height() - 4))


def draw_panel(surface, board, lines, title_font, text_font, alpha=190):
    """Draw a centered translucent panel with a title and text lines."""
    title = title_font.render(lines[0], True, WHITE)
    line_surfaces = [text_font.render(line, True, WHITE) for line in lines[1:]]
    content_w = max([title.get_width()] + [s.get_width() for s in line_surfaces])
    content_h = title.get_height() + sum(s.get_height() + 6 for s in line_surfaces)

    panel_rect = pygame.Rect(0, 0, min(board.width - 8, content_w + 40), content_h + 32)
    panel_rect.center = (board.width // 2, board.top + board.grid_size * board.cell_size // 2)
    panel_surface = pygame.Surface((panel_rect.width, panel_rect.height), pygame.SRCALPHA)
    panel_surface.fill((0, 0, 0, alpha))
    surface.blit(panel_surface, panel_rect.topleft)

    y = panel_rect.top + 14
    surface.blit(title, title.get_rect(centerx=panel_rect.centerx, y=y))
    y += title.get_height() + 8
    for line_surface in line_surfaces:
        surface.blit(line_surface, line_surface.get_rect(centerx=panel_rect.centerx, y=y))
        y += line_surface.get_height() + 6


HELP_LINES = [
    "Controls",
    "Arrows: move",
    "1/2/3: change speed",
    "Space: start",
    "P: pause",
    "R: restart",
    "Esc: quit",
]


def draw_frame(surface, board, fonts, snapshot, hud):
    """Render one frame from a committed snapshot."""
    draw_background(surface, board)
    draw_food(surface, board, snapshot.food)
    draw_snake(surface, board, snapshot)
    draw_hud(surface, board, snapshot, hud)
    draw_bottom_bar(surface, board, fonts["controls"])
    if hud.show_debug:
        draw_debug_status(surface, board, fonts["controls"], snapshot)

    if hud.show_help:
        draw_panel(surface, board, HELP_LINES, fonts["title"], fonts["controls"])
    elif snapshot.game_state is GameState.NOT_STARTED:
        draw_panel(surface, board, ["Snake", "Press Space to start", "1/2/3: speed"], fonts["title"], fonts["controls"])
    elif snapshot.game_state is GameState.GAME_OVER:
        draw_panel(
            surface,
            board,
            ["Game Over", f"Score: {snapshot.score}", "Press R to restart or Esc to quit"],
            fonts["title"],
            fonts["controls"],
        )
    elif snapshot.paused:
        draw_panel(surface, board, ["Paused"], fonts["title"], fonts["controls"], alpha=160)
    elif hud.speed_toast_remaining_ms > 0:
        draw_panel(surface, board, [f"Speed: {snapshot.speed.label}"], fonts["toast"], fonts["controls"], alpha=180)


def handle_key(key, game, hud):
    """Forward one key press to the game; return False to quit."""
    if key == pygame.K_ESCAPE:
        return False
    if key in KEY_TO_DIRECTION:
        game.set_direction(KEY_TO_DIRECTION[key])
    elif key in KEY_TO_SPEED:
        game.set_speed(KEY_TO_SPEED[key])
    elif key in (pygame.K_SPACE, pygame.K_RETURN):
        game.start()
    elif key == pygame.K_r:
        game.restart()
    elif key == pygame.K_p:
        game.toggle_pause()
    elif key == pygame.K_h:
        hud.show_help = not hud.show_help
    elif key == pygame.K_d:
        hud.show_debug = not hud.show_debug
    return True


def build_config(args):
    speed = Speed.coerce(args.speed)
    if args.grid_size is None and args.length is None:
        return GameConfig(speed=speed)
    return GameConfig.centered(
        args.grid_size or GRID_SIZE,
        args.length or len(INITIAL_SNAKE),
        speed=speed,
    )


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play snake on a wrap-around grid.")
    parser.add_argument("--grid-size", type=int, default=None,
                        help=f"Cells per side of the board (default {GRID_SIZE})")
    parser.add_argument("--length", type=int, default=None,
                        help=f"Opening snake length (default {len(INITIAL_SNAKE)})")
    parser.add_argument("--speed", choices=[s.value for s in Speed], default=Speed.NORMAL.value,
                        help="Starting speed")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for food placement")
    parser.add_argument("--no-sound", action="store_true",
                        help="Disable sound effects")
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    config = build_config(args)

    pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 512)
    pygame.init()
    pygame.display.set_caption("Simple Snake")
    board = Board(config.grid_size)
    screen = pygame.display.set_mode((board.width, board.height))
    clock = pygame.time.Clock()
    fonts = {
        "title": get_ui_font(26),
        "toast": get_ui_font(20),
        "controls": get_ui_font(15),
    }

    game = SnakeGame(config, rng=args.seed)
    hud = HudState(config.initial_length)
    game.add_listener(hud)
    game.add_listener(SoundBoard.from_mixer(enabled=not args.no_sound))

    running = True
    while running:
        dt_ms = clock.tick(FPS)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.KEYDOWN:
                running = handle_key(event.key, game, hud) and running

        # Core state is final for this frame before anything is drawn.
        game.clock.update(dt_ms)
        hud.update(dt_ms)
        draw_frame(screen, board, fonts, game.snapshot(), hud)
        pygame.display.flip()

    logger.info("Session ended, best score %d, best size %d", hud.best_score, hud.best_size)
    game.close()
    pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
