import math
from typing import Dict, Iterable, List, Tuple

from PIL import Image, ImageDraw, ImageFont

from ludo_lounge.config import config
from ludo_lounge.rules import token_phase
from ludo_lounge.state import GameState
from ludo_lounge.types import Color, FinalPhase, HomePhase, TrackPhase

# Color styling
COLOR_MAP = {
    Color.RED: (239, 68, 68),
    Color.BLUE: (59, 130, 246),
    Color.GREEN: (34, 197, 94),
    Color.YELLOW: (250, 204, 21),
}
BG_COLOR = (15, 23, 42)
CELL_COLOR = (51, 65, 85)
SAFE_COLOR = (148, 163, 184)
OUTLINE = (226, 232, 240)
CENTER_COLOR = (30, 41, 59)

FONT = None
try:  # Best-effort font
    FONT = ImageFont.truetype("DejaVuSans.ttf", 12)
except OSError:
    pass

BOARD_SIZE = 640
RING_RADIUS = 42.0  # percent of board
TOKEN_RADIUS = 14
CELL_RADIUS = 8

Point = Tuple[float, float]

# Percent coordinates of the 2x2 yard slots in each corner
HOME_SLOTS: Dict[Color, List[Point]] = {
    Color.RED: [(16, 16), (25, 16), (16, 25), (25, 25)],
    Color.BLUE: [(84, 16), (75, 16), (84, 25), (75, 25)],
    Color.YELLOW: [(84, 84), (75, 84), (84, 75), (75, 75)],
    Color.GREEN: [(16, 84), (25, 84), (16, 75), (25, 75)],
}

STACK_OFFSETS = {
    1: [(0, 0)],
    2: [(-12, -10), (12, 10)],
    3: [(-14, -8), (14, -8), (0, 14)],
    4: [(-14, -10), (14, -10), (-14, 10), (14, 10)],
}


def ring_points() -> List[Point]:
    """Percent coordinates of the 52 ring cells, cell 0 at twelve o'clock."""
    points = []
    for idx in range(config.TRACK_LENGTH):
        angle = idx / config.TRACK_LENGTH * math.pi * 2 - math.pi / 2
        points.append(
            (50 + RING_RADIUS * math.cos(angle), 50 + RING_RADIUS * math.sin(angle))
        )
    return points


RING = ring_points()


def lane_points(color: Color) -> List[Point]:
    """Six lane cells running from the color's start cell toward the center."""
    sx, sy = RING[config.START_OFFSETS[color.value]]
    dx, dy = 50 - sx, 50 - sy
    return [
        (sx + dx * (step + 1) / 7, sy + dy * (step + 1) / 7)
        for step in range(config.FINAL_LANE_LENGTH)
    ]


LANES = {color: lane_points(color) for color in Color}


def _px(pt: Point) -> Tuple[float, float]:
    return pt[0] * BOARD_SIZE / 100, pt[1] * BOARD_SIZE / 100


def token_anchor(color: Color, slot: int, progress, start_offset: int) -> Tuple[str, Point]:
    """Return (stack key, percent point) for a token; same key = same spot."""
    phase = token_phase(progress, start_offset)
    if isinstance(phase, HomePhase):
        return f"home-{color.value}-{slot}", HOME_SLOTS[color][slot % 4]
    if isinstance(phase, TrackPhase):
        return f"track-{phase.cell}", RING[phase.cell]
    if isinstance(phase, FinalPhase):
        return f"final-{color.value}-{phase.lane_index}", LANES[color][phase.lane_index]
    return f"done-{color.value}", (50.0, 50.0)


def _placements(state: GameState) -> Dict[str, List[Tuple[Color, str, Point]]]:
    grouped: Dict[str, List[Tuple[Color, str, Point]]] = {}
    for pl in state.players:
        for slot, tk in enumerate(pl.tokens):
            key, pt = token_anchor(pl.color, slot, tk.progress, pl.start_offset)
            grouped.setdefault(key, []).append((pl.color, tk.token_id, pt))
    return grouped


def draw_board(state: GameState, highlight: Iterable[str] = ()) -> Image.Image:
    highlight = set(highlight)
    img = Image.new("RGB", (BOARD_SIZE, BOARD_SIZE), BG_COLOR)
    d = ImageDraw.Draw(img)

    # Ring cells
    for idx, pt in enumerate(RING):
        x, y = _px(pt)
        fill = SAFE_COLOR if idx in config.SAFE_CELLS else CELL_COLOR
        d.ellipse(
            (x - CELL_RADIUS, y - CELL_RADIUS, x + CELL_RADIUS, y + CELL_RADIUS),
            fill=fill,
            outline=OUTLINE,
        )

    # Final lanes
    for color, lane in LANES.items():
        shade = tuple(int(c * 0.45) for c in COLOR_MAP[color])
        for pt in lane:
            x, y = _px(pt)
            r = CELL_RADIUS - 2
            d.ellipse((x - r, y - r, x + r, y + r), fill=shade, outline=OUTLINE)

    # Center
    cx, cy = _px((50, 50))
    d.rounded_rectangle((cx - 32, cy - 32, cx + 32, cy + 32), radius=10, fill=CENTER_COLOR, outline=OUTLINE, width=2)

    # Tokens, current player's drawn last so they sit on top
    for group in _placements(state).values():
        group.sort(key=lambda item: item[0] == state.current_player)
        offsets = STACK_OFFSETS.get(len(group), STACK_OFFSETS[4])
        for order, (color, token_id, pt) in enumerate(group):
            ox, oy = offsets[order] if order < len(offsets) else (0, 0)
            x, y = _px(pt)
            x += ox
            y += oy
            width = 4 if token_id in highlight else 2
            d.ellipse(
                (x - TOKEN_RADIUS, y - TOKEN_RADIUS, x + TOKEN_RADIUS, y + TOKEN_RADIUS),
                fill=COLOR_MAP[color],
                outline=OUTLINE,
                width=width,
            )
            if FONT:
                d.text((x - 4, y - 7), token_id.split("-")[1], fill=(11, 18, 36), font=FONT)

    return img
