"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
A handful of deployment knobs can be overridden from the environment.
"""

import os

# ── Window & Grid ─────────────────────────────────────────────────
CELL            = 20
COLS, ROWS      = 40, 30
GAME_W, GAME_H  = COLS * CELL, ROWS * CELL
PANEL_H         = 80
WIDTH, HEIGHT   = GAME_W, PANEL_H + GAME_H
OFFSET_X        = 0
OFFSET_Y        = PANEL_H
FPS             = 60

# ── Colors ────────────────────────────────────────────────────────
UI_BG       = (5,   5,   15)
GOLD        = (255, 215, 0)
WHITE       = (250, 250, 250)
RED         = (255, 40,  40)
CYAN        = (0,   255, 255)
OBSTACLE    = (100, 100, 120)
UI_COL      = (120, 120, 170)
BLACK       = (0,   0,   0)

THEMES = [
    {"name": "Modern",  "bg": (10, 10, 20),  "grid": (35, 35, 55),   "head": (0, 255, 127),
     "body": (0, 150, 80),   "food": (255, 60, 60),  "accent": (0, 255, 127)},
    {"name": "Neon",    "bg": (5, 5, 15),    "grid": (40, 40, 80),   "head": (255, 0, 255),
     "body": (0, 255, 255),  "food": (255, 50, 50),  "accent": (0, 255, 255)},
    {"name": "Classic", "bg": (155, 188, 15), "grid": (139, 172, 15), "head": (15, 56, 15),
     "body": (48, 98, 48),   "food": (255, 69, 0),   "accent": (48, 98, 48)},
]
DEFAULT_THEME = 0

# ── Difficulty (base tick period in ms) ───────────────────────────
DIFFICULTIES = [
    {"label": "EASY",   "period": 150, "color": (0,   255, 255)},
    {"label": "MEDIUM", "period": 100, "color": (255, 215, 0)},
    {"label": "HARD",   "period": 60,  "color": (255, 40,  40)},
]
DEFAULT_DIFFICULTY = 0
BOOST_DIVISOR      = 2.5

# ── Gameplay ──────────────────────────────────────────────────────
INITIAL_SNAKE       = [(10, 10), (9, 10), (8, 10)]
INITIAL_LENGTH      = len(INITIAL_SNAKE)
FOOD_POINTS         = 10
BONUS_POINTS        = 50
BONUS_CHANCE        = 0.15
MAX_RANDOM_ATTEMPTS = 200
CROSS_THRESHOLD     = 100    # centred cross appears
CORNER_THRESHOLD    = 250    # four corner bars appear
CROSS_ARM           = 4
CORNER_BAR_LEN      = 6
CORNER_MARGIN       = 2

# ── Countdown ─────────────────────────────────────────────────────
COUNTDOWN_START   = 3
COUNTDOWN_STEP_MS = 800

# ── Advice generator ──────────────────────────────────────────────
ADVICE_MILESTONE = 50
ADVICE_IDLE      = "AG~3 STANDING BY."
ADVICE_READY     = "AG~3 LINK ESTABLISHED. READY."
ADVICE_FALLBACK  = "AG~3 SYSTEM ALERT: DATA STREAM INTERRUPTED."
ADVICE_API_KEY   = (os.getenv("GEMINI_API_KEY", "").strip()
                    or os.getenv("API_KEY", "").strip())
ADVICE_MODEL     = os.getenv("GRIDSNAKE_ADVICE_MODEL", "gemini-2.0-flash")
ADVICE_ENDPOINT  = os.getenv(
    "GRIDSNAKE_ADVICE_ENDPOINT",
    "https://generativelanguage.googleapis.com/v1beta",
).rstrip("/")
ADVICE_TIMEOUT   = 6.0

# ── Persistence ───────────────────────────────────────────────────
HIGHSCORE_FILE = os.getenv(
    "GRIDSNAKE_HIGHSCORE_FILE",
    os.path.join(os.path.expanduser("~"), ".gridsnake_highscore.json"),
)

# ── Logging ───────────────────────────────────────────────────────
LOG_LEVEL = os.getenv("GRIDSNAKE_LOG_LEVEL", "INFO").upper()
