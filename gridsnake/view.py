"""
view.py — View layer.

Reads a WorldSnapshot and draws it. Owns no game state beyond a few
purely cosmetic animation counters.

  - Pre-rendered grid surface per theme (drawn once, blitted every frame)
  - Rounded snake segments with gradient tail fade, eyes on the head
  - Pulsing food, gold halo for bonus food
  - HUD with score, best, difficulty, boost badge and advice line
  - One overlay per screen state

Public API:
    GameView(screen)       — bind to a pygame surface
    view.render(snapshot)  — draw the current frame
"""

import math

import pygame

from .config import (
    WIDTH, PANEL_H, GAME_W, GAME_H,
    OFFSET_X, OFFSET_Y, CELL, COLS, ROWS,
    UI_BG, GOLD, WHITE, RED, CYAN, OBSTACLE, UI_COL, BLACK,
    THEMES, DIFFICULTIES,
)
from .model import WorldSnapshot
from .screens import ScreenState


# ─────────────────────── colour helpers ──────────────────────────
def _lerp_color(c1: tuple, c2: tuple, t: float) -> tuple:
    t = max(0.0, min(1.0, t))
    return tuple(int(c1[i] + (c2[i] - c1[i]) * t) for i in range(3))


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


def _brighten(color: tuple, factor: float) -> tuple:
    return tuple(min(255, int(c * factor)) for c in color[:3])


def _cell_center(p: tuple[int, int]) -> tuple[int, int]:
    return OFFSET_X + p[0] * CELL + CELL // 2, OFFSET_Y + p[1] * CELL + CELL // 2


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders the complete game frame from a WorldSnapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._init_fonts()
        self._grid_cache: dict[int, pygame.Surface] = {}
        self._disp_score: float = 0.0
        self._anim_tick: int = 0

    # ── Main entry ───────────────────────────────────────────────
    def render(self, snap: WorldSnapshot) -> None:
        self._anim_tick += 1
        self._disp_score += (snap.score - self._disp_score) * 0.25
        theme = THEMES[snap.theme]

        self.screen.fill(theme["bg"])
        self.screen.blit(self._grid_surface(snap.theme), (OFFSET_X, OFFSET_Y))

        if snap.screen not in (ScreenState.SPLASH, ScreenState.START):
            self._draw_obstacles(snap.obstacles)
            if snap.food is not None:
                self._draw_food(snap.food, theme)
            self._draw_snake(snap, theme)

        self._draw_panel(snap, theme)

        overlay = {
            ScreenState.SPLASH:        self._draw_splash_overlay,
            ScreenState.START:         self._draw_menu_overlay,
            ScreenState.LEVEL_SELECT:  self._draw_levels_overlay,
            ScreenState.SETTINGS:      self._draw_settings_overlay,
            ScreenState.CONFIRM_RESET: self._draw_confirm_overlay,
            ScreenState.COUNTDOWN:     self._draw_countdown_overlay,
            ScreenState.PAUSED:        self._draw_paused_overlay,
            ScreenState.GAME_OVER:     self._draw_game_over_overlay,
        }.get(snap.screen)
        if overlay is not None:
            overlay(snap)

        pygame.display.flip()

    # ── Static surfaces ───────────────────────────────────────────
    def _grid_surface(self, theme_idx: int) -> pygame.Surface:
        surf = self._grid_cache.get(theme_idx)
        if surf is None:
            color = THEMES[theme_idx]["grid"]
            surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
            for x in range(COLS + 1):
                pygame.draw.line(surf, (*color, 160), (x * CELL, 0), (x * CELL, GAME_H))
            for y in range(ROWS + 1):
                pygame.draw.line(surf, (*color, 160), (0, y * CELL), (GAME_W, y * CELL))
            self._grid_cache[theme_idx] = surf
        return surf

    # ── Board content ────────────────────────────────────────────
    def _draw_obstacles(self, obstacles: frozenset) -> None:
        for ox, oy in obstacles:
            rect = pygame.Rect(OFFSET_X + ox * CELL + 1, OFFSET_Y + oy * CELL + 1,
                               CELL - 2, CELL - 2)
            pygame.draw.rect(self.screen, OBSTACLE, rect, border_radius=2)
            pygame.draw.rect(self.screen, _brighten(OBSTACLE, 1.4), rect, 1, border_radius=2)

    def _draw_food(self, food, theme: dict) -> None:
        color = GOLD if food.bonus else theme["food"]
        pulse = 0.70 + 0.30 * math.sin(self._anim_tick * 0.10)
        r = max(2, int((CELL / 2 - 1) * pulse))
        x, y = _cell_center(food.position)

        glow_r = r + (14 if food.bonus else 8)
        glow = pygame.Surface((glow_r * 2, glow_r * 2), pygame.SRCALPHA)
        for gr in range(glow_r, r, -1):
            a = int(90 * (1 - (gr - r) / (glow_r - r)) * pulse)
            pygame.draw.circle(glow, _with_alpha(color, a), (glow_r, glow_r), gr)
        self.screen.blit(glow, (x - glow_r, y - glow_r))
        pygame.draw.circle(self.screen, color, (x, y), r)

    def _draw_snake(self, snap: WorldSnapshot, theme: dict) -> None:
        body = snap.snake
        if not body:
            return
        head_col = theme["head"] if snap.alive else RED
        length = len(body)

        for i, (sx, sy) in enumerate(body):
            # Colour fades from bright head to dim tail
            t = 1.0 - (i / max(length - 1, 1)) * 0.72
            color = head_col if i == 0 else _lerp_color(theme["body"], head_col, t * 0.5)
            shrink = 0 if i == 0 else min(3, 1 + i // max(1, length // 4))
            rect = pygame.Rect(
                OFFSET_X + sx * CELL + shrink,
                OFFSET_Y + sy * CELL + shrink,
                CELL - shrink * 2,
                CELL - shrink * 2,
            )
            radius = max(1, rect.width // 2 - 1) if i == 0 else max(1, rect.width // 4)
            pygame.draw.rect(self.screen, color, rect, border_radius=radius)

        self._draw_eyes(body[0], snap.direction)

    def _draw_eyes(self, head: tuple[int, int], direction) -> None:
        cx, cy = _cell_center(head)
        dx, dy = direction.x, direction.y
        px, py = -dy, dx  # perpendicular
        for sign in (+1, -1):
            ex = int(cx + dx * 4 + sign * px * 4)
            ey = int(cy + dy * 4 + sign * py * 4)
            pygame.draw.rect(self.screen, (220, 220, 220), (ex - 2, ey - 2, 4, 4))
            pygame.draw.rect(self.screen, BLACK,           (ex - 1, ey - 1, 2, 2))

    # ── HUD Panel ─────────────────────────────────────────────────
    def _draw_panel(self, snap: WorldSnapshot, theme: dict) -> None:
        pygame.draw.rect(self.screen, UI_BG, (0, 0, WIDTH, PANEL_H))
        pygame.draw.line(self.screen, theme["accent"], (0, PANEL_H - 1), (WIDTH, PANEL_H - 1), 1)

        self.screen.blit(self.font_small.render("SCORE", True, UI_COL), (16, 8))
        self.screen.blit(
            self.font_big.render(str(int(round(self._disp_score))), True, WHITE), (16, 26),
        )
        best = self.font_small.render(f"BEST {snap.high_score}", True, GOLD)
        self.screen.blit(best, best.get_rect(topright=(WIDTH - 16, 8)))

        diff = DIFFICULTIES[snap.difficulty]
        label = self.font_small.render(diff["label"], True, diff["color"])
        self.screen.blit(label, label.get_rect(topright=(WIDTH - 16, 30)))
        if snap.boosted:
            badge = self.font_tiny.render("[ BOOST ]", True, CYAN)
            self.screen.blit(badge, badge.get_rect(topright=(WIDTH - 16, 52)))

        advice = self.font_tiny.render(snap.advice, True, theme["accent"])
        self.screen.blit(advice, advice.get_rect(midleft=(170, PANEL_H // 2)))

    # ── Overlay infrastructure ────────────────────────────────────
    def _draw_overlay_base(self, alpha: int = 215) -> None:
        surf = pygame.Surface((GAME_W, GAME_H), pygame.SRCALPHA)
        surf.fill((5, 5, 12, alpha))
        self.screen.blit(surf, (OFFSET_X, OFFSET_Y))

    def _draw_animated_title(self, title: str, color: tuple,
                             cy: int, font: pygame.font.Font) -> int:
        pulse = 0.82 + 0.18 * math.sin(self._anim_tick * 0.05)
        surf = font.render(title, True, _brighten(color, pulse))
        gw, gh = surf.get_width() + 50, surf.get_height() + 16
        glow = pygame.Surface((gw, gh), pygame.SRCALPHA)
        glow.fill(_with_alpha(color, int(35 * pulse)))
        self.screen.blit(glow, (WIDTH // 2 - gw // 2, cy - 8))
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy + surf.get_height() // 2)))
        return cy + surf.get_height() + 14

    def _draw_text_line(self, text: str, color: tuple,
                        cy: int, font: pygame.font.Font) -> int:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))
        return cy + surf.get_height() + 8

    def _draw_button(self, label: str, color: tuple, cy: int, active: bool = False) -> int:
        btn_w = max(300, self.font_small.size(label)[0] + 40)
        btn_h = 36
        bx = WIDTH // 2 - btn_w // 2
        bg = pygame.Surface((btn_w, btn_h), pygame.SRCALPHA)
        bg.fill(_with_alpha(color, 90 if active else 22))
        self.screen.blit(bg, (bx, cy))
        pygame.draw.rect(self.screen, color, (bx, cy, btn_w, btn_h), 2, border_radius=4)
        txt = self.font_small.render(label, True, WHITE if active else color)
        self.screen.blit(txt, txt.get_rect(center=(WIDTH // 2, cy + btn_h // 2)))
        return cy + btn_h + 10

    # ── State overlays ────────────────────────────────────────────
    def _draw_splash_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base(150)
        cy = OFFSET_Y + GAME_H // 2 - 60
        cy = self._draw_animated_title("AG~3 OS", CYAN, cy, self.font_title)
        if (self._anim_tick // 30) % 2 == 0:
            self._draw_text_line("PRESS ANY KEY", UI_COL, cy + 10, self.font_med)

    def _draw_menu_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base()
        accent = THEMES[snap.theme]["accent"]
        cy = OFFSET_Y + 90
        cy = self._draw_animated_title("GRID SNAKE", accent, cy, self.font_title)
        cy = self._draw_text_line(f"HIGH SCORE  {snap.high_score}", GOLD, cy, self.font_med)
        cy += 30
        cy = self._draw_button("ENTER  LAUNCH MISSION", WHITE, cy, active=True)
        cy = self._draw_button("L  DIFFICULTY", UI_COL, cy)
        cy = self._draw_button("T  THEMES", UI_COL, cy)
        cy += 20
        self._draw_text_line("ARROWS/WASD MOVE   SPACE BOOST   P PAUSE   ESC MENU",
                             UI_COL, cy, self.font_tiny)

    def _draw_levels_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + 120
        cy = self._draw_animated_title("SELECT FREQUENCY", WHITE, cy, self.font_big)
        cy += 20
        for i, diff in enumerate(DIFFICULTIES):
            cy = self._draw_button(f"{i + 1}  {diff['label']}  ({diff['period']} ms)",
                                   diff["color"], cy, active=(i == snap.difficulty))
        cy += 20
        self._draw_text_line("BACKSPACE  BACK", UI_COL, cy, self.font_tiny)

    def _draw_settings_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + 120
        cy = self._draw_animated_title("AESTHETIC", WHITE, cy, self.font_big)
        cy += 20
        for i, theme in enumerate(THEMES):
            cy = self._draw_button(f"{i + 1}  {theme['name'].upper()}",
                                   theme["accent"], cy, active=(i == snap.theme))
        cy += 20
        cy = self._draw_text_line("X  RESET HIGH SCORE", RED, cy, self.font_tiny)
        self._draw_text_line("BACKSPACE  BACK", UI_COL, cy, self.font_tiny)

    def _draw_confirm_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base(235)
        cy = OFFSET_Y + GAME_H // 2 - 70
        cy = self._draw_animated_title("ERASE RECORD?", RED, cy, self.font_big)
        cy = self._draw_text_line(f"CURRENT BEST {snap.high_score}", GOLD, cy, self.font_med)
        self._draw_text_line("Y  CONFIRM      N  KEEP", UI_COL, cy + 10, self.font_small)

    def _draw_countdown_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base(120)
        digit = self.font_huge.render(str(snap.countdown), True, WHITE)
        self.screen.blit(digit, digit.get_rect(center=(WIDTH // 2, OFFSET_Y + GAME_H // 2)))

    def _draw_paused_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + GAME_H // 2 - 36
        cy = self._draw_animated_title("PAUSED", GOLD, cy, self.font_title)
        self._draw_text_line("PRESS  P  TO RESUME", UI_COL, cy + 6, self.font_med)

    def _draw_game_over_overlay(self, snap: WorldSnapshot) -> None:
        self._draw_overlay_base()
        cy = OFFSET_Y + 60
        cy = self._draw_animated_title("SYSTEM FAILURE", RED, cy, self.font_title)
        if snap.death is not None:
            cy = self._draw_text_line(f"CAUSE: {snap.death.cause.value.upper()}",
                                      UI_COL, cy, self.font_small)
        cy = self._draw_text_line(f"SCORE {snap.score}", WHITE, cy + 6, self.font_big)
        if snap.new_record:
            cy = self._draw_text_line("★  NEW HIGH SCORE  ★", GOLD, cy, self.font_small)
        else:
            cy = self._draw_text_line(f"BEST: {snap.high_score}", UI_COL, cy, self.font_tiny)
        cy += 10

        if snap.stats is not None:
            stats = [
                ("UPTIME",     f"{snap.stats.duration_seconds}s"),
                ("GROWTH",     f"+{snap.stats.growth}"),
                ("EFFICIENCY", f"{snap.stats.efficiency}%"),
            ]
            col_w = 160
            sx = WIDTH // 2 - col_w * len(stats) // 2
            for i, (name, value) in enumerate(stats):
                x = sx + i * col_w + col_w // 2
                n = self.font_tiny.render(name, True, UI_COL)
                v = self.font_big.render(value, True, WHITE)
                self.screen.blit(n, n.get_rect(center=(x, cy)))
                self.screen.blit(v, v.get_rect(center=(x, cy + 26)))
            cy += 60

        cy = self._draw_button("ENTER / R  REBOOT", WHITE, cy, active=True)
        cy = self._draw_button("M  LOGOFF", UI_COL, cy)
        self._draw_text_line("L  FREQUENCY      T  AESTHETIC", UI_COL, cy + 4, self.font_tiny)

    # ── Font init ─────────────────────────────────────────────────
    def _init_fonts(self) -> None:
        specs = [
            ("font_huge",  "courier", 150, True),
            ("font_title", "courier", 42,  True),
            ("font_big",   "courier", 26,  True),
            ("font_med",   "courier", 17,  False),
            ("font_small", "courier", 13,  True),
            ("font_tiny",  "courier", 11,  False),
        ]
        if not pygame.font.get_init():
            pygame.font.init()
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
