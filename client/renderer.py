# client/renderer.py
import math
from typing import Any, Dict, Optional, Tuple

import pygame
from pygame.math import Vector2 as Vec2

from shared.constants import WHITE, BLACK, GRAY, DARK_BLUE, DARK_GRAY, GREEN, GOLD, RED
from shared.geometry import safe_normalize
from client.assets import AssetStore
from client.ui import Button

FONT_SIZE_LG = 64
FONT_SIZE_SM = 32
SHADOW_OFFSET = 3
BALL_SHADOW_OFFSET = 2
ARROW_SCALE = 1.5
POWER_METER_SCALE = 2.0


def centered(pos, tex: pygame.Surface) -> Tuple[int, int]:
    return int(pos[0] - tex.get_width() / 2), int(pos[1] - tex.get_height() / 2)


def draw_shadow_text(surface, font, text, pos, outline, main):
    x, y = pos
    surface.blit(font.render(text, True, outline), (x + SHADOW_OFFSET, y + SHADOW_OFFSET))
    surface.blit(font.render(text, True, main), (x, y))


def win_message(strokes: int) -> Tuple[str, Tuple[int, int, int]]:
    if strokes == 1:
        return f"HOLE-IN-ONE! ({strokes} STROKE)", GOLD
    return f"YOU SUNK IT IN {strokes} STROKES!", DARK_BLUE


class Renderer:
    """Draws a world snapshot. Never touches the simulation state."""

    def __init__(self, assets: AssetStore):
        self.assets = assets

    def draw(self, surface: pygame.Surface, snap: Dict[str, Any],
             play_again: Optional[Button] = None, mouse_pos=(-1, -1)):
        self._background(surface)
        self._hole(surface, snap)
        if not snap["won"]:
            self._ball(surface, snap)
        self._settings_icon(surface)

        if snap["dragging"]:
            self._arrow(surface, snap)
            self._power_meter(surface, snap["power"] or 0.0)

        self._strokes(surface, snap["strokes"])

        if snap["won"]:
            self._win(surface, snap["strokes"], play_again, mouse_pos)

    # ---------------- Field ----------------
    def _background(self, surface):
        bg = self.assets.get("background")
        if bg is None:
            surface.fill(GREEN)
        else:
            surface.blit(pygame.transform.smoothscale(bg, surface.get_size()), (0, 0))

    def _hole(self, surface, snap):
        tex = self.assets.get("hole")
        if tex is None:
            pygame.draw.circle(surface, DARK_GRAY, (int(snap["hole"][0]), int(snap["hole"][1])), int(snap["hole_r"]))
        else:
            surface.blit(tex, centered(snap["hole"], tex))

    def _ball(self, surface, snap):
        pos = snap["ball"]
        shadow = self.assets.get("ball_shadow")
        if shadow is not None:
            x, y = centered(pos, shadow)
            surface.blit(shadow, (x + BALL_SHADOW_OFFSET, y + BALL_SHADOW_OFFSET))

        tex = self.assets.get("ball")
        if tex is None:
            pygame.draw.circle(surface, WHITE, (int(pos[0]), int(pos[1])), int(snap["ball_r"]))
        else:
            surface.blit(tex, centered(pos, tex))

    def _settings_icon(self, surface):
        tex = self.assets.get("settings")
        if tex is None:
            pygame.draw.rect(surface, GRAY, (20, 20, 32, 32))
        else:
            surface.blit(tex, (20, 20))

    # ---------------- Aiming ----------------
    def _arrow(self, surface, snap):
        tex = self.assets.get("arrow")
        if tex is None or snap["anchor"] is None:
            return
        shot = Vec2(snap["anchor"]) - Vec2(snap["pointer"])
        drag = shot.length()
        # sprite points up; +90 turns it onto the shot direction
        angle = math.degrees(math.atan2(shot.y, shot.x)) + 90.0
        offset = min(drag * 0.1 + 5.0, 40.0)
        at = Vec2(snap["ball"]) + safe_normalize(shot) * offset

        scaled = pygame.transform.smoothscale(
            tex, (int(tex.get_width() * ARROW_SCALE), int(tex.get_height() * ARROW_SCALE)))
        # pygame rotates counter-clockwise in screen space
        rotated = pygame.transform.rotate(scaled, -angle)
        surface.blit(rotated, rotated.get_rect(center=(int(at.x), int(at.y))))

    def _power_meter(self, surface, power: float):
        h = surface.get_height()
        if self.assets.power_meter_ready():
            bg = self.assets.get("power_bg")
            fg = self.assets.get("power_fg")
            ov = self.assets.get("power_overlay")
            s = POWER_METER_SCALE
            meter_h = int(bg.get_height() * s)
            x, y = 20, h - meter_h - 20

            surface.blit(pygame.transform.scale(bg, (int(bg.get_width() * s), meter_h)), (x, y))

            clipped = int(fg.get_height() * power)
            if clipped > 0:
                part = fg.subsurface((0, fg.get_height() - clipped, fg.get_width(), clipped))
                part = pygame.transform.scale(part, (int(fg.get_width() * s), int(clipped * s)))
                surface.blit(part, (x, y + meter_h - part.get_height()))

            surface.blit(pygame.transform.scale(ov, (int(ov.get_width() * s), int(ov.get_height() * s))), (x, y))
        else:
            meter_w, meter_h = 20 * 2, 150 * 2
            x, y = 20, h - 20 - meter_h
            fill = int(meter_h * power)
            pygame.draw.rect(surface, GRAY, (x, y, meter_w, meter_h))
            pygame.draw.rect(surface, RED, (x, y + meter_h - fill, meter_w, fill))
            pygame.draw.rect(surface, BLACK, (x, y, meter_w, meter_h), 1)

    # ---------------- HUD ----------------
    def _strokes(self, surface, strokes: int):
        font = self.assets.font(FONT_SIZE_SM)
        text = f"STROKES: {strokes}"
        tw, _ = font.size(text)
        pos = (surface.get_width() - tw - 20 - SHADOW_OFFSET, 20)
        draw_shadow_text(surface, font, text, pos, DARK_BLUE, WHITE)

    def _win(self, surface, strokes: int, play_again: Optional[Button], mouse_pos):
        font = self.assets.font(FONT_SIZE_LG)
        text, outline = win_message(strokes)
        tw, th = font.size(text)
        w, h = surface.get_size()
        pos = (int(w / 2 - tw / 2 - SHADOW_OFFSET / 2), int(h / 2 - th / 2))
        draw_shadow_text(surface, font, text, pos, outline, WHITE)

        if play_again is not None:
            play_again.draw(surface, mouse_pos)
