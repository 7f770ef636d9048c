import random
from typing import Optional

import pygame

from shared.constants import WHITE, BLACK
from client.game_world import GolfWorld
from client.renderer import Renderer, FONT_SIZE_SM
from client.ui import Button, play_again_rect


class Screen:
    name = "base"
    def __init__(self, app): self.app = app
    def on_enter(self, **kwargs): pass
    def on_exit(self): pass
    def handle_event(self, event): pass
    def update(self, dt): pass
    def draw(self, surface): pass


def pointer_pos(event, surface_size):
    """Surface-pixel position of a mouse or touch event, or None."""
    if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION):
        return event.pos
    if event.type in (pygame.FINGERDOWN, pygame.FINGERUP, pygame.FINGERMOTION):
        # touch coordinates are normalized to [0, 1]
        w, h = surface_size
        return event.x * w, event.y * h
    return None


def is_press(event) -> bool:
    if event.type == pygame.MOUSEBUTTONDOWN:
        return event.button == 1 and not getattr(event, "touch", False)
    return event.type == pygame.FINGERDOWN


def is_release(event) -> bool:
    if event.type == pygame.MOUSEBUTTONUP:
        return event.button == 1 and not getattr(event, "touch", False)
    return event.type == pygame.FINGERUP


def is_motion(event) -> bool:
    if event.type == pygame.MOUSEMOTION:
        return not getattr(event, "touch", False)
    return event.type == pygame.FINGERMOTION


# -------------------- Game --------------------
class GameScreen(Screen):
    """
    Adapts pygame mouse/touch events to the world's pointer events.
    While the round is won, presses and releases go to the play-again
    button instead of the world.
    """
    name = "game"

    def __init__(self, app):
        super().__init__(app)
        self.world: Optional[GolfWorld] = None
        self.renderer = Renderer(app.assets)
        self.play_again = Button(play_again_rect(*app.bounds()), "Play Again?",
                                 app.assets.font(FONT_SIZE_SM), BLACK, WHITE)
        self.pointer = (-1, -1)

    def on_enter(self, **kwargs):
        rng = kwargs.get("rng") or random.Random(self.app.seed)
        self.world = GolfWorld(self.app.bounds, self.app.cfg, rng)

    def handle_event(self, event):
        pos = pointer_pos(event, self.app.bounds())
        if pos is not None:
            self.pointer = pos

        if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
            self.world.reset()
            return

        if self.world.won:
            self.play_again.rect = play_again_rect(*self.app.bounds())
            if is_press(event):
                self.play_again.press(pos)
            elif is_release(event) and self.play_again.release(pos):
                self.world.reset()
            return

        if is_press(event):
            self.world.on_pointer_down(pos)
        elif is_motion(event):
            self.world.on_pointer_move(pos)
        elif is_release(event):
            self.world.on_pointer_up(pos)

    def update(self, dt):
        if self.world.tick():
            self.play_again.cancel()

    def draw(self, surface):
        self.renderer.draw(surface, self.world.snapshot(), self.play_again, self.pointer)
