# client/main.py
import os
import sys
import pygame

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from shared.constants import APP_TITLE, WIDTH, HEIGHT, FPS
from shared.game_config import get_variant
from client.assets import AssetStore
from client.screens import GameScreen


class App:
    def __init__(self):
        # Run the touch build as:
        #   GOLF_VARIANT=mobile python client/main.py
        self.cfg = get_variant(os.getenv("GOLF_VARIANT", "desktop"))
        seed = os.getenv("GOLF_SEED")
        self.seed = int(seed) if seed else None

        pygame.init()
        pygame.display.set_caption(f"{APP_TITLE} ({self.cfg.name.capitalize()})")
        if self.cfg.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        self.clock = pygame.time.Clock()

        self.assets = AssetStore().load()

        w, h = self.bounds()
        print(f"[game] {self.cfg.name} variant, playfield {w}x{h}")

        self.screens = {
            "game": GameScreen(self),
        }

        self.current = None
        self.running = True
        self.change_screen("game")

    def bounds(self):
        # queried fresh: a fullscreen surface may not be the size we asked for
        return self.screen.get_size()

    def change_screen(self, name, **kwargs):
        if self.current:
            self.current.on_exit()
        self.current = self.screens[name]
        self.current.on_enter(**kwargs)

    def handle_global_keys(self, event):
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            self.running = False

    def run(self):
        try:
            while self.running:
                dt = self.clock.tick(FPS) / 1000.0

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    self.handle_global_keys(event)
                    self.current.handle_event(event)

                self.current.update(dt)

                self.current.draw(self.screen)
                pygame.display.flip()

        finally:
            pygame.quit()


def main():
    App().run()


if __name__ == "__main__":
    main()
