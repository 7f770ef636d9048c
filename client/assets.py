# client/assets.py
import os
from pathlib import Path
from typing import Dict, Optional

import pygame

DEFAULT_ROOT = Path(__file__).resolve().parent.parent / "assets"

TEXTURES = {
    "background": "bg.png",
    "ball": "ball.png",
    "ball_shadow": "ball_shadow.png",
    "hole": "hole.png",
    "arrow": "point.png",
    "settings": "settings.png",
    "power_bg": "powermeter_bg.png",
    "power_fg": "powermeter_fg.png",
    "power_overlay": "powermeter_overlay.png",
}
FONT_FILE = "rodin.otf"


class AssetStore:
    """
    Textures and fonts, each optional. Anything that fails to load stays
    None and the renderer draws primitives instead.
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root or os.getenv("GOLF_ASSETS", DEFAULT_ROOT))
        self.textures: Dict[str, Optional[pygame.Surface]] = {k: None for k in TEXTURES}
        self.font_path: Optional[Path] = None
        self._fonts: Dict[int, pygame.font.Font] = {}

    def load(self) -> "AssetStore":
        failed = []
        for key, fname in TEXTURES.items():
            path = self.root / "gfx" / fname
            try:
                self.textures[key] = pygame.image.load(str(path)).convert_alpha()
            except (pygame.error, FileNotFoundError) as e:
                self.textures[key] = None
                failed.append(key)
                print(f"[assets] {path} not loaded: {e}")

        if failed:
            print("[assets] some assets failed to load, using drawn shapes as fallback")

        fp = self.root / "font" / FONT_FILE
        if fp.is_file():
            self.font_path = fp
        else:
            print(f"[assets] {fp} missing, using default font")
        return self

    def get(self, key: str) -> Optional[pygame.Surface]:
        return self.textures.get(key)

    def power_meter_ready(self) -> bool:
        return all(self.textures.get(k) is not None for k in ("power_bg", "power_fg", "power_overlay"))

    def font(self, size: int) -> pygame.font.Font:
        f = self._fonts.get(size)
        if f is None:
            if self.font_path is not None:
                try:
                    f = pygame.font.Font(str(self.font_path), size)
                except (pygame.error, OSError) as e:
                    print(f"[assets] {self.font_path} not usable: {e}, using default font")
                    self.font_path = None
            if f is None:
                f = pygame.font.SysFont(None, size)
            self._fonts[size] = f
        return f
