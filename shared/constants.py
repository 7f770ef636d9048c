# shared/constants.py

APP_TITLE = "Mini Golf"
WIDTH, HEIGHT = 800, 600
FPS = 60

WHITE = (245, 245, 245)
BLACK = (20, 20, 20)
GRAY = (120, 120, 120)
DARK_GRAY = (80, 80, 80)
DARK = (30, 30, 30)
DARK_BLUE = (0, 82, 172)
GREEN = (0, 228, 48)
GOLD = (255, 200, 0)
RED = (230, 41, 55)
YELLOW = (255, 255, 0)
