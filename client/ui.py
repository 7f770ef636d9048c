import pygame


class Button:
    """Rect button: a left press inside arms it, a left release inside fires."""

    def __init__(self, rect, text, font, bg, fg, hover_alpha=150, idle_alpha=50):
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.bg = bg
        self.fg = fg
        self.idle_alpha = idle_alpha
        self.hover_alpha = hover_alpha
        self.armed = False

    def hovered(self, mouse_pos) -> bool:
        return self.rect.collidepoint(mouse_pos)

    def alpha_for(self, mouse_pos) -> int:
        return self.hover_alpha if self.hovered(mouse_pos) else self.idle_alpha

    def draw(self, surface, mouse_pos=(-1, -1)):
        overlay = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        overlay.fill((*self.bg[:3], self.alpha_for(mouse_pos)))
        surface.blit(overlay, self.rect.topleft)
        txt = self.font.render(self.text, True, self.fg)
        surface.blit(txt, txt.get_rect(center=self.rect.center))

    def press(self, pos) -> bool:
        self.armed = self.rect.collidepoint(pos)
        return self.armed

    def release(self, pos) -> bool:
        fired = self.armed and self.rect.collidepoint(pos)
        self.armed = False
        return fired

    def cancel(self):
        self.armed = False


def play_again_rect(width, height, w=200, h=50):
    return pygame.Rect(int(width / 2 - w / 2), int(height / 2 + 100), w, h)
