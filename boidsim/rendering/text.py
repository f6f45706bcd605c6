"""HUD text overlay."""

import pygame
from OpenGL.GL import *

from boidsim.config import boids as config


class TextRenderer:
    """Renders pygame font surfaces as OpenGL pixel blocks in screen space."""

    def __init__(self, font_name: str = "monospace", font_size: int = 18):
        pygame.font.init()
        self.font_name = font_name
        self.font_size = font_size
        self._fonts = {}
        self.color = tuple(int(c * 255) for c in config.COLORS["text"])

    def _font(self, scale: int) -> pygame.font.Font:
        if scale not in self._fonts:
            self._fonts[scale] = pygame.font.SysFont(self.font_name, self.font_size * scale)
        return self._fonts[scale]

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple, scale: int = 1):
        """
        Draw text with its top-left corner at (x, y), measured from the top-left of the screen.

        Args:
            text: The string to render
            x, y: Screen position in pixels
            screen_size: (width, height) of the screen
            scale: Integer font scale (HUD scale toggle)
        """
        surface = self._font(scale).render(text, True, self.color)
        data = pygame.image.tostring(surface, "RGBA", True)
        w, h = surface.get_size()

        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glDisable(GL_BLEND)
        glEnable(GL_DEPTH_TEST)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
