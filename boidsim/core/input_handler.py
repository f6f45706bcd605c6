"""Input handling for camera control and preset selection."""

import pygame
from pygame.locals import *

from boidsim.config import boids as config
from .camera import Camera

PRESET_KEYS = (K_1, K_2, K_3, K_4, K_5, K_6)


class InputHandler:
    """
    Translates pygame events into camera moves and viewer commands.

    Preset requests are left in `preset_request` (an index, or "next")
    for the application to consume once per frame.
    """

    def __init__(self, camera: Camera):
        self.camera = camera
        self.mouse_dragging = False
        self.last_mouse_pos = (0, 0)
        self.preset_request = None
        self.toggle_hud_scale = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        if event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
            if event.key in PRESET_KEYS:
                self.preset_request = PRESET_KEYS.index(event.key)
            elif event.key == K_TAB:
                self.preset_request = "next"
            elif event.key == K_SLASH:
                self.toggle_hud_scale = True
        elif event.type == MOUSEBUTTONDOWN and event.button == 1:
            self.mouse_dragging = True
            self.last_mouse_pos = pygame.mouse.get_pos()
        elif event.type == MOUSEBUTTONUP and event.button == 1:
            self.mouse_dragging = False
        elif event.type == MOUSEWHEEL:
            self.camera.zoom(-event.y * config.CAMERA["keyboard_zoom_speed"] * 0.1)

        return True

    def handle_continuous_input(self, dt: float):
        """Held keys and mouse drag (called each frame)."""
        keys = pygame.key.get_pressed()
        rot = config.CAMERA["keyboard_rotate_speed"] * dt
        zoom = config.CAMERA["keyboard_zoom_speed"] * dt

        self.camera.rotate((keys[K_d] - keys[K_a]) * rot, (keys[K_w] - keys[K_s]) * rot)
        self.camera.zoom((keys[K_e] - keys[K_q]) * zoom)

        if self.mouse_dragging:
            x, y = pygame.mouse.get_pos()
            sensitivity = config.CAMERA["mouse_sensitivity"]
            self.camera.rotate((x - self.last_mouse_pos[0]) * sensitivity,
                               -(y - self.last_mouse_pos[1]) * sensitivity)
            self.last_mouse_pos = (x, y)
