"""Viewer application: drives the flock tick loop and draws it."""

import pygame
from pygame.locals import *
from OpenGL.GL import *
from OpenGL.GLU import *

from boidsim.boids import Flock
from boidsim.config import boids as config
from boidsim.rendering import FlockRenderer, Grid, TextRenderer
from boidsim.tools.presets import PRESETS, get_preset_config, next_preset_key, resolve_preset_key
from .camera import Camera
from .input_handler import InputHandler


class Application:
    """Owns the window, the flock and the active preset selection."""

    def __init__(self, num_boids: int = config.BOIDS["count"], seed: int = None):
        pygame.init()
        pygame.display.set_mode(
            (config.WINDOW["width"], config.WINDOW["height"]),
            DOUBLEBUF | OPENGL
        )
        pygame.display.set_caption(config.WINDOW["title"])

        self.camera = Camera()
        self.input_handler = InputHandler(self.camera)

        self.grid = Grid()
        self.flock_renderer = FlockRenderer()
        self.text_renderer = TextRenderer()
        self.hud_scale = 1

        self.preset_key = resolve_preset_key(config.BOIDS["default_preset"])
        self.flock = Flock(
            num_boids=num_boids,
            params=get_preset_config(self.preset_key),
            seed=seed
        )

        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0

        self._setup_gl()

    def _setup_gl(self):
        glClearColor(*config.COLORS["background"])
        glEnable(GL_DEPTH_TEST)

        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        gluPerspective(
            config.CAMERA["fov"],
            config.WINDOW["width"] / config.WINDOW["height"],
            config.CAMERA["near_clip"],
            config.CAMERA["far_clip"]
        )
        glMatrixMode(GL_MODELVIEW)

    def _handle_events(self):
        for event in pygame.event.get():
            if not self.input_handler.handle_event(event):
                self.running = False

    def _select_preset(self, request):
        keys = list(PRESETS)
        if request == "next":
            key = next_preset_key(self.preset_key)
        elif request < len(keys):
            key = keys[request]
        else:
            return
        self.preset_key = key
        # Applied by the flock at the next tick boundary
        self.flock.replace_parameters(get_preset_config(key))

    def _update(self, dt: float):
        self.input_handler.handle_continuous_input(dt)

        if self.input_handler.preset_request is not None:
            self._select_preset(self.input_handler.preset_request)
            self.input_handler.preset_request = None
        if self.input_handler.toggle_hud_scale:
            self.hud_scale = 2 if self.hud_scale == 1 else 1
            self.input_handler.toggle_hud_scale = False

        self.flock.update()

    def _render(self):
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)
        self.camera.apply()

        self.grid.draw()
        self.flock_renderer.draw(self.flock.positions)

        # Preset panel
        screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        preset = PRESETS[self.preset_key]
        lines = [
            f"Configuration: {preset['name']}  [1-6 / TAB]",
            "Forces",
            f" cohesion: {preset['coh_force']}",
            f" separation: {preset['sep_force']}",
            f" alignment: {preset['ali_force']}",
            f"Boids: {self.flock.num_boids}  |  Tick: {self.flock.tick}  |  FPS: {self.fps:.0f}",
        ]
        for row, line in enumerate(lines):
            self.text_renderer.draw_text(line, 10, 10 + row * 22 * self.hud_scale, screen_size, self.hud_scale)

        pygame.display.flip()

    def run(self):
        """Main application loop; one simulation tick per frame."""
        while self.running:
            dt = self.clock.tick() / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(min(dt, 0.05))
            self._render()

        pygame.quit()
