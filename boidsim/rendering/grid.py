"""Spawn-region cube and floor plane for spatial reference."""

from OpenGL.GL import *

from boidsim.config import boids as config


class Grid:
    """Draws the [-1, 1]^3 wireframe cube and the floor below the flock."""

    def __init__(self):
        self.half_size = config.GRID["base_size"]
        self.color = config.GRID["color"]
        self.floor_y = config.GRID["floor_y"]
        self.floor_half = config.GRID["floor_size"] / 2
        self.floor_color = config.GRID["floor_color"]

    def draw(self):
        e = self.half_size
        corners = [(x, y, z) for x in (-e, e) for y in (-e, e) for z in (-e, e)]

        glBegin(GL_LINES)
        glColor3f(*self.color)
        for a in range(8):
            for b in range(a + 1, 8):
                # Cube edges join corners that differ in exactly one axis
                if sum(ca != cb for ca, cb in zip(corners[a], corners[b])) == 1:
                    glVertex3f(*corners[a])
                    glVertex3f(*corners[b])
        glEnd()

        f = self.floor_half
        glBegin(GL_QUADS)
        glColor3f(*self.floor_color)
        glVertex3f(-f, self.floor_y, -f)
        glVertex3f(f, self.floor_y, -f)
        glVertex3f(f, self.floor_y, f)
        glVertex3f(-f, self.floor_y, f)
        glEnd()
