"""Point-sprite rendering of boid positions."""

import numpy as np
from OpenGL.GL import *

from boidsim.config import boids as config


class FlockRenderer:
    """Draws one point per boid from a positions array; knows nothing about the simulation."""

    def __init__(self, point_size: float = None):
        # Roughly the on-screen size of a sphere of BOIDS["radius"] at the default zoom
        self.point_size = point_size or max(2.0, config.BOIDS["radius"] * 400.0)
        self.color = config.COLORS["boid"]

    def draw(self, positions: np.ndarray):
        if len(positions) == 0:
            return
        vertices = np.ascontiguousarray(positions, dtype=np.float32)

        glPointSize(self.point_size)
        glColor3f(*self.color)
        glEnableClientState(GL_VERTEX_ARRAY)
        glVertexPointer(3, GL_FLOAT, 0, vertices)
        glDrawArrays(GL_POINTS, 0, len(vertices))
        glDisableClientState(GL_VERTEX_ARRAY)
