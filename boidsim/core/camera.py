"""Orbit camera looking at the origin."""

import math
import numpy as np
from OpenGL.GL import *
from OpenGL.GLU import *

from boidsim.config import boids as config


class Camera:
    """Orbits the flock on a sphere; angles in degrees."""

    def __init__(self):
        self.radius = config.CAMERA["initial_radius"]
        self.theta = config.CAMERA["initial_theta"]
        self.phi = config.CAMERA["initial_phi"]

    def get_position(self) -> np.ndarray:
        theta_rad = math.radians(self.theta)
        phi_rad = math.radians(self.phi)
        return self.radius * np.array([
            math.cos(phi_rad) * math.cos(theta_rad),
            math.sin(phi_rad),
            math.cos(phi_rad) * math.sin(theta_rad),
        ])

    def rotate(self, d_theta: float, d_phi: float):
        self.theta = (self.theta + d_theta) % 360
        self.phi = min(config.CAMERA["max_phi"], max(config.CAMERA["min_phi"], self.phi + d_phi))

    def zoom(self, delta: float):
        self.radius = min(config.CAMERA["max_radius"], max(config.CAMERA["min_radius"], self.radius + delta))

    def apply(self):
        """Load the view transform into the modelview matrix."""
        eye = self.get_position()
        glLoadIdentity()
        gluLookAt(eye[0], eye[1], eye[2], 0.0, 0.0, 0.0, 0.0, 1.0, 0.0)
