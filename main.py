"""
3D Boids Simulation
===================

A real-time flocking simulation of 1024 boids with an orbit camera.

Controls:
    - 1-6: Select flocking preset
    - TAB: Next preset
    - /: Toggle HUD scale
    - W/S: Rotate camera up/down
    - A/D: Rotate camera left/right
    - Q/E: Zoom in/out
    - Mouse drag: Rotate camera
    - Mouse wheel: Zoom
    - ESC: Quit
"""

from boidsim.core import Application


def main():
    app = Application()
    app.run()


if __name__ == "__main__":
    main()
