"""Configuration for the 3D boids flocking simulation."""

WINDOW = {
    "width": 1200,
    "height": 800,
    "title": "Boids"
}

CAMERA = {
    "fov": 45.0,
    "near_clip": 0.01,
    "far_clip": 100.0,
    # Spherical coordinates of the default eye point (4, 5, 5)
    "initial_radius": 8.124,
    "initial_theta": 51.34,
    "initial_phi": 37.99,
    "min_radius": 1.5,
    "max_radius": 30.0,
    "min_phi": -89.0,
    "max_phi": 89.0,
    "keyboard_rotate_speed": 60.0,
    "keyboard_zoom_speed": 4.0,
    "mouse_sensitivity": 0.3
}

GRID = {
    "base_size": 1.0,          # Half-width of the spawn cube
    "color": (0.2, 0.2, 0.25),
    "floor_y": -3.0,
    "floor_size": 6.0,
    "floor_color": (0.25, 0.25, 0.25)
}

BOIDS = {
    "count": 1024,
    "radius": 0.01,            # Render size only
    "parallel": True,          # prange kernels for the interaction pass
    "default_preset": "git",

    # Confinement
    "boundary_dist_sq": 1.0,
    "boundary_force": 0.001,
}

COLORS = {
    "background": (0.0, 0.0, 0.0, 1.0),
    "boid": (0.75, 0.75, 0.75),
    "text": (0.9, 0.9, 0.9)
}
