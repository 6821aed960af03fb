"""Grid raycasting, map checks, XPM reading and pygame-backed drawing."""

__version__ = "0.1.0"