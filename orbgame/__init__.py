"""Textured sphere viewer with a first-person camera, drawn with OpenGL."""

__version__ = "0.1.0"