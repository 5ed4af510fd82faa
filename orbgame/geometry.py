"""Vertex formats and procedural sphere meshes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar

PI = 3.14159265

_FLOAT_SIZE = 4


def _load_gl() -> Any:
    from pyglet import gl

    return gl


def _enable_attributes(gl: Any, attributes: tuple[tuple[int, int, int], ...], stride: int) -> None:
    for index, size, offset in attributes:
        gl.glVertexAttribPointer(index, size, gl.GL_FLOAT, gl.GL_FALSE, stride, offset)
        gl.glEnableVertexAttribArray(index)


@dataclass
class Vertex3:
    """A position-only vertex."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # (attribute index, component count, byte offset)
    ATTRIBUTES: ClassVar[tuple[tuple[int, int, int], ...]] = ((0, 3, 0),)
    STRIDE: ClassVar[int] = 3 * _FLOAT_SIZE

    def set_attrib_pointer(self) -> None:
        """Describe this vertex layout to the bound vertex array."""
        _enable_attributes(_load_gl(), self.ATTRIBUTES, self.STRIDE)


@dataclass
class Vertex3T2:
    """A vertex with a position and a texture coordinate."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    u: float = 0.0
    v: float = 0.0

    ATTRIBUTES: ClassVar[tuple[tuple[int, int, int], ...]] = (
        (0, 3, 0),
        (1, 2, 3 * _FLOAT_SIZE),
    )
    STRIDE: ClassVar[int] = 5 * _FLOAT_SIZE

    def set_attrib_pointer(self) -> None:
        """Describe this vertex layout to the bound vertex array."""
        _enable_attributes(_load_gl(), self.ATTRIBUTES, self.STRIDE)


def create_sphere(
    radius: float,
    phi: float = 0.0,
    theta: float = 0.0,
    sector_count: int = 36,
    stack_count: int = 18,
) -> tuple[list[Vertex3T2], list[int]]:
    """Build a UV sphere, rotated by ``phi`` about Z and then ``theta`` about X.

    Returns the vertices and the triangle indices into them.
    """
    cos_phi, sin_phi = math.cos(phi), math.sin(phi)
    cos_theta, sin_theta = math.cos(theta), math.sin(theta)

    vertices: list[Vertex3T2] = []
    for i in range(stack_count + 1):
        stack_angle = PI / 2 - i * (PI / stack_count)
        xy = math.cos(stack_angle)
        z = math.sin(stack_angle)
        for j in range(sector_count + 1):
            sector_angle = j * (2 * PI / sector_count)
            x = radius * xy * math.cos(sector_angle)
            y = radius * xy * math.sin(sector_angle)
            pz = radius * z
            x1 = x * cos_phi - y * sin_phi
            y1 = x * sin_phi + y * cos_phi
            vertices.append(
                Vertex3T2(
                    x1,
                    y1 * cos_theta - pz * sin_theta,
                    y1 * sin_theta + pz * cos_theta,
                    j / sector_count,
                    i / stack_count,
                )
            )

    indices: list[int] = []
    row = sector_count + 1
    for i in range(stack_count):
        for j in range(sector_count):
            first = i * row + j
            second = first + row
            indices.extend((first, second, first + 1, first + 1, second, second + 1))

    return vertices, indices