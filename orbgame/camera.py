"""A fly-through camera driven by Euler angles, with projection and view matrices.

Matrices are returned as 4x4 numpy arrays in mathematical (row, column) order,
acting on column vectors: ``clip = projection @ view @ point``.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np

YAW = -90.0
PITCH = 0.0
SPEED = 2.5
SENSITIVITY = 0.1
ZOOM = 45.0

_PITCH_LIMIT = 89.0
_MIN_ZOOM = 1.0
_MAX_ZOOM = 45.0
_NEAR_PLANE = 0.1
_FAR_PLANE = 1000.0


def _normalize(vector: np.ndarray) -> np.ndarray:
    return vector / np.linalg.norm(vector)


def perspective(fovy: float, aspect: float, near: float, far: float) -> np.ndarray:
    """Right-handed perspective projection mapping depth to [-1, 1]."""
    tan_half = math.tan(fovy / 2.0)
    matrix = np.zeros((4, 4))
    matrix[0, 0] = 1.0 / (aspect * tan_half)
    matrix[1, 1] = 1.0 / tan_half
    matrix[2, 2] = -(far + near) / (far - near)
    matrix[2, 3] = -(2.0 * far * near) / (far - near)
    matrix[3, 2] = -1.0
    return matrix


def look_at(eye: Sequence[float], center: Sequence[float], up: Sequence[float]) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = np.asarray(eye, dtype=float)
    forward = _normalize(np.asarray(center, dtype=float) - eye)
    side = _normalize(np.cross(forward, np.asarray(up, dtype=float)))
    upward = np.cross(side, forward)
    matrix = np.identity(4)
    matrix[0, :3] = side
    matrix[1, :3] = upward
    matrix[2, :3] = -forward
    matrix[0, 3] = -np.dot(side, eye)
    matrix[1, 3] = -np.dot(upward, eye)
    matrix[2, 3] = np.dot(forward, eye)
    return matrix


class Camera:
    """Position and orientation of the viewer in world space."""

    def __init__(
        self,
        position: Sequence[float] = (0.0, 0.0, 3.0),
        up: Sequence[float] = (0.0, 1.0, 0.0),
        yaw: float = YAW,
        pitch: float = PITCH,
    ) -> None:
        self.position = np.array(position, dtype=float)
        self.world_up = np.array(up, dtype=float)
        self.front = np.array([0.0, 0.0, -1.0])
        self.right = np.zeros(3)
        self.up = np.zeros(3)
        self.yaw = float(yaw)
        self.pitch = float(pitch)
        self.movement_speed = SPEED
        self.mouse_sensitivity = SENSITIVITY
        self.zoom = ZOOM
        self._update_vectors()

    def process_move(self, direction: Sequence[float], delta_time: float) -> None:
        """Move along ``direction`` scaled by the movement speed and elapsed time."""
        velocity = self.movement_speed * delta_time
        self.position = self.position + np.asarray(direction, dtype=float) * velocity

    def process_mouse_movement(
        self, xoffset: float, yoffset: float, constrain_pitch: bool = True
    ) -> None:
        """Turn the camera by a mouse offset, optionally keeping pitch within ±89°."""
        self.yaw += xoffset * self.mouse_sensitivity
        self.pitch += yoffset * self.mouse_sensitivity
        if constrain_pitch:
            self.pitch = min(max(self.pitch, -_PITCH_LIMIT), _PITCH_LIMIT)
        self._update_vectors()

    def process_mouse_scroll(self, yoffset: float) -> None:
        """Narrow or widen the field of view, kept between 1° and 45°."""
        self.zoom = min(max(self.zoom - yoffset, _MIN_ZOOM), _MAX_ZOOM)

    def projection_matrix(self, width: float, height: float) -> np.ndarray:
        return perspective(math.radians(self.zoom), width / height, _NEAR_PLANE, _FAR_PLANE)

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.position + self.front, self.up)

    def _update_vectors(self) -> None:
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        front = np.array(
            [
                math.cos(yaw) * math.cos(pitch),
                math.sin(pitch),
                math.sin(yaw) * math.cos(pitch),
            ]
        )
        self.front = _normalize(front)
        self.right = _normalize(np.cross(self.front, self.world_up))
        self.up = _normalize(np.cross(self.right, self.front))