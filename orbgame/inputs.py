"""Keyboard and mouse handling that steers a camera."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Optional, Protocol, Sequence

import numpy as np

from orbgame.camera import Camera

_MOVE_SPEED = 0.1
_MOUSE_SCALE = 0.5


class Key(IntEnum):
    """Key codes the handler reacts to."""

    SPACE = 32
    A = 65
    D = 68
    S = 83
    W = 87
    ESCAPE = 256
    LEFT_SHIFT = 340


class Action(IntEnum):
    """What happened to a key."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class Window(Protocol):
    """The parts of a window the handler uses to capture the cursor."""

    def set_exclusive_mouse(self, exclusive: bool = True) -> None: ...

    def get_size(self) -> tuple[int, int]: ...

    def set_mouse_position(self, x: float, y: float) -> None: ...


def remove_component(vec: Sequence[float], component: Sequence[float]) -> np.ndarray:
    """Return ``vec`` with its projection onto ``component`` taken away."""
    vec = np.asarray(vec, dtype=float)
    component = np.asarray(component, dtype=float)
    return vec - component * np.dot(vec, component) / np.dot(component, component)


class InputHandler:
    """Tracks pressed keys and turns input into camera movement."""

    def __init__(self, camera: Optional[Camera], window: Optional[Window] = None) -> None:
        self.camera = camera
        self.window = window
        self.mouse_captured = False
        self._keys: dict[int, bool] = {}
        if camera is None:
            print("Warning: Camera pointer is null in InputHandler.", file=sys.stderr)

    def process_keyboard(self, key: int, action: int) -> None:
        """Record a key press or release; repeats change nothing."""
        if action == Action.PRESS:
            self._keys[int(key)] = True
        elif action == Action.RELEASE:
            self._keys[int(key)] = False

    def is_pressed(self, key: int) -> bool:
        return self._keys.get(int(key), False)

    def _window_center(self) -> tuple[float, float]:
        if self.window is None:
            return 0.0, 0.0
        width, height = self.window.get_size()
        return width / 2.0, height / 2.0

    def process_mouse_movement(self, xoffset: float, yoffset: float) -> None:
        """Turn the camera from a cursor position while the mouse is captured.

        The position is measured against the window centre, to which the
        cursor is then returned.
        """
        if not self.mouse_captured or self.camera is None:
            return
        center_x, center_y = self._window_center()
        dx = (xoffset - center_x) * _MOUSE_SCALE
        dy = (center_y - yoffset) * _MOUSE_SCALE
        self.camera.process_mouse_movement(dx, dy)
        if self.window is not None:
            self.window.set_mouse_position(center_x, center_y)

    def process_mouse_scroll(self, yoffset: float) -> None:
        print(f"Mouse scroll: yoffset = {yoffset:g}")

    def update(self) -> None:
        """Apply held keys to the camera and toggle mouse capture on Escape."""
        camera = self.camera
        if camera is not None:
            moves = (
                (Key.W, remove_component(camera.front, camera.up)),
                (Key.S, remove_component(-camera.front, camera.up)),
                (Key.A, remove_component(-camera.right, camera.up)),
                (Key.D, remove_component(camera.right, camera.up)),
                (Key.SPACE, camera.up),
                (Key.LEFT_SHIFT, -camera.up),
            )
            for key, direction in moves:
                if self.is_pressed(key):
                    camera.process_move(direction, _MOVE_SPEED)

        if self.is_pressed(Key.ESCAPE):
            if self.mouse_captured:
                if self.window is not None:
                    self.window.set_exclusive_mouse(False)
                print("Mouse released")
            else:
                if self.window is not None:
                    self.window.set_exclusive_mouse(True)
                    self.window.set_mouse_position(*self._window_center())
                print("Mouse captured")
            self.mouse_captured = not self.mouse_captured
            self._keys[Key.ESCAPE] = False