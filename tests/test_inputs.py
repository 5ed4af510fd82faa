import numpy as np
import pytest

from orbgame.camera import SPEED, Camera
from orbgame.inputs import Action, InputHandler, Key, remove_component


class FakeWindow:
    def __init__(self, width=800, height=600):
        self.size = (width, height)
        self.exclusive = []
        self.positions = []

    def set_exclusive_mouse(self, exclusive=True):
        self.exclusive.append(exclusive)

    def get_size(self):
        return self.size

    def set_mouse_position(self, x, y):
        self.positions.append((x, y))


@pytest.fixture
def handler():
    return InputHandler(Camera(), FakeWindow())


def test_remove_component_drops_projection():
    result = remove_component((1.0, 2.0, 3.0), (0.0, 1.0, 0.0))
    assert np.allclose(result, (1.0, 0.0, 3.0))


def test_remove_component_is_orthogonal():
    component = np.array([0.3, -1.2, 2.0])
    result = remove_component((4.0, 5.0, -6.0), component)
    assert np.dot(result, component) == pytest.approx(0.0, abs=1e-9)


def test_forward_key_moves_camera_forward(handler):
    handler.process_keyboard(Key.W, Action.PRESS)
    handler.update()
    position = handler.camera.position
    assert position[2] == pytest.approx(3.0 - SPEED * 0.1)
    assert position[0] == pytest.approx(0.0, abs=1e-9)
    assert position[1] == pytest.approx(0.0, abs=1e-9)


def test_forward_and_backward_cancel(handler):
    handler.process_keyboard(Key.W, Action.PRESS)
    handler.process_keyboard(Key.S, Action.PRESS)
    handler.update()
    assert np.allclose(handler.camera.position, (0.0, 0.0, 3.0))


def test_release_stops_movement(handler):
    handler.process_keyboard(Key.D, Action.PRESS)
    handler.update()
    moved = handler.camera.position.copy()
    handler.process_keyboard(Key.D, Action.RELEASE)
    handler.update()
    assert np.allclose(handler.camera.position, moved)
    assert moved[0] > 0.0


def test_repeat_does_not_press(handler):
    handler.process_keyboard(Key.A, Action.REPEAT)
    handler.update()
    assert handler.is_pressed(Key.A) is False
    assert np.allclose(handler.camera.position, (0.0, 0.0, 3.0))


def test_space_and_shift_move_along_up(handler):
    handler.process_keyboard(Key.SPACE, Action.PRESS)
    handler.update()
    assert handler.camera.position[1] > 0.0
    handler.process_keyboard(Key.SPACE, Action.RELEASE)
    handler.process_keyboard(Key.LEFT_SHIFT, Action.PRESS)
    handler.update()
    assert handler.camera.position[1] == pytest.approx(0.0, abs=1e-9)


def test_escape_toggles_capture_once_per_press(handler, capsys):
    handler.process_keyboard(Key.ESCAPE, Action.PRESS)
    handler.update()
    handler.update()
    assert handler.mouse_captured is True
    assert handler.window.exclusive == [True]
    assert handler.window.positions == [(400.0, 300.0)]
    assert "Mouse captured" in capsys.readouterr().out

    handler.process_keyboard(Key.ESCAPE, Action.PRESS)
    handler.update()
    assert handler.mouse_captured is False
    assert handler.window.exclusive == [True, False]
    assert "Mouse released" in capsys.readouterr().out


def test_mouse_ignored_when_not_captured(handler):
    handler.process_mouse_movement(500.0, 100.0)
    assert handler.camera.yaw == pytest.approx(-90.0)
    assert handler.camera.pitch == pytest.approx(0.0)
    assert handler.window.positions == []


def test_captured_mouse_turns_camera_and_recenters(handler):
    handler.mouse_captured = True
    handler.process_mouse_movement(410.0, 290.0)
    assert handler.camera.yaw > -90.0
    assert handler.camera.pitch > 0.0
    assert handler.window.positions == [(400.0, 300.0)]


def test_cursor_at_center_leaves_camera_unchanged(handler):
    handler.mouse_captured = True
    handler.process_mouse_movement(400.0, 300.0)
    assert handler.camera.yaw == pytest.approx(-90.0)
    assert handler.camera.pitch == pytest.approx(0.0)


def test_scroll_reports_offset(handler, capsys):
    handler.process_mouse_scroll(1.5)
    assert capsys.readouterr().out == "Mouse scroll: yoffset = 1.5\n"
    assert handler.camera.zoom == pytest.approx(45.0)


def test_missing_camera_warns(capsys):
    handler = InputHandler(None)
    assert "Camera pointer is null" in capsys.readouterr().err
    handler.process_keyboard(Key.W, Action.PRESS)
    handler.update()
    assert handler.camera is None


def test_camera_can_be_replaced(handler):
    other = Camera(position=(1.0, 2.0, 3.0))
    handler.camera = other
    handler.process_keyboard(Key.SPACE, Action.PRESS)
    handler.update()
    assert other.position[1] > 2.0