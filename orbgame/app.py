"""A window showing a textured globe that can be flown around."""

from __future__ import annotations

import argparse
import itertools
import sys
from typing import Any, Optional, Sequence

import numpy as np

from orbgame.buffers import DynamicIndexBuffer, DynamicVertexBuffer
from orbgame.camera import Camera
from orbgame.debug import debug_callback
from orbgame.geometry import PI, Vertex3T2, create_sphere
from orbgame.inputs import Action, InputHandler, Key
from orbgame.shader import Shader, ShaderError, read_shader_sources

WIDTH = 800
HEIGHT = 600
TITLE = "OpenGL Triangle"
DEFAULT_SHADER_DIR = "./shad/simple_tex"
DEFAULT_TEXTURE = "./8081_earthmap10k.jpg"


def _default_gl() -> Any:
    from pyglet import gl

    return gl


def _gen_name(gl: Any, generate: Any) -> int:
    names = (gl.GLuint * 1)()
    generate(1, names)
    return int(names[0])


class VertexArray:
    """A vertex array object recording attribute layouts."""

    def __init__(self, gl: Any = None) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self.handle = _gen_name(self._gl, self._gl.glGenVertexArrays)
        self._deleted = False

    def bind(self) -> None:
        if self._deleted:
            raise RuntimeError("vertex array has been deleted")
        self._gl.glBindVertexArray(self.handle)

    def unbind(self) -> None:
        self._gl.glBindVertexArray(0)

    def delete(self) -> None:
        """Release the vertex array; further calls do nothing."""
        if not self._deleted:
            self._gl.glDeleteVertexArrays(1, (self._gl.GLuint * 1)(self.handle))
            self._deleted = True

    def __enter__(self) -> "VertexArray":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.delete()


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="orbgame", description=__doc__)
    parser.add_argument("--shader-dir", default=DEFAULT_SHADER_DIR,
                        help="directory holding vertex_shader.glsl and frag_shader.glsl")
    parser.add_argument("--texture", default=DEFAULT_TEXTURE, help="image wrapped on the globe")
    return parser.parse_args(argv)


def _message_bytes(message: Any, length: int) -> bytes:
    if length >= 0:
        return bytes(message[:length])
    chars = (message[position] for position in itertools.count())
    return b"".join(itertools.takewhile(lambda char: char != b"\0", chars))


def _install_debug_callback(gl: Any) -> Any:
    """Route driver debug messages to standard error where supported."""
    from pyglet.gl import lib

    proc_type = getattr(gl, "GLDEBUGPROC", None)
    if proc_type is None:
        return None

    def forward(source, kind, ident, severity, length, message, user_param):
        text = _message_bytes(message, length)
        debug_callback(source, kind, ident, severity, length, text, user_param)

    callback = proc_type(forward)
    try:
        gl.glDebugMessageCallback(callback, None)
    except (lib.MissingFunctionException, lib.GLException):
        return None
    return callback


def _load_texture(gl: Any, path: str) -> Optional[int]:
    """Upload an image as a mipmapped, repeating texture; None if it cannot be read."""
    import pyglet
    from pyglet.image.codecs import ImageDecodeException

    try:
        image = pyglet.image.load(path).get_image_data()
    except (OSError, ImageDecodeException):
        print(f"Texture failed to load at path: {path}", file=sys.stderr)
        return None

    pixels = np.frombuffer(image.get_data("RGBA", -image.width * 4), dtype=np.uint8)
    handle = _gen_name(gl, gl.glGenTextures)
    gl.glBindTexture(gl.GL_TEXTURE_2D, handle)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_S, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_WRAP_T, gl.GL_REPEAT)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MIN_FILTER, gl.GL_LINEAR_MIPMAP_LINEAR)
    gl.glTexParameteri(gl.GL_TEXTURE_2D, gl.GL_TEXTURE_MAG_FILTER, gl.GL_LINEAR)
    gl.glTexImage2D(gl.GL_TEXTURE_2D, 0, gl.GL_RGBA, image.width, image.height, 0,
                    gl.GL_RGBA, gl.GL_UNSIGNED_BYTE, pixels.ctypes.data)
    gl.glGenerateMipmap(gl.GL_TEXTURE_2D)
    return handle


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the window and run the render loop until it is closed."""
    args = _parse_args(argv)
    try:
        vertex_source, fragment_source = read_shader_sources(args.shader_dir)
    except ShaderError as exc:
        print(exc, file=sys.stderr)
        return 1

    import pyglet
    from pyglet import gl

    config = gl.Config(major_version=3, minor_version=3, forward_compatible=True,
                       double_buffer=True, depth_size=24)
    try:
        window = pyglet.window.Window(WIDTH, HEIGHT, TITLE, config=config)
    except pyglet.window.NoSuchConfigException:
        print("Failed to create window", file=sys.stderr)
        return -1

    gl.glEnable(gl.GL_DEPTH_TEST)
    gl.glEnable(gl.GL_CULL_FACE)
    gl.glCullFace(gl.GL_BACK)
    debug_hook = _install_debug_callback(gl)

    vertices, indices = create_sphere(10.0, 0.0, -PI / 2, 30, 30)
    camera = Camera((0.0, 0.0, 3.0), (0.0, 1.0, 0.0), 90.0, 0.0)
    handler = InputHandler(camera, window)

    vao = VertexArray(gl)
    vao.bind()
    vbo = DynamicVertexBuffer(Vertex3T2, len(vertices), gl)
    vbo.load(vertices)
    vao.unbind()

    ibo = DynamicIndexBuffer(len(indices), gl)
    ibo.load(indices)

    try:
        shader = Shader(vertex_source, fragment_source)
    except ShaderError as exc:
        print(exc, file=sys.stderr)
        for resource in (ibo, vbo, vao):
            resource.delete()
        window.close()
        return 1

    shader.bind()
    texture = _load_texture(gl, args.texture)
    if texture is not None:
        gl.glActiveTexture(gl.GL_TEXTURE0)
        gl.glBindTexture(gl.GL_TEXTURE_2D, texture)
    shader.set_int("ourTexture", 0)

    keys = pyglet.window.key
    key_map = {
        keys.W: Key.W,
        keys.S: Key.S,
        keys.A: Key.A,
        keys.D: Key.D,
        keys.SPACE: Key.SPACE,
        keys.LSHIFT: Key.LEFT_SHIFT,
        keys.ESCAPE: Key.ESCAPE,
    }

    @window.event
    def on_key_press(symbol, modifiers):
        key = key_map.get(symbol)
        if key is None:
            return None
        handler.process_keyboard(key, Action.PRESS)
        return pyglet.event.EVENT_HANDLED

    @window.event
    def on_key_release(symbol, modifiers):
        key = key_map.get(symbol)
        if key is None:
            return None
        handler.process_keyboard(key, Action.RELEASE)
        return pyglet.event.EVENT_HANDLED

    @window.event
    def on_mouse_motion(x, y, dx, dy):
        width, height = window.get_size()
        handler.process_mouse_movement(width / 2.0 + dx, height / 2.0 - dy)

    @window.event
    def on_mouse_scroll(x, y, scroll_x, scroll_y):
        handler.process_mouse_scroll(scroll_y)

    @window.event
    def on_draw():
        mvp = camera.projection_matrix(float(WIDTH), float(HEIGHT)) @ camera.view_matrix()
        shader.bind()
        shader.set_mat4("MVP", mvp)
        gl.glClearColor(0.1, 0.1, 0.1, 1.0)
        gl.glClear(gl.GL_COLOR_BUFFER_BIT | gl.GL_DEPTH_BUFFER_BIT)
        vao.bind()
        vbo.bind()
        ibo.bind()
        gl.glDrawElements(gl.GL_TRIANGLES, len(indices), gl.GL_UNSIGNED_INT, None)

    def tick(dt):
        handler.update()

    pyglet.clock.schedule_interval(tick, 1 / 60)
    try:
        pyglet.app.run()
    finally:
        pyglet.clock.unschedule(tick)
        if texture is not None:
            gl.glDeleteTextures(1, (gl.GLuint * 1)(texture))
        for resource in (shader, ibo, vbo, vao):
            resource.delete()
        del debug_hook
    return 0


if __name__ == "__main__":
    sys.exit(main())