"""Shader programs built from GLSL sources on disk."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np

VERTEX_FILE = "vertex_shader.glsl"
FRAGMENT_FILE = "frag_shader.glsl"


class ShaderError(Exception):
    """Raised when shader sources cannot be read, compiled or linked."""


def read_shader_sources(path: str | Path) -> tuple[str, str]:
    """Read the vertex and fragment sources kept in directory ``path``."""
    directory = Path(path)
    try:
        vertex = (directory / VERTEX_FILE).read_text(encoding="utf-8")
        fragment = (directory / FRAGMENT_FILE).read_text(encoding="utf-8")
    except OSError as exc:
        raise ShaderError(f"ERROR::SHADER::FILE_NOT_SUCCESSFULLY_READ: {exc}") from exc
    return vertex, fragment


class _PygletBackend:
    """Compiles, links and drives programs through pyglet's shader objects."""

    def __init__(self) -> None:
        from pyglet.graphics import shader as glsl

        self._glsl = glsl

    def compile(self, stage: str, source: str) -> Any:
        try:
            return self._glsl.Shader(source, stage)
        except self._glsl.ShaderException as exc:
            raise ShaderError(str(exc)) from exc

    def link(self, shaders: list[Any]) -> Any:
        try:
            return self._glsl.ShaderProgram(*shaders)
        except self._glsl.ShaderException as exc:
            raise ShaderError(str(exc)) from exc

    def delete_shader(self, shader: Any) -> None:
        shader.delete()

    def delete_program(self, program: Any) -> None:
        program.delete()

    def use(self, program: Any) -> None:
        program.use()

    def set_uniform(self, program: Any, name: str, value: Any) -> None:
        # An unknown uniform is silently ignored, as the driver does for location -1.
        try:
            program[name] = value
        except (self._glsl.ShaderException, KeyError):
            pass


class Shader:
    """A linked vertex and fragment shader program."""

    def __init__(self, vertex_source: str, fragment_source: str, backend: Any = None) -> None:
        self._backend = backend if backend is not None else _PygletBackend()
        self._deleted = False
        shaders: list[Any] = []
        try:
            shaders.append(self._compile("vertex", vertex_source))
            shaders.append(self._compile("fragment", fragment_source))
            try:
                self.program = self._backend.link(shaders)
            except ShaderError as exc:
                raise ShaderError(
                    f"ERROR::PROGRAM_LINKING_ERROR of type: PROGRAM\n{exc}"
                ) from exc
        finally:
            for shader in shaders:
                self._backend.delete_shader(shader)

    def _compile(self, stage: str, source: str) -> Any:
        try:
            return self._backend.compile(stage, source)
        except ShaderError as exc:
            raise ShaderError(
                f"ERROR::SHADER_COMPILATION_ERROR of type: {stage.upper()}\n{exc}"
            ) from exc

    def bind(self) -> None:
        if self._deleted:
            raise RuntimeError("shader program has been deleted")
        self._backend.use(self.program)

    def set_bool(self, name: str, value: bool) -> None:
        self._backend.set_uniform(self.program, name, int(bool(value)))

    def set_int(self, name: str, value: int) -> None:
        self._backend.set_uniform(self.program, name, int(value))

    def set_float(self, name: str, value: float) -> None:
        self._backend.set_uniform(self.program, name, float(value))

    def set_mat4(self, name: str, matrix: Any) -> None:
        """Upload a 4x4 matrix given in (row, column) order."""
        values = np.asarray(matrix, dtype=np.float32)
        if values.shape != (4, 4):
            raise ValueError("matrix must be 4x4")
        columns = tuple(float(value) for value in values.ravel(order="F"))
        self._backend.set_uniform(self.program, name, columns)

    def delete(self) -> None:
        """Release the program; further calls do nothing."""
        if not self._deleted:
            self._backend.delete_program(self.program)
            self._deleted = True

    def __enter__(self) -> "Shader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.delete()