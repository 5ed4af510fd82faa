"""Vertex and index buffer objects on the graphics device."""

from __future__ import annotations

from dataclasses import astuple
from typing import Any, Callable, Sequence

import numpy as np

_INDEX_DTYPE = np.dtype(np.uint32)
_MAX_INDEX = np.iinfo(np.uint32).max


def _default_gl() -> Any:
    from pyglet import gl

    return gl


def _gen_name(gl: Any, generate: Callable[..., Any]) -> int:
    names = (gl.GLuint * 1)()
    generate(1, names)
    return int(names[0])


def _delete_name(gl: Any, remove: Callable[..., Any], handle: int) -> None:
    remove(1, (gl.GLuint * 1)(handle))


def check_capacity(capacity: int, count: int, offset: int = 0) -> int:
    """Check that ``count`` elements fit at ``offset`` in a buffer of ``capacity``.

    Returns the index one past the last element written.
    """
    if count <= 0:
        raise ValueError("cannot load empty data into a buffer")
    if offset < 0 or offset > capacity:
        raise IndexError(f"offset {offset} out of bounds for buffer of size {capacity}")
    end = offset + count
    if end > capacity:
        raise ValueError(f"data ending at {end} exceeds buffer of size {capacity}")
    return end


def _vertex_array(data: Any, vertex_type: type) -> np.ndarray:
    width = vertex_type.STRIDE // 4
    if isinstance(data, np.ndarray):
        array = np.ascontiguousarray(data, dtype=np.float32)
    else:
        array = np.array([astuple(vertex) for vertex in data], dtype=np.float32)
    if array.ndim != 2 or array.shape[1] != width:
        raise ValueError(f"vertex data must have {width} components per vertex")
    return array


def _index_array(indices: Any) -> np.ndarray:
    values = np.asarray(indices, dtype=np.int64).ravel()
    if values.size and (values.min() < 0 or values.max() > _MAX_INDEX):
        raise ValueError("indices must be unsigned 32-bit integers")
    return np.ascontiguousarray(values, dtype=_INDEX_DTYPE)


class _GLBuffer:
    """A buffer object name bound to one target."""

    _target_name = ""

    def __init__(self, gl: Any = None) -> None:
        self._gl = gl if gl is not None else _default_gl()
        self._target = getattr(self._gl, self._target_name)
        self.handle = _gen_name(self._gl, self._gl.glGenBuffers)
        self._deleted = False

    def _bind(self) -> None:
        if self._deleted:
            raise RuntimeError("buffer has been deleted")
        self._gl.glBindBuffer(self._target, self.handle)

    def _unbind(self) -> None:
        self._gl.glBindBuffer(self._target, 0)

    def _delete(self) -> None:
        if not self._deleted:
            _delete_name(self._gl, self._gl.glDeleteBuffers, self.handle)
            self._deleted = True

    def delete(self) -> None:
        self._delete()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.delete()


def _configure_attributes(gl: Any, vertex_type: type) -> None:
    for index, size, offset in vertex_type.ATTRIBUTES:
        gl.glVertexAttribPointer(index, size, gl.GL_FLOAT, gl.GL_FALSE, vertex_type.STRIDE, offset)
        gl.glEnableVertexAttribArray(index)


class VertexBuffer(_GLBuffer):
    """A vertex buffer filled once with static data."""

    _target_name = "GL_ARRAY_BUFFER"

    def __init__(self, vertex_type: type, gl: Any = None) -> None:
        super().__init__(gl)
        self.vertex_type = vertex_type
        self.count = 0
        self.bind()
        _configure_attributes(self._gl, vertex_type)

    def load_static(self, data: Sequence[Any]) -> None:
        array = _vertex_array(data, self.vertex_type)
        self.bind()
        self._gl.glBufferData(self._target, array.nbytes, array.ctypes.data, self._gl.GL_STATIC_DRAW)
        self.count = len(array)

    def bind(self) -> None:
        self._bind()

    def unbind(self) -> None:
        self._unbind()

    def delete(self) -> None:
        """Release the buffer; further calls do nothing."""
        self._delete()


class DynamicVertexBuffer(_GLBuffer):
    """A vertex buffer of fixed capacity whose contents may be replaced."""

    _target_name = "GL_ARRAY_BUFFER"

    def __init__(self, vertex_type: type, capacity: int, gl: Any = None) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        super().__init__(gl)
        self.vertex_type = vertex_type
        self.capacity = capacity
        self.bind()
        self._gl.glBufferData(
            self._target, capacity * vertex_type.STRIDE, None, self._gl.GL_DYNAMIC_DRAW
        )
        _configure_attributes(self._gl, vertex_type)

    def load(self, data: Sequence[Any], offset: int = 0) -> None:
        """Write vertices starting at element ``offset``."""
        check_capacity(self.capacity, len(data), offset)
        array = _vertex_array(data, self.vertex_type)
        self.bind()
        self._gl.glBufferSubData(
            self._target, offset * self.vertex_type.STRIDE, array.nbytes, array.ctypes.data
        )

    def bind(self) -> None:
        self._bind()

    def unbind(self) -> None:
        self._unbind()

    def delete(self) -> None:
        """Release the buffer; further calls do nothing."""
        self._delete()


class IndexBuffer(_GLBuffer):
    """An element buffer filled once with static indices."""

    _target_name = "GL_ELEMENT_ARRAY_BUFFER"

    def __init__(self, indices: Sequence[int], gl: Any = None) -> None:
        array = _index_array(indices)
        super().__init__(gl)
        self.count = len(array)
        self.bind()
        self._gl.glBufferData(self._target, array.nbytes, array.ctypes.data, self._gl.GL_STATIC_DRAW)
        self.unbind()

    def bind(self) -> None:
        self._bind()

    def unbind(self) -> None:
        self._unbind()

    def delete(self) -> None:
        """Release the buffer; further calls do nothing."""
        self._delete()


class DynamicIndexBuffer(_GLBuffer):
    """An element buffer of fixed capacity whose contents may be replaced."""

    _target_name = "GL_ELEMENT_ARRAY_BUFFER"

    def __init__(self, capacity: int, gl: Any = None) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        super().__init__(gl)
        self.capacity = capacity
        self.bind()
        self._gl.glBufferData(
            self._target, capacity * _INDEX_DTYPE.itemsize, None, self._gl.GL_DYNAMIC_DRAW
        )
        self.unbind()

    def load(self, indices: Sequence[int], offset: int = 0) -> None:
        """Write indices starting at element ``offset``."""
        array = _index_array(indices)
        check_capacity(self.capacity, len(array), offset)
        self.bind()
        self._gl.glBufferSubData(
            self._target, offset * _INDEX_DTYPE.itemsize, array.nbytes, array.ctypes.data
        )
        self.unbind()

    def bind(self) -> None:
        self._bind()

    def unbind(self) -> None:
        self._unbind()

    def delete(self) -> None:
        """Release the buffer; further calls do nothing."""
        self._delete()