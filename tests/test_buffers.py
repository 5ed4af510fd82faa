import pytest

from orbgame.buffers import (
    DynamicIndexBuffer,
    DynamicVertexBuffer,
    IndexBuffer,
    VertexBuffer,
    check_capacity,
)
from orbgame.geometry import Vertex3, Vertex3T2, create_sphere


class FakeGL:
    GL_ARRAY_BUFFER = 0x8892
    GL_ELEMENT_ARRAY_BUFFER = 0x8893
    GL_STATIC_DRAW = 0x88E4
    GL_DYNAMIC_DRAW = 0x88E8
    GL_FLOAT = 0x1406
    GL_FALSE = 0

    def __init__(self):
        self.calls = []
        self._next_id = 1

    def glGenBuffers(self, count, handle):
        handle.value = self._next_id
        self._next_id += 1
        self.calls.append(("glGenBuffers", (count,)))

    def __getattr__(self, name):
        if name.startswith("gl"):
            return lambda *args: self.calls.append((name, args))
        raise AttributeError(name)

    def named(self, name):
        return [args for call, args in self.calls if call == name]


def test_check_capacity_returns_end():
    assert check_capacity(10, 10) == 10
    assert check_capacity(10, 3, 7) == 10
    assert check_capacity(10, 2, 4) == 6


def test_check_capacity_rejects_empty():
    with pytest.raises(ValueError):
        check_capacity(10, 0)


def test_check_capacity_rejects_bad_offset():
    with pytest.raises(IndexError):
        check_capacity(10, 1, -1)
    with pytest.raises(IndexError):
        check_capacity(10, 1, 11)


def test_check_capacity_rejects_overflow():
    with pytest.raises(ValueError):
        check_capacity(10, 11)
    with pytest.raises(ValueError):
        check_capacity(10, 4, 7)


def test_vertex_buffer_configures_layout():
    gl = FakeGL()
    buffer = VertexBuffer(Vertex3T2, gl=gl)
    pointers = gl.named("glVertexAttribPointer")
    assert pointers == [
        (0, 3, gl.GL_FLOAT, gl.GL_FALSE, Vertex3T2.STRIDE, 0),
        (1, 2, gl.GL_FLOAT, gl.GL_FALSE, Vertex3T2.STRIDE, 12),
    ]
    assert gl.named("glEnableVertexAttribArray") == [(0,), (1,)]
    assert gl.named("glBindBuffer")[0] == (gl.GL_ARRAY_BUFFER, buffer.handle)


def test_vertex_buffer_static_load_size():
    gl = FakeGL()
    buffer = VertexBuffer(Vertex3, gl=gl)
    data = [Vertex3(1.0, 2.0, 3.0), Vertex3(4.0, 5.0, 6.0)]
    buffer.load_static(data)
    (target, size, _pointer, usage), = gl.named("glBufferData")
    assert target == gl.GL_ARRAY_BUFFER
    assert size == len(data) * Vertex3.STRIDE
    assert usage == gl.GL_STATIC_DRAW
    assert buffer.count == len(data)


def test_dynamic_vertex_buffer_loads_at_offset():
    gl = FakeGL()
    vertices, _ = create_sphere(1.0, sector_count=4, stack_count=2)
    buffer = DynamicVertexBuffer(Vertex3T2, len(vertices), gl=gl)
    (_, allocated, pointer, usage), = gl.named("glBufferData")
    assert allocated == len(vertices) * Vertex3T2.STRIDE
    assert pointer is None
    assert usage == gl.GL_DYNAMIC_DRAW
    buffer.load(vertices[:3], offset=2)
    (target, offset, size, _), = gl.named("glBufferSubData")
    assert target == gl.GL_ARRAY_BUFFER
    assert offset == 2 * Vertex3T2.STRIDE
    assert size == 3 * Vertex3T2.STRIDE


def test_dynamic_vertex_buffer_rejects_overflow():
    gl = FakeGL()
    buffer = DynamicVertexBuffer(Vertex3, 2, gl=gl)
    with pytest.raises(ValueError):
        buffer.load([Vertex3(), Vertex3(), Vertex3()])
    with pytest.raises(ValueError):
        buffer.load([])
    assert gl.named("glBufferSubData") == []


def test_index_buffer_uploads_uint32():
    gl = FakeGL()
    buffer = IndexBuffer([0, 1, 2, 2, 1, 3], gl=gl)
    (target, size, _pointer, usage), = gl.named("glBufferData")
    assert target == gl.GL_ELEMENT_ARRAY_BUFFER
    assert size == 6 * 4
    assert usage == gl.GL_STATIC_DRAW
    assert buffer.count == 6
    assert gl.named("glBindBuffer")[-1] == (gl.GL_ELEMENT_ARRAY_BUFFER, 0)


def test_index_buffer_rejects_negative_indices():
    with pytest.raises(ValueError):
        IndexBuffer([0, -1, 2], gl=FakeGL())


def test_dynamic_index_buffer_load_and_bounds():
    gl = FakeGL()
    _, indices = create_sphere(1.0, sector_count=4, stack_count=2)
    buffer = DynamicIndexBuffer(len(indices), gl=gl)
    buffer.load(indices)
    (_, offset, size, _), = gl.named("glBufferSubData")
    assert offset == 0
    assert size == len(indices) * 4
    with pytest.raises(ValueError):
        buffer.load(indices + [0])
    with pytest.raises(IndexError):
        buffer.load([0], offset=-1)


def test_delete_is_idempotent_and_blocks_bind():
    gl = FakeGL()
    buffer = DynamicIndexBuffer(4, gl=gl)
    buffer.delete()
    buffer.delete()
    assert len(gl.named("glDeleteBuffers")) == 1
    with pytest.raises(RuntimeError):
        buffer.bind()


def test_context_manager_deletes():
    gl = FakeGL()
    with VertexBuffer(Vertex3, gl=gl) as buffer:
        buffer.bind()
    assert len(gl.named("glDeleteBuffers")) == 1
    with pytest.raises(RuntimeError):
        buffer.bind()


def test_buffers_get_distinct_handles():
    gl = FakeGL()
    first = IndexBuffer([0, 1, 2], gl=gl)
    second = DynamicVertexBuffer(Vertex3, 3, gl=gl)
    assert first.handle != second.handle
    second.unbind()
    assert gl.named("glBindBuffer")[-1] == (gl.GL_ARRAY_BUFFER, 0)