# orbgame

orbgame opens an 800x600 OpenGL 3.3 window showing a textured sphere of
radius 10, such as a globe wrapped in an equirectangular earth map. You
can fly around it with a first-person camera.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running

```
orbgame
```

The command reads its files relative to the current directory unless told
otherwise:

| Option         | Default                    | Meaning                                                  |
|----------------|----------------------------|----------------------------------------------------------|
| `--shader-dir` | `./shad/simple_tex`        | directory holding `vertex_shader.glsl` and `frag_shader.glsl` |
| `--texture`    | `./8081_earthmap10k.jpg`   | image wrapped around the sphere                          |

The shader program must take a `MVP` matrix uniform and sample a texture
uniform named `ourTexture`. Vertex attribute 0 is the position (3 floats)
and attribute 1 the texture coordinate (2 floats).

If the shader files cannot be read, or the shaders fail to compile or link,
the command prints the error and exits with status 1. If the window cannot
be created it exits with status -1. If the texture cannot be loaded, a
message is printed and the sphere is drawn without it.

## Controls

| Key          | Action                                  |
|--------------|-----------------------------------------|
| W / S        | move forward / backward (horizontally)  |
| A / D        | strafe left / right                     |
| Space        | move up                                 |
| Left Shift   | move down                               |
| Escape       | capture or release the mouse            |

While the mouse is captured, moving it turns the camera. The pitch stays
between -89 and 89 degrees. Scrolling the mouse wheel only prints the
scroll offset; it does not zoom.

## Using the pieces

The modules can also be used on their own:

- `orbgame.camera`: `Camera` (with `process_move`, `process_mouse_movement`,
  `process_mouse_scroll`, `projection_matrix` and `view_matrix`), plus
  `perspective` and `look_at`, which return 4x4 numpy matrices acting on
  column vectors;
- `orbgame.geometry`: `create_sphere(radius, phi, theta, sector_count,
  stack_count)` returns a list of `Vertex3T2` vertices (position and texture
  coordinates) and a triangle index list; `Vertex3` and `Vertex3T2` describe
  their layouts to OpenGL with `set_attrib_pointer`;
- `orbgame.inputs`: `InputHandler`, which records key states through
  `process_keyboard` and applies them to a camera in `update`; `Key` and
  `Action` give the key and action codes it understands; `remove_component`
  takes the projection of one vector onto another out of it;
- `orbgame.buffers`: `VertexBuffer`, `DynamicVertexBuffer`, `IndexBuffer`
  and `DynamicIndexBuffer` wrap OpenGL buffer objects; `check_capacity`
  raises `ValueError` or `IndexError` when data would not fit;
- `orbgame.shader`: `read_shader_sources` reads the two GLSL files from a
  directory, `Shader` compiles and links them, and `ShaderError` is raised
  when either step fails;
- `orbgame.debug`: `format_debug_message` and `debug_callback` turn OpenGL
  debug messages into readable text on standard error, with high-severity
  messages in red;
- `orbgame.app`: `VertexArray` and the `main` entry point behind the
  `orbgame` command.

```python
from orbgame.camera import Camera
from orbgame.geometry import create_sphere

vertices, indices = create_sphere(10.0, 0.0, 0.0, 30, 30)
camera = Camera()
mvp = camera.projection_matrix(800.0, 600.0) @ camera.view_matrix()
```

## What it does not do

The package ships no shader files and no texture image; both must be
supplied on disk. There is only the one sphere to look at: no game logic,
no lighting, and no way to load other models.