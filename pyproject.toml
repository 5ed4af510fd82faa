[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "orbgame"
version = "0.1.0"
description = "A textured sphere viewer with a free-flying first-person camera, rendered with OpenGL"
requires-python = ">=3.10"
keywords = ["opengl", "3d", "sphere", "camera", "rendering", "pyglet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "numpy",
    "pyglet",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
orbgame = "orbgame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["orbgame"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
