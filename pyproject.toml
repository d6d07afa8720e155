[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "torchcore"
version = "0.1.0"
description = "Event system, input state tracking, window event routing, framebuffer formats and glTF mesh loading for a small rendering engine core"
requires-python = ">=3.10"
dependencies = []
keywords = ["rendering", "events", "input", "gltf", "framebuffer", "engine"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Multimedia :: Graphics :: 3D Rendering",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["torchcore"]

[tool.pytest.ini_options]
addopts = "-ra"
