"""Events, input state, window event routing, framebuffer formats and glTF mesh loading for a rendering engine core."""

__version__ = "0.1.0"

__all__ = ["events", "input", "window", "formats", "model"]