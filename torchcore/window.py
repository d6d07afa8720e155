"""Application window state and routing of raw input callbacks to events."""

from __future__ import annotations

import dataclasses
import enum
import logging
from typing import Callable

from .events import (
    Event,
    EventType,
    KeyPressEvent,
    KeyReleaseEvent,
    KeyRepeatEvent,
    MouseMoveEvent,
    MousePressEvent,
    MouseReleaseEvent,
    MouseScrollEvent,
    WindowResizeEvent,
)
from .input import Keyboard, Mouse, MouseButton

logger = logging.getLogger(__name__)

EventHandler = Callable[[Event], None]

# Raw button numbers reported by the windowing layer.
_RAW_MOUSE_BUTTONS = {
    0: MouseButton.LEFT,
    1: MouseButton.RIGHT,
}


@dataclasses.dataclass
class WindowSpecification:
    """Size and title of a window."""

    width: int = 800
    height: int = 600
    title: str = "Default Window"


class InputAction(enum.IntEnum):
    """Action reported with a key or mouse button callback."""

    RELEASE = 0
    PRESS = 1
    REPEAT = 2


class Window:
    """A window that turns raw input callbacks into events and routes them.

    Mouse events go to ``mouse`` and key events to ``keyboard``; both default
    to the shared instances.
    """

    def __init__(
        self,
        specification: WindowSpecification | None = None,
        *,
        mouse: Mouse | None = None,
        keyboard: Keyboard | None = None,
    ) -> None:
        self.specification = dataclasses.replace(specification or WindowSpecification())
        self.mouse = mouse if mouse is not None else Mouse.instance()
        self.keyboard = keyboard if keyboard is not None else Keyboard.instance()
        self.is_resized = False
        self.handlers: dict[EventType, EventHandler] = self._default_handlers()

    def _default_handlers(self) -> dict[EventType, EventHandler]:
        def to_mouse(event: Event) -> None:
            self.mouse.on_event(event)

        def to_keyboard(event: Event) -> None:
            self.keyboard.on_event(event)

        def on_resize(event: Event) -> None:
            logger.debug(
                "Window Resized: width = %s, height = %s", event.width, event.height
            )

        return {
            EventType.MOUSE_PRESS: to_mouse,
            EventType.MOUSE_RELEASE: to_mouse,
            EventType.MOUSE_MOVE: to_mouse,
            EventType.MOUSE_SCROLL: to_mouse,
            EventType.KEY_PRESS: to_keyboard,
            EventType.KEY_RELEASE: to_keyboard,
            EventType.KEY_REPEAT: to_keyboard,
            EventType.WINDOW_RESIZE: on_resize,
        }

    def on_event(self, event: Event) -> bool:
        """Pass ``event`` to the handler for its type; False if there is none."""
        handler = self.handlers.get(event.event_type)
        if handler is None:
            logger.debug("No handler found for event type: %s", event.event_type.value)
            return False
        handler(event)
        if event.event_type is EventType.WINDOW_RESIZE:
            self.is_resized = True
        return True

    def set_window_size(self, width: int, height: int) -> None:
        """Record a new window size and mark the window as resized."""
        self.specification.width = width
        self.specification.height = height
        self.is_resized = True

    def reset_is_resize(self) -> None:
        """Clear the resized mark."""
        self.is_resized = False

    def on_window_size(self, width: int, height: int) -> None:
        """Handle a size change reported by the windowing layer."""
        self.set_window_size(width, height)
        self.on_event(WindowResizeEvent(width, height))

    def on_cursor_pos(self, xpos: float, ypos: float) -> None:
        """Handle a cursor movement."""
        self.on_event(MouseMoveEvent(xpos, ypos))

    def on_mouse_button(self, button: int, action: int, mods: int) -> None:
        """Handle a mouse button; buttons other than left and right are ignored."""
        mouse_button = _RAW_MOUSE_BUTTONS.get(button)
        if mouse_button is None:
            return
        if action == InputAction.PRESS:
            self.on_event(MousePressEvent(int(mouse_button)))
        elif action == InputAction.RELEASE:
            self.on_event(MouseReleaseEvent(int(mouse_button)))

    def on_scroll(self, xoffset: float, yoffset: float) -> None:
        """Handle a scroll."""
        self.on_event(MouseScrollEvent(xoffset, yoffset))

    def on_key(self, key: int, scancode: int, action: int, mods: int) -> None:
        """Handle a key press, release or repeat."""
        event_class = {
            InputAction.PRESS: KeyPressEvent,
            InputAction.RELEASE: KeyReleaseEvent,
            InputAction.REPEAT: KeyRepeatEvent,
        }.get(action)
        if event_class is not None:
            self.on_event(event_class(key, scancode, mods))