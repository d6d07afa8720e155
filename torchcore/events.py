"""Input and window events, their categories and a type-based dispatcher."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, ClassVar


class EventType(enum.Enum):
    """Kind of an event."""

    NONE = 0
    WINDOW_RESIZE = 1
    WINDOW_CLOSE = 2
    WINDOW_MOVE = 3
    MOUSE_MOVE = 4
    MOUSE_BUTTON = 5
    MOUSE_PRESS = 6
    MOUSE_RELEASE = 7
    MOUSE_SCROLL = 8
    KEYBOARD = 9
    KEY_PRESS = 10
    KEY_RELEASE = 11
    KEY_REPEAT = 12


class EventCategory(enum.IntFlag):
    """Bit flags grouping events into categories."""

    NONE = 0
    CATEGORY_INPUT_FLAG = 1 << 0
    CATEGORY_MOUSE_FLAG = 1 << 1
    CATEGORY_MOUSE_BUTTON_FLAG = 1 << 2
    CATEGORY_KEYBOARD_FLAG = 1 << 3
    CATEGORY_WINDOW_FLAG = 1 << 4


def is_in_category(category: EventCategory, check: EventCategory) -> bool:
    """Return True if ``category`` shares any flag with ``check``."""
    return bool(category & check)


class Event:
    """Base of all events; subclasses fix the type, name and categories."""

    event_type: ClassVar[EventType] = EventType.NONE
    name: ClassVar[str] = ""
    categories: ClassVar[EventCategory] = EventCategory.NONE

    handled = False

    def is_category(self, category: EventCategory) -> bool:
        """Return True if this event belongs to any of the given categories."""
        return is_in_category(self.categories, category)


class EventDispatcher:
    """Routes one event to handlers registered for its concrete type."""

    def __init__(self, event: Event) -> None:
        self.event = event

    def dispatch(self, event_class: type[Event], handler: Callable[[Event], bool]) -> bool:
        """Call ``handler`` if the event is of ``event_class``'s type.

        The handler's result becomes the event's handled flag. Returns whether
        the handler was called.
        """
        if self.event.event_type != event_class.event_type:
            return False
        self.event.handled = bool(handler(self.event))
        return True

    def dispatch_all(self, handler: Callable[[Event], bool], *args: type[Event]) -> bool:
        """Try ``handler`` against every given event class; True if any matched."""
        matched = False
        for event_class in args:
            matched |= self.dispatch(event_class, handler)
        return matched


_KEY_CATEGORIES = EventCategory.CATEGORY_INPUT_FLAG | EventCategory.CATEGORY_KEYBOARD_FLAG
_MOUSE_BUTTON_CATEGORIES = (
    EventCategory.CATEGORY_INPUT_FLAG
    | EventCategory.CATEGORY_MOUSE_BUTTON_FLAG
    | EventCategory.CATEGORY_MOUSE_FLAG
)


@dataclass
class KeyEvent(Event):
    """Common data of keyboard events."""

    key_code: int
    scancode: int
    mods: int


@dataclass
class KeyPressEvent(KeyEvent):
    event_type: ClassVar[EventType] = EventType.KEY_PRESS
    name: ClassVar[str] = "Key Press"
    categories: ClassVar[EventCategory] = _KEY_CATEGORIES


@dataclass
class KeyReleaseEvent(KeyEvent):
    event_type: ClassVar[EventType] = EventType.KEY_RELEASE
    name: ClassVar[str] = "Key Release"
    categories: ClassVar[EventCategory] = _KEY_CATEGORIES


@dataclass
class KeyRepeatEvent(KeyEvent):
    event_type: ClassVar[EventType] = EventType.KEY_REPEAT
    name: ClassVar[str] = "Key Repeat"
    categories: ClassVar[EventCategory] = _KEY_CATEGORIES


@dataclass
class MouseMoveEvent(Event):
    event_type: ClassVar[EventType] = EventType.MOUSE_MOVE
    name: ClassVar[str] = "Mouse Move"
    categories: ClassVar[EventCategory] = EventCategory.CATEGORY_MOUSE_FLAG

    cursor_pos_x: float
    cursor_pos_y: float


@dataclass
class MouseButtonEvent(Event):
    """Common data of mouse button events."""

    button: int


@dataclass
class MousePressEvent(MouseButtonEvent):
    event_type: ClassVar[EventType] = EventType.MOUSE_PRESS
    name: ClassVar[str] = "Mouse Press"
    categories: ClassVar[EventCategory] = _MOUSE_BUTTON_CATEGORIES


@dataclass
class MouseReleaseEvent(MouseButtonEvent):
    event_type: ClassVar[EventType] = EventType.MOUSE_RELEASE
    name: ClassVar[str] = "Mouse Release"
    categories: ClassVar[EventCategory] = _MOUSE_BUTTON_CATEGORIES


@dataclass
class MouseScrollEvent(Event):
    event_type: ClassVar[EventType] = EventType.MOUSE_SCROLL
    name: ClassVar[str] = "Mouse Scroll"
    categories: ClassVar[EventCategory] = _MOUSE_BUTTON_CATEGORIES

    offset_x: float
    offset_y: float


@dataclass
class WindowResizeEvent(Event):
    event_type: ClassVar[EventType] = EventType.WINDOW_RESIZE
    name: ClassVar[str] = "WindowResize"
    categories: ClassVar[EventCategory] = EventCategory.CATEGORY_WINDOW_FLAG

    width: int
    height: int