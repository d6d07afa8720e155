"""Keyboard and mouse state tracked from input events."""

from __future__ import annotations

import enum
import logging
import threading
from functools import singledispatchmethod

from .events import (
    Event,
    KeyPressEvent,
    KeyReleaseEvent,
    KeyRepeatEvent,
    MouseMoveEvent,
    MousePressEvent,
    MouseReleaseEvent,
    MouseScrollEvent,
)

logger = logging.getLogger(__name__)


class KeyCode(enum.IntEnum):
    """Key codes as reported by the windowing layer."""

    KEY_UNKNOWN = -1

    KEY_SPACE = 32
    KEY_APOSTROPHE = 39
    KEY_COMMA = 44
    KEY_MINUS = 45
    KEY_PERIOD = 46
    KEY_SLASH = 47
    KEY_0 = 48
    KEY_1 = 49
    KEY_2 = 50
    KEY_3 = 51
    KEY_4 = 52
    KEY_5 = 53
    KEY_6 = 54
    KEY_7 = 55
    KEY_8 = 56
    KEY_9 = 57
    KEY_SEMICOLON = 59
    KEY_EQUAL = 61
    KEY_A = 65
    KEY_B = 66
    KEY_C = 67
    KEY_D = 68
    KEY_E = 69
    KEY_F = 70
    KEY_G = 71
    KEY_H = 72
    KEY_I = 73
    KEY_J = 74
    KEY_K = 75
    KEY_L = 76
    KEY_M = 77
    KEY_N = 78
    KEY_O = 79
    KEY_P = 80
    KEY_Q = 81
    KEY_R = 82
    KEY_S = 83
    KEY_T = 84
    KEY_U = 85
    KEY_V = 86
    KEY_W = 87
    KEY_X = 88
    KEY_Y = 89
    KEY_Z = 90
    KEY_LEFT_BRACKET = 91
    KEY_BACKSLASH = 92
    KEY_RIGHT_BRACKET = 93
    KEY_GRAVE_ACCENT = 96
    KEY_WORLD_1 = 161
    KEY_WORLD_2 = 162

    KEY_ESCAPE = 256
    KEY_ENTER = 257
    KEY_TAB = 258
    KEY_BACKSPACE = 259
    KEY_INSERT = 260
    KEY_DELETE = 261
    KEY_RIGHT = 262
    KEY_LEFT = 263
    KEY_DOWN = 264
    KEY_UP = 265
    KEY_PAGE_UP = 266
    KEY_PAGE_DOWN = 267
    KEY_HOME = 268
    KEY_END = 269
    KEY_CAPS_LOCK = 280
    KEY_SCROLL_LOCK = 281
    KEY_NUM_LOCK = 282
    KEY_PRINT_SCREEN = 283
    KEY_PAUSE = 284

    KEY_F1 = 290
    KEY_F2 = 291
    KEY_F3 = 292
    KEY_F4 = 293
    KEY_F5 = 294
    KEY_F6 = 295
    KEY_F7 = 296
    KEY_F8 = 297
    KEY_F9 = 298
    KEY_F10 = 299
    KEY_F11 = 300
    KEY_F12 = 301
    KEY_F13 = 302
    KEY_F14 = 303
    KEY_F15 = 304
    KEY_F16 = 305
    KEY_F17 = 306
    KEY_F18 = 307
    KEY_F19 = 308
    KEY_F20 = 309
    KEY_F21 = 310
    KEY_F22 = 311
    KEY_F23 = 312
    KEY_F24 = 313
    KEY_F25 = 314

    KEY_KP_0 = 320
    KEY_KP_1 = 321
    KEY_KP_2 = 322
    KEY_KP_3 = 323
    KEY_KP_4 = 324
    KEY_KP_5 = 325
    KEY_KP_6 = 326
    KEY_KP_7 = 327
    KEY_KP_8 = 328
    KEY_KP_9 = 329
    KEY_KP_DECIMAL = 330
    KEY_KP_DIVIDE = 331
    KEY_KP_MULTIPLY = 332
    KEY_KP_SUBTRACT = 333
    KEY_KP_ADD = 334
    KEY_KP_ENTER = 335
    KEY_KP_EQUAL = 336

    KEY_LEFT_SHIFT = 340
    KEY_LEFT_CONTROL = 341
    KEY_LEFT_ALT = 342
    KEY_LEFT_SUPER = 343
    KEY_RIGHT_SHIFT = 344
    KEY_RIGHT_CONTROL = 345
    KEY_RIGHT_ALT = 346
    KEY_RIGHT_SUPER = 347
    KEY_MENU = 348

    KEY_LAST = 348


class MouseButton(enum.IntEnum):
    """Mouse buttons the engine tracks."""

    LEFT = 0
    RIGHT = 1


class Keyboard:
    """Tracks which keys are currently held down."""

    _instance: Keyboard | None = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self._key_states: dict[int, bool] = {}

    @classmethod
    def instance(cls) -> Keyboard:
        """Return the shared keyboard, creating it on first use."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @singledispatchmethod
    def on_event(self, event: Event) -> None:
        """Update key state from a key event."""
        raise TypeError(f"Keyboard cannot handle {type(event).__name__}")

    @on_event.register(KeyPressEvent)
    def _on_press(self, event: KeyPressEvent) -> None:
        self._key_states[event.key_code] = True

    @on_event.register(KeyReleaseEvent)
    def _on_release(self, event: KeyReleaseEvent) -> None:
        logger.debug("released")
        self._key_states[event.key_code] = False

    @on_event.register(KeyRepeatEvent)
    def _on_repeat(self, event: KeyRepeatEvent) -> None:
        # Repeats leave the pressed state unchanged.
        return None

    def is_key_pressed(self, key_code: int) -> bool:
        """Return True if the key is currently held down."""
        return self._key_states.get(int(key_code), False)


class Mouse:
    """Tracks mouse buttons, cursor position and scroll offset."""

    _instance: Mouse | None = None
    _lock = threading.Lock()

    def __init__(self) -> None:
        self.left_button_pressed = False
        self.right_button_pressed = False
        self.cursor_pos_x = 0.0
        self.cursor_pos_y = 0.0
        self.last_cursor_pos_x = 0.0
        self.last_cursor_pos_y = 0.0
        self.scroll_offset_y = 0.0
        self.scroll_sensitivity = 0.2

    @classmethod
    def instance(cls) -> Mouse:
        """Return the shared mouse, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @singledispatchmethod
    def on_event(self, event: Event) -> None:
        """Update mouse state from a mouse event."""
        raise TypeError(f"Mouse cannot handle {type(event).__name__}")

    @on_event.register(MousePressEvent)
    def _on_press(self, event: MousePressEvent) -> None:
        if event.button == MouseButton.LEFT:
            logger.debug("left button clicked.")
            self.left_button_pressed = True
        elif event.button == MouseButton.RIGHT:
            logger.debug("right button clicked.")
            self.right_button_pressed = True

    @on_event.register(MouseReleaseEvent)
    def _on_release(self, event: MouseReleaseEvent) -> None:
        if event.button == MouseButton.LEFT:
            self.left_button_pressed = False
        elif event.button == MouseButton.RIGHT:
            self.right_button_pressed = False

    @on_event.register(MouseMoveEvent)
    def _on_move(self, event: MouseMoveEvent) -> None:
        self.last_cursor_pos_x = self.cursor_pos_x
        self.last_cursor_pos_y = self.cursor_pos_y
        self.cursor_pos_x = event.cursor_pos_x
        self.cursor_pos_y = event.cursor_pos_y

    @on_event.register(MouseScrollEvent)
    def _on_scroll(self, event: MouseScrollEvent) -> None:
        self.scroll_offset_y = event.offset_y * self.scroll_sensitivity
        logger.debug("mouse scrolled. Scroll Y: %s", event.offset_y)

    def position_offset(self) -> tuple[float, float]:
        """Return the cursor movement since the last recorded position."""
        return (
            self.cursor_pos_x - self.last_cursor_pos_x,
            self.cursor_pos_y - self.last_cursor_pos_y,
        )

    def update(self) -> None:
        """Start a new frame: forget movement and scroll since the last one."""
        self.last_cursor_pos_x = self.cursor_pos_x
        self.last_cursor_pos_y = self.cursor_pos_y
        self.scroll_offset_y = 0.0