# torchcore

The core pieces of a small rendering engine. It is written in plain Python and
has no third-party dependencies.

## Modules

### `torchcore.events`

- `EventType` lists the kinds of event.
- `EventCategory` is a set of bit flags (`CATEGORY_INPUT_FLAG`,
  `CATEGORY_MOUSE_FLAG`, `CATEGORY_MOUSE_BUTTON_FLAG`,
  `CATEGORY_KEYBOARD_FLAG`, `CATEGORY_WINDOW_FLAG`).
- `is_in_category(category, check)` returns whether two flag sets overlap.
- The event classes are dataclasses. Each fixes `event_type`, `name` and
  `categories`:
  - `KeyPressEvent`, `KeyReleaseEvent`, `KeyRepeatEvent` carry `key_code`,
    `scancode` and `mods`.
  - `MouseMoveEvent` carries `cursor_pos_x` and `cursor_pos_y`.
  - `MousePressEvent` and `MouseReleaseEvent` carry `button`.
  - `MouseScrollEvent` carries `offset_x` and `offset_y`.
  - `WindowResizeEvent` carries `width` and `height`.
- Every event has a `handled` flag and an `is_category(category)` method.
- `EventDispatcher(event)` routes an event by its type:
  - `dispatch(event_class, handler)` calls the handler only when the event has
    the same type as `event_class`. The handler's result is stored in
    `event.handled`. The method returns whether the handler was called.
  - `dispatch_all(handler, *event_classes)` tries each class in turn and
    returns True if any of them matched.

### `torchcore.input`

- `KeyCode` is an `IntEnum` of key codes. `MouseButton` has the members
  `LEFT` (0) and `RIGHT` (1).
- `Keyboard` records which keys are held down. `Keyboard.instance()` returns
  the shared keyboard.
  - `on_event(event)` accepts key press, release and repeat events. A repeat
    leaves the state unchanged. Any other event raises `TypeError`.
  - `is_key_pressed(key_code)` returns whether that key is held down.
- `Mouse` records the mouse state. `Mouse.instance()` returns the shared
  mouse.
  - `on_event(event)` accepts press, release, move and scroll events. Any
    other event raises `TypeError`.
  - Its state is kept in the attributes `left_button_pressed`,
    `right_button_pressed`, `cursor_pos_x`, `cursor_pos_y`,
    `last_cursor_pos_x`, `last_cursor_pos_y` and `scroll_offset_y`.
  - The scroll offset is the event's y offset multiplied by
    `scroll_sensitivity`, which defaults to 0.2.
  - `position_offset()` returns `(dx, dy)`, the movement since the last
    recorded position.
  - `update()` starts a new frame. It sets the last position to the current
    one and clears the scroll offset.

### `torchcore.window`

- `WindowSpecification` has `width` (default 800), `height` (default 600) and
  `title` (default `"Default Window"`).
- `InputAction` has the members `RELEASE`, `PRESS` and `REPEAT`.
- `Window(specification=None, *, mouse=None, keyboard=None)` turns raw
  callback values into events. It uses the shared `Mouse` and `Keyboard`
  unless others are given.
  - The callbacks are `on_window_size(width, height)`,
    `on_cursor_pos(x, y)`, `on_mouse_button(button, action, mods)`,
    `on_scroll(x, y)` and `on_key(key, scancode, action, mods)`.
  - Mouse buttons other than 0 (left) and 1 (right) are ignored.
  - `on_event(event)` calls the handler for the event's type from the
    `handlers` dict. It returns False when no handler exists.
  - A resize sets `is_resized`, and so does `set_window_size`.
    `reset_is_resize()` clears it.

### `torchcore.formats`

- `InternalFormat`, `Format` and `AttachmentType` are enums of
  framebuffer formats.
- `internal_format_value`, `format_value` and `attachment_type_value` map
  those enums to their OpenGL enum values. `InternalFormat.NONE` maps to 0.
- `Attachment` holds the size and pixel layout of one attachment.
- `Framebuffer.add_attachments(attachments)` replaces the attachment list.
  It fills `draw_buffers` with `GL_COLOR_ATTACHMENT0 + i` for each
  attachment.
- `Framebuffer.on_update(width, height)` resizes every attachment.

### `torchcore.model`

- `read_gltf(path)` and `read_glb(path)` return the glTF JSON document and
  the bytes of its buffers. Buffers may be base64 `data:` URIs, files next to
  the model, or the GLB binary chunk.
- `process_meshes(document, buffers)` turns every mesh primitive into a
  `MeshPrimitive`. The primitive's `vertices` are interleaved as position,
  normal and UV, 8 floats per vertex. Its `indices` are plain ints. The
  properties `vertex_count` and `index_count` give the sizes.
  - A missing normal defaults to `(0, 0, 1)` and a missing UV to `(0, 0)`.
  - A primitive whose index type is not an unsigned byte, short or int is
    skipped and an error is logged.
- `model_name_from_path(path)` returns the file name without its extension.
  It returns `""` when there is no directory separator before the extension.
- `Model().load(path)` loads a `.gltf` or `.glb` file. It sets `path` and
  `name` and appends to `primitives`.
- `ModelLoadError` is raised in these cases:
  - the extension is unsupported;
  - a file or buffer cannot be read;
  - the JSON or GLB structure is invalid;
  - a primitive has no indices or no `POSITION` attribute;
  - a primitive refers to data that is missing or too short.

## What this package does not do

The package only keeps state and prepares data. It does not:

- open an operating-system window, so `Window` only receives the callback
  values you pass to it;
- create any GPU objects, so `Framebuffer` only describes attachments and
  `Model` only produces vertex and index lists;
- draw anything.

## Installation

```
pip install .
```

To run the tests, install the test extra:

```
pip install .[test]
pytest
```

## Example

```python
from torchcore.events import EventDispatcher, KeyPressEvent
from torchcore.input import Keyboard, KeyCode

event = KeyPressEvent(KeyCode.KEY_W, 17, 0)
dispatcher = EventDispatcher(event)
dispatcher.dispatch(KeyPressEvent, lambda e: True)
assert event.handled

keyboard = Keyboard.instance()
keyboard.on_event(event)
assert keyboard.is_key_pressed(KeyCode.KEY_W)
```

Routing raw input through a window:

```python
from torchcore.window import InputAction, Window

window = Window()
window.on_cursor_pos(10.0, 20.0)
window.on_mouse_button(0, InputAction.PRESS, 0)
assert window.mouse.left_button_pressed
```

Loading a model:

```python
from torchcore.model import Model

model = Model()
model.load("assets/cube.gltf")
for primitive in model.primitives:
    print(primitive.vertex_count, "vertices,", primitive.index_count, "indices")
```