"""Framebuffer attachment descriptions and their graphics-API enum values."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterable

GL_RGB = 0x1907
GL_R32I = 0x8235
GL_RGBA32F = 0x8814
GL_RGBA16F = 0x881A
GL_DEPTH_COMPONENT = 0x1902
GL_FLOAT = 0x1406
GL_INT = 0x1404
GL_UNSIGNED_BYTE = 0x1401
GL_COLOR_ATTACHMENT0 = 0x8CE0
GL_DEPTH_ATTACHMENT = 0x8D00


@dataclass
class Attachment:
    """Size and pixel layout of one framebuffer attachment."""

    width: int
    height: int
    internal_format: int
    format: int
    pixel_type: int


class InternalFormat(enum.Enum):
    NONE = enum.auto()
    RGB = enum.auto()
    R32I = enum.auto()
    RGBA32F = enum.auto()
    RGBA16F = enum.auto()
    DEPTH_COMPONENT = enum.auto()


class Format(enum.Enum):
    FLOAT = enum.auto()
    INT = enum.auto()
    UNSIGNED_BYTE = enum.auto()
    DEPTH_COMPONENT = enum.auto()


class AttachmentType(enum.Enum):
    COLOR_ATTACHMENT = enum.auto()
    DEPTH_ATTACHMENT = enum.auto()


_INTERNAL_FORMATS = {
    InternalFormat.NONE: 0,
    InternalFormat.RGB: GL_RGB,
    InternalFormat.R32I: GL_R32I,
    InternalFormat.RGBA32F: GL_RGBA32F,
    InternalFormat.RGBA16F: GL_RGBA16F,
    InternalFormat.DEPTH_COMPONENT: GL_DEPTH_COMPONENT,
}

_FORMATS = {
    Format.FLOAT: GL_FLOAT,
    Format.INT: GL_INT,
    Format.UNSIGNED_BYTE: GL_UNSIGNED_BYTE,
    Format.DEPTH_COMPONENT: GL_DEPTH_COMPONENT,
}

_ATTACHMENT_TYPES = {
    AttachmentType.COLOR_ATTACHMENT: GL_COLOR_ATTACHMENT0,
    AttachmentType.DEPTH_ATTACHMENT: GL_DEPTH_ATTACHMENT,
}


def internal_format_value(fmt: InternalFormat) -> int:
    """Return the API value of an internal format; 0 for NONE or unknown."""
    return _INTERNAL_FORMATS.get(fmt, 0)


def format_value(fmt: Format) -> int:
    """Return the API value of a pixel format; 0 if unknown."""
    return _FORMATS.get(fmt, 0)


def attachment_type_value(attachment_type: AttachmentType) -> int:
    """Return the API attachment point; 0 if unknown."""
    return _ATTACHMENT_TYPES.get(attachment_type, 0)


@dataclass
class Framebuffer:
    """A set of color attachments and the draw buffers they map to."""

    attachments: list[Attachment] = field(default_factory=list)
    draw_buffers: list[int] = field(default_factory=list)

    def add_attachments(self, attachments: Iterable[Attachment]) -> None:
        """Replace the attachments; each gets the next color attachment point."""
        self.attachments = list(attachments)
        self.draw_buffers = [
            GL_COLOR_ATTACHMENT0 + index for index, _ in enumerate(self.attachments)
        ]

    def on_update(self, width: int, height: int) -> None:
        """Resize every attachment."""
        for attachment in self.attachments:
            attachment.width = width
            attachment.height = height