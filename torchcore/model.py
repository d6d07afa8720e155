"""Loading of glTF models into interleaved vertex and index data."""

from __future__ import annotations

import base64
import json
import logging
import os
import struct
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

GLB_MAGIC = 0x46546C67
GLB_CHUNK_JSON = 0x4E4F534A
GLB_CHUNK_BIN = 0x004E4942

COMPONENT_TYPE_UNSIGNED_BYTE = 5121
COMPONENT_TYPE_UNSIGNED_SHORT = 5123
COMPONENT_TYPE_UNSIGNED_INT = 5125

_INDEX_CODES = {
    COMPONENT_TYPE_UNSIGNED_INT: "I",
    COMPONENT_TYPE_UNSIGNED_SHORT: "H",
    COMPONENT_TYPE_UNSIGNED_BYTE: "B",
}

DEFAULT_NORMAL = (0.0, 0.0, 1.0)
DEFAULT_UV = (0.0, 0.0)

# Floats per vertex: position (3), normal (3), texture coordinate (2).
VERTEX_STRIDE = 8


class ModelLoadError(Exception):
    """Raised when a model file cannot be read or interpreted."""


@dataclass
class MeshPrimitive:
    """One drawable primitive: interleaved vertices and triangle indices."""

    vertices: list[float] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)

    @property
    def vertex_count(self) -> int:
        return len(self.vertices) // VERTEX_STRIDE

    @property
    def index_count(self) -> int:
        return len(self.indices)


def model_name_from_path(path: str) -> str:
    """Return the file name without extension, or "" if the path has no
    directory separator followed by an extension."""
    last_slash = max(path.rfind("/"), path.rfind("\\"))
    last_dot = path.rfind(".")
    if last_slash != -1 and last_dot != -1 and last_dot > last_slash:
        return path[last_slash + 1 : last_dot]
    return ""


def _load_uri(uri: str, base_dir: Path) -> bytes:
    if uri.startswith("data:"):
        header, sep, payload = uri.partition(",")
        if not sep or not header.endswith(";base64"):
            raise ModelLoadError(f"unsupported data URI: {header}")
        try:
            return base64.b64decode(payload, validate=True)
        except ValueError as exc:
            raise ModelLoadError(f"invalid base64 data URI: {exc}") from exc
    try:
        return (base_dir / uri).read_bytes()
    except OSError as exc:
        raise ModelLoadError(f"cannot read buffer {uri!r}: {exc}") from exc


def _parse_json(text: bytes | str) -> dict[str, Any]:
    try:
        document = json.loads(text)
    except (ValueError, UnicodeDecodeError) as exc:
        raise ModelLoadError(f"invalid glTF JSON: {exc}") from exc
    if not isinstance(document, dict):
        raise ModelLoadError("glTF document is not a JSON object")
    return document


def read_gltf(path: str | os.PathLike[str]) -> tuple[dict[str, Any], list[bytes]]:
    """Read a text glTF file; return its document and the bytes of its buffers."""
    file_path = Path(path)
    try:
        raw = file_path.read_bytes()
    except OSError as exc:
        raise ModelLoadError(f"cannot read {file_path}: {exc}") from exc
    document = _parse_json(raw)
    buffers = []
    for index, buffer in enumerate(document.get("buffers", [])):
        uri = buffer.get("uri")
        if uri is None:
            raise ModelLoadError(f"buffer {index} has no uri")
        buffers.append(_load_uri(uri, file_path.parent))
    return document, buffers


def read_glb(path: str | os.PathLike[str]) -> tuple[dict[str, Any], list[bytes]]:
    """Read a binary glTF file; return its document and the bytes of its buffers."""
    file_path = Path(path)
    try:
        data = file_path.read_bytes()
    except OSError as exc:
        raise ModelLoadError(f"cannot read {file_path}: {exc}") from exc
    if len(data) < 12:
        raise ModelLoadError("file too short for a GLB header")
    magic, _version, length = struct.unpack_from("<III", data, 0)
    if magic != GLB_MAGIC:
        raise ModelLoadError("invalid GLB magic")
    if length > len(data):
        raise ModelLoadError("GLB length exceeds file size")

    chunks: list[tuple[int, bytes]] = []
    offset = 12
    while offset + 8 <= length:
        chunk_length, chunk_type = struct.unpack_from("<II", data, offset)
        start = offset + 8
        end = start + chunk_length
        if end > length:
            raise ModelLoadError("GLB chunk exceeds file length")
        chunks.append((chunk_type, data[start:end]))
        offset = end

    if not chunks or chunks[0][0] != GLB_CHUNK_JSON:
        raise ModelLoadError("GLB file does not start with a JSON chunk")
    document = _parse_json(chunks[0][1])
    binary = next((body for kind, body in chunks[1:] if kind == GLB_CHUNK_BIN), None)

    buffers = []
    for index, buffer in enumerate(document.get("buffers", [])):
        uri = buffer.get("uri")
        if uri is not None:
            buffers.append(_load_uri(uri, file_path.parent))
        elif index == 0 and binary is not None:
            buffers.append(binary)
        else:
            raise ModelLoadError(f"buffer {index} has no data")
    return document, buffers


def _accessor_location(
    document: dict[str, Any], buffers: list[bytes], accessor: dict[str, Any]
) -> tuple[bytes, int]:
    view = document["bufferViews"][accessor["bufferView"]]
    data = buffers[view["buffer"]]
    return data, view.get("byteOffset", 0) + accessor.get("byteOffset", 0)


def _read_floats(
    document: dict[str, Any], buffers: list[bytes], accessor_index: int, components: int
) -> tuple[float, ...]:
    accessor = document["accessors"][accessor_index]
    data, offset = _accessor_location(document, buffers, accessor)
    count = accessor["count"] * components
    return struct.unpack_from(f"<{count}f", data, offset)


def _process_primitive(
    document: dict[str, Any], buffers: list[bytes], primitive: dict[str, Any]
) -> MeshPrimitive | None:
    if "indices" not in primitive:
        raise ModelLoadError("primitive has no indices")
    index_accessor = document["accessors"][primitive["indices"]]
    code = _INDEX_CODES.get(index_accessor.get("componentType"))
    if code is None:
        logger.error(
            "Unsupported index type. Only unsigned int, unsigned short, "
            "and unsigned byte are supported."
        )
        return None
    data, offset = _accessor_location(document, buffers, index_accessor)
    indices = list(struct.unpack_from(f"<{index_accessor['count']}{code}", data, offset))

    attributes = primitive.get("attributes", {})
    if "POSITION" not in attributes:
        raise ModelLoadError("primitive has no POSITION attribute")
    position_count = document["accessors"][attributes["POSITION"]]["count"]
    positions = _read_floats(document, buffers, attributes["POSITION"], 3)
    normals = (
        _read_floats(document, buffers, attributes["NORMAL"], 3)
        if "NORMAL" in attributes
        else ()
    )
    uvs = (
        _read_floats(document, buffers, attributes["TEXCOORD_0"], 2)
        if "TEXCOORD_0" in attributes
        else ()
    )

    vertices: list[float] = []
    for i in range(position_count):
        vertices.extend(positions[i * 3 : i * 3 + 3])
        if normals:
            normal = normals[i * 3 : i * 3 + 3]
            if len(normal) != 3:
                raise ModelLoadError("NORMAL attribute has fewer entries than POSITION")
            vertices.extend(normal)
        else:
            vertices.extend(DEFAULT_NORMAL)
        if uvs:
            uv = uvs[i * 2 : i * 2 + 2]
            if len(uv) != 2:
                raise ModelLoadError("TEXCOORD_0 attribute has fewer entries than POSITION")
            vertices.extend(uv)
        else:
            vertices.extend(DEFAULT_UV)
    return MeshPrimitive(vertices=vertices, indices=indices)


def process_meshes(document: dict[str, Any], buffers: list[bytes]) -> list[MeshPrimitive]:
    """Turn every mesh primitive of a glTF document into interleaved data.

    Primitives whose indices are not unsigned bytes, shorts or ints are skipped.
    """
    result = []
    for mesh in document.get("meshes", []):
        for primitive in mesh.get("primitives", []):
            try:
                processed = _process_primitive(document, buffers, primitive)
            except (KeyError, IndexError, TypeError, struct.error) as exc:
                raise ModelLoadError(f"malformed primitive: {exc!r}") from exc
            if processed is not None:
                result.append(processed)
    return result


class Model:
    """A model made of mesh primitives loaded from glTF files."""

    def __init__(self) -> None:
        self.path = ""
        self.name = ""
        self.primitives: list[MeshPrimitive] = []

    def load(self, model_path: str | os.PathLike[str]) -> None:
        """Load a .gltf or .glb file and append its primitives."""
        model_path = os.fspath(model_path)
        self.path = model_path
        self.name = model_name_from_path(model_path)
        extension = model_path[model_path.rfind(".") + 1 :]
        if extension == "gltf":
            document, buffers = read_gltf(model_path)
        elif extension == "glb":
            document, buffers = read_glb(model_path)
        else:
            raise ModelLoadError("Unsupported file format.")
        self.primitives.extend(process_meshes(document, buffers))
        logger.info("Success: Load model successfully.")