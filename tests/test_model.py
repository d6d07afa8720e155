import base64
import json
import struct

import pytest

from torchcore.model import (
    MeshPrimitive,
    Model,
    ModelLoadError,
    model_name_from_path,
    process_meshes,
    read_glb,
    read_gltf,
)

POSITIONS = [0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0, 0.0]
NORMALS = [0.0, 1.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 0.0]
UVS = [0.0, 0.0, 1.0, 0.0, 0.5, 1.0]
INDICES = [0, 1, 2]


def _pad(data, fill=b"\x00"):
    return data + fill * (-len(data) % 4)


def _make(indices=INDICES, index_type=5123, normals=None, uvs=None):
    code = {5121: "B", 5123: "H", 5125: "I", 5126: "f"}[index_type]
    blob = b""
    views = []
    accessors = []

    def add(payload, count, component_type, kind):
        nonlocal blob
        views.append({"buffer": 0, "byteOffset": len(blob), "byteLength": len(payload)})
        accessors.append(
            {"bufferView": len(views) - 1, "count": count,
             "componentType": component_type, "type": kind}
        )
        blob = _pad(blob + payload)
        return len(accessors) - 1

    index_accessor = add(
        struct.pack(f"<{len(indices)}{code}", *indices), len(indices), index_type, "SCALAR"
    )
    attributes = {
        "POSITION": add(struct.pack(f"<{len(POSITIONS)}f", *POSITIONS), 3, 5126, "VEC3")
    }
    if normals is not None:
        attributes["NORMAL"] = add(struct.pack(f"<{len(normals)}f", *normals), 3, 5126, "VEC3")
    if uvs is not None:
        attributes["TEXCOORD_0"] = add(struct.pack(f"<{len(uvs)}f", *uvs), 3, 5126, "VEC2")
    document = {
        "asset": {"version": "2.0"},
        "buffers": [{"byteLength": len(blob)}],
        "bufferViews": views,
        "accessors": accessors,
        "meshes": [{"primitives": [{"indices": index_accessor, "attributes": attributes}]}],
    }
    return document, blob


def _write_gltf(path, document, blob):
    document = json.loads(json.dumps(document))
    document["buffers"][0]["uri"] = (
        "data:application/octet-stream;base64," + base64.b64encode(blob).decode()
    )
    path.write_text(json.dumps(document))


def _write_glb(path, document, blob):
    json_chunk = _pad(json.dumps(document).encode(), b" ")
    bin_chunk = _pad(blob)
    body = (
        struct.pack("<II", len(json_chunk), 0x4E4F534A) + json_chunk
        + struct.pack("<II", len(bin_chunk), 0x004E4942) + bin_chunk
    )
    path.write_bytes(struct.pack("<III", 0x46546C67, 2, 12 + len(body)) + body)


def _vertex(primitive, i):
    return primitive.vertices[i * 8 : i * 8 + 8]


@pytest.mark.parametrize(
    "path, expected",
    [
        ("assets/models/helmet.gltf", "helmet"),
        ("C:\\models\\box.glb", "box"),
        ("model.gltf", ""),
        ("dir.v2/file", ""),
    ],
)
def test_model_name_from_path(path, expected):
    assert model_name_from_path(path) == expected


def test_process_meshes_defaults_normal_and_uv():
    document, blob = _make()
    primitives = process_meshes(document, [blob])
    assert len(primitives) == 1
    primitive = primitives[0]
    assert primitive.indices == INDICES
    assert primitive.vertex_count == 3
    assert primitive.index_count == 3
    for i in range(3):
        vertex = _vertex(primitive, i)
        assert vertex[:3] == POSITIONS[i * 3 : i * 3 + 3]
        assert vertex[3:6] == [0.0, 0.0, 1.0]
        assert vertex[6:] == [0.0, 0.0]


def test_process_meshes_uses_normals_and_uvs():
    document, blob = _make(normals=NORMALS, uvs=UVS)
    primitive = process_meshes(document, [blob])[0]
    for i in range(3):
        vertex = _vertex(primitive, i)
        assert vertex[:3] == POSITIONS[i * 3 : i * 3 + 3]
        assert vertex[3:6] == NORMALS[i * 3 : i * 3 + 3]
        assert vertex[6:] == UVS[i * 2 : i * 2 + 2]


@pytest.mark.parametrize("index_type", [5121, 5123, 5125])
def test_index_component_types(index_type):
    document, blob = _make(indices=[2, 1, 0], index_type=index_type)
    assert process_meshes(document, [blob])[0].indices == [2, 1, 0]


def test_unsupported_index_type_is_skipped():
    document, blob = _make(indices=[0.0, 1.0, 2.0], index_type=5126)
    assert process_meshes(document, [blob]) == []


def test_missing_position_raises():
    document, blob = _make()
    del document["meshes"][0]["primitives"][0]["attributes"]["POSITION"]
    with pytest.raises(ModelLoadError):
        process_meshes(document, [blob])


def test_truncated_buffer_raises():
    document, blob = _make()
    with pytest.raises(ModelLoadError):
        process_meshes(document, [blob[:8]])


def test_gltf_and_glb_give_same_primitives(tmp_path):
    document, blob = _make(normals=NORMALS, uvs=UVS)
    _write_gltf(tmp_path / "tri.gltf", document, blob)
    _write_glb(tmp_path / "tri.glb", document, blob)
    from_text = process_meshes(*read_gltf(tmp_path / "tri.gltf"))
    from_binary = process_meshes(*read_glb(tmp_path / "tri.glb"))
    assert from_text == from_binary
    assert from_text[0] == MeshPrimitive(
        vertices=process_meshes(document, [blob])[0].vertices, indices=INDICES
    )


def test_read_gltf_external_buffer(tmp_path):
    document, blob = _make()
    document["buffers"][0]["uri"] = "tri.bin"
    (tmp_path / "tri.bin").write_bytes(blob)
    (tmp_path / "tri.gltf").write_text(json.dumps(document))
    _, buffers = read_gltf(tmp_path / "tri.gltf")
    assert buffers == [blob]


def test_read_glb_bad_magic(tmp_path):
    path = tmp_path / "bad.glb"
    path.write_bytes(struct.pack("<III", 0x12345678, 2, 12))
    with pytest.raises(ModelLoadError):
        read_glb(path)


def test_read_gltf_invalid_json(tmp_path):
    path = tmp_path / "bad.gltf"
    path.write_text("{not json")
    with pytest.raises(ModelLoadError):
        read_gltf(path)


def test_model_load_sets_path_name_and_primitives(tmp_path):
    document, blob = _make()
    path = tmp_path / "triangle.glb"
    _write_glb(path, document, blob)
    model = Model()
    model.load(str(path))
    assert model.path == str(path)
    assert model.name == "triangle"
    assert [p.indices for p in model.primitives] == [INDICES]


def test_model_load_appends(tmp_path):
    document, blob = _make()
    path = tmp_path / "triangle.gltf"
    _write_gltf(path, document, blob)
    model = Model()
    model.load(path)
    model.load(path)
    assert len(model.primitives) == 2
    assert model.primitives[0] == model.primitives[1]


def test_model_load_unsupported_extension(tmp_path):
    model = Model()
    path = str(tmp_path / "mesh.obj")
    with pytest.raises(ModelLoadError):
        model.load(path)
    assert model.name == "mesh"
    assert model.primitives == []


def test_model_load_missing_file(tmp_path):
    with pytest.raises(ModelLoadError):
        Model().load(str(tmp_path / "absent.gltf"))