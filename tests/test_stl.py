from __future__ import annotations

import numpy as np
import pytest

from partsmith.io import write_stl
from partsmith.io.stl import face_normals
from partsmith.modeling import make_box


def test_binary_stl_layout(tmp_path) -> None:
    box = make_box()
    path = tmp_path / "box.stl"
    write_stl(box, path)

    data = path.read_bytes()
    assert len(data) == 84 + 50 * box.n_faces
    assert int(np.frombuffer(data[80:84], dtype="<u4")[0]) == box.n_faces


def test_ascii_stl(tmp_path) -> None:
    path = tmp_path / "box.stl"
    write_stl(make_box(), path, ascii=True)
    text = path.read_text()
    assert text.startswith("solid partsmith")
    assert text.count("facet normal") == 12
    assert text.rstrip().endswith("endsolid partsmith")


def test_face_normals_point_outward() -> None:
    box = make_box(size=(2.0, 2.0, 2.0))
    normals = face_normals(box)
    centroids = box.vertices[box.faces].mean(axis=1)
    assert np.all(np.einsum("ij,ij->i", normals, centroids) > 0)
    assert np.linalg.norm(normals, axis=1) == pytest.approx(np.ones(12))
