from __future__ import annotations

import numpy as np
import pytest

from partsmith.mesh import (
    Mesh,
    analyze_mesh,
    combine_meshes,
    empty_mesh,
    mesh_volume,
    triangulate_faces,
)
from partsmith.modeling import make_box


def test_triangulate_faces_fans_polygons() -> None:
    tris = triangulate_faces([(0, 1, 2, 3), (4, 5), (6, 7, 8)])
    assert tris.tolist() == [[0, 1, 2], [0, 2, 3], [6, 7, 8]]
    assert triangulate_faces([]).shape == (0, 3)


def test_analyze_closed_box() -> None:
    analysis = analyze_mesh(make_box())
    assert analysis.is_watertight
    assert analysis.is_consistently_oriented
    assert analysis.issues() == []


def test_analyze_reports_open_and_misoriented_edges() -> None:
    box = make_box()
    open_box = Mesh(box.vertices, box.faces[:-1])
    assert analyze_mesh(open_box).boundary_edges > 0

    flipped = box.copy()
    flipped.faces[0] = flipped.faces[0][[0, 2, 1]]
    analysis = analyze_mesh(flipped)
    assert analysis.misoriented_edges > 0
    assert "inconsistent winding" in " ".join(analysis.issues())


def test_volume_sign_follows_winding() -> None:
    box = make_box(size=(1.0, 2.0, 3.0))
    inverted = Mesh(box.vertices, box.faces[:, [0, 2, 1]])
    assert mesh_volume(box) == pytest.approx(6.0)
    assert mesh_volume(inverted) == pytest.approx(-6.0)
    assert mesh_volume(empty_mesh()) == 0.0


def test_transform_inplace_resets_analysis() -> None:
    box = make_box()
    analyze_mesh(box)
    assert box.analysis is not None
    box.transform(np.diag([1.0, 1.0, -1.0, 1.0]))
    assert box.analysis is None
    assert box.volume == pytest.approx(1.0)


def test_combine_offsets_face_indices() -> None:
    a = make_box()
    b = make_box(center=(3.0, 0.0, 0.0))
    combined = combine_meshes([a, b])
    assert combined.n_faces == a.n_faces + b.n_faces
    assert combined.faces.min() == 0
    assert combined.faces.max() == a.n_vertices + b.n_vertices - 1
    assert combined.volume == pytest.approx(2.0)
