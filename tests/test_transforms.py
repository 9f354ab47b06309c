from __future__ import annotations

import numpy as np
import pytest

from partsmith.modeling import group, make_box, mirror, rotate, scale, translate
from partsmith.modeling.transform import multmatrix, rotation_matrix


def _bounds(mesh):
    return np.array(mesh.bounds, dtype=float)


def test_translate_returns_copy() -> None:
    base = make_box(size=(2.0, 4.0, 6.0))
    moved = translate(base, (1.0, 2.0, 3.0))
    assert np.allclose(_bounds(moved), np.array([0.0, 2.0, 0.0, 4.0, 0.0, 6.0]))
    assert np.allclose(_bounds(base), np.array([-1.0, 1.0, -2.0, 2.0, -3.0, 3.0]))


def test_rotate_axis_z_90() -> None:
    base = make_box(size=(2.0, 4.0, 1.0))
    turned = rotate(base, axis=(0.0, 0.0, 1.0), angle_deg=90.0)
    bounds = _bounds(turned)
    assert np.allclose(bounds[[0, 1]], [-2.0, 2.0], atol=1e-6)
    assert np.allclose(bounds[[2, 3]], [-1.0, 1.0], atol=1e-6)


def test_rotate_about_origin_point() -> None:
    base = make_box(size=(1.0, 1.0, 1.0), center=(2.0, 0.0, 0.0))
    turned = rotate(base, axis=(0.0, 0.0, 1.0), angle_deg=180.0, origin=(1.0, 0.0, 0.0))
    center = turned.vertices.mean(axis=0)
    assert np.allclose(center, [0.0, 0.0, 0.0], atol=1e-9)


def test_scale_uniform_and_per_axis() -> None:
    base = make_box(size=(1.0, 1.0, 1.0))
    assert scale(base, 2.0).volume == pytest.approx(8.0)
    stretched = scale(base, (1.0, 2.0, 3.0))
    assert stretched.volume == pytest.approx(6.0)


def test_mirror_keeps_outward_winding() -> None:
    base = make_box(size=(1.0, 2.0, 3.0), center=(2.0, 0.0, 0.0))
    flipped = mirror(base, (1.0, 0.0, 0.0))
    assert flipped.volume == pytest.approx(base.volume)
    assert np.allclose(_bounds(flipped)[[0, 1]], [-2.5, -1.5])


def test_multmatrix_requires_4x4() -> None:
    with pytest.raises(ValueError):
        multmatrix(make_box(), np.eye(3))
    moved = multmatrix(make_box(), rotation_matrix((1.0, 0.0, 0.0), 90.0))
    assert moved.volume == pytest.approx(1.0)


def test_rotation_axis_must_be_non_zero() -> None:
    with pytest.raises(ValueError):
        rotate(make_box(), axis=(0.0, 0.0, 0.0), angle_deg=10.0)


def test_group_transforms_apply_in_order() -> None:
    parts = group([make_box(), make_box(center=(3.0, 0.0, 0.0))])
    parts.translate((1.0, 0.0, 0.0)).rotate((0.0, 0.0, 1.0), 90.0)
    meshes = parts.to_meshes()
    assert len(parts) == 2
    assert np.allclose(meshes[1].vertices.mean(axis=0), [0.0, 4.0, 0.0], atol=1e-9)
    assert parts.to_mesh().n_faces == 24
