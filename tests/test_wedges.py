from __future__ import annotations

import math

import pytest

from partsmith.modeling import make_box, make_wedge, wedge_trim

from tests.helpers import assert_solid


def test_quarter_wedge_volume() -> None:
    wedge = make_wedge(10.0, 2.0, 90.0)
    assert_solid(wedge)
    assert wedge.volume == pytest.approx(50.0 * math.pi, rel=0.01)
    xmin, _, ymin, _, zmin, zmax = wedge.bounds
    assert xmin == pytest.approx(0.0, abs=1e-9)
    assert ymin == pytest.approx(0.0, abs=1e-9)
    assert (zmin, zmax) == pytest.approx((0.0, 2.0))


def test_full_sweep_is_a_cylinder() -> None:
    wedge = make_wedge(1.0, 2.0, 360.0, resolution=32)
    assert wedge.bounds[4] == pytest.approx(0.0)
    assert wedge.volume == pytest.approx(2.0 * math.pi, rel=0.01)


def test_trim_removes_a_quadrant() -> None:
    box = make_box(size=(10.0, 10.0, 2.0))
    trimmed = wedge_trim(box, 0.0, 90.0)
    assert_solid(trimmed)
    assert trimmed.volume == pytest.approx(150.0, rel=1e-4)


def test_trim_keep_retains_the_quadrant() -> None:
    box = make_box(size=(10.0, 10.0, 2.0))
    kept = wedge_trim(box, 0.0, 90.0, keep=True)
    assert kept.volume == pytest.approx(50.0, rel=1e-4)
    xmin, _, ymin, _, _, _ = kept.bounds
    assert xmin >= -1e-6 and ymin >= -1e-6


def test_trim_wraps_negative_angles() -> None:
    box = make_box(size=(10.0, 10.0, 2.0))
    trimmed = wedge_trim(box, -45.0, 45.0)
    assert trimmed.volume == pytest.approx(150.0, rel=1e-4)


def test_full_removal_is_empty() -> None:
    assert wedge_trim(make_box(), 0.0, 360.0).is_empty


def test_zero_span_leaves_mesh_untouched() -> None:
    box = make_box(size=(2.0, 2.0, 2.0))
    trimmed = wedge_trim(box, 30.0, 30.0)
    assert not trimmed.is_empty
    assert trimmed.volume == pytest.approx(8.0)
    assert trimmed is not box
    assert wedge_trim(box, 30.0, 30.0, keep=True).is_empty
    assert wedge_trim(box, 30.0, 390.0).is_empty
