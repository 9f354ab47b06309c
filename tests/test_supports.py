from __future__ import annotations

import pytest

from partsmith.modeling import count_components
from partsmith.modeling import make_support

from tests.helpers import assert_solid


def test_plates_are_spread_evenly() -> None:
    support = make_support((20.0, 10.0, 10.0), plate_thickness=1.0, spacing=4.75)
    assert_solid(support)
    assert count_components(support) == 5
    assert support.volume == pytest.approx(5 * 100.0)
    assert support.bounds == pytest.approx((0.0, 20.0, 0.0, 10.0, 0.0, 10.0))


def test_short_span_still_has_two_plates() -> None:
    support = make_support((3.0, 5.0, 5.0), plate_thickness=0.8, spacing=10.0)
    assert count_components(support) == 2


def test_cross_braces_join_the_plates() -> None:
    support = make_support((20.0, 10.0, 10.0), plate_thickness=1.0, spacing=4.75, cross_braces=True)
    assert_solid(support)
    assert count_components(support) == 1
    assert support.volume > 500.0


def test_perforation_removes_material() -> None:
    solid = make_support((20.0, 10.0, 10.0), plate_thickness=1.0, spacing=4.75)
    holed = make_support((20.0, 10.0, 10.0), plate_thickness=1.0, spacing=4.75, perforation=2.0)
    assert_solid(holed)
    assert holed.volume < solid.volume - 40.0
