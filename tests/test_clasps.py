from __future__ import annotations

import pytest

from partsmith.modeling import count_components
from partsmith.modeling import boolean_intersection, make_clasp, make_clasp_catch, make_clasp_hook

from tests.helpers import assert_solid


def test_hook_is_one_solid() -> None:
    hook = make_clasp_hook()
    assert_solid(hook)
    assert count_components(hook) == 1

    _, _, _, ymax, zmin, zmax = hook.bounds
    assert zmin == pytest.approx(0.0)
    assert zmax == pytest.approx(2.0 + 12.0)
    # The base is wider than the barb in Y.
    assert ymax == pytest.approx(3.0)


def test_barb_protrudes_from_arm() -> None:
    hook = make_clasp_hook(base_depth=1.0)
    assert hook.bounds[3] == pytest.approx(0.8 + 1.0)


def test_catch_has_window() -> None:
    catch = make_clasp_catch()
    assert_solid(catch)
    frame_volume = (8.0 + 2.0 * 2.3) * 2.0 * 6.0
    window_volume = (8.0 + 0.6) * 2.0 * (2.0 + 0.6)
    assert catch.volume == pytest.approx(frame_volume - window_volume)


def test_engaged_clasp_parts_do_not_overlap() -> None:
    hook, catch = make_clasp().to_meshes()
    overlap = boolean_intersection([hook, catch])
    assert overlap.is_empty or abs(overlap.volume) < 1e-6
