from __future__ import annotations

import math
from dataclasses import replace

import numpy as np
import pytest

from partsmith.mesh import analyze_mesh
from partsmith.modeling import (
    ThreadParams,
    boolean_intersection,
    count_components,
    effective_radius,
    generate_thread,
    make_nut_core,
    make_screw,
    make_thread_segment,
)
from partsmith.modeling.threading import NUT_DIAMETER_ADJUST, nut_thread_params

from tests.helpers import assert_solid, radial


def _params(**overrides) -> ThreadParams:
    values = dict(diameter=8.0, pitch=1.25, length=5.0, segments_per_turn=16)
    values.update(overrides)
    return ThreadParams(**values)


def test_derived_profile_dimensions() -> None:
    params = _params()
    h = math.cos(math.radians(30.0)) * 1.25
    assert params.thread_height == pytest.approx(h)
    assert params.profile_depth == pytest.approx(h - 0.1 - 0.2)
    assert params.outer_radius == pytest.approx(3.9)
    assert params.inner_radius == pytest.approx(3.9 - (h - 0.3))
    assert params.deg_step == pytest.approx(22.5)
    assert params.step_up == pytest.approx(1.25 / 16)
    assert params.end_segment_count == 5


@pytest.mark.parametrize("turns", [2, 3, 5])
def test_slice_count_for_whole_pitch_lengths(turns: int) -> None:
    params = _params(length=turns * 1.25)
    expected = math.ceil((params.length - params.pitch) * params.segments_per_turn / params.pitch)
    thread = generate_thread(params)

    assert params.step_count == expected == (turns - 1) * 16
    assert thread.slice_count == expected + 1
    assert expected * params.step_up <= params.length
    assert thread.vertices[:, 2].max() <= params.length


def test_partial_turn_rounds_up() -> None:
    params = _params(length=5.1)
    assert params.step_count == math.ceil((5.1 - 1.25) * 16 / 1.25)


def test_slice_vertex_order_and_trapezoid() -> None:
    params = _params()
    thread = generate_thread(params)
    first = thread.slice(0)

    assert first.inner_upper[2] > first.inner_lower[2]
    assert first.outer_upper[2] > first.outer_lower[2]
    inner_width = first.inner_upper[2] - first.inner_lower[2]
    outer_width = first.outer_upper[2] - first.outer_lower[2]
    assert inner_width > outer_width
    assert radial(first.inner_upper)[0] == pytest.approx(params.inner_radius)
    assert radial(first.outer_upper)[0] == pytest.approx(params.outer_radius)
    assert (first.inner_upper[2] + first.inner_lower[2]) / 2.0 == pytest.approx(params.pitch / 2.0)


def test_thread_without_lead_is_closed_and_outward() -> None:
    thread = generate_thread(_params())
    mesh = thread.to_mesh()
    analysis = analyze_mesh(mesh)

    assert analysis.boundary_edges == 0
    assert analysis.nonmanifold_edges == 0
    assert analysis.misoriented_edges == 0
    assert mesh.volume > 0


def test_face_layout_two_caps_then_four_quads_per_step() -> None:
    thread = generate_thread(_params())
    assert len(thread.faces) == 2 + 4 * thread.step_count
    assert all(len(face) == 4 for face in thread.faces)
    top = max(max(face) for face in thread.faces)
    assert top == thread.vertices.shape[0] - 1


def test_lead_bottom_ramps_from_base_radius() -> None:
    params = _params(lead_bottom=True)
    r = params.inner_radius
    count = params.end_segment_count
    radii = [effective_radius(r, i, params) for i in range(count + 1)]

    assert radii[0] == pytest.approx(r)
    assert all(b >= a for a, b in zip(radii, radii[1:]))
    assert radii[count] == pytest.approx(params.outer_radius)

    thread = generate_thread(params)
    assert radial(thread.slice(0).outer_upper)[0] == pytest.approx(r)
    assert radial(thread.slice(count).outer_lower)[0] == pytest.approx(params.outer_radius)


def test_lead_top_recesses_last_slice_only() -> None:
    params = _params(lead_top=True)
    thread = generate_thread(params)
    last = thread.slice_count - 1

    assert thread.end_outer_radius("top") == pytest.approx(params.inner_radius)
    assert thread.end_outer_radius("bottom") == pytest.approx(params.outer_radius)
    assert radial(thread.slice(last - params.end_segment_count).outer_upper)[0] == pytest.approx(params.outer_radius)


def test_lead_thread_still_consistently_wound() -> None:
    mesh = generate_thread(_params(lead_top=True, lead_bottom=True)).to_mesh()
    analysis = analyze_mesh(mesh)
    assert analysis.boundary_edges == 0
    assert analysis.misoriented_edges == 0


def test_generate_thread_is_deterministic() -> None:
    params = _params(lead_top=True)
    first = generate_thread(params)
    second = generate_thread(params)
    assert np.array_equal(first.vertices, second.vertices)
    assert first.faces == second.faces


def test_short_length_yields_empty_thread_with_warning() -> None:
    with pytest.warns(RuntimeWarning, match="does not exceed pitch"):
        thread = generate_thread(_params(length=1.25))
    assert thread.is_empty
    assert thread.to_mesh().is_empty


def test_non_positive_pitch_yields_empty_thread() -> None:
    with pytest.warns(RuntimeWarning):
        thread = generate_thread(_params(pitch=0.0))
    assert thread.is_empty


def test_collapsed_profile_warns_but_still_generates() -> None:
    with pytest.warns(RuntimeWarning, match="collapses"):
        thread = generate_thread(_params(truncation=0.6, fill=0.6))
    assert not thread.is_empty


def test_plain_segment_is_the_bare_ridge() -> None:
    params = _params()
    segment = make_thread_segment(params)
    ridge = generate_thread(params).to_mesh()
    assert segment.n_faces == ridge.n_faces


def test_chamfer_top_narrows_end_face() -> None:
    params = _params(chamfer_top=True)
    segment = make_thread_segment(params)
    assert_solid(segment)

    zmax = segment.bounds[5]
    assert zmax == pytest.approx(params.length, abs=1e-4)
    top = segment.vertices[segment.vertices[:, 2] > params.length - 1e-3]
    assert radial(top).max() <= params.outer_radius - params.profile_depth + 0.05


def test_bottom_chamfer_follows_lead_recess() -> None:
    params = _params(lead_bottom=True, chamfer_bottom=True)
    segment = make_thread_segment(params)
    assert_solid(segment)
    assert count_components(segment) == 1

    assert generate_thread(params).end_outer_radius("bottom") == pytest.approx(params.inner_radius)
    assert segment.bounds[4] == pytest.approx(0.0, abs=1e-4)
    bottom = segment.vertices[segment.vertices[:, 2] < 1e-3]
    assert bottom.size > 0
    assert radial(bottom).max() <= params.inner_radius - params.profile_depth + 0.05


def test_top_chamfer_follows_lead_recess() -> None:
    params = _params(lead_top=True, chamfer_top=True)
    segment = make_thread_segment(params)
    assert_solid(segment)
    assert count_components(segment) == 1

    assert segment.bounds[5] == pytest.approx(params.length, abs=1e-4)
    top = segment.vertices[segment.vertices[:, 2] > params.length - 1e-3]
    assert top.size > 0
    assert radial(top).max() <= params.inner_radius - params.profile_depth + 0.05


def test_screw_is_one_solid() -> None:
    params = _params()
    screw = make_screw(params)
    assert_solid(screw)
    assert count_components(screw) == 1
    assert screw.volume > math.pi * params.inner_radius**2 * params.length * 0.9


def test_reference_scenario_784_slices() -> None:
    params = ThreadParams(
        diameter=10.0,
        pitch=1.5,
        length=25.0,
        segments_per_turn=50,
        diameter_adjust=-0.4,
        truncation=0.3,
        fill=0.3,
        lead_top=True,
        lead_bottom=False,
        chamfer_top=True,
        chamfer_bottom=False,
    )
    assert params.step_count == 784
    assert generate_thread(params).slice_count == 785

    mesh = make_thread_segment(params)
    assert not mesh.is_empty
    assert count_components(mesh) == 1


def test_nut_params_swap_truncation_and_fill() -> None:
    params = _params(truncation=0.1, fill=0.2, lead_top=True, chamfer_top=True)
    cutter = nut_thread_params(params)
    assert cutter.truncation == pytest.approx(0.2)
    assert cutter.fill == pytest.approx(0.1)
    assert cutter.length == pytest.approx(params.length + 2 * params.pitch)
    assert not (cutter.lead_top or cutter.chamfer_top)


def test_nut_core_is_a_threaded_tube() -> None:
    params = _params(diameter_adjust=NUT_DIAMETER_ADJUST)
    nut = make_nut_core(params, entry_chamfer_top=True, entry_chamfer_bottom=True)
    assert_solid(nut)

    xmin, xmax, _, _, zmin, zmax = nut.bounds
    outer = (params.diameter + params.diameter_adjust + 1.0) / 2.0
    assert xmax == pytest.approx(outer, abs=1e-4)
    assert zmin == pytest.approx(0.0, abs=1e-4)
    assert zmax == pytest.approx(params.length, abs=1e-4)
    assert nut.volume < math.pi * outer**2 * params.length


def test_default_screw_and_nut_do_not_interpenetrate() -> None:
    screw = make_screw(_params())
    nut = make_nut_core(_params(diameter_adjust=NUT_DIAMETER_ADJUST))
    overlap = boolean_intersection([screw, nut])
    assert overlap.is_empty or abs(overlap.volume) < 1e-3


def test_clearance_sign_warnings() -> None:
    with pytest.warns(RuntimeWarning, match="screw will bind"):
        make_screw(_params(diameter_adjust=0.2, length=2.5))
    with pytest.warns(RuntimeWarning, match="nut will bind"):
        make_nut_core(replace(_params(), diameter_adjust=-0.2, length=2.5))
