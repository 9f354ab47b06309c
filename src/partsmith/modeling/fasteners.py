from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from partsmith.diagnostics import check_fastener_lengths
from partsmith.mesh import Mesh

from ._color import set_mesh_color
from .csg import boolean_difference, boolean_intersection, boolean_union, hull
from .primitives import make_cone, make_cylinder, make_ngon, make_sphere
from .threading import (
    DEFAULT_FILL,
    DEFAULT_TRUNCATION,
    NUT_DIAMETER_ADJUST,
    SCREW_DIAMETER_ADJUST,
    WALL_MARGIN,
    ThreadParams,
    make_nut_core,
    make_screw,
    nut_thread_params,
)
from .transform import mirror, translate

AUTO = -1

# (max diameter, head thickness, nut thickness) in millimeters.
_THICKNESS_TABLE = (
    (3.0, 2.0, 2.4),
    (4.0, 2.8, 3.2),
    (5.0, 3.5, 4.7),
    (6.0, 4.0, 5.2),
    (8.0, 5.3, 6.8),
    (10.0, 6.4, 8.4),
)
_HEAD_RATIO = 0.65
_NUT_RATIO = 0.8
_OVERLAP = 0.01


@dataclass(frozen=True)
class FastenerSpec:
    """Derived dimensions for one bolt or nut."""

    diameter: float
    pitch: float
    length: float
    thread_length: float
    head_thickness: float
    hex_width: float

    @property
    def barrel_length(self) -> float:
        return self.length - self.thread_length

    @property
    def hex_radius(self) -> float:
        """Circumradius of the hex whose flats are `hex_width` apart."""

        return self.hex_width / math.sqrt(3.0)


def wrench_width(diameter: float, hex_width: float = AUTO) -> float:
    """Across-flats size of the hex, banded by diameter unless overridden."""

    if hex_width != AUTO:
        return float(hex_width)
    if diameter <= 6:
        return diameter + 2.5
    if diameter <= 8:
        return diameter + 4.0
    if diameter <= 10:
        return diameter + 5.0
    return diameter + 7.0


def head_thickness(diameter: float, override: float = AUTO) -> float:
    if override != AUTO:
        return float(override)
    for limit, head, _ in _THICKNESS_TABLE:
        if diameter <= limit:
            return head
    return diameter * _HEAD_RATIO


def nut_thickness(diameter: float, override: float = AUTO) -> float:
    if override != AUTO:
        return float(override)
    for limit, _, nut in _THICKNESS_TABLE:
        if diameter <= limit:
            return nut
    return diameter * _NUT_RATIO


def resolve_fastener(
    diameter: float,
    pitch: float,
    length: float,
    *,
    thread_length: float = AUTO,
    thickness: float = AUTO,
    hex_width: float = AUTO,
    nut: bool = False,
) -> FastenerSpec:
    """Fill in every auto-derived dimension; `nut` selects the nut thickness table."""

    thickness_fn = nut_thickness if nut else head_thickness
    resolved_thread = float(length) if thread_length == AUTO else float(thread_length)
    check_fastener_lengths(length, resolved_thread)
    return FastenerSpec(
        diameter=float(diameter),
        pitch=float(pitch),
        length=float(length),
        thread_length=resolved_thread,
        head_thickness=thickness_fn(diameter, thickness),
        hex_width=wrench_width(diameter, hex_width),
    )


def make_hex_bolt(
    diameter: float,
    pitch: float,
    length: float,
    thread_length: float = AUTO,
    head_thickness: float = AUTO,
    hex_width: float = AUTO,
    *,
    segments_per_turn: int = 32,
    diameter_adjust: float = SCREW_DIAMETER_ADJUST,
    truncation: float = DEFAULT_TRUNCATION,
    fill: float = DEFAULT_FILL,
    resolution: int | None = None,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Hex-head bolt standing on its head; the shank runs up +Z from the head top."""

    spec = resolve_fastener(
        diameter,
        pitch,
        length,
        thread_length=thread_length,
        thickness=head_thickness,
        hex_width=hex_width,
    )
    resolution = resolution or segments_per_turn
    k = spec.head_thickness
    params = ThreadParams(
        diameter=spec.diameter,
        pitch=spec.pitch,
        length=spec.thread_length,
        segments_per_turn=segments_per_turn,
        diameter_adjust=diameter_adjust,
        truncation=truncation,
        fill=fill,
        lead_top=True,
        chamfer_top=True,
    )

    parts = [_chamfered_hex(spec.hex_width, k, resolution)]
    barrel = max(spec.barrel_length, 0.0)
    barrel_radius = params.outer_radius if barrel > 0 else params.core_radius
    parts.append(
        make_cylinder(
            radius=barrel_radius,
            height=barrel + 2.0 * _OVERLAP,
            center=(0.0, 0.0, k + barrel / 2.0),
            resolution=resolution,
        )
    )
    screw = make_screw(params, resolution=resolution)
    if not screw.is_empty:
        parts.append(translate(screw, (0.0, 0.0, k + barrel)))

    bolt = boolean_union(parts)
    if color is not None:
        set_mesh_color(bolt, color)
    return bolt


def make_hex_nut(
    diameter: float,
    pitch: float,
    thickness: float = AUTO,
    hex_width: float = AUTO,
    *,
    segments_per_turn: int = 32,
    diameter_adjust: float = NUT_DIAMETER_ADJUST,
    truncation: float = DEFAULT_TRUNCATION,
    fill: float = DEFAULT_FILL,
    wall: float = WALL_MARGIN,
    resolution: int | None = None,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Chamfered hex nut spanning z in [0, thickness]."""

    spec = resolve_fastener(diameter, pitch, 0.0, thread_length=0.0, thickness=thickness, hex_width=hex_width, nut=True)
    resolution = resolution or segments_per_turn
    params = _nut_params(spec, segments_per_turn, diameter_adjust, truncation, fill)

    body = _chamfered_hex(spec.hex_width, params.length, resolution)
    body = boolean_difference(body, [_body_bore(params, wall, resolution)])
    core = make_nut_core(params, wall=wall, entry_chamfer_top=True, entry_chamfer_bottom=True, resolution=resolution)
    nut = boolean_union([body, core])
    if color is not None:
        set_mesh_color(nut, color)
    return nut


def make_wing_nut(
    diameter: float,
    pitch: float,
    thickness: float = AUTO,
    wing_span: float = AUTO,
    wing_height: float = AUTO,
    *,
    segments_per_turn: int = 32,
    diameter_adjust: float = NUT_DIAMETER_ADJUST,
    truncation: float = DEFAULT_TRUNCATION,
    fill: float = DEFAULT_FILL,
    wall: float = WALL_MARGIN,
    resolution: int | None = None,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Round boss with two mirrored wings, threaded through along Z."""

    spec = resolve_fastener(diameter, pitch, 0.0, thread_length=0.0, thickness=thickness, nut=True)
    resolution = resolution or segments_per_turn
    params = _nut_params(spec, segments_per_turn, diameter_adjust, truncation, fill)
    t = params.length
    boss_radius = spec.hex_width / 2.0
    span = diameter * 4.0 if wing_span == AUTO else float(wing_span)
    height = t * 2.0 if wing_height == AUTO else float(wing_height)
    lobe_radius = max(t * 0.2, 0.6)

    boss = make_cylinder(radius=boss_radius, height=t, center=(0.0, 0.0, t / 2.0), resolution=resolution)
    inner_x = boss_radius * 0.5
    outer_x = max(span / 2.0 - lobe_radius, inner_x + lobe_radius)
    sphere_res = max(12, resolution // 2)
    lobe = hull(
        [
            make_sphere(radius=lobe_radius, center=(inner_x, 0.0, lobe_radius), resolution=sphere_res),
            make_sphere(radius=lobe_radius, center=(inner_x, 0.0, max(t - lobe_radius, lobe_radius)), resolution=sphere_res),
            make_sphere(radius=lobe_radius, center=(outer_x, 0.0, max(t * 0.5, lobe_radius)), resolution=sphere_res),
            make_sphere(radius=lobe_radius, center=(outer_x, 0.0, max(height - lobe_radius, lobe_radius)), resolution=sphere_res),
        ]
    )
    bore = _body_bore(params, wall, resolution)
    # The lobes reach the axis on small sizes and would fill the thread without this cut.
    lobes = boolean_difference(boolean_union([lobe, mirror(lobe, (1.0, 0.0, 0.0))]), [bore])
    boss = boolean_difference(boss, [bore])

    body = boolean_union([boss, lobes])
    core = make_nut_core(params, wall=wall, entry_chamfer_top=True, entry_chamfer_bottom=True, resolution=resolution)
    nut = boolean_union([body, core])
    if color is not None:
        set_mesh_color(nut, color)
    return nut


def make_nut_hole(
    diameter: float,
    thickness: float = AUTO,
    hex_width: float = AUTO,
    *,
    clearance: float = 0.2,
    bore_length: float = AUTO,
    resolution: int = 32,
) -> Mesh:
    """Cutter for a captive hex nut pocket plus its through bore.

    The pocket spans z in [0, thickness + clearance]; the bore extends
    `bore_length` beyond it on both sides.
    """

    spec = resolve_fastener(diameter, 0.0, 0.0, thread_length=0.0, thickness=thickness, hex_width=hex_width, nut=True)
    pocket_height = spec.head_thickness + clearance
    extra = pocket_height * 3.0 if bore_length == AUTO else float(bore_length)
    pocket = make_ngon(
        sides=6,
        radius=(spec.hex_width + 2.0 * clearance) / math.sqrt(3.0),
        height=pocket_height,
        center=(0.0, 0.0, pocket_height / 2.0),
    )
    bore = make_cylinder(
        radius=diameter / 2.0 + clearance,
        height=pocket_height + 2.0 * extra,
        center=(0.0, 0.0, pocket_height / 2.0),
        resolution=resolution,
    )
    return boolean_union([pocket, bore])


def _nut_params(
    spec: FastenerSpec,
    segments_per_turn: int,
    diameter_adjust: float,
    truncation: float,
    fill: float,
) -> ThreadParams:
    return ThreadParams(
        diameter=spec.diameter,
        pitch=spec.pitch,
        length=spec.head_thickness,
        segments_per_turn=segments_per_turn,
        diameter_adjust=diameter_adjust,
        truncation=truncation,
        fill=fill,
    )


def _body_bore(params: ThreadParams, wall: float, resolution: int) -> Mesh:
    """Plain bore between the thread crest and the outside of the nut core."""

    crest = nut_thread_params(params).outer_radius
    core_outer = (params.diameter + params.diameter_adjust + wall) / 2.0
    return make_cylinder(
        radius=(crest + core_outer) / 2.0,
        height=params.length + 2.0,
        center=(0.0, 0.0, params.length / 2.0),
        resolution=resolution,
    )


def _chamfered_hex(across_flats: float, height: float, resolution: int) -> Mesh:
    """Hex prism over z in [0, height] with 45 degree bevels on both end faces."""

    prism = make_ngon(
        sides=6,
        radius=across_flats / math.sqrt(3.0),
        height=height,
        center=(0.0, 0.0, height / 2.0),
    )
    lower = make_cone(
        bottom_diameter=across_flats,
        top_diameter=across_flats + 2.0 * height,
        height=height,
        center=(0.0, 0.0, height / 2.0),
        resolution=resolution,
    )
    upper = make_cone(
        bottom_diameter=across_flats + 2.0 * height,
        top_diameter=across_flats,
        height=height,
        center=(0.0, 0.0, height / 2.0),
        resolution=resolution,
    )
    return boolean_intersection([prism, lower, upper])


__all__ = [
    "AUTO",
    "FastenerSpec",
    "head_thickness",
    "make_hex_bolt",
    "make_hex_nut",
    "make_nut_hole",
    "make_wing_nut",
    "nut_thickness",
    "resolve_fastener",
    "wrench_width",
]
