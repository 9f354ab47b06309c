from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Literal, NamedTuple

import numpy as np

from partsmith.diagnostics import check_clearance_sign, check_thread_parameters
from partsmith.mesh import Mesh, empty_mesh, triangulate_faces
from partsmith.modeling.csg import boolean_difference, boolean_union
from partsmith.modeling.primitives import make_cone, make_cylinder
from partsmith.modeling.transform import translate

ThreadEnd = Literal["top", "bottom"]
Point3 = tuple[float, float, float]

# Axial gap kept between neighbouring turns so spiral faces never touch.
PITCH_SPACE = 0.001
# Minimum half-height of the crest flat so a zero truncation never collapses it to a point.
HEIGHT_SPACE = 0.001
# Minimum overlap of the core cylinder into the thread root.
FILL_FLOOR = 0.05
# Angular span over which a lead thread ramps from zero to full depth.
LEAD_SPAN_DEG = 120.0

SCREW_DIAMETER_ADJUST = -0.1
NUT_DIAMETER_ADJUST = 0.1
DEFAULT_TRUNCATION = 0.1
DEFAULT_FILL = 0.2
DEFAULT_THREAD_ANGLE = 60.0
WALL_MARGIN = 1.0


@dataclass(frozen=True)
class ThreadParams:
    """Dimensional definition of one helical thread run, in millimeters and degrees."""

    diameter: float
    pitch: float
    length: float
    segments_per_turn: int = 32
    diameter_adjust: float = SCREW_DIAMETER_ADJUST
    thread_angle_deg: float = DEFAULT_THREAD_ANGLE
    truncation: float = DEFAULT_TRUNCATION
    fill: float = DEFAULT_FILL
    lead_top: bool = False
    lead_bottom: bool = False
    chamfer_top: bool = False
    chamfer_bottom: bool = False

    @property
    def thread_height(self) -> float:
        """Radial height of the untruncated thread form."""

        return math.cos(math.radians(self.thread_angle_deg) / 2.0) * self.pitch

    @property
    def profile_depth(self) -> float:
        return self.thread_height - self.truncation - self.fill

    @property
    def outer_radius(self) -> float:
        return self.diameter / 2.0 + self.diameter_adjust

    @property
    def inner_radius(self) -> float:
        return self.outer_radius - self.profile_depth

    @property
    def core_radius(self) -> float:
        return self.inner_radius + max(self.fill, FILL_FLOOR)

    @property
    def deg_step(self) -> float:
        return 360.0 / self.segments_per_turn

    @property
    def step_up(self) -> float:
        return self.pitch / self.segments_per_turn

    @property
    def step_count(self) -> int:
        """Angular steps needed to cover the length, starting one pitch in."""

        if self.pitch <= 0 or self.segments_per_turn < 1:
            return 0
        steps = math.ceil((self.length - self.pitch) * self.segments_per_turn / self.pitch - 1e-9)
        return max(steps, 0)

    @property
    def end_segment_count(self) -> int:
        return int(math.floor(LEAD_SPAN_DEG / self.deg_step))

    @property
    def inner_half_width(self) -> float:
        return self.pitch / 2.0 * (1.0 - self.fill / self.thread_height) - PITCH_SPACE

    @property
    def outer_half_width(self) -> float:
        return self.pitch / 2.0 * (self.truncation / self.thread_height) + HEIGHT_SPACE


class HelixSlice(NamedTuple):
    """One axial station of the thread cross-section."""

    inner_upper: Point3
    inner_lower: Point3
    outer_upper: Point3
    outer_lower: Point3


@dataclass(frozen=True)
class ThreadMesh:
    """Raw spiral polyhedron: four vertices per slice plus polygon faces."""

    vertices: np.ndarray
    faces: tuple[tuple[int, ...], ...]
    step_count: int

    @property
    def slice_count(self) -> int:
        return int(self.vertices.shape[0] // 4)

    @property
    def is_empty(self) -> bool:
        return len(self.faces) == 0

    def slice(self, index: int) -> HelixSlice:
        block = self.vertices[4 * index : 4 * index + 4]
        return HelixSlice(*(tuple(float(v) for v in point) for point in block))

    def end_outer_radius(self, end: ThreadEnd) -> float:
        """Crest radius actually generated at one end (includes any lead recess)."""

        index = 0 if end == "bottom" else self.slice_count - 1
        crest = self.vertices[4 * index + 2]
        return float(math.hypot(crest[0], crest[1]))

    def to_mesh(self) -> Mesh:
        if self.is_empty:
            return empty_mesh()
        return Mesh(self.vertices, triangulate_faces(self.faces))


def effective_radius(base_radius: float, slice_index: int, params: ThreadParams) -> float:
    """Crest radius at a slice; lead ends ramp the depth linearly to zero."""

    span = params.end_segment_count
    scale = 1.0
    if span > 0:
        if params.lead_bottom and slice_index < span:
            scale = min(scale, slice_index / span)
        remaining = params.step_count - slice_index
        if params.lead_top and remaining < span:
            scale = min(scale, remaining / span)
    return base_radius + params.profile_depth * max(scale, 0.0)


def helix_slice(params: ThreadParams, slice_index: int) -> HelixSlice:
    theta = math.radians(slice_index * params.deg_step)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    center = slice_index * params.step_up + params.pitch / 2.0
    inner = params.inner_radius
    outer = effective_radius(inner, slice_index, params)
    w_in = params.inner_half_width
    w_out = params.outer_half_width
    return HelixSlice(
        inner_upper=(inner * cos_t, inner * sin_t, center + w_in),
        inner_lower=(inner * cos_t, inner * sin_t, center - w_in),
        outer_upper=(outer * cos_t, outer * sin_t, center + w_out),
        outer_lower=(outer * cos_t, outer * sin_t, center - w_out),
    )


def generate_thread(params: ThreadParams) -> ThreadMesh:
    """Build the continuous spiral polyhedron for `params`.

    Faces wind counter-clockwise seen from outside: the start cap, the end
    cap, then per slice pair the root, crest, upper flank and lower flank
    quads. A length that does not exceed the pitch yields an empty mesh.
    """

    check_thread_parameters(
        pitch=params.pitch,
        length=params.length,
        thread_angle_deg=params.thread_angle_deg,
        truncation=params.truncation,
        fill=params.fill,
    )
    steps = params.step_count
    if steps < 1:
        return ThreadMesh(vertices=np.zeros((0, 3), dtype=float), faces=(), step_count=0)

    vertices = np.asarray([helix_slice(params, i) for i in range(steps + 1)], dtype=float).reshape(-1, 3)

    last = 4 * steps
    faces: list[tuple[int, ...]] = [
        (1, 3, 2, 0),
        (last + 0, last + 2, last + 3, last + 1),
    ]
    for j in range(steps):
        a = 4 * j
        b = a + 4
        faces.append((a + 1, a + 0, b + 0, b + 1))
        faces.append((a + 3, b + 3, b + 2, a + 2))
        faces.append((a + 0, a + 2, b + 2, b + 0))
        faces.append((a + 1, b + 1, b + 3, a + 3))

    return ThreadMesh(vertices=vertices, faces=tuple(faces), step_count=steps)


def make_thread_segment(params: ThreadParams, *, resolution: int | None = None) -> Mesh:
    """Thread ridge as a mesh; chamfered ends also carry the filler core."""

    thread = generate_thread(params)
    ridge = thread.to_mesh()
    if ridge.is_empty or not (params.chamfer_top or params.chamfer_bottom):
        return ridge

    resolution = resolution or params.segments_per_turn
    filler = make_cylinder(
        radius=params.core_radius,
        height=params.length,
        center=(0.0, 0.0, params.length / 2.0),
        resolution=resolution,
    )
    solid = boolean_union([ridge, filler])

    cutters: list[Mesh] = []
    if params.chamfer_bottom:
        cutters.append(_chamfer_cutter(params, thread.end_outer_radius("bottom"), "bottom", resolution))
    if params.chamfer_top:
        cutters.append(_chamfer_cutter(params, thread.end_outer_radius("top"), "top", resolution))
    return boolean_difference(solid, cutters)


def make_screw(params: ThreadParams, *, resolution: int | None = None) -> Mesh:
    """External thread solid: spiral ridge fused onto its core cylinder."""

    check_clearance_sign(params.diameter_adjust, internal=False)
    segment = make_thread_segment(params, resolution=resolution)
    if segment.is_empty or params.chamfer_top or params.chamfer_bottom:
        return segment

    core = make_cylinder(
        radius=params.core_radius,
        height=params.length,
        center=(0.0, 0.0, params.length / 2.0),
        resolution=resolution or params.segments_per_turn,
    )
    return boolean_union([segment, core])


def nut_thread_params(params: ThreadParams) -> ThreadParams:
    """Cutter parameters for an internal thread spanning [-pitch, length + pitch].

    Truncation and fill trade places so the nut profile complements a screw
    built from the same values.
    """

    return replace(
        params,
        length=params.length + 2.0 * params.pitch,
        truncation=params.fill,
        fill=params.truncation,
        lead_top=False,
        lead_bottom=False,
        chamfer_top=False,
        chamfer_bottom=False,
    )


def make_nut_core(
    params: ThreadParams,
    *,
    wall: float = WALL_MARGIN,
    entry_chamfer_top: bool = False,
    entry_chamfer_bottom: bool = False,
    resolution: int | None = None,
) -> Mesh:
    """Thin threaded tube spanning [0, length] for embedding in nut bodies."""

    check_clearance_sign(params.diameter_adjust, internal=True)
    resolution = resolution or params.segments_per_turn
    length = params.length
    tube = make_cylinder(
        radius=(params.diameter + params.diameter_adjust + wall) / 2.0,
        height=length,
        center=(0.0, 0.0, length / 2.0),
        resolution=resolution,
    )

    cutter_params = nut_thread_params(params)
    thread = generate_thread(cutter_params).to_mesh()
    if thread.is_empty:
        return tube
    thread = translate(thread, (0.0, 0.0, -params.pitch))
    bore = make_cylinder(
        radius=cutter_params.core_radius,
        height=cutter_params.length,
        center=(0.0, 0.0, length / 2.0),
        resolution=resolution,
    )
    cutters = [thread, bore]
    if entry_chamfer_bottom:
        cutters.append(_entry_chamfer(cutter_params, length, "bottom", resolution))
    if entry_chamfer_top:
        cutters.append(_entry_chamfer(cutter_params, length, "top", resolution))
    return boolean_difference(tube, [boolean_union(cutters)])


def _chamfer_cutter(params: ThreadParams, end_radius: float, end: ThreadEnd, resolution: int) -> Mesh:
    """Ring that bevels the end of a screw at 45 degrees down to end_radius - depth."""

    eps = 0.01
    depth = max(params.profile_depth, eps)
    face_radius = max(end_radius - depth, 1e-3)
    outer = end_radius + 1.0
    band = depth + 2.0 * eps
    # The last slice may sit up to one step above the length; the cap trims it.
    if end == "top":
        z_mid = params.length - depth / 2.0
        z_cap = params.length + params.pitch / 2.0
        bottom_d, top_d = 2.0 * (end_radius + eps), 2.0 * max(face_radius - eps, 1e-3)
    else:
        z_mid = depth / 2.0
        z_cap = -params.pitch / 2.0
        bottom_d, top_d = 2.0 * max(face_radius - eps, 1e-3), 2.0 * (end_radius + eps)

    ring = make_cylinder(radius=outer, height=band, center=(0.0, 0.0, z_mid), resolution=resolution)
    keep = make_cone(
        bottom_diameter=bottom_d,
        top_diameter=top_d,
        height=band,
        center=(0.0, 0.0, z_mid),
        resolution=resolution,
    )
    cap = make_cylinder(radius=outer, height=params.pitch, center=(0.0, 0.0, z_cap), resolution=resolution)
    return boolean_union([boolean_difference(ring, [keep]), cap])


def _entry_chamfer(cutter_params: ThreadParams, length: float, end: ThreadEnd, resolution: int) -> Mesh:
    eps = 0.01
    bore_radius = cutter_params.core_radius
    mouth_radius = cutter_params.outer_radius + eps
    depth = max(mouth_radius - bore_radius, eps)
    height = depth + eps
    if end == "top":
        center = (0.0, 0.0, length - depth + height / 2.0)
        bottom_d, top_d = 2.0 * bore_radius, 2.0 * mouth_radius
    else:
        center = (0.0, 0.0, depth - height / 2.0)
        bottom_d, top_d = 2.0 * mouth_radius, 2.0 * bore_radius
    return make_cone(
        bottom_diameter=bottom_d,
        top_diameter=top_d,
        height=height,
        center=center,
        resolution=resolution,
    )


__all__ = [
    "DEFAULT_FILL",
    "DEFAULT_THREAD_ANGLE",
    "DEFAULT_TRUNCATION",
    "FILL_FLOOR",
    "HEIGHT_SPACE",
    "HelixSlice",
    "LEAD_SPAN_DEG",
    "NUT_DIAMETER_ADJUST",
    "PITCH_SPACE",
    "SCREW_DIAMETER_ADJUST",
    "ThreadMesh",
    "ThreadParams",
    "WALL_MARGIN",
    "effective_radius",
    "generate_thread",
    "helix_slice",
    "make_nut_core",
    "make_screw",
    "make_thread_segment",
    "nut_thread_params",
]
