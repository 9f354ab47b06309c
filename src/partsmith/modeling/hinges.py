from __future__ import annotations

from typing import Sequence

from partsmith.mesh import Mesh

from ._color import set_mesh_color
from .csg import boolean_difference, boolean_union
from .group import MeshGroup, group
from .primitives import make_box, make_cone, make_cylinder
from .transform import rotate


def _knuckle_layout(width: float, knuckle_count: int, knuckle_clearance: float) -> tuple[float, float]:
    """Return (segment_width, knuckle_width) for a barrel split into knuckle_count parts."""

    segment_width = width / float(knuckle_count)
    # Clearance on both sides of each knuckle so opposing leaves do not fuse.
    knuckle_width = max(segment_width - (2.0 * knuckle_clearance), segment_width * 0.45)
    return segment_width, knuckle_width


def _knuckle_centers(width: float, knuckle_count: int, leaf_index: int) -> list[float]:
    segment_width = width / float(knuckle_count)
    return [
        -width / 2.0 + (idx + 0.5) * segment_width
        for idx in range(knuckle_count)
        if idx % 2 == leaf_index
    ]


def _leaf_body(
    *,
    width: float,
    leaf_depth: float,
    leaf_thickness: float,
    barrel_diameter: float,
    knuckle_count: int,
    knuckle_clearance: float,
    barrel_gap: float,
    attachment_overlap: float,
    connector_width_scale: float,
    leaf_index: int,
    resolution: int,
) -> Mesh:
    if knuckle_count < 2:
        raise ValueError("knuckle_count must be >= 2.")
    if leaf_index not in {0, 1}:
        raise ValueError("leaf_index must be 0 or 1.")

    barrel_radius = barrel_diameter / 2.0
    _, knuckle_width = _knuckle_layout(width, knuckle_count, knuckle_clearance)
    side = 1.0 if leaf_index == 0 else -1.0
    # Plate is offset away from the barrel; connectors bridge this gap.
    plate_center_y = side * (barrel_radius + barrel_gap + leaf_depth / 2.0)
    plate = make_box(size=(width, leaf_depth, leaf_thickness), center=(0.0, plate_center_y, 0.0))

    centers = _knuckle_centers(width, knuckle_count, leaf_index)
    knuckles = [
        make_cylinder(
            radius=barrel_radius,
            height=knuckle_width,
            center=(x_center, 0.0, 0.0),
            direction=(1.0, 0.0, 0.0),
            resolution=max(24, resolution),
        )
        for x_center in centers
    ]

    connector_span = max(barrel_gap + (2.0 * attachment_overlap), leaf_thickness * 0.75)
    connector_center_y = side * (barrel_radius + barrel_gap / 2.0)
    connector_width = max(knuckle_width * connector_width_scale, knuckle_width * 0.35)
    connectors = [
        make_box(
            size=(connector_width, connector_span, leaf_thickness),
            center=(x_center, connector_center_y, 0.0),
        )
        for x_center in centers
    ]
    return boolean_union([plate, *knuckles, *connectors])


def make_hinge_leaf(
    *,
    width: float = 30.0,
    leaf_depth: float = 12.0,
    leaf_thickness: float = 2.0,
    barrel_diameter: float = 6.0,
    pin_diameter: float = 3.0,
    knuckle_count: int = 5,
    knuckle_clearance: float = 0.35,
    barrel_gap: float = 0.4,
    attachment_overlap: float = 0.2,
    connector_width_scale: float = 0.75,
    leaf_index: int = 0,
    resolution: int = 64,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Create one leaf of a barrel hinge with a bore for a separate pin.

    The hinge axis is the X-axis at Y=0, Z=0. Leaf 0 lies on +Y and owns the
    even knuckles; leaf 1 lies on -Y and owns the odd ones.
    """

    leaf = _leaf_body(
        width=width,
        leaf_depth=leaf_depth,
        leaf_thickness=leaf_thickness,
        barrel_diameter=barrel_diameter,
        knuckle_count=knuckle_count,
        knuckle_clearance=knuckle_clearance,
        barrel_gap=barrel_gap,
        attachment_overlap=attachment_overlap,
        connector_width_scale=connector_width_scale,
        leaf_index=leaf_index,
        resolution=resolution,
    )
    pin_bore = make_cylinder(
        radius=(pin_diameter / 2.0) + (knuckle_clearance / 2.0),
        height=width + max(2.0, knuckle_clearance * 4.0),
        center=(0.0, 0.0, 0.0),
        direction=(1.0, 0.0, 0.0),
        resolution=max(24, resolution),
    )
    leaf = boolean_difference(leaf, [pin_bore])

    if color is not None:
        set_mesh_color(leaf, color)
    return leaf


def make_hinge_pair(
    *,
    width: float = 30.0,
    leaf_depth: float = 12.0,
    leaf_thickness: float = 2.0,
    barrel_diameter: float = 6.0,
    pin_diameter: float = 3.0,
    knuckle_count: int = 5,
    knuckle_clearance: float = 0.35,
    barrel_gap: float = 0.4,
    opened_angle_deg: float = 0.0,
    include_pin: bool = True,
    pin_extension: float = 0.8,
    resolution: int = 64,
    leaf_a_color: Sequence[float] | str | None = "#7f8fa6",
    leaf_b_color: Sequence[float] | str | None = "#8f7f6a",
    pin_color: Sequence[float] | str | None = "#b0b0b0",
) -> MeshGroup:
    """Create a two-leaf barrel hinge.

    Returns a MeshGroup so leaves and pin stay separate for assembly previews.
    """

    common = dict(
        width=width,
        leaf_depth=leaf_depth,
        leaf_thickness=leaf_thickness,
        barrel_diameter=barrel_diameter,
        pin_diameter=pin_diameter,
        knuckle_count=knuckle_count,
        knuckle_clearance=knuckle_clearance,
        barrel_gap=barrel_gap,
        resolution=resolution,
    )
    leaf_a = make_hinge_leaf(leaf_index=0, color=leaf_a_color, **common)
    leaf_b = make_hinge_leaf(leaf_index=1, color=leaf_b_color, **common)

    if abs(opened_angle_deg) > 1e-9:
        leaf_b = rotate(leaf_b, axis=(1.0, 0.0, 0.0), angle_deg=opened_angle_deg, origin=(0.0, 0.0, 0.0))

    parts: list[Mesh] = [leaf_a, leaf_b]
    if include_pin:
        parts.append(
            make_cylinder(
                radius=pin_diameter / 2.0,
                height=width + (2.0 * max(pin_extension, 0.0)),
                center=(0.0, 0.0, 0.0),
                direction=(1.0, 0.0, 0.0),
                resolution=max(24, resolution),
                color=pin_color,
            )
        )
    return group(parts)


def make_support_hinge(
    *,
    width: float = 30.0,
    leaf_depth: float = 12.0,
    leaf_thickness: float = 2.0,
    barrel_diameter: float = 6.0,
    pin_diameter: float = 3.0,
    knuckle_count: int = 5,
    knuckle_clearance: float = 0.4,
    barrel_gap: float = 0.4,
    pin_clearance: float = 0.3,
    support_width: float = 1.2,
    support_gap: float = 0.2,
    support_height: float = 1.0,
    resolution: int = 64,
    leaf_a_color: Sequence[float] | str | None = "#7f8fa6",
    leaf_b_color: Sequence[float] | str | None = "#8f7f6a",
    support_color: Sequence[float] | str | None = "#d0d0d0",
) -> MeshGroup:
    """Print-in-place hinge: conical pins instead of a loose pin, plus breakaway support.

    Every knuckle of leaf 0 grows a cone into each neighbouring leaf-1 knuckle,
    which carries a matching socket widened by `pin_clearance`. The barrel is
    printed on a thin strip running under it along X; the strip reaches only
    `support_gap` into the knuckles so it snaps off after printing.
    """

    barrel_radius = barrel_diameter / 2.0
    _, knuckle_width = _knuckle_layout(width, knuckle_count, knuckle_clearance)
    common = dict(
        width=width,
        leaf_depth=leaf_depth,
        leaf_thickness=leaf_thickness,
        barrel_diameter=barrel_diameter,
        knuckle_count=knuckle_count,
        knuckle_clearance=knuckle_clearance,
        barrel_gap=barrel_gap,
        attachment_overlap=0.2,
        connector_width_scale=0.75,
        resolution=resolution,
    )
    leaf_a = _leaf_body(leaf_index=0, **common)
    leaf_b = _leaf_body(leaf_index=1, **common)

    gap = width / float(knuckle_count) - knuckle_width
    cone_length = pin_diameter / 2.0 + gap
    tip_diameter = pin_diameter * 0.2
    pins: list[Mesh] = []
    sockets: list[Mesh] = []
    half = width / 2.0
    for x_center in _knuckle_centers(width, knuckle_count, 0):
        for sign in (1.0, -1.0):
            face = x_center + sign * knuckle_width / 2.0
            if abs(face) >= half - 1e-9:
                continue
            direction = (sign, 0.0, 0.0)
            center = (face + sign * (cone_length / 2.0 - 0.01), 0.0, 0.0)
            pins.append(
                make_cone(
                    bottom_diameter=pin_diameter,
                    top_diameter=tip_diameter,
                    height=cone_length,
                    center=center,
                    direction=direction,
                    resolution=max(24, resolution),
                )
            )
            sockets.append(
                make_cone(
                    bottom_diameter=pin_diameter + 2.0 * pin_clearance,
                    top_diameter=tip_diameter + 2.0 * pin_clearance,
                    height=cone_length + pin_clearance,
                    center=(face + sign * (cone_length + pin_clearance) / 2.0, 0.0, 0.0),
                    direction=direction,
                    resolution=max(24, resolution),
                )
            )

    if pins:
        leaf_a = boolean_union([leaf_a, *pins])
        leaf_b = boolean_difference(leaf_b, sockets)

    support = make_box(
        size=(width, support_width, support_height),
        center=(0.0, 0.0, -barrel_radius + support_gap - support_height / 2.0),
        color=support_color,
    )

    if leaf_a_color is not None:
        set_mesh_color(leaf_a, leaf_a_color)
    if leaf_b_color is not None:
        set_mesh_color(leaf_b, leaf_b_color)
    return group([leaf_a, leaf_b, support])


__all__ = [
    "make_hinge_leaf",
    "make_hinge_pair",
    "make_support_hinge",
]
