from __future__ import annotations

from typing import Sequence

from partsmith.mesh import Mesh

from ._color import set_mesh_color
from .csg import boolean_difference, boolean_union
from .group import MeshGroup, group
from .primitives import make_box, make_polygon_prism
from .transform import rotate, translate


def _barb(width: float, arm_thickness: float, arm_length: float, barb_depth: float, barb_height: float) -> Mesh:
    """Wedge on the +Y face of the arm tip: a flat ledge below, a ramp above."""

    top = arm_length
    face = arm_thickness / 2.0
    # Profile in (-z, y) so that rotating +Z onto +X leaves it in the YZ plane.
    profile = [
        (-top, face - 0.01),
        (-(top - barb_height), face - 0.01),
        (-(top - barb_height), face + barb_depth),
    ]
    prism = make_polygon_prism(profile, height=width)
    prism = rotate(prism, axis=(0.0, 1.0, 0.0), angle_deg=90.0)
    return translate(prism, (-width / 2.0, 0.0, 0.0))


def make_clasp_hook(
    *,
    width: float = 8.0,
    arm_length: float = 12.0,
    arm_thickness: float = 1.6,
    barb_depth: float = 1.0,
    barb_height: float = 2.0,
    base_depth: float = 6.0,
    base_height: float = 2.0,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Cantilever snap hook standing on a base block.

    The base occupies z in [0, base_height]; the arm rises from the base top
    along +Z with its barb facing +Y.
    """

    base = make_box(size=(width, base_depth, base_height), center=(0.0, 0.0, base_height / 2.0))
    arm = make_box(
        size=(width, arm_thickness, arm_length + 0.01),
        center=(0.0, 0.0, base_height + arm_length / 2.0 - 0.005),
    )
    barb = translate(_barb(width, arm_thickness, arm_length, barb_depth, barb_height), (0.0, 0.0, base_height))
    hook = boolean_union([base, arm, barb])
    if color is not None:
        set_mesh_color(hook, color)
    return hook


def make_clasp_catch(
    *,
    width: float = 8.0,
    barb_height: float = 2.0,
    wall_thickness: float = 2.0,
    catch_height: float = 6.0,
    clearance: float = 0.3,
    color: Sequence[float] | str | None = None,
) -> Mesh:
    """Frame with a window the hook barb snaps into.

    The frame wall lies in the XZ plane with its inner face on Y=0 and spans
    z in [0, catch_height]; the window is centred on the wall height.
    """

    frame_width = width + 2.0 * (wall_thickness + clearance)
    frame = make_box(
        size=(frame_width, wall_thickness, catch_height),
        center=(0.0, wall_thickness / 2.0, catch_height / 2.0),
    )
    window = make_box(
        size=(width + 2.0 * clearance, wall_thickness + 2.0, barb_height + 2.0 * clearance),
        center=(0.0, wall_thickness / 2.0, catch_height / 2.0),
    )
    catch = boolean_difference(frame, [window])
    if color is not None:
        set_mesh_color(catch, color)
    return catch


def make_clasp(
    *,
    width: float = 8.0,
    arm_length: float = 12.0,
    arm_thickness: float = 1.6,
    barb_depth: float = 1.0,
    barb_height: float = 2.0,
    wall_thickness: float = 2.0,
    catch_height: float = 6.0,
    clearance: float = 0.3,
    hook_color: Sequence[float] | str | None = "#7f8fa6",
    catch_color: Sequence[float] | str | None = "#8f7f6a",
) -> MeshGroup:
    """Hook and catch positioned in their engaged state."""

    base_height = 2.0
    hook = make_clasp_hook(
        width=width,
        arm_length=arm_length,
        arm_thickness=arm_thickness,
        barb_depth=barb_depth,
        barb_height=barb_height,
        base_height=base_height,
        color=hook_color,
    )
    catch = make_clasp_catch(
        width=width,
        barb_height=barb_height,
        wall_thickness=wall_thickness,
        catch_height=catch_height,
        clearance=clearance,
        color=catch_color,
    )
    # Barb sits inside the window with `clearance` on every side.
    ledge_z = base_height + arm_length - barb_height
    window_bottom = catch_height / 2.0 - barb_height / 2.0 - clearance
    catch = translate(catch, (0.0, arm_thickness / 2.0 + clearance, ledge_z - window_bottom - clearance))
    return group([hook, catch])


__all__ = [
    "make_clasp",
    "make_clasp_catch",
    "make_clasp_hook",
]
