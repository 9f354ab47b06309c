"""Modeling operators: primitives, CSG helpers, threads and fixed-topology parts."""

from __future__ import annotations

from .transform import mirror, rotate, scale, translate
from .primitives import (
    make_box,
    make_cone,
    make_cylinder,
    make_ngon,
    make_polygon_prism,
    make_polyhedron,
    make_sphere,
)
from .csg import (
    CSGError,
    boolean_difference,
    boolean_intersection,
    boolean_union,
    count_components,
    hull,
    union_meshes,
)
from .group import MeshGroup, group
from .threading import (
    NUT_DIAMETER_ADJUST,
    SCREW_DIAMETER_ADJUST,
    HelixSlice,
    ThreadMesh,
    ThreadParams,
    effective_radius,
    generate_thread,
    make_nut_core,
    make_screw,
    make_thread_segment,
)
from .fasteners import (
    FastenerSpec,
    head_thickness,
    make_hex_bolt,
    make_hex_nut,
    make_nut_hole,
    make_wing_nut,
    nut_thickness,
    resolve_fastener,
    wrench_width,
)
from .fillets import fillet_box_edges, make_corner_fillet_cutter, make_edge_fillet_cutter, make_fillet_cube
from .supports import make_support
from .hinges import make_hinge_leaf, make_hinge_pair, make_support_hinge
from .clasps import make_clasp, make_clasp_catch, make_clasp_hook
from .wedges import make_wedge, wedge_trim
from .polycube import POLYCUBE_FACES, make_frustum_block, make_polycube

__all__ = [
    "make_box",
    "make_cylinder",
    "make_cone",
    "make_ngon",
    "make_sphere",
    "make_polygon_prism",
    "make_polyhedron",
    "boolean_union",
    "boolean_difference",
    "boolean_intersection",
    "hull",
    "union_meshes",
    "count_components",
    "CSGError",
    "MeshGroup",
    "group",
    "translate",
    "rotate",
    "scale",
    "mirror",
    "ThreadParams",
    "SCREW_DIAMETER_ADJUST",
    "NUT_DIAMETER_ADJUST",
    "HelixSlice",
    "ThreadMesh",
    "effective_radius",
    "generate_thread",
    "make_thread_segment",
    "make_screw",
    "make_nut_core",
    "FastenerSpec",
    "wrench_width",
    "head_thickness",
    "nut_thickness",
    "resolve_fastener",
    "make_hex_bolt",
    "make_hex_nut",
    "make_wing_nut",
    "make_nut_hole",
    "make_fillet_cube",
    "make_edge_fillet_cutter",
    "make_corner_fillet_cutter",
    "fillet_box_edges",
    "make_support",
    "make_hinge_leaf",
    "make_hinge_pair",
    "make_support_hinge",
    "make_clasp_hook",
    "make_clasp_catch",
    "make_clasp",
    "make_wedge",
    "wedge_trim",
    "POLYCUBE_FACES",
    "make_polycube",
    "make_frustum_block",
]
