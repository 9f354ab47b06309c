from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from partsmith.mesh import Mesh, triangulate_faces

from ._color import ColorLike, set_mesh_color

_BOX_FACES = (
    (0, 3, 2, 1),
    (4, 5, 6, 7),
    (0, 1, 5, 4),
    (2, 3, 7, 6),
    (3, 0, 4, 7),
    (1, 2, 6, 5),
)


def make_box(
    size: Sequence[float] = (1.0, 1.0, 1.0),
    center: Sequence[float] = (0.0, 0.0, 0.0),
    color: ColorLike | None = None,
) -> Mesh:
    """Axis-aligned box specified by size (dx, dy, dz) and center."""

    sx, sy, sz = (float(v) for v in size)
    hx, hy, hz = sx / 2.0, sy / 2.0, sz / 2.0
    corners = np.array(
        [
            (-hx, -hy, -hz),
            (hx, -hy, -hz),
            (hx, hy, -hz),
            (-hx, hy, -hz),
            (-hx, -hy, hz),
            (hx, -hy, hz),
            (hx, hy, hz),
            (-hx, hy, hz),
        ],
        dtype=float,
    )
    mesh = Mesh(corners + np.asarray(center, dtype=float).reshape(3), triangulate_faces(_BOX_FACES))
    return _finish(mesh, color)


def make_cylinder(
    radius: float = 0.5,
    height: float = 1.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    direction: Sequence[float] = (0.0, 0.0, 1.0),
    resolution: int = 64,
    color: ColorLike | None = None,
) -> Mesh:
    """Right circular cylinder aligned with `direction`."""

    mesh = _circular_frustum_mesh(radius, radius, height, resolution)
    mesh = _orient_mesh(mesh, direction)
    mesh.translate(center)
    return _finish(mesh, color)


def make_cone(
    bottom_diameter: float = 1.0,
    top_diameter: float = 0.0,
    height: float = 1.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    direction: Sequence[float] = (0.0, 0.0, 1.0),
    resolution: int = 64,
    color: ColorLike | None = None,
) -> Mesh:
    """Circular frustum. Set top_diameter=0 for a classic cone."""

    bottom_radius = bottom_diameter / 2.0
    top_radius = top_diameter / 2.0
    if bottom_radius <= 0 and top_radius <= 0:
        raise ValueError("At least one of bottom_diameter or top_diameter must be > 0.")

    mesh = _circular_frustum_mesh(bottom_radius, top_radius, height, resolution)
    mesh = _orient_mesh(mesh, direction)
    mesh.translate(center)
    return _finish(mesh, color)


def make_ngon(
    sides: int = 6,
    radius: float = 1.0,
    height: float = 1.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    direction: Sequence[float] = (0.0, 0.0, 1.0),
    color: ColorLike | None = None,
) -> Mesh:
    """Regular prism; `radius` is the circumradius, first corner on +X."""

    if sides < 3:
        raise ValueError("sides must be >= 3.")
    mesh = _circular_frustum_mesh(radius, radius, height, sides)
    mesh = _orient_mesh(mesh, direction)
    mesh.translate(center)
    return _finish(mesh, color)


def make_sphere(
    radius: float = 0.5,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    resolution: int = 32,
    color: ColorLike | None = None,
) -> Mesh:
    """UV sphere with `resolution` segments around and resolution/2 bands."""

    segments = max(int(resolution), 3)
    rings = max(segments // 2, 2)
    angles = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    points = [np.array([[0.0, 0.0, radius]])]
    for k in range(1, rings):
        phi = np.pi * k / rings
        ring_radius = radius * np.sin(phi)
        z = radius * np.cos(phi)
        points.append(
            np.column_stack([ring_radius * np.cos(angles), ring_radius * np.sin(angles), np.full(segments, z)])
        )
    points.append(np.array([[0.0, 0.0, -radius]]))
    vertices = np.vstack(points)

    top = 0
    bottom = vertices.shape[0] - 1
    faces: list[list[int]] = []

    def ring(k: int, i: int) -> int:
        return 1 + (k - 1) * segments + (i % segments)

    for i in range(segments):
        faces.append([top, ring(1, i), ring(1, i + 1)])
    for k in range(1, rings - 1):
        for i in range(segments):
            faces.append([ring(k, i), ring(k + 1, i), ring(k + 1, i + 1)])
            faces.append([ring(k, i), ring(k + 1, i + 1), ring(k, i + 1)])
    for i in range(segments):
        faces.append([bottom, ring(rings - 1, i + 1), ring(rings - 1, i)])

    mesh = Mesh(vertices + np.asarray(center, dtype=float).reshape(3), np.asarray(faces, dtype=int))
    return _finish(mesh, color)


def make_polygon_prism(
    points: Sequence[Sequence[float]],
    height: float = 1.0,
    center: Sequence[float] = (0.0, 0.0, 0.0),
    color: ColorLike | None = None,
) -> Mesh:
    """Extrude a simple 2D polygon along +Z; the base sits on center's Z plane."""

    height = float(height)
    if height <= 0:
        raise ValueError("height must be positive.")
    loop = np.asarray(points, dtype=float).reshape(-1, 2)
    if loop.shape[0] > 1 and np.allclose(loop[0], loop[-1]):
        loop = loop[:-1]
    if loop.shape[0] < 3:
        raise ValueError("Polygon requires at least three points.")
    if _signed_area(loop) < 0:
        loop = loop[::-1].copy()

    count = loop.shape[0]
    cap = _triangulate_loop(loop)
    base = np.column_stack([loop, np.zeros(count)])
    top = base + np.array([0.0, 0.0, height])
    vertices = np.vstack([base, top]) + np.asarray(center, dtype=float).reshape(3)

    faces = [cap[:, [0, 2, 1]], cap + count]
    for i in range(count):
        j = (i + 1) % count
        faces.append(np.array([[i, j, j + count], [i, j + count, i + count]], dtype=int))
    mesh = Mesh(vertices, np.vstack(faces))
    return _finish(mesh, color)


def make_polyhedron(
    vertices: Sequence[Sequence[float]],
    faces: Sequence[Sequence[int]],
    color: ColorLike | None = None,
) -> Mesh:
    """Build a mesh from explicit vertices and polygon faces (outward CCW winding)."""

    verts = np.asarray(vertices, dtype=float).reshape(-1, 3)
    tris = triangulate_faces(faces)
    if tris.size and (tris.min() < 0 or tris.max() >= verts.shape[0]):
        raise ValueError("Face indices reference undefined vertices.")
    return _finish(Mesh(verts, tris), color)


def _finish(mesh: Mesh, color: ColorLike | None) -> Mesh:
    if color is not None:
        set_mesh_color(mesh, color)
    return mesh


def _normalize(vector: Sequence[float]) -> Tuple[float, float, float]:
    arr = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(arr)
    if norm == 0:
        raise ValueError("Direction vector must be non-zero.")
    arr = arr / norm
    return float(arr[0]), float(arr[1]), float(arr[2])


def _orient_mesh(mesh: Mesh, direction: Sequence[float]) -> Mesh:
    target = np.asarray(_normalize(direction))
    default = np.array([0.0, 0.0, 1.0])
    if np.allclose(target, default):
        return mesh
    axis = np.cross(default, target)
    axis_norm = np.linalg.norm(axis)
    if axis_norm == 0:
        # opposite direction; rotate 180 around X
        axis = np.array([1.0, 0.0, 0.0])
        angle_deg = 180.0
    else:
        axis = axis / axis_norm
        angle_rad = np.arccos(np.clip(np.dot(default, target), -1.0, 1.0))
        angle_deg = np.degrees(angle_rad)
    return mesh.rotate_vector(axis, angle_deg, point=(0.0, 0.0, 0.0))


def _circular_frustum_mesh(
    bottom_radius: float,
    top_radius: float,
    height: float,
    resolution: int,
) -> Mesh:
    bottom_radius = max(bottom_radius, 0.0)
    top_radius = max(top_radius, 0.0)
    count = max(int(resolution), 3)
    z_bottom = -height / 2.0
    z_top = height / 2.0
    angles = np.linspace(0, 2 * np.pi, count, endpoint=False)

    def ring_points(radius: float, z: float) -> np.ndarray:
        return np.column_stack([radius * np.cos(angles), radius * np.sin(angles), np.full_like(angles, z)])

    faces: list[list[int]] = []
    if bottom_radius > 0 and top_radius > 0:
        vertices = np.vstack([ring_points(bottom_radius, z_bottom), ring_points(top_radius, z_top)])
        for i in range(count):
            j = (i + 1) % count
            faces.append([i, j, count + j])
            faces.append([i, count + j, count + i])
        faces.extend(triangulate_faces([list(range(count))[::-1]]).tolist())
        faces.extend(triangulate_faces([list(range(count, 2 * count))]).tolist())
    elif bottom_radius > 0:
        vertices = np.vstack([ring_points(bottom_radius, z_bottom), [[0.0, 0.0, z_top]]])
        apex = count
        for i in range(count):
            faces.append([i, (i + 1) % count, apex])
        faces.extend(triangulate_faces([list(range(count))[::-1]]).tolist())
    else:
        # inverted cone (top ring, bottom apex)
        vertices = np.vstack([[[0.0, 0.0, z_bottom]], ring_points(top_radius, z_top)])
        for i in range(count):
            faces.append([0, 1 + (i + 1) % count, 1 + i])
        faces.extend(triangulate_faces([list(range(1, count + 1))]).tolist())

    return Mesh(vertices, np.asarray(faces, dtype=int))


def _signed_area(points: np.ndarray) -> float:
    if points.shape[0] < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(y, np.roll(x, -1)))


def _triangulate_loop(loop: np.ndarray) -> np.ndarray:
    try:
        import mapbox_earcut as earcut
    except ImportError as exc:  # pragma: no cover - runtime dependency
        raise ImportError("mapbox_earcut is required for polygon triangulation.") from exc

    vertices = np.ascontiguousarray(loop, dtype=np.float64)
    ring_ends = np.asarray([loop.shape[0]], dtype=np.uint32)
    indices = earcut.triangulate_float64(vertices, ring_ends)
    faces = np.asarray(indices, dtype=np.int64).reshape(-1, 3)
    # earcut output winding is not guaranteed; force counter-clockwise.
    a = loop[faces[:, 0]]
    b = loop[faces[:, 1]]
    c = loop[faces[:, 2]]
    cross = (b[:, 0] - a[:, 0]) * (c[:, 1] - a[:, 1]) - (b[:, 1] - a[:, 1]) * (c[:, 0] - a[:, 0])
    flip = cross < 0
    if np.any(flip):
        faces[flip] = faces[flip][:, [0, 2, 1]]
    return faces
