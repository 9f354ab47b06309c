from __future__ import annotations

from typing import Sequence

import numpy as np

from partsmith.mesh import Mesh


def _normalize_axis(axis: Sequence[float]) -> np.ndarray:
    vec = np.asarray(axis, dtype=float).reshape(3)
    norm = np.linalg.norm(vec)
    if norm == 0:
        raise ValueError("Rotation axis must be non-zero.")
    return vec / norm


def translation_matrix(offset: Sequence[float]) -> np.ndarray:
    dx, dy, dz = np.asarray(offset, dtype=float).reshape(3)
    mat = np.eye(4)
    mat[:3, 3] = [dx, dy, dz]
    return mat


def rotation_matrix(axis: Sequence[float], angle_deg: float, origin: Sequence[float] = (0.0, 0.0, 0.0)) -> np.ndarray:
    axis_vec = _normalize_axis(axis)
    angle_rad = np.deg2rad(angle_deg)
    x, y, z = axis_vec
    c = np.cos(angle_rad)
    s = np.sin(angle_rad)
    C = 1.0 - c
    rot = np.array(
        [
            [x * x * C + c, x * y * C - z * s, x * z * C + y * s, 0.0],
            [y * x * C + z * s, y * y * C + c, y * z * C - x * s, 0.0],
            [z * x * C - y * s, z * y * C + x * s, z * z * C + c, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=float,
    )
    origin = np.asarray(origin, dtype=float).reshape(3)
    return translation_matrix(origin) @ rot @ translation_matrix(-origin)


def scale_matrix(factors: Sequence[float], origin: Sequence[float] = (0.0, 0.0, 0.0)) -> np.ndarray:
    sx, sy, sz = np.asarray(factors, dtype=float).reshape(3)
    mat = np.diag([sx, sy, sz, 1.0])
    origin = np.asarray(origin, dtype=float).reshape(3)
    return translation_matrix(origin) @ mat @ translation_matrix(-origin)


def mirror_matrix(axis: Sequence[float]) -> np.ndarray:
    """Reflection through the plane through the origin whose normal is `axis`."""

    axis_vec = np.asarray(axis, dtype=float).reshape(3)
    norm = np.linalg.norm(axis_vec)
    if norm == 0:
        raise ValueError("Mirror axis must be non-zero.")
    axis_vec = axis_vec / norm
    mat = np.eye(4)
    mat[:3, :3] -= 2.0 * np.outer(axis_vec, axis_vec)
    return mat


def translate(mesh: Mesh, offset: Sequence[float]) -> Mesh:
    """Return a translated copy of the mesh."""

    return mesh.translate(offset, inplace=False)


def rotate(
    mesh: Mesh,
    axis: Sequence[float],
    angle_deg: float,
    origin: Sequence[float] = (0.0, 0.0, 0.0),
) -> Mesh:
    """Return a rotated copy of the mesh around an arbitrary axis."""

    return mesh.transform(rotation_matrix(axis, angle_deg, origin), inplace=False)


def scale(mesh: Mesh, factors: Sequence[float] | float, origin: Sequence[float] = (0.0, 0.0, 0.0)) -> Mesh:
    if np.isscalar(factors):
        factors = (float(factors),) * 3
    return mesh.transform(scale_matrix(factors, origin), inplace=False)


def mirror(mesh: Mesh, axis: Sequence[float]) -> Mesh:
    """Return a mirrored copy; face winding is flipped so normals stay outward."""

    return mesh.transform(mirror_matrix(axis), inplace=False)


def multmatrix(mesh: Mesh, matrix: np.ndarray) -> Mesh:
    mat = np.asarray(matrix, dtype=float)
    if mat.shape != (4, 4):
        raise ValueError("multmatrix requires a 4x4 matrix.")
    return mesh.transform(mat, inplace=False)
