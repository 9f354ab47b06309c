from __future__ import annotations

import numpy as np

from partsmith.mesh import Mesh, analyze_mesh


def is_closed(mesh: Mesh) -> tuple[bool, int]:
    analysis = analyze_mesh(mesh)
    open_edges = analysis.boundary_edges + analysis.nonmanifold_edges
    return open_edges == 0, open_edges


def assert_solid(mesh: Mesh) -> None:
    """Closed, consistently wound and enclosing positive volume."""

    analysis = analyze_mesh(mesh)
    assert mesh.n_faces > 0
    assert analysis.is_watertight, analysis.issues()
    assert analysis.is_consistently_oriented, analysis.issues()
    assert mesh.volume > 0


def radial(points: np.ndarray) -> np.ndarray:
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    return np.hypot(points[:, 0], points[:, 1])
