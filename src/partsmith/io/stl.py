from __future__ import annotations

from pathlib import Path

import numpy as np

from partsmith.mesh import Mesh

_HEADER = b"partsmith STL"
# One binary STL record: normal, three vertices, attribute byte count.
_RECORD = np.dtype(
    [
        ("normal", "<f4", (3,)),
        ("vertices", "<f4", (3, 3)),
        ("attr", "<u2"),
    ]
)


def face_normals(mesh: Mesh) -> np.ndarray:
    if mesh.n_faces == 0:
        return np.zeros((0, 3), dtype=float)
    v0 = mesh.vertices[mesh.faces[:, 0]]
    v1 = mesh.vertices[mesh.faces[:, 1]]
    v2 = mesh.vertices[mesh.faces[:, 2]]
    normals = np.cross(v1 - v0, v2 - v0)
    lengths = np.linalg.norm(normals, axis=1)
    out = np.zeros_like(normals)
    np.divide(normals, lengths[:, np.newaxis], out=out, where=lengths[:, np.newaxis] > 0)
    return out


def write_stl(mesh: Mesh, path: Path, ascii: bool = False, name: str = "partsmith") -> None:
    """Write a triangle mesh as binary (default) or ASCII STL."""

    path = Path(path)
    normals = face_normals(mesh)
    triangles = mesh.vertices[mesh.faces] if mesh.n_faces else np.zeros((0, 3, 3), dtype=float)

    if ascii:
        lines = [f"solid {name}"]
        for normal, tri in zip(normals, triangles):
            lines.append("  facet normal {:.6e} {:.6e} {:.6e}".format(*normal))
            lines.append("    outer loop")
            for vertex in tri:
                lines.append("      vertex {:.6e} {:.6e} {:.6e}".format(*vertex))
            lines.append("    endloop")
            lines.append("  endfacet")
        lines.append(f"endsolid {name}")
        path.write_text("\n".join(lines) + "\n")
        return

    records = np.zeros(mesh.n_faces, dtype=_RECORD)
    records["normal"] = normals
    records["vertices"] = triangles
    with path.open("wb") as handle:
        handle.write(_HEADER.ljust(80, b"\0"))
        handle.write(np.array([mesh.n_faces], dtype="<u4").tobytes())
        handle.write(records.tobytes())
