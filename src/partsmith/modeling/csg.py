from __future__ import annotations

from typing import Iterable, Mapping, Union

import numpy as np

from partsmith.mesh import Mesh, empty_mesh

from .group import MeshGroup

MeshLike = Union[Mesh, MeshGroup]


class CSGError(ValueError):
    """Raised when the boolean kernel rejects an input or produces an invalid result."""


def boolean_union(meshes: Iterable[MeshLike]) -> Mesh:
    sources = [_as_mesh(mesh) for mesh in meshes]
    if not sources:
        raise ValueError("boolean_union requires at least one mesh.")

    result = _to_manifold(sources[0])
    for mesh in sources[1:]:
        result = result + _to_manifold(mesh)
    return _finalize(result, sources)


def boolean_difference(base: MeshLike, cutters: Iterable[MeshLike]) -> Mesh:
    sources = [_as_mesh(base)] + [_as_mesh(mesh) for mesh in cutters]
    result = _to_manifold(sources[0])
    for mesh in sources[1:]:
        result = result - _to_manifold(mesh)
    return _finalize(result, sources)


def boolean_intersection(meshes: Iterable[MeshLike]) -> Mesh:
    sources = [_as_mesh(mesh) for mesh in meshes]
    if not sources:
        raise ValueError("boolean_intersection requires at least one mesh.")

    result = _to_manifold(sources[0])
    for mesh in sources[1:]:
        result = result ^ _to_manifold(mesh)
    return _finalize(result, sources)


def hull(meshes: Iterable[MeshLike]) -> Mesh:
    """Convex hull of one or more meshes."""

    sources = [_as_mesh(mesh) for mesh in meshes]
    if not sources:
        raise ValueError("hull requires at least one shape.")

    manifolds = [_to_manifold(mesh) for mesh in sources]
    if len(manifolds) == 1:
        result = manifolds[0].hull()
    else:
        from manifold3d import Manifold

        result = Manifold.batch_hull(manifolds)
    return _finalize(result, sources)


def union_meshes(meshes: Union[Iterable[MeshLike], Mapping[object, MeshLike]]) -> Mesh:
    """Convenience wrapper around boolean_union that accepts an iterable or mapping."""

    if isinstance(meshes, Mapping):
        meshes = meshes.values()
    return boolean_union(meshes)


def count_components(mesh: MeshLike) -> int:
    """Number of disconnected solids in a closed mesh."""

    return len(_to_manifold(_as_mesh(mesh)).decompose())


def _as_mesh(mesh: MeshLike) -> Mesh:
    if isinstance(mesh, MeshGroup):
        return mesh.to_mesh()
    if not isinstance(mesh, Mesh):
        raise TypeError(f"Expected a Mesh or MeshGroup, got {type(mesh).__name__}.")
    return mesh


def _to_manifold(mesh: Mesh):
    from manifold3d import Manifold, Mesh as ManifoldMesh

    if mesh.n_faces == 0:
        return Manifold()
    vertices = np.ascontiguousarray(mesh.vertices, dtype=np.float32)
    faces = np.ascontiguousarray(mesh.faces, dtype=np.uint32)
    try:
        manifold_mesh = ManifoldMesh(vert_properties=vertices, tri_verts=faces)
    except TypeError:
        manifold_mesh = ManifoldMesh(vertices, faces)
    manifold = Manifold(manifold_mesh)
    _check_status(manifold)
    return manifold


def _check_status(manifold) -> None:
    from manifold3d import Error

    status = manifold.status()
    if status != Error.NoError:
        raise CSGError(f"Mesh is not a closed oriented manifold ({status}).")


def _from_manifold(manifold) -> Mesh:
    mesh = manifold.to_mesh()
    vertices = np.asarray(mesh.vert_properties, dtype=float)
    faces = np.asarray(mesh.tri_verts, dtype=int)
    if vertices.size == 0 or faces.size == 0:
        return empty_mesh()
    return Mesh(vertices[:, :3], faces)


def _finalize(manifold, sources: list[Mesh]) -> Mesh:
    _check_status(manifold)
    result = _from_manifold(manifold)
    for source in sources:
        if source.color is not None:
            result.color = source.color
            break
    return result
