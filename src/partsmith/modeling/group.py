from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np

from partsmith.mesh import Mesh, combine_meshes

from .transform import mirror_matrix, rotation_matrix, scale_matrix, translation_matrix


@dataclass
class MeshGroup:
    """Hold multiple meshes and apply shared transforms."""

    meshes: List[Mesh] = field(default_factory=list)
    _transform: np.ndarray = field(default_factory=lambda: np.eye(4))

    def add(self, mesh: Mesh) -> "MeshGroup":
        self.meshes.append(mesh)
        return self

    def translate(self, offset: Sequence[float]) -> "MeshGroup":
        self._transform = translation_matrix(offset) @ self._transform
        return self

    def rotate(
        self,
        axis: Sequence[float],
        angle_deg: float,
        origin: Sequence[float] = (0.0, 0.0, 0.0),
    ) -> "MeshGroup":
        self._transform = rotation_matrix(axis, angle_deg, origin) @ self._transform
        return self

    def scale(self, factors: Sequence[float]) -> "MeshGroup":
        self._transform = scale_matrix(factors) @ self._transform
        return self

    def mirror(self, axis: Sequence[float]) -> "MeshGroup":
        self._transform = mirror_matrix(axis) @ self._transform
        return self

    def _apply_transform(self, mesh: Mesh) -> Mesh:
        return mesh.transform(self._transform, inplace=False)

    def to_meshes(self) -> list[Mesh]:
        return [self._apply_transform(mesh) for mesh in self.meshes]

    def to_mesh(self) -> Mesh:
        return combine_meshes(self.to_meshes())

    def __len__(self) -> int:
        return len(self.meshes)


def group(meshes: Iterable[Mesh]) -> MeshGroup:
    grp = MeshGroup()
    for m in meshes:
        grp.add(m)
    return grp
