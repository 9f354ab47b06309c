from __future__ import annotations

import pytest
from rich.console import Console

from partsmith._config import UnitSettings
from partsmith.mesh import empty_mesh, mesh_to_pyvista
from partsmith.modeling import group, make_box, make_cylinder
from partsmith.preview import PreviewBackendError, PyVistaPreviewer, collect_meshes


def test_collect_meshes_flattens_groups_and_lists() -> None:
    box = make_box()
    parts = group([make_box(center=(3.0, 0.0, 0.0)), make_cylinder()])
    meshes = collect_meshes([box, (parts, None), empty_mesh()])
    assert len(meshes) == 3
    assert meshes[0] is box


def test_collect_meshes_rejects_unknown_objects() -> None:
    with pytest.raises(PreviewBackendError, match="got str"):
        collect_meshes([make_box(), "box"])


def test_collect_meshes_requires_geometry() -> None:
    with pytest.raises(PreviewBackendError):
        collect_meshes([empty_mesh(), None])


def test_previewer_reports_units_without_backend() -> None:
    previewer = PyVistaPreviewer(console=Console(), unit_settings=UnitSettings("inches", "in", 25.4))
    assert previewer.unit_name == "inches"
    assert previewer.unit_label == "in"


def test_mesh_to_pyvista() -> None:
    poly = mesh_to_pyvista(make_box())
    assert poly.n_points == 8
    assert poly.n_cells == 12
