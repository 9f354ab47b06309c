from __future__ import annotations

import importlib.util
from pathlib import Path

import pytest

from partsmith.preview import collect_meshes

EXAMPLES = sorted((Path(__file__).resolve().parents[1] / "docs" / "examples").rglob("*_example.py"))


def _load_build(path: Path):
    spec = importlib.util.spec_from_file_location(f"example_{path.stem}", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.build


@pytest.mark.parametrize("path", EXAMPLES, ids=[p.stem for p in EXAMPLES])
def test_example_builds(path: Path) -> None:
    meshes = collect_meshes(_load_build(path)())
    assert all(mesh.n_faces > 0 for mesh in meshes)
