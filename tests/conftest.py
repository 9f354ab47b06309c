from __future__ import annotations

import os
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]


def pytest_configure():
    os.environ.setdefault("PYVISTA_OFF_SCREEN", "true")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture
def project_root() -> Path:
    return PROJECT_ROOT


@pytest.fixture
def model_file(tmp_path: Path) -> Path:
    """A throwaway model module whose build() returns a small box and cylinder."""

    path = tmp_path / "model.py"
    path.write_text(
        "from partsmith.modeling import make_box, make_cylinder, group\n"
        "\n"
        "def build():\n"
        "    return group([make_box(size=(4, 4, 4)), make_cylinder(radius=1, height=2, center=(6, 0, 0))])\n"
    )
    return path
