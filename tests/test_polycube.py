from __future__ import annotations

import numpy as np
import pytest

from partsmith.modeling import make_frustum_block, make_polycube

from tests.helpers import assert_solid


def test_unit_polycube_matches_box() -> None:
    corners = [
        (0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0),
        (0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1),
    ]
    cube = make_polycube(corners)
    assert_solid(cube)
    assert cube.volume == pytest.approx(1.0)


def test_frustum_block_volume() -> None:
    block = make_frustum_block((4.0, 4.0), (2.0, 2.0), 3.0)
    assert_solid(block)
    assert block.volume == pytest.approx(28.0)


def test_shifted_frustum_keeps_volume() -> None:
    block = make_frustum_block((4.0, 4.0), (2.0, 2.0), 3.0, shift=(1.0, 0.0))
    assert block.volume == pytest.approx(28.0)
    assert block.bounds[1] == pytest.approx(2.0)
    top = block.vertices[block.vertices[:, 2] > 2.0]
    assert np.allclose(top[:, 0].mean(), 1.0)


def test_polycube_rejects_wrong_corner_count() -> None:
    with pytest.raises(ValueError):
        make_polycube([(0, 0, 0)] * 7)
