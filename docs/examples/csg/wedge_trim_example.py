"""Cut a quarter out of a rounded block to show its inside."""

from __future__ import annotations

from partsmith.modeling import make_fillet_cube, wedge_trim


def build():
    block = make_fillet_cube((20.0, 20.0, 10.0), 2.0, color="#f58f7c")
    return wedge_trim(block, 0.0, 90.0)
