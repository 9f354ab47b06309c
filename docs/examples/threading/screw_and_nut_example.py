"""Matched screw and nut core with lead-in on the screw tip."""

from __future__ import annotations

from partsmith.modeling import (
    NUT_DIAMETER_ADJUST,
    ThreadParams,
    group,
    make_nut_core,
    make_screw,
    translate,
)


def build():
    screw = make_screw(
        ThreadParams(diameter=10.0, pitch=1.5, length=16.0, segments_per_turn=32, lead_top=True, chamfer_top=True)
    )
    nut = make_nut_core(
        ThreadParams(diameter=10.0, pitch=1.5, length=8.0, segments_per_turn=32, diameter_adjust=NUT_DIAMETER_ADJUST),
        wall=2.5,
        entry_chamfer_top=True,
        entry_chamfer_bottom=True,
    )
    return group([translate(screw, (-9.0, 0.0, 0.0)), translate(nut, (9.0, 0.0, 0.0))])
