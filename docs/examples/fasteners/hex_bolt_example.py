"""M8 hex bolt with a plain barrel, its nut and a wing nut."""

from __future__ import annotations

from partsmith.modeling import group, make_hex_bolt, make_hex_nut, make_wing_nut, translate


def build():
    bolt = make_hex_bolt(8.0, 1.25, 30.0, thread_length=18.0, segments_per_turn=24, color="#9aa5b1")
    nut = make_hex_nut(8.0, 1.25, segments_per_turn=24, color="#c9a227")
    wing = make_wing_nut(8.0, 1.25, segments_per_turn=24, color="#7f8fa6")
    return group([bolt, translate(nut, (20.0, 0.0, 0.0)), translate(wing, (0.0, 30.0, 0.0))])
