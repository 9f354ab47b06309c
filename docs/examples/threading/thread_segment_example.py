"""Bare thread ridge with a chamfered lead-in, as used for cutting custom parts."""

from __future__ import annotations

from partsmith.modeling import ThreadParams, make_thread_segment


def build():
    params = ThreadParams(
        diameter=10.0,
        pitch=1.5,
        length=25.0,
        segments_per_turn=50,
        diameter_adjust=-0.4,
        truncation=0.3,
        fill=0.3,
        lead_top=True,
        chamfer_top=True,
    )
    return make_thread_segment(params, resolution=48)
