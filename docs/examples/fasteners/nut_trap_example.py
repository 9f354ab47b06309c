"""Plate with a captive hex-nut pocket punched from below."""

from __future__ import annotations

from partsmith.modeling import boolean_difference, make_box, make_nut_hole


def build():
    plate = make_box(size=(24.0, 24.0, 8.0), center=(0.0, 0.0, 4.0))
    pocket = make_nut_hole(5.0, bore_length=20.0)
    return boolean_difference(plate, [pocket])
