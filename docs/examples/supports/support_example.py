"""Breakaway scaffold under a bridge, drawn side by side with the bridge."""

from __future__ import annotations

from partsmith.modeling import group, make_box, make_support


def build():
    bridge = make_box(size=(30.0, 10.0, 2.0), center=(15.0, 5.0, 11.0), color="#9cdcfe")
    support = make_support((30.0, 10.0, 9.8), spacing=3.0, perforation=1.5, cross_braces=True, color="#d0d0d0")
    return group([bridge, support])
