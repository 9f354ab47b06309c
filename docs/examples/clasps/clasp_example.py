from __future__ import annotations

from partsmith.modeling import make_clasp


def build():
    return make_clasp(width=10.0, arm_length=14.0, clearance=0.35)
