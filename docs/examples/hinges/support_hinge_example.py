"""Print-in-place hinge with cone pins and a snap-off support strip."""

from __future__ import annotations

from partsmith.modeling import make_support_hinge


def build():
    return make_support_hinge(width=30.0, knuckle_count=5, pin_clearance=0.35)
