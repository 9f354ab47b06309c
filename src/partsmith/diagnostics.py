"""Non-fatal plausibility checks.

Operators never reject their inputs; these helpers only surface combinations
that will produce self-intersecting or empty geometry.
"""

from __future__ import annotations

import math
import warnings


def warn_min_feature(name: str, value: float, nozzle_diameter: float) -> None:
    if nozzle_diameter <= 0:
        return
    if value < nozzle_diameter:
        warnings.warn(
            f"{name} {value:.3f}mm is below nozzle diameter {nozzle_diameter:.3f}mm.",
            RuntimeWarning,
        )


def warn_implausible(message: str) -> None:
    warnings.warn(message, RuntimeWarning, stacklevel=3)


def check_thread_parameters(
    *,
    pitch: float,
    length: float,
    thread_angle_deg: float,
    truncation: float,
    fill: float,
) -> list[str]:
    """Return (and warn about) implausible thread parameter combinations."""

    problems: list[str] = []
    if pitch <= 0:
        problems.append(f"pitch {pitch:.4g}mm must be positive; thread will be empty.")
    elif length <= pitch:
        problems.append(f"length {length:.4g}mm does not exceed pitch {pitch:.4g}mm; thread will be empty.")
    if truncation < 0 or fill < 0:
        problems.append("truncation and fill must be non-negative.")
    if pitch > 0:
        height = math.cos(math.radians(thread_angle_deg) / 2.0) * pitch
        if truncation + fill >= height:
            problems.append(
                f"truncation + fill ({truncation + fill:.4g}mm) reaches thread height {height:.4g}mm; "
                "the profile collapses or inverts."
            )
    for problem in problems:
        warn_implausible(problem)
    return problems


def check_clearance_sign(diameter_adjust: float, *, internal: bool) -> None:
    if internal and diameter_adjust < 0:
        warn_implausible(f"nut diameter_adjust {diameter_adjust:.3f}mm is negative; nut will bind.")
    if not internal and diameter_adjust > 0:
        warn_implausible(f"screw diameter_adjust {diameter_adjust:.3f}mm is positive; screw will bind.")


def check_fastener_lengths(length: float, thread_length: float) -> None:
    if thread_length > length:
        warn_implausible(
            f"thread_length {thread_length:.4g}mm exceeds bolt length {length:.4g}mm; barrel length is negative."
        )
