"""Color and gradient encoding for Slint brushes.

Pure functions with no I/O and no variable lookups.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .formatting import round_half_away
from .models import Color, ColorStop, Paint

logger = logging.getLogger("figma_inspector.snippet.colors")


def rgb_to_hex(color: Color, alpha: Optional[float] = None) -> str:
    """Convert a normalized color to ``#rrggbb`` or ``#rrggbbaa``.

    The alpha byte is only written when alpha < 1. ``alpha`` overrides the
    color's own alpha (solid paints carry opacity on the paint, not the color).
    """
    alpha_f = color.a if alpha is None else alpha
    values = [round_half_away(color.r * 255), round_half_away(color.g * 255), round_half_away(color.b * 255)]
    if alpha_f < 1:
        values.append(round_half_away(alpha_f * 255))
    return "#" + "".join(f"{v:02x}" for v in values)


def _format_stops(stops: Sequence[ColorStop]) -> str:
    return ", ".join(
        f"{rgb_to_hex(stop.color)} {round_half_away(stop.position * 100)}%"
        for stop in stops
    )


def generate_linear_gradient(
    stops: Optional[Sequence[ColorStop]],
    transform: List[List[float]],
) -> str:
    """``@linear-gradient(<angle>deg, <stops>)``; "" for fewer than 2 stops.

    Only the rotation of the gradient transform matters:
    angle = (90 + atan2(t[0][1], t[0][0]) in degrees) mod 360.
    """
    if not stops or len(stops) < 2:
        return ""

    a, b = transform[0][0], transform[0][1]
    angle = (90 + round_half_away(math.degrees(math.atan2(b, a)))) % 360
    return f"@linear-gradient({angle}deg, {_format_stops(stops)})"


def generate_radial_gradient(stops: Optional[Sequence[ColorStop]]) -> str:
    """``@radial-gradient(circle, <stops>)``; "" for fewer than 2 stops."""
    if not stops or len(stops) < 2:
        return ""
    return f"@radial-gradient(circle, {_format_stops(stops)})"


def resolve_paint(paint: Paint) -> Optional[str]:
    """Turn a paint into a Slint brush expression.

    Returns "" when the paint lacks the data its kind needs and None for
    paint kinds Slint has no brush for (IMAGE, VIDEO, ...).
    """
    if paint.type == "SOLID":
        if paint.color is None:
            logger.warning("Missing fill colors for solid color value")
            return ""
        return rgb_to_hex(paint.color, alpha=paint.opacity)

    if paint.type == "GRADIENT_LINEAR":
        if not paint.gradient_stops or not paint.gradient_transform:
            logger.warning("Missing gradient stops for linear gradient")
            return ""
        return generate_linear_gradient(paint.gradient_stops, paint.gradient_transform)

    if paint.type == "GRADIENT_RADIAL":
        if not paint.gradient_stops or not paint.gradient_transform:
            logger.warning("Missing gradient stops for radial gradient")
            return ""
        return generate_radial_gradient(paint.gradient_stops)

    logger.warning(f"Unknown fill type: {paint.type}")
    return None
