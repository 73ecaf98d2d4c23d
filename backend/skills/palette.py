"""
Deterministic color palette.

Colors are assigned by position only, so the same configuration always
renders with the same colors.
"""

from __future__ import annotations

from typing import List

PALETTE = (
    "rgba(59, 130, 246, 0.8)",   # blue
    "rgba(16, 185, 129, 0.8)",   # green
    "rgba(245, 101, 101, 0.8)",  # red
    "rgba(251, 191, 36, 0.8)",   # yellow
    "rgba(139, 92, 246, 0.8)",   # purple
    "rgba(236, 72, 153, 0.8)",   # pink
    "rgba(14, 165, 233, 0.8)",   # sky
    "rgba(34, 197, 94, 0.8)",    # emerald
    "rgba(249, 115, 22, 0.8)",   # orange
    "rgba(168, 85, 247, 0.8)",   # violet
)

LINE_FILL = "rgba(59, 130, 246, 0.5)"
LINE_STROKE = "rgba(59, 130, 246, 1)"


def colors_for(n: int) -> List[str]:
    """Return *n* palette colors, cycling after the tenth."""
    return [PALETTE[i % len(PALETTE)] for i in range(max(n, 0))]


def border_colors(n: int) -> List[str]:
    """Same colors as ``colors_for`` at full opacity."""
    return [c.replace("0.8", "1") for c in colors_for(n)]


def point_color(index: int) -> str:
    # golden-angle hue steps keep neighbouring points apart
    hue = (index * 137.5) % 360
    return f"hsl({hue:g}, 70%, 60%)"
