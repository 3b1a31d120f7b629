"""Snap color palette, indexed by snap category."""

# RGB tuples
SNAP_WHOLE = (255, 64, 64)  # 1/1 red
SNAP_HALF = (64, 128, 255)  # 1/2 blue
SNAP_THIRD = (176, 80, 255)  # 1/3 purple
SNAP_QUARTER = (255, 230, 64)  # 1/4 yellow
SNAP_SIXTH = (255, 128, 200)  # 1/6 pink
SNAP_EIGHTH = (255, 160, 48)  # 1/8 orange
SNAP_TWELFTH = (64, 220, 220)  # 1/12 cyan
SNAP_SIXTEENTH = (80, 220, 100)  # 1/16 green
SNAP_UNSNAPPED = (160, 160, 160)  # 1/48 gray
UNCLASSIFIED = (220, 220, 220)

SNAP_COLORS = (
    SNAP_WHOLE,
    SNAP_HALF,
    SNAP_THIRD,
    SNAP_QUARTER,
    SNAP_SIXTH,
    SNAP_EIGHTH,
    SNAP_TWELFTH,
    SNAP_SIXTEENTH,
    SNAP_UNSNAPPED,
)


def snap_color(category: int | None) -> tuple[int, int, int]:
    """Color for a snap category; objects without one get UNCLASSIFIED."""
    if category is None:
        return UNCLASSIFIED
    return SNAP_COLORS[category]
