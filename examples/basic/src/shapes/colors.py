"""Colors and blending."""

from enum import Enum


class Color(str, Enum):
    """Named colors.

    Values are hex strings such as ``#ff0000``.
    """

    RED = "#ff0000"
    GREEN = "#00ff00"
    BLUE = "#0000ff"

    @staticmethod
    def parse(text: str) -> "Color":
        """Look up a color by its hex value."""
        return Color(text.lower())


def blend(first: Color, second: Color, ratio: float = 0.5) -> str:
    """Mix two colors.

    Returns a hex string; ``ratio`` is the share of ``second``.
    """
    a = int(first.value[1:], 16)
    b = int(second.value[1:], 16)
    channels = []
    for shift in (16, 8, 0):
        x = (a >> shift) & 0xFF
        y = (b >> shift) & 0xFF
        channels.append(round(x + (y - x) * ratio))
    return "#" + "".join(f"{c:02x}" for c in channels)
