"""Points and distances on the plane.

All coordinates are floats.
"""

import math
from dataclasses import dataclass

ORIGIN_LABEL = "origin"

_EPSILON = 1e-9


@dataclass(frozen=True)
class Point:
    """A point with ``x`` and ``y`` coordinates."""

    x: float
    y: float

    @property
    def norm(self) -> float:
        """Distance from the origin."""
        return math.hypot(self.x, self.y)

    @classmethod
    def origin(cls) -> "Point":
        """The point at ``(0, 0)``."""
        return cls(0.0, 0.0)

    def translate(self, dx: float, dy: float = 0.0) -> "Point":
        """Return a copy moved by ``dx`` and ``dy``.

        ```python
        Point(1, 1).translate(2)
        ```
        """
        return Point(self.x + dx, self.y + dy)

    def _debug(self) -> str:
        return f"{self.x},{self.y}"


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def is_close(a: Point, b: Point) -> bool:
    """Whether two points are within floating point noise of each other."""
    return distance(a, b) < _EPSILON


async def fetch_point(name: str) -> Point:
    """Look up a named point.

    @hidden
    """
    return Point.origin()
