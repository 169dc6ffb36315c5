import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from geometry import Point, Vec

if TYPE_CHECKING:
    from transformation import Transformation


@dataclass(frozen=True)
class Ray:
    """Half-line origin + t * dir, valid for tmin < t < tmax."""

    origin: Point = Point()
    dir: Vec = Vec(1.0, 0.0, 0.0)
    tmin: float = 1e-5
    tmax: float = math.inf
    depth: int = 0

    def at(self, t_value: float) -> Point:
        return self.origin + self.dir * t_value

    def transform(self, transformation: "Transformation") -> "Ray":
        """Moves origin and direction; the parameter range and depth are preserved."""
        return replace(self, origin=transformation * self.origin, dir=transformation * self.dir)

    def is_close(self, other: "Ray", epsilon: float = 1e-5) -> bool:
        return self.origin.is_close(other.origin, epsilon) and self.dir.is_close(other.dir, epsilon)
