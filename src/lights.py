from dataclasses import dataclass

from color import WHITE, Color
from geometry import Point


@dataclass(frozen=True)
class PointLight:
    """Point light source used by the point-light renderer.

    If `linear_radius` is positive, the light contributes (r / d)^2 at distance d,
    i.e. it behaves as a sphere of radius r seen from afar; otherwise the
    contribution does not decay with distance.
    """

    position: Point
    color: Color = WHITE
    linear_radius: float = 0.0
