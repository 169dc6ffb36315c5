import math
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class Color:
    """Linear RGB radiance; channels are not bounded to [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return Color(self.r + other.r, self.g + other.g, self.b + other.b)

    def __mul__(self, other):
        # Color * Color is the component-wise product
        if isinstance(other, Color):
            return Color(self.r * other.r, self.g * other.g, self.b * other.b)
        if isinstance(other, Real) and not isinstance(other, bool):
            return Color(self.r * other, self.g * other, self.b * other)
        return NotImplemented

    __rmul__ = __mul__

    def luminosity(self) -> float:
        """Shirley & Morley luminosity."""
        return (max(self.r, self.g, self.b) + min(self.r, self.g, self.b)) / 2.0

    def max_channel(self) -> float:
        return max(self.r, self.g, self.b)

    def to_tuple(self) -> tuple[float, float, float]:
        return self.r, self.g, self.b

    def is_close(self, other: "Color", epsilon: float = 1e-5) -> bool:
        return (
            isinstance(other, Color)
            and math.fabs(self.r - other.r) < epsilon
            and math.fabs(self.g - other.g) < epsilon
            and math.fabs(self.b - other.b) < epsilon
        )


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
