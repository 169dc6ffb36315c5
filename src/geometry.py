"""Value types for directions, positions, surface normals and UV coordinates.

Each type only accepts the operands that make geometric sense: a Point plus a
Vec is a Point, the difference of two Points is a Vec, a Normal can be dotted
with a Vec but never added to one. Every other combination raises TypeError.
"""

import math
from dataclasses import dataclass
from numbers import Real


def _is_scalar(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _close(a: float, b: float, epsilon: float) -> bool:
    return math.fabs(a - b) < epsilon


@dataclass(frozen=True)
class Vec:
    """A free direction in 3D space, unaffected by translations."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return Vec(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return Vec(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return Vec(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> "Vec":
        return Vec(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec | Normal") -> float:
        if not isinstance(other, (Vec, Normal)):
            raise TypeError(f"Cannot take the dot product of a Vec and a {type(other).__name__}")
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec | Normal") -> "Vec":
        if not isinstance(other, (Vec, Normal)):
            raise TypeError(f"Cannot take the cross product of a Vec and a {type(other).__name__}")
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> "Vec":
        """Returns a unit vector with the same direction (the zero vector is returned unchanged)."""
        norm = self.norm()
        return self if norm == 0.0 else self / norm

    def to_normal(self) -> "Normal":
        return Normal(self.x, self.y, self.z)

    def is_close(self, other: "Vec", epsilon: float = 1e-5) -> bool:
        return (
            isinstance(other, Vec)
            and _close(self.x, other.x, epsilon)
            and _close(self.y, other.y, epsilon)
            and _close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True)
class Point:
    """A position in 3D space."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __add__(self, other):
        if not isinstance(other, Vec):
            return NotImplemented
        return Point(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vec(self.x - other.x, self.y - other.y, self.z - other.z)
        if isinstance(other, Vec):
            return Point(self.x - other.x, self.y - other.y, self.z - other.z)
        return NotImplemented

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)

    def is_close(self, other: "Point", epsilon: float = 1e-5) -> bool:
        return (
            isinstance(other, Point)
            and _close(self.x, other.x, epsilon)
            and _close(self.y, other.y, epsilon)
            and _close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True)
class Normal:
    """A surface normal; transformations act on it through the inverse transpose."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __mul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return Normal(self.x * scalar, self.y * scalar, self.z * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> "Normal":
        return Normal(-self.x, -self.y, -self.z)

    def dot(self, other: "Vec | Normal") -> float:
        if not isinstance(other, (Vec, Normal)):
            raise TypeError(f"Cannot take the dot product of a Normal and a {type(other).__name__}")
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: "Vec | Normal") -> Vec:
        if not isinstance(other, (Vec, Normal)):
            raise TypeError(f"Cannot take the cross product of a Normal and a {type(other).__name__}")
        return Vec(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def squared_norm(self) -> float:
        return self.x * self.x + self.y * self.y + self.z * self.z

    def norm(self) -> float:
        return math.sqrt(self.squared_norm())

    def normalize(self) -> "Normal":
        norm = self.norm()
        return self if norm == 0.0 else Normal(self.x / norm, self.y / norm, self.z / norm)

    def to_vec(self) -> Vec:
        return Vec(self.x, self.y, self.z)

    def is_close(self, other: "Normal", epsilon: float = 1e-5) -> bool:
        return (
            isinstance(other, Normal)
            and _close(self.x, other.x, epsilon)
            and _close(self.y, other.y, epsilon)
            and _close(self.z, other.z, epsilon)
        )


@dataclass(frozen=True)
class Vec2d:
    """(u, v) coordinates on a parametric surface."""

    u: float = 0.0
    v: float = 0.0

    def is_close(self, other: "Vec2d", epsilon: float = 1e-5) -> bool:
        return isinstance(other, Vec2d) and _close(self.u, other.u, epsilon) and _close(self.v, other.v, epsilon)


VEC_X = Vec(1.0, 0.0, 0.0)
VEC_Y = Vec(0.0, 1.0, 0.0)
VEC_Z = Vec(0.0, 0.0, 1.0)


def normalized_dot(v1: Vec | Normal, v2: Vec | Normal) -> float:
    """Cosine of the angle between two directions, 0 if either has zero length."""
    norms = v1.norm() * v2.norm()
    if norms == 0.0:
        return 0.0
    return v1.dot(v2) / norms


def create_onb_from_z(normal: Vec | Normal) -> tuple[Vec, Vec, Vec]:
    """Orthonormal basis (e1, e2, e3) with e3 equal to the given unit normal.

    Duff et al., "Building an Orthonormal Basis, Revisited" (JCGT 2017).
    """
    sign = math.copysign(1.0, normal.z)
    a = -1.0 / (sign + normal.z)
    b = normal.x * normal.y * a

    e1 = Vec(1.0 + sign * normal.x * normal.x * a, sign * b, -sign * normal.x)
    e2 = Vec(b, sign + normal.y * normal.y * a, -normal.y)

    return e1, e2, Vec(normal.x, normal.y, normal.z)
