"""Affine transformations stored as a 4x4 matrix paired with its inverse.

The inverse is always supplied by whoever builds the transformation (the
builders below know it analytically) and it is carried through composition,
so nothing in the renderer ever inverts a matrix numerically.
"""

import math
from typing import Sequence

import torch as t
from jaxtyping import Float, jaxtyped
from typeguard import typechecked as typechecker

from geometry import Normal, Point, Vec
from ray import Ray
from utils import are_close, degrees_to_radians

IDENTITY_MATRIX: Float[t.Tensor, "4 4"] = t.eye(4, dtype=t.float64)


@jaxtyped(typechecker=typechecker)
def _as_matrix(values: Float[t.Tensor, "4 4"] | Sequence[Sequence[float]] | None) -> Float[t.Tensor, "4 4"]:
    if values is None:
        return IDENTITY_MATRIX.clone()
    matrix = t.as_tensor(values, dtype=t.float64, device="cpu").clone()
    if matrix.shape != (4, 4):
        raise ValueError(f"Expected a 4x4 matrix, got shape {tuple(matrix.shape)}")
    return matrix


class Transformation:
    """Forward matrix `m` and inverse `invm`; value semantics, never mutated."""

    __slots__ = ("m", "invm")

    def __init__(
        self,
        m: Float[t.Tensor, "4 4"] | Sequence[Sequence[float]] | None = None,
        invm: Float[t.Tensor, "4 4"] | Sequence[Sequence[float]] | None = None,
    ):
        self.m: Float[t.Tensor, "4 4"] = _as_matrix(m)
        self.invm: Float[t.Tensor, "4 4"] = _as_matrix(invm)

    def __mul__(self, other):
        if isinstance(other, Transformation):
            # The inverse of a product is the product of the inverses in reverse order
            return Transformation(self.m @ other.m, other.invm @ self.invm)
        if isinstance(other, Point):
            return self._apply_to_point(other)
        if isinstance(other, Normal):
            return self._apply_to_normal(other)
        if isinstance(other, Vec):
            return self._apply_to_vec(other)
        if isinstance(other, Ray):
            return other.transform(self)
        return NotImplemented

    def _apply_to_point(self, p: Point) -> Point:
        x, y, z, w = (self.m @ t.tensor([p.x, p.y, p.z, 1.0], dtype=t.float64)).tolist()
        if are_close(w, 1.0):
            return Point(x, y, z)
        return Point(x / w, y / w, z / w)

    def _apply_to_vec(self, v: Vec) -> Vec:
        x, y, z = (self.m[:3, :3] @ t.tensor([v.x, v.y, v.z], dtype=t.float64)).tolist()
        return Vec(x, y, z)

    def _apply_to_normal(self, n: Normal) -> Normal:
        # Inverse transpose; the result is not normalized
        x, y, z = (self.invm[:3, :3].T @ t.tensor([n.x, n.y, n.z], dtype=t.float64)).tolist()
        return Normal(x, y, z)

    def inverse(self) -> "Transformation":
        return Transformation(self.invm, self.m)

    @jaxtyped(typechecker=typechecker)
    def is_consistent(self, epsilon: float = 1e-5) -> bool:
        """True if `m` times `invm` is the identity within `epsilon`."""
        product: Float[t.Tensor, "4 4"] = self.m @ self.invm
        return bool(t.allclose(product, IDENTITY_MATRIX, rtol=0.0, atol=epsilon))

    def is_close(self, other: "Transformation", epsilon: float = 1e-5) -> bool:
        return bool(
            t.allclose(self.m, other.m, rtol=0.0, atol=epsilon)
            and t.allclose(self.invm, other.invm, rtol=0.0, atol=epsilon)
        )

    def __repr__(self) -> str:
        return f"Transformation(m={self.m.tolist()}, invm={self.invm.tolist()})"


def translation(vec: Vec) -> Transformation:
    m = [
        [1.0, 0.0, 0.0, vec.x],
        [0.0, 1.0, 0.0, vec.y],
        [0.0, 0.0, 1.0, vec.z],
        [0.0, 0.0, 0.0, 1.0],
    ]
    invm = [
        [1.0, 0.0, 0.0, -vec.x],
        [0.0, 1.0, 0.0, -vec.y],
        [0.0, 0.0, 1.0, -vec.z],
        [0.0, 0.0, 0.0, 1.0],
    ]
    return Transformation(m, invm)


def scaling(vec: Vec) -> Transformation:
    """Scales each axis by the matching component of `vec`, which must all be non-zero."""
    if vec.x == 0.0 or vec.y == 0.0 or vec.z == 0.0:
        raise ValueError(f"Scaling factors must be non-zero, got ({vec.x}, {vec.y}, {vec.z})")

    m = [
        [vec.x, 0.0, 0.0, 0.0],
        [0.0, vec.y, 0.0, 0.0],
        [0.0, 0.0, vec.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
    invm = [
        [1.0 / vec.x, 0.0, 0.0, 0.0],
        [0.0, 1.0 / vec.y, 0.0, 0.0],
        [0.0, 0.0, 1.0 / vec.z, 0.0],
        [0.0, 0.0, 0.0, 1.0],
    ]
    return Transformation(m, invm)


def _rotation(m: list[list[float]]) -> Transformation:
    # Rotation matrices are orthogonal: the inverse is the transpose
    forward = t.tensor(m, dtype=t.float64)
    return Transformation(forward, forward.T)


def rotation_x(angle_deg: float) -> Transformation:
    angle = degrees_to_radians(angle_deg)
    sinang, cosang = math.sin(angle), math.cos(angle)
    return _rotation(
        [
            [1.0, 0.0, 0.0, 0.0],
            [0.0, cosang, -sinang, 0.0],
            [0.0, sinang, cosang, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_y(angle_deg: float) -> Transformation:
    angle = degrees_to_radians(angle_deg)
    sinang, cosang = math.sin(angle), math.cos(angle)
    return _rotation(
        [
            [cosang, 0.0, sinang, 0.0],
            [0.0, 1.0, 0.0, 0.0],
            [-sinang, 0.0, cosang, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def rotation_z(angle_deg: float) -> Transformation:
    angle = degrees_to_radians(angle_deg)
    sinang, cosang = math.sin(angle), math.cos(angle)
    return _rotation(
        [
            [cosang, -sinang, 0.0, 0.0],
            [sinang, cosang, 0.0, 0.0],
            [0.0, 0.0, 1.0, 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )
