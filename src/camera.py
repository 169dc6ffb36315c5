from abc import ABC, abstractmethod

from geometry import VEC_X, Point, Vec
from ray import Ray
from transformation import Transformation


class Camera(ABC):
    """Maps screen coordinates (u, v) in [0, 1]^2 to rays in world space.

    In camera space the observer looks along +X, with +Z pointing up; `u`
    grows to the right (towards -Y) and `v` grows upwards.
    """

    def __init__(self, aspect_ratio: float = 1.0, transformation: Transformation | None = None):
        self.aspect_ratio: float = aspect_ratio
        self.transformation: Transformation = transformation if transformation is not None else Transformation()

    @abstractmethod
    def fire_ray(self, u: float, v: float) -> Ray:
        pass


class OrthogonalCamera(Camera):
    """Parallel projection: every ray has direction +X."""

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-1.0, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return Ray(origin=origin, dir=VEC_X).transform(self.transformation)


class PerspectiveCamera(Camera):
    """Pinhole camera with the observer `distance` units behind the screen."""

    def __init__(self, distance: float = 1.0, aspect_ratio: float = 1.0, transformation: Transformation | None = None):
        super().__init__(aspect_ratio, transformation)
        self.distance: float = distance

    def fire_ray(self, u: float, v: float) -> Ray:
        origin = Point(-self.distance, 0.0, 0.0)
        direction = Vec(self.distance, (1.0 - 2.0 * u) * self.aspect_ratio, 2.0 * v - 1.0)
        return Ray(origin=origin, dir=direction).transform(self.transformation)
