from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from geometry import Normal, Point, Vec, Vec2d
from materials import Material
from ray import Ray
from transformation import Transformation


@dataclass
class HitRecord:
    """Class to register ray-object intersections."""

    world_point: Point
    normal: Normal
    surface_point: Vec2d
    t: float
    ray: Ray
    material: Material = field(default_factory=Material, compare=False)

    def is_close(self, other: "HitRecord | None", epsilon: float = 1e-5) -> bool:
        if other is None:
            return False
        return (
            self.world_point.is_close(other.world_point, epsilon)
            and self.normal.is_close(other.normal, epsilon)
            and self.surface_point.is_close(other.surface_point, epsilon)
            and abs(self.t - other.t) < epsilon
            and self.ray.is_close(other.ray, epsilon)
        )


def oriented_normal(outward: Normal, ray_dir: Vec) -> Normal:
    """Flips the normal so that it faces the incoming ray."""
    return outward if outward.dot(ray_dir) < 0.0 else -outward


class Shape(ABC):
    """Base class of the shapes that can be placed in a World.

    `transformation` maps local coordinates to world coordinates. Every shape
    carries a Material; shapes built without one get the default material.
    """

    def __init__(self, transformation: Transformation | None = None, material: Material | None = None):
        self.transformation: Transformation = transformation if transformation is not None else Transformation()
        self.material: Material = material if material is not None else Material()

    @abstractmethod
    def shape_point_to_uv(self, point: Point) -> Vec2d:
        """Maps a point in local coordinates to surface (u, v) coordinates."""

    @abstractmethod
    def quick_ray_intersection(self, ray: Ray) -> bool:
        """Whether the ray hits the shape at all, without building a HitRecord."""

    @abstractmethod
    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Nearest intersection strictly within (ray.tmin, ray.tmax), or None."""

    @abstractmethod
    def is_point_internal(self, point: Point) -> bool:
        """Whether a world-space point lies inside the volume bounded by the shape."""

    def _to_world(self, local_point: Point, local_normal: Normal) -> tuple[Point, Normal]:
        return self.transformation * local_point, (self.transformation * local_normal).normalize()
