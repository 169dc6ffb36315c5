import math

from geometry import Normal, Point, Vec2d
from hittable import HitRecord, Shape, oriented_normal
from materials import Material
from ray import Ray
from transformation import Transformation

PARALLEL_EPSILON = 1e-5


class Plane(Shape):
    """The infinite xy plane (z = 0) of the local frame."""

    def __init__(self, transformation: Transformation | None = None, material: Material | None = None):
        super().__init__(transformation, material)

    def shape_point_to_uv(self, point: Point) -> Vec2d:
        return Vec2d(point.x - math.floor(point.x), point.y - math.floor(point.y))

    def _hit_parameter(self, local_ray: Ray) -> float | None:
        if abs(local_ray.dir.z) < PARALLEL_EPSILON:
            return None

        t_hit = -local_ray.origin.z / local_ray.dir.z
        if t_hit <= local_ray.tmin or t_hit >= local_ray.tmax:
            return None
        return t_hit

    def quick_ray_intersection(self, ray: Ray) -> bool:
        local_ray = ray.transform(self.transformation.inverse())
        return self._hit_parameter(local_ray) is not None

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        local_ray = ray.transform(self.transformation.inverse())
        t_hit = self._hit_parameter(local_ray)
        if t_hit is None:
            return None

        local_hit = local_ray.at(t_hit)
        local_normal = oriented_normal(Normal(0.0, 0.0, 1.0), local_ray.dir)
        world_point, world_normal = self._to_world(local_hit, local_normal)

        return HitRecord(
            world_point=world_point,
            normal=world_normal,
            surface_point=self.shape_point_to_uv(local_hit),
            t=t_hit,
            ray=ray,
            material=self.material,
        )

    def is_point_internal(self, point: Point) -> bool:
        return False
