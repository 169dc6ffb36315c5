import math

from geometry import VEC_X, Normal, Point, Vec, Vec2d
from hittable import HitRecord, Shape, oriented_normal
from materials import Material
from ray import Ray
from transformation import Transformation


def _solve_quadratic(origin: Vec, direction: Vec, radius: float) -> tuple[float, float] | None:
    """Roots of |origin + t * direction|^2 = radius^2, smallest first, or None if there are none."""
    a = direction.squared_norm()
    if a == 0.0:
        return None
    b = 2.0 * origin.dot(direction)
    c = origin.squared_norm() - radius * radius

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    sqrt_discriminant = math.sqrt(discriminant)
    t_min = (-b - sqrt_discriminant) / (2.0 * a)
    t_max = (-b + sqrt_discriminant) / (2.0 * a)
    return t_min, t_max


class Sphere(Shape):
    """Sphere of the given radius centered on the origin of its local frame."""

    def __init__(
        self,
        radius: float = 1.0,
        transformation: Transformation | None = None,
        material: Material | None = None,
    ):
        super().__init__(transformation, material)
        self.radius: float = radius

    def shape_point_to_uv(self, point: Point) -> Vec2d:
        u = math.atan2(point.y, point.x) / (2.0 * math.pi)
        if u < 0.0:
            u += 1.0
        z = min(1.0, max(-1.0, point.z / self.radius))
        return Vec2d(u, math.acos(z) / math.pi)

    def _first_hit(self, local_ray: Ray) -> float | None:
        roots = _solve_quadratic(local_ray.origin.to_vec(), local_ray.dir, self.radius)
        if roots is None:
            return None

        t_min, t_max = roots
        if local_ray.tmin < t_min < local_ray.tmax:
            return t_min
        if local_ray.tmin < t_max < local_ray.tmax:
            return t_max
        return None

    def quick_ray_intersection(self, ray: Ray) -> bool:
        local_ray = ray.transform(self.transformation.inverse())
        return self._first_hit(local_ray) is not None

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        local_ray = ray.transform(self.transformation.inverse())
        first_hit = self._first_hit(local_ray)
        if first_hit is None:
            return None

        local_hit = local_ray.at(first_hit)
        local_normal = oriented_normal(local_hit.to_vec().to_normal(), local_ray.dir)
        world_point, world_normal = self._to_world(local_hit, local_normal)

        return HitRecord(
            world_point=world_point,
            normal=world_normal,
            surface_point=self.shape_point_to_uv(local_hit),
            t=first_hit,
            ray=ray,
            material=self.material,
        )

    def is_point_internal(self, point: Point) -> bool:
        # Count the surface crossings along an auxiliary ray: an odd number
        # of crossings ahead of the point means the point is enclosed
        local_point = self.transformation.inverse() * point
        roots = _solve_quadratic(local_point.to_vec(), VEC_X, self.radius)
        if roots is None:
            return False
        crossings = sum(1 for root in roots if root > 0.0)
        return crossings % 2 == 1
