"""Constructive solid geometry: boolean combinations of two shapes.

The ray sweep only looks at the nearest hit of each child, i.e. a single
boundary event per child along the ray, even though a sphere is crossed
twice. The result is right when the surface to report is the first crossing
of one of the children, as for unions and for the near side of solids. Two
cases are known to be wrong:

- an intersection of children that the ray crosses one after the other,
  without ever being inside both, still reports a hit on the second child;
- a difference seen through the carved region reports no hit, because the
  exit from the subtracted child is never an event.

Scenes should keep subtracted parts away from the viewer.
"""

from enum import IntEnum

from geometry import Point, Vec2d
from hittable import HitRecord, Shape
from ray import Ray
from transformation import Transformation

# Offset along the ray used to sample the inside/outside state before the first event
CSG_EPSILON = 1e-4


class CsgOperation(IntEnum):
    Union = 0
    Intersection = 1
    Difference = 2


def combine(operation: CsgOperation, in_first: bool, in_second: bool) -> bool:
    if operation == CsgOperation.Union:
        return in_first or in_second
    if operation == CsgOperation.Intersection:
        return in_first and in_second
    if operation == CsgOperation.Difference:
        return in_first and not in_second
    raise ValueError(f"Unknown CSG operation: {operation!r}")


class Csg(Shape):
    """Boolean combination of two child shapes, which it owns.

    The children are expressed in the local frame of the Csg node; the node's
    own transformation moves the whole combination. Hits report the material
    of the child surface that was hit.
    """

    def __init__(
        self,
        first: Shape,
        second: Shape,
        operation: CsgOperation = CsgOperation.Union,
        transformation: Transformation | None = None,
    ):
        super().__init__(transformation)
        for child in (first, second):
            if not isinstance(child, Shape):
                raise TypeError(f"Csg children must be shapes, got {type(child).__name__}")
        self.first: Shape = first
        self.second: Shape = second
        self.operation: CsgOperation = CsgOperation(operation)

    def shape_point_to_uv(self, point: Point) -> Vec2d:
        # UVs come from the child surface that was hit; a bare point has no parametrisation
        return Vec2d(0.0, 0.0)

    def quick_ray_intersection(self, ray: Ray) -> bool:
        local_ray = ray.transform(self.transformation.inverse())
        return self.first.quick_ray_intersection(local_ray) or self.second.quick_ray_intersection(local_ray)

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        local_ray = ray.transform(self.transformation.inverse())

        events: list[tuple[float, int, HitRecord]] = []
        for index, child in enumerate((self.first, self.second)):
            hit = child.ray_intersection(local_ray)
            if hit is not None:
                events.append((hit.t, index, hit))
        if not events:
            return None
        events.sort(key=lambda event: (event[0], event[1]))

        before_first_event = local_ray.at(events[0][0] - CSG_EPSILON)
        inside = [self.first.is_point_internal(before_first_event), self.second.is_point_internal(before_first_event)]
        was_inside = combine(self.operation, inside[0], inside[1])

        for _, index, hit in events:
            inside[index] = not inside[index]
            is_inside = combine(self.operation, inside[0], inside[1])
            if is_inside and not was_inside:
                return self._to_world_record(hit, ray)
            was_inside = is_inside

        return None

    def _to_world_record(self, hit: HitRecord, ray: Ray) -> HitRecord:
        world_point, world_normal = self._to_world(hit.world_point, hit.normal)
        return HitRecord(
            world_point=world_point,
            normal=world_normal,
            surface_point=hit.surface_point,
            t=hit.t,
            ray=ray,
            material=hit.material,
        )

    def is_point_internal(self, point: Point) -> bool:
        local_point = self.transformation.inverse() * point
        return combine(
            self.operation,
            self.first.is_point_internal(local_point),
            self.second.is_point_internal(local_point),
        )
