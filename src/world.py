import logging

from geometry import Point
from hittable import HitRecord, Shape
from lights import PointLight
from ray import Ray

logger = logging.getLogger(__name__)

# Distance from the observer below which occluders are ignored
VISIBILITY_EPSILON = 1e-2


class World:
    """Shapes and lights of a scene, populated once before rendering."""

    def __init__(self, shapes: list[Shape] | None = None, point_lights: list[PointLight] | None = None):
        self.shapes: list[Shape] = list(shapes) if shapes is not None else []
        self.point_lights: list[PointLight] = list(point_lights) if point_lights is not None else []

    def add_shape(self, shape: Shape) -> None:
        self.shapes.append(shape)
        logger.debug("Added %s (%d shapes)", type(shape).__name__, len(self.shapes))

    def add_light(self, light: PointLight) -> None:
        self.point_lights.append(light)
        logger.debug("Added point light at %s (%d lights)", light.position, len(self.point_lights))

    def ray_intersection(self, ray: Ray) -> HitRecord | None:
        """Nearest hit among all shapes; on exact ties the first registered shape wins."""
        closest: HitRecord | None = None

        for shape in self.shapes:
            intersection = shape.ray_intersection(ray)
            if intersection is None:
                continue
            if closest is None or intersection.t < closest.t:
                closest = intersection

        return closest

    def is_point_visible(self, point: Point, observer_pos: Point) -> bool:
        """Whether the segment from `observer_pos` to `point` is free of occluders."""
        direction = point - observer_pos
        direction_norm = direction.norm()
        if direction_norm == 0.0:
            return True

        ray = Ray(origin=observer_pos, dir=direction, tmin=VISIBILITY_EPSILON / direction_norm, tmax=1.0)
        return not any(shape.quick_ray_intersection(ray) for shape in self.shapes)
