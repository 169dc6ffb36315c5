"""Renderers: functions turning a ray fired from the camera into a color."""

import copy
from abc import ABC, abstractmethod

from color import BLACK, WHITE, Color
from geometry import normalized_dot
from pcg import Pcg
from ray import Ray
from world import World


class Renderer(ABC):
    def __init__(self, world: World, background_color: Color = BLACK):
        self.world: World = world
        self.background_color: Color = background_color

    @abstractmethod
    def render(self, ray: Ray) -> Color:
        pass

    def __call__(self, ray: Ray) -> Color:
        return self.render(ray)

    def with_pcg(self, pcg: Pcg) -> "Renderer":
        """Renderer drawing its random numbers from `pcg`.

        Deterministic renderers draw none and return themselves.
        """
        return self


class OnOffRenderer(Renderer):
    """Paints `color` wherever a ray hits a shape, background elsewhere."""

    def __init__(self, world: World, background_color: Color = BLACK, color: Color = WHITE):
        super().__init__(world, background_color)
        self.color: Color = color

    def render(self, ray: Ray) -> Color:
        return self.color if self.world.ray_intersection(ray) is not None else self.background_color


class FlatRenderer(Renderer):
    """Returns the emitted radiance of the surface hit, with no shading."""

    def render(self, ray: Ray) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color
        return hit.material.emitted_radiance.get_color(hit.surface_point)


class PointLightRenderer(Renderer):
    """Direct illumination from the point lights of the world, plus a constant ambient term."""

    def __init__(self, world: World, background_color: Color = BLACK, ambient_color: Color = Color(0.1, 0.1, 0.1)):
        super().__init__(world, background_color)
        self.ambient_color: Color = ambient_color

    def render(self, ray: Ray) -> Color:
        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.material
        result = self.ambient_color

        for light in self.world.point_lights:
            if not self.world.is_point_visible(point=light.position, observer_pos=hit.world_point):
                continue

            to_light = light.position - hit.world_point
            distance = to_light.norm()
            to_light = to_light * (1.0 / distance)

            cos_theta = max(0.0, normalized_dot(hit.normal, to_light))
            distance_factor = (light.linear_radius / distance) ** 2 if light.linear_radius > 0.0 else 1.0

            emitted_color = material.emitted_radiance.get_color(hit.surface_point)
            brdf_color = material.brdf.eval(hit.normal, to_light, -ray.dir, hit.surface_point)
            result = result + (emitted_color + brdf_color) * light.color * (cos_theta * distance_factor)

        return result


class PathTracer(Renderer):
    """Monte-Carlo solver of the rendering equation.

    Each hit spawns `num_of_rays` scattered rays sampled from the BRDF. Paths
    deeper than `max_depth` contribute nothing; from `russian_roulette_limit`
    on, paths are terminated at random with a probability that grows as the
    surface gets darker, and the surviving ones are reweighted so that the
    estimate stays unbiased.
    """

    def __init__(
        self,
        world: World,
        background_color: Color = BLACK,
        pcg: Pcg | None = None,
        num_of_rays: int = 10,
        max_depth: int = 2,
        russian_roulette_limit: int = 3,
    ):
        super().__init__(world, background_color)
        self.pcg: Pcg = pcg if pcg is not None else Pcg()
        self.num_of_rays: int = num_of_rays
        self.max_depth: int = max_depth
        self.russian_roulette_limit: int = russian_roulette_limit

    def with_pcg(self, pcg: Pcg) -> "PathTracer":
        """Copy of this path tracer bound to `pcg`; the world is shared."""
        renderer = copy.copy(self)
        renderer.pcg = pcg
        return renderer

    def render(self, ray: Ray) -> Color:
        if ray.depth > self.max_depth:
            return BLACK

        hit = self.world.ray_intersection(ray)
        if hit is None:
            return self.background_color

        material = hit.material
        hit_color = material.brdf.pigment.get_color(hit.surface_point)
        emitted_radiance = material.emitted_radiance.get_color(hit.surface_point)
        hit_color_lum = hit_color.max_channel()

        # Russian roulette
        if ray.depth >= self.russian_roulette_limit:
            q = max(0.05, 1.0 - hit_color_lum)
            if self.pcg.random_float() > q:
                hit_color = hit_color * (1.0 / (1.0 - q))
            else:
                return emitted_radiance

        cum_radiance = BLACK
        if hit_color_lum > 0.0:
            for _ in range(self.num_of_rays):
                new_ray = material.brdf.scatter_ray(
                    pcg=self.pcg,
                    incoming_dir=hit.ray.dir,
                    interaction_point=hit.world_point,
                    normal=hit.normal,
                    depth=ray.depth + 1,
                )
                new_radiance = self.render(new_ray)
                cum_radiance = cum_radiance + hit_color * new_radiance
            cum_radiance = cum_radiance * (1.0 / self.num_of_rays)

        return emitted_radiance + cum_radiance
