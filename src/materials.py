import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from color import BLACK, WHITE, Color
from geometry import Normal, Point, Vec, Vec2d, create_onb_from_z, normalized_dot
from pcg import Pcg
from ray import Ray

if TYPE_CHECKING:
    from hdr_image import HdrImage

SCATTERED_RAY_TMIN = 1e-3


class Pigment(ABC):
    """A function mapping each (u, v) point of a surface to a color."""

    @abstractmethod
    def get_color(self, uv: Vec2d) -> Color:
        pass


class UniformPigment(Pigment):
    def __init__(self, color: Color = WHITE):
        self.color: Color = color

    def get_color(self, uv: Vec2d) -> Color:
        return self.color


class CheckeredPigment(Pigment):
    """Checkerboard with `num_of_steps` squares along each of u and v."""

    def __init__(self, color1: Color, color2: Color, num_of_steps: int = 10):
        self.color1: Color = color1
        self.color2: Color = color2
        self.num_of_steps: int = num_of_steps

    def get_color(self, uv: Vec2d) -> Color:
        int_u = math.floor(uv.u * self.num_of_steps)
        int_v = math.floor(uv.v * self.num_of_steps)
        return self.color1 if (int_u % 2) == (int_v % 2) else self.color2


class ImagePigment(Pigment):
    """Nearest-pixel lookup into an HdrImage stretched over the whole surface."""

    def __init__(self, image: "HdrImage"):
        self.image = image

    def get_color(self, uv: Vec2d) -> Color:
        col = min(max(int(uv.u * self.image.width), 0), self.image.width - 1)
        row = min(max(int(uv.v * self.image.height), 0), self.image.height - 1)
        return self.image.get_pixel(col, row)


class BRDF(ABC):
    """Bidirectional reflectance distribution function backed by a pigment."""

    def __init__(self, pigment: Pigment | None = None):
        self.pigment: Pigment = pigment if pigment is not None else UniformPigment(WHITE)

    @abstractmethod
    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2d) -> Color:
        pass

    @abstractmethod
    def scatter_ray(self, pcg: Pcg, incoming_dir: Vec, interaction_point: Point, normal: Normal, depth: int) -> Ray:
        pass


class DiffuseBRDF(BRDF):
    """Ideal Lambertian reflector."""

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2d) -> Color:
        return self.pigment.get_color(uv) * (1.0 / math.pi)

    def scatter_ray(self, pcg: Pcg, incoming_dir: Vec, interaction_point: Point, normal: Normal, depth: int) -> Ray:
        # Cosine-weighted hemisphere sampling: the cos(theta)/pi of the
        # rendering equation cancels against the sampling pdf
        e1, e2, e3 = create_onb_from_z(normal.normalize())
        cos_theta_sq = pcg.random_float()
        cos_theta, sin_theta = math.sqrt(cos_theta_sq), math.sqrt(1.0 - cos_theta_sq)
        phi = 2.0 * math.pi * pcg.random_float()

        direction = e1 * (math.cos(phi) * sin_theta) + e2 * (math.sin(phi) * sin_theta) + e3 * cos_theta
        return Ray(origin=interaction_point, dir=direction, tmin=SCATTERED_RAY_TMIN, tmax=math.inf, depth=depth)


class SpecularBRDF(BRDF):
    """Perfect mirror."""

    def __init__(self, pigment: Pigment | None = None, threshold_angle_rad: float = 1e-4):
        super().__init__(pigment)
        self.threshold_angle_rad: float = threshold_angle_rad

    def eval(self, normal: Normal, in_dir: Vec, out_dir: Vec, uv: Vec2d) -> Color:
        theta_in = math.acos(min(1.0, max(-1.0, normalized_dot(normal, in_dir))))
        theta_out = math.acos(min(1.0, max(-1.0, normalized_dot(normal, out_dir))))

        if abs(theta_in - theta_out) < self.threshold_angle_rad:
            return self.pigment.get_color(uv)
        return BLACK

    def scatter_ray(self, pcg: Pcg, incoming_dir: Vec, interaction_point: Point, normal: Normal, depth: int) -> Ray:
        ray_dir = incoming_dir.normalize()
        normal_vec = normal.normalize().to_vec()
        reflected = ray_dir - normal_vec * (2.0 * normal_vec.dot(ray_dir))
        return Ray(origin=interaction_point, dir=reflected, tmin=SCATTERED_RAY_TMIN, tmax=math.inf, depth=depth)


@dataclass
class Material:
    """Surface description: how it reflects light and how much it emits."""

    brdf: BRDF = field(default_factory=DiffuseBRDF)
    emitted_radiance: Pigment = field(default_factory=lambda: UniformPigment(BLACK))
