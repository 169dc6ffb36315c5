import argparse
import logging
from typing import Sequence

from camera import Camera, OrthogonalCamera, PerspectiveCamera
from color import BLACK, Color
from config import CameraType, RendererType, RenderSettings, device
from csg import Csg, CsgOperation
from geometry import Point, Vec
from hdr_image import HdrImage
from image_tracer import ImageTracer
from lights import PointLight
from logging_config import setup_logging
from materials import CheckeredPigment, DiffuseBRDF, Material, SpecularBRDF, UniformPigment
from pcg import Pcg
from plane import Plane
from renderers import FlatRenderer, OnOffRenderer, PathTracer, PointLightRenderer, Renderer
from sphere import Sphere
from transformation import rotation_z, scaling, translation
from world import World

logger = logging.getLogger(__name__)


def build_demo_world() -> World:
    """Sky dome, checkered floor, a diffuse sphere, a mirror sphere and a carved CSG solid."""
    sky = Material(
        brdf=DiffuseBRDF(UniformPigment(BLACK)),
        emitted_radiance=UniformPigment(Color(1.0, 0.9, 0.5)),
    )
    ground = Material(
        brdf=DiffuseBRDF(CheckeredPigment(Color(0.3, 0.5, 0.1), Color(0.1, 0.2, 0.5), num_of_steps=4)),
    )
    blue = Material(brdf=DiffuseBRDF(UniformPigment(Color(0.3, 0.4, 0.8))))
    red = Material(brdf=DiffuseBRDF(UniformPigment(Color(0.7, 0.2, 0.2))))
    mirror = Material(brdf=SpecularBRDF(UniformPigment(Color(0.6, 0.2, 0.3))))

    world = World()
    sky_dome = scaling(Vec(200.0, 200.0, 200.0)) * translation(Vec(0.0, 0.0, 0.4))
    world.add_shape(Sphere(transformation=sky_dome, material=sky))
    world.add_shape(Plane(material=ground))
    world.add_shape(Sphere(transformation=translation(Vec(0.0, 0.0, 1.0)), material=blue))
    world.add_shape(Sphere(transformation=translation(Vec(1.0, 2.5, 0.0)), material=mirror))

    # A sphere with a bite taken out of the side facing away from the camera
    carved = Csg(
        Sphere(radius=0.8, material=red),
        Sphere(radius=0.5, transformation=translation(Vec(0.5, -0.4, 0.3)), material=red),
        CsgOperation.Difference,
        transformation=translation(Vec(1.0, -2.0, 0.8)),
    )
    world.add_shape(carved)

    world.add_light(PointLight(Point(-10.0, 10.0, 10.0), Color(1.0, 1.0, 1.0)))
    return world


def build_camera(settings: RenderSettings) -> Camera:
    transformation = rotation_z(settings.angle_deg) * translation(Vec(-1.0, 0.0, 1.0))
    if settings.camera == CameraType.Orthogonal:
        return OrthogonalCamera(aspect_ratio=settings.aspect_ratio, transformation=transformation)
    return PerspectiveCamera(
        distance=settings.distance, aspect_ratio=settings.aspect_ratio, transformation=transformation
    )


def build_renderer(settings: RenderSettings, world: World) -> Renderer:
    background = Color(*settings.background)
    if settings.renderer == RendererType.OnOff:
        return OnOffRenderer(world, background_color=background)
    if settings.renderer == RendererType.Flat:
        return FlatRenderer(world, background_color=background)
    if settings.renderer == RendererType.PointLight:
        return PointLightRenderer(world, background_color=background)
    return PathTracer(
        world,
        background_color=background,
        pcg=Pcg(init_state=settings.init_state, init_seq=settings.init_seq),
        num_of_rays=settings.num_of_rays,
        max_depth=settings.max_depth,
        russian_roulette_limit=settings.russian_roulette_limit,
    )


def render(settings: RenderSettings, world: World | None = None) -> HdrImage:
    world = world if world is not None else build_demo_world()
    image = HdrImage(settings.width, settings.height)
    tracer = ImageTracer(image, build_camera(settings), samples_per_side=settings.samples_per_side)
    renderer = build_renderer(settings, world)

    logger.info(
        "Rendering %dx%d with %s renderer, %s camera, %d samples per side",
        settings.width,
        settings.height,
        settings.renderer.value,
        settings.camera.value,
        settings.samples_per_side,
    )
    # One generator per row, whatever the worker count
    tracer.fire_all_rays_parallel(
        renderer, base_seed=settings.init_state, base_seq=settings.init_seq, max_workers=settings.workers
    )
    return image


def parse_args(argv: Sequence[str] | None = None) -> RenderSettings:
    parser = argparse.ArgumentParser(description="Render the demo scene to an LDR image")
    parser.add_argument("--width", type=int, default=640)
    parser.add_argument("--height", type=int, default=480)
    parser.add_argument("--renderer", choices=[kind.value for kind in RendererType], default="pathtracer")
    parser.add_argument("--camera", choices=[kind.value for kind in CameraType], default="perspective")
    parser.add_argument("--angle-deg", type=float, default=0.0, help="Rotation of the camera around the Z axis")
    parser.add_argument("--distance", type=float, default=1.0, help="Distance of the observer from the screen")
    parser.add_argument("--samples-per-side", type=int, default=0, help="Antialiasing grid size (0 disables it)")
    parser.add_argument("--num-of-rays", type=int, default=10)
    parser.add_argument("--max-depth", type=int, default=3)
    parser.add_argument("--russian-roulette-limit", type=int, default=2)
    parser.add_argument("--init-state", type=int, default=42, help="PCG initial state")
    parser.add_argument("--init-seq", type=int, default=54, help="PCG sequence identifier")
    parser.add_argument("--workers", type=int, default=1, help="Rows rendered concurrently")
    parser.add_argument("--factor", type=float, default=0.6, help="Tone mapping normalization factor")
    parser.add_argument("--gamma", type=float, default=1.0)
    parser.add_argument("--output", default="image.png")
    parser.add_argument("--log-level", default="INFO")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)
    return RenderSettings(
        width=args.width,
        height=args.height,
        renderer=args.renderer,
        camera=args.camera,
        angle_deg=args.angle_deg,
        distance=args.distance,
        samples_per_side=args.samples_per_side,
        num_of_rays=args.num_of_rays,
        max_depth=args.max_depth,
        russian_roulette_limit=args.russian_roulette_limit,
        init_state=args.init_state,
        init_seq=args.init_seq,
        workers=args.workers,
        factor=args.factor,
        gamma=args.gamma,
        output=args.output,
    )


def main(argv: Sequence[str] | None = None) -> None:
    settings = parse_args(argv)
    logger.info("Using device: %s", device)

    image = render(settings).to_image(factor=settings.factor, gamma=settings.gamma)
    image.save(settings.output)
    logger.info("Saved %s", settings.output)


if __name__ == "__main__":
    main()
