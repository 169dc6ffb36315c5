import torch as t

from camera import OrthogonalCamera, PerspectiveCamera
from color import BLACK, Color
from geometry import Vec
from hdr_image import HdrImage
from image_tracer import ImageTracer
from materials import DiffuseBRDF, Material, UniformPigment
from pcg import Pcg
from renderers import PathTracer
from sphere import Sphere
from transformation import scaling, translation
from world import World


def make_tracer(width=4, height=2, **kwargs):
    image = HdrImage(width=width, height=height)
    camera = PerspectiveCamera(aspect_ratio=width / height)
    return ImageTracer(image=image, camera=camera, **kwargs)


def test_uv_sub_mapping():
    tracer = make_tracer()

    # Here we're cheating: we are asking `ImageTracer.fire_ray` to fire one ray *outside*
    # the pixel we're specifying
    ray1 = tracer.fire_ray(0, 0, u_pixel=2.5, v_pixel=1.5)
    ray2 = tracer.fire_ray(2, 1, u_pixel=0.5, v_pixel=0.5)
    assert ray1.is_close(ray2)


def test_image_coverage():
    tracer = make_tracer()
    tracer.fire_all_rays(lambda ray: Color(1.0, 2.0, 3.0), show_progress=False)

    for row in range(tracer.image.height):
        for col in range(tracer.image.width):
            assert tracer.image.get_pixel(col, row).is_close(Color(1.0, 2.0, 3.0))


def test_rows_grow_upwards():
    tracer = make_tracer(width=2, height=2)

    bottom = tracer.fire_ray(0, 0)
    top = tracer.fire_ray(0, 1)
    assert top.dir.z > bottom.dir.z


def test_stratified_sampling():
    samples_per_side = 10
    image = HdrImage(width=2, height=2)
    tracer = ImageTracer(image, OrthogonalCamera(aspect_ratio=1.0), samples_per_side=samples_per_side, pcg=Pcg())

    rays = []

    def trace_ray(ray):
        rays.append(ray)
        return Color(0.5, 0.5, 0.5)

    tracer.fire_all_rays(trace_ray, show_progress=False)

    assert len(rays) == 4 * samples_per_side**2
    # The average of the samples is stored
    assert image.get_pixel(1, 1).is_close(Color(0.5, 0.5, 0.5))

    # Pixel (0, 0) is traced first; every sample falls into its own sub-cell
    for index, ray in enumerate(rays[: samples_per_side**2]):
        point = ray.at(1.0)
        assert abs(point.x) < 1e-9
        u = (1.0 - point.y) / 2.0
        v = (point.z + 1.0) / 2.0
        row, col = divmod(index, samples_per_side)
        assert col / samples_per_side <= u <= (col + 1) / samples_per_side
        assert row / samples_per_side <= v <= (row + 1) / samples_per_side


def diffuse_scene():
    world = World()
    world.add_shape(
        Sphere(
            transformation=scaling(Vec(50.0, 50.0, 50.0)),
            material=Material(
                brdf=DiffuseBRDF(UniformPigment(BLACK)),
                emitted_radiance=UniformPigment(Color(1.0, 0.9, 0.8)),
            ),
        )
    )
    world.add_shape(
        Sphere(
            transformation=translation(Vec(3.0, 0.0, 0.0)),
            material=Material(brdf=DiffuseBRDF(UniformPigment(Color(0.7, 0.5, 0.3)))),
        )
    )
    return world


def render_parallel(workers):
    image = HdrImage(width=4, height=3)
    tracer = ImageTracer(image, PerspectiveCamera(aspect_ratio=4 / 3), samples_per_side=2)
    renderer = PathTracer(diffuse_scene(), num_of_rays=2, max_depth=2, russian_roulette_limit=1)
    tracer.fire_all_rays_parallel(renderer, base_seed=7, max_workers=workers, show_progress=False)
    return image


def test_parallel_rendering_is_reproducible():
    single = render_parallel(1)
    many = render_parallel(4)

    assert t.equal(single.pixels, many.pixels)
    assert single.pixels.abs().sum() > 0.0


def test_parallel_rendering_leaves_renderer_untouched():
    image = HdrImage(width=2, height=2)
    tracer = ImageTracer(image, PerspectiveCamera())
    pcg = Pcg()
    renderer = PathTracer(diffuse_scene(), pcg=pcg, num_of_rays=1, max_depth=1)
    state = pcg.state

    tracer.fire_all_rays_parallel(renderer, max_workers=2, show_progress=False)

    assert renderer.pcg is pcg
    assert pcg.state == state
