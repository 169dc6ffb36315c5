import math

import pytest

from color import Color
from geometry import VEC_X, VEC_Y, VEC_Z, Normal, Point, Vec, Vec2d
from hittable import HitRecord
from materials import DiffuseBRDF, Material, UniformPigment
from plane import Plane
from ray import Ray
from sphere import Sphere
from transformation import rotation_y, scaling, translation


def test_sphere_hit():
    sphere = Sphere()

    ray1 = Ray(origin=Point(0.0, 0.0, 2.0), dir=-VEC_Z)
    intersection1 = sphere.ray_intersection(ray1)
    assert intersection1 is not None
    assert HitRecord(
        world_point=Point(0.0, 0.0, 1.0),
        normal=Normal(0.0, 0.0, 1.0),
        surface_point=Vec2d(0.0, 0.0),
        t=1.0,
        ray=ray1,
    ).is_close(intersection1)

    ray2 = Ray(origin=Point(3.0, 0.0, 0.0), dir=-VEC_X)
    intersection2 = sphere.ray_intersection(ray2)
    assert intersection2 is not None
    assert HitRecord(
        world_point=Point(1.0, 0.0, 0.0),
        normal=Normal(1.0, 0.0, 0.0),
        surface_point=Vec2d(0.0, 0.5),
        t=2.0,
        ray=ray2,
    ).is_close(intersection2)

    assert sphere.ray_intersection(Ray(origin=Point(0.0, 10.0, 2.0), dir=-VEC_Z)) is None


def test_sphere_inner_hit():
    sphere = Sphere()

    ray = Ray(origin=Point(0.0, 0.0, 0.0), dir=VEC_X)
    intersection = sphere.ray_intersection(ray)
    assert intersection is not None
    assert HitRecord(
        world_point=Point(1.0, 0.0, 0.0),
        normal=Normal(-1.0, 0.0, 0.0),
        surface_point=Vec2d(0.0, 0.5),
        t=1.0,
        ray=ray,
    ).is_close(intersection)


@pytest.mark.parametrize("axis", [VEC_X, VEC_Y, VEC_Z, -VEC_X, -VEC_Y, -VEC_Z])
def test_sphere_hits_along_axes(axis):
    sphere = Sphere(radius=2.0)
    origin = Point() - axis * 5.0

    near = sphere.ray_intersection(Ray(origin=origin, dir=axis))
    assert near is not None
    assert near.t == pytest.approx(3.0)
    assert near.normal.is_close((-axis).to_normal())

    far = sphere.ray_intersection(Ray(origin=origin, dir=axis, tmin=4.0))
    assert far is not None
    assert far.t == pytest.approx(7.0)
    assert far.normal.is_close((-axis).to_normal())


def test_sphere_transformation():
    sphere = Sphere(transformation=translation(Vec(10.0, 0.0, 0.0)))

    ray1 = Ray(origin=Point(10.0, 0.0, 2.0), dir=-VEC_Z)
    intersection1 = sphere.ray_intersection(ray1)
    assert HitRecord(
        world_point=Point(10.0, 0.0, 1.0),
        normal=Normal(0.0, 0.0, 1.0),
        surface_point=Vec2d(0.0, 0.0),
        t=1.0,
        ray=ray1,
    ).is_close(intersection1)

    ray2 = Ray(origin=Point(13.0, 0.0, 0.0), dir=-VEC_X)
    intersection2 = sphere.ray_intersection(ray2)
    assert HitRecord(
        world_point=Point(11.0, 0.0, 0.0),
        normal=Normal(1.0, 0.0, 0.0),
        surface_point=Vec2d(0.0, 0.5),
        t=2.0,
        ray=ray2,
    ).is_close(intersection2)

    # Rays that would hit the untransformed sphere
    assert sphere.ray_intersection(Ray(origin=Point(0.0, 0.0, 2.0), dir=-VEC_Z)) is None
    assert sphere.ray_intersection(Ray(origin=Point(-10.0, 0.0, 0.0), dir=-VEC_Z)) is None


def test_sphere_normals():
    sphere = Sphere(transformation=scaling(Vec(2.0, 1.0, 1.0)))

    ray = Ray(origin=Point(1.0, 1.0, 0.0), dir=Vec(-1.0, -1.0, 0.0))
    intersection = sphere.ray_intersection(ray)
    assert intersection is not None
    assert intersection.normal.is_close(Normal(1.0, 4.0, 0.0).normalize())


def test_sphere_normal_direction():
    # Scaling by a negative factor flips the orientation of the surface
    sphere = Sphere(transformation=scaling(Vec(-1.0, -1.0, -1.0)))

    ray = Ray(origin=Point(0.0, 2.0, 0.0), dir=-VEC_Y)
    intersection = sphere.ray_intersection(ray)
    assert intersection is not None
    assert intersection.normal.is_close(Normal(0.0, 1.0, 0.0))


def test_sphere_uv_coordinates():
    sphere = Sphere()

    assert sphere.shape_point_to_uv(Point(1.0, 0.0, 0.0)).is_close(Vec2d(0.0, 0.5))
    assert sphere.shape_point_to_uv(Point(0.0, 1.0, 0.0)).is_close(Vec2d(0.25, 0.5))
    assert sphere.shape_point_to_uv(Point(-1.0, 0.0, 0.0)).is_close(Vec2d(0.5, 0.5))
    assert sphere.shape_point_to_uv(Point(0.0, -1.0, 0.0)).is_close(Vec2d(0.75, 0.5))
    assert sphere.shape_point_to_uv(Point(0.0, 0.0, 1.0)).is_close(Vec2d(0.0, 0.0))
    assert sphere.shape_point_to_uv(Point(0.0, 0.0, -1.0)).is_close(Vec2d(0.0, 1.0))

    half = math.sqrt(0.5)
    assert sphere.shape_point_to_uv(Point(half, 0.0, half)).is_close(Vec2d(0.0, 0.25))


def test_sphere_uv_with_radius():
    sphere = Sphere(radius=3.0)
    assert sphere.shape_point_to_uv(Point(0.0, 3.0, 0.0)).is_close(Vec2d(0.25, 0.5))
    assert sphere.shape_point_to_uv(Point(0.0, 0.0, -3.0)).is_close(Vec2d(0.0, 1.0))


def test_sphere_quick_intersection():
    sphere = Sphere(transformation=translation(Vec(0.0, 0.0, 5.0)))

    assert sphere.quick_ray_intersection(Ray(origin=Point(0.0, 0.0, 0.0), dir=VEC_Z))
    assert not sphere.quick_ray_intersection(Ray(origin=Point(0.0, 0.0, 0.0), dir=-VEC_Z))
    assert not sphere.quick_ray_intersection(Ray(origin=Point(0.0, 0.0, 0.0), dir=VEC_Z, tmax=3.0))


def test_sphere_point_internal():
    sphere = Sphere(radius=2.0, transformation=translation(Vec(1.0, 0.0, 0.0)))

    assert sphere.is_point_internal(Point(1.0, 0.0, 0.0))
    assert sphere.is_point_internal(Point(2.5, 0.5, 0.5))
    assert not sphere.is_point_internal(Point(-1.5, 0.0, 0.0))
    assert not sphere.is_point_internal(Point(1.0, 3.0, 0.0))


def test_hit_carries_shape_material():
    material = Material(brdf=DiffuseBRDF(UniformPigment(Color(0.1, 0.2, 0.3))))
    sphere = Sphere(material=material)
    plane = Plane(material=material)

    assert sphere.ray_intersection(Ray(origin=Point(-3.0, 0.0, 0.0))).material is material
    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=-VEC_Z)).material is material


def test_default_material():
    sphere = Sphere()
    assert isinstance(sphere.material, Material)
    assert isinstance(sphere.material.brdf, DiffuseBRDF)


def test_plane_hit():
    plane = Plane()

    ray1 = Ray(origin=Point(0.0, 0.0, 1.0), dir=-VEC_Z)
    intersection1 = plane.ray_intersection(ray1)
    assert intersection1 is not None
    assert HitRecord(
        world_point=Point(0.0, 0.0, 0.0),
        normal=Normal(0.0, 0.0, 1.0),
        surface_point=Vec2d(0.0, 0.0),
        t=1.0,
        ray=ray1,
    ).is_close(intersection1)

    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_Z)) is None
    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_X)) is None
    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_Y)) is None


def test_plane_hit_from_below():
    plane = Plane()

    intersection = plane.ray_intersection(Ray(origin=Point(0.0, 0.0, -2.0), dir=VEC_Z))
    assert intersection is not None
    assert intersection.t == pytest.approx(2.0)
    assert intersection.normal.is_close(Normal(0.0, 0.0, -1.0))


def test_plane_transformation():
    plane = Plane(transformation=rotation_y(angle_deg=90.0))

    ray1 = Ray(origin=Point(1.0, 0.0, 0.0), dir=-VEC_X)
    intersection1 = plane.ray_intersection(ray1)
    assert intersection1 is not None
    assert HitRecord(
        world_point=Point(0.0, 0.0, 0.0),
        normal=Normal(1.0, 0.0, 0.0),
        surface_point=Vec2d(0.0, 0.0),
        t=1.0,
        ray=ray1,
    ).is_close(intersection1)

    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_Z)) is None
    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_X)) is None
    assert plane.ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=VEC_Y)) is None


def test_plane_uv_coordinates():
    plane = Plane()

    ray1 = Ray(origin=Point(0.0, 0.0, 1.0), dir=-VEC_Z)
    assert plane.ray_intersection(ray1).surface_point.is_close(Vec2d(0.0, 0.0))

    ray2 = Ray(origin=Point(0.25, 0.75, 1), dir=-VEC_Z)
    assert plane.ray_intersection(ray2).surface_point.is_close(Vec2d(0.25, 0.75))

    ray3 = Ray(origin=Point(4.25, 7.75, 1), dir=-VEC_Z)
    assert plane.ray_intersection(ray3).surface_point.is_close(Vec2d(0.25, 0.75))

    assert plane.shape_point_to_uv(Point(-0.25, -0.75, 0.0)).is_close(Vec2d(0.75, 0.25))


def test_plane_respects_ray_range():
    plane = Plane()
    ray = Ray(origin=Point(0.0, 0.0, 1.0), dir=-VEC_Z, tmax=1.0)

    assert plane.ray_intersection(ray) is None
    assert not plane.quick_ray_intersection(ray)
    assert plane.quick_ray_intersection(Ray(origin=Point(0.0, 0.0, 1.0), dir=-VEC_Z))


def test_plane_has_no_interior():
    plane = Plane()
    assert not plane.is_point_internal(Point(0.0, 0.0, -1.0))
    assert not plane.is_point_internal(Point(0.0, 0.0, 1.0))
