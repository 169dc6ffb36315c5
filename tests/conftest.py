"""Pytest configuration and shared fixtures."""

import pytest

from geometry import VEC_X
from pcg import Pcg
from sphere import Sphere
from transformation import translation
from world import World


@pytest.fixture
def pcg():
    """A generator with the default, documented seed."""
    return Pcg()


@pytest.fixture
def two_spheres_world():
    """Unit spheres centered at x = 2 and x = 8."""
    world = World()
    world.add_shape(Sphere(transformation=translation(VEC_X * 2)))
    world.add_shape(Sphere(transformation=translation(VEC_X * 8)))
    return world
