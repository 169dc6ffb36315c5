import math
from dataclasses import dataclass
from enum import Enum

import torch as t

device = t.device("cuda" if t.cuda.is_available() else "cpu")

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class RendererType(str, Enum):
    OnOff = "onoff"
    Flat = "flat"
    PointLight = "pointlight"
    PathTracer = "pathtracer"


class CameraType(str, Enum):
    Perspective = "perspective"
    Orthogonal = "orthogonal"


@dataclass
class RenderSettings:
    """Every knob the driver hands to the tracer and the renderers."""

    width: int = 640
    height: int = 480
    renderer: RendererType = RendererType.PathTracer
    camera: CameraType = CameraType.Perspective
    angle_deg: float = 0.0
    distance: float = 1.0
    samples_per_side: int = 0
    num_of_rays: int = 10
    max_depth: int = 3
    russian_roulette_limit: int = 2
    init_state: int = 42
    init_seq: int = 54
    background: tuple[float, float, float] = (0.0, 0.0, 0.0)
    workers: int = 1
    factor: float = 0.6
    gamma: float = 1.0
    output: str = "image.png"

    def __post_init__(self):
        self.renderer = RendererType(self.renderer)
        self.camera = CameraType(self.camera)

        if self.width < 2 or self.height < 2:
            raise ValueError(f"Image must be at least 2x2 pixels, got {self.width}x{self.height}")
        if self.samples_per_side < 0:
            raise ValueError(f"samples_per_side must be non-negative, got {self.samples_per_side}")
        if self.num_of_rays < 1:
            raise ValueError(f"num_of_rays must be positive, got {self.num_of_rays}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.russian_roulette_limit < 0:
            raise ValueError(f"russian_roulette_limit must be non-negative, got {self.russian_roulette_limit}")
        if self.init_state < 0 or self.init_seq < 0:
            raise ValueError("PCG seeds must be non-negative integers")
        if self.workers < 1:
            raise ValueError(f"workers must be positive, got {self.workers}")
        if self.distance <= 0:
            raise ValueError(f"Camera distance must be positive, got {self.distance}")
        if self.factor <= 0 or self.gamma <= 0 or not math.isfinite(self.gamma):
            raise ValueError("Tone mapping factor and gamma must be positive")
        if len(self.background) != 3:
            raise ValueError(f"Background must be an RGB triple, got {self.background}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height
