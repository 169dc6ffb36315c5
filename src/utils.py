import math

import numpy as np
import torch as t
from jaxtyping import Float, jaxtyped
from PIL import Image
from typeguard import typechecked as typechecker


@jaxtyped(typechecker=typechecker)
def tensor_to_image(tensor: Float[t.Tensor, "h w 3"], gamma: float = 1.0) -> Image.Image:
    """Converts a raster of [0, 1] values, row 0 at the bottom, into an 8-bit RGB image."""
    tensor = tensor.clamp(0.0, 1.0).pow(1.0 / gamma)
    tensor = tensor.multiply(255).clamp(0, 255)
    array = tensor.cpu().numpy().astype(np.uint8)
    array = np.ascontiguousarray(array[::-1, :, :])
    image = Image.fromarray(array)
    return image


@jaxtyped(typechecker=typechecker)
def degrees_to_radians(degrees: float) -> float:
    return degrees * np.pi / 180.0


def are_close(a: float, b: float, epsilon: float = 1e-5) -> bool:
    return math.fabs(a - b) < epsilon
