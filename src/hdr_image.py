import torch as t
from jaxtyping import Float, jaxtyped
from PIL import Image
from typeguard import typechecked as typechecker

from color import Color
from config import device
from utils import tensor_to_image


class HdrImage:
    """Fixed-size raster of linear RGB radiance, row 0 at the bottom of the frame."""

    def __init__(self, width: int = 0, height: int = 0):
        self.width: int = width
        self.height: int = height
        self.pixels: Float[t.Tensor, "h w 3"] = t.zeros((height, width, 3), dtype=t.float32)

    def valid_coordinates(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def _check_coordinates(self, col: int, row: int) -> None:
        if not self.valid_coordinates(col, row):
            raise IndexError(f"Pixel ({col}, {row}) is outside a {self.width}x{self.height} image")

    def get_pixel(self, col: int, row: int) -> Color:
        self._check_coordinates(col, row)
        r, g, b = self.pixels[row, col].tolist()
        return Color(r, g, b)

    def set_pixel(self, col: int, row: int, color: Color) -> None:
        self._check_coordinates(col, row)
        self.pixels[row, col] = t.tensor([color.r, color.g, color.b], dtype=t.float32)

    @jaxtyped(typechecker=typechecker)
    def set_row(self, row: int, colors: Float[t.Tensor, "w 3"]) -> None:
        """Writes a whole row at once; used by the parallel tracer."""
        self._check_coordinates(0, row)
        if colors.shape[0] != self.width:
            raise ValueError(f"Row has {colors.shape[0]} pixels, image width is {self.width}")
        self.pixels[row] = colors.to(t.float32)

    def average_luminosity(self, delta: float = 1e-10) -> float:
        """Logarithmic average of the Shirley & Morley luminosity of every pixel."""
        pixels = self.pixels.to(device=device, dtype=t.float64)
        luminosity = (pixels.amax(dim=-1) + pixels.amin(dim=-1)) / 2.0
        return float(10.0 ** t.log10(delta + luminosity).mean())

    def normalize_image(self, factor: float, luminosity: float | None = None) -> None:
        if luminosity is None:
            luminosity = self.average_luminosity()
        self.pixels = (self.pixels.to(device) * (factor / luminosity)).cpu()

    def clamp_image(self) -> None:
        pixels = self.pixels.to(device)
        self.pixels = (pixels / (1.0 + pixels)).cpu()

    def to_image(self, factor: float = 0.6, gamma: float = 1.0, luminosity: float | None = None) -> Image.Image:
        """Tone-maps a copy of the raster and returns it as an 8-bit image."""
        tone_mapped = HdrImage(self.width, self.height)
        tone_mapped.pixels = self.pixels.clone()
        tone_mapped.normalize_image(factor, luminosity)
        tone_mapped.clamp_image()
        return tensor_to_image(tone_mapped.pixels, gamma=gamma)
