import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable

import torch as t
from tqdm import tqdm

from camera import Camera
from color import BLACK, Color
from hdr_image import HdrImage
from pcg import Pcg
from ray import Ray
from renderers import Renderer

logger = logging.getLogger(__name__)


class ImageTracer:
    """Fires one or more rays through every pixel of an image and stores the resulting colors.

    With `samples_per_side = N > 0` each pixel is split into an N x N grid and
    one jittered ray is fired through each cell (stratified sampling); the
    pixel gets the average of the N^2 colors.
    """

    def __init__(self, image: HdrImage, camera: Camera, samples_per_side: int = 0, pcg: Pcg | None = None):
        self.image: HdrImage = image
        self.camera: Camera = camera
        self.samples_per_side: int = samples_per_side
        self.pcg: Pcg = pcg if pcg is not None else Pcg()

    def fire_ray(self, col: int, row: int, u_pixel: float = 0.5, v_pixel: float = 0.5) -> Ray:
        u = (col + u_pixel) / (self.image.width - 1)
        v = (row + v_pixel) / (self.image.height - 1)
        return self.camera.fire_ray(u, v)

    def _pixel_color(self, col: int, row: int, func: Callable[[Ray], Color], pcg: Pcg) -> Color:
        if self.samples_per_side <= 0:
            return func(self.fire_ray(col, row))

        n = self.samples_per_side
        cum_color = BLACK
        for inter_pixel_row in range(n):
            for inter_pixel_col in range(n):
                u_pixel = (inter_pixel_col + pcg.random_float()) / n
                v_pixel = (inter_pixel_row + pcg.random_float()) / n
                cum_color = cum_color + func(self.fire_ray(col, row, u_pixel, v_pixel))

        return cum_color * (1.0 / (n * n))

    def fire_all_rays(self, func: Callable[[Ray], Color], show_progress: bool = True) -> None:
        """Renders every pixel in raster order, drawing jitter from the tracer's own generator."""
        start = time.perf_counter()

        for row in tqdm(range(self.image.height), total=self.image.height, disable=not show_progress):
            for col in range(self.image.width):
                self.image.set_pixel(col, row, self._pixel_color(col, row, func, self.pcg))

        logger.info(
            "Traced %dx%d pixels in %.2f s", self.image.width, self.image.height, time.perf_counter() - start
        )

    def fire_all_rays_parallel(
        self,
        renderer: Renderer,
        base_seed: int = 42,
        base_seq: int = 0,
        max_workers: int | None = None,
        show_progress: bool = True,
    ) -> None:
        """Renders rows concurrently.

        Each row gets its own generator, derived from `base_seed`, `base_seq`
        and the row index, which feeds both the sub-pixel jitter and the
        renderer returned by `renderer.with_pcg`. The image is therefore the
        same whatever the number of workers and the order in which rows
        complete.
        """
        start = time.perf_counter()

        def trace_row(row: int) -> tuple[int, t.Tensor]:
            pcg = Pcg.for_stream(base_seed, row, base_seq)
            row_renderer = renderer.with_pcg(pcg)
            colors = [self._pixel_color(col, row, row_renderer, pcg).to_tuple() for col in range(self.image.width)]
            return row, t.tensor(colors, dtype=t.float32)

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(trace_row, row) for row in range(self.image.height)]
            for future in tqdm(as_completed(futures), total=len(futures), disable=not show_progress):
                row, colors = future.result()
                self.image.set_row(row, colors)

        logger.info(
            "Traced %dx%d pixels on %s workers in %.2f s",
            self.image.width,
            self.image.height,
            max_workers if max_workers is not None else "default",
            time.perf_counter() - start,
        )
