"""
Color-to-alpha background removal.

Treats every pixel as a semi-transparent layer of the target color lying over
an opaque layer, and recovers that opaque layer together with its alpha. Exact
matches of the target become fully transparent, colors unrelated to the target
stay fully opaque, and anti-aliased edge pixels become partially transparent
with the target's color bias removed.

For every pixel, with channels normalized to 0-1:

    ratio = min(pixel / target) over channels where target > 0, starting at 1
    alpha = 1 - clamp(ratio, 0, 1)
    color = clamp((pixel - target * (1 - alpha)) / alpha, 0, 1) if alpha > 0 else 0

A black target has no positive channel, so ratio stays 1 and the transform
leaves every pixel with alpha 0.

Functions:
    color_to_alpha_pixel: Scalar reference for a single pixel
    color_to_alpha: Vectorized transform over a PixelBuffer
    color_to_alpha_image: Same transform for a PIL Image
    submit_color_to_alpha: Run the transform on a concurrent.futures executor
"""

import logging
import math
from concurrent.futures import Executor, Future
from typing import Any, Sequence

import numpy as np

from SM_Libs.constants import DEFAULT_ROW_CHUNK
from SM_Libs.errors import InputError
from SM_Libs.ImageEditingLib.image_models import PixelBuffer, RgbaColor, TargetColor

logger = logging.getLogger(__name__)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def color_to_alpha_pixel(pixel: Sequence[int], target: TargetColor) -> RgbaColor:
    """
    Apply color-to-alpha to one pixel.

    Args:
        pixel: (R, G, B) or (R, G, B, A); the alpha channel is ignored
        target: Color to make transparent

    Returns:
        The output (R, G, B, A) tuple
    """
    channels = [value / 255 for value in pixel[:3]]
    target_channels = [value / 255 for value in target.as_tuple()]

    ratio = 1.0
    for value, target_value in zip(channels, target_channels):
        if target_value > 0:
            ratio = min(ratio, value / target_value)

    ratio = max(0.0, min(1.0, ratio))
    alpha = 1 - ratio

    output = []
    for value, target_value in zip(channels, target_channels):
        reconstructed = (value - target_value * (1 - alpha)) / alpha if alpha > 0 else 0.0
        output.append(_round_half_up(max(0.0, min(1.0, reconstructed)) * 255))

    return output[0], output[1], output[2], _round_half_up(alpha * 255)


def _color_to_alpha_rows(rows: np.ndarray, target: np.ndarray) -> np.ndarray:
    """Transform a (rows, width, 4) uint8 block. Arithmetic order matches color_to_alpha_pixel."""
    channels = rows[..., :3].astype(np.float64) / 255

    ratio = np.ones(rows.shape[:2], dtype=np.float64)
    for index in range(3):
        if target[index] > 0:
            ratio = np.minimum(ratio, channels[..., index] / target[index])

    ratio = np.maximum(0.0, np.minimum(1.0, ratio))
    alpha = 1 - ratio
    alpha_3 = alpha[..., np.newaxis]

    with np.errstate(divide="ignore", invalid="ignore"):
        reconstructed = (channels - target * (1 - alpha_3)) / alpha_3
    reconstructed = np.where(alpha_3 > 0, np.maximum(0.0, np.minimum(1.0, reconstructed)), 0.0)

    output = np.empty(rows.shape, dtype=np.uint8)
    output[..., :3] = np.floor(reconstructed * 255 + 0.5).astype(np.uint8)
    output[..., 3] = np.floor(alpha * 255 + 0.5).astype(np.uint8)
    return output


def color_to_alpha(
    source: PixelBuffer,
    target: TargetColor,
    row_chunk: int = DEFAULT_ROW_CHUNK,
) -> PixelBuffer:
    """
    Convert the target color to transparency across a whole buffer.

    The source is never modified. Rows are processed in blocks of row_chunk
    to bound temporary memory; block size has no effect on the output.

    Args:
        source: Pixel buffer to process
        target: Color to make transparent
        row_chunk: Number of rows transformed per block (must be >= 1)

    Returns:
        A new PixelBuffer of the same size

    Raises:
        DimensionMismatchError: If the source buffer length is inconsistent
        InputError: If row_chunk is not positive
    """
    if not isinstance(source, PixelBuffer):
        raise TypeError(f"Expected PixelBuffer, got {type(source)}")
    if row_chunk < 1:
        raise InputError(f"row_chunk must be >= 1, got {row_chunk}")

    pixels = source.to_array()
    target_array = np.array(target.as_tuple(), dtype=np.float64) / 255
    output = np.empty_like(pixels)

    for start in range(0, source.height, row_chunk):
        stop = min(start + row_chunk, source.height)
        output[start:stop] = _color_to_alpha_rows(pixels[start:stop], target_array)

    logger.debug(
        f"Color-to-alpha applied to {source.width}x{source.height} image, target {target.as_tuple()}"
    )
    return PixelBuffer(source.width, source.height, output.tobytes())


def color_to_alpha_image(image: Any, target: TargetColor, row_chunk: int = DEFAULT_ROW_CHUNK) -> Any:
    """
    Apply color_to_alpha to a PIL Image.

    Args:
        image: PIL Image (converted to RGBA)
        target: Color to make transparent
        row_chunk: Rows per processing block

    Returns:
        New RGBA PIL Image
    """
    processed = color_to_alpha(PixelBuffer.from_image(image), target, row_chunk=row_chunk)
    return processed.to_image()


def submit_color_to_alpha(
    executor: Executor,
    source: PixelBuffer,
    target: TargetColor,
    row_chunk: int = DEFAULT_ROW_CHUNK,
) -> "Future[PixelBuffer]":
    """
    Schedule color_to_alpha on an executor.

    Cancelling the returned future discards the whole output; there is no
    partial result.
    """
    return executor.submit(color_to_alpha, source, target, row_chunk)
