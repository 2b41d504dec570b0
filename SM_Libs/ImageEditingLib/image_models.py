"""
Image data models for Stamp Maker.

This module defines the core data structures passed between the image
editing functions, the layout model, and the stamp record assembler.

Classes:
    PixelBuffer: Immutable row-major RGBA pixel data with its dimensions
    TargetColor: RGB color sampled from a picked pixel
    ImageRecord: Original image, optional processed image, and the color used

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
    RgbColor: A tuple of 3 integers representing RGB color values (0-255)
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Optional, Tuple

import numpy as np
from PIL import Image

from SM_Libs.constants import BYTES_PER_PIXEL, PIXEL_MODE
from SM_Libs.errors import DimensionMismatchError, InputError

RgbaColor = Tuple[int, int, int, int]
RgbColor = Tuple[int, int, int]


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


@dataclass(frozen=True)
class PixelBuffer:
    """Row-major RGBA pixel data.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        data: width*height*4 bytes, 4 bytes (R, G, B, A) per pixel
    """
    width: int
    height: int
    data: bytes

    def __post_init__(self):
        if not _is_int(self.width) or not _is_int(self.height):
            raise InputError(f"Pixel buffer size must be integers, got {self.width!r}x{self.height!r}")
        if self.width < 0 or self.height < 0:
            raise InputError(f"Pixel buffer size must be non-negative, got {self.width}x{self.height}")
        object.__setattr__(self, "width", int(self.width))
        object.__setattr__(self, "height", int(self.height))
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != self.width * self.height * BYTES_PER_PIXEL:
            raise DimensionMismatchError(self.width, self.height, len(self.data))

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """Build a buffer from a PIL Image, converting it to RGBA first."""
        if not hasattr(image, "mode"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")
        if image.mode != PIXEL_MODE:
            image = image.convert(PIXEL_MODE)
        width, height = image.size
        return cls(width, height, image.tobytes())

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a (height, width, 4) uint8 array."""
        if pixels.ndim != 3 or pixels.shape[2] != BYTES_PER_PIXEL:
            raise InputError(f"Expected array of shape (height, width, 4), got {pixels.shape}")
        height, width = pixels.shape[:2]
        return cls(int(width), int(height), np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())

    def to_image(self) -> Any:
        return Image.frombytes(PIXEL_MODE, (self.width, self.height), self.data)

    def to_array(self) -> np.ndarray:
        """Return a read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(self.height, self.width, BYTES_PER_PIXEL)

    def pixel_at(self, x: int, y: int) -> RgbaColor:
        if not _is_int(x) or not _is_int(y):
            raise InputError(f"Pixel coordinates must be integers, got ({x!r}, {y!r})")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise InputError(
                f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} image"
            )
        offset = (y * self.width + x) * BYTES_PER_PIXEL
        r, g, b, a = self.data[offset:offset + BYTES_PER_PIXEL]
        return r, g, b, a


@dataclass(frozen=True)
class TargetColor:
    """The color to turn transparent. Alpha of the sampled pixel is not kept."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for channel_name in ("r", "g", "b"):
            value = getattr(self, channel_name)
            if not _is_int(value) or not (0 <= value <= 255):
                raise InputError(f"Target color channel {channel_name} must be an integer 0-255, got {value!r}")

    @classmethod
    def from_pixel(cls, pixel: Tuple[int, ...]) -> "TargetColor":
        r, g, b = pixel[:3]
        return cls(int(r), int(g), int(b))

    def as_tuple(self) -> RgbColor:
        return self.r, self.g, self.b


@dataclass(frozen=True)
class ImageRecord:
    """A loaded stamp image and, once background removal ran, its processed copy."""
    original: PixelBuffer
    path: Optional[Path] = None
    processed: Optional[PixelBuffer] = None
    target: Optional[TargetColor] = None

    @property
    def width(self) -> int:
        return self.original.width

    @property
    def height(self) -> int:
        return self.original.height

    @property
    def has_processed(self) -> bool:
        return self.processed is not None

    @property
    def export_buffer(self) -> PixelBuffer:
        """The processed buffer, falling back to the original."""
        return self.processed if self.processed is not None else self.original

    def with_processed(self, processed: PixelBuffer, target: TargetColor) -> "ImageRecord":
        if processed.size != self.original.size:
            raise InputError(
                f"Processed image is {processed.width}x{processed.height}, "
                f"original is {self.width}x{self.height}"
            )
        return replace(self, processed=processed, target=target)

    def reverted(self) -> "ImageRecord":
        return replace(self, processed=None, target=None)
