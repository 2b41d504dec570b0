"""
PNG loading, color picking, and base64 encoding for stamp images.

Functions:
    validate_source_file: Check a file is a PNG within the upload size limit
    load_pixel_buffer: Load a PNG file into an RGBA PixelBuffer
    pick_color_at: Sample the target color from one pixel
    encode_png_base64: Encode a PixelBuffer as base64 PNG (optionally a data URL)
    decode_png_base64: Decode base64 PNG text back into a PixelBuffer
    write_png: Save a PixelBuffer as a PNG file
"""

import base64
import binascii
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from SM_Libs.constants import (
    MAX_UPLOAD_BYTES,
    PNG_DATA_URL_PREFIX,
    PNG_FORMAT,
    SUPPORTED_SOURCE_FORMATS,
)
from SM_Libs.errors import CodecError, InputError
from SM_Libs.ImageEditingLib.image_models import PixelBuffer, TargetColor

logger = logging.getLogger(__name__)


def validate_source_file(path: Path, max_bytes: int = MAX_UPLOAD_BYTES) -> None:
    """
    Check that a file can be used as a stamp source image.

    Raises:
        InputError: If the file is missing, not a PNG, or larger than max_bytes
    """
    if not path.is_file():
        raise InputError(f"Image file does not exist: {path}")

    if path.suffix.lower() not in SUPPORTED_SOURCE_FORMATS:
        raise InputError(f"Only PNG files are supported, got '{path.suffix or path.name}'")

    file_size = path.stat().st_size
    if file_size > max_bytes:
        raise InputError(
            f"File size must be less than {max_bytes // (1024 * 1024)}MB, got {file_size} bytes"
        )


def load_pixel_buffer(path: Path, max_bytes: int = MAX_UPLOAD_BYTES) -> PixelBuffer:
    """
    Load a PNG file as an RGBA pixel buffer.

    Args:
        path: PNG file to read
        max_bytes: Largest accepted file size

    Returns:
        PixelBuffer with the image converted to RGBA

    Raises:
        InputError: If the file fails validate_source_file
        CodecError: If Pillow cannot decode the file
    """
    path = Path(path)
    validate_source_file(path, max_bytes=max_bytes)

    try:
        with Image.open(path) as image:
            if image.format != PNG_FORMAT:
                raise CodecError(f"{path} is not a PNG image (detected {image.format})")
            buffer = PixelBuffer.from_image(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise CodecError(f"Failed to load image {path}: {str(e)}") from e

    logger.info(f"Loaded {buffer.width}x{buffer.height} image from {path}")
    return buffer


def pick_color_at(buffer: PixelBuffer, x: int, y: int) -> TargetColor:
    """Return the RGB color of the pixel at image coordinates (x, y)."""
    return TargetColor.from_pixel(buffer.pixel_at(x, y))


def encode_png_base64(buffer: PixelBuffer, data_url: bool = True) -> str:
    """
    Encode a pixel buffer as a base64 PNG.

    Args:
        buffer: Pixels to encode
        data_url: Prefix the result with 'data:image/png;base64,'

    Raises:
        CodecError: If PNG encoding fails
    """
    stream = io.BytesIO()
    try:
        buffer.to_image().save(stream, format=PNG_FORMAT)
    except (OSError, ValueError) as e:
        raise CodecError(f"Failed to encode {buffer.width}x{buffer.height} image as PNG: {str(e)}") from e

    encoded = base64.b64encode(stream.getvalue()).decode("ascii")
    return f"{PNG_DATA_URL_PREFIX}{encoded}" if data_url else encoded


def decode_png_base64(text: str) -> PixelBuffer:
    """
    Decode base64 PNG text, with or without a data URL prefix.

    Raises:
        CodecError: If the text is not valid base64 or not a PNG
    """
    payload = text[len(PNG_DATA_URL_PREFIX):] if text.startswith(PNG_DATA_URL_PREFIX) else text

    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise CodecError(f"Image data is not valid base64: {str(e)}") from e

    try:
        with Image.open(io.BytesIO(raw)) as image:
            if image.format != PNG_FORMAT:
                raise CodecError(f"Image data is not a PNG (detected {image.format})")
            return PixelBuffer.from_image(image)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise CodecError(f"Failed to decode PNG image data: {str(e)}") from e


def write_png(buffer: PixelBuffer, path: Path) -> Path:
    """Save a pixel buffer as a PNG file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        buffer.to_image().save(path, format=PNG_FORMAT)
    except OSError as e:
        raise CodecError(f"Failed to save image to {path}: {str(e)}") from e
    return path
