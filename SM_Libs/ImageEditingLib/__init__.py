"""
ImageEditingLib - Stamp image processing

This module provides the pixel data models, the color-to-alpha
background removal transform, and PNG encoding for Stamp Maker.
"""

from SM_Libs.ImageEditingLib.image_models import (
    ImageRecord,
    PixelBuffer,
    RgbaColor,
    RgbColor,
    TargetColor,
)
from SM_Libs.ImageEditingLib.color_to_alpha import (
    color_to_alpha,
    color_to_alpha_image,
    color_to_alpha_pixel,
    submit_color_to_alpha,
)
from SM_Libs.ImageEditingLib.image_codec import (
    decode_png_base64,
    encode_png_base64,
    load_pixel_buffer,
    pick_color_at,
    validate_source_file,
    write_png,
)

__all__ = [
    "ImageRecord",
    "PixelBuffer",
    "RgbaColor",
    "RgbColor",
    "TargetColor",
    "color_to_alpha",
    "color_to_alpha_image",
    "color_to_alpha_pixel",
    "submit_color_to_alpha",
    "decode_png_base64",
    "encode_png_base64",
    "load_pixel_buffer",
    "pick_color_at",
    "validate_source_file",
    "write_png",
]
