"""
Stamp record assembly.

Combines the export image, the reference lines, and the stamp name into a
StampRecord, after checking every export precondition at once.

Functions:
    export_problems: List every unmet export precondition
    assemble: Build the StampRecord or raise ValidationError
"""

import logging
from functools import partial
from typing import Callable, List, Optional, Tuple, Union

from SM_Libs.constants import FIELD_NAME
from SM_Libs.errors import ValidationError
from SM_Libs.ImageEditingLib.image_codec import encode_png_base64
from SM_Libs.ImageEditingLib.image_models import ImageRecord, PixelBuffer
from SM_Libs.LayoutLib.reference_lines import LineName, ReferenceLines
from SM_Libs.StampStoreLib.stamp_record import Point, StampRecord

logger = logging.getLogger(__name__)

ImageEncoder = Callable[[PixelBuffer], str]

REQUIRED_LINE_LABELS = {
    LineName.HEADER_BOTTOM: "Header bottom line is required",
    LineName.FOOTER_TOP: "Footer top line is required",
    LineName.TEXT_LINE: "Text line is required",
    LineName.LEFT_START: "Left start line is required",
    LineName.RIGHT_START: "Right start line is required",
}


def _export_buffer(image: Union[PixelBuffer, ImageRecord]) -> PixelBuffer:
    if isinstance(image, ImageRecord):
        return image.export_buffer
    if isinstance(image, PixelBuffer):
        return image
    raise TypeError(f"Expected PixelBuffer or ImageRecord, got {type(image)}")


def export_problems(
    buffer: PixelBuffer,
    lines: ReferenceLines,
    name: str,
    strict_ordering: bool = False,
) -> List[Tuple[Optional[str], str]]:
    """
    Check every export precondition.

    Returns:
        (field_name, message) pairs for each failed precondition; empty
        when the record can be exported
    """
    problems: List[Tuple[Optional[str], str]] = []

    if not isinstance(name, str) or not name.strip():
        problems.append((FIELD_NAME, "Stamp name is required"))

    for line in lines.missing_required():
        problems.append((line.value, f"{line.value}: {REQUIRED_LINE_LABELS[line]}"))

    if (lines.image_width, lines.image_height) != buffer.size:
        problems.append((
            None,
            f"Reference lines were placed on a {lines.image_width}x{lines.image_height} image "
            f"but the export image is {buffer.width}x{buffer.height}",
        ))

    if strict_ordering:
        problems.extend((None, issue) for issue in lines.ordering_issues())

    return problems


def assemble(
    image: Union[PixelBuffer, ImageRecord],
    lines: ReferenceLines,
    name: str,
    encoder: Optional[ImageEncoder] = None,
    strict_ordering: bool = False,
) -> StampRecord:
    """
    Build the stamp record for export.

    Args:
        image: Export image; for an ImageRecord the processed buffer is used,
               falling back to the original
        lines: Reference lines placed on the image
        name: Stamp name (surrounding whitespace is stripped)
        encoder: Converts the buffer to base64 PNG text
                 (default: PNG data URL)
        strict_ordering: Treat logical-ordering issues as validation failures

    Returns:
        The assembled StampRecord

    Raises:
        ValidationError: Listing every unmet precondition
        CodecError: If the encoder fails
    """
    buffer = _export_buffer(image)

    problems = export_problems(buffer, lines, name, strict_ordering=strict_ordering)
    if problems:
        raise ValidationError(
            [message for _, message in problems],
            [field for field, _ in problems],
        )

    for issue in lines.ordering_issues():
        logger.warning(f"Reference line ordering: {issue}")

    if encoder is None:
        encoder = partial(encode_png_base64, data_url=True)

    text_line = lines.text_line
    record = StampRecord(
        name=name.strip(),
        reference_height=buffer.height,
        header_bottom=lines.header_bottom,
        footer_top=lines.footer_top,
        font_size=text_line - lines.resolved_top_line(),
        left_start=Point(lines.left_start, text_line),
        right_start=Point(lines.right_start, text_line),
        base_coordinate=tuple(Point(x, text_line) for x in lines.letter_lines),
        image_data=encoder(buffer),
    )

    logger.info(
        f"Assembled stamp '{record.name}' ({buffer.width}x{buffer.height}, "
        f"fontSize={record.font_size}, {len(record.base_coordinate)} letter lines)"
    )
    return record
