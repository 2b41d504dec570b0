"""
Stamp record: the exported stamp file format.

A stamp file is UTF-8 JSON with these fields:

- name: Stamp identifier
- type: Always "SYNDICATE"
- referenceHeight: Height in pixels of the embedded image
- headerBottom / footerTop: Y coordinates of the header end and footer start
- fontSize: textLine minus the resolved top line
- leftStart / rightStart: {x, y} text boundaries on the text line
- baseCoordinate: {x, y} letter positions on the text line
- offset: Always {x: 0, y: 0}
- imageData: Base64-encoded PNG

Classes:
    Point: Integer x/y pair
    StampRecord: Immutable stamp record

Functions:
    serialize: Convert a StampRecord to JSON text
    parse: Read a StampRecord from JSON text
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from SM_Libs.constants import (
    DEFAULT_JSON_INDENT,
    FIELD_BASE_COORDINATE,
    FIELD_FONT_SIZE,
    FIELD_FOOTER_TOP,
    FIELD_HEADER_BOTTOM,
    FIELD_IMAGE_DATA,
    FIELD_LEFT_START,
    FIELD_NAME,
    FIELD_OFFSET,
    FIELD_REFERENCE_HEIGHT,
    FIELD_RIGHT_START,
    FIELD_TYPE,
    FIELD_X,
    FIELD_Y,
    STAMP_TYPE,
)
from SM_Libs.errors import InputError


def _require_int(data: Dict[str, Any], key: str) -> int:
    value = data.get(key)
    if not isinstance(value, int) or isinstance(value, bool):
        raise InputError(f"Stamp field '{key}' must be an integer, got {value!r}")
    return value


def _require_str(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InputError(f"Stamp field '{key}' must be a string, got {value!r}")
    return value


@dataclass(frozen=True)
class Point:
    x: int
    y: int

    def to_dict(self) -> Dict[str, int]:
        return {FIELD_X: self.x, FIELD_Y: self.y}

    @classmethod
    def from_dict(cls, data: Any, field_name: str = "point") -> "Point":
        if not isinstance(data, dict):
            raise InputError(f"Stamp field '{field_name}' must be an object with x and y, got {data!r}")
        return cls(_require_int(data, FIELD_X), _require_int(data, FIELD_Y))


ORIGIN = Point(0, 0)


@dataclass(frozen=True)
class StampRecord:
    name: str
    reference_height: int
    header_bottom: int
    footer_top: int
    font_size: int
    left_start: Point
    right_start: Point
    base_coordinate: Tuple[Point, ...]
    image_data: str
    offset: Point = ORIGIN
    type: str = STAMP_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            FIELD_NAME: self.name,
            FIELD_TYPE: self.type,
            FIELD_REFERENCE_HEIGHT: self.reference_height,
            FIELD_HEADER_BOTTOM: self.header_bottom,
            FIELD_FOOTER_TOP: self.footer_top,
            FIELD_FONT_SIZE: self.font_size,
            FIELD_LEFT_START: self.left_start.to_dict(),
            FIELD_RIGHT_START: self.right_start.to_dict(),
            FIELD_BASE_COORDINATE: [point.to_dict() for point in self.base_coordinate],
            FIELD_OFFSET: self.offset.to_dict(),
            FIELD_IMAGE_DATA: self.image_data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StampRecord":
        """
        Build a record from its JSON object form.

        Raises:
            InputError: If a field is missing or has the wrong type, or
                type is not "SYNDICATE"
        """
        if not isinstance(data, dict):
            raise InputError(f"Stamp data must be a JSON object, got {type(data).__name__}")

        stamp_type = _require_str(data, FIELD_TYPE)
        if stamp_type != STAMP_TYPE:
            raise InputError(f"Unsupported stamp type '{stamp_type}', expected '{STAMP_TYPE}'")

        base_coordinate = data.get(FIELD_BASE_COORDINATE)
        if not isinstance(base_coordinate, list):
            raise InputError(f"Stamp field '{FIELD_BASE_COORDINATE}' must be a list")

        return cls(
            name=_require_str(data, FIELD_NAME),
            reference_height=_require_int(data, FIELD_REFERENCE_HEIGHT),
            header_bottom=_require_int(data, FIELD_HEADER_BOTTOM),
            footer_top=_require_int(data, FIELD_FOOTER_TOP),
            font_size=_require_int(data, FIELD_FONT_SIZE),
            left_start=Point.from_dict(data.get(FIELD_LEFT_START), FIELD_LEFT_START),
            right_start=Point.from_dict(data.get(FIELD_RIGHT_START), FIELD_RIGHT_START),
            base_coordinate=tuple(
                Point.from_dict(point, FIELD_BASE_COORDINATE) for point in base_coordinate
            ),
            image_data=_require_str(data, FIELD_IMAGE_DATA),
            offset=Point.from_dict(data.get(FIELD_OFFSET, ORIGIN.to_dict()), FIELD_OFFSET),
            type=stamp_type,
        )


def serialize(record: StampRecord, indent: int = DEFAULT_JSON_INDENT) -> str:
    return json.dumps(record.to_dict(), indent=indent, ensure_ascii=False)


def parse(text: str) -> StampRecord:
    """
    Parse stamp JSON text.

    Raises:
        InputError: If the text is not valid JSON or not a valid stamp record
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"Stamp data is not valid JSON: {str(e)}") from e
    return StampRecord.from_dict(payload)
