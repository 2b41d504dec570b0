"""
Reference-line model for stamp text layout.

Reference lines are image-space coordinates marking layout boundaries on the
stamp: horizontal lines store a Y coordinate, vertical lines an X coordinate.
ReferenceLines is an immutable value; every change returns a new instance
and rejected input leaves the receiver untouched.

Classes:
    Axis: Which image dimension a line is measured along
    LineName: The named reference lines
    ReferenceLines: Validated set of reference lines for one image

Functions:
    parse_coordinate: Parse manually entered coordinate text
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from SM_Libs.constants import (
    BASELINE_OFFSET,
    FIELD_BASELINE,
    FIELD_FOOTER_TOP,
    FIELD_HEADER_BOTTOM,
    FIELD_IMAGE_HEIGHT,
    FIELD_IMAGE_WIDTH,
    FIELD_LEFT_START,
    FIELD_LETTER_LINES,
    FIELD_RIGHT_START,
    FIELD_TEXT_LINE,
    FIELD_TOP_LINE,
    LETTER_LINE_MIN_SPACING,
    TOP_LINE_OFFSET,
)
from SM_Libs.errors import InputError


class Axis(Enum):
    X = "x"
    Y = "y"


class LineName(str, Enum):
    """Reference lines, valued by their export field name."""

    HEADER_BOTTOM = FIELD_HEADER_BOTTOM
    FOOTER_TOP = FIELD_FOOTER_TOP
    TEXT_LINE = FIELD_TEXT_LINE
    BASELINE = FIELD_BASELINE
    TOP_LINE = FIELD_TOP_LINE
    LEFT_START = FIELD_LEFT_START
    RIGHT_START = FIELD_RIGHT_START

    @property
    def axis(self) -> Axis:
        if self in (LineName.LEFT_START, LineName.RIGHT_START):
            return Axis.X
        return Axis.Y

    @property
    def attribute(self) -> str:
        return self.name.lower()

    @classmethod
    def coerce(cls, line: Union["LineName", str]) -> "LineName":
        if isinstance(line, cls):
            return line
        try:
            return cls(line)
        except ValueError:
            pass
        try:
            return cls[str(line).upper()]
        except KeyError:
            raise InputError(f"Unknown reference line: {line!r}")


REQUIRED_LINES: Tuple[LineName, ...] = (
    LineName.HEADER_BOTTOM,
    LineName.FOOTER_TOP,
    LineName.TEXT_LINE,
    LineName.LEFT_START,
    LineName.RIGHT_START,
)


def _is_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)


def parse_coordinate(text: str) -> Optional[int]:
    """
    Parse a coordinate typed by the user.

    Returns:
        The integer value, or None when the text is empty (clears the line)

    Raises:
        InputError: If the text is not a whole number
    """
    stripped = text.strip()
    if not stripped:
        return None
    try:
        return int(stripped)
    except ValueError:
        raise InputError(f"Coordinate must be a whole number, got {text!r}")


@dataclass(frozen=True)
class ReferenceLines:
    """Reference lines placed on an image of image_width x image_height.

    Y coordinates are bounded by [0, image_height], X coordinates by
    [0, image_width]. Ordering between lines is reported by
    ordering_issues() but never rejected.
    """
    image_width: int
    image_height: int
    header_bottom: Optional[int] = None
    footer_top: Optional[int] = None
    text_line: Optional[int] = None
    baseline: Optional[int] = None
    top_line: Optional[int] = None
    left_start: Optional[int] = None
    right_start: Optional[int] = None
    letter_lines: Tuple[int, ...] = ()

    def __post_init__(self):
        if not _is_int(self.image_width) or not _is_int(self.image_height):
            raise InputError("Image bounds must be integers")
        if self.image_width < 0 or self.image_height < 0:
            raise InputError(f"Image bounds must be non-negative, got {self.image_width}x{self.image_height}")
        object.__setattr__(self, "image_width", int(self.image_width))
        object.__setattr__(self, "image_height", int(self.image_height))
        for line in LineName:
            value = getattr(self, line.attribute)
            if value is not None:
                self._check_coordinate(line, value)
                object.__setattr__(self, line.attribute, int(value))
        for x in self.letter_lines:
            self._check_letter_x(x)
        object.__setattr__(self, "letter_lines", tuple(int(x) for x in self.letter_lines))
        if list(self.letter_lines) != sorted(set(self.letter_lines)):
            raise InputError(f"Letter lines must be ascending and unique, got {list(self.letter_lines)}")

    def bound_for(self, line: LineName) -> int:
        return self.image_width if line.axis is Axis.X else self.image_height

    def _check_coordinate(self, line: LineName, value: Any) -> None:
        if not _is_int(value):
            raise InputError(f"{line.value} coordinate must be an integer, got {value!r}")
        bound = self.bound_for(line)
        if not (0 <= value <= bound):
            raise InputError(f"{line.value} coordinate must be between 0 and {bound}, got {value}")

    def _check_letter_x(self, x: Any) -> None:
        if not _is_int(x):
            raise InputError(f"Letter line X coordinate must be an integer, got {x!r}")
        if not (0 <= x <= self.image_width):
            raise InputError(
                f"Letter line X coordinate must be between 0 and {self.image_width}, got {x}"
            )

    def get(self, line: Union[LineName, str]) -> Optional[int]:
        return getattr(self, LineName.coerce(line).attribute)

    def set(self, line: Union[LineName, str], value: Optional[int]) -> "ReferenceLines":
        """Return a copy with one line set, or cleared when value is None."""
        line = LineName.coerce(line)
        if value is not None:
            self._check_coordinate(line, value)
            value = int(value)
        return replace(self, **{line.attribute: value})

    def add_letter_line(self, x: int, min_spacing: int = LETTER_LINE_MIN_SPACING) -> "ReferenceLines":
        """
        Return a copy with a letter line inserted in ascending order.

        Raises:
            InputError: If x is outside the image width or within min_spacing
                pixels of an existing letter line
        """
        self._check_letter_x(x)
        x = int(x)
        for existing in self.letter_lines:
            if abs(existing - x) <= min_spacing:
                raise InputError(
                    f"Letter line at x={x} is within {min_spacing}px of existing line at x={existing}"
                )
        return replace(self, letter_lines=tuple(sorted(self.letter_lines + (x,))))

    def remove_letter_line(self, index: int) -> "ReferenceLines":
        if not _is_int(index) or not (0 <= index < len(self.letter_lines)):
            raise InputError(
                f"Letter line index {index!r} out of range for {len(self.letter_lines)} lines"
            )
        remaining = self.letter_lines[:index] + self.letter_lines[index + 1:]
        return replace(self, letter_lines=remaining)

    def cleared(self) -> "ReferenceLines":
        return ReferenceLines(self.image_width, self.image_height)

    def resolved_baseline(self) -> Optional[int]:
        """Explicit baseline, else footerTop + 1, else None."""
        if self.baseline is not None:
            return self.baseline
        if self.footer_top is not None:
            return self.footer_top + BASELINE_OFFSET
        return None

    def resolved_top_line(self) -> Optional[int]:
        """Explicit top line, else headerBottom - 1, else None."""
        if self.top_line is not None:
            return self.top_line
        if self.header_bottom is not None:
            return self.header_bottom - TOP_LINE_OFFSET
        return None

    def missing_required(self) -> List[LineName]:
        return [line for line in REQUIRED_LINES if self.get(line) is None]

    def is_export_ready(self) -> bool:
        return not self.missing_required()

    def ordering_issues(self) -> List[str]:
        """Describe logical-ordering violations among the lines that are set."""
        issues: List[str] = []
        header = self.header_bottom
        footer = self.footer_top
        top = self.resolved_top_line()
        baseline = self.resolved_baseline()

        if header is not None and footer is not None and header >= footer:
            issues.append(f"headerBottom ({header}) should be above footerTop ({footer})")
        if top is not None and header is not None and top >= header:
            issues.append(f"topLine ({top}) should be above headerBottom ({header})")
        if baseline is not None and footer is not None and baseline <= footer:
            issues.append(f"baseline ({baseline}) should be below footerTop ({footer})")
        return issues

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            FIELD_IMAGE_WIDTH: self.image_width,
            FIELD_IMAGE_HEIGHT: self.image_height,
        }
        for line in LineName:
            data[line.value] = self.get(line)
        data[FIELD_LETTER_LINES] = list(self.letter_lines)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReferenceLines":
        kwargs: Dict[str, Any] = {
            "image_width": data.get(FIELD_IMAGE_WIDTH),
            "image_height": data.get(FIELD_IMAGE_HEIGHT),
            "letter_lines": tuple(data.get(FIELD_LETTER_LINES) or ()),
        }
        for line in LineName:
            kwargs[line.attribute] = data.get(line.value)
        return cls(**kwargs)
