"""
Exception types for Stamp Maker.

Every failure raised by the library derives from StampMakerError and is
scoped to the single operation that raised it.

Classes:
    StampMakerError: Base class for all library errors
    InputError: Malformed buffer or out-of-range coordinate
    DimensionMismatchError: Pixel buffer length does not match its size
    ValidationError: Export attempted with unmet preconditions
    CodecError: PNG encode/decode or image file read failure
"""

from typing import Iterable, List, Optional


class StampMakerError(Exception):
    """Base class for Stamp Maker errors."""


class InputError(StampMakerError, ValueError):
    """Raised when an input value is rejected. Nothing is changed."""


class DimensionMismatchError(InputError):
    """Raised when a pixel buffer's byte length disagrees with width*height*4."""

    def __init__(self, width: int, height: int, length: int):
        self.width = width
        self.height = height
        self.length = length
        super().__init__(
            f"Pixel buffer of {width}x{height} needs {width * height * 4} bytes, got {length}"
        )


class ValidationError(StampMakerError):
    """
    Raised when a stamp record cannot be exported.

    Attributes:
        problems: Human-readable description of every failed precondition
        fields: Names of the fields involved, in problem order; problems
            not tied to a single field are omitted
    """

    def __init__(self, problems: Iterable[str], fields: Optional[Iterable[Optional[str]]] = None):
        self.problems: List[str] = list(problems)
        field_list = list(fields) if fields is not None else [None] * len(self.problems)
        self.fields: List[str] = [field for field in field_list if field]
        super().__init__(f"Cannot export: {', '.join(self.problems)}")


class CodecError(StampMakerError):
    """Raised when a PNG cannot be read, decoded, or encoded."""
