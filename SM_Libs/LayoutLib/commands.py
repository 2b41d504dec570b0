"""
Commands and reducer for editing reference lines.

Every edit to the reference lines is expressed as a command value and applied
with apply(), which returns the new ReferenceLines. Commands are looked up in a
single table keyed by command type.

Classes:
    SetLine: Set or clear one named line
    AddLetterLine: Insert a letter line
    RemoveLetterLine: Remove a letter line by position
    ClearLines: Reset every line

Functions:
    apply: Apply one command to a ReferenceLines value
    apply_all: Apply a sequence of commands in order
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional, Type, Union

from SM_Libs.constants import LETTER_LINE_MIN_SPACING
from SM_Libs.LayoutLib.reference_lines import LineName, ReferenceLines

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetLine:
    line: LineName
    value: Optional[int]


@dataclass(frozen=True)
class AddLetterLine:
    x: int
    min_spacing: int = LETTER_LINE_MIN_SPACING


@dataclass(frozen=True)
class RemoveLetterLine:
    index: int


@dataclass(frozen=True)
class ClearLines:
    pass


Command = Union[SetLine, AddLetterLine, RemoveLetterLine, ClearLines]


def _apply_set_line(lines: ReferenceLines, command: SetLine) -> ReferenceLines:
    return lines.set(command.line, command.value)


def _apply_add_letter_line(lines: ReferenceLines, command: AddLetterLine) -> ReferenceLines:
    return lines.add_letter_line(command.x, min_spacing=command.min_spacing)


def _apply_remove_letter_line(lines: ReferenceLines, command: RemoveLetterLine) -> ReferenceLines:
    return lines.remove_letter_line(command.index)


def _apply_clear_lines(lines: ReferenceLines, command: ClearLines) -> ReferenceLines:
    return lines.cleared()


_REDUCERS: Dict[Type, Callable[[ReferenceLines, Command], ReferenceLines]] = {
    SetLine: _apply_set_line,
    AddLetterLine: _apply_add_letter_line,
    RemoveLetterLine: _apply_remove_letter_line,
    ClearLines: _apply_clear_lines,
}


def apply(lines: ReferenceLines, command: Command) -> ReferenceLines:
    """
    Apply a command and return the resulting reference lines.

    Args:
        lines: Current reference lines (left unchanged)
        command: One of SetLine, AddLetterLine, RemoveLetterLine, ClearLines

    Returns:
        New ReferenceLines

    Raises:
        TypeError: If command is not a known command type
        InputError: If the command's value is rejected by the model
    """
    reducer = _REDUCERS.get(type(command))
    if reducer is None:
        raise TypeError(f"Unknown reference line command: {type(command).__name__}")

    updated = reducer(lines, command)
    logger.debug(f"Applied {command}")
    return updated


def apply_all(lines: ReferenceLines, commands: Iterable[Command]) -> ReferenceLines:
    """Apply commands in order; stops at the first rejected command."""
    for command in commands:
        lines = apply(lines, command)
    return lines
