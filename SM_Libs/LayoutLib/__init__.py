"""
LayoutLib - Reference-line layout model

This module provides the immutable reference-line model, the commands
used to edit it, and the placement tools that produce those commands.
"""

from SM_Libs.LayoutLib.reference_lines import (
    REQUIRED_LINES,
    Axis,
    LineName,
    ReferenceLines,
    parse_coordinate,
)
from SM_Libs.LayoutLib.commands import (
    AddLetterLine,
    ClearLines,
    Command,
    RemoveLetterLine,
    SetLine,
    apply,
    apply_all,
)
from SM_Libs.LayoutLib.tools import (
    TOOL_COMMANDS,
    CoordinateMapper,
    Tool,
    command_for_click,
)

__all__ = [
    "REQUIRED_LINES",
    "Axis",
    "LineName",
    "ReferenceLines",
    "parse_coordinate",
    "AddLetterLine",
    "ClearLines",
    "Command",
    "RemoveLetterLine",
    "SetLine",
    "apply",
    "apply_all",
    "TOOL_COMMANDS",
    "CoordinateMapper",
    "Tool",
    "command_for_click",
]
