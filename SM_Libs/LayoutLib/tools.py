"""
Placement tools and display-to-image coordinate mapping.

A Tool is the active click mode of the editor. Each line-placing tool maps a
click in image space to one reference-line command through TOOL_COMMANDS.

Classes:
    Tool: Active tool variants
    CoordinateMapper: Scales display coordinates to integer image coordinates

Functions:
    command_for_click: Build the command for a click with the given tool
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from SM_Libs.errors import InputError
from SM_Libs.LayoutLib.commands import AddLetterLine, Command, SetLine
from SM_Libs.LayoutLib.reference_lines import LineName


class Tool(Enum):
    NONE = "none"
    BACKGROUND = "background"
    HEADER = "header"
    FOOTER = "footer"
    TEXT = "text"
    BASELINE = "baseline"
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"
    LETTER = "letter"


TOOL_COMMANDS: Dict[Tool, Callable[[int, int], Command]] = {
    Tool.HEADER: lambda x, y: SetLine(LineName.HEADER_BOTTOM, y),
    Tool.FOOTER: lambda x, y: SetLine(LineName.FOOTER_TOP, y),
    Tool.TEXT: lambda x, y: SetLine(LineName.TEXT_LINE, y),
    Tool.BASELINE: lambda x, y: SetLine(LineName.BASELINE, y),
    Tool.TOP: lambda x, y: SetLine(LineName.TOP_LINE, y),
    Tool.LEFT: lambda x, y: SetLine(LineName.LEFT_START, x),
    Tool.RIGHT: lambda x, y: SetLine(LineName.RIGHT_START, x),
    Tool.LETTER: lambda x, y: AddLetterLine(x),
}


def command_for_click(tool: Tool, x: int, y: int) -> Optional[Command]:
    """
    Return the reference-line command for a click, or None.

    Tool.NONE and Tool.BACKGROUND place no line and return None.
    """
    try:
        tool = Tool(tool)
    except ValueError:
        raise InputError(f"Unknown tool: {tool!r}")

    factory = TOOL_COMMANDS.get(tool)
    if factory is None:
        return None
    return factory(x, y)


@dataclass(frozen=True)
class CoordinateMapper:
    """Maps a point on a scaled display of the image to image pixels.

    Attributes:
        display_width: Width the image is shown at
        display_height: Height the image is shown at
        image_width: Backing image width in pixels
        image_height: Backing image height in pixels
    """
    display_width: float
    display_height: float
    image_width: int
    image_height: int

    def __post_init__(self):
        if self.display_width <= 0 or self.display_height <= 0:
            raise InputError(
                f"Display size must be positive, got {self.display_width}x{self.display_height}"
            )

    @property
    def scale(self) -> Tuple[float, float]:
        return self.image_width / self.display_width, self.image_height / self.display_height

    def to_image(self, display_x: float, display_y: float) -> Tuple[int, int]:
        scale_x, scale_y = self.scale
        return (
            int(math.floor(display_x * scale_x + 0.5)),
            int(math.floor(display_y * scale_y + 0.5)),
        )
