"""
Headless stamp editing session.

StampSession holds the state of one stamp being made: the loaded image (with
its optional background-removed copy), the reference lines, and the stamp
name. It is owned by a single caller; concurrent use must be serialized by
that caller. A failed operation raises and leaves the session as it was.

Classes:
    ChecklistItem: One export precondition and whether it is met
    PendingRemoval: Background removal started on an executor
    StampSession: Image, reference lines and name for one stamp
"""

import logging
from concurrent.futures import Executor, Future
from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import List, Optional, Tuple, Union

from SM_Libs.config_manager import StampMakerConfig
from SM_Libs.constants import FIELD_NAME
from SM_Libs.errors import InputError
from SM_Libs.ImageEditingLib.color_to_alpha import color_to_alpha, submit_color_to_alpha
from SM_Libs.ImageEditingLib.image_codec import encode_png_base64, load_pixel_buffer, pick_color_at
from SM_Libs.ImageEditingLib.image_models import ImageRecord, PixelBuffer, TargetColor
from SM_Libs.LayoutLib.commands import (
    AddLetterLine,
    ClearLines,
    Command,
    RemoveLetterLine,
    SetLine,
    apply,
)
from SM_Libs.LayoutLib.reference_lines import REQUIRED_LINES, LineName, ReferenceLines, parse_coordinate
from SM_Libs.LayoutLib.tools import Tool, command_for_click
from SM_Libs.StampStoreLib.assembler import assemble
from SM_Libs.StampStoreLib.stamp_record import StampRecord
from SM_Libs.StampStoreLib.stamp_store import save_stamp_file

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChecklistItem:
    field: str
    label: str
    done: bool


@dataclass(frozen=True)
class PendingRemoval:
    """A background removal running on an executor."""
    future: "Future[PixelBuffer]"
    target: TargetColor
    original: PixelBuffer

    def cancel(self) -> bool:
        return self.future.cancel()


class StampSession:
    """Editing state for a single stamp."""

    def __init__(self, config: Optional[StampMakerConfig] = None):
        self.config = config or StampMakerConfig()
        self.image: Optional[ImageRecord] = None
        self.lines: Optional[ReferenceLines] = None
        self.name: str = ""

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def _require_image(self) -> Tuple[ImageRecord, ReferenceLines]:
        if self.image is None or self.lines is None:
            raise InputError("No image loaded")
        return self.image, self.lines

    # --- Image ---

    def load_image(self, path: Path) -> ImageRecord:
        """Load a PNG file, discarding any previous image, lines and processing."""
        buffer = load_pixel_buffer(Path(path), max_bytes=self.config.max_upload_bytes)
        return self.load_buffer(buffer, path=Path(path))

    def load_buffer(self, buffer: PixelBuffer, path: Optional[Path] = None) -> ImageRecord:
        self.image = ImageRecord(original=buffer, path=path)
        self.lines = ReferenceLines(buffer.width, buffer.height)
        return self.image

    def remove_background_at(self, x: int, y: int) -> ImageRecord:
        """
        Sample the original image at (x, y) and make that color transparent.

        The color is always picked from, and the transform always applied to,
        the original image, so repeated picks do not compound.
        """
        image, _ = self._require_image()
        target = pick_color_at(image.original, x, y)
        return self.remove_background(target)

    def remove_background(self, target: TargetColor) -> ImageRecord:
        image, _ = self._require_image()
        processed = color_to_alpha(image.original, target, row_chunk=self.config.row_chunk)
        self.image = image.with_processed(processed, target)
        logger.info(f"Removed background color {target.as_tuple()}")
        return self.image

    def start_background_removal(self, x: int, y: int, executor: Executor) -> PendingRemoval:
        """
        Start background removal on an executor.

        The session is not changed until finish_background_removal is called
        with the returned PendingRemoval.
        """
        image, _ = self._require_image()
        target = pick_color_at(image.original, x, y)
        future = submit_color_to_alpha(executor, image.original, target, row_chunk=self.config.row_chunk)
        return PendingRemoval(future=future, target=target, original=image.original)

    def finish_background_removal(
        self,
        pending: PendingRemoval,
        timeout: Optional[float] = None,
    ) -> ImageRecord:
        """
        Apply the result of start_background_removal.

        Raises:
            InputError: If a different image was loaded since the removal started
        """
        image, _ = self._require_image()
        processed = pending.future.result(timeout=timeout)
        if pending.original is not image.original:
            raise InputError("Background removal result belongs to a different image")
        self.image = image.with_processed(processed, pending.target)
        logger.info(f"Removed background color {pending.target.as_tuple()}")
        return self.image

    def revert_to_original(self) -> ImageRecord:
        image, _ = self._require_image()
        self.image = image.reverted()
        return self.image

    # --- Reference lines ---

    def apply(self, command: Command) -> ReferenceLines:
        _, lines = self._require_image()
        self.lines = apply(lines, command)
        return self.lines

    def click(self, tool: Union[Tool, str], x: int, y: int) -> Optional[ReferenceLines]:
        """
        Handle a click in image coordinates with the active tool.

        Returns:
            The new reference lines, or None when the tool placed no line
            (Tool.BACKGROUND removes the background instead)
        """
        self._require_image()
        try:
            tool = Tool(tool)
        except ValueError:
            raise InputError(f"Unknown tool: {tool!r}")
        if tool is Tool.BACKGROUND:
            self.remove_background_at(x, y)
            return None

        command = command_for_click(tool, x, y)
        if command is None:
            return None
        if isinstance(command, AddLetterLine):
            command = AddLetterLine(command.x, min_spacing=self.config.letter_line_min_spacing)
        return self.apply(command)

    def set_line(self, line: Union[LineName, str], value: Optional[int]) -> ReferenceLines:
        return self.apply(SetLine(LineName.coerce(line), value))

    def enter_line(self, line: Union[LineName, str], text: str) -> ReferenceLines:
        """Set a line from manually typed text; empty text clears it."""
        return self.set_line(line, parse_coordinate(text))

    def add_letter_line(self, x: int) -> ReferenceLines:
        return self.apply(AddLetterLine(x, min_spacing=self.config.letter_line_min_spacing))

    def enter_letter_line(self, text: str) -> Optional[ReferenceLines]:
        x = parse_coordinate(text)
        if x is None:
            return None
        return self.add_letter_line(x)

    def remove_letter_line(self, index: int) -> ReferenceLines:
        return self.apply(RemoveLetterLine(index))

    def clear_lines(self) -> ReferenceLines:
        return self.apply(ClearLines())

    # --- Export ---

    def set_name(self, name: str) -> None:
        self.name = name

    def export_checklist(self) -> List[ChecklistItem]:
        """Each export precondition with whether it is currently met."""
        items = [
            ChecklistItem(FIELD_NAME, "Stamp name entered", bool(self.name.strip())),
            ChecklistItem("image", "Image loaded", self.has_image),
        ]
        for line in REQUIRED_LINES:
            done = self.lines is not None and self.lines.get(line) is not None
            items.append(ChecklistItem(line.value, f"{line.value} set", done))
        return items

    def export_record(self) -> StampRecord:
        image, lines = self._require_image()
        encoder = partial(encode_png_base64, data_url=self.config.embed_data_url)
        return assemble(
            image,
            lines,
            self.name,
            encoder=encoder,
            strict_ordering=self.config.strict_ordering,
        )

    def save(self, output_dir: Optional[Path] = None, overwrite: bool = False) -> Path:
        record = self.export_record()
        target_dir = Path(output_dir) if output_dir is not None else Path(self.config.output_dir)
        return save_stamp_file(target_dir, record, overwrite=overwrite, indent=self.config.json_indent)
