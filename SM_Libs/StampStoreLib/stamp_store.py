"""
Stamp file storage for Stamp Maker.

Stamp records are written as pretty-printed JSON files with the .stamp
extension. The filename is derived from the stamp name with every
non-alphanumeric character replaced by an underscore.

Functions:
    stamp_filename: Build the file name for a stamp name
    save_stamp_file: Write a StampRecord to a directory
    load_stamp_file: Read a StampRecord from a file
    list_stamp_files: List .stamp files in a directory
    write_stamp_png: Extract the embedded image of a record to a PNG file
"""

import logging
from pathlib import Path
from typing import List

from SM_Libs.constants import (
    DEFAULT_JSON_INDENT,
    DEFAULT_STAMP_FILENAME,
    FILENAME_REPLACEMENT_CHAR,
    STAMP_FILE_EXTENSION,
)
from SM_Libs.errors import InputError
from SM_Libs.ImageEditingLib.image_codec import decode_png_base64, write_png
from SM_Libs.StampStoreLib.stamp_record import StampRecord, parse, serialize

logger = logging.getLogger(__name__)


def stamp_filename(name: str) -> str:
    """
    Build a stamp file name from a stamp name.

    Args:
        name: Human-readable stamp name

    Returns:
        File name ending in .stamp
    """
    safe_name = "".join(
        c if c.isascii() and c.isalnum() else FILENAME_REPLACEMENT_CHAR
        for c in name.strip()
    )
    if not safe_name.strip(FILENAME_REPLACEMENT_CHAR):
        safe_name = DEFAULT_STAMP_FILENAME
    return f"{safe_name}{STAMP_FILE_EXTENSION}"


def save_stamp_file(
    output_dir: Path,
    record: StampRecord,
    overwrite: bool = False,
    indent: int = DEFAULT_JSON_INDENT,
) -> Path:
    """
    Save a stamp record as JSON.

    Args:
        output_dir: Directory to write into (created if missing)
        record: Record to save
        overwrite: Replace an existing file of the same name; otherwise a
                   numeric suffix is appended (name_1.stamp, name_2.stamp, ...)
        indent: JSON indentation

    Returns:
        Path of the written file

    Raises:
        OSError: If the directory or file cannot be written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    file_name = stamp_filename(record.name)
    stamp_path = output_dir / file_name
    if not overwrite:
        stem = stamp_path.stem
        counter = 1
        while stamp_path.exists():
            stamp_path = output_dir / f"{stem}_{counter}{STAMP_FILE_EXTENSION}"
            counter += 1

    stamp_path.write_text(serialize(record, indent=indent), encoding="utf-8")
    logger.info(f"Saved stamp '{record.name}' to {stamp_path}")
    return stamp_path


def load_stamp_file(stamp_path: Path) -> StampRecord:
    """
    Load a stamp record from disk.

    Raises:
        InputError: If the file cannot be read or is not a valid stamp file
    """
    stamp_path = Path(stamp_path)
    try:
        text = stamp_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"Could not read stamp file {stamp_path}: {str(e)}") from e
    return parse(text)


def list_stamp_files(directory: Path) -> List[Path]:
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(directory.glob(f"*{STAMP_FILE_EXTENSION}"))


def write_stamp_png(record: StampRecord, png_path: Path) -> Path:
    """Decode the record's embedded image and save it as a PNG file."""
    return write_png(decode_png_base64(record.image_data), png_path)
