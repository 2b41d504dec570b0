"""
StampStoreLib - Stamp record export and storage

This module builds stamp records from images and reference lines,
serializes them to JSON, and manages .stamp files on disk.
"""

from SM_Libs.StampStoreLib.stamp_record import Point, StampRecord, parse, serialize
from SM_Libs.StampStoreLib.assembler import assemble, export_problems
from SM_Libs.StampStoreLib.stamp_store import (
    list_stamp_files,
    load_stamp_file,
    save_stamp_file,
    stamp_filename,
    write_stamp_png,
)

__all__ = [
    "Point",
    "StampRecord",
    "parse",
    "serialize",
    "assemble",
    "export_problems",
    "list_stamp_files",
    "load_stamp_file",
    "save_stamp_file",
    "stamp_filename",
    "write_stamp_png",
]
