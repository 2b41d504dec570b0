#!/usr/bin/env python3
"""
Stamp Maker command line.

Builds a .stamp file from a PNG of a rubber stamp: optionally removes the
background color, places the reference lines given on the command line,
and writes the stamp record as JSON.

Example:
    stamp-maker stamp.png --name "Acme" --pick 2 2 \\
        --header-bottom 100 --footer-top 200 --text-line 150 \\
        --left-start 40 --right-start 760 --letter 120 --letter 180
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from SM_Libs.config_manager import CONFIG_FILE, ConfigManager
from SM_Libs.errors import CodecError, InputError, ValidationError
from SM_Libs.ImageEditingLib.image_codec import write_png
from SM_Libs.ImageEditingLib.image_models import TargetColor
from SM_Libs.LayoutLib.reference_lines import LineName
from SM_Libs.stamp_session import StampSession

logger = logging.getLogger("stamp_maker")

LINE_ARGUMENTS = {
    LineName.HEADER_BOTTOM: "header_bottom",
    LineName.FOOTER_TOP: "footer_top",
    LineName.TEXT_LINE: "text_line",
    LineName.BASELINE: "baseline",
    LineName.TOP_LINE: "top_line",
    LineName.LEFT_START: "left_start",
    LineName.RIGHT_START: "right_start",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Create a .stamp file from a PNG image of a stamp",
    )
    parser.add_argument("image", type=Path, help="Source PNG image")
    parser.add_argument("--name", required=True, help="Stamp name")

    background = parser.add_mutually_exclusive_group()
    background.add_argument(
        "--pick", nargs=2, type=int, metavar=("X", "Y"),
        help="Remove the background color sampled at pixel (X, Y)",
    )
    background.add_argument(
        "--target", nargs=3, type=int, metavar=("R", "G", "B"),
        help="Remove this background color",
    )

    lines = parser.add_argument_group("reference lines")
    lines.add_argument("--header-bottom", type=int, metavar="Y", help="Y where the header ends")
    lines.add_argument("--footer-top", type=int, metavar="Y", help="Y where the footer starts")
    lines.add_argument("--text-line", type=int, metavar="Y", help="Y of the main text line")
    lines.add_argument("--baseline", type=int, metavar="Y", help="Y of the baseline (default: footer top + 1)")
    lines.add_argument("--top-line", type=int, metavar="Y", help="Y of the top line (default: header bottom - 1)")
    lines.add_argument("--left-start", type=int, metavar="X", help="X where the text starts on the left")
    lines.add_argument("--right-start", type=int, metavar="X", help="X where the text starts on the right")
    lines.add_argument(
        "--letter", type=int, action="append", default=[], metavar="X",
        help="X of a letter line (repeatable)",
    )

    parser.add_argument("--output-dir", type=Path, help="Directory for the .stamp file")
    parser.add_argument("--config", type=Path, default=CONFIG_FILE, help="JSON settings file")
    parser.add_argument("--strict-ordering", action="store_true", help="Reject out-of-order reference lines")
    parser.add_argument("--overwrite", action="store_true", help="Replace an existing .stamp file")
    parser.add_argument("--png", type=Path, help="Also write the processed image to this PNG file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def run(args: argparse.Namespace) -> Path:
    config = ConfigManager(args.config).load()
    if args.strict_ordering:
        config.strict_ordering = True

    session = StampSession(config)
    session.load_image(args.image)

    if args.pick:
        session.remove_background_at(*args.pick)
    elif args.target:
        session.remove_background(TargetColor(*args.target))

    for line, attribute in LINE_ARGUMENTS.items():
        value = getattr(args, attribute)
        if value is not None:
            session.set_line(line, value)
    for x in args.letter:
        session.add_letter_line(x)

    session.set_name(args.name)
    stamp_path = session.save(args.output_dir, overwrite=args.overwrite)

    if args.png:
        write_png(session.image.export_buffer, args.png)
        logger.info(f"Wrote processed image to {args.png}")

    return stamp_path


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        stamp_path = run(args)
    except ValidationError as e:
        logger.error(str(e))
        for problem in e.problems:
            print(f"  - {problem}", file=sys.stderr)
        return 2
    except InputError as e:
        logger.error(str(e))
        return 2
    except (CodecError, OSError) as e:
        logger.error(str(e))
        return 1

    print(stamp_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
