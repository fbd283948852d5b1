"""
RealSense .bag to Image Converter CLI

Extracts every color, depth and infrared frame of a RealSense recording
as individual image files.

Output:
    <bag dir>/<bag stem>/Color/000000.jpg
    <bag dir>/<bag stem>/Depth/000000.png
    <bag dir>/<bag stem>/Infrared/000000.jpg
    <bag dir>/<bag stem>/Infrared 2/000000.jpg

Usage:
    # Raw 16-bit depth, JPEG quality 95
    python bag2image.py --bag ./recordings/session_001.bag

    # 8-bit depth visualization, lower JPEG quality, preview windows
    python bag2image.py -b ./recordings/session_001.bag -s true -q 80 -d true
"""

import argparse
import logging
import sys
from typing import List, Optional

from config import APP_NAME, APP_VERSION, DEBUG_MODE, JPEG_QUALITY, LOG_FORMAT
from domain.conversion_options import ConversionOptions
from utils.bag_converter import BagConverter

logger = logging.getLogger(__name__)

TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def str2bool(value: str) -> bool:
    """Parse a boolean option value (``true``/``false``, ``1``/``0``, ...)."""
    lowered = str(value).strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise argparse.ArgumentTypeError(f"expected a boolean value, got '{value}'")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Extract color, depth and infrared frames from a RealSense .bag file as images",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Raw 16-bit depth PNG, color/infrared JPEG at quality 95
  python bag2image.py --bag ./recordings/session_001.bag

  # Depth scaled for visualization (0-10000 mm -> white-black)
  python bag2image.py --bag ./recordings/session_001.bag --scaling true

  # Show each stream while converting (press q to stop)
  python bag2image.py --bag ./recordings/session_001.bag --display true
        """
    )

    parser.add_argument(
        '--bag', '-b',
        type=str,
        required=True,
        help='path to input bag file. (required)'
    )

    parser.add_argument(
        '--scaling', '-s',
        type=str2bool,
        nargs='?',
        const=True,
        default=False,
        help='enable depth scaling for visualization. false is raw 16bit image. (bool, default: false)'
    )

    parser.add_argument(
        '--quality', '-q',
        type=int,
        default=JPEG_QUALITY,
        help=f'jpeg encoding quality for color and infrared. [0-100] (default: {JPEG_QUALITY})'
    )

    parser.add_argument(
        '--display', '-d',
        type=str2bool,
        nargs='?',
        const=True,
        default=False,
        help='display each stream images on window. false is not display. (bool, default: false)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='enable debug logging'
    )

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    return build_parser().parse_args(argv)


def options_from_args(args: argparse.Namespace) -> ConversionOptions:
    """Build validated conversion options from parsed arguments."""
    options = ConversionOptions(
        bag_file=args.bag,
        scaling=args.scaling,
        quality=args.quality,
        display=args.display,
    )
    options.validate()
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (DEBUG_MODE or args.verbose) else logging.INFO,
        format=LOG_FORMAT
    )

    print(f"{APP_NAME} {APP_VERSION}")

    try:
        options = options_from_args(args)
        summary = BagConverter(options).run()
    except Exception as e:
        logger.error(f"Conversion failed: {e}")
        if DEBUG_MODE or args.verbose:
            logger.exception("Traceback")
        return 1

    print(f"Converted {summary.bundles} bundles ({summary.total_frames} images) to {options.output_root}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
