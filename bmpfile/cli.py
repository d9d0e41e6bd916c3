import argparse
import logging
import sys

from .bmpfile import Bitmap
from .dump import dump
from .headers import InfoHeader
from .Exceptions import BitmapError, BitmapFileError

logger = logging.getLogger(__name__)

def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog = 'bmpfile', description = 'Inspect and create Windows bitmap files')
    parser.add_argument('--verbose', action = 'store_true', help = 'Log debugging information')
    commands = parser.add_subparsers(dest = 'command', required = True)

    inspect_command = commands.add_parser('inspect', help = 'Print the headers and a preview of the data')
    inspect_command.add_argument('path', help = 'Path to the BMP file to inspect')
    inspect_command.add_argument('--color', action = 'store_true', help = 'Colorize the output')

    new_command = commands.add_parser('new', help = 'Create a bitmap filled with one color')
    new_command.add_argument('width', type = int, help = 'Width in pixels')
    new_command.add_argument('height', type = int, help = 'Height in pixels')
    new_command.add_argument('fill', help = 'Fill color, like "#F5ABB9"')
    new_command.add_argument('output', help = 'Path of the BMP file to write')
    new_command.add_argument(
        '--depth',
        type = int,
        default = 24,
        choices = InfoHeader.SUPPORTED_COLOR_DEPTHS,
        help = 'Bits per pixel')
    return parser

## Runs the command line tool and returns the exit status.
def main(argv = None) -> int:
    args = build_argument_parser().parse_args(argv)
    logging.basicConfig(level = logging.DEBUG if args.verbose else logging.WARNING)

    try:
        if args.command == 'inspect':
            bitmap = Bitmap.read_file(args.path)
            sys.stdout.write(dump(bitmap, color = args.color))
        elif args.command == 'new':
            bitmap = Bitmap.new((args.width, args.height), args.depth, args.fill)
            bitmap.write_file(args.output)
    except (BitmapError, BitmapFileError) as error:
        logger.error(str(error))
        return 1
    return 0

if __name__ == '__main__':
    sys.exit(main())
