# filename: huffman_cli.py

import argparse
import logging
import os
import sys

from errors import CorruptStreamError, UsageError
from huffman_service import HuffmanService

USAGE = (
    "usage: huffpack <mode> <file>\n"
    "       where <mode> is `c` to compress or `x` to extract, and <file> is `-` for stdin or a filename\n"
)

LOG_ENV_VAR = "HUFFPACK_LOG"


class _Parser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser():
    parser = _Parser(prog="huffpack", add_help=False)
    parser.add_argument("mode", choices=["c", "x"])
    parser.add_argument("file")
    return parser


def configure_logging(environ=None):
    environ = os.environ if environ is None else environ
    level = logging.getLevelName(environ.get(LOG_ENV_VAR, "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return level


def read_input(file_name):
    if file_name == "-":
        return sys.stdin.buffer.read()
    with open(file_name, "rb") as f:
        return f.read()


def main(argv=None):
    configure_logging()

    try:
        argv = sys.argv[1:] if argv is None else argv
        # "--" keeps a file name such as "-data.bin" from parsing as an option
        args = build_parser().parse_args(["--", *argv])
    except UsageError:
        sys.stderr.write(USAGE)
        return 1

    data = read_input(args.file)
    svc = HuffmanService()
    try:
        result = svc.compress(data) if args.mode == "c" else svc.extract(data)
    except CorruptStreamError as e:
        sys.stderr.write(f"error: {e}\n")
        return 1

    sys.stdout.buffer.write(result)
    sys.stdout.buffer.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())
