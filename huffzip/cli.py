"""
Command-line wrapper around the Compressor.

Run without arguments for the interactive menu, or pass the mode and both
paths directly:

    huffzip compress notes.txt notes.huf
    huffzip decompress notes.huf notes.txt
"""

import argparse
import sys

from .compression import Compressor
from .config_loader import load_config
from .errors import HuffmanError

MODES = {"1": "compress", "2": "decompress"}


def build_parser():
    parser = argparse.ArgumentParser(prog="huffzip", description="Huffman file compressor.")
    parser.add_argument("mode", nargs="?", choices=sorted(MODES.values()),
                        help="Operation to run. Prompted for when omitted.")
    parser.add_argument("input", nargs="?", help="Input file path.")
    parser.add_argument("output", nargs="?", help="Output file path.")
    parser.add_argument("--config", default=None, help="YAML config file.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print [DEBUG] diagnostics.")
    return parser


def prompt(title):
    print(title)
    print("1) Compress")
    print("2) Decompress")
    choice = input("Choose an option: ").strip()
    mode = MODES.get(choice)
    if mode is None:
        return None, None, None
    src = input("Input file path: ").strip()
    dst = input("Output file path: ").strip()
    return mode, src, dst


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = load_config(args.config)

    if args.mode is None:
        mode, src, dst = prompt((config.get("cli") or {}).get("title", "HuffZip"))
        if mode is None:
            print("Invalid choice.")
            return 2
    else:
        if not args.input or not args.output:
            print("[ERROR] Both input and output paths are required.", file=sys.stderr)
            return 2
        mode, src, dst = args.mode, args.input, args.output

    compressor = Compressor.from_config(config)
    if args.verbose:
        compressor.verbose = True

    try:
        if mode == "compress":
            compressor.compress_file(src, dst)
            print("Compressed successfully.")
        else:
            compressor.decompress_file(src, dst)
            print("Decompressed successfully.")
    except (HuffmanError, OSError) as e:
        print(f"[ERROR] {mode.capitalize()} failed: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
