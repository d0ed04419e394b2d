#!/usr/bin/env python3
"""
Extract translatable text from HTML pages into a language JSON file.

Keys already present in the output file keep their translations; keys no
longer found on the pages move to the "legacy" section unless
--keep-missing is given.
"""

import sys
import argparse

from log_setup import setup_logger
from extract_keys import extract_from_files
from merge_translations import update_translation_file


class CLIParser(argparse.ArgumentParser):
    """Usage errors exit with status 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def build_parser():
    parser = CLIParser(
        description="Extract text from HTML files for translation.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="Requirements:\n    pip install beautifulsoup4 html5lib regex"
    )
    parser.add_argument(
        "-i", "--input",
        nargs="+",
        required=True,
        metavar="FILE",
        help="The HTML file(s) to translate. Each file must have an .html extension."
    )
    parser.add_argument(
        "-o", "--output",
        required=True,
        metavar="FILE",
        help="The JSON file to store extracted text. The file must have a .json extension."
    )
    parser.add_argument(
        "-k", "--keep-missing",
        action="store_true",
        help="Keep missing translations in the translations section instead of moving them to legacy."
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Increase output verbosity"
    )
    return parser


def validate_paths(input_files, output_file):
    """Return an error message for the first bad extension, or None."""
    for input_file in input_files:
        if not input_file.lower().endswith(".html"):
            return f"The input file {input_file} must have an .html extension."
    if not output_file.lower().endswith(".json"):
        return "The output file must have a .json extension."
    return None


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logger("html_i10n", args.verbose)

    problem = validate_paths(args.input, args.output)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return 1

    try:
        texts = extract_from_files(args.input)
        update_translation_file(texts, args.output, keep_missing=args.keep_missing)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
