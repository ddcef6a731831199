"""
The `srr-info` command: decodes SRR files and lists their contents.
"""

import logging
import sys

from argparse import ArgumentParser, Namespace
from typing import List, Optional, Sequence

from atmfjstc.lib.cli_utils.console import console
from atmfjstc.lib.cli_utils.errors import DescriptiveError, descriptive_errors, fail, pretty_unhandled, \
    short_format_exception

from atmfjstc.lib.srr_file import SrrFile, read_srr_file
from atmfjstc.lib.srr_file.errors import SrrError


LOG = logging.getLogger(__name__)


def run(argv: Optional[Sequence[str]] = None) -> int:
    """
    Runs the command with the given arguments (by default, those of the process).

    Returns:
        The exit code: 0 if all files were decoded successfully, 1 if some failed and ``--keep-going`` was given.

    Raises:
        DescriptiveError: If a file fails to decode and ``--keep-going`` was not given.
    """

    args = _parse_args(argv)

    _setup_logging(args)

    if args.quiet:
        console.disable_stdout()
    else:
        console.enable_stdout()

    n_failed = 0

    for path in args.paths:
        LOG.debug("Decoding %s", path)

        try:
            with descriptive_errors(SrrError):
                srr_file = read_srr_file(path)
        except DescriptiveError as e:
            message = f"Failed to decode {path}: {short_format_exception(e)}"
            if not args.keep_going:
                fail(message)

            console.print_error(message)
            n_failed += 1
            continue

        _print_srr_file(path, srr_file)

    if len(args.paths) > 1:
        n_ok = len(args.paths) - n_failed
        if n_failed == 0:
            console.print_success(f"Decoded {n_ok} files")
        else:
            console.print_warning(f"Decoded {n_ok} files, {n_failed} failed")

    return 0 if n_failed == 0 else 1


@pretty_unhandled()
def main():
    sys.exit(run())


def _parse_args(argv: Optional[Sequence[str]]) -> Namespace:
    parser = ArgumentParser(prog='srr-info', description="Decodes SRR files and lists the blocks they contain")

    parser.add_argument('files', metavar='FILE', nargs='*', help="SRR file(s) to decode")
    parser.add_argument(
        '-f', '--file', dest='extra_files', metavar='FILE', action='append', default=[],
        help="SRR file to decode (may be repeated)"
    )
    parser.add_argument('-v', '--verbose', action='store_true', help="log every decoded block")
    parser.add_argument('-q', '--quiet', action='store_true', help="only print warnings and errors")
    parser.add_argument(
        '-k', '--keep-going', action='store_true', help="report files that fail to decode and continue with the rest"
    )

    args = parser.parse_args(argv)

    args.paths = [*args.extra_files, *args.files]
    if len(args.paths) == 0:
        parser.error("at least one SRR file must be specified")

    return args


def _setup_logging(args: Namespace):
    logging.basicConfig(
        level='DEBUG' if args.verbose else 'WARNING', style='{', format='[{asctime}] {levelname}: {message}'
    )


def _print_srr_file(path: str, srr_file: SrrFile):
    lines: List[str] = [
        path,
        f"  Application: {srr_file.application_name or '(unknown)'}",
        f"  Blocks: {len(srr_file.blocks)} "
        f"({len(srr_file.stored_files)} stored files, {len(srr_file.rar_files)} RAR volumes)",
    ]
    lines.extend('  ' + block.description() for block in srr_file.blocks)

    console.print_info('\n'.join(lines))
