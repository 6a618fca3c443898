#!/usr/bin/env python

"""Command-line interface for synhsp.

Examples
--------
synhsp -h
synhsp [subcommand]
"""

from typing import Optional
from argparse import ArgumentParser, RawDescriptionHelpFormatter
from textwrap import dedent
from loguru import logger
import importlib
from . import subcommands
from synhsp import __version__ as VERSION
from synhsp.utils import SynhspError
from synhsp.utils.make_wide import make_wide


DISPATCH = {
    "parse-score": "..synteny",
    "frame-score": "..synteny",
}


def setup_parsers() -> ArgumentParser:
    """Setup and return an ArgumentParser w/ subcommands."""
    parser = ArgumentParser(
        "synhsp",
        usage="synhsp [subcommand] --help",
        formatter_class=make_wide(RawDescriptionHelpFormatter),
        description=dedent("""
            ------------------------------------------------------------
            |  %(prog)s: six-frame HSP scoring and synteny blocks        |
            ------------------------------------------------------------
            """),
        epilog=dedent(r"""
            Workflow
            --------
            # align translated genomes with an external aligner (e.g., BLAT)
            # then re-score, de-duplicate, and group the HSPs
            $ synhsp parse-score -i A_B.hsps -q A.fa -t B.fa -s1 A -s2 B > A_B.data

            # inspect the frame score of a single aligned pair
            $ synhsp frame-score ATGAAACCC ATGAAGCCA
        """)
    )
    parser.add_argument("-v", "--version", action='version', version=f"synhsp {VERSION}")
    return parser


def main(cmd: Optional[str] = None) -> int:
    """Command line tool.

    """
    # load parser and attach subparsers
    parser = setup_parsers()
    subparsers = parser.add_subparsers(
        prog="%(prog)s", required=True,
        title="subcommands",
        dest="subcommand",
        metavar="--------------",
        help="-----------------------------------------------------",
    )
    for method in DISPATCH:
        meth = method.replace("-", "_")
        subparser = getattr(subcommands, f"get_parser_{meth}")
        subparser(subparsers)

    # parse args
    args = parser.parse_args(cmd.split() if cmd else None)

    # run subcommand
    if args.subcommand in DISPATCH:
        meth = args.subcommand.replace("-", "_")
        path = DISPATCH[args.subcommand]
        mod = importlib.import_module(f"{path}.{meth}", package=__package__)
        run_func = getattr(mod, f"run_{meth}")
        try:
            run_func(args)
            return 0
        except KeyboardInterrupt:
            logger.warning("interrupted by user")
        except SynhspError as exc:
            logger.error(exc)
        except Exception as exc:
            logger.error(exc)
            raise
        return 1

    # unreachable
    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
