#!/usr/bin/env python

"""Return argparse formatter classes with a wider help layout."""

from argparse import HelpFormatter


def make_wide(formatter: type[HelpFormatter], width: int = 120, max_help_position: int = 120):
    """Return a formatter factory with a wider width and help position."""
    return lambda prog: formatter(prog, width=width, max_help_position=max_help_position)
