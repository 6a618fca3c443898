#!/usr/bin/env python

"""Exceptions raised for expected, user-facing failures.

The CLI logs a SynhspError message and exits with status 1 without a
traceback. Anything else is logged and re-raised.
"""


class SynhspError(Exception):
    """Base class for synhsp errors."""


class SequenceNotFoundError(SynhspError):
    """A genomic region could not be resolved to a sequence."""


class MatrixError(SynhspError):
    """A substitution matrix file is unreadable, malformed, or incomplete."""


class PartitionOrderError(SynhspError):
    """Segments were not sorted by chromosome pair before partitioning."""
