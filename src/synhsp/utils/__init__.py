#!/usr/bin/env python

"""Shared utilities: errors, logging, and CLI helpers."""

from synhsp.utils.exceptions import (
    SynhspError,
    SequenceNotFoundError,
    MatrixError,
    PartitionOrderError,
)
from synhsp.utils.logger_setup import set_log_level
