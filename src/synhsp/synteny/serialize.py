#!/usr/bin/env python

"""Write numbered segments as tab-separated tables.

Output
------
The main data table has no header and one row per segment:

ordinal(block)  sps1  chr1  prog  feat  Q_start  Q_end  Q_strand  sps2  chr2  T_start  T_end  T_strand  score  ident  posit  cigar

Optional extras are a GFF-like display track on the axis chosen by
the output order, and a headered table of codon-position mismatch
statistics.
"""

from __future__ import annotations
from typing import Sequence, TextIO
from pathlib import Path
import pandas as pd
from loguru import logger
from synhsp.synteny.blocks import BlockAssignment, BlockOrder
from synhsp.synteny.scoring import base3_periodicity

DATA_COLUMNS = [
    "no(group)", "sps1", "chr1", "prog", "feat", "Q_start", "Q_end", "Q_strand",
    "sps2", "chr2", "T_start", "T_end", "T_strand", "score", "ident", "posit", "cigar",
]

TRACK_COLUMNS = ["chr", "prog", "feat", "start", "end", "score", "strand", "phase", "group"]

STATS_COLUMNS = [
    "sps1", "chr1", "Q_start", "Q_end", "Q_strand", "sps2", "chr2", "T_start", "T_end", "T_strand",
    "score", "ident", "posit", "cigar", "t0", "t1", "t2", "base3", "len", "sum_len",
]


def records_to_table(assignments: Sequence[BlockAssignment]) -> pd.DataFrame:
    """Return the data table for numbered segments."""
    rows = []
    for ordinal, block, seg in assignments:
        rows.append([
            f"{ordinal}({block})",
            seg.query_species, seg.query_id, seg.program, seg.feature,
            seg.query_start, seg.query_end, seg.query_strand,
            seg.target_species, seg.target_id,
            seg.target_start, seg.target_end, seg.target_strand,
            seg.score, seg.identity_pct, seg.positive, seg.cigar,
        ])
    return pd.DataFrame(rows, columns=DATA_COLUMNS)


def track_to_table(assignments: Sequence[BlockAssignment], order: BlockOrder) -> pd.DataFrame:
    """Return GFF-like rows on the target (or query) axis."""
    query = BlockOrder(order) is BlockOrder.QUERY_FIRST
    rows = []
    for _, block, seg in assignments:
        if query:
            rows.append([seg.query_id, seg.program, seg.feature, seg.query_start, seg.query_end, seg.score, seg.query_strand, ".", block])
        else:
            rows.append([seg.target_id, seg.program, seg.feature, seg.target_start, seg.target_end, seg.score, seg.target_strand, ".", block])
    return pd.DataFrame(rows, columns=TRACK_COLUMNS)


def stats_to_table(assignments: Sequence[BlockAssignment]) -> pd.DataFrame:
    """Return codon-position mismatch statistics per segment."""
    rows = []
    for _, _, seg in assignments:
        t0, t1, t2 = seg.codon_mismatches
        rows.append([
            seg.query_species, seg.query_id, seg.query_start, seg.query_end, seg.query_strand,
            seg.target_species, seg.target_id, seg.target_start, seg.target_end, seg.target_strand,
            seg.score, seg.identity_pct, seg.positive, seg.cigar,
            t0, t1, t2, base3_periodicity(t0, t1, t2), seg.length, (t0 + t1 + t2) / seg.length,
        ])
    return pd.DataFrame(rows, columns=STATS_COLUMNS)


def write_records(assignments: Sequence[BlockAssignment], out: Path | TextIO) -> None:
    """Write the headerless data table to a path or open handle."""
    table = records_to_table(assignments)
    table.to_csv(out, sep="\t", header=False, index=False, lineterminator="\n")
    if isinstance(out, Path):
        logger.info(f"wrote {len(table)} segments to {out}")


def write_track(assignments: Sequence[BlockAssignment], order: BlockOrder, path: Path, sps1: str, sps2: str) -> None:
    """Write a display track file with a track header line."""
    table = track_to_table(assignments, order)
    with open(path, 'w') as out:
        out.write(f'track name={sps1}_{sps2}_blocks description="blocks of {sps1} with {sps2}" useScore=1 color=333300\n')
        table.to_csv(out, sep="\t", header=False, index=False, lineterminator="\n")
    logger.info(f"wrote display track to {path}")


def write_stats(assignments: Sequence[BlockAssignment], path: Path) -> None:
    """Write the headered codon statistics table."""
    table = stats_to_table(assignments)
    table.to_csv(path, sep="\t", index=False, float_format="%.4f", lineterminator="\n")
    logger.info(f"wrote codon mismatch stats to {path}")
