#!/usr/bin/env python

"""Re-score aligner HSPs, remove redundant overlaps, and group blocks.

Example
-------
$ synhsp parse-score -i Fr2_Hs.hsps -q Fr2.fa -t Hs.fa -s1 Fr2 -s2 Hs -D 15000 > Fr2_Hs.data
$ synhsp parse-score -i Fr2_Hs.hsps.gz -q Fr2.fa -t Hs.fa -s1 Fr2 -s2 Hs -m BLOSUM62 --query-first -o Fr2_Hs.data

Steps
-----
1. parse and validate each line (short or malformed lines are skipped)
2. fetch both regions and score them in the best of six frames
   (segments with a score <= 0 are dropped)
3. sort and split segments by (target, query) chromosome pair
4. remove overlapping segments sorted on the target, then query axis
5. sort all survivors and number blocks by distance threshold
6. write the data table (and optional track and stats tables)
"""

from __future__ import annotations
from typing import Iterable, Iterator, Optional, Protocol
from dataclasses import dataclass
from pathlib import Path
import gzip
import sys
from loguru import logger
from synhsp.synteny.blocks import BlockAssignment, BlockOrder, assign_blocks
from synhsp.synteny.genome import GenomeFasta
from synhsp.synteny.overlap import (
    EXTENSION_TOLERANCE,
    QUERY_PASS,
    TARGET_PASS,
    iter_partitions,
    partition_sort_key,
    resolve_partition,
)
from synhsp.synteny.scoring import SubstitutionMatrix, load_substitution_matrix
from synhsp.synteny.segments import (
    MIN_SEGMENT_LENGTH,
    AlignmentSegment,
    HspRecord,
    abbreviate_species,
    build_segment,
    parse_hsp_line,
)
from synhsp.synteny.serialize import write_records, write_stats, write_track
from synhsp.utils.exceptions import SynhspError
from synhsp.utils.logger_setup import set_log_level

DEFAULT_DISTANCE = 15000


class SequenceFetcher(Protocol):
    def fetch_sequence(self, chromosome_id: str, start: int, end: int, strand: str) -> str:
        ...


@dataclass
class PipelineConfig:
    """Settings of one parse-score run."""
    species1: str
    species2: str
    distance: int = DEFAULT_DISTANCE
    order: BlockOrder = BlockOrder.TARGET_FIRST
    matrix: Optional[SubstitutionMatrix] = None
    min_length: int = MIN_SEGMENT_LENGTH
    tolerance: int = EXTENSION_TOLERANCE
    extension_axis: str = "secondary"


@dataclass
class RunSummary:
    """Counters accumulated over one run."""
    lines_read: int = 0
    lines_skipped: int = 0
    segments_built: int = 0
    segments_dropped: int = 0
    partitions: int = 0
    removed_target_pass: int = 0
    removed_query_pass: int = 0
    segments_kept: int = 0
    blocks: int = 0

    def log(self) -> None:
        logger.info(f"read {self.lines_read} HSP lines; skipped {self.lines_skipped} malformed or short lines")
        logger.info(f"dropped {self.segments_dropped} segments with non-positive score; scored {self.segments_built}")
        logger.info(
            f"removed {self.removed_target_pass} overlapping segments on target axis and "
            f"{self.removed_query_pass} on query axis across {self.partitions} chromosome pairs")
        logger.info(f"kept {self.segments_kept} segments in {self.blocks} blocks")


def iter_records(lines: Iterable[str], config: PipelineConfig, summary: RunSummary) -> Iterator[HspRecord]:
    """Yield validated records; blank and '#' lines are ignored."""
    for line in lines:
        if not line.strip() or line.startswith("#"):
            continue
        summary.lines_read += 1
        record = parse_hsp_line(line, config.species1, config.species2, config.min_length)
        if record is None:
            summary.lines_skipped += 1
            continue
        yield record


def build_segments(
    records: Iterable[HspRecord],
    query_genome: SequenceFetcher,
    target_genome: SequenceFetcher,
    matrix: Optional[SubstitutionMatrix],
    summary: RunSummary,
) -> list[AlignmentSegment]:
    """Return scored segments. Fetch errors propagate and end the run."""
    segments = []
    for record in records:
        qseq = query_genome.fetch_sequence(record.query_id, record.query_start, record.query_end, record.query_strand)
        tseq = target_genome.fetch_sequence(record.target_id, record.target_start, record.target_end, record.target_strand)
        segment = build_segment(record, qseq, tseq, matrix)
        if segment is None:
            summary.segments_dropped += 1
            continue
        summary.segments_built += 1
        segments.append(segment)
    return segments


def resolve_all(segments: Iterable[AlignmentSegment], config: PipelineConfig, summary: RunSummary) -> list[AlignmentSegment]:
    """Return survivors of both overlap passes for every chromosome pair."""
    target_pass = TARGET_PASS.with_options(config.tolerance, config.extension_axis)
    query_pass = QUERY_PASS.with_options(config.tolerance, config.extension_axis)
    kept = []
    for partition in iter_partitions(sorted(segments, key=partition_sort_key)):
        result = resolve_partition(partition, target_pass, query_pass)
        summary.partitions += 1
        summary.removed_target_pass += result.removed_target_pass
        summary.removed_query_pass += result.removed_query_pass
        kept.extend(result.segments)
    return kept


def run_pipeline(
    lines: Iterable[str],
    query_genome: SequenceFetcher,
    target_genome: SequenceFetcher,
    config: PipelineConfig,
) -> tuple[list[BlockAssignment], RunSummary]:
    """Return numbered blocks and run counters for HSP lines."""
    summary = RunSummary()
    records = iter_records(lines, config, summary)
    segments = build_segments(records, query_genome, target_genome, config.matrix, summary)
    kept = resolve_all(segments, config, summary)
    assignments = assign_blocks(kept, config.distance, config.order)
    summary.segments_kept = len(assignments)
    summary.blocks = assignments[-1].block if assignments else 0
    return assignments, summary


def _open_input(path: Path):
    """Return an open text handle for a path, gzip path, or '-' (stdin)."""
    if str(path) == "-":
        return sys.stdin
    if not path.is_file():
        raise SynhspError(f"{path} not found")
    if path.suffix == ".gz":
        return gzip.open(path, mode='rt')
    return open(path, mode='r')


def run_parse_score(args):
    """Run the parse-score pipeline with args parsed from the CLI."""
    set_log_level(args.log_level)

    species1 = abbreviate_species(args.species1)
    species2 = abbreviate_species(args.species2)
    order = BlockOrder.QUERY_FIRST if args.query_first else BlockOrder.TARGET_FIRST
    matrix = load_substitution_matrix(args.matrix) if args.matrix else None
    config = PipelineConfig(
        species1=species1,
        species2=species2,
        distance=args.distance,
        order=order,
        matrix=matrix,
        min_length=args.min_length,
        tolerance=args.tolerance,
        extension_axis=args.extension_axis,
    )
    logger.info(f"scoring {species1} (query) against {species2} (target); distance={config.distance}; order={order.value}-first")

    # load genomes once, even if shared
    query_genome = GenomeFasta.from_path(args.query_genome)
    if args.target_genome.resolve() == args.query_genome.resolve():
        target_genome = query_genome
    else:
        target_genome = GenomeFasta.from_path(args.target_genome)

    handle = _open_input(args.input)
    try:
        assignments, summary = run_pipeline(handle, query_genome, target_genome, config)
    finally:
        if handle is not sys.stdin:
            handle.close()

    if args.out:
        args.out.parent.mkdir(parents=True, exist_ok=True)
        write_records(assignments, args.out)
    else:
        write_records(assignments, sys.stdout)
    if args.track:
        write_track(assignments, order, args.track, species1, species2)
    if args.stats:
        write_stats(assignments, args.stats)
    summary.log()


def main() -> int:
    """Run parse-score as a standalone tool and return an exit status."""
    from synhsp.cli.subcommands import get_parser_parse_score
    parser = get_parser_parse_score()
    args = parser.parse_args()
    try:
        run_parse_score(args)
        return 0
    except KeyboardInterrupt:
        logger.warning("interrupted by user")
    except SynhspError as exc:
        logger.error(exc)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
