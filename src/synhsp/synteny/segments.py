#!/usr/bin/env python

"""Parse aligner HSP lines and build scored alignment segments.

Input lines are tab-separated with at least 10 fields:

 0. query region      <species>.<coord_system>:<chromosome>.<offset>
 1. program label
 2. feature label
 3. query local start
 4. query local end
 5. target region     (same form as query region)
 6. target local start
 7. target local end
 8. aligner score
 9. p-value
10. target strand     (+/-)
11. query strand      (+/-)
12. legacy identity
13. legacy positive
14. cigar

Absolute coordinates are (offset - 1) + local coordinate. Lines that
do not validate are skipped (parse_hsp_line returns None); segments
whose best six-frame score is not positive are dropped (build_segment
returns None).
"""

from __future__ import annotations
from typing import Optional
from dataclasses import dataclass
import re
from loguru import logger
from synhsp.synteny.scoring import (
    SubstitutionMatrix,
    score_all_frames,
    frame_peptides,
    codon_mismatches,
)

MIN_FIELDS = 10
MIN_SEGMENT_LENGTH = 15
BINOMIAL_REGEX = re.compile(r"^(\w)\w+ (.).+")


def abbreviate_species(name: str) -> str:
    """Return a two letter label for a binomial, e.g. 'Homo sapiens' -> 'Hs'.

    Labels without a space are returned unchanged.
    """
    return BINOMIAL_REGEX.sub(r"\1\2", name)


@dataclass(frozen=True)
class HspRecord:
    """A validated aligner line with absolute coordinates."""
    query_species: str
    query_id: str
    query_start: int
    query_end: int
    query_strand: str
    target_species: str
    target_id: str
    target_start: int
    target_end: int
    target_strand: str
    program: str = ""
    feature: str = ""
    aligner_score: str = ""
    pvalue: str = ""
    legacy_identity: str = ""
    positive: str = ""
    cigar: str = ""


@dataclass(frozen=True)
class AlignmentSegment:
    """A scored gapless alignment between a query and target region."""
    query_species: str
    query_id: str
    query_start: int
    query_end: int
    query_strand: str
    target_species: str
    target_id: str
    target_start: int
    target_end: int
    target_strand: str
    score: int
    identity_pct: int
    frame: int = 0
    program: str = ""
    feature: str = ""
    aligner_score: str = ""
    pvalue: str = ""
    legacy_identity: str = ""
    positive: str = ""
    cigar: str = ""
    codon_mismatches: tuple[int, int, int] = (0, 0, 0)

    def __post_init__(self):
        if self.query_start > self.query_end:
            raise ValueError(f"query_start > query_end ({self.query_start} > {self.query_end})")
        if self.target_start > self.target_end:
            raise ValueError(f"target_start > target_end ({self.target_start} > {self.target_end})")

    @property
    def length(self) -> int:
        """Aligned length in nucleotides (same on both axes, no gaps)."""
        return self.target_end - self.target_start + 1


def identity_percent(identity: int, aa_length: int) -> int:
    """Return identity as a whole percent of aa_length, rounding halves up.

    e.g., 5 of 8 identical -> 63
    """
    if not aa_length:
        return 0
    return int(identity * 100 / aa_length + 0.5)


def parse_region(region: str, species: str) -> Optional[tuple[str, str, int]]:
    """Return (coord_system, chromosome, offset) from a region string.

    e.g., 'Fr2.scaffold:scaffold_12.40001' -> ('scaffold', 'scaffold_12', 40001)
    """
    match = re.search(rf"{re.escape(species)}\.(\S+):(\S+)\.(\d+)$", region)
    if match is None:
        return None
    coord_system, chrom, offset = match.groups()
    return coord_system, chrom, int(offset)


def parse_hsp_line(line: str, species1: str, species2: str, min_length: int = MIN_SEGMENT_LENGTH) -> Optional[HspRecord]:
    """Return an HspRecord, or None if the line fails validation.

    The query span (local end - local start) must be >= min_length.
    """
    fields = line.rstrip("\r\n").split("\t")
    if len(fields) < MIN_FIELDS:
        logger.debug(f"skipping line with {len(fields)} fields (<{MIN_FIELDS})")
        return None
    if species1 not in fields[0]:
        logger.debug(f"skipping line with query region not from {species1}: {fields[0]}")
        return None
    try:
        qstart, qend, tstart, tend = (int(fields[idx]) for idx in (3, 4, 6, 7))
    except ValueError:
        logger.debug(f"skipping line with non-integer coordinates: {fields[:8]}")
        return None
    if qend - qstart < min_length:
        logger.debug(f"skipping short alignment {fields[0]} {qstart}-{qend} (<{min_length})")
        return None
    if tend < tstart:
        logger.debug(f"skipping alignment with inverted target coordinates {fields[5]} {tstart}-{tend}")
        return None

    qregion = parse_region(fields[0], species1)
    tregion = parse_region(fields[5], species2)
    if qregion is None or tregion is None:
        logger.debug(f"skipping line with unparsable region string: {fields[0]} {fields[5]}")
        return None
    _, qchrom, qoffset = qregion
    _, tchrom, toffset = tregion

    # region offsets are 1-based
    qoffset -= 1
    toffset -= 1

    extra = fields[10:15] + [""] * (5 - len(fields[10:15]))
    target_strand, query_strand, legacy_identity, positive, cigar = extra
    return HspRecord(
        query_species=species1,
        query_id=qchrom,
        query_start=qoffset + qstart,
        query_end=qoffset + qend,
        query_strand=query_strand or "+",
        target_species=species2,
        target_id=tchrom,
        target_start=toffset + tstart,
        target_end=toffset + tend,
        target_strand=target_strand or "+",
        program=fields[1],
        feature=fields[2],
        aligner_score=fields[8],
        pvalue=fields[9],
        legacy_identity=legacy_identity,
        positive=positive,
        cigar=cigar,
    )


def build_segment(
    record: HspRecord,
    query_seq: str,
    target_seq: str,
    matrix: Optional[SubstitutionMatrix] = None,
) -> Optional[AlignmentSegment]:
    """Return a scored AlignmentSegment, or None if its best frame
    score is not positive.
    """
    best = score_all_frames(query_seq, target_seq, matrix)
    if best.score <= 0:
        qpep, tpep = frame_peptides(query_seq, target_seq, best.frame)
        logger.debug(
            f"dropping score={best.score} segment {record.query_id}:{record.query_start}-{record.query_end}"
            f"({record.query_strand}) {record.target_id}:{record.target_start}-{record.target_end}"
            f"({record.target_strand}) frame={best.frame}\n{qpep}\n{tpep}"
        )
        return None

    length = record.target_end - record.target_start + 1
    aa_length = length // 3
    identity_pct = identity_percent(best.identity, aa_length)
    return AlignmentSegment(
        query_species=record.query_species,
        query_id=record.query_id,
        query_start=record.query_start,
        query_end=record.query_end,
        query_strand=record.query_strand,
        target_species=record.target_species,
        target_id=record.target_id,
        target_start=record.target_start,
        target_end=record.target_end,
        target_strand=record.target_strand,
        score=best.score,
        identity_pct=identity_pct,
        frame=best.frame,
        program=record.program,
        feature=record.feature,
        aligner_score=record.aligner_score,
        pvalue=record.pvalue,
        legacy_identity=record.legacy_identity,
        positive=record.positive,
        cigar=record.cigar,
        codon_mismatches=codon_mismatches(query_seq, target_seq),
    )
