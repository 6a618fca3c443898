#!/usr/bin/env python

"""Remove redundant alignment segments that overlap a better neighbor.

Segments are first split into partitions that share one (target,
query) chromosome pair. Each partition is swept twice with the same
greedy algorithm: once sorted along the target axis and once, on the
survivors, sorted along the query axis. A redundant pair that is not
adjacent along one axis (e.g., a duplicated region with disjoint
target ranges) becomes adjacent along the other.

Each sweep compares a 'champion' (the last kept segment) to the next
'challenger' in sort order:

- no overlap: the challenger is kept and becomes champion.
- overlap on the same strands: the pair may be an extension of one
  alignment. The higher scoring segment replaces the other unless
  the challenger extends beyond the champion by more than the
  tolerance, in which case both are kept.
- overlap on different strands: competing alignments (e.g., repeats)
  and only the higher score is kept. Equal scores are resolved by the
  pass: the target pass drops the challenger, the query pass keeps
  both.

Sweeps are single pass; overlaps that survive both passes are kept.
"""

from __future__ import annotations
from typing import Callable, Iterable, Iterator, NamedTuple
from dataclasses import dataclass, replace
from enum import Enum
import itertools
from loguru import logger
from synhsp.synteny.segments import AlignmentSegment
from synhsp.utils.exceptions import PartitionOrderError

EXTENSION_TOLERANCE = 6


class Axis(Enum):
    """A coordinate axis of an AlignmentSegment."""
    QUERY = "query"
    TARGET = "target"

    def start(self, seg: AlignmentSegment) -> int:
        return getattr(seg, f"{self.value}_start")

    def end(self, seg: AlignmentSegment) -> int:
        return getattr(seg, f"{self.value}_end")


def partition_sort_key(seg: AlignmentSegment) -> tuple:
    """Sort key required by iter_partitions."""
    return (seg.target_id, seg.query_id, seg.target_start, seg.target_end, seg.query_start, seg.query_end)


def target_axis_key(seg: AlignmentSegment) -> tuple:
    return (seg.target_start, seg.target_end, seg.query_start, seg.query_end)


def query_axis_key(seg: AlignmentSegment) -> tuple:
    return (seg.query_start, seg.target_start)


@dataclass(frozen=True)
class OverlapPass:
    """Parameters of one greedy sweep.

    Parameters
    ----------
    name: label used in log messages.
    primary: axis the segments are sorted along.
    secondary: the other axis, checked for overlap.
    sort_key: key that sorts segments along the primary axis.
    keep_opposite_strand_ties: keep both segments when an overlapping
        pair on different strands has equal scores; otherwise the
        challenger is dropped.
    tolerance: max distance (bp) a challenger may extend past the
        champion on the extension axis and still be redundant.
    extension_axis: 'secondary' or 'primary'; axis on which the start
        and end deltas of same-strand overlaps are measured.
    """
    name: str
    primary: Axis
    secondary: Axis
    sort_key: Callable[[AlignmentSegment], tuple]
    keep_opposite_strand_ties: bool
    tolerance: int = EXTENSION_TOLERANCE
    extension_axis: str = "secondary"

    def __post_init__(self):
        if self.extension_axis not in ("secondary", "primary"):
            raise ValueError(f"extension_axis must be 'secondary' or 'primary', not {self.extension_axis!r}")

    @property
    def extension(self) -> Axis:
        return self.secondary if self.extension_axis == "secondary" else self.primary

    def with_options(self, tolerance: int | None = None, extension_axis: str | None = None) -> OverlapPass:
        """Return a copy with a new tolerance and/or extension axis."""
        return replace(
            self,
            tolerance=self.tolerance if tolerance is None else tolerance,
            extension_axis=self.extension_axis if extension_axis is None else extension_axis,
        )


TARGET_PASS = OverlapPass(
    name="target",
    primary=Axis.TARGET,
    secondary=Axis.QUERY,
    sort_key=target_axis_key,
    keep_opposite_strand_ties=False,
)

QUERY_PASS = OverlapPass(
    name="query",
    primary=Axis.QUERY,
    secondary=Axis.TARGET,
    sort_key=query_axis_key,
    keep_opposite_strand_ties=True,
)


class PartitionResult(NamedTuple):
    segments: list[AlignmentSegment]
    removed_target_pass: int
    removed_query_pass: int


def overlaps(champion: AlignmentSegment, challenger: AlignmentSegment, opass: OverlapPass) -> bool:
    """Return True if challenger (sorted after champion) overlaps it on both axes."""
    pri, sec = opass.primary, opass.secondary
    if pri.start(challenger) > pri.end(champion):
        return False
    if sec.start(champion) <= sec.start(challenger) <= sec.end(champion):
        return True
    return sec.start(challenger) <= sec.start(champion) <= sec.end(challenger)


def same_strands(seg1: AlignmentSegment, seg2: AlignmentSegment) -> bool:
    """Return True if both segments share query and target strands."""
    return seg1.query_strand == seg2.query_strand and seg1.target_strand == seg2.target_strand


def resolve_overlaps(segments: Iterable[AlignmentSegment], opass: OverlapPass) -> list[AlignmentSegment]:
    """Return the segments that survive one greedy sweep.

    Input must be sorted by opass.sort_key and is not modified. The
    champion is always the last element of the returned list.
    """
    kept = []
    tol = opass.tolerance
    ext = opass.extension
    for challenger in segments:
        if not kept:
            kept.append(challenger)
            continue
        champion = kept[-1]

        if not overlaps(champion, challenger, opass):
            kept.append(challenger)

        elif same_strands(champion, challenger):
            start_delta = ext.start(challenger) - ext.start(champion)
            end_delta = ext.end(challenger) - ext.end(champion)
            if challenger.score >= champion.score:
                # champion reaches too far ahead of the challenger to be redundant
                if start_delta > tol or end_delta < -tol:
                    kept.append(challenger)
                else:
                    kept[-1] = challenger
            # challenger extends the champion
            elif end_delta > tol:
                kept.append(challenger)

        elif champion.score < challenger.score:
            kept[-1] = challenger
        elif champion.score == challenger.score and opass.keep_opposite_strand_ties:
            kept.append(challenger)
    return kept


def iter_partitions(segments: Iterable[AlignmentSegment]) -> Iterator[list[AlignmentSegment]]:
    """Yield runs of segments that share a (target_id, query_id) pair.

    Segments must arrive grouped by chromosome pair, e.g., sorted by
    partition_sort_key. A pair that reappears after its run has ended
    raises PartitionOrderError.
    """
    seen = set()
    for pair, group in itertools.groupby(segments, key=lambda x: (x.target_id, x.query_id)):
        if pair in seen:
            raise PartitionOrderError(
                f"chromosome pair target={pair[0]} query={pair[1]} is not contiguous; "
                "sort segments by partition_sort_key before partitioning")
        seen.add(pair)
        yield list(group)


def resolve_partition(
    segments: list[AlignmentSegment],
    target_pass: OverlapPass = TARGET_PASS,
    query_pass: OverlapPass = QUERY_PASS,
) -> PartitionResult:
    """Return the segments of one chromosome pair surviving both sweeps."""
    first = resolve_overlaps(sorted(segments, key=target_pass.sort_key), target_pass)
    second = resolve_overlaps(sorted(first, key=query_pass.sort_key), query_pass)
    if segments:
        logger.debug(
            f"[{segments[0].target_id}/{segments[0].query_id}] {len(segments)} segments -> "
            f"{len(first)} after {target_pass.name} pass -> {len(second)} after {query_pass.name} pass")
    return PartitionResult(second, len(segments) - len(first), len(first) - len(second))
