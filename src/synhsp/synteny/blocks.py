#!/usr/bin/env python

"""Group resolved segments into numbered synteny blocks.

All segments are sorted once for the whole run, either target-first
(target_id, query_id, target_start, query_start) or query-first
(query_id, target_id, query_start, target_start). A segment joins the
block of the segment before it when both share the same chromosome
pair and the signed gaps on both axes are <= the distance threshold.
Strand is ignored.
"""

from __future__ import annotations
from typing import Iterable, NamedTuple
from enum import Enum
from synhsp.synteny.segments import AlignmentSegment


class BlockOrder(str, Enum):
    TARGET_FIRST = "target"
    QUERY_FIRST = "query"


class BlockAssignment(NamedTuple):
    ordinal: int
    block: int
    segment: AlignmentSegment


def block_sort_key(order: BlockOrder):
    """Return the global sort key for an output order."""
    if BlockOrder(order) is BlockOrder.QUERY_FIRST:
        return lambda x: (x.query_id, x.target_id, x.query_start, x.target_start)
    return lambda x: (x.target_id, x.query_id, x.target_start, x.query_start)


def is_adjacent(prev: AlignmentSegment, seg: AlignmentSegment, distance: int) -> bool:
    """Return True if seg continues the block of prev."""
    if (prev.target_id, prev.query_id) != (seg.target_id, seg.query_id):
        return False
    delta_target = seg.target_start - prev.target_end
    delta_query = seg.query_start - prev.query_end
    return delta_target <= distance and delta_query <= distance


def assign_blocks(
    segments: Iterable[AlignmentSegment],
    distance: int,
    order: BlockOrder = BlockOrder.TARGET_FIRST,
) -> list[BlockAssignment]:
    """Return segments in output order with 1-based ordinals and block ids."""
    ordered = sorted(segments, key=block_sort_key(order))
    assignments = []
    block = 0
    for idx, seg in enumerate(ordered):
        if not idx or not is_adjacent(ordered[idx - 1], seg, distance):
            block += 1
        assignments.append(BlockAssignment(idx + 1, block, seg))
    return assignments
