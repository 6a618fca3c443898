#!/usr/bin/env python

"""Tests for synteny block numbering."""

import pytest
from synhsp.synteny.blocks import BlockAssignment, BlockOrder, assign_blocks


def blocks(assignments):
    return [x.block for x in assignments]


def test_gap_equal_to_distance_joins_block(make_segment):
    a = make_segment()
    b = make_segment(target_start=300, target_end=400, query_start=300, query_end=400)
    result = assign_blocks([b, a], distance=100)
    assert result == [BlockAssignment(1, 1, a), BlockAssignment(2, 1, b)]


@pytest.mark.parametrize("kwargs", [
    dict(target_start=301, target_end=400, query_start=300, query_end=400),
    dict(target_start=300, target_end=400, query_start=301, query_end=400),
])
def test_gap_over_distance_starts_block(make_segment, kwargs):
    a = make_segment()
    b = make_segment(**kwargs)
    assert blocks(assign_blocks([a, b], distance=100)) == [1, 2]


def test_overlapping_segments_share_block(make_segment):
    a = make_segment()
    b = make_segment(target_start=150, target_end=250, query_start=50, query_end=120)
    assert blocks(assign_blocks([a, b], distance=0)) == [1, 1]


def test_new_chromosome_pair_starts_block(make_segment):
    a = make_segment()
    b = make_segment(query_id="q2", target_start=210, target_end=300, query_start=210, query_end=300)
    c = make_segment(query_id="q2", target_start=310, target_end=400, query_start=310, query_end=400)
    result = assign_blocks([c, b, a], distance=1000)
    assert [x.ordinal for x in result] == [1, 2, 3]
    assert blocks(result) == [1, 2, 2]
    assert [x.segment for x in result] == [a, b, c]


def test_strand_is_ignored(make_segment):
    a = make_segment()
    b = make_segment(target_start=250, target_end=300, query_start=250, query_end=300, target_strand="-")
    assert blocks(assign_blocks([a, b], distance=100)) == [1, 1]


def test_output_orders(make_segment):
    a = make_segment(query_id="qA", target_id="tB")
    b = make_segment(query_id="qB", target_id="tA")
    target_first = assign_blocks([a, b], distance=100, order=BlockOrder.TARGET_FIRST)
    query_first = assign_blocks([a, b], distance=100, order=BlockOrder.QUERY_FIRST)
    assert [x.segment for x in target_first] == [b, a]
    assert [x.segment for x in query_first] == [a, b]
    assert assign_blocks([a, b], 100, "query") == query_first


def test_block_ids_increase_along_order(make_segment):
    segs = [
        make_segment(target_start=i * 1000, target_end=i * 1000 + 100, query_start=i * 1000, query_end=i * 1000 + 100)
        for i in (3, 1, 2)
    ]
    segs.append(make_segment(target_start=2150, target_end=2200, query_start=2150, query_end=2200))
    assert blocks(assign_blocks(segs, distance=100)) == [1, 2, 2, 3]


def test_empty():
    assert assign_blocks([], distance=100) == []
