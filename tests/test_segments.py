#!/usr/bin/env python

"""Tests for HSP line parsing and segment construction."""

import pytest
from synhsp.synteny.scoring import score_all_frames
from synhsp.synteny.segments import (
    AlignmentSegment,
    HspRecord,
    abbreviate_species,
    build_segment,
    identity_percent,
    parse_hsp_line,
    parse_region,
)


def hsp_line(qstart=1, qend=30, tstart=11, tend=40, query="Fr2.scaffold:scaffold_1.1001", target="Hs.chromosome:22.5001", extra=("-", "+", "90", "95", "M30")):
    fields = [query, "blat", "hsp", str(qstart), str(qend), target, str(tstart), str(tend), "55", "1e-10", *extra]
    return "\t".join(fields) + "\n"


def test_abbreviate_species():
    assert abbreviate_species("Homo sapiens") == "Hs"
    assert abbreviate_species("Takifugu rubripes") == "Tr"
    assert abbreviate_species("Fr2") == "Fr2"


def test_parse_region():
    assert parse_region("Fr2.scaffold:scaffold_12.40001", "Fr2") == ("scaffold", "scaffold_12", 40001)
    assert parse_region("Hs.chromosome:NCBI36:22.1", "Hs") == ("chromosome:NCBI36", "22", 1)
    assert parse_region("Mm.chromosome:1.1", "Hs") is None


def test_parse_valid_line():
    record = parse_hsp_line(hsp_line(), "Fr2", "Hs")
    assert record == HspRecord(
        query_species="Fr2",
        query_id="scaffold_1",
        query_start=1001,
        query_end=1030,
        query_strand="+",
        target_species="Hs",
        target_id="22",
        target_start=5011,
        target_end=5040,
        target_strand="-",
        program="blat",
        feature="hsp",
        aligner_score="55",
        pvalue="1e-10",
        legacy_identity="90",
        positive="95",
        cigar="M30",
    )


def test_short_alignment_is_skipped():
    assert parse_hsp_line(hsp_line(qstart=1, qend=15), "Fr2", "Hs") is None
    assert parse_hsp_line(hsp_line(qstart=1, qend=16), "Fr2", "Hs") is not None


def test_min_length_is_configurable():
    assert parse_hsp_line(hsp_line(qstart=1, qend=15), "Fr2", "Hs", min_length=10) is not None


@pytest.mark.parametrize("line", [
    "Fr2.scaffold:s1.1\tblat\thsp\t1\t30\n",
    hsp_line(qstart="x"),
    hsp_line(query="Mm.scaffold:scaffold_1.1"),
    hsp_line(target="Mm.chromosome:22.1"),
    hsp_line(tstart=40, tend=11),
])
def test_malformed_lines_are_skipped(line):
    assert parse_hsp_line(line, "Fr2", "Hs") is None


def test_optional_fields_default():
    record = parse_hsp_line(hsp_line(extra=()), "Fr2", "Hs")
    assert record.query_strand == "+"
    assert record.target_strand == "+"
    assert record.cigar == ""
    assert record.positive == ""


def _record(length=6, **kwargs):
    values = dict(
        query_species="Q", query_id="q1", query_start=1, query_end=length, query_strand="+",
        target_species="T", target_id="t1", target_start=1, target_end=length, target_strand="+",
        positive="95", cigar=f"M{length}",
    )
    values.update(kwargs)
    return HspRecord(**values)


def test_build_segment():
    seg = build_segment(_record(), "ATGAAA", "ATGCCC")
    assert seg.score == 1
    assert seg.frame == 0
    assert seg.identity_pct == 50
    assert seg.length == 6
    assert seg.codon_mismatches == (1, 1, 1)
    assert seg.positive == "95"


def test_build_segment_drops_non_positive_score():
    assert build_segment(_record(), "AAAAAA", "CCCCCC") is None


def test_build_segment_drops_zero_score():
    # frame 0 is MKP vs MGF (2 - 1 - 1) and no other frame scores higher
    assert score_all_frames("ATGAAACCC", "ATGGGGTTT").score == 0
    assert build_segment(_record(length=9), "ATGAAACCC", "ATGGGGTTT") is None


@pytest.mark.parametrize("identity, aa_length, expected", [
    (5, 8, 63),
    (2, 3, 67),
    (1, 3, 33),
    (1, 8, 13),
    (8, 8, 100),
    (0, 0, 0),
])
def test_identity_percent_rounds_half_up(identity, aa_length, expected):
    assert identity_percent(identity, aa_length) == expected


def test_identity_pct_is_rounded():
    # 2 of 3 amino acids identical -> 66.67%
    seg = build_segment(_record(length=9), "ATGAAACCC", "ATGAAAGGG")
    assert seg.identity_pct == 67


def test_segment_coordinates_are_ordered(make_segment):
    with pytest.raises(ValueError):
        make_segment(query_start=300, query_end=200)
    with pytest.raises(ValueError):
        make_segment(target_start=300, target_end=200)
    assert isinstance(make_segment(), AlignmentSegment)
