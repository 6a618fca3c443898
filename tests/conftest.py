#!/usr/bin/env python

"""Shared fixtures for synhsp tests."""

import random
import pytest
from loguru import logger
from synhsp.synteny.segments import AlignmentSegment


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks added by CLI runs so they do not outlive the test."""
    yield
    logger.remove()


def _segment(**kwargs) -> AlignmentSegment:
    values = dict(
        query_species="Q",
        query_id="q1",
        query_start=100,
        query_end=200,
        query_strand="+",
        target_species="T",
        target_id="t1",
        target_start=100,
        target_end=200,
        target_strand="+",
        score=10,
        identity_pct=50,
    )
    values.update(kwargs)
    return AlignmentSegment(**values)


@pytest.fixture
def make_segment():
    """Return a factory for AlignmentSegments with overridable defaults."""
    return _segment


@pytest.fixture
def coding_sequence() -> str:
    """A reproducible 300 nt random sequence."""
    rng = random.Random(42)
    return "".join(rng.choice("ACGT") for _ in range(300))


@pytest.fixture
def genome_seqs(coding_sequence) -> tuple[str, str]:
    """Query and target scaffolds that differ only at positions 61-78."""
    qseq = coding_sequence[:60] + "A" * 18 + coding_sequence[78:]
    tseq = coding_sequence[:60] + "C" * 18 + coding_sequence[78:]
    return qseq, tseq


def _hsp_line(qstart, qend, tstart, tend, qregion="Q.scaffold:scaf1.1", tregion="T.chromosome:chr22.1", strands=("+", "+")):
    fields = [qregion, "blat", "hsp", qstart, qend, tregion, tstart, tend, 50, "1e-5", *strands, 90, 95, "30M"]
    return "\t".join(str(i) for i in fields) + "\n"


@pytest.fixture
def make_hsp_line():
    """Return a factory for tab-separated aligner lines."""
    return _hsp_line


@pytest.fixture
def hsp_lines() -> list[str]:
    """Aligner lines over genome_seqs: two overlapping, one short,
    one from another species, one non-coding, and one distant.
    """
    return [
        "# comment\n",
        _hsp_line(1, 30, 1, 30),
        _hsp_line(2, 31, 2, 31),
        _hsp_line(1, 10, 1, 10),
        "\n",
        _hsp_line(1, 30, 1, 30, qregion="Mm.scaffold:scaf1.1"),
        _hsp_line(61, 78, 61, 78),
        _hsp_line(201, 230, 201, 230),
    ]
