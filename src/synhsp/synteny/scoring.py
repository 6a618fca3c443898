#!/usr/bin/env python

"""Six-frame amino-acid scoring of gapless nucleotide alignments.

Each aligned pair of nucleotide sequences is translated in all six
reading frames (offsets 0,1,2 on the forward strand are frames 0-2,
the same offsets on the reverse complement are frames 3-5). Peptides
are compared position by position and the frame with the greatest
cumulative score is kept. On ties the lowest frame index wins, so
forward frames are preferred over reverse frames.

Scores use a substitution matrix when one is loaded, otherwise a
simple match=+2 / mismatch=-1 scheme with no special treatment of
stop codons.

Example
-------
>>> score_all_frames("ATGAAA", "ATGCCC")
FrameScore(score=1, identity=1, frame=0)
"""

from __future__ import annotations
from typing import NamedTuple, Optional
from pathlib import Path
import numpy as np
from Bio.Seq import Seq
from loguru import logger
from synhsp.utils.exceptions import MatrixError

MATCH_SCORE = 2
MISMATCH_SCORE = -1
NUM_FRAMES = 6

# {row_aa: {col_aa: score}}
SubstitutionMatrix = dict[str, dict[str, int]]


class FrameScore(NamedTuple):
    score: int
    identity: int
    frame: int


def translate_frame(seq: str, offset: int) -> str:
    """Return the peptide of seq read from a codon offset.

    A trailing partial codon is not translated.
    """
    sub = seq[offset:]
    sub = sub[:len(sub) - len(sub) % 3]
    return str(Seq(sub).translate())


def reverse_complement(seq: str) -> str:
    """Return the reverse complement of a DNA sequence."""
    return str(Seq(seq).reverse_complement())


def translate_six_frames(seq: str) -> list[str]:
    """Return peptides for frames 0-5 (three forward, three reverse)."""
    revcomp = reverse_complement(seq)
    forward = [translate_frame(seq, offset) for offset in range(3)]
    reverse = [translate_frame(revcomp, offset) for offset in range(3)]
    return forward + reverse


def score_peptides(pep1: str, pep2: str, matrix: Optional[SubstitutionMatrix] = None) -> tuple[int, int]:
    """Return (score, identity) of two peptides truncated to the shorter."""
    length = min(len(pep1), len(pep2))
    score = 0
    identity = 0
    for aa1, aa2 in zip(pep1[:length], pep2[:length]):
        if aa1 == aa2:
            identity += 1
        if matrix is not None:
            try:
                score += matrix[aa1][aa2]
            except KeyError:
                raise MatrixError(f"substitution matrix has no score for pair ({aa1}, {aa2})") from None
        elif aa1 == aa2:
            score += MATCH_SCORE
        else:
            score += MISMATCH_SCORE
    return score, identity


def score_all_frames(seq1: str, seq2: str, matrix: Optional[SubstitutionMatrix] = None) -> FrameScore:
    """Return the best FrameScore over the six reading frames.

    Only a strictly greater score replaces the current best, so the
    lowest frame index wins ties.
    """
    best = None
    frames1 = translate_six_frames(seq1)
    frames2 = translate_six_frames(seq2)
    for frame, (pep1, pep2) in enumerate(zip(frames1, frames2)):
        score, identity = score_peptides(pep1, pep2, matrix)
        if best is None or score > best.score:
            best = FrameScore(score, identity, frame)
    return best


def frame_peptides(seq1: str, seq2: str, frame: int) -> tuple[str, str]:
    """Return the peptides of both sequences in a given frame.

    These are the same peptides that were compared when the frame
    was scored.
    """
    if not 0 <= frame < NUM_FRAMES:
        raise ValueError(f"frame must be in 0-{NUM_FRAMES - 1}, got {frame}")
    if frame > 2:
        return (
            translate_frame(reverse_complement(seq1), frame - 3),
            translate_frame(reverse_complement(seq2), frame - 3),
        )
    return translate_frame(seq1, frame), translate_frame(seq2, frame)


def codon_mismatches(seq1: str, seq2: str) -> tuple[int, int, int]:
    """Return counts of nucleotide mismatches at codon positions 1, 2, 3."""
    length = min(len(seq1), len(seq2))
    arr1 = np.frombuffer(seq1[:length].upper().encode(), dtype=np.uint8)
    arr2 = np.frombuffer(seq2[:length].upper().encode(), dtype=np.uint8)
    mismatch = arr1 != arr2
    return tuple(int(mismatch[pos::3].sum()) for pos in range(3))


def base3_periodicity(t0: int, t1: int, t2: int) -> float:
    """Return the max ratio of one codon position's mismatches to the
    mean of the other two.

    Coding alignments accumulate most differences at the third codon
    position, which shows as a large ratio for t2.
    """
    counts = np.array([t0, t1, t2], dtype=float)
    ratios = []
    for idx in range(3):
        others = np.delete(counts, idx)
        if others.any():
            ratios.append(counts[idx] / others.mean())
        else:
            ratios.append(counts[idx])
    return float(max(ratios))


def load_substitution_matrix(path: Path) -> SubstitutionMatrix:
    """Return a {aa: {aa: score}} table parsed from a matrix file.

    Lines starting with '#' are comments. The first other line that
    starts with whitespace holds the column keys; every following line
    holds a row key and one integer per column key.
    """
    try:
        with open(path, 'r') as indata:
            lines = indata.read().splitlines()
    except OSError as exc:
        raise MatrixError(f"cannot read substitution matrix {path}: {exc}") from exc

    col_keys = []
    matrix = {}
    for lineno, line in enumerate(lines, start=1):
        if line.startswith("#") or not line.strip():
            continue
        if not col_keys:
            if not line[0].isspace():
                raise MatrixError(f"{path}:{lineno} expected column header line starting with whitespace")
            col_keys = line.split()
            continue
        row_key, *values = line.split()
        if len(values) != len(col_keys):
            raise MatrixError(f"{path}:{lineno} row '{row_key}' has {len(values)} values for {len(col_keys)} columns")
        try:
            matrix[row_key] = {key: int(val) for key, val in zip(col_keys, values)}
        except ValueError:
            raise MatrixError(f"{path}:{lineno} row '{row_key}' contains a non-integer score") from None

    if not matrix:
        raise MatrixError(f"no matrix rows found in {path}")
    logger.debug(f"loaded {len(matrix)}x{len(col_keys)} substitution matrix from {path}")
    return matrix
