#!/usr/bin/env python

"""Fetch nucleotide sequence for genomic regions from a fasta genome.

Regions use inclusive coordinates counted from 1, as in genome slice
APIs. A reverse strand request returns the reverse complement.

Example
-------
>>> genome = GenomeFasta.from_sequences({"chr1": "AACCGGTT"})
>>> genome.fetch_sequence("chr1", 2, 4, "-")
'GGT'
"""

from __future__ import annotations
import gzip
from pathlib import Path
from loguru import logger
from synhsp.synteny.scoring import reverse_complement
from synhsp.utils.exceptions import SynhspError, SequenceNotFoundError

REVERSE_STRANDS = ("-", "-1", -1)


def get_headers_to_seqs_dict(genome: Path) -> dict[str, str]:
    """Return dict mapping scaffold names to their sequences.

    Scaffold names are the first word of each header line.
    """
    headers_to_seqs = {}

    # select opener func
    if genome.suffix == ".gz":
        xopen = gzip.open
    else:
        xopen = open

    # read through genome file
    header = None
    with xopen(genome, mode='rt') as file:
        for line in file:
            line = line.strip()
            # skip empty lines
            if not line:
                continue
            # start new scaffold
            if line.startswith(">"):
                header = line[1:].split()[0]
                headers_to_seqs[header] = []
            # append to existing scaffold
            elif header is None:
                raise SynhspError(f"{genome} is not fasta formatted: sequence before first header")
            else:
                headers_to_seqs[header].append(line)
    return {i: "".join(j) for (i, j) in headers_to_seqs.items()}


class GenomeFasta:
    """Sequence retrieval over an in-memory fasta genome."""

    def __init__(self, seqs: dict[str, str], name: str = "genome"):
        self.seqs = seqs
        self.name = name

    @classmethod
    def from_path(cls, path: Path) -> GenomeFasta:
        path = Path(path)
        if not path.is_file():
            raise SynhspError(f"genome fasta not found: {path}")
        seqs = get_headers_to_seqs_dict(path)
        logger.debug(f"loaded {len(seqs)} scaffolds from {path}")
        return cls(seqs, name=path.name)

    @classmethod
    def from_sequences(cls, seqs: dict[str, str], name: str = "genome") -> GenomeFasta:
        return cls(dict(seqs), name=name)

    def fetch_sequence(self, chromosome_id: str, start: int, end: int, strand: str = "+") -> str:
        """Return the sequence of [start, end] on a scaffold and strand."""
        seq = self.seqs.get(chromosome_id)
        if seq is None:
            raise SequenceNotFoundError(f"cannot get seq_region {chromosome_id} from {self.name}")
        if start < 1 or end > len(seq) or start > end:
            raise SequenceNotFoundError(
                f"cannot get seq_region {chromosome_id}:{start}-{end} from {self.name} "
                f"(scaffold length {len(seq)})")
        region = seq[start - 1:end]
        if strand in REVERSE_STRANDS:
            return reverse_complement(region)
        return region
