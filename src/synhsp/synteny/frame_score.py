#!/usr/bin/env python

"""Score one pair of gapless nucleotide sequences in six frames.

Example
-------
$ synhsp frame-score ATGAAACCC ATGAAGCCA
score=6 identity=3 frame=0
MKP
MKP
"""

import sys
from loguru import logger
from synhsp.synteny.scoring import load_substitution_matrix, score_all_frames, frame_peptides
from synhsp.utils.logger_setup import set_log_level


def run_frame_score(args):
    """Write the best frame score and its peptides to stdout."""
    set_log_level(args.log_level)
    seq1 = args.seq1.strip()
    seq2 = args.seq2.strip()
    if len(seq1) != len(seq2):
        logger.warning(f"sequence lengths differ ({len(seq1)} != {len(seq2)}); peptides are truncated to the shorter")
    matrix = load_substitution_matrix(args.matrix) if args.matrix else None
    best = score_all_frames(seq1, seq2, matrix)
    pep1, pep2 = frame_peptides(seq1, seq2, best.frame)
    sys.stdout.write(f"score={best.score} identity={best.identity} frame={best.frame}\n{pep1}\n{pep2}\n")


def main():
    from synhsp.cli.subcommands import get_parser_frame_score
    parser = get_parser_frame_score()
    args = parser.parse_args()
    run_frame_score(args)


if __name__ == "__main__":
    main()
