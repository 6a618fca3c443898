#!/usr/bin/env python

from textwrap import dedent
from pathlib import Path
from argparse import ArgumentParser, RawDescriptionHelpFormatter
from synhsp.utils.make_wide import make_wide

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def get_parser_parse_score(parser: ArgumentParser | None = None) -> ArgumentParser:
    """Return a parser for the parse-score tool.
    """
    KWARGS = dict(
        prog="parse-score",
        usage="parse-score -i HSPS -q FASTA -t FASTA -s1 SPS1 -s2 SPS2 [options]",
        help="re-score aligner HSPs in six frames, remove overlaps, and group synteny blocks",
        formatter_class=make_wide(RawDescriptionHelpFormatter),
        description=dedent("""
            -------------------------------------------------------------------
            | parse-score: write .tsv of non-redundant HSPs numbered by block |
            -------------------------------------------------------------------
            | Each HSP line from a translated aligner (e.g., BLAT) is re-     |
            | scored at the amino acid level in the best of six reading       |
            | frames, using sequences fetched from the query and target       |
            | genome fasta files. HSPs with a score <= 0 are dropped. HSPs    |
            | that overlap a better scoring HSP on the same chromosome pair   |
            | are removed in two sweeps (target axis, then query axis). The   |
            | survivors are sorted and numbered into blocks of HSPs within    |
            | a distance threshold (-D) of each other on both axes.           |
            -------------------------------------------------------------------
        """),
        epilog=dedent("""
            Examples
            --------
            # write blocks sorted for display on the target genome
            $ parse-score -i Fr2_Hs.hsps -q Fr2.fa -t Hs.fa -s1 Fr2 -s2 Hs > Fr2_Hs.data

            # score with a substitution matrix and sort for the query genome
            $ parse-score -i Fr2_Hs.hsps.gz -q Fr2.fa -t Hs.fa -s1 Fr2 -s2 Hs -m BLOSUM62 --query-first -o Fr2_Hs.data

            # also write a display track and codon mismatch stats
            $ parse-score -i Fr2_Hs.hsps -q Fr2.fa -t Hs.fa -s1 Fr2 -s2 Hs --track Fr2_Hs.gff --stats Fr2_Hs.t3 > Fr2_Hs.data
        """)
    )

    # create parser or connect as subparser to cli parser
    if parser:
        KWARGS['name'] = KWARGS.pop("prog")
        parser = parser.add_parser(**KWARGS)
    else:
        KWARGS.pop("help")
        parser = ArgumentParser(**KWARGS)

    # path args
    parser.add_argument("-i", "--input", type=Path, metavar="path", required=True, help="tab-separated HSP lines (gzip OK, '-' for stdin)")
    parser.add_argument("-q", "--query-genome", type=Path, metavar="path", required=True, help="query genome fasta (gzip OK)")
    parser.add_argument("-t", "--target-genome", type=Path, metavar="path", required=True, help="target genome fasta (gzip OK)")
    parser.add_argument("-s1", "--species1", type=str, metavar="str", required=True, help="query species label used in region specs (binomials are abbreviated, e.g., 'Homo sapiens' -> Hs)")
    parser.add_argument("-s2", "--species2", type=str, metavar="str", required=True, help="target species label used in region specs")
    parser.add_argument("-o", "--out", type=Path, metavar="path", default=None, help="write data table to this path instead of stdout")
    parser.add_argument("-m", "--matrix", type=Path, metavar="path", default=None, help="substitution matrix file (e.g., BLOSUM62); default scores match=2 mismatch=-1")

    # options
    parser.add_argument("-D", "--distance", type=int, metavar="int", default=15000, help="max gap (bp) on both axes between HSPs in a block [%(default)s]")
    order_options = parser.add_mutually_exclusive_group()
    order_options.add_argument("--target-first", action="store_true", help="sort output by target then query chromosome (default)")
    order_options.add_argument("-R", "--query-first", "--reverse-output", dest="query_first", action="store_true", help="sort output by query then target chromosome")
    parser.add_argument("--min-length", type=int, metavar="int", default=15, help="min query span (end - start) of an HSP line [%(default)s]")
    parser.add_argument("--tolerance", type=int, metavar="int", default=6, help="max bp an overlapping same-strand HSP may extend and still be redundant [%(default)s]")
    parser.add_argument("--extension-axis", type=str, choices=["secondary", "primary"], default="secondary", help="axis on which extension is measured during an overlap sweep [%(default)s]")
    parser.add_argument("--track", type=Path, metavar="path", default=None, help="optional: write a GFF-like display track")
    parser.add_argument("--stats", type=Path, metavar="path", default=None, help="optional: write codon-position mismatch stats table")
    parser.add_argument("--log-level", choices=LOG_LEVELS, metavar="level", default="INFO", help="stderr logging level (DEBUG, INFO, WARNING, ERROR; default=INFO)")
    return parser


def get_parser_frame_score(parser: ArgumentParser | None = None) -> ArgumentParser:
    """Return a parser for the frame-score tool.
    """
    KWARGS = dict(
        prog="frame-score",
        usage="frame-score SEQ1 SEQ2 [options]",
        help="score two gapless nucleotide sequences in the best of six frames",
        formatter_class=make_wide(RawDescriptionHelpFormatter),
        description=dedent("""
            -------------------------------------------------------------------
            | frame-score: best six-frame amino acid score of two sequences   |
            -------------------------------------------------------------------
            | Writes the score, number of identical amino acids, and frame    |
            | index (0-2 forward, 3-5 reverse complement) followed by the     |
            | two peptides of that frame.                                     |
            -------------------------------------------------------------------
        """),
        epilog=dedent("""
            Examples
            --------
            $ frame-score ATGAAACCC ATGAAGCCA
            $ frame-score ATGAAACCC ATGAAGCCA -m BLOSUM62
        """)
    )

    # create parser or connect as subparser to cli parser
    if parser:
        KWARGS['name'] = KWARGS.pop("prog")
        parser = parser.add_parser(**KWARGS)
    else:
        KWARGS.pop("help")
        parser = ArgumentParser(**KWARGS)

    parser.add_argument("seq1", type=str, help="first nucleotide sequence")
    parser.add_argument("seq2", type=str, help="second nucleotide sequence, aligned to the first without gaps")
    parser.add_argument("-m", "--matrix", type=Path, metavar="path", default=None, help="substitution matrix file (e.g., BLOSUM62)")
    parser.add_argument("--log-level", choices=LOG_LEVELS, metavar="level", default="WARNING", help="stderr logging level (DEBUG, INFO, WARNING, ERROR; default=WARNING)")
    return parser
