#!/usr/bin/env python

"""Synteny subpackage: HSP scoring, overlap resolution, and blocks.

$ parse-score -i HSPS -q QFA -t TFA -s1 Q -s2 T -D 15000 > DATA
Re-score each HSP at the amino acid level in the best of six frames;
drop HSPs with score <= 0; remove HSPs overlapping a better HSP on
the same chromosome pair (target-axis sweep, then query-axis sweep);
sort and number the survivors into blocks by distance threshold.

$ frame-score SEQ1 SEQ2 --matrix BLOSUM62
Score a single gapless pair of nucleotide sequences.
"""
