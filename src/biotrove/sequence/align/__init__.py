# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides functionality for pairwise sequence
alignments.

Every aligning function requires a *scorer*, i.e. an object with a
``score(a, b)`` method, that gives the similarity score for two aligned
symbols.
:class:`ScoreMatrix` provides the common amino acid substitution
matrices (*BLOSUM62* and *PAM250*), :class:`MatchScorer` simply
distinguishes matches and mismatches.

The central function :func:`align_pair()` performs optimal alignments
with a linear gap penalty in *global*, *local*, *fitting* and *overlap*
mode.
:func:`align_global_linear_space()` computes global alignments with
linear instead of quadratic memory consumption and
:func:`align_affine()` uses an affine gap penalty.
The aligning functions return an :class:`Alignment`, containing the
score and the two gapped sequences.

:func:`linear_gap()` and :func:`constant_gap()` score existing
alignments.
:func:`align_long()` assembles a sequence from overlapping reads.
"""

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"

from .alignment import *
from .matrix import *
from .pairwise import *
from .linear import *
from .affine import *
from .long import *
