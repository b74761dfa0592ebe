# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage assembles strings from their k-mers.

A :class:`DeBruijnGraph` connects the *(k-1)*-mer prefix of each k-mer
with its *(k-1)*-mer suffix.
An Eulerian path through the graph spells a string with the given
k-mer composition, while its maximal non-branching paths spell the
contigs, that can be assembled unambiguously.
:class:`ReadPairList` and :class:`ReadPairFreq` do the same for paired
reads.
"""

__name__ = "biotrove.sequence.assembly"
__author__ = "The Biotrove contributors"

from .debruijn import *
from .readpair import *
