# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides string indices for exact pattern search.

:class:`KMP` preprocesses a pattern for the *Knuth-Morris-Pratt*
search in arbitrary texts, while :class:`BWT` preprocesses a text for
the search of arbitrary patterns via its *Burrows-Wheeler transform*.
:class:`SuffixArray` finds the longest common substring of multiple
sequences.
"""

__name__ = "biotrove.sequence.index"
__author__ = "The Biotrove contributors"

from .kmp import *
from .bwt import *
from .suffix import *
