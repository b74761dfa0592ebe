# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for handling biological sequences.

Sequences are succession of byte symbols.
A :class:`Sequence` stores its symbols internally as *NumPy*
:class:`ndarray` of :class:`uint8` values, the *sequence code*.
The concrete subclasses define, which symbols are allowed and which
methods are available:

    - :class:`DNA8`, :class:`RNA8` and :class:`AA20` are strict: They
      only accept the symbols of their alphabet and raise an
      :class:`AlphabetError` otherwise.
      The DNA bases ``ACTG`` (in this order) are encoded by two bits of
      their ASCII code, which makes the base index a cheap bit
      operation.
    - :class:`DNA`, :class:`RNA` and :class:`AA` tolerate any symbol.
    - :class:`Seq` is a sequence of arbitrary symbols and
      :class:`Str` is a hashable :class:`str` subclass, used where
      sequences are dictionary keys.

Lists of sequences (:class:`Kmers`, :class:`DNA8List`,
:class:`StrKmers`, ...) provide functionality that works on multiple
sequences, such as consensus sequences and profiles
(:class:`CountProfile`, :class:`FracProfile`) or motif searches.

The errors raised by this subpackage are found in
:mod:`biotrove.sequence.error`.

Further functionality is located in subpackages:
:mod:`biotrove.sequence.align` for pairwise alignments,
:mod:`biotrove.sequence.mass` for mass spectrometry,
:mod:`biotrove.sequence.phylo` for phylogenetic trees,
:mod:`biotrove.sequence.index` for string indices,
:mod:`biotrove.sequence.assembly` for de Bruijn graph assembly and
:mod:`biotrove.sequence.io` for file formats.
"""

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"

from .error import *
from .alphabet import *
from .codon import *
from .seqtypes import *
from .profile import *
from .kmers import *
from .motif import *
from .restriction import *
