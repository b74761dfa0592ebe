# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading and writing sequences in the
FASTA format.

The :class:`FastaFile` provides a dictionary like interface to FASTA
files, where the header lines are keys and the strings containing
sequence data are the corresponding values.
For large files :class:`FastaReader` streams one :class:`FastaRecord`
at a time.

Furthermore, the package contains convenience functions for
getting/setting directly :class:`Sequence` objects, rather than strings.
"""

__name__ = "biotrove.sequence.io.fasta"
__author__ = "The Biotrove contributors"

from .file import *
from .convert import *
