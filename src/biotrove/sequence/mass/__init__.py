# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides functionality for peptide sequencing by mass
spectrometry.

Peptides are represented by the masses of their amino acids, either as
integer (nominal) masses (:class:`AAInt`) or as monoisotopic masses
(:class:`AAMass`).
Their theoretical spectra (:class:`IntSpec`, :class:`MassSpec`) contain
the masses of all linear or cyclic subpeptides.

Cyclic peptides are sequenced from ideal spectra by
:func:`seq_cyclic_theo()` and from noisy experimental spectra by
leaderboard searches (:func:`leaderboard_int()`,
:func:`leaderboard_mass()`), optionally with an amino acid alphabet
derived from the spectral convolution.
"""

__name__ = "biotrove.sequence.mass"
__author__ = "The Biotrove contributors"

from .tables import *
from .spectrum import *
from .leaderboard import *
from .convolution import *
