# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.mass"
__author__ = "The Biotrove contributors"
__all__ = ["INTEGER_MASSES", "MONOISOTOPIC_MASSES", "AA18_INT",
           "AA18_INT_MAX", "AA20_LIGHTEST", "AA20_HEAVIEST",
           "WATER_MASS_AVERAGE", "WATER_MASS_MONOISOTOPIC", "PROTON_MASS",
           "integer_mass", "monoisotopic_mass", "aa_from_integer_mass",
           "aa20_nearest_mass", "peptide_weight",
           "num_sub_pep_linear", "num_sub_pep_cyclic"]

import bisect
import math
from types import MappingProxyType


# Nominal masses of the amino acid residues in Dalton
INTEGER_MASSES = MappingProxyType({
    "A":  71, "C": 103, "D": 115, "E": 129, "F": 147,
    "G":  57, "H": 137, "I": 113, "K": 128, "L": 113,
    "M": 131, "N": 114, "P":  97, "Q": 128, "R": 156,
    "S":  87, "T": 101, "V":  99, "W": 186, "Y": 163,
})

MONOISOTOPIC_MASSES = MappingProxyType({
    "A":  71.03711, "C": 103.00919, "D": 115.02694, "E": 129.04259,
    "F": 147.06841, "G":  57.02146, "H": 137.05891, "I": 113.08406,
    "K": 128.09496, "L": 113.08406, "M": 131.04049, "N": 114.04293,
    "P":  97.05276, "Q": 128.05858, "R": 156.10111, "S":  87.03203,
    "T": 101.04768, "V":  99.06841, "W": 186.07931, "Y": 163.06333,
})

# The 18 distinct integer masses (I/L and K/Q are indistinguishable)
AA18_INT = tuple(sorted(set(INTEGER_MASSES.values())))
AA18_INT_MAX = AA18_INT[-1]

AA20_LIGHTEST = "G"
AA20_HEAVIEST = "W"

# Sum of the constituent average and monoisotopic atomic masses
WATER_MASS_AVERAGE = 18.01528
WATER_MASS_MONOISOTOPIC = 18.01056

PROTON_MASS = 1.007

# Integer mass -> amino acid, the alphabetically first amino acid wins
_AA_FROM_INT = MappingProxyType({
    mass: aa for aa, mass in sorted(INTEGER_MASSES.items(), reverse=True)
})

# Amino acids sorted by monoisotopic mass, for nearest mass search
_BY_MASS = sorted(MONOISOTOPIC_MASSES.items(), key=lambda item: item[1])
_SORTED_MASSES = [mass for _, mass in _BY_MASS]


def integer_mass(aa):
    """
    Get the nominal mass of an amino acid residue.

    Parameters
    ----------
    aa : str
        One of the 20 standard one-letter amino acid symbols.

    Returns
    -------
    mass : int
        The integer mass.

    Raises
    ------
    KeyError
        If the symbol is no standard amino acid.
    """
    return INTEGER_MASSES[aa]


def monoisotopic_mass(aa):
    """
    Get the monoisotopic mass of an amino acid residue.

    Parameters
    ----------
    aa : str
        One of the 20 standard one-letter amino acid symbols.

    Returns
    -------
    mass : float
        The monoisotopic mass.
    """
    return MONOISOTOPIC_MASSES[aa]


def aa_from_integer_mass(mass):
    """
    Get an amino acid with the given integer mass.

    For the ambiguous masses 113 and 128 ``'I'`` and ``'K'`` are
    returned.

    Parameters
    ----------
    mass : int
        The integer mass.

    Returns
    -------
    aa : str or None
        The amino acid or None, if no amino acid has this mass.
    """
    return _AA_FROM_INT.get(int(mass))


def aa20_nearest_mass(mass):
    """
    Find the amino acid whose monoisotopic mass is closest to the given
    mass.

    Parameters
    ----------
    mass : float
        The mass to look up.

    Returns
    -------
    aa : str
        The amino acid with the nearest mass.
        If two amino acids are equally near, the heavier one is chosen.
    distance : float
        The absolute mass difference.

    Examples
    --------

    >>> aa, distance = aa20_nearest_mass(57.1)
    >>> print(aa, round(distance, 5))
    G 0.07854
    """
    i = bisect.bisect_left(_SORTED_MASSES, mass)
    if i == len(_SORTED_MASSES):
        i -= 1
    elif i > 0:
        if mass - _SORTED_MASSES[i-1] < _SORTED_MASSES[i] - mass:
            i -= 1
    aa, aa_mass = _BY_MASS[i]
    return aa, abs(mass - aa_mass)


def peptide_weight(peptide):
    """
    Get the monoisotopic mass of a peptide, including the water of the
    terminal groups.

    Parameters
    ----------
    peptide : str
        The peptide in one-letter code.

    Returns
    -------
    weight : float
        The mass in Dalton.
    """
    return math.fsum(
        [WATER_MASS_MONOISOTOPIC]
        + [MONOISOTOPIC_MASSES[aa] for aa in peptide]
    )


def num_sub_pep_linear(length):
    """
    Get the number of subpeptides of a linear peptide, including the
    empty and the full peptide.
    """
    return length * (length + 1) // 2 + 1


def num_sub_pep_cyclic(length):
    """
    Get the number of proper, non-empty subpeptides of a cyclic peptide.
    """
    return length * (length - 1)
