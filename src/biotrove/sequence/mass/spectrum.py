# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.mass"
__author__ = "The Biotrove contributors"
__all__ = ["AAInt", "AAMass", "IntSpec", "MassSpec", "MassCounts",
           "quantize"]

from collections import Counter
import numpy as np
from ...copyable import Copyable
from .tables import (INTEGER_MASSES, MONOISOTOPIC_MASSES, AA18_INT,
                     aa_from_integer_mass)
from ..error import BadInputError


def _linear_sums(masses):
    """
    Masses of all contiguous subpeptides, including the empty one.
    """
    prefix = np.concatenate(([0], np.cumsum(masses)))
    start, stop = np.triu_indices(len(prefix), k=1)
    return np.sort(np.concatenate(([0], prefix[stop] - prefix[start])))


def _cyclic_sums(masses):
    """
    Masses of all contiguous subpeptides of a cyclic peptide, including
    the empty and the full one.
    """
    n = len(masses)
    if n == 0:
        return np.zeros(1, dtype=np.asarray(masses).dtype)
    doubled = np.concatenate((masses, masses))
    prefix = np.concatenate(([0], np.cumsum(doubled)))
    start = np.repeat(np.arange(n), n - 1)
    length = np.tile(np.arange(1, n), n)
    sums = prefix[start + length] - prefix[start]
    return np.sort(np.concatenate(([0], sums, [prefix[n]])))


class AAInt(tuple):
    """
    A peptide represented by the integer masses of its amino acids.

    Examples
    --------

    >>> peptide = AAInt.from_peptide("NQEL")
    >>> print(peptide)
    114-128-129-113
    >>> print(list(peptide.linear_spec()))
    [0, 113, 114, 128, 129, 242, 242, 257, 370, 371, 484]
    """

    @staticmethod
    def from_peptide(peptide):
        """
        Create an :class:`AAInt` from a peptide in one-letter code.
        """
        return AAInt(INTEGER_MASSES[aa] for aa in str(peptide))

    def __str__(self):
        return "-".join(str(m) for m in self)

    def __repr__(self):
        return f"AAInt({list(self)!r})"

    def __add__(self, other):
        return AAInt(tuple(self) + tuple(other))

    def mass(self):
        """
        Get the total mass of the peptide.
        """
        return sum(self)

    def prefix_spec(self):
        """
        Get the masses of all non-empty prefixes.

        Returns
        -------
        spectrum : IntSpec
            The prefix masses, the last one is the peptide mass.
        """
        return IntSpec(np.cumsum(np.array(self, dtype=np.int64)))

    def ideal_spec(self):
        """
        Get the ideal fragmentation spectrum, i.e. the masses of all
        prefixes and suffixes including the empty and the full peptide.
        """
        masses = np.array(self, dtype=np.int64)
        prefix = np.concatenate(([0], np.cumsum(masses)))
        total = prefix[-1]
        return IntSpec(np.concatenate((prefix[:-1], total - prefix[:-1])))

    def linear_spec(self):
        """
        Get the theoretical spectrum of the linear peptide.

        Returns
        -------
        spectrum : IntSpec
            The sorted masses of all contiguous subpeptides, including
            0 and the peptide mass.
        """
        return IntSpec(_linear_sums(np.array(self, dtype=np.int64)))

    def cyclic_spec(self):
        """
        Get the theoretical spectrum of the cyclic peptide.

        Returns
        -------
        spectrum : IntSpec
            The sorted masses of all contiguous subpeptides of the
            cycle, including 0 and the peptide mass.
        """
        return IntSpec(_cyclic_sums(np.array(self, dtype=np.int64)))

    def to_aa20(self):
        """
        Convert the masses into amino acids.

        For the ambiguous masses 113 and 128 ``'I'`` and ``'K'`` are
        chosen.

        Returns
        -------
        peptide : str
            The peptide in one-letter code, masses without a
            corresponding amino acid give ``'-'``.
        ok : bool
            False, if any mass has no corresponding amino acid.
        """
        symbols = [aa_from_integer_mass(m) for m in self]
        ok = all(aa is not None for aa in symbols)
        return "".join(aa if aa is not None else "-" for aa in symbols), ok

    def cyclic_common_counts(self, counts):
        """
        Score the cyclic peptide against an experimental spectrum.

        Parameters
        ----------
        counts : MassCounts
            The experimental spectrum as multiset.

        Returns
        -------
        score : int
            The size of the multiset intersection of the theoretical
            and the experimental spectrum.
        """
        return self.cyclic_spec().counts().intersection_cardinality(counts)

    def linear_common_counts(self, counts):
        """
        Score the linear peptide against an experimental spectrum.
        """
        return self.linear_spec().counts().intersection_cardinality(counts)


class AAMass(tuple):
    """
    A peptide represented by the monoisotopic masses of its amino acids.
    """

    @staticmethod
    def from_peptide(peptide):
        """
        Create an :class:`AAMass` from a peptide in one-letter code.
        """
        return AAMass(MONOISOTOPIC_MASSES[aa] for aa in str(peptide))

    def __repr__(self):
        return f"AAMass({list(self)!r})"

    def __add__(self, other):
        return AAMass(tuple(self) + tuple(other))

    def mass(self):
        return float(sum(self))

    def linear_spec(self):
        """
        Get the theoretical spectrum of the linear peptide.
        """
        return MassSpec(_linear_sums(np.array(self, dtype=float)))

    def cyclic_spec(self):
        """
        Get the theoretical spectrum of the cyclic peptide.
        """
        return MassSpec(_cyclic_sums(np.array(self, dtype=float)))


class MassCounts(Counter):
    """
    A multiset of integer masses, mapping each mass to its number of
    occurrences.
    """

    def intersection_cardinality(self, other):
        """
        Get the size of the multiset intersection with another multiset.
        """
        return sum((self & other).values())

    def is_subset(self, other):
        """
        Check whether each mass occurs at most as often as in the other
        multiset.
        """
        return all(other[mass] >= n for mass, n in self.items())

    def cut_aa(self, cut):
        """
        Get the most frequent masses in the range of amino acid masses.

        Parameters
        ----------
        cut : int
            The number of masses to keep.
            Masses with the same count as the last kept mass are kept
            as well.

        Returns
        -------
        alphabet : AAInt
            The masses in the range *57 <= m <= 200*, sorted by
            decreasing count.
        """
        from .leaderboard import cut as cut_items
        candidates = sorted(
            (mass, n) for mass, n in self.items() if 57 <= mass <= 200
        )
        kept = cut_items(candidates, cut, key=lambda item: item[1])
        return AAInt(mass for mass, _ in kept)


class _Spectrum(Copyable):

    _dtype = None

    def __init__(self, masses=()):
        self._masses = np.sort(np.asarray(masses, dtype=self._dtype))
        if self._masses.ndim != 1:
            raise BadInputError("A spectrum must be one-dimensional")

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._masses = self._masses.copy()

    @property
    def masses(self):
        return self._masses

    def __len__(self):
        return len(self._masses)

    def __iter__(self):
        return iter(self._masses.tolist())

    def __getitem__(self, index):
        return self._masses[index]

    def __eq__(self, item):
        if not isinstance(item, type(self)):
            return False
        return np.array_equal(self._masses, item._masses)

    def __str__(self):
        return str(self._masses)

    def __repr__(self):
        return f"{type(self).__name__}(np.{np.array_repr(self._masses)})"

    def parent_mass(self):
        """
        Get the parent mass, i.e. the largest mass of the spectrum.
        """
        if len(self._masses) == 0:
            raise BadInputError("The spectrum is empty")
        return self._masses[-1].item()


class IntSpec(_Spectrum):
    """
    A sorted spectrum of integer masses.

    Parameters
    ----------
    masses : array-like of int
        The masses, they are sorted on construction.
    """

    _dtype = np.int64

    def counts(self):
        """
        Get the spectrum as multiset.

        Returns
        -------
        counts : MassCounts
            The number of occurrences of each mass.
        """
        return MassCounts(self._masses.tolist())

    def convolve(self):
        """
        Get the spectral convolution, i.e. the multiset of all positive
        pairwise differences of the masses.

        Returns
        -------
        counts : MassCounts
            The differences and their multiplicities.
        """
        diff = np.subtract.outer(self._masses, self._masses)
        return MassCounts(diff[diff > 0].tolist())

    def leaderboard(self, n, nr, alphabet=AA18_INT):
        """
        Sequence a cyclic peptide from an experimental spectrum by a
        leaderboard search.

        See Also
        --------
        biotrove.sequence.mass.leaderboard_int
        """
        from .leaderboard import leaderboard_int
        return leaderboard_int(self, n, nr, alphabet)

    def seq_cyclic_18_exp(self, n):
        """
        Sequence a cyclic peptide from an experimental spectrum by a
        leaderboard search over the 18 amino acid masses, keeping the
        best peptides only.
        """
        return self.leaderboard(n, 1, AA18_INT)

    def seq_cyclic_exp(self, alphabet_len, n, nr):
        """
        Sequence a cyclic peptide from an experimental spectrum by a
        leaderboard search over the amino acid masses suggested by the
        spectral convolution.

        Parameters
        ----------
        alphabet_len : int
            The number of most frequent convolution masses, that are
            used as alphabet (plus ties).
        n : int
            The leaderboard size.
        nr : int
            The number of results (plus ties).

        Returns
        -------
        peptides : list of AAInt
            The best scoring peptides.
        """
        alphabet = self.convolve().cut_aa(alphabet_len)
        return self.leaderboard(n, nr, alphabet)

    def seq_cyclic_theo(self):
        """
        Find all cyclic peptides, whose theoretical spectrum is exactly
        this spectrum, by a branch and bound search.

        See Also
        --------
        biotrove.sequence.mass.seq_cyclic_theo
        """
        from .leaderboard import seq_cyclic_theo
        return seq_cyclic_theo(self)


class MassSpec(_Spectrum):
    """
    A sorted spectrum of (monoisotopic) masses.

    Parameters
    ----------
    masses : array-like of float
        The masses, they are sorted on construction.
    """

    _dtype = float

    def nearest(self, mass):
        """
        Find the mass of the spectrum nearest to the given mass.

        Returns
        -------
        index : int
            The index of the nearest mass.
            If two masses are equally near, the larger one is chosen.
        distance : float
            The absolute difference.
        """
        if len(self._masses) == 0:
            raise BadInputError("The spectrum is empty")
        i = int(np.searchsorted(self._masses, mass, side="left"))
        if i == len(self._masses):
            i -= 1
        elif i > 0:
            if mass - self._masses[i-1] < self._masses[i] - mass:
                i -= 1
        return i, abs(mass - float(self._masses[i]))

    def score(self, theoretical, tolerance=0.3):
        """
        Count the masses of a theoretical spectrum, that are found in
        this spectrum within a tolerance.

        Repeated theoretical masses count as often as they occur.

        Parameters
        ----------
        theoretical : MassSpec
            The theoretical spectrum.
        tolerance : float, optional
            The maximum mass difference of a match.

        Returns
        -------
        score : int
            The number of matching theoretical masses.
        """
        count = 0
        last_mass = None
        last_match = False
        for mass in theoretical:
            if mass != last_mass:
                _, distance = self.nearest(mass)
                last_mass = mass
                last_match = distance <= tolerance
            if last_match:
                count += 1
        return count

    def leaderboard(self, n, nr, tolerance=0.3):
        """
        Sequence a cyclic peptide from a monoisotopic spectrum by a
        leaderboard search over the 20 amino acids.

        See Also
        --------
        biotrove.sequence.mass.leaderboard_mass
        """
        from .leaderboard import leaderboard_mass
        return leaderboard_mass(self, n, nr, tolerance)

    def seq_cyclic_20(self, n):
        """
        Sequence a cyclic peptide, keeping the best peptides only.

        Returns
        -------
        peptides : list of str
            The best scoring peptides in one-letter code.
        """
        return self.leaderboard(n, 1)


def quantize(spectrum, scale):
    """
    Convert masses into integers by scaling and rounding.

    Parameters
    ----------
    spectrum : array-like of float
        The masses.
    scale : float
        The factor the masses are multiplied with before rounding.

    Returns
    -------
    quantized : ndarray, dtype=int64
        The rounded, scaled masses.

    Examples
    --------

    >>> print(quantize([57.02146, 71.03711], 10))
    [570 710]
    """
    spectrum = np.asarray(spectrum, dtype=float)
    return np.floor(spectrum * scale + 0.5).astype(np.int64)
