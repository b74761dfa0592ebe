# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["CountProfile", "FracProfile", "dna_consensus"]

import numpy as np
from ..copyable import Copyable
from .alphabet import BASE_ORDER, CASE_BIT, base_index
from .seqtypes import DNA
from .error import BadInputError


# Lower case DNA bases, as bytes
_LOWER_BASES = np.frombuffer(b"acgt", dtype=np.uint8)


class CountProfile(Copyable):
    """
    A profile of base counts for each position of a set of aligned
    DNA sequences.

    The counts are stored in a *(k x 4)* :class:`ndarray`, where *k* is
    the profile length and the columns are the bases in the order
    ``ACTG``.

    Parameters
    ----------
    counts : ndarray, shape=(k,4), dtype=int or int
        Either the initial counts or the profile length *k* for a
        profile of zeros.
    """

    def __init__(self, counts=0):
        if isinstance(counts, (int, np.integer)):
            self._counts = np.zeros((counts, 4), dtype=int)
        else:
            counts = np.asarray(counts, dtype=int)
            if counts.ndim != 2 or counts.shape[1] != 4:
                raise BadInputError(
                    f"Expected a (k x 4) count matrix, "
                    f"got shape {counts.shape}"
                )
            self._counts = counts.copy()

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._counts = self._counts.copy()

    @property
    def counts(self):
        return self._counts

    def __len__(self):
        return len(self._counts)

    def __repr__(self):
        return f"CountProfile(np.{np.array_repr(self._counts)})"

    def add(self, sequence):
        """
        Add the bases of a DNA sequence to the profile.

        The method is case insensitive.
        Symbols that are no DNA bases are ignored, as are symbols beyond
        the profile length.

        Parameters
        ----------
        sequence : DNA or DNA8
            The sequence to add.
        """
        code = sequence.code[:len(self)]
        lower = code | CASE_BIT
        positions = np.flatnonzero(np.isin(lower, _LOWER_BASES))
        np.add.at(self._counts, (positions, base_index(lower[positions])), 1)

    def consensus(self):
        """
        Get the consensus sequence, i.e. the most frequent base at each
        position.

        Ties are broken in the base order ``ACTG``.
        Positions without any count give a ``'-'``.

        Returns
        -------
        consensus : DNA
            The upper case consensus sequence.
        count : int
            The summed count of the consensus bases.
        """
        symbols = []
        count = 0
        for column in self._counts:
            if column.max() > 0:
                symbols.append(BASE_ORDER[int(np.argmax(column))])
                count += int(column.max())
            else:
                symbols.append("-")
        return DNA("".join(symbols)), count


class FracProfile(Copyable):
    """
    A profile of base probabilities for each position of a motif.

    The probabilities are stored in a *(k x 4)* :class:`ndarray`, where
    *k* is the profile length and the columns are the bases in the order
    ``ACTG``.
    Each row sums up to 1.

    Usually a :class:`FracProfile` is created from a list of k-mers via
    :meth:`Kmers.frac_profile()` or :meth:`Kmers.laplace_profile()`.

    Parameters
    ----------
    probabilities : ndarray, shape=(k,4), dtype=float
        The base probabilities.
    """

    def __init__(self, probabilities=np.zeros((0, 4))):
        probabilities = np.asarray(probabilities, dtype=float)
        if probabilities.ndim != 2 or probabilities.shape[1] != 4:
            raise BadInputError(
                f"Expected a (k x 4) probability matrix, "
                f"got shape {probabilities.shape}"
            )
        self._probs = probabilities.copy()

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._probs = self._probs.copy()

    @property
    def probabilities(self):
        return self._probs

    def __len__(self):
        return len(self._probs)

    def __repr__(self):
        return f"FracProfile(np.{np.array_repr(self._probs)})"

    def entropy(self):
        """
        Get the summed Shannon entropy (in bits) of all positions.
        """
        p = self._probs[self._probs > 0]
        return float(-np.sum(p * np.log2(p)))

    def cross_entropy(self, log2_background):
        """
        Get the cross entropy of the profile with a background
        distribution.

        Parameters
        ----------
        log2_background : array-like, length=4
            The binary logarithm of the background base frequencies in
            the order ``ACTG``.

        Returns
        -------
        cross_entropy : float
            The cross entropy in bits.
        """
        log2_background = np.asarray(log2_background, dtype=float)
        rows, cols = np.nonzero(self._probs > 0)
        return float(
            -np.sum(self._probs[rows, cols] * log2_background[cols])
        )

    def relative_entropy(self, background):
        """
        Get the relative entropy (Kullback-Leibler divergence) of the
        profile to a background distribution.

        Parameters
        ----------
        background : array-like, length=4
            The background base frequencies in the order ``ACTG``.

        Returns
        -------
        relative_entropy : float
            The relative entropy in bits.
        """
        background = np.asarray(background, dtype=float)
        rows, cols = np.nonzero(self._probs > 0)
        p = self._probs[rows, cols]
        return float(np.sum(p * np.log2(p / background[cols])))

    def kmer_probability(self, kmer):
        """
        Get the probability of a k-mer under this profile.

        Parameters
        ----------
        kmer : DNA8
            A k-mer with the length of the profile.

        Returns
        -------
        probability : float
            The product of the probabilities of each base.
        """
        index = base_index(kmer.code)
        return float(np.prod(self._probs[np.arange(len(self)), index]))

    def most_prob_kmer(self, sequence):
        """
        Find the k-mer of a sequence with the highest probability under
        this profile.

        Parameters
        ----------
        sequence : DNA8
            The sequence to search.

        Returns
        -------
        kmer : DNA8 or None
            The most probable k-mer.
            For equally probable k-mers the first one is returned.
            None, if the sequence is shorter than the profile.
        """
        k = len(self)
        if len(sequence) < k:
            return None
        i = int(np.argmax(self.kmer_probabilities(sequence)))
        return sequence[i : i+k]

    def kmer_probabilities(self, sequence):
        """
        Get the probability of each k-mer of a sequence under this
        profile.

        Parameters
        ----------
        sequence : DNA8
            The sequence.

        Returns
        -------
        probabilities : ndarray, dtype=float
            The probability of the k-mer starting at each position.
            Empty, if the sequence is shorter than the profile.
        """
        k = len(self)
        if len(sequence) < k:
            return np.zeros(0)
        windows = np.lib.stride_tricks.sliding_window_view(
            base_index(sequence.code), k
        )
        return np.prod(self._probs[np.arange(k), windows], axis=1)

    def most_prob_kmers(self, sequences):
        """
        Apply :meth:`most_prob_kmer()` to each of the given sequences.

        Returns
        -------
        kmers : Kmers
            The most probable k-mer of each sequence.
        """
        from .kmers import Kmers
        return Kmers(self.most_prob_kmer(seq) for seq in sequences)


def dna_consensus(sequences):
    """
    Get the consensus of multiple DNA sequences.

    The consensus has the length of the first sequence, excess symbols
    of longer sequences are ignored.
    The function is case insensitive and ignores symbols that are no
    DNA bases.

    Parameters
    ----------
    sequences : iterable object of DNA
        The sequences.

    Returns
    -------
    consensus : DNA
        The upper case consensus sequence.
        Positions where no sequence has a DNA base give ``'-'``.
    score : int
        The summed count of the consensus bases.
    """
    sequences = list(sequences)
    if len(sequences) == 0:
        return DNA(), 0
    profile = CountProfile(len(sequences[0]))
    for seq in sequences:
        profile.add(seq)
    return profile.consensus()
