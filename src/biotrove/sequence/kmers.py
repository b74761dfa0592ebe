# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["Kmers", "DNA8List", "StrList", "StrKmers", "StrFreq"]

from collections import Counter
import numpy as np
from .alphabet import BASE_ORDER, base_index
from .seqtypes import DNA8, Str
from .profile import CountProfile, FracProfile
from .error import BadInputError, NotUniformError


class Kmers(list):
    """
    A list of :class:`DNA8` sequences, that are expected to have the
    same length *k*.

    The profile and consensus methods require a non-empty list of
    uniform length and raise an exception otherwise.
    Use :meth:`uniform()` to test this beforehand.
    """

    def uniform(self):
        """
        Check whether the list is non-empty and all k-mers have the
        same length.
        """
        if len(self) == 0:
            return False
        k = len(self[0])
        return all(len(kmer) == k for kmer in self)

    def _matrix(self):
        if len(self) == 0:
            raise BadInputError("The list of k-mers is empty")
        if not self.uniform():
            raise NotUniformError("The k-mers have different lengths")
        return np.stack([kmer.code for kmer in self])

    def _column_counts(self):
        index = base_index(self._matrix())
        return np.stack(
            [np.count_nonzero(index == b, axis=0) for b in range(4)], axis=-1
        )

    def consensus(self):
        """
        Get the consensus k-mer, i.e. the most frequent base at each
        position, regardless of case.

        Ties are broken in the base order ``ACTG``.

        Returns
        -------
        consensus : DNA8
            The upper case consensus.
        score : int
            The summed count of the consensus bases.

        Examples
        --------

        >>> kmers = Kmers([DNA8("GATTcca"), DNA8("AATTcgg"),
        ...                DNA8("GACTaca"), DNA8("GATAaca"),
        ...                DNA8("GATTaca")])
        >>> consensus, score = kmers.consensus()
        >>> print(consensus, score)
        GATTACA 28
        """
        counts = self._column_counts()
        consensus = "".join(
            BASE_ORDER[i] for i in np.argmax(counts, axis=-1)
        )
        return DNA8(consensus), int(counts.max(axis=-1).sum())

    def consensus_hamming(self):
        """
        Get the number of bases, that differ from the consensus base
        of their position.

        For positions with multiple modal bases only one of them counts
        as conserved.

        Returns
        -------
        score : int
            The summed Hamming distance of all k-mers to the consensus.
        """
        counts = self._column_counts()
        return int((len(self) - counts.max(axis=-1)).sum())

    def entropy_contributions(self):
        """
        Get the contribution of each base at each position to the
        entropy of the k-mers.

        Returns
        -------
        contributions : ndarray, shape=(k,4), dtype=float
            The terms *-p log2(p)* in the base order ``ACTG``.
        """
        p = self.frac_profile().probabilities
        contributions = np.zeros(p.shape)
        nonzero = p > 0
        contributions[nonzero] = -p[nonzero] * np.log2(p[nonzero])
        return contributions

    def entropy(self):
        """
        Get the summed Shannon entropy (in bits) of all positions.
        """
        return float(self.entropy_contributions().sum())

    def count_profile(self):
        """
        Count the bases at each position.

        Returns
        -------
        profile : CountProfile
            The base counts.
        """
        return CountProfile(self._column_counts())

    def frac_profile(self):
        """
        Get the base frequencies at each position.

        Returns
        -------
        profile : FracProfile
            The base frequencies.
        """
        return FracProfile(self._column_counts() / len(self))

    def laplace_profile(self):
        """
        Get the base frequencies at each position with a pseudocount of
        1 for each base (Laplace's rule of succession).

        Returns
        -------
        profile : FracProfile
            The base frequencies, computed as
            *(count + 1) / (n + 4)*, where *n* is the number of k-mers.
        """
        return FracProfile((self._column_counts() + 1) / (len(self) + 4))


class DNA8List(list):
    """
    A list of :class:`DNA8` sequences of possibly varying lengths.

    The motif search methods delegate to the functions in
    :mod:`biotrove.sequence.motif`.
    """

    def max_len(self):
        """
        Get the length of the longest sequence.
        """
        return max((len(seq) for seq in self), default=0)

    def base_freq(self):
        """
        Get the base frequencies over all sequences.

        Returns
        -------
        freq : ndarray, shape=(4,), dtype=float
            The fraction of each base in the order ``ACTG``.
        """
        counts = np.zeros(4, dtype=int)
        for seq in self:
            counts += np.bincount(base_index(seq.code), minlength=4)
        return counts / counts.sum()

    def motif_hamming(self, motif):
        """
        Get the summed :meth:`DNA8.motif_hamming()` distance of a motif
        to the sequences.
        """
        return sum(seq.motif_hamming(motif) for seq in self)

    def median_motifs(self, k):
        from .motif import median_motifs
        return median_motifs(self, k)

    def greedy_motif_search(self, k):
        from .motif import greedy_motif_search
        return greedy_motif_search(self, k)

    def random_kmers(self, k, rng=None):
        from .motif import random_kmers
        return random_kmers(self, k, rng)

    def random_motif_search(self, k, n, rng=None):
        from .motif import random_motif_search
        return random_motif_search(self, k, n, rng)

    def gibbs_motif_search(self, k, n, m, rng=None):
        from .motif import gibbs_motif_search
        return gibbs_motif_search(self, k, n, m, rng)

    def hamming_motifs(self, k, d):
        from .motif import hamming_motifs
        return hamming_motifs(self, k, d)


class StrList(list):
    """
    A list of :class:`Str` objects of possibly varying lengths.
    """

    def distance_matrix(self, function):
        """
        Compute a symmetric distance matrix of the strings.

        Parameters
        ----------
        function : callable
            Takes two strings and returns their distance.

        Returns
        -------
        matrix : DistanceMatrix
            The pairwise distances.
        """
        from .phylo.distances import DistanceMatrix
        matrix = np.zeros((len(self), len(self)))
        for i in range(1, len(self)):
            for j in range(i):
                matrix[i, j] = matrix[j, i] = function(self[i], self[j])
        return DistanceMatrix(matrix)

    def k_composition_dist_mat(self, k):
        """
        Compute a distance matrix of the strings based on
        :meth:`Str.k_composition_dist()` (*k-tuple distance*).
        """
        compositions = [Counter(Str(s).kmer_composition(k)) for s in self]

        def distance(i, j):
            diff = Counter(compositions[i])
            diff.subtract(compositions[j])
            return sum(abs(n) for n in diff.values())

        indices = StrList(range(len(self)))
        return indices.distance_matrix(distance)


class StrKmers(list):
    """
    A list of :class:`Str` objects, that are expected to have the same
    length *k*.
    """

    def de_bruijn(self):
        """
        Build the de Bruijn graph of the k-mers.

        See Also
        --------
        biotrove.sequence.assembly.DeBruijnGraph
        """
        from .assembly.debruijn import DeBruijnGraph
        return DeBruijnGraph.from_kmers(self)

    def overlap_kmers(self, order):
        """
        Reconstruct a sequence from k-mers, that overlap by *k-1*
        symbols in the given order.

        See Also
        --------
        biotrove.sequence.assembly.overlap_kmers
        """
        from .assembly.debruijn import overlap_kmers
        return overlap_kmers(self, order)

    def contigs(self):
        """
        Assemble the k-mers into contigs.

        See Also
        --------
        biotrove.sequence.assembly.contigs
        """
        from .assembly.debruijn import contigs
        return contigs(self)

    def character_table(self):
        """
        Compute the character table of the strings as taxa.

        See Also
        --------
        biotrove.sequence.phylo.character_table
        """
        from .phylo.character import character_table
        return character_table(self)


class StrFreq(Counter):
    """
    A multiset of :class:`Str` objects, mapping each string to its
    number of occurrences.
    """

    def de_bruijn(self):
        """
        Build the de Bruijn graph of the k-mers, where each k-mer adds
        as many arcs as its count.
        """
        from .assembly.debruijn import DeBruijnGraph
        return DeBruijnGraph.from_freq(self)
