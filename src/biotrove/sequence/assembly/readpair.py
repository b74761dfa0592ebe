# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Assembly from paired reads, i.e. k-mers that are separated by a known
number of symbols.
"""

__name__ = "biotrove.sequence.assembly"
__author__ = "The Biotrove contributors"
__all__ = ["ReadPair", "ReadPairList", "ReadPairFreq"]

from collections import Counter, namedtuple
from .debruijn import DeBruijnGraph
from ..error import BadInputError, NotUniformError, NoSolutionError


ReadPair = namedtuple("ReadPair", ["first", "second"])
ReadPair.__doc__ = """
A pair of k-mers, where `second` follows `first` after a gap.
"""


def _check_pairs(pairs):
    k = len(pairs[0].first)
    for pair in pairs:
        if len(pair.first) != k or len(pair.second) != k:
            raise NotUniformError("The read pairs have different lengths")
    return k


def _pair_de_bruijn(d, weighted_pairs):
    """
    Build the paired de Bruijn graph from ``(pair, count)`` tuples.

    Returns the graph, whose node labels are the pairs of
    *(k-1)*-mers, that are separated by *d+1* symbols.
    """
    de_bruijn = DeBruijnGraph()
    for pair, count in weighted_pairs:
        de_bruijn._add_arc(
            ReadPair(pair.first[:-1], pair.second[:-1]),
            ReadPair(pair.first[1:], pair.second[1:]),
            count
        )
    return de_bruijn


def _contigs(de_bruijn, d):
    jpairs = ReadPairList(d + 1, de_bruijn.jmers)
    return [
        jpairs.overlap_seq(path)
        for path in de_bruijn.maximal_non_branching_paths()
    ]


class ReadPairList:
    """
    An ordered list of read pairs with a common gap size.

    Parameters
    ----------
    d : int
        The number of symbols between the two k-mers of each pair.
    pairs : iterable object of ReadPair, optional
        The read pairs.

    Attributes
    ----------
    d : int
        The gap size.
    pairs : list of ReadPair
        The read pairs.

    Examples
    --------

    >>> pairs = ReadPairList.from_string("AGCTTACGGA", 3, 1)
    >>> for pair in pairs:
    ...     print(pair.first, pair.second)
    AGC TAC
    GCT ACG
    CTT CGG
    TTA GGA
    >>> print(pairs.contigs())
    ['AGCTTACGGA']
    """

    def __init__(self, d, pairs=()):
        self.d = d
        self.pairs = [ReadPair(*pair) for pair in pairs]

    @staticmethod
    def from_string(string, k, d):
        """
        Get all read pairs of a string.

        Parameters
        ----------
        string : str
            The string.
        k : int
            The length of each read.
        d : int
            The number of symbols between the two reads of a pair.

        Returns
        -------
        pairs : ReadPairList
            The read pairs in the order of their position.
        """
        from ..seqtypes import Str
        return ReadPairList(d, [
            ReadPair(Str(string[i : i+k]), Str(string[i+k+d : i+2*k+d]))
            for i in range(len(string) - 2*k - d + 1)
        ])

    def __len__(self):
        return len(self.pairs)

    def __iter__(self):
        return iter(self.pairs)

    def __getitem__(self, index):
        return self.pairs[index]

    def __eq__(self, item):
        if not isinstance(item, ReadPairList):
            return False
        return self.d == item.d and self.pairs == item.pairs

    def __repr__(self):
        return f"ReadPairList({self.d}, {self.pairs!r})"

    def read_break(self, k):
        """
        Break each read pair into all pairs of shorter reads.

        Parameters
        ----------
        k : int
            The length of the shorter reads.

        Returns
        -------
        freq : ReadPairFreq
            The shorter read pairs with their counts.
            The gap grows by the difference of the read lengths.

        Raises
        ------
        BadInputError
            If the list is empty or `k` exceeds the read length.

        Examples
        --------

        >>> pairs = ReadPairList(2, [("ABCD", "GHIJ"), ("CDEF", "IJKL")])
        >>> freq = pairs.read_break(2)
        >>> print(freq.d)
        4
        >>> for pair, count in sorted(freq.freq.items()):
        ...     print(pair.first, pair.second, count)
        AB GH 1
        BC HI 1
        CD IJ 2
        DE JK 1
        EF KL 1
        """
        if len(self.pairs) == 0:
            raise BadInputError("The read pair list is empty")
        read_len = len(self.pairs[0].first)
        if k > read_len:
            raise BadInputError(
                f"Cannot break reads of length {read_len} into length {k}"
            )
        freq = Counter()
        for pair in self.pairs:
            for i in range(read_len - k + 1):
                piece = ReadPair(pair.first[i : i+k], pair.second[i : i+k])
                freq[piece] += 1
        return ReadPairFreq(self.d + read_len - k, freq)

    def overlap_seq(self, order):
        """
        Spell the string of read pairs, that overlap by *k-1* symbols
        in the given order.

        Parameters
        ----------
        order : list of int
            Indices into the read pairs.

        Returns
        -------
        string : Str
            The spelled string.

        Raises
        ------
        BadInputError
            If the list is empty or contains empty reads.
        NotUniformError
            If the reads have different lengths.
        NoSolutionError
            If the order is too short to span the gap or the first
            and second reads spell contradicting strings.
        """
        from ..seqtypes import Str
        d = self.d
        if len(self.pairs) == 0:
            raise BadInputError("The read pair list is empty")
        if d < 0:
            raise BadInputError("The gap size must not be negative")
        if len(order) <= d:
            raise NoSolutionError(
                f"An order of {len(order)} read pairs cannot span a gap "
                f"of {d}"
            )
        k = _check_pairs(self.pairs)
        if k == 0:
            raise BadInputError("The reads are empty")
        last = len(order) - 1
        prefix = (
            "".join(self.pairs[i].first[0] for i in order[:last])
            + self.pairs[order[last]].first
        )
        suffix = (
            "".join(self.pairs[i].second[0] for i in order[:last])
            + self.pairs[order[last]].second
        )
        # The suffix string starts at offset k+d of the prefix string
        offset = k + d
        if prefix[offset:] != suffix[:len(prefix) - offset]:
            raise NoSolutionError(
                "The read pairs do not spell a consistent string"
            )
        return Str(prefix[:offset] + suffix)

    def de_bruijn(self):
        """
        Build the paired de Bruijn graph of the read pairs.

        Returns
        -------
        graph : DeBruijnGraph
            The graph, whose node labels are :class:`ReadPair` objects
            of *(k-1)*-mers, separated by *d+1* symbols.
        """
        if len(self.pairs) == 0:
            return DeBruijnGraph()
        _check_pairs(self.pairs)
        return _pair_de_bruijn(self.d, ((pair, 1) for pair in self.pairs))

    def contigs(self):
        """
        Assemble the read pairs into contigs.

        Each contig is spelled by a maximal non-branching path of the
        paired de Bruijn graph.

        Returns
        -------
        contigs : list of Str
            The contigs.

        Raises
        ------
        NoSolutionError
            If a path does not spell a consistent string.
        """
        return _contigs(self.de_bruijn(), self.d)


class ReadPairFreq:
    """
    A multiset of read pairs with a common gap size.

    Parameters
    ----------
    d : int
        The number of symbols between the two k-mers of each pair.
    freq : Counter, optional
        Maps each :class:`ReadPair` to its count.

    Attributes
    ----------
    d : int
        The gap size.
    freq : Counter
        The read pairs with their counts.
    """

    def __init__(self, d, freq=None):
        self.d = d
        self.freq = Counter() if freq is None else Counter(freq)

    def __len__(self):
        return len(self.freq)

    def __repr__(self):
        return f"ReadPairFreq({self.d}, {dict(self.freq)!r})"

    def de_bruijn(self):
        """
        Build the paired de Bruijn graph, where each read pair adds as
        many arcs as its count.

        Returns
        -------
        graph : DeBruijnGraph
            The graph, whose node labels are :class:`ReadPair` objects
            of *(k-1)*-mers, separated by *d+1* symbols.
        """
        if len(self.freq) == 0:
            return DeBruijnGraph()
        _check_pairs(list(self.freq))
        return _pair_de_bruijn(self.d, self.freq.items())

    def contigs(self):
        """
        Assemble the read pairs into contigs.

        Returns
        -------
        contigs : list of Str
            The contigs.

        Raises
        ------
        NoSolutionError
            If a path does not spell a consistent string.
        """
        return _contigs(self.de_bruijn(), self.d)
