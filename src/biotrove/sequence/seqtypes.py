# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["Sequence", "Seq", "DNA", "DNA8", "RNA", "RNA8", "AA", "AA20",
           "Str", "ti_tv_ratio", "num_hamming_variants"]

from collections import Counter
from math import comb
import numpy as np
from ..copyable import Copyable
from .alphabet import (CASE_BIT, DNA8_SYMBOLS, RNA8_SYMBOLS, AA20_ALPHABET,
                       base_index, complement8, dna_complement,
                       rna_complement, gc_skew, check_symbols)
from .codon import STOP_SYMBOL, translate_codes
from .error import LengthMismatchError


# Substitution symbols of the Hamming variant generator,
# indexed by the base bits 'x & 6'
_VARIANT_SYMBOLS = b"A C T G"
# Successor of each base, indexed by the base bits
_INC_SYMBOLS = b"C T G"
_BASE_SYMBOLS = b"ACTG"
_CASE_MASK = 0xFF ^ CASE_BIT


def _to_code(sequence):
    if isinstance(sequence, Sequence):
        return sequence.code.copy()
    if isinstance(sequence, str):
        sequence = sequence.encode("latin-1")
    if isinstance(sequence, (bytes, bytearray)):
        return np.frombuffer(sequence, dtype=np.uint8).copy()
    return np.array(sequence, dtype=np.uint8).reshape(-1)


class Sequence(Copyable):
    """
    Base class for all sequence types.

    A sequence is an ordered succession of one byte symbols.
    Internally the symbols are stored as their ASCII code in a *NumPy*
    :class:`ndarray` with ``dtype=np.uint8``, called the *sequence code*
    and available via the :attr:`code` attribute.

    Subclasses that define the class attribute :attr:`symbols`, i.e.
    the *strict* sequence types, check the symbols once on creation.
    Afterwards their methods rely on the alphabet and use bit
    operations on the sequence code.
    The other, *tolerant* sequence types accept any symbol.

    Indexing a sequence with an integer gives the symbol as
    :class:`str`, slicing gives a new sequence of the same type.
    A sequence compares equal to another sequence of the same type with
    the same symbols and to a :class:`str` with the same symbols.

    Parameters
    ----------
    sequence : str or bytes or iterable object or Sequence, optional
        The initial symbols of the sequence.
        By default the sequence is empty.

    Raises
    ------
    AlphabetError
        If the sequence type is strict and `sequence` contains a symbol
        outside of its alphabet.
    """

    symbols = None

    def __init__(self, sequence=b""):
        self.code = _to_code(sequence)

    @classmethod
    def _from_code(cls, code):
        # Skip the symbol check for code derived from a valid sequence
        seq = cls.__new__(cls)
        seq._code = code
        return seq

    @property
    def code(self):
        return self._code

    @code.setter
    def code(self, value):
        code = np.asarray(value, dtype=np.uint8)
        if self.symbols is not None:
            check_symbols(code, self.symbols)
        self._code = code

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._code = self._code.copy()

    def __str__(self):
        return self._code.tobytes().decode("latin-1")

    def __repr__(self):
        return f"{type(self).__name__}('{self}')"

    def __bytes__(self):
        return self._code.tobytes()

    def __len__(self):
        return len(self._code)

    def __iter__(self):
        for b in self._code:
            yield chr(b)

    def __getitem__(self, index):
        if isinstance(index, (int, np.integer)):
            return chr(self._code[index])
        return type(self)._from_code(self._code[index].copy())

    def __eq__(self, item):
        if isinstance(item, str):
            return str(self) == item
        if type(item) is type(self):
            return np.array_equal(self._code, item._code)
        return NotImplemented

    __hash__ = None

    def __add__(self, sequence):
        if type(sequence) is not type(self):
            return NotImplemented
        return type(self)._from_code(
            np.concatenate([self._code, sequence._code])
        )

    def reverse(self):
        """
        Reverse the sequence.

        Returns
        -------
        reversed : Sequence
            The reversed sequence, of the same type.
        """
        return type(self)._from_code(self._code[::-1].copy())

    def freq(self):
        """
        Count the occurrences of each symbol.

        Returns
        -------
        freq : Counter
            Maps each symbol (:class:`str`) to its count.
        """
        symbols, counts = np.unique(self._code, return_counts=True)
        return Counter({chr(s): int(c) for s, c in zip(symbols, counts)})

    def all_index(self, motif):
        """
        Find all occurrences of a motif in the sequence, including
        overlapping ones.

        The comparison is case sensitive.

        Parameters
        ----------
        motif : Sequence or str
            The motif to search for.

        Returns
        -------
        index : list of int
            The start positions of the occurrences in increasing order.
        """
        return _all_index(bytes(self), bytes(_to_code(motif)))


def _all_index(data, motif):
    index = []
    if len(motif) == 0:
        return index
    i = data.find(motif)
    while i >= 0:
        index.append(i)
        i = data.find(motif, i + 1)
    return index


def _base_freq(code):
    a, c, t, g = np.bincount(base_index(code), minlength=4)
    return int(a), int(c), int(t), int(g)


def _translate(code):
    aa_code = translate_codes(code)
    stops = np.flatnonzero(aa_code == ord(STOP_SYMBOL))
    if len(stops) > 0:
        return AA20._from_code(aa_code[:stops[0]].copy()), True
    return AA20._from_code(aa_code), False


class Seq(Sequence):
    """
    A sequence of arbitrary symbols.
    """
    pass


class DNA(Sequence):
    """
    A DNA sequence, tolerant of symbols other than ``ACGT``.

    Methods ignore case and treat unknown symbols according to their
    documentation.
    """

    def base_freq(self):
        """
        Count the four DNA bases, regardless of case.

        Symbols that are not a DNA base are not counted.

        Returns
        -------
        a, c, t, g : int
            The base counts.
        """
        upper = self._code & _CASE_MASK
        return tuple(
            int(np.count_nonzero(upper == b)) for b in _BASE_SYMBOLS
        )

    def transcribe(self):
        """
        Transcribe the sequence into RNA, by replacing ``T`` with ``U``
        and ``t`` with ``u``.

        Returns
        -------
        rna : RNA
            The transcribed sequence.
        """
        return RNA._from_code(_transcribe(self._code))

    def reverse_complement(self):
        """
        Get the reverse complement of the sequence.

        All IUPAC symbols, including ambiguity symbols, are complemented
        with their case preserved.
        Other symbols are only moved to their reversed position.

        Returns
        -------
        rev_comp : DNA
            The reverse complement.
        """
        return DNA._from_code(dna_complement(self._code[::-1]))

    def gc_content(self):
        """
        Get the fraction of ``G`` and ``C`` among the DNA bases of the
        sequence.
        """
        a, c, t, g = self.base_freq()
        return (c + g) / (a + c + g + t)


def _transcribe(code):
    return code + ((code | CASE_BIT) == ord("t")).astype(np.uint8)


class DNA8(Sequence):
    """
    A DNA sequence, strictly over the symbols ``ACTGactg``.

    The case of a symbol is preserved by all methods that produce new
    symbols from existing ones, but ignored in comparisons, except for
    :meth:`cmp()`.

    Parameters
    ----------
    sequence : str or bytes or iterable object or Sequence, optional
        The initial symbols of the sequence.

    Raises
    ------
    AlphabetError
        If `sequence` contains a symbol other than ``ACTGactg``.

    Examples
    --------

    >>> seq = DNA8("Atacaga")
    >>> print(seq.reverse_complement())
    tctgtaT
    >>> print(seq.base_freq())
    (4, 1, 1, 1)
    """

    symbols = DNA8_SYMBOLS

    def base_freq(self):
        """
        Count the four DNA bases.

        Returns
        -------
        a, c, t, g : int
            The base counts.
        """
        return _base_freq(self._code)

    def transcribe(self):
        """
        Transcribe the sequence into RNA, preserving case.

        Returns
        -------
        rna : RNA8
            The transcribed sequence.
        """
        return RNA8._from_code(_transcribe(self._code))

    def reverse_complement(self):
        """
        Get the reverse complement of the sequence, preserving case.

        Returns
        -------
        rev_comp : DNA8
            The reverse complement.
        """
        return DNA8._from_code(complement8(self._code[::-1]))

    def gc_content(self):
        """
        Get the fraction of ``G`` and ``C`` in the sequence.
        """
        _, c, _, g = self.base_freq()
        return (c + g) / len(self)

    def cmp(self, sequence):
        """
        Compare this sequence with another one.

        The order is defined by the following rules:

            1. A shorter sequence is lower than a longer one.
            2. Otherwise the first differing base decides in the base
               order ``ACTG``, regardless of case.
            3. If a base only differs in case, the lower case symbol is
               lower.

        Parameters
        ----------
        sequence : DNA8
            The sequence to compare with.

        Returns
        -------
        order : int
            ``-1``, ``0`` or ``1``, if this sequence is lower, equal or
            greater than `sequence`.
        """
        if len(self) != len(sequence):
            return -1 if len(self) < len(sequence) else 1
        diff = np.flatnonzero(self._code != sequence._code)
        if len(diff) == 0:
            return 0
        s = int(self._code[diff[0]])
        t = int(sequence._code[diff[0]])
        if s & 6 != t & 6:
            return -1 if s & 6 < t & 6 else 1
        # Only the case differs, an upper case symbol has the lower code
        return 1 if s < t else -1

    def __lt__(self, sequence):
        if not isinstance(sequence, DNA8):
            return NotImplemented
        return self.cmp(sequence) < 0

    def all_index(self, motif):
        """
        Find all occurrences of a motif in the sequence, including
        overlapping ones, regardless of case.

        Parameters
        ----------
        motif : DNA8 or str
            The motif to search for.

        Returns
        -------
        index : list of int
            The start positions of the occurrences in increasing order.
        """
        motif = _to_code(motif)
        return _all_index(
            (self._code & _CASE_MASK).tobytes(),
            (motif & _CASE_MASK).tobytes()
        )

    def all_count(self, motif):
        """
        Count all occurrences of a motif, including overlapping ones.

        This is equivalent to ``len(self.all_index(motif))``.
        """
        return len(self.all_index(motif))

    def hamming(self, sequence):
        """
        Get the Hamming distance to another sequence of the same
        length, regardless of case.

        Parameters
        ----------
        sequence : DNA8
            The sequence to compare with.

        Returns
        -------
        distance : int
            The number of positions with different bases.

        Raises
        ------
        LengthMismatchError
            If the sequences have different lengths.
        """
        if len(self) != len(sequence):
            raise LengthMismatchError(
                f"Sequences have different lengths "
                f"({len(self)} and {len(sequence)})"
            )
        return int(np.count_nonzero(
            (self._code & 6) != (sequence._code & 6)
        ))

    def motif_hamming(self, motif):
        """
        Get the minimum Hamming distance of a motif to any k-mer of this
        sequence with the length of the motif.

        Parameters
        ----------
        motif : DNA8
            The motif.

        Returns
        -------
        distance : int
            The minimum Hamming distance.
            If the sequence is shorter than the motif, the length of the
            motif.
        """
        k = len(motif)
        if len(self) < k or k == 0:
            return k
        windows = np.lib.stride_tricks.sliding_window_view(
            self._code & 6, k
        )
        return int((windows != (motif.code & 6)).sum(axis=1).min())

    def kmers_nearest_motif(self, sequence):
        """
        Get the k-mers of another sequence, that have the minimum
        Hamming distance to this sequence as motif.

        Parameters
        ----------
        sequence : DNA8
            The sequence to take the k-mers from.

        Returns
        -------
        kmers : Kmers
            The nearest k-mers, in the order of their position in
            `sequence`.
        """
        from .kmers import Kmers
        k = len(self)
        nearest = Kmers()
        min_dist = k
        for i in range(len(sequence) - k + 1):
            kmer = sequence[i : i+k]
            dist = self.hamming(kmer)
            if dist < min_dist:
                min_dist = dist
                nearest = Kmers([kmer])
            elif dist == min_dist:
                nearest.append(kmer)
        return nearest

    def min_gc_skew(self):
        """
        Find the positions where the cumulative GC skew from the
        beginning of the sequence is minimal.

        The skew is increased by each ``G`` and decreased by each
        ``C``.

        Returns
        -------
        positions : list of int
            All positions, where the cumulative skew reaches its
            minimum.
            Positions where the skew does not fall below zero are only
            returned, if the skew never becomes negative.

        Examples
        --------

        >>> print(DNA8("accagtgct").min_gc_skew())
        [2, 3]
        """
        skew = np.cumsum(gc_skew(self._code))
        if len(skew) == 0:
            return []
        minimum = min(0, skew.min())
        return [int(i) for i in np.flatnonzero(skew == minimum)]

    def pal_find_all_index(self, min_len, max_len):
        """
        Find reverse palindromes, i.e. subsequences that equal their own
        reverse complement.

        Parameters
        ----------
        min_len, max_len : int
            The minimum and maximum length of palindromes to find.
            As reverse palindromes have an even length, odd values are
            rounded inwards.
            `min_len` is at least 2, `max_len` at most the sequence
            length.

        Returns
        -------
        palindromes : list of tuple(int, int)
            The position and the length of each palindrome, ordered by
            the center of the palindrome and then by length.

        Examples
        --------

        >>> print(DNA8("CAATGCATG").pal_find_all_index(4, 8))
        [(3, 4), (2, 6), (5, 4)]
        """
        if min_len < 2:
            min_len = 2
        elif min_len % 2 == 1:
            min_len += 1
        n = len(self)
        if n < min_len:
            return []
        max_len = min(max_len, n)
        if max_len % 2 == 1:
            max_len -= 1
        if max_len < min_len:
            return []

        pairs = (ord("A") ^ ord("T"), ord("C") ^ ord("G"))
        code = self._code.tolist()
        palindromes = []
        for center in range(1, n):
            i = center - 1
            j = center
            length = 2
            while i >= 0 and j < n and length <= max_len:
                if (code[i] ^ code[j]) & _CASE_MASK not in pairs:
                    break
                if length >= min_len:
                    palindromes.append((i, length))
                i -= 1
                j += 1
                length += 2
        return palindromes

    def freq_array(self, k):
        """
        Count all k-mers of the sequence in a dense array.

        Parameters
        ----------
        k : int
            The k-mer length.

        Returns
        -------
        freq : ndarray, shape=(4**k,), dtype=int
            The element at index *n* is the count of the k-mer, whose
            bases, as digits in the order ``ACTG``, form the base-4
            number *n*.

        Examples
        --------

        >>> print(DNA8("ACGCGGCTCTGAAA").freq_array(2))
        [2 1 0 0 0 0 2 2 0 1 0 1 1 2 0 1]
        """
        freq = np.zeros(4**k, dtype=int)
        if len(self) < k:
            return freq
        digits = base_index(self._code).astype(np.int64)
        radix = 4 ** np.arange(k - 1, -1, -1, dtype=np.int64)
        numbers = np.lib.stride_tricks.sliding_window_view(digits, k) @ radix
        freq += np.bincount(numbers, minlength=4**k)
        return freq

    def modal_small_kmers(self, k):
        """
        Find the most frequent k-mers using :meth:`freq_array()`.

        This is efficient for long sequences and small *k*.

        Parameters
        ----------
        k : int
            The k-mer length.

        Returns
        -------
        kmers : Kmers
            The most frequent k-mers in ascending ``ACTG`` order, all in
            upper case.
        """
        from .kmers import Kmers
        if len(self) < k:
            return Kmers()
        freq = self.freq_array(k)
        return Kmers(
            _kmer_from_number(int(n), k)
            for n in np.flatnonzero(freq == freq.max())
        )

    def modal_kmers(self, k):
        """
        Find the most frequent k-mers using a dictionary.

        Parameters
        ----------
        k : int
            The k-mer length.

        Returns
        -------
        kmers : Kmers
            The most frequent k-mers in the order they first reached the
            maximum count.
        """
        from .kmers import Kmers
        return Kmers(DNA8._from_code(_to_code(kmer))
                     for kmer in Str(str(self)).modal_kmers(k))

    def de_bruijn(self, k):
        """
        Build the de Bruijn graph of the consecutive k-mers of this
        sequence.

        The node labels are :class:`Str` objects.

        Examples
        --------

        >>> graph = DNA8("TAATTATTAA").de_bruijn(4)
        >>> print(graph.jmers)
        ['TAA', 'AAT', 'ATT', 'TTA', 'TAT']
        >>> print(graph.jmers.overlap_kmers(graph.eulerian_path()))
        TAATTATTAA
        """
        return Str(str(self)).de_bruijn(k)

    def hamming_variants(self, d):
        """
        Get all k-mers within Hamming distance *d* of this sequence.

        Each position keeps its case in the variants.

        Parameters
        ----------
        d : int
            The maximum Hamming distance.

        Returns
        -------
        variants : Kmers
            The variants, starting with a copy of this sequence.
            The number of variants is given by
            :func:`num_hamming_variants()`.

        Examples
        --------

        >>> print([str(v) for v in DNA8("Act").hamming_variants(1)])
        ['Act', 'Cct', 'Tct', 'Gct', 'Aat', 'Att', 'Agt', 'Aca', 'Acc', 'Acg']
        """
        from .kmers import Kmers
        return Kmers(
            DNA8._from_code(np.frombuffer(v, dtype=np.uint8).copy())
            for v in _hamming_variants(bytes(self), d)
        )

    def modal_hamming_kmers(self, k, d):
        """
        Find the k-mers, that match a maximum number of k-mers of this
        sequence within Hamming distance *d*.

        Parameters
        ----------
        k : int
            The k-mer length.
        d : int
            The maximum Hamming distance of a match.

        Returns
        -------
        kmers : Kmers
            The modal k-mers in the order they reached the maximum count.
        """
        tally = _HammingTally(d)
        for i in range(len(self) - k + 1):
            tally.add(bytes(self._code[i : i+k]))
        return tally.modal()

    def modal_hamming_kmers_rc(self, k, d):
        """
        Find the k-mers, that match a maximum number of k-mers of this
        sequence or its reverse complement within Hamming distance *d*.

        Parameters
        ----------
        k : int
            The k-mer length.
        d : int
            The maximum Hamming distance of a match.

        Returns
        -------
        kmers : Kmers
            The modal k-mers in the order they reached the maximum count.
        """
        tally = _HammingTally(d)
        rev_comp = self.reverse_complement()
        for i in range(len(self) - k + 1):
            tally.add(bytes(self._code[i : i+k]))
            tally.add(bytes(rev_comp._code[i : i+k]))
        return tally.modal()

    def inc(self):
        """
        Increment the sequence in place, as a base-4 number with the
        digit order ``ACTG``.

        The last position is the least significant one.
        Each position keeps its case.
        This allows iterating over all k-mers.

        Returns
        -------
        rolled_over : bool
            True, if the sequence rolled over from all ``G`` to all
            ``A``.

        Examples
        --------

        >>> kmer = DNA8("ggt")
        >>> print(kmer.inc(), kmer)
        False ggg
        >>> print(kmer.inc(), kmer)
        True aaa
        """
        code = self._code
        for i in range(len(code) - 1, -1, -1):
            b = int(code[i])
            n = b & 6
            if n < 6:
                code[i] = _INC_SYMBOLS[n] | b & CASE_BIT
                return False
            code[i] = ord("A") | b & CASE_BIT
        return True

    def translate(self):
        """
        Translate the sequence into a peptide, starting at the first
        position and ending at a stop codon or the end of the sequence.

        Returns
        -------
        peptide : AA20
            The translated peptide, excluding the stop codon.
        stopped : bool
            True, if translation ended at a stop codon.
        """
        return _translate(self._code)

    def translate_orf(self):
        """
        Translate all open reading frames of the sequence and its
        reverse complement.

        An open reading frame begins with ``ATG`` and ends with a stop
        codon.

        Returns
        -------
        peptides : list of AA20
            The unique translated peptides, in the order they were
            found.
        """
        peptides = {}
        for strand in (self, self.reverse_complement()):
            upper = bytes(strand._code & _CASE_MASK)
            for start in _all_index(upper, b"ATG"):
                peptide, stopped = _translate(strand._code[start:])
                if stopped:
                    peptides.setdefault(str(peptide), peptide)
        return list(peptides.values())

    def aa_find_all_index(self, peptide):
        """
        Find all positions where the sequence or its reverse complement
        translates into the given peptide.

        All six reading frames are searched.

        Parameters
        ----------
        peptide : AA20 or str
            The peptide to search for.

        Returns
        -------
        index : list of int
            Start positions in this sequence of the encoding
            subsequences.
            Matches on the forward strand come first.
        """
        peptide = bytes(_to_code(peptide))
        forward = _aa_find_all_index(self._code, peptide)
        reverse = _aa_find_all_index(
            self.reverse_complement()._code, peptide
        )
        return forward + [len(self) - p - len(peptide) * 3 for p in reverse]


def _aa_find_all_index(code, peptide):
    index = []
    for frame in range(3):
        translation = translate_codes(code[frame:]).tobytes()
        index += [frame + p * 3 for p in _all_index(translation, peptide)]
    return index


def _kmer_from_number(n, k):
    kmer = bytearray(k)
    for i in range(k - 1, -1, -1):
        kmer[i] = _BASE_SYMBOLS[n & 3]
        n >>= 2
    return DNA8._from_code(np.frombuffer(bytes(kmer), dtype=np.uint8).copy())


def _hamming_variants(kmer, d):
    variants = [bytes(kmer)]
    if d > 0:
        _vary(bytearray(kmer), 0, d, variants)
    return variants


def _vary(buffer, start, h, variants):
    # Substitute each position from 'start' onwards in place
    # and recurse into the remaining suffix
    for i in range(start, len(buffer)):
        b = buffer[i]
        vb = 0
        for _ in range(3):
            if vb == b & 6:
                vb += 2
            buffer[i] = _VARIANT_SYMBOLS[vb] | b & CASE_BIT
            variants.append(bytes(buffer))
            if h > 1 and i + 1 < len(buffer):
                _vary(buffer, i + 1, h - 1, variants)
            vb += 2
        buffer[i] = b


class _HammingTally:
    """
    Count Hamming variants of k-mers and keep track of the modal ones.
    """

    def __init__(self, d):
        self._d = d
        self._variants = {}
        self._counts = Counter()
        self._max = 0
        self._modal = []

    def add(self, kmer):
        variants = self._variants.get(kmer)
        if variants is None:
            variants = _hamming_variants(kmer, self._d)
            self._variants[kmer] = variants
        for variant in variants:
            self._counts[variant] += 1
            n = self._counts[variant]
            if n > self._max:
                self._max = n
                self._modal = [variant]
            elif n == self._max:
                self._modal.append(variant)

    def modal(self):
        from .kmers import Kmers
        return Kmers(
            DNA8._from_code(np.frombuffer(v, dtype=np.uint8).copy())
            for v in self._modal
        )


def num_hamming_variants(k, d):
    """
    Get the number of k-mers within Hamming distance *d* of a k-mer
    over a four letter alphabet.

    Parameters
    ----------
    k : int
        The k-mer length.
    d : int
        The maximum Hamming distance.

    Returns
    -------
    n : int
        The number of variants, including the k-mer itself.

    Examples
    --------

    >>> print(num_hamming_variants(3, 1))
    10
    >>> print(num_hamming_variants(9, 3))
    2620
    """
    return sum(comb(k, h) * 3**h for h in range(min(d, k) + 1))


def ti_tv_ratio(seq1, seq2):
    """
    Compute the transition to transversion ratio of two DNA sequences
    of equal length.

    Positions with equal bases (regardless of case) and positions with
    a symbol other than a DNA base are ignored.

    Parameters
    ----------
    seq1, seq2 : DNA or DNA8
        The sequences to compare.

    Returns
    -------
    ratio : float
        The ratio of transitions (purine to purine, pyrimidine to
        pyrimidine) to transversions.
        ``inf`` if there are only transitions, ``nan`` if there are
        neither transitions nor transversions.

    Raises
    ------
    LengthMismatchError
        If the sequences have different lengths.
    """
    if len(seq1) != len(seq2):
        raise LengthMismatchError(
            f"Sequences have different lengths ({len(seq1)} and {len(seq2)})"
        )
    purines = b"ag"
    pyrimidines = b"ct"
    transitions = 0
    transversions = 0
    for s, t in zip((seq1.code | CASE_BIT).tolist(),
                    (seq2.code | CASE_BIT).tolist()):
        if s == t:
            continue
        if s in purines:
            if t in purines:
                transitions += 1
            elif t in pyrimidines:
                transversions += 1
        elif s in pyrimidines:
            if t in pyrimidines:
                transitions += 1
            elif t in purines:
                transversions += 1
    if transversions == 0:
        return np.inf if transitions > 0 else np.nan
    return transitions / transversions


class RNA(Sequence):
    """
    An RNA sequence, tolerant of symbols other than ``ACGU``.
    """

    def base_freq(self):
        """
        Count the four RNA bases, regardless of case.

        Returns
        -------
        a, c, u, g : int
            The base counts.
        """
        upper = self._code & _CASE_MASK
        return tuple(int(np.count_nonzero(upper == ord(b))) for b in "ACUG")

    def reverse_complement(self):
        """
        Get the reverse complement of the sequence.

        IUPAC symbols are complemented with their case preserved, other
        symbols are kept.
        """
        return RNA._from_code(rna_complement(self._code[::-1]))


class RNA8(Sequence):
    """
    An RNA sequence, strictly over the symbols ``ACUGacug``.

    Raises
    ------
    AlphabetError
        If the sequence contains a symbol other than ``ACUGacug``.
    """

    symbols = RNA8_SYMBOLS

    def base_freq(self):
        """
        Count the four RNA bases.

        Returns
        -------
        a, c, u, g : int
            The base counts.
        """
        return _base_freq(self._code)

    def reverse_complement(self):
        """
        Get the reverse complement of the sequence, preserving case.
        """
        return RNA8._from_code(rna_complement(self._code[::-1]))

    def translate(self):
        """
        Translate the sequence into a peptide, starting at the first
        position and ending at a stop codon or the end of the sequence.

        Returns
        -------
        peptide : AA20
            The translated peptide, excluding the stop codon.
        stopped : bool
            True, if translation ended at a stop codon.

        Examples
        --------

        >>> peptide, stopped = RNA8("AugGcgAacAauUacUga").translate()
        >>> print(peptide, stopped)
        MANNY True
        """
        return _translate(self._code)


class AA(Sequence):
    """
    A peptide sequence, tolerant of any symbol.
    """
    pass


class AA20(Sequence):
    """
    A peptide sequence, strictly over the 20 proteinogenic amino acids
    in upper case one-letter code.

    Raises
    ------
    AlphabetError
        If the sequence contains any other symbol.
    """

    symbols = AA20_ALPHABET

    def weight(self):
        """
        Get the monoisotopic mass of the peptide, including one water
        molecule.
        """
        from .mass.tables import peptide_weight
        return peptide_weight(str(self))

    def to_int(self):
        """
        Convert the peptide into its integer masses.

        Returns
        -------
        masses : AAInt
            The integer mass of each amino acid.
        """
        from .mass.spectrum import AAInt
        return AAInt.from_peptide(str(self))

    def monoisotopic_mass(self):
        """
        Convert the peptide into its monoisotopic residue masses.

        Returns
        -------
        masses : AAMass
            The monoisotopic mass of each amino acid.
        """
        from .mass.spectrum import AAMass
        return AAMass.from_peptide(str(self))


class Str(str):
    """
    An immutable, hashable sequence type based on :class:`str`.

    Each character is interpreted as one symbol and methods are case
    sensitive.
    :class:`Str` is used where algorithms key dictionaries by
    sequences.
    """

    def hamming(self, string):
        """
        Get the Hamming distance to a string of the same length.

        Raises
        ------
        LengthMismatchError
            If the strings have different lengths.
        """
        if len(self) != len(string):
            raise LengthMismatchError(
                f"Strings have different lengths "
                f"({len(self)} and {len(string)})"
            )
        return sum(1 for a, b in zip(self, string) if a != b)

    def kmers(self, k):
        """
        Iterate over all k-mers of the string in order of position.
        """
        for i in range(len(self) - k + 1):
            yield Str(self[i : i+k])

    def dna8_hamming_variants(self, d):
        """
        Get all k-mers within Hamming distance *d* of this string, that
        must consist of DNA8 symbols.

        Each position keeps its case in the variants.

        Returns
        -------
        variants : StrKmers
            The variants, starting with this string.
        """
        from .kmers import StrKmers
        return StrKmers(
            Str(v.decode("ascii"))
            for v in _hamming_variants(self.encode("ascii"), d)
        )

    def modal_kmers(self, k):
        """
        Find the most frequent k-mers.

        Returns
        -------
        kmers : StrKmers
            The most frequent k-mers in the order they first reached the
            maximum count.
        """
        from .kmers import StrKmers
        counts = Counter()
        modal = StrKmers()
        max_count = 0
        for kmer in self.kmers(k):
            counts[kmer] += 1
            n = counts[kmer]
            if n > max_count:
                max_count = n
                modal = StrKmers([kmer])
            elif n == max_count:
                modal.append(kmer)
        return modal

    def proximal_kmer_repeats(self, k, window, t):
        """
        Find k-mers that occur at least *t* times within a window of the
        string (clumps).

        Parameters
        ----------
        k : int
            The k-mer length.
        window : int
            The length of the window, the *t* occurrences must fall into.
        t : int
            The minimum number of occurrences.

        Returns
        -------
        kmers : StrKmers
            The k-mers forming clumps, in the order they were detected.
        """
        from .kmers import StrKmers
        positions = {}
        clumps = {}
        max_dist = window - k
        for i, kmer in enumerate(self.kmers(k)):
            kmer_positions = positions.setdefault(kmer, [])
            kmer_positions.append(i)
            if len(kmer_positions) >= t and i - kmer_positions[-t] <= max_dist:
                clumps[kmer] = None
        return StrKmers(clumps)

    def kmer_composition(self, k):
        """
        Count all k-mers of the string.

        Returns
        -------
        composition : StrFreq
            Maps each k-mer to its number of occurrences.
        """
        from .kmers import StrFreq
        return StrFreq(self.kmers(k))

    def k_composition_dist(self, k, string):
        """
        Get the k-tuple distance to another string, i.e. the sum of the
        absolute differences of their k-mer counts.
        """
        composition = Counter(self.kmer_composition(k))
        composition.subtract(Str(string).kmers(k))
        return sum(abs(n) for n in composition.values())

    def de_bruijn(self, k):
        """
        Build the de Bruijn graph of the consecutive k-mers of this
        string.

        See Also
        --------
        biotrove.sequence.assembly.DeBruijnGraph
        """
        from .assembly.debruijn import DeBruijnGraph
        return DeBruijnGraph.from_string(self, k)

    def read_pair_composition(self, k, d):
        """
        Get all read pairs of two k-mers separated by *d* symbols.

        Returns
        -------
        pairs : ReadPairList
            The read pairs in the order of their position.
        """
        from .assembly.readpair import ReadPairList
        return ReadPairList.from_string(self, k, d)
