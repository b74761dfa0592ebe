# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.index"
__author__ = "The Biotrove contributors"
__all__ = ["SuffixArray"]

from .kmp import _to_bytes


class SuffixArray:
    """
    A suffix array over multiple sequences, for finding their longest
    common substring.

    Each suffix is tagged with the index of the sequence it belongs to.

    Examples
    --------

    >>> suffixes = SuffixArray()
    >>> for seq in ["GATTACA", "TAGACCA", "ATACA"]:
    ...     suffixes.add_seq(seq)
    >>> print(suffixes.longest_common_subseq())
    AC
    """

    def __init__(self):
        self._seqs = []
        # Each suffix is a tuple (sequence index, start position)
        self._suffixes = []
        self._sorted = True

    def __len__(self):
        return len(self._seqs)

    def add_seq(self, seq):
        """
        Add a sequence.

        Parameters
        ----------
        seq : str or bytes or Sequence
            The sequence to add.
        """
        seq = _to_bytes(seq)
        index = len(self._seqs)
        self._seqs.append(seq)
        self._suffixes += [(index, start) for start in range(len(seq))]
        self._sorted = False

    def _suffix(self, item):
        index, start = self._suffixes[item]
        return self._seqs[index][start:]

    def longest_common_subseq(self):
        """
        Find the longest common substring of all added sequences.

        Returns
        -------
        common : str
            The common substring, empty if no sequence was added.
        """
        if len(self._seqs) == 0:
            return ""
        if len(self._seqs) == 1:
            return self._seqs[0].decode("latin-1")
        if not self._sorted:
            self._suffixes.sort(
                key=lambda suffix: self._seqs[suffix[0]][suffix[1]:]
            )
            self._sorted = True
        n_seqs = len(self._seqs)
        suffixes = self._suffixes

        # The window holds one suffix of each sequence,
        # starting with the first suffix of each sequence
        window = [-1] * n_seqs
        n_found = 0
        for item, (index, _) in enumerate(suffixes):
            if window[index] < 0:
                window[index] = item
                n_found += 1
                if n_found == n_seqs:
                    break
        if n_found < n_seqs:
            # At least one sequence is empty
            return ""
        common = self._common_prefix(window)

        # Advance the window suffix by suffix
        for item, (index, _) in enumerate(suffixes):
            if item < window[index]:
                continue
            following = next(
                (
                    y for y in range(item + 1, len(suffixes))
                    if suffixes[y][0] == index
                ),
                None
            )
            if following is None:
                break
            window[index] = following
            prefix = self._common_prefix(window)
            if len(prefix) > len(common):
                common = prefix
        return common.decode("latin-1")

    def _common_prefix(self, window):
        first = self._suffix(window[0])
        others = [self._suffix(item) for item in window[1:]]
        length = 0
        while length < len(first) and all(
            len(other) > length and other[length] == first[length]
            for other in others
        ):
            length += 1
        return first[:length]
