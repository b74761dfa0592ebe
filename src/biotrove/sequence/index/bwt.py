# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.index"
__author__ = "The Biotrove contributors"
__all__ = ["BWT"]

import numpy as np
from .kmp import _to_bytes
from ..error import BadInputError


class BWT:
    """
    A searchable *Burrows-Wheeler transform* of a text (*FM-index*).

    The text is interpreted byte-wise.
    To reduce the memory consumption only every *mod*-th element of the
    suffix array is kept and the symbol counts required for the
    backward search are stored only at every *mod*-th position of the
    transform (checkpoints).

    Parameters
    ----------
    text : str or bytes or Sequence
        The text to index.
        It may end with the sentinel, otherwise the sentinel is
        appended internally.
    sentinel : str, optional
        A single symbol, that sorts before all symbols of the text.
    mod : int, optional
        The sparseness of the partial suffix array and of the
        checkpoints.

    Raises
    ------
    BadInputError
        If the text is empty, the sentinel is not smaller than all
        symbols of the text or `mod` is not positive.

    Examples
    --------

    >>> bwt = BWT("AATCGGGTTCAATCGGGGT", mod=5)
    >>> print(bwt.all_index("ATCG"))
    [1, 11]
    >>> print(bwt.all_index("GGGT"))
    [4, 15]
    """

    def __init__(self, text, sentinel="$", mod=100):
        text = _to_bytes(text)
        sentinel = _to_bytes(sentinel)
        if len(text) == 0:
            raise BadInputError("Cannot index an empty text")
        if len(sentinel) != 1:
            raise BadInputError("The sentinel must be a single symbol")
        if mod < 1:
            raise BadInputError("The sparseness must be positive")
        if text[-1:] != sentinel:
            text += sentinel
        if sentinel[0] >= min(text[:-1], default=256):
            raise BadInputError(
                "The sentinel must be smaller than all symbols of the text"
            )
        self._mod = mod
        n = len(text)

        suffix_array = sorted(range(n), key=lambda i: text[i:])
        # Partial suffix array: row in the sorted suffixes -> text position
        self._partial_sa = {
            row: pos for row, pos in enumerate(suffix_array) if pos % mod == 0
        }
        self._bwt = bytes(text[pos - 1] for pos in suffix_array)

        symbols = sorted(set(self._bwt))
        self._symbol_index = {sym: i for i, sym in enumerate(symbols)}
        self._first_occurrence = {}
        row = 0
        for sym in symbols:
            self._first_occurrence[sym] = row
            row += self._bwt.count(sym)

        # Checkpoint m contains the symbol counts in bwt[:m*mod]
        self._checkpoints = np.zeros((n // mod + 1, len(symbols)), dtype=int)
        counts = np.zeros(len(symbols), dtype=int)
        for i, sym in enumerate(self._bwt):
            if i % mod == 0:
                self._checkpoints[i // mod] = counts
            counts[self._symbol_index[sym]] += 1
        if n % mod == 0:
            self._checkpoints[-1] = counts

    @property
    def transform(self):
        """
        The Burrows-Wheeler transform as :class:`bytes`.
        """
        return self._bwt

    def __len__(self):
        return len(self._bwt)

    def _count(self, sym, i):
        """
        Count the occurrences of *sym* in ``bwt[:i]``.
        """
        m = i // self._mod
        start = m * self._mod
        return (
            int(self._checkpoints[m, self._symbol_index[sym]])
            + self._bwt.count(bytes([sym]), start, i)
        )

    def _last_to_first(self, row):
        sym = self._bwt[row]
        return self._first_occurrence[sym] + self._count(sym, row)

    def all_index(self, pattern):
        """
        Find all occurrences of a pattern by backward search.

        Parameters
        ----------
        pattern : str or bytes or Sequence
            The pattern to search for.

        Returns
        -------
        index : list of int
            The start positions of the occurrences in ascending order.
        """
        pattern = _to_bytes(pattern)
        top = 0
        bottom = len(self._bwt) - 1
        for sym in reversed(pattern):
            if sym not in self._first_occurrence:
                return []
            first = self._first_occurrence[sym]
            top = first + self._count(sym, top)
            bottom = first + self._count(sym, bottom + 1) - 1
            if top > bottom:
                return []

        positions = []
        for row in range(top, bottom + 1):
            # Walk backwards through the text to a sampled position
            steps = 0
            while row not in self._partial_sa:
                row = self._last_to_first(row)
                steps += 1
            positions.append(self._partial_sa[row] + steps)
        return sorted(positions)
