# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.index"
__author__ = "The Biotrove contributors"
__all__ = ["KMP"]

import numpy as np
from ..seqtypes import Sequence


def _to_bytes(text):
    if isinstance(text, Sequence):
        return bytes(text)
    if isinstance(text, str):
        return text.encode("latin-1")
    return bytes(text)


class KMP:
    """
    A pattern preprocessed for the *Knuth-Morris-Pratt* string search.

    Parameters
    ----------
    pattern : str or bytes or Sequence
        The pattern to search for.

    Attributes
    ----------
    pattern : bytes
        The pattern.
    failure : ndarray, dtype=int
        The failure function:
        Element *i* is the length of the longest proper prefix of
        ``pattern[:i+1]``, that is also a suffix of it.

    Examples
    --------

    >>> kmp = KMP("ababaa")
    >>> print(kmp.failure.tolist())
    [0, 0, 1, 2, 3, 1]
    >>> print(kmp.index("abaababaab"))
    3
    >>> print(kmp.all_index("abaababaababaa"))
    [3, 8]
    """

    def __init__(self, pattern):
        self.pattern = _to_bytes(pattern)
        self.failure = _failure(self.pattern)

    def __len__(self):
        return len(self.pattern)

    def __repr__(self):
        return f"KMP({self.pattern!r})"

    def _matches(self, text):
        """
        Generate the end positions of all matches in *text*.
        """
        pattern = self.pattern
        failure = self.failure
        if len(pattern) == 0:
            return
        matched = 0
        for i, symbol in enumerate(text):
            while matched > 0 and pattern[matched] != symbol:
                matched = failure[matched - 1]
            if pattern[matched] == symbol:
                matched += 1
            if matched == len(pattern):
                yield i + 1
                matched = failure[matched - 1]

    def index(self, text):
        """
        Find the first occurrence of the pattern.

        Parameters
        ----------
        text : str or bytes or Sequence
            The text to search in.

        Returns
        -------
        index : int
            The start position of the first occurrence, -1 if the
            pattern does not occur.
        """
        for end in self._matches(_to_bytes(text)):
            return end - len(self.pattern)
        return -1

    def all_index(self, text):
        """
        Find all, possibly overlapping, occurrences of the pattern.

        Parameters
        ----------
        text : str or bytes or Sequence
            The text to search in.

        Returns
        -------
        index : list of int
            The start positions in ascending order.
        """
        return [
            end - len(self.pattern)
            for end in self._matches(_to_bytes(text))
        ]


def _failure(pattern):
    failure = np.zeros(len(pattern), dtype=int)
    pos = 1
    candidate = 0
    while pos < len(pattern):
        if pattern[pos] == pattern[candidate]:
            candidate += 1
            failure[pos] = candidate
            pos += 1
        elif candidate > 0:
            candidate = failure[candidate - 1]
        else:
            pos += 1
    return failure
