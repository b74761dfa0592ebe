# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Global alignment in linear space by divide and conquer over the middle
column of the second sequence (Hirschberg's algorithm).
"""

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["align_global_linear_space", "last_column_scores"]

from .alignment import Alignment, GAP_SYMBOL
from ..error import BadInputError


def last_column_scores(seq1, seq2, scorer, indel):
    """
    Compute the last two columns of the global alignment score grid of
    two sequences, keeping only two columns in memory.

    A column is parallel to `seq1`.

    Parameters
    ----------
    seq1, seq2 : str
        The sequences.
    scorer : object
        Any object with a ``score(a, b)`` method.
    indel : int
        The (non-positive) score of a gap position.

    Returns
    -------
    last : list of int, length=len(seq1)+1
        The scores of the last column.
    next_to_last : list of int, length=len(seq1)+1
        The scores of the column before.
        If `seq2` is empty, this is a list of zeros.
    """
    last = [i * indel for i in range(len(seq1) + 1)]
    next_to_last = [0] * len(last)
    for b in seq2:
        next_to_last[0] = last[0] + indel
        for i, a in enumerate(seq1):
            best = next_to_last[i] + indel
            mm = last[i] + scorer.score(a, b)
            if mm > best:
                best = mm
            gap = last[i+1] + indel
            if gap > best:
                best = gap
            next_to_last[i+1] = best
        last, next_to_last = next_to_last, last
    return last, next_to_last


def _middle_edge(seq1, seq2, scorer, indel):
    """
    Find the edge of an optimal global alignment path, that leaves the
    middle column of `seq2`.

    Returns the start and end node of the edge as *(i, j)* tuples.
    """
    mid = len(seq2) // 2
    fwd, _ = last_column_scores(seq1, seq2[:mid], scorer, indel)
    rev_seq1 = seq1[::-1]
    rev_seq2 = seq2[::-1]
    rev, rev1 = last_column_scores(
        rev_seq1, rev_seq2[:len(seq2) - mid], scorer, indel
    )
    last = len(rev) - 1
    best = None
    edge = None
    for i in range(len(fwd)):
        # Gap in 'seq1'
        s = fwd[i] + indel + rev1[last - i]
        if best is None or s > best:
            best = s
            edge = ((i, mid), (i, mid + 1))
        if i < len(seq1):
            # Gap in 'seq2'
            s = fwd[i] + indel + rev[last - (i+1)]
            if s > best:
                best = s
                edge = ((i, mid), (i + 1, mid))
            # Match/mismatch
            s = fwd[i] + scorer.score(seq1[i], seq2[mid]) + rev1[last - (i+1)]
            if s > best:
                best = s
                edge = ((i, mid), (i + 1, mid + 1))
    return edge


class _Traces:
    """
    Accumulator for the score and traces built by the recursion.
    """

    def __init__(self):
        self.score = 0
        self.trace1 = []
        self.trace2 = []

    def add(self, symbols1, symbols2, score):
        self.trace1.append(symbols1)
        self.trace2.append(symbols2)
        self.score += score


def _align(seq1, seq2, scorer, indel, traces):
    if len(seq1) == 0:
        traces.add(GAP_SYMBOL * len(seq2), seq2, indel * len(seq2))
        return
    if len(seq2) == 0:
        traces.add(seq1, GAP_SYMBOL * len(seq1), indel * len(seq1))
        return
    (i1, j1), (i2, j2) = _middle_edge(seq1, seq2, scorer, indel)
    _align(seq1[:i1], seq2[:j1], scorer, indel, traces)
    if i1 == i2:
        traces.add(GAP_SYMBOL, seq2[j1], indel)
    elif j1 == j2:
        traces.add(seq1[i1], GAP_SYMBOL, indel)
    else:
        traces.add(seq1[i1], seq2[j1], scorer.score(seq1[i1], seq2[j1]))
    _align(seq1[i2:], seq2[j2:], scorer, indel, traces)


def align_global_linear_space(seq1, seq2, scorer, indel_penalty):
    """
    Perform an optimal global alignment with a linear gap penalty in
    linear memory.

    The score is the same as for ``align_pair("global", ...)``, but the
    trace may differ, if multiple optimal alignments exist.

    Parameters
    ----------
    seq1, seq2 : str or Sequence
        The sequences to be aligned.
    scorer : object
        Any object with a ``score(a, b)`` method.
    indel_penalty : int
        The (non-negative) penalty for each inserted gap.

    Returns
    -------
    alignment : Alignment
        An optimal global alignment.

    Raises
    ------
    BadInputError
        If the indel penalty is negative.

    Examples
    --------

    >>> ali = align_global_linear_space(
    ...     "PLEASANTLY", "MEANLY", ScoreMatrix.blosum62(), 5
    ... )
    >>> print(ali.score)
    8
    """
    if indel_penalty < 0:
        raise BadInputError(
            f"The indel penalty must not be negative, got {indel_penalty}"
        )
    traces = _Traces()
    _align(str(seq1), str(seq2), scorer, -indel_penalty, traces)
    return Alignment(
        traces.score, "".join(traces.trace1), "".join(traces.trace2)
    )
