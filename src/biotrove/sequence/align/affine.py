# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["align_affine"]

import numpy as np
from .alignment import Alignment, GAP_SYMBOL
from ..error import BadInputError, BadModeError


# States, i.e. the three grids
_M = 0   # match/mismatch
_IX = 1  # gap in the second sequence
_IY = 2  # gap in the first sequence
# Back pointer of a local alignment start
_START = 3


def align_affine(mode, seq1, seq2, scorer, gap_open, gap_extend):
    """
    Perform an optimal pairwise alignment with an affine gap penalty
    (Gotoh's algorithm).

    A gap of length *n* costs ``gap_open + (n-1) * gap_extend``.
    A gap in one sequence may not directly follow a gap in the other
    sequence.

    Parameters
    ----------
    mode : {'global', 'local'}
        The alignment mode.
    seq1, seq2 : str or Sequence
        The sequences to be aligned.
    scorer : object
        Any object with a ``score(a, b)`` method.
    gap_open : int or float
        The (non-negative) penalty for the first position of a gap.
    gap_extend : int or float
        The (non-negative) penalty for each further position of a gap.

    Returns
    -------
    alignment : Alignment
        The optimal alignment.

    Raises
    ------
    BadModeError
        If the mode is unknown.
    BadInputError
        If a penalty is negative.

    Examples
    --------

    >>> ali = align_affine(
    ...     "global", "PRTEINS", "PRTWPSEIN", ScoreMatrix.blosum62(), 11, 1
    ... )
    >>> print(ali.score)
    8
    >>> print(ali)
    PRT---EINS
    PRTWPSEIN-
    """
    if mode not in ("global", "local"):
        raise BadModeError(
            f"Unknown affine alignment mode '{mode}', "
            f"expected 'global' or 'local'"
        )
    if gap_open < 0 or gap_extend < 0:
        raise BadInputError("Gap penalties must not be negative")
    seq1 = str(seq1)
    seq2 = str(seq2)
    local = (mode == "local")
    n1 = len(seq1) + 1
    n2 = len(seq2) + 1

    # One score and one back pointer grid per state
    score = np.full((3, n1, n2), -np.inf)
    back = np.zeros((3, n1, n2), dtype=np.int8)
    score[_M, 0, 0] = 0
    for i in range(1, n1):
        score[_IX, i, 0] = -gap_open - (i-1) * gap_extend
        back[_IX, i, 0] = _M if i == 1 else _IX
    for j in range(1, n2):
        score[_IY, 0, j] = -gap_open - (j-1) * gap_extend
        back[_IY, 0, j] = _M if j == 1 else _IY
    if local:
        score[_M, 0, :] = 0
        score[_M, :, 0] = 0
        back[_M, 0, :] = _START
        back[_M, :, 0] = _START

    for i in range(1, n1):
        a = seq1[i-1]
        for j in range(1, n2):
            # Match/mismatch
            state = _M
            best = score[_M, i-1, j-1]
            for s in (_IX, _IY):
                if score[s, i-1, j-1] > best:
                    best = score[s, i-1, j-1]
                    state = s
            best += scorer.score(a, seq2[j-1])
            if local and best <= 0:
                best = 0
                state = _START
            score[_M, i, j] = best
            back[_M, i, j] = state
            # Gap in 'seq2', extension preferred over opening
            extend = score[_IX, i-1, j] - gap_extend
            open_ = score[_M, i-1, j] - gap_open
            if open_ > extend:
                score[_IX, i, j] = open_
                back[_IX, i, j] = _M
            else:
                score[_IX, i, j] = extend
                back[_IX, i, j] = _IX
            # Gap in 'seq1'
            extend = score[_IY, i, j-1] - gap_extend
            open_ = score[_M, i, j-1] - gap_open
            if open_ > extend:
                score[_IY, i, j] = open_
                back[_IY, i, j] = _M
            else:
                score[_IY, i, j] = extend
                back[_IY, i, j] = _IY

    if local:
        # A local alignment never ends in a gap
        i, j = np.unravel_index(np.argmax(score[_M]), score[_M].shape)
        i, j = int(i), int(j)
        state = _M
    else:
        i, j = n1 - 1, n2 - 1
        state = int(np.argmax(score[:, i, j]))
    best = float(score[state, i, j])

    trace1 = []
    trace2 = []
    while (i, j) != (0, 0):
        previous = int(back[state, i, j])
        if state == _M:
            if previous == _START:
                break
            trace1.append(seq1[i-1])
            trace2.append(seq2[j-1])
            i -= 1
            j -= 1
        elif state == _IX:
            trace1.append(seq1[i-1])
            trace2.append(GAP_SYMBOL)
            i -= 1
        else:
            trace1.append(GAP_SYMBOL)
            trace2.append(seq2[j-1])
            j -= 1
        state = previous

    if best.is_integer():
        best = int(best)
    return Alignment(
        best, "".join(reversed(trace1)), "".join(reversed(trace2))
    )
