# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["align_pair", "ALIGN_MODES"]

import numpy as np
from .alignment import Alignment, GAP_SYMBOL
from ..error import BadInputError, BadModeError


# Rules for filling a cell of the dynamic programming grid
_SP = 0  # skip prefix ("free taxi ride" from the origin)
_G1 = 1  # gap in the first sequence, back one step left
_G2 = 2  # gap in the second sequence, back one step up
_MM = 3  # match/mismatch, back one step diagonally

# Top row rule, left edge rule and interior rules of each mode
# The order of the interior rules decides about the trace for equal
# scores
_MODES = {
    "global":  (_G1, _G2, (_G2, _G1, _MM)),
    "local":   (_SP, _SP, (_SP, _G2, _G1, _MM)),
    "fitting": (_SP, _G2, (_G2, _G1, _MM)),
    "overlap": (_G1, _SP, (_G2, _G1, _MM)),
}

ALIGN_MODES = tuple(_MODES.keys())


def align_pair(mode, seq1, seq2, scorer, indel_penalty):
    """
    Perform an optimal pairwise alignment with a linear gap penalty
    using dynamic programming.

    The following modes are available:

        - **global** - Align both sequences over their entire length.
        - **local** - Align the best scoring substrings of both
          sequences.
        - **fitting** - Align the entire first sequence to a substring
          of the second sequence.
        - **overlap** - Align a suffix of the first sequence with a
          prefix of the second sequence.

    If multiple alignments have the optimal score, the trace is chosen
    by a fixed rule order (gap in `seq2`, gap in `seq1`,
    match/mismatch), so the result is deterministic.

    Parameters
    ----------
    mode : {'global', 'local', 'fitting', 'overlap'}
        The alignment mode.
    seq1, seq2 : str or Sequence
        The sequences to be aligned.
        The gap symbol ``'-'`` is not allowed.
    scorer : object
        Any object with a ``score(a, b)`` method returning the score of
        two aligned symbols, e.g. a :class:`ScoreMatrix` or a
        :class:`MatchScorer`.
    indel_penalty : int
        The (non-negative) penalty for each inserted gap.

    Returns
    -------
    alignment : Alignment
        The optimal alignment.
        For the *local* mode the alignment is empty if no positive
        score can be achieved.

    Raises
    ------
    BadModeError
        If the mode is unknown.
    BadInputError
        If the indel penalty is negative.

    Examples
    --------

    >>> ali = align_pair(
    ...     "global", "PLEASANTLY", "MEANLY", ScoreMatrix.blosum62(), 5
    ... )
    >>> print(ali.score)
    8
    >>> print(ali)
    PLEASANTLY
    -MEA--N-LY
    """
    if mode not in _MODES:
        raise BadModeError(
            f"Unknown alignment mode '{mode}', "
            f"expected one of {', '.join(ALIGN_MODES)}"
        )
    if indel_penalty < 0:
        raise BadInputError(
            f"The indel penalty must not be negative, got {indel_penalty}"
        )
    seq1 = str(seq1)
    seq2 = str(seq2)
    top, left, interior = _MODES[mode]
    score, rule = _fill(seq1, seq2, scorer, indel_penalty, top, left, interior)

    n1, n2 = score.shape
    if mode == "global":
        end = (n1 - 1, n2 - 1)
    elif mode == "local":
        # The first maximum in row-major order,
        # the origin if no score is positive
        end = np.unravel_index(np.argmax(score), score.shape)
        if score[end] <= 0:
            end = (0, 0)
    else:
        # Skip a suffix of 'seq2'
        end = (n1 - 1, int(np.argmax(score[-1])))
    end = (int(end[0]), int(end[1]))
    trace1, trace2 = _traceback(seq1, seq2, rule, end)
    return Alignment(int(score[end]), trace1, trace2)


def _fill(seq1, seq2, scorer, indel_penalty, top, left, interior):
    n1 = len(seq1) + 1
    n2 = len(seq2) + 1
    score = np.zeros((n1, n2), dtype=np.int64)
    rule = np.zeros((n1, n2), dtype=np.int8)

    # Top row
    rule[0, 1:] = top
    if top == _G1:
        score[0, 1:] = -indel_penalty * np.arange(1, n2)
    # Left edge
    rule[1:, 0] = left
    if left == _G2:
        score[1:, 0] = -indel_penalty * np.arange(1, n1)

    prev = score[0].tolist()
    for i in range(1, n1):
        a = seq1[i-1]
        subst = [scorer.score(a, b) for b in seq2]
        row = [0] * n2
        row[0] = int(score[i, 0])
        row_rule = [left] * n2
        for j in range(1, n2):
            best = None
            best_rule = None
            for r in interior:
                if r == _SP:
                    s = 0
                elif r == _G2:
                    s = prev[j] - indel_penalty
                elif r == _G1:
                    s = row[j-1] - indel_penalty
                else:
                    s = prev[j-1] + subst[j-1]
                if best is None or s > best:
                    best = s
                    best_rule = r
            row[j] = best
            row_rule[j] = best_rule
        score[i, 1:] = row[1:]
        rule[i, 1:] = row_rule[1:]
        prev = row
    return score, rule


def _traceback(seq1, seq2, rule, end):
    i, j = end
    trace1 = []
    trace2 = []
    while (i, j) != (0, 0):
        r = rule[i, j]
        if r == _SP:
            break
        elif r == _G1:
            trace1.append(GAP_SYMBOL)
            trace2.append(seq2[j-1])
            j -= 1
        elif r == _G2:
            trace1.append(seq1[i-1])
            trace2.append(GAP_SYMBOL)
            i -= 1
        else:
            trace1.append(seq1[i-1])
            trace2.append(seq2[j-1])
            i -= 1
            j -= 1
    return "".join(reversed(trace1)), "".join(reversed(trace2))
