# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["solve_partial_digest"]

from collections import Counter
from .error import BadInputError


def solve_partial_digest(distances):
    """
    Solve the *partial digest problem* of restriction mapping.

    Find all sets of positions, whose pairwise distances are exactly the
    given multiset of distances.

    Parameters
    ----------
    distances : iterable object of int or Counter
        The full multiset of pairwise distances, i.e. for *n* positions
        it contains *n(n-1)/2* elements.

    Returns
    -------
    solutions : list of list of int
        Each solution is a sorted list of positions, starting at 0 and
        ending at the largest distance.

    Examples
    --------

    >>> for positions in solve_partial_digest([2, 2, 3, 3, 4, 5, 6, 7, 8, 10]):
    ...     print(positions)
    [0, 3, 6, 8, 10]
    [0, 2, 4, 7, 10]
    """
    remaining = Counter(distances)
    if sum(remaining.values()) == 0:
        raise BadInputError("The distance multiset is empty")
    width = max(remaining)
    remaining -= Counter([width])
    solutions = []
    _place(remaining, [0, width], width, solutions)
    return solutions


def _delta(y, positions):
    return Counter(abs(y - x) for x in positions)


def _place(remaining, positions, width, solutions):
    if not remaining:
        solutions.append(sorted(positions))
        return
    y = max(remaining)
    for candidate in (y, width - y):
        delta = _delta(candidate, positions)
        if all(remaining[d] >= n for d, n in delta.items()):
            positions.append(candidate)
            remaining.subtract(delta)
            _place(+remaining, positions, width, solutions)
            remaining.update(delta)
            positions.pop()
