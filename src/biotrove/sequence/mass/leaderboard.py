# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Sequencing of cyclic peptides from mass spectra.

:func:`seq_cyclic_theo()` solves the ideal case by branch and bound,
the leaderboard functions tolerate missing and false masses by keeping
only the best scoring candidates in each round.
"""

__name__ = "biotrove.sequence.mass"
__author__ = "The Biotrove contributors"
__all__ = ["cut", "leaderboard_int", "leaderboard_mass", "seq_cyclic_theo"]

import warnings
from .spectrum import AAInt, AAMass, MassCounts, IntSpec, MassSpec
from .tables import AA18_INT, MONOISOTOPIC_MASSES
from ..error import BadInputError, SpectrumWarning


def cut(items, n, key):
    """
    Keep the *n* items with the highest key, including all items that
    tie with the *n*-th item.

    Parameters
    ----------
    items : iterable object
        The items to select from.
    n : int
        The number of items to keep.
    key : callable
        Gives the score of an item.

    Returns
    -------
    kept : list
        The kept items, sorted by decreasing score.
        Items with equal score keep their original order.

    Examples
    --------

    >>> print(cut([("a", 1), ("b", 3), ("c", 2), ("d", 2)], 2,
    ...           key=lambda item: item[1]))
    [('b', 3), ('c', 2), ('d', 2)]
    """
    if n <= 0:
        return []
    items = sorted(items, key=key, reverse=True)
    if len(items) <= n:
        return items
    last = key(items[n-1])
    r = n
    while r < len(items) and key(items[r]) == last:
        r += 1
    return items[:r]


def _check_spectrum(spectrum, alphabet):
    if len(spectrum) == 0:
        raise BadInputError("The spectrum is empty")
    if len(alphabet) == 0:
        raise BadInputError("The mass alphabet is empty")
    if min(alphabet) <= 0:
        raise BadInputError("The mass alphabet must contain positive masses")


def leaderboard_int(spectrum, n, nr, alphabet=AA18_INT):
    """
    Sequence a cyclic peptide from an experimental integer spectrum by
    a leaderboard search.

    In each round all candidate peptides are extended by each mass of
    the alphabet.
    Candidates reaching the parent mass are scored against the
    spectrum as cyclic peptides and put aside, heavier candidates are
    discarded.
    If more than *n* candidates remain, only the *n* best (plus ties)
    under the linear peptide score are kept.
    The score is the size of the multiset intersection of the
    theoretical spectrum of the candidate with the spectrum.

    Parameters
    ----------
    spectrum : IntSpec or array-like of int
        The experimental spectrum.
        The largest mass is the parent mass.
    n : int
        The leaderboard size.
    nr : int
        The number of results (plus ties).
    alphabet : iterable object of int, optional
        The amino acid masses, by default the 18 distinct integer masses.

    Returns
    -------
    peptides : list of AAInt
        The best scoring peptides with the parent mass, sorted by
        decreasing score.

    Raises
    ------
    BadInputError
        If the spectrum or the alphabet is empty.

    Warns
    -----
    SpectrumWarning
        If no candidate reaches the parent mass.
    """
    if not isinstance(spectrum, IntSpec):
        spectrum = IntSpec(spectrum)
    alphabet = tuple(int(m) for m in alphabet)
    _check_spectrum(spectrum, alphabet)
    parent_mass = spectrum.parent_mass()
    counts = spectrum.counts()

    # Each candidate is a tuple (peptide, mass)
    board = [(AAInt(), 0)]
    # Each finished candidate is a tuple (peptide, score)
    done = []
    while board:
        expanded = [
            (peptide + (m,), mass + m)
            for peptide, mass in board for m in alphabet
        ]
        board = []
        for peptide, mass in expanded:
            if mass == parent_mass:
                done.append((peptide, peptide.cyclic_common_counts(counts)))
            elif mass < parent_mass:
                board.append((peptide, mass))
        if n < len(board):
            scored = [
                (peptide, mass, peptide.linear_common_counts(counts))
                for peptide, mass in board
            ]
            board = [
                (peptide, mass) for peptide, mass, _
                in cut(scored, n, key=lambda c: c[2])
            ]

    if not done:
        warnings.warn(
            f"No candidate peptide reached the parent mass {parent_mass}",
            SpectrumWarning
        )
        return []
    return [peptide for peptide, _ in cut(done, nr, key=lambda c: c[1])]


def leaderboard_mass(spectrum, n, nr, tolerance=0.3):
    """
    Sequence a cyclic peptide from an experimental monoisotopic
    spectrum by a leaderboard search over the 20 amino acids.

    This works like :func:`leaderboard_int()`, but masses are compared
    with a tolerance (see :meth:`MassSpec.score()`).
    A candidate is finished, when its mass is within the tolerance of
    the parent mass.

    Parameters
    ----------
    spectrum : MassSpec or array-like of float
        The experimental spectrum.
        The largest mass is the parent mass.
    n : int
        The leaderboard size.
    nr : int
        The number of results (plus ties).
    tolerance : float, optional
        The maximum mass difference of matching masses.

    Returns
    -------
    peptides : list of str
        The best scoring peptides in one-letter code, sorted by
        decreasing score.

    Warns
    -----
    SpectrumWarning
        If no candidate reaches the parent mass.
    """
    if not isinstance(spectrum, MassSpec):
        spectrum = MassSpec(spectrum)
    amino_acids = sorted(MONOISOTOPIC_MASSES)
    _check_spectrum(spectrum, [MONOISOTOPIC_MASSES[aa] for aa in amino_acids])
    parent_mass = spectrum.parent_mass()

    # Each candidate is a tuple (peptide, masses, mass)
    board = [("", AAMass(), 0.0)]
    done = []
    while board:
        expanded = [
            (peptide + aa,
             masses + (MONOISOTOPIC_MASSES[aa],),
             mass + MONOISOTOPIC_MASSES[aa])
            for peptide, masses, mass in board for aa in amino_acids
        ]
        board = []
        for peptide, masses, mass in expanded:
            if abs(parent_mass - mass) <= tolerance:
                score = spectrum.score(masses.cyclic_spec(), tolerance)
                done.append((peptide, score))
            elif mass < parent_mass:
                board.append((peptide, masses, mass))
        if n < len(board):
            scored = [
                (candidate,
                 spectrum.score(candidate[1].linear_spec(), tolerance))
                for candidate in board
            ]
            board = [
                candidate for candidate, _
                in cut(scored, n, key=lambda c: c[1])
            ]

    if not done:
        warnings.warn(
            f"No candidate peptide reached the parent mass {parent_mass}",
            SpectrumWarning
        )
        return []
    return [peptide for peptide, _ in cut(done, nr, key=lambda c: c[1])]


def _consistent(peptide, counts):
    """
    Check whether the masses of all non-empty linear subpeptides are
    contained in the spectrum.
    """
    masses = peptide.linear_spec().masses[1:]
    return MassCounts(masses.tolist()).is_subset(counts)


def seq_cyclic_theo(spectrum):
    """
    Find all cyclic peptides, whose theoretical spectrum equals the
    given spectrum, by a branch and bound search over the 18 distinct
    amino acid masses.

    Parameters
    ----------
    spectrum : IntSpec or array-like of int
        The ideal cyclic spectrum.

    Returns
    -------
    peptides : list of AAInt
        All matching peptides, i.e. all rotations and reversals of the
        solution.

    Examples
    --------

    >>> peptides = seq_cyclic_theo([0, 113, 128, 186, 241, 299, 314, 427])
    >>> print(" ".join(str(p) for p in peptides))
    113-128-186 113-186-128 128-113-186 128-186-113 186-113-128 186-128-113
    """
    if not isinstance(spectrum, IntSpec):
        spectrum = IntSpec(spectrum)
    if len(spectrum) == 0:
        raise BadInputError("The spectrum is empty")
    counts = spectrum.counts()
    results = []
    board = [AAInt()]
    while board:
        expanded = [peptide + (m,) for peptide in board for m in AA18_INT]
        board = []
        for peptide in expanded:
            if peptide.cyclic_spec() == spectrum:
                results.append(peptide)
            elif _consistent(peptide, counts):
                board.append(peptide)
    return results
