# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["ScoreMatrix", "MatchScorer", "linear_gap", "constant_gap",
           "AA20_ORDER"]

import os
import numpy as np
from .alignment import GAP_SYMBOL
from ..error import LengthMismatchError


class ScoreMatrix(object):
    """
    A :class:`ScoreMatrix` is the foundation for scoring in sequence
    alignments.
    It maps each pairing of two symbols of an alphabet to a score
    (integer).

    The class uses a 2-D (n x n) :class:`ndarray`
    (dtype=:attr:`numpy.int32`), where each element stores the score for
    a symbol pairing, indexed by the position of the respective symbols
    in the alphabet string.

    There are 3 ways to create instances:

    At first a 2-D :class:`ndarray` containing the scores can be
    directly provided.

    Secondly a dictionary can be provided, where the keys are pairing
    tuples and values are the corresponding scores.
    Pairings have to be provided for each possible combination.

    At last a valid matrix name can be given, which is loaded from the
    internal matrix database.
    A list of all available matrix names is returned by
    :meth:`list_db()`.

    Any object with a ``score(a, b)`` method can be used for alignments,
    this class is the default implementation for amino acids.
    Objects of this class are immutable.

    Parameters
    ----------
    alphabet : str, length=n
        The symbols of the matrix axes.
    score_matrix : ndarray, shape=(n,n) or dict or str
        Either a position indexed :class:`ndarray` containing the
        scores, or a dictionary mapping the symbol pairing to scores,
        or a string referencing a matrix in the internal database.

    Raises
    ------
    KeyError
        If the matrix dictionary misses a symbol given in the alphabet.

    Examples
    --------

    Creating a matrix via a matrix dictionary:

    >>> matrix_dict = {("A","A"): 1, ("A","B"): -1,
    ...                ("B","A"): -1, ("B","B"): 2}
    >>> matrix = ScoreMatrix("AB", matrix_dict)
    >>> print(matrix)
        A   B
    A   1  -1
    B  -1   2
    >>> print(matrix.score("B", "B"))
    2

    Creating a matrix via database name:

    >>> matrix = ScoreMatrix(AA20_ORDER, "BLOSUM62")
    >>> print(matrix.score("W", "W"))
    11
    """

    # Directory of matrix files
    _db_dir = os.path.join(os.path.dirname(os.path.realpath(__file__)),
                           "matrix_data")

    def __init__(self, alphabet, score_matrix):
        self._alph = alphabet
        self._pos = {symbol: i for i, symbol in enumerate(alphabet)}
        if isinstance(score_matrix, dict):
            self._fill_with_matrix_dict(score_matrix)
        elif isinstance(score_matrix, np.ndarray):
            alph_shape = (len(alphabet), len(alphabet))
            if score_matrix.shape != alph_shape:
                raise ValueError(
                    f"Matrix has shape {score_matrix.shape}, "
                    f"but {alph_shape} is required"
                )
            self._matrix = score_matrix.astype(np.int32)
        elif isinstance(score_matrix, str):
            matrix_dict = ScoreMatrix.dict_from_db(score_matrix)
            self._fill_with_matrix_dict(matrix_dict)
        else:
            raise TypeError("Matrix must be either a dictionary, "
                            "an 2-D ndarray or a string")
        # This class is immutable and has a getter function for the
        # score matrix -> make the score matrix read-only
        self._matrix.setflags(write=False)

    def __repr__(self):
        """Represent ScoreMatrix as a string for debugging."""
        return f"ScoreMatrix({self._alph!r}, " \
               f"np.{np.array_repr(self._matrix)})"

    def __eq__(self, item):
        if not isinstance(item, ScoreMatrix):
            return False
        if self._alph != item.alphabet:
            return False
        if not np.array_equal(self.score_matrix(), item.score_matrix()):
            return False
        return True

    def __ne__(self, item):
        return not self == item

    def _fill_with_matrix_dict(self, matrix_dict):
        n = len(self._alph)
        self._matrix = np.zeros((n, n), dtype=np.int32)
        for i, sym1 in enumerate(self._alph):
            for j, sym2 in enumerate(self._alph):
                self._matrix[i, j] = int(matrix_dict[sym1, sym2])

    @property
    def alphabet(self):
        return self._alph

    def score_matrix(self):
        """
        Get the 2-D :class:`ndarray` containing the score values.

        Returns
        -------
        matrix : ndarray, shape=(n,n), dtype=np.int32
            The position indexed score matrix.
            The array is read-only.
        """
        return self._matrix

    def is_symmetric(self):
        """
        Check whether the score matrix is symmetric.
        """
        return np.array_equal(self._matrix, np.transpose(self._matrix))

    def score(self, symbol1, symbol2):
        """
        Get the substitution score of two symbols.

        Parameters
        ----------
        symbol1, symbol2 : str
            Symbols to be aligned.
            The gap symbol is not part of the alphabet.

        Returns
        -------
        score : int
            The substitution / alignment score.

        Raises
        ------
        KeyError
            If a symbol is not in the alphabet.
        """
        return int(self._matrix[self._pos[symbol1], self._pos[symbol2]])

    def linear_gap(self, s, t, gap_penalty):
        """
        Score two gapped sequences, where each gap position is
        penalized.

        See Also
        --------
        biotrove.sequence.align.linear_gap
        """
        return linear_gap(self, s, t, gap_penalty)

    def constant_gap(self, s, t, gap_penalty):
        """
        Score two gapped sequences, where each run of gaps is penalized
        once.

        See Also
        --------
        biotrove.sequence.align.constant_gap
        """
        return constant_gap(self, s, t, gap_penalty)

    def __str__(self):
        # Create matrix in NCBI format
        string = " "
        for symbol in self._alph:
            string += f" {symbol:>3}"
        string += "\n"
        for i, symbol in enumerate(self._alph):
            string += f"{symbol:>1}"
            for j in range(len(self._alph)):
                string += f" {int(self._matrix[i,j]):>3d}"
            string += "\n"
        # Remove terminal line break
        string = string[:-1]
        return string

    @staticmethod
    def dict_from_str(string):
        """
        Create a matrix dictionary from a string in NCBI matrix format.

        Symbols of the first axis are taken from the left column,
        symbols of the second axis are taken from the top row.

        Returns
        -------
        matrix_dict : dict
            A dictionary mapping tuples of the aligned symbols to the
            corresponding scores.
        """
        lines = [line.strip() for line in string.split("\n")]
        lines = [line for line in lines if len(line) != 0 and line[0] != "#"]
        symbols1 = [line.split()[0] for line in lines[1:]]
        symbols2 = lines[0].split()
        scores = np.array([line.split()[1:] for line in lines[1:]]).astype(int)

        matrix_dict = {}
        for i in range(len(symbols1)):
            for j in range(len(symbols2)):
                matrix_dict[(symbols1[i], symbols2[j])] = int(scores[i,j])
        return matrix_dict

    @staticmethod
    def dict_from_db(matrix_name):
        """
        Create a matrix dictionary from a valid matrix name in the
        internal matrix database.

        Returns
        -------
        matrix_dict : dict
            A dictionary mapping tuples of the aligned symbols to the
            corresponding scores.
        """
        filename = ScoreMatrix._db_dir + os.sep + matrix_name + ".mat"
        with open(filename, "r") as f:
            return ScoreMatrix.dict_from_str(f.read())

    @staticmethod
    def list_db():
        """
        List all matrix names in the internal database.

        Returns
        -------
        db_list : list
            List of matrix names in the internal database.
        """
        files = os.listdir(ScoreMatrix._db_dir)
        # Remove '.mat' from files
        return [file[:-4] for file in sorted(files) if file.endswith(".mat")]

    @staticmethod
    def blosum62():
        """
        Get the BLOSUM62 matrix for the 20 standard amino acids.
        """
        return _matrix_blosum62

    @staticmethod
    def pam250():
        """
        Get the PAM250 matrix for the 20 standard amino acids.
        """
        return _matrix_pam250


class MatchScorer:
    """
    A scorer, that only distinguishes between matching and mismatching
    symbols.

    Parameters
    ----------
    match : int, optional
        The score of two identical symbols.
    mismatch : int, optional
        The score of two different symbols.
    """

    def __init__(self, match=1, mismatch=-1):
        self.match = match
        self.mismatch = mismatch

    def __repr__(self):
        return f"MatchScorer(match={self.match}, mismatch={self.mismatch})"

    def score(self, symbol1, symbol2):
        return self.match if symbol1 == symbol2 else self.mismatch


def _check_gapped(s, t):
    s = str(s)
    t = str(t)
    if len(s) != len(t):
        raise LengthMismatchError(
            f"Gapped sequences have different lengths "
            f"({len(s)} and {len(t)})"
        )
    return s, t


def linear_gap(scorer, s, t, gap_penalty):
    """
    Score two gapped sequences with a linear gap penalty.

    Every column containing a gap symbol subtracts the penalty, every
    other column adds the score of the scorer.

    Parameters
    ----------
    scorer : object
        Any object with a ``score(a, b)`` method.
    s, t : str or Sequence
        The gapped sequences of equal length.
    gap_penalty : int
        The penalty for each gap position.

    Returns
    -------
    score : int
        The alignment score.

    Raises
    ------
    LengthMismatchError
        If the sequences have different lengths.

    Examples
    --------

    >>> blosum62 = ScoreMatrix.blosum62()
    >>> print(linear_gap(blosum62, "PLEASANTLY", "-MEA--N-LY", 5))
    8
    """
    s, t = _check_gapped(s, t)
    score = 0
    for a, b in zip(s, t):
        if a == GAP_SYMBOL or b == GAP_SYMBOL:
            score -= gap_penalty
        else:
            score += scorer.score(a, b)
    return score


def constant_gap(scorer, s, t, gap_penalty):
    """
    Score two gapped sequences with a constant gap penalty.

    Each run of consecutive gaps in one of the sequences subtracts the
    penalty once, regardless of its length.

    Parameters
    ----------
    scorer : object
        Any object with a ``score(a, b)`` method.
    s, t : str or Sequence
        The gapped sequences of equal length.
    gap_penalty : int
        The penalty for each gap run.

    Returns
    -------
    score : int
        The alignment score.

    Raises
    ------
    LengthMismatchError
        If the sequences have different lengths.

    Examples
    --------

    >>> blosum62 = ScoreMatrix.blosum62()
    >>> print(constant_gap(blosum62, "PLEASANTLY", "-MEA--N-LY", 5))
    13
    """
    s, t = _check_gapped(s, t)
    score = 0
    # None, 's' or 't', depending on which sequence has an open gap
    open_gap = None
    for a, b in zip(s, t):
        if a == GAP_SYMBOL:
            if open_gap != "s":
                score -= gap_penalty
                open_gap = "s"
        elif b == GAP_SYMBOL:
            if open_gap != "t":
                score -= gap_penalty
                open_gap = "t"
        else:
            score += scorer.score(a, b)
            open_gap = None
    return score


# Amino acid order of the NCBI matrix files
AA20_ORDER = "ARNDCQEGHILKMFPSTWYV"

_matrix_blosum62 = ScoreMatrix(AA20_ORDER, "BLOSUM62")
_matrix_pam250 = ScoreMatrix(AA20_ORDER, "PAM250")
