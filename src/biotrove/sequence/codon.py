# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["CODONS", "STOP_SYMBOL", "codon_index", "translate_codon",
           "is_start_codon", "translate_codes"]

import numpy as np


# The standard genetic code, indexed by the base indices (order 'ACTG')
# of the three codon positions as digits of a base-4 number
CODONS = "KNNKTTTTIIIMRSSRQHHQPPPPLLLLRRRR*YY*SSSSLFFL*CCWEDDEAAAAVVVVGGGG"
STOP_SYMBOL = "*"

_CODON_CODES = np.frombuffer(CODONS.encode("ascii"), dtype=np.uint8)


def _ord(symbol):
    return symbol if isinstance(symbol, (int, np.integer)) else ord(symbol)


def codon_index(b0, b1, b2):
    """
    Get the index of a codon in :attr:`CODONS`.

    DNA and RNA codons give the same index, as ``T`` and ``U`` share
    the same base bits.
    Case is ignored.

    Parameters
    ----------
    b0, b1, b2 : str or int
        The three bases of the codon, either as single characters or
        as symbol bytes.

    Returns
    -------
    index : int
        The codon index in the range ``0`` to ``63``.
    """
    b0, b1, b2 = _ord(b0), _ord(b1), _ord(b2)
    return int((b0 & 6) << 3 | (b1 & 6) << 1 | (b2 & 6) >> 1)


def translate_codon(b0, b1, b2):
    """
    Translate a single codon into its amino acid.

    Parameters
    ----------
    b0, b1, b2 : str or int
        The three bases of the codon.

    Returns
    -------
    symbol : str
        The one-letter amino acid symbol or ``'*'`` for a stop codon.

    Examples
    --------

    >>> print(translate_codon("A", "T", "G"))
    M
    >>> print(translate_codon("u", "a", "a"))
    *
    """
    return CODONS[codon_index(b0, b1, b2)]


def is_start_codon(b0, b1, b2):
    """
    Check whether a codon is the start codon ``ATG`` (``AUG``),
    regardless of case.
    """
    b0, b1, b2 = _ord(b0), _ord(b1), _ord(b2)
    return b0 & 6 == 0 and b1 & 6 == 4 and b2 & 6 == 6


def translate_codes(code):
    """
    Translate an array of nucleotide symbol bytes codon by codon.

    Parameters
    ----------
    code : ndarray, dtype=np.uint8
        The nucleotide symbol bytes.
        Trailing bases that do not form a complete codon are ignored.

    Returns
    -------
    aa_code : ndarray, dtype=np.uint8
        The amino acid symbol bytes, including ``'*'`` for stop codons.
    """
    n_codons = len(code) // 3
    codons = np.asarray(code[:n_codons * 3], dtype=np.uint8).reshape(-1, 3)
    bits = (codons & 6).astype(np.int64)
    index = bits[:, 0] << 3 | bits[:, 1] << 1 | bits[:, 2] >> 1
    return _CODON_CODES[index]
