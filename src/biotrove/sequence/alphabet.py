# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Symbol tables and the bit level conventions of the nucleotide
alphabets.

All sequences are stored as *NumPy* arrays of ASCII bytes.
For the four DNA bases ``A``, ``C``, ``T`` and ``G`` (in either case)
bits 1 and 2 of the byte uniquely identify the base, with the order
``A=0, C=2, T=4, G=6``.
Bit 5 (:attr:`CASE_BIT`) distinguishes lower from upper case.
Many functions in this subpackage operate on these bits directly
instead of looking up symbols.
"""

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["AlphabetError", "CASE_BIT", "BASE_ORDER", "DNA8_SYMBOLS",
           "RNA8_SYMBOLS", "AA20_ALPHABET", "base_index", "complement8",
           "dna_complement", "rna_complement", "gc_skew", "check_symbols"]

import numpy as np


CASE_BIT = 0x20
BASE_ORDER = "ACTG"
DNA8_SYMBOLS = "ACTGactg"
RNA8_SYMBOLS = "ACUGacug"
AA20_ALPHABET = "ACDEFGHIKLMNPQRSTVWY"


class AlphabetError(ValueError):
    """
    Indicates that a sequence contains a symbol outside of the alphabet
    of its sequence type.
    """
    pass


def _complement_table(pairs):
    table = np.arange(256, dtype=np.uint8)
    for sym1, sym2 in pairs:
        for a, b in ((sym1, sym2), (sym2, sym1)):
            table[ord(a)] = ord(b)
            table[ord(a.lower())] = ord(b.lower())
    table.setflags(write=False)
    return table


# IUPAC symbols including ambiguity codes,
# bytes without a complement map to themselves
_DNA_COMPLEMENT = _complement_table([
    ("G", "C"), ("T", "A"), ("R", "Y"), ("S", "S"), ("W", "W"),
    ("K", "M"), ("D", "H"), ("B", "V"), ("N", "N")
])
_RNA_COMPLEMENT = _complement_table([
    ("G", "C"), ("U", "A"), ("R", "Y"), ("S", "S"), ("W", "W"),
    ("K", "M"), ("D", "H"), ("B", "V"), ("N", "N")
])


def base_index(code):
    """
    Get the index of a DNA8 or RNA8 base in the order ``ACTG``.

    Parameters
    ----------
    code : int or ndarray, dtype=np.uint8
        One or multiple symbol bytes.

    Returns
    -------
    index : int or ndarray
        The base index ``0`` to ``3``.
        The result is meaningless for other symbols.
    """
    return code >> 1 & 3


def complement8(code):
    """
    Complement DNA8 symbol bytes, preserving their case.

    The complement is computed with bit operations only, hence the
    result is meaningless for bytes outside of ``ACTGactg``.

    Parameters
    ----------
    code : int or ndarray, dtype=np.uint8
        One or multiple symbol bytes.

    Returns
    -------
    complement : int or ndarray, dtype=np.uint8
        The complementary symbol bytes.
    """
    if isinstance(code, np.ndarray):
        return code ^ 4 ^ ((~code & 2) >> 1) * np.uint8(17)
    return code ^ 4 ^ ((~code & 2) >> 1) * 17


def dna_complement(code):
    """
    Complement IUPAC DNA symbol bytes, including ambiguity symbols.

    Case is preserved, bytes that are no IUPAC DNA symbol are returned
    unchanged.

    Parameters
    ----------
    code : int or ndarray, dtype=np.uint8
        One or multiple symbol bytes.

    Returns
    -------
    complement : int or ndarray, dtype=np.uint8
        The complementary symbol bytes.
    """
    return _DNA_COMPLEMENT[code]


def rna_complement(code):
    """
    Complement IUPAC RNA symbol bytes analogous to
    :func:`dna_complement()`.
    """
    return _RNA_COMPLEMENT[code]


def gc_skew(code):
    """
    Get the GC skew contribution of DNA8 symbol bytes.

    Parameters
    ----------
    code : ndarray, dtype=np.uint8
        Symbol bytes.

    Returns
    -------
    skew : ndarray, dtype=int
        ``1`` for ``G``, ``-1`` for ``C`` and ``0`` for ``A`` and
        ``T``, regardless of case.
    """
    code = np.asarray(code).astype(np.int64) >> 1
    return -(code & 1) & ((code & 2) - 1)


def check_symbols(code, symbols):
    """
    Check that each byte in `code` is one of the given symbols.

    Parameters
    ----------
    code : ndarray, dtype=np.uint8
        Symbol bytes.
    symbols : str
        The allowed symbols.

    Raises
    ------
    AlphabetError
        If a byte is not an allowed symbol.
    """
    allowed = np.frombuffer(symbols.encode("ascii"), dtype=np.uint8)
    invalid = ~np.isin(code, allowed)
    if invalid.any():
        pos = int(np.argmax(invalid))
        raise AlphabetError(
            f"Symbol {repr(chr(code[pos]))} at position {pos} "
            f"is not in the alphabet '{symbols}'"
        )
