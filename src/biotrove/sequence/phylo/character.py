# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"
__all__ = ["CharacterArray", "character_table", "character_arrays"]

from collections import Counter
from ..error import BadInputError, LengthMismatchError


class CharacterArray:
    """
    A subset of *n* taxa, e.g. the taxa sharing a character.

    The subset is stored as bit mask, where bit *i* is set if taxon *i*
    is present.
    The string representation lists the taxa from left to right as
    ``'1'`` (present) or ``'0'`` (absent).

    Parameters
    ----------
    n : int, optional
        The number of represented taxa.
    string : str, optional
        The initial taxa, see :meth:`set_string()`.

    Examples
    --------

    >>> array = CharacterArray(5, "1")
    >>> print(array.include_taxon(3))
    10010
    >>> print(array.taxa_present(), array.trivial())
    2 False
    """

    def __init__(self, n=0, string=""):
        self._n = n
        self.bits = 0
        self.set_string(string)

    def __len__(self):
        return self._n

    def __str__(self):
        return "".join(
            "1" if self.bits >> i & 1 else "0" for i in range(self._n)
        )

    def __repr__(self):
        return f"CharacterArray({self._n}, {str(self)!r})"

    def __eq__(self, item):
        if not isinstance(item, CharacterArray):
            return False
        return self._n == item._n and self.bits == item.bits

    def set_string(self, string):
        """
        Set the present taxa from a string of ``'1'`` and ``'0'``.

        Any symbol other than ``'1'`` means absence.
        The array expands to the length of the string, if necessary,
        taxa after the end of the string are absent.

        Returns
        -------
        self : CharacterArray
            This object.
        """
        self._n = max(self._n, len(string))
        self.bits = 0
        for i, symbol in enumerate(string):
            if symbol == "1":
                self.bits |= 1 << i
        return self

    def include_taxon(self, i):
        """
        Mark taxon *i* as present, expanding the array if necessary.

        Returns
        -------
        self : CharacterArray
            This object.
        """
        self._n = max(self._n, i + 1)
        self.bits |= 1 << i
        return self

    def include_array(self, array):
        """
        Merge the present taxa of another array into this array.

        Returns
        -------
        self : CharacterArray
            This object.
        """
        self._n = max(self._n, len(array))
        self.bits |= array.bits
        return self

    def taxa_present(self):
        """
        Count the present taxa.
        """
        return bin(self.bits).count("1")

    def trivial(self):
        """
        Check whether this array is a trivial split, i.e. less than two
        taxa are present or less than two taxa are absent.
        """
        present = self.taxa_present()
        return present < 2 or self._n - present < 2


def _check_strings(strings):
    strings = [str(s) for s in strings]
    if len(strings) < 4:
        raise BadInputError(
            "At least four strings are required for a character table"
        )
    length = len(strings[0])
    if length == 0:
        raise BadInputError("Cannot characterize empty strings")
    for s in strings[1:]:
        if len(s) != length:
            raise LengthMismatchError("The strings have different lengths")
    return strings


def character_table(strings):
    """
    Compute the character table of equal length strings, each
    representing a taxon.

    A position of the strings gives a character, if at least two
    strings differ from the most frequent symbol at this position.
    The character is the bit mask of the strings differing from the
    most frequent symbol.

    Parameters
    ----------
    strings : iterable object of str
        At least four strings of the same length.

    Returns
    -------
    characters : list of int
        The bit masks, bit *i* corresponds to string *i*.
    positions : list of int
        The position of each character in the strings.

    Raises
    ------
    BadInputError
        If less than four strings or empty strings are given.
    LengthMismatchError
        If the strings have different lengths.

    Examples
    --------

    >>> strings = ["GCATTACC", "TTCGTACC", "TCATGACC", "TCAGTCCC", "TCCGTATC"]
    >>> characters, positions = character_table(strings)
    >>> for character, position in zip(characters, positions):
    ...     print(f"{character:05b}", position)
    10010 2
    00101 3
    """
    strings = _check_strings(strings)
    characters = []
    positions = []
    for pos in range(len(strings[0])):
        column = [s[pos] for s in strings]
        # The first symbol to reach the maximum count is modal
        counts = Counter()
        modal = column[0]
        mode = 0
        for symbol in column:
            counts[symbol] += 1
            if counts[symbol] > mode:
                mode = counts[symbol]
                modal = symbol
        if len(strings) - mode < 2:
            continue
        mask = 0
        for i, symbol in enumerate(column):
            if symbol != modal:
                mask |= 1 << i
        characters.append(mask)
        positions.append(pos)
    return characters, positions


def character_arrays(strings):
    """
    Compute the non-trivial splits of equal length strings, each
    representing a taxon, as :class:`CharacterArray` objects.

    At each position the taxa sharing the symbol of the first string
    are present.
    A position is skipped, if it contains more than two distinct
    symbols or if its split is trivial.

    Parameters
    ----------
    strings : iterable object of str
        At least four strings of the same length.

    Returns
    -------
    arrays : list of CharacterArray
        The non-trivial splits.
    """
    strings = _check_strings(strings)
    arrays = []
    for pos in range(len(strings[0])):
        array = CharacterArray(len(strings), "1")
        first = strings[0][pos]
        other = None
        for i, s in enumerate(strings[1:], start=1):
            symbol = s[pos]
            if symbol == first:
                array.include_taxon(i)
            elif other is None:
                other = symbol
            elif symbol != other:
                break
        else:
            if not array.trivial():
                arrays.append(array)
    return arrays
