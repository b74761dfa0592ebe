# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["Alignment", "GAP_SYMBOL"]


GAP_SYMBOL = "-"


class Alignment(object):
    """
    An :class:`Alignment` stores the result of a pairwise alignment:
    the alignment score and the two *traces*, i.e. the aligned sequences
    with gaps inserted as ``'-'``.

    Both traces have the same length.
    For convenience the object can be unpacked into its score and the
    traces.

    All attributes of this class are publicly accessible.

    Parameters
    ----------
    score : int or float
        The alignment score.
    trace1, trace2 : str
        The gapped first and second sequence.

    Attributes
    ----------
    score : int or float
        The alignment score.
    trace1, trace2 : str
        The gapped first and second sequence.

    Examples
    --------

    >>> ali = Alignment(8, "PLEASANTLY", "-MEA--N-LY")
    >>> print(ali)
    PLEASANTLY
    -MEA--N-LY
    >>> score, t1, t2 = ali
    >>> print(score)
    8
    """

    def __init__(self, score, trace1, trace2):
        self.score = score
        self.trace1 = trace1
        self.trace2 = trace2

    def __repr__(self):
        """Represent Alignment as a string for debugging."""
        return f"Alignment({self.score!r}, {self.trace1!r}, " \
               f"{self.trace2!r})"

    def __str__(self):
        return self.trace1 + "\n" + self.trace2

    def __iter__(self):
        return iter((self.score, self.trace1, self.trace2))

    def __len__(self):
        return len(self.trace1)

    def __eq__(self, item):
        if not isinstance(item, Alignment):
            return False
        if self.score != item.score:
            return False
        if self.trace1 != item.trace1 or self.trace2 != item.trace2:
            return False
        return True

    def gap_count(self):
        """
        Get the number of gap symbols in both traces.

        Returns
        -------
        count : int
            The summed number of gaps.
        """
        return self.trace1.count(GAP_SYMBOL) + self.trace2.count(GAP_SYMBOL)
