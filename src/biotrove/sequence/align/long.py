# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.align"
__author__ = "The Biotrove contributors"
__all__ = ["align_long"]

from ..error import BadInputError, NoSolutionError


def align_long(reads):
    """
    Assemble overlapping reads into a single sequence by greedily
    merging the pair of reads with the longest overlap.

    Two reads overlap, if the second half of a read occurs in another
    read.
    The half length is taken from the first read, hence the reads
    should have similar lengths and overlap by more than half of their
    length.

    Parameters
    ----------
    reads : iterable object of str
        The reads.

    Returns
    -------
    assembly : str
        The assembled sequence.

    Raises
    ------
    BadInputError
        If no reads are given.
    NoSolutionError
        If the reads cannot be merged into a single sequence.

    Examples
    --------

    >>> reads = ["ATTAGACCTG", "CCTGCCGGAA", "AGACCTGCCG", "GCCGGAATAC"]
    >>> print(align_long(reads))
    ATTAGACCTGCCGGAATAC
    """
    reads = [str(read) for read in reads]
    if len(reads) == 0:
        raise BadInputError("No reads given")
    if len(reads) == 1:
        return reads[0]

    half = len(reads[0]) // 2
    # Each overlap is a list [left read, right read, x], where the
    # second half of the left read starts at position x in the right
    # read
    overlaps = []
    for si, s in enumerate(reads):
        suffix = s[len(s) - half:]
        for ti, t in enumerate(reads):
            if t == s:
                continue
            x = t.find(suffix)
            if x >= 0:
                overlaps.append([si, ti, x])

    left = 0
    for _ in range(len(reads) - 1):
        x_max = -1
        o_max = None
        for i, (si, ti, x) in enumerate(overlaps):
            s = reads[si]
            t = reads[ti]
            if s == "" or t == "" or s == t:
                continue
            if x > x_max:
                x_max = x
                o_max = i
        if o_max is None:
            raise NoSolutionError(
                "The reads do not overlap sufficiently to be merged"
            )
        left, right, _ = overlaps[o_max]
        reads[left] += reads[right][x_max + half:]
        reads[right] = ""
        # Overlaps starting from the merged read are obsolete,
        # overlaps starting from the right read now start from the
        # merged read
        remaining = []
        for overlap in overlaps:
            if overlap[0] == left:
                continue
            if overlap[0] == right:
                overlap[0] = left
            remaining.append(overlap)
        overlaps = remaining
    return reads[left]
