# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.io.fasta"
__author__ = "The Biotrove contributors"
__all__ = ["get_sequence", "get_sequences", "set_sequence", "set_sequences"]

from collections import OrderedDict
from ...alphabet import AlphabetError
from ...seqtypes import DNA8, AA


def get_sequence(fasta_file, header=None, seq_type=None):
    """
    Get a sequence from a :class:`FastaFile` instance.

    Parameters
    ----------
    fasta_file : FastaFile
        The :class:`FastaFile` to be accessed.
    header : str, optional
        The header to get the sequence from. By default, the first
        sequence of the file is returned.
    seq_type : type[Sequence], optional
        The :class:`Sequence` subclass contained in the file.
        If not set, the type is inferred as :class:`DNA8`, if the
        sequence consists only of DNA bases, and :class:`AA` otherwise.

    Returns
    -------
    sequence : Sequence
        The requested sequence in the `FastaFile`.

    Raises
    ------
    ValueError
        If the file does not contain any sequence.

    Examples
    --------

    >>> from biotrove.sequence.io.fasta import FastaFile
    >>> file = FastaFile()
    >>> file["seq1"] = "ATACT"
    >>> file["seq2"] = "MEANLY"
    >>> print(repr(get_sequence(file)))
    DNA8('ATACT')
    >>> print(repr(get_sequence(file, "seq2")))
    AA('MEANLY')
    """
    if header is not None:
        seq_str = fasta_file[header]
    else:
        # Return first (and probably only) sequence of file
        seq_str = None
        for seq_str in fasta_file.values():
            break
        if seq_str is None:
            raise ValueError("File does not contain any sequences")
    return _convert_to_sequence(seq_str, seq_type)


def get_sequences(fasta_file, seq_type=None):
    """
    Get a dictionary from a :class:`FastaFile` instance,
    where headers are keys and sequences are values.

    The sequence type of each entry is inferred as in
    :func:`get_sequence()`, unless `seq_type` is given.

    Returns
    -------
    seq_dict : OrderedDict
        A dictionary that maps headers to :class:`Sequence` objects.
    """
    seq_dict = OrderedDict()
    for header, seq_str in fasta_file.items():
        seq_dict[header] = _convert_to_sequence(seq_str, seq_type)
    return seq_dict


def set_sequence(fasta_file, sequence, header=None):
    """
    Set a sequence in a :class:`FastaFile` instance.

    Parameters
    ----------
    fasta_file : FastaFile
        The :class:`FastaFile` to be accessed.
    sequence : Sequence
        The sequence to be set.
    header : str, optional
        The header for the sequence. Default is ``'sequence'``.
    """
    if header is None:
        header = "sequence"
    fasta_file[header] = str(sequence)


def set_sequences(fasta_file, sequence_dict):
    """
    Set sequences in a :class:`FastaFile` instance from a dictionary
    of headers and :class:`Sequence` objects.
    """
    for header, sequence in sequence_dict.items():
        fasta_file[header] = str(sequence)


def _convert_to_sequence(seq_str, seq_type=None):
    if seq_type is not None:
        return seq_type(seq_str)
    try:
        return DNA8(seq_str)
    except AlphabetError:
        return AA(seq_str)
