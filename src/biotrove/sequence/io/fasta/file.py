# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.io.fasta"
__author__ = "The Biotrove contributors"
__all__ = ["FastaFile", "FastaReader", "FastaRecord"]

from collections import OrderedDict, namedtuple
from collections.abc import MutableMapping
from ....file import TextFile, wrap_string
from ...error import FastaError, NoHeaderError, LineTooLongError


MAX_LINE_LENGTH = 65536


class FastaRecord(namedtuple("FastaRecord", ["header", "seq"])):
    """
    A sequence string annotated with its header.

    Attributes
    ----------
    header : str
        The complete header line without the leading ``>``.
    seq : str
        The sequence, all lines concatenated.

    Examples
    --------

    >>> record = FastaRecord("db|123|abc example sequence", "AGACCA")
    >>> print(record.id)
    db|123|abc
    >>> print(record.description)
    example sequence
    """

    __slots__ = ()

    @property
    def id(self):
        """
        The sequence identifier, i.e. the header up to the first space.
        """
        return self.header.partition(" ")[0]

    @property
    def description(self):
        """
        The part of the header after the first space.
        """
        return self.header.partition(" ")[2]


class FastaReader:
    """
    A streaming reader, that yields one :class:`FastaRecord` for each
    header in a FASTA file.

    Blank lines and comment lines starting with ``;`` are ignored.
    A record is yielded for every header, even if no sequence data
    follows.

    Parameters
    ----------
    file : file-like object or str
        The file to be read.
        Alternatively a file path can be supplied.
    max_line_length : int, optional
        The maximum number of characters in a single line.

    Raises
    ------
    NoHeaderError
        If sequence data appears before the first header.
    LineTooLongError
        If a line exceeds `max_line_length`.

    Examples
    --------

    >>> import io
    >>> text = io.StringIO(">db|123|abc example sequence\\nAGACCA\\nTACCA\\n")
    >>> for record in FastaReader(text):
    ...     print(record.header)
    ...     print(record.seq)
    db|123|abc example sequence
    AGACCATACCA
    """

    def __init__(self, file, max_line_length=MAX_LINE_LENGTH):
        self._lines = TextFile.read_iter(file)
        self._max_line_length = max_line_length
        self._line_number = 0
        self._next_header = None
        self._exhausted = False

    def __iter__(self):
        return self

    def _next_line(self):
        line = next(self._lines)
        self._line_number += 1
        if len(line) > self._max_line_length:
            raise LineTooLongError(
                f"Line {self._line_number} exceeds the maximum length of "
                f"{self._max_line_length} characters"
            )
        return line.strip()

    def __next__(self):
        if self._exhausted:
            raise StopIteration
        header = self._next_header
        self._next_header = None
        seq_lines = []
        while True:
            try:
                line = self._next_line()
            except StopIteration:
                self._exhausted = True
                break
            if len(line) == 0 or line[0] == ";":
                continue
            if line[0] == ">":
                if header is None:
                    header = line[1:]
                    continue
                self._next_header = line[1:]
                break
            if header is None:
                raise NoHeaderError(
                    f"Line {self._line_number} contains sequence data "
                    f"before the first header"
                )
            seq_lines.append(line)
        if header is None:
            raise StopIteration
        return FastaRecord(header, "".join(seq_lines))


class FastaFile(TextFile, MutableMapping):
    """
    This class represents a file in FASTA format.

    A FASTA file contains so called *header* lines, beginning with
    ``>``, that describe following sequence.
    The corresponding sequence starts at the line after the header line
    and ends at the next header line or at the end of file.
    The header along with its sequence forms an entry.

    This class is used in a dictionary like manner, implementing the
    :class:`MutableMapping` interface:
    Headers (without the leading ``>``) are used as keys,
    and strings containing the sequences are the corresponding values.

    Parameters
    ----------
    chars_per_line : int, optional
        The number characters in a line containing sequence data
        after which a line break is inserted.
        Only relevant, when adding sequences to a file.

    Examples
    --------

    >>> import os.path
    >>> file = FastaFile()
    >>> file["seq1"] = "ATACT"
    >>> print(file["seq1"])
    ATACT
    >>> file["seq2"] = "AAAATT"
    >>> print(file)
    >seq1
    ATACT
    >seq2
    AAAATT
    >>> print(dict(file.items()))
    {'seq1': 'ATACT', 'seq2': 'AAAATT'}
    >>> del file["seq1"]
    >>> print(dict(file.items()))
    {'seq2': 'AAAATT'}
    >>> file.write(os.path.join(path_to_directory, "test.fasta"))
    """

    def __init__(self, chars_per_line=80):
        super().__init__()
        self._chars_per_line = chars_per_line
        self._entries = OrderedDict()

    @classmethod
    def read(cls, file, chars_per_line=80, max_line_length=MAX_LINE_LENGTH):
        """
        Read a FASTA file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.
        chars_per_line : int, optional
            The number characters in a line containing sequence data
            after which a line break is inserted.
            Only relevant, when adding sequences to a file.
        max_line_length : int, optional
            The maximum number of characters in a single line.

        Returns
        -------
        file_object : FastaFile
            The parsed file.

        Raises
        ------
        FastaError
            If the file contains no entry.
        NoHeaderError
            If sequence data appears before the first header.
        LineTooLongError
            If a line exceeds `max_line_length`.
        """
        file = super().read(file, chars_per_line)
        for i, line in enumerate(file.lines):
            if len(line) > max_line_length:
                raise LineTooLongError(
                    f"Line {i+1} exceeds the maximum length of "
                    f"{max_line_length} characters"
                )
        # Filter out empty and comment lines
        file.lines = [line.strip() for line in file.lines
                      if len(line.strip()) != 0 and line.strip()[0] != ";"]
        if len(file.lines) == 0:
            raise FastaError("File is empty or contains only comments")
        file._find_entries()
        return file

    @staticmethod
    def read_iter(file, max_line_length=MAX_LINE_LENGTH):
        """
        Create an iterator over each sequence of the given FASTA file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.
        max_line_length : int, optional
            The maximum number of characters in a single line.

        Yields
        ------
        header : str
            The header of the current sequence.
        seq_str : str
            The current sequence as string.

        Notes
        -----
        This approach gives the same results as
        `FastaFile.read(file).items()`, but is much more memory
        efficient.
        """
        for record in FastaReader(file, max_line_length):
            yield record.header, record.seq

    @staticmethod
    def write_iter(file, items, chars_per_line=80):
        """
        Write the given ``(header, sequence)`` items directly into
        a file, without an intermediate :class:`FastaFile`.

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        items : iterable object of tuple(str, str)
            The entries to be written into the file.
        chars_per_line : int, optional
            The number characters in a line containing sequence data
            after which a line break is inserted.
        """
        def line_generator():
            for header, seq_str in items:
                yield from _entry_lines(header, seq_str, chars_per_line)

        TextFile.write_iter(file, line_generator())

    def __setitem__(self, header, seq_str):
        new_lines = _entry_lines(header, seq_str, self._chars_per_line)
        if header in self:
            del self[header]
            self.lines += new_lines
            self._find_entries()
        else:
            self._entries[header] = (
                len(self.lines),
                len(self.lines) + len(new_lines)
            )
            self.lines += new_lines

    def __getitem__(self, header):
        if not isinstance(header, str):
            raise IndexError(
                "'FastaFile' only supports header strings as keys"
            )
        start, stop = self._entries[header]
        return "".join(
            [line.strip() for line in self.lines[start+1 : stop]]
        )

    def __delitem__(self, header):
        start, stop = self._entries[header]
        del self.lines[start:stop]
        del self._entries[header]
        self._find_entries()

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return self._entries.__iter__()

    def __contains__(self, header):
        return header in self._entries

    def __copy_create__(self):
        return FastaFile(self._chars_per_line)

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._entries = OrderedDict(self._entries)

    def _find_entries(self):
        if len(self.lines) > 0 and self.lines[0][0] != ">":
            raise NoHeaderError(
                f"File starts with '{self.lines[0][0]}' instead of '>'"
            )
        header_i = [i for i, line in enumerate(self.lines) if line[0] == ">"]
        self._entries = OrderedDict()
        for j, start in enumerate(header_i):
            stop = header_i[j+1] if j < len(header_i) - 1 else len(self.lines)
            self._entries[self.lines[start][1:]] = (start, stop)


def _entry_lines(header, seq_str, chars_per_line):
    if not isinstance(header, str):
        raise IndexError("'FastaFile' only supports header strings")
    if not isinstance(seq_str, str):
        raise TypeError("'FastaFile' only supports sequence strings")
    return (
        [">" + header.replace("\n", "").strip()]
        + wrap_string(seq_str, width=chars_per_line)
    )
