# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove"
__author__ = "The Biotrove contributors"
__all__ = ["File", "TextFile", "InvalidFileError"]

import abc
import copy
import io
from os import PathLike
from .copyable import Copyable


class File(Copyable, metaclass=abc.ABCMeta):
    """
    Base class for all file classes.

    The constructor creates an empty file, that can be filled with data
    using the class specific setter methods.
    The class method :func:`read()` parses a file from disk or from a
    file-like object, :func:`write()` writes the content back.
    """

    @classmethod
    @abc.abstractmethod
    def read(cls, file):
        """
        Parse a file (or file-like object).

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Returns
        -------
        file : File
            An instance of the respective :class:`File` subclass.
        """
        pass

    @abc.abstractmethod
    def write(self, file):
        """
        Write the contents of this :class:`File` object into a file.

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        """
        pass


class TextFile(File, metaclass=abc.ABCMeta):
    """
    Base class for line based text files.

    The text content is held as list of strings, one for each line,
    without line terminators.
    Both ``\\n`` and ``\\r\\n`` terminated input is accepted.

    Attributes
    ----------
    lines : list of str
        The lines of the text file.
        PROTECTED: Do not modify from outside.
    """

    def __init__(self):
        super().__init__()
        self.lines = []

    @classmethod
    def read(cls, file, *args, **kwargs):
        if is_open_compatible(file):
            with open(file, "r", newline=None) as f:
                lines = f.read().splitlines()
        else:
            if not is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            lines = file.read().splitlines()
        file_object = cls(*args, **kwargs)
        file_object.lines = lines
        return file_object

    @staticmethod
    def read_iter(file):
        """
        Create an iterator over each line of the given text file.

        Line terminators are stripped from the yielded lines.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Yields
        ------
        line : str
            The current line in the file.
        """
        if is_open_compatible(file):
            with open(file, "r", newline=None) as f:
                for line in f:
                    yield line.rstrip("\r\n")
        else:
            if not is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            for line in file:
                yield line.rstrip("\r\n")

    def write(self, file):
        """
        Write the contents of this object into a file
        (or file-like object).

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        """
        TextFile.write_iter(file, self.lines)

    @staticmethod
    def write_iter(file, lines):
        """
        Write the given `lines` of text into the specified `file`
        without an intermediate :class:`TextFile`.

        Parameters
        ----------
        file : file-like object or str
            The file to be written to.
            Alternatively a file path can be supplied.
        lines : iterable of str
            The lines of text to be written.
            Must not include line break characters.
        """
        if is_open_compatible(file):
            with open(file, "w") as f:
                for line in lines:
                    f.write(line + "\n")
        else:
            if not is_text(file):
                raise TypeError("A file opened in 'text' mode is required")
            for line in lines:
                file.write(line + "\n")

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone.lines = copy.copy(self.lines)

    def __str__(self):
        return "\n".join(self.lines)


class InvalidFileError(Exception):
    """
    Indicates that the file is malformed or does not contain the
    required data.
    """

    pass


def wrap_string(text, width):
    """
    Wrap the given `text` after every `width` characters, ignoring
    words and whitespace.

    Parameters
    ----------
    text : str
        The text to be wrapped.
    width : int
        The maximum number of characters per line.

    Returns
    -------
    lines : list of str
        The wrapped lines.
    """
    return [text[i : i + width] for i in range(0, len(text), width)]


def is_text(file):
    if isinstance(file, io.TextIOBase):
        return True
    # for file wrappers, e.g. 'TemporaryFile'
    return hasattr(file, "file") and isinstance(file.file, io.TextIOBase)


def is_open_compatible(file):
    return isinstance(file, (str, bytes, PathLike))
