# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Exception and warning classes used throughout the sequence subpackage.
"""

__name__ = "biotrove.sequence"
__author__ = "The Biotrove contributors"
__all__ = ["BadInputError", "LengthMismatchError", "DistanceMatrixError",
           "BadModeError", "NotUniformError", "NoSolutionError",
           "TreeError", "NewickError", "FastaError", "NoHeaderError",
           "LineTooLongError", "ConvergenceWarning", "SpectrumWarning"]

from ..file import InvalidFileError


class BadInputError(ValueError):
    """
    Indicates that an argument is empty, negative or otherwise outside
    the domain of a function.
    """
    pass


class LengthMismatchError(ValueError):
    """
    Indicates that two sequences were expected to have the same length.
    """
    pass


class DistanceMatrixError(ValueError):
    """
    Indicates that a distance matrix is not square, symmetric,
    non-negative, zero on its diagonal or violates the triangle
    inequality.
    """
    pass


class BadModeError(ValueError):
    """
    Indicates an unknown alignment mode.
    """
    pass


class NotUniformError(ValueError):
    """
    Indicates that a list of k-mers contains k-mers of different
    lengths.
    """
    pass


class NoSolutionError(Exception):
    """
    Indicates that an assembly problem has no solution for the given
    input.
    """
    pass


class TreeError(ValueError):
    """
    Indicates that a graph is not a tree of the required form.
    """
    pass


class NewickError(InvalidFileError):
    """
    Indicates that a Newick string is malformed.
    """
    pass


class FastaError(InvalidFileError):
    """
    Indicates that FASTA formatted data is malformed.
    """
    pass


class NoHeaderError(FastaError):
    """
    Indicates that sequence data appeared before the first header line.
    """
    pass


class LineTooLongError(FastaError):
    """
    Indicates that a line exceeds the maximum line length of a reader.
    """
    pass


class ConvergenceWarning(UserWarning):
    """
    Emitted when an iterative search stopped because its score got
    worse instead of settling.
    """
    pass


class SpectrumWarning(UserWarning):
    """
    Emitted when no candidate peptide matches the parent mass of a
    spectrum.
    """
    pass
