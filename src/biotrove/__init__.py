# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *Biotrove*.
It contains no algorithms itself, but it provides the base classes for
copyable objects and text files used by the :mod:`biotrove.sequence`
subpackage.
"""

__version__ = "0.1.0"
__name__ = "biotrove"
__author__ = "The Biotrove contributors"

from .file import *
from .copyable import *
