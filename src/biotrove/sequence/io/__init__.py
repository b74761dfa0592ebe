# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for reading and writing sequence related data.
"""

__name__ = "biotrove.sequence.io"
__author__ = "The Biotrove contributors"
