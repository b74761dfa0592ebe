# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage provides functions and data structures for
reconstructing phylogenetic trees.

A :class:`DistanceMatrix` holds the pairwise distances of taxa.
Trees are built from it by *UPGMA* (:meth:`DistanceMatrix.upgma()`),
*Neighbor-Joining* (:meth:`DistanceMatrix.neighbor_join()`) or, for
additive matrices, exactly by :meth:`DistanceMatrix.additive_tree()`.
Unrooted trees are returned as :class:`networkx.Graph` with weighted
edges.

Rooted trees with named nodes are read from *Newick* notation by
:func:`parse_newick()` into a compact :class:`PhyloList` and can be
converted into a :class:`PhyloRootedTree` for traversal and for writing
*Newick* notation.

The parsimony functions label the internal nodes of trees, whose leaves
are DNA k-mers, with the ancestral k-mers requiring the least
mutations.
:class:`UTree` searches the most parsimonious tree topology by nearest
neighbor interchange.
"""

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"

from .distances import *
from .tree import *
from .newick import *
from .parsimony import *
from .character import *
