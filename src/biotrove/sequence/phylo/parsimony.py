# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Maximum parsimony labeling of the internal nodes of trees, whose leaves
are :class:`DNA8` k-mers, and the search for the most parsimonious
unrooted tree by nearest neighbor interchange.
"""

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"
__all__ = ["small_parsimony", "max_parsimony_rooted",
           "max_parsimony_unrooted", "UTree"]

import numpy as np
from ...copyable import Copyable
from ..alphabet import base_index
from ..seqtypes import DNA8
from ..kmers import Kmers
from ..error import BadInputError, LengthMismatchError, TreeError
from .tree import _preorder_from


_SYMBOLS = np.frombuffer(b"ACTG", dtype=np.uint8)
# _MISMATCH[k, i] is 1, if the base indices differ
_MISMATCH = 1 - np.eye(4, dtype=int)


def small_parsimony(children, root, kmers):
    """
    Label the internal nodes of a rooted tree with the k-mers, that
    minimize the total Hamming distance along all edges.

    The labeling is performed for all positions at once by two
    traversals of the tree:
    The post-order traversal computes for each node and each base the
    minimum number of mutations in the subtree below the node, given
    the base at the node.
    The pre-order traversal chooses the base of each node under the
    already chosen base of its parent.
    Ties are broken in the base order ``ACTG``.

    Parameters
    ----------
    children : list of list of int
        The child nodes of each node.
    root : int
        The root node.
    kmers : sequence of DNA8
        The k-mers parallel to the nodes.
        Only the elements of the leaves, i.e. the nodes without children,
        are read.

    Returns
    -------
    labels : Kmers
        The k-mers of all nodes.
        The leaves keep their original k-mer, the internal nodes are
        labeled with upper case k-mers.
    costs : ndarray, dtype=int
        The Hamming distance of each node to its parent.
        The root has a cost of 0.

    Raises
    ------
    TreeError
        If a node is unreachable from the root or a leaf has no k-mer.
    LengthMismatchError
        If the leaf k-mers have different lengths.
    """
    n_nodes = len(children)
    order = _preorder_from(children, root)
    if len(set(order)) != n_nodes or len(order) != n_nodes:
        raise TreeError("The adjacency list does not describe a tree")
    leaves = [node for node in order if len(children[node]) == 0]
    for leaf in leaves:
        if leaf >= len(kmers) or kmers[leaf] is None:
            raise TreeError(f"Leaf {leaf} has no k-mer")
    length = len(kmers[leaves[0]])

    # cost[node, position, base]
    cost = np.zeros((n_nodes, length, 4))
    for node in reversed(order):
        if len(children[node]) == 0:
            code = DNA8(kmers[node]).code
            if len(code) != length:
                raise LengthMismatchError(
                    f"Leaf {node} has length {len(code)}, "
                    f"but {length} was expected"
                )
            cost[node] = np.inf
            cost[node, np.arange(length), base_index(code)] = 0
        else:
            for child in children[node]:
                cost[node] += np.min(
                    cost[child][:, np.newaxis, :] + _MISMATCH, axis=-1
                )

    labels = np.zeros((n_nodes, length), dtype=int)
    costs = np.zeros(n_nodes, dtype=int)
    labels[root] = np.argmin(cost[root], axis=-1)
    for node in order:
        parent_labels = labels[node]
        for child in children[node]:
            labels[child] = np.argmin(
                cost[child] + _MISMATCH[parent_labels], axis=-1
            )
            costs[child] = np.count_nonzero(labels[child] != parent_labels)

    result = Kmers()
    for node in range(n_nodes):
        if len(children[node]) == 0:
            result.append(kmers[node])
        else:
            result.append(DNA8._from_code(_SYMBOLS[labels[node]]))
    return result, costs


def max_parsimony_rooted(tree, leaves):
    """
    Solve the *small parsimony* problem for a rooted tree.

    Parameters
    ----------
    tree : list of list of int
        The child nodes of each node.
        The root is the last node, the leaves are the first
        ``len(leaves)`` nodes.
    leaves : list of DNA8
        The k-mers of the leaves.

    Returns
    -------
    kmers : Kmers
        The k-mers of all nodes, starting with the leaves.
    costs : ndarray, dtype=int
        The Hamming distance of each node to its parent.
        The sum is the parsimony score.

    See Also
    --------
    small_parsimony

    Examples
    --------

    >>> tree = [[], [], [], [], [0, 1], [2, 3], [4, 5]]
    >>> leaves = [DNA8("CAAATCCC"), DNA8("ATTGCGAC"),
    ...           DNA8("CTGCGCTG"), DNA8("ATGGACGA")]
    >>> kmers, costs = max_parsimony_rooted(tree, leaves)
    >>> for kmer, cost in zip(kmers[4:], costs[4:]):
    ...     print(kmer, cost)
    ATAGACAC 1
    ATGGACAA 1
    ATAGACAA 0
    >>> print(costs.sum())
    16
    """
    if len(leaves) == 0:
        raise BadInputError("At least one leaf is required")
    kmers = list(leaves) + [None] * (len(tree) - len(leaves))
    return small_parsimony(tree, len(tree) - 1, kmers)


def max_parsimony_unrooted(tree, leaves):
    """
    Solve the *small parsimony* problem for an unrooted tree.

    The tree is rooted at each edge in turn, the rooting with the lowest
    parsimony score is kept.

    Parameters
    ----------
    tree : list of list of tuple(int, int)
        The labeled adjacency list of the tree:
        For each node a list of neighbors, each given as tuple of the
        neighbor node and the edge label.
        The edge labels are the numbers ``0`` to ``n_nodes-2``.
        The leaves are the first ``len(leaves)`` nodes.
    leaves : list of DNA8
        The k-mers of the leaves.

    Returns
    -------
    kmers : Kmers
        The k-mers of all nodes, starting with the leaves.
    costs : ndarray, dtype=int
        The Hamming distance along each edge, indexed by edge label.
    """
    tree = _normalize(tree)
    if len(tree) < 2:
        raise BadInputError("The tree must have at least one edge")
    kmers = list(leaves) + [None] * (len(tree) + 1 - len(leaves))
    root = len(tree)
    best_total = np.inf
    best_kmers = None
    best_costs = None
    best_labels = None
    for a, b, label in _edges_depth_first(tree):
        children, labels = _root_at_edge(tree, a, b, label)
        node_kmers, costs = small_parsimony(children, root, kmers)
        total = costs.sum()
        if total < best_total:
            best_total = total
            best_kmers = node_kmers
            best_costs = costs
            best_labels = labels
    edge_costs = np.zeros(len(tree) - 1, dtype=int)
    for node, label in enumerate(best_labels):
        edge_costs[label] += best_costs[node]
    return Kmers(best_kmers[:len(tree)]), edge_costs


def _normalize(tree):
    return [[(int(to), int(label)) for to, label in adj] for adj in tree]


def _edges_depth_first(tree):
    """
    Yield each edge once as ``(from, to, label)`` in depth-first order
    starting at node 0.
    """
    visited = {0}
    stack = [(0, iter(tree[0]))]
    while stack:
        node, neighbors = stack[-1]
        for to, label in neighbors:
            if to in visited:
                continue
            yield node, to, label
            visited.add(to)
            stack.append((to, iter(tree[to])))
            break
        else:
            stack.pop()


def _root_at_edge(tree, a, b, label):
    """
    Insert a new root node into the edge between *a* and *b*.

    Returns the children of each node and the label of the edge from
    each original node to its parent.
    """
    root = len(tree)
    children = [[] for _ in range(root + 1)]
    labels = [0] * root
    children[root] = [a, b]
    labels[a] = label
    labels[b] = label
    stack = [(b, a), (a, b)]
    while stack:
        node, parent = stack.pop()
        for to, edge in tree[node]:
            if to != parent:
                children[node].append(to)
                labels[to] = edge
                stack.append((to, node))
    return children, labels


class UTree(Copyable):
    """
    An unrooted binary tree with :class:`DNA8` k-mers at its leaves,
    for solving the *large parsimony* problem.

    The tree is a labeled adjacency list:
    For each node a list of neighbors, each given as tuple of the
    neighbor node and the edge label.
    Leaves have one neighbor, internal nodes have three.

    Parameters
    ----------
    adjacency : list of list of tuple(int, int)
        The labeled adjacency list.
        The edge labels are the numbers ``0`` to ``n_nodes-2``.
    leaves : list of DNA8
        The k-mers of the leaves, which are the first ``len(leaves)``
        nodes.

    Attributes
    ----------
    adjacency : list of list of tuple(int, int)
        The labeled adjacency list.
    kmers : Kmers
        The k-mers of the nodes.
        The elements of the internal nodes are None until a parsimony
        method is called.
    costs : ndarray, dtype=int or None
        The Hamming distance along each edge, indexed by edge label, if
        a parsimony method was called.
    """

    def __init__(self, adjacency, leaves):
        self.adjacency = _normalize(adjacency)
        self.n_leaves = len(leaves)
        self.kmers = Kmers(
            list(leaves) + [None] * (len(self.adjacency) - len(leaves))
        )
        self.costs = None

    def __copy_create__(self):
        return UTree(self.adjacency, self.kmers[:self.n_leaves])

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone.kmers = Kmers(self.kmers)
        clone.costs = None if self.costs is None else self.costs.copy()

    @staticmethod
    def from_graph(graph, leaves):
        """
        Create an :class:`UTree` from a :class:`networkx.Graph`, e.g.
        the result of :meth:`DistanceMatrix.neighbor_join()`.

        The nodes of the graph must be the integers ``0`` to
        ``n_nodes-1``.
        The edges are labeled in the order of
        :meth:`networkx.Graph.edges()`.

        Raises
        ------
        TreeError
            If the graph nodes are not consecutive integers from 0.
        """
        if sorted(graph.nodes) != list(range(graph.number_of_nodes())):
            raise TreeError("The graph nodes must be consecutive integers")
        labels = {
            frozenset(edge): i for i, edge in enumerate(graph.edges())
        }
        adjacency = [
            [(to, labels[frozenset((node, to))]) for to in graph.adj[node]]
            for node in range(graph.number_of_nodes())
        ]
        return UTree(adjacency, leaves)

    def max_parsimony_unrooted(self):
        """
        Label the internal nodes by :func:`max_parsimony_unrooted()`.

        :attr:`kmers` and :attr:`costs` are updated.

        Returns
        -------
        score : int
            The parsimony score.

        Examples
        --------

        >>> tree = UTree(
        ...     [
        ...         [(4, 0)], [(4, 1)], [(5, 2)], [(5, 3)],
        ...         [(0, 0), (1, 1), (5, 4)], [(2, 2), (3, 3), (4, 4)],
        ...     ],
        ...     [DNA8("TCGGCCAA"), DNA8("CCTGGCTG"),
        ...      DNA8("CACAGGAT"), DNA8("TGAGTACC")]
        ... )
        >>> print(tree.max_parsimony_unrooted())
        17
        >>> print(tree.kmers[4], tree.kmers[5])
        CCAGGCAA CAAGGAAA
        >>> print(tree.costs.tolist())
        [3, 3, 4, 5, 2]
        """
        self.kmers, self.costs = max_parsimony_unrooted(
            self.adjacency, self.kmers[:self.n_leaves]
        )
        return int(self.costs.sum())

    def swap_edges(self, a, ax, b, bx):
        """
        Exchange the neighbor at index *ax* of node *a* with the
        neighbor at index *bx* of node *b*.

        The edge labels move with the edges.
        The reverse arcs of the neighbors are updated accordingly.
        Calling this method again with the same arguments reverts the
        swap.
        """
        adjacency = self.adjacency
        a_to, a_label = adjacency[a][ax]
        b_to, b_label = adjacency[b][bx]
        _redirect(adjacency[a_to], a, b)
        _redirect(adjacency[b_to], b, a)
        adjacency[a][ax] = (b_to, b_label)
        adjacency[b][bx] = (a_to, a_label)

    def subtrees(self, a, b):
        """
        Get the neighbor indices of the subtrees adjacent to the
        internal edge between *a* and *b*.

        Returns
        -------
        w, x : int
            The indices of the neighbors of *a* other than *b*.
        y, z : int
            The indices of the neighbors of *b* other than *a*.
        """
        w, x = [i for i, (to, _) in enumerate(self.adjacency[a]) if to != b]
        y, z = [i for i, (to, _) in enumerate(self.adjacency[b]) if to != a]
        return w, x, y, z

    def internal_edges(self):
        """
        Get the edges connecting two internal nodes.

        Returns
        -------
        edges : list of tuple(int, int)
            Each edge as pair of nodes, the smaller node first.
        """
        adjacency = self.adjacency
        return [
            (a, b)
            for a in range(len(adjacency)) if len(adjacency[a]) > 1
            for b, _ in adjacency[a] if b > a and len(adjacency[b]) > 1
        ]

    def large_parsimony(self):
        """
        Search the most parsimonious tree topology by nearest neighbor
        interchange.

        In each round both nearest neighbor interchanges at each
        internal edge are tried.
        The interchange with the lowest parsimony score is applied, if it
        improves the score.
        The search ends when no interchange improves the score.
        The tree, :attr:`kmers` and :attr:`costs` are updated.

        Returns
        -------
        score : int
            The parsimony score of the final tree.
        """
        score = self.max_parsimony_unrooted()
        while True:
            best_swap = None
            best_score = score
            for a, b in self.internal_edges():
                _, x, y, z = self.subtrees(a, b)
                for bx in (y, z):
                    self.swap_edges(a, x, b, bx)
                    swapped_score = self.max_parsimony_unrooted()
                    if swapped_score < best_score:
                        best_score = swapped_score
                        best_swap = (a, x, b, bx)
                    self.swap_edges(a, x, b, bx)
            if best_swap is None:
                break
            self.swap_edges(*best_swap)
            score = best_score
        # Labels of the final topology
        return self.max_parsimony_unrooted()


def _redirect(neighbors, old, new):
    for i, (to, label) in enumerate(neighbors):
        if to == old:
            neighbors[i] = (new, label)
            return
    raise TreeError(f"Missing reverse arc to node {old}")
