# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"
__all__ = ["DistanceMatrix", "UPGMANode",
           "random_binary_tree", "random_additive_matrix"]

import networkx as nx
import numpy as np
from ...copyable import Copyable
from ..error import BadInputError, DistanceMatrixError


class DistanceMatrix(Copyable):
    """
    A matrix of pairwise distances between taxa.

    The taxa are represented by the row (and column) indices.
    Most methods expect a valid matrix (see :meth:`validate()`), the
    tree building methods do not check this.

    Parameters
    ----------
    matrix : array-like, shape=(n,n)
        The distances.
        The matrix is copied and converted to ``float``.

    Raises
    ------
    DistanceMatrixError
        If `matrix` is not two-dimensional.

    Examples
    --------

    >>> matrix = DistanceMatrix([
    ...     [ 0, 13, 21, 22],
    ...     [13,  0, 12, 13],
    ...     [21, 12,  0, 13],
    ...     [22, 13, 13,  0],
    ... ])
    >>> matrix.validate()
    >>> print(matrix.additive())
    (True, 0, 0, 0, 0)
    >>> print(matrix.limb_weight(1))
    (2.0, 2, 0)
    """

    def __init__(self, matrix=np.zeros((0, 0))):
        matrix = np.array(matrix, dtype=float)
        if matrix.ndim != 2:
            raise DistanceMatrixError(
                f"A distance matrix must be two-dimensional, "
                f"but has {matrix.ndim} dimensions"
            )
        self._matrix = matrix

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._matrix = self._matrix.copy()

    @property
    def matrix(self):
        """
        The distances as :class:`ndarray`.
        """
        return self._matrix

    def __len__(self):
        return len(self._matrix)

    def __getitem__(self, index):
        return self._matrix[index]

    def __eq__(self, item):
        if not isinstance(item, DistanceMatrix):
            return False
        return np.array_equal(self._matrix, item._matrix)

    def __repr__(self):
        return f"DistanceMatrix({self._matrix.tolist()!r})"

    def __str__(self):
        return str(self._matrix)

    def validate(self):
        """
        Check whether this matrix is a valid distance matrix.

        A valid matrix is square, non-negative, symmetric, has a zero
        diagonal and satisfies the triangle inequality
        ``d[i,j] + d[j,k] >= d[i,k]`` for all indices.

        Raises
        ------
        DistanceMatrixError
            Describes the first violated condition.
            A *NaN* element is reported as asymmetry.
        """
        d = self._matrix
        if d.shape[0] != d.shape[1]:
            raise DistanceMatrixError(
                f"The matrix is not square, its shape is {d.shape}"
            )
        negative = np.argwhere(d < 0)
        if len(negative) > 0:
            i, j = negative[0]
            raise DistanceMatrixError(f"Negative element: {d[i,j]:g}")
        # Comparison with NaN is always false
        if not np.all(d == d.T):
            raise DistanceMatrixError("The matrix is not symmetric")
        if not np.all(np.diagonal(d) == 0):
            raise DistanceMatrixError("The matrix has a non-zero diagonal")
        for i in range(len(d)):
            # violations[j,k]: d[i,j] + d[j,k] < d[i,k]
            violations = d[i][:, np.newaxis] + d < d[i][np.newaxis, :]
            if violations.any():
                j, k = np.argwhere(violations)[0]
                raise DistanceMatrixError(
                    f"Triangle inequality not satisfied: "
                    f"d[{i}][{j}] + d[{j}][{k}] < d[{i}][{k}]"
                )

    def additive(self):
        """
        Test whether this matrix is additive using the four-point
        condition.

        For each quadruple of indices the three sums
        ``d[i,j] + d[k,l]``, ``d[i,k] + d[j,l]`` and ``d[i,l] + d[j,k]``
        are compared:
        The two largest sums must be equal.

        Returns
        -------
        ok : bool
            True, if the matrix is additive.
        i, j, k, l : int
            The indices of the first quadruple that fails the test.
            All zero, if the matrix is additive.
        """
        d = self._matrix
        for i in range(len(d)):
            for j in range(i):
                for k in range(j):
                    sums = np.sort(
                        [d[i, j] + d[k], d[i, k] + d[j], d[i] + d[j, k]],
                        axis=0
                    )
                    failed = np.flatnonzero(sums[2] > sums[1])
                    if len(failed) > 0:
                        return False, i, j, k, int(failed[0])
        return True, 0, 0, 0, 0

    def limb_weight(self, j):
        """
        Find the weight of the limb of leaf *j* in the tree fitting this
        additive matrix.

        Parameters
        ----------
        j : int
            The index of the leaf.

        Returns
        -------
        weight : float
            The weight of the limb.
        i, k : int
            Two other leaves, such that the limb attaches to the path
            between *i* and *k*.

        Raises
        ------
        BadInputError
            If the matrix has less than three taxa.
        """
        d = self._matrix
        if len(d) < 3:
            raise BadInputError("At least three taxa are required")
        k = j - 1 if j > 0 else 1
        i_min = None
        wt_min = np.inf
        for i in range(len(d)):
            if i == j or i == k:
                continue
            wt = d[i, j] + d[j, k] - d[i, k]
            if wt < wt_min:
                wt_min = wt
                i_min = i
        return float(wt_min) / 2, i_min, k

    def limb_weight_sub_matrix(self, j):
        """
        Find the weight of the limb of leaf *j* in the tree fitting the
        submatrix ``d[:j+1, :j+1]``.

        Parameters
        ----------
        j : int
            The index of the leaf, at least 2.

        Returns
        -------
        weight : float
            The weight of the limb.
        i, k : int
            Two leaves in the submatrix, such that the limb attaches to
            the path between *i* and *k*.
            *k* is always ``j-1``.
        """
        if j < 2:
            raise BadInputError("The leaf index must be at least 2")
        d = self._matrix
        k = j - 1
        i_min = k - 1
        wt_min = d[j, i_min] + d[j, k] - d[k, i_min]
        for i in range(k - 1):
            wt = d[j, i] + d[j, k] - d[k, i]
            if wt < wt_min:
                wt_min = wt
                i_min = i
        return float(wt_min) / 2, i_min, k

    def additive_tree(self):
        """
        Reconstruct the unrooted tree, whose path lengths give this
        additive matrix.

        The matrix is not checked for additivity, use :meth:`additive()`
        for this purpose.

        Returns
        -------
        tree : networkx.Graph
            The tree.
            The nodes ``0`` to ``n-1`` are the leaves, internal nodes
            follow.
            Each edge has a ``'weight'`` attribute.
            The tree is not necessarily binary.

        Raises
        ------
        BadInputError
            If the matrix has less than two taxa.
        """
        d = self._matrix
        if len(d) < 2:
            raise BadInputError("At least two taxa are required")
        tree = nx.Graph()
        tree.add_nodes_from(range(len(d)))
        tree.add_edge(0, 1, weight=float(d[0, 1]))
        for n in range(2, len(d)):
            limb, i, k = self.limb_weight_sub_matrix(n)
            # Distance of the attachment point from leaf i
            x = float(d[i, n]) - limb
            path = nx.shortest_path(tree, i, k)
            attachment = k
            for u, v in zip(path[:-1], path[1:]):
                if x == 0:
                    attachment = u
                    break
                weight = tree[u][v]["weight"]
                if x < weight:
                    # Split the edge with a new internal node
                    attachment = tree.number_of_nodes()
                    tree.remove_edge(u, v)
                    tree.add_edge(u, attachment, weight=x)
                    tree.add_edge(attachment, v, weight=weight - x)
                    break
                x -= weight
            tree.add_edge(n, attachment, weight=limb)
        return tree

    def upgma(self):
        """
        Build a rooted ultrametric tree by the *UPGMA* method.

        Iteratively the two closest clusters are joined into a new node,
        whose age is half their distance.
        The distances to the new cluster are the means of the distances
        to its constituents, weighted by their sizes.

        Returns
        -------
        nodes : list of UPGMANode
            The tree as parent list.
            The first ``n`` nodes are the leaves, the last node is the
            root.
            The root has no parent (``-1``) and its weight is *NaN*.

        Raises
        ------
        BadInputError
            If the matrix has less than two taxa.

        Examples
        --------

        >>> matrix = DistanceMatrix([
        ...     [ 0, 20, 17, 11],
        ...     [20,  0, 20, 13],
        ...     [17, 20,  0, 10],
        ...     [11, 13, 10,  0],
        ... ])
        >>> root = matrix.upgma()[-1]
        >>> print(round(root.age, 3), root.n_leaves)
        8.833 4
        """
        dm = self._matrix.copy()
        if len(dm) < 2:
            raise BadInputError("At least two taxa are required")
        nodes = [UPGMANode() for _ in range(len(dm))]
        # Matrix index -> node index
        clusters = list(range(len(dm)))
        while True:
            d1, d2 = _closest(dm)
            c1 = clusters[d1]
            c2 = clusters[d2]
            m1 = nodes[c1].n_leaves
            m2 = nodes[c2].n_leaves
            age = float(dm[d2, d1]) / 2
            root = len(nodes)
            nodes.append(UPGMANode(age=age, n_leaves=m1 + m2))
            for c in (c1, c2):
                nodes[c].parent = root
                nodes[c].weight = age - nodes[c].age
            clusters[d1] = root
            if len(dm) == 2:
                break
            merged = (dm[d1] * m1 + dm[d2] * m2) / (m1 + m2)
            merged[d1] = 0
            dm[d1, :] = merged
            dm[:, d1] = merged
            dm = np.delete(np.delete(dm, d2, axis=0), d2, axis=1)
            del clusters[d2]
        return nodes

    def neighbor_join(self):
        """
        Build an unrooted tree by the *neighbor joining* method.

        Returns
        -------
        tree : networkx.Graph
            The tree.
            The nodes ``0`` to ``n-1`` are the leaves, internal nodes
            follow in the order of their creation.
            Each edge has a ``'weight'`` attribute, the limb length.

        Raises
        ------
        BadInputError
            If the matrix has less than two taxa.
        """
        dm = self._matrix.copy()
        if len(dm) < 2:
            raise BadInputError("At least two taxa are required")
        tree = nx.Graph()
        tree.add_nodes_from(range(len(dm)))
        # Matrix index -> node index
        node_index = list(range(len(dm)))
        new_node = len(dm)
        while len(dm) > 2:
            n = len(dm)
            total = dm.sum(axis=1)
            criterion = (n - 2) * dm - total[:, np.newaxis] - total
            d1, d2 = _closest(criterion)
            delta = float(total[d2] - total[d1]) / (n - 2)
            d21 = float(dm[d2, d1])
            tree.add_edge(new_node, node_index[d1], weight=0.5 * (d21 - delta))
            tree.add_edge(new_node, node_index[d2], weight=0.5 * (d21 + delta))
            merged = 0.5 * (dm[d1] + dm[d2] - d21)
            merged[d1] = 0
            dm[d1, :] = merged
            dm[:, d1] = merged
            dm = np.delete(np.delete(dm, d2, axis=0), d2, axis=1)
            node_index[d1] = new_node
            del node_index[d2]
            new_node += 1
        tree.add_edge(node_index[0], node_index[1], weight=float(dm[0, 1]))
        return tree


def _closest(matrix):
    """
    Find the minimum of the strictly lower triangle.

    Returns the column index first, i.e. the smaller index.
    """
    i_min = -1
    j_min = -1
    minimum = np.inf
    for i in range(1, len(matrix)):
        j = int(np.argmin(matrix[i, :i]))
        if matrix[i, j] < minimum:
            minimum = matrix[i, j]
            i_min = i
            j_min = j
    return j_min, i_min


class UPGMANode:
    """
    A node of the parent list created by :meth:`DistanceMatrix.upgma()`.

    Attributes
    ----------
    parent : int
        The index of the parent node, ``-1`` for the root.
    weight : float
        The weight of the edge from the parent, *NaN* for the root.
    age : float
        The height above the leaves.
    n_leaves : int
        The number of leaves at or below this node.
    """

    __slots__ = ["parent", "weight", "age", "n_leaves"]

    def __init__(self, parent=-1, weight=np.nan, age=0.0, n_leaves=1):
        self.parent = parent
        self.weight = weight
        self.age = age
        self.n_leaves = n_leaves

    def __repr__(self):
        return (
            f"UPGMANode(parent={self.parent}, weight={self.weight!r}, "
            f"age={self.age!r}, n_leaves={self.n_leaves})"
        )


def random_binary_tree(n_leaves, rng=None):
    """
    Create a random unrooted binary tree with random edge weights.

    Parameters
    ----------
    n_leaves : int
        The number of leaves, at least 3.
    rng : numpy.random.Generator or int, optional
        The random number generator or a seed for it.

    Returns
    -------
    parents : list of tuple(int, float)
        The tree as parent list.
        Each element is the parent node and the weight of the edge
        to it.
        The first `n_leaves` elements are the leaves, the internal nodes
        follow.
        The root of the parent list, an internal node of the
        tree, has the index ``len(parents)`` and no element itself.
        The weights are integers from 10 to 99.
    """
    if n_leaves < 3:
        raise BadInputError("At least three leaves are required")
    rng = np.random.default_rng(rng)

    def random_weight():
        return float(rng.integers(10, 100))

    parents = [None] * (2 * n_leaves - 3)
    # The initial tree has three leaves connected to the root
    root = len(parents)
    for leaf in range(3):
        parents[leaf] = (root, random_weight())
    for new_leaf in range(3, n_leaves):
        new_internal = n_leaves + new_leaf - 3
        # Choose one of the existing edges, identified by its child
        edge = int(rng.integers(2 * new_leaf - 3))
        if edge >= new_leaf:
            # Skip to the range of internal nodes
            edge += n_leaves - new_leaf
        parent, weight = parents[edge]
        parents[edge] = (new_internal, weight)
        parents[new_internal] = (parent, random_weight())
        parents[new_leaf] = (new_internal, random_weight())
    return parents


def random_additive_matrix(n, rng=None):
    """
    Create the additive distance matrix of the leaves of a random
    binary tree (see :func:`random_binary_tree()`).

    Parameters
    ----------
    n : int
        The number of taxa, at least 3.
    rng : numpy.random.Generator or int, optional
        The random number generator or a seed for it.

    Returns
    -------
    matrix : DistanceMatrix
        The distances.
    """
    parents = random_binary_tree(n, rng)
    tree = nx.Graph()
    for child, (parent, weight) in enumerate(parents):
        tree.add_edge(child, parent, weight=weight)
    matrix = np.zeros((n, n))
    for i in range(n):
        lengths = nx.single_source_dijkstra_path_length(tree, i)
        for j in range(n):
            matrix[i, j] = lengths[j]
    return DistanceMatrix(matrix)
