# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.phylo"
__author__ = "The Biotrove contributors"
__all__ = ["PhyloNode", "PhyloList", "PhyloRootedTree"]

import numpy as np
from ...copyable import Copyable
from ..error import TreeError


class PhyloNode(Copyable):
    """
    The data of a single node of a rooted phylogenetic tree.

    Parameters
    ----------
    name : str, optional
        The name of the node, empty for unnamed nodes.
    weight : float, optional
        The weight of the edge from the parent node.
        If given, :attr:`has_weight` is true.

    Attributes
    ----------
    name : str
        The name of the node.
    weight : float
        The weight of the edge from the parent node, 0 by default.
    has_weight : bool
        Whether the weight was assigned.
    """

    def __init__(self, name="", weight=None):
        self.name = name
        if weight is None:
            self.weight = 0.0
            self.has_weight = False
        else:
            self.weight = float(weight)
            self.has_weight = True

    def __copy_create__(self):
        return PhyloNode(self.name)

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone.weight = self.weight
        clone.has_weight = self.has_weight

    def __repr__(self):
        if self.has_weight:
            return f"PhyloNode({self.name!r}, {self.weight!r})"
        elif self.name:
            return f"PhyloNode({self.name!r})"
        else:
            return "PhyloNode()"

    def __eq__(self, item):
        if not isinstance(item, PhyloNode):
            return False
        return (
            self.name == item.name
            and self.has_weight == item.has_weight
            and self.weight == item.weight
        )


class PhyloList(Copyable):
    """
    A rooted phylogenetic tree, represented as parent list.

    This compact representation is created by
    :func:`parse_newick()`.
    Edges point from the leaves towards the root.
    Use :meth:`rooted_tree()` for a representation with edges from the
    root towards the leaves.

    Attributes
    ----------
    parents : list of int
        The parent of each node, ``-1`` for the root.
    path_lengths : list of int
        The number of nodes on the path from each node to the root,
        including both.
        The root has path length 1.
    nodes : list of PhyloNode
        The node data, parallel to :attr:`parents`.
    leaves : list of int
        The indices of the leaf nodes.
    """

    def __init__(self):
        self.parents = []
        self.path_lengths = []
        self.nodes = []
        self.leaves = []

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone.parents = list(self.parents)
        clone.path_lengths = list(self.path_lengths)
        clone.nodes = [node.copy() for node in self.nodes]
        clone.leaves = list(self.leaves)

    def __len__(self):
        return len(self.nodes)

    @property
    def root(self):
        """
        The index of the root node, -1 for an empty tree.
        """
        return self.parents.index(-1) if self.parents else -1

    @property
    def max_path_length(self):
        return max(self.path_lengths, default=0)

    @property
    def num_leaves(self):
        return len(self.leaves)

    @property
    def num_names(self):
        return sum(1 for node in self.nodes if node.name)

    @property
    def num_weights(self):
        return sum(1 for node in self.nodes if node.has_weight)

    @staticmethod
    def from_newick(text):
        """
        Parse a tree in *Newick* notation.

        See Also
        --------
        parse_newick
        """
        from .newick import parse_newick
        return parse_newick(text)

    def common_ancestor(self, a, b):
        """
        Find the lowest common ancestor of two nodes.
        """
        parents = self.parents
        lengths = self.path_lengths
        if lengths[a] < lengths[b]:
            a, b = b, a
        while lengths[a] > lengths[b]:
            a = parents[a]
        while a != b:
            a = parents[a]
            b = parents[b]
        return a

    def path_len(self, a, b):
        """
        Get the number of edges between two nodes.

        Examples
        --------

        >>> tree = PhyloList.from_newick("(dog,((elephant,mouse),cat),robot);")
        >>> names = tree.node_map()
        >>> print(tree.path_len(names["cat"], names["mouse"]))
        3
        """
        lengths = self.path_lengths
        return (
            lengths[a] + lengths[b]
            - 2 * lengths[self.common_ancestor(a, b)]
        )

    def distance(self, a, b):
        """
        Get the sum of the edge weights between two nodes.

        Unweighted edges count as 0.

        Parameters
        ----------
        a, b : int
            The node indices.

        Returns
        -------
        distance : float
            The distance, *NaN* if an index is out of range.
        """
        n_nodes = len(self.nodes)
        if not (0 <= a < n_nodes and 0 <= b < n_nodes):
            return np.nan
        parents = self.parents
        lengths = self.path_lengths
        nodes = self.nodes
        if lengths[a] < lengths[b]:
            a, b = b, a
        distance = 0.0
        while lengths[a] > lengths[b]:
            distance += nodes[a].weight
            a = parents[a]
        while a != b:
            distance += nodes[a].weight + nodes[b].weight
            a = parents[a]
            b = parents[b]
        return distance

    def node_map(self):
        """
        Map the names of the named nodes to their indices.

        Returns
        -------
        node_map : dict of (str, int)
            The node index for each name.
            For duplicate names the last node wins.
        """
        return {
            node.name: i for i, node in enumerate(self.nodes) if node.name
        }

    def distance_matrix(self, leaves):
        """
        Compute the matrix of pairwise distances between the given
        nodes.

        Parameters
        ----------
        leaves : iterable object of int
            The node indices, usually leaves.

        Returns
        -------
        matrix : DistanceMatrix
            The distances in the order of `leaves`.

        Examples
        --------

        >>> tree = parse_newick("((:11,:2):4,:6,:7);")
        >>> print(tree.distance_matrix([5, 2]).matrix.tolist())
        [[0.0, 22.0], [22.0, 0.0]]
        """
        from .distances import DistanceMatrix
        leaves = list(leaves)
        matrix = np.zeros((len(leaves), len(leaves)))
        for i in range(1, len(leaves)):
            for j in range(i):
                matrix[i, j] = matrix[j, i] = self.distance(
                    leaves[i], leaves[j]
                )
        return DistanceMatrix(matrix)

    def rooted_tree(self):
        """
        Convert this parent list into a :class:`PhyloRootedTree`.

        The node data objects are shared between both trees.
        """
        children = [[] for _ in range(len(self.nodes))]
        for child, parent in enumerate(self.parents):
            if parent >= 0:
                children[parent].append(child)
        return PhyloRootedTree(children, self.root, self.nodes)


class PhyloRootedTree(Copyable):
    """
    A rooted phylogenetic tree, represented as adjacency list with edges
    from the root towards the leaves.

    Parameters
    ----------
    children : list of list of int
        The child nodes of each node.
    root : int
        The index of the root node.
    nodes : list of PhyloNode, optional
        The node data, parallel to `children`.
        By default all nodes are unnamed and unweighted.

    Raises
    ------
    TreeError
        If `nodes` and `children` have different lengths.
    """

    def __init__(self, children, root, nodes=None):
        self.children = [list(c) for c in children]
        self.root = root
        if nodes is None:
            nodes = [PhyloNode() for _ in range(len(self.children))]
        if len(nodes) != len(self.children):
            raise TreeError(
                f"{len(nodes)} node data objects were given "
                f"for {len(self.children)} nodes"
            )
        self.nodes = nodes

    def __copy_create__(self):
        return PhyloRootedTree(
            self.children, self.root, [node.copy() for node in self.nodes]
        )

    def __len__(self):
        return len(self.nodes)

    @property
    def num_leaves(self):
        return sum(1 for c in self.children if len(c) == 0)

    @property
    def num_names(self):
        return sum(1 for node in self.nodes if node.name)

    @property
    def num_weights(self):
        return sum(1 for node in self.nodes if node.has_weight)

    def preorder(self):
        """
        Get the node indices in depth-first pre-order, starting at the
        root.
        """
        return _preorder_from(self.children, self.root)

    def to_list(self):
        """
        Convert this tree into a :class:`PhyloList`.

        The node data objects are shared between both trees.

        Raises
        ------
        TreeError
            If a node is unreachable from the root or is reached twice.
        """
        n_nodes = len(self.nodes)
        tree = PhyloList()
        tree.parents = [-1] * n_nodes
        tree.path_lengths = [0] * n_nodes
        tree.nodes = self.nodes
        tree.path_lengths[self.root] = 1
        for node in self.preorder():
            if len(self.children[node]) == 0:
                tree.leaves.append(node)
            for child in self.children[node]:
                if tree.path_lengths[child] != 0:
                    raise TreeError(f"Node {child} is reached twice")
                tree.parents[child] = node
                tree.path_lengths[child] = tree.path_lengths[node] + 1
        if 0 in tree.path_lengths:
            raise TreeError("Not all nodes are reachable from the root")
        tree.leaves.sort()
        return tree

    def to_newick(self):
        """
        Serialize this tree into *Newick* notation.

        Children are written in their order in :attr:`children`.

        Returns
        -------
        newick : str
            The *Newick* notation.

        Examples
        --------

        >>> tree = parse_newick("(dog,((elephant:3,mouse:1.2),robot),cat);")
        >>> print(tree.rooted_tree().to_newick())
        (dog,((elephant:3,mouse:1.2),robot),cat);
        """
        # Post-order traversal, each node is formatted after its children
        formatted = [None] * len(self.nodes)
        for node in reversed(self.preorder()):
            text = ""
            if self.children[node]:
                text = "(" + ",".join(
                    formatted[child] for child in self.children[node]
                ) + ")"
            data = self.nodes[node]
            text += data.name
            if data.has_weight:
                text += ":" + _format_weight(data.weight)
            formatted[node] = text
        return formatted[self.root] + ";"

    def character_table(self):
        """
        List the non-trivial characters of this tree.

        A non-trivial character corresponds to an internal edge, i.e.
        an edge that does not lead to a leaf.
        A character is represented as bit mask over the node indices,
        with the bits of the nodes in the subtree below the edge set.
        A root with a single child, i.e. a root that is itself a leaf,
        is skipped.

        Returns
        -------
        characters : list of int
            The bit masks.

        Examples
        --------

        >>> tree = parse_newick("(dog,((elephant,mouse),cat),robot);")
        >>> for character in tree.rooted_tree().character_table():
        ...     print(f"{character:08b}")
        00111000
        01111100
        """
        start = self.root
        if len(self.children[start]) == 1:
            start = self.children[start][0]
        masks = [0] * len(self.nodes)
        characters = []
        for node in reversed(_preorder_from(self.children, start)):
            mask = 1 << node
            for child in self.children[node]:
                mask |= masks[child]
            masks[node] = mask
        # Report the subtrees in the order they are completed
        for node in _postorder_from(self.children, start):
            if node != start and self.children[node]:
                characters.append(masks[node])
        return characters

    def max_parsimony(self, kmers):
        """
        Solve the *small parsimony* problem for this tree structure.

        The internal nodes are labeled with the k-mers, that minimize
        the total Hamming distance along all edges.
        The weight of each node is set to the Hamming distance to its
        parent.
        The root gets a weight of 0, but is marked as unweighted.

        Parameters
        ----------
        kmers : list of DNA8
            The k-mers parallel to the nodes.
            Only the k-mers of the leaves are read, the other elements
            are replaced.

        Returns
        -------
        total : int
            The total weight of the tree, the parsimony score.
        """
        from .parsimony import small_parsimony
        labels, costs = small_parsimony(self.children, self.root, kmers)
        for node in range(len(self.nodes)):
            if self.children[node]:
                kmers[node] = labels[node]
            self.nodes[node].weight = float(costs[node])
            self.nodes[node].has_weight = True
        self.nodes[self.root].has_weight = False
        return int(costs.sum())


def _preorder_from(children, start):
    order = []
    stack = [start]
    while stack:
        node = stack.pop()
        order.append(node)
        if len(order) > len(children):
            raise TreeError("The adjacency list contains a cycle")
        stack.extend(reversed(children[node]))
    return order


def _postorder_from(children, start):
    order = []
    # Each stack item is a node and whether its children were expanded
    stack = [(start, False)]
    while stack:
        node, expanded = stack.pop()
        if expanded:
            order.append(node)
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in reversed(children[node]))
    return order


def _format_weight(weight):
    text = repr(float(weight))
    if text.endswith(".0"):
        text = text[:-2]
    return text
