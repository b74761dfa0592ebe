# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "biotrove.sequence.assembly"
__author__ = "The Biotrove contributors"
__all__ = ["DeBruijnGraph", "overlap_kmers", "contigs"]

import networkx as nx
from ..error import BadInputError, NotUniformError, NoSolutionError


class DeBruijnGraph:
    """
    A de Bruijn graph of k-mers.

    Each node represents a *(k-1)*-mer and each k-mer adds an arc from
    the node of its prefix to the node of its suffix.
    Nodes are consecutive integers, numbered in the order their
    *(k-1)*-mer first appears.

    Usually a graph is created via one of the ``from_...()`` methods.

    Parameters
    ----------
    jmers : list
        The labels of the nodes.
    graph : MultiDiGraph
        The arcs between the nodes.
        Multiple arcs between the same nodes represent repeated k-mers.

    Attributes
    ----------
    jmers : list
        The label of each node.
        For string k-mers these are :class:`Str` objects in a
        :class:`StrKmers` list.
    graph : MultiDiGraph
        The underlying graph with integer nodes.

    Examples
    --------

    >>> from biotrove.sequence import Str
    >>> graph = Str("TAATTATTAA").de_bruijn(4)
    >>> for node, successors in enumerate(graph.adjacency()):
    ...     print(graph.jmers[node], node, successors)
    TAA 0 [1]
    AAT 1 [2]
    ATT 2 [3, 3]
    TTA 3 [4, 0]
    TAT 4 [2]
    """

    def __init__(self, jmers=None, graph=None):
        self.jmers = [] if jmers is None else jmers
        if graph is None:
            graph = nx.MultiDiGraph()
            graph.add_nodes_from(range(len(self.jmers)))
        self.graph = graph
        self._node_index = {jmer: i for i, jmer in enumerate(self.jmers)}

    @staticmethod
    def from_kmers(kmers):
        """
        Build a de Bruijn graph from a list of k-mers.

        Parameters
        ----------
        kmers : StrKmers
            The k-mers.

        Returns
        -------
        graph : DeBruijnGraph
            The graph.

        Raises
        ------
        NotUniformError
            If the k-mers have different lengths.
        """
        from ..kmers import StrKmers
        from ..seqtypes import Str
        de_bruijn = DeBruijnGraph(StrKmers())
        if len(kmers) == 0:
            return de_bruijn
        k = _uniform_length(kmers)
        for kmer in kmers:
            de_bruijn._add_arc(Str(kmer[:k-1]), Str(kmer[1:]))
        return de_bruijn

    @staticmethod
    def from_freq(freq):
        """
        Build a de Bruijn graph from a multiset of k-mers.

        Parameters
        ----------
        freq : StrFreq
            The k-mers with their counts.
            Each k-mer adds as many arcs as its count.

        Returns
        -------
        graph : DeBruijnGraph
            The graph.

        Raises
        ------
        NotUniformError
            If the k-mers have different lengths.
        """
        from ..kmers import StrKmers
        from ..seqtypes import Str
        de_bruijn = DeBruijnGraph(StrKmers())
        if len(freq) == 0:
            return de_bruijn
        k = _uniform_length(list(freq))
        for kmer, count in freq.items():
            de_bruijn._add_arc(Str(kmer[:k-1]), Str(kmer[1:]), count)
        return de_bruijn

    @staticmethod
    def from_string(string, k):
        """
        Build a de Bruijn graph from the consecutive k-mers of a
        string.

        Parameters
        ----------
        string : str
            The string.
        k : int
            The k-mer length.

        Returns
        -------
        graph : DeBruijnGraph
            The graph.
            An Eulerian path through it spells the string.
        """
        from ..kmers import StrKmers
        from ..seqtypes import Str
        if k < 2:
            raise BadInputError("The k-mer length must be at least 2")
        de_bruijn = DeBruijnGraph(StrKmers())
        if len(string) < k - 1:
            return de_bruijn
        to = de_bruijn._node(Str(string[:k-1]))
        for i in range(1, len(string) - k + 2):
            fr = to
            to = de_bruijn._node(Str(string[i : i+k-1]))
            de_bruijn.graph.add_edge(fr, to)
        return de_bruijn

    def _node(self, jmer):
        node = self._node_index.get(jmer)
        if node is None:
            node = len(self.jmers)
            self._node_index[jmer] = node
            self.jmers.append(jmer)
            self.graph.add_node(node)
        return node

    def _add_arc(self, prefix, suffix, count=1):
        fr = self._node(prefix)
        to = self._node(suffix)
        for _ in range(count):
            self.graph.add_edge(fr, to)

    def __len__(self):
        return self.graph.number_of_nodes()

    def adjacency(self):
        """
        Get the successors of each node.

        Returns
        -------
        adjacency : list of list of int
            For each node the successor of each outgoing arc.
            A successor appears once per arc.
        """
        return [
            [to for _, to in self.graph.out_edges(node)]
            for node in range(len(self))
        ]

    def eulerian_path(self):
        """
        Find a path, that traverses each arc exactly once.

        If the path is a cycle, it starts at the first node.

        Returns
        -------
        path : list of int
            The nodes along the path.

        Raises
        ------
        NoSolutionError
            If the graph has no Eulerian path.
        """
        graph = self.graph
        if graph.number_of_edges() == 0:
            return list(graph.nodes)
        if not nx.has_eulerian_path(graph):
            raise NoSolutionError("The graph has no Eulerian path")
        path = None
        for fr, to in nx.eulerian_path(graph):
            if path is None:
                path = [fr]
            path.append(to)
        if path[0] == path[-1] and path[0] != 0 and 0 in path:
            # Rotate the cycle to the first node
            start = path.index(0)
            path = path[start:-1] + path[:start] + [0]
        return path

    def maximal_non_branching_paths(self):
        """
        Find all maximal paths, whose internal nodes have exactly one
        incoming and one outgoing arc.

        Isolated cycles of such nodes are reported as paths, that end
        at their first node.

        Returns
        -------
        paths : list of list of int
            The paths in the order of their first node.
        """
        graph = self.graph

        def one_in_one_out(node):
            return graph.in_degree(node) == 1 and graph.out_degree(node) == 1

        paths = []
        visited = set()
        for node in range(len(self)):
            if one_in_one_out(node):
                continue
            for _, to in graph.out_edges(node):
                path = [node, to]
                while one_in_one_out(to):
                    visited.add(to)
                    to = next(iter(graph.successors(to)))
                    path.append(to)
                paths.append(path)
        for node in range(len(self)):
            if node in visited or not one_in_one_out(node):
                continue
            path = [node]
            to = node
            while True:
                visited.add(to)
                to = next(iter(graph.successors(to)))
                path.append(to)
                if to == node:
                    break
            paths.append(path)
        return paths


def overlap_kmers(kmers, order):
    """
    Spell the string of k-mers, that overlap by *k-1* symbols in the
    given order.

    The overlaps are not checked for consistency:
    The string consists of the first symbol of each k-mer and the last
    *k-1* symbols of the final k-mer.

    Parameters
    ----------
    kmers : StrKmers
        The k-mers, that must have the same length.
    order : list of int
        Indices into `kmers`.

    Returns
    -------
    string : Str
        The spelled string.

    Raises
    ------
    BadInputError
        If `kmers` is empty or contains empty k-mers.
    NotUniformError
        If the k-mers have different lengths.

    Examples
    --------

    >>> from biotrove.sequence import StrKmers
    >>> print(overlap_kmers(StrKmers(["CTT", "ACC", "TTA"]), [1, 0, 2]))
    ACTTA
    """
    from ..seqtypes import Str
    if len(order) == 0:
        return Str()
    if len(kmers) == 0:
        raise BadInputError("The k-mer list is empty")
    k = _uniform_length(kmers)
    if k == 0:
        raise BadInputError("The k-mers are empty")
    return Str(
        "".join(kmers[i][0] for i in order[:-1]) + kmers[order[-1]]
    )


def contigs(kmers):
    """
    Assemble k-mers into contigs.

    Each contig is spelled by a maximal non-branching path of the de
    Bruijn graph of the k-mers.

    Parameters
    ----------
    kmers : StrKmers
        The k-mers.

    Returns
    -------
    contigs : list of Str
        The contigs.

    Examples
    --------

    >>> from biotrove.sequence import StrKmers
    >>> kmers = StrKmers(
    ...     ["ATG", "ATG", "TGT", "TGG", "CAT", "GGA", "GAT", "AGA"]
    ... )
    >>> print(sorted(contigs(kmers)))
    ['AGA', 'ATG', 'ATG', 'CAT', 'GAT', 'TGGA', 'TGT']
    """
    de_bruijn = DeBruijnGraph.from_kmers(kmers)
    return [
        overlap_kmers(de_bruijn.jmers, path)
        for path in de_bruijn.maximal_non_branching_paths()
    ]


def _uniform_length(kmers):
    k = len(kmers[0])
    for kmer in kmers:
        if len(kmer) != k:
            raise NotUniformError(
                f"Expected k-mers of length {k}, got length {len(kmer)}"
            )
    return k
