# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import networkx as nx
import numpy as np
import pytest
import biotrove.sequence as seq
import biotrove.sequence.phylo as phylo


ADDITIVE = [
    [ 0, 13, 21, 22],
    [13,  0, 12, 13],
    [21, 12,  0, 13],
    [22, 13, 13,  0],
]


def _leaf_distances(tree, n_leaves):
    """
    Get the path lengths between the leaves of a weighted tree graph.
    """
    matrix = np.zeros((n_leaves, n_leaves))
    for i in range(n_leaves):
        lengths = nx.single_source_dijkstra_path_length(tree, i)
        for j in range(n_leaves):
            matrix[i, j] = lengths[j]
    return matrix


def test_distance_matrix_basics():
    matrix = phylo.DistanceMatrix(ADDITIVE)
    assert len(matrix) == 4
    assert matrix.matrix.dtype == float
    assert matrix[1, 2] == 12
    clone = matrix.copy()
    clone.matrix[0, 1] = 100
    assert matrix[0, 1] == 13
    assert clone != matrix
    with pytest.raises(seq.DistanceMatrixError):
        phylo.DistanceMatrix([1, 2, 3])


@pytest.mark.parametrize("matrix, message", [
    ([[0, 1, 2], [1, 0, 1]], "square"),
    ([[0, -1], [-1, 0]], "Negative"),
    ([[0, 1], [2, 0]], "symmetric"),
    ([[0, np.nan], [np.nan, 0]], "symmetric"),
    ([[1, 1], [1, 1]], "diagonal"),
    ([[0, 1, 5], [1, 0, 1], [5, 1, 0]], "Triangle"),
])
def test_validate(matrix, message):
    with pytest.raises(seq.DistanceMatrixError, match=message):
        phylo.DistanceMatrix(matrix).validate()


def test_additive():
    assert phylo.DistanceMatrix(ADDITIVE).additive() == (True, 0, 0, 0, 0)
    ok, *_ = phylo.DistanceMatrix([
        [ 0, 23, 27, 20],
        [23,  0, 30, 28],
        [27, 30,  0, 30],
        [20, 28, 30,  0],
    ]).additive()
    assert not ok


def test_limb_weight():
    matrix = phylo.DistanceMatrix(ADDITIVE)
    assert matrix.limb_weight(1) == (2.0, 2, 0)
    assert matrix.limb_weight(0)[0] == 11.0
    assert matrix.limb_weight(3)[0] == 7.0
    assert matrix.limb_weight_sub_matrix(3)[0] == 7.0
    with pytest.raises(seq.BadInputError):
        phylo.DistanceMatrix([[0, 1], [1, 0]]).limb_weight(0)
    with pytest.raises(seq.BadInputError):
        matrix.limb_weight_sub_matrix(1)


def test_additive_tree():
    tree = phylo.DistanceMatrix(ADDITIVE).additive_tree()
    assert tree.number_of_nodes() == 6
    assert nx.is_tree(tree)
    assert _leaf_distances(tree, 4).tolist() == ADDITIVE
    assert sorted(w for _, _, w in tree.edges(data="weight")) \
        == [2, 4, 6, 7, 11]


@pytest.mark.parametrize("seed", range(5))
def test_random_additive_matrix(seed):
    matrix = phylo.random_additive_matrix(7, rng=seed)
    matrix.validate()
    assert matrix.additive()[0]
    # The additive tree and neighbor joining reconstruct the distances
    for tree in (matrix.additive_tree(), matrix.neighbor_join()):
        assert nx.is_tree(tree)
        assert _leaf_distances(tree, 7) == pytest.approx(matrix.matrix)


def test_random_binary_tree():
    parents = phylo.random_binary_tree(5, rng=0)
    assert len(parents) == 7
    root = len(parents)
    tree = nx.Graph()
    for child, (parent, weight) in enumerate(parents):
        assert 10 <= weight < 100
        tree.add_edge(child, parent)
    assert nx.is_tree(tree)
    degrees = dict(tree.degree())
    assert all(degrees[leaf] == 1 for leaf in range(5))
    assert all(degrees[node] == 3 for node in list(range(5, 7)) + [root])
    with pytest.raises(seq.BadInputError):
        phylo.random_binary_tree(2)


def test_neighbor_join():
    tree = phylo.DistanceMatrix(ADDITIVE).neighbor_join()
    assert tree.number_of_nodes() == 6
    assert _leaf_distances(tree, 4) == pytest.approx(np.array(ADDITIVE))
    tree = phylo.DistanceMatrix([[0, 3], [3, 0]]).neighbor_join()
    assert list(tree.edges(data="weight")) == [(0, 1, 3.0)]


def test_upgma():
    matrix = phylo.DistanceMatrix([
        [ 0, 20, 17, 11],
        [20,  0, 20, 13],
        [17, 20,  0, 10],
        [11, 13, 10,  0],
    ])
    nodes = matrix.upgma()
    assert len(nodes) == 7
    root = nodes[-1]
    assert root.parent == -1
    assert np.isnan(root.weight)
    assert root.n_leaves == 4
    assert root.age == pytest.approx(53 / 6)
    # First cluster joins leaves 2 and 3
    assert nodes[2].parent == nodes[3].parent == 4
    assert nodes[4].age == 5
    # The tree is ultrametric
    for leaf in range(4):
        height = 0
        node = leaf
        while nodes[node].parent != -1:
            height += nodes[node].weight
            node = nodes[node].parent
        assert height == pytest.approx(root.age)


def test_parse_newick():
    tree = phylo.parse_newick("(dog,((elephant,mouse),cat),robot);")
    assert len(tree) == 8
    assert tree.root == 0
    assert tree.parents == [-1, 0, 0, 2, 3, 3, 2, 0]
    assert tree.path_lengths == [1, 2, 2, 3, 4, 4, 3, 2]
    assert tree.leaves == [1, 4, 5, 6, 7]
    assert tree.max_path_length == 4
    assert tree.num_leaves == 5
    assert tree.num_names == 5
    assert tree.num_weights == 0
    names = tree.node_map()
    assert tree.path_len(names["cat"], names["mouse"]) == 3
    assert tree.path_len(names["dog"], names["robot"]) == 2
    assert tree.common_ancestor(names["elephant"], names["cat"]) == 2


def test_parse_newick_weights():
    tree = phylo.parse_newick("((:11,:2):4,:6,:7);")
    assert tree.num_weights == 5
    assert tree.distance(5, 2) == 22
    assert tree.distance(2, 3) == 13
    assert tree.distance(2, 2) == 0
    assert np.isnan(tree.distance(0, 100))
    assert tree.distance_matrix([5, 2]).matrix.tolist() \
        == [[0.0, 22.0], [22.0, 0.0]]


@pytest.mark.parametrize("text", [
    ";", " ; ", "a;", "(a,b)c:1.5;", "((a,b),(c,d));", "(,,(,));",
])
def test_parse_newick_valid(text):
    tree = phylo.parse_newick(text)
    if text.strip() == ";":
        assert len(tree) == 0
        assert tree.root == -1
    else:
        assert tree.root == 0


@pytest.mark.parametrize("text", [
    "", "(a,b)", "(a,b;", "(a:x,b);", "(a,b));", "(a,b)c,d;",
])
def test_parse_newick_invalid(text):
    with pytest.raises(seq.NewickError):
        phylo.parse_newick(text)


@pytest.mark.parametrize("text", [
    "(dog,((elephant:3,mouse:1.2),robot),cat);",
    "((a,b)x:1,(c,d)y:2.5)root;",
    "a;",
])
def test_newick_round_trip(text):
    tree = phylo.PhyloList.from_newick(text)
    assert tree.rooted_tree().to_newick() == text


def test_rooted_tree_conversion():
    tree = phylo.parse_newick("(dog,((elephant,mouse),cat),robot);")
    rooted = tree.rooted_tree()
    assert rooted.root == 0
    assert rooted.children[0] == [1, 2, 7]
    assert rooted.num_leaves == 5
    assert rooted.preorder() == [0, 1, 2, 3, 4, 5, 6, 7]
    converted = rooted.to_list()
    assert converted.parents == tree.parents
    assert converted.path_lengths == tree.path_lengths
    assert converted.leaves == tree.leaves


def test_rooted_tree_errors():
    with pytest.raises(seq.TreeError):
        phylo.PhyloRootedTree([[1], []], 0, [phylo.PhyloNode()])
    with pytest.raises(seq.TreeError):
        phylo.PhyloRootedTree([[1], [0]], 0).to_list()
    with pytest.raises(seq.TreeError):
        # Node 2 is unreachable
        phylo.PhyloRootedTree([[1], [], []], 0).to_list()


def test_phylo_node():
    node = phylo.PhyloNode("dog", 2)
    assert node.has_weight
    assert node.weight == 2.0
    assert not phylo.PhyloNode("dog").has_weight
    clone = node.copy()
    assert clone == node
    clone.weight = 3
    assert clone != node


def test_rooted_character_table():
    tree = phylo.parse_newick("(dog,((elephant,mouse),cat),robot);")
    assert tree.rooted_tree().character_table() == [0b00111000, 0b01111100]


def test_rooted_max_parsimony():
    tree = phylo.parse_newick("((a,b),(c,d));").rooted_tree()
    kmers = [None, None, seq.DNA8("AAAA"), seq.DNA8("AAAC"),
             None, seq.DNA8("CCCC"), seq.DNA8("CCCC")]
    assert tree.max_parsimony(kmers) == 4
    assert kmers[0] == "AAAC"
    assert kmers[1] == "AAAC"
    assert kmers[4] == "CCCC"
    assert not tree.nodes[0].has_weight
    assert tree.nodes[0].weight == 0
    assert sum(node.weight for node in tree.nodes) == 4


def test_max_parsimony_rooted():
    tree = [[], [], [], [], [0, 1], [2, 3], [4, 5]]
    leaves = [seq.DNA8("CAAATCCC"), seq.DNA8("ATTGCGAC"),
              seq.DNA8("CTGCGCTG"), seq.DNA8("ATGGACGA")]
    kmers, costs = phylo.max_parsimony_rooted(tree, leaves)
    assert [str(k) for k in kmers[4:]] \
        == ["ATAGACAC", "ATGGACAA", "ATAGACAA"]
    assert costs.sum() == 16
    # Each cost is the Hamming distance to the parent
    for node in range(6):
        parent = 4 if node < 2 else 5 if node < 4 else 6
        assert costs[node] == kmers[node].hamming(kmers[parent])
    with pytest.raises(seq.BadInputError):
        phylo.max_parsimony_rooted(tree, [])


def test_small_parsimony_errors():
    with pytest.raises(seq.LengthMismatchError):
        phylo.small_parsimony(
            [[1, 2], [], []], 0, [None, seq.DNA8("A"), seq.DNA8("AC")]
        )
    with pytest.raises(seq.TreeError):
        phylo.small_parsimony([[1, 2], [], []], 0, [None, seq.DNA8("A")])


@pytest.fixture
def utree():
    return phylo.UTree(
        [
            [(4, 0)], [(4, 1)], [(5, 2)], [(5, 3)],
            [(0, 0), (1, 1), (5, 4)], [(2, 2), (3, 3), (4, 4)],
        ],
        [seq.DNA8("TCGGCCAA"), seq.DNA8("CCTGGCTG"),
         seq.DNA8("CACAGGAT"), seq.DNA8("TGAGTACC")]
    )


def test_max_parsimony_unrooted(utree):
    assert utree.max_parsimony_unrooted() == 17
    assert [str(k) for k in utree.kmers[4:]] == ["CCAGGCAA", "CAAGGAAA"]
    assert utree.costs.tolist() == [3, 3, 4, 5, 2]


def test_swap_edges(utree):
    original = [list(adj) for adj in utree.adjacency]
    assert utree.internal_edges() == [(4, 5)]
    w, x, y, z = utree.subtrees(4, 5)
    utree.swap_edges(4, x, 5, y)
    assert utree.adjacency != original
    # Leaf 1 and leaf 2 changed places
    assert utree.adjacency[1] == [(5, 1)]
    assert utree.adjacency[2] == [(4, 2)]
    utree.swap_edges(4, x, 5, y)
    assert utree.adjacency == original


def test_large_parsimony():
    tree = phylo.UTree(
        [
            [(4, 0)], [(4, 1)], [(5, 2)], [(5, 3)],
            [(0, 0), (1, 1), (5, 4)], [(2, 2), (3, 3), (4, 4)],
        ],
        [seq.DNA8("AAAA"), seq.DNA8("CCCC"),
         seq.DNA8("AAAA"), seq.DNA8("CCCC")]
    )
    assert tree.max_parsimony_unrooted() == 8
    assert tree.large_parsimony() == 4
    assert tree.costs.sum() == 4
    # The leaves with equal k-mers are neighbors now
    assert tree.adjacency[0][0][0] == tree.adjacency[2][0][0]


def test_utree_from_graph():
    graph = phylo.DistanceMatrix(ADDITIVE).neighbor_join()
    leaves = [seq.DNA8(s) for s in ("AA", "AC", "CC", "CG")]
    tree = phylo.UTree.from_graph(graph, leaves)
    assert len(tree.adjacency) == 6
    labels = sorted(
        label for adj in tree.adjacency for _, label in adj
    )
    # Each edge label appears at both ends
    assert labels == sorted(list(range(5)) * 2)
    assert tree.max_parsimony_unrooted() >= 3
    clone = tree.copy()
    assert clone.kmers == tree.kmers
    assert clone.costs.tolist() == tree.costs.tolist()
    with pytest.raises(seq.TreeError):
        phylo.UTree.from_graph(nx.Graph([(0, 5)]), leaves)


def test_character_table():
    strings = ["GCATTACC", "TTCGTACC", "TCATGACC", "TCAGTCCC", "TCCGTATC"]
    characters, positions = phylo.character_table(strings)
    assert characters == [0b10010, 0b00101]
    assert positions == [2, 3]
    assert seq.StrKmers(strings).character_table() == (characters, positions)


@pytest.mark.parametrize("strings, exception", [
    (["A", "C", "G"], seq.BadInputError),
    (["", "", "", ""], seq.BadInputError),
    (["A", "C", "G", "TT"], seq.LengthMismatchError),
])
def test_character_table_invalid(strings, exception):
    with pytest.raises(exception):
        phylo.character_table(strings)


def test_character_arrays():
    arrays = phylo.character_arrays(["AC", "AC", "TC", "TG"])
    assert arrays == [phylo.CharacterArray(4, "1100")]
    # A position with three symbols is skipped
    arrays = phylo.character_arrays(["AT", "CT", "GA", "AA"])
    assert arrays == [phylo.CharacterArray(4, "1100")]


def test_character_array():
    array = phylo.CharacterArray(5, "1")
    assert str(array.include_taxon(3)) == "10010"
    assert array.taxa_present() == 2
    assert not array.trivial()
    assert phylo.CharacterArray(5, "10000").trivial()
    assert phylo.CharacterArray(5, "11110").trivial()
    merged = array.include_array(phylo.CharacterArray(7, "0100001"))
    assert len(merged) == 7
    assert str(merged) == "1101001"
    assert repr(merged) == "CharacterArray(7, '1101001')"
    # Expands to the string length
    assert len(phylo.CharacterArray(2).set_string("0001")) == 4
