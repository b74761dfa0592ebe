# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import pytest
import biotrove.sequence as seq


@pytest.fixture
def gattaca():
    return seq.Kmers([
        seq.DNA8("GATTcca"), seq.DNA8("AATTcgg"), seq.DNA8("GACTaca"),
        seq.DNA8("GATAaca"), seq.DNA8("GATTaca"),
    ])


def test_uniform():
    assert not seq.Kmers().uniform()
    assert seq.Kmers([seq.DNA8("AC"), seq.DNA8("GT")]).uniform()
    assert not seq.Kmers([seq.DNA8("AC"), seq.DNA8("G")]).uniform()


def test_consensus(gattaca):
    consensus, score = gattaca.consensus()
    assert consensus == "GATTACA"
    assert score == 28
    assert gattaca.consensus_hamming() == 5 * 7 - 28


def test_consensus_tie():
    # Ties are broken in 'ACTG' order
    consensus, score = seq.Kmers([seq.DNA8("G"), seq.DNA8("C")]).consensus()
    assert consensus == "C"
    assert score == 1


@pytest.mark.parametrize("kmers, exception", [
    (seq.Kmers(), seq.BadInputError),
    (seq.Kmers([seq.DNA8("AC"), seq.DNA8("G")]), seq.NotUniformError),
])
def test_consensus_invalid(kmers, exception):
    with pytest.raises(exception):
        kmers.consensus()


def test_profiles(gattaca):
    counts = gattaca.count_profile().counts
    assert counts.shape == (7, 4)
    assert counts.sum(axis=1).tolist() == [5] * 7
    # First position: 'G' four times and 'A' once
    assert counts[0].tolist() == [1, 0, 0, 4]
    assert gattaca.frac_profile().probabilities[0].tolist() \
        == [0.2, 0.0, 0.0, 0.8]
    laplace = gattaca.laplace_profile().probabilities
    assert laplace[0] == pytest.approx([2/9, 1/9, 1/9, 5/9])
    assert laplace.sum(axis=1) == pytest.approx(np.ones(7))


def test_entropy():
    kmers = seq.Kmers([seq.DNA8("AA"), seq.DNA8("AC")])
    assert kmers.entropy() == pytest.approx(1.0)
    contributions = kmers.entropy_contributions()
    assert contributions.shape == (2, 4)
    assert contributions[0].tolist() == [0, 0, 0, 0]
    assert contributions[1] == pytest.approx([0.5, 0.5, 0, 0])


def test_dna8_list():
    sequences = seq.DNA8List([seq.DNA8("AACG"), seq.DNA8("tt")])
    assert sequences.max_len() == 4
    assert seq.DNA8List().max_len() == 0
    # 'ACTG' order
    assert sequences.base_freq().tolist() \
        == pytest.approx([2/6, 1/6, 2/6, 1/6])
    assert sequences.motif_hamming(seq.DNA8("AC")) == 0 + 2


def test_str_list_distance_matrix():
    strings = seq.StrList(["ACGT", "ACGA", "TTTT"])
    matrix = strings.distance_matrix(lambda a, b: seq.Str(a).hamming(b))
    assert matrix.matrix.tolist() == [
        [0, 1, 3],
        [1, 0, 4],
        [3, 4, 0],
    ]


def test_k_composition_dist_mat():
    strings = seq.StrList(["AAAC", "AACC", "AAAC"])
    matrix = strings.k_composition_dist_mat(2)
    assert matrix.matrix.tolist() == [
        [0, 2, 0],
        [2, 0, 2],
        [0, 2, 0],
    ]


def test_str_kmers_assembly():
    kmers = seq.StrKmers(["CTT", "ACC", "TTA"])
    assert kmers.overlap_kmers([1, 0, 2]) == "ACTTA"
    assert len(kmers.de_bruijn()) == 5


def test_str_freq():
    freq = seq.Str("AAAC").kmer_composition(2)
    graph = freq.de_bruijn()
    assert graph.graph.number_of_edges() == 3
    assert list(graph.jmers) == ["A", "C"]
