# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import warnings
import pytest
import biotrove.sequence as seq


@pytest.fixture
def motif_sequences():
    return seq.DNA8List(seq.DNA8(s) for s in [
        "GGCGTTCAGGCA", "AAGAATCAGTCA", "CAAGGAGTTCGC", "CACGTCAATCAC",
        "CAATAATATTCG",
    ])


@pytest.fixture
def random_search_sequences():
    return seq.DNA8List(seq.DNA8(s) for s in [
        "CGCCCCTCTCGGGGGTGTTCAGTAAACGGCCA",
        "GGGCGAGGTATGTGTAAGTGCCAAGGTGCCAG",
        "TAGTACCGAGACCGAAAGAAGTATACAGGCGT",
        "TAGATCAAGTTTCAGGTGCACGTCGGTGAACC",
        "AATCCACCAGCTCCACGTGCAATGTTGGCCTA",
    ])


def test_median_motifs():
    sequences = [
        seq.DNA8("AAATTGACGCAT"), seq.DNA8("GACGACCACGTT"),
        seq.DNA8("CGTCAGCGCCTG"), seq.DNA8("GCTGAGCACCGG"),
        seq.DNA8("AGTTCGGGACAG"),
    ]
    motifs, distance = seq.median_motifs(sequences, 3)
    assert [str(m) for m in motifs] == ["GAC"]
    assert distance == 2


def test_greedy_motif_search(motif_sequences):
    motifs, score = seq.greedy_motif_search(motif_sequences, 3)
    assert [str(m) for m in motifs] == ["TTC", "ATC", "TTC", "ATC", "TTC"]
    assert score == motifs.consensus_hamming() == 2
    # Same result via the list method
    assert motif_sequences.greedy_motif_search(3)[1] == 2


@pytest.mark.parametrize("sequences, k", [
    ([], 3),
    ([seq.DNA8("ACGT")], 0),
    ([seq.DNA8("ACGT"), seq.DNA8("AC")], 3),
])
def test_invalid_input(sequences, k):
    with pytest.raises(seq.BadInputError):
        seq.greedy_motif_search(sequences, k)


def test_random_kmers(motif_sequences):
    kmers = seq.random_kmers(motif_sequences, 4, rng=0)
    assert len(kmers) == len(motif_sequences)
    for kmer, sequence in zip(kmers, motif_sequences):
        assert len(kmer) == 4
        assert len(sequence.all_index(kmer)) > 0
    # Reproducible with the same seed
    assert kmers == seq.random_kmers(motif_sequences, 4, rng=0)


def _assert_valid_motifs(motifs, score, sequences, k):
    assert len(motifs) == len(sequences)
    for motif, sequence in zip(motifs, sequences):
        assert len(motif) == k
        assert len(sequence.all_index(motif)) > 0
    assert score == motifs.consensus_hamming()


def test_random_motif_search(random_search_sequences):
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", seq.ConvergenceWarning)
        motifs, score = seq.random_motif_search(
            random_search_sequences, 8, 100, rng=1
        )
        motifs2, score2 = seq.random_motif_search(
            random_search_sequences, 8, 100, rng=1
        )
    _assert_valid_motifs(motifs, score, random_search_sequences, 8)
    assert motifs == motifs2
    assert score == score2
    # Far below the score of random k-mers
    assert score <= 12


def test_random_motif_search_invalid(motif_sequences):
    with pytest.raises(seq.BadInputError):
        seq.random_motif_search(motif_sequences, 3, 0)


def test_gibbs_motif_search(random_search_sequences):
    motifs, score = seq.gibbs_motif_search(
        random_search_sequences, 8, 100, 20, rng=2
    )
    _assert_valid_motifs(motifs, score, random_search_sequences, 8)
    assert score <= 12
    with pytest.raises(seq.BadInputError):
        seq.gibbs_motif_search(random_search_sequences, 8, 100, 0)


@pytest.mark.parametrize("weights, expected", [
    ([0, 1, 0], 1),
    ([1, 0, 0], 0),
    ([0, 0, 5], 2),
])
def test_rand_weighted(weights, expected):
    for seed in range(10):
        assert seq.rand_weighted(weights, rng=seed) == expected


def test_hamming_motifs():
    sequences = [
        seq.DNA8("ATTTGGC"), seq.DNA8("TGCCTTA"), seq.DNA8("CGGTATC"),
        seq.DNA8("GAAAATT"),
    ]
    motifs = seq.hamming_motifs(sequences, 3, 1)
    assert set(str(m) for m in motifs) == {"ATA", "ATT", "GTT", "TTT"}
