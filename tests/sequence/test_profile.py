# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import pytest
import biotrove.sequence as seq


# Rows are positions, columns are the bases in 'ACTG' order
PROFILE = np.array([
    [0.2, 0.4, 0.1, 0.3],
    [0.2, 0.3, 0.2, 0.3],
    [0.3, 0.1, 0.1, 0.5],
    [0.2, 0.5, 0.1, 0.2],
    [0.3, 0.1, 0.2, 0.4],
])


def test_most_prob_kmer():
    profile = seq.FracProfile(PROFILE)
    sequence = seq.DNA8("ACCTGTTTATTGCCTAAGTTCCGAACAAACCCAATATAGCCCGAGGGCCT")
    assert profile.most_prob_kmer(sequence) == "CCGAG"
    assert profile.most_prob_kmer(seq.DNA8("ACG")) is None


def test_kmer_probability():
    profile = seq.FracProfile(PROFILE)
    assert profile.kmer_probability(seq.DNA8("CCGAG")) \
        == pytest.approx(0.4 * 0.3 * 0.5 * 0.2 * 0.4)
    # Case insensitive
    assert profile.kmer_probability(seq.DNA8("ccgag")) \
        == pytest.approx(0.4 * 0.3 * 0.5 * 0.2 * 0.4)
    probs = profile.kmer_probabilities(seq.DNA8("CCGAGA"))
    assert probs.shape == (2,)
    assert probs[0] \
        == pytest.approx(profile.kmer_probability(seq.DNA8("CCGAG")))


def test_invalid_shape():
    with pytest.raises(seq.BadInputError):
        seq.FracProfile(np.ones((3, 3)))
    with pytest.raises(seq.BadInputError):
        seq.CountProfile(np.ones(4))


def test_entropy():
    uniform = seq.FracProfile(np.full((2, 4), 0.25))
    assert uniform.entropy() == pytest.approx(4.0)
    certain = seq.FracProfile([[1.0, 0.0, 0.0, 0.0]])
    assert certain.entropy() == 0
    assert certain.relative_entropy([0.25] * 4) == pytest.approx(2.0)
    assert certain.cross_entropy(np.log2([0.25] * 4)) == pytest.approx(2.0)


def test_count_profile():
    profile = seq.CountProfile(3)
    assert profile.counts.shape == (3, 4)
    profile.add(seq.DNA("ACN"))
    profile.add(seq.DNA8("agtTT"))
    # Columns in 'ACTG' order, the excess symbols are ignored
    assert profile.counts.tolist() == [
        [2, 0, 0, 0],
        [0, 1, 0, 1],
        [0, 0, 1, 0],
    ]
    consensus, count = profile.consensus()
    assert consensus == "ACT"
    assert count == 4


def test_count_profile_copy():
    profile = seq.CountProfile(1)
    clone = profile.copy()
    clone.add(seq.DNA8("A"))
    assert profile.counts.sum() == 0
    assert clone.counts.sum() == 1


def test_dna_consensus():
    consensus, score = seq.dna_consensus([
        seq.DNA("ATCCAGCT"), seq.DNA("GGGCAACT"), seq.DNA("ATGGATCT"),
        seq.DNA("AAGCAACC"), seq.DNA("TTGGAACT"), seq.DNA("ATGCCATT"),
        seq.DNA("ATGGCACT"),
    ])
    assert consensus == "ATGCAACT"
    assert isinstance(consensus, seq.DNA)
    assert score == 42
    # Positions without a base
    consensus, score = seq.dna_consensus([seq.DNA("A-"), seq.DNA("aN")])
    assert consensus == "A-"
    assert score == 2
    assert seq.dna_consensus([]) == (seq.DNA(), 0)
