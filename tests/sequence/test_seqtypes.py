# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

from collections import Counter
import numpy as np
import pytest
import biotrove.sequence as seq


TEXT = "ACGTTGCATGTCGCATGATGCATGAGAGCT"


def test_construction():
    dna = seq.DNA8("ACTGactg")
    assert str(dna) == "ACTGactg"
    assert bytes(dna) == b"ACTGactg"
    assert dna.code.dtype == np.uint8
    assert len(dna) == 8
    assert seq.DNA8(dna) == dna
    assert seq.DNA8(b"ACG") == "ACG"


@pytest.mark.parametrize("seq_type, string", [
    (seq.DNA8, "ACGN"),
    (seq.DNA8, "ACGU"),
    (seq.RNA8, "ACGT"),
    (seq.AA20, "PEPTIDEX"),
    (seq.AA20, "peptide"),
])
def test_invalid_symbols(seq_type, string):
    with pytest.raises(seq.AlphabetError):
        seq_type(string)


@pytest.mark.parametrize("seq_type, string", [
    (seq.Seq, "x y z"),
    (seq.DNA, "ACGTNRYacgt-"),
    (seq.RNA, "ACGUNN"),
    (seq.AA, "PEPTIDEX*"),
])
def test_tolerant_types(seq_type, string):
    assert str(seq_type(string)) == string


def test_indexing():
    dna = seq.DNA8("GATTACA")
    assert dna[0] == "G"
    assert dna[-1] == "A"
    sliced = dna[1:4]
    assert isinstance(sliced, seq.DNA8)
    assert sliced == "ATT"
    assert list(dna) == list("GATTACA")


def test_equality():
    assert seq.DNA8("ACGT") == seq.DNA8("ACGT")
    assert seq.DNA8("ACGT") != seq.DNA8("ACGA")
    assert seq.DNA8("ACGT") == "ACGT"
    # Different sequence types are never equal
    assert seq.DNA8("ACGT") != seq.DNA("ACGT")


def test_concatenation_and_reverse():
    concat = seq.Seq("abc") + seq.Seq("d")
    assert isinstance(concat, seq.Seq)
    assert concat == "abcd"
    assert concat.reverse() == "dcba"


def test_copy():
    dna = seq.DNA8("ACGT")
    clone = dna.copy()
    clone.inc()
    assert dna == "ACGT"
    assert clone == "ACGG"


def test_freq():
    assert seq.Seq("abca").freq() == Counter({"a": 2, "b": 1, "c": 1})


def test_base_freq():
    assert seq.DNA8("AGCTTTTCATTCTGACTGCA").base_freq() == (4, 5, 8, 3)
    assert seq.DNA("AcGtNn").base_freq() == (1, 1, 1, 1)
    assert seq.RNA("ACUGGN").base_freq() == (1, 1, 1, 2)
    assert seq.RNA8("ACUGG").base_freq() == (1, 1, 1, 2)


def test_transcribe():
    assert seq.DNA8("GATGGAACTTGACTACGTAAATT").transcribe() \
        == seq.RNA8("GAUGGAACUUGACUACGUAAAUU")
    assert seq.DNA8("Atgc").transcribe() == "Augc"
    assert seq.DNA("ATN").transcribe() == seq.RNA("AUN")


def test_reverse_complement():
    assert seq.DNA8("AAAACCCGGT").reverse_complement() == "ACCGGGTTTT"
    assert seq.DNA8("Atacaga").reverse_complement() == "tctgtaT"
    assert seq.DNA("ANNGT").reverse_complement() == "ACNNT"
    assert seq.RNA8("AUGC").reverse_complement() == "GCAU"


def test_gc_content():
    assert seq.DNA8("ACGG").gc_content() == pytest.approx(0.75)
    # Symbols that are no bases are ignored
    assert seq.DNA("ACGTN").gc_content() == pytest.approx(0.5)


def test_cmp():
    assert seq.DNA8("ACT").cmp(seq.DNA8("ACG")) == -1
    assert seq.DNA8("ACG").cmp(seq.DNA8("ACT")) == 1
    assert seq.DNA8("ACG").cmp(seq.DNA8("ACG")) == 0
    # Length takes precedence
    assert seq.DNA8("G").cmp(seq.DNA8("AA")) == -1
    # Lower case is lower
    assert seq.DNA8("a").cmp(seq.DNA8("A")) == -1
    assert seq.DNA8("A").cmp(seq.DNA8("a")) == 1
    sorted_seqs = sorted([seq.DNA8("G"), seq.DNA8("AC"), seq.DNA8("A")])
    assert [str(s) for s in sorted_seqs] == ["A", "G", "AC"]


def test_all_index():
    dna = seq.DNA8("GATATATGCATATACTT")
    assert dna.all_index("ATAT") == [1, 3, 9]
    assert dna.all_index("atat") == [1, 3, 9]
    assert dna.all_count(seq.DNA8("ATAT")) == 3
    assert dna.all_index("CCC") == []
    # Case sensitive for the generic sequence type
    assert seq.Seq("abAB").all_index("ab") == [0]


def test_hamming():
    s = seq.DNA8("GAGCCTACTAACGGGAT")
    t = seq.DNA8("CATCGTAATGACGGCCT")
    assert s.hamming(t) == 7
    assert t.hamming(s) == 7
    assert seq.DNA8("acgt").hamming(seq.DNA8("ACGT")) == 0
    with pytest.raises(seq.LengthMismatchError):
        s.hamming(seq.DNA8("A"))


def test_motif_hamming():
    dna = seq.DNA8("TTACCTTAAC")
    assert dna.motif_hamming(seq.DNA8("AAA")) == 1
    assert dna.motif_hamming(seq.DNA8("TTAC")) == 0
    # Motif longer than the sequence
    assert seq.DNA8("AC").motif_hamming(seq.DNA8("AAA")) == 3


def test_kmers_nearest_motif():
    motif = seq.DNA8("AAA")
    kmers = motif.kmers_nearest_motif(seq.DNA8("TTACCTTAAC"))
    assert [str(k) for k in kmers] == ["TAA", "AAC"]


def test_min_gc_skew():
    assert seq.DNA8("accagtgct").min_gc_skew() == [2, 3]
    # The skew never becomes negative
    assert seq.DNA8("GGA").min_gc_skew() == []
    assert seq.DNA8("AGG").min_gc_skew() == [0]


def test_pal_find_all_index():
    assert seq.DNA8("CAATGCATG").pal_find_all_index(4, 8) \
        == [(3, 4), (2, 6), (5, 4)]
    dna = seq.DNA8("TCAATGCATGCGGGTCTATATGCAT")
    palindromes = dna.pal_find_all_index(4, 12)
    for pos, length in palindromes:
        sub = dna[pos : pos+length]
        assert sub == sub.reverse_complement()
    assert set(palindromes) == {
        (3, 6), (4, 4), (5, 6), (6, 4), (16, 4), (17, 4), (19, 6), (20, 4)
    }
    # Odd lengths are rounded inwards
    assert dna.pal_find_all_index(5, 5) == []


def test_freq_array():
    assert seq.DNA8("ACGCGGCTCTGAAA").freq_array(2).tolist() \
        == [2, 1, 0, 0, 0, 0, 2, 2, 0, 1, 0, 1, 1, 2, 0, 1]
    assert seq.DNA8("A").freq_array(2).tolist() == [0] * 16


def test_modal_kmers():
    dna = seq.DNA8(TEXT)
    assert [str(k) for k in dna.modal_small_kmers(4)] == ["CATG", "GCAT"]
    assert sorted(str(k) for k in dna.modal_kmers(4)) == ["CATG", "GCAT"]
    assert sorted(seq.Str(TEXT).modal_kmers(4)) == ["CATG", "GCAT"]


def test_hamming_variants():
    variants = seq.DNA8("ACGT").hamming_variants(2)
    assert len(variants) == seq.num_hamming_variants(4, 2)
    assert variants[0] == "ACGT"
    assert len(set(str(v) for v in variants)) == len(variants)
    assert all(v.hamming(seq.DNA8("ACGT")) <= 2 for v in variants)
    str_variants = seq.Str("AC").dna8_hamming_variants(1)
    assert str_variants[0] == "AC"
    assert len(str_variants) == 7


def test_modal_hamming_kmers():
    dna = seq.DNA8(TEXT)
    assert set(str(k) for k in dna.modal_hamming_kmers(4, 1)) \
        == {"GATG", "ATGC", "ATGT"}
    assert set(str(k) for k in dna.modal_hamming_kmers_rc(4, 1)) \
        == {"ATGT", "ACAT"}


def test_inc():
    kmer = seq.DNA8("AAG")
    assert not kmer.inc()
    assert kmer == "ACA"
    kmer = seq.DNA8("ggt")
    assert not kmer.inc()
    assert kmer == "ggg"
    assert kmer.inc()
    assert kmer == "aaa"
    # Iterating over all k-mers
    kmer = seq.DNA8("AA")
    n = 1
    while not kmer.inc():
        n += 1
    assert n == 16


def test_translate():
    peptide, stopped = seq.DNA8("ATGGCCTAAGG").translate()
    assert isinstance(peptide, seq.AA20)
    assert peptide == "MA"
    assert stopped
    peptide, stopped = seq.DNA8("ATGGC").translate()
    assert peptide == "M"
    assert not stopped
    peptide, stopped = seq.RNA8(
        "AUGGCCAUGGCGCCCAGAACUGAGAUCAAUAGUACCCGUAUUAACGGGUGA"
    ).translate()
    assert peptide == "MAMAPRTEINSTRING"
    assert stopped


def test_translate_orf():
    dna = seq.DNA8(
        "AGCCATGTAGCTAACTCAGGTTACATGGGGATGACCCCGCGACTTGGATTAGAGTCTCTTTTGGAA"
        "TAAGCCTGAATGATCCGAGTAGCATCTCAG"
    )
    assert set(str(p) for p in dna.translate_orf()) == {
        "MLLGSFRLIPKETLIQVAGSSPCNLS", "M", "MGMTPRLGLESLLE",
        "MTPRLGLESLLE"
    }


def test_aa_find_all_index():
    assert seq.DNA8("ATGGCC").aa_find_all_index("MA") == [0]
    # Found on the reverse strand
    assert seq.DNA8("GGCCAT").aa_find_all_index("MA") == [0]
    assert seq.DNA8("CATGGCCA").aa_find_all_index(seq.AA20("MA")) == [1]


def test_num_hamming_variants():
    assert seq.num_hamming_variants(3, 0) == 1
    assert seq.num_hamming_variants(3, 1) == 10
    assert seq.num_hamming_variants(9, 3) == 2620
    # d larger than k
    assert seq.num_hamming_variants(2, 5) == 16


def test_ti_tv_ratio():
    assert seq.ti_tv_ratio(seq.DNA8("ACGT"), seq.DNA8("GTCA")) == 1.0
    assert seq.ti_tv_ratio(seq.DNA8("AC"), seq.DNA8("GT")) == np.inf
    assert np.isnan(seq.ti_tv_ratio(seq.DNA8("AC"), seq.DNA8("ac")))
    with pytest.raises(seq.LengthMismatchError):
        seq.ti_tv_ratio(seq.DNA8("AC"), seq.DNA8("A"))


def test_str_hamming():
    assert seq.Str("karolin").hamming("kathrin") == 3
    with pytest.raises(seq.LengthMismatchError):
        seq.Str("abc").hamming("ab")


def test_str_kmers():
    assert list(seq.Str("ACGTA").kmers(3)) == ["ACG", "CGT", "GTA"]
    assert all(isinstance(k, seq.Str) for k in seq.Str("ACGTA").kmers(3))
    assert list(seq.Str("AC").kmers(3)) == []


def test_proximal_kmer_repeats():
    string = seq.Str("AAAAXAAAA")
    assert string.proximal_kmer_repeats(2, 4, 3) == ["AA"]
    assert string.proximal_kmer_repeats(2, 3, 3) == []


def test_kmer_composition():
    assert seq.Str("AAAC").kmer_composition(2) == {"AA": 2, "AC": 1}
    assert isinstance(seq.Str("AAAC").kmer_composition(2), seq.StrFreq)
    assert seq.Str("AAAC").k_composition_dist(2, "AACC") == 2
    assert seq.Str("AAAC").k_composition_dist(2, "AAAC") == 0


def test_dna8_de_bruijn_round_trip():
    graph = seq.DNA8("TAATTATTAA").de_bruijn(4)
    path = graph.eulerian_path()
    assert graph.jmers.overlap_kmers(path) == "TAATTATTAA"


def test_aa20_masses():
    peptide = seq.AA20("NQEL")
    assert list(peptide.to_int()) == [114, 128, 129, 113]
    assert len(peptide.monoisotopic_mass()) == 4
    assert peptide.weight() > sum(peptide.to_int())
