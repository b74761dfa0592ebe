# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import itertools
import numpy as np
import pytest
import biotrove.sequence as seq


def test_codon_table_size():
    assert len(seq.CODONS) == 64
    assert seq.CODONS.count(seq.STOP_SYMBOL) == 3
    # All 20 amino acids are encoded
    assert set(seq.CODONS) - {seq.STOP_SYMBOL} == set(seq.AA20_ALPHABET)


@pytest.mark.parametrize("codon, amino_acid", [
    ("ATG", "M"), ("TGG", "W"), ("GCT", "A"), ("TTT", "F"),
    ("AAA", "K"), ("CGA", "R"), ("AGA", "R"), ("GGG", "G"),
    ("TAA", "*"), ("TAG", "*"), ("TGA", "*"),
])
def test_translate_codon(codon, amino_acid):
    assert seq.translate_codon(*codon) == amino_acid
    # RNA and lower case codons give the same result
    rna_codon = codon.replace("T", "U").lower()
    assert seq.translate_codon(*rna_codon) == amino_acid
    assert seq.translate_codon(*[ord(b) for b in codon]) == amino_acid


def test_codon_index_unique():
    indices = set(
        seq.codon_index(*codon)
        for codon in itertools.product("ACGT", repeat=3)
    )
    assert indices == set(range(64))


def test_is_start_codon():
    assert seq.is_start_codon("A", "T", "G")
    assert seq.is_start_codon("a", "u", "g")
    assert not seq.is_start_codon("A", "T", "A")
    assert not seq.is_start_codon("G", "T", "G")


def test_translate_codes():
    code = np.frombuffer(b"ATGGCCTAAGG", dtype=np.uint8)
    assert seq.translate_codes(code).tobytes() == b"MA*"
