# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import pytest
import biotrove.sequence as seq


def _code(string):
    return np.frombuffer(string.encode("ascii"), dtype=np.uint8)


def test_base_index():
    assert seq.base_index(_code("ACTGactg")).tolist() \
        == [0, 1, 2, 3, 0, 1, 2, 3]
    # 'U' shares the base bits of 'T'
    assert seq.base_index(_code("Uu")).tolist() == [2, 2]
    assert seq.base_index(ord("G")) == 3


@pytest.mark.parametrize("base, complement", [
    ("A", "T"), ("C", "G"), ("T", "A"), ("G", "C"),
    ("a", "t"), ("c", "g"), ("t", "a"), ("g", "c"),
])
def test_complement8(base, complement):
    assert chr(seq.complement8(ord(base))) == complement
    assert seq.complement8(_code(base)).tobytes().decode() == complement


def test_dna_complement():
    code = _code("ACGTRYKMBVDHNSW-acgtn")
    assert seq.dna_complement(code).tobytes().decode() \
        == "TGCAYRMKVBHDNSW-tgcan"


def test_rna_complement():
    assert seq.rna_complement(_code("ACGUu")).tobytes().decode() == "UGCAa"


def test_gc_skew():
    assert seq.gc_skew(_code("GCATgcat")).tolist() \
        == [1, -1, 0, 0, 1, -1, 0, 0]


def test_check_symbols():
    seq.check_symbols(_code("ACTGactg"), seq.DNA8_SYMBOLS)
    with pytest.raises(seq.AlphabetError, match="'N' at position 2"):
        seq.check_symbols(_code("ACNG"), seq.DNA8_SYMBOLS)
