# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import io
import os.path
import pytest
import biotrove.sequence as seq
import biotrove.sequence.io.fasta as fasta
from tests.util import data_dir


NUC_ENTRIES = {
    "dna sequence": "ACGCTACGT",
    "another dna sequence": "A",
    "third dna sequence": "ACGT",
    "rna sequence": "ACGU",
    "ambiguous rna sequence": "ACGUNN",
}


def test_access_low_level():
    path = os.path.join(data_dir("sequence"), "nuc.fasta")
    file = fasta.FastaFile.read(path)
    assert file["dna sequence"] == "ACGCTACGT"
    assert file["another dna sequence"] == "A"
    assert dict(file.items()) == NUC_ENTRIES
    file["another dna sequence"] = "AA"
    del file["dna sequence"]
    file["yet another sequence"] = "ACGT"
    assert dict(file.items()) == {
        "another dna sequence": "AA",
        "third dna sequence": "ACGT",
        "rna sequence": "ACGU",
        "ambiguous rna sequence": "ACGUNN",
        "yet another sequence": "ACGT",
    }
    with pytest.raises(IndexError):
        file[0]


def test_access_high_level():
    path = os.path.join(data_dir("sequence"), "nuc.fasta")
    file = fasta.FastaFile.read(path)
    sequences = fasta.get_sequences(file)
    assert sequences["dna sequence"] == seq.DNA8("ACGCTACGT")
    assert isinstance(sequences["dna sequence"], seq.DNA8)
    # Symbols outside of the DNA alphabet give a peptide sequence
    assert isinstance(sequences["rna sequence"], seq.AA)
    assert fasta.get_sequence(file) == seq.DNA8("ACGCTACGT")
    assert fasta.get_sequence(file, "third dna sequence", seq.AA) \
        == seq.AA("ACGT")
    with pytest.raises(ValueError):
        fasta.get_sequence(fasta.FastaFile())


def test_set_sequences():
    file = fasta.FastaFile()
    fasta.set_sequence(file, seq.DNA8("ACGT"))
    fasta.set_sequences(file, {"peptide": seq.AA20("MEANLY")})
    assert dict(file.items()) == {"sequence": "ACGT", "peptide": "MEANLY"}


def test_reader():
    path = os.path.join(data_dir("sequence"), "nuc.fasta")
    records = list(fasta.FastaReader(path))
    assert [record.header for record in records] == list(NUC_ENTRIES)
    assert [record.seq for record in records] == list(NUC_ENTRIES.values())
    assert records[0].id == "dna"
    assert records[0].description == "sequence"
    assert dict(fasta.FastaFile.read_iter(path)) == NUC_ENTRIES


def test_reader_empty_record():
    text = io.StringIO(">first\n>second\nAC\nGT\n>third\n")
    records = list(fasta.FastaReader(text))
    assert records == [
        ("first", ""), ("second", "ACGT"), ("third", "")
    ]


def test_reader_without_records():
    assert list(fasta.FastaReader(io.StringIO(""))) == []
    assert list(fasta.FastaReader(io.StringIO("; only\n\n"))) == []


def test_no_header():
    with pytest.raises(seq.NoHeaderError):
        list(fasta.FastaReader(io.StringIO("ACGT\n>header\nAC\n")))
    with pytest.raises(seq.NoHeaderError):
        fasta.FastaFile.read(io.StringIO("ACGT\n>header\nAC\n"))


def test_line_too_long():
    text = ">header\n" + "A" * 20 + "\n"
    with pytest.raises(seq.LineTooLongError):
        list(fasta.FastaReader(io.StringIO(text), max_line_length=10))
    with pytest.raises(seq.LineTooLongError):
        fasta.FastaFile.read(io.StringIO(text), max_line_length=10)
    records = list(fasta.FastaReader(io.StringIO(text), max_line_length=20))
    assert records[0].seq == "A" * 20


def test_empty_file():
    with pytest.raises(seq.FastaError):
        fasta.FastaFile.read(io.StringIO("; comment\n\n"))


@pytest.mark.parametrize("chars_per_line", [1, 3, 80])
def test_write(tmp_path, chars_per_line):
    path = os.path.join(tmp_path, "test.fasta")
    file = fasta.FastaFile(chars_per_line)
    for header, seq_str in NUC_ENTRIES.items():
        file[header] = seq_str
    file.write(path)
    assert dict(fasta.FastaFile.read(path).items()) == NUC_ENTRIES
    for line in fasta.FastaFile.read(path).lines:
        if not line.startswith(">"):
            assert len(line) <= chars_per_line


def test_write_iter():
    buffer = io.StringIO()
    fasta.FastaFile.write_iter(
        buffer, NUC_ENTRIES.items(), chars_per_line=4
    )
    assert buffer.getvalue().splitlines()[:4] == [
        ">dna sequence", "ACGC", "TACG", "T"
    ]
    buffer.seek(0)
    assert dict(fasta.FastaFile.read_iter(buffer)) == NUC_ENTRIES


def test_copy():
    file = fasta.FastaFile()
    file["seq1"] = "ACGT"
    clone = file.copy()
    clone["seq2"] = "A"
    assert list(file) == ["seq1"]
    assert list(clone) == ["seq1", "seq2"]
