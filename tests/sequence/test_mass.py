# This source code is part of the Biotrove package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import itertools
import pytest
import biotrove.sequence as seq
import biotrove.sequence.mass as mass


NQEL_EXPERIMENTAL = [0, 99, 113, 114, 128, 227, 257, 299, 355, 356, 370, 371,
                     484]


def test_tables():
    assert len(mass.INTEGER_MASSES) == 20
    assert len(mass.AA18_INT) == 18
    assert mass.AA18_INT_MAX == 186
    assert mass.integer_mass(mass.AA20_LIGHTEST) == 57
    assert mass.integer_mass(mass.AA20_HEAVIEST) == 186
    assert mass.monoisotopic_mass("G") == pytest.approx(57.02146)
    with pytest.raises(KeyError):
        mass.integer_mass("X")


@pytest.mark.parametrize("integer, expected", [
    (57, "G"), (113, "I"), (128, "K"), (186, "W"), (1, None),
])
def test_aa_from_integer_mass(integer, expected):
    assert mass.aa_from_integer_mass(integer) == expected


@pytest.mark.parametrize("value, expected", [
    (57.1, "G"), (0, "G"), (1000, "W"), (128.08, "K"),
])
def test_aa20_nearest_mass(value, expected):
    aa, distance = mass.aa20_nearest_mass(value)
    assert aa == expected
    assert distance == pytest.approx(
        abs(value - mass.MONOISOTOPIC_MASSES[aa])
    )


def test_peptide_weight():
    assert mass.peptide_weight("") == mass.WATER_MASS_MONOISOTOPIC
    assert mass.peptide_weight("GA") == pytest.approx(
        57.02146 + 71.03711 + mass.WATER_MASS_MONOISOTOPIC
    )
    assert seq.AA20("GA").weight() == mass.peptide_weight("GA")


def test_num_sub_pep():
    assert mass.num_sub_pep_linear(4) == 11
    assert mass.num_sub_pep_cyclic(4) == 12
    assert mass.num_sub_pep_cyclic(31315) == 980597910


def test_aa_int_spectra():
    peptide = mass.AAInt.from_peptide("NQEL")
    assert list(peptide) == [114, 128, 129, 113]
    assert str(peptide) == "114-128-129-113"
    assert peptide.mass() == 484
    assert list(peptide.prefix_spec()) == [114, 242, 371, 484]
    assert list(peptide.ideal_spec()) \
        == [0, 113, 114, 242, 242, 370, 371, 484]
    assert list(peptide.linear_spec()) \
        == [0, 113, 114, 128, 129, 242, 242, 257, 370, 371, 484]
    assert list(peptide.cyclic_spec()) == [
        0, 113, 114, 128, 129, 227, 242, 242, 257, 355, 356, 370, 371, 484
    ]
    assert len(peptide.linear_spec()) == mass.num_sub_pep_linear(4)
    assert len(peptide.cyclic_spec()) == mass.num_sub_pep_cyclic(4) + 2
    assert list(mass.AAInt().cyclic_spec()) == [0]
    assert list(mass.AAInt([57]).cyclic_spec()) == [0, 57]


def test_aa_int_to_aa20():
    assert mass.AAInt([114, 128, 129, 113]).to_aa20() == ("NKEI", True)
    assert mass.AAInt([57, 1]).to_aa20() == ("G-", False)
    assert isinstance(mass.AAInt([57]) + (71,), mass.AAInt)


def test_scores():
    counts = mass.IntSpec(NQEL_EXPERIMENTAL).counts()
    peptide = mass.AAInt.from_peptide("NQEL")
    assert peptide.cyclic_common_counts(counts) == 11
    assert peptide.linear_common_counts(counts) == 8


def test_mass_counts():
    counts = mass.MassCounts([57, 57, 71])
    assert counts.intersection_cardinality(mass.MassCounts([57, 71, 71])) \
        == 2
    assert mass.MassCounts([57]).is_subset(counts)
    assert not mass.MassCounts([57, 57, 57]).is_subset(counts)
    cut = mass.MassCounts(
        {57: 3, 71: 3, 99: 2, 113: 1, 300: 5, 10: 9}
    ).cut_aa(2)
    assert cut == mass.AAInt([57, 71])


def test_convolve():
    counts = mass.IntSpec([0, 137, 186, 323]).convolve()
    assert counts == {137: 2, 186: 2, 323: 1, 49: 1}


def test_spectrum_basics():
    spectrum = mass.IntSpec([128, 0, 57])
    assert list(spectrum) == [0, 57, 128]
    assert spectrum[1] == 57
    assert spectrum.parent_mass() == 128
    clone = spectrum.copy()
    assert clone == spectrum
    assert clone != mass.MassSpec([0, 57, 128])
    with pytest.raises(seq.BadInputError):
        mass.IntSpec().parent_mass()
    with pytest.raises(seq.BadInputError):
        mass.IntSpec([[1, 2]])


def test_mass_spec_nearest():
    spectrum = mass.MassSpec([0.0, 57.02, 71.04])
    index, distance = spectrum.nearest(60)
    assert index == 1
    assert distance == pytest.approx(2.98)
    assert spectrum.nearest(1000)[0] == 2
    assert spectrum.nearest(-5)[0] == 0
    # Equal distances prefer the larger mass
    assert mass.MassSpec([0.0, 10.0]).nearest(5)[0] == 1
    with pytest.raises(seq.BadInputError):
        mass.MassSpec().nearest(5)


def test_mass_spec_score():
    spectrum = mass.MassSpec([0.0, 57.02, 71.04])
    theoretical = mass.MassSpec([0.0, 57.0, 57.0, 100.0])
    assert spectrum.score(theoretical) == 3
    assert spectrum.score(theoretical, tolerance=0.01) == 1


def test_seq_cyclic_theo():
    peptides = mass.IntSpec(
        [0, 113, 128, 186, 241, 299, 314, 427]
    ).seq_cyclic_theo()
    assert [str(p) for p in peptides] == [
        "113-128-186", "113-186-128", "128-113-186", "128-186-113",
        "186-113-128", "186-128-113",
    ]
    with pytest.raises(seq.BadInputError):
        mass.seq_cyclic_theo([])


def _permutations(masses):
    return sorted(mass.AAInt(p) for p in itertools.permutations(masses))


def test_leaderboard_int():
    spectrum = mass.AAInt([113, 129, 147]).cyclic_spec()
    peptides = spectrum.leaderboard(10, 1)
    assert mass.AAInt([113, 129, 147]) in peptides
    for peptide in peptides:
        assert peptide.cyclic_spec() == spectrum


def test_leaderboard_int_long_peptide():
    peptide = mass.AAInt.from_peptide("VKLFPFFNQY")
    spectrum = peptide.cyclic_spec()
    results = spectrum.leaderboard(1000, 1)
    rotations = [
        mass.AAInt(peptide[i:] + peptide[:i]) for i in range(len(peptide))
    ]
    assert any(rotation in results for rotation in rotations)
    counts = spectrum.counts()
    top_score = peptide.cyclic_common_counts(counts)
    for result in results:
        assert result.mass() == peptide.mass()
        # All peptides tying with the best score are kept
        assert result.cyclic_common_counts(counts) == top_score
    assert len(results) > len(rotations)


def test_cut_keeps_ties():
    items = [("a", 5), ("b", 4), ("c", 4), ("d", 4), ("e", 1)]
    assert mass.cut(items, 2, key=lambda item: item[1]) == items[:4]
    assert mass.cut(items, 4, key=lambda item: item[1]) == items[:4]
    assert mass.cut(items, 10, key=lambda item: item[1]) == items
    assert mass.cut(items, 0, key=lambda item: item[1]) == []


def test_seq_cyclic_18_exp():
    spectrum = mass.AAInt([113, 129, 147]).cyclic_spec()
    assert sorted(spectrum.seq_cyclic_18_exp(10)) \
        == _permutations([113, 129, 147])


def test_seq_cyclic_exp():
    spectrum = mass.AAInt([113, 129, 147]).cyclic_spec()
    assert sorted(spectrum.convolve().cut_aa(3)) == [113, 129, 147]
    assert sorted(spectrum.seq_cyclic_exp(3, 10, 1)) \
        == _permutations([113, 129, 147])


def test_leaderboard_invalid():
    with pytest.raises(seq.BadInputError):
        mass.leaderboard_int([], 10, 1)
    with pytest.raises(seq.BadInputError):
        mass.leaderboard_int([0, 57], 10, 1, alphabet=[])
    with pytest.raises(seq.BadInputError):
        mass.leaderboard_int([0, 57], 10, 1, alphabet=[0, 57])
    with pytest.warns(seq.SpectrumWarning):
        assert mass.leaderboard_int([0, 50], 10, 1) == []


def test_leaderboard_mass():
    spectrum = mass.AAMass.from_peptide("GAS").cyclic_spec()
    assert len(spectrum) == 8
    peptides = spectrum.seq_cyclic_20(10)
    assert sorted(peptides) \
        == sorted("".join(p) for p in itertools.permutations("GAS"))
    with pytest.warns(seq.SpectrumWarning):
        assert mass.leaderboard_mass([0.0, 20.0], 10, 1) == []


def test_aa20_conversion():
    peptide = seq.AA20("NQEL")
    assert peptide.to_int() == mass.AAInt([114, 128, 129, 113])
    assert peptide.monoisotopic_mass().mass() \
        == pytest.approx(114.04293 + 128.05858 + 129.04259 + 113.08406)


def test_quantize():
    assert mass.quantize([57.02146, 71.03711], 10).tolist() == [570, 710]


def test_convolve_spectra():
    assert mass.convolve_spectra([0, 100, 200], [50, 150, 250, 260]) \
        == (50, 3)
    assert mass.convolve_spectra([100], [50]) == (None, 0)
