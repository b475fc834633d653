# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import pytest
import seqlab.sequence as seq


def test_nucleotide_construction():
    text = "AATGCGTTA"
    text_amb = "ANNGCBRTAN"
    dna = seq.NucleotideSequence(text)
    assert dna.get_alphabet() == seq.NucleotideSequence.alphabet_dna
    assert not dna.is_rna()
    assert str(dna) == text
    dna = seq.NucleotideSequence(text_amb)
    assert dna.get_alphabet() == seq.NucleotideSequence.alphabet_dna
    assert str(dna) == text_amb
    rna = seq.NucleotideSequence(text.replace("T", "U"), rna=True)
    assert rna.get_alphabet() == seq.NucleotideSequence.alphabet_rna
    assert rna.is_rna()


def test_nucleotide_symbol_codes():
    """
    The bases of DNA and RNA share the symbol codes of the unambiguous
    alphabet.
    """
    dna = seq.NucleotideSequence("ACGT")
    rna = seq.NucleotideSequence("ACGU", rna=True)
    assert dna.code.tolist() == [0, 1, 2, 3]
    assert rna.code.tolist() == [0, 1, 2, 3]


def test_general_sequence():
    alph = seq.Alphabet(["foo", "bar", 42])
    sequence = seq.GeneralSequence(alph, ["bar", 42, "bar"])
    assert sequence.code.tolist() == [1, 2, 1]
    assert sequence.symbols == ["bar", 42, "bar"]
    assert str(sequence.reverse()) == "bar, 42, bar"
    with pytest.raises(seq.UnsupportedOperationError):
        sequence.to_text()
    with pytest.raises(seq.InvalidSymbolError):
        seq.GeneralSequence(alph, ["foo", "baz"])


def test_stop_removal():
    text = "LYG*GR*"
    protein = seq.ProteinSequence(text)
    assert str(protein.remove_stops()) == text.replace("*", "")


def test_protein_from_3_letter_codes():
    protein = seq.ProteinSequence(["MET", "ALA", "C", "UNK"])
    assert str(protein) == "MACX"
    with pytest.raises(seq.InvalidSymbolError) as excinfo:
        seq.ProteinSequence(["MET", "FOO"])
    assert excinfo.value.position == 2


@pytest.mark.parametrize(
    "dna_str, protein_str_list",
    [
        ("CA", []),
        ("GAATGCACTGAGATGCAATAG", ["MH*", "MQ*"]),
        ("ATGCACATGTAGGG", ["MHM*", "M*"]),
        ("GATGCATGTGAAAA", ["MHVK", "M*"]),
    ],
)
def test_frame_translation(dna_str, protein_str_list):
    dna = seq.NucleotideSequence(dna_str)
    proteins, pos = dna.find_orfs()
    assert len(proteins) == len(protein_str_list)
    assert set([str(protein) for protein in proteins]) == set(protein_str_list)
    # Test if the positions are also right
    # -> Get sequence slice and translate completely
    assert set(
        [str(dna.slice(start, end).translate()) for start, end in pos]
    ) == set(protein_str_list)


def test_orf_positions():
    dna = seq.NucleotideSequence("AATGATGCTATAGAT")
    proteins, positions = dna.find_orfs()
    assert [str(protein) for protein in proteins] == ["MML*", "ML*"]
    assert positions == [(2, 13), (5, 13)]


def test_translation_met_start():
    """
    Test whether the start amino acid is replaced by methionine,
    i.e. the correct function of the 'met_start' parameter.
    """
    codon_table = seq.CodonTable.default_table().with_start_codons("AAA")
    dna = seq.NucleotideSequence("GAAACTGAAATAAGAAC")
    proteins, _ = dna.find_orfs(codon_table=codon_table, met_start=True)
    assert [str(protein) for protein in proteins] == ["MLK*", "M*"]


def test_letter_conversion():
    for symbol in seq.ProteinSequence.alphabet:
        if symbol == "-":
            continue
        three_letters = seq.ProteinSequence.convert_letter_1to3(symbol)
        single_letter = seq.ProteinSequence.convert_letter_3to1(three_letters)
        assert symbol == single_letter


@pytest.mark.parametrize(
    "monoisotopic, expected_mol_weight_protein",
    # Reference values taken from https://web.expasy.org/compute_pi/
    [(True, 2231.06), (False, 2232.56)],
)
def test_get_molecular_weight(monoisotopic, expected_mol_weight_protein):
    """
    Test whether the molecular weight of a protein is calculated
    correctly.
    """
    protein = seq.ProteinSequence("ACDEFGHIKLMNPQRSTVW")
    mol_weight_protein = protein.get_molecular_weight(monoisotopic=monoisotopic)
    assert mol_weight_protein == pytest.approx(expected_mol_weight_protein, abs=1e-2)


def test_molecular_weight_of_ambiguous_protein():
    with pytest.raises(ValueError):
        seq.ProteinSequence("ACX").get_molecular_weight()
