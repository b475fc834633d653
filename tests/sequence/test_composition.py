# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import itertools
import pytest
import seqlab.sequence as seq


@pytest.mark.parametrize(
    "symbols, exp_count",
    [
        ("A", 12),
        ("C", 13),
        ("G", 9),
        ("T", 14),
        ("GC", 22),
        ("CG", 22),
        ("GGCC", 22),
        ("ACGT", 48),
        ("N", 0),
        ("", 0),
        (["A", "T"], 26),
    ]
)
def test_letter_frequency(gc_rich_sequence, symbols, exp_count):
    assert seq.letter_frequency(gc_rich_sequence, symbols) == exp_count


@pytest.mark.parametrize("symbols", ["U", "a", "AX"])
def test_letter_frequency_mismatch(gc_rich_sequence, symbols):
    with pytest.raises(seq.AlphabetMismatchError):
        seq.letter_frequency(gc_rich_sequence, symbols)


def test_kmer_frequency(gc_rich_sequence):
    exp_counts = {
        "AA": 6, "AC": 3, "AG": 0, "AT": 3,
        "CA": 1, "CC": 1, "CG": 5, "CT": 5,
        "GA": 0, "GC": 5, "GG": 1, "GT": 3,
        "TA": 4, "TC": 4, "TG": 3, "TT": 3,
    }
    table = seq.kmer_frequency(gc_rich_sequence, 2)
    assert dict(table) == exp_counts
    # The k-mers are ordered by the core symbols
    assert list(table) == list(exp_counts)
    assert table.total() == len(gc_rich_sequence) - 1


@pytest.mark.parametrize("k", [1, 2, 3, 4])
def test_kmer_frequency_completeness(gc_rich_sequence, k):
    """
    Every k-mer of the core symbols is part of the table and the counts
    add up to the number of windows.
    """
    table = seq.kmer_frequency(gc_rich_sequence, k)
    assert len(table) == 4**k
    for kmer in itertools.product("ACGT", repeat=k):
        assert "".join(kmer) in table
    assert table.total() == len(gc_rich_sequence) - k + 1


def test_kmer_frequency_trinucleotides(gc_rich_sequence):
    table = seq.kmer_frequency(gc_rich_sequence, 3)
    assert table["CGC"] == 4
    assert table["GCG"] == 3
    assert table["TCT"] == 2
    assert table["GGG"] == 0
    assert len([kmer for kmer, count in table.items() if count > 0]) == 27


def test_kmer_frequency_single_symbols(gc_rich_sequence):
    table = seq.kmer_frequency(gc_rich_sequence, 1)
    assert dict(table) == {"A": 12, "C": 13, "G": 9, "T": 14}


@pytest.mark.parametrize("text", ["", "A", "AC"])
def test_kmer_frequency_short_sequence(text):
    table = seq.kmer_frequency(seq.NucleotideSequence(text), 3)
    assert len(table) == 64
    assert table.total() == 0


@pytest.mark.parametrize("k", [0, -1])
def test_invalid_k(gc_rich_sequence, k):
    with pytest.raises(ValueError):
        seq.kmer_frequency(gc_rich_sequence, k)


def test_invalid_ambiguous_policy(gc_rich_sequence):
    with pytest.raises(ValueError):
        seq.kmer_frequency(gc_rich_sequence, 2, ambiguous="expand")


def test_kmer_frequency_ambiguous():
    dna = seq.NucleotideSequence("ACNNACGT-A")
    literal_table = seq.kmer_frequency(dna, 2)
    assert literal_table["NN"] == 1
    assert literal_table["CN"] == 1
    assert literal_table["NA"] == 1
    assert literal_table["T-"] == 1
    assert literal_table["-A"] == 1
    assert literal_table["AC"] == 2
    assert literal_table.total() == len(dna) - 1
    exclude_table = seq.kmer_frequency(dna, 2, ambiguous="exclude")
    assert len(exclude_table) == 16
    assert exclude_table["AC"] == 2
    assert exclude_table.total() == 4


def test_kmer_frequency_rna():
    table = seq.kmer_frequency(seq.NucleotideSequence("ACGU", rna=True), 2)
    assert "GU" in table
    assert "GT" not in table
    assert table["GU"] == 1


def test_kmer_frequency_protein():
    table = seq.kmer_frequency(seq.ProteinSequence("MLKML"), 2)
    assert len(table) == 20**2
    assert table["ML"] == 2
    assert table["LK"] == 1
    assert table.total() == 4


def test_kmer_frequency_general_sequence():
    """
    For alphabets of arbitrary symbols, the k-mers are tuples.
    """
    alph = seq.Alphabet(["foo", "bar", 42])
    sequence = seq.GeneralSequence(alph, ["foo", "bar", "foo", "bar"])
    table = seq.kmer_frequency(sequence, 2)
    assert len(table) == 9
    assert table[("foo", "bar")] == 2
    assert table[("bar", "foo")] == 1
    assert table[(42, 42)] == 0


def test_alphabet_frequency():
    table = seq.alphabet_frequency(seq.NucleotideSequence("GATTACA"))
    assert list(table) == list(seq.NucleotideSequence.alphabet_dna)
    assert table["A"] == 3
    assert table["T"] == 2
    assert table["N"] == 0
    assert table.total() == 7


def test_vletter_frequency(collection):
    counts = seq.vletter_frequency(collection, "GC")
    assert counts.tolist() == [1, 2, 5, 5, 1, 1]
    for i in range(1, len(collection) + 1):
        assert counts[i - 1] == seq.letter_frequency(collection.get(i), "GC")


def test_vkmer_frequency(collection):
    table = seq.vkmer_frequency(collection, 2)
    # Windows do not span over the boundary of two sequences
    assert table.total() == sum(
        len(sequence) - 1 for sequence in collection
    )
    assert table["TC"] == 3
    assert table["CG"] == 4
    assert len(table) == 16


@pytest.mark.parametrize("ambiguous", ["literal", "exclude"])
def test_vkmer_frequency_sum_of_elements(ambiguous):
    """
    The table of a collection is the sum of the tables of its
    sequences, also if the sequences use different alphabets.
    """
    collection = seq.SequenceCollection([
        seq.NucleotideSequence("ACGTNACG"),
        seq.NucleotideSequence("ACGU", rna=True),
        seq.NucleotideSequence("CGCGN"),
        seq.NucleotideSequence("A"),
    ])
    exp_table = seq.FrequencyTable({})
    for sequence in collection:
        exp_table = exp_table + seq.kmer_frequency(sequence, 2, ambiguous)

    table = seq.vkmer_frequency(collection, 2, ambiguous)
    assert dict(table) == dict(exp_table)
    # DNA and RNA counts are summed for k-mers present in both alphabets
    assert table["CG"] == 5
    assert table["GU"] == 1
    # Core k-mers of both alphabets, 9 of them contain no T or U
    assert len([key for key in table if "N" not in key]) == 16 + 16 - 9
    if ambiguous == "literal":
        assert table["TN"] == 1
        assert table["GN"] == 1
        assert table.total() == 7 + 3 + 4
    else:
        assert "TN" not in table
        assert table.total() == 5 + 3 + 3


def test_vkmer_parameters_are_checked_for_empty_collection():
    with pytest.raises(ValueError):
        seq.vkmer_frequency(seq.SequenceCollection(), 0)


def test_vkmer_frequency_empty_collection():
    assert len(seq.vkmer_frequency(seq.SequenceCollection(), 2)) == 0


def test_frequency_table_is_read_only():
    table = seq.FrequencyTable({"A": 1})
    with pytest.raises(TypeError):
        table["A"] = 2
    with pytest.raises(ValueError):
        seq.FrequencyTable({"A": -1})
