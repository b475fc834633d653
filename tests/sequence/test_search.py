# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import pytest
import seqlab.sequence as seq


@pytest.mark.parametrize(
    "pattern, exp_starts",
    [
        ("CG", [3, 5, 7, 9, 26]),
        ("TGT", [37, 39, 41]),
        ("AA", [19, 20, 21, 22, 23, 24]),
        ("GCG", [4, 6, 8]),
        ("CTA", [28, 31, 44]),
        ("TATC", [45]),
        ("ATCG", [1]),
        ("GGGG", []),
        ("ATCGCGCGCGGCTCTTTTAAAAAAACGCTACTACCATGTGTGTCTATC", [1]),
    ]
)
def test_locate_pattern(gc_rich_sequence, pattern, exp_starts):
    matches = seq.locate_pattern(pattern, gc_rich_sequence)
    assert matches.starts.tolist() == exp_starts
    assert matches.ends.tolist() \
        == [start + len(pattern) - 1 for start in exp_starts]
    assert matches.widths.tolist() == [len(pattern)] * len(exp_starts)
    assert len(matches) == len(exp_starts)
    assert seq.count_pattern(pattern, gc_rich_sequence) == len(exp_starts)
    for subsequence in matches.subsequences():
        assert str(subsequence) == pattern


def test_overlapping_matches():
    matches = seq.locate_pattern("AA", seq.NucleotideSequence("AAA"))
    assert list(matches) == [(1, 2), (2, 3)]
    assert matches.get(2) == (2, 3)
    assert seq.count_pattern("AA", seq.NucleotideSequence("AAA")) == 2


def test_sequence_pattern(gc_rich_sequence):
    """
    A pattern can be given as sequence, whose alphabet is extended by
    the alphabet of the subject.
    """
    pattern = seq.NucleotideSequence("CG")
    assert seq.count_pattern(pattern, gc_rich_sequence) == 5
    unamb_pattern = seq.GeneralSequence(
        seq.NucleotideSequence.unambiguous_alphabet(), "CG"
    )
    assert seq.count_pattern(unamb_pattern, gc_rich_sequence) == 5
    with pytest.raises(seq.AlphabetMismatchError):
        seq.count_pattern(seq.ProteinSequence("CG"), gc_rich_sequence)


def test_pattern_longer_than_subject():
    subject = seq.NucleotideSequence("ACG")
    assert seq.count_pattern("ACGT", subject) == 0
    assert len(seq.locate_pattern("ACGT", subject)) == 0
    assert seq.count_pattern("A", seq.NucleotideSequence()) == 0


def test_no_ambiguity_expansion():
    """
    Ambiguous symbols are matched by identity only.
    """
    subject = seq.NucleotideSequence("ACGNACG")
    assert seq.count_pattern("N", subject) == 1
    assert seq.locate_pattern("GN", subject).starts.tolist() == [3]
    assert seq.count_pattern("NN", seq.NucleotideSequence("ACGT")) == 0


@pytest.mark.parametrize("pattern", ["", [], seq.NucleotideSequence()])
def test_empty_pattern(gc_rich_sequence, pattern):
    with pytest.raises(seq.EmptyPatternError):
        seq.count_pattern(pattern, gc_rich_sequence)
    with pytest.raises(seq.EmptyPatternError):
        seq.locate_pattern(pattern, gc_rich_sequence)


@pytest.mark.parametrize("pattern", ["CX", "cg", "CU", "C G"])
def test_alphabet_mismatch(gc_rich_sequence, pattern):
    with pytest.raises(seq.AlphabetMismatchError):
        seq.count_pattern(pattern, gc_rich_sequence)


def test_rna_pattern():
    subject = seq.NucleotideSequence("AUGUAUG", rna=True)
    assert seq.locate_pattern("UG", subject).starts.tolist() == [2, 6]
    with pytest.raises(seq.AlphabetMismatchError):
        seq.count_pattern("TG", subject)


def test_protein_pattern():
    subject = seq.ProteinSequence("MLKMLKX*")
    assert seq.locate_pattern("MLK", subject).starts.tolist() == [1, 4]
    assert seq.count_pattern("X*", subject) == 1


@pytest.mark.parametrize("threads", [None, 1, 4])
def test_vcount_pattern(collection, threads):
    counts = seq.vcount_pattern("CG", collection, threads=threads)
    assert counts.tolist() == [0, 1, 1, 2, 0, 0]
    # The counts agree with counting in each sequence separately
    for i in range(1, len(collection) + 1):
        assert counts[i - 1] == seq.count_pattern("CG", collection.get(i))


@pytest.mark.parametrize("threads", [None, 1, 4])
def test_vlocate_pattern(collection, threads):
    matches = seq.vlocate_pattern("CG", collection, threads=threads)
    assert len(matches) == len(collection)
    assert matches.counts().tolist() == [0, 1, 1, 2, 0, 0]
    assert matches.get(4).starts.tolist() == [1, 3]
    assert matches.get(2).starts.tolist() == [5]
    assert [view.subject for view in matches] == list(collection)
    with pytest.raises(seq.IndexOutOfBoundsError):
        matches.get(7)


@pytest.mark.parametrize("index", [0, 3])
def test_match_index_out_of_bounds(index):
    """
    All 1-based accessors report an invalid index with the same
    exception, which is also an :class:`IndexError`.
    """
    sequence = seq.NucleotideSequence("CGACG")
    collection = seq.SequenceCollection([sequence, sequence])
    matches = seq.locate_pattern("CG", sequence)
    assert len(matches) == 2
    getters = [
        matches.get,
        seq.vlocate_pattern("CG", collection).get,
        collection.get,
    ]
    for get in getters:
        with pytest.raises(seq.IndexOutOfBoundsError):
            get(index)
    assert issubclass(seq.IndexOutOfBoundsError, IndexError)


def test_parallel_order():
    """
    The output order corresponds to the order of the collection,
    independent of the number of threads.
    """
    np.random.seed(0)
    texts = [
        "".join(np.random.choice(list("ACGT"), size=np.random.randint(0, 200)))
        for _ in range(100)
    ]
    collection = seq.SequenceCollection.from_texts(texts)
    exp_counts = [
        seq.count_pattern("ACG", sequence) for sequence in collection
    ]
    assert seq.vcount_pattern("ACG", collection, threads=8).tolist() == exp_counts
    matches = seq.vlocate_pattern("ACG", collection, threads=8)
    assert matches.counts().tolist() == exp_counts


def test_vectorized_mixed_alphabets():
    collection = seq.SequenceCollection([
        seq.NucleotideSequence("ACGACG"),
        seq.NucleotideSequence("ACGACG", rna=True),
    ])
    assert seq.vcount_pattern("CG", collection).tolist() == [2, 2]
    with pytest.raises(seq.AlphabetMismatchError):
        seq.vcount_pattern("CU", collection)


def test_vectorized_errors(collection):
    with pytest.raises(seq.EmptyPatternError):
        seq.vcount_pattern("", collection)
    with pytest.raises(seq.EmptyPatternError):
        seq.vlocate_pattern("", seq.SequenceCollection())
    with pytest.raises(seq.AlphabetMismatchError):
        seq.vlocate_pattern("CX", collection)
    with pytest.raises(ValueError):
        seq.vcount_pattern("CG", collection, threads=0)


def test_empty_collection():
    assert seq.vcount_pattern("A", seq.SequenceCollection()).tolist() == []
    assert len(seq.vlocate_pattern("A", seq.SequenceCollection())) == 0


def test_find_symbol():
    text = "ATACGCTTGCT"
    symbol = "T"
    dna = seq.NucleotideSequence(text)
    assert list(seq.find_symbol(dna, symbol)) == [2, 7, 8, 11]
    assert seq.find_symbol_first(dna, symbol) == 2
    assert seq.find_symbol_last(dna, symbol) == 11


def test_find_absent_symbol():
    dna = seq.NucleotideSequence("ATACGCTTGCT")
    assert len(seq.find_symbol(dna, "N")) == 0
    assert seq.find_symbol_first(dna, "N") == 0
    assert seq.find_symbol_last(dna, "N") == 0
    with pytest.raises(seq.AlphabetError):
        seq.find_symbol(dna, "U")
