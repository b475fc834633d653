# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import pytest
import seqlab.sequence as seq


@pytest.fixture
def gc_rich_sequence():
    """
    A DNA sequence with known composition and pattern occurrences.
    """
    return seq.NucleotideSequence(
        "ATCGCGCGCGGCTCTTTTAAAAAAACGCTACTACCATGTGTGTCTATC"
    )


@pytest.fixture
def collection_texts():
    return ["TCA", "AAATCG", "ACGTGCCTA", "CGCGCA", "GTT", "TCA"]


@pytest.fixture
def collection(collection_texts):
    return seq.SequenceCollection.from_texts(collection_texts)
