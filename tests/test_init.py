# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import seqlab
import seqlab.sequence as seq


def test_version_number():
    assert hasattr(seqlab, "__version__")


def test_subpackage_exports():
    """
    Check that the public classes and functions of all modules are
    available from the subpackage.
    """
    for name in [
        "Alphabet",
        "LetterAlphabet",
        "NucleotideSequence",
        "ProteinSequence",
        "SequenceCollection",
        "CodonTable",
        "locate_pattern",
        "vcount_pattern",
        "kmer_frequency",
        "FrequencyTable",
        "InvalidSymbolError",
    ]:
        assert hasattr(seq, name)
