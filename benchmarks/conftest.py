import numpy as np
import pytest
import seqlab.sequence as seq


@pytest.fixture(scope="session")
def genome():
    """
    A random DNA sequence with the length of a small bacterial genome.
    """
    rng = np.random.default_rng(0)
    return seq.NucleotideSequence().copy(rng.integers(0, 4, size=1_000_000))


@pytest.fixture(scope="session")
def reads():
    """
    A collection of random DNA sequences with the length of short reads.
    """
    rng = np.random.default_rng(1)
    return seq.SequenceCollection(
        [
            seq.NucleotideSequence().copy(rng.integers(0, 4, size=150))
            for _ in range(10_000)
        ]
    )
