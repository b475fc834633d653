import pytest
import seqlab.sequence as seq


@pytest.mark.parametrize("k", [1, 3, 8])
@pytest.mark.benchmark
def benchmark_kmer_frequency(genome, k):
    seq.kmer_frequency(genome, k)


@pytest.mark.benchmark
def benchmark_letter_frequency(genome):
    seq.letter_frequency(genome, "GC")


@pytest.mark.benchmark
def benchmark_vkmer_frequency(reads):
    seq.vkmer_frequency(reads, 2)
