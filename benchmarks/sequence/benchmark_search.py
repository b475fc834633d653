import pytest
import seqlab.sequence as seq


@pytest.mark.parametrize("pattern", ["A", "CG", "GAATTC", "TATAAT" * 3])
@pytest.mark.benchmark
def benchmark_locate_pattern(genome, pattern):
    seq.locate_pattern(pattern, genome)


@pytest.mark.parametrize("threads", [None, 4])
@pytest.mark.benchmark
def benchmark_vcount_pattern(reads, threads):
    seq.vcount_pattern("GAATTC", reads, threads=threads)


@pytest.mark.benchmark
def benchmark_find_symbol(genome):
    seq.find_symbol(genome, "G")
