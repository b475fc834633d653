import pytest


@pytest.mark.benchmark
def benchmark_unique(reads):
    (reads + reads).unique()


@pytest.mark.benchmark
def benchmark_sorted(reads):
    reads.sorted()


@pytest.mark.benchmark
def benchmark_reverse_complement(reads):
    reads.reverse_complement()
