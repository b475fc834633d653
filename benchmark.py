import logging
import time
import matplotlib
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker
import numpy as np
import seqlab.sequence as seq


REPEATS = 20
N_SEQUENCES = 20_000
SEQUENCE_LENGTH = 300
PATTERN = "GAATTC"
THREAD_COUNTS = [1, 2, 4, 8]
WIDTH = 0.25


def random_collection(rng):
    return seq.SequenceCollection(
        [
            seq.NucleotideSequence().copy(rng.integers(0, 4, size=SEQUENCE_LENGTH))
            for _ in range(N_SEQUENCES)
        ]
    )


def measure(function):
    now = time.time_ns()
    for _ in range(REPEATS):
        function()
    return (time.time_ns() - now) * 1e-6 / REPEATS


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(message)s")
    matplotlib.use("Agg")

    logging.info("Create random sequences...")
    collection = random_collection(np.random.default_rng(0))

    count_runtimes = {}
    locate_runtimes = {}
    for threads in THREAD_COUNTS:
        logging.info(f"Measure pattern matching with {threads} thread(s)...")
        count_runtimes[threads] = measure(
            lambda: seq.vcount_pattern(PATTERN, collection, threads=threads)
        )
        locate_runtimes[threads] = measure(
            lambda: seq.vlocate_pattern(PATTERN, collection, threads=threads)
        )
        logging.info(
            f"vcount_pattern: {count_runtimes[threads]:.1f} ms, "
            f"vlocate_pattern: {locate_runtimes[threads]:.1f} ms"
        )

    fig, ax = plt.subplots(figsize=(8.0, 4.0))
    x = np.arange(len(THREAD_COUNTS))
    ax.bar(
        x - WIDTH / 2, [count_runtimes[t] for t in THREAD_COUNTS],
        WIDTH, color="#0a6efd", label="vcount_pattern"
    )
    ax.bar(
        x + WIDTH / 2, [locate_runtimes[t] for t in THREAD_COUNTS],
        WIDTH, color="#e1301d", label="vlocate_pattern"
    )
    ax.legend(loc="upper right", frameon=False)
    ax.set_xticks(x)
    ax.set_xticklabels([str(t) for t in THREAD_COUNTS])
    ax.set_xlabel("Threads")
    ax.set_ylabel("Runtime (ms)")
    ax.yaxis.set_major_locator(ticker.MaxNLocator(integer=True))
    fig.tight_layout()
    plt.savefig("benchmark.svg")
    logging.info("Wrote 'benchmark.svg'")
