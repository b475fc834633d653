# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Symbol and *k-mer* frequencies of sequences and sequence collections.
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = [
    "FrequencyTable",
    "letter_frequency",
    "kmer_frequency",
    "alphabet_frequency",
    "vletter_frequency",
    "vkmer_frequency",
]

import itertools
from collections import Counter
from collections.abc import Mapping
from numbers import Integral
import numpy as np
from .error import AlphabetMismatchError

_AMBIGUOUS_POLICIES = ("literal", "exclude")


class FrequencyTable(Mapping):
    """
    A read-only mapping of symbols or *k-mers* to their number of
    occurrences.

    The counts are exact non-negative integers.
    For letter alphabets the keys are strings, otherwise tuples of
    symbols.
    Iteration follows the order of the alphabet for the core symbols,
    followed by other keys.

    Parameters
    ----------
    counts : dict
        The counts, the table is initialized with.

    Examples
    --------

    >>> table = FrequencyTable({"A": 2, "C": 0})
    >>> print(table["A"])
    2
    >>> print(table.total())
    2
    >>> print(dict(table))
    {'A': 2, 'C': 0}
    """

    def __init__(self, counts):
        self._counts = {}
        for key, count in dict(counts).items():
            if not isinstance(count, Integral) or count < 0:
                raise ValueError(f"Invalid count {count} for {repr(key)}")
            self._counts[key] = int(count)

    def total(self):
        """
        Get the sum of all counts.

        Returns
        -------
        total : int
            The sum of all counts.
        """
        return sum(self._counts.values())

    def __getitem__(self, key):
        return self._counts[key]

    def __iter__(self):
        return iter(self._counts)

    def __len__(self):
        return len(self._counts)

    def __repr__(self):
        """Represent FrequencyTable as a string for debugging."""
        return f"FrequencyTable({repr(self._counts)})"

    def __add__(self, table):
        if not isinstance(table, FrequencyTable):
            return NotImplemented
        counts = dict(self._counts)
        for key, count in table.items():
            counts[key] = counts.get(key, 0) + count
        return FrequencyTable(counts)


def letter_frequency(sequence, symbols):
    """
    Count the positions in a sequence, that contain any of the given
    symbols.

    Parameters
    ----------
    sequence : Sequence
        The sequence to be analyzed.
    symbols : str or iterable object
        The set of symbols to be counted.
        Each symbol must be in the alphabet of `sequence`.
        Repeated symbols are counted only once.

    Returns
    -------
    count : int
        The combined number of occurrences of the symbols.

    Raises
    ------
    AlphabetMismatchError
        If a symbol is not in the alphabet of `sequence`.

    Examples
    --------

    >>> seq = NucleotideSequence("ATCGCGCGCGGCTCTTTTAAAAAAACGCTACTACCATGTGTGTCTATC")
    >>> print(letter_frequency(seq, "A"))
    12
    >>> print(letter_frequency(seq, "GC"))
    22
    """
    codes = _symbol_codes(sequence.get_alphabet(), symbols)
    return int(np.count_nonzero(np.isin(sequence.code, codes)))


def kmer_frequency(sequence, k, ambiguous="literal"):
    """
    Count the *k-mers* in a sequence.

    A window of length `k` is moved over the sequence, starting at
    each position from 1 to ``len(sequence) - k + 1``.
    Every *k-mer* built from the core symbols of the alphabet is part
    of the table, with a count of 0, if it does not occur.

    Parameters
    ----------
    sequence : Sequence
        The sequence to be analyzed.
    k : int
        The length of the *k-mers*.
    ambiguous : {'literal', 'exclude'}, optional
        The handling of windows containing symbols that are not core
        symbols, e.g. ``N``.
        ``'literal'`` counts such a window under its literal *k-mer*,
        so that all counts add up to the number of windows.
        ``'exclude'`` ignores such windows.

    Returns
    -------
    table : FrequencyTable
        The count of each *k-mer*.

    Raises
    ------
    ValueError
        If `k` is smaller than 1.

    Examples
    --------

    >>> table = kmer_frequency(NucleotideSequence("ACGCGT"), 2)
    >>> print(len(table))
    16
    >>> print(table["CG"], table["GC"], table["AA"])
    2 1 0
    >>> print(table.total())
    5

    Windows with ambiguous symbols are either counted literally or
    excluded:

    >>> table = kmer_frequency(NucleotideSequence("ACNGT"), 2)
    >>> print(len(table), table["CN"], table.total())
    18 1 4
    >>> table = kmer_frequency(NucleotideSequence("ACNGT"), 2, ambiguous="exclude")
    >>> print(len(table), table.total())
    16 2
    """
    _check_kmer_parameters(k, ambiguous)
    counts, literal_counts = _kmer_counts(sequence, k, ambiguous)
    return _kmer_table(sequence.get_alphabet(), k, counts, literal_counts)


def alphabet_frequency(sequence):
    """
    Count each symbol of the alphabet in a sequence.

    Parameters
    ----------
    sequence : Sequence
        The sequence to be analyzed.

    Returns
    -------
    table : FrequencyTable
        The count of each symbol in the alphabet of `sequence`, in the
        order of the alphabet.

    Examples
    --------

    >>> table = alphabet_frequency(NucleotideSequence("GATTACA"))
    >>> print(table["A"], table["C"], table["G"], table["T"], table["N"])
    3 1 1 2 0
    """
    return FrequencyTable(sequence.get_symbol_frequency())


def vletter_frequency(collection, symbols):
    """
    Count the positions containing any of the given symbols for each
    sequence of a collection.

    Parameters
    ----------
    collection : SequenceCollection
        The sequences to be analyzed.
    symbols : str or iterable object
        The set of symbols to be counted.
        Each symbol must be in the alphabet of every sequence.

    Returns
    -------
    counts : ndarray, dtype=int
        The combined number of occurrences of the symbols in each
        sequence, in the order of the collection.

    Raises
    ------
    AlphabetMismatchError
        If a symbol is not in the alphabet of a sequence.

    Examples
    --------

    >>> collection = SequenceCollection.from_texts(["GATTACA", "CGCG", "TTT"])
    >>> print(vletter_frequency(collection, "GC"))
    [2 4 0]
    """
    symbols = list(symbols)
    return np.array(
        [letter_frequency(sequence, symbols) for sequence in collection], dtype=int
    )


def vkmer_frequency(collection, k, ambiguous="literal"):
    """
    Count the *k-mers* in all sequences of a collection.

    Windows do not span over the boundary of two sequences.

    Parameters
    ----------
    collection : SequenceCollection
        The sequences to be analyzed.
    k : int
        The length of the *k-mers*.
    ambiguous : {'literal', 'exclude'}, optional
        The handling of windows containing symbols that are not core
        symbols, as in :func:`kmer_frequency()`.

    Returns
    -------
    table : FrequencyTable
        The count of each *k-mer* summed over all sequences.
        Empty, if the collection is empty.

    Examples
    --------

    >>> collection = SequenceCollection.from_texts(["ACG", "CGT"])
    >>> table = vkmer_frequency(collection, 2)
    >>> print(table["CG"], table.total())
    2 4
    """
    _check_kmer_parameters(k, ambiguous)
    # Sequences with the same alphabet share the numbering of k-mers,
    # so their counts can be summed before the table is built
    counts_per_alphabet = {}
    for sequence in collection:
        counts, literal_counts = _kmer_counts(sequence, k, ambiguous)
        alph = sequence.get_alphabet()
        if alph in counts_per_alphabet:
            total_counts, total_literal_counts = counts_per_alphabet[alph]
            total_counts += counts
            total_literal_counts.update(literal_counts)
        else:
            counts_per_alphabet[alph] = (counts.copy(), literal_counts)

    table = FrequencyTable({})
    for alph, (counts, literal_counts) in counts_per_alphabet.items():
        table = table + _kmer_table(alph, k, counts, literal_counts)
    return table


def _check_kmer_parameters(k, ambiguous):
    if not isinstance(k, Integral) or isinstance(k, bool):
        raise TypeError(f"k must be an integer, not '{type(k).__name__}'")
    if k < 1:
        raise ValueError(f"k must be at least 1, but is {k}")
    if ambiguous not in _AMBIGUOUS_POLICIES:
        raise ValueError(f"'{ambiguous}' is not a valid handling of ambiguous symbols")


def _kmer_counts(sequence, k, ambiguous):
    """
    Count the *k-mers* of a sequence without building a table.

    Returns
    -------
    counts : ndarray, dtype=np.int64, shape=(n_core**k,)
        The count of each core *k-mer*, indexed by its number.
        The first symbol of a *k-mer* is the most significant digit of
        its number in base ``n_core``.
    literal_counts : Counter
        The count of each window containing a non-core symbol, keyed
        by its tuple of symbol codes.
        Empty, if `ambiguous` is ``'exclude'``.
    """
    alph = sequence.get_alphabet()
    core = alph.get_core_symbols()
    n_core = len(core)

    # Map each symbol code to its index in the core symbols,
    # non-core symbols are marked with -1
    core_index = np.full(len(alph), -1, dtype=np.int64)
    core_index[[alph.encode(symbol) for symbol in core]] = np.arange(n_core)

    counts = np.zeros(n_core**k, dtype=np.int64)
    literal_counts = Counter()
    if len(sequence) - k + 1 > 0:
        windows = np.lib.stride_tricks.sliding_window_view(
            core_index[sequence.code], k
        )
        is_core = np.all(windows != -1, axis=1)
        radix = n_core ** np.arange(k - 1, -1, -1, dtype=np.int64)
        kmer_numbers = np.sum(windows[is_core] * radix, axis=1)
        counts = np.bincount(kmer_numbers, minlength=n_core**k).astype(np.int64)
        if ambiguous == "literal":
            literal_windows = np.lib.stride_tricks.sliding_window_view(
                sequence.code, k
            )[~is_core]
            literal_counts.update(
                tuple(window) for window in literal_windows.tolist()
            )
    return counts, literal_counts


def _kmer_table(alphabet, k, counts, literal_counts):
    """
    Build a :class:`FrequencyTable` from the output of
    :func:`_kmer_counts()`.
    """
    make_key = _key_function(alphabet)
    table = {
        make_key(kmer): count
        for kmer, count in zip(
            itertools.product(alphabet.get_core_symbols(), repeat=k),
            counts.tolist(),
        )
    }
    for window, count in literal_counts.items():
        table[make_key(alphabet.decode_multiple(np.array(window)))] = count
    return FrequencyTable(table)


def _symbol_codes(alphabet, symbols):
    """
    Encode a set of symbols, reporting symbols outside the alphabet as
    :class:`AlphabetMismatchError`.
    """
    codes = []
    for symbol in symbols:
        if symbol not in alphabet:
            raise AlphabetMismatchError(
                f"Symbol {repr(symbol)} is not in the alphabet of the sequence"
            )
        codes.append(alphabet.encode(symbol))
    return np.array(codes, dtype=np.int64)


def _key_function(alphabet):
    """
    Get a function, that converts a sequence of symbols into a table
    key.
    """
    if alphabet.is_letter_alphabet():
        return lambda symbols: "".join(symbols)
    else:
        return tuple
