# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Exact pattern matching in sequences and sequence collections.
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = [
    "MatchView",
    "CollectionMatches",
    "count_pattern",
    "locate_pattern",
    "vcount_pattern",
    "vlocate_pattern",
    "find_symbol",
    "find_symbol_first",
    "find_symbol_last",
]

from concurrent.futures import ThreadPoolExecutor
from numbers import Integral
import numpy as np
from .collection import SequenceCollection
from .error import (
    AlphabetMismatchError,
    EmptyPatternError,
    IndexOutOfBoundsError,
    InvalidSymbolError,
)
from .sequence import Sequence


class MatchView:
    """
    The occurrences of a pattern in a subject sequence.

    Each match is a 1-based inclusive interval ``(start, end)`` in the
    subject.
    The matches are ordered by their start position.
    As matching is exact, all matches have the width of the pattern.

    Parameters
    ----------
    subject : Sequence
        The sequence that was searched.
    starts : ndarray, dtype=int
        The 1-based start positions of the matches in ascending order.
    width : int
        The length of the pattern.

    Attributes
    ----------
    subject : Sequence
        The sequence that was searched.
    starts, ends : ndarray, dtype=int
        The 1-based first and last position of each match.
    widths : ndarray, dtype=int
        The length of each match.

    Examples
    --------

    >>> matches = locate_pattern("AA", NucleotideSequence("AAA"))
    >>> print(len(matches))
    2
    >>> print(matches.starts)
    [1 2]
    >>> print(matches.ends)
    [2 3]
    >>> print(list(matches))
    [(1, 2), (2, 3)]
    """

    def __init__(self, subject, starts, width):
        self._subject = subject
        self._starts = np.asarray(starts, dtype=int)
        self._starts.setflags(write=False)
        self._width = width

    @property
    def subject(self):
        return self._subject

    @property
    def starts(self):
        return self._starts

    @property
    def ends(self):
        return self._starts + self._width - 1

    @property
    def widths(self):
        return np.full(len(self._starts), self._width, dtype=int)

    def get(self, index):
        """
        Get the match at the given index.

        Parameters
        ----------
        index : int
            The 1-based index of the match.

        Returns
        -------
        start, end : int
            The 1-based inclusive interval of the match in the subject.
        """
        if not isinstance(index, Integral):
            raise TypeError(f"Index must be an integer, not '{type(index).__name__}'")
        if index < 1 or index > len(self._starts):
            raise IndexOutOfBoundsError(
                f"Index {index} is out of bounds for {len(self._starts)} matches"
            )
        start = self._starts[index - 1].item()
        return start, start + self._width - 1

    def subsequences(self):
        """
        Get the matched parts of the subject.

        Returns
        -------
        subsequences : SequenceCollection
            The subsequence of each match in the order of the matches.
        """
        return SequenceCollection(
            [self._subject.slice(start, end) for start, end in self]
        )

    def __len__(self):
        return len(self._starts)

    def __iter__(self):
        for start in self._starts.tolist():
            yield start, start + self._width - 1

    def __eq__(self, item):
        if not isinstance(item, MatchView):
            return False
        return (
            self._subject == item._subject
            and self._width == item._width
            and np.array_equal(self._starts, item._starts)
        )

    def __hash__(self):
        return hash((self._subject, self._width, self._starts.tobytes()))


class CollectionMatches:
    """
    The occurrences of a pattern in each sequence of a
    :class:`SequenceCollection`.

    The :class:`MatchView` of each element is index-aligned with the
    collection.
    Unless the matches were computed eagerly by :func:`vlocate_pattern()`,
    the :class:`MatchView` of an element is computed on first access.

    This class should not be instantiated directly, but it is created
    by :func:`vlocate_pattern()`.

    Examples
    --------

    >>> collection = SequenceCollection.from_texts(["ACGTACG", "TTT", "CGCG"])
    >>> matches = vlocate_pattern("CG", collection)
    >>> print(matches.counts())
    [2 0 2]
    >>> print(matches.get(3).starts)
    [1 3]
    """

    def __init__(self, collection, pattern_codes, width, views=None):
        self._collection = collection
        self._sequences = list(collection)
        self._pattern_codes = pattern_codes
        self._width = width
        if views is None:
            self._views = [None] * len(self._sequences)
        else:
            self._views = list(views)

    @property
    def collection(self):
        return self._collection

    def get(self, index):
        """
        Get the matches in the sequence at the given index.

        Parameters
        ----------
        index : int
            The 1-based index of the sequence in the collection.

        Returns
        -------
        matches : MatchView
            The matches in the sequence.
        """
        if not isinstance(index, Integral):
            raise TypeError(f"Index must be an integer, not '{type(index).__name__}'")
        if index < 1 or index > len(self._sequences):
            raise IndexOutOfBoundsError(
                f"Index {index} is out of bounds "
                f"for a collection of {len(self._sequences)} sequences"
            )
        view = self._views[index - 1]
        if view is None:
            subject = self._sequences[index - 1]
            view = _locate(
                self._pattern_codes[subject.get_alphabet()], subject, self._width
            )
            self._views[index - 1] = view
        return view

    def counts(self):
        """
        Get the number of matches in each sequence.

        Returns
        -------
        counts : ndarray, dtype=int
            The number of matches in the order of the collection.
        """
        return np.array([len(view) for view in self], dtype=int)

    def __len__(self):
        return len(self._sequences)

    def __iter__(self):
        for i in range(len(self._sequences)):
            yield self.get(i + 1)


def count_pattern(pattern, subject):
    """
    Count the occurrences of a pattern in a sequence.

    Overlapping occurrences are counted separately.

    Parameters
    ----------
    pattern : str or iterable object or Sequence
        The pattern to search for.
        Symbols are validated against the alphabet of `subject`.
        If a :class:`Sequence` is given, the alphabet of `subject` must
        extend its alphabet.
    subject : Sequence
        The sequence to search in.

    Returns
    -------
    count : int
        The number of matches.

    Raises
    ------
    EmptyPatternError
        If the pattern is empty.
    AlphabetMismatchError
        If the pattern contains symbols, that are not part of the
        alphabet of `subject`.

    Examples
    --------

    >>> seq = NucleotideSequence("ATCGCGCGCGGCTCTTTTAAAAAAACGCTACTACCATGTGTGTCTATC")
    >>> print(count_pattern("CG", seq))
    5
    >>> print(count_pattern("AA", NucleotideSequence("AAA")))
    2
    """
    pattern_code = _encode_pattern(pattern, subject.get_alphabet())
    return len(_match_starts(pattern_code, subject.code))


def locate_pattern(pattern, subject):
    """
    Find the occurrences of a pattern in a sequence.

    Every position, at which the pattern matches, is reported,
    including overlapping matches.
    Ambiguous symbols are compared by identity, e.g. ``N`` in the
    pattern matches only ``N`` in the subject.

    Parameters
    ----------
    pattern : str or iterable object or Sequence
        The pattern to search for.
        Symbols are validated against the alphabet of `subject`.
        If a :class:`Sequence` is given, the alphabet of `subject` must
        extend its alphabet.
    subject : Sequence
        The sequence to search in.

    Returns
    -------
    matches : MatchView
        The matches in ascending order.
        Empty if the pattern is longer than the subject.

    Raises
    ------
    EmptyPatternError
        If the pattern is empty.
    AlphabetMismatchError
        If the pattern contains symbols, that are not part of the
        alphabet of `subject`.

    Examples
    --------

    >>> seq = NucleotideSequence("ATCGCGCGCGGCTCTTTTAAAAAAACGCTACTACCATGTGTGTCTATC")
    >>> matches = locate_pattern("CG", seq)
    >>> print(matches.starts)
    [ 3  5  7  9 26]
    >>> print(matches.subsequences().to_texts())
    ['CG', 'CG', 'CG', 'CG', 'CG']
    """
    pattern_code = _encode_pattern(pattern, subject.get_alphabet())
    return _locate(pattern_code, subject, len(pattern_code))


def vcount_pattern(pattern, collection, threads=None):
    """
    Count the occurrences of a pattern in each sequence of a
    collection.

    Parameters
    ----------
    pattern : str or iterable object or Sequence
        The pattern to search for.
        It must be valid in the alphabet of every sequence in the
        collection.
    collection : SequenceCollection
        The sequences to search in.
    threads : int, optional
        If set to a value greater than 1, the sequences are searched in
        parallel by the given number of threads.

    Returns
    -------
    counts : ndarray, dtype=int
        The number of matches in each sequence, in the order of the
        collection.

    Raises
    ------
    EmptyPatternError
        If the pattern is empty.
    AlphabetMismatchError
        If the pattern contains symbols, that are not part of the
        alphabet of a sequence in the collection.

    Examples
    --------

    >>> collection = SequenceCollection.from_texts(["AAA", "CAAC", "GG"])
    >>> print(vcount_pattern("AA", collection))
    [2 1 0]
    """
    pattern_codes, _ = _encode_for_collection(pattern, collection)

    def count(subject):
        return len(_match_starts(pattern_codes[subject.get_alphabet()], subject.code))

    return np.array(_map_sequences(count, collection, threads), dtype=int)


def vlocate_pattern(pattern, collection, threads=None):
    """
    Find the occurrences of a pattern in each sequence of a
    collection.

    Parameters
    ----------
    pattern : str or iterable object or Sequence
        The pattern to search for.
        It must be valid in the alphabet of every sequence in the
        collection.
    collection : SequenceCollection
        The sequences to search in.
    threads : int, optional
        If set to a value greater than 1, the matches of all sequences
        are computed eagerly in parallel by the given number of
        threads.
        Otherwise the matches of a sequence are computed, when they
        are accessed.

    Returns
    -------
    matches : CollectionMatches
        The matches, index-aligned with the collection.

    Raises
    ------
    EmptyPatternError
        If the pattern is empty.
    AlphabetMismatchError
        If the pattern contains symbols, that are not part of the
        alphabet of a sequence in the collection.
    """
    pattern_codes, width = _encode_for_collection(pattern, collection)
    if _is_parallel(threads):

        def locate(subject):
            return _locate(pattern_codes[subject.get_alphabet()], subject, width)

        views = _map_sequences(locate, collection, threads)
    else:
        views = None
    return CollectionMatches(collection, pattern_codes, width, views)


def find_symbol(sequence, symbol):
    """
    Find a symbol in a sequence.

    Parameters
    ----------
    sequence : Sequence
        The sequence to find the symbol in.
    symbol : object
        The symbol to be found in `sequence`.

    Returns
    -------
    positions : ndarray, dtype=int
        The 1-based positions in `sequence`, where `symbol` has been
        found.

    Raises
    ------
    AlphabetError
        If `symbol` is not in the alphabet of `sequence`.

    Examples
    --------

    >>> print(find_symbol(NucleotideSequence("GATTACA"), "A"))
    [2 5 7]
    """
    code = sequence.get_alphabet().encode(symbol)
    return np.nonzero(sequence.code == code)[0] + 1


def find_symbol_first(sequence, symbol):
    """
    Find the first occurrence of a symbol in a sequence.

    Parameters
    ----------
    sequence : Sequence
        The sequence to find the symbol in.
    symbol : object
        The symbol to be found in `sequence`.

    Returns
    -------
    first_position : int
        The first 1-based position of `symbol` in `sequence`.
        If `symbol` is not in `sequence`, 0 is returned.
    """
    positions = find_symbol(sequence, symbol)
    if len(positions) == 0:
        return 0
    return positions[0].item()


def find_symbol_last(sequence, symbol):
    """
    Find the last occurrence of a symbol in a sequence.

    Parameters
    ----------
    sequence : Sequence
        The sequence to find the symbol in.
    symbol : object
        The symbol to be found in `sequence`.

    Returns
    -------
    last_position : int
        The last 1-based position of `symbol` in `sequence`.
        If `symbol` is not in `sequence`, 0 is returned.
    """
    positions = find_symbol(sequence, symbol)
    if len(positions) == 0:
        return 0
    return positions[-1].item()


def _encode_pattern(pattern, alphabet):
    """
    Get the sequence code of the pattern in the given alphabet.
    """
    if isinstance(pattern, Sequence):
        if len(pattern) == 0:
            raise EmptyPatternError("The pattern is empty")
        if not alphabet.extends(pattern.get_alphabet()):
            raise AlphabetMismatchError(
                "The alphabet of the subject does not extend "
                "the alphabet of the pattern"
            )
        return pattern.code
    if not isinstance(pattern, (str, bytes)):
        pattern = list(pattern)
    if len(pattern) == 0:
        raise EmptyPatternError("The pattern is empty")
    try:
        return alphabet.validate(pattern)
    except InvalidSymbolError as e:
        raise AlphabetMismatchError(
            f"The pattern contains the symbol {repr(e.symbol)} at position "
            f"{e.position}, which is not in the alphabet of the subject"
        ) from e


def _encode_for_collection(pattern, collection):
    """
    Encode the pattern for each distinct alphabet in the collection.

    Returns a dictionary mapping each alphabet to the pattern code and
    the length of the pattern.
    """
    if not isinstance(pattern, (Sequence, str, bytes)):
        pattern = list(pattern)
    if len(pattern) == 0:
        raise EmptyPatternError("The pattern is empty")
    pattern_codes = {}
    for sequence in collection:
        alphabet = sequence.get_alphabet()
        if alphabet not in pattern_codes:
            pattern_codes[alphabet] = _encode_pattern(pattern, alphabet)
    return pattern_codes, len(pattern)


def _locate(pattern_code, subject, width):
    return MatchView(subject, _match_starts(pattern_code, subject.code), width)


def _match_starts(pattern_code, subject_code):
    """
    Find all 1-based start positions, where the pattern code equals
    the subject code.

    The candidates are initially all positions, that match the first
    symbol, and are then narrowed down symbol by symbol.
    """
    n_candidates = len(subject_code) - len(pattern_code) + 1
    if n_candidates <= 0:
        return np.zeros(0, dtype=int)
    candidates = np.nonzero(subject_code[:n_candidates] == pattern_code[0])[0]
    for offset in range(1, len(pattern_code)):
        if len(candidates) == 0:
            break
        candidates = candidates[
            subject_code[candidates + offset] == pattern_code[offset]
        ]
    return candidates.astype(int) + 1


def _is_parallel(threads):
    if threads is None:
        return False
    if not isinstance(threads, Integral) or threads < 1:
        raise ValueError(f"Number of threads must be a positive integer, not {threads}")
    return threads > 1


def _map_sequences(function, collection, threads):
    """
    Apply the function to each sequence of the collection, optionally
    distributed over a thread pool.

    The results are in the order of the collection, independent of the
    order in which the threads finish.
    """
    sequences = list(collection)
    if not _is_parallel(threads) or len(sequences) <= 1:
        return [function(sequence) for sequence in sequences]
    with ThreadPoolExecutor(max_workers=threads) as executor:
        futures = [executor.submit(function, sequence) for sequence in sequences]
        results = [None] * len(futures)
        for i, future in enumerate(futures):
            results[i] = future.result()
    return results
