# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = ["SequenceCollection"]

from numbers import Integral
import numpy as np
from ..copyable import Copyable
from .alphabet import common_alphabet
from .error import IndexOutOfBoundsError, InvalidSymbolError
from .sequence import Sequence
from .seqtypes import NucleotideSequence


class SequenceCollection(Copyable):
    """
    An ordered list of :class:`Sequence` objects.

    The collection may contain the same sequence multiple times and the
    order of the sequences is preserved by all operations, that filter
    the collection.
    As the contained sequences are immutable, the collection can hand
    them out for reading without giving up ownership:
    Iterating over a collection yields the contained sequences
    themselves, while :meth:`get()` returns a copy.

    Indices of elements are 1-based.

    Parameters
    ----------
    sequences : iterable object of Sequence, optional
        The sequences in the collection.
        By default the collection is empty.

    Examples
    --------

    >>> collection = SequenceCollection.from_texts(
    ...     ["TCA", "AAATCG", "ACGTGCCTA", "CGCGCA", "GTT", "TCA"]
    ... )
    >>> print(len(collection))
    6
    >>> print(collection.widths())
    [3 6 9 6 3 3]
    >>> print(collection.duplicated())
    [False False False False False  True]
    >>> print(collection.unique().to_texts())
    ['TCA', 'AAATCG', 'ACGTGCCTA', 'CGCGCA', 'GTT']
    >>> print(collection.sorted().to_texts())
    ['AAATCG', 'ACGTGCCTA', 'CGCGCA', 'GTT', 'TCA', 'TCA']
    >>> print(collection.get(2))
    AAATCG
    """

    def __init__(self, sequences=()):
        sequences = list(sequences)
        for i, sequence in enumerate(sequences):
            if not isinstance(sequence, Sequence):
                raise TypeError(
                    f"Element {i + 1} is a '{type(sequence).__name__}', "
                    f"but a Sequence was expected"
                )
        self._sequences = tuple(sequences)

    @staticmethod
    def from_texts(texts, seq_type=NucleotideSequence, **kwargs):
        """
        Create a collection from symbol strings.

        Parameters
        ----------
        texts : iterable object of str
            The textual representation of each sequence.
        seq_type : type, optional
            The :class:`Sequence` subclass used to create each sequence.
            By default, :class:`NucleotideSequence` is used.
        **kwargs
            Additional parameters passed to the constructor of
            `seq_type`, e.g. ``rna=True``.

        Returns
        -------
        collection : SequenceCollection
            The collection containing a sequence for each string.

        Raises
        ------
        InvalidSymbolError
            If a string contains a symbol, that is not in the alphabet
            of `seq_type`.
            The :attr:`element` attribute of the error gives the
            1-based index of the first invalid string.
        """
        sequences = []
        for i, text in enumerate(texts):
            try:
                sequences.append(seq_type(text, **kwargs))
            except InvalidSymbolError as e:
                raise InvalidSymbolError(e.symbol, e.position, element=i + 1) from e
        return SequenceCollection(sequences)

    def __copy_create__(self):
        return SequenceCollection([sequence.copy() for sequence in self._sequences])

    def __repr__(self):
        """Represent SequenceCollection as a string for debugging."""
        return (
            f"SequenceCollection("
            f"[{', '.join([repr(sequence) for sequence in self._sequences])}])"
        )

    def __str__(self):
        return "\n".join([str(sequence) for sequence in self._sequences])

    def get(self, index):
        """
        Get a copy of the sequence at the given index.

        Parameters
        ----------
        index : int
            The 1-based index of the sequence.

        Returns
        -------
        sequence : Sequence
            A copy of the sequence at `index`.

        Raises
        ------
        IndexOutOfBoundsError
            If `index` is not in the range *1* to *len(collection)*.
        """
        return self._element(index).copy()

    def get_alphabet(self):
        """
        Get the alphabet, that extends the alphabets of all sequences
        in the collection.

        Returns
        -------
        alphabet : Alphabet or None
            The common alphabet.
            ``None`` if the collection is empty or no common alphabet
            exists.
        """
        return common_alphabet([sequence.get_alphabet() for sequence in self])

    def widths(self):
        """
        Get the length of each sequence.

        Returns
        -------
        widths : ndarray, dtype=int
            The length of each sequence in the order of the collection.
        """
        return np.array([len(sequence) for sequence in self._sequences], dtype=int)

    def duplicated(self):
        """
        Find the sequences, that are repeats of a preceding sequence.

        Returns
        -------
        duplicated : ndarray, dtype=bool
            For each sequence, true if an identical sequence occurs at a
            lower index in the collection.
        """
        seen = set()
        duplicated = np.zeros(len(self._sequences), dtype=bool)
        for i, sequence in enumerate(self._sequences):
            if sequence in seen:
                duplicated[i] = True
            else:
                seen.add(sequence)
        return duplicated

    def unique(self):
        """
        Remove repeated sequences.

        Returns
        -------
        unique : SequenceCollection
            A collection containing the first occurrence of each
            distinct sequence, in the order of this collection.
        """
        return self.select(~self.duplicated())

    def sorted(self):
        """
        Sort the sequences lexicographically.

        The sequences are compared symbol by symbol in the order of
        their alphabet, i.e. by their sequence code.
        A sequence that is a prefix of another sequence is sorted
        first.
        The sort is stable, identical sequences keep their relative
        order.

        Returns
        -------
        sorted : SequenceCollection
            The sorted collection.
        """
        return SequenceCollection(
            sorted(self._sequences, key=lambda sequence: sequence.code.tolist())
        )

    def select(self, index):
        """
        Get a subset of this collection.

        Parameters
        ----------
        index : ndarray or list, dtype=bool or dtype=int
            Either a boolean mask with an entry for each sequence or
            1-based indices of the sequences to select.
            The order of the selected sequences is the order of the
            mask or indices, respectively.

        Returns
        -------
        subset : SequenceCollection
            The selected sequences.
        """
        index = np.asarray(index)
        if index.dtype == bool:
            if index.shape != (len(self._sequences),):
                raise IndexError(
                    f"Boolean mask has shape {index.shape}, "
                    f"but the collection has {len(self._sequences)} elements"
                )
            return SequenceCollection(
                [seq for seq, selected in zip(self._sequences, index) if selected]
            )
        elif len(index) == 0:
            return SequenceCollection()
        else:
            return SequenceCollection([self._element(i) for i in index.tolist()])

    def to_texts(self):
        """
        Get the textual representation of each sequence.

        Returns
        -------
        texts : list of str
            The :meth:`Sequence.to_text()` of each sequence.
        """
        return [sequence.to_text() for sequence in self._sequences]

    def reverse_complement(self):
        """
        Get the reverse complement of each sequence.

        Returns
        -------
        reverse_complement : SequenceCollection
            The reverse complement sequences in the order of this
            collection.
        """
        return SequenceCollection(
            [sequence.reverse_complement() for sequence in self._sequences]
        )

    def _element(self, index):
        if not isinstance(index, Integral):
            raise TypeError(f"Index must be an integer, not '{type(index).__name__}'")
        if index < 1 or index > len(self._sequences):
            raise IndexOutOfBoundsError(
                f"Index {index} is out of bounds "
                f"for a collection of {len(self._sequences)} sequences"
            )
        return self._sequences[index - 1]

    def __len__(self):
        return len(self._sequences)

    def __iter__(self):
        return iter(self._sequences)

    def __eq__(self, item):
        if not isinstance(item, SequenceCollection):
            return False
        return self._sequences == item._sequences

    def __hash__(self):
        return hash(self._sequences)

    def __add__(self, collection):
        if not isinstance(collection, SequenceCollection):
            return NotImplemented
        return SequenceCollection(self._sequences + collection._sequences)
