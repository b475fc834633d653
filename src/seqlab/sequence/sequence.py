# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
The module contains the :class:`Sequence` superclass.
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = ["Sequence"]

import abc
import warnings
from numbers import Integral
import numpy as np
from ..copyable import Copyable
from .alphabet import _code_dtype
from .error import (
    AlphabetError,
    IncompleteCodonError,
    IncompleteCodonWarning,
    IndexOutOfBoundsError,
    OutOfRangeError,
    UnsupportedOperationError,
)

_INCOMPLETE_POLICIES = ("error", "truncate")


class Sequence(Copyable, metaclass=abc.ABCMeta):
    """
    The abstract base class for all sequence types.

    A :class:`Sequence` can be seen as a succession of symbols, that are
    elements in the allowed set of symbols, the :class:`Alphabet`.
    Internally, a :class:`Sequence` object uses a *NumPy*
    :class:`ndarray` of integers, where each integer represents a
    symbol.
    The :class:`Alphabet` of a :class:`Sequence` object is used to
    encode each symbol, that is used to create the
    :class:`Sequence`, into an integer. These integer values are called
    *symbol code*, the encoding of an entire sequence of symbols is
    called *sequence code*.

    The size of the symbol code type in the array is determined by the
    size of the :class:`Alphabet`:
    If the :class:`Alphabet` contains 256 symbols or less, one byte is
    used per array element; if the :class:`Alphabet` contains
    between 257 and 65536 symbols, two bytes are used, and so on.

    A :class:`Sequence` is immutable:
    The sequence code is a read-only array and every operation, that
    derives a new sequence (e.g. :meth:`slice()`,
    :meth:`reverse_complement()`), returns a new object with its own
    sequence code.

    Positions in a :class:`Sequence` are 1-based and ranges include
    both ends, i.e. ``sequence.slice(1, 3)`` contains the first three
    symbols.

    Two :class:`Sequence` objects are equal if they have the same
    :class:`Alphabet` and have equal *sequence codes*.
    Comparison with a string or list of symbols evaluates always to
    false.

    Concatenation of two sequences is achieved with the '+' operator.

    Each subclass of :class:`Sequence` needs to overwrite the abstract
    method :func:`get_alphabet()`, which specifies the alphabet the
    :class:`Sequence` uses.

    Parameters
    ----------
    sequence : iterable object, optional
        The symbol sequence, the :class:`Sequence` is initialized with.
        For alphabets containing single letter strings, this parameter
        may also be a :class:`str` object.
        By default the sequence is empty.

    Attributes
    ----------
    code : ndarray
        The sequence code (read-only).
    symbols : list
        The list of symbols, represented by the sequence.
        The list is generated by decoding the sequence code, when
        this attribute is accessed.

    Examples
    --------
    Creating a DNA sequence from string and print the sequence and the
    sequence code:

    >>> dna_seq = NucleotideSequence("ACGTA")
    >>> print(dna_seq)
    ACGTA
    >>> print(dna_seq.code)
    [0 1 2 3 0]
    >>> print(len(dna_seq))
    5

    Sub-ranges use 1-based inclusive positions:

    >>> print(dna_seq.slice(2, 4))
    CGT
    >>> print(dna_seq.get(1))
    A

    Reverse the sequence:

    >>> print(dna_seq.reverse())
    ATGCA

    Concatenate the two sequences:

    >>> print(dna_seq + dna_seq.reverse())
    ACGTAATGCA
    """

    def __init__(self, sequence=()):
        self._seq_code = _freeze(self.get_alphabet().validate(sequence))

    def __copy_create__(self):
        return type(self)()

    def __copy_fill__(self, clone):
        super().__copy_fill__(clone)
        clone._seq_code = _freeze(self._seq_code.copy())

    def copy(self, new_seq_code=None):
        """
        Copy the object.

        Parameters
        ----------
        new_seq_code : ndarray, optional
            If this parameter is set, the sequence code is set to this
            value, rather than the original sequence code.

        Returns
        -------
        copy
            A copy of this object.
        """
        if new_seq_code is None:
            return super().copy()
        else:
            clone = self.__copy_create__()
            clone._seq_code = self._checked_code(new_seq_code)
            return clone

    @property
    def code(self):
        return self._seq_code

    @property
    def symbols(self):
        return self.get_alphabet().decode_multiple(self._seq_code)

    @abc.abstractmethod
    def get_alphabet(self):
        """
        Get the :class:`Alphabet` of the :class:`Sequence`.

        This method must be overwritten, when subclassing
        :class:`Sequence`.

        Returns
        -------
        alphabet : Alphabet
            :class:`Sequence` alphabet.
        """
        pass

    def to_text(self):
        """
        Get the sequence as string with one character per symbol.

        The string is accepted by the constructor of the same
        :class:`Sequence` type, reproducing this sequence.

        Returns
        -------
        text : str
            The textual representation of the sequence.

        Raises
        ------
        UnsupportedOperationError
            If the symbols of the alphabet are not single letters.
        """
        alph = self.get_alphabet()
        if hasattr(alph, "decode_to_text"):
            return alph.decode_to_text(self._seq_code)
        elif alph.is_letter_alphabet():
            return "".join(self.symbols)
        else:
            raise UnsupportedOperationError(
                "The alphabet of the sequence is not a letter alphabet"
            )

    def get(self, position):
        """
        Get the symbol at the given position.

        Parameters
        ----------
        position : int
            The 1-based position of the symbol.

        Returns
        -------
        symbol : object
            The symbol at `position`.

        Raises
        ------
        IndexOutOfBoundsError
            If `position` is not in the range *1* to *len(sequence)*.
        """
        if not isinstance(position, Integral):
            raise TypeError(
                f"Position must be an integer, not '{type(position).__name__}'"
            )
        if position < 1 or position > len(self):
            raise IndexOutOfBoundsError(
                f"Position {position} is out of bounds "
                f"for a sequence of length {len(self)}"
            )
        return self.get_alphabet().decode(self._seq_code[position - 1])

    def slice(self, start, end):
        """
        Get the subsequence of the given range.

        Parameters
        ----------
        start, end : int
            The 1-based first and last position of the range.
            Both ends are included.

        Returns
        -------
        subsequence : Sequence
            A new sequence of the same type containing the symbols from
            `start` to `end`.
            Its length is ``end - start + 1``.

        Raises
        ------
        OutOfRangeError
            If ``start < 1``, ``end > len(sequence)`` or
            ``start > end``.
        """
        for value in (start, end):
            if not isinstance(value, Integral):
                raise TypeError(
                    f"Range bounds must be integers, not '{type(value).__name__}'"
                )
        if start < 1:
            raise OutOfRangeError(f"Start position {start} is smaller than 1")
        if end > len(self):
            raise OutOfRangeError(
                f"End position {end} exceeds the sequence length {len(self)}"
            )
        if start > end:
            raise OutOfRangeError(
                f"Start position {start} is greater than end position {end}"
            )
        return self.copy(self._seq_code[start - 1 : end])

    def reverse(self):
        """
        Reverse the :class:`Sequence`.

        Returns
        -------
        reversed : Sequence
            The reversed :class:`Sequence`.

        Examples
        --------

        >>> dna_seq = NucleotideSequence("ACGTA")
        >>> print(dna_seq.reverse())
        ATGCA
        """
        return self.copy(np.flip(self._seq_code))

    def complement(self):
        """
        Get the complement sequence.

        Returns
        -------
        complement : Sequence
            The complement sequence.

        Raises
        ------
        UnsupportedOperationError
            If the alphabet of the sequence has no complement relation.

        Examples
        --------

        >>> dna_seq = NucleotideSequence("ACGCTT")
        >>> print(dna_seq.complement())
        TGCGAA
        """
        alph = self.get_alphabet()
        if not alph.has_complement():
            raise UnsupportedOperationError(
                f"{type(self).__name__} cannot be complemented, "
                f"its alphabet has no complement relation"
            )
        return self.copy(alph.complement_codes()[self._seq_code])

    def reverse_complement(self):
        """
        Get the reverse complement sequence.

        Returns
        -------
        reverse_complement : Sequence
            The sequence in reversed order with each symbol replaced by
            its complement.

        Raises
        ------
        UnsupportedOperationError
            If the alphabet of the sequence has no complement relation.

        Examples
        --------

        >>> dna_seq = NucleotideSequence("ACGCTT")
        >>> print(dna_seq.reverse_complement())
        AAGCGT
        """
        return self.reverse().complement()

    def translate(self, codon_table=None, incomplete="error"):
        """
        Translate the complete sequence into a protein sequence.

        The sequence is partitioned into consecutive triplets, beginning
        with the first position.
        Each codon is translated into an amino acid via a
        :class:`CodonTable`, even if stop codons occur during the
        translation.
        Codons containing an ambiguous symbol are translated into
        ``X``.

        Parameters
        ----------
        codon_table : CodonTable, optional
            The codon table to be used. By default the default table
            will be used
            (NCBI "Standard" table with "ATG" as single start codon).
        incomplete : {'error', 'truncate'}, optional
            The handling of a trailing partial codon, i.e. a sequence
            length that is not a multiple of 3.
            ``'error'`` raises an :class:`IncompleteCodonError`,
            ``'truncate'`` ignores the trailing nucleotides and issues
            an :class:`IncompleteCodonWarning`.

        Returns
        -------
        protein : ProteinSequence
            The translated protein sequence.

        Raises
        ------
        UnsupportedOperationError
            If the alphabet of the sequence cannot be translated.
        IncompleteCodonError
            If the length of the sequence is not a multiple of 3 and
            `incomplete` is ``'error'``.

        Examples
        --------

        >>> dna_seq = NucleotideSequence("AATGATGCTATAGAT")
        >>> print(dna_seq.translate())
        NDAID
        """
        if incomplete not in _INCOMPLETE_POLICIES:
            raise ValueError(
                f"'{incomplete}' is not a valid handling of incomplete codons"
            )
        if not self.get_alphabet().has_codon_table():
            raise UnsupportedOperationError(
                f"{type(self).__name__} cannot be translated, "
                f"its alphabet has no codon table"
            )
        # Import at this position to avoid circular import
        from .codon import CodonTable
        from .seqtypes import ProteinSequence

        if codon_table is None:
            codon_table = CodonTable.default_table()

        code = self._seq_code
        remainder = len(code) % 3
        if remainder != 0:
            if incomplete == "error":
                raise IncompleteCodonError(
                    f"Sequence length {len(code)} needs to be a multiple of 3 "
                    f"for translation"
                )
            warnings.warn(
                f"The last {remainder} nucleotide(s) do not form a complete "
                f"codon and are ignored",
                IncompleteCodonWarning,
            )
            code = code[: len(code) - remainder]
        # Reshape code into (n,3), with n being the amount of codons
        codons = code.reshape(-1, 3)
        return ProteinSequence().copy(codon_table.map_codon_codes(codons))

    def get_symbol_frequency(self):
        """
        Get the number of occurrences of each symbol in the sequence.

        If a symbol does not occur in the sequence, but it is in the
        alphabet, its number of occurrences is 0.

        Returns
        -------
        frequency : dict
            A dictionary containing the symbols as keys and the
            corresponding number of occurrences in the sequence as
            values.
        """
        alph = self.get_alphabet()
        counts = np.bincount(self._seq_code.astype(np.intp), minlength=len(alph))
        return {
            symbol: count.item() for symbol, count in zip(alph.get_symbols(), counts)
        }

    def _checked_code(self, code):
        """
        Convert the given sequence code into the dtype of this sequence
        type and ensure that each code is valid in the alphabet.
        """
        code = np.asarray(code)
        alph_length = len(self.get_alphabet())
        if len(code) > 0:
            if code.min() < 0 or code.max() >= alph_length:
                raise AlphabetError("Sequence code contains invalid codes")
        return _freeze(code.astype(Sequence.dtype(alph_length)))

    def __len__(self):
        return len(self._seq_code)

    def __iter__(self):
        alph = self.get_alphabet()
        for code in self._seq_code:
            yield alph.decode(code)

    def __eq__(self, item):
        if type(item) is not type(self):
            return False
        if self.get_alphabet() != item.get_alphabet():
            return False
        return np.array_equal(self._seq_code, item._seq_code)

    def __hash__(self):
        return hash((self.get_alphabet(), self._seq_code.tobytes()))

    def __str__(self):
        alph = self.get_alphabet()
        if alph.is_letter_alphabet():
            return self.to_text()
        else:
            return ", ".join([str(e) for e in alph.decode_multiple(self._seq_code)])

    def __add__(self, sequence):
        if not isinstance(sequence, Sequence):
            return NotImplemented
        if self.get_alphabet().extends(sequence.get_alphabet()):
            new_code = np.concatenate((self._seq_code, sequence._seq_code))
            return self.copy(new_code)
        elif sequence.get_alphabet().extends(self.get_alphabet()):
            new_code = np.concatenate((self._seq_code, sequence._seq_code))
            return sequence.copy(new_code)
        else:
            raise ValueError("The sequences alphabets are not compatible")

    @staticmethod
    def dtype(alphabet_size):
        """
        Get the sequence code dtype required for the given size of the
        alphabet.

        Parameters
        ----------
        alphabet_size : int
            The number of symbols in the alphabet.

        Returns
        -------
        dtype
            The :class:`numpy.dtype` suitable to store the symbols in the
            alphabet.
        """
        return _code_dtype(alphabet_size)


def _freeze(code):
    """
    Make the given sequence code read-only.
    """
    code = np.array(code, copy=True)
    code.setflags(write=False)
    return code
