# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains all possible errors of the `sequence` subpackage.
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = [
    "AlphabetError",
    "InvalidSymbolError",
    "AlphabetMismatchError",
    "OutOfRangeError",
    "IndexOutOfBoundsError",
    "EmptyPatternError",
    "UnsupportedOperationError",
    "IncompleteCodonError",
    "IncompleteCodonWarning",
]


class AlphabetError(Exception):
    """
    This exception is raised, when a code or a symbol is not in an
    :class:`Alphabet`.
    """

    pass


class InvalidSymbolError(AlphabetError):
    """
    Indicates that a symbol sequence contains a symbol, that is not
    part of the alphabet it should be encoded with.

    Parameters
    ----------
    symbol : object
        The offending symbol.
    position : int
        The 1-based position of the first offending symbol.
    element : int, optional
        The 1-based index of the offending element, if the symbol
        sequence was part of a list of symbol sequences.

    Attributes
    ----------
    symbol, position, element
        Same as the parameters.
    """

    def __init__(self, symbol, position, element=None):
        self.symbol = symbol
        self.position = position
        self.element = element
        message = (
            f"Symbol {repr(symbol)} at position {position} is not in the alphabet"
        )
        if element is not None:
            message = f"Element {element}: " + message
        super().__init__(message)

    def __reduce__(self):
        return type(self), (self.symbol, self.position, self.element)


class AlphabetMismatchError(AlphabetError):
    """
    Indicates that a query (e.g. a pattern) contains symbols, that
    cannot occur in the alphabet of the target sequence.
    """

    pass


class OutOfRangeError(IndexError):
    """
    Indicates that a 1-based range lies not within the bounds of a
    sequence.
    """

    pass


class IndexOutOfBoundsError(IndexError):
    """
    Indicates that a 1-based index lies not within the bounds of an
    indexable object, i.e. a position in a :class:`Sequence`, an element
    of a :class:`SequenceCollection` or a match in a :class:`MatchView`
    or :class:`CollectionMatches`.
    """

    pass


class EmptyPatternError(ValueError):
    """
    Indicates that a pattern of length 0 was given for matching.
    """

    pass


class UnsupportedOperationError(Exception):
    """
    Indicates that the alphabet of a sequence lacks the capability
    required for an operation, e.g. complementation of a protein
    sequence.
    """

    pass


class IncompleteCodonError(ValueError):
    """
    Indicates that a nucleotide sequence cannot be translated, because
    its length is not a multiple of 3.
    """

    pass


class IncompleteCodonWarning(Warning):
    """
    Indicates that a trailing partial codon was removed prior to
    translation.
    """

    pass
