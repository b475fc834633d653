# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = [
    "Alphabet",
    "LetterAlphabet",
    "common_alphabet",
]

import string
import numpy as np
from .codec import create_lookup, decode_to_chars, encode_chars, first_illegal
from .error import AlphabetError, InvalidSymbolError, UnsupportedOperationError


class Alphabet(object):
    """
    The ordered set of symbols, a :class:`Sequence` may consist of.

    The alphabet translates between symbols and their *symbol codes*:
    The code of a symbol is its index in the symbol list, so a sequence
    can be stored as integer array.
    Symbols are usually single letters, but any hashable object can be
    used as symbol.
    If a symbol appears more than once in the list, its first index is
    its code.

    An alphabet *extends* another alphabet, if the symbol list of the
    other alphabet is a prefix of its own symbol list.
    Hence, a sequence code valid in the other alphabet means the same
    in the extending alphabet.
    An alphabet always extends itself.

    Beyond its symbols, an alphabet tells which operations are
    available for sequences using it, via :meth:`has_complement()` and
    :meth:`has_codon_table()`.
    A plain :class:`Alphabet` supports neither of them.

    Objects of this class are immutable.

    Parameters
    ----------
    symbols : iterable object
        The symbols in the order of their symbol codes.

    Examples
    --------

    >>> alph = Alphabet(["A","C","G","T"])
    >>> print(alph.encode("G"))
    2
    >>> print(alph.decode(2))
    G
    >>> try:
    ...    alph.encode("foo")
    ... except AlphabetError as e:
    ...    print(e)
    Symbol 'foo' is not in the alphabet

    Symbols do not need to be letters:

    >>> alph = Alphabet(["foo", 42, (1,2,3), 5, 3.141])
    >>> print(alph.encode((1,2,3)))
    2
    >>> print(alph.decode(4))
    3.141

    Adding symbols at the end gives an extending alphabet:

    >>> Alphabet(["A","C","G","T","U"]).extends(Alphabet(["A","C","G","T"]))
    True
    >>> Alphabet(["A","C","G","T"]).extends(Alphabet(["A","C","G","T","U"]))
    False
    """

    def __init__(self, symbols):
        symbols = tuple(symbols)
        if len(symbols) == 0:
            raise ValueError("An alphabet requires at least one symbol")
        self._symbols = symbols
        self._codes = {}
        for code, symbol in enumerate(symbols):
            self._codes.setdefault(symbol, code)

    def __repr__(self):
        """Represent Alphabet as a string for debugging."""
        return f"Alphabet({list(self._symbols)})"

    def get_symbols(self):
        """
        Get the symbols in the order of their symbol codes.

        Returns
        -------
        symbols : tuple
            The symbols.
        """
        return self._symbols

    def get_core_symbols(self):
        """
        Get the unambiguous symbols of the alphabet.

        The *k-mers* in a :func:`kmer_frequency()` table are built from
        these symbols.
        For a plain :class:`Alphabet` all symbols are core symbols.

        Returns
        -------
        symbols : tuple
            The core symbols.
        """
        return self.get_symbols()

    def extends(self, alphabet):
        """
        Check whether the symbols of another alphabet are a prefix of
        the symbols in this alphabet.

        Parameters
        ----------
        alphabet : Alphabet
            The alphabet to compare with.

        Returns
        -------
        result : bool
            True, if each symbol code of `alphabet` denotes the same
            symbol in this alphabet.
        """
        if alphabet is self:
            return True
        n_symbols = len(alphabet)
        return (
            n_symbols <= len(self)
            and tuple(self.get_symbols()[:n_symbols]) == tuple(alphabet.get_symbols())
        )

    def encode(self, symbol):
        """
        Get the symbol code of a symbol.

        Parameters
        ----------
        symbol : object
            The symbol.

        Returns
        -------
        code : int
            The symbol code.

        Raises
        ------
        AlphabetError
            If `symbol` is not in the alphabet.
        """
        try:
            return self._codes[symbol]
        except (KeyError, TypeError):
            raise AlphabetError(f"Symbol {repr(symbol)} is not in the alphabet")

    def decode(self, code):
        """
        Get the symbol of a symbol code.

        Parameters
        ----------
        code : int
            The symbol code.

        Returns
        -------
        symbol : object
            The symbol.

        Raises
        ------
        AlphabetError
            If there is no symbol with the given code.
        """
        if not 0 <= code < len(self._symbols):
            raise AlphabetError(f"'{code:d}' is not a valid code")
        return self._symbols[code]

    def validate(self, symbols):
        """
        Encode a sequence of symbols, requiring that every symbol is
        part of this alphabet.

        Parameters
        ----------
        symbols : iterable object
            The symbols to encode.

        Returns
        -------
        code : ndarray
            The sequence code.
            The dtype is the smallest unsigned integer type, that can
            represent all codes of this alphabet.

        Raises
        ------
        InvalidSymbolError
            If a symbol is not in the alphabet.
            The error reports the first offending symbol and its 1-based
            position.
        """
        codes = []
        for position, symbol in enumerate(symbols, start=1):
            try:
                codes.append(self._codes[symbol])
            except (KeyError, TypeError):
                raise InvalidSymbolError(symbol, position)
        return np.array(codes, dtype=_code_dtype(len(self)))

    def encode_multiple(self, symbols, dtype=None):
        """
        Encode multiple symbols at once.

        This is :meth:`validate()` with the option to choose the
        integer type of the result.

        Parameters
        ----------
        symbols : iterable object
            The symbols to encode.
        dtype : dtype, optional
            The integer type of the sequence code.
            By default, the smallest sufficient unsigned integer type
            is used.

        Returns
        -------
        code : ndarray
            The sequence code.

        Raises
        ------
        InvalidSymbolError
            If a symbol is not in the alphabet.
        """
        code = self.validate(symbols)
        if dtype is not None:
            code = code.astype(dtype, copy=False)
        return code

    def decode_multiple(self, code):
        """
        Get the symbols of a sequence code.

        Parameters
        ----------
        code : iterable object of int
            The sequence code.

        Returns
        -------
        symbols : list
            The symbol of each symbol code.
        """
        return [self.decode(c) for c in code]

    def has_complement(self):
        """
        Check whether sequences in this alphabet can be complemented.

        Returns
        -------
        has_complement : bool
            True, if a complement is defined for every symbol.
        """
        return False

    def complement(self, symbol):
        """
        Get the complement of a symbol.

        Parameters
        ----------
        symbol : object
            The symbol to get the complement for.

        Returns
        -------
        complement : object
            The complementary symbol.

        Raises
        ------
        UnsupportedOperationError
            If the alphabet has no complement relation.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} has no complement relation"
        )

    def complement_codes(self):
        """
        Get the complement for each symbol code.

        Returns
        -------
        complement_codes : ndarray
            The symbol code of the complement of each symbol code.

        Raises
        ------
        UnsupportedOperationError
            If the alphabet has no complement relation.
        """
        raise UnsupportedOperationError(
            f"{type(self).__name__} has no complement relation"
        )

    def has_codon_table(self):
        """
        Check whether sequences in this alphabet can be translated with
        a :class:`CodonTable`.

        Returns
        -------
        has_codon_table : bool
            True, if the alphabet is a nucleotide alphabet, whose first
            four symbol codes are the four bases.
        """
        return False

    def is_letter_alphabet(self):
        """
        Check whether each symbol is a single printable ASCII
        character, so that the alphabet could be a
        :class:`LetterAlphabet`.

        Returns
        -------
        is_letter_alphabet : bool
            True, if all symbols are letters.
        """
        return all(_ascii_value(symbol) is not None for symbol in self)

    def __str__(self):
        return str(self.get_symbols())

    def __len__(self):
        return len(self.get_symbols())

    def __iter__(self):
        return iter(self.get_symbols())

    def __contains__(self, symbol):
        try:
            return symbol in self._codes
        except TypeError:
            return False

    def __hash__(self):
        return hash(tuple(self.get_symbols()))

    def __eq__(self, item):
        if item is self:
            return True
        if not isinstance(item, Alphabet):
            return False
        return tuple(self.get_symbols()) == tuple(item.get_symbols())


class LetterAlphabet(Alphabet):
    """
    An :class:`Alphabet` of single letters, as used for nucleotide and
    protein sequences.

    Symbols are restricted to the 94 printable ASCII characters,
    excluding whitespace.
    They are stored as ASCII values, so that whole strings are encoded
    and decoded with a lookup table instead of symbol by symbol.

    Optionally, the alphabet declares a complement relation, a subset
    of unambiguous *core* symbols and whether it can be translated via
    a :class:`CodonTable`.

    Parameters
    ----------
    symbols : iterable object of str or str or bytes
        The letters in the order of their symbol codes.
    complements : dict of (str -> str), optional
        Maps each symbol to its complementary symbol.
        Must contain an entry for each symbol in the alphabet and the
        complementary symbols must be part of the alphabet, too.
        By default, the alphabet has no complement relation.
    core : iterable object of str, optional
        The unambiguous symbols of this alphabet.
        By default, all symbols are core symbols.
    codon_table : bool, optional
        If true, sequences in this alphabet can be translated.
        This requires that the core symbols are the first four symbols
        of the alphabet.

    Examples
    --------

    >>> alph = LetterAlphabet("ACGT", complements={"A":"T", "C":"G", "G":"C", "T":"A"})
    >>> print(alph.validate("GATTACA"))
    [2 0 3 3 0 1 0]
    >>> print(alph.complement("G"))
    C
    >>> try:
    ...     alph.validate("GATXACA")
    ... except InvalidSymbolError as e:
    ...     print(e.symbol, e.position)
    X 4
    """

    PRINTABLES = (string.digits + string.ascii_letters + string.punctuation).encode(
        "ASCII"
    )

    def __init__(self, symbols, complements=None, core=None, codon_table=False):
        if isinstance(symbols, bytes):
            symbols = symbols.decode("ASCII")
        ascii_values = []
        for symbol in symbols:
            value = _ascii_value(symbol)
            if value is None:
                raise ValueError(
                    f"Symbol {repr(symbol)} is not a printable ASCII letter"
                )
            ascii_values.append(value)
        if len(ascii_values) == 0:
            raise ValueError("An alphabet requires at least one symbol")
        self._symbols = np.array(ascii_values, dtype=np.ubyte)
        self._symbols.setflags(write=False)
        self._lookup = create_lookup(self._symbols)

        self._complements = None
        if complements is not None:
            self._complements = self._complement_codes_from(complements)

        self._core = None
        if core is not None:
            self._core = tuple(core)
            if len(self._core) == 0:
                raise ValueError("Core symbol list is empty")
            for symbol in self._core:
                if symbol not in self:
                    raise ValueError(f"Core symbol '{symbol}' is not in the alphabet")

        self._codon_table = codon_table
        # Codon tables index codons by the codes of the four bases
        if codon_table and tuple(self.get_core_symbols()) != self.get_symbols()[:4]:
            raise ValueError(
                "Translatable alphabets require the four bases "
                "as first symbols and as only core symbols"
            )

    def __repr__(self):
        """Represent LetterAlphabet as a string for debugging."""
        args = [repr(list(self.get_symbols()))]
        if self._complements is not None:
            args.append(f"complements={repr(self._complement_dict())}")
        if self._core is not None:
            args.append(f"core={repr(list(self._core))}")
        if self._codon_table:
            args.append("codon_table=True")
        return f"LetterAlphabet({', '.join(args)})"

    def extends(self, alphabet):
        if not isinstance(alphabet, LetterAlphabet):
            return super().extends(alphabet)
        n_symbols = len(alphabet._symbols)
        return n_symbols <= len(self._symbols) and bool(
            np.all(self._symbols[:n_symbols] == alphabet._symbols)
        )

    def get_symbols(self):
        return tuple([chr(value) for value in self._symbols.tolist()])

    def get_core_symbols(self):
        if self._core is None:
            return self.get_symbols()
        return self._core

    def encode(self, symbol):
        value = _ascii_value(symbol)
        code = -1 if value is None else self._lookup[value].item()
        if code < 0:
            raise AlphabetError(f"Symbol {repr(symbol)} is not in the alphabet")
        return code

    def decode(self, code):
        if not 0 <= code < len(self._symbols):
            raise AlphabetError(f"'{code:d}' is not a valid code")
        return chr(self._symbols[code])

    def validate(self, symbols):
        """
        Encode a sequence of letters, requiring that every letter is
        part of this alphabet.

        Parameters
        ----------
        symbols : iterable object of str or str or bytes
            The letters to encode.
            :class:`str` and :class:`bytes` objects are encoded
            fastest.
            No case conversion is performed.

        Returns
        -------
        code : ndarray, dtype=np.uint8
            The sequence code.

        Raises
        ------
        InvalidSymbolError
            If a symbol is not in the alphabet.
            The error reports the first offending symbol and its 1-based
            position.
        """
        chars = _to_chars(symbols)
        code = encode_chars(self._lookup, chars)
        illegal_i = first_illegal(code)
        if illegal_i is not None:
            raise InvalidSymbolError(chr(chars[illegal_i]), illegal_i + 1)
        return code.astype(np.uint8)

    def decode_multiple(self, code, as_bytes=False):
        """
        Get the letters of a sequence code.

        Parameters
        ----------
        code : ndarray, dtype=uint8
            The sequence code.
        as_bytes : bool, optional
            If true, the letters are returned as :class:`bytes`
            (dtype 'S1'), otherwise as :class:`str` (dtype 'U1').

        Returns
        -------
        symbols : ndarray, dtype='U1' or dtype='S1'
            The letter of each symbol code.

        Raises
        ------
        AlphabetError
            If the sequence code contains an invalid symbol code.
        """
        code = np.asarray(code)
        if len(code) > 0 and (code.min() < 0 or code.max() >= len(self._symbols)):
            raise AlphabetError("Sequence code contains invalid codes")
        chars = decode_to_chars(self._symbols, code.astype(np.intp, copy=False))
        symbols = np.frombuffer(chars.tobytes(), dtype="|S1")
        return symbols if as_bytes else symbols.astype("U1")

    def decode_to_text(self, code):
        """
        Get the letters of a sequence code as string.

        Parameters
        ----------
        code : ndarray, dtype=uint8
            The sequence code.

        Returns
        -------
        text : str
            The letters joined into a string.
        """
        return self.decode_multiple(code, as_bytes=True).tobytes().decode("ASCII")

    def has_complement(self):
        return self._complements is not None

    def complement(self, symbol):
        if self._complements is None:
            return super().complement(symbol)
        return self.decode(self._complements[self.encode(symbol)])

    def complement_codes(self):
        if self._complements is None:
            return super().complement_codes()
        return self._complements

    def has_codon_table(self):
        return self._codon_table

    def is_letter_alphabet(self):
        return True

    def __contains__(self, symbol):
        value = _ascii_value(symbol)
        return value is not None and self._lookup[value] >= 0

    def __len__(self):
        return len(self._symbols)

    def __eq__(self, item):
        if item is self:
            return True
        if not isinstance(item, LetterAlphabet):
            return super().__eq__(item)
        return (
            self.get_symbols() == item.get_symbols()
            and self._complement_dict() == item._complement_dict()
            and tuple(self.get_core_symbols()) == tuple(item.get_core_symbols())
            and self._codon_table == item._codon_table
        )

    def __hash__(self):
        return super().__hash__()

    def _complement_codes_from(self, complements):
        complement_codes = np.zeros(len(self._symbols), dtype=np.uint8)
        for symbol in self.get_symbols():
            if symbol not in complements:
                raise ValueError(f"No complement is given for symbol '{symbol}'")
            complement = complements[symbol]
            if complement not in self:
                raise ValueError(
                    f"Complement '{complement}' of symbol '{symbol}' "
                    f"is not in the alphabet"
                )
            complement_codes[self.encode(symbol)] = self.encode(complement)
        complement_codes.setflags(write=False)
        return complement_codes

    def _complement_dict(self):
        if self._complements is None:
            return None
        symbols = self.get_symbols()
        return {
            symbol: symbols[compl_code]
            for symbol, compl_code in zip(symbols, self._complements.tolist())
        }


def common_alphabet(alphabets):
    """
    Find the alphabet among the given ones, that extends all others.

    Parameters
    ----------
    alphabets : iterable of Alphabet
        The candidate alphabets.

    Returns
    -------
    common_alphabet : Alphabet or None
        The alphabet extending all given alphabets.
        ``None`` if `alphabets` is empty or no alphabet extends all
        others.

    Examples
    --------

    >>> dna = NucleotideSequence.alphabet_dna
    >>> unamb = NucleotideSequence.alphabet_unamb
    >>> print(common_alphabet([unamb, dna]) == dna)
    True
    >>> print(common_alphabet([unamb, ProteinSequence.alphabet]))
    None
    """
    alphabets = list(alphabets)
    if len(alphabets) == 0:
        return None
    # Only the largest alphabet can extend all others
    largest = max(alphabets, key=len)
    if all(largest.extends(alphabet) for alphabet in alphabets):
        return largest
    return None


def _code_dtype(alphabet_size):
    """
    Get the smallest unsigned integer type, that can hold all symbol
    codes of an alphabet with the given size.
    """
    for dtype in (np.uint8, np.uint16, np.uint32):
        if alphabet_size <= np.iinfo(dtype).max + 1:
            return dtype
    return np.uint64


def _ascii_value(symbol):
    """
    Get the ASCII value of a single printable letter given as
    :class:`str` or :class:`bytes`, or ``None`` for any other object.
    """
    if isinstance(symbol, str):
        if len(symbol) != 1 or not symbol.isascii():
            return None
        symbol = symbol.encode("ASCII")
    elif not isinstance(symbol, bytes) or len(symbol) != 1:
        return None
    if symbol not in LetterAlphabet.PRINTABLES:
        return None
    return symbol[0]


def _to_chars(symbols):
    """
    Convert letters given as :class:`str`, :class:`bytes` or any
    iterable of single letters into an array of ASCII values.
    Letters that cannot be represented as single ASCII value raise an
    :class:`InvalidSymbolError`.
    """
    if isinstance(symbols, str):
        try:
            symbols = symbols.encode("ASCII")
        except UnicodeEncodeError as e:
            raise InvalidSymbolError(symbols[e.start], e.start + 1)
    if isinstance(symbols, bytes):
        return np.frombuffer(symbols, dtype=np.ubyte)

    letters = bytearray()
    for position, symbol in enumerate(symbols, start=1):
        if isinstance(symbol, (np.str_, np.bytes_)):
            symbol = symbol.item()
        if isinstance(symbol, str) and len(symbol) == 1 and symbol.isascii():
            letters += symbol.encode("ASCII")
        elif isinstance(symbol, bytes) and len(symbol) == 1:
            letters += symbol
        else:
            raise InvalidSymbolError(symbol, position)
    return np.frombuffer(bytes(letters), dtype=np.ubyte)
