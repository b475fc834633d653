# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Low level conversion between ASCII characters and symbol codes.

All functions work on :class:`ndarray` objects of `np.ubyte` characters
and are used by :class:`LetterAlphabet`.
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = []

import numpy as np

# Marks characters that are not part of an alphabet in a lookup table
ILLEGAL_CODE = -1
_N_CHARS = 256


def create_lookup(alphabet):
    """
    Create a table that maps each of the 256 possible byte values to
    its symbol code in the given alphabet.

    Parameters
    ----------
    alphabet : ndarray, dtype=np.ubyte
        The symbols of the alphabet as ASCII values.

    Returns
    -------
    lookup : ndarray, dtype=np.int16, shape=(256,)
        The symbol code for each byte value.
        Byte values that are not in the alphabet map to
        :data:`ILLEGAL_CODE`.
    """
    lookup = np.full(_N_CHARS, ILLEGAL_CODE, dtype=np.int16)
    # Reversed order ensures that the first occurrence of a symbol
    # determines its code
    codes = np.arange(len(alphabet), dtype=np.int16)
    lookup[alphabet[::-1]] = codes[::-1]
    return lookup


def encode_chars(lookup, symbols):
    """
    Encode ASCII characters into symbol codes.

    Parameters
    ----------
    lookup : ndarray, dtype=np.int16, shape=(256,)
        The table created by :func:`create_lookup()`.
    symbols : ndarray, dtype=np.ubyte
        The characters to be encoded.

    Returns
    -------
    code : ndarray, dtype=np.int16
        The symbol codes.
        Characters outside the alphabet are encoded as
        :data:`ILLEGAL_CODE`.
    """
    return lookup[symbols]


def first_illegal(code):
    """
    Find the first character, that could not be encoded.

    Returns
    -------
    index : int or None
        The 0-based index of the first :data:`ILLEGAL_CODE` in `code`.
        ``None`` if all characters were encoded.
    """
    illegal = np.flatnonzero(code == ILLEGAL_CODE)
    if len(illegal) == 0:
        return None
    return illegal[0].item()


def decode_to_chars(alphabet, code):
    """
    Decode symbol codes into ASCII characters.

    Parameters
    ----------
    alphabet : ndarray, dtype=np.ubyte
        The symbols of the alphabet as ASCII values.
    code : ndarray, dtype=np.uint8
        The symbol codes.
        Each code must be a valid index of `alphabet`.

    Returns
    -------
    symbols : ndarray, dtype=np.ubyte
        The decoded characters.
    """
    return alphabet[code]

