# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for handling sequences.

A :class:`Sequence` can be seen as a succession of symbols.
The set of symbols, that can occur in a sequence, is defined by an
:class:`Alphabet`.
For example, an unambiguous DNA sequence has an :class:`Alphabet`, that
includes the 4 letters (strings) ``'A'``, ``'C'``, ``'G'`` and ``'T'``.
If a :class:`Sequence` is created with a symbol, that is not in the
given :class:`Alphabet`, an :class:`InvalidSymbolError` is raised,
that reports the symbol and its position.

Internally, a :class:`Sequence` is saved as a read-only *NumPy*
:class:`ndarray` of integer values, where each integer represents a
symbol in the :class:`Alphabet`.
For example, ``'A'``, ``'C'``, ``'G'`` and ``'T'`` would be encoded into
0, 1, 2 and 3, respectively.
These integer values are called *symbol code*, the encoding of an entire
sequence of symbols is called *sequence code*.
Sequences are immutable:
Every operation, that derives a sequence from another one, creates a
new :class:`Sequence` object.

All positions and ranges are 1-based and include both ends.

Usually the concrete subclasses :class:`NucleotideSequence`
(for DNA and RNA sequences) and :class:`ProteinSequence`
(for amino acid sequences) are used.
The alphabets of these classes declare, which operations they support,
e.g. only nucleotide sequences can be complemented and translated.
The class :class:`GeneralSequence` allows the usage of a custom
:class:`Alphabet` without the need to subclass :class:`Sequence`.

Multiple sequences are grouped in a :class:`SequenceCollection`.
Both, single sequences and collections, can be searched for exact
patterns (:func:`locate_pattern()`, :func:`vlocate_pattern()`) and
analyzed for their symbol and *k-mer* composition
(:func:`letter_frequency()`, :func:`kmer_frequency()`).
"""

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"

from .error import *
from .alphabet import *
from .sequence import *
from .seqtypes import *
from .codon import *
from .collection import *
from .search import *
from .composition import *
