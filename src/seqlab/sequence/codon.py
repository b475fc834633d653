# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = ["CodonTable"]

import itertools
from numbers import Integral
from os.path import dirname, join, realpath
import numpy as np
from .seqtypes import NucleotideSequence, ProteinSequence

_NUC_ALPH = NucleotideSequence.alphabet_unamb
_PROT_ALPH = ProteinSequence.alphabet
_UNKNOWN_AA_CODE = _PROT_ALPH.encode("X")
_N_BASES = len(_NUC_ALPH)
# Each codon is identified by its position in a flattened
# 4x4x4 array of base codes
_CODON_SHAPE = (_N_BASES,) * 3
_N_CODONS = _N_BASES**3


class CodonTable:
    """
    The genetic code, i.e. the translation of codons into amino acids,
    together with the codons that may start a translation.

    Codons and amino acids can be given and are returned either as
    symbols or as symbol codes.
    Codon symbols refer to the unambiguous DNA alphabet ``ACGT``,
    amino acid symbols to :attr:`ProteinSequence.alphabet`.

    The genetic codes published by the NCBI with the IDs 1, 2, 4 and 11
    are bundled and can be obtained via :func:`load()`.

    Objects of this class are immutable.

    Parameters
    ----------
    codon_dict : dict of (str -> str)
        The amino acid for each of the 64 codons, e.g.
        ``{"ATG": "M", ...}``.
    starts : iterable object of str
        The start codons.

    Examples
    --------

    Translate a codon and find the codons of an amino acid:

    >>> table = CodonTable.default_table()
    >>> print(table["ATG"])
    M
    >>> print(table["M"])
    ('ATG',)

    The same using symbol codes:

    >>> print(table[(1,2,3)])
    14
    >>> print(table[14])
    ((0, 2, 0), (0, 2, 2), (1, 2, 0), (1, 2, 1), (1, 2, 2), (1, 2, 3))
    """

    _table_file = join(dirname(realpath(__file__)), "codon_tables.txt")

    def __init__(self, codon_dict, starts):
        aa_codes = np.full(_N_CODONS, -1, dtype=int)
        for codon, amino_acid in codon_dict.items():
            aa_codes[_codon_number(codon)] = _PROT_ALPH.encode(amino_acid)
        missing = np.flatnonzero(aa_codes == -1)
        if len(missing) > 0:
            raise ValueError(
                f"Codon dictionary does not contain codon "
                f"'{_codon_text(missing[0])}'"
            )
        is_start = np.zeros(_N_CODONS, dtype=bool)
        for codon in starts:
            if not isinstance(codon, str):
                raise ValueError(f"Invalid codon '{codon}' as start codon")
            is_start[_codon_number(codon)] = True
        aa_codes.setflags(write=False)
        is_start.setflags(write=False)
        self._aa_codes = aa_codes
        self._is_start = is_start

    def __repr__(self):
        """Represent CodonTable as a string for debugging."""
        return f"CodonTable({self.codon_dict()}, {self.start_codons()})"

    def __eq__(self, item):
        if not isinstance(item, CodonTable):
            return False
        return np.array_equal(self._aa_codes, item._aa_codes) and np.array_equal(
            self._is_start, item._is_start
        )

    def __getitem__(self, item):
        if isinstance(item, str) and len(item) == 1:
            codon_numbers = np.flatnonzero(self._aa_codes == _PROT_ALPH.encode(item))
            return tuple([_codon_text(number) for number in codon_numbers])
        elif isinstance(item, Integral):
            codon_numbers = np.flatnonzero(self._aa_codes == item)
            return tuple([_codon_code(number) for number in codon_numbers])
        else:
            aa_code = self._aa_codes[_codon_number(item)].item()
            if isinstance(item, str):
                return _PROT_ALPH.decode(aa_code)
            return aa_code

    def map_codon_codes(self, codon_codes):
        """
        Translate multiple codons at once.

        Codons containing a symbol code outside the four bases,
        i.e. an ambiguous nucleotide or a gap, are translated into
        ``X``.

        Parameters
        ----------
        codon_codes : ndarray, dtype=int, shape=(n,3)
            The symbol codes of *n* codons.

        Returns
        -------
        aa_codes : ndarray, dtype=int, shape=(n,)
            The symbol codes of the amino acids.

        Examples
        --------

        >>> dna = NucleotideSequence("ATGGTTTAA")
        >>> codon_codes = dna.code.reshape(-1, 3)
        >>> print(codon_codes)
        [[0 3 2]
         [2 3 3]
         [3 0 0]]
        >>> aa_codes = CodonTable.default_table().map_codon_codes(codon_codes)
        >>> print(aa_codes)
        [10 17 23]
        >>> print(ProteinSequence().copy(aa_codes))
        MV*
        """
        codon_numbers, ambiguous = _codon_numbers(codon_codes)
        aa_codes = self._aa_codes[codon_numbers]
        aa_codes[ambiguous] = _UNKNOWN_AA_CODE
        return aa_codes

    def is_start_codon(self, codon_codes):
        """
        Check which of the given codons are start codons.

        Parameters
        ----------
        codon_codes : ndarray, dtype=int, shape=(n,3)
            The symbol codes of *n* codons.

        Returns
        -------
        is_start : ndarray, dtype=bool, shape=(n,)
            True for each start codon.
            Codons containing an ambiguous symbol are never start
            codons.
        """
        codon_numbers, ambiguous = _codon_numbers(codon_codes)
        return self._is_start[codon_numbers] & ~ambiguous

    def codon_dict(self, code=False):
        """
        Get the amino acid for each codon.

        Parameters
        ----------
        code : bool, optional
            If true, codons and amino acids are given as symbol codes,
            otherwise as strings.

        Returns
        -------
        codon_dict : dict
            The amino acid for each of the 64 codons.
        """
        if code:
            return {
                _codon_code(number): self._aa_codes[number].item()
                for number in range(_N_CODONS)
            }
        return {
            _codon_text(number): _PROT_ALPH.decode(self._aa_codes[number].item())
            for number in range(_N_CODONS)
        }

    def start_codons(self, code=False):
        """
        Get the start codons.

        Parameters
        ----------
        code : bool, optional
            If true, the codons are given as symbol codes, otherwise as
            strings.

        Returns
        -------
        start_codons : tuple
            The start codons in the order of their symbol codes.
        """
        convert = _codon_code if code else _codon_text
        return tuple([convert(number) for number in np.flatnonzero(self._is_start)])

    def with_start_codons(self, starts):
        """
        Create a table with the same translation, but other start
        codons.

        Parameters
        ----------
        starts : str or iterable object of str
            The new start codon(s).

        Returns
        -------
        new_table : CodonTable
            The modified table.
        """
        if isinstance(starts, str):
            starts = [starts]
        return CodonTable(self.codon_dict(), starts)

    def with_codon_mappings(self, codon_dict):
        """
        Create a table, where the translation of some codons is
        replaced.

        Parameters
        ----------
        codon_dict : dict of (str -> str)
            The new amino acid for each codon to be changed.

        Returns
        -------
        new_table : CodonTable
            The modified table.
        """
        return CodonTable({**self.codon_dict(), **codon_dict}, self.start_codons())

    def __str__(self):
        bases = _NUC_ALPH.get_symbols()
        lines = []
        for first, second in itertools.product(bases, repeat=2):
            entries = []
            for third in bases:
                codon = first + second + third
                marker = "i" if self._is_start[_codon_number(codon)] else " "
                entries.append(f"{codon} {self[codon]} {marker}")
            lines.append("   ".join(entries).rstrip())
            # Blank line between blocks of the same first base
            if second == bases[-1]:
                lines.append("")
        return "\n".join(lines).rstrip("\n")

    @staticmethod
    def load(table_name):
        """
        Load one of the bundled NCBI codon tables.

        The bundled tables are 1 (Standard), 2 (Vertebrate
        Mitochondrial), 4 (Mold Mitochondrial etc.) and 11 (Bacterial,
        Archaeal and Plant Plastid).

        Parameters
        ----------
        table_name : str or int
            Either the NCBI table ID or one of its names, as listed by
            :func:`table_names()`.

        Returns
        -------
        table : CodonTable
            The NCBI codon table.

        Raises
        ------
        ValueError
            If no bundled table has the given ID or name.
        """
        for table_id, names, codon_dict, starts in _read_table_file(
            CodonTable._table_file
        ):
            if isinstance(table_name, Integral):
                if table_id == table_name:
                    return CodonTable(codon_dict, starts)
            elif table_name in names:
                return CodonTable(codon_dict, starts)
        raise ValueError(f"Codon table '{table_name}' was not found")

    @staticmethod
    def table_names():
        """
        Get the names accepted by :func:`load()`.

        Returns
        -------
        names : list of str
            The names of all bundled tables.
        """
        return [
            name
            for _, names, _, _ in _read_table_file(CodonTable._table_file)
            for name in names
        ]

    @staticmethod
    def default_table():
        """
        Get the table used by :meth:`Sequence.translate()`, if no table
        is given.

        The table translates as the NCBI *Standard* table, but only
        ``ATG`` is a start codon.

        Returns
        -------
        table : CodonTable
            The default codon table.
        """
        return _default_table


def _codon_number(codon):
    """
    Get the index of a codon, given as string or symbol codes, in the
    flattened codon array.
    """
    if isinstance(codon, str):
        if len(codon) != 3:
            raise ValueError(f"Invalid codon '{codon}'")
        codon = _NUC_ALPH.encode_multiple(codon)
    codon = np.asarray(codon)
    if codon.shape != (3,):
        raise ValueError(f"{codon.tolist()} is an invalid sequence code for a codon")
    return np.ravel_multi_index(tuple(codon.tolist()), _CODON_SHAPE)


def _codon_numbers(codon_codes):
    """
    Get the indices of multiple codons in the flattened codon array
    and a mask of the codons containing ambiguous symbols.

    Ambiguous codons get the index 0, so the caller must apply the
    mask.
    """
    codon_codes = np.asarray(codon_codes)
    if codon_codes.shape[-1] != 3:
        raise ValueError(
            f"Codons must be length 3, "
            f"but size of last dimension is {codon_codes.shape[-1]}"
        )
    ambiguous = np.any(codon_codes >= _N_BASES, axis=-1)
    codon_codes = np.where(ambiguous[..., np.newaxis], 0, codon_codes).astype(np.intp)
    codon_numbers = np.ravel_multi_index(
        tuple(np.moveaxis(codon_codes, -1, 0)), _CODON_SHAPE
    )
    return codon_numbers, ambiguous


def _codon_code(number):
    return tuple([int(base) for base in np.unravel_index(number, _CODON_SHAPE)])


def _codon_text(number):
    return "".join(_NUC_ALPH.decode_multiple(np.array(_codon_code(number))))


def _read_table_file(file_name):
    """
    Parse the bundled codon table file.

    Each table is a block of lines separated by an empty line.
    The 'id' and 'name' lines consist of the key and its value,
    separated by whitespace.
    The other lines ('AA', 'Init', 'Base1', ...) start with a 5
    characters wide key followed by a column for each codon.

    Returns
    -------
    tables : list of tuple(int, list of str, dict, list of str)
        The ID, the names, the codon dictionary and the start codons of
        each table.
    """
    with open(file_name, "r") as f:
        blocks = f.read().split("\n\n")
    tables = []
    for block in blocks:
        fields = dict(
            _split_table_line(line) for line in block.splitlines() if line.strip()
        )
        if not fields:
            continue
        codon_dict = {}
        starts = []
        for amino_acid, init, *bases in zip(
            fields["AA"], fields["Init"], fields["Base1"], fields["Base2"],
            fields["Base3"]
        ):
            codon = "".join(bases)
            codon_dict[codon] = amino_acid
            if init == "i":
                starts.append(codon)
        names = [name.strip() for name in fields["name"].split(";")]
        tables.append((int(fields["id"]), names, codon_dict, starts))
    return tables


def _split_table_line(line):
    # The codon columns may directly follow the key
    parts = line.split(maxsplit=1)
    if len(parts) == 2 and parts[0] in ("id", "name"):
        return parts[0], parts[1].strip()
    return line[:5].strip(), line[5:].strip()


_default_table = CodonTable.load("Standard").with_start_codons(["ATG"])
