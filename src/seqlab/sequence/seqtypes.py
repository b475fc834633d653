# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "seqlab.sequence"
__author__ = "The Seqlab contributors"
__all__ = ["GeneralSequence", "NucleotideSequence", "ProteinSequence"]

import numpy as np
from .alphabet import LetterAlphabet
from .error import InvalidSymbolError
from .sequence import Sequence


class GeneralSequence(Sequence):
    """
    A sequence over an arbitrary :class:`Alphabet`, given at
    construction.

    Parameters
    ----------
    alphabet : Alphabet
        The alphabet of the sequence.
    sequence : iterable object, optional
        The symbols of the sequence.
        A :class:`str` can be given, if the symbols are single letters.
        By default the sequence is empty.

    Examples
    --------

    >>> alph = Alphabet(["foo", "bar", 42])
    >>> sequence = GeneralSequence(alph, ["bar", 42, "bar"])
    >>> print(sequence.code)
    [1 2 1]
    >>> print(sequence)
    bar, 42, bar
    """

    def __init__(self, alphabet, sequence=()):
        self._alphabet = alphabet
        super().__init__(sequence)

    def __repr__(self):
        """Represent GeneralSequence as a string for debugging."""
        symbols = ", ".join([repr(symbol) for symbol in self.symbols])
        return f"GeneralSequence({repr(self._alphabet)}, [{symbols}])"

    def __copy_create__(self):
        return GeneralSequence(self._alphabet)

    def get_alphabet(self):
        return self._alphabet


class NucleotideSequence(Sequence):
    """
    A DNA or RNA sequence.

    DNA sequences use :attr:`alphabet_dna`, beginning with the bases
    ``A``, ``C``, ``G`` and ``T``, RNA sequences use
    :attr:`alphabet_rna`, beginning with ``A``, ``C``, ``G`` and ``U``.
    In both alphabets the bases are followed by the IUPAC ambiguity
    codes ``R``, ``Y``, ``W``, ``S``, ``M``, ``K``, ``H``, ``B``,
    ``V``, ``D``, the wildcard ``N`` and the gap ``-``.
    The bases are the *core symbols* and have the same symbol codes as
    in :attr:`alphabet_unamb`.

    Both alphabets can be complemented and translated with a
    :class:`CodonTable`.

    Parameters
    ----------
    sequence : iterable object or str, optional
        The nucleotides.
        Only upper case letters are accepted.
        By default the sequence is empty.
    rna : bool, optional
        If true, the sequence is an RNA sequence, otherwise a DNA
        sequence.

    Examples
    --------

    >>> dna_seq = NucleotideSequence("ACGNT")
    >>> print(dna_seq.reverse_complement())
    ANCGT
    >>> rna_seq = NucleotideSequence("ACGU", rna=True)
    >>> print(rna_seq.complement())
    UGCA
    """

    # Complements of the ambiguity codes, e.g. R (A or G) -> Y (T or C)
    _ambiguous_complements = {
        "R": "Y", "Y": "R", "W": "W", "S": "S", "M": "K", "K": "M",
        "H": "D", "B": "V", "V": "B", "D": "H", "N": "N", "-": "-",
    }

    alphabet_dna = LetterAlphabet(
        "ACGT" + "".join(_ambiguous_complements),
        complements={"A": "T", "C": "G", "G": "C", "T": "A", **_ambiguous_complements},
        core="ACGT",
        codon_table=True,
    )
    alphabet_rna = LetterAlphabet(
        "ACGU" + "".join(_ambiguous_complements),
        complements={"A": "U", "C": "G", "G": "C", "U": "A", **_ambiguous_complements},
        core="ACGU",
        codon_table=True,
    )
    alphabet_unamb = LetterAlphabet(
        "ACGT", complements={"A": "T", "C": "G", "G": "C", "T": "A"}
    )

    def __init__(self, sequence=(), rna=False):
        self._alphabet = NucleotideSequence.ambiguous_alphabet(rna)
        super().__init__(sequence)

    def __repr__(self):
        """Represent NucleotideSequence as a string for debugging."""
        if self.is_rna():
            return f'NucleotideSequence("{self.to_text()}", rna=True)'
        return f'NucleotideSequence("{self.to_text()}")'

    def __copy_create__(self):
        return NucleotideSequence(rna=self.is_rna())

    def get_alphabet(self):
        return self._alphabet

    def is_rna(self):
        """
        Check whether this is an RNA sequence.

        Returns
        -------
        is_rna : bool
            True, if the sequence uses :attr:`alphabet_rna`.
        """
        return self._alphabet is NucleotideSequence.alphabet_rna

    def find_orfs(self, codon_table=None, met_start=False):
        """
        Find and translate the open reading frames (ORFs) in the three
        forward frames of the sequence.

        An ORF begins at a start codon and ends with the next stop
        codon in the same frame, which is part of the ORF.
        Without a following stop codon, the ORF ends at the last
        complete codon of the frame.
        ORFs may overlap, e.g. an ORF may contain the start codon of
        another ORF.

        Parameters
        ----------
        codon_table : CodonTable, optional
            The codon table used for translation and to identify start
            codons.
            By default, :meth:`CodonTable.default_table()` is used.
        met_start : bool, optional
            If true, the first amino acid of each ORF is methionine,
            even if the start codon codes for another amino acid.

        Returns
        -------
        proteins : list of ProteinSequence
            The translated ORFs, sorted by their start position.
        positions : list of tuple (int, int)
            The 1-based first and last nucleotide position of each ORF.

        Examples
        --------

        >>> dna_seq = NucleotideSequence("AATGATGCTATAGAT")
        >>> proteins, positions = dna_seq.find_orfs()
        >>> for protein, (start, end) in zip(proteins, positions):
        ...    print(protein, start, end)
        MML* 2 13
        ML* 5 13
        """
        # Deferred, as the codon module depends on this module
        from .codon import CodonTable

        if codon_table is None:
            codon_table = CodonTable.default_table()

        orfs = []
        for shift in range(3):
            n_codons = max(len(self) - shift, 0) // 3
            codons = self.code[shift : shift + 3 * n_codons].reshape(-1, 3)
            orfs.extend(
                _orfs_in_frame(
                    codon_table.map_codon_codes(codons),
                    codon_table.is_start_codon(codons),
                    shift,
                    met_start,
                )
            )
        orfs.sort(key=lambda orf: orf[1][0])
        proteins = [ProteinSequence().copy(orf_code) for orf_code, _ in orfs]
        positions = [position for _, position in orfs]
        return proteins, positions

    @staticmethod
    def unambiguous_alphabet():
        """
        Get the alphabet consisting only of the DNA bases ``A``,
        ``C``, ``G`` and ``T``.

        Codon tables are defined in this alphabet.

        Returns
        -------
        alphabet : LetterAlphabet
            :attr:`alphabet_unamb`.
        """
        return NucleotideSequence.alphabet_unamb

    @staticmethod
    def ambiguous_alphabet(rna=False):
        """
        Get the alphabet of DNA or RNA sequences, including ambiguity
        codes and the gap symbol.

        Parameters
        ----------
        rna : bool, optional
            If true, the RNA alphabet is returned.

        Returns
        -------
        alphabet : LetterAlphabet
            :attr:`alphabet_rna` or :attr:`alphabet_dna`.
        """
        if rna:
            return NucleotideSequence.alphabet_rna
        return NucleotideSequence.alphabet_dna


def _residue_masses(alphabet, amino_acids, monoisotopic):
    """
    Get the residue mass for each symbol code, NaN for symbols without
    a defined mass.
    """
    column = 2 if monoisotopic else 1
    return np.array(
        [
            amino_acids[letter][column] if letter in amino_acids else np.nan
            for letter in alphabet
        ]
    )


class ProteinSequence(Sequence):
    """
    A sequence of amino acids.

    :attr:`alphabet` contains the 20 standard amino acids as core
    symbols, followed by the ambiguous symbols ``B`` (``D`` or ``N``),
    ``Z`` (``E`` or ``Q``) and ``X`` (any), the stop signal ``*`` and
    the gap ``-``.

    Parameters
    ----------
    sequence : iterable object or str, optional
        The amino acids.
        If an iterable object is given, its elements may also be
        upper case 3-letter codes, e.g. ``"MET"``.
        By default the sequence is empty.

    Notes
    -----
    Selenocysteine (``U``) and pyrrolysine (``O``) are not part of
    the alphabet.
    The 3-letter codes ``SEC`` and ``MSE`` are read as cysteine and
    methionine, respectively.
    """

    _core_symbols = "ACDEFGHIKLMNPQRSTVWY"

    alphabet = LetterAlphabet(_core_symbols + "BZX*-", core=_core_symbols)

    # 3-letter code, average and monoisotopic residue mass in Dalton,
    # from https://web.expasy.org/findmod/findmod_masses.html#AA
    _amino_acids = {
        "A": ("ALA", 71.0788, 71.03711),
        "C": ("CYS", 103.1388, 103.00919),
        "D": ("ASP", 115.0886, 115.02694),
        "E": ("GLU", 129.1155, 129.04259),
        "F": ("PHE", 147.1766, 147.06841),
        "G": ("GLY", 57.0519, 57.02146),
        "H": ("HIS", 137.1411, 137.05891),
        "I": ("ILE", 113.1594, 113.08406),
        "K": ("LYS", 128.1741, 128.09496),
        "L": ("LEU", 113.1594, 113.08406),
        "M": ("MET", 131.1926, 131.04049),
        "N": ("ASN", 114.1038, 114.04293),
        "P": ("PRO", 97.1167, 97.05276),
        "Q": ("GLN", 128.1307, 128.05858),
        "R": ("ARG", 156.1875, 156.10111),
        "S": ("SER", 87.0782, 87.03203),
        "T": ("THR", 101.1051, 101.04768),
        "V": ("VAL", 99.1326, 99.06841),
        "W": ("TRP", 186.2132, 186.07931),
        "Y": ("TYR", 163.1760, 163.06333),
        "B": ("ASX", np.nan, np.nan),
        "Z": ("GLX", np.nan, np.nan),
        "X": ("UNK", np.nan, np.nan),
        "*": (" * ", np.nan, np.nan),
    }
    _water_mass = 18.015

    _dict_1to3 = {letter: entry[0] for letter, entry in _amino_acids.items()}
    _dict_3to1 = {
        **{code: letter for letter, code in _dict_1to3.items()},
        "SEC": "C",
        "MSE": "M",
    }
    _mol_weight_average = _residue_masses(alphabet, _amino_acids, False)
    _mol_weight_monoisotopic = _residue_masses(alphabet, _amino_acids, True)

    def __init__(self, sequence=()):
        if not isinstance(sequence, (str, bytes)):
            sequence = [
                ProteinSequence._one_letter(symbol, position)
                for position, symbol in enumerate(sequence, start=1)
            ]
        super().__init__(sequence)

    def __repr__(self):
        """Represent ProteinSequence as a string for debugging."""
        return f'ProteinSequence("{self.to_text()}")'

    def get_alphabet(self):
        return ProteinSequence.alphabet

    def remove_stops(self):
        """
        Remove the stop signals ``*`` from the sequence.

        Returns
        -------
        no_stop : ProteinSequence
            A copy of this sequence without stop signals.

        Examples
        --------

        >>> print(ProteinSequence("LYG*GR*").remove_stops())
        LYGGR
        """
        stop_code = ProteinSequence.alphabet.encode("*")
        return self.copy(self.code[self.code != stop_code])

    @staticmethod
    def convert_letter_3to1(symbol):
        """
        Get the 1-letter code of an amino acid from its 3-letter code.

        Parameters
        ----------
        symbol : str
            The 3-letter code, case is ignored.

        Returns
        -------
        convert : str
            The 1-letter code.
        """
        return ProteinSequence._dict_3to1[symbol.upper()]

    @staticmethod
    def convert_letter_1to3(symbol):
        """
        Get the 3-letter code of an amino acid from its 1-letter code.

        Parameters
        ----------
        symbol : str
            The 1-letter code, case is ignored.

        Returns
        -------
        convert : str
            The upper case 3-letter code.
        """
        return ProteinSequence._dict_1to3[symbol.upper()]

    def get_molecular_weight(self, monoisotopic=False):
        """
        Calculate the molecular weight of the protein.

        The weight is the sum of the residue masses plus the mass of
        one water molecule.

        Parameters
        ----------
        monoisotopic : bool, optional
            If true, the mass of the most common isotope is used for
            each residue instead of the average mass.

        Returns
        -------
        weight : float
            The molecular weight in Dalton.

        Raises
        ------
        ValueError
            If the sequence contains ambiguous amino acids, stop signals
            or gaps.

        Examples
        --------

        >>> print(f"{ProteinSequence('GG').get_molecular_weight():.2f}")
        132.12
        """
        if monoisotopic:
            residue_masses = ProteinSequence._mol_weight_monoisotopic
        else:
            residue_masses = ProteinSequence._mol_weight_average
        weight = np.sum(residue_masses[self.code]) + ProteinSequence._water_mass
        if np.isnan(weight):
            raise ValueError(
                "Sequence contains ambiguous amino acids, cannot calculate weight"
            )
        return weight.item()

    @staticmethod
    def _one_letter(symbol, position):
        """
        Convert a 3-letter code into a 1-letter code, other symbols are
        returned unchanged.
        """
        if isinstance(symbol, str) and len(symbol) == 3:
            try:
                return ProteinSequence._dict_3to1[symbol]
            except KeyError:
                raise InvalidSymbolError(symbol, position)
        return symbol


def _orfs_in_frame(protein_code, is_start, shift, met_start):
    """
    Get the translated ORF and the 1-based nucleotide interval of each
    start codon in a frame, that begins at the 0-based nucleotide
    index `shift`.
    """
    stop_code = ProteinSequence.alphabet.encode("*")
    stops = np.flatnonzero(protein_code == stop_code)
    orfs = []
    for start_i in np.flatnonzero(is_start).tolist():
        following_stops = stops[stops >= start_i]
        if len(following_stops) > 0:
            end_i = following_stops[0].item() + 1
        else:
            end_i = len(protein_code)
        orf_code = protein_code[start_i:end_i].copy()
        if met_start:
            orf_code[0] = ProteinSequence.alphabet.encode("M")
        orfs.append((orf_code, (shift + 3 * start_i + 1, shift + 3 * end_i)))
    return orfs
