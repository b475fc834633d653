# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

import numpy as np
import seqlab.sequence as seq
from seqlab.sequence.codon import _read_table_file
import pytest


@pytest.mark.parametrize("table_id", [1, 2, 4, 11])
def test_table_load(table_id):
    table = seq.CodonTable.load(table_id)
    assert len(table.codon_dict()) == 64


@pytest.mark.parametrize(
    "table_name",
    ["Standard", "SGC0", "Vertebrate Mitochondrial", "Mycoplasma",
     "Bacterial, Archaeal and Plant Plastid"]
)
def test_table_load_by_name(table_name):
    assert table_name in seq.CodonTable.table_names()
    seq.CodonTable.load(table_name)


@pytest.mark.parametrize("id_line", ["id 11", "id  11", "id   11", "id\t11"])
def test_table_file_id_padding(tmp_path, id_line):
    """
    The ID and the name of a table may be separated from their key by
    any amount of whitespace.
    """
    table_file = tmp_path / "codon_tables.txt"
    with open(seq.CodonTable._table_file, "r") as f:
        standard_block = f.read().split("\n\n")[0]
    lines = standard_block.splitlines()
    lines[0] = id_line
    lines[1] = "name  Test; Other"
    table_file.write_text("\n".join(lines) + "\n")

    tables = _read_table_file(table_file)
    assert len(tables) == 1
    table_id, names, codon_dict, starts = tables[0]
    assert table_id == 11
    assert names == ["Test", "Other"]
    assert codon_dict == seq.CodonTable.load(1).codon_dict()
    assert sorted(starts) == sorted(seq.CodonTable.load(1).start_codons())


def test_unknown_table():
    with pytest.raises(ValueError):
        seq.CodonTable.load(3)
    with pytest.raises(ValueError):
        seq.CodonTable.load("Foo")


def test_table_indexing():
    table = seq.CodonTable.load("Standard")
    assert table["ATG"] == "M"
    for codon in table["Y"]:
        assert codon in ("TAT", "TAC")
    assert table[(0, 0, 0)] == 8
    for codon in table[8]:
        assert codon in ((0, 0, 0), (0, 0, 2))


@pytest.mark.parametrize(
    "table_id, codon, exp_amino_acid",
    [
        (1, "TGA", "*"),
        (2, "TGA", "W"),
        (2, "AGA", "*"),
        (2, "ATA", "M"),
        (4, "TGA", "W"),
        (11, "TGA", "*"),
    ]
)
def test_table_differences(table_id, codon, exp_amino_acid):
    assert seq.CodonTable.load(table_id)[codon] == exp_amino_acid


def test_start_codons():
    assert seq.CodonTable.default_table().start_codons() == ("ATG",)
    assert set(seq.CodonTable.load(1).start_codons()) == {"TTG", "CTG", "ATG"}


def test_missing_codon():
    codon_dict = seq.CodonTable.default_table().codon_dict()
    del codon_dict["CTG"]
    with pytest.raises(ValueError, match="does not contain codon 'CTG'"):
        seq.CodonTable(codon_dict, starts=["ATG"])


def test_codon_dict():
    """
    A table created from the codon dictionary and start codons of
    another table is equal to it.
    """
    table = seq.CodonTable.default_table()
    rebuilt = seq.CodonTable(table.codon_dict(), table.start_codons())
    assert rebuilt == table
    assert rebuilt.codon_dict() == table.codon_dict()
    assert len(table.codon_dict(code=True)) == 64
    # ATG -> M
    assert table.codon_dict(code=True)[(0, 3, 2)] == 10


def test_with_codon_mappings():
    table = seq.CodonTable.default_table().with_codon_mappings({"TGA": "W"})
    assert table["TGA"] == "W"
    assert seq.CodonTable.default_table()["TGA"] == "*"
    assert table.start_codons() == ("ATG",)


def test_ambiguous_codons():
    """
    Codons with ambiguous symbols are translated into 'X' and are never
    start codons.
    """
    table = seq.CodonTable.default_table()
    codons = seq.NucleotideSequence("ATGATNNNN---").code.reshape(-1, 3)
    aa_codes = table.map_codon_codes(codons)
    assert str(seq.ProteinSequence().copy(aa_codes)) == "MXXX"
    assert table.is_start_codon(codons).tolist() == [True, False, False, False]


def test_invalid_codon_shape():
    with pytest.raises(ValueError):
        seq.CodonTable.default_table().map_codon_codes(np.zeros((2, 2), dtype=int))
