from importlib.metadata import version
import seqlab


def test_version():
    """
    Check if the version of the package is consistent with the
    installed distribution.
    """
    assert seqlab.__version__ == version("seqlab")
