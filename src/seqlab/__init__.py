# This source code is part of the Seqlab package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This is the top-level package of *Seqlab*.
It does not provide analysis functionality by itself, but the base
classes shared by its subpackages.
The sequence analysis core is found in :mod:`seqlab.sequence`.
"""

__version__ = "0.1.0"
__name__ = "seqlab"
__author__ = "The Seqlab contributors"

from .copyable import *
