"""Mini README: Built-in reconstruction engines.

New engines subclass ``ReconstructionEngine`` and call ``ENGINES.register``
at import time, or are advertised through the ``sequential_sfm.engines``
entry point group by another package.
"""

from .precomputed import PrecomputedEngine

__all__ = ["PrecomputedEngine"]
