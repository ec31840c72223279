"""Mini README: Reconstruction engine subsystem.

The package is divided into ``options`` for the immutable option bundle,
``base`` for the abstract engine, ``registry`` for plugin management and
``engines`` for concrete implementations.
"""

from .base import ReconstructionEngine
from .options import ReconstructionOptions
from .registry import ENGINES, EngineRegistry
from . import engines  # noqa: F401  # ensure built-in engines register on import

__all__ = [
    "ENGINES",
    "EngineRegistry",
    "ReconstructionEngine",
    "ReconstructionOptions",
]
