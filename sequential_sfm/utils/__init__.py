"""Mini README: Utility helpers for sequential_sfm.

Exports the entry point plugin loader used by the engine registry and the
atomic file writers used by the exporters.
"""

from .files import atomic_write_text, atomic_writer
from .plugin_loader import load_entry_point_plugins

__all__ = ["atomic_write_text", "atomic_writer", "load_entry_point_plugins"]
