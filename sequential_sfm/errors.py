"""Mini README: Exception taxonomy shared by the pipeline stages.

Library modules raise these; only the command line turns them into exit
codes. ``InvalidInputError`` and ``NotFoundError`` also derive from the
builtin ``ValueError``/``KeyError`` so callers can catch either family.
"""

from __future__ import annotations


class SfMError(Exception):
    """Base class for every pipeline failure."""


class InvalidInputError(SfMError, ValueError):
    """User supplied values that can never be satisfied."""


class NotFoundError(SfMError, KeyError):
    """A referenced entity does not exist in the scene."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep messages readable in logs.
        return str(self.args[0]) if self.args else ""


class SceneFormatError(SfMError, ValueError):
    """A scene document is unreadable or lacks required sections."""


class ProviderError(SfMError):
    """Feature, match or region metadata could not be loaded."""


class InconsistentSceneError(SfMError):
    """Cross references in a scene cannot be remapped."""


class ReconstructionError(SfMError):
    """The reconstruction engine did not produce a scene."""


class ExportError(SfMError):
    """An export artifact could not be written."""
