"""Mini README: Abstract interface of a reconstruction engine.

Structure:
    * ReconstructionEngine - estimates poses, calibration and structure for a
      scene that carries at least views and intrinsics.

Engines are registered by ``engine_name`` in ``ENGINES``. ``reconstruct``
either returns the populated scene or raises ``ReconstructionError``; the
pipeline treats any such error as fatal.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict

from ..logging_utils import get_logger
from ..providers import FeaturesProvider, MatchesProvider
from ..scene.model import Scene
from .options import ReconstructionOptions

LOGGER = get_logger(__name__)


class ReconstructionEngine(ABC):
    """Base interface for incremental reconstruction back-ends."""

    engine_name: str = "generic"

    def __init__(self, **engine_settings: object) -> None:
        self.engine_settings = engine_settings
        LOGGER.debug("Initialising %s engine with %s", self.engine_name, engine_settings)

    @abstractmethod
    def reconstruct(
        self,
        scene: Scene,
        features: FeaturesProvider,
        matches: MatchesProvider,
        options: ReconstructionOptions,
    ) -> Scene:
        """Return the reconstructed scene or raise ``ReconstructionError``."""

    def metadata(self) -> Dict[str, str]:
        """Return diagnostic metadata for log output."""

        return {
            "engine": self.engine_name,
            "settings": ", ".join(f"{key}={value}" for key, value in sorted(self.engine_settings.items()))
            or "default",
        }
